"""Discovery package — site mapping, domain clean-up and URL filtering."""

from serpa.discovery.languages import filter_non_english_urls, is_non_english_url
from serpa.discovery.mapper import SiteMapper
from serpa.discovery.normalizer import (
    filter_urls,
    host_matches,
    is_blog_url,
    is_junk_url,
    normalize_domain,
)

__all__ = [
    "SiteMapper",
    "filter_urls",
    "filter_non_english_urls",
    "host_matches",
    "is_blog_url",
    "is_junk_url",
    "is_non_english_url",
    "normalize_domain",
]
