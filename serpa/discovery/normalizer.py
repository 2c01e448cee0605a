"""Domain clean-up and URL filtering.

Every discovered URL passes through :func:`filter_urls` before any keyword or
topic work happens.  The three filters (junk shapes, non-English locales and
off-domain hosts) are conjunctive: a URL survives only if it passes all of
them, so the order they are checked in never changes the result.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Optional
from urllib.parse import urlparse

from serpa.discovery.languages import is_non_english_url

# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

# URL shapes that never carry topical content.
JUNK_PATTERNS = [
    re.compile(r"/blog/"),
    re.compile(r"/tag/"),
    re.compile(r"/tags/"),
    re.compile(r"/category/"),
    re.compile(r"/author/"),
    re.compile(r"/page/"),
    re.compile(r"\?page="),
    re.compile(r"/feed"),
    re.compile(r"/rss"),
    re.compile(r"\.xml$"),
    re.compile(r"\.json$"),
    re.compile(r"/wp-admin"),
    re.compile(r"/wp-content"),
    re.compile(r"/cart"),
    re.compile(r"/checkout"),
    re.compile(r"/login"),
    re.compile(r"/search"),
    re.compile(r"\?s="),
    re.compile(r"\?q="),
    re.compile(r"\.pdf$"),
    re.compile(r"\.jpg$"),
    re.compile(r"\.jpeg$"),
    re.compile(r"\.png$"),
    re.compile(r"\.gif$"),
    re.compile(r"\.svg$"),
    re.compile(r"\.webp$"),
    re.compile(r"/legal/"),
]

# URL shapes that indicate a blog post or article.
BLOG_PATTERNS = [
    re.compile(r"/blog/", re.IGNORECASE),
    re.compile(r"/blog$", re.IGNORECASE),
    re.compile(r"/posts?/", re.IGNORECASE),
    re.compile(r"/articles?/", re.IGNORECASE),
    re.compile(r"/news/", re.IGNORECASE),
    re.compile(r"/stories/", re.IGNORECASE),
    re.compile(r"/insights?/", re.IGNORECASE),
    re.compile(r"/resources/blog", re.IGNORECASE),
    re.compile(r"/updates?/", re.IGNORECASE),
    re.compile(r"/announcements?/", re.IGNORECASE),
    re.compile(r"^https?://blog\.", re.IGNORECASE),
    re.compile(r"/\d{4}/\d{2}/\d{2}/"),
    re.compile(r"/\d{4}/\d{2}/"),
]

_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)
_WWW_RE = re.compile(r"^www\.", re.IGNORECASE)


# ---------------------------------------------------------------------------
# Domain input
# ---------------------------------------------------------------------------

def normalize_domain(value: str) -> str:
    """Reduce user input such as ``" https://www.Example.com/ "`` to a bare host.

    Strips surrounding whitespace, the ``http(s)://`` scheme, a leading
    ``www.`` and a trailing slash.  Stripping is repeated until the value no
    longer changes, which makes the function idempotent.
    """
    current = value
    while True:
        cleaned = current.strip()
        cleaned = _SCHEME_RE.sub("", cleaned)
        cleaned = _WWW_RE.sub("", cleaned)
        if cleaned.endswith("/"):
            cleaned = cleaned[:-1]
        if cleaned == current:
            return cleaned
        current = cleaned


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------

def is_junk_url(url: str) -> bool:
    return any(pattern.search(url) for pattern in JUNK_PATTERNS)


def is_blog_url(url: str) -> bool:
    """Return ``True`` if *url* looks like a blog post, article or news item."""
    return any(pattern.search(url) for pattern in BLOG_PATTERNS)


def host_matches(url: str, main_domain: str) -> bool:
    """Return ``True`` if the host of *url* is *main_domain* or ``www.`` + it.

    URLs whose host cannot be parsed never match.
    """
    try:
        parsed = urlparse(url)
        host = parsed.hostname
    except ValueError:
        return False
    if parsed.scheme.lower() not in ("http", "https") or not host:
        return False
    domain = main_domain.lower()
    return host == domain or host == f"www.{domain}"


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def filter_urls(urls: Iterable[str], main_domain: Optional[str] = None) -> List[str]:
    """Drop junk, non-English and (optionally) off-domain URLs.

    Args:
        urls: Absolute URLs as returned by the site-mapping service.
        main_domain: When given, only URLs on this host or its ``www.``
            variant are kept; unrelated subdomains are discarded.

    Returns:
        The surviving URLs in their original order.
    """
    kept: List[str] = []
    for url in urls:
        if is_junk_url(url):
            continue
        if is_non_english_url(url):
            continue
        if main_domain and not host_matches(url, main_domain):
            continue
        kept.append(url)
    return kept
