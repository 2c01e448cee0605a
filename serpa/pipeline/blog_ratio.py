"""Blog-to-website ratio analysis.

Two site maps are requested concurrently: the whole site, and a blog-oriented
search.  Blog URLs are the search results that really look like blog posts;
website URLs are the sitewide results that do not.  Website URLs are grouped
by folder and every folder, plus the blog corpus, gets AI-named topics in a
concurrent fan-out.
"""

from __future__ import annotations

import math
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, List, Optional

from serpa.config import Settings, settings as default_settings
from serpa.discovery.languages import filter_non_english_urls
from serpa.discovery.mapper import SiteMapper
from serpa.discovery.normalizer import is_blog_url
from serpa.models import FolderGroup, TopicCount
from serpa.pipeline.runner import clean_domain
from serpa.structure.folders import group_by_folder, min_topic_count, topic_count
from serpa.topics.aggregator import extract_topics


def _dedupe(urls: List[str]) -> List[str]:
    return list(dict.fromkeys(urls))


def _percentage(part: int, total: int) -> int:
    """Integer percentage, rounding halves up."""
    if total <= 0:
        return 0
    return int(math.floor(part / total * 100 + 0.5))


def _topics_for(urls: List[str], llm: Any = None) -> List[TopicCount]:
    return extract_topics(urls, topic_count(len(urls)), min_topic_count(len(urls)), llm=llm)


def add_topics(
    groups: List[FolderGroup],
    blog_urls: List[str],
    *,
    llm: Any = None,
    max_workers: int = 8,
) -> List[TopicCount]:
    """Fill ``topics`` on every group and return the blog topics.

    All calls run concurrently and are joined before returning.  A call
    that raises is replaced by an empty topic list.
    """
    corpora = [blog_urls] + [g.urls for g in groups]
    results: List[List[TopicCount]] = [[] for _ in corpora]

    with ThreadPoolExecutor(
        max_workers=max(1, min(max_workers, len(corpora))),
        thread_name_prefix="topics",
    ) as pool:
        futures: List[Future] = [pool.submit(_topics_for, urls, llm) for urls in corpora]
        for index, future in enumerate(futures):
            try:
                results[index] = future.result()
            except Exception as exc:
                print(f"[BLOG-RATIO] Topic extraction {index} failed: {exc}")

    for group, topics in zip(groups, results[1:]):
        group.topics = topics
    return results[0]


def run_blog_ratio(
    domain: Any,
    *,
    mapper: Optional[SiteMapper] = None,
    llm: Any = None,
    settings: Optional[Settings] = None,
) -> dict[str, Any]:
    """Measure how much of *domain* is blog content versus core site pages.

    Raises:
        InvalidDomainError: Missing or empty domain.
        DiscoveryError: Either site map failed.
    """
    cleaned = clean_domain(domain)
    cfg = settings or default_settings
    site_mapper = mapper or SiteMapper(cfg)

    print(f"[BLOG-RATIO] Starting analysis for: {cleaned}")

    with ThreadPoolExecutor(max_workers=2, thread_name_prefix="map") as pool:
        blog_future = pool.submit(site_mapper.map_blog_pages, cleaned)
        site_future = pool.submit(site_mapper.map_website, cleaned)
        blog_mapped = blog_future.result()
        site_mapped = site_future.result()

    print(
        f"[BLOG-RATIO] Blog map returned {len(blog_mapped)} URL(s), "
        f"website map returned {len(site_mapped)} URL(s)."
    )

    blog_candidates = filter_non_english_urls(blog_mapped)
    site_candidates = filter_non_english_urls(site_mapped)

    # The blog search also returns pages that merely mention "blog".
    blog_urls = _dedupe([u for u in blog_candidates if is_blog_url(u)])
    website_urls = _dedupe([u for u in site_candidates if not is_blog_url(u)])
    print(
        f"[BLOG-RATIO] Blog URLs: {len(blog_urls)} "
        f"(dropped {len(blog_candidates) - len(blog_urls)} non-blog), "
        f"website URLs: {len(website_urls)}."
    )

    folders = group_by_folder(website_urls)
    print(f"[BLOG-RATIO] {len(folders)} website folder(s); extracting topics …")
    blog_topics = add_topics(
        folders, blog_urls, llm=llm, max_workers=cfg.max_concurrent_topic_calls
    )

    total = len(blog_urls) + len(website_urls)
    response = {
        "domain": cleaned,
        "totalUrls": total,
        "blogUrls": len(blog_urls),
        "websiteUrls": len(website_urls),
        "blogPercentage": _percentage(len(blog_urls), total),
        "websitePercentage": _percentage(len(website_urls), total),
        "blogUrlsList": sorted(blog_urls),
        "websiteUrlsList": sorted(website_urls),
        "websiteFolders": [g.to_dict() for g in folders],
        "blogTopics": [t.to_dict() for t in blog_topics],
    }
    print(f"[BLOG-RATIO] Analysis complete for {cleaned}.")
    return response
