"""Extract topical keywords from URL paths.

Two passes over the corpus:

1. Count, for every path token, how many URLs contain it.  Tokens present in
   more than 30% of the URLs are navigation scaffolding for *this* site (e.g.
   ``shop`` on a store where every page lives under ``/shop``) and are
   treated as structural.
2. Tokenise each URL again, dropping the folder segment, short or numeric
   tokens, a fixed stop-list and the structural tokens from pass 1.

URLs left without any keyword are dropped from the result, so the output can
be shorter than the input.
"""

from __future__ import annotations

import re
from collections import Counter
from typing import Iterable, List, Set
from urllib.parse import urljoin, urlparse

from serpa.models import UrlKeywordRecord

_DUMMY_BASE = "https://example.com"
_TOKEN_SPLIT = re.compile(r"[/\-_]")
_WORD_SPLIT = re.compile(r"[-_]")

STRUCTURAL_KEYWORDS = frozenset(
    [
        # Content sections
        "blog", "blogs", "articles", "article", "post", "posts",
        "news", "resources", "resource", "guides", "guide",
        "tutorials", "tutorial", "docs", "documentation",
        "learn", "academy", "education", "training",
        "help", "support", "faq", "faqs",
        # Site structure
        "page", "pages", "content", "category", "categories",
        "tag", "tags", "author", "authors",
        # Marketing features
        "webinar", "webinars", "event", "events",
        "ebook", "ebooks", "whitepaper", "whitepapers", "newsletter",
        # Years
        "2025", "2024", "2023", "2022", "2021", "2020", "2019", "2018",
        # Generic
        "home", "index", "main", "default", "www",
        # Stop words
        "the", "and", "for", "with", "how", "what", "why", "when", "where",
        "can", "you", "your", "our", "all", "new", "get", "use", "make",
    ]
)

DEFAULT_COMMON_THRESHOLD = 0.3


def _path_of(url: str) -> str:
    return urlparse(urljoin(_DUMMY_BASE, url)).path


def tokenize_path(url: str) -> List[str]:
    """Split the path of *url* on ``/``, ``-`` and ``_`` into lowercase tokens longer than 2."""
    try:
        path = _path_of(url)
    except ValueError:
        return []
    return [tok.lower() for tok in _TOKEN_SPLIT.split(path) if len(tok) > 2]


def find_common_keywords(
    urls: List[str], threshold: float = DEFAULT_COMMON_THRESHOLD
) -> Set[str]:
    """Return tokens found in more than *threshold* of *urls* (document frequency)."""
    if not urls:
        return set()

    counts: Counter[str] = Counter()
    for url in urls:
        counts.update(set(tokenize_path(url)))

    total = len(urls)
    common = {tok for tok, n in counts.items() if n / total > threshold}
    print(f"[KEYWORDS] {len(common)} common structural keyword(s): {sorted(common)}")
    return common


def extract_keywords_from_url(url: str, common_keywords: Set[str]) -> List[str]:
    """Return the topical keywords of a single URL, in path order."""
    try:
        path = _path_of(url)
    except ValueError as exc:
        print(f"[KEYWORDS] Could not parse {url!r}: {exc}")
        return []

    segments = [s for s in path.split("/") if s]
    # The first segment is the folder; it is only kept for single-segment paths.
    if len(segments) > 1:
        segments = segments[1:]

    keywords: List[str] = []
    for segment in segments:
        for word in _WORD_SPLIT.split(segment):
            kw = word.lower()
            if len(kw) <= 2 or kw.isdigit():
                continue
            if kw in STRUCTURAL_KEYWORDS or kw in common_keywords:
                continue
            keywords.append(kw)
    return keywords


def extract_keywords(urls: Iterable[str]) -> List[UrlKeywordRecord]:
    """Build one :class:`UrlKeywordRecord` per URL that has at least one keyword.

    Args:
        urls: Filtered absolute URLs.

    Returns:
        Records in input order; URLs without keywords are omitted.
    """
    url_list = list(urls)
    print(f"[KEYWORDS] Extracting keywords from {len(url_list)} URL(s) …")

    common = find_common_keywords(url_list)
    records: List[UrlKeywordRecord] = []
    for url in url_list:
        keywords = " ".join(extract_keywords_from_url(url, common))
        if keywords:
            records.append(UrlKeywordRecord(url=url, keywords=keywords))

    print(f"[KEYWORDS] Extracted keywords from {len(records)}/{len(url_list)} URL(s).")
    return records
