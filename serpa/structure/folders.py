"""Group URLs by their first path segment and size the "Other" bucket.

``calculate_other_threshold`` works on anything that carries a count (a
:class:`FolderGroup`, a dict with a ``"count"`` key, ...) so the same rule can
be applied to raw folder sizes or to per-group page counts.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Sequence
from urllib.parse import urlparse

from serpa.models import FolderGroup

OTHER_FOLDER = "Other"


# ---------------------------------------------------------------------------
# Grouping
# ---------------------------------------------------------------------------

def extract_folder(url: str) -> str:
    """Return ``/<first segment>`` of the path of *url*, or ``/`` for the root.

    e.g. ``https://example.com/products/item`` → ``/products``
    """
    try:
        path = urlparse(url).path
    except ValueError:
        return "/"
    segments = [s for s in path.split("/") if s]
    if not segments:
        return "/"
    return f"/{segments[0]}"


def group_by_folder(urls: Iterable[str]) -> List[FolderGroup]:
    """Bucket *urls* by folder.

    Each group's URLs are sorted lexicographically; groups are ordered by
    descending size, with ties kept in discovery order.  ``topics`` is left
    empty for the topic aggregator to fill in.
    """
    buckets: dict[str, List[str]] = {}
    for url in urls:
        buckets.setdefault(extract_folder(url), []).append(url)

    groups = [
        FolderGroup(folder=folder, urls=sorted(folder_urls), count=len(folder_urls))
        for folder, folder_urls in buckets.items()
    ]
    # list.sort is stable, so equal counts keep their first-seen order.
    groups.sort(key=lambda g: g.count, reverse=True)
    return groups


# ---------------------------------------------------------------------------
# "Other" threshold
# ---------------------------------------------------------------------------

def _count_of(item: Any) -> int:
    if isinstance(item, dict):
        return int(item["count"])
    return int(item.count)


def calculate_other_threshold(groups: Sequence[Any], total_urls: int) -> int:
    """Return the size below which groups are folded into "Other".

    ``0`` means no grouping.  With six groups or fewer nothing is grouped.
    Otherwise the threshold is the smaller of 2% of *total_urls* and the
    sixth-largest group (both floored at 2), then adjusted so that at least
    three groups stay visible and a synthetic bucket is never made for just
    one or two groups.
    """
    counts = sorted((_count_of(g) for g in groups), reverse=True)

    if len(counts) <= 6:
        return 0

    percentage_threshold = max(1, int(total_urls * 0.02))
    sixth_largest = counts[5] if len(counts) >= 6 else 0
    threshold = min(max(percentage_threshold, 2), max(sixth_largest, 2))

    would_be_grouped = sum(1 for c in counts if c < threshold)

    if len(counts) - would_be_grouped < 3 and len(counts) >= 3:
        return counts[2] if counts[2] > 0 else 1

    if would_be_grouped <= 2:
        return 0

    return threshold


def collapse_other(groups: Sequence[FolderGroup], total_urls: int) -> List[FolderGroup]:
    """Fold groups smaller than the "Other" threshold into one synthetic group.

    The visible groups keep their order; the ``Other`` group, if any, is
    appended last and carries the merged, sorted URLs of every folded group.
    """
    threshold = calculate_other_threshold(groups, total_urls)
    if threshold == 0:
        return list(groups)

    visible: List[FolderGroup] = []
    folded_urls: List[str] = []
    for group in groups:
        if group.count < threshold:
            folded_urls.extend(group.urls)
        else:
            visible.append(group)

    if folded_urls:
        visible.append(
            FolderGroup(folder=OTHER_FOLDER, urls=sorted(folded_urls), count=len(folded_urls))
        )
    return visible


# ---------------------------------------------------------------------------
# Topic sizing
# ---------------------------------------------------------------------------

def topic_count(page_count: int) -> int:
    """Number of topics to ask for: more pages warrant more topics, capped at 10."""
    if page_count <= 10:
        return 3
    if page_count <= 25:
        return 5
    if page_count <= 50:
        return 7
    return 10


def min_topic_count(page_count: int) -> int:
    """Minimum pages a topic must cover to be kept for a corpus of *page_count*."""
    if page_count <= 20:
        return 2
    if page_count <= 50:
        return 3
    if page_count <= 100:
        return 4
    return 5
