"""Fold per-URL classifications back onto the topic buckets.

For every classification entry:

1. entries without ``url`` or ``topic`` are skipped;
2. the URL must exactly match a known record, otherwise it is unmatched;
3. ``"outlier"`` (any case) sends the record to the outliers;
4. otherwise the topic is found by case-insensitive name, falling back to
   substring containment in either direction (first bucket wins);
5. labels matching no bucket also go to the outliers.

A record is placed at most once; a repeated classification for an already
placed URL is counted as a duplicate and ignored.  Skipped, unmatched and
duplicate entries are diagnostics, never errors.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional, Sequence

from serpa.models import Topic, TopicWithUrls, UrlKeywordRecord

OUTLIER_LABEL = "outlier"


@dataclass
class MergeResult:
    topics: List[TopicWithUrls]
    outliers: List[UrlKeywordRecord] = field(default_factory=list)
    skipped: int = 0
    unmatched: int = 0
    duplicates: int = 0

    @property
    def matched(self) -> int:
        """Number of records placed in a topic bucket or the outliers."""
        return sum(t.count for t in self.topics) + len(self.outliers)


def match_topic(label: str, buckets: Sequence[TopicWithUrls]) -> Optional[TopicWithUrls]:
    """Return the bucket *label* refers to, or ``None``.

    Exact case-insensitive match first, then containment either way.
    """
    wanted = label.lower()
    for bucket in buckets:
        if bucket.name.lower() == wanted:
            return bucket
    for bucket in buckets:
        name = bucket.name.lower()
        if not name.strip():
            continue
        if wanted in name or name in wanted:
            return bucket
    return None


def merge_classifications(
    topics: Iterable[Topic],
    records: Sequence[UrlKeywordRecord],
    classifications: Iterable[Any],
) -> MergeResult:
    """Assign *records* to *topics* according to *classifications*.

    Args:
        topics: Site topics, in the order buckets should be tried.
        records: The keyword records that were sent for classification.
        classifications: Raw entries returned by the classifier.

    Returns:
        A :class:`MergeResult` whose outliers are sorted by URL.
    """
    buckets = [TopicWithUrls.from_topic(t) for t in topics]
    result = MergeResult(topics=buckets)

    by_url: dict[str, UrlKeywordRecord] = {}
    for record in records:
        by_url.setdefault(record.url, record)
    placed: set[str] = set()

    for idx, entry in enumerate(classifications):
        url = entry.get("url") if isinstance(entry, dict) else None
        label = entry.get("topic") if isinstance(entry, dict) else None
        if not isinstance(url, str) or not url or not isinstance(label, str) or not label:
            print(f"[MERGE] Classification {idx} missing url or topic: {entry!r:.120}")
            result.skipped += 1
            continue

        record = by_url.get(url)
        if record is None:
            print(f"[MERGE] URL not in working set: {url}")
            result.unmatched += 1
            continue

        if url in placed:
            result.duplicates += 1
            continue
        placed.add(url)

        if label.lower() == OUTLIER_LABEL:
            result.outliers.append(record)
            continue

        bucket = match_topic(label, buckets)
        if bucket is None:
            print(f"[MERGE] Topic not matched: {label!r} for URL: {url}")
            result.outliers.append(record)
        else:
            bucket.add(record)

    result.outliers.sort(key=lambda r: r.url)

    print(
        f"[MERGE] placed={result.matched} outliers={len(result.outliers)} "
        f"skipped={result.skipped} unmatched={result.unmatched} "
        f"duplicates={result.duplicates}"
    )
    for bucket in buckets:
        print(f"[MERGE]   {bucket.name}: {bucket.count} page(s)")
    return result
