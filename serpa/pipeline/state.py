"""Typed state bag passed between the topic-analysis graph nodes."""

from __future__ import annotations

from typing import List, Optional, TypedDict

from serpa.models import Topic, UrlKeywordRecord
from serpa.topics.merger import MergeResult


class AnalysisState(TypedDict):
    domain: str                          # normalised domain, e.g. "example.com"
    all_urls: List[str]                  # everything the site map returned
    valid_urls: List[str]                # after junk / locale / host filtering
    records: List[UrlKeywordRecord]      # keyword-bearing URLs
    site_topics: List[Topic]             # from the extraction job
    classifications: List[dict]          # raw per-URL labels
    merge: Optional[MergeResult]
    status: str
