"""Topic naming, URL classification and classification merge."""

from serpa.topics.aggregator import extract_slug, extract_topics
from serpa.topics.classifier import UrlClassifier, parse_classifications
from serpa.topics.merger import MergeResult, match_topic, merge_classifications

__all__ = [
    "MergeResult",
    "UrlClassifier",
    "extract_slug",
    "extract_topics",
    "match_topic",
    "merge_classifications",
    "parse_classifications",
]
