"""Folder grouping and topic sizing."""

from serpa.structure.folders import (
    OTHER_FOLDER,
    calculate_other_threshold,
    collapse_other,
    extract_folder,
    group_by_folder,
    min_topic_count,
    topic_count,
)

__all__ = [
    "OTHER_FOLDER",
    "calculate_other_threshold",
    "collapse_other",
    "extract_folder",
    "group_by_folder",
    "min_topic_count",
    "topic_count",
]
