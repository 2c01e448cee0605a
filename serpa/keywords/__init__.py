"""Keyword extraction from URL paths."""

from serpa.keywords.extractor import extract_keywords, find_common_keywords

__all__ = ["extract_keywords", "find_common_keywords"]
