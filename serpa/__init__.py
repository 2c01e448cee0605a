"""Serpa — website content analysis: URL discovery, folder and topic grouping, blog ratio."""
