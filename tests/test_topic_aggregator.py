"""Tests for serpa/topics/aggregator.py.

The chat model is replaced by a MagicMock whose ``invoke`` returns a
SimpleNamespace with a ``content`` attribute, which is all the JSON helper
reads from a LangChain message.
"""

from __future__ import annotations

import json
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from serpa.models import TopicCount
from serpa.topics.aggregator import extract_slug, extract_topics, sample_slugs


def _llm(payload) -> MagicMock:
    llm = MagicMock()
    content = payload if isinstance(payload, str) else json.dumps(payload)
    llm.invoke.return_value = SimpleNamespace(content=content)
    return llm


BLOG_URLS = [
    "https://ex.com/blog/virtual-backgrounds-guide",
    "https://ex.com/blog/best-virtual-backgrounds",
    "https://ex.com/blog/webinar-software-compared",
    "https://ex.com/blog/hosting-a-webinar",
]


# ---------------------------------------------------------------------------
# Slugs
# ---------------------------------------------------------------------------

class TestExtractSlug:
    @pytest.mark.parametrize(
        "url, slug",
        [
            ("https://ex.com/blog/virtual-backgrounds-guide", "virtual backgrounds guide"),
            ("https://ex.com/blog/Remote_Work.html", "remote work"),
            ("https://ex.com/blog/a/b_c.html", "a/b c"),
        ],
    )
    def test_slug(self, url: str, slug: str) -> None:
        assert extract_slug(url) == slug

    @pytest.mark.parametrize("url", ["https://ex.com/about", "https://ex.com/", "https://ex.com"])
    def test_no_slug(self, url: str) -> None:
        assert extract_slug(url) is None


class TestSampleSlugs:
    def test_dedupes_before_capping(self) -> None:
        urls = [
            "https://ex.com/blog/same-post",
            "https://ex.com/news/same-post",
            "https://ex.com/blog/other-post",
            "https://ex.com/blog/third-post",
        ]
        assert sample_slugs(urls, limit=2) == ["same post", "other post"]

    def test_skips_urls_without_slug(self) -> None:
        assert sample_slugs(["https://ex.com/blog", "https://ex.com/blog/x-y"], limit=10) == ["x y"]


# ---------------------------------------------------------------------------
# extract_topics
# ---------------------------------------------------------------------------

class TestExtractTopics:
    def test_returns_topics(self) -> None:
        llm = _llm({"topics": [
            {"name": "Virtual Backgrounds", "count": 2},
            {"name": "Webinar Software", "count": 2},
        ]})
        topics = extract_topics(BLOG_URLS, top_n=5, min_count=2, llm=llm)
        assert topics == [TopicCount("Virtual Backgrounds", 2), TopicCount("Webinar Software", 2)]

    def test_prompt_lists_slugs_and_limits(self) -> None:
        llm = _llm({"topics": []})
        extract_topics(BLOG_URLS, top_n=3, min_count=2, llm=llm)
        prompt = llm.invoke.call_args[0][0]
        assert "- virtual backgrounds guide" in prompt
        assert "top 3 content themes" in prompt
        assert "Total URLs in this section: 4" in prompt

    def test_drops_small_and_malformed_and_truncates(self) -> None:
        llm = _llm({"topics": [
            {"name": "A", "count": 9},
            {"name": "Too Small", "count": 1},
            {"name": 42, "count": 5},
            {"name": "No Count"},
            {"name": "Bool", "count": True},
            "junk",
            {"name": "B", "count": 4.0},
            {"name": "C", "count": 3},
        ]})
        topics = extract_topics(BLOG_URLS, top_n=2, min_count=2, llm=llm)
        assert topics == [TopicCount("A", 9), TopicCount("B", 4)]

    def test_fractional_counts_rounded_before_cut_off(self) -> None:
        llm = _llm({"topics": [
            {"name": "A", "count": 2.9},
            {"name": "B", "count": 1.6},
            {"name": "C", "count": 1.4},
        ]})
        topics = extract_topics(BLOG_URLS, top_n=5, min_count=2, llm=llm)
        assert topics == [TopicCount("A", 3), TopicCount("B", 2)]

    def test_invalid_json_returns_empty(self) -> None:
        assert extract_topics(BLOG_URLS, llm=_llm("not json")) == []

    def test_wrong_shape_returns_empty(self) -> None:
        assert extract_topics(BLOG_URLS, llm=_llm({"topics": "nope"})) == []
        assert extract_topics(BLOG_URLS, llm=_llm([1, 2, 3])) == []

    def test_transport_error_returns_empty(self) -> None:
        llm = MagicMock()
        llm.invoke.side_effect = RuntimeError("connection reset")
        assert extract_topics(BLOG_URLS, llm=llm) == []

    def test_no_slugs_skips_model(self) -> None:
        llm = _llm({"topics": [{"name": "X", "count": 5}]})
        assert extract_topics(["https://ex.com/about"], llm=llm) == []
        llm.invoke.assert_not_called()
