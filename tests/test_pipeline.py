"""Tests for the topic-analysis graph (serpa/pipeline/runner.py).

Mocking strategy:
- The three external-service clients (site mapper, extraction job,
  classifier) are injected as ``MagicMock`` instances, so the real LangGraph
  graph runs end to end without any network access.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from serpa.errors import (
    DiscoveryError,
    ExtractJobTimeout,
    InvalidDomainError,
    LabelingError,
    NoKeywordsError,
)
from serpa.models import Topic, UrlKeywordRecord
from serpa.pipeline.runner import clean_domain, run_topic_analysis

ALL_URLS = [
    "https://ex.com/",
    "https://ex.com/blog/how-to-win",
    "https://ex.com/fr/accueil",
    "https://shop.ex.com/cart",
    "https://ex.com/features/team-chat",
    "https://ex.com/features/video-calls",
    "https://ex.com/solutions/healthcare",
    "https://ex.com/solutions/retail",
    "https://ex.com/pricing",
    "https://ex.com/about-us",
]

SITE_TOPICS = [
    Topic("Collaboration", "Chat and calls"),
    Topic("Industries", "Vertical solutions"),
]


def _mapper(urls=ALL_URLS) -> MagicMock:
    mapper = MagicMock()
    mapper.map_website.return_value = list(urls)
    return mapper


def _extractor(topics=SITE_TOPICS) -> MagicMock:
    extractor = MagicMock()
    extractor.extract_site_topics.return_value = list(topics)
    return extractor


def _classifier(entries=None) -> MagicMock:
    classifier = MagicMock()
    classifier.classify.return_value = entries if entries is not None else [
        {"url": "https://ex.com/features/team-chat", "topic": "Collaboration"},
        {"url": "https://ex.com/features/video-calls", "topic": "collaboration tools"},
        {"url": "https://ex.com/solutions/healthcare", "topic": "Industries"},
        {"url": "https://ex.com/solutions/retail", "topic": "outlier"},
        {"url": "https://ex.com/pricing", "topic": "Unknown Topic"},
        {"url": "https://elsewhere.com/x", "topic": "Industries"},
    ]
    return classifier


# ---------------------------------------------------------------------------
# Domain validation
# ---------------------------------------------------------------------------

class TestCleanDomain:
    def test_normalises(self) -> None:
        assert clean_domain(" https://www.ex.com/ ") == "ex.com"

    @pytest.mark.parametrize("value", [None, "", "   ", "https://", 42])
    def test_rejects_empty(self, value) -> None:
        with pytest.raises(InvalidDomainError, match="Domain is required"):
            clean_domain(value)


# ---------------------------------------------------------------------------
# run_topic_analysis
# ---------------------------------------------------------------------------

class TestRunTopicAnalysis:
    def test_full_run(self) -> None:
        mapper, extractor, classifier = _mapper(), _extractor(), _classifier()
        result = run_topic_analysis(
            " https://www.ex.com/ ", mapper=mapper, extractor=extractor, classifier=classifier
        )

        mapper.map_website.assert_called_once_with("ex.com")
        extractor.extract_site_topics.assert_called_once_with("ex.com")
        records, names = classifier.classify.call_args[0]
        assert names == ["Collaboration", "Industries"]
        assert all(isinstance(r, UrlKeywordRecord) for r in records)

        assert result["domain"] == "ex.com"
        assert result["total_urls"] == 10
        assert result["valid_urls"] == 7
        assert result["urls_with_keywords"] == 6

        collab, industries = result["topics"]
        assert collab["name"] == "Collaboration"
        assert collab["description"] == "Chat and calls"
        assert collab["count"] == 2
        assert [u["url"] for u in collab["urls"]] == [
            "https://ex.com/features/team-chat",
            "https://ex.com/features/video-calls",
        ]
        assert collab["urls"][0]["keywords"] == "team chat"
        assert industries["count"] == 1

        assert [o["url"] for o in result["outliers"]] == [
            "https://ex.com/pricing",
            "https://ex.com/solutions/retail",
        ]
        assert result["outlier_count"] == 2
        assert "urls" not in result

    def test_no_topics_returns_keyword_records(self) -> None:
        classifier = _classifier()
        result = run_topic_analysis(
            "ex.com", mapper=_mapper(), extractor=_extractor([]), classifier=classifier
        )
        assert result["topics"] == []
        assert "outliers" not in result
        assert len(result["urls"]) == 6
        assert {"url": "https://ex.com/pricing", "keywords": "pricing"} in result["urls"]
        classifier.classify.assert_not_called()

    def test_no_keywords(self) -> None:
        extractor = _extractor()
        with pytest.raises(NoKeywordsError, match="No meaningful keywords"):
            run_topic_analysis(
                "ex.com",
                mapper=_mapper(["https://ex.com/", "https://ex.com/blog/x"]),
                extractor=extractor,
                classifier=_classifier(),
            )
        extractor.extract_site_topics.assert_not_called()

    def test_invalid_domain_makes_no_calls(self) -> None:
        mapper = _mapper()
        with pytest.raises(InvalidDomainError):
            run_topic_analysis("  ", mapper=mapper, extractor=_extractor(), classifier=_classifier())
        mapper.map_website.assert_not_called()

    def test_discovery_failure_propagates(self) -> None:
        mapper = MagicMock()
        mapper.map_website.side_effect = DiscoveryError("Firecrawl map returned 500")
        with pytest.raises(DiscoveryError):
            run_topic_analysis("ex.com", mapper=mapper, extractor=_extractor(), classifier=_classifier())

    def test_extraction_timeout_propagates(self) -> None:
        extractor = MagicMock()
        extractor.extract_site_topics.side_effect = ExtractJobTimeout("Extract job timed out")
        with pytest.raises(ExtractJobTimeout):
            run_topic_analysis("ex.com", mapper=_mapper(), extractor=extractor, classifier=_classifier())

    def test_classification_failure_propagates(self) -> None:
        classifier = MagicMock()
        classifier.classify.side_effect = LabelingError("Failed to classify batch 1/1")
        with pytest.raises(LabelingError):
            run_topic_analysis("ex.com", mapper=_mapper(), extractor=_extractor(), classifier=classifier)
