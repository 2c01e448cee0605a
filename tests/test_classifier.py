"""Tests for serpa/topics/classifier.py.

``time.sleep`` is patched inside the classifier module so the inter-batch
pause can be asserted without slowing the suite down.
"""

from __future__ import annotations

import json
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

from serpa.config import Settings
from serpa.errors import LabelingError
from serpa.models import UrlKeywordRecord
from serpa.topics.classifier import (
    UrlClassifier,
    batched,
    build_prompt,
    parse_classifications,
)

TOPICS = ["Collaboration", "Security"]


def _records(n: int) -> list[UrlKeywordRecord]:
    return [UrlKeywordRecord(url=f"https://ex.com/p/{i}", keywords=f"kw{i}") for i in range(n)]


def _echo_llm() -> MagicMock:
    """Fake chat model that labels every URL in the prompt as 'Security'."""

    def invoke(prompt: str):
        batch = json.loads(prompt.split("URLs to classify:\n", 1)[1].split("\n\nReturn", 1)[0])
        return SimpleNamespace(
            content=json.dumps({"results": [{"url": r["url"], "topic": "Security"} for r in batch]})
        )

    llm = MagicMock()
    llm.invoke.side_effect = invoke
    return llm


@pytest.fixture
def cfg() -> Settings:
    return Settings(classification_batch_size=50, classification_batch_delay=0.5)


# ---------------------------------------------------------------------------
# Shape adapters
# ---------------------------------------------------------------------------

class TestParseClassifications:
    ENTRIES = [{"url": "https://ex.com/a", "topic": "Security"}]

    @pytest.mark.parametrize("key", ["results", "classifications", "urls"])
    def test_keyed(self, key: str) -> None:
        assert parse_classifications({key: self.ENTRIES}) == self.ENTRIES

    def test_bare_list(self) -> None:
        assert parse_classifications(self.ENTRIES) == self.ENTRIES

    def test_first_valid_shape_wins(self) -> None:
        other = [{"url": "https://ex.com/b", "topic": "outlier"}]
        assert parse_classifications({"results": self.ENTRIES, "urls": other}) == self.ENTRIES
        assert parse_classifications({"results": "oops", "urls": other}) == other

    @pytest.mark.parametrize("payload", [{"foo": []}, {"results": {}}, "text", None, 3])
    def test_unrecognised(self, payload) -> None:
        with pytest.raises(LabelingError, match="expected array"):
            parse_classifications(payload)


# ---------------------------------------------------------------------------
# Batching helpers
# ---------------------------------------------------------------------------

class TestBatched:
    def test_sizes(self) -> None:
        assert [len(b) for b in batched(list(range(120)), 50)] == [50, 50, 20]

    def test_empty(self) -> None:
        assert list(batched([], 50)) == []

    def test_invalid_size(self) -> None:
        with pytest.raises(ValueError):
            list(batched([1], 0))


def test_build_prompt_numbers_topics_and_embeds_batch() -> None:
    prompt = build_prompt(_records(2), TOPICS)
    assert "1. Collaboration\n2. Security" in prompt
    assert '"url": "https://ex.com/p/1"' in prompt


# ---------------------------------------------------------------------------
# UrlClassifier
# ---------------------------------------------------------------------------

class TestUrlClassifier:
    def test_batches_sequentially_with_pause(self, cfg: Settings) -> None:
        llm = _echo_llm()
        with patch("serpa.topics.classifier.time.sleep") as mock_sleep:
            entries = UrlClassifier(cfg, llm=llm).classify(_records(120), TOPICS)

        assert llm.invoke.call_count == 3
        assert mock_sleep.call_count == 2
        mock_sleep.assert_called_with(0.5)
        assert [e["url"] for e in entries] == [r.url for r in _records(120)]

    def test_single_batch_no_pause(self, cfg: Settings) -> None:
        with patch("serpa.topics.classifier.time.sleep") as mock_sleep:
            entries = UrlClassifier(cfg, llm=_echo_llm()).classify(_records(3), TOPICS)
        assert len(entries) == 3
        mock_sleep.assert_not_called()

    def test_accepts_alternative_shapes(self, cfg: Settings) -> None:
        llm = MagicMock()
        llm.invoke.return_value = SimpleNamespace(
            content=json.dumps({"classifications": [{"url": "https://ex.com/p/0", "topic": "outlier"}]})
        )
        entries = UrlClassifier(cfg, llm=llm).classify(_records(1), TOPICS)
        assert entries == [{"url": "https://ex.com/p/0", "topic": "outlier"}]

    def test_batch_failure_is_fatal(self, cfg: Settings) -> None:
        good = SimpleNamespace(content=json.dumps({"results": []}))
        llm = MagicMock()
        llm.invoke.side_effect = [good, RuntimeError("rate limited")]
        with patch("serpa.topics.classifier.time.sleep"):
            with pytest.raises(LabelingError, match="batch 2/3"):
                UrlClassifier(cfg, llm=llm).classify(_records(120), TOPICS)
        assert llm.invoke.call_count == 2

    def test_invalid_json_is_fatal(self, cfg: Settings) -> None:
        llm = MagicMock()
        llm.invoke.return_value = SimpleNamespace(content="{not json")
        with pytest.raises(LabelingError, match="batch 1/1"):
            UrlClassifier(cfg, llm=llm).classify(_records(1), TOPICS)

    def test_unrecognised_shape_is_fatal(self, cfg: Settings) -> None:
        llm = MagicMock()
        llm.invoke.return_value = SimpleNamespace(content=json.dumps({"answer": "Security"}))
        with pytest.raises(LabelingError, match="expected array"):
            UrlClassifier(cfg, llm=llm).classify(_records(1), TOPICS)

    def test_no_records_no_model(self, cfg: Settings) -> None:
        with patch("serpa.topics.classifier.get_llm") as mock_get_llm:
            assert UrlClassifier(cfg).classify([], TOPICS) == []
        mock_get_llm.assert_not_called()

    def test_builds_model_once(self, cfg: Settings) -> None:
        llm = _echo_llm()
        with patch("serpa.topics.classifier.get_llm", return_value=llm) as mock_get_llm, \
             patch("serpa.topics.classifier.time.sleep"):
            UrlClassifier(cfg).classify(_records(120), TOPICS)
        mock_get_llm.assert_called_once_with(cfg.openai_classify_model, cfg)
