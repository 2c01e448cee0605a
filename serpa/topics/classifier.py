"""Classify keyword-bearing URLs into a fixed set of site topics.

Records are sent to the chat model in batches of 50.  Batches run strictly
one after another with a short pause in between; the pause is backpressure
against the provider's rate limits.  Any batch failure is fatal because the
classification is the result of the analysis.

The model does not always honour the requested ``{"results": [...]}`` shape,
so replies are read through a short ordered list of shape adapters.
"""

from __future__ import annotations

import json
import time
from typing import Any, Callable, Iterator, List, Optional, Sequence

from serpa.config import Settings, settings as default_settings
from serpa.errors import LabelingError
from serpa.labeling.llm import get_llm, invoke_json
from serpa.labeling.prompts import CLASSIFICATION_PROMPT
from serpa.models import UrlKeywordRecord


# ---------------------------------------------------------------------------
# Response shape adapters
# ---------------------------------------------------------------------------

def _keyed(key: str) -> Callable[[Any], Optional[list]]:
    def adapter(payload: Any) -> Optional[list]:
        if isinstance(payload, dict) and isinstance(payload.get(key), list):
            return payload[key]
        return None

    adapter.__name__ = f"from_{key}"
    return adapter


def _bare_list(payload: Any) -> Optional[list]:
    return payload if isinstance(payload, list) else None


SHAPE_ADAPTERS: List[Callable[[Any], Optional[list]]] = [
    _keyed("results"),
    _keyed("classifications"),
    _keyed("urls"),
    _bare_list,
]


def parse_classifications(payload: Any) -> list:
    """Return the classification list from a model reply.

    Raises:
        LabelingError: If no adapter recognises the reply.
    """
    for adapter in SHAPE_ADAPTERS:
        entries = adapter(payload)
        if entries is not None:
            return entries
    raise LabelingError("Invalid classification format - expected array")


# ---------------------------------------------------------------------------
# Batching
# ---------------------------------------------------------------------------

def batched(items: Sequence[Any], size: int) -> Iterator[Sequence[Any]]:
    """Yield consecutive slices of *items* of at most *size* elements."""
    if size < 1:
        raise ValueError("batch size must be positive")
    for start in range(0, len(items), size):
        yield items[start:start + size]


def build_prompt(batch: Sequence[UrlKeywordRecord], topic_names: Sequence[str]) -> str:
    return CLASSIFICATION_PROMPT.format(
        topic_lines="\n".join(f"{i}. {name}" for i, name in enumerate(topic_names, start=1)),
        batch_json=json.dumps([r.to_dict() for r in batch], indent=2),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

class UrlClassifier:
    """Batch URL classification against the chat model."""

    def __init__(self, settings: Optional[Settings] = None, llm: Any = None) -> None:
        self._settings = settings or default_settings
        self._llm = llm

    def classify(
        self,
        records: Sequence[UrlKeywordRecord],
        topic_names: Sequence[str],
    ) -> List[dict]:
        """Classify *records* into *topic_names* (or ``"outlier"``).

        Returns:
            The raw classification entries of every batch, concatenated in
            batch order.  Entries are not validated here; the merger does
            that.

        Raises:
            LabelingError: If any batch call fails or returns an unreadable
                reply.
        """
        size = self._settings.classification_batch_size
        delay = self._settings.classification_batch_delay
        batches = list(batched(list(records), size))
        print(f"[CLASSIFY] {len(records)} URL(s) in {len(batches)} batch(es) of max {size}.")

        llm = self._llm
        if llm is None and batches:
            llm = get_llm(self._settings.openai_classify_model, self._settings)

        classifications: List[dict] = []
        for index, batch in enumerate(batches, start=1):
            print(f"[CLASSIFY] Batch {index}/{len(batches)} ({len(batch)} URLs) …")
            prompt = build_prompt(batch, topic_names)
            try:
                payload = invoke_json(prompt, llm=llm)
                entries = parse_classifications(payload)
            except LabelingError as exc:
                raise LabelingError(
                    f"Failed to classify batch {index}/{len(batches)}: {exc}"
                ) from exc

            classifications.extend(entries)
            print(f"[CLASSIFY] Batch {index} complete: {len(entries)} classification(s).")

            if index < len(batches):
                time.sleep(delay)

        return classifications
