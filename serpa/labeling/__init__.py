"""Semantic labeling service adapters (chat model JSON calls and extraction jobs)."""

from serpa.labeling.extract_job import ExtractJobClient
from serpa.labeling.llm import invoke_json

__all__ = ["ExtractJobClient", "invoke_json"]
