"""Centralised settings for Serpa.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).

Components that talk to external services accept a :class:`Settings`
instance at construction and fall back to the module-level ``settings``
singleton when none is given.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (one level up from this package)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Site-mapping / extraction service (Firecrawl)
    # ------------------------------------------------------------------
    firecrawl_api_key: str = field(
        default_factory=lambda: os.environ.get("FIRECRAWL_API_KEY", "")
    )
    firecrawl_base_url: str = field(
        default_factory=lambda: os.environ.get(
            "FIRECRAWL_BASE_URL", "https://api.firecrawl.dev"
        )
    )
    map_limit: int = field(
        default_factory=lambda: int(os.environ.get("MAP_LIMIT", "5000"))
    )
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("REQUEST_TIMEOUT", "30.0"))
    )

    # ------------------------------------------------------------------
    # Chat model used for topic naming and URL classification
    # ------------------------------------------------------------------
    llm_provider: str = field(
        default_factory=lambda: os.environ.get("LLM_PROVIDER", "openai")
    )
    openai_topic_model: str = field(
        default_factory=lambda: os.environ.get("OPENAI_TOPIC_MODEL", "gpt-4.1-nano")
    )
    openai_classify_model: str = field(
        default_factory=lambda: os.environ.get("OPENAI_CLASSIFY_MODEL", "gpt-4o-mini")
    )
    ollama_chat_model: str = field(
        default_factory=lambda: os.environ.get("OLLAMA_CHAT_MODEL", "ministral-3:8b")
    )
    llm_temperature: float = field(
        default_factory=lambda: float(os.environ.get("LLM_TEMPERATURE", "0.3"))
    )

    # ------------------------------------------------------------------
    # Topic aggregation
    # ------------------------------------------------------------------
    topic_sample_size: int = field(
        default_factory=lambda: int(os.environ.get("TOPIC_SAMPLE_SIZE", "100"))
    )
    max_concurrent_topic_calls: int = field(
        default_factory=lambda: int(os.environ.get("MAX_CONCURRENT_TOPIC_CALLS", "8"))
    )

    # ------------------------------------------------------------------
    # Classification batching
    # ------------------------------------------------------------------
    classification_batch_size: int = field(
        default_factory=lambda: int(os.environ.get("CLASSIFICATION_BATCH_SIZE", "50"))
    )
    classification_batch_delay: float = field(
        default_factory=lambda: float(os.environ.get("CLASSIFICATION_BATCH_DELAY", "0.5"))
    )

    # ------------------------------------------------------------------
    # Extraction job polling
    # ------------------------------------------------------------------
    extract_poll_interval: float = field(
        default_factory=lambda: float(os.environ.get("EXTRACT_POLL_INTERVAL", "2.0"))
    )
    extract_max_attempts: int = field(
        default_factory=lambda: int(os.environ.get("EXTRACT_MAX_ATTEMPTS", "60"))
    )


# Module-level singleton; import this everywhere:
#   from serpa.config import settings
settings = Settings()
