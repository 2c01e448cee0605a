"""High-level runner for the topic-analysis pipeline.

``run_topic_analysis`` validates the domain, builds the graph around the
external-service clients and turns the final state into the response payload
served by ``POST /analyze`` and printed by ``serpa analyze``.
"""

from __future__ import annotations

from typing import Any, Optional

from serpa.config import Settings, settings as default_settings
from serpa.discovery.mapper import SiteMapper
from serpa.discovery.normalizer import normalize_domain
from serpa.errors import InvalidDomainError
from serpa.labeling.extract_job import ExtractJobClient
from serpa.pipeline.graph import build_graph
from serpa.pipeline.state import AnalysisState
from serpa.topics.classifier import UrlClassifier


def clean_domain(domain: Any) -> str:
    """Return the normalised *domain* or raise :class:`InvalidDomainError`."""
    if not isinstance(domain, str) or not domain.strip():
        raise InvalidDomainError("Domain is required")
    cleaned = normalize_domain(domain)
    if not cleaned:
        raise InvalidDomainError("Domain is required")
    return cleaned


def run_topic_analysis(
    domain: Any,
    *,
    mapper: Optional[SiteMapper] = None,
    extractor: Optional[ExtractJobClient] = None,
    classifier: Optional[UrlClassifier] = None,
    settings: Optional[Settings] = None,
) -> dict[str, Any]:
    """Discover, filter, classify and group the URLs of *domain* by topic.

    Args:
        domain: Raw user input, e.g. ``"https://www.example.com/"``.
        mapper: Site-mapping client; built from *settings* when omitted.
        extractor: Extraction-job client; built from *settings* when omitted.
        classifier: URL classifier; built from *settings* when omitted.
        settings: Configuration for the default clients.

    Returns:
        ``{domain, topics, outliers, outlier_count, total_urls, valid_urls,
        urls_with_keywords}``; when no site topics were found, ``topics`` is
        empty, ``outliers`` is absent and ``urls`` lists the keyword records.

    Raises:
        InvalidDomainError: Missing or empty domain (no external call made).
        NoKeywordsError: No URL produced a keyword.
        DiscoveryError, LabelingError: Fatal external-service failures.
    """
    cleaned = clean_domain(domain)
    cfg = settings or default_settings

    graph = build_graph(
        mapper or SiteMapper(cfg),
        extractor or ExtractJobClient(cfg),
        classifier or UrlClassifier(cfg),
    )

    initial_state: AnalysisState = {
        "domain": cleaned,
        "all_urls": [],
        "valid_urls": [],
        "records": [],
        "site_topics": [],
        "classifications": [],
        "merge": None,
        "status": "mapping",
    }

    print(f"[ANALYZE] Analyzing domain: {cleaned}")
    final: AnalysisState = graph.invoke(initial_state)  # type: ignore[assignment]

    records = final["records"]
    response: dict[str, Any] = {"domain": cleaned}

    merge = final.get("merge")
    if not final["site_topics"] or merge is None:
        response["topics"] = []
        response["urls"] = [r.to_dict() for r in records]
    else:
        response["topics"] = [t.to_dict() for t in merge.topics]
        response["outliers"] = [r.to_dict() for r in merge.outliers]
        response["outlier_count"] = len(merge.outliers)

    response["total_urls"] = len(final["all_urls"])
    response["valid_urls"] = len(final["valid_urls"])
    response["urls_with_keywords"] = len(records)
    print(f"[ANALYZE] Analysis complete for {cleaned}.")
    return response
