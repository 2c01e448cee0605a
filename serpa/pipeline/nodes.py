"""LangGraph node functions for the topic-analysis pipeline.

Each public symbol is a *factory* that captures the external-service client
it needs and returns a callable ``(AnalysisState) -> dict`` suitable for use
as a LangGraph node.  Keeping the clients in closures keeps them out of the
state bag.

``make_mapper``      — discovers the site's URLs.
``make_filter``      — drops junk, non-English and off-domain URLs.
``make_keywords``    — extracts path keywords; fails if none survive.
``make_topics``      — runs the site-topic extraction job.
``make_classifier``  — classifies keyword records into those topics.
``make_merger``      — folds the classifications into topic buckets.
"""

from __future__ import annotations

from serpa.discovery.mapper import SiteMapper
from serpa.discovery.normalizer import filter_urls
from serpa.errors import NoKeywordsError
from serpa.keywords.extractor import extract_keywords
from serpa.labeling.extract_job import ExtractJobClient
from serpa.pipeline.state import AnalysisState
from serpa.topics.classifier import UrlClassifier
from serpa.topics.merger import merge_classifications


def make_mapper(mapper: SiteMapper):
    def map_site(state: AnalysisState) -> dict:
        print(f"[MAP] Mapping {state['domain']} …")
        urls = mapper.map_website(state["domain"])
        return {"all_urls": urls, "status": "filtering"}

    return map_site


def make_filter():
    def filter_site(state: AnalysisState) -> dict:
        urls = state["all_urls"]
        valid = filter_urls(urls, state["domain"])
        print(f"[FILTER] {len(valid)}/{len(urls)} URL(s) kept.")
        return {"valid_urls": valid, "status": "extracting-keywords"}

    return filter_site


def make_keywords():
    """Return a *keywords* node; raises :class:`NoKeywordsError` on an empty result."""

    def keywords(state: AnalysisState) -> dict:
        records = extract_keywords(state["valid_urls"])
        if not records:
            raise NoKeywordsError("No meaningful keywords found in URLs")
        return {"records": records, "status": "extracting-topics"}

    return keywords


def make_topics(extractor: ExtractJobClient):
    def topics(state: AnalysisState) -> dict:
        site_topics = extractor.extract_site_topics(state["domain"])
        status = "classifying" if site_topics else "done"
        return {"site_topics": site_topics, "status": status}

    return topics


def make_classifier(classifier: UrlClassifier):
    def classify(state: AnalysisState) -> dict:
        names = [t.name for t in state["site_topics"]]
        print(f"[CLASSIFY] Topic names: {names}")
        entries = classifier.classify(state["records"], names)
        print(f"[CLASSIFY] Total classifications received: {len(entries)}")
        return {"classifications": entries, "status": "merging"}

    return classify


def make_merger():
    def merge(state: AnalysisState) -> dict:
        result = merge_classifications(
            state["site_topics"], state["records"], state["classifications"]
        )
        return {"merge": result, "status": "done"}

    return merge
