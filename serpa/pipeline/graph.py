"""Build and compile the topic-analysis StateGraph.

The graph topology is:

    START → mapper → filter → keywords → topics ─┬─→ classifier → merger → END
                                                 └─→ END (no topics found)

Failures raised inside a node (discovery, no keywords, extraction job,
classification) propagate out of ``invoke`` and abort the analysis.
"""

from __future__ import annotations

from langgraph.graph import END, START, StateGraph

from serpa.discovery.mapper import SiteMapper
from serpa.labeling.extract_job import ExtractJobClient
from serpa.pipeline.nodes import (
    make_classifier,
    make_filter,
    make_keywords,
    make_mapper,
    make_merger,
    make_topics,
)
from serpa.pipeline.state import AnalysisState
from serpa.topics.classifier import UrlClassifier


def build_graph(
    mapper: SiteMapper,
    extractor: ExtractJobClient,
    classifier: UrlClassifier,
):
    """Compile and return the topic-analysis graph for the given clients."""
    graph = StateGraph(AnalysisState)

    graph.add_node("mapper", make_mapper(mapper))
    graph.add_node("filter", make_filter())
    graph.add_node("keywords", make_keywords())
    graph.add_node("topics", make_topics(extractor))
    graph.add_node("classifier", make_classifier(classifier))
    graph.add_node("merger", make_merger())

    graph.add_edge(START, "mapper")
    graph.add_edge("mapper", "filter")
    graph.add_edge("filter", "keywords")
    graph.add_edge("keywords", "topics")
    graph.add_edge("classifier", "merger")
    graph.add_edge("merger", END)

    def _route_topics(state: AnalysisState) -> str:
        """Skip classification when the extraction job found no topics."""
        return "classifier" if state["site_topics"] else END

    graph.add_conditional_edges("topics", _route_topics)

    return graph.compile()
