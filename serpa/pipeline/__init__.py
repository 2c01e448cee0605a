"""Analysis pipelines.

Public API::

    from serpa.pipeline import run_topic_analysis, run_blog_ratio
    result = run_topic_analysis("example.com")
"""

from serpa.pipeline.blog_ratio import run_blog_ratio
from serpa.pipeline.runner import run_topic_analysis

__all__ = ["run_blog_ratio", "run_topic_analysis"]
