"""Exception types raised by the analysis pipelines.

Fatal faults surface to callers as one of these; the HTTP layer maps them to
a single ``{"error": "..."}`` payload.  Non-essential labeling failures never
raise; they degrade to empty topic lists inside the aggregator.
"""

from __future__ import annotations


class SerpaError(Exception):
    """Base class for all analysis failures."""


class InvalidDomainError(SerpaError, ValueError):
    """The requested domain is missing or empty."""


class NoKeywordsError(SerpaError, ValueError):
    """No discovered URL produced any usable keyword."""


class DiscoveryError(SerpaError):
    """The site-mapping service failed or returned no links."""


class LabelingError(SerpaError):
    """A call to the semantic labeling service failed on an essential path."""


class ExtractJobFailed(LabelingError):
    """The extraction job finished with status ``failed`` or ``cancelled``."""


class ExtractJobTimeout(LabelingError):
    """The extraction job did not complete within the poll budget."""
