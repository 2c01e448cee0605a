"""Asynchronous site-topic extraction job (semantic labeling, mode b).

The Firecrawl ``/v2/extract`` endpoint accepts a URL list, a JSON schema and a
prompt, and answers with a job id.  The job is then polled at a fixed
interval until it reports ``completed``, ``failed`` or ``cancelled``.

This is the one labeling path whose failure is fatal: the returned topic set
drives the whole site-wide classification, so every fault is raised.
"""

from __future__ import annotations

import time
from typing import Any, List, Optional

import httpx

from serpa.config import Settings, settings as default_settings
from serpa.errors import ExtractJobFailed, ExtractJobTimeout, LabelingError
from serpa.labeling.prompts import SITE_TOPICS_PROMPT, SITE_TOPICS_SCHEMA
from serpa.models import Topic

_TERMINAL_FAILURES = ("failed", "cancelled")


def _parse_topics(data: Any) -> List[Topic]:
    raw = data.get("topics") if isinstance(data, dict) else None
    if not isinstance(raw, list):
        return []
    topics: List[Topic] = []
    for item in raw:
        if not isinstance(item, dict) or not isinstance(item.get("name"), str):
            continue
        # Blank names would match every label by containment.
        if not item["name"].strip():
            continue
        description = item.get("description")
        topics.append(
            Topic(
                name=item["name"],
                description=description if isinstance(description, str) else None,
            )
        )
    return topics


class ExtractJobClient:
    """Submit and poll Firecrawl extraction jobs."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings or default_settings

    def _headers(self) -> dict[str, str]:
        api_key = self._settings.firecrawl_api_key
        if not api_key:
            raise EnvironmentError(
                "FIRECRAWL_API_KEY environment variable is not set."
            )
        return {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }

    def _endpoint(self, suffix: str = "") -> str:
        return f"{self._settings.firecrawl_base_url.rstrip('/')}/v2/extract{suffix}"

    # ------------------------------------------------------------------
    # Job lifecycle
    # ------------------------------------------------------------------

    def submit(self, client: httpx.Client, url: str) -> str:
        """Submit an extraction job for *url* and return its id."""
        resp = client.post(
            self._endpoint(),
            headers=self._headers(),
            json={
                "urls": [url],
                "schema": SITE_TOPICS_SCHEMA,
                "prompt": SITE_TOPICS_PROMPT,
            },
        )
        if resp.status_code >= 400:
            raise LabelingError(
                f"Firecrawl extract returned {resp.status_code}: {resp.text[:300]}"
            )
        try:
            job = resp.json()
        except ValueError as exc:
            raise LabelingError(f"Firecrawl extract returned invalid JSON: {exc}") from exc

        if not isinstance(job, dict) or not job.get("success") or not job.get("id"):
            raise LabelingError("Failed to submit extract job")
        print(f"[EXTRACT] Job submitted: {job['id']}")
        return str(job["id"])

    def wait(
        self,
        client: httpx.Client,
        job_id: str,
        *,
        poll_interval: Optional[float] = None,
        max_attempts: Optional[int] = None,
        deadline: Optional[float] = None,
    ) -> dict[str, Any]:
        """Poll job *job_id* until it completes and return its final payload.

        Args:
            client: Open HTTP client.
            job_id: Id returned by :meth:`submit`.
            poll_interval: Seconds to sleep before each status check.
            max_attempts: Maximum number of status checks.
            deadline: Optional ``time.monotonic()`` value after which polling
                stops even if attempts remain.

        Raises:
            ExtractJobFailed: The job reported ``failed`` or ``cancelled``.
            ExtractJobTimeout: The attempt budget or deadline ran out.
            LabelingError: A status check returned an error or invalid JSON.
        """
        interval = self._settings.extract_poll_interval if poll_interval is None else poll_interval
        attempts = self._settings.extract_max_attempts if max_attempts is None else max_attempts

        for attempt in range(1, attempts + 1):
            if deadline is not None and time.monotonic() >= deadline:
                raise ExtractJobTimeout(
                    "Extract job timed out: deadline reached before the job "
                    f"completed ({attempt - 1} status check(s))"
                )
            time.sleep(interval)

            resp = client.get(self._endpoint(f"/{job_id}"), headers=self._headers())
            if resp.status_code >= 400:
                raise LabelingError(
                    f"Failed to check extract job status: {resp.status_code}"
                )
            try:
                payload = resp.json()
            except ValueError as exc:
                raise LabelingError(f"Extract status returned invalid JSON: {exc}") from exc

            status = payload.get("status") if isinstance(payload, dict) else None
            print(f"[EXTRACT] Job status (attempt {attempt}): {status}")

            if status == "completed":
                return payload
            if status in _TERMINAL_FAILURES:
                raise ExtractJobFailed(
                    f"Extract job {status}: {payload.get('error') or 'Unknown error'}"
                )

        total = interval * attempts
        raise ExtractJobTimeout(f"Extract job timed out after {total:g} seconds")

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def extract_site_topics(self, domain: str, deadline: Optional[float] = None) -> List[Topic]:
        """Run an extraction job against the homepage of *domain*.

        Returns:
            The extracted topics, possibly empty.  An empty list is a valid
            outcome, not an error.
        """
        url = domain if domain.startswith("http") else f"https://{domain}"
        print(f"[EXTRACT] Extracting main topics from {url} …")
        try:
            with httpx.Client(timeout=self._settings.request_timeout) as client:
                job_id = self.submit(client, url)
                payload = self.wait(client, job_id, deadline=deadline)
        except httpx.HTTPError as exc:
            raise LabelingError(f"Extract request failed: {exc}") from exc

        topics = _parse_topics(payload.get("data"))
        print(f"[EXTRACT] Found {len(topics)} main topic(s).")
        return topics
