"""Client for the site-mapping service (Firecrawl ``/v1/map``).

The service is treated as an opaque URL discoverer: it receives a start URL
plus a few options and answers with ``{"success": bool, "links": [...]}``.
Any transport error, non-2xx status or unsuccessful payload is fatal to the
enclosing analysis and is raised as :class:`~serpa.errors.DiscoveryError`.
"""

from __future__ import annotations

import time
from typing import Any, Optional

import httpx

from serpa.config import Settings, settings as default_settings
from serpa.errors import DiscoveryError


def _start_url(domain: str) -> str:
    return domain if domain.startswith("http") else f"https://{domain}"


class SiteMapper:
    """Discover the URLs of a website through the Firecrawl map endpoint."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings or default_settings

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def map(
        self,
        url: str,
        *,
        include_subdomains: bool = False,
        search: Optional[str] = None,
        sitemap_only: bool = False,
        limit: Optional[int] = None,
    ) -> list[str]:
        """Call ``/v1/map`` for *url* and return the discovered links.

        Raises:
            EnvironmentError: If ``FIRECRAWL_API_KEY`` is not configured.
            DiscoveryError: On transport failure, a non-2xx status, or a
                payload without ``success``/``links``.
        """
        api_key = self._settings.firecrawl_api_key
        if not api_key:
            raise EnvironmentError(
                "FIRECRAWL_API_KEY environment variable is not set."
            )

        body: dict[str, Any] = {
            "url": url,
            "includeSubdomains": include_subdomains,
            "limit": limit or self._settings.map_limit,
        }
        if search:
            body["search"] = search
        if sitemap_only:
            body["sitemapOnly"] = True

        print(f"[MAP] Starting map for: {url} (search={search!r})")
        started = time.monotonic()
        try:
            with httpx.Client(timeout=self._settings.request_timeout) as client:
                resp = client.post(
                    f"{self._settings.firecrawl_base_url.rstrip('/')}/v1/map",
                    headers={
                        "Authorization": f"Bearer {api_key}",
                        "Content-Type": "application/json",
                    },
                    json=body,
                )
        except httpx.HTTPError as exc:
            raise DiscoveryError(f"Site map request failed for {url}: {exc}") from exc

        elapsed = time.monotonic() - started
        if resp.status_code >= 400:
            raise DiscoveryError(
                f"Firecrawl map returned {resp.status_code}: {resp.text[:300]}"
            )

        try:
            data = resp.json()
        except ValueError as exc:
            raise DiscoveryError(f"Firecrawl map returned invalid JSON: {exc}") from exc

        links = data.get("links") if isinstance(data, dict) else None
        if not isinstance(data, dict) or not data.get("success") or not isinstance(links, list):
            raise DiscoveryError("Firecrawl map failed or returned no links")

        links = [link for link in links if isinstance(link, str)]
        print(f"[MAP] ✓ Found {len(links)} URL(s) in {elapsed:.1f}s.")
        return links

    # ------------------------------------------------------------------
    # Convenience wrappers used by the pipelines
    # ------------------------------------------------------------------

    def map_website(self, domain: str) -> list[str]:
        """Map the whole site, main host only."""
        return self.map(_start_url(domain))

    def map_blog_pages(self, domain: str) -> list[str]:
        """Map the blog-oriented part of the site from its sitemap.

        Subdomains are included so ``blog.<domain>`` hosts are found.  The
        search can return non-blog pages; callers keep only URLs accepted by
        :func:`~serpa.discovery.normalizer.is_blog_url`.
        """
        return self.map(
            _start_url(domain),
            include_subdomains=True,
            search="blog",
            sitemap_only=True,
        )
