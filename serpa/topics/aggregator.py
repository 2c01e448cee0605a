"""Name the content themes of a URL corpus (a folder, or the blog).

This is the lightweight, non-essential labeling path: topic names decorate
folder and blog results but nothing downstream depends on them, so every
failure degrades to an empty list.
"""

from __future__ import annotations

import math
import re
from typing import Any, Iterable, List, Optional
from urllib.parse import urlparse

from serpa.config import settings
from serpa.labeling.llm import invoke_json
from serpa.labeling.prompts import TOPIC_NAMING_PROMPT
from serpa.models import TopicCount

_EXTENSION_RE = re.compile(r"\.[a-z]+$")
_SEPARATOR_RE = re.compile(r"[-_]")


def extract_slug(url: str) -> Optional[str]:
    """Return the readable slug of *url*, without its folder segment.

    e.g. ``/blog/virtual-backgrounds-guide.html`` → ``virtual backgrounds guide``

    Returns ``None`` for URLs with no path below the folder.
    """
    try:
        path = urlparse(url).path
    except ValueError:
        return None

    segments = [s for s in path.split("/") if s][1:]
    if not segments:
        return None

    slug = _EXTENSION_RE.sub("", "/".join(segments))
    slug = _SEPARATOR_RE.sub(" ", slug).lower()
    return slug or None


def sample_slugs(urls: Iterable[str], limit: Optional[int] = None) -> List[str]:
    """Return at most *limit* distinct slugs, in first-seen order."""
    cap = settings.topic_sample_size if limit is None else limit
    seen: set[str] = set()
    unique: List[str] = []
    for url in urls:
        slug = extract_slug(url)
        if slug and slug not in seen:
            seen.add(slug)
            unique.append(slug)
            if len(unique) >= cap:
                break
    return unique


def _validate_topics(payload: Any, top_n: int, min_count: int) -> List[TopicCount]:
    raw = payload.get("topics") if isinstance(payload, dict) else None
    if not isinstance(raw, list):
        raise ValueError(f"Invalid topics format: {raw!r:.200}")

    topics: List[TopicCount] = []
    for item in raw:
        if not isinstance(item, dict):
            continue
        name, count = item.get("name"), item.get("count")
        if not isinstance(name, str):
            continue
        if isinstance(count, bool) or not isinstance(count, (int, float)):
            continue
        # Estimates may be fractional; round half up before the cut-off.
        rounded = int(math.floor(count + 0.5))
        if rounded < min_count:
            continue
        topics.append(TopicCount(name=name, count=rounded))
    return topics[:top_n]


def extract_topics(
    urls: List[str],
    top_n: int = 5,
    min_count: int = 2,
    llm: Any = None,
) -> List[TopicCount]:
    """Ask the chat model for the top *top_n* themes of *urls*.

    Topics the model reports with fewer than *min_count* pages are dropped
    even if the model ignored that instruction.

    Returns:
        Up to *top_n* topics.  Any failure (transport, invalid JSON, wrong
        shape) yields ``[]``.
    """
    slugs = sample_slugs(urls)
    if not slugs:
        return []

    prompt = TOPIC_NAMING_PROMPT.format(
        top_n=top_n,
        min_count=min_count,
        total=len(urls),
        slug_lines="\n".join(f"- {s}" for s in slugs),
    )
    try:
        payload = invoke_json(prompt, llm=llm, model=settings.openai_topic_model)
        topics = _validate_topics(payload, top_n, min_count)
    except Exception as exc:
        print(f"[TOPICS] Topic extraction failed: {exc}")
        return []

    print(f"[TOPICS] {len(topics)} topic(s) from {len(slugs)} slug(s).")
    return topics
