"""Synchronous JSON calls to the chat model (semantic labeling, mode a).

The provider is chosen by ``settings.llm_provider``:

``openai`` (default)
    ``ChatOpenAI`` bound to ``response_format={"type": "json_object"}``.
    Requires ``OPENAI_API_KEY``.

``ollama``
    ``ChatOllama`` with ``format="json"`` against a local Ollama server.
"""

from __future__ import annotations

import json
from typing import Any, Optional

from serpa.config import Settings, settings as default_settings
from serpa.errors import LabelingError


def get_llm(model: Optional[str] = None, settings: Optional[Settings] = None) -> Any:
    """Return a LangChain chat model configured for JSON output."""
    cfg = settings or default_settings
    if cfg.llm_provider == "ollama":
        from langchain_ollama import ChatOllama

        return ChatOllama(
            model=cfg.ollama_chat_model,
            temperature=cfg.llm_temperature,
            format="json",
        )

    from langchain_openai import ChatOpenAI

    llm = ChatOpenAI(
        model=model or cfg.openai_classify_model,
        temperature=cfg.llm_temperature,
    )
    return llm.bind(response_format={"type": "json_object"})


def parse_json_content(response: Any) -> Any:
    """Decode the JSON body of a chat response.

    Raises:
        LabelingError: If the response is empty or not valid JSON.
    """
    raw = response.content if hasattr(response, "content") else str(response)
    if not raw:
        raise LabelingError("Empty response from the language model")
    try:
        return json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise LabelingError(f"Language model returned invalid JSON: {exc}") from exc


def invoke_json(prompt: str, llm: Any = None, model: Optional[str] = None) -> Any:
    """Send *prompt* as a single user turn and return the decoded JSON reply.

    Args:
        prompt: Full prompt text.
        llm: Pre-built chat model; when ``None`` one is created with
            :func:`get_llm`.
        model: OpenAI model name override (ignored for Ollama).

    Raises:
        LabelingError: If the call fails or the reply is not JSON.
    """
    chat = llm if llm is not None else get_llm(model)
    try:
        response = chat.invoke(prompt)
    except Exception as exc:
        raise LabelingError(f"Language model call failed: {exc}") from exc
    return parse_json_content(response)
