"""
OpenAI client helpers.

Clients are created from explicit Settings rather than a module global,
and every completion goes through call_llm, which wraps the request in a
tenacity Retrying loop. The attempt count defaults to 1: pipeline stages
are never retried unless a caller opts in.
"""

import logging
from typing import Any, Dict, List, Optional

from openai import OpenAI
from tenacity import Retrying, stop_after_attempt, wait_exponential

from nomad.shared.config import Settings


logger = logging.getLogger(__name__)


def create_client(settings: Settings) -> Optional[OpenAI]:
    """
    Create an OpenAI client from settings.

    Returns:
        A client instance, or None when no API key is configured
        (callers fall back to canned data in that case).
    """
    if not settings.openai_api_key:
        return None
    return OpenAI(api_key=settings.openai_api_key)


def call_llm(
    client: Any,
    messages: List[Dict[str, str]],
    model: str = "gpt-4.1-mini",
    max_tokens: int = 1000,
    temperature: float = 0.3,
    tools: Optional[List[Dict[str, Any]]] = None,
    max_attempts: int = 1,
) -> Any:
    """
    Call the Chat Completion API and return the first choice's message.

    Args:
        client: OpenAI client (or any object exposing chat.completions.create)
        messages: List of message dicts with 'role' and 'content' keys
        model: Model identifier to use
        max_tokens: Completion token cap
        temperature: Sampling temperature
        tools: Optional function-tool schemas offered to the model
        max_attempts: Total attempts before the last error is re-raised

    Returns:
        The assistant message object (content may be None when the model
        answers with tool calls only).
    """
    kwargs: Dict[str, Any] = {
        "model": model,
        "messages": messages,
        "max_tokens": max_tokens,
        "temperature": temperature,
    }
    if tools:
        kwargs["tools"] = tools

    for attempt in Retrying(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    ):
        with attempt:
            response = client.chat.completions.create(**kwargs)

    return response.choices[0].message


def get_llm_response(
    client: Any,
    user_prompt: str,
    system_prompt: Optional[str] = None,
    **kwargs: Any,
) -> Optional[str]:
    """
    Convenience wrapper returning only the text of the reply.

    Args:
        client: OpenAI client instance
        user_prompt: The user message content
        system_prompt: Optional system message content
        **kwargs: Passed through to call_llm

    Returns:
        The stripped reply text, or None if the model returned no text.
    """
    messages = []
    if system_prompt:
        messages.append({"role": "system", "content": system_prompt})
    messages.append({"role": "user", "content": user_prompt})

    message = call_llm(client, messages, **kwargs)
    content = getattr(message, "content", None)
    return content.strip() if content else None
