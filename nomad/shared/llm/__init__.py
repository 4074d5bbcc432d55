"""LLM client utilities."""

from nomad.shared.llm.client import create_client, call_llm, get_llm_response

__all__ = ["create_client", "call_llm", "get_llm_response"]
