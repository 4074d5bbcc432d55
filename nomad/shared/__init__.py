"""
Shared infrastructure for all components.

Modules:
- config: Settings loaded from the environment
- llm: OpenAI client helpers
- logging: Text/JSON logging setup and step transition records
- contracts: Worker output contracts for stage handoffs
- schemas: Common base models
"""

from nomad.shared.config import Settings, get_settings
from nomad.shared.llm.client import create_client, call_llm
from nomad.shared.logging.config import setup_logging, log_step_transition

__all__ = [
    "Settings",
    "get_settings",
    "create_client",
    "call_llm",
    "setup_logging",
    "log_step_transition",
]
