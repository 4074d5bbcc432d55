"""
Configuration for the booking orchestrator.

Centralizes model and pipeline tuning so the stage wiring stays free of
magic numbers.
"""

from dataclasses import dataclass


@dataclass
class BookingGraphConfig:
    """
    Configuration for the booking pipeline.

    Attributes:
        model: Model used by every worker
        temperature: Sampling temperature for worker calls
        max_tokens: Completion token cap per worker call
        max_attempts: Attempts per worker call (1 = no retry)
        preview_chars: Length of the model reply shown in a step message
        recursion_limit: Maximum number of graph steps
    """

    model: str = "gpt-4.1-mini"
    temperature: float = 0.3
    max_tokens: int = 1000
    max_attempts: int = 1
    preview_chars: int = 100
    recursion_limit: int = 25


# Default configuration instance
DEFAULT_CONFIG = BookingGraphConfig()
