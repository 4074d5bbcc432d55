"""
Travel advisor for digital nomads.

Classifies a question as information (visas, tax, regulations),
transport or dining, then answers it with the matching specialist.
"""

from nomad.advisor.agent import (
    AdvisorError,
    answer_travel_query,
    classify_travel_query,
    run_specialist_agent,
)

__all__ = [
    "AdvisorError",
    "answer_travel_query",
    "classify_travel_query",
    "run_specialist_agent",
]
