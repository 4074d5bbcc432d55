"""
Travel advisor: classify the question, then answer it with a specialist.

Two model calls per message and no state between messages. A failed
classification falls back to the default specialist; a failed answer
raises AdvisorError.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from nomad.advisor.prompts import (
    DEFAULT_CATEGORY,
    SPECIALISTS,
    build_classification_prompt,
)
from nomad.advisor.response_parser import parse_classification
from nomad.advisor.schemas import AgentResponse, TravelCategoryOutput
from nomad.shared.llm.client import get_llm_response


logger = logging.getLogger(__name__)

NO_ANSWER = "I apologize, but I couldn't generate a response."


class AdvisorError(Exception):
    """Raised when the specialist cannot produce an answer."""


@dataclass
class AdvisorConfig:
    """
    Configuration for the advisor's model calls.

    Attributes:
        model: Model used for both calls
        classifier_max_tokens / classifier_temperature: Classification call
        specialist_max_tokens / specialist_temperature: Answer call
    """

    model: str = "gpt-4.1-mini"
    classifier_max_tokens: int = 1024
    classifier_temperature: float = 0.1
    specialist_max_tokens: int = 500
    specialist_temperature: float = 0.7


DEFAULT_CONFIG = AdvisorConfig()


def classify_travel_query(
    client: Any, message: str, config: Optional[AdvisorConfig] = None
) -> TravelCategoryOutput:
    """
    Classify a travel question into information, transport or dining.

    Never raises: any failure yields the default category.
    """
    config = config or DEFAULT_CONFIG

    if client is None:
        logger.warning("[agent=classifier] Model API key not configured, using default category")
        return _fallback_classification()

    try:
        raw = get_llm_response(
            client,
            build_classification_prompt(message),
            model=config.model,
            max_tokens=config.classifier_max_tokens,
            temperature=config.classifier_temperature,
        )
        if not raw:
            raise ValueError("No classification result")

        result = parse_classification(raw)
        logger.info(f"[agent=classifier] Classified | category={result.category}")
        return result
    except Exception as e:
        logger.error(f"[agent=classifier] Classification error: {e}")
        return _fallback_classification()


def _fallback_classification() -> TravelCategoryOutput:
    return TravelCategoryOutput(
        category=DEFAULT_CATEGORY,
        reasoning=f"Failed to classify, defaulting to {DEFAULT_CATEGORY} category",
    )


def run_specialist_agent(
    client: Any, category: str, message: str, config: Optional[AdvisorConfig] = None
) -> str:
    """
    Answer the message with the specialist for the given category.

    Raises:
        AdvisorError: Unknown category, no model configured, or model failure
    """
    config = config or DEFAULT_CONFIG

    specialist = SPECIALISTS.get(category)
    if specialist is None:
        raise AdvisorError(f"Unknown agent category: {category}")

    if client is None:
        raise AdvisorError(f"{specialist.name} is unavailable: model API key not configured")

    try:
        answer = get_llm_response(
            client,
            message,
            system_prompt=specialist.system_prompt,
            model=config.model,
            max_tokens=config.specialist_max_tokens,
            temperature=config.specialist_temperature,
        )
    except Exception as e:
        logger.error(f"[agent={category}] Error with {specialist.name}: {e}")
        raise AdvisorError(f"Failed to get response from {specialist.name}") from e

    return answer or NO_ANSWER


def answer_travel_query(
    client: Any, message: str, config: Optional[AdvisorConfig] = None
) -> AgentResponse:
    """Classify, route, and package the specialist's answer."""
    classification = classify_travel_query(client, message, config)
    response = run_specialist_agent(client, classification.category, message, config)
    return AgentResponse(
        agent_name=SPECIALISTS[classification.category].name,
        response=response,
        category=classification.category,
    )
