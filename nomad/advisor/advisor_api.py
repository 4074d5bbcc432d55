"""
FastAPI endpoints for the travel advisor chat.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from nomad.advisor.agent import answer_travel_query
from nomad.advisor.schemas import AgentRequest, AgentResponse
from nomad.shared.config import Settings, get_settings
from nomad.shared.cors import cors_preflight
from nomad.shared.llm.client import create_client


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/agent", tags=["advisor"])


@router.post("", response_model=AgentResponse)
def ask_agent(
    request: AgentRequest, settings: Settings = Depends(get_settings)
) -> AgentResponse:
    """Route a travel question to the matching specialist."""
    message = request.message
    if not message or not isinstance(message, str) or not message.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Message is required and must be a string",
        )

    try:
        return answer_travel_query(create_client(settings), message)
    except Exception as e:
        logger.exception(f"[api=agent] Agent request failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to process your travel query. Please try again.",
        )


@router.options("")
async def agent_options() -> Response:
    return cors_preflight("POST, OPTIONS")
