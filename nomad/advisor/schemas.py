"""
Schemas for the travel advisor.
"""

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field


Category = Literal["information", "transport", "dining"]


class TravelCategoryOutput(BaseModel):
    """Classifier verdict."""

    category: Category = Field(description="Specialist to route the message to")
    reasoning: str = Field(default="", description="Why this category was chosen")


class AgentRequest(BaseModel):
    """Chat message from the user; validated by the endpoint."""

    message: Optional[Any] = Field(default=None, description="User's travel question")


class AgentResponse(BaseModel):
    """Specialist answer returned to the chat UI."""

    agent_name: str
    response: str
    category: Category
