"""
Schemas for the booking orchestrator.

Defines the request/response models exposed over HTTP and the state
schema that flows through the LangGraph pipeline.
"""

import operator
from typing import Any, Annotated, Dict, List, Literal, Optional, TypedDict

from pydantic import ConfigDict, Field

from nomad.shared.schemas.base import CamelModel


StepStatus = Literal["pending", "running", "completed", "failed"]
RunStatus = Literal["processing", "completed", "failed"]


class BookingRequest(CamelModel):
    """
    Accommodation (and optional flight) booking request.

    destination/check_in/check_out are optional at the model level so the
    endpoint can answer 400 with its own message when they are missing.
    Other fields are only type-checked; range checks are left to callers.
    """

    model_config = ConfigDict(frozen=True)

    destination: Optional[str] = Field(default=None, description="Trip destination")
    check_in: Optional[str] = Field(default=None, description="Check-in date (YYYY-MM-DD)")
    check_out: Optional[str] = Field(default=None, description="Check-out date (YYYY-MM-DD)")
    budget: Optional[float] = Field(default=0, description="Accommodation budget")
    guests: Optional[int] = Field(default=1, description="Number of guests")
    accommodation_type: Optional[str] = Field(default="any", description="hotel, hostel, apartment, ...")

    include_flights: bool = Field(default=False, description="Also search and book flights")
    flight_origin: Optional[str] = Field(default=None, description="Departure airport or city")
    flight_budget: Optional[float] = Field(default=None, description="Flight budget")
    flight_class: Optional[str] = Field(default=None, description="Cabin class")

    @property
    def wants_flights(self) -> bool:
        """Flights are searched only when requested and an origin is given."""
        return bool(self.include_flights and self.flight_origin)


class OrchestrationStep(CamelModel):
    """One stage of the pipeline; status and data are filled in during the run."""

    step: str
    worker: str
    status: StepStatus = "pending"
    message: Optional[str] = None
    data: Optional[Dict[str, Any]] = None


class RunResult(CamelModel):
    """Outcome of a single orchestration run."""

    orchestration_id: str
    steps: List[OrchestrationStep]
    final_result: Optional[Dict[str, Any]] = None
    status: RunStatus


def merge_results(
    existing: Dict[str, Dict[str, Any]], update: Dict[str, Dict[str, Any]]
) -> Dict[str, Dict[str, Any]]:
    """Reducer for the per-step results channel."""
    return {**existing, **update}


class BookingRunState(TypedDict):
    """
    State schema for the booking pipeline graph.

    Step records are owned by the orchestrator instance; the graph state
    only carries what stages need to build their inputs.
    """

    orchestration_id: str
    request: BookingRequest

    # Stage outputs keyed by step name (merged as stages complete)
    results: Annotated[Dict[str, Dict[str, Any]], merge_results]

    # Names of stages that have run, in order
    completed_steps: Annotated[List[str], operator.add]
