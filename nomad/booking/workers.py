"""
Worker and tool definitions for the booking orchestrator.

Each worker is a named role with fixed instructions and the subset of
tools it may call. Definitions are static for the life of the process.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple


@dataclass(frozen=True)
class ToolDefinition:
    """A tool a worker may invoke, described by a JSON schema."""

    name: str
    description: str
    parameters: Dict[str, Any] = field(default_factory=dict)

    def as_openai_tool(self) -> Dict[str, Any]:
        """Render in the Chat Completions function-tool format."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters,
            },
        }


@dataclass(frozen=True)
class WorkerDefinition:
    """
    A named worker role.

    Attributes:
        name: Worker name used by pipeline stages
        system_prompt: Fixed instruction text
        tools: Names of the tools this worker may invoke
    """

    name: str
    system_prompt: str
    tools: Tuple[str, ...]


def _schema(properties: Dict[str, str], required: List[str]) -> Dict[str, Any]:
    return {
        "type": "object",
        "properties": {name: {"type": kind} for name, kind in properties.items()},
        "required": required,
    }


WORKER_TOOLS: Dict[str, ToolDefinition] = {
    tool.name: tool
    for tool in (
        ToolDefinition(
            name="search_accommodations",
            description="Search for accommodations based on criteria",
            parameters=_schema(
                {
                    "destination": "string",
                    "checkIn": "string",
                    "checkOut": "string",
                    "budget": "number",
                    "guests": "number",
                    "accommodationType": "string",
                },
                ["destination", "checkIn", "checkOut", "budget"],
            ),
        ),
        ToolDefinition(
            name="search_flights",
            description="Search for flights between two airports",
            parameters=_schema(
                {
                    "origin": "string",
                    "destination": "string",
                    "departureDate": "string",
                    "returnDate": "string",
                    "passengers": "object",
                    "cabinClass": "string",
                    "budget": "number",
                },
                ["origin", "destination", "departureDate", "passengers"],
            ),
        ),
        ToolDefinition(
            name="compare_options",
            description="Compare accommodation options based on price, location, amenities",
            parameters=_schema(
                {"accommodations": "array", "criteria": "array"},
                ["accommodations", "criteria"],
            ),
        ),
        ToolDefinition(
            name="validate_booking",
            description="Validate booking details and availability",
            parameters=_schema(
                {"accommodationId": "string", "dates": "object", "guests": "number"},
                ["accommodationId", "dates"],
            ),
        ),
        ToolDefinition(
            name="create_booking",
            description="Create a booking reservation",
            parameters=_schema(
                {"accommodationId": "string", "guestDetails": "object", "paymentInfo": "object"},
                ["accommodationId", "guestDetails"],
            ),
        ),
        ToolDefinition(
            name="track_booking",
            description="Track booking status and updates",
            parameters=_schema({"bookingId": "string"}, ["bookingId"]),
        ),
        ToolDefinition(
            name="send_notification",
            description="Send confirmation and updates to user",
            parameters=_schema(
                {"type": "string", "recipient": "string", "content": "object"},
                ["type", "recipient", "content"],
            ),
        ),
    )
}


WORKERS: Dict[str, WorkerDefinition] = {
    worker.name: worker
    for worker in (
        WorkerDefinition(
            name="SearchWorker",
            system_prompt=(
                "You are a SearchWorker specializing in finding accommodations and flights.\n"
                "Your job is to search for accommodations using the search_accommodations tool "
                "and flights using the search_flights tool.\n"
                "Always provide detailed search results with property details, pricing, and availability.\n"
                "Focus on finding options that match the user's budget and preferences.\n"
                "For flight searches, consider departure times, airlines, and total journey time."
            ),
            tools=("search_accommodations", "search_flights"),
        ),
        WorkerDefinition(
            name="CompareWorker",
            system_prompt=(
                "You are a CompareWorker specializing in analyzing accommodation options.\n"
                "Your job is to compare different accommodations using the compare_options tool.\n"
                "Evaluate based on price, location, amenities, reviews, and value for money.\n"
                "Provide clear recommendations with pros and cons."
            ),
            tools=("compare_options",),
        ),
        WorkerDefinition(
            name="ValidateWorker",
            system_prompt=(
                "You are a ValidateWorker specializing in booking validation.\n"
                "Your job is to validate accommodation availability and booking details "
                "using the validate_booking tool.\n"
                "Check dates, room availability, pricing accuracy, and booking terms.\n"
                "Ensure all details are correct before proceeding."
            ),
            tools=("validate_booking",),
        ),
        WorkerDefinition(
            name="BookingWorker",
            system_prompt=(
                "You are a BookingWorker specializing in creating reservations.\n"
                "Your job is to create bookings using the create_booking tool.\n"
                "Handle payment processing, guest information, and reservation confirmation."
            ),
            tools=("create_booking",),
        ),
        WorkerDefinition(
            name="TrackingWorker",
            system_prompt=(
                "You are a TrackingWorker specializing in booking monitoring.\n"
                "Your job is to track booking status and updates using the track_booking tool.\n"
                "Monitor confirmation status, payment processing, and any changes."
            ),
            tools=("track_booking",),
        ),
        WorkerDefinition(
            name="NotificationWorker",
            system_prompt=(
                "You are a NotificationWorker specializing in user communication.\n"
                "Your job is to send notifications and updates using the send_notification tool.\n"
                "Send booking confirmations, payment receipts, and status updates."
            ),
            tools=("send_notification",),
        ),
    )
}


def get_worker_tools(worker: WorkerDefinition) -> List[ToolDefinition]:
    """Tools available to a worker, in declaration order."""
    return [tool for name, tool in WORKER_TOOLS.items() if name in worker.tools]


def build_worker_prompt(worker: WorkerDefinition, task: Dict[str, Any]) -> str:
    """
    Build the user-turn prompt for a worker task.

    Args:
        worker: Worker that will execute the task
        task: Task payload ({"action": ..., "params": {...}})

    Returns:
        Instructions, the task as pretty JSON, and the available tool names
    """
    tool_names = ", ".join(tool.name for tool in get_worker_tools(worker))
    return (
        f"{worker.system_prompt}\n\n"
        f"You need to execute the following task:\n"
        f"{json.dumps(task, indent=2, default=str)}\n\n"
        f"Available tools: {tool_names}\n\n"
        f"Please execute the appropriate tool and provide a comprehensive result."
    )
