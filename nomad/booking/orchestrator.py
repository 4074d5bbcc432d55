"""
Booking orchestrator.

Runs the fixed accommodation (and optional flight) booking pipeline:
    search -> [searchFlights] -> compare -> validate -> book -> track -> notify

Stages are compiled into a linear LangGraph graph. Each node delegates to
execute_worker, which records the step's progress on the orchestrator's
step list. The first error aborts the run; nothing is retried.
"""

import logging
import time
from typing import Any, Dict, List, Optional

from langgraph.graph import StateGraph, END

from nomad.booking.config import BookingGraphConfig, DEFAULT_CONFIG
from nomad.booking.mock_data import generate_mock_result, random_base36
from nomad.booking.schemas import (
    BookingRequest,
    BookingRunState,
    OrchestrationStep,
    RunResult,
)
from nomad.booking.stages import Stage, build_stages
from nomad.booking.workers import WORKERS, build_worker_prompt, get_worker_tools
from nomad.shared.config import Settings
from nomad.shared.llm.client import call_llm, create_client
from nomad.shared.logging.config import log_step_transition


logger = logging.getLogger(__name__)


class UnknownStepError(LookupError):
    """Raised when a worker is dispatched to a step that is not in the run."""


def new_orchestration_id() -> str:
    """Display-only run identifier: orch_<epoch ms>_<9 base-36 chars>."""
    return f"orch_{int(time.time() * 1000)}_{random_base36(9)}"


class BookingOrchestrator:
    """
    Sequential booking pipeline.

    The step list is fixed at construction (six steps, seven with flights)
    and only step status, message and data change afterwards.

    Worker calls go to the hosted model when a client is available, but the
    data handed to later stages is always the canned result for the stage's
    action; the model reply only feeds the step's display message.
    """

    def __init__(
        self,
        include_flights: bool = False,
        settings: Optional[Settings] = None,
        client: Any = None,
        config: Optional[BookingGraphConfig] = None,
    ):
        self.orchestration_id = new_orchestration_id()
        self.include_flights = include_flights
        self.config = config or DEFAULT_CONFIG
        self.client = client if client is not None else create_client(settings or Settings())
        self.stages = build_stages(include_flights)
        self.steps: List[OrchestrationStep] = [
            OrchestrationStep(step=stage.step, worker=stage.worker) for stage in self.stages
        ]
        self._log = f"[orch={self.orchestration_id}] [graph=booking] "

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def run(self, request: BookingRequest) -> RunResult:
        """
        Execute every stage in order.

        A stage whose precondition is false for this request is skipped and
        its step stays "pending" even in a completed run. This only happens
        when the orchestrator was built with include_flights=True for a
        request without a flight origin; the endpoint never does that, since
        it passes request.wants_flights.

        Returns:
            RunResult with status "completed" and the booking payload as the
            final result, or status "failed" with the steps as they stood
            when the error occurred.
        """
        logger.info(
            f"{self._log}Pipeline starting | destination={request.destination}, "
            f"dates={request.check_in}..{request.check_out}, guests={request.guests}, "
            f"budget={request.budget}, flights={request.wants_flights}, "
            f"mode={'model' if self.client is not None else 'mock'}"
        )

        try:
            graph = self._build_graph()
            final_state = graph.invoke(
                {
                    "orchestration_id": self.orchestration_id,
                    "request": request,
                    "results": {},
                    "completed_steps": [],
                },
                {"recursion_limit": self.config.recursion_limit},
            )
        except Exception as e:
            logger.exception(f"{self._log}Orchestration failed: {e}")
            return RunResult(
                orchestration_id=self.orchestration_id,
                steps=self.steps,
                status="failed",
            )

        final_stage = next((s for s in self.stages if s.final), None)
        final_result = final_state["results"].get(final_stage.step) if final_stage else None

        logger.info(
            f"{self._log}Pipeline finished | status=completed, "
            f"steps={final_state['completed_steps']}"
        )

        return RunResult(
            orchestration_id=self.orchestration_id,
            steps=self.steps,
            final_result=final_result or None,
            status="completed",
        )

    def _build_graph(self):
        """
        Compile the stage list into a linear graph.

        Entry -> stage[0] -> stage[1] -> ... -> stage[n-1] -> END
        """
        graph = StateGraph(BookingRunState)

        for stage in self.stages:
            graph.add_node(stage.step, self._make_node(stage))

        graph.set_entry_point(self.stages[0].step)
        for current, following in zip(self.stages, self.stages[1:]):
            graph.add_edge(current.step, following.step)
        graph.add_edge(self.stages[-1].step, END)

        return graph.compile()

    def _make_node(self, stage: Stage):
        def node(state: BookingRunState) -> Dict[str, Any]:
            request = state["request"]
            if stage.when is not None and not stage.when(request):
                logger.info(f"{self._log}[step={stage.step}] Skipping stage, precondition not met")
                return {"completed_steps": []}

            task = stage.build_task(request, state["results"])
            result = self.execute_worker(stage.worker, stage.step, task)
            return {
                "results": {stage.step: result or {}},
                "completed_steps": [stage.step],
            }

        node.__name__ = f"{stage.step}_node"
        return node

    # ------------------------------------------------------------------
    # Workers
    # ------------------------------------------------------------------

    def _find_step(self, step_name: str) -> OrchestrationStep:
        for step in self.steps:
            if step.step == step_name:
                return step
        raise UnknownStepError(
            f"Step '{step_name}' is not part of orchestration {self.orchestration_id}"
        )

    def execute_worker(
        self, worker_name: str, step_name: str, task: Dict[str, Any]
    ) -> Dict[str, Any]:
        """
        Run one worker for one step.

        Args:
            worker_name: Key into WORKERS
            step_name: Step record to update
            task: {"action": <tool name>, "params": {...}}

        Returns:
            The canned result for the task's action

        Raises:
            UnknownStepError: If step_name is not in this run's step list
            Exception: Whatever the model call raised (the step is marked failed)
        """
        step = self._find_step(step_name)
        _log = f"{self._log}[step={step_name}] [worker={worker_name}] "

        step.status = "running"
        step.message = f"Executing {worker_name}..."
        log_step_transition("step_running", step.model_dump(), self.orchestration_id)

        action = task.get("action")
        params = task.get("params") or {}

        try:
            worker = WORKERS[worker_name]
            prompt = build_worker_prompt(worker, task)

            if self.client is None:
                logger.warning(f"{_log}Model API key not configured, using mock data")
                result = generate_mock_result(action, params)
                self._complete(step, f"{worker_name} completed with mock data", result)
                return result

            logger.info(f"{_log}Calling model | action={action}, model={self.config.model}")
            reply = call_llm(
                self.client,
                [
                    {"role": "system", "content": worker.system_prompt},
                    {"role": "user", "content": prompt},
                ],
                model=self.config.model,
                max_tokens=self.config.max_tokens,
                temperature=self.config.temperature,
                tools=[tool.as_openai_tool() for tool in get_worker_tools(worker)],
                max_attempts=self.config.max_attempts,
            )

            result = generate_mock_result(action, params)
            self._complete(step, self._preview(reply, worker_name), result)
            return result

        except Exception as e:
            logger.error(f"{_log}Worker failed: {e}")
            step.status = "failed"
            step.message = f"Failed: {e}"
            log_step_transition("step_failed", step.model_dump(), self.orchestration_id)
            raise

    def _complete(self, step: OrchestrationStep, message: str, result: Dict[str, Any]) -> None:
        step.status = "completed"
        step.message = message
        step.data = result
        log_step_transition("step_completed", step.model_dump(), self.orchestration_id)

    def _preview(self, reply: Any, worker_name: str) -> str:
        """Short display text from the model reply."""
        content = getattr(reply, "content", None)
        if isinstance(content, str) and content:
            return content[: self.config.preview_chars] + "..."
        return f"{worker_name} completed successfully"
