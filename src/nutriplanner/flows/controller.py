"""
Flow Controller.

The stateful driver of one wizard at a time:

    IDLE -> AWAITING_INPUT(step) -> DISPATCHING -> COMPLETED | FAILED -> IDLE

Usage:
    controller = FlowController(build_dispatch_table(), ResultRouter(show))
    step = controller.start(FlowIdentifier.BUDGET_PLANNING)
    step = await controller.advance({"budget_limit": 200})
    interaction = await controller.advance({"month": "2025-07"})

Every dispatch is tagged with the run that started it. If that run was
cancelled or replaced by the time the generator returns, the result is
dropped without formatting or delivery.
"""

import asyncio
import logging
from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import Any

from nutriplanner.flows.context import FlowContext
from nutriplanner.flows.dispatch import GeneratorDispatchTable
from nutriplanner.flows.errors import (
    FlowStateError,
    FlowValidationError,
    GenerationError,
    StaleDispatchDiscard,
)
from nutriplanner.flows.interaction import Interaction, InteractionFormatter
from nutriplanner.flows.resolver import FlowTable, coerce_flow, resolve, steps_for
from nutriplanner.flows.router import ResultRouter
from nutriplanner.flows.steps import StepDescriptor
from nutriplanner.flows.table import FLOW_STEPS, FlowIdentifier
from nutriplanner.models.entities import new_id

logger = logging.getLogger(__name__)

_EMPTY: Mapping[str, Any] = MappingProxyType({})


class FlowState(Enum):
    IDLE = "idle"
    AWAITING_INPUT = "awaiting_input"
    DISPATCHING = "dispatching"
    COMPLETED = "completed"
    FAILED = "failed"


class FlowController:
    """Owns the active flow, its context and its current step."""

    def __init__(
        self,
        dispatch_table: GeneratorDispatchTable,
        router: ResultRouter,
        formatter: InteractionFormatter | None = None,
        table: FlowTable = FLOW_STEPS,
    ):
        self._dispatch_table = dispatch_table
        self._router = router
        self._formatter = formatter or InteractionFormatter()
        self._table = table

        self._state = FlowState.IDLE
        self._flow: FlowIdentifier | None = None
        self._context: FlowContext | None = None
        self._step: StepDescriptor | None = None
        self._run_id: str | None = None
        self._conversation_id: str | None = None

        router.bind(self)

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------

    @property
    def state(self) -> FlowState:
        return self._state

    @property
    def flow(self) -> FlowIdentifier | None:
        return self._flow

    @property
    def current_step(self) -> StepDescriptor | None:
        return self._step

    @property
    def context(self) -> Mapping[str, Any]:
        """Read-only view of the collected values (empty when idle)."""
        return self._context.view() if self._context is not None else _EMPTY

    @property
    def run_id(self) -> str | None:
        return self._run_id

    @property
    def is_active(self) -> bool:
        return self._state in (FlowState.AWAITING_INPUT, FlowState.DISPATCHING)

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def start(
        self,
        flow: FlowIdentifier | str,
        seed: Mapping[str, Any] | None = None,
    ) -> StepDescriptor:
        """
        Begin a flow, cancelling any active one first.

        Args:
            flow: Flow to run
            seed: Values a caller already knows (e.g. an occasion); their
                steps are skipped

        Returns:
            The first step to present

        Raises:
            UnsupportedFlowError: unknown or misconfigured flow
            FlowStateError: the seed leaves nothing to collect
        """
        flow_id = coerce_flow(flow)
        steps_for(flow_id, self._table)

        if self.is_active:
            logger.info(f"Starting {flow_id.value} replaces active flow {self._flow.value}")
            self.cancel()

        context = FlowContext(seed)
        step = resolve(flow_id, context, self._table)
        if step.completes_flow:
            raise FlowStateError(f"Seed already completes {flow_id.value}; nothing to collect")

        self._flow = flow_id
        self._context = context
        self._step = step
        self._run_id = new_id()
        self._conversation_id = new_id()
        self._state = FlowState.AWAITING_INPUT

        logger.info(f"Started {flow_id.value} (run {self._run_id}) at step {step.field}")
        return step

    async def advance(
        self, step_output: Mapping[str, Any]
    ) -> StepDescriptor | Interaction | None:
        """
        Submit the current step's output.

        Returns:
            The next step, or the delivered Interaction when the flow
            finished, or None when the finished run had been superseded

        Raises:
            FlowStateError: no flow awaiting input (idle or dispatching)
        """
        if self._state is FlowState.DISPATCHING:
            raise FlowStateError(f"{self._flow.value} is already generating; wait or cancel")
        if self._state is not FlowState.AWAITING_INPUT:
            raise FlowStateError("No active flow; call start() first")

        submitted = self._step
        self._context.merge(step_output)
        next_step = resolve(self._flow, self._context, self._table)

        if next_step == submitted:
            # Answer didn't satisfy the step (e.g. an empty selection)
            logger.debug(f"{self._flow.value}: {submitted.field} asked again")
            return next_step

        if submitted.is_terminal or next_step.completes_flow:
            return await self._dispatch()

        self._step = next_step
        logger.debug(f"{self._flow.value}: {submitted.field} -> {next_step.field}")
        return next_step

    async def select(self, value: Any) -> StepDescriptor | Interaction | None:
        """Widget-style submission: `value` answers the current step's field."""
        if self._step is None or self._step.field is None:
            raise FlowStateError("No step awaiting a selection")
        return await self.advance({self._step.field: value})

    def cancel(self) -> None:
        """Drop the active flow. Produces no Interaction. No-op when idle."""
        if not self.is_active:
            return
        logger.info(f"Cancelled {self._flow.value} (run {self._run_id}) in state {self._state.value}")
        self.reset()

    def reset(self) -> None:
        """Back to IDLE with no context."""
        self._state = FlowState.IDLE
        self._flow = None
        self._context = None
        self._step = None
        self._run_id = None
        self._conversation_id = None

    # -------------------------------------------------------------------------
    # Dispatch
    # -------------------------------------------------------------------------

    def _ensure_current(self, run_id: str) -> None:
        if self._run_id != run_id:
            raise StaleDispatchDiscard(run_id)

    async def _dispatch(self) -> Interaction | None:
        flow = self._flow
        run_id = self._run_id
        conversation_id = self._conversation_id
        context = self._context

        try:
            entry = self._dispatch_table.entry(flow)
        except Exception:
            self.reset()
            raise

        self._state = FlowState.DISPATCHING
        self._step = None

        outcome: Any
        try:
            outcome = await self._dispatch_table.dispatch(flow, context)
        except FlowValidationError as e:
            logger.warning(f"Validation failed for {flow.value}: {e}")
            outcome = e
        except GenerationError as e:
            logger.error(f"Generation failed for {flow.value}: {e}")
            outcome = e
        except asyncio.CancelledError:
            if self._run_id == run_id:
                self.reset()
            raise

        try:
            self._ensure_current(run_id)
        except StaleDispatchDiscard as e:
            logger.debug(str(e))
            return None

        try:
            interaction = self._formatter.format(outcome, entry.content_kind, conversation_id)
        except ValueError as e:
            # Generator returned something that doesn't fit its content kind
            logger.error(f"Unusable result from {entry.name}: {e}")
            outcome = GenerationError(flow, f"Unexpected result from {entry.name}")
            interaction = self._formatter.format(outcome, entry.content_kind, conversation_id)

        self._state = FlowState.FAILED if interaction.is_error else FlowState.COMPLETED
        self._router.deliver(interaction, flow)
        return interaction
