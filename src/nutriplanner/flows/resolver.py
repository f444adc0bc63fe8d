"""
Step Resolver.

Pure function from (flow, context) to the next step. The controller calls it
after every submission; the UI layer may call it too to decide which widget
to render. Both get the same answer for the same context.
"""

from collections.abc import Mapping
from typing import Any

from nutriplanner.flows.errors import UnsupportedFlowError
from nutriplanner.flows.steps import FLOW_COMPLETE, FlowStep, StepDescriptor
from nutriplanner.flows.table import FLOW_STEPS, FlowIdentifier

FlowTable = Mapping[FlowIdentifier, tuple[FlowStep, ...]]


def coerce_flow(flow: FlowIdentifier | str) -> FlowIdentifier:
    """Accept a FlowIdentifier or its string value."""
    if isinstance(flow, FlowIdentifier):
        return flow
    try:
        return FlowIdentifier(flow)
    except ValueError:
        raise UnsupportedFlowError(flow) from None


def steps_for(flow: FlowIdentifier | str, table: FlowTable = FLOW_STEPS) -> tuple[FlowStep, ...]:
    """
    Declared steps for a flow.

    Raises:
        UnsupportedFlowError: unknown flow, or no step is flagged terminal
    """
    flow_id = coerce_flow(flow)
    steps = table.get(flow_id)
    if not steps:
        raise UnsupportedFlowError(flow_id, "no steps declared")
    if not any(step.terminal for step in steps):
        raise UnsupportedFlowError(flow_id, "no terminal step declared")
    return steps


def resolve(
    flow: FlowIdentifier | str,
    context: Mapping[str, Any],
    table: FlowTable = FLOW_STEPS,
) -> StepDescriptor:
    """
    Return the first step still needed, or FLOW_COMPLETE.

    Args:
        flow: Flow being run
        context: Values collected so far
        table: Flow table to consult (tests pass their own)

    Returns:
        StepDescriptor of the next step to present

    Example:
        >>> resolve(FlowIdentifier.BUDGET_PLANNING, {"budget_limit": 200}).field
        'month'
    """
    for step in steps_for(flow, table):
        if step.needed(context):
            return step.describe()
    return FLOW_COMPLETE
