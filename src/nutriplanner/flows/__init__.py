"""
NutriPlanner Flows - multi-step AI interaction orchestration.

A flow collects inputs step by step (members, dates, budgets...), then calls
one generator and turns its result, or its failure, into an Interaction.

Usage:
    from nutriplanner.flows import FlowController, FlowIdentifier, ResultRouter
    from nutriplanner.generators import build_dispatch_table

    controller = FlowController(build_dispatch_table(), ResultRouter(show))
    step = controller.start(FlowIdentifier.WEEKLY_MENU)
"""

from nutriplanner.flows.context import FlowContext
from nutriplanner.flows.controller import FlowController, FlowState
from nutriplanner.flows.dispatch import GeneratorDispatchTable, GeneratorEntry
from nutriplanner.flows.errors import (
    FlowError,
    FlowStateError,
    FlowValidationError,
    GenerationError,
    StaleDispatchDiscard,
    UnsupportedFlowError,
)
from nutriplanner.flows.interaction import Interaction, InteractionFormatter
from nutriplanner.flows.resolver import resolve, steps_for
from nutriplanner.flows.router import ResultRouter
from nutriplanner.flows.steps import FLOW_COMPLETE, StepDescriptor, StepKind
from nutriplanner.flows.table import FLOW_STEPS, FlowIdentifier

__all__ = [
    "FLOW_COMPLETE",
    "FLOW_STEPS",
    "FlowContext",
    "FlowController",
    "FlowError",
    "FlowIdentifier",
    "FlowState",
    "FlowStateError",
    "FlowValidationError",
    "GenerationError",
    "GeneratorDispatchTable",
    "GeneratorEntry",
    "Interaction",
    "InteractionFormatter",
    "ResultRouter",
    "StaleDispatchDiscard",
    "StepDescriptor",
    "StepKind",
    "UnsupportedFlowError",
    "resolve",
    "steps_for",
]
