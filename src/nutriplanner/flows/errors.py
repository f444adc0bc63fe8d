"""
Flow errors.

Validation and generation failures never reach the caller: they are turned
into an error Interaction and delivered like any other result. Only
UnsupportedFlowError and FlowStateError propagate, since both mean the
calling code (or the flow table) is wrong.
"""


class FlowError(Exception):
    """Base class for flow orchestration errors."""


class UnsupportedFlowError(FlowError):
    """Unknown flow identifier, or a flow whose steps never reach a terminal step."""

    def __init__(self, flow: object, reason: str = "unknown flow"):
        self.flow = flow
        self.reason = reason
        super().__init__(f"Unsupported flow {flow!r}: {reason}")


class FlowValidationError(FlowError):
    """The terminal step was reached without every required field in context."""

    def __init__(self, flow: object, missing: list[str]):
        self.flow = flow
        self.missing = missing
        super().__init__(f"Missing required fields for {flow}: {', '.join(missing)}")


class GenerationError(FlowError):
    """The generation operation raised. Carries the upstream message."""

    def __init__(self, flow: object, message: str):
        self.flow = flow
        self.message = message
        super().__init__(message)


class FlowStateError(FlowError):
    """The controller was asked to do something illegal in its current state."""


class StaleDispatchDiscard(FlowError):
    """
    A dispatch finished after its flow run was cancelled or superseded.

    Internal only: raised and caught inside the controller, never delivered.
    """

    def __init__(self, run_id: str):
        self.run_id = run_id
        super().__init__(f"Discarded result of superseded run {run_id}")
