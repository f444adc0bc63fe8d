"""
Generator Dispatch Table.

Maps each flow to the async operation that produces its result, the context
fields that operation receives, and the content kind of what it returns.
Adding a flow is a `register` call, not a new branch.
"""

import logging
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from typing import Any

from nutriplanner.flows.context import FlowContext
from nutriplanner.flows.errors import FlowValidationError, GenerationError, UnsupportedFlowError
from nutriplanner.flows.resolver import coerce_flow
from nutriplanner.flows.table import FlowIdentifier

logger = logging.getLogger(__name__)

AsyncOperation = Callable[..., Awaitable[Any]]


@dataclass(frozen=True)
class GeneratorEntry:
    """What to call for a flow, with which fields, and how to label the result."""

    required_fields: tuple[str, ...]
    operation: AsyncOperation
    content_kind: str
    # Passed along when the context has them (e.g. a seeded household)
    optional_fields: tuple[str, ...] = ()

    @property
    def name(self) -> str:
        return getattr(self.operation, "__name__", repr(self.operation))


class GeneratorDispatchTable:
    """Flow -> generator lookup with a required-field check before each call."""

    def __init__(self) -> None:
        self._entries: dict[FlowIdentifier, GeneratorEntry] = {}

    def register(
        self,
        flow: FlowIdentifier | str,
        required_fields: Iterable[str],
        operation: AsyncOperation,
        content_kind: str,
        optional_fields: Iterable[str] = (),
    ) -> None:
        flow_id = coerce_flow(flow)
        self._entries[flow_id] = GeneratorEntry(
            required_fields=tuple(required_fields),
            operation=operation,
            content_kind=content_kind,
            optional_fields=tuple(optional_fields),
        )

    def entry(self, flow: FlowIdentifier | str) -> GeneratorEntry:
        flow_id = coerce_flow(flow)
        try:
            return self._entries[flow_id]
        except KeyError:
            raise UnsupportedFlowError(flow_id, "no generator registered") from None

    def flows(self) -> list[FlowIdentifier]:
        return list(self._entries)

    def __contains__(self, flow: object) -> bool:
        return flow in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    async def dispatch(self, flow: FlowIdentifier | str, context: FlowContext) -> Any:
        """
        Invoke the flow's generator with its required fields, plus any
        optional fields the context happens to hold.

        No retry: a failure is wrapped once and returned to the caller.

        Raises:
            UnsupportedFlowError: no generator registered for the flow
            FlowValidationError: a required field is missing from context
            GenerationError: the generator raised
        """
        entry = self.entry(flow)
        flow_id = coerce_flow(flow)

        missing = context.missing(entry.required_fields)
        if missing:
            raise FlowValidationError(flow_id, missing)

        kwargs = context.subset(entry.required_fields)
        kwargs.update(
            (name, context[name]) for name in entry.optional_fields if name in context
        )
        logger.info(f"Dispatching {flow_id.value} -> {entry.name}({', '.join(kwargs)})")

        try:
            return await entry.operation(**kwargs)
        except Exception as e:
            raise GenerationError(flow_id, str(e)) from e
