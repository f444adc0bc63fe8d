"""
Flow Context.

Accumulates the values collected across a flow's steps. Keys are never
removed while the flow lives; the whole context is dropped when the flow
ends or is cancelled.
"""

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType
from typing import Any


class FlowContext(Mapping[str, Any]):
    """
    Grow-only key/value store for one flow run.

    Reads go through the Mapping interface. `merge` is reserved for the
    FlowController, which is the single writer.
    """

    def __init__(self, initial: Mapping[str, Any] | None = None):
        self._values: dict[str, Any] = dict(initial or {})

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"FlowContext({self._values!r})"

    def merge(self, values: Mapping[str, Any]) -> None:
        """Merge submitted step output. Existing keys may be overwritten, never removed."""
        self._values.update(values)

    def subset(self, fields: Iterable[str]) -> dict[str, Any]:
        """Plain dict of the named fields (all must be present)."""
        return {name: self._values[name] for name in fields}

    def missing(self, fields: Iterable[str]) -> list[str]:
        return [name for name in fields if name not in self._values]

    def view(self) -> Mapping[str, Any]:
        """Read-only live view."""
        return MappingProxyType(self._values)

    def to_dict(self) -> dict[str, Any]:
        return dict(self._values)
