"""Output stream contract.

Why Protocol:
- Commands only need "write this object"; whether it lands in a Rich table,
  a JSON document or a test list is the caller's business.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ResultWriter(Protocol):
    """Sink for command results.

    Rules:
    - `write(obj)` emits a single result object.
    - `write(items, enumerate=True)` emits each element of a collection as its
      own result.
    """

    def write(self, obj: Any, *, enumerate: bool = False) -> None:
        ...


class ListWriter:
    """Collects results in memory."""

    def __init__(self) -> None:
        self.results: list[Any] = []

    def write(self, obj: Any, *, enumerate: bool = False) -> None:
        if enumerate:
            self.results.extend(obj)
        else:
            self.results.append(obj)
