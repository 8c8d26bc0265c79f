"""Command contract.

Design rules:
- A command receives its typed parameters and the session up front.
- `execute` is synchronous and writes zero, one or many results.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.interfaces.writer import ResultWriter


@runtime_checkable
class Command(Protocol):
    def execute(self, writer: ResultWriter) -> None:
        """Run the command once, emitting results through `writer`."""

        ...
