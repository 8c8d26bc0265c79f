"""Bindings: the caller-supplied identity of a remote entity.

A binding is a tagged variant over {handle, id, name}. Exactly one form is
carried per instance, and `resolve_binding` dispatches on the tag, so callers
never walk three nullable fields in sequence.

Parse order for raw values: materialized handle -> GUID -> name.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Generic, TypeVar

from pydantic import BaseModel

from core.domain.errors import BindingError

H = TypeVar("H", bound=BaseModel)
R = TypeVar("R")


class BindingKind(str, Enum):
    """Which form of identity a binding carries."""

    HANDLE = "handle"
    ID = "id"
    NAME = "name"


def parse_guid(value: str) -> str | None:
    """Canonical lowercase GUID for `value`, or None when it is not one."""

    try:
        return str(uuid.UUID(value.strip()))
    except (ValueError, AttributeError):
        return None


@dataclass(frozen=True)
class Binding(Generic[H]):
    kind: BindingKind
    value: H | str

    @classmethod
    def of_handle(cls, handle: H, expected: type[BaseModel] | None = None) -> "Binding[H]":
        if not isinstance(handle, BaseModel):
            raise BindingError(f"not a remote entity handle: {handle!r}")
        if expected is not None and not isinstance(handle, expected):
            raise BindingError(f"expected a {expected.__name__}, got a {type(handle).__name__}")
        return cls(BindingKind.HANDLE, handle)

    @classmethod
    def of_id(cls, value: str) -> "Binding[H]":
        guid = parse_guid(value)
        if guid is None:
            raise BindingError(f"not a valid identifier: {value!r}")
        return cls(BindingKind.ID, guid)

    @classmethod
    def of_name(cls, value: str) -> "Binding[H]":
        name = value.strip() if isinstance(value, str) else ""
        if not name:
            raise BindingError("name must not be empty")
        return cls(BindingKind.NAME, name)

    @classmethod
    def parse(cls, raw: "H | str | Binding[H]", expected: type[BaseModel] | None = None) -> "Binding[H]":
        """Build a binding from a loosely-typed value.

        `expected` restricts handles to one model type.
        """

        if isinstance(raw, Binding):
            if raw.kind is BindingKind.HANDLE and expected is not None:
                return cls.of_handle(raw.value, expected)  # type: ignore[arg-type]
            return raw
        if isinstance(raw, BaseModel):
            return cls.of_handle(raw, expected)
        if not isinstance(raw, str):
            raise BindingError(f"unsupported identity type: {type(raw).__name__}")
        if parse_guid(raw) is not None:
            return cls.of_id(raw)
        return cls.of_name(raw)

    def __str__(self) -> str:
        if self.kind is BindingKind.HANDLE:
            return f"{type(self.value).__name__}({getattr(self.value, 'id', '?')})"
        return f"{self.kind.value}={self.value}"


def resolve_binding(
    binding: Binding[H],
    *,
    by_handle: Callable[[H], R],
    by_id: Callable[[str], R],
    by_name: Callable[[str], R],
) -> R:
    """Resolve `binding` with the resolver matching its tag."""

    if binding.kind is BindingKind.HANDLE:
        return by_handle(binding.value)  # type: ignore[arg-type]
    if binding.kind is BindingKind.ID:
        return by_id(binding.value)  # type: ignore[arg-type]
    return by_name(binding.value)  # type: ignore[arg-type]
