"""Taxonomy naming and field-projection rules.

Pure functions: no HTTP here, so both the adapters and the commands can share
them and tests can exercise them directly.
"""

from __future__ import annotations

import re
from typing import Any, Iterable, Sequence

DEFAULT_TERM_FIELDS: tuple[str, ...] = ("Name", "Id")

# Friendly field names -> remote property names.
TERM_FIELD_ALIASES: dict[str, str] = {
    "id": "id",
    "name": "labels",
    "labels": "labels",
    "description": "descriptions",
    "descriptions": "descriptions",
    "createddate": "createdDateTime",
    "lastmodifieddate": "lastModifiedDateTime",
    "customproperties": "properties",
    "properties": "properties",
}

_WHITESPACE_RUN = re.compile(r"\s+")


def normalize_term_name(name: str) -> str:
    """Normalize a label the way the term store stores it.

    Whitespace runs collapse to one space, `&` becomes U+FF06 and `"` becomes U+FF02.
    """

    collapsed = _WHITESPACE_RUN.sub(" ", name)
    return collapsed.replace("&", "＆").replace('"', "＂")


def resolve_term_properties(fields: Iterable[str] | None) -> list[str]:
    """Map friendly field names to remote properties, keeping `id` first.

    Unknown names are passed through verbatim so callers can reach properties
    that have no friendly alias.
    """

    requested = list(fields) if fields else list(DEFAULT_TERM_FIELDS)
    out: list[str] = ["id"]
    for field in requested:
        key = field.strip()
        if not key:
            continue
        prop = TERM_FIELD_ALIASES.get(key.lower(), key)
        if prop not in out:
            out.append(prop)
    return out


def project(payload: dict[str, Any], properties: Sequence[str]) -> dict[str, Any]:
    """Keep only `properties` of a remote payload (absent ones stay absent)."""

    return {key: payload[key] for key in properties if key in payload}


def label_matches(payload: dict[str, Any], normalized_name: str) -> bool:
    """True when any label of a term payload equals `normalized_name` (case-insensitive)."""

    wanted = normalized_name.casefold()
    labels = payload.get("labels")
    if not isinstance(labels, list):
        return False
    for label in labels:
        if not isinstance(label, dict):
            continue
        name = label.get("name")
        if isinstance(name, str) and normalize_term_name(name).casefold() == wanted:
            return True
    return False


def is_available(payload: dict[str, Any]) -> bool:
    """Terms are available unless the payload explicitly says otherwise."""

    return payload.get("isAvailableForTagging") is not False
