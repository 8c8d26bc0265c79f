"""JSON export of command results.

Why JSON:
- Interoperability with scripts and pipelines.
- Keeps the remote property names (aliases) so output matches the service.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable

from pydantic import BaseModel


def to_jsonable(obj: Any) -> Any:
    """Dump a result with only the properties that were materialized."""

    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json", by_alias=True, exclude_unset=True)
    return obj


def dumps_results(results: Iterable[Any]) -> str:
    payload = [to_jsonable(item) for item in results]
    return json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True)


def export_results_json(*, results: Iterable[Any], output_path: Path) -> Path:
    """Export results to UTF-8 JSON with stable formatting."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(dumps_results(results) + "\n", encoding="utf-8")
    return output_path
