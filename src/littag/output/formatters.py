"""Plain-text/JSON output helpers.

The CLI renders a ServiceResult for humans (key-value text) or machines
(--json). Rejections list every failed constraint on its own line.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from littag.services.result import ServiceResult


def _format_value(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return _json.dumps(value, separators=(",", ":"), default=repr)
    return str(value)


def _format_data_human(data: dict[str, Any]) -> str:
    """Format result data as indented key-value pairs."""
    lines: list[str] = []
    for key, value in data.items():
        if key == "items" and isinstance(value, list):
            lines.append(f"  {key}:")
            lines.extend(f"    - {_format_item(item)}" for item in value)
        else:
            lines.append(f"  {key}: {_format_value(value)}")
    return "\n".join(lines)


def _format_item(item: Any) -> str:
    if not isinstance(item, dict) or "id" not in item:
        return _format_value(item)
    extras = [f"{k}={_format_value(v)}" for k, v in item.items() if k != "id" and v]
    return " ".join([str(item["id"]), *extras])


def format_result(result: ServiceResult, *, json_output: bool = False) -> str:
    """Format a ServiceResult for display.

    Args:
        result: The service result to format.
        json_output: If True, return JSON; otherwise return human-readable text.
    """
    if json_output:
        return result.model_dump_json(indent=2)
    if result.ok:
        parts = [f"OK: {result.op}"]
        if result.data:
            parts.append(_format_data_human(result.data))
        return "\n".join(parts)

    if result.error is None:
        return f"ERROR: {result.op} - Unknown error"
    failures = result.error.detail.get("failures")
    if failures:
        lines = [f"REJECTED: {result.op}"]
        lines.extend(f"  {f['constraint']}: {f['reason']}" for f in failures)
        skipped = result.data.get("skipped") if result.data else None
        if skipped:
            lines.append(f"  skipped: {', '.join(skipped)}")
        return "\n".join(lines)
    return f"ERROR: {result.op} - {result.error.message}"
