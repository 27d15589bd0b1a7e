"""Error formatting for structured error logs."""

from __future__ import annotations
import json
from typing import Any, Dict, Optional


def format_error_block(
    error_type: str,
    operation: str,
    details: Dict[str, Any],
    remediation: Optional[str] = None,
) -> str:
    """Format a structured error block for the terminal."""
    from datetime import datetime, timezone

    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"

    lines = [
        "",
        "=" * 64,
        " QUIZ JUDGE ERROR",
        "=" * 64,
        f" Timestamp:    {timestamp}",
        f" Error Type:   {error_type}",
        f" Operation:    {operation}",
    ]

    lines.append("")
    lines.append(" ── DETAILS " + "─" * 52)
    lines.append(indent_json(details))

    if remediation:
        lines.append("")
        lines.append(" ── WHAT TO DO " + "─" * 49)
        lines.append(f" • {remediation}")

    lines.append("")
    lines.append("=" * 64)
    lines.append("")

    return "\n".join(lines)


def indent_json(data: Dict[str, Any], indent: int = 2) -> str:
    """Format JSON with indentation for error logs."""
    try:
        formatted = json.dumps(data, indent=indent, default=str)
        return "\n".join(" " + line for line in formatted.split("\n"))
    except (TypeError, ValueError):
        return f" {repr(data)}"
