"""Helpers for safe debug logging.

AIDA64 system info documents can carry hundreds of sensor entries and the
endpoint may be pointed at anything on the LAN.  This module trims payloads
before they are emitted in DEBUG logs.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any


def truncate_for_log(value: Any, *, max_string: int = 512, max_items: int = 32, _depth: int = 0) -> Any:
    """Return a bounded copy of *value* suitable for debug logs."""
    if _depth > 8:
        return "<max-depth>"

    if value is None or isinstance(value, (int, float, bool)):
        return value

    if isinstance(value, str):
        if len(value) > max_string:
            return f"{value[:max_string]}…<truncated>"
        return value

    if isinstance(value, (bytes, bytearray)):
        return f"<bytes:{len(value)}b>"

    if isinstance(value, Mapping):
        trimmed: dict[str, Any] = {}
        for index, (k, v) in enumerate(value.items()):
            if index >= max_items:
                trimmed["…"] = f"<{len(value) - max_items} more keys>"
                break
            trimmed[str(k)] = truncate_for_log(v, max_string=max_string, max_items=max_items, _depth=_depth + 1)
        return trimmed

    if isinstance(value, Sequence):
        items = [
            truncate_for_log(v, max_string=max_string, max_items=max_items, _depth=_depth + 1)
            for v in list(value)[:max_items]
        ]
        if len(value) > max_items:
            items.append(f"<{len(value) - max_items} more items>")
        return items

    return repr(value)
