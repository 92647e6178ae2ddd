"""Normalization helpers.

Centralizes lenient parsing of event record fields. None of these helpers
raise on malformed input: a value that cannot be interpreted becomes ``None``
and the aggregation layer applies its per-field fallback.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

# Threshold to distinguish epoch seconds from epoch milliseconds.
_MS_THRESHOLD = 1e11


def finite_float(value: Any) -> float | None:
    """Parse *value* as a finite number.

    Accepts ints, floats and numeric strings. Booleans, empty strings,
    non-numeric text, NaN and infinities yield ``None``. Out-of-range
    values are returned unchanged.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str) and not value.strip():
        return None
    try:
        result = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(result):
        return None
    return result


def label_or_none(value: Any) -> str | None:
    """Return a category label, or ``None`` when the value carries none.

    Strings are kept verbatim (no stripping). Other truthy scalars are
    stringified. Falsy values (``None``, ``""``, ``0``, ``False``) and
    containers are not labels.
    """
    if not value:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (Mapping, list, tuple, set)):
        return None
    return str(value)


def _from_epoch(ts: float) -> datetime | None:
    if ts >= _MS_THRESHOLD:
        ts /= 1000.0
    try:
        return datetime.fromtimestamp(ts, tz=UTC)
    except (OverflowError, OSError, ValueError):
        return None


def parse_timestamp(value: Any) -> datetime | None:
    """Best-effort conversion of an event timestamp to an aware datetime.

    - ``datetime`` -> returned (naive values are assumed UTC)
    - epoch seconds or milliseconds (number or numeric string) -> UTC datetime
    - ISO-8601 text -> parsed datetime
    - anything else -> ``None``
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo is not None else value.replace(tzinfo=UTC)
    if isinstance(value, (int, float)):
        epoch = finite_float(value)
        return _from_epoch(epoch) if epoch is not None else None
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    epoch = finite_float(text)
    if epoch is not None:
        return _from_epoch(epoch)
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed
