"""Helpers for reading untyped JSON payloads from the pricing engine."""

import math
from typing import Any, Iterable, Mapping, Optional, Sequence

__all__ = [
    "first_present",
    "get_path",
    "text_form",
    "coerce_number",
    "is_mapping",
]


def is_mapping(value: Any) -> bool:
    return isinstance(value, Mapping)


def first_present(raw: Any, keys: Iterable[str], default: Any = None) -> Any:
    """Return the value of the first key in ``keys`` that is set and not None.

    Falsy values such as ``0``, ``""`` or ``False`` count as present; only a
    missing key or an explicit ``None`` moves on to the next candidate.
    """
    if not is_mapping(raw):
        return default
    for key in keys:
        value = raw.get(key)
        if value is not None:
            return value
    return default


def get_path(raw: Any, path: Sequence[str]) -> Any:
    """Walk nested mappings along ``path``; None when any step is missing."""
    current = raw
    for key in path:
        if not is_mapping(current):
            return None
        current = current.get(key)
    return current


def text_form(value: Any) -> str:
    """String form used for value comparisons.

    None renders as an empty string, booleans as ``true``/``false`` and
    integral floats without a trailing ``.0`` so that ``1``, ``1.0`` and
    ``"1"`` all compare equal.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    return str(value)


def coerce_number(value: Any) -> Optional[float]:
    """Convert to a finite float, or None when that is not possible."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number
