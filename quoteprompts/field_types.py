"""Inference of canonical prompt types, numeric steps and defaults."""

from typing import Any, List, Optional

from quoteprompts.config import DEFAULT_KEYS
from quoteprompts.models import Option
from quoteprompts.options import is_color_value, normalize_hex
from quoteprompts.raw_utils import coerce_number, first_present, get_path, is_mapping

__all__ = [
    "infer_type",
    "infer_step",
    "infer_default",
    "implies_decimals",
]


def infer_type(raw_type: str, options: List[Option]) -> str:
    """Pick exactly one canonical type; the first matching rule wins.

    1. raw type mentions ``int`` -> integer
    2. raw type mentions ``number``, ``decimal`` or ``float`` -> number
    3. options present -> image if any option has an image, color if every
       option is a color, select otherwise
    4. text
    """
    raw_type = (raw_type or "").lower()
    if "int" in raw_type:
        return "integer"
    if "number" in raw_type or "decimal" in raw_type or "float" in raw_type:
        return "number"
    if options:
        if any(o.image_url for o in options):
            return "image"
        if all(o.color or is_color_value(o.value) for o in options):
            return "color"
        return "select"
    return "text"


def _allowed_decimals(raw: Any) -> Optional[int]:
    number = coerce_number(first_present(raw, ["allowedDecimals"]))
    if number is None:
        return None
    return int(number)


def implies_decimals(raw: Any, raw_type: str) -> bool:
    """Whether the raw descriptor asks for fractional input."""
    raw_type = (raw_type or "").lower()
    if "decimal" in raw_type or "float" in raw_type:
        return True
    if is_mapping(raw) and raw.get("decimals") is True:
        return True
    decimals = _allowed_decimals(raw)
    return decimals is not None and decimals > 0


def infer_step(raw: Any, raw_type: str, field_type: str) -> Optional[float]:
    """Numeric step for number inputs.

    An explicit ``step`` wins, then the precision given by
    ``allowedDecimals``; integers step by 1 and other decimal inputs by 0.01.
    """
    explicit = coerce_number(first_present(raw, ["step"]))
    if explicit is not None:
        return explicit

    decimals = _allowed_decimals(raw)
    if decimals is not None and decimals > 0:
        return 10.0 ** -decimals
    if field_type == "integer":
        return 1.0
    if implies_decimals(raw, raw_type):
        return 0.01
    return None


def _index_default(raw: Any, options: List[Option]) -> Any:
    index = coerce_number(first_present(raw, ["defaultIndex"]))
    if index is None or not index.is_integer():
        return None
    index = int(index)
    if 0 <= index < len(options):
        return options[index].value
    return None


def infer_default(raw: Any, options: List[Option], field_type: str) -> Any:
    """Default value: explicit keys first, then ``defaultIndex`` into options."""
    default = first_present(raw, DEFAULT_KEYS)
    if default is None:
        default = get_path(raw, ("defaultOption", "value"))
    if default is None:
        default = _index_default(raw, options)

    if field_type == "color":
        default = normalize_hex(default)
    return default
