"""Normalization of raw prompt option lists."""

import re
from typing import Any, List, Optional

from quoteprompts.config import OPTION_KEY_ALIASES
from quoteprompts.models import Option
from quoteprompts.raw_utils import first_present, is_mapping, text_form

__all__ = [
    "normalize_options",
    "normalize_option",
    "is_color_value",
    "is_image_url",
    "normalize_hex",
    "get_option_label",
]

HEX_COLOR_RE = re.compile(r"^#([0-9a-f]{3}|[0-9a-f]{6})$", re.IGNORECASE)
BARE_HEX_RE = re.compile(r"^[0-9a-f]{6}$", re.IGNORECASE)
CSS_COLOR_FUNC_RE = re.compile(r"^(rgb|hsl)\(", re.IGNORECASE)
IMAGE_URL_RE = re.compile(
    r"^https?://.+\.(?:png|jpe?g|gif|webp|svg)(?:\?.*)?$",
    re.IGNORECASE,
)


def is_color_value(value: Any) -> bool:
    """True for ``#rgb``, ``#rrggbb`` and ``rgb(...)``/``hsl(...)`` strings."""
    if not isinstance(value, str):
        return False
    return bool(HEX_COLOR_RE.match(value) or CSS_COLOR_FUNC_RE.match(value))


def is_image_url(value: Any) -> bool:
    return isinstance(value, str) and bool(IMAGE_URL_RE.match(value))


def normalize_hex(value: Any) -> Any:
    """Turn six bare hex digits into ``#RRGGBB``; other values pass through."""
    if isinstance(value, str) and BARE_HEX_RE.match(value):
        return f"#{value.upper()}"
    return value


def _label_from_image_url(url: str) -> str:
    file_name = url.split("?")[0].rstrip("/").split("/")[-1] or url
    base = file_name.split(".")[0] or file_name
    return re.sub(r"[_-]+", " ", base)


def _option_from_string(text: str) -> Option:
    if is_image_url(text):
        return Option(value=text, label=_label_from_image_url(text), image_url=text)
    if BARE_HEX_RE.match(text):
        color = normalize_hex(text)
        return Option(value=color, label=color, color=color)
    if is_color_value(text):
        return Option(value=text, label=text, color=text)
    return Option(value=text, label=text)


def _option_from_mapping(raw: Any) -> Option:
    raw_value = first_present(raw, OPTION_KEY_ALIASES["value"])
    value = text_form(raw_value) if raw_value is not None else text_form(raw)
    label = first_present(raw, OPTION_KEY_ALIASES["label"])

    image_url = first_present(raw, OPTION_KEY_ALIASES["image_url"])
    if image_url is None and is_image_url(raw.get("url")):
        image_url = raw["url"]

    color: Optional[str] = first_present(raw, OPTION_KEY_ALIASES["color"])
    if BARE_HEX_RE.match(value):
        value = normalize_hex(value)
        if color is None:
            color = value
    elif color is None and is_color_value(value):
        color = value

    return Option(
        value=value,
        label=text_form(label) if label is not None else value,
        color=color,
        image_url=image_url,
    )


def normalize_option(raw: Any) -> Option:
    """Normalize one raw option entry; never raises."""
    if isinstance(raw, str):
        return _option_from_string(raw)
    if is_mapping(raw):
        return _option_from_mapping(raw)
    text = text_form(raw)
    return Option(value=text, label=text)


def normalize_options(raw: Any) -> List[Option]:
    """Convert a heterogeneous raw option list into ``Option`` objects.

    Accepts strings, numbers and mappings with varying key names. Input order
    is preserved and nothing is dropped or de-duplicated, so the result has
    exactly as many entries as the input. Anything that is not a list or
    tuple yields an empty list.
    """
    if not isinstance(raw, (list, tuple)):
        return []
    return [normalize_option(entry) for entry in raw]


def get_option_label(options: Optional[List[Option]], value: Any) -> Optional[str]:
    """Label of the option matching ``value``, falling back to the value itself."""
    if value is None:
        return None
    text = text_form(value)
    for option in options or []:
        if option.value == text:
            return option.label
    return text
