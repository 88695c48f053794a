"""Pricing request payloads and pricing engine output handling."""

import re
from typing import Any, Dict, Iterable, List, Mapping, Optional

from quoteprompts.models import OutputSummary, QuantityRow
from quoteprompts.raw_utils import coerce_number, is_mapping, text_form

__all__ = [
    "normalize_pricing_value",
    "build_pricing_inputs",
    "replace_quantity",
    "parse_amount",
    "parse_quantities",
    "classify_outputs",
    "find_price_output",
    "numeric_prompts",
    "quantity_rows",
]

HEX_WITH_HASH_RE = re.compile(r"^#[0-9a-f]{6}$", re.IGNORECASE)
NUMERIC_TEXT_RE = re.compile(r"^-?\d+([.,]\d+)?$")
URL_RE = re.compile(r"^https?://", re.IGNORECASE)

NOT_AVAILABLE = {"", "#N/A"}


def _to_number(number: float) -> Any:
    return int(number) if number.is_integer() else number


def normalize_pricing_value(value: Any) -> Any:
    """Convert a form value to what the pricing engine expects.

    Returns None for empty values, which callers leave out of the payload.
    Colors lose their ``#`` and numeric text becomes a number.
    """
    if value is None:
        return None
    if not isinstance(value, str):
        return value

    text = value.strip()
    if text == "":
        return None
    if HEX_WITH_HASH_RE.match(text):
        return text[1:].upper()
    if NUMERIC_TEXT_RE.match(text):
        return _to_number(float(text.replace(",", ".")))
    return text


def build_pricing_inputs(values: Mapping[str, Any]) -> List[Dict[str, Any]]:
    """Serialize a value map into the ``[{id, value}]`` pricing payload."""
    inputs: List[Dict[str, Any]] = []
    for prompt_id, value in (values or {}).items():
        normalized = normalize_pricing_value(value)
        if normalized is None:
            continue
        inputs.append({"id": prompt_id, "value": normalized})
    return inputs


def replace_quantity(
    inputs: Iterable[Dict[str, Any]],
    prompt_id: str,
    qty: Any,
) -> List[Dict[str, Any]]:
    """Payload with the quantity prompt replaced by ``qty`` (appended last)."""
    replaced = [dict(item) for item in inputs if item.get("id") != prompt_id]
    replaced.append({"id": prompt_id, "value": qty})
    return replaced


def parse_amount(value: Any) -> Optional[float]:
    """Parse a price as sent by the engine, e.g. ``1.234,56`` or ``12.5``.

    Strings are read in Spanish format: dots group thousands and the comma is
    the decimal separator.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return coerce_number(value)
    if not isinstance(value, str):
        return None
    text = value.strip().replace("€", "").strip()
    if "," in text:
        text = text.replace(".", "").replace(",", ".")
    return coerce_number(text)


def parse_quantities(texts: Iterable[Any]) -> List[float]:
    """Parse the quantity column of a multi-quantity table, skipping blanks."""
    quantities: List[float] = []
    for text in texts:
        raw = text_form(text).strip()
        if not raw:
            continue
        number = coerce_number(raw.replace(".", "").replace(",", "."))
        if number is not None:
            quantities.append(number)
    return quantities


def _type_of(output: Any) -> str:
    return text_form(output.get("type")).lower() if is_mapping(output) else ""


def _name_of(output: Any) -> str:
    return text_form(output.get("name")).lower() if is_mapping(output) else ""


def _value_of(output: Any) -> str:
    return text_form(output.get("value")) if is_mapping(output) else ""


def classify_outputs(outputs: Any) -> OutputSummary:
    """Split pricing outputs into the price, image links and other values.

    Image-like outputs and unavailable values (blank or ``#N/A``) are left
    out of ``others``.
    """
    if not isinstance(outputs, list):
        return OutputSummary()

    entries = [o for o in outputs if is_mapping(o)]
    price = next((o for o in entries if _type_of(o) == "price"), None)
    images = [o for o in entries if URL_RE.match(_value_of(o))]
    others = [
        o
        for o in entries
        if o is not price
        and "image" not in _type_of(o)
        and "image" not in _name_of(o)
        and _value_of(o) not in NOT_AVAILABLE
    ]
    return OutputSummary(price=price, images=images, others=others)


def find_price_output(outputs: Any) -> Optional[Dict[str, Any]]:
    """Price output of a response, also matching outputs named price/precio."""
    if not isinstance(outputs, list):
        return None
    for output in outputs:
        if not is_mapping(output):
            continue
        name = _name_of(output)
        if _type_of(output) == "price" or "precio" in name or "price" in name:
            return output
    return None


def numeric_prompts(pricing: Any) -> List[Dict[str, str]]:
    """Prompts of a pricing response that can drive a multi-quantity table.

    These are prompts without value options whose type is numeric or whose
    current value is a number.
    """
    raw_prompts = pricing.get("prompts") if is_mapping(pricing) else None
    if not isinstance(raw_prompts, list):
        return []

    result: List[Dict[str, str]] = []
    for prompt in raw_prompts:
        if not is_mapping(prompt):
            continue
        value_options = prompt.get("valueOptions")
        if isinstance(value_options, list) and value_options:
            continue
        prompt_type = text_form(prompt.get("promptType")).lower()
        current = prompt.get("currentValue")
        if current is None:
            current = prompt.get("default")
        if current is None:
            current = prompt.get("value")
        is_number = isinstance(current, (int, float)) and not isinstance(current, bool)
        if "number" in prompt_type or is_number:
            prompt_id = text_form(prompt.get("id"))
            label = prompt.get("promptText") or prompt.get("name") or prompt_id
            result.append({"id": prompt_id, "label": text_form(label)})
    return result


def quantity_rows(results: Iterable[Mapping[str, Any]]) -> List[QuantityRow]:
    """Build table rows from ``[{qty, data}]`` pricing results.

    ``unit`` is the total divided by the quantity, or None when either is
    unusable.
    """
    rows: List[QuantityRow] = []
    for result in results:
        qty = result.get("qty")
        data = result.get("data")
        outputs = data.get("outputValues") if is_mapping(data) else None
        outputs = outputs if isinstance(outputs, list) else []

        price = find_price_output(outputs)
        total = price.get("value") if price else ""
        total_number = parse_amount(total)
        unit = None
        if total_number is not None and isinstance(qty, (int, float)) and qty > 0:
            unit = total_number / qty
        rows.append(QuantityRow(qty=qty, outputs=outputs, total=total, unit=unit))
    return rows
