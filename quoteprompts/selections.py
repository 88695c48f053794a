"""Conversion between value maps and stored quote item selections.

Quote and order items store their prompt selections in one of three shapes:

- ``{"width": 100}``: plain value map
- ``{"width": {"label": "Width", "value": 100, "order": 2}}``: keyed records
- ``[{"id": "width", "label": "Width", "value": 100, "order": 2}]``: list

These helpers read any of them and write the list form used for snapshots.
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional

from quoteprompts.config import DEFAULT_SELECTION_ORDER
from quoteprompts.models import PromptDef
from quoteprompts.options import get_option_label
from quoteprompts.raw_utils import is_mapping, text_form
from quoteprompts.visibility import is_visible_prompt

__all__ = [
    "unwrap_values",
    "effective_values",
    "selections_to_list",
    "selections_from_list",
    "describe_selections",
    "is_empty_value",
]


def is_empty_value(value: Any) -> bool:
    return value is None or value == ""


def _is_record(value: Any) -> bool:
    return is_mapping(value) and "value" in value


def _as_keyed(stored: Any) -> Dict[str, Any]:
    if isinstance(stored, list):
        return selections_from_list(stored)
    if is_mapping(stored):
        return dict(stored)
    return {}


def unwrap_values(stored: Any) -> Dict[str, Any]:
    """Reduce stored selections in any shape to a plain value map."""
    return {
        key: (entry["value"] if _is_record(entry) else entry)
        for key, entry in _as_keyed(stored).items()
    }


def effective_values(prompts: Iterable[PromptDef], stored: Any) -> Dict[str, Any]:
    """Prompt defaults overlaid with whatever the user already selected."""
    values = {p.id: p.default for p in prompts}
    values.update(unwrap_values(stored))
    return values


def _order_of(entry: Any) -> Any:
    if _is_record(entry) and entry.get("order") is not None:
        return entry["order"]
    return DEFAULT_SELECTION_ORDER


def selections_to_list(
    stored: Any,
    prompts: Optional[Iterable[PromptDef]] = None,
) -> List[Dict[str, Any]]:
    """Flatten stored selections into ``[{id, label, value, order}]``.

    Entries without a value are dropped. The result is sorted by ``order``;
    entries that share an order keep their original sequence.
    """
    labels = {p.id: p.label for p in prompts or []}
    rows: List[Dict[str, Any]] = []
    for prompt_id, entry in _as_keyed(stored).items():
        value = entry["value"] if _is_record(entry) else entry
        if is_empty_value(value):
            continue
        label = entry.get("label") if _is_record(entry) else None
        rows.append({
            "id": prompt_id,
            "label": label or labels.get(prompt_id) or prompt_id,
            "value": value,
            "order": _order_of(entry),
        })

    def sort_key(row: Dict[str, Any]) -> float:
        try:
            return float(row["order"])
        except (TypeError, ValueError):
            return float(DEFAULT_SELECTION_ORDER)

    return sorted(rows, key=sort_key)


def selections_from_list(items: Any) -> Dict[str, Dict[str, Any]]:
    """Rebuild keyed records from the list form, skipping entries without an id."""
    result: Dict[str, Dict[str, Any]] = {}
    if not isinstance(items, list):
        return result
    for item in items:
        if not is_mapping(item) or not item.get("id"):
            continue
        prompt_id = text_form(item["id"])
        order = item.get("order")
        result[prompt_id] = {
            "label": item.get("label") or prompt_id,
            "value": item.get("value"),
            "order": DEFAULT_SELECTION_ORDER if order is None else order,
        }
    return result


def describe_selections(
    prompts: Iterable[PromptDef],
    values: Mapping[str, Any],
) -> List[Dict[str, Any]]:
    """Human-readable rows for the visible prompts that have a value.

    Used for quote snapshots and documents: ``display`` is the option label
    for choice prompts and the plain value otherwise.
    """
    prompts = list(prompts)
    current = effective_values(prompts, values)
    rows: List[Dict[str, Any]] = []
    for order, prompt in enumerate(prompts):
        value = current.get(prompt.id)
        if is_empty_value(value) or not is_visible_prompt(prompt, current):
            continue
        rows.append({
            "id": prompt.id,
            "label": prompt.label,
            "type": prompt.type,
            "value": value,
            "display": get_option_label(prompt.options, value),
            "order": order,
        })
    return rows
