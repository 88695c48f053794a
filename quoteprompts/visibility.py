"""Evaluation of declarative prompt visibility conditions.

Conditions come in several shapes:

- ``"size=L && color=red"``: string shorthand, clauses ANDed
- ``{"field": "size", "equals": "L"}``: single comparison (``id``/``key``
  and ``value``/``is`` are accepted as well)
- ``{"allOf": [...]}`` / ``{"anyOf": [...]}``: AND / OR of nested conditions
- ``{"size": "L", "color": "red"}``: AND of equality checks
- ``[cond, cond]``: AND of nested conditions

Evaluation never raises. Anything unrecognized counts as satisfied, so a
malformed condition leaves a prompt visible.
"""

from typing import Any, Iterable, List, Mapping

from quoteprompts.config import MAX_CONDITION_DEPTH
from quoteprompts.logging_config import get_logger
from quoteprompts.models import PromptDef
from quoteprompts.raw_utils import first_present, is_mapping, text_form

__all__ = [
    "match_value",
    "eval_condition",
    "is_visible_prompt",
    "visible_prompts",
]

logger = get_logger("visibility")


def match_value(current: Any, expected: Any) -> bool:
    """Compare a current value against an expected one.

    Lists mean membership, booleans compare truthiness and everything else
    compares string forms.
    """
    if isinstance(expected, (list, tuple)):
        return text_form(current) in [text_form(e) for e in expected]
    if isinstance(expected, bool):
        return bool(current) == expected
    return text_form(current) == text_form(expected)


def _eval_shorthand(condition: str, values: Mapping[str, Any]) -> bool:
    for clause in condition.split("&&"):
        # Split on the first "=" only, so "url=a=b" expects "a=b" rather than "a"
        key, _, expected = clause.partition("=")
        key = key.strip()
        if not key:
            continue
        if not match_value(values.get(key), expected.strip()):
            return False
    return True


def _eval_all(conditions: Iterable[Any], values: Mapping[str, Any], depth: int) -> bool:
    return all(eval_condition(c, values, depth + 1) for c in conditions)


def eval_condition(condition: Any, values: Mapping[str, Any], depth: int = 0) -> bool:
    """Evaluate a visibility condition against the current value map."""
    if not condition:
        return True
    if depth > MAX_CONDITION_DEPTH:
        logger.warning(f"Condition nesting exceeds {MAX_CONDITION_DEPTH} levels, treating as satisfied")
        return True
    if values is None:
        values = {}

    if isinstance(condition, (list, tuple)):
        return _eval_all(condition, values, depth)

    if isinstance(condition, str):
        return _eval_shorthand(condition, values)

    if is_mapping(condition):
        all_of = condition.get("allOf")
        if isinstance(all_of, list):
            return _eval_all(all_of, values, depth)
        any_of = condition.get("anyOf")
        if isinstance(any_of, list):
            return any(eval_condition(c, values, depth + 1) for c in any_of)

        field = first_present(condition, ["field", "id", "key"])
        if field:
            expected = first_present(condition, ["equals", "value", "is"])
            return match_value(values.get(text_form(field)), expected)

        return all(match_value(values.get(k), v) for k, v in condition.items())

    return True


def _is_set(condition: Any) -> bool:
    # Empty mappings and lists still count as declared conditions
    if isinstance(condition, (list, tuple)) or is_mapping(condition):
        return True
    return bool(condition)


def _conditions_of(prompt: Any):
    if isinstance(prompt, PromptDef):
        return prompt.visibility, prompt.hidden_when
    if is_mapping(prompt):
        hidden = first_present(prompt, ["hiddenWhen", "hidden_when"])
        return prompt.get("visibility"), hidden
    return None, None


def is_visible_prompt(prompt: Any, values: Mapping[str, Any]) -> bool:
    """Whether a prompt should be shown for the given values.

    ``hidden_when`` and ``visibility`` are checked independently: a satisfied
    ``hidden_when`` hides the prompt even if ``visibility`` also holds.
    A declared but empty ``hidden_when`` (``{}`` or ``[]``) evaluates true and
    hides the prompt.
    """
    visibility, hidden_when = _conditions_of(prompt)
    if _is_set(hidden_when) and eval_condition(hidden_when, values):
        return False
    if _is_set(visibility) and not eval_condition(visibility, values):
        return False
    return True


def visible_prompts(prompts: Iterable[PromptDef], values: Mapping[str, Any]) -> List[PromptDef]:
    return [p for p in prompts if is_visible_prompt(p, values)]
