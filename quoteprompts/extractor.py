"""Extraction of canonical prompt definitions from raw product payloads."""

import logging
from typing import Any, List, Optional, Sequence, Tuple

from quoteprompts.config import FIELD_KEY_ALIASES, PROMPT_SOURCE_PATHS
from quoteprompts.field_types import infer_default, infer_step, infer_type
from quoteprompts.logging_config import get_logger, log_event
from quoteprompts.models import PromptDef
from quoteprompts.options import normalize_options
from quoteprompts.raw_utils import coerce_number, first_present, get_path, is_mapping, text_form

__all__ = [
    "extract_prompts",
    "find_prompt_source",
    "build_prompt",
]

logger = get_logger("extractor")


def find_prompt_source(
    product: Any,
    paths: Sequence[Tuple[str, ...]] = PROMPT_SOURCE_PATHS,
) -> Optional[Tuple[Tuple[str, ...], list]]:
    """Return ``(path, entries)`` for the first path holding a non-empty list.

    Later paths are ignored even when they are populated too.
    """
    for path in paths:
        candidate = get_path(product, path)
        if isinstance(candidate, list) and candidate:
            return path, candidate
    return None


def _alias(raw: Any, name: str) -> Any:
    return first_present(raw, FIELD_KEY_ALIASES[name])


def build_prompt(raw: Any, index: int) -> PromptDef:
    """Map one raw descriptor to a ``PromptDef`` with permissive fallbacks."""
    if not is_mapping(raw):
        raw = {}

    raw_id = _alias(raw, "id")
    prompt_id = text_form(raw_id) if raw_id is not None else f"field_{index}"

    label = _alias(raw, "label")
    raw_type = text_form(_alias(raw, "type") or "text").lower()

    options = normalize_options(_alias(raw, "options"))
    field_type = infer_type(raw_type, options)

    description = _alias(raw, "description")

    return PromptDef(
        id=prompt_id,
        label=text_form(label) if label is not None else prompt_id,
        type=field_type,
        options=options,
        min=coerce_number(_alias(raw, "min")),
        max=coerce_number(_alias(raw, "max")),
        step=infer_step(raw, raw_type, field_type),
        required=bool(_alias(raw, "required")),
        default=infer_default(raw, options, field_type),
        description=text_form(description) if description is not None else None,
        visibility=_alias(raw, "visibility"),
        hidden_when=_alias(raw, "hidden_when"),
    )


def extract_prompts(product: Any) -> List[PromptDef]:
    """Extract canonical prompt definitions from a product payload.

    An empty result means the product defines no configurable options; it is
    not an error. Malformed entries never abort extraction.
    """
    source = find_prompt_source(product)
    if source is None:
        logger.debug("No prompt source found on product payload")
        return []

    path, entries = source
    dotted = ".".join(path)
    log_event(
        "prompt_source",
        f"Using prompts from {dotted}",
        level=logging.DEBUG,
        logger_name="extractor",
        path=dotted,
        count=len(entries),
    )
    return [build_prompt(entry, i) for i, entry in enumerate(entries)]
