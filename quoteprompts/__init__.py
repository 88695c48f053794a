"""Prompt extraction and visibility rules for pricing engine products."""

__version__ = "0.1.0"

# Re-export main components for convenient imports
from quoteprompts.config import (
    FIELD_KEY_ALIASES,
    MAX_CONDITION_DEPTH,
    PROMPT_SOURCE_PATHS,
)
from quoteprompts.easyquote import EasyQuoteClient, EasyQuoteError, EasyQuoteUnauthorized
from quoteprompts.extractor import extract_prompts, find_prompt_source
from quoteprompts.models import Option, OutputSummary, PromptDef, QuantityRow
from quoteprompts.options import get_option_label, normalize_options
from quoteprompts.pricing import build_pricing_inputs, classify_outputs
from quoteprompts.selections import effective_values, selections_to_list
from quoteprompts.visibility import eval_condition, is_visible_prompt, match_value, visible_prompts

__all__ = [
    # Version
    "__version__",
    # Config
    "FIELD_KEY_ALIASES",
    "MAX_CONDITION_DEPTH",
    "PROMPT_SOURCE_PATHS",
    # Models
    "Option",
    "OutputSummary",
    "PromptDef",
    "QuantityRow",
    # Core functions
    "extract_prompts",
    "find_prompt_source",
    "normalize_options",
    "get_option_label",
    "eval_condition",
    "match_value",
    "is_visible_prompt",
    "visible_prompts",
    "effective_values",
    "selections_to_list",
    "build_pricing_inputs",
    "classify_outputs",
    # Pricing engine client
    "EasyQuoteClient",
    "EasyQuoteError",
    "EasyQuoteUnauthorized",
]
