"""Configuration and constants for prompt extraction and pricing."""

import os
from pathlib import Path
from typing import Dict, List, Tuple

from dotenv import load_dotenv

__all__ = [
    "PROMPT_SOURCE_PATHS",
    "FIELD_KEY_ALIASES",
    "OPTION_KEY_ALIASES",
    "DEFAULT_KEYS",
    "FIELD_TYPES",
    "MAX_CONDITION_DEPTH",
    "DEFAULT_SELECTION_ORDER",
    "EASYQUOTE_BASE_URL",
    "EASYQUOTE_TOKEN",
    "HEADERS",
    "REQUEST_TIMEOUT",
    "FLASK_HOST",
    "FLASK_PORT",
    "FLASK_DEBUG",
]

# Environment overrides come from the process or a project-level .env file
load_dotenv(dotenv_path=Path(__file__).parent.parent / ".env")


# =============================================================================
# Prompt Extraction Registries
# =============================================================================
# Product payloads from the pricing engine changed shape across API versions.
# Each entry is a path of nested keys; the first one holding a non-empty list
# is used as the prompt source.

PROMPT_SOURCE_PATHS: List[Tuple[str, ...]] = [
    ("prompts",),
    ("inputs",),
    ("fields",),
    ("parameters",),
    ("config", "prompts"),
    ("schema", "prompts"),
    ("pricing", "prompts"),
    ("pricing", "inputs"),
    ("form", "fields"),
    ("form", "prompts"),
    ("options",),
    ("choices",),
    ("data", "prompts"),
    ("request", "fields"),
]

# Canonical attribute -> raw key candidates, in precedence order
FIELD_KEY_ALIASES: Dict[str, List[str]] = {
    "id": ["id", "key", "code", "slug", "name"],
    "label": [
        "promptText",
        "label",
        "title",
        "promptName",
        "displayName",
        "text",
        "caption",
        "name",
    ],
    "type": ["promptType", "type", "inputType", "kind", "uiType"],
    "options": ["valueOptions", "options", "choices", "values", "items", "optionsList"],
    "required": ["required", "mandatory", "valueRequired"],
    "description": ["description", "helpText", "help"],
    "min": ["min", "minimum"],
    "max": ["max", "maximum"],
    "visibility": ["visibility", "visibleWhen", "showIf", "when", "condition", "conditions"],
    "hidden_when": ["hiddenWhen", "hideIf"],
}

OPTION_KEY_ALIASES: Dict[str, List[str]] = {
    "value": ["value", "id", "key", "name"],
    "label": ["label", "title", "name"],
    "image_url": ["imageUrl", "image", "thumbnail"],
    "color": ["color"],
}

# Explicit default value keys; defaultIndex is resolved after these
DEFAULT_KEYS: List[str] = ["currentValue", "default", "defaultValue", "initial", "value"]

FIELD_TYPES = ("number", "integer", "text", "select", "image", "color")

# Conditions are static data, but a cap keeps pathological nesting bounded
MAX_CONDITION_DEPTH = 20

# Order assigned to stored selections that carry none
DEFAULT_SELECTION_ORDER = 999


# =============================================================================
# EasyQuote API
# =============================================================================

EASYQUOTE_BASE_URL = os.getenv("EASYQUOTE_BASE_URL", "https://api.easyquote.cloud/api/v1")
EASYQUOTE_TOKEN = os.getenv("EASYQUOTE_TOKEN")

HEADERS = {
    "Accept": "application/json",
    "User-Agent": "quoteprompts/0.1",
}

REQUEST_TIMEOUT = int(os.getenv("EASYQUOTE_TIMEOUT", "15"))


# =============================================================================
# Flask
# =============================================================================

FLASK_HOST = os.getenv("FLASK_HOST", "0.0.0.0")
FLASK_PORT = int(os.getenv("FLASK_PORT", os.getenv("PORT", "5000")))
FLASK_DEBUG = os.getenv("FLASK_DEBUG", "False").lower() == "true"
