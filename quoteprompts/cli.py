"""Command-line interface for inspecting product prompts."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

__all__ = ["main", "parse_args", "parse_value_args", "render_prompts"]

from quoteprompts.extractor import extract_prompts, find_prompt_source
from quoteprompts.logging_config import setup_logging
from quoteprompts.models import PromptDef
from quoteprompts.pricing import build_pricing_inputs
from quoteprompts.selections import effective_values
from quoteprompts.visibility import is_visible_prompt


def parse_value_args(pairs: Optional[List[str]]) -> Dict[str, str]:
    """Turn ``id=value`` arguments into a value map; later pairs win."""
    values: Dict[str, str] = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise ValueError(f"Expected id=value, got: {pair!r}")
        values[key.strip()] = value.strip()
    return values


def render_prompts(prompts: List[PromptDef], values: Dict[str, Any]) -> str:
    """Plain-text table of prompts with their current value and visibility."""
    lines = []
    for p in prompts:
        marker = " " if is_visible_prompt(p, values) else "-"
        required = "*" if p.required else ""
        current = values.get(p.id)
        line = f"{marker} {p.id:<20} {p.type:<8} {p.label}{required}"
        if current is not None and current != "":
            line += f" = {current}"
        lines.append(line)
        if p.options:
            labels = ", ".join(o.label for o in p.options[:8])
            more = f" (+{len(p.options) - 8})" if len(p.options) > 8 else ""
            lines.append(f"    options: {labels}{more}")
    return "\n".join(lines)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Extract configurable prompts from a pricing engine product payload",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # List the prompts of a product saved from the pricing API
  python -m quoteprompts.cli data/product.json

  # Evaluate visibility for some selections, hiding invisible prompts
  python -m quoteprompts.cli data/product.json --value size=A4 --value finish=gloss --visible-only

  # Print the pricing payload the selections would produce
  python -m quoteprompts.cli data/product.json --value copies=500 --pricing-payload
        """,
    )
    parser.add_argument("product", help="Path to a product JSON file ('-' reads stdin)")
    parser.add_argument(
        "--value",
        action="append",
        metavar="ID=VALUE",
        help="Current value of a prompt (repeatable)",
    )
    parser.add_argument(
        "--visible-only",
        action="store_true",
        help="Only show prompts visible for the given values",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output prompt definitions as JSON",
    )
    parser.add_argument(
        "--pricing-payload",
        action="store_true",
        help="Output the [{id, value}] pricing payload for the effective values",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


def _load_product(path: str) -> Any:
    if path == "-":
        return json.load(sys.stdin)
    with open(Path(path), "r", encoding="utf-8") as f:
        return json.load(f)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    args = parse_args(argv)
    setup_logging(level=logging.DEBUG if args.verbose else logging.WARNING, log_to_file=False)

    try:
        product = _load_product(args.product)
        selected = parse_value_args(args.value)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    prompts = extract_prompts(product)
    values = effective_values(prompts, selected)
    if args.visible_only:
        prompts = [p for p in prompts if is_visible_prompt(p, values)]

    if args.pricing_payload:
        print(json.dumps(build_pricing_inputs(values), indent=2, ensure_ascii=False))
        return 0

    if args.json:
        print(json.dumps([p.to_dict() for p in prompts], indent=2, ensure_ascii=False))
        return 0

    source = find_prompt_source(product)
    if source is None:
        print("This product defines no configurable options.")
        return 0

    print(f"Prompts from '{'.'.join(source[0])}' ({len(prompts)} shown)")
    print(render_prompts(prompts, values))
    return 0


if __name__ == "__main__":
    sys.exit(main())
