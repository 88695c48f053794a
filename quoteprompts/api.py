"""API endpoints for prompt extraction, visibility and pricing.

- ``POST /api/prompts``: canonical prompts of a product payload
- ``POST /api/prompts/visible``: visible prompts and effective values
- ``POST /api/pricing``: price a product for a value map via EasyQuote
"""

from typing import Any, Dict, Optional, Tuple, Union

from flask import Blueprint, Response, jsonify, request

from quoteprompts import config
from quoteprompts.easyquote import (
    EasyQuoteClient,
    EasyQuoteError,
    EasyQuoteUnauthorized,
    token_from_header,
)
from quoteprompts.extractor import extract_prompts
from quoteprompts.logging_config import get_logger
from quoteprompts.pricing import build_pricing_inputs, classify_outputs
from quoteprompts.selections import effective_values
from quoteprompts.visibility import visible_prompts

__all__ = ["api"]

logger = get_logger("api")

api = Blueprint("api", __name__, url_prefix="/api")

ApiResponse = Union[Tuple[Response, int], Response]


def _json_body() -> Optional[Dict[str, Any]]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else None


def _get_client(token: Optional[str]) -> EasyQuoteClient:
    return EasyQuoteClient(token=token)


@api.route("/prompts", methods=["POST"])
def prompts() -> ApiResponse:
    data = _json_body()
    if data is None:
        return jsonify({"error": "Request body must be a JSON object"}), 400

    extracted = extract_prompts(data.get("product"))
    return jsonify({"prompts": [p.to_dict() for p in extracted]})


@api.route("/prompts/visible", methods=["POST"])
def prompts_visible() -> ApiResponse:
    data = _json_body()
    if data is None:
        return jsonify({"error": "Request body must be a JSON object"}), 400

    values = data.get("values") or {}
    if not isinstance(values, (dict, list)):
        return jsonify({"error": "values must be an object or a list"}), 400

    extracted = extract_prompts(data.get("product"))
    current = effective_values(extracted, values)
    return jsonify({
        "prompts": [p.to_dict() for p in visible_prompts(extracted, current)],
        "values": current,
    })


@api.route("/pricing", methods=["POST"])
def pricing() -> ApiResponse:
    data = _json_body()
    if data is None:
        return jsonify({"error": "Request body must be a JSON object"}), 400

    product_id = data.get("productId")
    if not product_id:
        return jsonify({"error": "productId is required"}), 400

    values = data.get("values") or {}
    if not isinstance(values, dict):
        return jsonify({"error": "values must be an object"}), 400

    token = token_from_header(request.headers.get("Authorization"), config.EASYQUOTE_TOKEN)
    if not token:
        return jsonify({"error": "Missing EasyQuote token"}), 401

    inputs = build_pricing_inputs(values)
    try:
        result = _get_client(token).get_pricing(str(product_id), inputs)
    except EasyQuoteUnauthorized as e:
        return jsonify({"error": str(e), "code": "EASYQUOTE_UNAUTHORIZED"}), 401
    except EasyQuoteError as e:
        logger.error(f"Pricing failed for product {product_id}: {e}")
        return jsonify({"error": str(e)}), 502

    outputs = result.get("outputValues") or []
    summary = classify_outputs(outputs)
    return jsonify({
        "inputs": inputs,
        "outputs": outputs,
        "price": summary.price,
        "images": summary.images,
        "others": summary.others,
    })
