"""Shared fixtures for the quoteprompts test suite."""

import copy
import logging
from unittest.mock import MagicMock

import pytest


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers installed by setup_logging() so streams don't leak between tests."""
    yield
    logger = logging.getLogger("quoteprompts")
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def easyquote_product():
    """Pricing response shaped like the EasyQuote v1 API."""
    return {
        "id": "prod-flyer",
        "productName": "Flyers",
        "prompts": [
            {
                "id": "size",
                "promptText": "Size",
                "promptType": "DropDown",
                "valueOptions": [
                    {"value": "A5", "label": "A5 (148x210)"},
                    {"value": "A4", "label": "A4 (210x297)"},
                    {"value": "custom", "label": "Custom"},
                ],
                "currentValue": "A5",
                "valueRequired": True,
            },
            {
                "id": "width",
                "promptText": "Width (mm)",
                "promptType": "Number",
                "allowedDecimals": 1,
                "minimum": 50,
                "maximum": 500,
                "visibleWhen": "size=custom",
            },
            {
                "id": "copies",
                "promptText": "Copies",
                "promptType": "Integer",
                "currentValue": 100,
            },
            {
                "id": "paper_color",
                "promptText": "Paper colour",
                "valueOptions": ["FFFFFF", "#ffcc00", "rgb(10, 20, 30)"],
                "hiddenWhen": {"field": "size", "equals": "custom"},
            },
        ],
        "outputValues": [],
    }


@pytest.fixture
def product_copy(easyquote_product):
    """Deep copy used to check that extraction does not mutate input."""
    return copy.deepcopy(easyquote_product)


@pytest.fixture
def mock_session():
    """requests.Session stand-in; configure ``request.return_value`` per test."""
    return MagicMock()


def make_response(status_code=200, text="{}"):
    """Build a fake requests.Response."""
    resp = MagicMock()
    resp.status_code = status_code
    resp.ok = 200 <= status_code < 400
    resp.text = text
    return resp


@pytest.fixture
def response_factory():
    return make_response
