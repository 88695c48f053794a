"""Tests for the Flask API endpoints."""

from unittest.mock import MagicMock, patch

import pytest

from quoteprompts.app import create_app
from quoteprompts.easyquote import EasyQuoteError, EasyQuoteUnauthorized


@pytest.fixture
def client():
    """Create Flask test client."""
    app = create_app()
    app.config["TESTING"] = True
    with app.test_client() as test_client:
        yield test_client


class TestPromptsEndpoint:
    """Test POST /api/prompts."""

    def test_returns_canonical_prompts(self, client, easyquote_product):
        response = client.post("/api/prompts", json={"product": easyquote_product})
        assert response.status_code == 200
        prompts = response.json["prompts"]
        assert [p["id"] for p in prompts] == ["size", "width", "copies", "paper_color"]
        assert prompts[0]["type"] == "select"
        assert prompts[3]["hiddenWhen"] == {"field": "size", "equals": "custom"}

    def test_product_without_prompts(self, client):
        response = client.post("/api/prompts", json={"product": {"name": "Poster"}})
        assert response.status_code == 200
        assert response.json == {"prompts": []}

    def test_rejects_non_object_body(self, client):
        response = client.post("/api/prompts", data="not json", content_type="text/plain")
        assert response.status_code == 400
        assert "error" in response.json


class TestVisibleEndpoint:
    """Test POST /api/prompts/visible."""

    def test_visible_subset_with_defaults(self, client, easyquote_product):
        response = client.post(
            "/api/prompts/visible",
            json={"product": easyquote_product, "values": {"size": "custom"}},
        )
        assert response.status_code == 200
        assert [p["id"] for p in response.json["prompts"]] == ["size", "width", "copies"]
        assert response.json["values"]["copies"] == 100
        assert response.json["values"]["size"] == "custom"

    def test_accepts_stored_list_form(self, client, easyquote_product):
        values = [{"id": "size", "label": "Size", "value": "custom", "order": 1}]
        response = client.post("/api/prompts/visible", json={"product": easyquote_product, "values": values})
        assert response.status_code == 200
        assert "width" in [p["id"] for p in response.json["prompts"]]

    def test_rejects_bad_values(self, client, easyquote_product):
        response = client.post("/api/prompts/visible", json={"product": easyquote_product, "values": "size=A4"})
        assert response.status_code == 400


class TestPricingEndpoint:
    """Test POST /api/pricing with the EasyQuote client mocked."""

    @pytest.fixture
    def eq_client(self):
        mock = MagicMock()
        with patch("quoteprompts.api._get_client", return_value=mock) as factory:
            mock.factory = factory
            yield mock

    def test_prices_values(self, client, eq_client):
        eq_client.get_pricing.return_value = {
            "outputValues": [
                {"name": "Total", "type": "Price", "value": "80,00"},
                {"name": "Preview", "type": "Image", "value": "https://cdn.example.com/a.png"},
                {"name": "Sheets", "type": "Quantity", "value": "20"},
            ]
        }
        response = client.post(
            "/api/pricing",
            json={"productId": "p1", "values": {"copies": "500", "color": "#aabbcc"}},
            headers={"Authorization": "Bearer tok"},
        )

        assert response.status_code == 200
        eq_client.factory.assert_called_once_with("tok")
        eq_client.get_pricing.assert_called_once()
        product_id, inputs = eq_client.get_pricing.call_args.args
        assert product_id == "p1"
        # the JSON body may reach the view with its keys reordered
        assert sorted(inputs, key=lambda i: i["id"]) == [
            {"id": "color", "value": "AABBCC"},
            {"id": "copies", "value": 500},
        ]
        body = response.json
        assert body["price"]["value"] == "80,00"
        assert [o["name"] for o in body["images"]] == ["Preview"]
        assert [o["name"] for o in body["others"]] == ["Sheets"]

    def test_requires_product_id(self, client, eq_client):
        response = client.post("/api/pricing", json={"values": {}}, headers={"Authorization": "Bearer tok"})
        assert response.status_code == 400

    def test_requires_token(self, client, eq_client, monkeypatch):
        monkeypatch.setattr("quoteprompts.config.EASYQUOTE_TOKEN", None)
        response = client.post("/api/pricing", json={"productId": "p1"})
        assert response.status_code == 401

    def test_env_token_fallback(self, client, eq_client, monkeypatch):
        monkeypatch.setattr("quoteprompts.config.EASYQUOTE_TOKEN", "env-token")
        eq_client.get_pricing.return_value = {}
        response = client.post("/api/pricing", json={"productId": "p1"})
        assert response.status_code == 200
        eq_client.factory.assert_called_once_with("env-token")

    def test_unauthorized_upstream(self, client, eq_client):
        eq_client.get_pricing.side_effect = EasyQuoteUnauthorized()
        response = client.post("/api/pricing", json={"productId": "p1"}, headers={"Authorization": "Bearer x"})
        assert response.status_code == 401
        assert response.json["code"] == "EASYQUOTE_UNAUTHORIZED"

    def test_upstream_failure(self, client, eq_client):
        eq_client.get_pricing.side_effect = EasyQuoteError("boom", status=500)
        response = client.post("/api/pricing", json={"productId": "p1"}, headers={"Authorization": "Bearer x"})
        assert response.status_code == 502
        assert response.json["error"] == "boom"
