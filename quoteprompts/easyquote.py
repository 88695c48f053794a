"""Client for the EasyQuote pricing API."""

import json
from typing import Any, Dict, List, Mapping, Optional

import requests  # type: ignore[import-untyped]

from quoteprompts.config import EASYQUOTE_BASE_URL, HEADERS, REQUEST_TIMEOUT
from quoteprompts.extractor import extract_prompts
from quoteprompts.logging_config import get_logger, log_event
from quoteprompts.models import PromptDef
from quoteprompts.pricing import build_pricing_inputs

__all__ = [
    "EasyQuoteClient",
    "EasyQuoteError",
    "EasyQuoteUnauthorized",
    "create_session",
    "token_from_header",
]

logger = get_logger("easyquote")


class EasyQuoteError(Exception):
    """Raised when a call to the pricing engine fails."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class EasyQuoteUnauthorized(EasyQuoteError):
    """Raised when the pricing engine rejects the token (HTTP 401)."""

    def __init__(self, message: str = "EasyQuote session expired"):
        super().__init__(message, status=401)


def create_session() -> requests.Session:
    """Create a requests Session with the default JSON headers."""
    session = requests.Session()
    session.headers.update(HEADERS)
    return session


class EasyQuoteClient:
    """Thin wrapper around the EasyQuote REST endpoints.

    When constructed with credentials, a 401 triggers one re-authentication
    and the request is replayed once. Nothing else is retried.
    """

    def __init__(
        self,
        token: Optional[str] = None,
        email: Optional[str] = None,
        password: Optional[str] = None,
        base_url: str = EASYQUOTE_BASE_URL,
        timeout: int = REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.token = token
        self.email = email
        self.password = password
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or create_session()

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _send(
        self,
        method: str,
        path: str,
        body: Any = None,
        params: Optional[Dict[str, Any]] = None,
        authenticated: bool = True,
    ) -> requests.Response:
        headers = {}
        if authenticated:
            if not self.token:
                raise EasyQuoteUnauthorized("Missing EasyQuote token")
            headers["Authorization"] = f"Bearer {self.token}"
        try:
            return self.session.request(
                method,
                self._url(path),
                json=body,
                params=params,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout as e:
            logger.error(f"Timeout calling EasyQuote {method} {path}: {e}")
            raise EasyQuoteError(f"Timeout calling EasyQuote: {e}") from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Request error calling EasyQuote {method} {path}: {e}")
            raise EasyQuoteError(f"Failed to reach EasyQuote: {e}") from e

    @staticmethod
    def _decode(resp: requests.Response) -> Any:
        text = resp.text
        if not text:
            return {}
        try:
            return json.loads(text)
        except ValueError as e:
            logger.error(f"Invalid JSON from EasyQuote ({resp.status_code}): {text[:200]}")
            raise EasyQuoteError("Invalid response from EasyQuote", status=502) from e

    def _request(
        self,
        method: str,
        path: str,
        body: Any = None,
        params: Optional[Dict[str, Any]] = None,
        authenticated: bool = True,
    ) -> Any:
        resp = self._send(method, path, body=body, params=params, authenticated=authenticated)

        if resp.status_code == 401 and authenticated and self.email and self.password:
            logger.info("EasyQuote token rejected, re-authenticating")
            self.authenticate(self.email, self.password)
            resp = self._send(method, path, body=body, params=params)

        log_event(
            "easyquote_request",
            f"EasyQuote {method} {path} -> {resp.status_code}",
            logger_name="easyquote",
            method=method,
            path=path,
            status=resp.status_code,
        )

        if resp.status_code == 401:
            raise EasyQuoteUnauthorized()

        data = self._decode(resp)
        if not resp.ok:
            message = data.get("message") if isinstance(data, dict) else None
            logger.error(f"EasyQuote {method} {path} failed with {resp.status_code}: {message}")
            raise EasyQuoteError(message or f"EasyQuote {method} {resp.status_code}", status=resp.status_code)
        return data

    # ------------------------------------------------------------------
    # Endpoints
    # ------------------------------------------------------------------

    def authenticate(self, email: str, password: str) -> str:
        """Log in and store the returned bearer token."""
        data = self._request(
            "POST",
            "users/authenticate",
            body={"email": email, "password": password},
            authenticated=False,
        )
        token = data.get("token") if isinstance(data, dict) else None
        if not token:
            raise EasyQuoteError("Token not returned by EasyQuote", status=502)
        self.token = token
        self.email = email
        self.password = password
        return token

    def list_products(self, active_only: bool = True) -> List[Dict[str, Any]]:
        """Products of the account; inactive ones are filtered out by default."""
        params = {"isActive": "true"} if active_only else None
        data = self._request("GET", "products", params=params)
        if isinstance(data, dict):
            data = data.get("items") or data.get("data") or []
        products = data if isinstance(data, list) else []
        if active_only:
            products = [p for p in products if isinstance(p, dict) and p.get("isActive") is True]
        return products

    def get_pricing(
        self,
        product_id: str,
        inputs: Optional[List[Dict[str, Any]]] = None,
    ) -> Dict[str, Any]:
        """Price a product; with inputs the prompts are sent as a PATCH."""
        path = f"pricing/{product_id}"
        if inputs:
            data = self._request("PATCH", path, body=list(inputs))
        else:
            data = self._request("GET", path)
        return data if isinstance(data, dict) else {}

    def price_values(self, product_id: str, values: Mapping[str, Any]) -> Dict[str, Any]:
        """Price a product for a form value map."""
        return self.get_pricing(product_id, build_pricing_inputs(values))

    def get_product_prompts(
        self,
        product_id: str,
        values: Optional[Mapping[str, Any]] = None,
    ) -> List[PromptDef]:
        """Fetch pricing for a product and extract its prompt definitions."""
        pricing = self.price_values(product_id, values or {})
        return extract_prompts(pricing)


def token_from_header(header: Optional[str], fallback: Optional[str] = None) -> Optional[str]:
    """Extract a bearer token from an Authorization header value."""
    if header and header.lower().startswith("bearer "):
        token = header.split(" ", 1)[1].strip()
        if token:
            return token
    return fallback
