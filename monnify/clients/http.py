"""
Authenticated HTTP client for the Monnify REST API.

Every response passes through one classification step:

* a body without the ``requestSuccessful``/``responseMessage``/``responseCode``
  envelope is a :class:`ProtocolException` (wrong route, proxy page, ...);
* a status in :data:`FALL_THROUGH_STATUS_CODES` is returned as data so callers
  can inspect ``requestSuccessful`` themselves;
* any other status >= 400 raises :class:`MonnifyException`;
* everything else is returned as the parsed envelope.
"""

from __future__ import annotations

import base64
import logging
import threading
from typing import Any, Dict, Mapping, Optional, Tuple

import httpx

from monnify.clients.token_store import TokenStore, build_token_store
from monnify.core.config import MonnifySettings
from monnify.core.errors import AuthenticationError, MonnifyException, ProtocolException
from monnify.models.token import TokenGrant

logger = logging.getLogger(__name__)

AUTH_ENDPOINT = "/api/v1/auth/login"
FALL_THROUGH_STATUS_CODES = frozenset({404})
ENVELOPE_KEYS = ("requestSuccessful", "responseMessage", "responseCode")

_DEFAULT_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


def _error_details(payload: Any, status_code: int) -> Tuple[str, str]:
    """Pick the most descriptive message and machine code from an error body."""
    body = payload if isinstance(payload, Mapping) else {}
    message = (
        body.get("error_description")
        or body.get("error")
        or body.get("responseMessage")
        or f"Request failed with status {status_code}"
    )
    error_code = body.get("responseCode") or f"HTTP_{status_code}"
    return str(message), str(error_code)


def _is_envelope(payload: Any) -> bool:
    return isinstance(payload, Mapping) and all(key in payload for key in ENVELOPE_KEYS)


def _is_oauth_error(payload: Any) -> bool:
    return isinstance(payload, Mapping) and "error" in payload


class HttpClient:
    """Send requests to Monnify, injecting the bearer token from the token store."""

    def __init__(
        self,
        settings: MonnifySettings,
        token_store: Optional[TokenStore] = None,
        *,
        http_client: Optional[httpx.Client] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._settings = settings
        self._token_store = token_store
        self._store_lock = threading.Lock()
        self._http = http_client or httpx.Client(
            base_url=settings.base_url,
            timeout=float(settings.timeout),
            verify=settings.verify_ssl,
            headers=_DEFAULT_HEADERS,
            transport=transport,
        )

    @property
    def settings(self) -> MonnifySettings:
        return self._settings

    @property
    def token_store(self) -> TokenStore:
        """The shared token store, created on first use when none was supplied."""
        if self._token_store is None:
            with self._store_lock:
                if self._token_store is None:
                    self._token_store = build_token_store(self._settings)
        return self._token_store

    def get(
        self,
        path: str,
        query: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Dict[str, Any]:
        return self.request("GET", path, headers=headers, query=query)

    def post(
        self,
        path: str,
        body: Optional[Any] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Dict[str, Any]:
        return self.request("POST", path, body=body, headers=headers)

    def put(
        self,
        path: str,
        body: Optional[Any] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Dict[str, Any]:
        return self.request("PUT", path, body=body, headers=headers)

    def delete(self, path: str, headers: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
        return self.request("DELETE", path, headers=headers)

    def request(
        self,
        method: str,
        path: str,
        body: Optional[Any] = None,
        headers: Optional[Mapping[str, str]] = None,
        query: Optional[Mapping[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Send a request and return the parsed envelope, or raise a typed error."""
        request_headers = dict(headers or {})
        if self._requires_auth(path):
            token = self.token_store.get_token(self.authenticate)
            request_headers["Authorization"] = f"Bearer {token}"

        params = {key: value for key, value in (query or {}).items() if value is not None}
        try:
            response = self._http.request(
                method,
                path,
                json=body,
                params=params or None,
                headers=request_headers,
            )
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise MonnifyException(f"HTTP request failed: {exc}", 0) from exc

        logger.debug("%s %s -> %s", method, path, response.status_code)
        payload = self._decode(response)
        return self._classify(payload, response.status_code)

    def authenticate(self) -> TokenGrant:
        """Exchange the API and secret keys for a bearer token."""
        raw = f"{self._settings.api_key}:{self._settings.secret_key}".encode("utf-8")
        credentials = base64.b64encode(raw).decode("ascii")

        try:
            response = self._http.post(
                AUTH_ENDPOINT,
                headers={"Authorization": f"Basic {credentials}"},
            )
        except httpx.HTTPError as exc:
            raise AuthenticationError(f"Authentication request failed: {exc}") from exc

        try:
            payload = self._decode(response)
        except MonnifyException as exc:
            raise AuthenticationError(exc.message, exc.code) from exc

        if response.status_code >= 400:
            message, _ = _error_details(payload, response.status_code)
            raise AuthenticationError(message, response.status_code)

        body = payload.get("responseBody") if isinstance(payload, Mapping) else None
        nested = body if isinstance(body, Mapping) else {}
        top = payload if isinstance(payload, Mapping) else {}
        token = nested.get("accessToken") or top.get("accessToken")
        if not token:
            raise AuthenticationError("Failed to obtain access token from response")

        expires_in = nested.get("expiresIn", top.get("expiresIn"))
        logger.info("Obtained Monnify access token")
        return TokenGrant.coerce({"token": token, "expiresIn": expires_in})

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    @staticmethod
    def _requires_auth(path: str) -> bool:
        return path != AUTH_ENDPOINT

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            status = response.status_code
            raise MonnifyException(
                f"Invalid JSON in response: {exc}", status, f"HTTP_{status}"
            ) from exc

    @staticmethod
    def _classify(payload: Any, status_code: int) -> Dict[str, Any]:
        if not _is_envelope(payload):
            if status_code >= 400 and _is_oauth_error(payload):
                message, error_code = _error_details(payload, status_code)
                raise MonnifyException(message, status_code, error_code)
            logger.warning("Response with status %s is not a Monnify envelope", status_code)
            raise ProtocolException(status_code)

        if status_code in FALL_THROUGH_STATUS_CODES:
            return dict(payload)

        if status_code >= 400:
            message, error_code = _error_details(payload, status_code)
            raise MonnifyException(message, status_code, error_code)

        return dict(payload)


__all__ = [
    "AUTH_ENDPOINT",
    "ENVELOPE_KEYS",
    "FALL_THROUGH_STATUS_CODES",
    "HttpClient",
]
