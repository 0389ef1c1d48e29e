"""Polyfact REST API client.

Thin wrapper over requests shared by the docs pipeline and the SDK helpers.

Security Requirements:
- Token sent only in the X-Access-Token header
- Timeout on every API call
- Tokens never appear in raised error messages
"""

import logging
from typing import Any

import requests

from polyfact.config import PolyfactConfig, get_config
from polyfact.log_sanitizer import LogSanitizer

logger = logging.getLogger(__name__)


class PolyfactAPIError(Exception):
    """A call to the Polyfact API failed."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class PolyfactClient:
    """Authenticated client for the Polyfact API."""

    def __init__(
        self,
        token: str | None = None,
        endpoint: str | None = None,
        timeout: float | None = None,
    ):
        """Initialize client.

        Args:
            token: Polyfact access token
            endpoint: API base URL (default: configured endpoint)
            timeout: Per-request timeout in seconds (default: configured timeout)
        """
        self.token = token
        self.endpoint = (endpoint or get_config().endpoint).rstrip("/")
        self.timeout = timeout if timeout is not None else get_config().request_timeout

    @classmethod
    def from_config(cls, config: PolyfactConfig | None = None) -> "PolyfactClient":
        """Build a client from a resolved configuration (default: global config)."""
        config = config or get_config()
        return cls(token=config.token, endpoint=config.endpoint, timeout=config.request_timeout)

    def request(
        self,
        method: str,
        path: str,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        files: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request and return the decoded JSON body.

        Args:
            method: HTTP method
            path: Path relative to the endpoint, starting with "/"
            json: JSON body
            params: Query parameters
            files: Multipart files (requests format)

        Returns:
            Decoded JSON response (None for an empty body)

        Raises:
            PolyfactAPIError: If no token is configured, the request fails, or
                the server answers with a non-2xx status
        """
        if not self.token:
            raise PolyfactAPIError(
                "No Polyfact token configured. Set POLYFACT_TOKEN or pass a token explicitly."
            )

        url = f"{self.endpoint}{path}"
        headers = {"X-Access-Token": self.token}
        logger.debug(f"{method} {url}")

        try:
            response = requests.request(
                method,
                url,
                headers=headers,
                json=json,
                params=params,
                files=files,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise PolyfactAPIError(
                LogSanitizer.create_safe_error_message(
                    e, f"{method} {path} failed", secrets=(self.token,)
                )
            ) from e

        if not 200 <= response.status_code < 300:
            raise PolyfactAPIError(
                f"{method} {path} failed: {response.status_code} - {self._error_message(response)}",
                status_code=response.status_code,
            )

        if not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise PolyfactAPIError(
                f"{method} {path} returned invalid JSON", status_code=response.status_code
            ) from e

    def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return self.request("GET", path, params=params)

    def post(
        self,
        path: str,
        json: dict[str, Any] | None = None,
        files: dict[str, Any] | None = None,
    ) -> Any:
        return self.request("POST", path, json=json, files=files)

    def put(self, path: str, json: dict[str, Any] | None = None) -> Any:
        return self.request("PUT", path, json=json)

    def _error_message(self, response: requests.Response) -> str:
        """Extract the server's error message without leaking the token."""
        try:
            body = response.json()
        except ValueError:
            body = None

        if isinstance(body, dict):
            message = body.get("message") or body.get("error") or "Unknown error"
        else:
            message = response.text[:200] or "Unknown error"
        return LogSanitizer.sanitize(message, secrets=(self.token,))


def resolve_client(client: PolyfactClient | None = None) -> PolyfactClient:
    """Return ``client`` or a client built from the global configuration."""
    return client if client is not None else PolyfactClient.from_config()


__all__ = ["PolyfactAPIError", "PolyfactClient", "resolve_client"]
