"""Thin HTTP client for a Supabase project (PostgREST + Storage)."""

import logging
from typing import Any

import requests

from ....core.domain.exceptions import InvalidConfigurationError, MissingAPIKeyError

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 10.0


class SupabaseClient:
    """Shared session carrying the project key for REST, RPC and Storage calls."""

    def __init__(
        self,
        url: str,
        api_key: str,
        timeout: float = REQUEST_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize the client.

        Raises:
            MissingAPIKeyError: If the project URL or key is missing.
            InvalidConfigurationError: If the URL is not http(s).
        """
        if not url or not api_key:
            raise MissingAPIKeyError(
                "Supabase credentials not set (set SUPABASE_URL and SUPABASE_KEY)",
                context={"has_url": bool(url), "has_key": bool(api_key)},
            )
        if not url.startswith(("http://", "https://")):
            raise InvalidConfigurationError(
                f"SUPABASE_URL must be an http(s) URL, got {url!r}",
                context={"setting": "supabase_url"},
            )
        self.base_url = url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "apikey": api_key,
                "Authorization": f"Bearer {api_key}",
            }
        )

    def __enter__(self) -> "SupabaseClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the HTTP session."""
        if self.session:
            self.session.close()

    def rest_url(self, table: str) -> str:
        return f"{self.base_url}/rest/v1/{table}"

    def rpc_url(self, function: str) -> str:
        return f"{self.base_url}/rest/v1/rpc/{function}"

    def storage_url(self, path: str) -> str:
        return f"{self.base_url}/storage/v1/{path}"

    def request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        """Send a request with the client timeout and raise on non-2xx.

        Raises:
            requests.RequestException: Transport failures and HTTP errors;
                adapters translate these into domain errors.
        """
        kwargs.setdefault("timeout", self.timeout)
        response = self.session.request(method, url, **kwargs)
        if not response.ok:
            logger.debug("%s %s -> %s %s", method, url, response.status_code, response.text[:500])
        response.raise_for_status()
        return response
