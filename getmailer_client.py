"""
getmailer_client.py
-------------------
Thin async wrapper around the GetMailer REST API.

Every call is one HTTP request. Authenticated calls carry
`Authorization: Bearer <key>`; the public signup call carries none.
Non-2xx responses are normalised into GetMailerAPIError using the
`error` / `message` field of the JSON body, falling back to the HTTP
reason phrase.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from getmailer_config import ConfigurationError, Settings, __version__

logger = logging.getLogger(__name__)

USER_AGENT = f"getmailer-mcp/{__version__}"


class GetMailerAPIError(Exception):
    """The remote API answered with a non-success status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def _error_message(response: httpx.Response) -> str:
    message = response.reason_phrase
    try:
        data = response.json()
    except ValueError:
        return message
    if isinstance(data, dict):
        return data.get("error") or data.get("message") or message
    return message


class GetMailerClient:
    """
    Usage:
        async with GetMailerClient(settings) as client:
            emails = await client.request("GET", "/api/emails", params={"limit": "10"})
    """

    def __init__(self, settings: Settings, http_client: Optional[httpx.AsyncClient] = None):
        self.settings = settings
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            base_url=settings.api_url,
            timeout=httpx.Timeout(settings.timeout),
            headers={"User-Agent": USER_AGENT},
        )

    async def __aenter__(self) -> "GetMailerClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    def _headers(self, authenticated: bool) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if authenticated:
            if not self.settings.has_api_key:
                raise ConfigurationError(
                    "GETMAILER_API_KEY environment variable is required. "
                    "Use the signup tool to create an account and get an API key."
                )
            headers["Authorization"] = f"Bearer {self.settings.api_key}"
        return headers

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, str]] = None,
        json: Any = None,
        authenticated: bool = True,
    ) -> Any:
        """Issue one API call and return the decoded JSON body."""
        headers = self._headers(authenticated)
        url = f"{self.settings.api_url}{path}"

        response = await self._http.request(
            method,
            url,
            params=params or None,
            json=json,
            headers=headers,
        )
        logger.debug(f"{method} {path} → {response.status_code}")

        if not response.is_success:
            raise GetMailerAPIError(f"API Error: {_error_message(response)}", response.status_code)

        if not response.content:
            return None
        return response.json()

    async def public_request(self, method: str, path: str, *, json: Any = None) -> Any:
        """Unauthenticated call; only account signup uses this."""
        return await self.request(method, path, json=json, authenticated=False)
