"""
Direct REST communication with the Ray dashboard.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from ...config import DEFAULT_REQUEST_TIMEOUT, get_dashboard_url
from ..exceptions import DashboardRequestError
from ..models import VersionInfo
from ..utils.user_agent import get_sdk_user_agent

log = logging.getLogger(__name__)


class DashboardRestClient:
    """
    REST client for the Ray dashboard HTTP API.

    The User-Agent is fixed at construction and sent with every request; the
    dashboard answers 500 to requests that omit it.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        user_agent: Optional[str] = None,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = get_dashboard_url(base_url)
        self.user_agent = user_agent or get_sdk_user_agent()
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the underlying httpx client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                transport=self._transport,
            )
        return self._client

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    async def execute_rest(
        self,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None,
        content: Optional[bytes] = None,
    ) -> httpx.Response:
        """Send one request and return the raw response.

        Status codes are not checked here; see ``check_status``.

        Raises:
            DashboardRequestError: If the request fails at the network level.
        """
        client = await self._get_client()
        url = self._url(path)
        headers = {"User-Agent": self.user_agent}

        log.debug(f"REST Request: {method} {url}")

        try:
            response = await client.request(
                method, url, json=json, content=content, headers=headers
            )
        except httpx.HTTPError as e:
            log.error(f"HTTP client error: {e}")
            raise DashboardRequestError(f"{method} {url} failed: {e}") from e

        log.debug(f"REST Response Status: {response.status_code}")
        return response

    @staticmethod
    def check_status(response: httpx.Response, action: str) -> httpx.Response:
        if response.status_code >= 400:
            body = response.text
            raise DashboardRequestError(
                f"{action} failed: {response.status_code} - {body[:500]}",
                status_code=response.status_code,
                body=body,
            )
        return response

    async def request_json(
        self,
        method: str,
        path: str,
        action: str,
        json: Optional[Dict[str, Any]] = None,
    ) -> Any:
        response = await self.execute_rest(method, path, json=json)
        self.check_status(response, action)
        try:
            return response.json()
        except ValueError as e:
            raise DashboardRequestError(
                f"{action} returned invalid JSON: {e}",
                status_code=response.status_code,
                body=response.text,
            ) from e

    async def get_version(self) -> VersionInfo:
        """Fetch dashboard and Ray version information."""
        data = await self.request_json("GET", "/api/version", "Get version")
        return VersionInfo.model_validate(data)

    async def ping(self) -> None:
        """Check that the dashboard answers."""
        await self.get_version()

    async def close(self):
        """Close the HTTP session."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
