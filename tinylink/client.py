"""HTTP client exposing the link registry interface of a remote API server."""

import logging
from typing import Optional, List
from urllib.parse import quote

import httpx

from .database.models import Link
from .errors import (
    CodeAlreadyInUse,
    CodeSpaceExhausted,
    InvalidCodeFormat,
    InvalidTargetURL,
    NotFound,
    StoreUnavailable,
    TinyLinkError,
)


class RemoteLinkRegistry:
    """Link registry backed by the TinyLink HTTP API.

    Mirrors LinkRegistry so the dashboard can run embedded or in front of a
    separate API process. Error responses are mapped back to the same
    exceptions the embedded registry raises.
    """

    def __init__(
        self,
        api_url: str,
        timeout_seconds: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize remote registry.

        Args:
            api_url: Base URL of the API server (e.g., http://localhost:4000)
            timeout_seconds: Per-request timeout
            transport: Optional httpx transport (for tests)
            logger: Optional logger
        """
        self.api_url = api_url.rstrip("/")
        self.logger = logger or logging.getLogger(__name__)
        self.client = httpx.AsyncClient(
            base_url=self.api_url,
            timeout=timeout_seconds,
            transport=transport,
        )

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            response = await self.client.request(method, path, **kwargs)
        except httpx.RequestError as e:
            self.logger.error(f"API request {method} {path} failed: {e}")
            raise StoreUnavailable(f"API server is unreachable: {e}") from e

        if not response.is_success:
            raise self._error_from_response(response)
        return response

    @staticmethod
    def _link_path(short_code: str, suffix: str = "") -> str:
        """API path for one link; the code is a single escaped path segment."""
        return f"/api/links/{quote(short_code, safe='')}{suffix}"

    @staticmethod
    def _error_from_response(response: httpx.Response) -> TinyLinkError:
        try:
            body = response.json()
        except ValueError:
            body = {}
        name = body.get("error")
        detail = body.get("detail") or response.text
        short_code = body.get("short_code", "")

        if name == "InvalidCodeFormat":
            return InvalidCodeFormat(short_code)
        if name == "InvalidTargetURL":
            return InvalidTargetURL(detail)
        if name == "CodeAlreadyInUse":
            return CodeAlreadyInUse(short_code)
        if name == "CodeSpaceExhausted":
            return CodeSpaceExhausted(body.get("attempts", 0))
        if name == "NotFound" or response.status_code == 404:
            return NotFound(short_code)
        return StoreUnavailable(f"API server error {response.status_code}: {detail}")

    async def create(self, target_url: str, custom_code: Optional[str] = None) -> Link:
        payload = {"target_url": target_url}
        if custom_code:
            payload["custom_code"] = custom_code
        response = await self._request("POST", "/api/links", json=payload)
        return Link.from_record(response.json())

    async def get(self, short_code: str) -> Link:
        response = await self._request("GET", self._link_path(short_code))
        return Link.from_record(response.json())

    async def list(self, search_term: Optional[str] = None) -> List[Link]:
        params = {"query": search_term} if search_term else None
        response = await self._request("GET", "/api/links", params=params)
        return [Link.from_record(item) for item in response.json()]

    async def delete(self, short_code: str) -> None:
        await self._request("DELETE", self._link_path(short_code))

    async def track_click(self, short_code: str) -> str:
        response = await self._request("GET", self._link_path(short_code, "/redirect"))
        return response.json()["target_url"]

    async def health_check(self) -> bool:
        try:
            response = await self.client.get("/healthz")
        except httpx.RequestError as e:
            self.logger.error(f"API Server health check failed: {e}")
            return False
        return response.status_code == 200 and bool(response.json().get("ok"))

    async def close(self) -> None:
        await self.client.aclose()
