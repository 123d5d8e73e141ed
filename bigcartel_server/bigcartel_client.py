from __future__ import annotations

import json
import logging
import os
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import httpx

from .errors import (
    BigCartelClientError,
    BigCartelDecodeError,
    BigCartelNotFoundError,
    BigCartelStatusError,
)
from .models import (
    CATEGORY_TYPE,
    Account,
    Category,
    decode_account,
    decode_categories,
    decode_category,
    parse_document,
)

__all__ = [
    "BigCartelClient",
    "BigCartelClientError",
    "BigCartelDecodeError",
    "BigCartelNotFoundError",
    "BigCartelStatusError",
]

logger = logging.getLogger("bigcartel_server.http")

DEFAULT_BASE_URL = "https://api.bigcartel.com/v1"
DEFAULT_TIMEOUT = 60.0
JSON_API_MEDIA_TYPE = "application/vnd.api+json"


def _redact_headers(headers: Dict[str, Any]) -> Dict[str, Any]:
    redacted = {}
    for k, v in headers.items():
        if str(k).lower() == "authorization":
            redacted[k] = "[REDACTED]"
        else:
            redacted[k] = v
    return redacted


@dataclass(frozen=True)
class BigCartelClient:
    """Minimal async client for the Big Cartel (v1, JSON:API) API.

    Uses a per-request httpx.AsyncClient. The configuration is frozen, so one
    instance can be shared freely between concurrent tasks. There are no
    retries: every failure is raised to the caller on the first attempt.
    """

    user_agent: str
    basic_auth: str
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    transport: Optional[httpx.AsyncBaseTransport] = field(
        default=None, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        base_url = (self.base_url or "").rstrip("/")
        try:
            url = httpx.URL(base_url)
        except httpx.InvalidURL as e:
            raise BigCartelClientError(f"Invalid base URL {self.base_url!r}: {e}") from e
        if url.scheme not in ("http", "https") or not url.host:
            raise BigCartelClientError(f"Invalid base URL {self.base_url!r}")
        object.__setattr__(self, "base_url", base_url)

        if not self.timeout or self.timeout <= 0:
            object.__setattr__(self, "timeout", DEFAULT_TIMEOUT)

    @classmethod
    def from_env(cls) -> "BigCartelClient":
        """Create a client using environment variables loaded via dotenv.

        Required env vars:
        - BIGCARTEL_USER_AGENT
        - BIGCARTEL_BASIC_AUTH (base64 of "account:password", without "Basic ")
        Optional:
        - BIGCARTEL_BASE_URL (defaults to the v1 API)
        - BIGCARTEL_TIMEOUT (seconds, defaults to 60)
        """
        user_agent = os.getenv("BIGCARTEL_USER_AGENT")
        basic_auth = os.getenv("BIGCARTEL_BASIC_AUTH")
        if not user_agent or not basic_auth:
            raise BigCartelClientError(
                "Missing BIGCARTEL_USER_AGENT or BIGCARTEL_BASIC_AUTH in environment."
            )

        raw_timeout = os.getenv("BIGCARTEL_TIMEOUT")
        try:
            timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT
        except ValueError as e:
            raise BigCartelClientError(
                f"BIGCARTEL_TIMEOUT must be a number of seconds, got {raw_timeout!r}"
            ) from e

        return cls(
            user_agent=user_agent,
            basic_auth=basic_auth,
            base_url=os.getenv("BIGCARTEL_BASE_URL", DEFAULT_BASE_URL),
            timeout=timeout,
        )

    def _headers(self) -> dict:
        return {
            "User-Agent": self.user_agent,
            "Accept": JSON_API_MEDIA_TYPE,
            "Content-Type": JSON_API_MEDIA_TYPE,
            "Authorization": f"Basic {self.basic_auth}",
        }

    def _url(self, endpoint: str) -> str:
        if not endpoint.startswith("/"):
            raise BigCartelClientError(f"Endpoint must start with '/': {endpoint!r}")
        return self.base_url + endpoint

    async def _request(
        self,
        method: str,
        endpoint: str,
        *,
        timeout: Optional[float] = None,
        **kwargs,
    ) -> httpx.Response:
        """Execute a single HTTP request. Transport errors propagate unchanged."""
        url = self._url(endpoint)
        if not timeout or timeout <= 0:
            timeout = self.timeout
        client = httpx.AsyncClient(
            headers=self._headers(),
            timeout=httpx.Timeout(timeout),
            transport=self.transport,
        )
        try:
            logger.debug(
                "HTTP %s %s headers=%s",
                method.upper(),
                endpoint,
                _redact_headers(dict(client.headers)),
            )
            start = time.perf_counter()
            response = await client.request(method.upper(), url, **kwargs)
            elapsed_ms = (time.perf_counter() - start) * 1000.0
            logger.debug(
                "HTTP %s %s status=%s elapsed_ms=%.2f",
                method.upper(),
                endpoint,
                response.status_code,
                elapsed_ms,
            )
            return response
        finally:
            # A caller-supplied transport outlives the request.
            if self.transport is None:
                await client.aclose()

    async def get(self, endpoint: str, *, timeout: Optional[float] = None) -> httpx.Response:
        return await self._request("get", endpoint, timeout=timeout)

    async def post(
        self, endpoint: str, body: Any, *, timeout: Optional[float] = None
    ) -> httpx.Response:
        return await self._request(
            "post", endpoint, timeout=timeout, content=json.dumps(body).encode("utf-8")
        )

    # ----------------------------- API methods -----------------------------

    @staticmethod
    def _document(response: httpx.Response, endpoint: str) -> Dict[str, Any]:
        if response.status_code >= 400:
            logger.warning("GET %s returned status %s", endpoint, response.status_code)
        return parse_document(response.content)

    async def get_account(self, *, timeout: Optional[float] = None) -> Account:
        """Fetch the account the credentials belong to (first of GET /accounts)."""
        response = await self.get("/accounts", timeout=timeout)
        return decode_account(self._document(response, "/accounts"), collection=True)

    async def get_account_by_id(
        self, account_id: str, *, timeout: Optional[float] = None
    ) -> Account:
        """Fetch a single account by its numeric id."""
        endpoint = f"/accounts/{account_id}"
        response = await self.get(endpoint, timeout=timeout)
        return decode_account(self._document(response, endpoint))

    async def list_categories(
        self, account_id: str, *, timeout: Optional[float] = None
    ) -> List[Category]:
        """List every category of an account."""
        endpoint = f"/accounts/{account_id}/categories"
        response = await self.get(endpoint, timeout=timeout)
        return decode_categories(self._document(response, endpoint))

    async def get_category(
        self, account_id: str, category_id: str, *, timeout: Optional[float] = None
    ) -> Category:
        """Fetch one category of an account."""
        endpoint = f"/accounts/{account_id}/categories/{category_id}"
        response = await self.get(endpoint, timeout=timeout)
        return decode_category(self._document(response, endpoint))

    async def create_category(
        self, account_id: str, name: str, *, timeout: Optional[float] = None
    ) -> Category:
        """Create a category via POST /accounts/{id}/categories/.

        The API answers 201 with the new resource object; any other status
        raises BigCartelStatusError.
        """
        payload = {
            "data": {
                "type": CATEGORY_TYPE,
                "attributes": {"name": name},
            }
        }
        response = await self.post(
            f"/accounts/{account_id}/categories/", payload, timeout=timeout
        )
        if response.status_code != 201:
            raise BigCartelStatusError(f"category '{name}'", response.status_code, 201)
        return decode_category(parse_document(response.content))
