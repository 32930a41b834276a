"""Thin async client for the Strapi content API.

All endpoints live under ``<STRAPI_URL>/api``. Requests carry the bearer
token; non-2xx responses and transport errors surface as StoreError.
"""

from typing import Any

import httpx
import structlog

from storefront.config import Settings, get_settings
from storefront.exceptions import StoreError

logger = structlog.get_logger(__name__)


def attributes(entry: dict) -> dict:
    """Strapi v4 nests fields under ``attributes``; v5 returns them flat."""
    return entry.get("attributes") or entry


def document_id(entry: dict) -> str:
    """Prefer the v5 ``documentId`` over the numeric entry id."""
    return str(entry.get("documentId") or entry.get("id") or "")


class StrapiClient:
    def __init__(
        self,
        base_url: str,
        api_token: str = "",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        headers = {"Authorization": f"Bearer {api_token}"} if api_token else {}
        self._client = httpx.AsyncClient(
            base_url=f"{self.base_url}/api",
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: Settings | None = None, transport=None) -> "StrapiClient":
        settings = settings or get_settings()
        return cls(
            base_url=settings.strapi_url,
            api_token=settings.strapi_api_token,
            timeout=settings.strapi_timeout,
            transport=transport,
        )

    def absolute_url(self, url: str) -> str:
        if not url or url.startswith(("http://", "https://")):
            return url
        return f"{self.base_url}{url if url.startswith('/') else '/' + url}"

    async def request(
        self,
        method: str,
        endpoint: str,
        params: dict | None = None,
        json: Any = None,
        files: dict | None = None,
    ) -> Any:
        try:
            response = await self._client.request(method, endpoint, params=params, json=json, files=files)
        except httpx.HTTPError as exc:
            logger.warning("strapi_request_failed", method=method, endpoint=endpoint, error=str(exc))
            raise StoreError(f"Strapi request failed: {exc}") from exc

        if response.is_error:
            try:
                detail = response.json()
            except ValueError:
                detail = response.text
            raise StoreError(
                f"Strapi API error: {response.status_code} {response.reason_phrase} - {detail}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as exc:
            logger.warning(
                "strapi_response_not_json",
                method=method,
                endpoint=endpoint,
                content_type=response.headers.get("content-type", ""),
            )
            raise StoreError(
                f"Strapi returned a non-JSON body for {method} {endpoint}",
                status_code=response.status_code,
            ) from exc

    async def get(self, endpoint: str, params: dict | None = None) -> Any:
        return await self.request("GET", endpoint, params=params)

    async def aclose(self) -> None:
        await self._client.aclose()


_shared_client: StrapiClient | None = None


def get_strapi_client() -> StrapiClient:
    """The process-wide client shared by every Strapi adapter, built on first use."""
    global _shared_client
    if _shared_client is None:
        _shared_client = StrapiClient.from_settings()
    return _shared_client


async def close_strapi_client() -> None:
    """Close the shared client's connection pool; the next use builds a new one."""
    global _shared_client
    client, _shared_client = _shared_client, None
    if client is not None:
        await client.aclose()
        logger.info("strapi_client_closed", base_url=client.base_url)
