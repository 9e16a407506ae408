"""
HTTP client for the registry's management API.
"""

import logging

import httpx

from registry_exporter.core.errors import RegistryClientError
from registry_exporter.models.entity import ExportableEntity

logger = logging.getLogger(__name__)

DEFAULT_REGISTRY_URL = "http://127.0.0.1:8080"


class RegistryClient:
    """
    Reads entity configurations from the registry over HTTP.

    Requests are made once; there is no retry. Use as an async context
    manager so the underlying connection pool gets closed:

        async with RegistryClient("http://localhost:8080") as client:
            groups = await client.list_tool_group_configs()
    """

    API_PREFIX = "/api/v0"
    TOOL_GROUP_CONFIGS_PATH = "/tool_group_configs"
    SERVER_CONFIGS_PATH = "/server_configs"

    def __init__(
        self,
        base_url: str = DEFAULT_REGISTRY_URL,
        token: str | None = None,
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=httpx.Timeout(timeout))

    async def __aenter__(self) -> "RegistryClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def _get_list(self, path: str) -> list[ExportableEntity]:
        """GET a JSON array of objects from the API."""
        url = f"{self.base_url}{self.API_PREFIX}{path}"

        try:
            resp = await self._client.get(url, headers=self._headers())
        except httpx.HTTPError as e:
            raise RegistryClientError(f"request to {url} failed: {type(e).__name__}: {e}") from e

        if resp.status_code in (401, 403):
            raise RegistryClientError(
                f"request to {url} was rejected with status {resp.status_code} "
                "(admin access is required to export all configurations)"
            )
        if resp.status_code != 200:
            raise RegistryClientError(
                f"request to {url} failed with status {resp.status_code}: {resp.text.strip()}"
            )

        try:
            data = resp.json()
        except ValueError as e:
            raise RegistryClientError(f"invalid JSON in response from {url}: {e}") from e

        # An empty collection may be encoded as null
        if data is None:
            data = []
        if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
            raise RegistryClientError(f"expected a JSON array of objects from {url}")

        logger.debug(f"GET {url} -> {len(data)} entities")
        return data

    async def list_tool_group_configs(self) -> list[ExportableEntity]:
        return await self._get_list(self.TOOL_GROUP_CONFIGS_PATH)

    async def list_server_configs(self) -> list[ExportableEntity]:
        return await self._get_list(self.SERVER_CONFIGS_PATH)
