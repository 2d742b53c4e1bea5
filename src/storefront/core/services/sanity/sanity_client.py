"""Thin async client for the Sanity HTTP data API."""

import json
from typing import Any

import httpx
from loguru import logger

from src.storefront.core.exceptions import IntegrationNotConfiguredError, SanityAPIError
from src.storefront.runtime.config.config_data import SanityConfig
from src.storefront.runtime.context import get_config


class SanityClient:
    """Runs GROQ queries and mutations against one Sanity dataset.

    Queries go through the CDN when ``use_cdn`` is set; mutations always use
    the live API and require a token.
    """

    def __init__(self, config: SanityConfig | None = None):
        self._config = config or get_config().sanity

    @property
    def config(self) -> SanityConfig:
        return self._config

    def _require_project(self) -> None:
        if not self._config.is_configured:
            raise IntegrationNotConfiguredError("Sanity")

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._config.token:
            headers["Authorization"] = f"Bearer {self._config.token}"
        return headers

    @property
    def _mutate_url(self) -> str:
        cfg = self._config
        return (
            f"https://{cfg.project_id}.api.sanity.io/v{cfg.api_version}"
            f"/data/mutate/{cfg.dataset}"
        )

    async def query(self, groq: str, params: dict[str, Any] | None = None) -> Any:
        """Run a GROQ query and return its ``result``.

        Query parameters are sent as ``$name`` URL parameters holding JSON
        encoded values, as the data API expects.
        """
        self._require_project()
        url = f"{self._config.base_url}/data/query/{self._config.dataset}"
        query_params = {"query": groq}
        for name, value in (params or {}).items():
            query_params[f"${name}"] = json.dumps(value)

        payload = await self._request("GET", url, params=query_params)
        return payload.get("result")

    async def mutate(self, mutations: list[dict[str, Any]]) -> dict[str, Any]:
        """Submit mutations in one transaction, returning the changed documents."""
        self._require_project()
        if not self._config.token:
            raise IntegrationNotConfiguredError("Sanity write token")

        return await self._request(
            "POST",
            self._mutate_url,
            params={"returnDocuments": "true"},
            json={"mutations": mutations},
        )

    async def create(self, document: dict[str, Any]) -> dict[str, Any]:
        result = await self.mutate([{"create": document}])
        return self._first_document(result)

    async def patch_set(self, document_id: str, fields: dict[str, Any]) -> dict[str, Any]:
        result = await self.mutate([{"patch": {"id": document_id, "set": fields}}])
        return self._first_document(result)

    async def delete(self, document_id: str) -> None:
        await self.mutate([{"delete": {"id": document_id}}])

    async def test_connection(self) -> bool:
        """Return True when a trivial query succeeds."""
        try:
            await self.query('count(*[_type == "product"])')
            return True
        except (SanityAPIError, IntegrationNotConfiguredError) as e:
            logger.warning("Sanity connection test failed: {}", e.message)
            return False

    @staticmethod
    def _first_document(result: dict[str, Any]) -> dict[str, Any]:
        documents = result.get("documents") or []
        if not documents:
            raise SanityAPIError("Sanity returned no documents for the mutation")
        return documents[0]

    async def _request(self, method: str, url: str, **kwargs: Any) -> dict[str, Any]:
        try:
            async with httpx.AsyncClient(timeout=self._config.timeout_seconds) as client:
                response = await client.request(method, url, headers=self._headers(), **kwargs)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.bind(status_code=status).error("Sanity API error: {}", e.response.text)
            raise SanityAPIError(
                f"Sanity API error: {status}", status_code=status, details=e.response.text
            ) from e
        except httpx.RequestError as e:
            logger.error("Sanity request failed: {}", e)
            raise SanityAPIError(f"Sanity request failed: {e}") from e
