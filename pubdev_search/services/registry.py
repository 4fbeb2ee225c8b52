"""Package registry search client (pub.dev ``/api/search``)."""

from __future__ import annotations

import secrets
from typing import Any

import httpx

from pubdev_search.config import RegistrySettings
from pubdev_search.domain.models import SearchResult
from pubdev_search.logging import logger
from pubdev_search.services.exceptions import RegistryError

RESULT_ID_BYTES = 12


def new_result_id() -> str:
    return secrets.token_urlsafe(RESULT_ID_BYTES)


class RegistryClient:
    """Thin wrapper around the registry search endpoint.

    The caller owns the ``httpx.AsyncClient``. Cancellation is delivered by
    cancelling the awaiting task; nothing here retries.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        settings: RegistrySettings | None = None,
    ) -> None:
        self._client = http_client
        self._settings = settings or RegistrySettings()

    @property
    def base_url(self) -> str:
        return self._settings.base()

    @property
    def search_url(self) -> str:
        return f"{self.base_url}/api/search"

    def package_api_url(self, name: str) -> str:
        return f"{self.base_url}/api/packages/{name}"

    def package_page_url(self, name: str) -> str:
        return f"{self.base_url}/packages/{name}"

    async def perform_search(self, query: str) -> list[SearchResult]:
        params = {"q": query or ""}
        logger.debug("registry_request", query=query)
        try:
            response = await self._client.get(
                self.search_url,
                params=params,
                headers={"User-Agent": self._settings.user_agent},
                timeout=self._settings.request_timeout_seconds,
            )
        except httpx.RequestError as exc:
            raise RegistryError(str(exc) or exc.__class__.__name__) from exc

        logger.debug("registry_response", url=str(response.url), status_code=response.status_code)
        if not response.is_success:
            raise RegistryError(response.reason_phrase or str(response.status_code))

        try:
            payload = response.json()
        except ValueError as exc:
            raise RegistryError("Registry response is not valid JSON.") from exc

        return self._map_results(payload)

    def _map_results(self, payload: Any) -> list[SearchResult]:
        packages = payload.get("packages") if isinstance(payload, dict) else None
        if not isinstance(packages, list):
            return []

        results: list[SearchResult] = []
        for item in packages:
            name = item.get("package") if isinstance(item, dict) else None
            if not isinstance(name, str) or not name:
                continue
            results.append(
                SearchResult(
                    id=new_result_id(),
                    name=name,
                    url=self.package_api_url(name),
                    page_url=self.package_page_url(name),
                )
            )
        return results


__all__ = ["RegistryClient", "new_result_id"]
