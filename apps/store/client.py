"""HTTP client wrapper for the hosted table service (PostgREST dialect)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping

import httpx


@dataclass
class RemoteStoreConfig:
    base_url: str
    api_key: str | None = None
    rest_path: str = "/rest/v1"


@dataclass(frozen=True)
class Order:
    column: str
    descending: bool = True

    def as_param(self) -> str:
        return f"{self.column}.{'desc' if self.descending else 'asc'}"


class RemoteStoreError(RuntimeError):
    """Raised when a table request fails or returns an unusable payload."""

    def __init__(self, message: str, *, table: str | None = None, status_code: int | None = None) -> None:
        super().__init__(message)
        self.table = table
        self.status_code = status_code


class RemoteStoreClient:
    def __init__(
        self,
        config: RemoteStoreConfig,
        *,
        client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        self._config = config
        if client is None:
            self._client = httpx.AsyncClient(
                base_url=config.base_url,
                timeout=timeout,
            )
            self._owns_client = True
        else:
            self._client = client
            self._owns_client = False

    def table(self, name: str) -> "TableHandle":
        return TableHandle(self, name)

    async def select(
        self,
        table: str,
        *,
        filters: Mapping[str, Any] | None = None,
        order: Order | None = None,
        columns: str = "*",
        limit: int | None = None,
    ) -> List[Dict[str, Any]]:
        """Return every row of ``table`` matching ``filters``."""

        params: Dict[str, str] = {"select": columns}
        params.update(_eq_filters(filters))
        if order is not None:
            params["order"] = order.as_param()
        if limit is not None:
            params["limit"] = str(limit)
        response = await self._request("GET", table, params=params)
        return _rows(response, table)

    async def insert(self, table: str, record: Mapping[str, Any]) -> List[Dict[str, Any]]:
        """Insert one row and return the stored representation (with server id)."""

        response = await self._request(
            "POST",
            table,
            json=[dict(record)],
            extra_headers={"Prefer": "return=representation"},
        )
        return _rows(response, table)

    async def update(self, table: str, values: Mapping[str, Any], *, match: Mapping[str, Any]) -> None:
        if not match:
            raise ValueError("update requires a match filter")
        await self._request(
            "PATCH",
            table,
            params=_eq_filters(match),
            json=dict(values),
            extra_headers={"Prefer": "return=minimal"},
        )

    async def delete(self, table: str, *, match: Mapping[str, Any]) -> None:
        if not match:
            raise ValueError("delete requires a match filter")
        await self._request(
            "DELETE",
            table,
            params=_eq_filters(match),
            extra_headers={"Prefer": "return=minimal"},
        )

    async def aclose(self) -> None:
        if getattr(self, "_owns_client", False):
            await self._client.aclose()

    async def _request(
        self,
        method: str,
        table: str,
        *,
        params: Mapping[str, str] | None = None,
        json: Any = None,
        extra_headers: Mapping[str, str] | None = None,
    ) -> httpx.Response:
        headers = self._build_headers()
        if extra_headers:
            headers.update(extra_headers)
        try:
            response = await self._client.request(
                method,
                f"{self._config.rest_path}/{table}",
                params=params,
                json=json,
                headers=headers,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise RemoteStoreError(
                f"{method} {table} failed with HTTP {exc.response.status_code}",
                table=table,
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise RemoteStoreError(f"{method} {table} failed: {exc}", table=table) from exc
        return response

    def _build_headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._config.api_key:
            headers["apikey"] = self._config.api_key
            headers["Authorization"] = f"Bearer {self._config.api_key}"
        return headers

    async def __aenter__(self) -> "RemoteStoreClient":  # pragma: no cover - convenience
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # pragma: no cover - convenience
        await self.aclose()


class TableHandle:
    """Per-collection accessor bound to one table name."""

    def __init__(self, client: RemoteStoreClient, name: str) -> None:
        self._client = client
        self.name = name

    async def select(self, *, filters: Mapping[str, Any] | None = None, order: Order | None = None, **kwargs: Any):
        return await self._client.select(self.name, filters=filters, order=order, **kwargs)

    async def insert(self, record: Mapping[str, Any]):
        return await self._client.insert(self.name, record)

    async def update(self, values: Mapping[str, Any], *, match: Mapping[str, Any]) -> None:
        await self._client.update(self.name, values, match=match)

    async def delete(self, *, match: Mapping[str, Any]) -> None:
        await self._client.delete(self.name, match=match)


def _eq_filters(filters: Mapping[str, Any] | None) -> Dict[str, str]:
    if not filters:
        return {}
    return {column: f"eq.{value}" for column, value in filters.items()}


def _rows(response: httpx.Response, table: str) -> List[Dict[str, Any]]:
    if response.status_code == 204 or not response.content:
        return []
    try:
        data = response.json()
    except ValueError as exc:
        raise RemoteStoreError("Table service returned non-JSON payload", table=table) from exc
    if isinstance(data, dict):
        return [data]
    if not isinstance(data, list):
        raise RemoteStoreError(f"Unexpected payload type {type(data).__name__}", table=table)
    return [row for row in data if isinstance(row, dict)]


__all__ = [
    "Order",
    "RemoteStoreClient",
    "RemoteStoreConfig",
    "RemoteStoreError",
    "TableHandle",
]
