from __future__ import annotations

from typing import Any, Optional

from .http import ApiClient


class ResourceClient:
    """CRUD calls for one REST collection, e.g. ResourceClient(api, "/api/pos/tax-rates")."""

    def __init__(self, api: ApiClient, path: str):
        self.api = api
        self.path = path.rstrip("/")

    def list(
        self,
        *,
        page: int = 1,
        limit: Optional[int] = None,
        keyword: str = "",
        **filters: Any,
    ) -> dict:
        """Returns the pagination envelope {current_page, per_page, total_items, total_pages, data}."""
        params: dict[str, Any] = {"page": page}
        if limit:
            params["limit"] = limit
        if keyword.strip():
            params["keyword"] = keyword.strip()
        params.update({k: v for k, v in filters.items() if v not in (None, "")})
        body = self.api.get(self.path, params=params)
        return body.get("pagination") or {}

    def show(self, record_id: int) -> dict:
        return self.api.get(f"{self.path}/{record_id}").get("data")

    def create(self, data: dict) -> dict:
        return self.api.post(self.path, json=data).get("data")

    def update(self, record_id: int, data: dict) -> dict:
        return self.api.put(f"{self.path}/{record_id}", json=data).get("data")

    def patch(self, record_id: int, data: dict) -> dict:
        return self.api.patch(f"{self.path}/{record_id}", json=data).get("data")

    def delete(self, record_id: int) -> dict:
        return self.api.delete(f"{self.path}/{record_id}")
