"""Firebase Storage bucket access over the Cloud Storage JSON API.

Uses the same service account as the document store (google-auth) and
httpx for requests, so no storage SDK is needed.
"""

from __future__ import annotations

import asyncio
from typing import Any
from urllib.parse import quote

import httpx

from concierge.infrastructure.exceptions import StorageListError, StorageLookupError

_STORAGE_SCOPE = "https://www.googleapis.com/auth/devstorage.read_only"
_BASE = "https://storage.googleapis.com/storage/v1"
_PAGE_SIZE = 1000


def _get_access_token(credentials: Any) -> str:
    from google.auth.transport.requests import Request

    if not credentials.valid:
        credentials.refresh(Request())
    return credentials.token


class FirebaseStorageService:
    """Lists and probes objects in a Firebase Storage (GCS) bucket."""

    def __init__(
        self,
        bucket: str,
        credentials: Any,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._bucket = bucket
        self._credentials = credentials
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=30.0)
        self._owns_http = http_client is None

    @classmethod
    def from_service_account(cls, bucket: str, key_dict: dict) -> "FirebaseStorageService":
        from google.oauth2 import service_account

        credentials = service_account.Credentials.from_service_account_info(
            key_dict, scopes=[_STORAGE_SCOPE]
        )
        return cls(bucket, credentials)

    @property
    def bucket(self) -> str:
        return self._bucket

    async def _headers(self) -> dict[str, str]:
        token = await asyncio.to_thread(_get_access_token, self._credentials)
        return {"Authorization": f"Bearer {token}"}

    async def list_files(self, prefix: str) -> list[str]:
        """Return every object name under prefix, following nextPageToken."""
        url = f"{_BASE}/b/{quote(self._bucket, safe='')}/o"
        normalized = prefix.rstrip("/") + "/" if prefix else ""
        names: list[str] = []
        page_token: str | None = None
        while True:
            params = {"prefix": normalized, "maxResults": str(_PAGE_SIZE), "fields": "items(name),nextPageToken"}
            if page_token:
                params["pageToken"] = page_token
            try:
                resp = await self._http.get(url, params=params, headers=await self._headers())
            except httpx.HTTPError as e:
                raise StorageListError(prefix, str(e)) from e
            if resp.status_code == 404:
                return names
            if resp.status_code != 200:
                raise StorageListError(prefix, f"HTTP {resp.status_code}: {resp.text[:200]}")
            body = resp.json()
            names.extend(item["name"] for item in body.get("items", []) if item.get("name"))
            page_token = body.get("nextPageToken")
            if not page_token:
                return names

    async def exists(self, path: str) -> bool:
        url = f"{_BASE}/b/{quote(self._bucket, safe='')}/o/{quote(path, safe='')}"
        try:
            resp = await self._http.get(url, params={"fields": "name"}, headers=await self._headers())
        except httpx.HTTPError as e:
            raise StorageLookupError(path, str(e)) from e
        if resp.status_code == 200:
            return True
        if resp.status_code == 404:
            return False
        raise StorageLookupError(path, f"HTTP {resp.status_code}")

    async def aclose(self) -> None:
        """Close the HTTP client only if we created it."""
        if self._owns_http:
            await self._http.aclose()
