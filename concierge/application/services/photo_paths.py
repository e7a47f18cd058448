"""Storage paths and public URLs of villa photos.

A photo is stored on the villa either as a download URL string or as a
{"url": ..., "path": ...} map. Both point into the same bucket.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any
from urllib.parse import quote, unquote

DOWNLOAD_URL_TEMPLATE = "https://firebasestorage.googleapis.com/v0/b/{bucket}/o/{path}?alt=media"
# Characters encodeURIComponent leaves alone.
_URI_COMPONENT_SAFE = "-_.!~*'()"


def extract_path_from_url(url: str | None) -> str | None:
    """Object path from a download URL; a non-URL value is taken as the path itself."""
    if not url:
        return None
    if not url.startswith("http"):
        return url
    parts = url.split("/o/")
    if len(parts) < 2:
        return None
    return unquote(parts[1].split("?")[0]) or None


def filename_from_path(path: str | None) -> str | None:
    if not path:
        return None
    return path.split("/")[-1] or None


def photo_path(photo: Any) -> str | None:
    """Path a stored photo points at (URL first, then the map's path field)."""
    if isinstance(photo, str):
        return extract_path_from_url(photo)
    if isinstance(photo, dict):
        return extract_path_from_url(photo.get("url")) or photo.get("path") or None
    return None


def public_url(bucket: str, path: str) -> str:
    return DOWNLOAD_URL_TEMPLATE.format(
        bucket=bucket, path=quote(path, safe=_URI_COMPONENT_SAFE)
    )


def relocated_photo(photo: Any, bucket: str, path: str) -> Any:
    """Same photo pointing at path: strings become the new URL, maps get url and path."""
    url = public_url(bucket, path)
    if isinstance(photo, dict):
        return {**photo, "url": url, "path": path}
    return url


def build_storage_map(paths: Iterable[str]) -> dict[str, str]:
    """filename -> full path; a filename seen under several prefixes keeps the last one."""
    file_map: dict[str, str] = {}
    for path in paths:
        name = filename_from_path(path)
        if name:
            file_map[name] = path
    return file_map
