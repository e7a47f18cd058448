"""In-process bucket for development and tests (STORAGE_BACKEND=memory)."""

from __future__ import annotations

from collections.abc import Iterable


class MemoryStorageService:
    """Set of object paths with the same read surface as FirebaseStorageService."""

    def __init__(self, bucket: str = "memory-bucket", paths: Iterable[str] = ()) -> None:
        self._bucket = bucket
        self._paths: set[str] = set(paths)

    @property
    def bucket(self) -> str:
        return self._bucket

    def put(self, path: str) -> None:
        self._paths.add(path)

    def remove(self, path: str) -> None:
        self._paths.discard(path)

    def clear(self) -> None:
        self._paths.clear()

    async def list_files(self, prefix: str) -> list[str]:
        normalized = prefix.rstrip("/") + "/" if prefix else ""
        return sorted(p for p in self._paths if p.startswith(normalized))

    async def exists(self, path: str) -> bool:
        return path in self._paths

    async def aclose(self) -> None:
        return None
