"""In-process document store with the same async surface as FirestoreRESTClient.

Selected with DATABASE_BACKEND=memory for local development and tests. Data
lives in a dict per collection and is deep-copied on every read and write so
callers cannot mutate stored state by accident. Query semantics follow
Firestore: a filter or order_by on a field excludes documents missing it.
"""

from __future__ import annotations

import copy
from collections.abc import AsyncIterator
from typing import Any

from concierge.domain.exceptions import DocumentExistsException
from concierge.infrastructure.firebase._rest_client import _OP_MAP, DocumentSnapshot
from concierge.shared.utils.generators import generate_cuid

_MISSING = object()


def _matches(value: Any, op: str, expected: Any) -> bool:
    if value is _MISSING:
        return False
    try:
        if op == "EQUAL":
            return value == expected
        if op == "NOT_EQUAL":
            return value != expected and value is not None
        if op == "LESS_THAN":
            return value < expected
        if op == "LESS_THAN_OR_EQUAL":
            return value <= expected
        if op == "GREATER_THAN":
            return value > expected
        if op == "GREATER_THAN_OR_EQUAL":
            return value >= expected
        if op == "IN":
            return value in expected
        if op == "NOT_IN":
            return value not in expected
        if op == "ARRAY_CONTAINS":
            return isinstance(value, list) and expected in value
        if op == "ARRAY_CONTAINS_ANY":
            return isinstance(value, list) and any(v in value for v in expected)
    except TypeError:
        # Mixed types never compare in Firestore either.
        return False
    raise ValueError(f"Unsupported operator: {op!r}")


class MemoryDocumentReference:
    def __init__(self, client: "MemoryFirestoreClient", collection_id: str, document_id: str):
        self._client = client
        self._collection_id = collection_id
        self.id = document_id

    @property
    def path(self) -> str:
        return f"{self._collection_id}/{self.id}"

    def _docs(self) -> dict[str, dict[str, Any]]:
        return self._client._data.setdefault(self._collection_id, {})

    async def set(self, data: dict[str, Any]) -> None:
        self._docs()[self.id] = copy.deepcopy(data)

    async def update(self, data: dict[str, Any]) -> bool:
        current = self._docs().get(self.id)
        if current is None:
            return False
        current.update(copy.deepcopy(data))
        return True

    async def get(self) -> DocumentSnapshot | None:
        current = self._docs().get(self.id)
        if current is None:
            return None
        return DocumentSnapshot(self.id, copy.deepcopy(current))

    async def delete(self) -> None:
        self._docs().pop(self.id, None)


class MemoryQuery:
    def __init__(self, client: "MemoryFirestoreClient", collection_id: str):
        self._client = client
        self._collection_id = collection_id
        self._filters: list[tuple[str, str, Any]] = []
        self._order_by_field: str | None = None
        self._descending = False
        self._offset = 0
        self._limit: int | None = None

    def where(self, field: str, op: str, value: Any) -> "MemoryQuery":
        self._filters.append((field, _OP_MAP.get(op, op), value))
        return self

    def order_by(self, field: str, direction: str = "ASCENDING") -> "MemoryQuery":
        self._order_by_field = field
        self._descending = direction.upper() == "DESCENDING"
        return self

    def offset(self, n: int) -> "MemoryQuery":
        self._offset = n
        return self

    def limit(self, n: int) -> "MemoryQuery":
        self._limit = n
        return self

    async def stream(self) -> AsyncIterator[DocumentSnapshot]:
        docs = self._client._data.get(self._collection_id, {})
        rows = [
            (doc_id, data)
            for doc_id, data in docs.items()
            if all(_matches(data.get(f, _MISSING), op, v) for f, op, v in self._filters)
        ]
        if self._order_by_field is not None:
            field = self._order_by_field
            rows = [r for r in rows if field in r[1]]
            rows.sort(key=lambda r: r[1][field], reverse=self._descending)
        rows = rows[self._offset :]
        if self._limit:
            rows = rows[: self._limit]
        for doc_id, data in rows:
            yield DocumentSnapshot(doc_id, copy.deepcopy(data))


class MemoryCollectionReference:
    def __init__(self, client: "MemoryFirestoreClient", collection_id: str):
        self._client = client
        self.id = collection_id

    def document(self, document_id: str) -> MemoryDocumentReference:
        return MemoryDocumentReference(self._client, self.id, document_id)

    async def create(self, document_id: str, data: dict[str, Any]) -> None:
        docs = self._client._data.setdefault(self.id, {})
        if document_id in docs:
            raise DocumentExistsException(self.id, document_id)
        docs[document_id] = copy.deepcopy(data)

    async def add(self, data: dict[str, Any]) -> str:
        document_id = generate_cuid()
        await self.create(document_id, data)
        return document_id

    def where(self, field: str, op: str, value: Any) -> MemoryQuery:
        return MemoryQuery(self._client, self.id).where(field, op, value)

    async def stream(self) -> AsyncIterator[DocumentSnapshot]:
        async for doc in MemoryQuery(self._client, self.id).stream():
            yield doc


class MemoryWriteBatch:
    def __init__(self) -> None:
        self._ops: list[tuple[str, MemoryDocumentReference, dict[str, Any] | None]] = []

    def __len__(self) -> int:
        return len(self._ops)

    def set(self, ref: MemoryDocumentReference, data: dict[str, Any]) -> "MemoryWriteBatch":
        self._ops.append(("set", ref, data))
        return self

    def update(self, ref: MemoryDocumentReference, data: dict[str, Any]) -> "MemoryWriteBatch":
        self._ops.append(("update", ref, data))
        return self

    def delete(self, ref: MemoryDocumentReference) -> "MemoryWriteBatch":
        self._ops.append(("delete", ref, None))
        return self

    async def commit(self) -> int:
        for kind, ref, data in self._ops:
            if kind == "set":
                await ref.set(data or {})
            elif kind == "update":
                await ref.update(data or {})
            else:
                await ref.delete()
        committed = len(self._ops)
        self._ops = []
        return committed


class MemoryFirestoreClient:
    """Dict-backed stand-in for FirestoreRESTClient (same method names, all async)."""

    def __init__(self) -> None:
        self._data: dict[str, dict[str, dict[str, Any]]] = {}

    def collection(self, collection_id: str) -> MemoryCollectionReference:
        return MemoryCollectionReference(self, collection_id)

    def batch(self) -> MemoryWriteBatch:
        return MemoryWriteBatch()

    def clear(self) -> None:
        self._data.clear()

    async def aclose(self) -> None:
        return None
