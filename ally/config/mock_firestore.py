"""
In-process stand-in for the Firestore client used in demo mode and tests.

Implements only the slice of the google-cloud-firestore API the services call:
collection/document references, get/set/create/update/delete, equality and
array-contains filters, limit and stream. Server timestamp sentinels are
replaced with the current UTC time on write.
"""

import copy
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Optional, Tuple

from firebase_admin import firestore
from google.api_core.exceptions import AlreadyExists, NotFound

logger = logging.getLogger(__name__)


def _resolve_sentinels(data: Dict[str, Any]) -> Dict[str, Any]:
    resolved = {}
    for key, value in data.items():
        if value is firestore.SERVER_TIMESTAMP:
            resolved[key] = datetime.now(timezone.utc)
        elif isinstance(value, dict):
            resolved[key] = _resolve_sentinels(value)
        else:
            resolved[key] = copy.deepcopy(value)
    return resolved


SUPPORTED_OPERATORS = ("==", "!=", "array-contains", "in")


def _matches(data: Dict[str, Any], field_path: str, op_string: str, value: Any) -> bool:
    if field_path not in data:
        return False
    current = data[field_path]
    if op_string == "==":
        return current == value
    if op_string == "!=":
        return current != value
    if op_string == "array-contains":
        return isinstance(current, list) and value in current
    return current in value


class MockDocumentSnapshot:
    def __init__(self, reference: "MockDocumentReference", data: Optional[Dict[str, Any]]):
        self.reference = reference
        self._data = data

    @property
    def id(self) -> str:
        return self.reference.id

    @property
    def exists(self) -> bool:
        return self._data is not None

    def to_dict(self) -> Optional[Dict[str, Any]]:
        if self._data is None:
            return None
        return copy.deepcopy(self._data)

    def get(self, field_path: str) -> Any:
        if self._data is None:
            return None
        return copy.deepcopy(self._data.get(field_path))


class MockDocumentReference:
    def __init__(self, store: "MockFirestore", collection_name: str, doc_id: str):
        self._store = store
        self._collection_name = collection_name
        self.id = doc_id

    @property
    def path(self) -> str:
        return f"{self._collection_name}/{self.id}"

    def _documents(self) -> Dict[str, Dict[str, Any]]:
        return self._store._data.setdefault(self._collection_name, {})

    def get(self) -> MockDocumentSnapshot:
        data = self._store._data.get(self._collection_name, {}).get(self.id)
        return MockDocumentSnapshot(self, copy.deepcopy(data) if data is not None else None)

    def set(self, document_data: Dict[str, Any], merge: bool = False) -> None:
        documents = self._documents()
        resolved = _resolve_sentinels(document_data)
        if merge and self.id in documents:
            documents[self.id].update(resolved)
        else:
            documents[self.id] = resolved

    def create(self, document_data: Dict[str, Any]) -> None:
        documents = self._documents()
        if self.id in documents:
            raise AlreadyExists(f"Document already exists: {self.path}")
        documents[self.id] = _resolve_sentinels(document_data)

    def update(self, field_updates: Dict[str, Any]) -> None:
        documents = self._store._data.get(self._collection_name, {})
        if self.id not in documents:
            raise NotFound(f"No document to update: {self.path}")
        documents[self.id].update(_resolve_sentinels(field_updates))

    def delete(self) -> None:
        # Deleting a missing document is not an error in Firestore either
        self._store._data.get(self._collection_name, {}).pop(self.id, None)


class MockQuery:
    def __init__(
        self,
        store: "MockFirestore",
        collection_name: str,
        filters: Optional[List[Tuple[str, str, Any]]] = None,
        limit_count: Optional[int] = None,
    ):
        self._store = store
        self._collection_name = collection_name
        self._filters = filters or []
        self._limit = limit_count

    def where(self, field_path: str, op_string: str, value: Any) -> "MockQuery":
        if op_string not in SUPPORTED_OPERATORS:
            raise ValueError(f"Unsupported operator for mock store: {op_string}")
        return MockQuery(
            self._store,
            self._collection_name,
            self._filters + [(field_path, op_string, value)],
            self._limit,
        )

    def limit(self, count: int) -> "MockQuery":
        return MockQuery(self._store, self._collection_name, list(self._filters), count)

    def stream(self) -> Iterator[MockDocumentSnapshot]:
        documents = self._store._data.get(self._collection_name, {})
        yielded = 0
        # Firestore returns documents ordered by id when no order_by is given
        for doc_id in sorted(documents):
            data = documents[doc_id]
            if not all(_matches(data, f, op, v) for f, op, v in self._filters):
                continue
            if self._limit is not None and yielded >= self._limit:
                return
            yielded += 1
            reference = MockDocumentReference(self._store, self._collection_name, doc_id)
            yield MockDocumentSnapshot(reference, copy.deepcopy(data))

    def get(self) -> List[MockDocumentSnapshot]:
        return list(self.stream())


class MockCollectionReference(MockQuery):
    def __init__(self, store: "MockFirestore", name: str):
        super().__init__(store, name)
        self.id = name

    def document(self, document_id: Optional[str] = None) -> MockDocumentReference:
        if document_id is None:
            document_id = uuid.uuid4().hex[:20]
        return MockDocumentReference(self._store, self.id, document_id)

    def add(self, document_data: Dict[str, Any]) -> Tuple[datetime, MockDocumentReference]:
        reference = self.document()
        reference.set(document_data)
        return datetime.now(timezone.utc), reference


class MockFirestore:
    """Dictionary-backed document store keyed by collection and document id."""

    def __init__(self, seed: Optional[Dict[str, Dict[str, Dict[str, Any]]]] = None):
        self._data: Dict[str, Dict[str, Dict[str, Any]]] = {}
        if seed:
            self.load(seed)

    def collection(self, name: str) -> MockCollectionReference:
        return MockCollectionReference(self, name)

    def collections(self) -> List[MockCollectionReference]:
        return [MockCollectionReference(self, name) for name in self._data]

    def load(self, seed: Dict[str, Dict[str, Dict[str, Any]]]) -> None:
        for collection_name, documents in seed.items():
            for doc_id, data in documents.items():
                self.collection(collection_name).document(doc_id).set(data)
        logger.info(f"[MOCK DB] Loaded {sum(len(d) for d in seed.values())} seed document(s)")

    def reset(self) -> None:
        """Clear all stored data (useful in tests)."""
        self._data.clear()


def get_mock_db(seed_path: Optional[str] = None) -> MockFirestore:
    db = MockFirestore()
    if seed_path:
        from ally.config.seed import load_seed
        db.load(load_seed(seed_path))
    return db
