"""
MongoDB integration and an in-memory backend for development and tests.

This module provides the ``Database`` object that owns the connection
for the lifetime of the application.  ``create_app`` constructs one
instance, stores it on ``app.state`` and opens it at startup
(``connect``) and closes it at shutdown (``close``).  Routes obtain it
through the ``get_database`` dependency; nothing in the code base keeps
a module-level connection.

Each entity lives in its own collection.  Documents carry an
application generated ``id`` field guarded by a unique index; the
MongoDB ``_id`` never leaves the persistence layer.

When ``MONGODB_URI`` is not configured the application still starts:
a warning is logged and every call to :meth:`Database.collection`
raises :class:`DatabaseUnavailableError`, so individual requests fail
while the process keeps serving.  Setting ``USE_IN_MEMORY_DB`` swaps in
:class:`InMemoryBackend`, which implements the subset of the pymongo
collection API used by the services.
"""

from __future__ import annotations

import copy
import logging
import threading
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from bson import ObjectId
from fastapi import Request
from pymongo import DESCENDING, MongoClient, ReturnDocument
from pymongo.errors import DuplicateKeyError, PyMongoError
from pymongo.results import DeleteResult, InsertOneResult

from .config import Settings
from .errors import DatabaseUnavailableError


logger = logging.getLogger(__name__)

SERVICES = "services"
PHOTOS = "photos"
EVENTS = "events"
QUOTES = "quotes"
SITE_SETTINGS = "site_settings"
BUDGETS = "budgets"
PURCHASES = "purchases"

COLLECTIONS: Tuple[str, ...] = (
    SERVICES,
    PHOTOS,
    EVENTS,
    QUOTES,
    SITE_SETTINGS,
    BUDGETS,
    PURCHASES,
)


class Database:
    """Explicitly managed handle on the document database.

    Parameters
    ----------
    settings : Settings
        Application settings; ``mongodb_uri``, ``mongodb_db``,
        ``mongodb_timeout_ms`` and ``use_in_memory_db`` are read.
    client_factory : Callable
        Factory used to build the MongoDB client.  Defaults to
        :class:`pymongo.MongoClient`; tests may pass a stub.
    """

    def __init__(
        self,
        settings: Settings,
        client_factory: Callable[..., Any] = MongoClient,
    ) -> None:
        self._settings = settings
        self._client_factory = client_factory
        self._client: Any = None
        self._backend: Any = None

    @property
    def is_available(self) -> bool:
        return self._backend is not None

    @property
    def backend_name(self) -> str:
        if isinstance(self._backend, InMemoryBackend):
            return "memory"
        if self._backend is not None:
            return "mongodb"
        return "unconfigured"

    def connect(self) -> None:
        """Open the configured backend and make sure indexes exist.

        Never raises: a missing URI or an unreachable server is logged
        and the database stays in a degraded state.
        """
        if self._backend is not None:
            return
        if self._settings.use_in_memory_db:
            self._backend = InMemoryBackend()
            logger.info("Using in-memory document store")
        elif not self._settings.mongodb_uri:
            logger.warning(
                "MONGODB_URI is not set; persistence is disabled and requests "
                "touching the database will fail"
            )
            return
        else:
            self._client = self._client_factory(
                self._settings.mongodb_uri,
                serverSelectionTimeoutMS=self._settings.mongodb_timeout_ms,
                tz_aware=True,
            )
            self._backend = self._client[self._settings.mongodb_db]
            try:
                self._client.admin.command("ping")
                logger.info("Connected to MongoDB database %s", self._settings.mongodb_db)
            except PyMongoError as exc:
                # The driver reconnects on its own; later requests may succeed.
                logger.error("MongoDB is not reachable yet: %s", exc)
        self.ensure_indexes()

    def ensure_indexes(self) -> None:
        """Create the unique ``id`` index on every collection."""
        for name in COLLECTIONS:
            try:
                self._backend[name].create_index("id", unique=True)
            except PyMongoError as exc:
                logger.error("Could not create index on %s: %s", name, exc)

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            logger.info("MongoDB connection closed")
        self._client = None
        self._backend = None

    def collection(self, name: str) -> Any:
        """Return the collection ``name`` or raise if nothing is connected."""
        if self._backend is None:
            raise DatabaseUnavailableError()
        return self._backend[name]

    def ping(self) -> bool:
        if self._backend is None:
            return False
        if self._client is None:
            return True
        try:
            self._client.admin.command("ping")
            return True
        except PyMongoError:
            return False


def get_database(request: Request) -> Database:
    """FastAPI dependency returning the application's ``Database``."""
    return request.app.state.db


# ---------------------------------------------------------------------------
# In-memory backend
# ---------------------------------------------------------------------------


class InMemoryBackend:
    """Dictionary of :class:`InMemoryCollection` objects keyed by name."""

    def __init__(self) -> None:
        self._collections: Dict[str, InMemoryCollection] = {}
        self._lock = threading.Lock()

    def __getitem__(self, name: str) -> "InMemoryCollection":
        with self._lock:
            if name not in self._collections:
                self._collections[name] = InMemoryCollection(name)
            return self._collections[name]

    def list_collection_names(self) -> List[str]:
        return sorted(self._collections)


def _matches(document: Dict[str, Any], query: Optional[Dict[str, Any]]) -> bool:
    if not query:
        return True
    return all(document.get(key) == value for key, value in query.items())


def _project(document: Dict[str, Any], projection: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    result = copy.deepcopy(document)
    if projection:
        for key, include in projection.items():
            if not include:
                result.pop(key, None)
    return result


def _sort_value(value: Any) -> Tuple[bool, Any]:
    return (value is None, value if value is not None else 0)


class InMemoryCollection:
    """Thread-safe list of documents with equality filters.

    Supports ``create_index`` (unique keys only), ``find``,
    ``find_one``, ``insert_one``, ``find_one_and_update`` (``$set`` and
    ``$setOnInsert``, optional upsert), ``delete_one`` and
    ``count_documents``.  Results are deep copies, mirroring the fact
    that pymongo never hands out live references.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._documents: List[Dict[str, Any]] = []
        self._unique_keys: set = set()
        self._lock = threading.RLock()

    def create_index(self, key: str, unique: bool = False, **kwargs: Any) -> str:
        if unique:
            self._unique_keys.add(key)
        return f"{key}_1"

    def _check_unique(self, document: Dict[str, Any], ignore: Optional[Dict[str, Any]] = None) -> None:
        for key in self._unique_keys:
            if key not in document:
                continue
            for existing in self._documents:
                if existing is ignore:
                    continue
                if existing.get(key) == document[key]:
                    raise DuplicateKeyError(
                        f"E11000 duplicate key error collection: {self.name} index: {key}_1"
                    )

    def find(
        self,
        filter: Optional[Dict[str, Any]] = None,
        projection: Optional[Dict[str, Any]] = None,
        sort: Optional[Sequence[Tuple[str, int]]] = None,
    ) -> List[Dict[str, Any]]:
        with self._lock:
            docs = [d for d in self._documents if _matches(d, filter)]
            # Stable sorts applied from the least significant key.
            for key, direction in reversed(list(sort or [])):
                docs.sort(key=lambda d: _sort_value(d.get(key)), reverse=direction == DESCENDING)
            return [_project(d, projection) for d in docs]

    def find_one(
        self,
        filter: Optional[Dict[str, Any]] = None,
        projection: Optional[Dict[str, Any]] = None,
    ) -> Optional[Dict[str, Any]]:
        with self._lock:
            for document in self._documents:
                if _matches(document, filter):
                    return _project(document, projection)
            return None

    def insert_one(self, document: Dict[str, Any]) -> InsertOneResult:
        with self._lock:
            self._check_unique(document)
            stored = copy.deepcopy(document)
            stored.setdefault("_id", ObjectId())
            document["_id"] = stored["_id"]
            self._documents.append(stored)
            return InsertOneResult(stored["_id"], True)

    def find_one_and_update(
        self,
        filter: Dict[str, Any],
        update: Dict[str, Any],
        projection: Optional[Dict[str, Any]] = None,
        upsert: bool = False,
        return_document: bool = ReturnDocument.BEFORE,
    ) -> Optional[Dict[str, Any]]:
        with self._lock:
            target = next((d for d in self._documents if _matches(d, filter)), None)
            if target is None:
                if not upsert:
                    return None
                created = dict(filter)
                created.update(copy.deepcopy(update.get("$setOnInsert", {})))
                created.update(copy.deepcopy(update.get("$set", {})))
                self._check_unique(created)
                created["_id"] = ObjectId()
                self._documents.append(created)
                if return_document == ReturnDocument.AFTER:
                    return _project(created, projection)
                return None
            before = _project(target, projection)
            changes = copy.deepcopy(update.get("$set", {}))
            candidate = dict(target)
            candidate.update(changes)
            self._check_unique(candidate, ignore=target)
            target.update(changes)
            if return_document == ReturnDocument.AFTER:
                return _project(target, projection)
            return before

    def delete_one(self, filter: Dict[str, Any]) -> DeleteResult:
        with self._lock:
            for index, document in enumerate(self._documents):
                if _matches(document, filter):
                    del self._documents[index]
                    return DeleteResult({"n": 1, "ok": 1.0}, True)
            return DeleteResult({"n": 0, "ok": 1.0}, True)

    def count_documents(self, filter: Optional[Dict[str, Any]] = None) -> int:
        with self._lock:
            return sum(1 for d in self._documents if _matches(d, filter))
