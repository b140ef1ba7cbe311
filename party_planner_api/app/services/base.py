"""
Common CRUD operations over one document collection.

Each entity service subclasses :class:`DocumentService` and sets the
collection name, the read schema and the list ordering.  Operations
take the :class:`~party_planner_api.app.core.db.Database` as their
first argument and return read schemas (plain data), never cursors or
raw documents.

Not-found is signalled by ``None`` (``get_by_id``/``update``) or
``False`` (``delete``); it is not an exception.  There are no
transactions: concurrent updates of the same document follow
last-write-wins.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, List, Optional, Sequence, Tuple, Type

from pymongo import ReturnDocument

from party_planner_api.app.core.db import Database
from party_planner_api.app.schemas.common import ReadSchema


PROJECTION = {"_id": 0}


class DocumentService:
    """Base service; subclasses configure the class attributes."""

    collection_name: str = ""
    read_schema: Type[ReadSchema] = ReadSchema
    sort: Optional[Sequence[Tuple[str, int]]] = None
    entity_label: str = "document"

    @classmethod
    def _collection(cls, db: Database) -> Any:
        return db.collection(cls.collection_name)

    @classmethod
    def new_id(cls, data: Dict[str, Any]) -> str:
        """Generate the application id for a new document."""
        return uuid.uuid4().hex

    @classmethod
    def prepare_new(cls, document: Dict[str, Any]) -> Dict[str, Any]:
        """Hook for server-set fields on creation; ``document`` has its id."""
        return document

    @classmethod
    def _to_read(cls, document: Dict[str, Any]) -> ReadSchema:
        document.pop("_id", None)
        return cls.read_schema.model_validate(document)

    @classmethod
    async def list_all(cls, db: Database) -> List[ReadSchema]:
        """Return every document of the collection in the configured order."""
        cursor = cls._collection(db).find({}, projection=PROJECTION, sort=cls.sort)
        return [cls._to_read(doc) for doc in cursor]

    @classmethod
    async def get_by_id(cls, db: Database, item_id: str) -> Optional[ReadSchema]:
        doc = cls._collection(db).find_one({"id": item_id}, PROJECTION)
        if not doc:
            return None
        return cls._to_read(doc)

    @classmethod
    async def add(cls, db: Database, data: Dict[str, Any]) -> ReadSchema:
        """Insert a new document and return it.

        Any ``id`` present in ``data`` is ignored; the id is always
        generated here.
        """
        logger = logging.getLogger(__name__)
        document = {key: value for key, value in data.items() if key not in {"id", "_id"}}
        document = {"id": cls.new_id(document), **document}
        document = cls.prepare_new(document)
        cls._collection(db).insert_one(document)
        logger.info("Created %s %s", cls.entity_label, document["id"])
        return cls._to_read(document)

    @classmethod
    async def update(cls, db: Database, item_id: str, changes: Dict[str, Any]) -> Optional[ReadSchema]:
        """Overwrite the supplied fields of an existing document.

        Returns the updated document or ``None`` if ``item_id`` does not
        exist.  An empty change set leaves the document untouched.
        """
        logger = logging.getLogger(__name__)
        changes = {key: value for key, value in changes.items() if key not in {"id", "_id"}}
        if not changes:
            return await cls.get_by_id(db, item_id)
        doc = cls._collection(db).find_one_and_update(
            {"id": item_id},
            {"$set": changes},
            projection=PROJECTION,
            return_document=ReturnDocument.AFTER,
        )
        if not doc:
            return None
        logger.info("Updated %s %s (%s)", cls.entity_label, item_id, ", ".join(sorted(changes)))
        return cls._to_read(doc)

    @classmethod
    async def delete(cls, db: Database, item_id: str) -> bool:
        """Delete a document by id.

        Returns ``True`` if a document was deleted, ``False`` otherwise.
        """
        logger = logging.getLogger(__name__)
        result = cls._collection(db).delete_one({"id": item_id})
        if result.deleted_count:
            logger.info("Deleted %s %s", cls.entity_label, item_id)
        return result.deleted_count > 0
