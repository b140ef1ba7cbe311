"""
Persistence for gallery photos.

Besides the schema validation, the service itself refuses any ``src``
that does not start with ``http`` so that no code path can store a
relative or data URL.
"""

import secrets
import time
from typing import Any, Dict, Optional

from party_planner_api.app.core.db import Database, PHOTOS
from party_planner_api.app.schemas.photo import INVALID_SOURCE_MESSAGE, PhotoRead

from .base import DocumentService


def _check_source(src: Any, message: str) -> None:
    if not isinstance(src, str) or not src.startswith("http"):
        raise ValueError(message)


class GalleryService(DocumentService):
    """Service for managing gallery photos."""

    collection_name = PHOTOS
    read_schema = PhotoRead
    entity_label = "photo"

    @classmethod
    def new_id(cls, data: Dict[str, Any]) -> str:
        return f"photo-{int(time.time() * 1000)}-{secrets.token_hex(3)}"

    @classmethod
    async def add(cls, db: Database, data: Dict[str, Any]) -> PhotoRead:
        _check_source(data.get("src"), INVALID_SOURCE_MESSAGE)
        return await super().add(db, data)

    @classmethod
    async def update(cls, db: Database, item_id: str, changes: Dict[str, Any]) -> Optional[PhotoRead]:
        if "src" in changes:
            _check_source(changes["src"], "URL de origen de foto inválida proporcionada para la actualización.")
        return await super().update(db, item_id, changes)
