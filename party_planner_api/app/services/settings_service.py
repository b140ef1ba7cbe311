"""
Service layer for the site settings singleton.

The settings live in a single document whose ``id`` is the fixed
``SITE_SETTINGS_ID``.  Reading them is a get-or-create: an upsert with
``$setOnInsert`` defaults, guarded by the unique index on ``id``, so
two concurrent first reads cannot create two documents.  If both race
to insert, the loser gets a duplicate-key error and simply re-reads
the winner's document.

Updates are upserts as well: supplied fields go to ``$set`` and the
remaining defaults to ``$setOnInsert``.
"""

import logging
from typing import Any, Dict, Optional

from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from party_planner_api.app.core.db import Database, SITE_SETTINGS
from party_planner_api.app.schemas.site_settings import (
    SITE_SETTINGS_ID,
    SiteSettingsRead,
    default_site_settings,
)

from .base import PROJECTION


DEFAULT_SITE_NAME = "Servicios Las Primas"


class SettingsService:
    """Service for managing the site settings singleton."""

    @classmethod
    async def get_settings(cls, db: Database, site_name: str = DEFAULT_SITE_NAME) -> SiteSettingsRead:
        """Return the settings, creating the default document if absent."""
        return await cls._upsert(db, {}, site_name)

    @classmethod
    async def update_settings(
        cls,
        db: Database,
        changes: Dict[str, Any],
        site_name: str = DEFAULT_SITE_NAME,
    ) -> SiteSettingsRead:
        """Overwrite the supplied fields, creating the document if needed."""
        logger = logging.getLogger(__name__)
        changes = {key: value for key, value in changes.items() if key not in {"id", "_id"}}
        settings = await cls._upsert(db, changes, site_name)
        if changes:
            logger.info("Site settings updated (%s)", ", ".join(sorted(changes)))
        return settings

    @classmethod
    async def _upsert(cls, db: Database, changes: Dict[str, Any], site_name: str) -> SiteSettingsRead:
        collection = db.collection(SITE_SETTINGS)
        defaults = {
            key: value
            for key, value in default_site_settings(site_name).items()
            if key not in changes
        }
        update: Dict[str, Dict[str, Any]] = {}
        if defaults:
            update["$setOnInsert"] = defaults
        if changes:
            update["$set"] = changes
        try:
            doc: Optional[Dict[str, Any]] = collection.find_one_and_update(
                {"id": SITE_SETTINGS_ID},
                update,
                projection=PROJECTION,
                upsert=True,
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError:
            # Lost the creation race; the document exists now.
            logging.getLogger(__name__).debug("Settings upsert raced; retrying")
            if changes:
                doc = collection.find_one_and_update(
                    {"id": SITE_SETTINGS_ID},
                    {"$set": changes},
                    projection=PROJECTION,
                    return_document=ReturnDocument.AFTER,
                )
            else:
                doc = collection.find_one({"id": SITE_SETTINGS_ID}, PROJECTION)
        return SiteSettingsRead.model_validate(doc)
