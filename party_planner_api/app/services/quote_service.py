"""
Persistence for quote requests.

Quotes are listed newest first.  ``submissionDate`` and the initial
``status`` are set here on creation, whatever the caller sent.
"""

import logging
from typing import Any, Dict, Optional

from pymongo import DESCENDING

from party_planner_api.app.core.db import Database, QUOTES
from party_planner_api.app.schemas.common import utc_now
from party_planner_api.app.schemas.quote import QuoteRead, QuoteStatus

from .base import DocumentService


class QuoteService(DocumentService):
    """Service for managing quote requests."""

    collection_name = QUOTES
    read_schema = QuoteRead
    sort = [("submissionDate", DESCENDING)]
    entity_label = "quote"

    @classmethod
    def prepare_new(cls, document: Dict[str, Any]) -> Dict[str, Any]:
        document["submissionDate"] = utc_now()
        document["status"] = QuoteStatus.NEW.value
        return document

    @classmethod
    async def update_status(cls, db: Database, quote_id: str, status: str) -> Optional[QuoteRead]:
        """Set the status of a quote.

        Any transition is accepted, including ``closed`` back to ``new``.
        """
        status = QuoteStatus(status).value
        updated = await cls.update(db, quote_id, {"status": status})
        if updated is not None:
            logging.getLogger(__name__).info("Quote %s is now %s", quote_id, status)
        return updated
