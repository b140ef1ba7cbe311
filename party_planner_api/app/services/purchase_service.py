"""
Persistence for purchases (expenses recorded in the agenda).
"""

from typing import Any, Dict

from pymongo import DESCENDING

from party_planner_api.app.core.db import PURCHASES
from party_planner_api.app.schemas.budget import PurchaseRead
from party_planner_api.app.schemas.common import utc_now

from .base import DocumentService


class PurchaseService(DocumentService):
    collection_name = PURCHASES
    read_schema = PurchaseRead
    sort = [("date", DESCENDING)]
    entity_label = "purchase"

    @classmethod
    def prepare_new(cls, document: Dict[str, Any]) -> Dict[str, Any]:
        document["createdAt"] = utc_now()
        return document
