"""
Persistence for budgets.

Budget items need stable ids so that the agenda can edit them.  Items
arriving without an id, or with a temporary ``client-item-<n>`` id
generated by the browser, receive ``<budget id>-item-<n>``.
"""

from typing import Any, Dict, List, Optional

from pymongo import DESCENDING

from party_planner_api.app.core.db import BUDGETS, Database
from party_planner_api.app.schemas.budget import BudgetRead
from party_planner_api.app.schemas.common import utc_now

from .base import DocumentService


TEMPORARY_ITEM_PREFIX = "client-item-"


def assign_item_ids(budget_id: str, items: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    taken = {item.get("id") for item in items}
    assigned = []
    for index, item in enumerate(items):
        item = dict(item)
        item_id = item.get("id")
        if not item_id or item_id.startswith(TEMPORARY_ITEM_PREFIX):
            candidate = f"{budget_id}-item-{index}"
            while candidate in taken:
                candidate = f"{candidate}-{index}"
            taken.add(candidate)
            item["id"] = candidate
        assigned.append(item)
    return assigned


class BudgetService(DocumentService):
    """Service for managing client budgets."""

    collection_name = BUDGETS
    read_schema = BudgetRead
    sort = [("createdAt", DESCENDING)]
    entity_label = "budget"

    @classmethod
    def prepare_new(cls, document: Dict[str, Any]) -> Dict[str, Any]:
        document["items"] = assign_item_ids(document["id"], document.get("items") or [])
        document["createdAt"] = utc_now()
        return document

    @classmethod
    async def update(cls, db: Database, item_id: str, changes: Dict[str, Any]) -> Optional[BudgetRead]:
        if changes.get("items") is not None:
            changes = dict(changes)
            changes["items"] = assign_item_ids(item_id, changes["items"])
        return await super().update(db, item_id, changes)
