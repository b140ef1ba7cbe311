"""
Admin endpoints for quote requests.

New quotes arrive through the public ``POST /api/v1/quotes``; here
they are listed (newest first, cached under ``/admin/quotes``),
edited, moved between statuses and deleted.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, status

from party_planner_api.app.actions import (
    ActionContext,
    delete_quote_action,
    update_quote_action,
    update_quote_status_action,
)
from party_planner_api.app.api.deps import action_response, dump, dump_all, get_action_context
from party_planner_api.app.core.cache import ViewCache, get_view_cache
from party_planner_api.app.core.db import Database, get_database
from party_planner_api.app.core.forms import read_payload
from party_planner_api.app.services.quote_service import QuoteService


router = APIRouter()


@router.get("/quotes")
async def list_quotes(
    db: Database = Depends(get_database),
    views: ViewCache = Depends(get_view_cache),
) -> List[Dict[str, Any]]:
    async def compute() -> List[Dict[str, Any]]:
        return dump_all(await QuoteService.list_all(db))

    return await views.get_or_compute("/admin/quotes", compute)


@router.get("/quotes/{quote_id}")
async def get_quote(quote_id: str, db: Database = Depends(get_database)) -> Dict[str, Any]:
    quote = await QuoteService.get_by_id(db, quote_id)
    if quote is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Cotización no encontrada.")
    return dump(quote)


@router.patch("/quotes/{quote_id}")
async def update_quote(
    quote_id: str,
    payload: Dict[str, Any] = Depends(read_payload),
    ctx: ActionContext = Depends(get_action_context),
):
    return action_response(await update_quote_action(ctx, quote_id, payload))


@router.patch("/quotes/{quote_id}/status")
async def update_quote_status(
    quote_id: str,
    payload: Dict[str, Any] = Depends(read_payload),
    ctx: ActionContext = Depends(get_action_context),
):
    """Set ``status`` to ``new``, ``contacted`` or ``closed``."""
    return action_response(await update_quote_status_action(ctx, quote_id, payload))


@router.delete("/quotes/{quote_id}")
async def delete_quote(quote_id: str, ctx: ActionContext = Depends(get_action_context)):
    return action_response(await delete_quote_action(ctx, quote_id))
