"""
Admin endpoints for the agenda: calendar events, budgets and purchases.

``GET /agenda`` returns the three lists together, as the agenda page
shows them, and is cached under ``/admin/agenda``.  Each collection also
has its own CRUD routes.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, status

from party_planner_api.app.actions import (
    ActionContext,
    add_budget_action,
    add_event_action,
    add_purchase_action,
    delete_budget_action,
    delete_event_action,
    delete_purchase_action,
    update_budget_action,
    update_event_action,
    update_purchase_action,
)
from party_planner_api.app.api.deps import action_response, dump, dump_all, get_action_context
from party_planner_api.app.core.cache import ViewCache, get_view_cache
from party_planner_api.app.core.db import Database, get_database
from party_planner_api.app.core.forms import read_payload
from party_planner_api.app.services.budget_service import BudgetService
from party_planner_api.app.services.event_service import EventService
from party_planner_api.app.services.purchase_service import PurchaseService


router = APIRouter()


@router.get("/agenda")
async def agenda(
    db: Database = Depends(get_database),
    views: ViewCache = Depends(get_view_cache),
) -> Dict[str, Any]:
    async def compute() -> Dict[str, Any]:
        return {
            "events": dump_all(await EventService.list_all(db)),
            "budgets": dump_all(await BudgetService.list_all(db)),
            "purchases": dump_all(await PurchaseService.list_all(db)),
        }

    return await views.get_or_compute("/admin/agenda", compute)


# Events -----------------------------------------------------------------


@router.get("/events")
async def list_events(db: Database = Depends(get_database)) -> List[Dict[str, Any]]:
    """Events ordered by start date, earliest first."""
    return dump_all(await EventService.list_all(db))


@router.get("/events/{event_id}")
async def get_event(event_id: str, db: Database = Depends(get_database)) -> Dict[str, Any]:
    event = await EventService.get_by_id(db, event_id)
    if event is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Evento no encontrado.")
    return dump(event)


@router.post("/events")
async def create_event(
    payload: Dict[str, Any] = Depends(read_payload),
    ctx: ActionContext = Depends(get_action_context),
):
    return action_response(await add_event_action(ctx, payload), status.HTTP_201_CREATED)


@router.patch("/events/{event_id}")
async def update_event(
    event_id: str,
    payload: Dict[str, Any] = Depends(read_payload),
    ctx: ActionContext = Depends(get_action_context),
):
    return action_response(await update_event_action(ctx, event_id, payload))


@router.delete("/events/{event_id}")
async def delete_event(event_id: str, ctx: ActionContext = Depends(get_action_context)):
    return action_response(await delete_event_action(ctx, event_id))


# Budgets ----------------------------------------------------------------


@router.get("/budgets")
async def list_budgets(db: Database = Depends(get_database)) -> List[Dict[str, Any]]:
    return dump_all(await BudgetService.list_all(db))


@router.get("/budgets/{budget_id}")
async def get_budget(budget_id: str, db: Database = Depends(get_database)) -> Dict[str, Any]:
    budget = await BudgetService.get_by_id(db, budget_id)
    if budget is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Presupuesto no encontrado.")
    return dump(budget)


@router.post("/budgets")
async def create_budget(
    payload: Dict[str, Any] = Depends(read_payload),
    ctx: ActionContext = Depends(get_action_context),
):
    return action_response(await add_budget_action(ctx, payload), status.HTTP_201_CREATED)


@router.patch("/budgets/{budget_id}")
async def update_budget(
    budget_id: str,
    payload: Dict[str, Any] = Depends(read_payload),
    ctx: ActionContext = Depends(get_action_context),
):
    return action_response(await update_budget_action(ctx, budget_id, payload))


@router.delete("/budgets/{budget_id}")
async def delete_budget(budget_id: str, ctx: ActionContext = Depends(get_action_context)):
    return action_response(await delete_budget_action(ctx, budget_id))


# Purchases --------------------------------------------------------------


@router.get("/purchases")
async def list_purchases(db: Database = Depends(get_database)) -> List[Dict[str, Any]]:
    return dump_all(await PurchaseService.list_all(db))


@router.get("/purchases/{purchase_id}")
async def get_purchase(purchase_id: str, db: Database = Depends(get_database)) -> Dict[str, Any]:
    purchase = await PurchaseService.get_by_id(db, purchase_id)
    if purchase is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Compra no encontrada.")
    return dump(purchase)


@router.post("/purchases")
async def create_purchase(
    payload: Dict[str, Any] = Depends(read_payload),
    ctx: ActionContext = Depends(get_action_context),
):
    return action_response(await add_purchase_action(ctx, payload), status.HTTP_201_CREATED)


@router.patch("/purchases/{purchase_id}")
async def update_purchase(
    purchase_id: str,
    payload: Dict[str, Any] = Depends(read_payload),
    ctx: ActionContext = Depends(get_action_context),
):
    return action_response(await update_purchase_action(ctx, purchase_id, payload))


@router.delete("/purchases/{purchase_id}")
async def delete_purchase(purchase_id: str, ctx: ActionContext = Depends(get_action_context)):
    return action_response(await delete_purchase_action(ctx, purchase_id))
