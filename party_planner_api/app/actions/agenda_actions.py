"""
Actions for the admin agenda: calendar events, budgets and purchases.

All three revalidate ``/admin/agenda`` only; none of them is shown on
the public site.
"""

from typing import Any, Dict, List

from pydantic_core import PydanticCustomError

from party_planner_api.app.schemas.budget import (
    BudgetCreate,
    BudgetUpdate,
    PurchaseCreate,
    PurchaseUpdate,
)
from party_planner_api.app.schemas.calendar_event import (
    CalendarEventCreate,
    CalendarEventUpdate,
    check_event_window,
)
from party_planner_api.app.services.budget_service import BudgetService
from party_planner_api.app.services.event_service import EventService
from party_planner_api.app.services.purchase_service import PurchaseService

from .base import ActionContext, ActionMessages, ActionRejected, CrudActions, field_error


AGENDA_PATHS = ("/admin/agenda",)


class EventActions(CrudActions):
    """Event actions; a partial update is checked against the stored window."""

    async def prepare_update(self, ctx: ActionContext, item_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        if "startDateTime" not in changes and "endDateTime" not in changes:
            return changes
        current = await EventService.get_by_id(ctx.db, item_id)
        if current is None:
            return changes
        start = changes.get("startDateTime", current.start_date_time)
        end = changes["endDateTime"] if "endDateTime" in changes else current.end_date_time
        try:
            check_event_window(start, end)
        except PydanticCustomError as exc:
            raise ActionRejected(field_error("endDateTime", exc.message()))
        return changes


def price_items(items: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Fill in missing subtotals as ``quantity * price``."""
    priced = []
    for item in items:
        item = dict(item)
        if item.get("subtotal") is None:
            item["subtotal"] = round(item["quantity"] * item["price"], 2)
        priced.append(item)
    return priced


def items_total(items: List[Dict[str, Any]]) -> float:
    return round(sum(item["subtotal"] for item in items), 2)


class BudgetActions(CrudActions):
    """Budget actions; subtotals and total are computed when omitted."""

    async def prepare_create(self, ctx: ActionContext, data: Dict[str, Any]) -> Dict[str, Any]:
        data["items"] = price_items(data["items"])
        if data.get("total") is None:
            data["total"] = items_total(data["items"])
        return data

    async def prepare_update(self, ctx: ActionContext, item_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        if changes.get("items") is not None:
            changes["items"] = price_items(changes["items"])
            if changes.get("total") is None:
                changes["total"] = items_total(changes["items"])
        elif "total" in changes and changes["total"] is None:
            # A blank total without new items keeps the stored one.
            del changes["total"]
        return changes


event_actions = EventActions(
    label="event",
    service=EventService,
    create_schema=CalendarEventCreate,
    update_schema=CalendarEventUpdate,
    messages=ActionMessages(
        added="Evento añadido con éxito.",
        updated="Evento actualizado con éxito.",
        deleted="Evento eliminado con éxito.",
        add_failed="Error al añadir el evento",
        update_failed="Error al actualizar el evento",
        delete_failed="Error al eliminar el evento",
        id_required_update="Se requiere el ID del evento para actualizar.",
        id_required_delete="Se requiere el ID del evento para eliminar.",
        not_found="Evento con ID {id} no encontrado.",
        not_found_delete="Evento con ID {id} no encontrado o no se pudo eliminar.",
    ),
    list_paths=AGENDA_PATHS,
)

budget_actions = BudgetActions(
    label="budget",
    service=BudgetService,
    create_schema=BudgetCreate,
    update_schema=BudgetUpdate,
    messages=ActionMessages(
        added="Presupuesto añadido con éxito.",
        updated="Presupuesto actualizado con éxito.",
        deleted="Presupuesto eliminado con éxito.",
        add_failed="Error al añadir el presupuesto",
        update_failed="Error al actualizar el presupuesto",
        delete_failed="Error al eliminar el presupuesto",
        id_required_update="Se requiere el ID del presupuesto para actualizar.",
        id_required_delete="Se requiere el ID del presupuesto para eliminar.",
        not_found="Presupuesto con ID {id} no encontrado.",
        not_found_delete="Presupuesto con ID {id} no encontrado o no se pudo eliminar.",
    ),
    list_paths=AGENDA_PATHS,
)

purchase_actions = CrudActions(
    label="purchase",
    service=PurchaseService,
    create_schema=PurchaseCreate,
    update_schema=PurchaseUpdate,
    messages=ActionMessages(
        added="Compra registrada con éxito.",
        updated="Compra actualizada con éxito.",
        deleted="Compra eliminada con éxito.",
        add_failed="Error al registrar la compra",
        update_failed="Error al actualizar la compra",
        delete_failed="Error al eliminar la compra",
        id_required_update="Se requiere el ID de la compra para actualizar.",
        id_required_delete="Se requiere el ID de la compra para eliminar.",
        not_found="Compra con ID {id} no encontrada.",
        not_found_delete="Compra con ID {id} no encontrada o no se pudo eliminar.",
    ),
    list_paths=AGENDA_PATHS,
)

add_event_action = event_actions.add
update_event_action = event_actions.update
delete_event_action = event_actions.delete

add_budget_action = budget_actions.add
update_budget_action = budget_actions.update
delete_budget_action = budget_actions.delete

add_purchase_action = purchase_actions.add
update_purchase_action = purchase_actions.update
delete_purchase_action = purchase_actions.delete
