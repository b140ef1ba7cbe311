"""
Actions for quote requests.

Quotes come from the public contact form (:func:`submit_quote_action`)
and are then handled in the admin back office, which mostly moves them
through ``new`` -> ``contacted`` -> ``closed``.
"""

import logging
from typing import Any, Mapping

from party_planner_api.app.schemas.quote import QuoteCreate, QuoteStatusUpdate, QuoteUpdate
from party_planner_api.app.schemas.result import ActionResult, FailureReason
from party_planner_api.app.services.quote_service import QuoteService

from .base import ActionContext, ActionMessages, CrudActions, validate_form


logger = logging.getLogger(__name__)

QUOTE_PATHS = ("/admin/quotes",)

quote_actions = CrudActions(
    label="quote",
    service=QuoteService,
    create_schema=QuoteCreate,
    update_schema=QuoteUpdate,
    messages=ActionMessages(
        added="¡Consulta enviada con éxito! Nos pondremos en contacto pronto.",
        updated="Cotización actualizada con éxito.",
        deleted="Cotización eliminada con éxito.",
        add_failed="Error al enviar la consulta. Por favor, inténtalo de nuevo más tarde",
        update_failed="Error al actualizar la cotización",
        delete_failed="Error al eliminar la cotización",
        id_required_update="Se requiere el ID de la cotización para actualizar.",
        id_required_delete="Se requiere el ID de la cotización para eliminar.",
        not_found="Cotización con ID {id} no encontrada.",
        not_found_delete="Cotización con ID {id} no encontrada o no se pudo eliminar.",
    ),
    list_paths=QUOTE_PATHS,
)

submit_quote_action = quote_actions.add
update_quote_action = quote_actions.update
delete_quote_action = quote_actions.delete


async def update_quote_status_action(ctx: ActionContext, quote_id: str, form: Mapping[str, Any]) -> ActionResult:
    """Move a quote to another status; every transition is allowed."""
    if not quote_id:
        return ActionResult.fail(quote_actions.messages.id_required_update, FailureReason.MISSING_ID)
    model, failure = validate_form(QuoteStatusUpdate, form, "update quote status")
    if failure:
        return failure
    try:
        updated = await QuoteService.update_status(ctx.db, quote_id, model.status)
    except Exception:
        logger.exception("Error updating status of quote %s", quote_id)
        return ActionResult.fail("Ocurrió un error al actualizar el estado.", FailureReason.PERSISTENCE)
    if updated is None:
        return ActionResult.fail(
            quote_actions.messages.not_found.format(id=quote_id), FailureReason.NOT_FOUND
        )
    paths = ctx.revalidate(*QUOTE_PATHS)
    return ActionResult.ok("Estado de la cotización actualizado.", updated, paths)
