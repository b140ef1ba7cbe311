"""Action for the site settings form."""

import logging
from typing import Any, Mapping

from party_planner_api.app.schemas.common import NO_CHANGES_MESSAGE
from party_planner_api.app.schemas.result import ActionResult, FailureReason
from party_planner_api.app.schemas.site_settings import SiteSettingsUpdate
from party_planner_api.app.services.settings_service import SettingsService

from .base import ActionContext, validate_form


logger = logging.getLogger(__name__)

SETTINGS_PATHS = ("/", "/admin/settings")


async def update_site_settings_action(ctx: ActionContext, form: Mapping[str, Any]) -> ActionResult:
    model, failure = validate_form(SiteSettingsUpdate, form, "update site settings")
    if failure:
        return failure
    changes = model.model_dump(by_alias=True, exclude_unset=True, exclude_none=True)
    if not changes:
        return ActionResult.fail(NO_CHANGES_MESSAGE, FailureReason.NO_CHANGES)
    try:
        settings = await SettingsService.update_settings(ctx.db, changes, ctx.site_name)
    except Exception:
        logger.exception("Error updating site settings")
        return ActionResult.fail("Error al actualizar la configuración.", FailureReason.PERSISTENCE)
    paths = ctx.revalidate(*SETTINGS_PATHS)
    return ActionResult.ok("Configuración actualizada con éxito.", settings, paths)
