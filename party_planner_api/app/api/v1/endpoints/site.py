"""
Admin endpoints for the site settings and the dashboard summary.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, Request

from party_planner_api.app.actions import ActionContext, update_site_settings_action
from party_planner_api.app.api.deps import action_response, dump, get_action_context
from party_planner_api.app.core.cache import ViewCache, get_view_cache
from party_planner_api.app.core.db import COLLECTIONS, SITE_SETTINGS, Database, get_database
from party_planner_api.app.core.forms import read_payload
from party_planner_api.app.services.settings_service import SettingsService


router = APIRouter()


@router.get("/")
async def dashboard(db: Database = Depends(get_database)) -> Dict[str, Any]:
    """Number of stored documents per collection."""
    counts = {
        name: db.collection(name).count_documents({})
        for name in COLLECTIONS
        if name != SITE_SETTINGS
    }
    return {"backend": db.backend_name, "counts": counts}


@router.get("/settings")
async def get_site_settings(
    request: Request,
    db: Database = Depends(get_database),
    views: ViewCache = Depends(get_view_cache),
) -> Dict[str, Any]:
    site_name = request.app.state.settings.site_name

    async def compute() -> Dict[str, Any]:
        return dump(await SettingsService.get_settings(db, site_name))

    return await views.get_or_compute("/admin/settings", compute)


@router.post("/settings")
async def update_site_settings(
    payload: Dict[str, Any] = Depends(read_payload),
    ctx: ActionContext = Depends(get_action_context),
):
    return action_response(await update_site_settings_action(ctx, payload))
