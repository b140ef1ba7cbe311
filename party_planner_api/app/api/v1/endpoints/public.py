"""
Public read endpoints and the contact form.

The home page payload (services, gallery photos and contact settings)
is computed through the view cache under ``/``; the services and
gallery lists under ``/#services`` and ``/#gallery``.  Admin writes
revalidate those paths, so a public read after a change always sees
it.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, Request, status

from party_planner_api.app.actions import ActionContext, submit_quote_action
from party_planner_api.app.api.deps import action_response, dump, dump_all, get_action_context
from party_planner_api.app.core.cache import ViewCache, get_view_cache
from party_planner_api.app.core.db import Database, get_database
from party_planner_api.app.core.forms import read_payload
from party_planner_api.app.services.catalog_service import CatalogService
from party_planner_api.app.services.gallery_service import GalleryService
from party_planner_api.app.services.settings_service import SettingsService


router = APIRouter()


@router.get("/home")
async def home(
    request: Request,
    db: Database = Depends(get_database),
    views: ViewCache = Depends(get_view_cache),
) -> Dict[str, Any]:
    """Everything the landing page renders."""
    site_name = request.app.state.settings.site_name

    async def compute() -> Dict[str, Any]:
        return {
            "services": dump_all(await CatalogService.list_all(db)),
            "photos": dump_all(await GalleryService.list_all(db)),
            "settings": dump(await SettingsService.get_settings(db, site_name)),
        }

    return await views.get_or_compute("/", compute)


@router.get("/services")
async def list_services(
    db: Database = Depends(get_database),
    views: ViewCache = Depends(get_view_cache),
) -> List[Dict[str, Any]]:
    async def compute() -> List[Dict[str, Any]]:
        return dump_all(await CatalogService.list_all(db))

    return await views.get_or_compute("/#services", compute)


@router.get("/services/{service_id}")
async def get_service(service_id: str, db: Database = Depends(get_database)) -> Dict[str, Any]:
    service = await CatalogService.get_by_id(db, service_id)
    if service is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Servicio no encontrado.")
    return dump(service)


@router.get("/gallery")
async def list_photos(
    db: Database = Depends(get_database),
    views: ViewCache = Depends(get_view_cache),
) -> List[Dict[str, Any]]:
    async def compute() -> List[Dict[str, Any]]:
        return dump_all(await GalleryService.list_all(db))

    return await views.get_or_compute("/#gallery", compute)


@router.get("/gallery/{photo_id}")
async def get_photo(photo_id: str, db: Database = Depends(get_database)) -> Dict[str, Any]:
    photo = await GalleryService.get_by_id(db, photo_id)
    if photo is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Foto no encontrada.")
    return dump(photo)


@router.get("/settings")
async def get_site_settings(request: Request, db: Database = Depends(get_database)) -> Dict[str, Any]:
    """Contact details shown in the header and footer."""
    return dump(await SettingsService.get_settings(db, request.app.state.settings.site_name))


@router.post("/quotes")
async def submit_quote(
    payload: Dict[str, Any] = Depends(read_payload),
    ctx: ActionContext = Depends(get_action_context),
):
    """Contact form submission; stored as a ``new`` quote."""
    result = await submit_quote_action(ctx, payload)
    return action_response(result, status.HTTP_201_CREATED)
