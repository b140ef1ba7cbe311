"""
Admin endpoints for the service catalog and the photo gallery.

Lists are read through the view cache under the admin page paths
(``/admin/services``, ``/admin/gallery``); single items are always read
from the database.  Writes go through the actions, which revalidate those paths and the
public ones.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, status

from party_planner_api.app.actions import (
    ActionContext,
    add_photo_action,
    add_service_action,
    delete_photo_action,
    delete_service_action,
    update_photo_action,
    update_service_action,
)
from party_planner_api.app.api.deps import action_response, dump, dump_all, get_action_context
from party_planner_api.app.core.cache import ViewCache, get_view_cache
from party_planner_api.app.core.db import Database, get_database
from party_planner_api.app.core.forms import read_payload
from party_planner_api.app.services.catalog_service import CatalogService
from party_planner_api.app.services.gallery_service import GalleryService


router = APIRouter()


# Services ---------------------------------------------------------------


@router.get("/services")
async def list_services(
    db: Database = Depends(get_database),
    views: ViewCache = Depends(get_view_cache),
) -> List[Dict[str, Any]]:
    async def compute() -> List[Dict[str, Any]]:
        return dump_all(await CatalogService.list_all(db))

    return await views.get_or_compute("/admin/services", compute)


@router.get("/services/{service_id}")
async def get_service(service_id: str, db: Database = Depends(get_database)) -> Dict[str, Any]:
    service = await CatalogService.get_by_id(db, service_id)
    if service is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Servicio no encontrado.")
    return dump(service)


@router.post("/services")
async def create_service(
    payload: Dict[str, Any] = Depends(read_payload),
    ctx: ActionContext = Depends(get_action_context),
):
    return action_response(await add_service_action(ctx, payload), status.HTTP_201_CREATED)


@router.patch("/services/{service_id}")
async def update_service(
    service_id: str,
    payload: Dict[str, Any] = Depends(read_payload),
    ctx: ActionContext = Depends(get_action_context),
):
    return action_response(await update_service_action(ctx, service_id, payload))


@router.delete("/services/{service_id}")
async def delete_service(service_id: str, ctx: ActionContext = Depends(get_action_context)):
    return action_response(await delete_service_action(ctx, service_id))


# Gallery ----------------------------------------------------------------


@router.get("/gallery")
async def list_photos(
    db: Database = Depends(get_database),
    views: ViewCache = Depends(get_view_cache),
) -> List[Dict[str, Any]]:
    async def compute() -> List[Dict[str, Any]]:
        return dump_all(await GalleryService.list_all(db))

    return await views.get_or_compute("/admin/gallery", compute)


@router.get("/gallery/{photo_id}")
async def get_photo(photo_id: str, db: Database = Depends(get_database)) -> Dict[str, Any]:
    photo = await GalleryService.get_by_id(db, photo_id)
    if photo is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Foto no encontrada.")
    return dump(photo)


@router.post("/gallery")
async def create_photo(
    payload: Dict[str, Any] = Depends(read_payload),
    ctx: ActionContext = Depends(get_action_context),
):
    return action_response(await add_photo_action(ctx, payload), status.HTTP_201_CREATED)


@router.patch("/gallery/{photo_id}")
async def update_photo(
    photo_id: str,
    payload: Dict[str, Any] = Depends(read_payload),
    ctx: ActionContext = Depends(get_action_context),
):
    return action_response(await update_photo_action(ctx, photo_id, payload))


@router.delete("/gallery/{photo_id}")
async def delete_photo(photo_id: str, ctx: ActionContext = Depends(get_action_context)):
    return action_response(await delete_photo_action(ctx, photo_id))
