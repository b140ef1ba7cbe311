"""
Routers for version 1 of the site.

Two groups are exposed:

* ``router``: public reads and the contact form, mounted under
  ``/api/v1``;
* ``admin_router``: the back office, mounted under ``/admin`` and
  guarded by the HTTP Basic gate middleware.

When new endpoints are added, include their routers here.
"""

from fastapi import APIRouter

from .endpoints import agenda, catalog, health, public, quotes, site


router = APIRouter()
router.include_router(public.router, tags=["public"])

admin_router = APIRouter()
admin_router.include_router(site.router, tags=["admin"])
admin_router.include_router(catalog.router, tags=["admin: catalog"])
admin_router.include_router(agenda.router, tags=["admin: agenda"])
admin_router.include_router(quotes.router, tags=["admin: quotes"])

health_router = health.router
