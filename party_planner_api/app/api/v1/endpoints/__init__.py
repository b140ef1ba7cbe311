"""
Endpoint modules for API v1.

Each module defines an ``APIRouter`` for one area of the site (public
pages, catalog, agenda, quotes, site settings, health).  The routers
are aggregated in ``router.py``.
"""
