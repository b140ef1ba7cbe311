"""Liveness endpoint reporting database availability."""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from party_planner_api.app.core.db import Database, get_database


router = APIRouter()


@router.get("/health")
async def health(db: Database = Depends(get_database)) -> Dict[str, Any]:
    """Always 200; ``database`` tells whether persistence works."""
    reachable = db.ping()
    return {
        "status": "ok" if reachable else "degraded",
        "database": db.backend_name,
        "reachable": reachable,
    }
