"""
Persistence for the services catalogue.

A service id is derived from its title so that URLs stay readable:
the title is folded to ASCII and lower-cased, every run of other
characters becomes a single ``-`` and a millisecond timestamp plus a
short random suffix keeps it unique, e.g.
``pasteles-personalizados-1717171717171-a1b2c3``.  Ids therefore only
contain ``[a-z0-9-]`` and are safe in a URL path.
"""

import re
import secrets
import time
import unicodedata
from typing import Any, Dict

from party_planner_api.app.core.db import SERVICES
from party_planner_api.app.schemas.service import ServiceRead

from .base import DocumentService


def slugify(title: str) -> str:
    ascii_title = unicodedata.normalize("NFKD", title).encode("ascii", "ignore").decode("ascii")
    return re.sub(r"[^a-z0-9]+", "-", ascii_title.lower()).strip("-") or "servicio"


class CatalogService(DocumentService):
    """Service for managing the offered services."""

    collection_name = SERVICES
    read_schema = ServiceRead
    entity_label = "service"

    @classmethod
    def new_id(cls, data: Dict[str, Any]) -> str:
        millis = int(time.time() * 1000)
        return f"{slugify(data.get('title', ''))}-{millis}-{secrets.token_hex(3)}"
