"""
Persistence for calendar events.

Events are listed in ascending order of ``startDateTime``.  The
service stores whatever it is given: date ordering is checked by the
schemas and the action layer, and overlapping events are allowed.
"""

from pymongo import ASCENDING

from party_planner_api.app.core.db import EVENTS
from party_planner_api.app.schemas.calendar_event import CalendarEventRead

from .base import DocumentService


class EventService(DocumentService):
    """Service for managing agenda events."""

    collection_name = EVENTS
    read_schema = CalendarEventRead
    sort = [("startDateTime", ASCENDING)]
    entity_label = "calendar event"
