"""
Pydantic models for calendar events (agenda).

Events are plain records: overlapping events are allowed and nothing
checks availability.  The only invariant is that an event cannot end
before it starts.  :func:`check_event_window` holds that rule and is
used both by the schema validators and by the update action, which
has to merge a partial change with the stored event before checking.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

from .common import (
    FormSchema,
    ReadSchema,
    as_string_list,
    blank_to_none,
    ensure_utc,
    require_min_length,
)


END_BEFORE_START_MESSAGE = "La fecha de finalización no puede ser anterior a la fecha de inicio."


def check_event_window(start: Optional[datetime], end: Optional[datetime]) -> None:
    """Raise when ``end`` is earlier than ``start``.

    Either side may be missing, in which case there is nothing to check.
    """
    if start is None or end is None:
        return
    if ensure_utc(start) > ensure_utc(end):
        raise PydanticCustomError("form_date_order", END_BEFORE_START_MESSAGE)


class CalendarEventFields(FormSchema):
    field_messages = {
        "startDateTime": "La fecha y hora de inicio son requeridas.",
        "endDateTime": "La fecha de finalización no es válida.",
        "allDay": "Valor inválido para 'todo el día'.",
    }

    @field_validator("title", check_fields=False)
    @classmethod
    def _check_title(cls, value):
        if value is None:
            return value
        return require_min_length(value, 3, "El título debe tener al menos 3 caracteres.")

    @field_validator("start_date_time", mode="before", check_fields=False)
    @classmethod
    def _blank_start(cls, value):
        # A blank start must still fail as "required" on create.
        return blank_to_none(value)

    @field_validator("end_date_time", mode="before", check_fields=False)
    @classmethod
    def _blank_end(cls, value):
        return blank_to_none(value)

    @field_validator("start_date_time", check_fields=False)
    @classmethod
    def _start_utc(cls, value):
        return ensure_utc(value)

    @field_validator("end_date_time", check_fields=False)
    @classmethod
    def _end_after_start(cls, value, info: ValidationInfo):
        value = ensure_utc(value)
        check_event_window(info.data.get("start_date_time"), value)
        return value

    @field_validator("services_involved", mode="before", check_fields=False)
    @classmethod
    def _services_list(cls, value):
        return as_string_list(value)


class CalendarEventCreate(CalendarEventFields):
    title: str = Field(..., examples=["Boda García"])
    start_date_time: datetime
    end_date_time: Optional[datetime] = None
    description: Optional[str] = None
    client_name: Optional[str] = None
    client_contact: Optional[str] = None
    services_involved: List[str] = Field(default_factory=list)
    all_day: bool = False


class CalendarEventUpdate(CalendarEventFields):
    """All fields optional.  Clearing ``endDateTime`` is done with a blank value."""

    clearable_fields = frozenset({"endDateTime", "description", "clientName", "clientContact"})

    title: Optional[str] = None
    start_date_time: Optional[datetime] = None
    end_date_time: Optional[datetime] = None
    description: Optional[str] = None
    client_name: Optional[str] = None
    client_contact: Optional[str] = None
    services_involved: Optional[List[str]] = None
    all_day: Optional[bool] = None

    @field_validator("start_date_time", check_fields=False)
    @classmethod
    def _start_not_cleared(cls, value):
        if value is None:
            raise PydanticCustomError("form_required", "La fecha y hora de inicio son requeridas.")
        return value


class CalendarEventRead(ReadSchema):
    id: str
    title: str
    start_date_time: datetime
    end_date_time: Optional[datetime] = None
    description: Optional[str] = None
    client_name: Optional[str] = None
    client_contact: Optional[str] = None
    services_involved: List[str] = Field(default_factory=list)
    all_day: bool = False
