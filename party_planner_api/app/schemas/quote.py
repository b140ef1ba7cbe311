"""
Pydantic models for quote requests submitted from the public contact form.

``submissionDate`` is set by the server and ``status`` starts as
``new``.  Status changes are free-form: any status may follow any
other, including ``closed`` back to ``new``.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_core import PydanticCustomError

from .common import (
    FormSchema,
    ReadSchema,
    as_string_list,
    blank_to_none,
    ensure_utc,
    require_email,
    require_min_length,
)


class QuoteStatus(str, Enum):
    NEW = "new"
    CONTACTED = "contacted"
    CLOSED = "closed"


NO_SERVICES_MESSAGE = "Debes seleccionar al menos un servicio."


class QuoteFields(FormSchema):
    field_messages = {
        "eventDate": "La fecha del evento no es válida.",
        "services": NO_SERVICES_MESSAGE,
        "email": "Por favor ingresa un correo electrónico válido.",
    }

    @field_validator("name", check_fields=False)
    @classmethod
    def _check_name(cls, value):
        if value is None:
            return value
        return require_min_length(value, 2, "El nombre debe tener al menos 2 caracteres.")

    @field_validator("email", check_fields=False)
    @classmethod
    def _check_email(cls, value):
        if value is None:
            return value
        return require_email(value, "Por favor ingresa un correo electrónico válido.")

    @field_validator("event_date", mode="before", check_fields=False)
    @classmethod
    def _blank_event_date(cls, value):
        return blank_to_none(value)

    @field_validator("event_date", check_fields=False)
    @classmethod
    def _event_date_utc(cls, value):
        return ensure_utc(value)

    @field_validator("services", mode="before", check_fields=False)
    @classmethod
    def _services_list(cls, value):
        return as_string_list(value)

    @field_validator("services", check_fields=False)
    @classmethod
    def _at_least_one_service(cls, value):
        if value is not None and not value:
            raise PydanticCustomError("form_min_items", NO_SERVICES_MESSAGE)
        return value

    @field_validator("message", check_fields=False)
    @classmethod
    def _check_message(cls, value):
        if value is None:
            return value
        return require_min_length(value, 10, "El mensaje debe tener al menos 10 caracteres.")


class QuoteCreate(QuoteFields):
    name: str
    email: str
    phone: Optional[str] = None
    event_date: Optional[datetime] = None
    services: List[str]
    message: str
    other_service_detail: Optional[str] = None


class QuoteUpdate(QuoteFields):
    clearable_fields = frozenset({"phone", "eventDate", "otherServiceDetail"})

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    event_date: Optional[datetime] = None
    services: Optional[List[str]] = None
    message: Optional[str] = None
    other_service_detail: Optional[str] = None
    status: Optional[QuoteStatus] = None


class QuoteStatusUpdate(FormSchema):
    field_messages = {"status": "Estado inválido. Usa new, contacted o closed."}

    status: QuoteStatus


class QuoteRead(ReadSchema):
    id: str
    name: str
    email: str
    phone: Optional[str] = None
    event_date: Optional[datetime] = None
    services: List[str] = Field(default_factory=list)
    message: str
    other_service_detail: Optional[str] = None
    submission_date: datetime
    status: QuoteStatus = QuoteStatus.NEW
