"""
Pydantic models for budgets (presupuestos) and purchases (compras).

Budgets list priced items for a client's event.  ``subtotal`` and
``total`` may be sent by the caller; when omitted the action layer
computes them.  They are stored as given and never re-checked for
arithmetic consistency.

Purchases are the expense side of the agenda: what was bought, when
and for how much.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_core import PydanticCustomError

from .common import FormSchema, ReadSchema, blank_to_none, ensure_utc, require_min_length


class BudgetItemInput(FormSchema):
    id: Optional[str] = None
    name: str
    quantity: int
    price: float
    subtotal: Optional[float] = None

    @field_validator("id", "subtotal", mode="before")
    @classmethod
    def _blank(cls, value):
        return blank_to_none(value)

    @field_validator("name")
    @classmethod
    def _check_name(cls, value):
        return require_min_length(value, 1, "El nombre del ítem es requerido.")

    @field_validator("quantity")
    @classmethod
    def _check_quantity(cls, value):
        if value < 1:
            raise PydanticCustomError("form_min_value", "La cantidad debe ser al menos 1.")
        return value

    @field_validator("price")
    @classmethod
    def _check_price(cls, value):
        if value < 0:
            raise PydanticCustomError("form_min_value", "El precio no puede ser negativo.")
        return value


class BudgetItem(ReadSchema):
    id: str
    name: str
    quantity: int
    price: float
    subtotal: float


class BudgetFields(FormSchema):
    field_messages = {
        "eventDate": "La fecha del evento es requerida.",
        "items": "Se requiere al menos un ítem.",
        "total": "El total debe ser un número.",
    }

    @field_validator("client_name", check_fields=False)
    @classmethod
    def _check_client(cls, value):
        if value is None:
            return value
        return require_min_length(value, 2, "El nombre del cliente debe tener al menos 2 caracteres.")

    @field_validator("event_date", "total", mode="before", check_fields=False)
    @classmethod
    def _blank(cls, value):
        return blank_to_none(value)

    @field_validator("event_date", check_fields=False)
    @classmethod
    def _event_date_utc(cls, value):
        return ensure_utc(value)

    @field_validator("items", check_fields=False)
    @classmethod
    def _at_least_one_item(cls, value):
        if value is not None and not value:
            raise PydanticCustomError("form_min_items", "Se requiere al menos un ítem.")
        return value


class BudgetCreate(BudgetFields):
    client_name: str
    client_contact: Optional[str] = None
    event_date: datetime
    event_location: Optional[str] = None
    event_description: Optional[str] = None
    notes: Optional[str] = None
    items: List[BudgetItemInput]
    total: Optional[float] = None


class BudgetUpdate(BudgetFields):
    clearable_fields = frozenset({"clientContact", "eventLocation", "eventDescription", "notes", "total"})

    client_name: Optional[str] = None
    client_contact: Optional[str] = None
    event_date: Optional[datetime] = None
    event_location: Optional[str] = None
    event_description: Optional[str] = None
    notes: Optional[str] = None
    items: Optional[List[BudgetItemInput]] = None
    total: Optional[float] = None


class BudgetRead(ReadSchema):
    id: str
    client_name: str
    client_contact: Optional[str] = None
    event_date: datetime
    event_location: Optional[str] = None
    event_description: Optional[str] = None
    notes: Optional[str] = None
    items: List[BudgetItem] = Field(default_factory=list)
    total: float = 0.0
    created_at: datetime


class PurchaseFields(FormSchema):
    field_messages = {
        "date": "La fecha de la compra es requerida.",
        "amount": "El monto debe ser un número.",
    }

    @field_validator("date", mode="before", check_fields=False)
    @classmethod
    def _blank_date(cls, value):
        return blank_to_none(value)

    @field_validator("date", check_fields=False)
    @classmethod
    def _date_utc(cls, value):
        return ensure_utc(value)

    @field_validator("description", check_fields=False)
    @classmethod
    def _check_description(cls, value):
        if value is None:
            return value
        return require_min_length(value, 3, "La descripción debe tener al menos 3 caracteres.")

    @field_validator("amount", check_fields=False)
    @classmethod
    def _check_amount(cls, value):
        if value is not None and value <= 0:
            raise PydanticCustomError("form_min_value", "El monto debe ser mayor que cero.")
        return value


class PurchaseCreate(PurchaseFields):
    date: datetime
    description: str
    amount: float
    purchaser_name: Optional[str] = None


class PurchaseUpdate(PurchaseFields):
    clearable_fields = frozenset({"purchaserName"})

    date: Optional[datetime] = None
    description: Optional[str] = None
    amount: Optional[float] = None
    purchaser_name: Optional[str] = None


class PurchaseRead(ReadSchema):
    id: str
    date: datetime
    description: str
    amount: float
    purchaser_name: Optional[str] = None
    created_at: datetime
