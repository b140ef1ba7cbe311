"""
Pydantic models for the services catalogue.

A service is one offering shown on the home page (candy bar, cakes,
furniture rental ...).  ``ServiceCreate`` validates the admin form,
``ServiceUpdate`` carries the same rules with every field optional and
``ServiceRead`` is what the persistence layer returns.

The icon is a closed enumeration of the icon identifiers the front end
knows how to draw; anything else is rejected at validation time.
"""

from enum import Enum
from typing import Optional

from pydantic import Field, field_validator

from .common import FormSchema, ReadSchema, require_min_length, require_url


class IconName(str, Enum):
    """Icons available for service cards."""

    PARTY_POPPER = "PartyPopper"
    UTENSILS_CROSSED = "UtensilsCrossed"
    CAKE_SLICE = "CakeSlice"
    ARMCHAIR = "Armchair"
    WINE = "Wine"
    MUSIC = "Music"
    CAMERA = "Camera"
    GIFT = "Gift"
    SPARKLES = "Sparkles"
    FLOWER = "Flower2"
    TENT = "Tent"
    LIGHTBULB = "Lightbulb"
    PALETTE = "Palette"
    BALLOON = "Balloon"


DEFAULT_ICON = IconName.PARTY_POPPER


def resolve_icon(name: Optional[str]) -> IconName:
    """Map a stored icon name to a known icon, falling back to the default."""
    try:
        return IconName(name)
    except ValueError:
        return DEFAULT_ICON


class ServiceFields(FormSchema):
    """Validators shared by create and update payloads."""

    field_messages = {
        "iconName": "Se requiere un nombre de ícono válido.",
        "image": "La imagen debe ser una URL válida.",
    }

    @field_validator("title", check_fields=False)
    @classmethod
    def _check_title(cls, value):
        if value is None:
            return value
        return require_min_length(value, 3, "El título debe tener al menos 3 caracteres.")

    @field_validator("description", check_fields=False)
    @classmethod
    def _check_description(cls, value):
        if value is None:
            return value
        return require_min_length(value, 10, "La descripción debe tener al menos 10 caracteres.")

    @field_validator("image", check_fields=False)
    @classmethod
    def _check_image(cls, value):
        if value is None:
            return value
        return require_url(value, "La imagen debe ser una URL válida.")


class ServiceCreate(ServiceFields):
    """Schema for creating a service."""

    title: str = Field(..., examples=["Pasteles Personalizados"])
    description: str
    icon_name: IconName
    image: str = Field(..., examples=["https://picsum.photos/seed/cake/600/400"])
    ai_hint: str = ""


class ServiceUpdate(ServiceFields):
    """Schema for updating a service.

    All fields are optional; only provided fields will be updated.
    """

    title: Optional[str] = None
    description: Optional[str] = None
    icon_name: Optional[IconName] = None
    image: Optional[str] = None
    ai_hint: Optional[str] = None


class ServiceRead(ReadSchema):
    """Schema for reading a service."""

    id: str
    title: str
    description: str
    icon_name: str
    image: str
    ai_hint: str = ""
