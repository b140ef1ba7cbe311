"""
Pydantic models for gallery photos.
"""

from typing import Optional

from pydantic import field_validator
from pydantic_core import PydanticCustomError

from .common import FormSchema, ReadSchema, require_min_length, require_url


INVALID_SOURCE_MESSAGE = "URL de origen de foto inválida proporcionada."


class PhotoFields(FormSchema):
    field_messages = {
        "src": "La fuente debe ser una URL válida.",
    }

    @field_validator("src", check_fields=False)
    @classmethod
    def _check_src(cls, value):
        if value is None:
            return value
        require_url(value, "La fuente debe ser una URL válida.")
        if not value.startswith("http"):
            raise PydanticCustomError("form_scheme", INVALID_SOURCE_MESSAGE)
        return value

    @field_validator("alt", check_fields=False)
    @classmethod
    def _check_alt(cls, value):
        if value is None:
            return value
        return require_min_length(value, 3, "El texto alternativo debe tener al menos 3 caracteres.")


class PhotoCreate(PhotoFields):
    src: str
    alt: str
    ai_hint: str = ""


class PhotoUpdate(PhotoFields):
    src: Optional[str] = None
    alt: Optional[str] = None
    ai_hint: Optional[str] = None


class PhotoRead(ReadSchema):
    id: str
    src: str
    alt: str
    ai_hint: str = ""
