"""
Shared building blocks for the form schemas.

Every entity schema derives from :class:`FormSchema`.  Attribute names
are snake_case; on the wire (forms, JSON and stored documents) the
camelCase alias is used, e.g. ``icon_name`` <-> ``iconName``.

Field constraints raise :class:`pydantic_core.PydanticCustomError`
with a ``form_*`` error type so that :func:`flatten_errors` can tell
our localized messages apart from pydantic's built-in (English) ones.
Built-in errors (missing field, wrong type, unparsable date) are
replaced by the per-field message in ``field_messages`` or by a
generic Spanish message.
"""

import re
from datetime import datetime, timezone
from typing import Any, ClassVar, Dict, FrozenSet, List, Optional, Type

from pydantic import AnyUrl, BaseModel, ConfigDict, EmailStr, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError


PHONE_PATTERN = re.compile(r"^\+?[1-9]\d{1,14}$")

REQUIRED_MESSAGE = "Este campo es obligatorio."
INVALID_MESSAGE = "Valor inválido."
VALIDATION_FAILED_MESSAGE = "Validación fallida. Por favor, revisa los campos."
NO_CHANGES_MESSAGE = "No se enviaron cambios para actualizar."

_url_adapter = TypeAdapter(AnyUrl)
_email_adapter = TypeAdapter(EmailStr)


class FormSchema(BaseModel):
    """Base class for validated form payloads."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        use_enum_values=True,
    )

    # Alias -> message used for built-in pydantic errors on that field.
    field_messages: ClassVar[Dict[str, str]] = {}

    # Aliases an update may set to null.  Any other field that validates
    # to null (JSON null, or a blank date or number) is rejected as required.
    clearable_fields: ClassVar[FrozenSet[str]] = frozenset()


class ReadSchema(BaseModel):
    """Base class for documents returned by the persistence layer."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


def require_min_length(value: str, length: int, message: str) -> str:
    if len(value) < length:
        raise PydanticCustomError("form_min_length", message, {"min_length": length})
    return value


def require_url(value: str, message: str) -> str:
    try:
        _url_adapter.validate_python(value)
    except ValidationError:
        raise PydanticCustomError("form_url", message)
    return value


def require_email(value: str, message: str) -> str:
    try:
        return _email_adapter.validate_python(value)
    except ValidationError:
        raise PydanticCustomError("form_email", message)


def require_phone(value: str, message: str) -> str:
    if not PHONE_PATTERN.match(value):
        raise PydanticCustomError("form_pattern", message)
    return value


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive datetimes as UTC and convert aware ones to UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def as_string_list(value: Any) -> Any:
    """Accept a single form value or a repeated one; drop empty entries."""
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    if isinstance(value, (list, tuple)):
        return [item for item in value if not (isinstance(item, str) and not item.strip())]
    return value


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _error_key(loc: tuple) -> str:
    if not loc:
        return "form"
    return ".".join(str(part) for part in loc)


def flatten_errors(exc: ValidationError, schema: Type[FormSchema]) -> Dict[str, List[str]]:
    """Turn a ``ValidationError`` into ``{field: [message, ...]}``."""
    errors: Dict[str, List[str]] = {}
    for error in exc.errors():
        key = _error_key(tuple(error.get("loc", ())))
        if str(error.get("type", "")).startswith("form_"):
            message = error["msg"]
        else:
            fallback = REQUIRED_MESSAGE if error.get("type") == "missing" else INVALID_MESSAGE
            message = schema.field_messages.get(key) or fallback
        bucket = errors.setdefault(key, [])
        if message not in bucket:
            bucket.append(message)
    return errors
