"""
Pydantic models for the site settings singleton.

Exactly one settings document exists, identified by
``SITE_SETTINGS_ID``.  Callers never choose another id.
"""

from datetime import datetime
from typing import Dict, Optional

from pydantic import field_validator

from .common import FormSchema, ReadSchema, require_email, require_min_length, require_phone


SITE_SETTINGS_ID = "global_settings"


def default_site_settings(site_name: str, year: Optional[int] = None) -> Dict[str, str]:
    """Values stored when the singleton is created implicitly."""
    year = year or datetime.now().year
    return {
        "whatsappNumber": "1234567890",
        "contactEmail": "info@partyplanners.fake",
        "contactPhone": "+1234567890",
        "copyrightText": f"© {year} {site_name}. Todos los derechos reservados.",
    }


class SiteSettingsFields(FormSchema):
    @field_validator("whatsapp_number", check_fields=False)
    @classmethod
    def _check_whatsapp(cls, value):
        if value is None:
            return value
        require_min_length(value, 10, "El número de WhatsApp debe tener al menos 10 dígitos.")
        return require_phone(value, "Número de WhatsApp inválido (ej: +521234567890).")

    @field_validator("contact_email", check_fields=False)
    @classmethod
    def _check_email(cls, value):
        if value is None:
            return value
        return require_email(value, "Correo electrónico de contacto inválido.")

    @field_validator("contact_phone", check_fields=False)
    @classmethod
    def _check_phone(cls, value):
        if value is None:
            return value
        require_min_length(value, 10, "El teléfono de contacto debe tener al menos 10 dígitos.")
        return require_phone(value, "Teléfono de contacto inválido (ej: +529991234567).")


class SiteSettingsUpdate(SiteSettingsFields):
    whatsapp_number: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    copyright_text: Optional[str] = None


class SiteSettingsRead(ReadSchema):
    id: str = SITE_SETTINGS_ID
    whatsapp_number: str
    contact_email: str
    contact_phone: str
    copyright_text: str = ""
