"""Factories shared by the test modules."""

import base64

from party_planner_api.app.actions import ActionContext
from party_planner_api.app.core.cache import ViewCache
from party_planner_api.app.core.config import Settings
from party_planner_api.app.core.db import Database


ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "s3cret:with-colon"
SITE_NAME = "Fiestas de Prueba"


def make_settings(**overrides) -> Settings:
    values = dict(
        use_in_memory_db=True,
        mongodb_uri="",
        admin_username=ADMIN_USERNAME,
        admin_password=ADMIN_PASSWORD,
        site_name=SITE_NAME,
        log_level="WARNING",
        log_file=None,
    )
    values.update(overrides)
    return Settings(**values)


def make_database(settings: Settings = None) -> Database:
    db = Database(settings or make_settings())
    db.connect()
    return db


def make_context(db: Database = None) -> ActionContext:
    return ActionContext(db=db or make_database(), views=ViewCache(), site_name=SITE_NAME)


def basic_auth(username: str = ADMIN_USERNAME, password: str = ADMIN_PASSWORD) -> dict:
    token = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
    return {"Authorization": f"Basic {token}"}


def service_form(**overrides) -> dict:
    form = {
        "title": "Pasteles Personalizados",
        "description": "Pasteles hechos a la medida de cada celebración.",
        "iconName": "CakeSlice",
        "image": "https://picsum.photos/seed/cake/600/400",
        "aiHint": "pastel boda",
    }
    form.update(overrides)
    return form


def photo_form(**overrides) -> dict:
    form = {
        "src": "https://picsum.photos/seed/party1/1200/800",
        "alt": "Montaje colorido de fiesta",
        "aiHint": "fiesta globos",
    }
    form.update(overrides)
    return form


def quote_form(**overrides) -> dict:
    form = {
        "name": "Laura Pérez",
        "email": "laura@fiestas.mx",
        "phone": "+529991234567",
        "eventDate": "2026-12-05",
        "services": ["Pasteles Personalizados", "Servicio de Barra Libre"],
        "message": "Quisiera una cotización para 80 invitados.",
    }
    form.update(overrides)
    return form


def event_form(**overrides) -> dict:
    form = {
        "title": "Boda García",
        "startDateTime": "2026-11-14T17:00:00Z",
        "endDateTime": "2026-11-14T23:00:00Z",
        "clientName": "Familia García",
        "servicesInvolved": ["Pasteles Personalizados"],
    }
    form.update(overrides)
    return form


def budget_form(**overrides) -> dict:
    form = {
        "clientName": "Mario Ruiz",
        "eventDate": "2026-10-30",
        "items": [
            {"id": "client-item-0", "name": "Mesa de dulces", "quantity": "1", "price": "2500"},
            {"name": "Sillas", "quantity": "50", "price": "12.5"},
        ],
    }
    form.update(overrides)
    return form


def purchase_form(**overrides) -> dict:
    form = {
        "date": "2026-10-01",
        "description": "Globos metálicos",
        "amount": "350.75",
        "purchaserName": "Ana",
    }
    form.update(overrides)
    return form
