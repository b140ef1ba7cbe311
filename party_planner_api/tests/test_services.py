import re
import unittest
from datetime import datetime, timedelta, timezone

from pymongo.errors import DuplicateKeyError

from party_planner_api.app.core.db import PHOTOS, SITE_SETTINGS
from party_planner_api.app.schemas.site_settings import SITE_SETTINGS_ID
from party_planner_api.app.services.budget_service import BudgetService, assign_item_ids
from party_planner_api.app.services.catalog_service import CatalogService, slugify
from party_planner_api.app.services.event_service import EventService
from party_planner_api.app.services.gallery_service import GalleryService
from party_planner_api.app.services.purchase_service import PurchaseService
from party_planner_api.app.services.quote_service import QuoteService
from party_planner_api.app.services.settings_service import SettingsService

from .helpers import SITE_NAME, make_database


def at(day: int, hour: int = 12) -> datetime:
    return datetime(2026, 11, day, hour, tzinfo=timezone.utc)


class CatalogServiceTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.db = make_database()

    async def test_add_generates_slug_based_id_and_ignores_client_id(self):
        created = await CatalogService.add(self.db, {
            "id": "elegido-por-el-cliente",
            "title": "Mesa de Dulces",
            "description": "Dulces para todos los gustos.",
            "iconName": "Gift",
            "image": "https://picsum.photos/600/400",
            "aiHint": "",
        })
        self.assertRegex(created.id, r"^mesa-de-dulces-\d+-[0-9a-f]+$")
        fetched = await CatalogService.get_by_id(self.db, created.id)
        self.assertEqual(fetched.title, "Mesa de Dulces")
        self.assertIsNone(await CatalogService.get_by_id(self.db, "elegido-por-el-cliente"))

    async def test_update_and_delete(self):
        created = await CatalogService.add(self.db, {
            "title": "Barra Libre",
            "description": "Bebidas toda la noche.",
            "iconName": "Wine",
            "image": "https://picsum.photos/600/400",
        })
        updated = await CatalogService.update(self.db, created.id, {"title": "Barra Premium"})
        self.assertEqual(updated.title, "Barra Premium")
        self.assertEqual(updated.description, "Bebidas toda la noche.")
        self.assertTrue(await CatalogService.delete(self.db, created.id))
        self.assertFalse(await CatalogService.delete(self.db, created.id))

    async def test_update_unknown_id_returns_none(self):
        self.assertIsNone(await CatalogService.update(self.db, "nope", {"title": "Algo"}))

    async def test_delete_unknown_id_returns_false(self):
        self.assertFalse(await CatalogService.delete(self.db, "does-not-exist"))

    def test_slugify(self):
        self.assertEqual(slugify("Renta de Mesas y Sillas"), "renta-de-mesas-y-sillas")
        self.assertEqual(slugify("Mesas/Sillas ¿Renta?"), "mesas-sillas-renta")
        self.assertEqual(slugify("  Decoración Única #1 "), "decoracion-unica-1")
        self.assertEqual(slugify("¿?"), "servicio")


class GalleryServiceTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.db = make_database()

    async def test_photo_ids_are_prefixed(self):
        photo = await GalleryService.add(self.db, {"src": "https://picsum.photos/1200/800", "alt": "Globos"})
        self.assertTrue(re.match(r"^photo-\d+-[0-9a-f]+$", photo.id))

    async def test_source_without_http_is_never_stored(self):
        with self.assertRaises(ValueError):
            await GalleryService.add(self.db, {"src": "/static/foto.jpg", "alt": "Globos"})
        self.assertEqual(self.db.collection(PHOTOS).count_documents({}), 0)

        photo = await GalleryService.add(self.db, {"src": "https://picsum.photos/1200/800", "alt": "Globos"})
        with self.assertRaises(ValueError):
            await GalleryService.update(self.db, photo.id, {"src": "data:image/png;base64,AAAA"})


class EventServiceTests(unittest.IsolatedAsyncioTestCase):
    async def test_events_are_listed_by_start_date(self):
        db = make_database()
        for title, day in (("Tercero", 20), ("Primero", 2), ("Segundo", 11)):
            await EventService.add(db, {"title": title, "startDateTime": at(day)})
        events = await EventService.list_all(db)
        self.assertEqual([event.title for event in events], ["Primero", "Segundo", "Tercero"])


class QuoteServiceTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.db = make_database()

    async def quote(self, name):
        return await QuoteService.add(self.db, {
            "name": name,
            "email": "cliente@fiestas.mx",
            "services": ["Pasteles"],
            "message": "Necesito una cotización.",
            "status": "closed",
        })

    async def test_new_quotes_start_as_new_with_submission_date(self):
        quote = await self.quote("Ana")
        self.assertEqual(quote.status, "new")
        self.assertLess(datetime.now(timezone.utc) - quote.submission_date, timedelta(minutes=1))

    async def test_quotes_are_listed_newest_first(self):
        first = await self.quote("Primera")
        second = await self.quote("Segunda")
        # Force distinct timestamps.
        self.db.collection("quotes").find_one_and_update(
            {"id": first.id}, {"$set": {"submissionDate": datetime(2020, 1, 1, tzinfo=timezone.utc)}}
        )
        quotes = await QuoteService.list_all(self.db)
        self.assertEqual([quote.id for quote in quotes], [second.id, first.id])

    async def test_any_status_transition_is_allowed(self):
        quote = await self.quote("Ana")
        for status in ("closed", "new", "contacted"):
            updated = await QuoteService.update_status(self.db, quote.id, status)
            self.assertEqual(updated.status, status)

    async def test_unknown_status_raises(self):
        quote = await self.quote("Ana")
        with self.assertRaises(ValueError):
            await QuoteService.update_status(self.db, quote.id, "archived")


class BudgetServiceTests(unittest.IsolatedAsyncioTestCase):
    def test_assign_item_ids_replaces_temporary_ids(self):
        items = assign_item_ids("b1", [
            {"id": "client-item-3", "name": "Mesa"},
            {"name": "Sillas"},
            {"id": "b1-item-7", "name": "Manteles"},
        ])
        self.assertEqual([item["id"] for item in items], ["b1-item-0", "b1-item-1", "b1-item-7"])

    async def test_budgets_get_item_ids_and_creation_date(self):
        db = make_database()
        budget = await BudgetService.add(db, {
            "clientName": "Mario",
            "eventDate": at(30),
            "items": [{"name": "Mesa", "quantity": 1, "price": 100.0, "subtotal": 100.0}],
            "total": 100.0,
        })
        self.assertEqual(budget.items[0].id, f"{budget.id}-item-0")
        self.assertIsNotNone(budget.created_at)

    async def test_purchases_listed_newest_first(self):
        db = make_database()
        for description, day in (("Vieja", 1), ("Nueva", 25), ("Media", 12)):
            await PurchaseService.add(db, {"date": at(day), "description": description, "amount": 10.0})
        purchases = await PurchaseService.list_all(db)
        self.assertEqual([p.description for p in purchases], ["Nueva", "Media", "Vieja"])


class SettingsServiceTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.db = make_database()

    async def test_first_read_creates_defaults_once(self):
        first = await SettingsService.get_settings(self.db, SITE_NAME)
        second = await SettingsService.get_settings(self.db, SITE_NAME)
        self.assertEqual(first, second)
        self.assertEqual(first.id, SITE_SETTINGS_ID)
        self.assertIn(SITE_NAME, first.copyright_text)
        self.assertEqual(self.db.collection(SITE_SETTINGS).count_documents({}), 1)

    async def test_update_keeps_unsent_fields(self):
        await SettingsService.get_settings(self.db, SITE_NAME)
        updated = await SettingsService.update_settings(self.db, {"contactEmail": "hola@fiestas.mx"}, SITE_NAME)
        self.assertEqual(updated.contact_email, "hola@fiestas.mx")
        self.assertEqual(updated.whatsapp_number, "1234567890")

    async def test_update_before_first_read_creates_document(self):
        updated = await SettingsService.update_settings(self.db, {"whatsappNumber": "+529991234567"}, SITE_NAME)
        self.assertEqual(updated.whatsapp_number, "+529991234567")
        self.assertEqual(updated.contact_phone, "+1234567890")
        self.assertEqual(self.db.collection(SITE_SETTINGS).count_documents({}), 1)

    async def test_lost_creation_race_falls_back_to_read(self):
        collection = self.db.collection(SITE_SETTINGS)
        collection.insert_one({"id": SITE_SETTINGS_ID, "whatsappNumber": "5550000000",
                               "contactEmail": "a@fiestas.mx", "contactPhone": "+5550000000",
                               "copyrightText": "©"})
        original = collection.find_one_and_update
        calls = []

        def racing_update(filter, update, **kwargs):
            calls.append(kwargs.get("upsert", False))
            if kwargs.get("upsert"):
                raise DuplicateKeyError("E11000 duplicate key")
            return original(filter, update, **kwargs)

        collection.find_one_and_update = racing_update
        settings = await SettingsService.get_settings(self.db, SITE_NAME)
        self.assertEqual(settings.whatsapp_number, "5550000000")
        self.assertEqual(calls, [True])


if __name__ == "__main__":
    unittest.main()
