import unittest

from fastapi.testclient import TestClient

from party_planner_api.app.main import create_app
from party_planner_api.app.schemas.calendar_event import END_BEFORE_START_MESSAGE

from .helpers import (
    SITE_NAME,
    basic_auth,
    event_form,
    make_settings,
    photo_form,
    purchase_form,
    quote_form,
    service_form,
)


class RouteTestCase(unittest.TestCase):
    settings_overrides = {}

    def setUp(self):
        self.app = create_app(make_settings(**self.settings_overrides))
        self.client = TestClient(self.app)
        self.client.__enter__()
        self.addCleanup(self.client.__exit__, None, None, None)
        self.auth = basic_auth()


class PublicRouteTests(RouteTestCase):
    def test_home_reflects_admin_changes(self):
        home = self.client.get("/api/v1/home").json()
        self.assertEqual(home["services"], [])
        self.assertIn(SITE_NAME, home["settings"]["copyrightText"])

        created = self.client.post("/admin/services", data=service_form(), headers=self.auth)
        self.assertEqual(created.status_code, 201)

        home = self.client.get("/api/v1/home").json()
        self.assertEqual([service["title"] for service in home["services"]], ["Pasteles Personalizados"])

    def test_service_detail(self):
        created = self.client.post("/admin/services", json=service_form(), headers=self.auth).json()
        service_id = created["data"]["id"]
        response = self.client.get(f"/api/v1/services/{service_id}")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["iconName"], "CakeSlice")
        self.assertEqual(self.client.get("/api/v1/services/nope").status_code, 404)

    def test_gallery(self):
        self.client.post("/admin/gallery", data=photo_form(), headers=self.auth)
        photos = self.client.get("/api/v1/gallery").json()
        self.assertEqual(len(photos), 1)
        self.assertEqual(self.client.get(f"/api/v1/gallery/{photos[0]['id']}").status_code, 200)
        self.assertEqual(self.client.get("/api/v1/gallery/photo-0").status_code, 404)

    def test_contact_form(self):
        response = self.client.post("/api/v1/quotes", data=quote_form())
        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertTrue(body["success"])
        self.assertNotIn("reason", body)
        self.assertEqual(body["data"]["services"], ["Pasteles Personalizados", "Servicio de Barra Libre"])

        quotes = self.client.get("/admin/quotes", headers=self.auth).json()
        self.assertEqual(len(quotes), 1)
        self.assertEqual(quotes[0]["status"], "new")

    def test_contact_form_validation(self):
        response = self.client.post("/api/v1/quotes", data=quote_form(name="A", services=[]))
        self.assertEqual(response.status_code, 422)
        body = response.json()
        self.assertFalse(body["success"])
        self.assertIn("name", body["errors"])
        self.assertIn("services", body["errors"])

    def test_settings_and_health(self):
        settings = self.client.get("/api/v1/settings").json()
        self.assertEqual(settings["contactEmail"], "info@partyplanners.fake")
        health = self.client.get("/health").json()
        self.assertEqual(health, {"status": "ok", "database": "memory", "reachable": True})


class AdminRouteTests(RouteTestCase):
    def test_service_crud_status_codes(self):
        invalid = self.client.post("/admin/services", data=service_form(title="ab"), headers=self.auth)
        self.assertEqual(invalid.status_code, 422)
        self.assertEqual(invalid.json()["errors"]["title"], ["El título debe tener al menos 3 caracteres."])

        service_id = self.client.post("/admin/services", data=service_form(), headers=self.auth).json()["data"]["id"]
        self.assertEqual(self.client.get(f"/admin/services/{service_id}", headers=self.auth).status_code, 200)

        empty = self.client.patch(f"/admin/services/{service_id}", data={}, headers=self.auth)
        self.assertEqual(empty.status_code, 400)
        self.assertEqual(empty.json()["message"], "No se enviaron cambios para actualizar.")

        updated = self.client.patch(f"/admin/services/{service_id}", data={"iconName": "Gift"}, headers=self.auth)
        self.assertEqual(updated.status_code, 200)
        self.assertEqual(updated.json()["data"]["iconName"], "Gift")
        self.assertIn(f"/admin/edit-service/{service_id}", updated.json()["revalidated"])

        missing = self.client.patch("/admin/services/nope", data={"title": "Algo nuevo"}, headers=self.auth)
        self.assertEqual(missing.status_code, 404)

        self.assertEqual(self.client.delete(f"/admin/services/{service_id}", headers=self.auth).status_code, 200)
        self.assertEqual(self.client.delete(f"/admin/services/{service_id}", headers=self.auth).status_code, 404)
        self.assertEqual(self.client.get(f"/admin/services/{service_id}", headers=self.auth).status_code, 404)

    def test_admin_list_is_revalidated_after_write(self):
        self.assertEqual(self.client.get("/admin/gallery", headers=self.auth).json(), [])
        self.client.post("/admin/gallery", json=photo_form(), headers=self.auth)
        self.assertEqual(len(self.client.get("/admin/gallery", headers=self.auth).json()), 1)

    def test_event_dates_are_checked_on_update(self):
        created = self.client.post("/admin/events", data=event_form(), headers=self.auth)
        self.assertEqual(created.status_code, 201)
        event_id = created.json()["data"]["id"]
        response = self.client.patch(
            f"/admin/events/{event_id}",
            data={"endDateTime": "2026-11-14T08:00:00Z"},
            headers=self.auth,
        )
        self.assertEqual(response.status_code, 422)
        self.assertEqual(response.json()["errors"]["endDateTime"], [END_BEFORE_START_MESSAGE])

    def test_required_fields_cannot_be_cleared_on_update(self):
        purchase_id = self.client.post("/admin/purchases", data=purchase_form(), headers=self.auth).json()["data"]["id"]
        blank = self.client.patch(f"/admin/purchases/{purchase_id}", data={"date": ""}, headers=self.auth)
        self.assertEqual(blank.status_code, 422)
        null = self.client.patch(f"/admin/purchases/{purchase_id}", json={"date": None}, headers=self.auth)
        self.assertEqual(null.status_code, 422)
        self.assertEqual(null.json()["errors"], {"date": ["La fecha de la compra es requerida."]})
        agenda = self.client.get("/admin/agenda", headers=self.auth)
        self.assertEqual(agenda.status_code, 200)
        self.assertEqual(len(agenda.json()["purchases"]), 1)

        service_id = self.client.post("/admin/services", data=service_form(), headers=self.auth).json()["data"]["id"]
        response = self.client.patch(f"/admin/services/{service_id}", json={"title": None}, headers=self.auth)
        self.assertEqual(response.status_code, 422)
        self.assertEqual(self.client.get("/api/v1/services").status_code, 200)

    def test_service_id_from_punctuated_title_is_addressable(self):
        created = self.client.post(
            "/admin/services", data=service_form(title="Mesas/Sillas ¿Renta? #1"), headers=self.auth
        )
        self.assertEqual(created.status_code, 201)
        service_id = created.json()["data"]["id"]
        self.assertRegex(service_id, r"^mesas-sillas-renta-1-\d+-[0-9a-f]+$")
        self.assertEqual(self.client.get(f"/api/v1/services/{service_id}").status_code, 200)
        self.assertEqual(self.client.get(f"/admin/services/{service_id}", headers=self.auth).status_code, 200)
        self.assertEqual(self.client.delete(f"/admin/services/{service_id}", headers=self.auth).status_code, 200)


    def test_budget_from_nested_form_fields(self):
        form = {
            "clientName": "Mario Ruiz",
            "eventDate": "2026-10-30T00:00:00Z",
            "items[0][id]": "client-item-0",
            "items[0][name]": "Mesa de dulces",
            "items[0][quantity]": "1",
            "items[0][price]": "2500",
            "items[1][name]": "Sillas",
            "items[1][quantity]": "50",
            "items[1][price]": "12.5",
        }
        response = self.client.post("/admin/budgets", data=form, headers=self.auth)
        self.assertEqual(response.status_code, 201)
        budget = response.json()["data"]
        self.assertEqual(budget["total"], 3125.0)
        self.assertEqual(budget["items"][0]["id"], f"{budget['id']}-item-0")

        agenda = self.client.get("/admin/agenda", headers=self.auth).json()
        self.assertEqual(len(agenda["budgets"]), 1)
        self.assertEqual(agenda["events"], [])

    def test_quote_status_route(self):
        quote_id = self.client.post("/api/v1/quotes", data=quote_form()).json()["data"]["id"]
        response = self.client.patch(f"/admin/quotes/{quote_id}/status", data={"status": "closed"}, headers=self.auth)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["data"]["status"], "closed")
        self.assertEqual(self.client.get(f"/admin/quotes/{quote_id}", headers=self.auth).json()["status"], "closed")

    def test_settings_update_reaches_public_site(self):
        self.client.get("/api/v1/home")
        response = self.client.post("/admin/settings", data={"whatsappNumber": "+529991234567"}, headers=self.auth)
        self.assertEqual(response.status_code, 200)
        home = self.client.get("/api/v1/home").json()
        self.assertEqual(home["settings"]["whatsappNumber"], "+529991234567")
        self.assertEqual(
            self.client.get("/admin/settings", headers=self.auth).json()["whatsappNumber"],
            "+529991234567",
        )

    def test_dashboard_counts(self):
        self.client.post("/api/v1/quotes", data=quote_form())
        dashboard = self.client.get("/admin/", headers=self.auth).json()
        self.assertEqual(dashboard["backend"], "memory")
        self.assertEqual(dashboard["counts"]["quotes"], 1)
        self.assertNotIn("site_settings", dashboard["counts"])


class DegradedDatabaseRouteTests(RouteTestCase):
    settings_overrides = {"use_in_memory_db": False, "mongodb_uri": ""}

    def test_reads_fail_with_service_unavailable(self):
        response = self.client.get("/api/v1/services")
        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.json()["detail"], "La base de datos no está configurada.")

    def test_writes_report_a_generic_failure(self):
        response = self.client.post("/admin/services", data=service_form(), headers=self.auth)
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json()["message"], "Error al añadir el servicio.")

    def test_health_reports_degraded(self):
        health = self.client.get("/health").json()
        self.assertEqual(health["status"], "degraded")
        self.assertEqual(health["database"], "unconfigured")


if __name__ == "__main__":
    unittest.main()
