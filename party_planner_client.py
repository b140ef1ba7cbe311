"""Party planner site API client.

A thin wrapper around the site's HTTP API built on ``requests``.  It
covers the public endpoints (home page data, services, gallery, contact
form) and the back office under ``/admin``, which is protected with
HTTP Basic authentication.

Every method returns a tuple ``(data, error)``.  On success ``data``
holds the parsed JSON body and ``error`` is ``None``; on failure
``data`` is ``None`` and ``error`` is a dictionary with the keys
``status_code``, ``message`` and ``errors`` (field errors of a rejected
form, if any).  Nothing is raised for HTTP or network failures.

Example::

    client = PartyPlannerClient(base_url="http://localhost:8000",
                                username="admin", password="secret")
    service, error = client.create_service({
        "title": "Catering Gourmet",
        "description": "Menús personalizados para todo tipo de eventos.",
        "iconName": "UtensilsCrossed",
        "image": "https://placehold.co/600x400.png",
    })
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Result = Tuple[Optional[Any], Optional[Dict[str, Any]]]


class PartyPlannerClient:
    """Client for the party planner site API."""

    def __init__(
        self,
        *,
        base_url: str,
        username: Optional[str] = None,
        password: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the client.

        Args:
            base_url: Base URL of the site, e.g. ``http://localhost:8000``.
            username: Admin user name, required for ``/admin`` calls.
            password: Admin password.
            session: Optional session object.  Anything with a
                ``requests``-compatible ``request`` method works.
            timeout: Per-request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.auth = (username, password) if username is not None else None
        self.session = session or requests.Session()
        self.timeout = timeout

    def _request(
        self,
        method: str,
        path: str,
        *,
        json_body: Any | None = None,
        admin: bool = False,
    ) -> Result:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PATCH``, ``DELETE``).
            path: Path relative to :attr:`base_url`.
            json_body: JSON body for POST/PATCH requests.
            admin: Send the Basic credentials.
        Returns:
            A tuple ``(data, error)`` as described in the module docstring.
        """
        url = f"{self.base_url}{path}"
        kwargs: Dict[str, Any] = {"timeout": self.timeout}
        if json_body is not None:
            kwargs["json"] = json_body
        if admin and self.auth:
            kwargs["auth"] = self.auth
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(method, url, **kwargs)
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc), "errors": None}

        body: Any = None
        if response.content:
            try:
                body = response.json()
            except ValueError:
                body = None
        if response.status_code >= 400:
            message = ""
            errors = None
            if isinstance(body, dict):
                message = body.get("message") or body.get("detail") or ""
                errors = body.get("errors")
            if not message:
                message = response.text or f"HTTP {response.status_code}"
            logger.error("API request failed (%s): %s", response.status_code, message)
            return None, {"status_code": response.status_code, "message": message, "errors": errors}
        return body, None

    @staticmethod
    def _action_data(result: Result) -> Result:
        """Unwrap the ``data`` member of a successful action result."""
        body, error = result
        if error:
            return None, error
        return (body or {}).get("data"), None

    # ------------------------------------------------------------------
    # Public site
    # ------------------------------------------------------------------
    def health(self) -> Result:
        return self._request("GET", "/health")

    def get_home(self) -> Result:
        """Services, photos and contact settings of the landing page."""
        return self._request("GET", "/api/v1/home")

    def list_services(self) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        data, error = self._request("GET", "/api/v1/services")
        return data or [], error

    def get_service(self, service_id: str) -> Result:
        return self._request("GET", f"/api/v1/services/{service_id}")

    def list_photos(self) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        data, error = self._request("GET", "/api/v1/gallery")
        return data or [], error

    def get_site_settings(self) -> Result:
        return self._request("GET", "/api/v1/settings")

    def submit_quote(self, payload: Dict[str, Any]) -> Result:
        """Send the contact form.  ``services`` must be a non-empty list."""
        return self._action_data(self._request("POST", "/api/v1/quotes", json_body=payload))

    # ------------------------------------------------------------------
    # Back office
    # ------------------------------------------------------------------
    def dashboard(self) -> Result:
        return self._request("GET", "/admin/", admin=True)

    def create_service(self, payload: Dict[str, Any]) -> Result:
        return self._action_data(self._request("POST", "/admin/services", json_body=payload, admin=True))

    def update_service(self, service_id: str, changes: Dict[str, Any]) -> Result:
        return self._action_data(
            self._request("PATCH", f"/admin/services/{service_id}", json_body=changes, admin=True)
        )

    def delete_service(self, service_id: str) -> Tuple[bool, Optional[Dict[str, Any]]]:
        _, error = self._request("DELETE", f"/admin/services/{service_id}", admin=True)
        return error is None, error

    def create_photo(self, payload: Dict[str, Any]) -> Result:
        return self._action_data(self._request("POST", "/admin/gallery", json_body=payload, admin=True))

    def update_photo(self, photo_id: str, changes: Dict[str, Any]) -> Result:
        return self._action_data(
            self._request("PATCH", f"/admin/gallery/{photo_id}", json_body=changes, admin=True)
        )

    def delete_photo(self, photo_id: str) -> Tuple[bool, Optional[Dict[str, Any]]]:
        _, error = self._request("DELETE", f"/admin/gallery/{photo_id}", admin=True)
        return error is None, error

    def get_agenda(self) -> Result:
        """Events, budgets and purchases in one payload."""
        return self._request("GET", "/admin/agenda", admin=True)

    def create_event(self, payload: Dict[str, Any]) -> Result:
        return self._action_data(self._request("POST", "/admin/events", json_body=payload, admin=True))

    def update_event(self, event_id: str, changes: Dict[str, Any]) -> Result:
        return self._action_data(
            self._request("PATCH", f"/admin/events/{event_id}", json_body=changes, admin=True)
        )

    def delete_event(self, event_id: str) -> Tuple[bool, Optional[Dict[str, Any]]]:
        _, error = self._request("DELETE", f"/admin/events/{event_id}", admin=True)
        return error is None, error

    def create_budget(self, payload: Dict[str, Any]) -> Result:
        return self._action_data(self._request("POST", "/admin/budgets", json_body=payload, admin=True))

    def create_purchase(self, payload: Dict[str, Any]) -> Result:
        return self._action_data(self._request("POST", "/admin/purchases", json_body=payload, admin=True))

    def list_quotes(self) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        data, error = self._request("GET", "/admin/quotes", admin=True)
        return data or [], error

    def set_quote_status(self, quote_id: str, status: str) -> Result:
        return self._action_data(
            self._request("PATCH", f"/admin/quotes/{quote_id}/status", json_body={"status": status}, admin=True)
        )

    def update_site_settings(self, changes: Dict[str, Any]) -> Result:
        return self._action_data(self._request("POST", "/admin/settings", json_body=changes, admin=True))
