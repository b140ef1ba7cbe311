"""
Server-side actions used by the admin back office and the public forms.

Each action validates a raw form payload, calls the service layer,
revalidates the cached views it affects and returns an
:class:`~party_planner_api.app.schemas.result.ActionResult`.
"""

from .agenda_actions import (
    add_budget_action,
    add_event_action,
    add_purchase_action,
    delete_budget_action,
    delete_event_action,
    delete_purchase_action,
    update_budget_action,
    update_event_action,
    update_purchase_action,
)
from .base import ActionContext
from .catalog_actions import (
    add_photo_action,
    add_service_action,
    delete_photo_action,
    delete_service_action,
    update_photo_action,
    update_service_action,
)
from .quote_actions import (
    delete_quote_action,
    submit_quote_action,
    update_quote_action,
    update_quote_status_action,
)
from .settings_actions import update_site_settings_action
