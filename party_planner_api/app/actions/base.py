"""
Validation, persistence and revalidation wrapped into actions.

An action receives the raw form payload (a mapping of strings or string
lists) and always returns an :class:`ActionResult`:

* invalid input: field errors, persistence is never touched;
* update without any field: rejected as a no-op with its own message;
* update setting a required field to null (blank or JSON null):
  rejected as a validation error;
* unknown id: ``success=False`` with a not-found message;
* persistence failure: logged with traceback and reported with a
  generic message (some entities append the error text);
* success: the affected views are revalidated and listed in the result.

:class:`CrudActions` implements the add/update/delete flow once; each
entity module configures it with its schemas, service, messages and
view paths.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type

from pydantic import ValidationError

from party_planner_api.app.core.cache import ViewCache
from party_planner_api.app.core.db import Database
from party_planner_api.app.schemas.common import (
    NO_CHANGES_MESSAGE,
    REQUIRED_MESSAGE,
    VALIDATION_FAILED_MESSAGE,
    FormSchema,
    flatten_errors,
)
from party_planner_api.app.schemas.result import ActionResult, FailureReason
from party_planner_api.app.services.base import DocumentService
from party_planner_api.app.services.settings_service import DEFAULT_SITE_NAME


logger = logging.getLogger(__name__)


@dataclass
class ActionContext:
    """What an action needs besides its input."""

    db: Database
    views: ViewCache
    site_name: str = DEFAULT_SITE_NAME

    def revalidate(self, *paths: str) -> list:
        return self.views.revalidate(*paths)


class ActionRejected(Exception):
    """Raised by hooks to stop an action with a prepared result."""

    def __init__(self, result: ActionResult) -> None:
        super().__init__(result.message)
        self.result = result


def validate_form(
    schema: Type[FormSchema], form: Mapping[str, Any], label: str
) -> Tuple[Optional[FormSchema], Optional[ActionResult]]:
    """Validate ``form`` against ``schema``.

    Returns ``(model, None)`` on success or ``(None, failure)``.
    Validation failures are expected input errors and are logged at
    INFO level only.
    """
    try:
        return schema.model_validate(dict(form)), None
    except ValidationError as exc:
        errors = flatten_errors(exc, schema)
        logger.info("Validation error (%s): %s", label, errors)
        return None, ActionResult.fail(VALIDATION_FAILED_MESSAGE, FailureReason.VALIDATION, errors)


def field_error(field: str, message: str) -> ActionResult:
    return ActionResult.fail(VALIDATION_FAILED_MESSAGE, FailureReason.VALIDATION, {field: [message]})


def cleared_field_errors(schema: Type[FormSchema], changes: Mapping[str, Any]) -> Dict[str, List[str]]:
    """Errors for fields sent as null that the stored document requires."""
    return {
        key: [schema.field_messages.get(key) or REQUIRED_MESSAGE]
        for key, value in changes.items()
        if value is None and key not in schema.clearable_fields
    }


def _failure_message(base: str, exc: Exception, append_error: bool) -> str:
    if append_error:
        return f"{base}: {exc}"
    return f"{base}."


@dataclass(frozen=True)
class ActionMessages:
    """Localized messages of one entity.

    ``*_failed`` messages have no final period: it is added, or the
    error text is appended after a colon.  ``not_found`` messages are
    formatted with ``id``.
    """

    added: str
    updated: str
    deleted: str
    add_failed: str
    update_failed: str
    delete_failed: str
    id_required_update: str
    id_required_delete: str
    not_found: str
    not_found_delete: str
    append_error_on_add: bool = False
    append_error_on_update: bool = False


class CrudActions:
    """Add/update/delete actions for one entity."""

    def __init__(
        self,
        *,
        label: str,
        service: Type[DocumentService],
        create_schema: Type[FormSchema],
        update_schema: Type[FormSchema],
        messages: ActionMessages,
        list_paths: Tuple[str, ...],
        edit_path: Optional[str] = None,
    ) -> None:
        self.label = label
        self.service = service
        self.create_schema = create_schema
        self.update_schema = update_schema
        self.messages = messages
        self.list_paths = list_paths
        self.edit_path = edit_path

    # Hooks -------------------------------------------------------------

    async def prepare_create(self, ctx: ActionContext, data: Dict[str, Any]) -> Dict[str, Any]:
        return data

    async def prepare_update(self, ctx: ActionContext, item_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        return changes

    def update_paths(self, item_id: str) -> Tuple[str, ...]:
        if self.edit_path:
            return self.list_paths + (self.edit_path.format(id=item_id),)
        return self.list_paths

    # Actions -----------------------------------------------------------

    async def add(self, ctx: ActionContext, form: Mapping[str, Any]) -> ActionResult:
        model, failure = validate_form(self.create_schema, form, f"add {self.label}")
        if failure:
            return failure
        try:
            data = await self.prepare_create(ctx, model.model_dump(by_alias=True))
            created = await self.service.add(ctx.db, data)
        except ActionRejected as rejected:
            return rejected.result
        except Exception as exc:
            logger.exception("Error adding %s", self.label)
            message = _failure_message(self.messages.add_failed, exc, self.messages.append_error_on_add)
            return ActionResult.fail(message, FailureReason.PERSISTENCE)
        paths = ctx.revalidate(*self.list_paths)
        return ActionResult.ok(self.messages.added, created, paths)

    async def update(self, ctx: ActionContext, item_id: str, form: Mapping[str, Any]) -> ActionResult:
        if not item_id:
            return ActionResult.fail(self.messages.id_required_update, FailureReason.MISSING_ID)
        model, failure = validate_form(self.update_schema, form, f"update {self.label}")
        if failure:
            return failure
        changes = model.model_dump(by_alias=True, exclude_unset=True)
        if not changes:
            return ActionResult.fail(NO_CHANGES_MESSAGE, FailureReason.NO_CHANGES)
        cleared = cleared_field_errors(self.update_schema, changes)
        if cleared:
            logger.info("Validation error (update %s): %s", self.label, cleared)
            return ActionResult.fail(VALIDATION_FAILED_MESSAGE, FailureReason.VALIDATION, cleared)
        try:
            changes = await self.prepare_update(ctx, item_id, changes)
            updated = await self.service.update(ctx.db, item_id, changes)
        except ActionRejected as rejected:
            return rejected.result
        except Exception as exc:
            logger.exception("Error updating %s %s", self.label, item_id)
            message = _failure_message(self.messages.update_failed, exc, self.messages.append_error_on_update)
            return ActionResult.fail(message, FailureReason.PERSISTENCE)
        if updated is None:
            return ActionResult.fail(self.messages.not_found.format(id=item_id), FailureReason.NOT_FOUND)
        paths = ctx.revalidate(*self.update_paths(item_id))
        return ActionResult.ok(self.messages.updated, updated, paths)

    async def delete(self, ctx: ActionContext, item_id: str) -> ActionResult:
        if not item_id:
            return ActionResult.fail(self.messages.id_required_delete, FailureReason.MISSING_ID)
        try:
            deleted = await self.service.delete(ctx.db, item_id)
        except Exception:
            logger.exception("Error deleting %s %s", self.label, item_id)
            return ActionResult.fail(f"{self.messages.delete_failed}.", FailureReason.PERSISTENCE)
        if not deleted:
            return ActionResult.fail(
                self.messages.not_found_delete.format(id=item_id), FailureReason.NOT_FOUND
            )
        paths = ctx.revalidate(*self.list_paths)
        return ActionResult.ok(self.messages.deleted, None, paths)
