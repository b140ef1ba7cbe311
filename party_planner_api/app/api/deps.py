"""
Shared dependencies and helpers for the route modules.
"""

from typing import Any, Dict, Iterable, List

from fastapi import Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from party_planner_api.app.actions import ActionContext
from party_planner_api.app.schemas.result import ActionResult, FailureReason


STATUS_BY_REASON = {
    FailureReason.VALIDATION: status.HTTP_422_UNPROCESSABLE_ENTITY,
    FailureReason.MISSING_ID: status.HTTP_400_BAD_REQUEST,
    FailureReason.NO_CHANGES: status.HTTP_400_BAD_REQUEST,
    FailureReason.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    FailureReason.PERSISTENCE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def get_action_context(request: Request) -> ActionContext:
    state = request.app.state
    return ActionContext(db=state.db, views=state.view_cache, site_name=state.settings.site_name)


def dump(model: BaseModel) -> Dict[str, Any]:
    return model.model_dump(mode="json", by_alias=True)


def dump_all(models: Iterable[BaseModel]) -> List[Dict[str, Any]]:
    return [dump(model) for model in models]


def action_response(result: ActionResult, success_status: int = status.HTTP_200_OK) -> JSONResponse:
    """Serialize an action result, choosing the status from its outcome."""
    if result.success:
        status_code = success_status
    else:
        status_code = STATUS_BY_REASON.get(result.reason, status.HTTP_400_BAD_REQUEST)
    return JSONResponse(result.model_dump(mode="json", by_alias=True), status_code=status_code)
