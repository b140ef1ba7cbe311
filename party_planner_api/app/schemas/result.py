"""
Uniform envelope returned by every action.

``reason`` is internal: routes use it to pick the HTTP status code and
it is excluded from the serialized payload.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class FailureReason(str, Enum):
    VALIDATION = "validation"
    MISSING_ID = "missing_id"
    NO_CHANGES = "no_changes"
    NOT_FOUND = "not_found"
    PERSISTENCE = "persistence"


class ActionResult(BaseModel):
    success: bool
    message: str
    data: Optional[Any] = None
    errors: Optional[Dict[str, List[str]]] = None
    revalidated: List[str] = Field(default_factory=list)
    reason: Optional[FailureReason] = Field(default=None, exclude=True)

    @classmethod
    def ok(cls, message: str, data: Any = None, revalidated: Optional[List[str]] = None) -> "ActionResult":
        return cls(success=True, message=message, data=data, revalidated=revalidated or [])

    @classmethod
    def fail(
        cls,
        message: str,
        reason: FailureReason,
        errors: Optional[Dict[str, List[str]]] = None,
    ) -> "ActionResult":
        return cls(success=False, message=message, errors=errors, reason=reason)
