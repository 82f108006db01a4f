"""Validation request model."""

from __future__ import annotations

import datetime as dt
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from attendance_eligibility.errors import ContractViolationError


class AttendanceAction(str, Enum):
    """Write action being gated."""

    CREATE = "create"
    UPDATE = "update"


class ValidationInput(BaseModel):
    """An attendance action to be checked for eligibility.

    Only ``date`` is required. A missing id makes the phase that needs it
    fail; it never makes the evaluation crash.
    """

    model_config = ConfigDict(frozen=True)

    date: dt.date
    user_id: int | None = None
    role_id: int | None = None
    grade_id: int | None = None
    section_id: int | None = None
    attendance_status_id: int | None = None
    action: AttendanceAction = AttendanceAction.CREATE
    enrollment_id: int | None = Field(
        default=None, description="Targeted student enrollment, if any"
    )


def coerce_request(request: Any) -> ValidationInput:
    """Accept a ``ValidationInput`` or a dict that validates as one.

    Raises:
        ContractViolationError: For anything else.
    """
    if isinstance(request, ValidationInput):
        return request
    if isinstance(request, dict):
        try:
            return ValidationInput.model_validate(request)
        except ValidationError as exc:
            raise ContractViolationError(f"Malformed validation request: {exc}") from exc
    raise ContractViolationError(
        f"Expected ValidationInput, got {type(request).__name__}"
    )
