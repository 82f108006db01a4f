"""Evaluator configuration."""

from __future__ import annotations

import datetime as dt
import os

from pydantic import BaseModel, Field

from attendance_eligibility.models.academic import RoleKind


def _env_list(name: str) -> list[str] | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    return [item.strip() for item in raw.split(",") if item.strip()]


class EvaluatorConfig(BaseModel):
    """Configuration for the eligibility evaluator."""

    lookup_timeout_seconds: float = Field(
        default=5.0, gt=0.0, description="Upper bound on collaborator reads per phase"
    )
    permitted_role_kinds: frozenset[RoleKind] = Field(
        default=frozenset(
            {RoleKind.TEACHER, RoleKind.SECRETARY, RoleKind.COORDINATOR, RoleKind.ADMIN}
        ),
        description="Role kinds allowed to record attendance at all",
    )
    allow_future_dates: bool = False
    reference_date: dt.date | None = Field(
        default=None, description='Explicit "now" for date comparisons; None means today'
    )
    permission_module: str = "attendance"
    absence_statuses: frozenset[str] = Field(
        default=frozenset({"approved", "active"}),
        description="Teacher absence statuses that count as absent",
    )

    def today(self) -> dt.date:
        return self.reference_date or dt.date.today()

    @classmethod
    def from_env(cls) -> EvaluatorConfig:
        """Build a config from ATTENDANCE_* environment variables."""
        values: dict = {}
        timeout = os.getenv("ATTENDANCE_LOOKUP_TIMEOUT_SECONDS")
        if timeout:
            values["lookup_timeout_seconds"] = float(timeout)
        future = os.getenv("ATTENDANCE_ALLOW_FUTURE_DATES")
        if future:
            values["allow_future_dates"] = future.lower() in {"1", "true", "yes"}
        module = os.getenv("ATTENDANCE_PERMISSION_MODULE")
        if module:
            values["permission_module"] = module
        kinds = _env_list("ATTENDANCE_PERMITTED_ROLE_KINDS")
        if kinds is not None:
            values["permitted_role_kinds"] = frozenset(kinds)
        statuses = _env_list("ATTENDANCE_ABSENCE_STATUSES")
        if statuses is not None:
            values["absence_statuses"] = frozenset(statuses)
        return cls.model_validate(values)
