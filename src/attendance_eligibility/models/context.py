"""Resolution context threaded through the phase chain."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

from attendance_eligibility.errors import ContextOverwriteError
from attendance_eligibility.models.academic import (
    AcademicWeek,
    AttendanceConfig,
    AttendanceStatus,
    Bimester,
    Enrollment,
    Holiday,
    PermissionScope,
    Principal,
    Role,
    Schedule,
    SchoolCycle,
    Section,
    TeacherAbsence,
)


class ResolutionContext(BaseModel):
    """Facts resolved by phases that passed.

    Append-only: a slot is filled at most once per evaluation. Use
    ``with_facts`` to derive the next context; the instance itself is frozen.
    """

    model_config = ConfigDict(frozen=True)

    principal: Principal | None = None
    role: Role | None = None
    section: Section | None = None
    active_cycle: SchoolCycle | None = None
    active_bimester: Bimester | None = None
    holiday: Holiday | None = None
    academic_week: AcademicWeek | None = None
    schedule: Schedule | None = None
    enrollments: tuple[Enrollment, ...] | None = None
    attendance_status: AttendanceStatus | None = None
    permission_scope: PermissionScope | None = None
    attendance_config: AttendanceConfig | None = None
    teacher_absence: TeacherAbsence | None = None

    def with_facts(self, **facts: Any) -> ResolutionContext:
        if not facts:
            return self
        for name, value in facts.items():
            if name not in type(self).model_fields:
                raise ContextOverwriteError(f"Unknown context slot: {name}")
            if getattr(self, name) is not None:
                raise ContextOverwriteError(f"Context slot already resolved: {name}")
            if value is None:
                raise ContextOverwriteError(f"Cannot resolve {name} to None")
        return self.model_copy(update=facts)
