"""Read-only collaborator contract consumed by the phase checks."""

from __future__ import annotations

import datetime as dt
from typing import Protocol, Sequence

from attendance_eligibility.models.academic import (
    AcademicWeek,
    AttendanceConfig,
    AttendanceStatus,
    Bimester,
    Enrollment,
    Grade,
    Holiday,
    PermissionScope,
    Principal,
    Role,
    Schedule,
    SchoolCycle,
    Section,
    StatusPermission,
    TeacherAbsence,
    TeacherAssignment,
)


class AcademicDataProvider(Protocol):
    """Async lookups against the school's academic data.

    Implementations own fetching, caching and retries. The evaluator only
    reads; it never asks a provider to change anything.
    """

    async def get_principal(self, user_id: int) -> Principal | None:
        raise NotImplementedError

    async def get_role(self, role_id: int) -> Role | None:
        raise NotImplementedError

    async def get_grade(self, grade_id: int) -> Grade | None:
        raise NotImplementedError

    async def get_section(self, section_id: int) -> Section | None:
        raise NotImplementedError

    async def get_active_cycle(self) -> SchoolCycle | None:
        raise NotImplementedError

    async def get_active_bimester(self, cycle_id: int) -> Bimester | None:
        raise NotImplementedError

    async def get_holiday_info(self, day: dt.date) -> Holiday | None:
        raise NotImplementedError

    async def get_academic_week(self, bimester_id: int, day: dt.date) -> AcademicWeek | None:
        raise NotImplementedError

    async def get_schedule(self, section_id: int, week_id: int) -> Schedule | None:
        raise NotImplementedError

    async def get_active_enrollments(self, section_id: int) -> Sequence[Enrollment]:
        raise NotImplementedError

    async def get_attendance_status(self, status_id: int) -> AttendanceStatus | None:
        raise NotImplementedError

    async def get_status_permission(
        self, role_id: int, status_id: int
    ) -> StatusPermission | None:
        """The role's create/modify rights for one status, if any."""
        raise NotImplementedError

    async def has_permission(
        self, role: Role, module: str, action: str, scope: PermissionScope
    ) -> bool:
        raise NotImplementedError

    async def get_teacher_assignments(self, user_id: int) -> TeacherAssignment | None:
        raise NotImplementedError

    async def get_attendance_config(self, bimester_id: int) -> AttendanceConfig | None:
        raise NotImplementedError

    async def get_teacher_absence(self, teacher_id: int, day: dt.date) -> TeacherAbsence | None:
        raise NotImplementedError
