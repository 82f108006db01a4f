"""Dict-backed provider for tests, demos and embedding."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field

from attendance_eligibility.models.academic import (
    AcademicWeek,
    AttendanceConfig,
    AttendanceStatus,
    Bimester,
    Enrollment,
    EnrollmentStatus,
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


@dataclass
class InMemoryAcademicData:
    """In-memory implementation of ``AcademicDataProvider``.

    ``grants`` holds (role_id, module, action, scope) tuples.
    """

    principals: dict[int, Principal] = field(default_factory=dict)
    roles: dict[int, Role] = field(default_factory=dict)
    grades: dict[int, Grade] = field(default_factory=dict)
    sections: dict[int, Section] = field(default_factory=dict)
    cycles: list[SchoolCycle] = field(default_factory=list)
    bimesters: list[Bimester] = field(default_factory=list)
    holidays: list[Holiday] = field(default_factory=list)
    weeks: list[AcademicWeek] = field(default_factory=list)
    schedules: list[Schedule] = field(default_factory=list)
    enrollments: list[Enrollment] = field(default_factory=list)
    statuses: dict[int, AttendanceStatus] = field(default_factory=dict)
    status_permissions: dict[tuple[int, int], StatusPermission] = field(default_factory=dict)
    grants: set[tuple[int, str, str, PermissionScope]] = field(default_factory=set)
    assignments: dict[int, TeacherAssignment] = field(default_factory=dict)
    configs: dict[int, AttendanceConfig] = field(default_factory=dict)
    absences: list[TeacherAbsence] = field(default_factory=list)

    async def get_principal(self, user_id: int) -> Principal | None:
        return self.principals.get(user_id)

    async def get_role(self, role_id: int) -> Role | None:
        return self.roles.get(role_id)

    async def get_grade(self, grade_id: int) -> Grade | None:
        return self.grades.get(grade_id)

    async def get_section(self, section_id: int) -> Section | None:
        return self.sections.get(section_id)

    async def get_active_cycle(self) -> SchoolCycle | None:
        for cycle in self.cycles:
            if cycle.is_active and not cycle.is_archived:
                return cycle
        return None

    async def get_active_bimester(self, cycle_id: int) -> Bimester | None:
        for bimester in self.bimesters:
            if bimester.cycle_id == cycle_id and bimester.is_active:
                return bimester
        return None

    async def get_holiday_info(self, day: dt.date) -> Holiday | None:
        for holiday in self.holidays:
            if holiday.date == day:
                return holiday
        return None

    async def get_academic_week(self, bimester_id: int, day: dt.date) -> AcademicWeek | None:
        for week in self.weeks:
            if week.bimester_id == bimester_id and week.contains(day):
                return week
        return None

    async def get_schedule(self, section_id: int, week_id: int) -> Schedule | None:
        fallback = None
        for schedule in self.schedules:
            if schedule.section_id != section_id:
                continue
            if schedule.week_id == week_id:
                return schedule
            # A schedule without a week applies to every week.
            if schedule.week_id is None and fallback is None:
                fallback = schedule
        return fallback

    async def get_active_enrollments(self, section_id: int) -> list[Enrollment]:
        return [
            e
            for e in self.enrollments
            if e.section_id == section_id and e.status == EnrollmentStatus.ACTIVE
        ]

    async def get_attendance_status(self, status_id: int) -> AttendanceStatus | None:
        return self.statuses.get(status_id)

    async def get_status_permission(
        self, role_id: int, status_id: int
    ) -> StatusPermission | None:
        return self.status_permissions.get((role_id, status_id))

    async def has_permission(
        self, role: Role, module: str, action: str, scope: PermissionScope
    ) -> bool:
        return (role.id, module, action, scope) in self.grants

    async def get_teacher_assignments(self, user_id: int) -> TeacherAssignment | None:
        return self.assignments.get(user_id)

    async def get_attendance_config(self, bimester_id: int) -> AttendanceConfig | None:
        return self.configs.get(bimester_id)

    async def get_teacher_absence(self, teacher_id: int, day: dt.date) -> TeacherAbsence | None:
        for absence in self.absences:
            if absence.teacher_id == teacher_id and absence.start_date <= day <= absence.end_date:
                return absence
        return None

    def grant(self, role_id: int, action: str, scope: PermissionScope, module: str = "attendance") -> None:
        self.grants.add((role_id, module, action, scope))

    def allow_status(
        self, role_id: int, status_id: int, *, can_create: bool = True, can_modify: bool = False
    ) -> None:
        self.status_permissions[(role_id, status_id)] = StatusPermission(
            role_id=role_id, status_id=status_id, can_create=can_create, can_modify=can_modify
        )
