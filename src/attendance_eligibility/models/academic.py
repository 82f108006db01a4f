"""Academic records read from collaborators during validation."""

from __future__ import annotations

import datetime as dt
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class RoleKind(str, Enum):
    """Coarse role kinds."""

    TEACHER = "teacher"
    SECRETARY = "secretary"
    COORDINATOR = "coordinator"
    ADMIN = "admin"
    STUDENT = "student"
    PARENT = "parent"


class PermissionScope(str, Enum):
    """Breadth of records a role may act on."""

    OWN = "own"
    COORDINATOR = "coordinator"
    ALL = "all"


class WeekType(str, Enum):
    REGULAR = "regular"
    EVALUATION = "evaluation"
    BREAK = "break"


class EnrollmentStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    GRADUATED = "graduated"
    TRANSFERRED = "transferred"


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True)


class Principal(_Record):
    """An authenticated user."""

    id: int
    name: str = ""
    role_id: int | None = None
    is_active: bool = True
    is_revoked: bool = Field(default=False, description="Session or credentials revoked")


class Role(_Record):
    id: int
    name: str
    kind: RoleKind
    is_active: bool = True


class Grade(_Record):
    id: int
    name: str
    is_active: bool = True


class Section(_Record):
    id: int
    name: str
    grade_id: int
    teacher_id: int | None = Field(default=None, description="Homeroom (guide) teacher")
    is_active: bool = True


class SchoolCycle(_Record):
    id: int
    name: str
    start_date: dt.date
    end_date: dt.date
    is_active: bool = True
    is_archived: bool = False

    def contains(self, day: dt.date) -> bool:
        return self.start_date <= day <= self.end_date


class Bimester(_Record):
    id: int
    cycle_id: int
    number: int = Field(ge=1, le=4)
    start_date: dt.date
    end_date: dt.date
    is_active: bool = True

    def contains(self, day: dt.date) -> bool:
        return self.start_date <= day <= self.end_date


class Holiday(_Record):
    id: int
    bimester_id: int | None = None
    date: dt.date
    description: str = ""
    is_recovered: bool = Field(
        default=False, description="Makeup instructional day: attendance still applies"
    )


class AcademicWeek(_Record):
    id: int
    bimester_id: int
    number: int = Field(ge=1)
    start_date: dt.date
    end_date: dt.date
    week_type: WeekType = WeekType.REGULAR

    def contains(self, day: dt.date) -> bool:
        return self.start_date <= day <= self.end_date


class ScheduleSlot(_Record):
    """One class period. day_of_week follows date.weekday() (0=Mon..6=Sun)."""

    day_of_week: int = Field(ge=0, le=6)
    teacher_id: int | None = None
    course_id: int | None = None
    start_time: dt.time | None = None
    end_time: dt.time | None = None


class Schedule(_Record):
    id: int
    section_id: int
    week_id: int | None = None
    is_active: bool = True
    slots: tuple[ScheduleSlot, ...] = ()

    def slots_on(self, day: dt.date) -> list[ScheduleSlot]:
        weekday = day.weekday()
        return [s for s in self.slots if s.day_of_week == weekday]


class Enrollment(_Record):
    id: int
    student_id: int
    section_id: int
    cycle_id: int
    status: EnrollmentStatus = EnrollmentStatus.ACTIVE
    date_enrolled: dt.date | None = None


class AttendanceStatus(_Record):
    id: int
    code: str
    name: str
    is_active: bool = True


class StatusPermission(_Record):
    """What a role may do with one attendance status."""

    role_id: int
    status_id: int
    can_create: bool = True
    can_modify: bool = False


class AttendanceConfig(_Record):
    """Attendance module settings for a bimester."""

    id: int = 0
    bimester_id: int | None = None
    is_active: bool = True
    is_locked: bool = Field(default=False, description="Bimester frozen for edits")
    edit_window_days: int | None = Field(
        default=None, ge=0, description="Days after the date during which edits are allowed"
    )


class TeacherAssignment(_Record):
    """Sections a user teaches and grades a user coordinates."""

    user_id: int
    section_ids: frozenset[int] = frozenset()
    coordinated_grade_ids: frozenset[int] = frozenset()


class TeacherAbsence(_Record):
    id: int
    teacher_id: int
    start_date: dt.date
    end_date: dt.date
    status: str = "approved"
    reason: str = ""
    substitute_id: int | None = None
    substitute_name: str | None = None

    @property
    def has_substitute(self) -> bool:
        return self.substitute_id is not None
