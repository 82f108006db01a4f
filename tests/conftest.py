"""Common test fixtures."""

from __future__ import annotations

import datetime as dt

import pytest

from attendance_eligibility.agents.evaluator import EligibilityEvaluator
from attendance_eligibility.models.academic import (
    AcademicWeek,
    AttendanceConfig,
    AttendanceStatus,
    Bimester,
    Enrollment,
    Grade,
    PermissionScope,
    Principal,
    Role,
    RoleKind,
    Schedule,
    ScheduleSlot,
    SchoolCycle,
    Section,
    TeacherAssignment,
)
from attendance_eligibility.models.context import ResolutionContext
from attendance_eligibility.models.evaluator_config import EvaluatorConfig
from attendance_eligibility.models.request import ValidationInput
from attendance_eligibility.providers.memory import InMemoryAcademicData

# Tuesday inside week 8 of the first bimester.
CLASS_DAY = dt.date(2026, 3, 10)
TODAY = dt.date(2026, 3, 20)

TEACHER_ID = 7
OTHER_TEACHER_ID = 8
TEACHER_ROLE_ID = 3
GRADE_ID = 2
SECTION_ID = 21
UNASSIGNED_SECTION_ID = 22
CYCLE_ID = 1
BIMESTER_ID = 10
WEEK_ID = 100
PRESENT_STATUS_ID = 1
DISABLED_STATUS_ID = 2


@pytest.fixture
def academic_data() -> InMemoryAcademicData:
    """A school where teacher 7 may mark section 21 on CLASS_DAY.

    Section 22 belongs to the same grade but is taught by teacher 8.
    """
    data = InMemoryAcademicData(
        principals={
            TEACHER_ID: Principal(id=TEACHER_ID, name="Ana Lopez", role_id=TEACHER_ROLE_ID),
            OTHER_TEACHER_ID: Principal(id=OTHER_TEACHER_ID, name="Luis Perez", role_id=TEACHER_ROLE_ID),
        },
        roles={
            TEACHER_ROLE_ID: Role(id=TEACHER_ROLE_ID, name="Teacher", kind=RoleKind.TEACHER),
            4: Role(id=4, name="Student", kind=RoleKind.STUDENT),
            5: Role(id=5, name="Coordinator", kind=RoleKind.COORDINATOR),
        },
        grades={
            GRADE_ID: Grade(id=GRADE_ID, name="Second"),
            3: Grade(id=3, name="Third"),
        },
        sections={
            SECTION_ID: Section(id=SECTION_ID, name="A", grade_id=GRADE_ID, teacher_id=TEACHER_ID),
            UNASSIGNED_SECTION_ID: Section(
                id=UNASSIGNED_SECTION_ID, name="B", grade_id=GRADE_ID, teacher_id=OTHER_TEACHER_ID
            ),
            31: Section(id=31, name="A", grade_id=3),
        },
        cycles=[
            SchoolCycle(
                id=CYCLE_ID,
                name="2026",
                start_date=dt.date(2026, 1, 15),
                end_date=dt.date(2026, 11, 15),
            ),
        ],
        bimesters=[
            Bimester(
                id=BIMESTER_ID,
                cycle_id=CYCLE_ID,
                number=1,
                start_date=dt.date(2026, 1, 15),
                end_date=dt.date(2026, 3, 31),
            ),
        ],
        weeks=[
            AcademicWeek(
                id=WEEK_ID,
                bimester_id=BIMESTER_ID,
                number=8,
                start_date=dt.date(2026, 3, 9),
                end_date=dt.date(2026, 3, 13),
            ),
        ],
        schedules=[
            Schedule(
                id=500,
                section_id=SECTION_ID,
                slots=(
                    ScheduleSlot(day_of_week=1, teacher_id=TEACHER_ID, course_id=1),
                    ScheduleSlot(day_of_week=3, teacher_id=TEACHER_ID, course_id=2),
                ),
            ),
            Schedule(
                id=501,
                section_id=UNASSIGNED_SECTION_ID,
                slots=(ScheduleSlot(day_of_week=1, teacher_id=OTHER_TEACHER_ID, course_id=1),),
            ),
        ],
        enrollments=[
            Enrollment(
                id=900,
                student_id=1,
                section_id=SECTION_ID,
                cycle_id=CYCLE_ID,
                date_enrolled=dt.date(2026, 1, 20),
            ),
            Enrollment(
                id=901,
                student_id=2,
                section_id=SECTION_ID,
                cycle_id=CYCLE_ID,
                date_enrolled=dt.date(2026, 1, 20),
            ),
            Enrollment(
                id=902,
                student_id=3,
                section_id=UNASSIGNED_SECTION_ID,
                cycle_id=CYCLE_ID,
                date_enrolled=dt.date(2026, 1, 20),
            ),
        ],
        statuses={
            PRESENT_STATUS_ID: AttendanceStatus(id=PRESENT_STATUS_ID, code="P", name="Present"),
            DISABLED_STATUS_ID: AttendanceStatus(
                id=DISABLED_STATUS_ID, code="X", name="Legacy", is_active=False
            ),
        },
        assignments={
            TEACHER_ID: TeacherAssignment(user_id=TEACHER_ID, section_ids=frozenset({SECTION_ID})),
            OTHER_TEACHER_ID: TeacherAssignment(
                user_id=OTHER_TEACHER_ID, section_ids=frozenset({UNASSIGNED_SECTION_ID})
            ),
        },
        configs={BIMESTER_ID: AttendanceConfig(id=1, bimester_id=BIMESTER_ID)},
    )
    data.grant(TEACHER_ROLE_ID, "create", PermissionScope.OWN)
    data.allow_status(TEACHER_ROLE_ID, PRESENT_STATUS_ID)
    return data


@pytest.fixture
def evaluator_config() -> EvaluatorConfig:
    return EvaluatorConfig(reference_date=TODAY, lookup_timeout_seconds=0.5)


@pytest.fixture
def evaluator(academic_data, evaluator_config) -> EligibilityEvaluator:
    return EligibilityEvaluator(academic_data, evaluator_config)


@pytest.fixture
def valid_request() -> ValidationInput:
    return ValidationInput(
        date=CLASS_DAY,
        user_id=TEACHER_ID,
        role_id=TEACHER_ROLE_ID,
        grade_id=GRADE_ID,
        section_id=SECTION_ID,
        attendance_status_id=PRESENT_STATUS_ID,
    )


@pytest.fixture
def resolved_context(academic_data) -> ResolutionContext:
    """Context as it stands after phases 1-8 passed for ``valid_request``."""
    return ResolutionContext(
        principal=academic_data.principals[TEACHER_ID],
        role=academic_data.roles[TEACHER_ROLE_ID],
        section=academic_data.sections[SECTION_ID],
        active_cycle=academic_data.cycles[0],
        active_bimester=academic_data.bimesters[0],
        academic_week=academic_data.weeks[0],
        schedule=academic_data.schedules[0],
    )
