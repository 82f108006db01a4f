"""Classroom phases: are classes held, with students, by a present teacher.

8. ScheduleCheck - the section has classes on the date's weekday this week
9. EnrollmentCheck - the section has active students in the cycle on the date
10. AttendanceStatusCheck - the status is enabled and usable by the role
13. TeacherAbsenceCheck - absent teachers have a substitute
"""

from __future__ import annotations

from attendance_eligibility.models.academic import EnrollmentStatus
from attendance_eligibility.models.context import ResolutionContext
from attendance_eligibility.models.evaluator_config import EvaluatorConfig
from attendance_eligibility.models.request import AttendanceAction, ValidationInput
from attendance_eligibility.phases.base import PhaseCheck, PhaseOutcome
from attendance_eligibility.providers.base import AcademicDataProvider

NO_SCHEDULE = "no schedule configured for this grade/section in this period"
NO_ENROLLMENT = "no active enrollment(s) for this section/date"
INVALID_STATUS = "invalid or disabled attendance status"


class ScheduleCheck(PhaseCheck):
    @property
    def phase_id(self) -> int:
        return 8

    @property
    def name(self) -> str:
        return "Schedule"

    @property
    def depends_on(self) -> tuple[int, ...]:
        return (3, 7)

    @property
    def resource(self) -> str:
        return "schedule"

    async def check(
        self,
        request: ValidationInput,
        ctx: ResolutionContext,
        data: AcademicDataProvider,
        config: EvaluatorConfig,
    ) -> PhaseOutcome:
        schedule = await data.get_schedule(ctx.section.id, ctx.academic_week.id)
        if schedule is None or not schedule.is_active or schedule.section_id != ctx.section.id:
            return PhaseOutcome.fail(NO_SCHEDULE)
        if not schedule.slots_on(request.date):
            return PhaseOutcome.fail(f"{NO_SCHEDULE}: no classes on {request.date:%A}")

        return PhaseOutcome.ok(schedule=schedule)


class EnrollmentCheck(PhaseCheck):
    """Active enrollments in the section and cycle as of the date."""

    @property
    def phase_id(self) -> int:
        return 9

    @property
    def name(self) -> str:
        return "Enrollment"

    @property
    def depends_on(self) -> tuple[int, ...]:
        return (3, 4)

    @property
    def resource(self) -> str:
        return "enrollments"

    async def check(
        self,
        request: ValidationInput,
        ctx: ResolutionContext,
        data: AcademicDataProvider,
        config: EvaluatorConfig,
    ) -> PhaseOutcome:
        rows = await data.get_active_enrollments(ctx.section.id)
        enrollments = tuple(
            e
            for e in rows
            if e.status == EnrollmentStatus.ACTIVE
            and e.section_id == ctx.section.id
            and (e.date_enrolled is None or e.date_enrolled <= request.date)
            and e.cycle_id == ctx.active_cycle.id
        )
        if not enrollments:
            return PhaseOutcome.fail(NO_ENROLLMENT)

        if request.enrollment_id is not None and all(
            e.id != request.enrollment_id for e in enrollments
        ):
            return PhaseOutcome.fail(
                f"{NO_ENROLLMENT}: enrollment {request.enrollment_id} is not active in this section"
            )

        return PhaseOutcome.ok(enrollments=enrollments)


class AttendanceStatusCheck(PhaseCheck):
    """The status must be active and usable by the requesting role.

    A role needs ``can_create`` on the status to create records with it and
    ``can_modify`` to update them.
    """

    @property
    def phase_id(self) -> int:
        return 10

    @property
    def name(self) -> str:
        return "Attendance status"

    @property
    def resource(self) -> str:
        return "attendance status"

    async def check(
        self,
        request: ValidationInput,
        ctx: ResolutionContext,
        data: AcademicDataProvider,
        config: EvaluatorConfig,
    ) -> PhaseOutcome:
        if request.attendance_status_id is None:
            return PhaseOutcome.fail(INVALID_STATUS)

        status = await data.get_attendance_status(request.attendance_status_id)
        if status is None or not status.is_active:
            return PhaseOutcome.fail(INVALID_STATUS)
        if request.role_id is None:
            return PhaseOutcome.fail(INVALID_STATUS)

        permission = await data.get_status_permission(request.role_id, status.id)
        if permission is None:
            return PhaseOutcome.fail(f"{INVALID_STATUS}: role has no access to {status.name}")
        allowed = (
            permission.can_modify
            if request.action == AttendanceAction.UPDATE
            else permission.can_create
        )
        if not allowed:
            return PhaseOutcome.fail(
                f"{INVALID_STATUS}: role may not {request.action.value} {status.name}"
            )

        return PhaseOutcome.ok(attendance_status=status)


class TeacherAbsenceCheck(PhaseCheck):
    """Checks every teacher holding a slot on the date, or the homeroom
    teacher when no slot names one.

    A substitute only affects this phase's verdict; it never changes the
    schedule resolved by phase 8.
    """

    @property
    def phase_id(self) -> int:
        return 13

    @property
    def name(self) -> str:
        return "Teacher absence"

    @property
    def depends_on(self) -> tuple[int, ...]:
        return (3, 8)

    @property
    def resource(self) -> str:
        return "teacher absences"

    async def check(
        self,
        request: ValidationInput,
        ctx: ResolutionContext,
        data: AcademicDataProvider,
        config: EvaluatorConfig,
    ) -> PhaseOutcome:
        teacher_ids = sorted(
            {s.teacher_id for s in ctx.schedule.slots_on(request.date) if s.teacher_id is not None}
        )
        if not teacher_ids and ctx.section.teacher_id is not None:
            teacher_ids = [ctx.section.teacher_id]

        warnings: list[str] = []
        first_absence = None
        for teacher_id in teacher_ids:
            absence = await data.get_teacher_absence(teacher_id, request.date)
            if absence is None or absence.status not in config.absence_statuses:
                continue
            if not absence.has_substitute:
                return PhaseOutcome.fail(
                    "assigned teacher is absent and no substitute is recorded"
                )
            substitute = absence.substitute_name or f"user {absence.substitute_id}"
            warnings.append(f"assigned teacher is absent; substitute: {substitute}")
            if first_absence is None:
                first_absence = absence

        if first_absence is None:
            return PhaseOutcome.ok()
        return PhaseOutcome.ok(*warnings, teacher_absence=first_absence)
