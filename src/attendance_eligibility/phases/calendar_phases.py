"""Calendar phases: is the date an instructional day of the active period.

4. ActiveCycleCheck - date inside the active, non-archived school cycle
5. BimesterCheck - the cycle's active bimester covers the date
6. HolidayCheck - plain holidays fail, recovery days pass with a warning
7. AcademicWeekCheck - an academic week of the bimester contains the date
"""

from __future__ import annotations

from attendance_eligibility.models.academic import WeekType
from attendance_eligibility.models.context import ResolutionContext
from attendance_eligibility.models.evaluator_config import EvaluatorConfig
from attendance_eligibility.models.request import ValidationInput
from attendance_eligibility.phases.base import PhaseCheck, PhaseOutcome
from attendance_eligibility.providers.base import AcademicDataProvider

RECOVERY_DAY_WARNING = "recovery day — attendance applies normally"


class ActiveCycleCheck(PhaseCheck):
    """Resolves ``active_cycle``."""

    @property
    def phase_id(self) -> int:
        return 4

    @property
    def name(self) -> str:
        return "Date / active cycle"

    @property
    def resource(self) -> str:
        return "school cycle"

    async def check(
        self,
        request: ValidationInput,
        ctx: ResolutionContext,
        data: AcademicDataProvider,
        config: EvaluatorConfig,
    ) -> PhaseOutcome:
        if not config.allow_future_dates and request.date > config.today():
            return PhaseOutcome.fail("date is in the future")

        cycle = await data.get_active_cycle()
        if cycle is None or not cycle.is_active or cycle.is_archived:
            return PhaseOutcome.fail("date outside any active school cycle")
        if not cycle.contains(request.date):
            return PhaseOutcome.fail("date outside any active school cycle")

        return PhaseOutcome.ok(active_cycle=cycle)


class BimesterCheck(PhaseCheck):
    @property
    def phase_id(self) -> int:
        return 5

    @property
    def name(self) -> str:
        return "Bimester"

    @property
    def depends_on(self) -> tuple[int, ...]:
        return (4,)

    @property
    def resource(self) -> str:
        return "bimester"

    async def check(
        self,
        request: ValidationInput,
        ctx: ResolutionContext,
        data: AcademicDataProvider,
        config: EvaluatorConfig,
    ) -> PhaseOutcome:
        bimester = await data.get_active_bimester(ctx.active_cycle.id)
        if (
            bimester is None
            or not bimester.is_active
            or bimester.cycle_id != ctx.active_cycle.id
            or not bimester.contains(request.date)
        ):
            return PhaseOutcome.fail("no active bimester covers this date")

        return PhaseOutcome.ok(active_bimester=bimester)


class HolidayCheck(PhaseCheck):
    @property
    def phase_id(self) -> int:
        return 6

    @property
    def name(self) -> str:
        return "Holiday"

    @property
    def depends_on(self) -> tuple[int, ...]:
        return (5,)

    @property
    def resource(self) -> str:
        return "holiday calendar"

    async def check(
        self,
        request: ValidationInput,
        ctx: ResolutionContext,
        data: AcademicDataProvider,
        config: EvaluatorConfig,
    ) -> PhaseOutcome:
        holiday = await data.get_holiday_info(request.date)
        # Holidays registered against another bimester do not apply here.
        if holiday is None or (
            holiday.bimester_id is not None
            and holiday.bimester_id != ctx.active_bimester.id
        ):
            return PhaseOutcome.ok()

        if holiday.is_recovered:
            return PhaseOutcome.ok(RECOVERY_DAY_WARNING, holiday=holiday)

        message = "date is a non-instructional holiday"
        if holiday.description:
            message = f"{message} ({holiday.description})"
        return PhaseOutcome.fail(message)


class AcademicWeekCheck(PhaseCheck):
    @property
    def phase_id(self) -> int:
        return 7

    @property
    def name(self) -> str:
        return "Academic week"

    @property
    def depends_on(self) -> tuple[int, ...]:
        return (5,)

    @property
    def resource(self) -> str:
        return "academic week"

    async def check(
        self,
        request: ValidationInput,
        ctx: ResolutionContext,
        data: AcademicDataProvider,
        config: EvaluatorConfig,
    ) -> PhaseOutcome:
        week = await data.get_academic_week(ctx.active_bimester.id, request.date)
        if (
            week is None
            or week.bimester_id != ctx.active_bimester.id
            or not week.contains(request.date)
        ):
            return PhaseOutcome.fail(
                "date does not fall within any academic week of the active bimester"
            )
        if week.week_type == WeekType.BREAK:
            return PhaseOutcome.fail(f"date falls in a break week (week {week.number})")

        return PhaseOutcome.ok(academic_week=week)
