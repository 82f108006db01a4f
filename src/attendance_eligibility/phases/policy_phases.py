"""Policy phases: scoped permission and module configuration.

11. PermissionCheck - the role may write attendance at a scope covering the section
12. ConfigurationCheck - the bimester is not locked and the date is editable
"""

from __future__ import annotations

from attendance_eligibility.models.academic import (
    AttendanceConfig,
    PermissionScope,
    Principal,
    Section,
    TeacherAssignment,
)
from attendance_eligibility.models.context import ResolutionContext
from attendance_eligibility.models.evaluator_config import EvaluatorConfig
from attendance_eligibility.models.request import ValidationInput
from attendance_eligibility.phases.base import PhaseCheck, PhaseOutcome
from attendance_eligibility.providers.base import AcademicDataProvider

LOCKED = "attendance editing is locked for this period"


def covering_scopes(
    principal: Principal, section: Section, assignment: TeacherAssignment | None
) -> list[PermissionScope]:
    """Scopes under which ``principal`` reaches ``section``, narrowest first."""
    owns = section.teacher_id == principal.id or (
        assignment is not None and section.id in assignment.section_ids
    )
    coordinates = assignment is not None and section.grade_id in assignment.coordinated_grade_ids

    scopes: list[PermissionScope] = []
    if owns:
        scopes.append(PermissionScope.OWN)
    if owns or coordinates:
        scopes.append(PermissionScope.COORDINATOR)
    scopes.append(PermissionScope.ALL)
    return scopes


class PermissionCheck(PhaseCheck):
    @property
    def phase_id(self) -> int:
        return 11

    @property
    def name(self) -> str:
        return "Permission"

    @property
    def depends_on(self) -> tuple[int, ...]:
        return (2, 3)

    @property
    def resource(self) -> str:
        return "permissions"

    async def check(
        self,
        request: ValidationInput,
        ctx: ResolutionContext,
        data: AcademicDataProvider,
        config: EvaluatorConfig,
    ) -> PhaseOutcome:
        assignment = await data.get_teacher_assignments(ctx.principal.id)
        for scope in covering_scopes(ctx.principal, ctx.section, assignment):
            granted = await data.has_permission(
                ctx.role, config.permission_module, request.action.value, scope
            )
            if granted:
                return PhaseOutcome.ok(permission_scope=scope)

        return PhaseOutcome.fail("insufficient permission for this scope")


class ConfigurationCheck(PhaseCheck):
    """Falls back to default settings when the bimester has no active config."""

    @property
    def phase_id(self) -> int:
        return 12

    @property
    def name(self) -> str:
        return "Configuration"

    @property
    def depends_on(self) -> tuple[int, ...]:
        return (5,)

    @property
    def resource(self) -> str:
        return "attendance configuration"

    async def check(
        self,
        request: ValidationInput,
        ctx: ResolutionContext,
        data: AcademicDataProvider,
        config: EvaluatorConfig,
    ) -> PhaseOutcome:
        bimester_id = ctx.active_bimester.id
        settings = await data.get_attendance_config(bimester_id)
        if settings is None or not settings.is_active:
            settings = AttendanceConfig(bimester_id=bimester_id)

        if settings.is_locked:
            return PhaseOutcome.fail(LOCKED)

        if settings.edit_window_days is not None:
            elapsed = (config.today() - request.date).days
            if elapsed > settings.edit_window_days:
                return PhaseOutcome.fail(
                    f"{LOCKED}: outside the {settings.edit_window_days}-day edit window"
                )

        return PhaseOutcome.ok(attendance_config=settings)
