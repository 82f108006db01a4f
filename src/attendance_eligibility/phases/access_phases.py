"""Access phases: who is asking and for which classroom.

1. IdentityCheck - an authenticated, non-revoked principal holding the role
2. RoleValidityCheck - the role is active and may record attendance at all
3. GradeSectionCheck - an active grade, and a section that belongs to it
"""

from __future__ import annotations

from attendance_eligibility.models.context import ResolutionContext
from attendance_eligibility.models.evaluator_config import EvaluatorConfig
from attendance_eligibility.models.request import ValidationInput
from attendance_eligibility.phases.base import PhaseCheck, PhaseOutcome
from attendance_eligibility.providers.base import AcademicDataProvider


class IdentityCheck(PhaseCheck):
    @property
    def phase_id(self) -> int:
        return 1

    @property
    def name(self) -> str:
        return "Identity"

    @property
    def resource(self) -> str:
        return "user identity"

    async def check(
        self,
        request: ValidationInput,
        ctx: ResolutionContext,
        data: AcademicDataProvider,
        config: EvaluatorConfig,
    ) -> PhaseOutcome:
        if request.user_id is None or request.role_id is None:
            return PhaseOutcome.fail("no authenticated user")

        principal = await data.get_principal(request.user_id)
        if principal is None:
            return PhaseOutcome.fail("no authenticated user")
        if not principal.is_active or principal.is_revoked:
            return PhaseOutcome.fail("no authenticated user: account inactive or revoked")
        if principal.role_id != request.role_id:
            return PhaseOutcome.fail("no authenticated user: role does not match the user")

        return PhaseOutcome.ok(principal=principal)


class RoleValidityCheck(PhaseCheck):
    """Coarse gate before the scoped permission check in phase 11."""

    @property
    def phase_id(self) -> int:
        return 2

    @property
    def name(self) -> str:
        return "Role validity"

    @property
    def depends_on(self) -> tuple[int, ...]:
        return (1,)

    @property
    def resource(self) -> str:
        return "role"

    async def check(
        self,
        request: ValidationInput,
        ctx: ResolutionContext,
        data: AcademicDataProvider,
        config: EvaluatorConfig,
    ) -> PhaseOutcome:
        role_id = ctx.principal.role_id if ctx.principal else request.role_id
        if role_id is None:
            return PhaseOutcome.fail("role invalid or inactive")

        role = await data.get_role(role_id)
        if role is None or not role.is_active:
            return PhaseOutcome.fail("role invalid or inactive")
        if role.kind not in config.permitted_role_kinds:
            return PhaseOutcome.fail(
                f"role invalid or inactive: {role.name} may not record attendance"
            )

        return PhaseOutcome.ok(role=role)


class GradeSectionCheck(PhaseCheck):
    @property
    def phase_id(self) -> int:
        return 3

    @property
    def name(self) -> str:
        return "Grade/Section selection"

    @property
    def resource(self) -> str:
        return "grade and section"

    async def check(
        self,
        request: ValidationInput,
        ctx: ResolutionContext,
        data: AcademicDataProvider,
        config: EvaluatorConfig,
    ) -> PhaseOutcome:
        if request.grade_id is None or request.section_id is None:
            return PhaseOutcome.fail("grade/section not selected")

        grade = await data.get_grade(request.grade_id)
        if grade is None:
            return PhaseOutcome.fail("grade/section not selected: grade not found")
        if not grade.is_active:
            return PhaseOutcome.fail("grade/section not selected: grade is inactive")

        section = await data.get_section(request.section_id)
        if section is None or not section.is_active:
            return PhaseOutcome.fail("grade/section not selected: section not found")
        if section.grade_id != request.grade_id:
            return PhaseOutcome.fail("section does not belong to grade")

        return PhaseOutcome.ok(section=section)
