"""Phase registry - the single ordered table of phase checks."""

from __future__ import annotations

from attendance_eligibility.phases.base import PhaseCheck


class PhaseRegistry:
    """Ordered registry of phase checks.

    Dependencies must point at earlier phases, so ordering and blocking
    rules are enforced in one place.
    """

    def __init__(self) -> None:
        self._phases: dict[int, PhaseCheck] = {}

    def register(self, phase: PhaseCheck) -> None:
        if phase.phase_id in self._phases:
            raise ValueError(f"Phase {phase.phase_id} is already registered")
        for dep in phase.depends_on:
            if dep >= phase.phase_id:
                raise ValueError(
                    f"Phase {phase.phase_id} ({phase.name}) cannot depend on later phase {dep}"
                )
            if dep not in self._phases:
                raise ValueError(
                    f"Phase {phase.phase_id} ({phase.name}) depends on unregistered phase {dep}"
                )
        self._phases[phase.phase_id] = phase

    def get(self, phase_id: int) -> PhaseCheck:
        if phase_id not in self._phases:
            available = ", ".join(str(p) for p in sorted(self._phases))
            raise KeyError(f"Unknown phase: {phase_id}. Available: {available}")
        return self._phases[phase_id]

    def list_all(self) -> list[PhaseCheck]:
        return [self._phases[pid] for pid in sorted(self._phases)]

    def __len__(self) -> int:
        return len(self._phases)


# Global registry instance
_global_registry: PhaseRegistry | None = None


def get_registry() -> PhaseRegistry:
    """Get the global phase registry, initializing if needed."""
    global _global_registry
    if _global_registry is None:
        _global_registry = _create_default_registry()
    return _global_registry


def _create_default_registry() -> PhaseRegistry:
    """Create the registry with the thirteen attendance phases."""
    from attendance_eligibility.phases.access_phases import (
        GradeSectionCheck,
        IdentityCheck,
        RoleValidityCheck,
    )
    from attendance_eligibility.phases.calendar_phases import (
        AcademicWeekCheck,
        ActiveCycleCheck,
        BimesterCheck,
        HolidayCheck,
    )
    from attendance_eligibility.phases.classroom_phases import (
        AttendanceStatusCheck,
        EnrollmentCheck,
        ScheduleCheck,
        TeacherAbsenceCheck,
    )
    from attendance_eligibility.phases.policy_phases import (
        ConfigurationCheck,
        PermissionCheck,
    )

    registry = PhaseRegistry()
    for phase_cls in [
        # Who is asking
        IdentityCheck,
        RoleValidityCheck,
        GradeSectionCheck,
        # When
        ActiveCycleCheck,
        BimesterCheck,
        HolidayCheck,
        AcademicWeekCheck,
        # Where and what
        ScheduleCheck,
        EnrollmentCheck,
        AttendanceStatusCheck,
        # Policy
        PermissionCheck,
        ConfigurationCheck,
        TeacherAbsenceCheck,
    ]:
        registry.register(phase_cls())
    return registry
