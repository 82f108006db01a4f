"""Phase results and the aggregated validation report."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class PhaseStatus(str, Enum):
    """Outcome of a single phase."""

    PASSED = "passed"
    FAILED = "failed"
    BLOCKED = "blocked"


class PhaseResult(BaseModel):
    """Result of one phase check."""

    model_config = ConfigDict(frozen=True)

    phase: int = Field(ge=1)
    name: str
    status: PhaseStatus
    error: str | None = None
    warnings: tuple[str, ...] = ()
    root_cause: int | None = Field(
        default=None, description="Failed phase that caused this one to be blocked"
    )

    @property
    def passed(self) -> bool:
        return self.status == PhaseStatus.PASSED


class ValidationReport(BaseModel):
    """Complete eligibility report for one validation request."""

    model_config = ConfigDict(frozen=True)

    phases: tuple[PhaseResult, ...] = ()
    valid: bool = False
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()

    @classmethod
    def from_phases(cls, phases: list[PhaseResult]) -> ValidationReport:
        """Aggregate phase results, preserving phase order."""
        ordered = tuple(sorted(phases, key=lambda p: p.phase))
        errors = tuple(p.error or f"phase {p.phase} did not pass" for p in ordered if not p.passed)
        warnings = tuple(w for p in ordered if p.passed for w in p.warnings)
        return cls(
            phases=ordered,
            valid=bool(ordered) and not errors,
            errors=errors,
            warnings=warnings,
        )

    def phase(self, number: int) -> PhaseResult:
        for result in self.phases:
            if result.phase == number:
                return result
        raise KeyError(f"No result for phase {number}")

    @property
    def failed_phases(self) -> list[PhaseResult]:
        return [p for p in self.phases if p.status == PhaseStatus.FAILED]

    @property
    def blocked_phases(self) -> list[PhaseResult]:
        return [p for p in self.phases if p.status == PhaseStatus.BLOCKED]

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def warning_count(self) -> int:
        return len(self.warnings)
