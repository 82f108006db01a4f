"""Base classes for the phase check system."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from attendance_eligibility.models.context import ResolutionContext
from attendance_eligibility.models.evaluator_config import EvaluatorConfig
from attendance_eligibility.models.request import ValidationInput
from attendance_eligibility.providers.base import AcademicDataProvider


class PhaseOutcome:
    """Verdict of a phase check plus the facts it resolved."""

    __slots__ = ("error", "warnings", "facts")

    def __init__(
        self,
        error: str | None = None,
        warnings: tuple[str, ...] = (),
        facts: dict[str, Any] | None = None,
    ) -> None:
        self.error = error
        self.warnings = warnings
        self.facts = facts or {}

    @property
    def passed(self) -> bool:
        return self.error is None

    @classmethod
    def ok(cls, *warnings: str, **facts: Any) -> PhaseOutcome:
        return cls(warnings=tuple(warnings), facts=facts)

    @classmethod
    def fail(cls, error: str) -> PhaseOutcome:
        return cls(error=error)


class PhaseCheck(ABC):
    """Abstract base class for phase checks.

    Each check defines:
    - A fixed ordinal and display name
    - The phases whose resolved facts it needs (``depends_on``)
    - The resource named when its lookups cannot be verified
    - An async ``check()`` that never raises for rule failures
    """

    @property
    @abstractmethod
    def phase_id(self) -> int:
        """Ordinal position in the chain (1-based)."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Display name."""

    @property
    def depends_on(self) -> tuple[int, ...]:
        """Phase ids whose facts this check consumes."""
        return ()

    @property
    @abstractmethod
    def resource(self) -> str:
        """What this phase reads, used in "could not verify" messages."""

    @abstractmethod
    async def check(
        self,
        request: ValidationInput,
        ctx: ResolutionContext,
        data: AcademicDataProvider,
        config: EvaluatorConfig,
    ) -> PhaseOutcome:
        """Evaluate the rule against the request and the facts resolved so far."""
