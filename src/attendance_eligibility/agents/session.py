"""ValidationSession - re-evaluates as the caller's selection changes."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable

from attendance_eligibility.agents.base import BaseAgent
from attendance_eligibility.agents.evaluator import EligibilityEvaluator
from attendance_eligibility.errors import ContractViolationError
from attendance_eligibility.models.request import ValidationInput, coerce_request
from attendance_eligibility.models.validation import ValidationReport

logger = logging.getLogger(__name__)

ReportCallback = Callable[[ValidationInput, ValidationReport], None]

# Fields whose change triggers a new evaluation.
REACTIVE_FIELDS = frozenset(
    {"date", "grade_id", "section_id", "attendance_status_id", "user_id", "role_id"}
)


class ValidationSession(BaseAgent):
    """Last-request-wins wrapper around an evaluator.

    Each submission bumps a generation counter and cancels the evaluation
    still in flight. Only the evaluation of the latest generation may
    publish its report; a superseded one resolves to ``None``.
    """

    def __init__(
        self,
        evaluator: EligibilityEvaluator,
        on_report: ReportCallback | None = None,
    ) -> None:
        self._evaluator = evaluator
        self._on_report = on_report
        self._generation = 0
        self._task: asyncio.Task[ValidationReport] | None = None
        self._current: ValidationReport | None = None
        self._current_input: ValidationInput | None = None
        self._pending_input: ValidationInput | None = None

    @property
    def name(self) -> str:
        return "session"

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def current(self) -> ValidationReport | None:
        """Most recently published report."""
        return self._current

    @property
    def current_input(self) -> ValidationInput | None:
        return self._current_input

    async def submit(
        self, request: ValidationInput | dict[str, Any]
    ) -> ValidationReport | None:
        """Evaluate ``request``, superseding any evaluation still running.

        Returns the report if it was published, or ``None`` if a newer
        submission arrived first. A malformed request raises
        ``ContractViolationError`` and leaves the running evaluation alone.
        """
        request = coerce_request(request)
        self._generation += 1
        generation = self._generation
        self._pending_input = request

        previous = self._task
        if previous is not None and not previous.done():
            logger.debug("Cancelling superseded evaluation (generation %d)", generation - 1)
            previous.cancel()

        task = asyncio.ensure_future(
            self._evaluator.evaluate(
                request, is_current=lambda: generation == self._generation
            )
        )
        self._task = task
        try:
            report = await task
        except asyncio.CancelledError:
            if generation != self._generation:
                logger.debug("Generation %d superseded; discarding", generation)
                return None
            raise

        if generation != self._generation:
            logger.debug("Generation %d finished after being superseded; discarding", generation)
            return None

        self._current = report
        self._current_input = request
        logger.info(
            "Published eligibility report (generation %d, valid=%s)", generation, report.valid
        )
        if self._on_report is not None:
            self._on_report(request, report)
        return report

    async def update(self, **changes: Any) -> ValidationReport | None:
        """Submit the latest request with some reactive fields changed."""
        unknown = set(changes) - REACTIVE_FIELDS
        if unknown:
            raise ContractViolationError(
                f"Not a reactive field: {', '.join(sorted(unknown))}"
            )
        base = self._pending_input.model_dump() if self._pending_input else {}
        return await self.submit({**base, **changes})

    async def _handle_submit(self, payload: dict[str, Any]) -> dict[str, Any]:
        report = await self.submit(payload["request"])
        return {"validation_report": report, "generation": self._generation}
