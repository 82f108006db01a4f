"""EligibilityEvaluator - runs the phase chain and aggregates the report."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable

from attendance_eligibility.agents.base import BaseAgent
from attendance_eligibility.models.context import ResolutionContext
from attendance_eligibility.models.evaluator_config import EvaluatorConfig
from attendance_eligibility.models.request import ValidationInput, coerce_request
from attendance_eligibility.models.validation import PhaseResult, PhaseStatus, ValidationReport
from attendance_eligibility.phases.base import PhaseCheck
from attendance_eligibility.phases.registry import PhaseRegistry, get_registry
from attendance_eligibility.providers.base import AcademicDataProvider

logger = logging.getLogger(__name__)

# Returns False once a newer evaluation has superseded this one.
CurrencyCheck = Callable[[], bool]


class EligibilityEvaluator(BaseAgent):
    """Decides whether an attendance action is currently permitted.

    Every registered phase yields exactly one result. A phase whose
    dependencies did not pass is marked blocked instead of being run, and
    phases without such dependencies still run, so one call returns the
    full diagnosis.
    """

    def __init__(
        self,
        data: AcademicDataProvider,
        config: EvaluatorConfig | None = None,
        registry: PhaseRegistry | None = None,
    ) -> None:
        self.data = data
        self.config = config or EvaluatorConfig()
        self.registry = registry or get_registry()

    @property
    def name(self) -> str:
        return "evaluator"

    async def evaluate(
        self,
        request: ValidationInput | dict[str, Any],
        *,
        is_current: CurrencyCheck | None = None,
    ) -> ValidationReport:
        """Run all phases in order and aggregate their results.

        Raises:
            ContractViolationError: If ``request`` is not a usable request.
            asyncio.CancelledError: If ``is_current`` reports the evaluation
                was superseded.
        """
        request = coerce_request(request)
        logger.debug("Evaluating attendance eligibility for %s", request)

        ctx = ResolutionContext()
        results: dict[int, PhaseResult] = {}
        for phase in self.registry.list_all():
            if is_current is not None and not is_current():
                logger.debug("Evaluation superseded before phase %d", phase.phase_id)
                raise asyncio.CancelledError()
            result, ctx = await self._run_phase(phase, request, ctx, results)
            results[phase.phase_id] = result
            if not result.passed:
                logger.debug("Phase %d %s: %s", result.phase, result.status.value, result.error)

        report = ValidationReport.from_phases(list(results.values()))
        logger.debug(
            "Evaluation finished: valid=%s errors=%d warnings=%d",
            report.valid,
            report.error_count,
            report.warning_count,
        )
        return report

    async def _run_phase(
        self,
        phase: PhaseCheck,
        request: ValidationInput,
        ctx: ResolutionContext,
        results: dict[int, PhaseResult],
    ) -> tuple[PhaseResult, ResolutionContext]:
        root = _blocking_root(phase, results)
        if root is not None:
            root_name = self.registry.get(root).name
            return (
                PhaseResult(
                    phase=phase.phase_id,
                    name=phase.name,
                    status=PhaseStatus.BLOCKED,
                    error=f"blocked by phase {root} ({root_name})",
                    root_cause=root,
                ),
                ctx,
            )

        try:
            outcome = await asyncio.wait_for(
                phase.check(request, ctx, self.data, self.config),
                timeout=self.config.lookup_timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.warning(
                "Phase %d (%s) timed out after %.1fs",
                phase.phase_id,
                phase.name,
                self.config.lookup_timeout_seconds,
            )
            return _could_not_verify(phase), ctx
        except Exception:
            logger.warning("Phase %d (%s) lookup failed", phase.phase_id, phase.name, exc_info=True)
            return _could_not_verify(phase), ctx

        if not outcome.passed:
            return (
                PhaseResult(
                    phase=phase.phase_id,
                    name=phase.name,
                    status=PhaseStatus.FAILED,
                    error=outcome.error,
                ),
                ctx,
            )

        return (
            PhaseResult(
                phase=phase.phase_id,
                name=phase.name,
                status=PhaseStatus.PASSED,
                warnings=outcome.warnings,
            ),
            ctx.with_facts(**outcome.facts),
        )

    async def _handle_evaluate(self, payload: dict[str, Any]) -> dict[str, Any]:
        report = await self.evaluate(payload["request"])
        return {"validation_report": report}


def _blocking_root(phase: PhaseCheck, results: dict[int, PhaseResult]) -> int | None:
    """Failed phase behind the first dependency that did not pass."""
    for dep in phase.depends_on:
        upstream = results[dep]
        if not upstream.passed:
            return upstream.root_cause or upstream.phase
    return None


def _could_not_verify(phase: PhaseCheck) -> PhaseResult:
    return PhaseResult(
        phase=phase.phase_id,
        name=phase.name,
        status=PhaseStatus.FAILED,
        error=f"could not verify {phase.resource}",
    )
