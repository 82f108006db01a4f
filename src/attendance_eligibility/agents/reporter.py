"""ReporterAgent - renders eligibility reports as text or Excel."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Sequence

from attendance_eligibility.agents.base import BaseAgent
from attendance_eligibility.io.report_writer import ReportRow, write_reports_excel
from attendance_eligibility.models.validation import PhaseStatus, ValidationReport

_MARKS = {
    PhaseStatus.PASSED: "OK",
    PhaseStatus.FAILED: "FAIL",
    PhaseStatus.BLOCKED: "SKIP",
}


class ReporterAgent(BaseAgent):
    """Formats reports for display and export."""

    @property
    def name(self) -> str:
        return "reporter"

    def summarize(self, report: ValidationReport) -> str:
        """One line per phase, then the verdict and any warnings."""
        lines = []
        for result in report.phases:
            line = f"[{_MARKS[result.status]:>4}] {result.phase:>2}. {result.name}"
            if result.error:
                line += f" - {result.error}"
            lines.append(line)
            for warning in result.warnings:
                lines.append(f"       ! {warning}")

        verdict = "ALLOWED" if report.valid else f"DENIED ({report.error_count} error(s))"
        lines.append(f"Verdict: {verdict}")
        return "\n".join(lines)

    def generate_excel(self, filepath: str | Path, rows: Sequence[ReportRow]) -> Path:
        filepath = Path(filepath)
        write_reports_excel(filepath, rows)
        return filepath

    def _handle_summarize(self, payload: dict[str, Any]) -> dict[str, Any]:
        return {"summary": self.summarize(payload["validation_report"])}

    def _handle_generate_excel(self, payload: dict[str, Any]) -> dict[str, Any]:
        filepath = self.generate_excel(
            filepath=payload["filepath"],
            rows=payload["rows"],
        )
        return {"filepath": str(filepath)}
