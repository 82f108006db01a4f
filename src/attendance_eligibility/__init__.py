"""Attendance eligibility.

Decides whether an attendance action (marking a student's status on a date,
in a grade and section) is currently permitted, by running an ordered chain
of phase checks against the school's academic data.
"""

from attendance_eligibility.agents.evaluator import EligibilityEvaluator
from attendance_eligibility.agents.session import ValidationSession
from attendance_eligibility.errors import ContractViolationError
from attendance_eligibility.models.evaluator_config import EvaluatorConfig
from attendance_eligibility.models.request import AttendanceAction, ValidationInput
from attendance_eligibility.models.validation import PhaseResult, PhaseStatus, ValidationReport

__all__ = [
    "AttendanceAction",
    "ContractViolationError",
    "EligibilityEvaluator",
    "EvaluatorConfig",
    "PhaseResult",
    "PhaseStatus",
    "ValidationInput",
    "ValidationReport",
    "ValidationSession",
]
