"""Tests for EligibilityEvaluator."""

from __future__ import annotations

import asyncio
import datetime as dt
import logging

import pytest

from attendance_eligibility.errors import ContractViolationError
from attendance_eligibility.models.academic import Enrollment, Holiday, TeacherAbsence
from attendance_eligibility.models.request import AttendanceAction
from attendance_eligibility.models.validation import PhaseStatus
from attendance_eligibility.phases.calendar_phases import RECOVERY_DAY_WARNING


class TestValidPath:
    @pytest.mark.asyncio
    async def test_all_thirteen_phases_pass(self, evaluator, valid_request):
        report = await evaluator.evaluate(valid_request)
        assert report.valid
        assert [p.phase for p in report.phases] == list(range(1, 14))
        assert all(p.status == PhaseStatus.PASSED for p in report.phases)
        assert report.errors == ()
        assert report.warnings == ()

    @pytest.mark.asyncio
    async def test_same_input_same_report(self, evaluator, valid_request):
        first = await evaluator.evaluate(valid_request)
        second = await evaluator.evaluate(valid_request)
        assert first.model_dump_json() == second.model_dump_json()

    @pytest.mark.asyncio
    async def test_accepts_dict_request(self, evaluator, valid_request):
        report = await evaluator.evaluate(valid_request.model_dump())
        assert report.valid

    @pytest.mark.asyncio
    async def test_process_evaluate(self, evaluator, valid_request):
        result = await evaluator.process("evaluate", {"request": valid_request})
        assert result["validation_report"].valid


class TestScenarios:
    @pytest.mark.asyncio
    async def test_plain_holiday(self, evaluator, academic_data, valid_request):
        academic_data.holidays.append(
            Holiday(id=1, bimester_id=10, date=valid_request.date, description="Founders Day")
        )
        report = await evaluator.evaluate(valid_request)
        assert not report.valid
        assert report.phase(6).status == PhaseStatus.FAILED
        assert report.errors == ("date is a non-instructional holiday (Founders Day)",)

    @pytest.mark.asyncio
    async def test_recovery_holiday(self, evaluator, academic_data, valid_request):
        academic_data.holidays.append(
            Holiday(id=2, bimester_id=10, date=valid_request.date, is_recovered=True)
        )
        report = await evaluator.evaluate(valid_request)
        assert report.valid
        assert report.warnings == (RECOVERY_DAY_WARNING,)

    @pytest.mark.asyncio
    async def test_missing_section_blocks_dependents(self, evaluator, valid_request):
        request = valid_request.model_copy(update={"section_id": None})
        report = await evaluator.evaluate(request)

        assert report.phase(3).error == "grade/section not selected"
        for number in (8, 9, 11, 13):
            result = report.phase(number)
            assert result.status == PhaseStatus.BLOCKED
            assert result.root_cause == 3
        # Phases that do not need the section still run.
        for number in (1, 2, 4, 5, 6, 7, 10, 12):
            assert report.phase(number).status == PhaseStatus.PASSED
        assert len(report.errors) == 5

    @pytest.mark.asyncio
    async def test_section_of_another_teacher(self, evaluator, valid_request):
        request = valid_request.model_copy(update={"section_id": 22})
        report = await evaluator.evaluate(request)
        assert not report.valid
        assert report.errors == ("insufficient permission for this scope",)
        assert [p.phase for p in report.failed_phases] == [11]

    @pytest.mark.asyncio
    async def test_absent_teacher_with_substitute(self, evaluator, academic_data, valid_request):
        academic_data.absences.append(
            TeacherAbsence(
                id=1,
                teacher_id=7,
                start_date=valid_request.date,
                end_date=valid_request.date,
                substitute_id=8,
                substitute_name="Luis Perez",
            )
        )
        report = await evaluator.evaluate(valid_request)
        assert report.valid
        assert report.warnings == ("assigned teacher is absent; substitute: Luis Perez",)

    @pytest.mark.asyncio
    async def test_absent_teacher_without_substitute(self, evaluator, academic_data, valid_request):
        academic_data.absences.append(
            TeacherAbsence(
                id=1, teacher_id=7, start_date=valid_request.date, end_date=valid_request.date
            )
        )
        report = await evaluator.evaluate(valid_request)
        assert report.errors == ("assigned teacher is absent and no substitute is recorded",)


class TestBlocking:
    @pytest.mark.asyncio
    async def test_date_outside_cycle(self, evaluator, valid_request):
        request = valid_request.model_copy(update={"date": dt.date(2026, 1, 5)})
        report = await evaluator.evaluate(request)

        assert report.phase(4).status == PhaseStatus.FAILED
        blocked = {p.phase for p in report.blocked_phases}
        assert blocked == {5, 6, 7, 8, 9, 12, 13}
        assert all(p.root_cause == 4 for p in report.blocked_phases)
        assert report.phase(5).error == "blocked by phase 4 (Date / active cycle)"

    @pytest.mark.asyncio
    async def test_valid_iff_no_errors(self, evaluator, valid_request):
        request = valid_request.model_copy(update={"attendance_status_id": 2})
        report = await evaluator.evaluate(request)
        assert report.valid is False
        assert report.errors == ("invalid or disabled attendance status",)
        assert len(report.phases) == 13

    @pytest.mark.asyncio
    async def test_enrollment_verdict_needs_a_cycle(self, evaluator, academic_data, valid_request):
        academic_data.enrollments = [Enrollment(id=905, student_id=6, section_id=21, cycle_id=2)]

        report = await evaluator.evaluate(valid_request)
        assert report.phase(9).status == PhaseStatus.FAILED

        future = valid_request.model_copy(update={"date": dt.date(2026, 3, 24)})
        report = await evaluator.evaluate(future)
        assert report.phase(4).error == "date is in the future"
        assert report.phase(9).status == PhaseStatus.BLOCKED
        assert report.phase(9).root_cause == 4

    @pytest.mark.asyncio
    async def test_status_permission_checked_per_action(self, evaluator, valid_request):
        request = valid_request.model_copy(update={"action": AttendanceAction.UPDATE})
        report = await evaluator.evaluate(request)
        assert report.phase(10).error == (
            "invalid or disabled attendance status: role may not update Present"
        )


class TestCollaboratorFaults:
    @pytest.mark.asyncio
    async def test_slow_lookup_fails_phase(
        self, evaluator, academic_data, valid_request, monkeypatch, caplog
    ):
        async def slow_status(status_id):
            await asyncio.sleep(5)

        monkeypatch.setattr(academic_data, "get_attendance_status", slow_status)
        evaluator.config = evaluator.config.model_copy(update={"lookup_timeout_seconds": 0.05})

        with caplog.at_level(logging.WARNING, logger="attendance_eligibility"):
            report = await evaluator.evaluate(valid_request)

        assert report.phase(10).error == "could not verify attendance status"
        assert report.errors == ("could not verify attendance status",)
        assert "timed out" in caplog.text

    @pytest.mark.asyncio
    async def test_lookup_error_fails_phase(self, evaluator, academic_data, valid_request, monkeypatch):
        async def broken(user_id):
            raise ConnectionError("permissions service unavailable")

        monkeypatch.setattr(academic_data, "get_teacher_assignments", broken)
        report = await evaluator.evaluate(valid_request)
        assert report.phase(11).status == PhaseStatus.FAILED
        assert report.phase(11).error == "could not verify permissions"
        assert report.phase(13).status == PhaseStatus.PASSED


class TestContract:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("request_value", [None, "2026-03-10", {"user_id": 7}])
    async def test_unusable_request(self, evaluator, request_value):
        with pytest.raises(ContractViolationError):
            await evaluator.evaluate(request_value)

    @pytest.mark.asyncio
    async def test_unknown_action(self, evaluator):
        with pytest.raises(ValueError, match="does not support action"):
            await evaluator.process("publish", {})

    @pytest.mark.asyncio
    async def test_superseded_evaluation_is_cancelled(self, evaluator, valid_request):
        with pytest.raises(asyncio.CancelledError):
            await evaluator.evaluate(valid_request, is_current=lambda: False)
