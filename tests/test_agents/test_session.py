"""Tests for ValidationSession."""

from __future__ import annotations

import asyncio

import pytest

from attendance_eligibility.agents.session import ValidationSession
from attendance_eligibility.errors import ContractViolationError


@pytest.fixture
def published():
    return []


@pytest.fixture
def session(evaluator, published) -> ValidationSession:
    return ValidationSession(evaluator, on_report=lambda request, report: published.append((request, report)))


class TestSubmit:
    @pytest.mark.asyncio
    async def test_publishes_report(self, session, published, valid_request):
        report = await session.submit(valid_request)
        assert report.valid
        assert session.current is report
        assert session.current_input == valid_request
        assert session.generation == 1
        assert published == [(valid_request, report)]

    @pytest.mark.asyncio
    async def test_last_request_wins(self, session, published, academic_data, valid_request, monkeypatch):
        release = asyncio.Event()
        lookup = academic_data.get_section

        async def gated_section(section_id):
            if section_id == 21:
                await release.wait()
            return await lookup(section_id)

        monkeypatch.setattr(academic_data, "get_section", gated_section)

        first = asyncio.create_task(session.submit(valid_request))
        await asyncio.sleep(0.01)

        newer = valid_request.model_copy(update={"section_id": 22})
        latest = await session.submit(newer)
        release.set()

        assert await first is None
        assert session.current is latest
        assert session.current_input.section_id == 22
        assert [request.section_id for request, _ in published] == [22]

    @pytest.mark.asyncio
    async def test_process_submit(self, session, valid_request):
        result = await session.process("submit", {"request": valid_request})
        assert result["generation"] == 1
        assert result["validation_report"].valid


class TestUpdate:
    @pytest.mark.asyncio
    async def test_changes_reactive_field(self, session, valid_request):
        await session.submit(valid_request)
        report = await session.update(section_id=22)
        assert report.errors == ("insufficient permission for this scope",)
        assert session.current_input.user_id == valid_request.user_id
        assert session.generation == 2

    @pytest.mark.asyncio
    async def test_non_reactive_field_rejected(self, session, valid_request):
        await session.submit(valid_request)
        with pytest.raises(ContractViolationError, match="enrollment_id"):
            await session.update(enrollment_id=900)

    @pytest.mark.asyncio
    async def test_malformed_value_rejected(self, session, valid_request):
        await session.submit(valid_request)
        with pytest.raises(ContractViolationError):
            await session.update(date="not a date")

    @pytest.mark.asyncio
    async def test_update_without_date(self, session):
        with pytest.raises(ContractViolationError):
            await session.update(section_id=21)

    @pytest.mark.asyncio
    async def test_dict_submission_is_a_usable_base(self, session, valid_request):
        await session.process("submit", {"request": valid_request.model_dump()})
        report = await session.update(section_id=22)
        assert report.errors == ("insufficient permission for this scope",)
        assert session.current_input.section_id == 22


class TestMalformedSubmit:
    @pytest.mark.asyncio
    async def test_running_evaluation_survives(
        self, session, published, academic_data, valid_request, monkeypatch
    ):
        release = asyncio.Event()
        lookup = academic_data.get_section

        async def gated_section(section_id):
            await release.wait()
            return await lookup(section_id)

        monkeypatch.setattr(academic_data, "get_section", gated_section)

        running = asyncio.create_task(session.submit(valid_request))
        await asyncio.sleep(0.01)

        with pytest.raises(ContractViolationError):
            await session.submit({"user_id": 7})
        assert session.generation == 1

        release.set()
        report = await running
        assert report is not None
        assert report.valid
        assert published == [(valid_request, report)]

        # The last good request is still the base for updates.
        updated = await session.update(attendance_status_id=2)
        assert updated.errors == ("invalid or disabled attendance status",)
        assert session.current_input.section_id == valid_request.section_id
