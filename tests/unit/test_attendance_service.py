"""
AttendanceService 테스트 (인메모리 DB)
"""
from datetime import date, timedelta
from unittest.mock import AsyncMock

import pytest

from exceptions import AlreadyCheckedInError, ValidationError
from models import CheckIn, CurrencyTransaction, LedgerReason, User
from service.attendance.attendance_service import AttendanceService
from service.economy.ledger_service import LedgerService

TODAY = date(2024, 3, 10)


class TestCheckIn:
    @pytest.mark.asyncio
    async def test_first_check_in(self, user_factory):
        user = await user_factory(gold=0)

        result = await AttendanceService().check_in(user.id, TODAY)

        assert result.streak == 1
        assert result.reward == 60_000
        assert result.gold_remaining == 60_000
        refreshed = await User.get(id=user.id)
        assert refreshed.last_check_in_date == TODAY
        assert refreshed.check_in_streak == 1

    @pytest.mark.asyncio
    async def test_twice_same_day(self, user_factory):
        user = await user_factory(gold=0)
        service = AttendanceService()
        await service.check_in(user.id, TODAY)

        with pytest.raises(AlreadyCheckedInError):
            await service.check_in(user.id, TODAY)

        assert (await User.get(id=user.id)).gold == 60_000

    @pytest.mark.asyncio
    async def test_consecutive_days(self, user_factory):
        user = await user_factory(gold=0)
        service = AttendanceService()
        for offset in range(3):
            result = await service.check_in(user.id, TODAY + timedelta(days=offset))

        assert result.streak == 3
        assert (await User.get(id=user.id)).gold == 60_000 * (1 + 2 + 3)

    @pytest.mark.asyncio
    async def test_gap_resets_streak(self, user_factory):
        user = await user_factory(gold=0)
        service = AttendanceService()
        await service.check_in(user.id, TODAY)
        result = await service.check_in(user.id, TODAY + timedelta(days=2))
        assert result.streak == 1

    @pytest.mark.asyncio
    async def test_credits_ledger_once(self, user_factory, monkeypatch):
        user = await user_factory(gold=0)
        credit = AsyncMock(return_value=60_000)
        monkeypatch.setattr(LedgerService, "credit", credit)

        await AttendanceService().check_in(user.id, TODAY)

        credit.assert_awaited_once()
        assert credit.await_args.args[2] == 60_000
        assert credit.await_args.args[3] == LedgerReason.CHECK_IN

    @pytest.mark.asyncio
    async def test_writes_ledger_entry(self, user_factory):
        user = await user_factory(gold=0)
        await AttendanceService().check_in(user.id, TODAY)
        tx = await CurrencyTransaction.get(user_id=user.id)
        assert tx.reason == LedgerReason.CHECK_IN


class TestStatus:
    @pytest.mark.asyncio
    async def test_before_and_after(self, user_factory):
        user = await user_factory()
        before = await AttendanceService.status(user.id, TODAY)
        assert before["checked_in_today"] is False
        assert before["streak"] == 0
        assert before["next_reward"] == 60_000

        await AttendanceService().check_in(user.id, TODAY)
        after = await AttendanceService.status(user.id, TODAY)
        assert after["checked_in_today"] is True
        assert after["streak"] == 1
        assert after["next_reward"] == 120_000

    @pytest.mark.asyncio
    async def test_broken_streak_reported_as_zero(self, user_factory):
        user = await user_factory()
        await AttendanceService().check_in(user.id, TODAY)
        status = await AttendanceService.status(user.id, TODAY + timedelta(days=3))
        assert status["streak"] == 0
        assert status["next_reward"] == 60_000


class TestCalendar:
    @pytest.mark.asyncio
    async def test_marks_checked_days(self, user_factory):
        user = await user_factory()
        service = AttendanceService()
        for day in (TODAY, TODAY + timedelta(days=1), TODAY + timedelta(days=5)):
            await service.check_in(user.id, day)

        result = await AttendanceService.calendar(user.id, 2024, 3)

        assert (result["year"], result["month"]) == (2024, 3)
        assert len(result["calendar"]) == 31
        checked = [entry["day"] for entry in result["calendar"] if entry["checked"]]
        assert checked == [10, 11, 15]

    @pytest.mark.asyncio
    async def test_day_of_week_starts_on_sunday(self, user_factory):
        user = await user_factory()
        result = await AttendanceService.calendar(user.id, 2024, 3)
        # 2024-03-01은 금요일, 03-03은 일요일
        assert result["calendar"][0]["day_of_week"] == 5
        assert result["calendar"][2]["day_of_week"] == 0

    @pytest.mark.asyncio
    async def test_leap_february(self, user_factory):
        user = await user_factory()
        result = await AttendanceService.calendar(user.id, 2024, 2)
        assert len(result["calendar"]) == 29
        assert not any(entry["checked"] for entry in result["calendar"])

    @pytest.mark.asyncio
    async def test_other_users_not_included(self, user_factory):
        user = await user_factory()
        other = await user_factory()
        await AttendanceService().check_in(other.id, TODAY)
        result = await AttendanceService.calendar(user.id, 2024, 3)
        assert not any(entry["checked"] for entry in result["calendar"])

    @pytest.mark.asyncio
    @pytest.mark.parametrize("month", [0, 13])
    async def test_invalid_month(self, user_factory, month):
        user = await user_factory()
        with pytest.raises(ValidationError):
            await AttendanceService.calendar(user.id, 2024, month)

    @pytest.mark.asyncio
    async def test_check_in_recorded(self, user_factory):
        user = await user_factory()
        await AttendanceService().check_in(user.id, TODAY)
        record = await CheckIn.get(user_id=user.id)
        assert (record.check_in_date, record.streak, record.reward) == (TODAY, 1, 60_000)
