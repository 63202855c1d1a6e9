"""
AttendanceService

일일 출석체크와 연속 출석 보상을 담당합니다.
"""
import logging
from calendar import monthrange
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from config import ATTENDANCE, Denomination
from exceptions import AccountNotFoundError, AlreadyCheckedInError, ValidationError
from models import CheckIn, LedgerReason
from models.repos.users_repo import find_user_by_id
from service.economy.ledger_service import LedgerService
from service.unit_of_work import unit_of_work

logger = logging.getLogger(__name__)


def next_streak(last_check_in: Optional[date], previous_streak: int, today: date) -> int:
    """어제 출석했으면 연속 출석 +1 (최대 30일), 아니면 1일부터 다시 시작"""
    if last_check_in is not None and last_check_in == today - timedelta(days=1):
        return min(previous_streak + 1, ATTENDANCE.MAX_STREAK)
    return 1


def reward_for_streak(streak: int) -> int:
    return ATTENDANCE.REWARD_GOLD_PER_DAY * min(streak, ATTENDANCE.MAX_STREAK)


@dataclass(frozen=True)
class CheckInResult:
    """출석 결과"""
    streak: int
    reward: int
    gold_remaining: int


class AttendanceService:
    """출석체크 서비스"""

    @staticmethod
    async def check_in(user_id: int, today: Optional[date] = None) -> CheckInResult:
        """
        출석체크

        Args:
            user_id: 계정 ID
            today: 기준 날짜 (기본값: 오늘)

        Returns:
            CheckInResult

        Raises:
            AccountNotFoundError: 계정 없음
            AlreadyCheckedInError: 오늘 이미 출석
        """
        today = today or date.today()

        async with unit_of_work("check_in") as conn:
            user = await LedgerService.lock_account(user_id, conn)
            if user.last_check_in_date == today:
                raise AlreadyCheckedInError()

            streak = next_streak(user.last_check_in_date, user.check_in_streak, today)
            reward = reward_for_streak(streak)

            user.check_in_streak = streak
            user.last_check_in_date = today
            await user.save(using_db=conn, update_fields=["check_in_streak", "last_check_in_date"])
            await CheckIn.create(user_id=user_id, check_in_date=today, streak=streak, reward=reward, using_db=conn)

            gold_remaining = await LedgerService.credit(
                user_id, Denomination.GOLD, reward, LedgerReason.CHECK_IN, conn
            )

        logger.info(f"User {user_id} checked in: streak {streak}, reward {reward:,}G")

        return CheckInResult(streak=streak, reward=reward, gold_remaining=gold_remaining)

    @staticmethod
    async def status(user_id: int, today: Optional[date] = None) -> dict:
        """
        출석 현황

        Returns:
            checked_in_today, streak, next_reward
        """
        today = today or date.today()
        user = await find_user_by_id(user_id)
        if user is None:
            raise AccountNotFoundError(user_id)

        checked_in_today = user.last_check_in_date == today
        if checked_in_today:
            streak = user.check_in_streak
            upcoming = next_streak(today, streak, today + timedelta(days=1))
        else:
            # 어제 출석하지 않았으면 연속 출석은 끊긴 상태
            streak = user.check_in_streak if user.last_check_in_date == today - timedelta(days=1) else 0
            upcoming = next_streak(user.last_check_in_date, user.check_in_streak, today)

        return {
            "checked_in_today": checked_in_today,
            "streak": streak,
            "last_check_in_date": user.last_check_in_date.isoformat() if user.last_check_in_date else None,
            "next_reward": reward_for_streak(upcoming),
        }

    @staticmethod
    async def calendar(user_id: int, year: int, month: int) -> dict:
        """
        월간 출석 달력

        Args:
            user_id: 계정 ID
            year: 연도
            month: 월 (1~12)

        Returns:
            {
                "year": 2024,
                "month": 3,
                "calendar": [
                    {"date": "2024-03-01", "day": 1, "day_of_week": 5, "checked": False},
                    ...
                ],
            }

            day_of_week는 일요일이 0입니다.

        Raises:
            ValidationError: 잘못된 연도/월
        """
        if not 1 <= month <= 12 or not 1 <= year <= 9999:
            raise ValidationError("올바르지 않은 날짜입니다.")

        last_day = monthrange(year, month)[1]
        first, last = date(year, month, 1), date(year, month, last_day)
        checked_dates = await CheckIn.filter(
            user_id=user_id, check_in_date__gte=first, check_in_date__lte=last
        ).values_list("check_in_date", flat=True)
        checked = {str(value) for value in checked_dates}

        days = []
        for offset in range(last_day):
            day = first + timedelta(days=offset)
            days.append({
                "date": day.isoformat(),
                "day": day.day,
                "day_of_week": (day.weekday() + 1) % 7,
                "checked": day.isoformat() in checked,
            })
        return {"year": year, "month": month, "calendar": days}
