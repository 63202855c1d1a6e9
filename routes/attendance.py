from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from routes.deps import get_attendance_service, get_current_principal
from routes.schemas import CheckInResponse
from service.attendance.attendance_service import AttendanceService
from service.auth_service import Principal

router = APIRouter(prefix="/api/attendance", tags=["attendance"])


@router.post("", response_model=CheckInResponse)
async def check_in(
    principal: Principal = Depends(get_current_principal),
    service: AttendanceService = Depends(get_attendance_service),
):
    result = await service.check_in(principal.id)
    return CheckInResponse(streak=result.streak, reward=result.reward, gold_remaining=result.gold_remaining)


@router.get("/status")
async def status(principal: Principal = Depends(get_current_principal)):
    return await AttendanceService.status(principal.id)


@router.get("/calendar")
async def calendar(
    year: Optional[int] = Query(None),
    month: Optional[int] = Query(None),
    principal: Principal = Depends(get_current_principal),
):
    today = date.today()
    return await AttendanceService.calendar(principal.id, year or today.year, month or today.month)
