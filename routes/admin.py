"""GM 관리 API"""
from fastapi import APIRouter, Depends

from routes.deps import get_current_principal
from routes.schemas import (
    BalancesOut,
    CurrencyAdjustmentRequest,
    GiveCurrencyRequest,
    GiveCurrencyResponse,
    GrantHiddenWeaponRequest,
    WeaponOut,
)
from service.admin.gm_service import GMService
from service.auth_service import Principal
from service.economy.ledger_service import CurrencyAdjustment

router = APIRouter(prefix="/api/admin/users", tags=["admin"])


@router.get("")
async def list_users(principal: Principal = Depends(get_current_principal)):
    return await GMService.list_accounts(principal.role)


@router.patch("/{user_id}/currency", response_model=BalancesOut)
async def adjust_currency(
    user_id: int,
    body: CurrencyAdjustmentRequest,
    principal: Principal = Depends(get_current_principal),
):
    adjustment = CurrencyAdjustment(gold=body.gold, choco=body.choco, money=body.money)
    if body.mode == "set":
        balances = await GMService.set_currency(principal.id, principal.role, user_id, adjustment)
    else:
        balances = await GMService.adjust_currency(principal.id, principal.role, user_id, adjustment)
    return BalancesOut(gold=balances.gold, choco=balances.choco, money=balances.money)


@router.post("/give-currency", response_model=GiveCurrencyResponse)
async def give_currency(body: GiveCurrencyRequest, principal: Principal = Depends(get_current_principal)):
    recipients = await GMService.give_all(principal.id, principal.role, body.denomination, body.amount)
    return GiveCurrencyResponse(recipients=recipients)


@router.post("/{user_id}/hidden-weapons", response_model=WeaponOut, status_code=201)
async def grant_hidden_weapon(
    user_id: int,
    body: GrantHiddenWeaponRequest,
    principal: Principal = Depends(get_current_principal),
):
    weapon = await GMService.grant_hidden_weapon(principal.id, principal.role, user_id, body.slug)
    return weapon.snapshot()
