from fastapi import APIRouter, Depends

from routes.deps import get_current_principal
from routes.schemas import BalancesOut, ConvertRequest
from service.auth_service import Principal
from service.economy.ledger_service import LedgerService

router = APIRouter(prefix="/api/currency", tags=["currency"])


@router.get("", response_model=BalancesOut)
async def get_balances(principal: Principal = Depends(get_current_principal)):
    balances = await LedgerService.get_balances(principal.id)
    return BalancesOut(gold=balances.gold, choco=balances.choco, money=balances.money)


@router.post("/convert", response_model=BalancesOut)
async def convert(body: ConvertRequest, principal: Principal = Depends(get_current_principal)):
    balances = await LedgerService.convert(principal.id, body.from_, body.to, body.amount)
    return BalancesOut(gold=balances.gold, choco=balances.choco, money=balances.money)
