from fastapi import APIRouter, Depends, Query

from config import BATTLE
from routes.deps import get_battle_service, get_current_principal
from routes.schemas import BattleRequest, BattleResponse
from service.auth_service import Principal
from service.battle.battle_service import BattleService

router = APIRouter(prefix="/api/battles", tags=["battles"])


@router.post("", response_model=BattleResponse)
async def battle(
    body: BattleRequest,
    principal: Principal = Depends(get_current_principal),
    service: BattleService = Depends(get_battle_service),
):
    result = await service.battle(principal.id, body.attacker_weapon_id, body.defender_weapon_id)
    return BattleResponse(
        battle_id=result.battle_id,
        winner=result.winner,
        loser=result.loser,
        gold_exchanged=result.gold_exchanged,
        attacker_power=result.attacker_power,
        defender_power=result.defender_power,
    )


@router.get("/history")
async def history(
    limit: int = Query(BATTLE.HISTORY_PAGE_SIZE, ge=1, le=100),
    offset: int = Query(0, ge=0),
    principal: Principal = Depends(get_current_principal),
):
    return await BattleService.history(principal.id, limit, offset)


@router.get("/{battle_id}")
async def battle_detail(battle_id: int, principal: Principal = Depends(get_current_principal)):
    return await BattleService.get_battle(battle_id)
