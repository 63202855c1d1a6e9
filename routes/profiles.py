from fastapi import APIRouter, Depends, Query

from config import BATTLE
from routes.deps import get_current_principal
from routes.schemas import RankingsResponse, UserSearchResponse
from service.auth_service import Principal
from service.economy.ledger_service import LedgerService
from service.ranking_service import RankingService

router = APIRouter(prefix="/api/profiles", tags=["profiles"])


@router.get("/me")
async def my_profile(principal: Principal = Depends(get_current_principal)):
    balances = await LedgerService.get_balances(principal.id)
    return {
        "id": principal.id,
        "username": principal.username,
        "role": principal.role.value,
        "gold": balances.gold,
        "choco": balances.choco,
        "money": balances.money,
        "destroy_count": await RankingService.destroy_count(principal.id),
    }


@router.get("/rankings", response_model=RankingsResponse)
async def rankings(
    page: int = Query(1, ge=1),
    limit: int = Query(BATTLE.HISTORY_PAGE_SIZE, ge=1, le=100),
    principal: Principal = Depends(get_current_principal),
):
    return RankingsResponse(**await RankingService.battle_rankings(page, limit))


@router.get("/search", response_model=UserSearchResponse)
async def search(
    query: str = Query(""),
    page: int = Query(1, ge=1),
    limit: int = Query(BATTLE.HISTORY_PAGE_SIZE, ge=1, le=100),
    principal: Principal = Depends(get_current_principal),
):
    return UserSearchResponse(**await RankingService.search_users(query, page, limit))


@router.get("/enhancements/top")
async def top_enhancements(
    limit: int = Query(10, ge=1, le=100),
    principal: Principal = Depends(get_current_principal),
):
    return await RankingService.top_enhancements(limit)


@router.get("/{user_id}")
async def public_profile(user_id: int, principal: Principal = Depends(get_current_principal)):
    return await RankingService.public_profile(user_id)
