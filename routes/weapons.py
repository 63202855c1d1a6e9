"""무기 API (생성/조회/강화/판매)"""
from typing import List

from fastapi import APIRouter, Depends, Query

from routes.deps import get_current_principal, get_enhancement_service
from routes.schemas import (
    CreateWeaponRequest,
    EnhanceResponse,
    SellRequest,
    SellResponse,
    WeaponOut,
)
from service.auth_service import Principal
from service.item.enhancement_service import EnhancementService
from service.item.weapon_service import WeaponService
from service.ranking_service import RankingService

router = APIRouter(prefix="/api/weapons", tags=["weapons"])


@router.get("", response_model=List[WeaponOut])
async def list_weapons(principal: Principal = Depends(get_current_principal)):
    weapons = await WeaponService.list_weapons(principal.id)
    return [weapon.snapshot() for weapon in weapons]


@router.post("", response_model=WeaponOut, status_code=201)
async def create_weapon(body: CreateWeaponRequest, principal: Principal = Depends(get_current_principal)):
    weapon = await WeaponService.create_weapon(principal.id, body.name, body.base_name)
    return weapon.snapshot()


@router.post("/hidden/{slug}/claim", response_model=WeaponOut, status_code=201)
async def claim_hidden_weapon(slug: str, principal: Principal = Depends(get_current_principal)):
    weapon = await WeaponService.claim_hidden_weapon(principal.id, slug)
    return weapon.snapshot()


@router.get("/{weapon_id}/enhance-info")
async def enhance_info(
    weapon_id: int,
    principal: Principal = Depends(get_current_principal),
    service: EnhancementService = Depends(get_enhancement_service),
):
    return await service.get_enhancement_info(principal.id, weapon_id)


@router.post("/{weapon_id}/enhance", response_model=EnhanceResponse)
async def enhance(
    weapon_id: int,
    principal: Principal = Depends(get_current_principal),
    service: EnhancementService = Depends(get_enhancement_service),
):
    result = await service.enhance(principal.id, weapon_id)
    return EnhanceResponse(
        result=result.result.value,
        previous_level=result.previous_level,
        new_level=result.new_level,
        gold_spent=result.gold_spent,
        gold_remaining=result.gold_remaining,
        weapon=WeaponOut(**result.weapon),
    )


@router.post("/{weapon_id}/sell", response_model=SellResponse)
async def sell(weapon_id: int, body: SellRequest, principal: Principal = Depends(get_current_principal)):
    result = await WeaponService.sell_weapon(principal.id, weapon_id, body.confirm)
    return SellResponse(gold_earned=result.gold_earned, gold_remaining=result.gold_remaining)


@router.get("/{weapon_id}/history")
async def history(
    weapon_id: int,
    limit: int = Query(10, ge=1, le=100),
    principal: Principal = Depends(get_current_principal),
):
    return await RankingService.weapon_history(principal.id, weapon_id, limit)
