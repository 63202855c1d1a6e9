"""
API 요청/응답 스키마

요청 본문은 형식만 검증하고, 수량 범위 같은 게임 규칙은 서비스 계층에서 검증합니다.
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt

from config import Denomination


class LoginRequest(BaseModel):
    username: str = Field(..., description="플레이어 이름")
    code: str = Field(..., description="접속 코드")


class LoginResponse(BaseModel):
    id: int
    username: str
    role: str
    token: str


class WeaponOut(BaseModel):
    id: int
    name: str
    base_name: str
    level: int
    is_hidden: bool


class CreateWeaponRequest(BaseModel):
    name: str
    base_name: Optional[str] = None


class EnhanceResponse(BaseModel):
    result: str
    previous_level: int
    new_level: int
    gold_spent: int
    gold_remaining: int
    weapon: WeaponOut


class SellRequest(BaseModel):
    confirm: StrictBool = False


class SellResponse(BaseModel):
    gold_earned: int
    gold_remaining: int


class BalancesOut(BaseModel):
    gold: int
    choco: int
    money: int


class ConvertRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_: Denomination = Field(..., alias="from")
    to: Denomination
    amount: StrictInt = Field(..., description="원본 재화 기준 수량")


class BattleRequest(BaseModel):
    attacker_weapon_id: int
    defender_weapon_id: int


class BattleResponse(BaseModel):
    battle_id: int
    winner: dict
    loser: dict
    gold_exchanged: int
    attacker_power: int
    defender_power: int


class CheckInResponse(BaseModel):
    streak: int
    reward: int
    gold_remaining: int


class CurrencyAdjustmentRequest(BaseModel):
    """GM 재화 조정 (mode=add: 증감량, mode=set: 목표 잔액)"""
    model_config = ConfigDict(extra="forbid")

    gold: Optional[StrictInt] = None
    choco: Optional[StrictInt] = None
    money: Optional[StrictInt] = None
    mode: str = Field("add", pattern="^(add|set)$")


class GiveCurrencyRequest(BaseModel):
    denomination: Denomination
    amount: StrictInt


class GiveCurrencyResponse(BaseModel):
    recipients: int


class GrantHiddenWeaponRequest(BaseModel):
    slug: str


class RankingsResponse(BaseModel):
    total: int
    page: int
    total_pages: int
    rankings: List[dict]


class UserSearchResponse(BaseModel):
    total: int
    page: int
    total_pages: int
    users: List[dict]
