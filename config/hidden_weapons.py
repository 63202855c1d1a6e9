"""히든 무기 도감"""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class HiddenWeaponDef:
    """히든 무기 정의"""
    slug: str
    name: str
    condition: str
    required_destroys: Optional[int] = None
    """누적 파괴 횟수 해금 조건 (None이면 이벤트/GM 지급 전용)"""


HIDDEN_WEAPONS: dict[str, HiddenWeaponDef] = {
    "bone": HiddenWeaponDef("bone", "제작자의 유골", "누적 파괴 10회", required_destroys=10),
    "xmas_sword": HiddenWeaponDef("xmas_sword", "크리스마스 검", "12월 이벤트"),
    "gingerbread": HiddenWeaponDef("gingerbread", "진저브레드", "이벤트 보상"),
    "flower_bouquet": HiddenWeaponDef("flower_bouquet", "금방 시들 것 같은 할인 꽃다발", "이벤트 보상"),
    "lightsaber": HiddenWeaponDef("lightsaber", "작은 광선검", "특별 이벤트"),
    "sausage": HiddenWeaponDef("sausage", "빵에 낀 의문의 소시지", "히든 퀘스트"),
    "eternal_ice": HiddenWeaponDef("eternal_ice", "영원한 빙결", "겨울 이벤트 보스 처치"),
    "phoenix_feather": HiddenWeaponDef("phoenix_feather", "불사조의 깃털", "부활 50회 달성"),
}


def get_hidden_weapon(slug: str) -> Optional[HiddenWeaponDef]:
    """슬러그로 히든 무기 정의 조회"""
    return HIDDEN_WEAPONS.get(slug)
