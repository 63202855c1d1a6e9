from typing import List, Optional

from tortoise.backends.base.client import BaseDBAsyncClient

from exceptions import WeaponNotFoundError
from models import Weapon


async def find_weapons_by_owner(user_id: int) -> List[Weapon]:
    return await Weapon.filter(owner_id=user_id).order_by("-level", "-created_at")


async def exists_weapon_by_base_name(
    user_id: int,
    base_name: str,
    conn: Optional[BaseDBAsyncClient] = None
) -> bool:
    return await Weapon.filter(owner_id=user_id, base_name=base_name).using_db(conn).exists()


async def get_owned_weapon(
    user_id: int,
    weapon_id: int,
    conn: Optional[BaseDBAsyncClient] = None,
    for_update: bool = False
) -> Weapon:
    """
    계정 소유 무기 조회

    다른 계정의 무기이거나 존재하지 않으면 WeaponNotFoundError
    """
    query = Weapon.filter(id=weapon_id, owner_id=user_id)
    if for_update:
        query = query.select_for_update()
    weapon = await query.using_db(conn).first()
    if weapon is None:
        raise WeaponNotFoundError(weapon_id)
    return weapon


async def get_weapon(
    weapon_id: int,
    conn: Optional[BaseDBAsyncClient] = None,
    for_update: bool = False
) -> Weapon:
    query = Weapon.filter(id=weapon_id)
    if for_update:
        query = query.select_for_update()
    weapon = await query.using_db(conn).first()
    if weapon is None:
        raise WeaponNotFoundError(weapon_id)
    return weapon
