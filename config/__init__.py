"""
게임 설정 상수

모든 매직 넘버와 게임 밸런스 관련 상수를 여기서 관리합니다.
각 도메인별 설정은 config/ 하위 모듈에 정의되어 있습니다.
"""
from config.enhancement import (
    EnhancementConfig, ENHANCEMENT,
    EnhancementRate, ENHANCEMENT_RATES,
    get_rate, find_rate_table_errors,
)
from config.economy import (
    Denomination, EconomyConfig, ECONOMY,
    CONVERSION_RATES, WEAPON_SELL_PRICES,
)
from config.combat import BattleConfig, BATTLE
from config.attendance import AttendanceConfig, ATTENDANCE
from config.notification import NotificationConfig, NOTIFICATION
from config.hidden_weapons import HiddenWeaponDef, HIDDEN_WEAPONS, get_hidden_weapon
from config.auth import AuthConfig, AUTH, ACCESS_CODES

__all__ = [
    # enhancement
    "EnhancementConfig", "ENHANCEMENT",
    "EnhancementRate", "ENHANCEMENT_RATES",
    "get_rate", "find_rate_table_errors",
    # economy
    "Denomination", "EconomyConfig", "ECONOMY",
    "CONVERSION_RATES", "WEAPON_SELL_PRICES",
    # battle
    "BattleConfig", "BATTLE",
    # attendance
    "AttendanceConfig", "ATTENDANCE",
    # notification
    "NotificationConfig", "NOTIFICATION",
    # hidden weapons
    "HiddenWeaponDef", "HIDDEN_WEAPONS", "get_hidden_weapon",
    # auth
    "AuthConfig", "AUTH", "ACCESS_CODES",
]
