"""
게임 서버 커스텀 예외 클래스 정의

모든 예외는 EnhanceGameError를 상속받아 일관된 에러 처리를 제공합니다.
status_code는 HTTP 계층에서 그대로 응답 코드로 사용됩니다.
"""


class EnhanceGameError(Exception):
    """게임 서버 기본 예외 클래스"""

    status_code: int = 500

    def __init__(self, message: str = "알 수 없는 오류가 발생했습니다"):
        self.message = message
        super().__init__(self.message)


# =============================================================================
# 입력 검증 예외 (400)
# =============================================================================


class ValidationError(EnhanceGameError):
    """잘못된 입력"""

    status_code = 400


class InvalidAmountError(ValidationError):
    """수량이 양의 정수가 아님"""

    def __init__(self, amount):
        self.amount = amount
        super().__init__(f"수량은 1 이상의 정수여야 합니다: {amount!r}")


class MinimumConversionNotMetError(ValidationError):
    """최소 환전 단위 미달"""

    def __init__(self, from_denomination: str, to_denomination: str, minimum: int, amount: int):
        self.from_denomination = from_denomination
        self.to_denomination = to_denomination
        self.minimum = minimum
        self.amount = amount
        super().__init__(
            f"최소 환전 단위는 {minimum:,} {from_denomination} → 1 {to_denomination} 입니다. "
            f"(요청: {amount:,})"
        )


class UnsupportedConversionError(ValidationError):
    """지원하지 않는 환전 경로"""

    def __init__(self, from_denomination: str, to_denomination: str):
        self.from_denomination = from_denomination
        self.to_denomination = to_denomination
        super().__init__(f"{from_denomination} → {to_denomination} 환전은 지원하지 않습니다.")


class ConfirmationRequiredError(ValidationError):
    """확인이 필요한 작업"""

    def __init__(self, action: str = "판매"):
        self.action = action
        super().__init__(f"{action}하려면 확인이 필요합니다.")


class MaxLevelReachedError(ValidationError):
    """최대 강화 레벨 도달"""

    def __init__(self, level: int):
        self.level = level
        super().__init__(f"최대 강화 레벨입니다 (+{level})")


class SelfBattleError(ValidationError):
    """자기 자신과의 대결"""

    def __init__(self):
        super().__init__("자기 자신과는 대결할 수 없습니다.")


# =============================================================================
# 재화 관련 예외 (400)
# =============================================================================


class InsufficientResourceError(EnhanceGameError):
    """리소스 부족 기본 예외"""

    status_code = 400

    def __init__(self, resource_name: str, required: int, current: int):
        self.resource_name = resource_name
        self.required = required
        self.current = current
        super().__init__(
            f"{resource_name}이(가) 부족합니다. (필요: {required:,}, 보유: {current:,})"
        )


class InsufficientFundsError(InsufficientResourceError):
    """재화 부족"""

    def __init__(self, denomination: str, required: int, current: int):
        self.denomination = denomination
        super().__init__(denomination, required, current)


# =============================================================================
# 조회 실패 예외 (404)
# =============================================================================


class NotFoundError(EnhanceGameError):
    """대상을 찾을 수 없음"""

    status_code = 404


class AccountNotFoundError(NotFoundError):
    """계정을 찾을 수 없음"""

    def __init__(self, account_id):
        self.account_id = account_id
        super().__init__(f"사용자를 찾을 수 없습니다: {account_id}")


class WeaponNotFoundError(NotFoundError):
    """무기를 찾을 수 없음"""

    def __init__(self, weapon_id):
        self.weapon_id = weapon_id
        super().__init__(f"무기를 찾을 수 없습니다: {weapon_id}")


class BattleNotFoundError(NotFoundError):
    """대결 기록을 찾을 수 없음"""

    def __init__(self, battle_id):
        self.battle_id = battle_id
        super().__init__(f"대결을 찾을 수 없습니다: {battle_id}")


# =============================================================================
# 충돌 예외 (409)
# =============================================================================


class ConflictError(EnhanceGameError):
    """현재 상태와 충돌하는 요청"""

    status_code = 409


class DuplicateWeaponError(ConflictError):
    """같은 종류의 무기를 이미 보유"""

    def __init__(self, base_name: str):
        self.base_name = base_name
        super().__init__(f"이미 보유 중인 무기입니다: {base_name}")


class AlreadyCheckedInError(ConflictError):
    """오늘 이미 출석함"""

    def __init__(self):
        super().__init__("오늘은 이미 출석체크를 하셨습니다.")


class HiddenWeaponLockedError(ConflictError):
    """히든 무기 해금 조건 미충족"""

    def __init__(self, slug: str, condition: str):
        self.slug = slug
        self.condition = condition
        super().__init__(f"아직 해금되지 않은 히든 무기입니다. (조건: {condition})")


# =============================================================================
# 인증/권한 예외
# =============================================================================


class AuthenticationError(EnhanceGameError):
    """인증 실패"""

    status_code = 401

    def __init__(self, message: str = "인증이 필요합니다."):
        super().__init__(message)


class PermissionDeniedError(EnhanceGameError):
    """권한 없음"""

    status_code = 403

    def __init__(self, action: str):
        self.action = action
        super().__init__(f"{action} 권한이 없습니다.")


# =============================================================================
# 내부 불변식 위반 (500)
# =============================================================================


class InvariantViolationError(EnhanceGameError):
    """
    내부 불변식 위반

    음수 잔액, 잘못된 확률 테이블 등 발생해서는 안 되는 상태입니다.
    트랜잭션은 롤백되고 호출자에게는 일반 오류 메시지만 전달됩니다.
    """

    status_code = 500

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__("요청을 처리하는 중 서버 오류가 발생했습니다.")
