"""
난수 공급자

강화/대결 판정에 쓰이는 난수를 주입 가능하게 분리합니다.
비즈니스 로직은 random 모듈을 직접 호출하지 않고 RandomSource만 사용합니다.
"""
import math
import random
from typing import Optional, Protocol


class RandomSource(Protocol):
    """균등 분포 난수 공급자"""

    def uniform(self, upper: float) -> float:
        """[0, upper) 구간의 균등 난수 하나를 반환"""
        ...


class SystemRandomSource:
    """운영용 난수 공급자 (OS 엔트로피 기반)"""

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.SystemRandom()

    def uniform(self, upper: float) -> float:
        if upper <= 0:
            raise ValueError(f"upper must be positive: {upper}")
        # 반열린 구간 유지
        return min(self._rng.random() * upper, math.nextafter(upper, 0.0))


class SeededRandomSource(SystemRandomSource):
    """시드 고정 난수 공급자 (시뮬레이션/재현용)"""

    def __init__(self, seed: int):
        super().__init__(random.Random(seed))
