"""
테스트용 난수 공급자
"""
from collections import deque
from typing import Iterable


class FixedRandomSource:
    """
    정해진 값을 순서대로 반환하는 난수 공급자

    값이 모두 소진되면 AssertionError (예상보다 많이 뽑은 경우)
    """

    def __init__(self, values: Iterable[float]):
        self._values = deque(values)
        self.calls = []

    def uniform(self, upper: float) -> float:
        assert self._values, "FixedRandomSource exhausted"
        value = self._values.popleft()
        assert 0 <= value < upper, f"fixed value {value} outside [0, {upper})"
        self.calls.append(upper)
        return value

    @property
    def remaining(self) -> int:
        return len(self._values)
