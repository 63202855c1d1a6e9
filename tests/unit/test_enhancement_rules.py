"""
강화 확률 테이블 및 판정 엔진 테스트
"""
import dataclasses

import pytest

from config import ENHANCEMENT_RATES, EnhancementRate, find_rate_table_errors, get_rate
from exceptions import InvariantViolationError, MaxLevelReachedError
from models import EnhancementOutcome
from service.item.enhancement_engine import classify, require_rate, roll_outcome
from service.random_source import SeededRandomSource, SystemRandomSource
from fixtures.random_sources import FixedRandomSource


class TestRateTable:
    def test_covers_levels_0_to_19(self):
        assert sorted(ENHANCEMENT_RATES) == list(range(20))

    def test_probabilities_sum_to_100(self):
        for level, rate in ENHANCEMENT_RATES.items():
            assert rate.success + rate.maintain + rate.destroy == 100, f"level {level}"

    def test_cost_strictly_increasing(self):
        costs = [ENHANCEMENT_RATES[level].cost for level in range(20)]
        assert all(a < b for a, b in zip(costs, costs[1:]))

    def test_table_is_valid(self):
        assert find_rate_table_errors(ENHANCEMENT_RATES) == []

    def test_known_entries(self):
        assert get_rate(0) == EnhancementRate(100, 0, 0, 1_000)
        assert get_rate(19) == EnhancementRate(2, 30, 68, 100_000_000)
        assert get_rate(20) is None

    def test_detects_bad_sum(self):
        rates = dict(ENHANCEMENT_RATES)
        rates[5] = dataclasses.replace(rates[5], success=70)
        errors = find_rate_table_errors(rates)
        assert any("level 5" in e for e in errors)

    def test_detects_non_increasing_cost(self):
        rates = dict(ENHANCEMENT_RATES)
        rates[3] = dataclasses.replace(rates[3], cost=rates[2].cost)
        assert any("cost" in e for e in find_rate_table_errors(rates))

    def test_detects_missing_level(self):
        rates = dict(ENHANCEMENT_RATES)
        del rates[19]
        assert find_rate_table_errors(rates)


class TestClassify:
    """구간 경계: 하한 포함, 상한 제외"""

    def test_level_1_boundaries(self):
        # 성공 95 / 유지 3 / 파괴 2
        assert classify(1, 0.0).result == EnhancementOutcome.SUCCESS
        assert classify(1, 94.999).result == EnhancementOutcome.SUCCESS
        assert classify(1, 95.0).result == EnhancementOutcome.MAINTAIN
        assert classify(1, 97.999).result == EnhancementOutcome.MAINTAIN
        assert classify(1, 98.0).result == EnhancementOutcome.DESTROY
        assert classify(1, 99.999).result == EnhancementOutcome.DESTROY

    def test_level_0_always_success(self):
        assert classify(0, 99.999).result == EnhancementOutcome.SUCCESS

    def test_new_levels(self):
        assert classify(5, 10.0).new_level == 6
        assert classify(5, 70.0).new_level == 5
        assert classify(5, 90.0).new_level == 0

    def test_outcome_keeps_roll_and_previous_level(self):
        outcome = classify(7, 12.5)
        assert outcome.previous_level == 7
        assert outcome.roll == 12.5

    @pytest.mark.parametrize("roll", [-0.1, 100.0, 150.0])
    def test_roll_out_of_range(self, roll):
        with pytest.raises(InvariantViolationError):
            classify(3, roll)

    def test_max_level(self):
        with pytest.raises(MaxLevelReachedError):
            classify(20, 0.0)

    def test_negative_level(self):
        with pytest.raises(InvariantViolationError):
            require_rate(-1)


class TestRollOutcome:
    def test_single_draw(self):
        source = FixedRandomSource([50.0, 1.0])
        outcome = roll_outcome(4, source)
        assert outcome.result == EnhancementOutcome.SUCCESS
        assert source.remaining == 1
        assert source.calls == [100]

    def test_max_level_draws_nothing(self):
        source = FixedRandomSource([1.0])
        with pytest.raises(MaxLevelReachedError):
            roll_outcome(20, source)
        assert source.remaining == 1

    def test_seeded_source_is_reproducible(self):
        first = [roll_outcome(10, SeededRandomSource(7)).roll for _ in range(3)]
        second = [roll_outcome(10, SeededRandomSource(7)).roll for _ in range(3)]
        assert first == second

    @pytest.mark.slow
    def test_distribution_matches_table(self):
        source = SeededRandomSource(12345)
        trials = 20_000
        successes = sum(
            roll_outcome(10, source).result == EnhancementOutcome.SUCCESS for _ in range(trials)
        )
        assert abs(successes / trials - 0.40) < 0.02


class TestSystemRandomSource:
    def test_range(self):
        source = SystemRandomSource()
        for _ in range(1000):
            value = source.uniform(100)
            assert 0 <= value < 100

    def test_rejects_non_positive_upper(self):
        with pytest.raises(ValueError):
            SystemRandomSource().uniform(0)
