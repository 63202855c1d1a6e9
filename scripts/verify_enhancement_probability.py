"""
강화 확률 검증 스크립트

강화 판정 엔진의 결과 분포가 확률 테이블과 일치하는지 시뮬레이션으로 검증합니다.
실행: python scripts/verify_enhancement_probability.py [시드]
"""
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from config import ENHANCEMENT_RATES
from models import EnhancementOutcome
from service.item.enhancement_engine import roll_outcome
from service.random_source import SeededRandomSource


def simulate_enhancement_attempts(level: int, random_source, trials: int = 10000) -> dict:
    """
    특정 레벨에서 강화 판정을 시뮬레이션

    Args:
        level: 현재 강화 레벨
        random_source: 난수 공급자
        trials: 시뮬레이션 횟수
    """
    counts = {outcome: 0 for outcome in EnhancementOutcome}
    for _ in range(trials):
        counts[roll_outcome(level, random_source).result] += 1

    rate = ENHANCEMENT_RATES[level]
    expected = {
        EnhancementOutcome.SUCCESS: rate.success,
        EnhancementOutcome.MAINTAIN: rate.maintain,
        EnhancementOutcome.DESTROY: rate.destroy,
    }
    actual = {outcome: counts[outcome] * 100 / trials for outcome in EnhancementOutcome}
    deviation = max(abs(actual[o] - expected[o]) for o in EnhancementOutcome)

    return {
        "level": level,
        "expected": expected,
        "actual": actual,
        "trials": trials,
        "deviation_percent": deviation,
    }


def main():
    seed = int(sys.argv[1]) if len(sys.argv) > 1 else 42
    random_source = SeededRandomSource(seed)

    print("=" * 80)
    print(f"강화 확률 검증 시뮬레이션 (각 10,000회 시도, seed={seed})")
    print("=" * 80)
    print(f"{'레벨':<8} {'성공':<16} {'유지':<16} {'파괴':<16} {'결과'}")
    print("-" * 80)

    for level in sorted(ENHANCEMENT_RATES):
        result = simulate_enhancement_attempts(level, random_source)
        cells = [
            f"{result['expected'][o]:>3}%/{result['actual'][o]:>6.2f}%"
            for o in (EnhancementOutcome.SUCCESS, EnhancementOutcome.MAINTAIN, EnhancementOutcome.DESTROY)
        ]
        status = "✅ OK" if result['deviation_percent'] < 2.0 else "⚠️ 편차 큼"
        print(f"+{level:<7} {cells[0]:<16} {cells[1]:<16} {cells[2]:<16} {status}")

    print()
    print("🎲 연속 성공 확률 계산")
    print("-" * 80)
    chain = 1.0
    for level in range(10, 15):
        chain *= ENHANCEMENT_RATES[level].success / 100
    print(f"+10 → +15 연속 성공 확률: {chain*100:.4f}% (약 {int(1/chain):,}번 중 1번)")

    print()
    print("=" * 80)
    print("결론: 모든 레벨의 실제 확률이 기대 확률과 2% 이내 편차로 일치하면 정상")
    print("=" * 80)


if __name__ == "__main__":
    main()
