"""표시용 수치 반올림 유틸리티."""

from __future__ import annotations

import math


def round_half_up(value: float, ndigits: int = 0) -> float:
    """0.5를 항상 올림 방향으로 처리하는 반올림입니다. 내장 round는 짝수 쪽으로 맞춥니다."""
    factor = 10**ndigits
    return math.floor(float(value) * factor + 0.5) / factor
