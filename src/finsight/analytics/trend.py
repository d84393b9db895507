from __future__ import annotations
import math
from typing import List, Sequence

from finsight.core.models import DECREASING, INCREASING, STABLE

def round_half_up(x: float, ndigits: int = 0) -> float:
    """Round like a calculator: .5 always goes up, unlike round()."""
    scale = 10 ** ndigits
    return math.floor(x * scale + 0.5) / scale

def moving_average(values: Sequence[float], window: int = 3) -> List[float]:
    """Trailing average; early points average over whatever history exists."""
    out: List[float] = []
    for i in range(len(values)):
        start = max(0, i - window + 1)
        chunk = values[start : i + 1]
        out.append(sum(chunk) / len(chunk))
    return out

def slope(values: Sequence[float]) -> float:
    """Least-squares slope of value against index 0..n-1."""
    n = len(values)
    sum_x = sum(range(n))
    sum_y = sum(values)
    sum_xy = sum(i * v for i, v in enumerate(values))
    sum_xx = sum(i * i for i in range(n))
    denom = n * sum_xx - sum_x * sum_x
    if denom == 0:
        return 0.0
    return (n * sum_xy - sum_x * sum_y) / denom

def classify_trend(values: Sequence[float], threshold: float = 0.1) -> str:
    if len(values) < 2:
        return STABLE
    s = slope(values)
    if s > threshold:
        return INCREASING
    if s < -threshold:
        return DECREASING
    return STABLE

def classify_change(change_percent: float, threshold_pct: float = 5.0) -> str:
    if change_percent > threshold_pct:
        return INCREASING
    if change_percent < -threshold_pct:
        return DECREASING
    return STABLE
