from __future__ import annotations
import logging
import math
from typing import Dict, Iterable, List, Sequence

from finsight.analytics.monthly_aggregates import monthly_category_totals
from finsight.analytics.trend import classify_trend, moving_average, round_half_up
from finsight.core.models import DECREASING, INCREASING, STABLE, ForecastCfg, Prediction, Transaction

logger = logging.getLogger(__name__)

# weights apply to at most this many trailing months
RECENT_MONTHS = 5

def weighted_recent_average(amounts: Sequence[float], cfg: ForecastCfg) -> float:
    """
    Weighted mean of the last RECENT_MONTHS amounts. The earliest month of the
    slice takes cfg.weights[0]; slice positions past the end of the weight
    list fall back to cfg.fallback_weight.
    """
    start = max(0, len(amounts) - RECENT_MONTHS)
    total = 0.0
    total_weight = 0.0
    for pos, amount in enumerate(amounts[start:]):
        w = cfg.weights[pos] if pos < len(cfg.weights) else cfg.fallback_weight
        total += amount * w
        total_weight += w
    return total / total_weight if total_weight else 0.0

def confidence_score(amounts: Sequence[float], cfg: ForecastCfg) -> float:
    """1 - coefficient of variation, clamped to [min_confidence, max_confidence]."""
    n = len(amounts)
    mean = sum(amounts) / n
    variance = sum((a - mean) ** 2 for a in amounts) / n
    cov = math.sqrt(variance) / (mean or 1)
    return max(cfg.min_confidence, min(cfg.max_confidence, 1 - cov))

def predict_category(category: str, amounts: Sequence[float], cfg: ForecastCfg | None = None) -> Prediction:
    cfg = cfg or ForecastCfg()
    non_zero = [a for a in amounts if a > 0]

    # not enough history; fall back to the plain mean
    if len(non_zero) < 2:
        avg = sum(non_zero) / len(non_zero) if non_zero else 0.0
        return Prediction(
            category=category,
            predicted_amount=int(round_half_up(avg)),
            confidence=0.3 if non_zero else 0.1,
            trend=STABLE,
        )

    smoothed = moving_average(amounts, cfg.smoothing_window)
    trend = classify_trend(smoothed, cfg.slope_threshold)

    prediction = weighted_recent_average(amounts, cfg)
    if trend == INCREASING:
        prediction *= cfg.increase_factor
    elif trend == DECREASING:
        prediction *= cfg.decrease_factor

    confidence = confidence_score(amounts, cfg)
    return Prediction(
        category=category,
        predicted_amount=int(round_half_up(max(0.0, prediction))),
        confidence=round_half_up(confidence, 2),
        trend=trend,
    )

def predict_from_totals(totals: Dict[str, List[float]], cfg: ForecastCfg | None = None) -> List[Prediction]:
    cfg = cfg or ForecastCfg()
    predictions = [predict_category(c, amounts, cfg) for c, amounts in totals.items()]
    # sorted() is stable: ties keep first-seen category order
    return sorted(predictions, key=lambda p: p.predicted_amount, reverse=True)

def predict_next_month_expenses(
    transactions: Iterable[Transaction],
    now,
    cfg: ForecastCfg | None = None,
) -> List[Prediction]:
    cfg = cfg or ForecastCfg()
    totals = monthly_category_totals(transactions, now, cfg.history_months)
    predictions = predict_from_totals(totals, cfg)
    logger.debug("Predicted %d categories over a %d-month window", len(predictions), cfg.history_months)
    return predictions

def summarize_predictions(predictions: List[Prediction], cfg: ForecastCfg | None = None, top_n: int = 8) -> dict:
    """Headline numbers for a predictions panel."""
    cfg = cfg or ForecastCfg()
    reliable = [p for p in predictions if p.confidence > cfg.high_confidence]
    return {
        "total_predicted": sum(p.predicted_amount for p in predictions),
        "high_confidence_count": len(reliable),
        "high_confidence": reliable,
        "top": predictions[:top_n],
    }
