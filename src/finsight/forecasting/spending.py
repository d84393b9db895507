from __future__ import annotations
from typing import Iterable

from finsight.analytics.monthly_aggregates import month_expense_total
from finsight.analytics.trend import classify_change, round_half_up
from finsight.core.dates import as_date, shift_months
from finsight.core.models import ForecastCfg, SpendingAnalysis, Transaction

def analyze_spending_patterns(
    transactions: Iterable[Transaction],
    now,
    cfg: ForecastCfg | None = None,
) -> SpendingAnalysis:
    """Compare this calendar month's expenses with the previous calendar month."""
    cfg = cfg or ForecastCfg()
    txs = list(transactions)
    now = as_date(now)
    one_month_ago = shift_months(now, -1)

    current = month_expense_total(txs, now)
    prior = month_expense_total(txs, one_month_ago)

    change = (current - prior) / prior * 100 if prior > 0 else 0.0
    return SpendingAnalysis(
        current_month_expenses=current,
        last_month_expenses=prior,
        change_percent=round_half_up(change, 2),
        trend=classify_change(change, cfg.change_threshold_pct),
    )
