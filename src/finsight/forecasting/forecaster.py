from __future__ import annotations
from datetime import date
from typing import Dict, Iterable, List, Tuple

from finsight.analytics.monthly_aggregates import (
    category_breakdown,
    month_stats,
    monthly_category_totals,
    monthly_expense_series,
)
from finsight.core.dates import as_date
from finsight.core.models import CategoryShare, ForecastCfg, MonthStats, Prediction, SpendingAnalysis, Transaction
from finsight.forecasting.predictor import predict_from_totals, summarize_predictions
from finsight.forecasting.spending import analyze_spending_patterns

class Forecaster:
    """
    Forecasts over a fixed snapshot of transactions.

    Every method recomputes from the snapshot, so calling twice with the same
    `now` gives the same answer. Build a new Forecaster when the transaction
    list changes.
    """

    def __init__(self, transactions: Iterable[Transaction], now=None, cfg: ForecastCfg | None = None) -> None:
        self.transactions: Tuple[Transaction, ...] = tuple(transactions)
        self.now: date = as_date(now) if now is not None else date.today()
        self.cfg = cfg or ForecastCfg()

    def monthly_spending(self) -> Dict[str, List[float]]:
        return monthly_category_totals(self.transactions, self.now, self.cfg.history_months)

    def predict_next_month_expenses(self) -> List[Prediction]:
        return predict_from_totals(self.monthly_spending(), self.cfg)

    def analyze_spending_patterns(self) -> SpendingAnalysis:
        return analyze_spending_patterns(self.transactions, self.now, self.cfg)

    def prediction_summary(self, top_n: int = 8) -> dict:
        return summarize_predictions(self.predict_next_month_expenses(), self.cfg, top_n=top_n)

    def month_stats(self) -> MonthStats:
        return month_stats(self.transactions, self.now)

    def expense_series(self) -> List[Tuple[str, float]]:
        return monthly_expense_series(self.transactions, self.now, self.cfg.history_months)

    def category_breakdown(self, top_n: int | None = 8) -> List[CategoryShare]:
        return category_breakdown(self.transactions, self.now, top_n=top_n)
