from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List

MonthKey = str  # "YYYY-MM"

INCOME = "income"
EXPENSE = "expense"
TRANSACTION_TYPES = (INCOME, EXPENSE)

INCREASING = "increasing"
DECREASING = "decreasing"
STABLE = "stable"

@dataclass(frozen=True)
class Transaction:
  amount: float       # >= 0
  category: str
  date: date
  type: str           # "income" | "expense"
  description: str = ""
  id: str = ""

  @property
  def is_expense(self) -> bool:
    return self.type == EXPENSE

  @property
  def is_income(self) -> bool:
    return self.type == INCOME

@dataclass
class Prediction:
  category: str
  predicted_amount: int
  confidence: float   # 0..1, 2 decimals
  trend: str          # "increasing" | "decreasing" | "stable"

  def as_dict(self) -> Dict[str, Any]:
    return {
      "category": self.category,
      "predictedAmount": self.predicted_amount,
      "confidence": self.confidence,
      "trend": self.trend,
    }

@dataclass
class SpendingAnalysis:
  current_month_expenses: float
  last_month_expenses: float
  change_percent: float
  trend: str

  def as_dict(self) -> Dict[str, Any]:
    return {
      "currentMonthExpenses": self.current_month_expenses,
      "lastMonthExpenses": self.last_month_expenses,
      "changePercent": self.change_percent,
      "trend": self.trend,
    }

@dataclass
class MonthStats:
  month: MonthKey
  income: float
  expenses: float
  balance: float
  savings_rate: float  # percent of income kept

@dataclass
class CategoryShare:
  category: str
  amount: float
  count: int
  percentage: float

@dataclass
class ForecastCfg:
  history_months: int = 6              # months in the aggregation window, newest = "now"
  smoothing_window: int = 3            # trailing moving average size
  weights: List[float] = field(default_factory=lambda: [0.1, 0.15, 0.2, 0.25, 0.3])
  fallback_weight: float = 0.2         # for slice positions past the weight list
  slope_threshold: float = 0.1         # |slope| above this is a trend
  increase_factor: float = 1.1
  decrease_factor: float = 0.9
  min_confidence: float = 0.1
  max_confidence: float = 0.9
  change_threshold_pct: float = 5.0    # month-over-month trend band
  high_confidence: float = 0.7         # predictions above this count as reliable

  def __post_init__(self) -> None:
    if self.history_months < 1:
      raise ValueError(f"history_months must be >= 1, got {self.history_months}")
    if self.smoothing_window < 1:
      raise ValueError(f"smoothing_window must be >= 1, got {self.smoothing_window}")
    if not self.weights:
      raise ValueError("weights must not be empty")
    if self.min_confidence > self.max_confidence:
      raise ValueError("min_confidence must not exceed max_confidence")
