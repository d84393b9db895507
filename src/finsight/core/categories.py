from __future__ import annotations
from typing import Dict, Tuple

from finsight.core.models import EXPENSE, INCOME

EXPENSE_CATEGORIES: Tuple[str, ...] = (
  "Food & Dining",
  "Transportation",
  "Shopping",
  "Entertainment",
  "Bills & Utilities",
  "Healthcare",
  "Education",
  "Travel",
  "Groceries",
  "Rent",
  "Insurance",
  "Investment",
  "Other",
)

INCOME_CATEGORIES: Tuple[str, ...] = (
  "Salary",
  "Interest from Mutual Funds",
  "Interest from Fixed Deposits",
  "Interest from Savings Account",
  "Dividend from Stocks",
  "Freelance Income",
  "Business Income",
  "Rental Income",
  "Bonus",
  "Gift Money",
  "Refund",
  "Other Income",
)

DEFAULT_ICON = "📋"

CATEGORY_ICONS: Dict[str, str] = {
  "Food & Dining": "🍽️",
  "Transportation": "🚗",
  "Shopping": "🛍️",
  "Entertainment": "🎬",
  "Bills & Utilities": "💡",
  "Healthcare": "🏥",
  "Education": "📚",
  "Travel": "✈️",
  "Groceries": "🛒",
  "Rent": "🏠",
  "Insurance": "🛡️",
  "Investment": "📈",
  "Salary": "💼",
  "Interest from Mutual Funds": "📊",
  "Interest from Fixed Deposits": "🏦",
  "Interest from Savings Account": "💰",
  "Dividend from Stocks": "📈",
  "Freelance Income": "💻",
  "Business Income": "🏢",
  "Rental Income": "🏘️",
  "Bonus": "🎉",
  "Gift Money": "🎁",
  "Refund": "↩️",
  "Other Income": "💵",
  "Other": DEFAULT_ICON,
}

def category_icon(category: str) -> str:
  return CATEGORY_ICONS.get(category, DEFAULT_ICON)

def categories_for(tx_type: str) -> Tuple[str, ...]:
  if tx_type == EXPENSE:
    return EXPENSE_CATEGORIES
  if tx_type == INCOME:
    return INCOME_CATEGORIES
  raise ValueError(f"Unknown transaction type: {tx_type!r}")
