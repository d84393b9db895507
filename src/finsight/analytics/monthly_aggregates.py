from __future__ import annotations
from collections import defaultdict
from typing import Dict, Iterable, List, Tuple

from finsight.core.dates import as_date, in_month, month_bounds, month_key, month_label, window_months
from finsight.core.models import CategoryShare, MonthStats, Transaction

def monthly_category_totals(
    transactions: Iterable[Transaction],
    now,
    months: int = 6,
) -> Dict[str, List[float]]:
    """
    Return {category: [total, ...]} of expense amounts for the `months`
    calendar months ending at now, oldest first. Slots without spending are 0.
    Categories that never total above zero in the window are left out.
    """
    txs = [t for t in transactions if t.is_expense]
    out: Dict[str, List[float]] = {}
    for slot, start in enumerate(window_months(now, months)):
        first, last = month_bounds(start)
        per_category: Dict[str, float] = defaultdict(float)
        for t in txs:
            if first <= t.date <= last:
                per_category[t.category] += t.amount
        for category, amount in per_category.items():
            if category not in out:
                out[category] = [0.0] * months
            out[category][slot] = amount
    return {c: amounts for c, amounts in out.items() if any(a > 0 for a in amounts)}

def month_expense_total(transactions: Iterable[Transaction], month_start) -> float:
    return sum(t.amount for t in transactions if t.is_expense and in_month(t.date, month_start))

def monthly_expense_series(
    transactions: Iterable[Transaction],
    now,
    months: int = 6,
) -> List[Tuple[str, float]]:
    """[("Mon YYYY", expense total), ...] oldest first."""
    txs = list(transactions)
    return [(month_label(start), month_expense_total(txs, start)) for start in window_months(now, months)]

def month_stats(transactions: Iterable[Transaction], now) -> MonthStats:
    now = as_date(now)
    first, last = month_bounds(now)
    income = 0.0
    expenses = 0.0
    for t in transactions:
        if not (first <= t.date <= last):
            continue
        if t.is_income:
            income += t.amount
        elif t.is_expense:
            expenses += t.amount
    balance = income - expenses
    savings_rate = (balance / income) * 100 if income > 0 else 0.0
    return MonthStats(
        month=month_key(now),
        income=income,
        expenses=expenses,
        balance=balance,
        savings_rate=savings_rate,
    )

def category_breakdown(
    transactions: Iterable[Transaction],
    now,
    top_n: int | None = 8,
) -> List[CategoryShare]:
    """Current-month expense totals per category, largest first."""
    first, last = month_bounds(as_date(now))
    totals: Dict[str, float] = defaultdict(float)
    counts: Dict[str, int] = defaultdict(int)
    for t in transactions:
        if t.is_expense and first <= t.date <= last:
            totals[t.category] += t.amount
            counts[t.category] += 1

    grand = sum(totals.values())
    shares = [
        CategoryShare(
            category=c,
            amount=amt,
            count=counts[c],
            percentage=(amt / grand * 100) if grand > 0 else 0.0,
        )
        for c, amt in totals.items()
    ]
    shares.sort(key=lambda s: s.amount, reverse=True)
    if top_n is not None:
        shares = shares[:top_n]
    return shares
