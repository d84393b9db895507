from __future__ import annotations
import csv
from datetime import date
from functools import partial
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple

from finsight.core.categories import category_icon
from finsight.core.dates import month_key
from finsight.core.models import CategoryShare, MonthStats, Prediction, SpendingAnalysis, Transaction

_TREND_MARK = {"increasing": "↑", "decreasing": "↓", "stable": "→"}

def _fmt_amount(amount: float) -> str:
  # 1200.0 -> "1200", 12.5 -> "12.5"
  return str(int(amount)) if float(amount).is_integer() else str(amount)

def ensure_dir(p: Path):
  p.mkdir(parents=True, exist_ok=True)

def _lakh_grouping(digits: str) -> str:
  # 10000000 -> "1,00,00,000": last three digits, then pairs
  if len(digits) <= 3:
    return digits
  head, tail = digits[:-3], digits[-3:]
  pairs = []
  while len(head) > 2:
    pairs.insert(0, head[-2:])
    head = head[:-2]
  pairs.insert(0, head)
  return ",".join(pairs) + "," + tail

def format_currency(amount: float, symbol: str = "₹") -> str:
  """Whole units with thousands separators; rupees use lakh/crore grouping."""
  sign = "-" if amount < 0 else ""
  if symbol == "₹":
    return f"{sign}{symbol}{_lakh_grouping(f'{abs(amount):.0f}')}"
  return f"{sign}{symbol}{abs(amount):,.0f}"

def export_transactions_csv(path: Path, transactions: Iterable[Transaction]) -> Path:
  ensure_dir(path.parent)
  with path.open("w", newline="", encoding="utf-8") as f:
    w = csv.writer(f)
    w.writerow(["Date", "Type", "Category", "Description", "Amount"])
    for t in transactions:
      w.writerow([t.date.isoformat(), t.type, t.category, t.description, _fmt_amount(t.amount)])
  return path

def write_predictions_csv(path: Path, predictions: Iterable[Prediction]) -> Path:
  ensure_dir(path.parent)
  fieldnames = ["category", "predictedAmount", "confidence", "trend"]
  with path.open("w", newline="", encoding="utf-8") as f:
    w = csv.DictWriter(f, fieldnames=fieldnames)
    w.writeheader()
    for p in predictions:
      w.writerow(p.as_dict())
  return path

def write_forecast_md(
  reports_dir: Path,
  now: date,
  predictions: List[Prediction],
  analysis: SpendingAnalysis,
  stats: MonthStats,
  *,
  breakdown: Sequence[CategoryShare] = (),
  series: Sequence[Tuple[str, float]] = (),
  summary: dict | None = None,
  currency_symbol: str = "₹",
) -> Path:
  ensure_dir(reports_dir)
  month = month_key(now)
  path = reports_dir / f"forecast-{month}.md"
  money = partial(format_currency, symbol=currency_symbol)

  lines = []
  lines.append(f"# {month}: Spending forecast\n")
  lines.append(f"_Generated for {now.isoformat()} from the expense history in the forecast window._\n")

  lines.append("## This month\n")
  lines.append(f"- **Income:** {money(stats.income)}")
  lines.append(f"- **Expenses:** {money(stats.expenses)}")
  lines.append(f"- **Balance:** {money(stats.balance)}")
  lines.append(f"- **Savings rate:** {stats.savings_rate:.1f}%")
  lines.append(
    f"- **Change vs last month:** {analysis.change_percent:+.2f}% "
    f"({money(analysis.last_month_expenses)} → {money(analysis.current_month_expenses)}, {analysis.trend})"
  )
  lines.append("")

  if series:
    lines.append("## Monthly expenses\n")
    lines.append("| Month | Expenses |")
    lines.append("|---|---:|")
    for label, total in series:
      lines.append(f"| {label} | {money(total)} |")
    lines.append("")

  lines.append("## Next month by category\n")
  if summary:
    lines.append(f"- **Total predicted:** {money(summary['total_predicted'])}")
    lines.append(f"- **High-confidence categories:** {summary['high_confidence_count']}\n")
  if predictions:
    lines.append("| | Category | Predicted | Confidence | Trend |")
    lines.append("|---|---|---:|---:|---|")
    for p in predictions:
      lines.append(
        f"| {category_icon(p.category)} | {p.category} | {money(p.predicted_amount)} "
        f"| {p.confidence:.0%} | {_TREND_MARK.get(p.trend, '')} {p.trend} |"
      )
  else:
    lines.append("_No expense history in the window._")
  lines.append("")

  if breakdown:
    lines.append("## Where this month's money went\n")
    for s in breakdown:
      lines.append(f"- {category_icon(s.category)} **{s.category}**: {money(s.amount)} ({s.percentage:.1f}%, {s.count} txn)")
    lines.append("")

  path.write_text("\n".join(lines), encoding="utf-8")
  return path
