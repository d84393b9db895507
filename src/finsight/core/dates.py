from __future__ import annotations
from datetime import date, datetime
from typing import List, Tuple

from dateutil.relativedelta import relativedelta

from finsight.core.models import MonthKey

def as_date(d) -> date:
  if isinstance(d, datetime):
    return d.date()
  return d

def month_key(d) -> MonthKey:
  return f"{d.year:04d}-{d.month:02d}"

def month_label(d) -> str:
  return d.strftime("%b %Y")

def month_bounds(d) -> Tuple[date, date]:
  """Inclusive first and last day of the calendar month containing d."""
  first = date(d.year, d.month, 1)
  last = first + relativedelta(months=1, days=-1)
  return first, last

def shift_months(d, months: int) -> date:
  # relativedelta clamps the day: 2024-03-31 minus one month is 2024-02-29
  return as_date(d) + relativedelta(months=months)

def window_months(now, n: int) -> List[date]:
  """First day of each of the n calendar months ending at now, oldest first."""
  now = as_date(now)
  return [month_bounds(shift_months(now, -offset))[0] for offset in range(n - 1, -1, -1)]

def in_month(d, month_start: date) -> bool:
  first, last = month_bounds(month_start)
  return first <= d <= last
