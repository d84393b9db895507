from __future__ import annotations
import logging
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import List

from finsight.config.loader import UnifiedConfig
from finsight.core.dates import month_key
from finsight.core.models import Prediction, SpendingAnalysis, Transaction
from finsight.forecasting.forecaster import Forecaster
from finsight.ingest.transactions import load_transactions
from finsight.reports import export_transactions_csv, write_forecast_md, write_predictions_csv

logger = logging.getLogger(__name__)

@dataclass
class PipelineResult:
  now: date
  transactions: List[Transaction]
  predictions: List[Prediction]
  analysis: SpendingAnalysis
  written: List[Path]

def _find_transaction_files(inputs_dir: Path, pattern: str) -> List[Path]:
    candidates = sorted(p for p in inputs_dir.glob(pattern)
                        if p.is_file() and p.suffix.lower() in (".csv", ".json"))
    if not candidates:
        raise FileNotFoundError(f"No transaction files matching {pattern!r} in {inputs_dir}")
    return candidates

def run_pipeline(cfg: UnifiedConfig, now: date | None = None) -> PipelineResult:
  now = now or date.today()
  reports_dir = cfg.paths.reports_dir

  # 1) Read every exported transaction file
  transactions: List[Transaction] = []
  for p in _find_transaction_files(cfg.paths.inputs_dir, cfg.inputs.transactions_glob):
    transactions += load_transactions(p, strict=cfg.inputs.strict)
  transactions.sort(key=lambda t: t.date)

  # 2) Forecast
  fc = Forecaster(transactions, now=now, cfg=cfg.forecast)
  predictions = fc.predict_next_month_expenses()
  analysis = fc.analyze_spending_patterns()
  stats = fc.month_stats()
  logger.info(
    "%s: %d categories forecast, spending %s (%+.2f%%)",
    month_key(now), len(predictions), analysis.trend, analysis.change_percent,
  )

  # 3) Reports
  written = [
    write_forecast_md(
      reports_dir, now, predictions, analysis, stats,
      breakdown=fc.category_breakdown(top_n=cfg.report.top_categories),
      series=fc.expense_series(),
      summary=fc.prediction_summary(top_n=cfg.report.top_categories),
      currency_symbol=cfg.report.currency_symbol,
    ),
    write_predictions_csv(reports_dir / f"predictions-{month_key(now)}.csv", predictions),
  ]
  if cfg.report.export_transactions:
    written.append(export_transactions_csv(reports_dir / "transactions.csv", transactions))

  print(f"Wrote {len(written)} report(s) to {reports_dir}")
  return PipelineResult(
    now=now,
    transactions=transactions,
    predictions=predictions,
    analysis=analysis,
    written=written,
  )
