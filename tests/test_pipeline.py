import json
from datetime import date

import pytest

from finsight.config.loader import load_unified_config
from finsight.forecasting.forecaster import Forecaster
from finsight.core.models import Transaction
from finsight.pipeline import run_pipeline

SETTINGS = """
paths:
  inputs_dir: inputs
  reports_dir: reports
inputs:
  transactions_glob: "transactions*.*"
  strict: false
report:
  currency_symbol: "$"
"""


def _repo(tmp_path):
    (tmp_path / "config").mkdir()
    (tmp_path / "config" / "settings.yaml").write_text(SETTINGS, encoding="utf-8")
    (tmp_path / "inputs").mkdir()
    return tmp_path


def test_run_pipeline_end_to_end(tmp_path):
    repo = _repo(tmp_path)
    rows = ["Date,Type,Category,Description,Amount"]
    for m in range(1, 7):
        rows.append(f"2026-{m:02d}-05,expense,Rent,,1000")
        rows.append(f"2026-{m:02d}-01,income,Salary,,4000")
    rows.append("2026-06-09,expense,Food & Dining,broken row,-3")
    (repo / "inputs" / "transactions.csv").write_text("\n".join(rows) + "\n", encoding="utf-8")
    (repo / "inputs" / "transactions-extra.json").write_text(
        json.dumps([{"amount": 1100, "category": "Travel", "date": "2026-06-10", "type": "expense"}]),
        encoding="utf-8",
    )

    cfg = load_unified_config(repo)
    result = run_pipeline(cfg, now=date(2026, 6, 15))

    assert len(result.transactions) == 13
    assert [p.category for p in result.predictions] == ["Travel", "Rent"]
    assert result.predictions[1].predicted_amount == 1000
    assert result.predictions[1].confidence == 0.9
    assert result.analysis.current_month_expenses == 2100
    assert result.analysis.trend == "increasing"

    names = sorted(p.name for p in result.written)
    assert names == ["forecast-2026-06.md", "predictions-2026-06.csv", "transactions.csv"]
    assert all(p.exists() for p in result.written)
    assert "$1,000" in (repo / "reports" / "forecast-2026-06.md").read_text(encoding="utf-8")


def test_run_pipeline_without_inputs(tmp_path):
    cfg = load_unified_config(_repo(tmp_path))
    with pytest.raises(FileNotFoundError):
        run_pipeline(cfg, now=date(2026, 6, 15))


def test_forecaster_constant_food_and_idempotence():
    txs = [Transaction(amount=1000, category="Food", date=date(2026, m, 12), type="expense") for m in range(1, 7)]
    fc = Forecaster(txs, now=date(2026, 6, 30))
    first = fc.predict_next_month_expenses()
    assert [p.as_dict() for p in first] == [
        {"category": "Food", "predictedAmount": 1000, "confidence": 0.9, "trend": "stable"}
    ]
    assert fc.predict_next_month_expenses() == first
    assert fc.analyze_spending_patterns().change_percent == 0.0


def test_forecaster_empty():
    fc = Forecaster([], now=date(2026, 6, 30))
    assert fc.predict_next_month_expenses() == []
    assert fc.analyze_spending_patterns().trend == "stable"
    assert fc.category_breakdown() == []
    assert fc.prediction_summary()["total_predicted"] == 0
