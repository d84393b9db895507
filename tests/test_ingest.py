import json
from datetime import date

import pytest

from finsight.forecasting.forecaster import Forecaster
from finsight.ingest.transactions import (
    TransactionError,
    load_transactions,
    load_transactions_csv,
    load_transactions_json,
    parse_transaction,
)


def test_parse_transaction_normalizes_fields():
    t = parse_transaction({"amount": "1,250.50", "category": " Rent ", "date": "2026-05-01", "type": "Expense"})
    assert t.amount == 1250.5
    assert t.category == "Rent"
    assert t.date == date(2026, 5, 1)
    assert t.type == "expense"
    assert t.description == ""


def test_parse_transaction_accepts_datetime_strings():
    t = parse_transaction({"amount": 10, "category": "Food", "date": "2026-05-01T18:30:00Z", "type": "expense"})
    assert t.date == date(2026, 5, 1)


@pytest.mark.parametrize(
    "record",
    [
        {"amount": "-5", "category": "Food", "date": "2026-05-01", "type": "expense"},
        {"amount": "abc", "category": "Food", "date": "2026-05-01", "type": "expense"},
        {"amount": "nan", "category": "Food", "date": "2026-05-01", "type": "expense"},
        {"amount": "inf", "category": "Food", "date": "2026-05-01", "type": "expense"},
        {"amount": "-Infinity", "category": "Food", "date": "2026-05-01", "type": "expense"},
        {"amount": "5", "category": "", "date": "2026-05-01", "type": "expense"},
        {"amount": "5", "category": "Food", "date": "not a date", "type": "expense"},
        {"amount": "5", "category": "Food", "date": "2026-05-01", "type": "transfer"},
    ],
)
def test_parse_transaction_rejects_bad_records(record):
    with pytest.raises(TransactionError):
        parse_transaction(record)


def test_load_csv_with_export_header(tmp_path):
    path = tmp_path / "transactions.csv"
    path.write_text(
        "Date,Type,Category,Description,Amount (₹)\n"
        '2026-05-03,expense,Groceries,"Milk, eggs",450\n'
        "2026-05-04,income,Salary,,50000\n",
        encoding="utf-8",
    )
    txs = load_transactions_csv(path)
    assert len(txs) == 2
    assert txs[0].description == "Milk, eggs"
    assert txs[0].amount == 450.0
    assert txs[1].is_income


def test_load_csv_missing_columns(tmp_path):
    path = tmp_path / "bad.csv"
    path.write_text("Date,Amount\n2026-05-03,10\n", encoding="utf-8")
    with pytest.raises(ValueError, match="missing columns"):
        load_transactions_csv(path)


def test_load_csv_strict_and_lenient(tmp_path):
    path = tmp_path / "mixed.csv"
    path.write_text(
        "date,type,category,amount\n"
        "2026-05-03,expense,Food,12\n"
        "2026-05-04,refund,Food,3\n",
        encoding="utf-8",
    )
    with pytest.raises(TransactionError, match="mixed.csv #1"):
        load_transactions_csv(path)
    assert len(load_transactions_csv(path, strict=False)) == 1


def test_load_json_records(tmp_path):
    path = tmp_path / "transactions.json"
    records = [
        {"id": "a1", "amount": 120, "category": "Food & Dining", "description": "Lunch", "date": "2026-04-02", "type": "expense"},
        {"id": "a2", "amount": 3000, "category": "Salary", "description": "", "date": "2026-04-01", "type": "income"},
    ]
    path.write_text(json.dumps({"transactions": records}), encoding="utf-8")
    txs = load_transactions_json(path)
    assert [t.id for t in txs] == ["a1", "a2"]
    assert load_transactions(path) == txs


def test_load_transactions_rejects_unknown_suffix(tmp_path):
    path = tmp_path / "transactions.xlsx"
    path.write_bytes(b"")
    with pytest.raises(ValueError, match="Unsupported"):
        load_transactions(path)


def test_non_finite_amounts_are_skipped_when_lenient(tmp_path):
    path = tmp_path / "transactions.csv"
    path.write_text(
        "date,type,category,description,amount\n"
        "2026-06-03,expense,Food,x,inf\n"
        "2026-06-04,expense,Food,z,nan\n"
        "2026-05-03,expense,Food,y,100\n",
        encoding="utf-8",
    )
    with pytest.raises(TransactionError, match="finite"):
        load_transactions_csv(path)
    txs = load_transactions_csv(path, strict=False)
    assert [t.amount for t in txs] == [100.0]

    fc = Forecaster(txs, now=date(2026, 6, 15))
    assert fc.predict_next_month_expenses()[0].predicted_amount == 100
    assert fc.analyze_spending_patterns().current_month_expenses == 0


def test_load_empty_csv(tmp_path):
    path = tmp_path / "transactions.csv"
    path.write_text("", encoding="utf-8")
    with pytest.raises(ValueError, match="transactions.csv is empty"):
        load_transactions_csv(path)
