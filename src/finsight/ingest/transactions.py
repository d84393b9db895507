from __future__ import annotations
import json
import logging
import math
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, List

import pandas as pd
from dateutil import parser as dup

from finsight.core.models import TRANSACTION_TYPES, Transaction

logger = logging.getLogger(__name__)

class TransactionError(ValueError):
    """A record that cannot be turned into a Transaction."""

# accepted header spellings, lowercase
_COLUMNS = {
    "id": ["id"],
    "date": ["date", "created on"],
    "type": ["type"],
    "category": ["category"],
    "description": ["description", "title", "note"],
    "amount": ["amount", "value"],
}

def _to_str(x) -> str:
    if x is None:
        return ""
    if not isinstance(x, str) and pd.isna(x):
        return ""
    return str(x)

def _to_amount(x) -> float:
    s = _to_str(x).replace(",", "").strip()
    if not s:
        raise TransactionError("amount is missing")
    try:
        v = float(s)
    except ValueError:
        raise TransactionError(f"amount is not a number: {x!r}") from None
    if not math.isfinite(v):
        raise TransactionError(f"amount must be a finite number, got {x!r}")
    if v < 0:
        raise TransactionError(f"amount must be non-negative, got {v}")
    return v

def _to_date(x) -> date:
    if isinstance(x, datetime):
        return x.date()
    if isinstance(x, date):
        return x
    s = _to_str(x).strip()
    if not s:
        raise TransactionError("date is missing")
    try:
        return dup.isoparse(s).date()
    except ValueError:
        try:
            return dup.parse(s).date()
        except (ValueError, OverflowError):
            raise TransactionError(f"date is not parseable: {s!r}") from None

def parse_transaction(record: Dict[str, Any]) -> Transaction:
    tx_type = _to_str(record.get("type")).strip().lower()
    if tx_type not in TRANSACTION_TYPES:
        raise TransactionError(f"type must be one of {TRANSACTION_TYPES}, got {tx_type!r}")
    category = _to_str(record.get("category")).strip()
    if not category:
        raise TransactionError("category is empty")
    return Transaction(
        amount=_to_amount(record.get("amount")),
        category=category,
        date=_to_date(record.get("date")),
        type=tx_type,
        description=_to_str(record.get("description")).strip(),
        id=_to_str(record.get("id")).strip(),
    )

def parse_records(records: List[Dict[str, Any]], strict: bool = True, source: str = "") -> List[Transaction]:
    out: List[Transaction] = []
    for i, rec in enumerate(records):
        try:
            out.append(parse_transaction(rec))
        except TransactionError as e:
            if strict:
                raise TransactionError(f"{source or 'record'} #{i}: {e}") from e
            logger.warning("Skipping %s #%d: %s", source or "record", i, e)
    return out

def _match_columns(columns) -> Dict[str, str]:
    # "Amount (₹)" still matches "amount"
    low = {c.strip().lower().split("(")[0].strip(): c for c in columns if isinstance(c, str)}
    found: Dict[str, str] = {}
    for field, names in _COLUMNS.items():
        for n in names:
            if n in low:
                found[field] = low[n]
                break
    return found

def load_transactions_csv(path: Path, strict: bool = True) -> List[Transaction]:
    try:
        df = pd.read_csv(path, dtype=object, keep_default_na=False)
    except pd.errors.EmptyDataError:
        raise ValueError(f"{path.name} is empty") from None
    cols = _match_columns(df.columns)
    missing = {"date", "type", "category", "amount"} - set(cols)
    if missing:
        raise ValueError(f"{path.name} is missing columns {sorted(missing)}. Found: {list(df.columns)}")

    records = [{field: row[col] for field, col in cols.items()} for _, row in df.iterrows()]
    txs = parse_records(records, strict=strict, source=path.name)
    logger.info("Loaded %d transactions from %s", len(txs), path)
    return txs

def load_transactions_json(path: Path, strict: bool = True) -> List[Transaction]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("transactions", [])
    if not isinstance(data, list):
        raise ValueError(f"{path.name} must hold a list of transaction records")
    txs = parse_records(data, strict=strict, source=path.name)
    logger.info("Loaded %d transactions from %s", len(txs), path)
    return txs

def load_transactions(path: Path, strict: bool = True) -> List[Transaction]:
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return load_transactions_csv(path, strict=strict)
    if suffix == ".json":
        return load_transactions_json(path, strict=strict)
    raise ValueError(f"Unsupported transaction file type: {path.name}")
