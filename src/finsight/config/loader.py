from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List

from finsight.core.models import ForecastCfg

@dataclass
class PathsCfg:
  inputs_dir: Path
  reports_dir: Path
  config_dir: Path

@dataclass
class InputsCfg:
  transactions_glob: str
  strict: bool

@dataclass
class ReportCfg:
  currency_symbol: str
  top_categories: int
  export_transactions: bool
  log_level: str

@dataclass
class UnifiedConfig:
  paths: PathsCfg
  inputs: InputsCfg
  report: ReportCfg
  forecast: ForecastCfg

_FORECAST_FLOATS = (
  "fallback_weight", "slope_threshold", "increase_factor", "decrease_factor",
  "min_confidence", "max_confidence", "change_threshold_pct", "high_confidence",
)

def _forecast_cfg(raw: Dict[str, Any]) -> ForecastCfg:
  kwargs: Dict[str, Any] = {}
  if "history_months" in raw:
    kwargs["history_months"] = int(raw["history_months"])
  if "smoothing_window" in raw:
    kwargs["smoothing_window"] = int(raw["smoothing_window"])
  if "weights" in raw:
    weights: List[float] = [float(w) for w in raw["weights"]]
    kwargs["weights"] = weights
  for key in _FORECAST_FLOATS:
    if key in raw:
      kwargs[key] = float(raw[key])
  unknown = set(raw) - set(kwargs)
  if unknown:
    raise KeyError(f"Unknown forecast settings: {sorted(unknown)}")
  return ForecastCfg(**kwargs)

def load_unified_config(repo_root: Path, settings_path: Path | None = None) -> UnifiedConfig:
    """Load config/settings.yaml (or an explicit settings file)."""
    cfg_dir = repo_root / "config"
    yaml_cfg = settings_path or cfg_dir / "settings.yaml"

    # Require PyYAML
    try:
        import yaml  # type: ignore
    except ImportError as e:
        raise ImportError(
            "PyYAML is required to read settings.yaml. Install with: pip install pyyaml"
        ) from e

    if not yaml_cfg.exists():
        raise FileNotFoundError(
            f"Missing {yaml_cfg}. Copy config/settings.yaml and adjust the paths."
        )

    y: Dict[str, Any] = yaml.safe_load(yaml_cfg.read_text(encoding="utf-8")) or {}

    # minimal structure checks (fail fast with clear messages)
    for section in ["paths", "inputs"]:
        if section not in y:
            raise KeyError(f"{yaml_cfg.name} is missing the '{section}' section")

    paths = y["paths"]
    inputs = y["inputs"]
    report = y.get("report", {}) or {}

    return UnifiedConfig(
        paths=PathsCfg(
            inputs_dir=(repo_root / paths["inputs_dir"]).resolve(),
            reports_dir=(repo_root / paths["reports_dir"]).resolve(),
            config_dir=yaml_cfg.parent.resolve(),
        ),
        inputs=InputsCfg(
            transactions_glob=str(inputs.get("transactions_glob", "*.csv")),
            strict=bool(inputs.get("strict", True)),
        ),
        report=ReportCfg(
            currency_symbol=str(report.get("currency_symbol", "₹")),
            top_categories=int(report.get("top_categories", 8)),
            export_transactions=bool(report.get("export_transactions", True)),
            log_level=str(report.get("log_level", "INFO")).upper(),
        ),
        forecast=_forecast_cfg(y.get("forecast", {}) or {}),
    )
