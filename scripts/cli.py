from pathlib import Path
import argparse
import logging
import sys

REPO = Path(__file__).resolve().parents[1]
SRC = REPO / "src"
if str(SRC) not in sys.path:
  sys.path.insert(0, str(SRC))

from dateutil import parser as dup

from finsight.config.loader import load_unified_config
from finsight.pipeline import run_pipeline

def main(argv=None):
  ap = argparse.ArgumentParser(description="Forecast next month's spending from exported transactions.")
  ap.add_argument("--config", type=Path, default=None, help="settings.yaml (default: config/settings.yaml)")
  ap.add_argument("--now", default=None, help="reference date YYYY-MM-DD (default: today)")
  args = ap.parse_args(argv)

  cfg = load_unified_config(REPO, settings_path=args.config)
  logging.basicConfig(
    level=getattr(logging, cfg.report.log_level, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
  )
  now = dup.isoparse(args.now).date() if args.now else None
  run_pipeline(cfg=cfg, now=now)

if __name__ == "__main__":
  main()
