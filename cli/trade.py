"""One-shot trading run: composition root for the CLI."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys
from typing import Optional, Sequence

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from alpaca_trader.api.context import build_context
from alpaca_trader.core.errors import TradingError
from alpaca_trader.core.types import ExecutionReport
from shared.config import get_settings
from shared.logging_config import configure_logging

logger = logging.getLogger(__name__)


def print_report(report: ExecutionReport) -> None:
    """Print per-symbol outcomes to console."""
    print("\n" + "=" * 60)
    print("TRADING RUN")
    print("=" * 60)
    for outcome in report.outcomes:
        if outcome.snapshot is not None:
            detail = f"sma={outcome.snapshot.sma:.4f} rsi={outcome.snapshot.rsi:.2f}"
        else:
            detail = f"{outcome.error_type}: {outcome.error}"
        signal = outcome.signal.value if outcome.signal else "-"
        print(f"{outcome.symbol:<8} {outcome.status.value:<8} {signal:<5} {detail}")
    print("-" * 60)
    print(f"Orders: {report.orders_submitted}  Held: {report.held}  Errors: {report.errors}")
    print("=" * 60 + "\n")


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Run the SMA/RSI trading loop once")
    parser.add_argument("--dry-run", action="store_true", help="log intents instead of placing orders")
    parser.add_argument("--symbols", default="", help="comma separated subset of tradable symbols")
    parser.add_argument("--max-workers", type=int, default=None, help="worker threads for the per-symbol fan-out")
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(settings.logging)

    context = build_context(
        settings,
        dry_run=True if args.dry_run else None,
        max_workers=args.max_workers,
    )

    try:
        assets = context.data_source.list_tradable_assets()
        wanted = {symbol.strip().upper() for symbol in args.symbols.split(",") if symbol.strip()}
        if wanted:
            assets = [asset for asset in assets if asset.symbol in wanted]
        report = context.orchestrator().run(assets)
    except TradingError as e:
        logger.error(f"Trading run aborted: {e}")
        return 1

    print_report(report)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
