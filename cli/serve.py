"""HTTP server composition root."""

from __future__ import annotations

import argparse
from pathlib import Path
import sys
from typing import Optional, Sequence

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import uvicorn

from alpaca_trader.api.app import create_app
from alpaca_trader.api.context import build_context
from shared.config import get_settings
from shared.logging_config import configure_logging


def main(argv: Optional[Sequence[str]] = None) -> int:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Serve the trading API")
    parser.add_argument("--host", default=settings.server.host)
    parser.add_argument("--port", type=int, default=settings.server.port)
    parser.add_argument("--dry-run", action="store_true")
    args = parser.parse_args(argv)

    configure_logging(settings.logging)
    context = build_context(settings, dry_run=True if args.dry_run else None)
    app = create_app(context, cors_origins=settings.server.cors_origins)

    uvicorn.run(app, host=args.host, port=args.port, log_config=None)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
