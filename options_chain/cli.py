"""Command line interface for the options-chain tools."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Optional

import pandas as pd
import requests

from options_chain import tools
from options_chain.config import ConfigError, load_config
from options_chain.data.history import history_frame
from options_chain.options.strikes import classify_strikes, strike_reduction
from options_chain.providers.base import MarketDataProvider, UpstreamError
from options_chain.providers.tradier import TradierMarketDataProvider
from options_chain.server import serve as run_server

logger = logging.getLogger("options_chain")


def _build_provider(args: argparse.Namespace) -> Optional[MarketDataProvider]:
    try:
        config = load_config(Path(args.config) if args.config else None)
    except ConfigError as exc:
        logging.error("Config error: %s", exc)
        return None
    return TradierMarketDataProvider(config.tradier)


def health_check(args: argparse.Namespace) -> int:
    provider = _build_provider(args)
    if provider is None:
        return 1

    if args.skip_ping:
        logging.info("Config validated. Skipping provider ping.")
        return 0

    try:
        provider.ping()
    except Exception as exc:  # noqa: BLE001 - surface provider failures
        logging.error("Tradier ping failed: %s", exc)
        return 1
    logging.info("Tradier ping OK.")
    return 0


def serve(args: argparse.Namespace) -> int:
    provider = _build_provider(args)
    if provider is None:
        return 1

    run_server(provider)
    return 0


def chain(args: argparse.Namespace) -> int:
    provider = _build_provider(args)
    if provider is None:
        return 1

    try:
        result = tools.find_options_chain(
            provider,
            args.symbol,
            expiration=args.expiration,
            greeks=not args.no_greeks,
            option_type=args.option_type,
            strike_percentage=args.strike_percentage,
            logger=logger,
        )
    except (UpstreamError, ValueError, requests.RequestException) as exc:
        logging.error("Options chain failed: %s", exc)
        return 1
    print(json.dumps(result, indent=2))
    return 0


def history(args: argparse.Namespace) -> int:
    provider = _build_provider(args)
    if provider is None:
        return 1

    try:
        payload = tools.historical_prices(
            provider,
            args.symbol,
            interval=args.interval,
            start=args.start,
            end=args.end,
            session_filter=args.session_filter,
            logger=logger,
        )
    except (UpstreamError, requests.RequestException) as exc:
        logging.error("Historical prices failed: %s", exc)
        return 1

    if args.json:
        print(json.dumps(payload, indent=2))
        return 0
    frame = history_frame(payload)
    if frame.empty:
        print(f"No history for {args.symbol} between {args.start} and {args.end}.")
        return 0
    print(frame.to_string(index=False))
    return 0


def strikes(args: argparse.Namespace) -> int:
    if args.step <= 0 or args.high < args.low:
        logging.error("Strike ladder needs --step > 0 and --high >= --low.")
        return 1

    count = int(round((args.high - args.low) / args.step)) + 1
    ladder = [round(args.low + i * args.step, 2) for i in range(count)]
    try:
        bands = classify_strikes(args.price, args.percentage, ladder)
    except ValueError as exc:
        logging.error("%s", exc)
        return 1

    kept = [band for band in bands if band.keep]
    frame = pd.DataFrame(
        {
            "strike": [band.strike for band in bands],
            "distance_pct": [round(band.distance, 2) for band in bands],
            "tier": [band.tier for band in bands],
            "keep": [band.keep for band in bands],
        }
    )
    print(f"Underlying price: ${args.price}")
    print(f"Percentage range: {args.percentage}%")
    print(f"Total available strikes: {len(ladder)}")
    print(f"Filtered significant strikes: {len(kept)}")
    if not frame.empty:
        print(frame.to_string(index=False))
    print(f"Strike reduction: {strike_reduction(len(ladder), len(kept)):.1f}%")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Tradier options chain tools")
    parser.add_argument("--config", help="Path to YAML config file", default=None)
    parser.add_argument("--log-level", default="INFO", help="Logging level")

    subparsers = parser.add_subparsers(dest="command", required=True)

    health_parser = subparsers.add_parser("health-check", help="Validate config and ping Tradier")
    health_parser.add_argument("--skip-ping", action="store_true", help="Only validate config")
    health_parser.set_defaults(func=health_check)

    serve_parser = subparsers.add_parser("serve", help="Run the MCP server on stdio")
    serve_parser.set_defaults(func=serve)

    chain_parser = subparsers.add_parser("chain", help="Print a filtered options chain as JSON")
    chain_parser.add_argument("symbol")
    chain_parser.add_argument("--expiration", help="Expiration date YYYY-MM-DD")
    chain_parser.add_argument("--option-type", choices=["call", "put", "both"], default="both")
    chain_parser.add_argument("--strike-percentage", type=float, default=10.0)
    chain_parser.add_argument("--no-greeks", action="store_true", help="Omit greeks")
    chain_parser.set_defaults(func=chain)

    history_parser = subparsers.add_parser("history", help="Print historical price bars")
    history_parser.add_argument("symbol", help="Stock symbol or OCC option symbol")
    history_parser.add_argument("--start", required=True, help="Start date YYYY-MM-DD")
    history_parser.add_argument("--end", required=True, help="End date YYYY-MM-DD")
    history_parser.add_argument("--interval", choices=["daily", "weekly", "monthly"], default="daily")
    history_parser.add_argument("--session-filter", choices=["all", "open"], default="all")
    history_parser.add_argument("--json", action="store_true", help="Print the raw payload")
    history_parser.set_defaults(func=history)

    strikes_parser = subparsers.add_parser(
        "strikes", help="Show which strikes of a synthetic ladder are significant"
    )
    strikes_parser.add_argument("--price", type=float, default=556.0)
    strikes_parser.add_argument("--percentage", type=float, default=10.0)
    strikes_parser.add_argument("--low", type=float, default=500.0)
    strikes_parser.add_argument("--high", type=float, default=610.0)
    strikes_parser.add_argument("--step", type=float, default=1.0)
    strikes_parser.set_defaults(func=strikes)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
