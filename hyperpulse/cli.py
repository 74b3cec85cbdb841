"""Command-line interface for the HyperPulse dashboard."""
from __future__ import annotations

import argparse
import asyncio
import dataclasses
import sys

from .config import AppConfig, load_config
from .logging_setup import configure_logging
from .models import TimeRange
from .services import Dashboard, filter_traders, find_trader
from .views import ConsoleView

_RANGE_CHOICES = [tr.value for tr in TimeRange]


def _add_generation_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--range",
        dest="time_range",
        type=str.upper,
        choices=_RANGE_CHOICES,
        default=None,
        help="Reporting window (overrides config)",
    )
    parser.add_argument(
        "--count", type=int, default=None, help="Number of traders (overrides config)"
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Random seed for reproducible output"
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="hyperpulse",
        description="Synthetic perp trader leaderboard and analytics",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.yaml (default: config.yaml in project root)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )

    sub = parser.add_subparsers(dest="command")

    lb_parser = sub.add_parser("leaderboard", help="Print one leaderboard snapshot")
    _add_generation_args(lb_parser)
    lb_parser.add_argument("--search", default="", help="Address substring filter")
    lb_parser.add_argument(
        "--tag",
        type=str.upper,
        choices=["ALL", "WHALE", "DEGEN", "SAFE", "ALPHA"],
        default=None,
        help="Only traders carrying this tag",
    )

    ticker_parser = sub.add_parser("ticker", help="Print one market ticker refresh")
    ticker_parser.add_argument("--seed", type=int, default=None)

    analyze_parser = sub.add_parser("analyze", help="AI strategy audit for one trader")
    analyze_parser.add_argument("trader", help="Trader rank or address")
    _add_generation_args(analyze_parser)

    live_parser = sub.add_parser("live", help="Continuously refresh leaderboard and ticker")
    live_parser.add_argument(
        "--leaderboard-interval",
        type=float,
        default=None,
        help="Leaderboard refresh in seconds (overrides config)",
    )
    live_parser.add_argument(
        "--ticker-interval",
        type=float,
        default=None,
        help="Ticker refresh in seconds (overrides config)",
    )

    return parser


def _apply_overrides(config: AppConfig, args: argparse.Namespace) -> AppConfig:
    """Fold CLI flags into the loaded configuration."""
    changes = {}
    if getattr(args, "time_range", None):
        changes["time_range"] = TimeRange.parse(args.time_range)
    if getattr(args, "count", None) is not None:
        changes["trader_count"] = args.count
    if getattr(args, "seed", None) is not None:
        changes["seed"] = args.seed
    if not changes:
        return config
    return dataclasses.replace(
        config, leaderboard=dataclasses.replace(config.leaderboard, **changes)
    )


async def _run(args: argparse.Namespace) -> int:
    """Execute the selected command."""
    configure_logging(args.log_level)
    config = _apply_overrides(load_config(args.config), args)
    view = ConsoleView()
    dashboard = Dashboard(config, view)

    if args.command == "leaderboard":
        snapshot = dashboard.refresh_leaderboard(publish=False)
        traders = filter_traders(snapshot.traders, args.search, args.tag)
        print(view.render_leaderboard(snapshot, traders))
    elif args.command == "ticker":
        dashboard.refresh_ticker()
    elif args.command == "analyze":
        snapshot = dashboard.refresh_leaderboard(publish=False)
        trader = find_trader(snapshot.traders, args.trader)
        if trader is None:
            print(f"Trader not found: {args.trader}", file=sys.stderr)
            return 1
        analysis = await dashboard.analyze(trader.rank)
        view.show_trader(trader, analysis)
    elif args.command == "live":
        await dashboard.run_continuous(args.leaderboard_interval, args.ticker_interval)
    else:
        build_parser().print_help()
        return 1
    return 0


def main() -> None:
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        sys.exit(asyncio.run(_run(args)))
    except KeyboardInterrupt:
        sys.exit(130)
