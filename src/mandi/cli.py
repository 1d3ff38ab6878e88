from __future__ import annotations

import argparse
import asyncio
import logging

from mandi import MarketSession, default_config, load_config
from mandi.config import MarketConfig, TickerConfig
from mandi.market import SortKey, view_frame
from mandi.monitoring import validate_dataset
from mandi.scheduling import AsyncioScheduler


def _positive_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {value}")
    return number


def _config(args: argparse.Namespace) -> MarketConfig:
    return load_config(args.config) if args.config else default_config()


def _print_view(session: MarketSession, args: argparse.Namespace) -> None:
    df = view_frame(session.get_view(args.search, args.sort))
    if df.empty:
        print("No crops found.")
    else:
        print(df.to_string(index=False))


def _cmd_snapshot(args: argparse.Namespace) -> int:
    cfg = _config(args)
    session = MarketSession(cfg)
    session.select_region(args.district)

    result = validate_dataset(
        session.records(),
        cfg.catalog.crops,
        district=args.district,
        price_floor=cfg.ticker.price_floor,
    )
    print(f"[{args.district}] {result}")
    _print_view(session, args)

    session.dispose()
    return 0 if result.is_valid else 1


async def _watch(args: argparse.Namespace, cfg: MarketConfig) -> None:
    session = MarketSession(cfg, scheduler=AsyncioScheduler())
    session.select_region(args.district)
    _print_view(session, args)

    shown = 0
    poll = min(0.1, cfg.ticker.interval_seconds / 2)
    try:
        while shown < args.ticks:
            await asyncio.sleep(poll)
            if session.ticks != shown:
                shown = session.ticks
                print(f"\n[{args.district}] tick {shown}")
                _print_view(session, args)
    finally:
        session.dispose()


def _cmd_watch(args: argparse.Namespace) -> int:
    cfg = _config(args)
    if args.interval is not None:
        cfg.ticker = TickerConfig.model_validate(
            {**cfg.ticker.model_dump(), "interval_seconds": args.interval}
        )
    asyncio.run(_watch(args, cfg))
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="mandi")
    parser.add_argument("--config", help="Path to YAML config (defaults to bundled settings)")
    parser.add_argument("--log-level", default="WARNING")
    sub = parser.add_subparsers(dest="cmd", required=True)

    sort_choices = [k.value for k in SortKey]

    p_snap = sub.add_parser("snapshot", help="Print the opening market view for a district")
    p_snap.add_argument("--district", required=True)
    p_snap.add_argument("--search", default="")
    p_snap.add_argument("--sort", default="name", choices=sort_choices)
    p_snap.set_defaults(func=_cmd_snapshot)

    p_watch = sub.add_parser("watch", help="Run the live ticker and print the view after each tick")
    p_watch.add_argument("--district", required=True)
    p_watch.add_argument("--ticks", type=int, default=5)
    p_watch.add_argument("--interval", type=_positive_float, default=None, help="Seconds between ticks")
    p_watch.add_argument("--search", default="")
    p_watch.add_argument("--sort", default="price", choices=sort_choices)
    p_watch.set_defaults(func=_cmd_watch)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    )
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
