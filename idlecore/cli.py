from __future__ import annotations

import argparse
import importlib
import json
import logging
import sys
from pathlib import Path

from idlecore.cipher import DEFAULT_KEY, PlainSaveCipher, SaveCipher, XorSaveCipher
from idlecore.content import load_skin
from idlecore.definition import ContentCatalog
from idlecore.errors import ConfigurationError, PersistenceError
from idlecore.formatting import format_number, format_offline_report
from idlecore.persistence import SaveConfig, decode_record
from idlecore.session import GameSession
from idlecore.strategy import GreedyCheapest


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="idlecore",
        description="idlecore: idle economy simulation CLI",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command")

    info = sub.add_parser("info", help="Describe a catalog")
    info.add_argument("catalog", help="Skin directory or module with define_catalog()")

    play = sub.add_parser("play", help="Run the economy headlessly")
    play.add_argument("catalog", help="Skin directory or module with define_catalog()")
    play.add_argument(
        "--seconds", type=float, default=600.0, help="Simulated seconds to run"
    )
    play.add_argument("--tick-rate", type=float, default=10.0, help="Ticks per second")
    play.add_argument("--save-dir", default=None, help="Directory for the save file")
    play.add_argument("--key", default=DEFAULT_KEY, help="Save obfuscation key")
    play.add_argument("--plain", action="store_true", help="Write saves unobfuscated")
    play.add_argument(
        "--no-offline", action="store_true", help="Do not apply offline earnings"
    )
    play.add_argument(
        "--no-upgrades", action="store_true", help="Only buy generator levels"
    )
    play.add_argument(
        "--prestige-at",
        type=int,
        default=0,
        help="Prestige once the payout reaches this value (0 = never)",
    )

    inspect = sub.add_parser("inspect-save", help="Decode a save file to JSON")
    inspect.add_argument("path", help="Save file")
    inspect.add_argument("--key", default=DEFAULT_KEY, help="Save obfuscation key")
    inspect.add_argument("--plain", action="store_true", help="File is unobfuscated")

    return parser


def load_catalog(target: str) -> ContentCatalog:
    """A skin directory, or a module exposing define_catalog()."""
    if Path(target).is_dir():
        return load_skin(target)
    mod = importlib.import_module(target)
    if not hasattr(mod, "define_catalog"):
        print(f"Error: module {target!r} has no define_catalog() function")
        sys.exit(1)
    return mod.define_catalog()


def build_cipher(key: str, plain: bool) -> SaveCipher:
    if plain:
        return PlainSaveCipher()
    return XorSaveCipher(key)


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    try:
        if args.command == "info":
            print(describe_catalog(load_catalog(args.catalog)))
        elif args.command == "play":
            _run_play(args)
        elif args.command == "inspect-save":
            _run_inspect(args)
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        sys.exit(2)
    except PersistenceError as exc:
        print(f"Save error: {exc}", file=sys.stderr)
        sys.exit(3)


def describe_catalog(catalog: ContentCatalog) -> str:
    lines: list[str] = [f"Catalog: {catalog.name or 'unnamed'}", "", "CURRENCIES:"]
    for c in catalog.currencies:
        start = format_number(catalog.starting_balance(c.id))
        lines.append(f"  {c.id:<16s} {c.name} (start {start})")
    lines.append("")
    lines.append("GENERATORS:")
    for g in catalog.generators:
        curve = g.cost_curve.type
        lines.append(
            f"  {g.id:<16s} {format_number(g.base_rate_per_sec)}/s {g.currency_id}, "
            f"cost {format_number(g.base_cost)} ({curve})"
        )
    lines.append("")
    lines.append("UPGRADES:")
    for u in catalog.upgrades:
        effect = catalog.upgrade_effect(u.id)
        lines.append(
            f"  {u.id:<16s} {effect.type.value} {effect.value:g} on {effect.target}, "
            f"price {format_number(u.price)}"
        )
    lines.append("")
    formula = catalog.theme.prestige_formula
    lines.append(
        f"Offline cap: {catalog.theme.offline_cap_hours:g}h, "
        f"prestige formula A={formula.a:g} B={formula.b:g}"
    )
    return "\n".join(lines)


def _run_play(args: argparse.Namespace) -> None:
    catalog = load_catalog(args.catalog)
    config = SaveConfig(directory=Path(args.save_dir) if args.save_dir else None)
    session = GameSession(
        catalog,
        cipher=build_cipher(args.key, args.plain),
        save_config=config,
        tick_rate=args.tick_rate,
    )
    strategy = GreedyCheapest(
        buy_upgrades=not args.no_upgrades, prestige_at=args.prestige_at
    )

    earnings = session.start(apply_offline=not args.no_offline)
    if earnings is not None:
        print(format_offline_report(earnings))

    step = session.ticker.step
    steps = int(args.seconds / step)
    purchases = 0
    prestiges = 0
    for _ in range(steps):
        session.advance(step)
        purchases += len(strategy.play_step(session.economy))
        if strategy.should_prestige(session.prestige):
            if session.prestige.perform_prestige() > 0:
                prestiges += 1

    session.persistence.save()

    state = session.economy.state
    print(f"Strategy: {strategy.describe()}")
    print(f"Simulated {steps * step:.1f}s, {purchases} purchases, {prestiges} prestiges")
    for cdef in catalog.currencies:
        print(f"  {cdef.name:<16s} {format_number(state.balance(cdef.id))}")
    for status in session.economy.generator_statuses():
        print(
            f"  {status.name:<16s} Lv {status.level:<4d} "
            f"{format_number(status.production_per_sec)}/s  "
            f"next {format_number(status.next_cost)}"
        )
    print(
        f"Prestige: {format_number(session.prestige.prestige_currency)} "
        f"(x{session.prestige.multiplier:.2f}), "
        f"next payout {session.prestige.preview_prestige()}"
    )
    print(f"Saved to {session.persistence.save_path}")


def _run_inspect(args: argparse.Namespace) -> None:
    path = Path(args.path)
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise PersistenceError(f"Could not read {path}: {exc}") from exc
    raw = decode_record(data, build_cipher(args.key, args.plain))
    print(json.dumps(raw, indent=2, sort_keys=True))
