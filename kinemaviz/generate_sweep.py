from __future__ import annotations

import argparse
import logging
from typing import Dict, List

from kinemaviz.config import DEFAULT_SIMULATION_CONFIG
from kinemaviz.generator import SweepGenerator, SweepSettings
from kinemaviz.mechanics.catalog import MechanismType


def parse_param(text: str) -> tuple[str, float]:
    """Разобрать "a=120" -> ("a", 120.0)."""

    key, sep, value = text.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"expected ID=VALUE, got {text!r}")
    try:
        return key.strip(), float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}") from None


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Headless mechanism sweeps -> HDF5")
    ap.add_argument("--out", type=str, default="out_sweep")
    ap.add_argument("--ticks", type=int, default=2000)
    ap.add_argument("--dt-ms", type=float, default=16.0)
    ap.add_argument("--speed", type=float, default=DEFAULT_SIMULATION_CONFIG.default_speed)
    ap.add_argument(
        "--mechanism",
        action="append",
        choices=[m.value for m in MechanismType],
        default=None,
        help="repeatable; default: every mechanism in the catalog",
    )
    ap.add_argument("--param", action="append", type=parse_param, default=[], help="ID=VALUE, repeatable")
    ap.add_argument("-v", "--verbose", action="store_true")
    return ap


def main(argv: List[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    overrides: Dict[str, float] = dict(args.param)
    settings = SweepSettings(out_dir=args.out, ticks=args.ticks, dt_ms=args.dt_ms, speed=args.speed)

    gen = SweepGenerator(DEFAULT_SIMULATION_CONFIG, settings)
    gen.run(mechanisms=args.mechanism, overrides=overrides)


if __name__ == "__main__":
    main()
