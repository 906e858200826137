"""Command-line entry point for the Chipette emulator."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from chipette.system import DEFAULT_EMULATION_RATE
from chipette.ui.app import AppConfig, Chip8App
from chipette.video import DEFAULT_PALETTE, MONOCHROME


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chipette",
        description="Chipette CHIP-8 emulator",
    )
    parser.add_argument(
        "rom",
        type=Path,
        help="Path to the program image to run",
    )
    parser.add_argument(
        "--scale",
        type=int,
        default=12,
        help="Integer window scale factor (default: 12)",
    )
    parser.add_argument(
        "--rate",
        type=int,
        default=DEFAULT_EMULATION_RATE,
        help=f"Maximum instructions per frame (default: {DEFAULT_EMULATION_RATE})",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Start in single-step debug mode",
    )
    parser.add_argument(
        "--monochrome",
        action="store_true",
        help="Use a pure black and white palette",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Seed for the random number instruction",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if not args.rom.exists():
        parser.error(f"ROM file not found: {args.rom}")
    if args.scale <= 0:
        parser.error("--scale must be positive")
    if args.rate <= 0:
        parser.error("--rate must be positive")

    config = AppConfig(
        rom_path=args.rom,
        scale=args.scale,
        emulation_rate=args.rate,
        debug=args.debug,
        palette=MONOCHROME if args.monochrome else DEFAULT_PALETTE,
        rng_seed=args.seed,
    )
    app = Chip8App(config)
    try:
        app.run()
    except RuntimeError as exc:
        parser.exit(1, f"chipette: {exc}\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
