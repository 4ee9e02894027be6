#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
lhearrays command-line interface

Commands
--------
1. **scan**    — Print the array dimensions of one or more LHE files
2. **convert** — Parse LHE files and write one HDF5 file per input

Usage
-----
::

    # Dimensions only (first pass)
    python -m lhearrays.cli scan run_01/unweighted_events.lhe

    # Full parse to HDF5
    python -m lhearrays.cli convert run_01/unweighted_events.lhe -o h5/

    # Fail on any malformed numeric field
    python -m lhearrays.cli convert events.lhe -o h5/ --strict
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

from lhearrays.exceptions import LHEArraysError

logger = logging.getLogger("lhearrays.cli")


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def cmd_scan(args):
    """Print dimensions of each input file."""
    from lhearrays.readers.scanner import scan_dimensions

    rc = 0
    for path in args.files:
        try:
            scan = scan_dimensions(path)
        except LHEArraysError as exc:
            print(f"{path}: ERROR: {exc}")
            rc = 1
            if not args.continue_on_error:
                return rc
            continue
        print(
            f"{path}: {scan.n_events} events, {scan.n_particles} particles, "
            f"{scan.n_weights} weights per event ({scan.n_weight_tags} <wgt> tags)"
        )
    return rc


def cmd_convert(args):
    """Convert each input file to HDF5."""
    from lhearrays.converters.hdf5 import convert_lhe_to_hdf5

    out_dir = Path(args.output)
    total_ok = 0
    total_fail = 0

    for path in args.files:
        src = Path(path)
        out_path = out_dir / f"{src.stem}.h5"
        print(f"  {src.name} -> {out_path}", end=" ... ", flush=True)
        try:
            arrays = convert_lhe_to_hdf5(
                src,
                out_path,
                validate=not args.no_validate,
                strict=args.strict,
                overwrite=args.overwrite,
            )
        except LHEArraysError as exc:
            print(f"FAIL: {exc}")
            total_fail += 1
            if not args.continue_on_error:
                return 1
            continue
        print(f"OK ({arrays.n_events} events, {arrays.n_particles} particles)")
        total_ok += 1

    print(f"\nHDF5: {total_ok} OK, {total_fail} failed")
    return 0 if total_fail == 0 else 1


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="lhearrays",
        description="Convert Les Houches Event files to flat arrays",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
Examples:
    python -m lhearrays.cli scan events.lhe                   # dimensions only
    python -m lhearrays.cli convert events.lhe -o h5/         # write h5/events.h5
    python -m lhearrays.cli convert *.lhe -o h5/ --overwrite  # batch, overwrite
""",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--continue-on-error",
        action="store_true",
        help="Continue with the next file after an error",
    )

    sub = parser.add_subparsers(dest="command", help="Command to run")

    p_scan = sub.add_parser("scan", help="Print array dimensions")
    p_scan.add_argument("files", nargs="+", help="LHE files")

    p_conv = sub.add_parser("convert", help="Write arrays to HDF5")
    p_conv.add_argument("files", nargs="+", help="LHE files")
    p_conv.add_argument(
        "--output", "-o",
        default=".",
        help="Output directory (default: current directory)",
    )
    p_conv.add_argument(
        "--overwrite",
        action="store_true",
        help="Overwrite existing output files",
    )
    p_conv.add_argument(
        "--strict",
        action="store_true",
        help="Fail on any malformed numeric field",
    )
    p_conv.add_argument(
        "--no-validate",
        action="store_true",
        help="Skip post-parse array checks",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s %(levelname)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING, format="%(levelname)s: %(message)s")

    if args.command is None:
        parser.print_help()
        return 0

    t0 = time.time()

    commands = {
        "scan": cmd_scan,
        "convert": cmd_convert,
    }

    rc = commands[args.command](args)
    logger.debug("Completed in %.1fs", time.time() - t0)
    return rc


if __name__ == "__main__":
    sys.exit(main())
