#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
lhearrays - Les Houches Event files as flat NumPy arrays

Parse LHE files into four fixed-width arrays (event integers, event reals
and weights, particle integers, particle reals) suitable for vectorised
analysis, and optionally store them as HDF5.

Parsing runs in two passes: a line-based scan sizes the arrays, then the
file is streamed through the Expat SAX tokenizer in 64 KiB chunks and
every value is written straight into its pre-allocated cell.

Modules
-------
readers
    Dimension scanner, capture state machine, extractors, and parse.
models
    Typed dataclass records returned by the readers.
converters
    HDF5 converter.
utils
    Token conversion helpers, layout constants, and validation logic.

Examples
--------
>>> from lhearrays import parse
>>> i_evt, f_evt, i_ptc, f_ptc = parse("unweighted_events.lhe")
>>> i_evt.shape[0], f_evt.shape[1] - 4        # events, weights per event
(10000, 45)
"""

from __future__ import annotations

__version__ = "0.1.0"
__author__ = "Melek Derman"

from lhearrays.readers.lhe import LHEReader, parse
from lhearrays.readers.scanner import scan_dimensions
from lhearrays.models.records import LHEArrays, ScanResult
from lhearrays.exceptions import (
    LHEArraysError,
    FileOpenError,
    ParseError,
    DimensionScanError,
    XMLSyntaxError,
    TokenParseError,
    EmptyInputError,
    InvariantError,
    ValidationError,
    ConversionError,
)

__all__ = [
    # Version
    "__version__",
    # Readers
    "parse",
    "scan_dimensions",
    "LHEReader",
    # Models
    "LHEArrays",
    "ScanResult",
    # Exceptions
    "LHEArraysError",
    "FileOpenError",
    "ParseError",
    "DimensionScanError",
    "XMLSyntaxError",
    "TokenParseError",
    "EmptyInputError",
    "InvariantError",
    "ValidationError",
    "ConversionError",
]
