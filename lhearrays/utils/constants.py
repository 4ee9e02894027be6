#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Column layouts, markup markers, and I/O settings used across lhearrays

The LHE event block follows the Les Houches Accord [1]_::

    <event>
    NUP IDPRUP XWGTUP SCALUP AQEDUP AQCDUP
    IDUP ISTUP MOTHUP(1) MOTHUP(2) ICOLUP(1) ICOLUP(2) PUP(1..5) VTIMUP SPINUP
    ...                                             (NUP particle lines)
    <rwgt>
    <wgt id="...">value</wgt>
    ...
    </rwgt>
    </event>

Integer and real fields are split into separate arrays so that each
output array has a single dtype.

References
----------
.. [1] J. Alwall et al., "A standard format for Les Houches Event Files",
   Comput. Phys. Commun. 176 (2007) 300, hep-ph/0609017.
"""

from __future__ import annotations

import re

import numpy as np

# ---------------------------------------------------------------------------
# Output array layout
# ---------------------------------------------------------------------------

INT_DTYPE = np.int32
"""dtype of the integer arrays ``i_evt`` and ``i_ptc``."""

FLOAT_DTYPE = np.float64
"""dtype of the real arrays ``f_evt`` and ``f_ptc``."""

I_EVT_COLUMNS: tuple[str, ...] = ("NUP", "IDPRUP")
"""Columns of ``i_evt``."""

F_EVT_FIXED_COLUMNS: tuple[str, ...] = ("XWGTUP", "SCALUP", "AQEDUP", "AQCDUP")
"""Leading columns of ``f_evt``; the event weights follow them."""

I_PTC_COLUMNS: tuple[str, ...] = (
    "evt_idx", "IDUP", "ISTUP", "MOTHUP1", "MOTHUP2", "ICOLUP1", "ICOLUP2",
)
"""Columns of ``i_ptc``.  ``evt_idx`` is the owning row of ``i_evt``."""

F_PTC_COLUMNS: tuple[str, ...] = (
    "PUP1", "PUP2", "PUP3", "PUP4", "PUP5", "VTIMUP", "SPINUP",
)
"""Columns of ``f_ptc``."""

N_EVT_REALS: int = len(F_EVT_FIXED_COLUMNS)
N_PTC_INTS: int = len(I_PTC_COLUMNS) - 1
"""Integer fields read per particle line (``evt_idx`` is not in the file)."""
N_PTC_REALS: int = len(F_PTC_COLUMNS)
N_PTC_FIELDS: int = N_PTC_INTS + N_PTC_REALS
"""Whitespace-separated tokens per particle line (13)."""


def f_evt_columns(n_weights: int) -> tuple[str, ...]:
    """Return the ``f_evt`` column names for *n_weights* weight columns."""
    return F_EVT_FIXED_COLUMNS + tuple(f"wgt_{i}" for i in range(n_weights))


# ---------------------------------------------------------------------------
# Markup
# ---------------------------------------------------------------------------

EVENT_TAG: str = "event"
WEIGHT_TAG: str = "wgt"
ROOT_TAG: str = "LesHouchesEvents"

EVENT_OPEN_PATTERN: re.Pattern[str] = re.compile(r"<event[\s>]")
"""Matches an ``<event>`` open tag, with or without attributes."""

WEIGHT_OPEN_PATTERN: re.Pattern[str] = re.compile(r"<wgt[\s>]")
"""Matches a ``<wgt>`` open tag.  Does not match ``<weight ...>`` declarations."""

ROOT_OPEN_PATTERN: re.Pattern[str] = re.compile(r"<LesHouchesEvents[\s>]")

# ---------------------------------------------------------------------------
# I/O
# ---------------------------------------------------------------------------

CHUNK_SIZE: int = 64 * 1024
"""Number of bytes handed to the XML tokenizer per call."""
