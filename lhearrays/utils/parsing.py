#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Shared token-level parsing helpers for the lhearrays package

All numeric conversion of LHE text lives here so that the scanner and the
extractors share one definition of what a valid integer or real is.

Conversion policy
-----------------
LHE files are written by Fortran and C++ generators.  Reals may use the
Fortran double-precision exponent marker ``D`` (``0.1D+01``); both are
accepted.  Integers must be plain decimal literals that fit in the
32-bit integer output arrays.

The ``*_or_none`` helpers return ``None`` instead of raising, which lets
the caller decide between the lenient policy (leave the zero default in
place) and the strict policy (raise
:class:`~lhearrays.exceptions.TokenParseError`).
"""

from __future__ import annotations

import numpy as np

from lhearrays.utils.constants import INT_DTYPE

_INT_INFO = np.iinfo(INT_DTYPE)


# ---------------------------------------------------------------------------
# Numeric conversion
# ---------------------------------------------------------------------------

def int_or_none(token: str) -> int | None:
    """Convert a decimal integer token, returning ``None`` on failure

    Only an optional sign followed by ASCII digits is accepted; digit
    separators (``1_000``) and other forms Python's :func:`int` allows
    are rejected.  Values outside the range of the integer output dtype
    count as failures.

    Examples
    --------
    >>> int_or_none("-11")
    -11
    >>> int_or_none("1.5") is None
    True
    """
    digits = token[1:] if token[:1] in ("+", "-") else token
    if not (digits.isascii() and digits.isdigit()):
        return None
    value = int(token)
    if not (_INT_INFO.min <= value <= _INT_INFO.max):
        return None
    return value


def float_or_none(token: str) -> float | None:
    """Convert a real token, returning ``None`` on failure

    A Fortran ``D`` exponent marker is replaced by ``E`` before
    conversion.  Digit separators (``1_0.5``) are rejected.

    Examples
    --------
    >>> float_or_none("0.125D+01")
    1.25
    >>> float_or_none("abc") is None
    True
    """
    if "_" in token:
        return None
    try:
        return float(token)
    except ValueError:
        pass
    if "D" in token or "d" in token:
        try:
            return float(token.replace("D", "E").replace("d", "e"))
        except ValueError:
            return None
    return None


def leading_int(line: str) -> int | None:
    """Return the first whitespace-delimited token of *line* as an int

    Returns ``None`` for blank lines and non-integer tokens.

    Examples
    --------
    >>> leading_int("  5   1  0.1 91.2 0.0078 0.118")
    5
    >>> leading_int("<wgt id='1'>") is None
    True
    """
    parts = line.split(None, 1)
    if not parts:
        return None
    return int_or_none(parts[0])


# ---------------------------------------------------------------------------
# Token cursor
# ---------------------------------------------------------------------------

class TokenCursor:
    """Sequential reader over the whitespace-delimited tokens of a text

    Every call consumes the tokens it returns whether or not they later
    convert, so a malformed field never shifts the fields that follow it.

    Parameters
    ----------
    text : str
        Buffered character data (e.g. an event header and its particle
        lines).
    """

    __slots__ = ("_tokens", "_pos")

    def __init__(self, text: str) -> None:
        self._tokens = text.split()
        self._pos = 0

    def next_token(self) -> str | None:
        """Consume one token, or return ``None`` when none are left."""
        if self._pos >= len(self._tokens):
            return None
        tok = self._tokens[self._pos]
        self._pos += 1
        return tok

    def take(self, n: int) -> list[str]:
        """Consume up to *n* tokens and return them."""
        chunk = self._tokens[self._pos : self._pos + n]
        self._pos += len(chunk)
        return chunk
