#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Custom exception hierarchy for the lhearrays package

All exceptions raised by lhearrays inherit from :class:`LHEArraysError`,
making it possible to catch every library-specific error with a single
``except`` clause while still allowing fine-grained handling when needed.

Every parse failure is fatal: no partially filled arrays are ever handed
back to the caller.

Exception Hierarchy
-------------------
::

    LHEArraysError
    ├── FileOpenError           # Missing or unreadable input file
    ├── ParseError              # Malformed file content
    │   ├── DimensionScanError  # Bad particle count during the pre-scan
    │   ├── XMLSyntaxError      # Malformed markup reported by Expat
    │   └── TokenParseError     # Unparseable mandatory event field
    ├── EmptyInputError         # No events, weights, or particles found
    ├── InvariantError          # Second pass disagrees with the pre-scan
    ├── ValidationError         # Failed post-parse array checks
    └── ConversionError         # HDF5 write failures
"""

from __future__ import annotations


class LHEArraysError(Exception):
    """Base exception for all lhearrays errors

    Catching ``LHEArraysError`` catches any library-specific failure while
    still allowing standard Python exceptions (``KeyError``, ``TypeError``,
    etc.) to propagate normally.
    """


class FileOpenError(LHEArraysError):
    """Raised when the input path does not exist or cannot be read"""


class ParseError(LHEArraysError):
    """Raised when an LHE file contains malformed or unparseable content"""


class DimensionScanError(ParseError):
    """Raised when the pre-scan cannot read an event's particle count

    The line immediately following an ``<event>`` marker must start with
    an integer NUP.

    Parameters
    ----------
    message : str
        Human-readable description of the failure.
    line : int
        1-based line number of the offending header line.
    """

    def __init__(self, message: str, line: int) -> None:
        super().__init__(message)
        self.line = line


class XMLSyntaxError(ParseError):
    """Raised when the XML tokenizer rejects the document markup

    Parameters
    ----------
    line : int
        1-based line number reported by the tokenizer.
    reason : str
        The tokenizer's diagnostic text.
    """

    def __init__(self, line: int, reason: str) -> None:
        super().__init__(f"XML syntax error at line {line}: {reason}")
        self.line = line
        self.reason = reason


class TokenParseError(ParseError):
    """Raised when a numeric field of an event cannot be parsed

    In the default lenient mode only the mandatory NUP field raises this
    error; with ``strict=True`` every event and particle field does.

    Parameters
    ----------
    event_index : int
        0-based row index of the event being extracted.
    field : str
        Name of the field that failed (e.g. ``"NUP"``).
    token : str | None
        The offending token, or ``None`` when the field was missing.
    """

    def __init__(self, event_index: int, field: str = "NUP", token: str | None = None) -> None:
        if token is None:
            detail = "missing"
        else:
            detail = f"invalid token {token!r}"
        super().__init__(
            f"Failed to parse {field} of event {event_index}: {detail}"
        )
        self.event_index = event_index
        self.field = field
        self.token = token


class EmptyInputError(LHEArraysError):
    """Raised when the pre-scan finds no events, weights, or particles"""


class InvariantError(LHEArraysError):
    """Raised when the second pass encounters content the pre-scan did not

    The output arrays are sized from the pre-scan alone, so more events,
    particles, or weights than scanned would overrun them.  This usually
    means the line-based scan and the XML tokenizer disagree on the
    document, e.g. an ``<event>`` marker inside a comment.
    """


class ValidationError(LHEArraysError):
    """Raised when parsed arrays fail post-parse consistency checks

    A ``ValidationError`` means the file was *parseable* but the resulting
    arrays violate the expected row layout (particle counts, ownership).
    """


class ConversionError(LHEArraysError):
    """Raised when HDF5 conversion fails

    Covers permission errors, refused overwrites, and any h5py failure
    while writing the output file.
    """
