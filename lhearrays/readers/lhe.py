#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Two-pass LHE parser

Pass 1 (:func:`~lhearrays.readers.scanner.scan_dimensions`) reads the file
line by line and returns only the output shapes.  The four arrays are then
allocated once, zero-filled, and pass 2 streams the file through the Expat
SAX tokenizer in fixed-size chunks, driving a
:class:`~lhearrays.readers.capture.CaptureState` that writes every value
directly into its final cell.

Memory use is bounded by the output arrays plus one chunk and one event's
text, independent of the file size.

Documents without a root element
--------------------------------
Well-formed LHE files wrap everything in ``<LesHouchesEvents>``.  When the
scan finds no such element, the byte stream is wrapped in a synthetic one
so that a bare ``<init>...</init><event>...</event>`` sequence is still
accepted.  The open tag goes after any byte-order mark and XML
declaration, however the chunks happen to split them.  The wrapper
contains no newlines, so line numbers in
:class:`~lhearrays.exceptions.XMLSyntaxError` match the file.
"""

from __future__ import annotations

import codecs
import logging
from pathlib import Path
from xml.parsers import expat

import numpy as np

from lhearrays.exceptions import (
    EmptyInputError,
    FileOpenError,
    XMLSyntaxError,
)
from lhearrays.models.records import LHEArrays, ScanResult
from lhearrays.readers.capture import CaptureState
from lhearrays.readers.scanner import scan_dimensions
from lhearrays.utils.constants import (
    CHUNK_SIZE,
    FLOAT_DTYPE,
    I_EVT_COLUMNS,
    I_PTC_COLUMNS,
    INT_DTYPE,
    N_EVT_REALS,
    F_PTC_COLUMNS,
    ROOT_TAG,
)
from lhearrays.utils.validation import validate_arrays

logger = logging.getLogger(__name__)

_ROOT_OPEN = f"<{ROOT_TAG}>".encode("ascii")
_ROOT_CLOSE = f"</{ROOT_TAG}>".encode("ascii")
_XML_DECL = b"<?xml"

ArrayTuple = tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]
"""``(i_evt, f_evt, i_ptc, f_ptc)``"""


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def allocate_arrays(scan: ScanResult) -> ArrayTuple:
    """Allocate the zero-filled output arrays for a scan result."""
    i_evt = np.zeros((scan.n_events, len(I_EVT_COLUMNS)), dtype=INT_DTYPE)
    f_evt = np.zeros((scan.n_events, N_EVT_REALS + scan.n_weights), dtype=FLOAT_DTYPE)
    i_ptc = np.zeros((scan.n_particles, len(I_PTC_COLUMNS)), dtype=INT_DTYPE)
    f_ptc = np.zeros((scan.n_particles, len(F_PTC_COLUMNS)), dtype=FLOAT_DTYPE)
    return i_evt, f_evt, i_ptc, f_ptc


def _root_offset(head: bytes) -> int | None:
    """Byte offset at which the synthetic root open tag goes

    The tag must follow the byte-order mark and the XML declaration, if
    present.  Returns ``None`` while *head* is too short to tell, i.e.
    while it could still be the start of either.
    """
    body = head
    if body.startswith(codecs.BOM_UTF8):
        body = body[len(codecs.BOM_UTF8):]
    elif codecs.BOM_UTF8.startswith(body):
        return None
    skip = len(head) - len(body)

    if not body.startswith(_XML_DECL):
        if _XML_DECL.startswith(body):
            return None
        return skip
    end = body.find(b"?>")
    if end < 0:
        return None
    return skip + end + 2


def _create_parser(state: CaptureState, chunk_size: int):
    parser = expat.ParserCreate()
    parser.buffer_text = True
    parser.buffer_size = chunk_size
    parser.StartElementHandler = state.start_element
    parser.EndElementHandler = state.end_element
    parser.CharacterDataHandler = state.character_data
    return parser


def _stream(path: Path, state: CaptureState, *, wrap_root: bool, chunk_size: int) -> None:
    """Feed *path* through Expat in chunks of *chunk_size* bytes

    With *wrap_root*, leading chunks are held back until the position of
    the synthetic root tag is known (see :func:`_root_offset`), so the
    result does not depend on where chunk boundaries fall.
    """
    parser = _create_parser(state, chunk_size)
    head = b"" if wrap_root else None
    try:
        with open(path, "rb") as fh:
            while True:
                chunk = fh.read(chunk_size)
                if not chunk:
                    break
                if head is not None:
                    head += chunk
                    at = _root_offset(head)
                    if at is None:
                        continue
                    chunk = head[:at] + _ROOT_OPEN + head[at:]
                    head = None
                parser.Parse(chunk, False)
            if head:
                # unterminated XML declaration; let Expat report it
                parser.Parse(head, False)
            if wrap_root:
                parser.Parse(_ROOT_CLOSE, False)
            parser.Parse(b"", True)
    except expat.ExpatError as exc:
        raise XMLSyntaxError(exc.lineno, expat.ErrorString(exc.code)) from exc
    except OSError as exc:
        raise FileOpenError(f"Cannot read file: {path}: {exc}") from exc


def _run(
    filename: Path | str,
    *,
    strict: bool,
    chunk_size: int,
) -> CaptureState:
    """Run both passes and return the finished capture state."""
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")

    path = Path(filename)
    scan = scan_dimensions(path)
    if scan.is_empty:
        raise EmptyInputError(
            f"Found no events, weights, or particles in {path} "
            f"(events={scan.n_events}, weights={scan.n_weights}, "
            f"particles={scan.n_particles})"
        )

    state = CaptureState(*allocate_arrays(scan), strict=strict)
    if not scan.has_root:
        logger.debug("No <%s> root in %s; wrapping stream", ROOT_TAG, path)

    logger.debug("Extracting %s in %d-byte chunks", path, chunk_size)
    _stream(path, state, wrap_root=not scan.has_root, chunk_size=chunk_size)
    state.finish()
    return state


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def parse(
    filename: Path | str,
    *,
    strict: bool = False,
    chunk_size: int = CHUNK_SIZE,
) -> ArrayTuple:
    """Parse an LHE file into ``(i_evt, f_evt, i_ptc, f_ptc)``

    Parameters
    ----------
    filename : Path | str
        Path to a local, uncompressed LHE file.
    strict : bool, optional
        If ``True``, every numeric field must parse; otherwise only NUP is
        mandatory and malformed fields are left at zero.  Default ``False``.
    chunk_size : int, optional
        Bytes per tokenizer call.  Default 64 KiB.

    Returns
    -------
    tuple of numpy.ndarray
        ``i_evt`` (int32, ``(n_events, 2)``), ``f_evt`` (float64,
        ``(n_events, 4 + n_weights)``), ``i_ptc`` (int32,
        ``(n_particles, 7)``), ``f_ptc`` (float64, ``(n_particles, 7)``).

    Raises
    ------
    FileOpenError
        If the file cannot be opened or read.
    DimensionScanError
        If an event header has no integer particle count.
    EmptyInputError
        If no events, weights, or particles are found.
    XMLSyntaxError
        If the markup is malformed.
    TokenParseError
        If an NUP field (or, in strict mode, any field) is invalid.
    InvariantError
        If the second pass disagrees with the scanned dimensions.

    Examples
    --------
    >>> i_evt, f_evt, i_ptc, f_ptc = parse("unweighted_events.lhe")
    >>> int(i_evt[:, 0].sum()) == i_ptc.shape[0]
    True
    """
    state = _run(filename, strict=strict, chunk_size=chunk_size)
    return state.i_evt, state.f_evt, state.i_ptc, state.f_ptc


class LHEReader:
    """Reader returning parsed LHE files as :class:`LHEArrays`

    Examples
    --------
    >>> reader = LHEReader()
    >>> arrays = reader.read("unweighted_events.lhe")
    >>> arrays.weight_ids[:2]
    ['1', '2']
    """

    def __init__(self, *, chunk_size: int = CHUNK_SIZE) -> None:
        self.chunk_size = chunk_size

    def read(
        self,
        path: Path | str,
        *,
        validate: bool = True,
        strict: bool = False,
    ) -> LHEArrays:
        """Parse an LHE file and return a typed result model

        Parameters
        ----------
        path : Path | str
            Path to the LHE file.
        validate : bool, optional
            Run the post-parse array checks of
            :mod:`lhearrays.utils.validation`.  Default ``True``.
        strict : bool, optional
            Make every numeric field mandatory.  Default ``False``.

        Raises
        ------
        ValidationError
            If *validate* is ``True`` and a check fails.

        See :func:`parse` for the parse errors.
        """
        state = _run(path, strict=strict, chunk_size=self.chunk_size)
        arrays = LHEArrays(
            i_evt=state.i_evt,
            f_evt=state.f_evt,
            i_ptc=state.i_ptc,
            f_ptc=state.f_ptc,
            weight_ids=list(state.weight_ids),
            source=str(path),
        )
        if validate:
            validate_arrays(*arrays.as_tuple())
        logger.info(
            "Read %s: %d events, %d particles, %d weights",
            path, arrays.n_events, arrays.n_particles, arrays.n_weights,
        )
        return arrays
