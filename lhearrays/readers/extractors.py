#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Extractors that turn buffered event text into array rows

Both extractors write straight into the pre-sized arrays held by a
:class:`~lhearrays.readers.capture.CaptureState`, at the rows given by its
cursors.  Row bounds are always checked against the scanned dimensions;
writing outside them raises :class:`~lhearrays.exceptions.InvariantError`.

Field policy
------------
NUP is mandatory: without it the particle lines cannot be delimited, so a
missing or malformed NUP raises :class:`~lhearrays.exceptions.TokenParseError`.
All other fields are best-effort by default; a malformed or missing token
leaves the zero the array was allocated with.  With ``state.strict`` set,
every field is mandatory.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

import numpy as np

from lhearrays.exceptions import InvariantError, TokenParseError
from lhearrays.utils.constants import (
    F_EVT_FIXED_COLUMNS,
    F_PTC_COLUMNS,
    FLOAT_DTYPE,
    I_EVT_COLUMNS,
    I_PTC_COLUMNS,
    INT_DTYPE,
    N_EVT_REALS,
    N_PTC_FIELDS,
    N_PTC_INTS,
)
from lhearrays.utils.parsing import TokenCursor, float_or_none, int_or_none

if TYPE_CHECKING:
    from lhearrays.readers.capture import CaptureState

logger = logging.getLogger(__name__)


def _store(
    row: np.ndarray,
    tokens: Sequence[str],
    names: Sequence[str],
    convert: Callable[[str], int | float | None],
    event_index: int,
    strict: bool,
) -> None:
    """Convert *tokens* one by one into the 1-D view *row*

    Missing tokens (fewer than ``len(names)``) and tokens that do not
    convert leave the existing value in place unless *strict* is set.
    """
    for j, name in enumerate(names):
        tok = tokens[j] if j < len(tokens) else None
        value = convert(tok) if tok is not None else None
        if value is None:
            if strict:
                raise TokenParseError(event_index, name, tok)
            logger.debug("Event %d: %s token %r left at default", event_index, name, tok)
            continue
        row[j] = value


def _fill_particles_fast(
    tokens: list[str],
    n_ptc: int,
    i_rows: np.ndarray,
    f_rows: np.ndarray,
) -> bool:
    """Vectorised conversion of a complete, well-formed particle block

    Returns ``False`` without writing anything if any token fails to
    convert, so the caller can fall back to field-by-field conversion.
    """
    if len(tokens) != n_ptc * N_PTC_FIELDS:
        return False
    # numpy's str -> number cast accepts Python digit separators
    if any("_" in tok for tok in tokens):
        return False
    table = np.asarray(tokens).reshape(n_ptc, N_PTC_FIELDS)
    try:
        ints = table[:, :N_PTC_INTS].astype(INT_DTYPE)
        reals = table[:, N_PTC_INTS:].astype(FLOAT_DTYPE)
    except (ValueError, OverflowError):
        return False
    i_rows[:, 1:] = ints
    f_rows[:, :] = reals
    return True


def extract_event(text: str, state: CaptureState) -> None:
    """Parse an event header and its particle lines into the arrays

    Writes row ``state.event_row`` of ``i_evt`` / ``f_evt`` and the next
    NUP rows of ``i_ptc`` / ``f_ptc`` starting at ``state.particle_row``,
    then advances ``state.particle_row`` by NUP.

    Parameters
    ----------
    text : str
        Header line followed by all particle lines, as buffered.
    state : CaptureState
        Owner of the arrays and cursors.

    Raises
    ------
    TokenParseError
        If NUP is missing, non-numeric or negative, or, in strict mode,
        if any other field fails.
    InvariantError
        If the event or its particles fall outside the scanned
        dimensions.
    """
    event = state.event_row
    cursor = TokenCursor(text)

    nup_token = cursor.next_token()
    nup = int_or_none(nup_token) if nup_token is not None else None
    if nup is None or nup < 0:
        raise TokenParseError(event, "NUP", nup_token)

    if event >= state.n_events:
        raise InvariantError(
            f"Event {event} exceeds the {state.n_events} events found by the scan"
        )
    start = state.particle_row
    stop = start + nup
    if stop > state.n_particles:
        raise InvariantError(
            f"Event {event} with NUP={nup} overruns the particle arrays "
            f"(rows {start}:{stop} of {state.n_particles})"
        )

    state.i_evt[event, 0] = nup
    _store(state.i_evt[event, 1:], cursor.take(1), I_EVT_COLUMNS[1:],
           int_or_none, event, state.strict)
    _store(state.f_evt[event, :N_EVT_REALS], cursor.take(N_EVT_REALS),
           F_EVT_FIXED_COLUMNS, float_or_none, event, state.strict)

    i_rows = state.i_ptc[start:stop]
    f_rows = state.f_ptc[start:stop]
    i_rows[:, 0] = event

    block = cursor.take(nup * N_PTC_FIELDS)
    if nup and not _fill_particles_fast(block, nup, i_rows, f_rows):
        logger.debug("Event %d: particle block needs field-by-field conversion", event)
        for k in range(nup):
            fields = block[k * N_PTC_FIELDS : (k + 1) * N_PTC_FIELDS]
            _store(i_rows[k, 1:], fields[:N_PTC_INTS], I_PTC_COLUMNS[1:],
                   int_or_none, event, state.strict)
            _store(f_rows[k], fields[N_PTC_INTS:], F_PTC_COLUMNS,
                   float_or_none, event, state.strict)

    state.particle_row = stop


def extract_weight(text: str, state: CaptureState) -> None:
    """Parse one ``<wgt>`` value into ``f_evt[event_row, 4 + weight_col]``

    Only the first token of *text* is read.  A value that does not
    convert leaves 0.0 in place unless ``state.strict`` is set.

    Raises
    ------
    TokenParseError
        In strict mode, if the weight is missing or malformed.
    InvariantError
        If the event row or weight column is outside the scanned
        dimensions.
    """
    event = state.event_row
    column = state.weight_col
    if event >= state.n_events or column >= state.n_weights:
        raise InvariantError(
            f"Weight {column} of event {event} is outside the scanned shape "
            f"({state.n_events} events x {state.n_weights} weights)"
        )

    tokens = text.split(None, 1)[:1]
    _store(state.f_evt[event, N_EVT_REALS + column :], tokens, (f"wgt_{column}",),
           float_or_none, event, state.strict)
