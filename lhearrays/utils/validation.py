#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Post-parse validation routines for LHE arrays

Every validation function raises :class:`~lhearrays.exceptions.ValidationError`
when a constraint is violated.  :class:`~lhearrays.readers.lhe.LHEReader`
runs them after parsing when ``validate=True``.

Checked Constraints
-------------------
* Array ranks, column counts and row counts agree with each other.
* The NUP column sums to the number of particle rows.
* Particle rows are contiguous per event, in event order, and each event
  owns exactly NUP rows.

Design Note
-----------
Validation functions accept raw NumPy arrays, not model instances, so
that :mod:`lhearrays.models` does not depend on this module::

    utils ← models ← readers ← converters
"""

from __future__ import annotations

import logging

import numpy as np

from lhearrays.exceptions import ValidationError
from lhearrays.utils.constants import (
    F_PTC_COLUMNS,
    I_EVT_COLUMNS,
    I_PTC_COLUMNS,
    N_EVT_REALS,
)

logger = logging.getLogger(__name__)


def validate_shapes(
    i_evt: np.ndarray,
    f_evt: np.ndarray,
    i_ptc: np.ndarray,
    f_ptc: np.ndarray,
) -> None:
    """Verify ranks, column counts, and matching row counts

    Raises
    ------
    ValidationError
        If any array is not 2-D, has the wrong number of columns, or has
        a row count that disagrees with its partner array.
    """
    for name, arr in (("i_evt", i_evt), ("f_evt", f_evt), ("i_ptc", i_ptc), ("f_ptc", f_ptc)):
        if arr.ndim != 2:
            raise ValidationError(f"Array '{name}' must be 2-D, got shape {arr.shape}.")

    if i_evt.shape[1] != len(I_EVT_COLUMNS):
        raise ValidationError(
            f"Array 'i_evt' must have {len(I_EVT_COLUMNS)} columns, got {i_evt.shape[1]}."
        )
    if f_evt.shape[1] < N_EVT_REALS:
        raise ValidationError(
            f"Array 'f_evt' must have at least {N_EVT_REALS} columns, got {f_evt.shape[1]}."
        )
    if i_ptc.shape[1] != len(I_PTC_COLUMNS) or f_ptc.shape[1] != len(F_PTC_COLUMNS):
        raise ValidationError(
            f"Particle arrays must have {len(I_PTC_COLUMNS)} columns, got "
            f"{i_ptc.shape[1]} (i_ptc) and {f_ptc.shape[1]} (f_ptc)."
        )
    if i_evt.shape[0] != f_evt.shape[0]:
        raise ValidationError(
            f"Event arrays disagree on row count: {i_evt.shape[0]} (i_evt) "
            f"vs {f_evt.shape[0]} (f_evt)."
        )
    if i_ptc.shape[0] != f_ptc.shape[0]:
        raise ValidationError(
            f"Particle arrays disagree on row count: {i_ptc.shape[0]} (i_ptc) "
            f"vs {f_ptc.shape[0]} (f_ptc)."
        )
    logger.debug("Array shapes passed validation.")


def validate_particle_count(i_evt: np.ndarray, i_ptc: np.ndarray) -> None:
    """Verify that ``sum(i_evt[:, 0]) == i_ptc.shape[0]``

    Raises
    ------
    ValidationError
        If the NUP column does not sum to the particle row count.
    """
    total = int(i_evt[:, 0].sum(dtype=np.int64))
    if total != i_ptc.shape[0]:
        raise ValidationError(
            f"NUP column sums to {total} but there are {i_ptc.shape[0]} particle rows."
        )
    logger.debug("Particle count %d passed validation.", total)


def validate_event_ownership(i_evt: np.ndarray, i_ptc: np.ndarray) -> None:
    """Verify the ``evt_idx`` column of ``i_ptc``

    Event *e* must own exactly ``i_evt[e, 0]`` consecutive rows, and the
    blocks must appear in event order.

    Raises
    ------
    ValidationError
        If NUP is negative or any row carries the wrong owning index.

    Examples
    --------
    >>> import numpy as np
    >>> i_evt = np.array([[2, 1], [1, 1]])
    >>> i_ptc = np.zeros((3, 7), dtype=int)
    >>> i_ptc[:, 0] = [0, 0, 1]
    >>> validate_event_ownership(i_evt, i_ptc)
    """
    nup = np.asarray(i_evt[:, 0], dtype=np.int64)
    if np.any(nup < 0):
        first_bad = int(np.argmax(nup < 0))
        raise ValidationError(f"Event {first_bad} has negative NUP={nup[first_bad]}.")
    if int(nup.sum()) != i_ptc.shape[0]:
        raise ValidationError(
            f"NUP column sums to {int(nup.sum())} but there are "
            f"{i_ptc.shape[0]} particle rows."
        )

    expected = np.repeat(np.arange(nup.size, dtype=np.int64), nup)
    owners = np.asarray(i_ptc[:, 0], dtype=np.int64)
    mismatch = owners != expected
    if np.any(mismatch):
        row = int(np.argmax(mismatch))
        raise ValidationError(
            f"Particle row {row} is owned by event {owners[row]}, "
            f"expected event {expected[row]}."
        )
    logger.debug("Ownership of %d particle rows passed validation.", owners.size)


def validate_arrays(
    i_evt: np.ndarray,
    f_evt: np.ndarray,
    i_ptc: np.ndarray,
    f_ptc: np.ndarray,
) -> None:
    """Run every array check in order

    Raises
    ------
    ValidationError
        On the first failed check.
    """
    validate_shapes(i_evt, f_evt, i_ptc, f_ptc)
    validate_particle_count(i_evt, i_ptc)
    validate_event_ownership(i_evt, i_ptc)
