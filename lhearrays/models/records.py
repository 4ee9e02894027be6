#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Typed dataclass models for parsed LHE files

Models are the output of the reader layer and the input accepted by the
converter layer.

Hierarchy
---------
::

    ScanResult   — output shape metadata produced by the pre-scan
    LHEArrays    — the four filled arrays plus weight ids and source path

Array layout
------------
=======  ===========================  ==========================================
Array    Shape                        Columns
=======  ===========================  ==========================================
i_evt    (n_events, 2)                NUP, IDPRUP
f_evt    (n_events, 4 + n_weights)    XWGTUP, SCALUP, AQEDUP, AQCDUP, wgt_0 ...
i_ptc    (n_particles, 7)             evt_idx, IDUP, ISTUP, MOTHUP1/2, ICOLUP1/2
f_ptc    (n_particles, 7)             PUP1..PUP5, VTIMUP, SPINUP
=======  ===========================  ==========================================

Units
-----
Momenta, energies, masses and scales are in **GeV**; VTIMUP is in **mm**
(Les Houches Accord convention).
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

import numpy as np

from lhearrays.utils.constants import N_EVT_REALS


@dataclass(frozen=True)
class ScanResult:
    """Dimensions of an LHE file determined by the line-based pre-scan

    Unpacks as the triple ``(n_events, n_weights, n_particles)``.

    Parameters
    ----------
    n_events : int
        Number of ``<event>`` blocks.
    n_weights : int
        Width of the weight vector: the largest number of ``<wgt>`` tags
        found in any single event.
    n_particles : int
        Sum of the NUP particle counts over all event headers.
    n_weight_tags : int
        Raw number of ``<wgt>`` tags in the file.
    has_root : bool
        Whether a ``<LesHouchesEvents>`` root element was seen.
    """

    n_events: int
    n_weights: int
    n_particles: int
    n_weight_tags: int = 0
    has_root: bool = True

    def __iter__(self) -> Iterator[int]:
        return iter((self.n_events, self.n_weights, self.n_particles))

    @property
    def is_empty(self) -> bool:
        return self.n_events == 0 or self.n_weights == 0 or self.n_particles == 0


@dataclass
class LHEArrays:
    """Flat event and particle arrays for one LHE file

    Parameters
    ----------
    i_evt : numpy.ndarray
        Integer event columns, shape ``(n_events, 2)``.
    f_evt : numpy.ndarray
        Real event columns and weights, shape ``(n_events, 4 + n_weights)``.
    i_ptc : numpy.ndarray
        Integer particle columns, shape ``(n_particles, 7)``.
    f_ptc : numpy.ndarray
        Real particle columns, shape ``(n_particles, 7)``.
    weight_ids : list[str]
        ``id`` attributes of the first event's ``<wgt>`` tags, in column
        order.  Empty strings stand in for tags without an id.
    source : str
        Path of the parsed file.
    """

    i_evt: np.ndarray
    f_evt: np.ndarray
    i_ptc: np.ndarray
    f_ptc: np.ndarray
    weight_ids: list[str] = field(default_factory=list)
    source: str = ""

    @property
    def n_events(self) -> int:
        return int(self.i_evt.shape[0])

    @property
    def n_particles(self) -> int:
        return int(self.i_ptc.shape[0])

    @property
    def n_weights(self) -> int:
        return int(self.f_evt.shape[1]) - N_EVT_REALS

    @property
    def weights(self) -> np.ndarray:
        """View of the weight columns of ``f_evt``."""
        return self.f_evt[:, N_EVT_REALS:]

    @property
    def particle_offsets(self) -> np.ndarray:
        """First particle row of every event, plus the total row count

        Shape ``(n_events + 1,)``; event *e* owns rows
        ``offsets[e]:offsets[e + 1]``.
        """
        offsets = np.zeros(self.n_events + 1, dtype=np.int64)
        np.cumsum(self.i_evt[:, 0], dtype=np.int64, out=offsets[1:])
        return offsets

    def event_slice(self, index: int) -> slice:
        """Return the particle-row slice owned by event *index*."""
        if not (-self.n_events <= index < self.n_events):
            raise IndexError(
                f"Event index {index} out of range for {self.n_events} events"
            )
        index %= self.n_events
        start = int(self.i_evt[:index, 0].sum(dtype=np.int64))
        return slice(start, start + int(self.i_evt[index, 0]))

    def particles(self, index: int) -> tuple[np.ndarray, np.ndarray]:
        """Return the ``(i_ptc, f_ptc)`` rows of event *index*."""
        rows = self.event_slice(index)
        return self.i_ptc[rows], self.f_ptc[rows]

    def as_tuple(self) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
        return self.i_evt, self.f_evt, self.i_ptc, self.f_ptc
