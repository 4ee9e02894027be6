#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Tag-driven capture state machine for the second pass

The XML tokenizer reports three kinds of events: element start, element
end, and character data.  :class:`CaptureState` consumes them and decides
which character data to buffer and when to hand the buffer to an
extractor.

The event header and particle lines have no markup of their own; they
are raw character data that ends at the next child element of
``<event>`` (usually ``<rwgt>``) or at ``</event>``.  Any element start
seen while the header is being captured is therefore treated as the end
of the header.

Transitions
-----------
==================  ==================  =============================  =========
State               Event               Action                         Next
==================  ==================  =============================  =========
any                 start ``event``     weight cursor = 0, clear       HEADER
HEADER              start (any tag)     extract event, clear           IDLE
any (in event)      start ``wgt``       buffer weight text             WEIGHT
IDLE                characters          ignored                        IDLE
HEADER / WEIGHT     characters          append to buffer               same
any                 end ``event``       flush HEADER, event cursor +1  IDLE
WEIGHT              end ``wgt``         extract weight, weight cursor  IDLE
==================  ==================  =============================  =========

When the tag following the header is itself ``<wgt>``, both the header
flush and the start of weight capture fire for it.
"""

from __future__ import annotations

from enum import Enum
import logging

import numpy as np

from lhearrays.exceptions import InvariantError
from lhearrays.readers.extractors import extract_event, extract_weight
from lhearrays.utils.constants import EVENT_TAG, N_EVT_REALS, WEIGHT_TAG

logger = logging.getLogger(__name__)


class CaptureMode(Enum):
    """What the state machine is currently buffering"""

    IDLE = 0
    HEADER = 1
    WEIGHT = 2


class CaptureState:
    """Mutable state of one second-pass parse

    Owns the accumulation buffer and the row/column cursors, and holds the
    four output arrays the extractors write into.  One instance serves
    exactly one parse; nothing is shared between parses.

    Parameters
    ----------
    i_evt, f_evt, i_ptc, f_ptc : numpy.ndarray
        Zero-initialised output arrays sized by the pre-scan.
    strict : bool, optional
        Make every numeric field mandatory (see
        :mod:`lhearrays.readers.extractors`).  Default ``False``.

    Attributes
    ----------
    event_row : int
        Row of ``i_evt`` / ``f_evt`` the current event writes to.
    weight_col : int
        Index of the next weight within the current event.
    particle_row : int
        Next free row of ``i_ptc`` / ``f_ptc``.
    weight_ids : list[str]
        ``id`` attributes of the first event's ``<wgt>`` tags.
    """

    def __init__(
        self,
        i_evt: np.ndarray,
        f_evt: np.ndarray,
        i_ptc: np.ndarray,
        f_ptc: np.ndarray,
        *,
        strict: bool = False,
    ) -> None:
        self.i_evt = i_evt
        self.f_evt = f_evt
        self.i_ptc = i_ptc
        self.f_ptc = f_ptc
        self.strict = strict

        self.n_events = int(i_evt.shape[0])
        self.n_weights = int(f_evt.shape[1]) - N_EVT_REALS
        self.n_particles = int(i_ptc.shape[0])

        self.mode = CaptureMode.IDLE
        self.event_row = 0
        self.weight_col = 0
        self.particle_row = 0
        self.weight_ids: list[str] = []

        self._in_event = False
        self._buffer: list[str] = []

    @property
    def text(self) -> str:
        """Character data buffered so far."""
        return "".join(self._buffer)

    def _flush_header(self) -> None:
        extract_event(self.text, self)
        self._buffer.clear()
        self.mode = CaptureMode.IDLE

    # -- tokenizer callbacks --

    def start_element(self, name: str, attrs: dict[str, str]) -> None:
        if name == EVENT_TAG:
            self._in_event = True
            self.weight_col = 0
            self._buffer.clear()
            self.mode = CaptureMode.HEADER
        elif self.mode is CaptureMode.HEADER:
            self._flush_header()

        if name == WEIGHT_TAG and self._in_event:
            if self.event_row == 0:
                self.weight_ids.append(attrs.get("id", ""))
            self.mode = CaptureMode.WEIGHT

    def end_element(self, name: str) -> None:
        if name == EVENT_TAG:
            if self.mode is CaptureMode.HEADER:
                self._flush_header()
            self.event_row += 1
            self._in_event = False
            self.mode = CaptureMode.IDLE
        elif name == WEIGHT_TAG and self.mode is CaptureMode.WEIGHT:
            extract_weight(self.text, self)
            self._buffer.clear()
            self.weight_col += 1
            self.mode = CaptureMode.IDLE

    def character_data(self, data: str) -> None:
        if self.mode is not CaptureMode.IDLE:
            self._buffer.append(data)

    # -- end of stream --

    def finish(self) -> None:
        """Check that the stream filled exactly the scanned rows

        Raises
        ------
        InvariantError
            If fewer events or particles were extracted than the pre-scan
            counted.
        """
        if self.event_row != self.n_events or self.particle_row != self.n_particles:
            raise InvariantError(
                f"Extracted {self.event_row} events / {self.particle_row} particles, "
                f"but the scan found {self.n_events} / {self.n_particles}"
            )
        logger.debug(
            "Capture complete: %d events, %d particles", self.event_row, self.particle_row
        )
