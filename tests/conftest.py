#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Shared pytest fixtures for lhearrays tests

Provides small synthetic LHE documents written to ``tmp_path`` so that
the scanner, state machine, and converters can be tested without real
generator output.
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

from lhearrays.readers.capture import CaptureState

# Two events, two weights each, with an <initrwgt> header whose
# <weight> declarations must not be counted as event weights.
TWO_EVENT_LHE = """\
<LesHouchesEvents version="3.0">
<header>
<initrwgt>
<weightgroup name="scale_variation">
<weight id="1"> muR=1.0 muF=1.0 </weight>
<weight id="2"> muR=2.0 muF=2.0 </weight>
</weightgroup>
</initrwgt>
</header>
<init>
2212 2212 6.5e+03 6.5e+03 0 0 247000 247000 -4 1
5.0e+01 1.0e-01 5.0e+01 1
</init>
<event>
 3   1 1.5 91.1876 0.0078125 0.118
    2 -1  0  0 501   0 0.0 0.0  45.0 45.0  0.0     0.0 -1.0
   -2 -1  0  0   0 501 0.0 0.0 -45.0 45.0  0.0     0.0  1.0
   23  2  1  2   0   0 0.0 0.0   0.0 90.0 91.1876 0.0  9.0
<mgrwt>
<rscale> 0 0.91E+02 </rscale>
</mgrwt>
<rwgt>
<wgt id="1"> 1.0 </wgt>
<wgt id="2"> 1.25 </wgt>
</rwgt>
</event>
<event>
 2   2 0.5 50.0 0.0078125 0.13
   21 -1  0  0 501 502 0.0 0.0  10.0 10.0 0.0 0.0  1.0
   21 -1  0  0 502 501 0.0 0.0 -10.0 10.0 0.0 0.0 -1.0
<rwgt>
<wgt id="1"> 0.5 </wgt>
<wgt id="2"> 0.75 </wgt>
</rwgt>
</event>
</LesHouchesEvents>
"""

# No root element, and the <wgt> tag directly follows the particle lines.
SINGLE_EVENT_LHE = """\
<init>
2212 2212 6.5e+03 6.5e+03 0 0 247000 247000 -4 1
</init>
<event>
2 1 1.0 2.0 3.0 4.0
1 -1 0 0 0 0 0.1 0.2 0.3 0.4 0.5 0.0 9.0
-1 1 1 1 0 0 1.1 1.2 1.3 1.4 1.5 0.0 -9.0
<wgt id="w0">0.5</wgt>
</event>
"""


@pytest.fixture
def write_lhe(tmp_path: Path):
    """Factory writing LHE text to a file under ``tmp_path``"""

    def _write(text: str, name: str = "events.lhe") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def two_event_file(write_lhe) -> Path:
    return write_lhe(TWO_EVENT_LHE, "two_events.lhe")


@pytest.fixture
def single_event_file(write_lhe) -> Path:
    return write_lhe(SINGLE_EVENT_LHE, "single_event.lhe")


@pytest.fixture
def make_state():
    """Factory for a zeroed :class:`CaptureState` of a given shape"""

    def _make(n_events: int = 1, n_weights: int = 1, n_particles: int = 2,
              strict: bool = False) -> CaptureState:
        return CaptureState(
            np.zeros((n_events, 2), dtype=np.int32),
            np.zeros((n_events, 4 + n_weights), dtype=np.float64),
            np.zeros((n_particles, 7), dtype=np.int32),
            np.zeros((n_particles, 7), dtype=np.float64),
            strict=strict,
        )

    return _make
