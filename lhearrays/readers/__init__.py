#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Two-pass LHE readers

* :func:`~lhearrays.readers.scanner.scan_dimensions` — pass 1, output shapes
* :class:`~lhearrays.readers.capture.CaptureState` — pass 2 state machine
* :func:`~lhearrays.readers.lhe.parse` — both passes, returns four arrays
* :class:`~lhearrays.readers.lhe.LHEReader` — both passes, returns a model
"""

from __future__ import annotations

from lhearrays.readers.scanner import scan_dimensions
from lhearrays.readers.capture import CaptureMode, CaptureState
from lhearrays.readers.lhe import LHEReader, parse

__all__ = ["scan_dimensions", "CaptureMode", "CaptureState", "LHEReader", "parse"]
