#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Typed dataclass models for parsed LHE files

Models carry NumPy arrays and scalar metadata.  They are the output
format of the reader layer and the input accepted by the converter layer.
"""

from __future__ import annotations

from lhearrays.models.records import LHEArrays, ScanResult

__all__ = ["LHEArrays", "ScanResult"]
