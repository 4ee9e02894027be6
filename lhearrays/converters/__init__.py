#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
HDF5 converter for parsed LHE arrays

* :func:`~lhearrays.converters.hdf5.convert_lhe_to_hdf5`
    Parses an LHE file and writes its arrays to HDF5.
* :func:`~lhearrays.converters.hdf5.write_hdf5`
    Writes an :class:`~lhearrays.models.records.LHEArrays` into an open file.
"""

from __future__ import annotations

from lhearrays.converters.hdf5 import convert_lhe_to_hdf5, write_hdf5

__all__ = ["convert_lhe_to_hdf5", "write_hdf5"]
