#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Tests for HDF5 converter

Covers file creation, group layout, column attributes, round-tripped
values, and the overwrite policy.
"""

from __future__ import annotations

import numpy as np
import pytest

try:
    import h5py
except ImportError:
    pytest.skip("h5py not installed", allow_module_level=True)

from lhearrays.converters.hdf5 import convert_lhe_to_hdf5
from lhearrays.exceptions import ConversionError, EmptyInputError


class TestConvert:

    def test_creates_file(self, tmp_path, two_event_file) -> None:
        out = tmp_path / "out" / "events.h5"
        convert_lhe_to_hdf5(two_event_file, out)
        assert out.exists()

    def test_layout(self, tmp_path, two_event_file) -> None:
        out = tmp_path / "events.h5"
        convert_lhe_to_hdf5(two_event_file, out)
        with h5py.File(str(out), "r") as h5f:
            assert "metadata" in h5f
            assert "events/i_evt" in h5f
            assert "events/f_evt" in h5f
            assert "particles/i_ptc" in h5f
            assert "particles/f_ptc" in h5f
            assert int(h5f["metadata/n_events"][()]) == 2
            assert int(h5f["metadata/n_particles"][()]) == 5
            assert int(h5f["metadata/n_weights"][()]) == 2
            assert h5f["metadata/source"].asstr()[()] == str(two_event_file)

    def test_values(self, tmp_path, two_event_file) -> None:
        out = tmp_path / "events.h5"
        arrays = convert_lhe_to_hdf5(two_event_file, out)
        with h5py.File(str(out), "r") as h5f:
            np.testing.assert_array_equal(h5f["events/i_evt"][:], arrays.i_evt)
            np.testing.assert_array_equal(h5f["events/f_evt"][:], arrays.f_evt)
            np.testing.assert_array_equal(h5f["particles/i_ptc"][:], arrays.i_ptc)
            np.testing.assert_array_equal(h5f["particles/f_ptc"][:], arrays.f_ptc)

    def test_columns_attribute(self, tmp_path, two_event_file) -> None:
        out = tmp_path / "events.h5"
        convert_lhe_to_hdf5(two_event_file, out)
        with h5py.File(str(out), "r") as h5f:
            cols = [str(c) for c in h5f["events/f_evt"].attrs["columns"]]
            assert cols == ["XWGTUP", "SCALUP", "AQEDUP", "AQCDUP", "wgt_0", "wgt_1"]
            assert str(h5f["particles/i_ptc"].attrs["columns"][0]) == "evt_idx"

    def test_weight_ids(self, tmp_path, two_event_file) -> None:
        out = tmp_path / "events.h5"
        convert_lhe_to_hdf5(two_event_file, out)
        with h5py.File(str(out), "r") as h5f:
            assert list(h5f["events/weight_ids"].asstr()[:]) == ["1", "2"]


class TestOverwrite:

    def test_refuses_existing(self, tmp_path, two_event_file) -> None:
        out = tmp_path / "events.h5"
        out.write_bytes(b"")
        with pytest.raises(ConversionError):
            convert_lhe_to_hdf5(two_event_file, out)

    def test_overwrite(self, tmp_path, two_event_file) -> None:
        out = tmp_path / "events.h5"
        convert_lhe_to_hdf5(two_event_file, out)
        convert_lhe_to_hdf5(two_event_file, out, overwrite=True)
        with h5py.File(str(out), "r") as h5f:
            assert int(h5f["metadata/n_events"][()]) == 2

    def test_parse_error_writes_nothing(self, tmp_path, write_lhe) -> None:
        out = tmp_path / "empty.h5"
        with pytest.raises(EmptyInputError):
            convert_lhe_to_hdf5(write_lhe(""), out)
        assert not out.exists()
