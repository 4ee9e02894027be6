#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Tests for the dimension pre-scan

Covers event, particle and weight counting, root detection, irregular
weight counts, and the line numbers reported for bad headers.
"""

from __future__ import annotations

import logging

import pytest

from lhearrays.exceptions import DimensionScanError, FileOpenError
from lhearrays.readers.scanner import scan_dimensions


class TestScanDimensions:
    """Counting on well-formed files"""

    def test_two_events(self, two_event_file) -> None:
        scan = scan_dimensions(two_event_file)
        assert scan.n_events == 2
        assert scan.n_particles == 5
        assert scan.n_weights == 2

    def test_weight_declarations_not_counted(self, two_event_file) -> None:
        scan = scan_dimensions(two_event_file)
        assert scan.n_weight_tags == 4

    def test_width_matches_tag_count_for_single_event(self, single_event_file) -> None:
        scan = scan_dimensions(single_event_file)
        assert scan.n_weights == scan.n_weight_tags == 1

    def test_unpacks_as_triple(self, two_event_file) -> None:
        n_events, n_weights, n_particles = scan_dimensions(two_event_file)
        assert (n_events, n_weights, n_particles) == (2, 2, 5)

    def test_root_detected(self, two_event_file) -> None:
        assert scan_dimensions(two_event_file).has_root

    def test_no_root(self, single_event_file) -> None:
        scan = scan_dimensions(single_event_file)
        assert not scan.has_root
        assert tuple(scan) == (1, 1, 2)

    def test_event_tag_with_attributes(self, write_lhe) -> None:
        path = write_lhe(
            "<LesHouchesEvents>\n"
            '<event npLO=" -1 " npNLO=" 1 ">\n'
            "1 1 1.0 1.0 1.0 1.0\n"
            "1 1 0 0 0 0 0 0 0 0 0 0 0\n"
            "<wgt id='a'>1.0</wgt>\n"
            "</event>\n"
            "</LesHouchesEvents>\n"
        )
        assert tuple(scan_dimensions(path)) == (1, 1, 1)

    def test_several_weights_on_one_line(self, write_lhe) -> None:
        path = write_lhe(
            "<event>\n"
            "1 1 1.0 1.0 1.0 1.0\n"
            "1 1 0 0 0 0 0 0 0 0 0 0 0\n"
            "<rwgt><wgt id='a'>1.0</wgt><wgt id='b'>2.0</wgt></rwgt>\n"
            "</event>\n"
        )
        scan = scan_dimensions(path)
        assert scan.n_weights == 2
        assert scan.n_weight_tags == 2

    def test_empty_file(self, write_lhe) -> None:
        scan = scan_dimensions(write_lhe(""))
        assert tuple(scan) == (0, 0, 0)
        assert scan.is_empty


class TestIrregularWeights:
    """Events with differing numbers of <wgt> tags"""

    TEXT = (
        "<LesHouchesEvents>\n"
        "<event>\n"
        "1 1 1.0 1.0 1.0 1.0\n"
        "1 1 0 0 0 0 0 0 0 0 0 0 0\n"
        "<rwgt><wgt id='a'>1.0</wgt>\n<wgt id='b'>2.0</wgt></rwgt>\n"
        "</event>\n"
        "<event>\n"
        "1 1 1.0 1.0 1.0 1.0\n"
        "1 1 0 0 0 0 0 0 0 0 0 0 0\n"
        "<rwgt><wgt id='a'>3.0</wgt></rwgt>\n"
        "</event>\n"
        "</LesHouchesEvents>\n"
    )

    def test_width_is_widest_event(self, write_lhe) -> None:
        scan = scan_dimensions(write_lhe(self.TEXT))
        assert scan.n_weights == 2
        assert scan.n_weight_tags == 3

    def test_warns(self, write_lhe, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="lhearrays.readers.scanner"):
            scan_dimensions(write_lhe(self.TEXT))
        assert "fewer than 2 weights" in caplog.text


class TestScanErrors:
    """Error paths of the pre-scan"""

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(FileOpenError):
            scan_dimensions(tmp_path / "nonexistent.lhe")

    def test_non_numeric_header_line_number(self, write_lhe) -> None:
        path = write_lhe(
            "<LesHouchesEvents>\n"
            "<init>\n"
            "</init>\n"
            "<event>\n"
            "abc 1 1.0 1.0 1.0 1.0\n"
            "</event>\n"
            "</LesHouchesEvents>\n"
        )
        with pytest.raises(DimensionScanError) as info:
            scan_dimensions(path)
        assert info.value.line == 5
        assert "line 5" in str(info.value)

    def test_negative_particle_count(self, write_lhe) -> None:
        path = write_lhe("<event>\n-1 1 1.0 1.0 1.0 1.0\n</event>\n")
        with pytest.raises(DimensionScanError) as info:
            scan_dimensions(path)
        assert info.value.line == 2

    def test_event_marker_on_last_line(self, write_lhe) -> None:
        path = write_lhe("<init>\n</init>\n<event>\n")
        with pytest.raises(DimensionScanError) as info:
            scan_dimensions(path)
        assert info.value.line == 4
