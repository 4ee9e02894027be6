#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Line-based pre-scan that sizes the output arrays

The scan is the first of the two passes over an LHE file.  It produces
only shape metadata (:class:`~lhearrays.models.records.ScanResult`) and
never touches the output arrays.

Rules
-----
* A line matching ``<event>`` (or ``<event ...>``) opens an event.  The
  *next* line is the event header; its leading token is NUP and is added
  to the particle total.
* Every ``<wgt>`` open tag is tallied, both globally and for the event
  it appears in.  The weight width is the largest per-event count.
* A ``<LesHouchesEvents>`` open tag marks the document as rooted.

The per-event weight counts are only compared, not enforced: events with
fewer weights than the widest event keep zeros in their trailing weight
columns, and a warning is logged.
"""

from __future__ import annotations

import logging
from pathlib import Path

from lhearrays.exceptions import DimensionScanError, FileOpenError
from lhearrays.models.records import ScanResult
from lhearrays.utils.constants import (
    EVENT_OPEN_PATTERN,
    ROOT_OPEN_PATTERN,
    WEIGHT_OPEN_PATTERN,
)
from lhearrays.utils.parsing import leading_int

logger = logging.getLogger(__name__)


def scan_dimensions(filename: Path | str) -> ScanResult:
    """Count events, weights, and particles in an LHE file

    ``n_weights`` is the *widest* event, the largest number of ``<wgt>``
    tags inside any one ``<event>``, not the raw number of ``<wgt>`` tags
    in the file.  The raw tally grows with the event count, so using it
    as the ``f_evt`` width would leave most columns empty in any
    multi-event file.  The two agree for single-event files.  Callers
    who want the raw tally can read ``ScanResult.n_weight_tags``.
    ``<weight ...>`` declarations inside ``<initrwgt>`` are not counted
    in either, because they carry no per-event value.

    Parameters
    ----------
    filename : Path | str
        Path to the LHE file.

    Returns
    -------
    ScanResult
        The dimensions of the output arrays.  Zero counts are returned
        as-is; deciding that they are an error is up to the caller.

    Raises
    ------
    FileOpenError
        If the file cannot be opened.
    DimensionScanError
        If the line after an ``<event>`` marker is missing or does not
        start with a non-negative integer.

    Examples
    --------
    >>> n_events, n_weights, n_particles = scan_dimensions("unweighted_events.lhe")
    """
    path = Path(filename)
    logger.debug("Scanning dimensions of %s", path)

    try:
        fh = open(path, "r", encoding="utf-8", errors="replace")
    except OSError as exc:
        raise FileOpenError(f"Cannot open file: {path}") from exc

    n_events = 0
    n_particles = 0
    n_weight_tags = 0
    has_root = False
    event_weights = 0
    widths: list[int] = []

    with fh:
        lines = enumerate(fh, start=1)
        for lineno, line in lines:
            if not has_root and ROOT_OPEN_PATTERN.search(line):
                has_root = True

            if EVENT_OPEN_PATTERN.search(line):
                if n_events:
                    widths.append(event_weights)
                n_events += 1
                event_weights = 0

                nxt = next(lines, None)
                if nxt is None:
                    raise DimensionScanError(
                        f"Unexpected end of file after event marker on line {lineno}",
                        lineno + 1,
                    )
                lineno, line = nxt
                n = leading_int(line)
                if n is None or n < 0:
                    raise DimensionScanError(
                        "Failed to parse particle count from event header "
                        f"on line {lineno}: {line.strip()!r}",
                        lineno,
                    )
                n_particles += n

            n_tags = len(WEIGHT_OPEN_PATTERN.findall(line))
            n_weight_tags += n_tags
            event_weights += n_tags

    if n_events:
        widths.append(event_weights)

    n_weights = max(widths, default=0)
    irregular = [i for i, w in enumerate(widths) if w != n_weights]
    if irregular:
        logger.warning(
            "%s: %d of %d events carry fewer than %d weights (first: event %d "
            "with %d); missing weights are left at 0.0",
            path, len(irregular), n_events, n_weights,
            irregular[0], widths[irregular[0]],
        )

    result = ScanResult(
        n_events=n_events,
        n_weights=n_weights,
        n_particles=n_particles,
        n_weight_tags=n_weight_tags,
        has_root=has_root,
    )
    logger.debug(
        "Scan of %s complete: %d events, %d particles, %d weights per event "
        "(%d <wgt> tags)",
        path, n_events, n_particles, n_weights, n_weight_tags,
    )
    return result
