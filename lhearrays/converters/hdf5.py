#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
HDF5 converter for parsed LHE arrays

Writes the four arrays of an :class:`~lhearrays.models.records.LHEArrays`
to a self-documenting HDF5 file.

HDF5 Layout
-----------
::

    /metadata/
        n_events            int64
        n_particles         int64
        n_weights           int64
        source              string   — path of the parsed LHE file

    /events/
        i_evt               int32[n_events, 2]
        f_evt               float64[n_events, 4 + n_weights]
        weight_ids          string[]

    /particles/
        i_ptc               int32[n_particles, 7]
        f_ptc               float64[n_particles, 7]

Every array carries a ``columns`` attribute listing its column names.
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np

try:
    import h5py
except ImportError as _exc:  # pragma: no cover
    raise ImportError(
        "The 'h5py' package is required by the HDF5 converter.  "
        "Install it with: pip install h5py"
    ) from _exc

from lhearrays.exceptions import ConversionError
from lhearrays.models.records import LHEArrays
from lhearrays.utils.constants import (
    F_PTC_COLUMNS,
    I_EVT_COLUMNS,
    I_PTC_COLUMNS,
    f_evt_columns,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Internal writers
# ---------------------------------------------------------------------------

def _create_table(
    group: h5py.Group,
    name: str,
    data: np.ndarray,
    columns: tuple[str, ...],
) -> h5py.Dataset:
    """Create a 2-D dataset with a ``columns`` attribute."""
    ds = group.create_dataset(name, data=data)
    ds.attrs["columns"] = np.array(columns, dtype=h5py.string_dtype())
    return ds


def _write_metadata(h5f: h5py.File, arrays: LHEArrays) -> None:
    meta = h5f.create_group("metadata")
    meta.create_dataset("n_events", data=np.int64(arrays.n_events))
    meta.create_dataset("n_particles", data=np.int64(arrays.n_particles))
    meta.create_dataset("n_weights", data=np.int64(arrays.n_weights))
    meta.create_dataset("source", data=arrays.source)


def write_hdf5(h5f: h5py.File, arrays: LHEArrays) -> None:
    """Write parsed LHE arrays into an open HDF5 file

    Parameters
    ----------
    h5f : h5py.File
        Open HDF5 file handle (write mode).
    arrays : LHEArrays
        Parsed arrays.
    """
    _write_metadata(h5f, arrays)

    events = h5f.create_group("events")
    _create_table(events, "i_evt", arrays.i_evt, I_EVT_COLUMNS)
    _create_table(events, "f_evt", arrays.f_evt, f_evt_columns(arrays.n_weights))
    events.create_dataset(
        "weight_ids",
        data=np.array(arrays.weight_ids, dtype=object),
        dtype=h5py.string_dtype(),
    )

    particles = h5f.create_group("particles")
    _create_table(particles, "i_ptc", arrays.i_ptc, I_PTC_COLUMNS)
    _create_table(particles, "f_ptc", arrays.f_ptc, F_PTC_COLUMNS)

    logger.debug(
        "Wrote %d events / %d particles to %s",
        arrays.n_events, arrays.n_particles, h5f.filename,
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def convert_lhe_to_hdf5(
    source_path: Path | str,
    output_path: Path | str,
    *,
    validate: bool = True,
    strict: bool = False,
    overwrite: bool = False,
) -> LHEArrays:
    """Parse an LHE file and write its arrays to an HDF5 file

    Parameters
    ----------
    source_path : Path | str
        Path to the LHE file.
    output_path : Path | str
        Path for the output HDF5 file.  Parent directories are created
        automatically.
    validate : bool, optional
        Run post-parse validation.  Default ``True``.
    strict : bool, optional
        Make every numeric field mandatory.  Default ``False``.
    overwrite : bool, optional
        If ``True``, overwrite an existing HDF5 file.  If ``False``
        (default), raise :class:`~lhearrays.exceptions.ConversionError`
        when the output file already exists.

    Returns
    -------
    LHEArrays
        The arrays that were written.

    Raises
    ------
    ConversionError
        If *overwrite* is ``False`` and *output_path* exists, or if any
        HDF5 write operation fails.

    Examples
    --------
    >>> convert_lhe_to_hdf5("unweighted_events.lhe", "out/events.h5", overwrite=True)
    """
    from lhearrays.readers.lhe import LHEReader

    src = Path(source_path)
    out = Path(output_path)

    if out.exists() and not overwrite:
        raise ConversionError(
            f"Output file {out} already exists and overwrite=False."
        )

    arrays = LHEReader().read(src, validate=validate, strict=strict)

    out.parent.mkdir(parents=True, exist_ok=True)
    try:
        mode = "w" if overwrite else "w-"
        with h5py.File(str(out), mode) as h5f:
            write_hdf5(h5f, arrays)
    except Exception as exc:
        raise ConversionError(f"Failed to write HDF5 file {out}: {exc}") from exc

    logger.info("Wrote HDF5 file: %s", out)
    return arrays
