#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Shared utilities for parsing and validation

This sub-package centralises token conversion, array layout constants,
and post-parse validation so that the reader modules share one
definition of each.
"""

from __future__ import annotations
