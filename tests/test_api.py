# -*- coding: utf-8 -*-
# Tincta: Typed color encodings and exact conversions between them.
#
# Copyright (c) 2026 opticsWolf
#
# SPDX-License-Identifier: LGPL-3.0-or-later

"""Tests for the single-import facade."""

import numpy as np

import tincta as tc


def test_exports_resolve():
    missing = [name for name in tc.__all__ if not hasattr(tc, name)]
    assert missing == []


def test_metadata():
    meta = tc.metadata_summary()
    assert meta["title"] == "Tincta"
    assert meta["version"] == tc.__version__


def test_usage_example():
    base = tc.SrgbU8(102, 54, 220).convert(tc.LinearSrgb)
    lit = base * 0.5 + tc.SrgbF32(0.5, 0.8, 0.1).convert(tc.LinearSrgb)
    assert lit.convert(tc.SrgbU8) == tc.SrgbU8(144, 207, 163)

    pixels = np.zeros((16, 3), dtype=np.uint8)
    linear = tc.convert_array(pixels, tc.SrgbU8, tc.LinearSrgb)
    assert linear.shape == (16, 3)
    assert linear.dtype == np.float32
