# -*- coding: utf-8 -*-
# Tincta: Typed color encodings and exact conversions between them.
#
# Copyright (c) 2026 opticsWolf
#
# SPDX-License-Identifier: LGPL-3.0-or-later

"""Tests for the runtime kernel switches."""

import warnings

import numba
import numpy as np
import pytest

import tincta_config as cfg
from tincta_color import LinearSrgb, SrgbU8
from tincta_convert import convert_array
from tincta_encodings import ENCODED_SRGB_F32, LINEAR_SRGB


@pytest.fixture
def fast_math():
    with pytest.warns(RuntimeWarning):
        cfg.set_strict_ieee(False)
    try:
        yield
    finally:
        cfg.set_strict_ieee(True)


class TestStrictIeee:

    def test_strict_by_default(self):
        assert cfg.is_strict_ieee()

    def test_enabling_is_silent(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            cfg.set_strict_ieee(True)
        assert cfg.is_strict_ieee()

    def test_fast_mode_stays_close(self, fast_math):
        assert not cfg.is_strict_ieee()
        rows = np.random.RandomState(17).random((256, 3))
        fast = convert_array(rows, ENCODED_SRGB_F32, LINEAR_SRGB)
        cfg.set_strict_ieee(True)
        strict = convert_array(rows, ENCODED_SRGB_F32, LINEAR_SRGB)
        np.testing.assert_allclose(fast, strict, rtol=1e-6, atol=1e-7)

    def test_u8_results_unchanged_in_fast_mode(self, fast_math):
        c = SrgbU8(12, 200, 99)
        assert c.convert(LinearSrgb).convert(SrgbU8) == c


class TestThreads:

    def test_reports_pool_size(self):
        assert 1 <= cfg.get_num_threads() <= numba.config.NUMBA_NUM_THREADS

    @pytest.mark.parametrize("n", [0, -1, numba.config.NUMBA_NUM_THREADS + 1])
    def test_out_of_range(self, n):
        with pytest.raises(ValueError):
            cfg.set_num_threads(n)

    def test_set_and_restore(self):
        before = cfg.get_num_threads()
        try:
            cfg.set_num_threads(1)
            assert cfg.get_num_threads() == 1
            SrgbU8(1, 2, 3).convert(SrgbU8)
        finally:
            cfg.set_num_threads(before)
