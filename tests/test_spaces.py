# -*- coding: utf-8 -*-
# Tincta: Typed color encodings and exact conversions between them.
#
# Copyright (c) 2026 opticsWolf
#
# SPDX-License-Identifier: LGPL-3.0-or-later

"""Tests for linear color spaces, derived matrices and Bradford adaptation."""

import numpy as np
import pytest

from tincta_spaces import (
    ACES_CG,
    ADOBE_RGB,
    CIE_XYZ,
    COLOR_SPACES,
    D50,
    D65,
    PROPHOTO_RGB,
    SRGB,
    LinearColorSpace,
    RgbPrimaries,
    WhitePoint,
    adaptation_matrix,
    conversion_matrix,
    from_reference_matrix,
    rgb_to_xyz_matrix,
    to_reference_matrix,
    transform,
    xyz_to_rgb_matrix,
)


class TestDerivedMatrices:
    """RGB -> XYZ matrices built from primaries and white."""

    def test_srgb_matches_iec_matrix(self):
        expected = np.array([
            [0.4124564, 0.3575761, 0.1804375],
            [0.2126729, 0.7151522, 0.0721750],
            [0.0193339, 0.1191920, 0.9503041],
        ])
        np.testing.assert_allclose(rgb_to_xyz_matrix(SRGB), expected, atol=5e-4)

    @pytest.mark.parametrize("space", [s for s in COLOR_SPACES if not s.is_xyz], ids=str)
    def test_white_maps_to_white(self, space):
        xyz = rgb_to_xyz_matrix(space) @ np.ones(3)
        np.testing.assert_allclose(xyz, space.white.xyz, atol=1e-12)

    @pytest.mark.parametrize("space", COLOR_SPACES, ids=str)
    def test_reference_matrices_are_mutual_inverses(self, space):
        product = from_reference_matrix(space) @ to_reference_matrix(space)
        np.testing.assert_allclose(product, np.eye(3), atol=1e-12)

    def test_luminance_row_sums_to_one(self):
        assert rgb_to_xyz_matrix(SRGB)[1].sum() == pytest.approx(1.0, abs=1e-12)

    def test_cached_matrices_are_read_only(self):
        m = to_reference_matrix(ADOBE_RGB)
        assert m is to_reference_matrix(ADOBE_RGB)
        with pytest.raises(ValueError):
            m[0, 0] = 0.0

    def test_collinear_primaries_rejected(self):
        flat = RgbPrimaries("flat", (0.3, 0.3), (0.3, 0.3), (0.3, 0.3))
        with pytest.raises(ValueError):
            rgb_to_xyz_matrix(LinearColorSpace("flat", flat, D65))

    def test_primary_with_zero_y_rejected(self):
        degenerate = RgbPrimaries("degenerate", (0.64, 0.33), (0.30, 0.0), (0.15, 0.06))
        with pytest.raises(ValueError, match="y != 0"):
            degenerate.xyz_columns()
        with pytest.raises(ValueError):
            rgb_to_xyz_matrix(LinearColorSpace("degenerate", degenerate, D65))

    @pytest.mark.parametrize("space", [SRGB, PROPHOTO_RGB, ACES_CG], ids=str)
    def test_xyz_to_rgb_inverts_rgb_to_xyz(self, space):
        np.testing.assert_allclose(
            xyz_to_rgb_matrix(space) @ rgb_to_xyz_matrix(space), np.eye(3), atol=1e-12
        )


class TestAdaptation:
    """Bradford chromatic adaptation folded into the reference matrices."""

    def test_same_white_is_identity(self):
        np.testing.assert_array_equal(adaptation_matrix(D65, D65), np.eye(3))

    def test_maps_source_white_to_destination_white(self):
        adapted = adaptation_matrix(D50, D65) @ D50.xyz
        np.testing.assert_allclose(adapted, D65.xyz, atol=1e-12)

    def test_round_trip(self):
        there_and_back = adaptation_matrix(D65, D50) @ adaptation_matrix(D50, D65)
        np.testing.assert_allclose(there_and_back, np.eye(3), atol=1e-12)

    @pytest.mark.parametrize("space", [PROPHOTO_RGB, ACES_CG], ids=str)
    def test_non_d65_white_lands_on_srgb_white(self, space):
        np.testing.assert_allclose(transform(np.ones(3), space, SRGB), np.ones(3), atol=1e-9)


class TestConversionMatrix:
    """Composed per-pair matrices."""

    def test_same_space_is_skipped(self):
        assert conversion_matrix(SRGB, SRGB) is None

    def test_equal_by_value(self):
        rebuilt = LinearColorSpace("my sRGB", SRGB.primaries, WhitePoint("daylight", D65.x, D65.y))
        assert rebuilt == SRGB
        assert conversion_matrix(rebuilt, SRGB) is None

    def test_same_space_transform_is_a_copy(self):
        x = np.array([[0.1, 0.2, 0.3]])
        out = transform(x, SRGB, SRGB)
        np.testing.assert_array_equal(out, x)
        assert out is not x

    def test_composition_is_transitive(self):
        direct = conversion_matrix(ADOBE_RGB, PROPHOTO_RGB)
        chained = conversion_matrix(ADOBE_RGB, ACES_CG) @ conversion_matrix(ACES_CG, PROPHOTO_RGB)
        np.testing.assert_allclose(direct, chained, atol=1e-12)

    def test_xyz_reference_of_srgb_red(self):
        xyz = SRGB.to_reference([1.0, 0.0, 0.0])
        np.testing.assert_allclose(xyz, [0.4124, 0.2126, 0.0193], atol=2e-4)
        np.testing.assert_allclose(SRGB.from_reference(xyz), [1.0, 0.0, 0.0], atol=1e-12)

    def test_batch_shape(self):
        rgb = np.random.RandomState(3).random((50, 3))
        assert transform(rgb, SRGB, CIE_XYZ).shape == (50, 3)
