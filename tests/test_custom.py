# -*- coding: utf-8 -*-
# Tincta: Typed color encodings and exact conversions between them.
#
# Copyright (c) 2026 opticsWolf
#
# SPDX-License-Identifier: LGPL-3.0-or-later

"""Tests for runtime-defined linear spaces and DynamicColor."""

import numpy as np
import pytest

from tincta_color import LinearAdobeRgb, LinearSrgb, Oklab, SrgbaU8, SrgbU8
from tincta_custom import (
    DynamicColor,
    custom_space,
    from_custom,
    from_linear_srgb,
    from_primaries_and_white_point,
    from_primaries_d50,
    from_primaries_d65,
    from_xyz,
    to_custom_rgb,
    to_linear_srgb,
    to_xyz,
)
from tincta_spaces import (
    ACES_2065,
    ACES_CG,
    ACES_WHITE,
    ADOBE_RGB,
    D50,
    D65,
    SRGB,
    LinearColorSpace,
    WhitePoint,
)

BT709 = ((0.64, 0.33), (0.30, 0.60), (0.15, 0.06))
AP0 = ((0.7347, 0.2653), (0.0, 1.0), (0.0001, -0.0770))


@pytest.fixture
def ap0_d65():
    """AP0 primaries under a D65 white; not a catalog space."""
    return from_primaries_d65(*AP0)


class TestSpaceConstruction:
    """Building spaces from chromaticities."""

    def test_standard_chromaticities_snap_to_catalog(self):
        assert from_primaries_d65(*BT709) is SRGB
        assert from_primaries_d65((0.64, 0.33), (0.21, 0.71), (0.15, 0.06)) is ADOBE_RGB

    def test_snap_tolerates_rounding(self):
        assert from_primaries_d65((0.64002, 0.32998), (0.3, 0.6), (0.15, 0.06)) is SRGB

    def test_aces_white_is_recognised(self):
        p = ACES_CG.primaries
        space = from_primaries_and_white_point(p.red, p.green, p.blue, ACES_WHITE.x, ACES_WHITE.y)
        assert space is ACES_CG

    def test_new_space(self, ap0_d65):
        assert isinstance(ap0_d65, LinearColorSpace)
        assert ap0_d65 != ACES_2065
        assert ap0_d65.white == D65

    def test_named(self):
        space = custom_space(*AP0, white=D65, name="camera")
        assert space.name == "camera"

    def test_collinear_primaries_rejected(self):
        with pytest.raises(ValueError):
            from_primaries_d65((0.3, 0.3), (0.4, 0.4), (0.5, 0.5))

    @pytest.mark.parametrize("primaries", [
        ((0.64, 0.0), (0.30, 0.60), (0.15, 0.06)),
        ((0.64, 0.33), (0.30, 0.0), (0.15, 0.06)),
        ((0.64, 0.33), (0.30, 0.60), (0.15, 0.0)),
    ], ids=["red", "green", "blue"])
    def test_primary_on_y_zero_rejected(self, primaries):
        with pytest.raises(ValueError, match="y != 0"):
            from_primaries_d65(*primaries)

    def test_white_on_y_zero_rejected(self):
        with pytest.raises(ValueError):
            custom_space(*AP0, white=WhitePoint("flat", 0.3, 0.0))


class TestLinearHelpers:
    """Array-level moves between a custom space and linear sRGB."""

    def test_roundtrip(self, ap0_d65):
        rgb = np.random.RandomState(9).random((40, 3))
        back = to_linear_srgb(from_linear_srgb(rgb, ap0_d65), ap0_d65)
        np.testing.assert_allclose(back, rgb, atol=1e-12)

    def test_white_stays_white_under_d50(self):
        space = from_primaries_d50(*BT709)
        assert space is not SRGB
        np.testing.assert_allclose(to_linear_srgb(np.ones(3), space), np.ones(3), atol=1e-9)


class TestNativeXyz:
    """XYZ under the space's own white, without adaptation."""

    def test_white_maps_to_own_white_point(self):
        space = from_primaries_d50(*BT709)
        np.testing.assert_allclose(to_xyz(np.ones(3), space), D50.xyz, atol=1e-12)
        np.testing.assert_allclose(from_xyz(D50.xyz, space), np.ones(3), atol=1e-12)

    def test_roundtrip(self, ap0_d65):
        rgb = np.random.RandomState(4).random((25, 3))
        back = from_xyz(to_xyz(rgb, ap0_d65), ap0_d65)
        np.testing.assert_allclose(back, rgb, atol=1e-12)

    def test_d65_space_agrees_with_reference(self, ap0_d65):
        rgb = np.random.RandomState(6).random((10, 3))
        np.testing.assert_allclose(to_xyz(rgb, ap0_d65), ap0_d65.to_reference(rgb), atol=1e-12)

    def test_d50_space_differs_from_reference(self):
        space = from_primaries_d50(*BT709)
        assert not np.allclose(to_xyz(np.ones(3), space), space.to_reference(np.ones(3)), atol=1e-4)


class TestDynamicColor:
    """Values in custom spaces entering the typed world."""

    def test_value_is_normalised(self):
        c = DynamicColor([1, 0, 0.5], SRGB)
        assert c.value == (1.0, 0.0, 0.5)
        with pytest.raises(ValueError):
            DynamicColor((1.0, 0.0), SRGB)

    def test_same_space_is_exact(self):
        assert DynamicColor((0.2, 0.4, 0.6), SRGB).to_color(LinearSrgb) == LinearSrgb(0.2, 0.4, 0.6)

    def test_matches_catalog_conversion(self):
        value = (0.3, 0.6, 0.1)
        via_dynamic = DynamicColor(value, ADOBE_RGB).to_color(LinearSrgb)
        via_catalog = LinearAdobeRgb(*value).convert(LinearSrgb)
        assert via_dynamic.isclose(via_catalog)

    def test_wide_gamut_green(self, ap0_d65):
        green = DynamicColor((0.0, 1.0, 0.0), ap0_d65).to_color(LinearSrgb)
        assert green.g > 0.5
        assert green.r < 0.0

    def test_into_display_encodings(self, ap0_d65):
        white = DynamicColor((1.0, 1.0, 1.0), ap0_d65)
        assert white.to_color(SrgbU8) == SrgbU8(255, 255, 255)
        assert white.to_color(SrgbaU8) == SrgbaU8(255, 255, 255, 255)
        assert white.to_color(Oklab).l == pytest.approx(1.0, abs=1e-3)

    def test_from_color_drops_alpha(self):
        dyn = DynamicColor.from_color(SrgbaU8(255, 255, 255, 128), SRGB)
        np.testing.assert_allclose(dyn.value, (1.0, 1.0, 1.0), atol=1e-6)

    def test_from_custom_and_back(self, ap0_d65):
        grey = from_custom(ap0_d65, 0.5, 0.5, 0.5)
        np.testing.assert_allclose(grey.to_array(), [0.5, 0.5, 0.5], atol=1e-6)
        np.testing.assert_allclose(to_custom_rgb(SrgbU8(255, 255, 255), ap0_d65), (1.0, 1.0, 1.0), atol=1e-6)
