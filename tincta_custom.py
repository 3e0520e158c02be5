# -*- coding: utf-8 -*-
"""
Tincta: Typed color encodings and exact conversions between them
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Custom Linear Spaces
====================
Linear RGB spaces defined at runtime from primaries and a white point,
e.g. for camera or display characterisation data.

Custom spaces are *not* new encodings: the catalog stays closed.  Values in
a custom space travel as ``DynamicColor`` and enter the typed world through
``DynamicColor.to_color``, which applies the composed matrix into the
target's linear space and then the target's regular encode stage.

Chromaticities that match a standard set (within ``MATCH_TOLERANCE``) are
snapped to it, so a custom space built from BT.709 primaries and D65 *is*
``tincta_spaces.SRGB`` and conversions skip the matrix stage.
"""

from dataclasses import dataclass
from typing import Final, Optional, Sequence, Tuple, Type, TypeVar

import numpy as np

from tincta_color import Color, LinearSrgb
from tincta_components import ArrayFloat, ArrayLike, handle_shapes
from tincta_convert import decode_to_linear, encode_linear
from tincta_spaces import (
    ACES_WHITE,
    COLOR_SPACES,
    D50,
    D65,
    SRGB,
    LinearColorSpace,
    RgbPrimaries,
    WhitePoint,
    rgb_to_xyz_matrix,
    transform,
    xyz_to_rgb_matrix,
)

__all__ = [
    "MATCH_TOLERANCE",
    "KNOWN_WHITE_POINTS",
    "custom_space",
    "from_primaries_d65",
    "from_primaries_d50",
    "from_primaries_and_white_point",
    "to_linear_srgb",
    "from_linear_srgb",
    "to_xyz",
    "from_xyz",
    "DynamicColor",
    "from_custom",
    "to_custom_rgb",
]

C = TypeVar("C", bound=Color)

Chromaticity = Tuple[float, float]

MATCH_TOLERANCE: Final[float] = 1e-4

KNOWN_WHITE_POINTS: Final[Tuple[WhitePoint, ...]] = (D65, D50, ACES_WHITE)


def _close(a: Sequence[float], b: Sequence[float]) -> bool:
    return bool(np.allclose(a, b, rtol=0.0, atol=MATCH_TOLERANCE))

def _match_white(x: float, y: float) -> WhitePoint:
    for wp in KNOWN_WHITE_POINTS:
        if _close((x, y), (wp.x, wp.y)):
            return wp
    return WhitePoint(f"xy({x:.4f}, {y:.4f})", float(x), float(y))

def _match_primaries(red: Chromaticity, green: Chromaticity, blue: Chromaticity) -> RgbPrimaries:
    for space in COLOR_SPACES:
        p = space.primaries
        if p is not None and all(
            _close(got, ref) for got, ref in ((red, p.red), (green, p.green), (blue, p.blue))
        ):
            return p
    return RgbPrimaries(
        "custom",
        (float(red[0]), float(red[1])),
        (float(green[0]), float(green[1])),
        (float(blue[0]), float(blue[1])),
    )


def custom_space(red: Chromaticity, green: Chromaticity, blue: Chromaticity,
                 white: WhitePoint = D65, name: Optional[str] = None) -> LinearColorSpace:
    """
    Builds a linear space from xy chromaticities.

    Returns the catalog space itself when primaries and white both match a
    standard one.

    Raises:
        ValueError: If the primaries are collinear or any chromaticity,
            white included, has y == 0.
    """
    if white.y == 0.0:
        raise ValueError("White point must have y != 0")
    for label, (x, y) in (("red", red), ("green", green), ("blue", blue)):
        if y == 0.0:
            raise ValueError(f"{label} primary ({x}, {y}) must have y != 0")
    primaries = _match_primaries(red, green, blue)
    white = _match_white(white.x, white.y)
    for known in COLOR_SPACES:
        if known.primaries == primaries and known.white == white:
            return known
    space = LinearColorSpace(name or f"{primaries.name} / {white.name}", primaries, white)
    # raises ValueError for collinear primaries
    rgb_to_xyz_matrix(space)
    return space

def from_primaries_d65(red: Chromaticity, green: Chromaticity, blue: Chromaticity) -> LinearColorSpace:
    return custom_space(red, green, blue, D65)

def from_primaries_d50(red: Chromaticity, green: Chromaticity, blue: Chromaticity) -> LinearColorSpace:
    return custom_space(red, green, blue, D50)

def from_primaries_and_white_point(red: Chromaticity, green: Chromaticity, blue: Chromaticity,
                                   white_x: float, white_y: float) -> LinearColorSpace:
    return custom_space(red, green, blue, _match_white(white_x, white_y))


def to_linear_srgb(values: ArrayLike, space: LinearColorSpace) -> ArrayFloat:
    """(3,) or (N, 3) linear values in ``space`` -> linear sRGB."""
    return transform(values, space, SRGB)

def from_linear_srgb(values: ArrayLike, space: LinearColorSpace) -> ArrayFloat:
    """(3,) or (N, 3) linear sRGB -> linear values in ``space``."""
    return transform(values, SRGB, space)


# Unlike the helpers above, this pair stays under the space's own white:
# no chromatic adaptation to D65 is applied.

@handle_shapes
def to_xyz(values: ArrayFloat, space: LinearColorSpace) -> ArrayFloat:
    """(3,) or (N, 3) linear values in ``space`` -> CIE XYZ relative to ``space.white``."""
    xyz: ArrayFloat = np.dot(values, rgb_to_xyz_matrix(space).T)
    return xyz

@handle_shapes
def from_xyz(values: ArrayFloat, space: LinearColorSpace) -> ArrayFloat:
    """(3,) or (N, 3) CIE XYZ relative to ``space.white`` -> linear values in ``space``."""
    rgb: ArrayFloat = np.dot(values, xyz_to_rgb_matrix(space).T)
    return rgb


@dataclass(frozen=True, slots=True)
class DynamicColor:
    """
    Linear RGB value in a runtime-defined space.

    Attributes:
        value: (r, g, b) linear-light coordinates.
        space: The space the coordinates are expressed in.
    """
    value: Tuple[float, float, float]
    space: LinearColorSpace

    def __post_init__(self) -> None:
        values = tuple(float(v) for v in self.value)
        if len(values) != 3:
            raise ValueError(f"DynamicColor takes 3 channels, got {len(values)}")
        object.__setattr__(self, "value", values)

    def to_color(self, target: Type[C]) -> C:
        """
        Converts into any catalog encoding.

        The matrix runs straight from this space into the target's linear
        space (through XYZ, never clipped to sRGB), then the target's
        encode stage applies.
        """
        encoding = target.ENCODING
        linear = transform(np.array(self.value), self.space, encoding.linear_space)
        rows = encode_linear(linear[np.newaxis, :], None, encoding)
        return target._wrap(rows[0])

    @classmethod
    def from_color(cls, color: Color, space: LinearColorSpace) -> "DynamicColor":
        """Expresses any color in ``space`` (alpha is dropped)."""
        linear, _ = decode_to_linear(color.to_array()[np.newaxis, :], color.ENCODING)
        value = transform(linear[0], color.ENCODING.linear_space, space)
        r, g, b = value.tolist()
        return cls((r, g, b), space)


def from_custom(space: LinearColorSpace, r: float, g: float, b: float) -> LinearSrgb:
    """Linear sRGB color from coordinates in a custom space."""
    return DynamicColor((r, g, b), space).to_color(LinearSrgb)

def to_custom_rgb(color: Color, space: LinearColorSpace) -> Tuple[float, float, float]:
    """Coordinates of ``color`` in a custom space."""
    return DynamicColor.from_color(color, space).value
