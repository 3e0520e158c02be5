# -*- coding: utf-8 -*-
"""
Tincta: Typed color encodings and exact conversions between them
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Linear Color Spaces
===================
Primaries + white point definitions and the 3x3 matrices relating every
linear space to the shared reference space, CIE XYZ under D65.

Matrices are derived, not tabulated: the RGB -> XYZ matrix of a space is
built from the chromaticities of its primaries scaled so that RGB (1, 1, 1)
lands on the white point (SMPTE RP 177).  Spaces whose white is not D65 get
a Bradford adaptation folded into the same matrix, so a cross-space
conversion is always exactly one matrix multiply at call time.

Conventions:
    - ``*_matrix`` functions return column-vector matrices (M @ v).
    - ``conversion_matrix`` returns a pre-transposed matrix for row-vector
      batches (rows @ M_T), matching NumPy's C-contiguous layout.
    - All returned matrices are cached and read-only.

References:
    - SMPTE RP 177-1993 "Derivation of Basic Television Color Equations"
    - Lindbloom, B. "Chromatic Adaptation" (Bradford method)
"""

import functools
from dataclasses import dataclass, field
from typing import Final, Optional, Tuple

import numpy as np
import scipy.linalg

from tincta_components import ArrayFloat, ArrayLike, handle_shapes

__all__ = [
    # --- Descriptors ---
    "WhitePoint",
    "RgbPrimaries",
    "LinearColorSpace",

    # --- White points ---
    "D65",
    "D50",
    "ACES_WHITE",
    "REFERENCE_WHITE",

    # --- Spaces ---
    "SRGB",
    "DISPLAY_P3",
    "ADOBE_RGB",
    "PROPHOTO_RGB",
    "ACES_CG",
    "ACES_2065",
    "BT2020",
    "CIE_XYZ",
    "COLOR_SPACES",

    # --- Matrices ---
    "M_BRADFORD",
    "adaptation_matrix",
    "rgb_to_xyz_matrix",
    "xyz_to_rgb_matrix",
    "to_reference_matrix",
    "from_reference_matrix",
    "conversion_matrix",
    "transform",
]

Chromaticity = Tuple[float, float]


# =============================================================================
# 1. DESCRIPTORS
# =============================================================================
# Names are labels only; equality and hashing use the numbers, so a space
# rebuilt from the same primaries and white compares equal to the original.

@dataclass(frozen=True, slots=True)
class WhitePoint:
    """CIE 1931 xy chromaticity of a reference white (Y = 1)."""
    name: str = field(compare=False)
    x: float
    y: float

    @property
    def xyz(self) -> ArrayFloat:
        """Tristimulus values normalised to Y = 1."""
        return np.array([self.x / self.y, 1.0, (1.0 - self.x - self.y) / self.y], dtype=np.float64)


@dataclass(frozen=True, slots=True)
class RgbPrimaries:
    """CIE 1931 xy chromaticities of the red, green and blue primaries."""
    name: str = field(compare=False)
    red: Chromaticity
    green: Chromaticity
    blue: Chromaticity

    def xyz_columns(self) -> ArrayFloat:
        """
        Primaries as XYZ column vectors with Y = 1.

        Raises:
            ValueError: If a primary has y == 0.
        """
        for x, y in (self.red, self.green, self.blue):
            if y == 0.0:
                raise ValueError(f"Primary ({x}, {y}) of {self.name!r} must have y != 0")
        cols = [
            [x / y, 1.0, (1.0 - x - y) / y]
            for x, y in (self.red, self.green, self.blue)
        ]
        return np.array(cols, dtype=np.float64).T


@dataclass(frozen=True, slots=True)
class LinearColorSpace:
    """
    A linear-light coordinate system.

    Attributes:
        name: Display label.
        primaries: RGB primaries, or None when the coordinates are CIE XYZ.
        white: Reference white of the space.
    """
    name: str = field(compare=False)
    primaries: Optional[RgbPrimaries]
    white: WhitePoint

    @property
    def is_xyz(self) -> bool:
        return self.primaries is None

    def to_reference(self, values: ArrayLike) -> ArrayFloat:
        """Maps (3,) or (N, 3) coordinates of this space to reference XYZ."""
        return transform(values, self, CIE_XYZ)

    def from_reference(self, xyz: ArrayLike) -> ArrayFloat:
        """Maps (3,) or (N, 3) reference XYZ to coordinates of this space."""
        return transform(xyz, CIE_XYZ, self)

    def __str__(self) -> str:
        return self.name


# --- Standard Illuminants ---
D65: Final[WhitePoint] = WhitePoint("D65", 0.3127, 0.3290)
D50: Final[WhitePoint] = WhitePoint("D50", 0.3457, 0.3585)
# SMPTE ST 2065-1, approx. 6000K
ACES_WHITE: Final[WhitePoint] = WhitePoint("ACES", 0.32168, 0.33767)

REFERENCE_WHITE: Final[WhitePoint] = D65

# --- Primaries ---
_BT709 = RgbPrimaries("BT.709", (0.640, 0.330), (0.300, 0.600), (0.150, 0.060))
_P3 = RgbPrimaries("P3", (0.680, 0.320), (0.265, 0.690), (0.150, 0.060))
_ADOBE = RgbPrimaries("Adobe RGB (1998)", (0.640, 0.330), (0.210, 0.710), (0.150, 0.060))
_ROMM = RgbPrimaries("ROMM", (0.7347, 0.2653), (0.1596, 0.8404), (0.0366, 0.0001))
_AP1 = RgbPrimaries("ACES AP1", (0.713, 0.293), (0.165, 0.830), (0.128, 0.044))
_AP0 = RgbPrimaries("ACES AP0", (0.7347, 0.2653), (0.0, 1.0), (0.0001, -0.0770))
_BT2020 = RgbPrimaries("BT.2020", (0.708, 0.292), (0.170, 0.797), (0.131, 0.046))

# --- Spaces ---
SRGB: Final[LinearColorSpace] = LinearColorSpace("sRGB", _BT709, D65)
DISPLAY_P3: Final[LinearColorSpace] = LinearColorSpace("Display P3", _P3, D65)
ADOBE_RGB: Final[LinearColorSpace] = LinearColorSpace("Adobe RGB (1998)", _ADOBE, D65)
PROPHOTO_RGB: Final[LinearColorSpace] = LinearColorSpace("ProPhoto RGB", _ROMM, D50)
ACES_CG: Final[LinearColorSpace] = LinearColorSpace("ACEScg", _AP1, ACES_WHITE)
ACES_2065: Final[LinearColorSpace] = LinearColorSpace("ACES2065-1", _AP0, ACES_WHITE)
BT2020: Final[LinearColorSpace] = LinearColorSpace("BT.2020", _BT2020, D65)
CIE_XYZ: Final[LinearColorSpace] = LinearColorSpace("CIE XYZ (D65)", None, REFERENCE_WHITE)

COLOR_SPACES: Final[Tuple[LinearColorSpace, ...]] = (
    SRGB, DISPLAY_P3, ADOBE_RGB, PROPHOTO_RGB, ACES_CG, ACES_2065, BT2020, CIE_XYZ,
)


# =============================================================================
# 2. MATRICES
# =============================================================================

# Bradford Adaptation
# Transforms XYZ to "sharpened" cone responses for gain application.
M_BRADFORD: Final[ArrayFloat] = np.array([
    [ 0.8951000,  0.2664000, -0.1614000],
    [-0.7502000,  1.7135000,  0.0367000],
    [ 0.0389000, -0.0685000,  1.0296000]
], dtype=np.float64)
_M_BRADFORD_INV: Final[ArrayFloat] = scipy.linalg.inv(M_BRADFORD)


def _frozen(m: ArrayFloat) -> ArrayFloat:
    """Marks a cached matrix read-only so callers cannot corrupt the cache."""
    m = np.ascontiguousarray(m, dtype=np.float64)
    m.flags.writeable = False
    return m


@functools.lru_cache(maxsize=32)
def adaptation_matrix(src_white: WhitePoint, dst_white: WhitePoint) -> ArrayFloat:
    """
    Bradford chromatic adaptation from ``src_white`` to ``dst_white``.

    Derivation:
        M_cat = M_B^-1 @ diag(lms_dst / lms_src) @ M_B
    """
    if src_white == dst_white:
        return _frozen(np.eye(3))
    src_lms = M_BRADFORD @ src_white.xyz
    dst_lms = M_BRADFORD @ dst_white.xyz
    gains = np.diag(dst_lms / src_lms)
    return _frozen(_M_BRADFORD_INV @ gains @ M_BRADFORD)


@functools.lru_cache(maxsize=64)
def rgb_to_xyz_matrix(space: LinearColorSpace) -> ArrayFloat:
    """
    Normalised primary matrix: linear RGB -> XYZ relative to the space's
    own white.  Identity for the XYZ space itself.

    Raises:
        ValueError: If the primaries are collinear (singular matrix).
    """
    if space.primaries is None:
        return _frozen(np.eye(3))
    p = space.primaries.xyz_columns()
    try:
        s = scipy.linalg.solve(p, space.white.xyz)
    except scipy.linalg.LinAlgError as exc:
        raise ValueError(f"Primaries of {space.name!r} do not span a color space") from exc
    return _frozen(p * s[np.newaxis, :])


@functools.lru_cache(maxsize=64)
def xyz_to_rgb_matrix(space: LinearColorSpace) -> ArrayFloat:
    """Inverse of ``rgb_to_xyz_matrix``: XYZ under the space's own white -> linear RGB."""
    return _frozen(scipy.linalg.inv(rgb_to_xyz_matrix(space)))


@functools.lru_cache(maxsize=64)
def to_reference_matrix(space: LinearColorSpace) -> ArrayFloat:
    """Space coordinates -> reference XYZ (D65), adaptation included."""
    cat = adaptation_matrix(space.white, REFERENCE_WHITE)
    return _frozen(cat @ rgb_to_xyz_matrix(space))


@functools.lru_cache(maxsize=64)
def from_reference_matrix(space: LinearColorSpace) -> ArrayFloat:
    """Reference XYZ (D65) -> space coordinates; exact inverse of ``to_reference_matrix``."""
    return _frozen(scipy.linalg.inv(to_reference_matrix(space)))


@functools.lru_cache(maxsize=256)
def conversion_matrix(src: LinearColorSpace, dst: LinearColorSpace) -> Optional[ArrayFloat]:
    """
    Composed row-vector matrix for ``src`` -> ``dst``.

    Returns None when both spaces are equal, so callers can skip the
    multiply entirely rather than applying an identity matrix.
    """
    if src == dst:
        return None
    composed = from_reference_matrix(dst) @ to_reference_matrix(src)
    return _frozen(composed.T)


@handle_shapes
def transform(values: ArrayFloat, src: LinearColorSpace, dst: LinearColorSpace) -> ArrayFloat:
    """
    Converts (3,) or (N, 3) linear coordinates from ``src`` to ``dst``.

    Same-space calls return an unmodified copy.
    """
    m_t = conversion_matrix(src, dst)
    if m_t is None:
        return values.copy()
    out: ArrayFloat = np.dot(values, m_t)
    return out
