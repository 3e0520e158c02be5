# -*- coding: utf-8 -*-
"""
Tincta: Typed color encodings and exact conversions between them
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Transfer Functions
==================
Paired nonlinear encode / decode curves (OETF / EOTF) for display
encodings, plus the 8-bit quantisation policy.

Every curve in the catalog has the same piecewise shape::

    encode(x) = slope * x                              |x| <= linear_cutoff
              = sign(x) * (scale * |x|^(1/gamma) - offset)   otherwise

    decode(v) = v / slope                              |v| <= encoded_cutoff
              = sign(v) * ((|v| + offset) / scale)^gamma     otherwise

so one pair of kernels serves sRGB, Adobe RGB and ProPhoto RGB.  Mirroring
the power segment about zero makes both directions total over the real
line, which keeps out-of-gamut (negative) linear values invertible.

Quantisation to ``uint8`` rounds half away from zero and clamps to
[0, 255]; NaN is stored as 0.

References:
    - IEC 61966-2-1:1999 (sRGB Standard)
    - Adobe RGB (1998) Color Image Encoding, Version 2005-05
    - ISO 22028-2:2013 (ROMM RGB / ProPhoto)
"""

import math
from dataclasses import dataclass
from typing import Final

import numpy as np
from numba import njit, prange

import tincta_config
from tincta_components import ArrayFloat, ArrayLike, handle_shapes

__all__ = [
    "TransferFunction",
    "SRGB_TRANSFER",
    "ADOBE_RGB_TRANSFER",
    "PROPHOTO_TRANSFER",
    "quantize_u8",
    "dequantize_u8",
]


# =============================================================================
# 1. LOW-LEVEL MATH KERNELS (Numba Optimized)
# =============================================================================
# Rows are independent, so every kernel is a prange over the batch.
# Explicit loops avoid allocating boolean mask arrays for np.where.

@njit(cache=True, fastmath=True, parallel=True)
def _encode_kernel(linear: ArrayFloat, inv_gamma: float, scale: float, offset: float,
                   slope: float, cutoff: float) -> ArrayFloat:
    """Piecewise OETF over an (N, 3) batch."""
    n, m = linear.shape
    out = np.empty_like(linear)
    for i in prange(n):
        for j in range(m):
            v = linear[i, j]
            mag = abs(v)
            if mag <= cutoff:
                out[i, j] = slope * v
            else:
                enc = scale * mag ** inv_gamma - offset
                out[i, j] = -enc if v < 0.0 else enc
    return out

@njit(cache=True, fastmath=True, parallel=True)
def _decode_kernel(encoded: ArrayFloat, gamma: float, scale: float, offset: float,
                   inv_slope: float, cutoff: float) -> ArrayFloat:
    """Piecewise EOTF over an (N, 3) batch."""
    n, m = encoded.shape
    out = np.empty_like(encoded)
    for i in prange(n):
        for j in range(m):
            v = encoded[i, j]
            mag = abs(v)
            if mag <= cutoff:
                out[i, j] = v * inv_slope
            else:
                dec = ((mag + offset) / scale) ** gamma
                out[i, j] = -dec if v < 0.0 else dec
    return out


# --- Strict IEEE 754 kernel variants (fastmath=False) ---
# Used while tincta_config reports strict mode (the default).  They guarantee
# inf/NaN propagation and no floating-point reassociation.

@njit(cache=True, fastmath=False, parallel=True)
def _encode_kernel_strict(linear: ArrayFloat, inv_gamma: float, scale: float, offset: float,
                          slope: float, cutoff: float) -> ArrayFloat:
    """Piecewise OETF, strict IEEE 754 variant."""
    n, m = linear.shape
    out = np.empty_like(linear)
    for i in prange(n):
        for j in range(m):
            v = linear[i, j]
            mag = abs(v)
            if mag <= cutoff:
                out[i, j] = slope * v
            else:
                enc = scale * mag ** inv_gamma - offset
                out[i, j] = -enc if v < 0.0 else enc
    return out

@njit(cache=True, fastmath=False, parallel=True)
def _decode_kernel_strict(encoded: ArrayFloat, gamma: float, scale: float, offset: float,
                          inv_slope: float, cutoff: float) -> ArrayFloat:
    """Piecewise EOTF, strict IEEE 754 variant."""
    n, m = encoded.shape
    out = np.empty_like(encoded)
    for i in prange(n):
        for j in range(m):
            v = encoded[i, j]
            mag = abs(v)
            if mag <= cutoff:
                out[i, j] = v * inv_slope
            else:
                dec = ((mag + offset) / scale) ** gamma
                out[i, j] = -dec if v < 0.0 else dec
    return out

@njit(cache=True, parallel=True)
def _quantize_u8_kernel(values: ArrayFloat) -> np.ndarray:
    """
    Clamp to [0, 1], scale to [0, 255], round half away from zero.

    ``not v > 0.0`` catches NaN together with non-positive input.
    """
    n, m = values.shape
    out = np.empty((n, m), dtype=np.uint8)
    for i in prange(n):
        for j in range(m):
            v = values[i, j]
            if v >= 1.0:
                out[i, j] = 255
            elif not v > 0.0:
                out[i, j] = 0
            else:
                out[i, j] = np.uint8(math.floor(v * 255.0 + 0.5))
    return out


# =============================================================================
# 2. TRANSFER FUNCTION DESCRIPTORS
# =============================================================================

@dataclass(frozen=True, slots=True)
class TransferFunction:
    """
    Coefficients of one piecewise encode / decode pair.

    Attributes:
        name: Identifier used in diagnostics.
        gamma: Exponent of the decode power segment.
        scale: Multiplier of the encode power segment.
        offset: Subtracted after scaling in the encode power segment.
        slope: Slope of the linear toe; 0 for a pure power curve.
        linear_cutoff: Linear-light threshold of the toe.
        encoded_cutoff: Encoded-domain threshold of the toe.
    """
    name: str
    gamma: float
    scale: float = 1.0
    offset: float = 0.0
    slope: float = 0.0
    linear_cutoff: float = 0.0
    encoded_cutoff: float = 0.0

    def encode(self, linear: ArrayLike) -> ArrayFloat:
        """
        Applies the OETF channel-wise to (3,) or (N, 3) linear values.

        Alpha is never passed through a transfer curve; strip it first.
        """
        return _encode(linear, self)

    def decode(self, encoded: ArrayLike) -> ArrayFloat:
        """Applies the EOTF channel-wise to (3,) or (N, 3) encoded values."""
        return _decode(encoded, self)

    def encode_rows(self, linear: ArrayFloat) -> ArrayFloat:
        """Raw fast path: contiguous float64 (N, 3) in, (N, 3) out."""
        kernel = _encode_kernel_strict if tincta_config.is_strict_ieee() else _encode_kernel
        out: ArrayFloat = kernel(linear, 1.0 / self.gamma, self.scale, self.offset,
                                 self.slope, self.linear_cutoff)
        return out

    def decode_rows(self, encoded: ArrayFloat) -> ArrayFloat:
        """Raw fast path: contiguous float64 (N, 3) in, (N, 3) out."""
        inv_slope = 1.0 / self.slope if self.slope else 0.0
        kernel = _decode_kernel_strict if tincta_config.is_strict_ieee() else _decode_kernel
        out: ArrayFloat = kernel(encoded, self.gamma, self.scale, self.offset,
                                 inv_slope, self.encoded_cutoff)
        return out


@handle_shapes
def _encode(linear: ArrayFloat, tf: TransferFunction) -> ArrayFloat:
    return tf.encode_rows(linear)

@handle_shapes
def _decode(encoded: ArrayFloat, tf: TransferFunction) -> ArrayFloat:
    return tf.decode_rows(encoded)


# IEC 61966-2-1 defines the toe slope as exactly 12.92.
SRGB_TRANSFER: Final[TransferFunction] = TransferFunction(
    name="sRGB",
    gamma=2.4,
    scale=1.055,
    offset=0.055,
    slope=12.92,
    linear_cutoff=0.0031308,
    encoded_cutoff=0.04045,
)

# Adobe RGB (1998): pure power law, gamma 2 51/256.
ADOBE_RGB_TRANSFER: Final[TransferFunction] = TransferFunction(
    name="Adobe RGB (1998)",
    gamma=563.0 / 256.0,
)

# ROMM RGB: linear toe of slope 16 below 1/512.
PROPHOTO_TRANSFER: Final[TransferFunction] = TransferFunction(
    name="ProPhoto RGB",
    gamma=1.8,
    slope=16.0,
    linear_cutoff=1.0 / 512.0,
    encoded_cutoff=16.0 / 512.0,
)


# =============================================================================
# 3. QUANTISATION
# =============================================================================

def quantize_u8(values: ArrayLike) -> np.ndarray:
    """
    Converts normalised floats to ``uint8`` storage.

    Rounds half away from zero (127.5 -> 128, 206.5 -> 207), clamps to
    [0, 255] and maps NaN to 0.  Accepts any 1D or 2D shape.
    """
    arr = np.asarray(values, dtype=np.float64)
    rows = np.ascontiguousarray(arr.reshape(-1, arr.shape[-1]) if arr.ndim else arr.reshape(1, 1))
    out: np.ndarray = _quantize_u8_kernel(rows)
    return out.reshape(arr.shape)

def dequantize_u8(values: ArrayLike) -> ArrayFloat:
    """Maps ``uint8`` storage to normalised float64 (``value / 255``)."""
    return np.asarray(values, dtype=np.float64) / 255.0
