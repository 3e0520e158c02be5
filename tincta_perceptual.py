# -*- coding: utf-8 -*-
"""
Tincta: Typed color encodings and exact conversions between them
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Perceptual Space (Oklab)
========================
Oklab sits on top of CIE XYZ (D65) through two fixed matrix stages with a
cube-root compression in between::

    XYZ --M1--> LMS --cbrt--> LMS' --M2--> Lab

Because the nonlinearity is sandwiched between the matrices, Oklab cannot
be expressed as a ``LinearColorSpace``; it is its own self-contained pair
of functions, plugged into the conversion dispatcher through a
``PerceptualModel`` descriptor.

Inverse matrices are computed once with ``scipy.linalg.inv`` so that the
forward / inverse pair round-trips to machine precision.

References:
    - Ottosson, B. (2020). "A perceptual color space for image processing."
"""

from dataclasses import dataclass
from typing import Callable, Final

import numpy as np
import scipy.linalg

from tincta_components import ArrayFloat, handle_shapes
from tincta_spaces import CIE_XYZ, LinearColorSpace

__all__ = [
    "M1_XYZ_TO_LMS_OKLAB_T",
    "M1_LMS_TO_XYZ_OKLAB_T",
    "M2_LMS_TO_LAB_OKLAB_T",
    "M2_LAB_TO_LMS_OKLAB_T",
    "PerceptualModel",
    "OKLAB_MODEL",
    "xyz_to_oklab",
    "oklab_to_xyz",
]

# --- Pre-Transposed Matrices (row-vector batches) ---

# M1: XYZ to Cone Response (LMS)
_M1_XYZ_TO_LMS_OKLAB = np.array([
    [0.8189330101, 0.3618667424, -0.1288597137],
    [0.0329845436, 0.9293118715, 0.0361456387],
    [0.0482003018, 0.2643662691, 0.6338517070]
], dtype=np.float64)
M1_XYZ_TO_LMS_OKLAB_T: Final[ArrayFloat] = _M1_XYZ_TO_LMS_OKLAB.T.copy()
M1_LMS_TO_XYZ_OKLAB_T: Final[ArrayFloat] = scipy.linalg.inv(_M1_XYZ_TO_LMS_OKLAB).T.copy()

# M2: LMS (cube-rooted) to Oklab
_M2_LMS_TO_LAB_OKLAB = np.array([
    [0.2104542553, 0.7936177850, -0.0040720468],
    [1.9779984951, -2.4285922050, 0.4505937099],
    [0.0259040371, 0.7827717662, -0.8086757660]
], dtype=np.float64)
M2_LMS_TO_LAB_OKLAB_T: Final[ArrayFloat] = _M2_LMS_TO_LAB_OKLAB.T.copy()
M2_LAB_TO_LMS_OKLAB_T: Final[ArrayFloat] = scipy.linalg.inv(_M2_LMS_TO_LAB_OKLAB).T.copy()


def _xyz_to_oklab_rows(xyz: ArrayFloat) -> ArrayFloat:
    """Raw fast path, contiguous float64 (N, 3)."""
    lms = np.dot(xyz, M1_XYZ_TO_LMS_OKLAB_T)
    # np.cbrt keeps the sign, so out-of-gamut (negative) LMS stays invertible
    lms_p = np.cbrt(lms)
    lab: ArrayFloat = np.dot(lms_p, M2_LMS_TO_LAB_OKLAB_T)
    return lab

def _oklab_to_xyz_rows(lab: ArrayFloat) -> ArrayFloat:
    """Raw fast path, contiguous float64 (N, 3)."""
    lms_p = np.dot(lab, M2_LAB_TO_LMS_OKLAB_T)
    lms = lms_p * lms_p * lms_p
    xyz: ArrayFloat = np.dot(lms, M1_LMS_TO_XYZ_OKLAB_T)
    return xyz

@handle_shapes
def xyz_to_oklab(xyz: ArrayFloat) -> ArrayFloat:
    """
    Converts CIE XYZ (D65, Y = 1 for white) to Oklab.

    Args:
        xyz: (3,) or (N, 3) XYZ values.

    Returns:
        Oklab (L, a, b) with L = 1 for the reference white.
    """
    return _xyz_to_oklab_rows(xyz)

@handle_shapes
def oklab_to_xyz(lab: ArrayFloat) -> ArrayFloat:
    """Exact inverse of ``xyz_to_oklab``."""
    return _oklab_to_xyz_rows(lab)


@dataclass(frozen=True, slots=True)
class PerceptualModel:
    """
    A nonlinear perceptual space anchored to a linear reference space.

    Attributes:
        name: Display label.
        reference_space: Linear space the model is defined against.
        from_reference: Raw (N, 3) reference -> perceptual function.
        to_reference: Raw (N, 3) perceptual -> reference function.
    """
    name: str
    reference_space: LinearColorSpace
    from_reference: Callable[[ArrayFloat], ArrayFloat]
    to_reference: Callable[[ArrayFloat], ArrayFloat]

    def __str__(self) -> str:
        return self.name


OKLAB_MODEL: Final[PerceptualModel] = PerceptualModel(
    name="Oklab",
    reference_space=CIE_XYZ,
    from_reference=_xyz_to_oklab_rows,
    to_reference=_oklab_to_xyz_rows,
)
