# -*- coding: utf-8 -*-
"""
Tincta: Typed color encodings and exact conversions between them
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Color Encoding Catalog
======================
One descriptor per concrete encoding.  A descriptor binds a storage layout,
an optional transfer function, a linear space (or a perceptual model with
its own reference space), an alpha state and the "working" flag that
decides whether colors of the encoding may take part in arithmetic.

The catalog is closed: every encoding the library knows is declared here
and the conversion table is built over exactly this set at import time.

Naming:
    ``ENCODED_*``  display encodings (nonlinear and / or quantised)
    ``LINEAR_*``   working linear-light encodings
"""

from dataclasses import dataclass
from typing import Any, Final, Optional, Tuple

import numpy as np

from tincta_components import (
    LAB_F32,
    RGB_F32,
    RGB_U8,
    RGBA_F32,
    RGBA_U8,
    AlphaState,
    ComponentLayout,
)
from tincta_perceptual import OKLAB_MODEL, PerceptualModel
from tincta_spaces import (
    ACES_2065,
    ACES_CG,
    ADOBE_RGB,
    BT2020,
    DISPLAY_P3,
    PROPHOTO_RGB,
    SRGB,
    LinearColorSpace,
)
from tincta_transfer import (
    ADOBE_RGB_TRANSFER,
    PROPHOTO_TRANSFER,
    SRGB_TRANSFER,
    TransferFunction,
)

__all__ = [
    "ColorEncoding",
    "ENCODED_SRGB_U8",
    "ENCODED_SRGB_F32",
    "ENCODED_SRGBA_U8",
    "ENCODED_SRGBA_F32",
    "ENCODED_SRGBA_PREMULTIPLIED_U8",
    "LINEAR_SRGB",
    "LINEAR_SRGBA",
    "LINEAR_SRGBA_PREMULTIPLIED",
    "OKLAB",
    "LINEAR_ADOBE_RGB",
    "ENCODED_ADOBE_RGB_U8",
    "LINEAR_PROPHOTO_RGB",
    "ENCODED_PROPHOTO_RGB_U8",
    "LINEAR_DISPLAY_P3",
    "ACES_CG_LINEAR",
    "ACES_2065_LINEAR",
    "LINEAR_BT2020",
    "ENCODINGS",
]


@dataclass(frozen=True, slots=True, eq=False)
class ColorEncoding:
    """
    Descriptor of one concrete encoding.

    Encodings compare by identity: the catalog holds exactly one instance
    of each, and the conversion table is keyed by those instances.

    Attributes:
        name: Identifier, e.g. ``"srgb_u8"``.
        layout: Storage layout (channels + element type).
        space: Linear space the decoded values live in.  For perceptual
            encodings this is the model's reference space.
        transfer: Nonlinear curve applied on top of ``space``, if any.
        perceptual: Perceptual model applied on top of ``space``, if any.
        alpha: Alpha state; must agree with the layout.
        working: Whether arithmetic on the raw values is meaningful.

    Raises:
        ValueError: If the combination of attributes is inconsistent.
    """
    name: str
    layout: ComponentLayout
    space: Optional[LinearColorSpace]
    transfer: Optional[TransferFunction] = None
    perceptual: Optional[PerceptualModel] = None
    alpha: AlphaState = AlphaState.NONE
    working: bool = False

    def __post_init__(self) -> None:
        if self.space is None:
            if self.working:
                raise ValueError(f"{self.name}: a working encoding needs a linear space")
            raise ValueError(f"{self.name}: every catalog encoding needs a linear space")
        if self.working and self.layout.is_integer:
            raise ValueError(f"{self.name}: a working encoding needs floating-point storage")
        if self.working and self.transfer is not None:
            raise ValueError(f"{self.name}: a working encoding cannot carry a transfer function")
        if self.transfer is not None and self.perceptual is not None:
            raise ValueError(f"{self.name}: transfer function and perceptual model are exclusive")
        if self.perceptual is not None and self.perceptual.reference_space != self.space:
            raise ValueError(f"{self.name}: space must be the perceptual model's reference space")
        if self.layout.has_alpha != (self.alpha is not AlphaState.NONE):
            raise ValueError(
                f"{self.name}: alpha state {self.alpha.name} does not match layout {self.layout.name}"
            )

    @property
    def element(self) -> "np.dtype[Any]":
        return self.layout.element

    @property
    def arity(self) -> int:
        return self.layout.arity

    @property
    def has_alpha(self) -> bool:
        return self.alpha is not AlphaState.NONE

    @property
    def is_premultiplied(self) -> bool:
        return self.alpha is AlphaState.PREMULTIPLIED

    @property
    def is_integer(self) -> bool:
        return self.layout.is_integer

    @property
    def linear_space(self) -> LinearColorSpace:
        """
        Non-optional view of ``space``.

        Raises:
            ValueError: If the encoding carries no linear space.
        """
        if self.space is None:
            raise ValueError(f"{self.name}: no linear space")
        return self.space

    def __repr__(self) -> str:
        return f"ColorEncoding({self.name!r})"


# --- sRGB display encodings ---
ENCODED_SRGB_U8: Final[ColorEncoding] = ColorEncoding(
    "srgb_u8", RGB_U8, SRGB, transfer=SRGB_TRANSFER)
ENCODED_SRGB_F32: Final[ColorEncoding] = ColorEncoding(
    "srgb_f32", RGB_F32, SRGB, transfer=SRGB_TRANSFER)
ENCODED_SRGBA_U8: Final[ColorEncoding] = ColorEncoding(
    "srgba_u8", RGBA_U8, SRGB, transfer=SRGB_TRANSFER, alpha=AlphaState.SEPARATE)
ENCODED_SRGBA_F32: Final[ColorEncoding] = ColorEncoding(
    "srgba_f32", RGBA_F32, SRGB, transfer=SRGB_TRANSFER, alpha=AlphaState.SEPARATE)
# Premultiplication happens in linear light, before the curve is applied.
ENCODED_SRGBA_PREMULTIPLIED_U8: Final[ColorEncoding] = ColorEncoding(
    "srgba_premultiplied_u8", RGBA_U8, SRGB, transfer=SRGB_TRANSFER,
    alpha=AlphaState.PREMULTIPLIED)

# --- sRGB working encodings ---
LINEAR_SRGB: Final[ColorEncoding] = ColorEncoding(
    "linear_srgb", RGB_F32, SRGB, working=True)
LINEAR_SRGBA: Final[ColorEncoding] = ColorEncoding(
    "linear_srgba", RGBA_F32, SRGB, alpha=AlphaState.SEPARATE, working=True)
LINEAR_SRGBA_PREMULTIPLIED: Final[ColorEncoding] = ColorEncoding(
    "linear_srgba_premultiplied", RGBA_F32, SRGB, alpha=AlphaState.PREMULTIPLIED,
    working=True)

# --- Perceptual ---
OKLAB: Final[ColorEncoding] = ColorEncoding(
    "oklab", LAB_F32, OKLAB_MODEL.reference_space, perceptual=OKLAB_MODEL, working=True)

# --- Wide gamut and cinema ---
LINEAR_ADOBE_RGB: Final[ColorEncoding] = ColorEncoding(
    "linear_adobe_rgb", RGB_F32, ADOBE_RGB, working=True)
ENCODED_ADOBE_RGB_U8: Final[ColorEncoding] = ColorEncoding(
    "adobe_rgb_u8", RGB_U8, ADOBE_RGB, transfer=ADOBE_RGB_TRANSFER)
LINEAR_PROPHOTO_RGB: Final[ColorEncoding] = ColorEncoding(
    "linear_prophoto_rgb", RGB_F32, PROPHOTO_RGB, working=True)
ENCODED_PROPHOTO_RGB_U8: Final[ColorEncoding] = ColorEncoding(
    "prophoto_rgb_u8", RGB_U8, PROPHOTO_RGB, transfer=PROPHOTO_TRANSFER)
LINEAR_DISPLAY_P3: Final[ColorEncoding] = ColorEncoding(
    "linear_display_p3", RGB_F32, DISPLAY_P3, working=True)
ACES_CG_LINEAR: Final[ColorEncoding] = ColorEncoding(
    "acescg", RGB_F32, ACES_CG, working=True)
ACES_2065_LINEAR: Final[ColorEncoding] = ColorEncoding(
    "aces2065", RGB_F32, ACES_2065, working=True)
LINEAR_BT2020: Final[ColorEncoding] = ColorEncoding(
    "linear_bt2020", RGB_F32, BT2020, working=True)


ENCODINGS: Final[Tuple[ColorEncoding, ...]] = (
    ENCODED_SRGB_U8,
    ENCODED_SRGB_F32,
    ENCODED_SRGBA_U8,
    ENCODED_SRGBA_F32,
    ENCODED_SRGBA_PREMULTIPLIED_U8,
    LINEAR_SRGB,
    LINEAR_SRGBA,
    LINEAR_SRGBA_PREMULTIPLIED,
    OKLAB,
    LINEAR_ADOBE_RGB,
    ENCODED_ADOBE_RGB_U8,
    LINEAR_PROPHOTO_RGB,
    ENCODED_PROPHOTO_RGB_U8,
    LINEAR_DISPLAY_P3,
    ACES_CG_LINEAR,
    ACES_2065_LINEAR,
    LINEAR_BT2020,
)
