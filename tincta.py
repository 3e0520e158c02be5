# -*- coding: utf-8 -*-
"""
Tincta: Typed color encodings and exact conversions between them
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Public API
==========
Single import point for the library::

    import tincta as tc

    base = tc.SrgbU8(102, 54, 220).convert(tc.LinearSrgb)
    lit = base * 0.5 + tc.SrgbF32(0.5, 0.8, 0.1).convert(tc.LinearSrgb)
    lit.convert(tc.SrgbU8)                        # SrgbU8(r=144, g=207, b=163)

    pixels = np.zeros((1024, 3), dtype=np.uint8)
    linear = tc.convert_array(pixels, tc.SrgbU8, tc.LinearSrgb)   # bulk path

Module map:
    tincta_components   storage layouts, channel records, alpha states
    tincta_transfer     OETF / EOTF pairs and 8-bit quantisation
    tincta_spaces       primaries, white points, cached matrices
    tincta_perceptual   Oklab
    tincta_encodings    the closed encoding catalog
    tincta_convert      conversion plans and the bulk path
    tincta_color        tagged color classes
    tincta_custom       runtime-defined linear spaces
    tincta_config       strict IEEE / thread-pool switches
"""

from __about__ import __version__, metadata_summary
from tincta_color import (
    Aces2065,
    AcesCg,
    AdobeRgbU8,
    AlphaCompositingColor,
    Color,
    LabChannels,
    LinearAdobeRgb,
    LinearBt2020,
    LinearDisplayP3,
    LinearProPhotoRgb,
    LinearRgbColor,
    LinearSrgb,
    LinearSrgba,
    LinearSrgbaPremultiplied,
    Oklab,
    PerceptualColor,
    ProPhotoRgbU8,
    RgbaChannels,
    RgbChannels,
    SrgbaF32,
    SrgbaPremultipliedU8,
    SrgbaU8,
    SrgbF32,
    SrgbU8,
    WorkingColor,
    convert,
)
from tincta_components import AlphaState, ComponentLayout, Lab, Rgb, Rgba
from tincta_config import get_num_threads, is_strict_ieee, set_num_threads, set_strict_ieee
from tincta_convert import ConversionPlan, conversion_plan, convert_array
from tincta_custom import (
    DynamicColor,
    custom_space,
    from_custom,
    from_primaries_and_white_point,
    from_primaries_d50,
    from_primaries_d65,
    from_xyz,
    to_custom_rgb,
    to_xyz,
)
from tincta_encodings import ENCODINGS, ColorEncoding
from tincta_perceptual import oklab_to_xyz, xyz_to_oklab
from tincta_spaces import (
    ACES_2065,
    ACES_CG,
    ADOBE_RGB,
    BT2020,
    CIE_XYZ,
    D50,
    D65,
    DISPLAY_P3,
    PROPHOTO_RGB,
    SRGB,
    LinearColorSpace,
    RgbPrimaries,
    WhitePoint,
)
from tincta_transfer import (
    ADOBE_RGB_TRANSFER,
    PROPHOTO_TRANSFER,
    SRGB_TRANSFER,
    TransferFunction,
    dequantize_u8,
    quantize_u8,
)

__all__ = [
    "__version__",
    "metadata_summary",
    # --- Colors ---
    "Color",
    "WorkingColor",
    "LinearRgbColor",
    "PerceptualColor",
    "AlphaCompositingColor",
    "RgbChannels",
    "RgbaChannels",
    "LabChannels",
    "SrgbU8",
    "SrgbF32",
    "SrgbaU8",
    "SrgbaF32",
    "SrgbaPremultipliedU8",
    "AdobeRgbU8",
    "ProPhotoRgbU8",
    "LinearSrgb",
    "LinearSrgba",
    "LinearSrgbaPremultiplied",
    "Oklab",
    "LinearAdobeRgb",
    "LinearProPhotoRgb",
    "LinearDisplayP3",
    "AcesCg",
    "Aces2065",
    "LinearBt2020",
    # --- Conversion ---
    "convert",
    "convert_array",
    "conversion_plan",
    "ConversionPlan",
    # --- Catalog ---
    "ColorEncoding",
    "ENCODINGS",
    "AlphaState",
    "ComponentLayout",
    "Rgb",
    "Rgba",
    "Lab",
    # --- Spaces ---
    "LinearColorSpace",
    "RgbPrimaries",
    "WhitePoint",
    "D65",
    "D50",
    "SRGB",
    "DISPLAY_P3",
    "ADOBE_RGB",
    "PROPHOTO_RGB",
    "ACES_CG",
    "ACES_2065",
    "BT2020",
    "CIE_XYZ",
    "xyz_to_oklab",
    "oklab_to_xyz",
    # --- Transfer ---
    "TransferFunction",
    "SRGB_TRANSFER",
    "ADOBE_RGB_TRANSFER",
    "PROPHOTO_TRANSFER",
    "quantize_u8",
    "dequantize_u8",
    # --- Custom spaces ---
    "DynamicColor",
    "custom_space",
    "from_primaries_d65",
    "from_primaries_d50",
    "from_primaries_and_white_point",
    "from_custom",
    "to_custom_rgb",
    "to_xyz",
    "from_xyz",
    # --- Configuration ---
    "set_strict_ieee",
    "is_strict_ieee",
    "set_num_threads",
    "get_num_threads",
]
