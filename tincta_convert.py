# -*- coding: utf-8 -*-
"""
Tincta: Typed color encodings and exact conversions between them
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Conversion Dispatcher
=====================
Resolves and executes the pipeline between any two catalog encodings::

    upcast -> decode -> alpha normalise -> space transform -> encode -> downcast

Each stage is skipped when it does not apply.  The decisions are made once
per ordered pair at import time and stored in ``CONVERSION_TABLE``; a call
only looks up its plan and runs the stages it names.

Bulk path:
    ``convert_array`` works on (N, k) batches.  Element-wise stages run in
    Numba ``prange`` kernels, the space transform is a single BLAS
    ``np.dot`` against the pre-transposed composed matrix.  The single
    value path (``Color.convert``) is the same code with N = 1.

Edge-case policies:
    - Identity conversion returns an exact copy.
    - Source and target sharing transfer, space and premultiply state skip
      decode / encode and only change the element type.
    - Un-premultiplying a color with alpha == 0 yields channels of 0.
    - Integer downcast clamps and rounds half away from zero.
    - NaN / inf propagate through the float stages.
"""

import logging
from enum import Enum
from typing import Any, Dict, Final, NamedTuple, Optional, Tuple, Type, Union

import numpy as np
from numba import njit, prange

from tincta_components import ArrayFloat, ArrayLike
from tincta_encodings import ENCODINGS, ColorEncoding
from tincta_perceptual import PerceptualModel
from tincta_spaces import conversion_matrix
from tincta_transfer import TransferFunction, dequantize_u8, quantize_u8

__all__ = [
    "AlphaOp",
    "ConversionPlan",
    "CONVERSION_TABLE",
    "plan_conversion",
    "conversion_plan",
    "convert_rows",
    "convert_array",
    "decode_to_linear",
    "encode_linear",
]

_log = logging.getLogger(__name__)


# =============================================================================
# 1. ALPHA KERNELS
# =============================================================================

@njit(cache=True, parallel=True)
def _premultiply_kernel(color: ArrayFloat, alpha: ArrayFloat) -> ArrayFloat:
    n = color.shape[0]
    out = np.empty_like(color)
    for i in prange(n):
        a = alpha[i]
        for j in range(3):
            out[i, j] = color[i, j] * a
    return out

@njit(cache=True, parallel=True)
def _unpremultiply_kernel(color: ArrayFloat, alpha: ArrayFloat) -> ArrayFloat:
    """Divides by alpha; alpha == 0 zero-fills instead of producing 0/0."""
    n = color.shape[0]
    out = np.empty_like(color)
    for i in prange(n):
        a = alpha[i]
        for j in range(3):
            if a == 0.0:
                out[i, j] = 0.0
            else:
                out[i, j] = color[i, j] / a
    return out


# =============================================================================
# 2. PLANS
# =============================================================================

class AlphaOp(Enum):
    NONE = 0
    PREMULTIPLY = 1
    UNPREMULTIPLY = 2


class ConversionPlan(NamedTuple):
    """
    Precomputed stage selection for one ordered encoding pair.

    A stage field of None means the stage is skipped.
    """
    source: ColorEncoding
    target: ColorEncoding
    identity: bool
    passthrough: bool
    decode: Optional[TransferFunction]
    from_perceptual: Optional[PerceptualModel]
    alpha_op: AlphaOp
    matrix_t: Optional[ArrayFloat]
    to_perceptual: Optional[PerceptualModel]
    encode: Optional[TransferFunction]


def _alpha_op(source: ColorEncoding, target: ColorEncoding) -> AlphaOp:
    # A source without alpha is opaque; premultiplying by 1 is a no-op.
    if not source.has_alpha or not target.has_alpha:
        return AlphaOp.NONE
    if source.is_premultiplied and not target.is_premultiplied:
        return AlphaOp.UNPREMULTIPLY
    if target.is_premultiplied and not source.is_premultiplied:
        return AlphaOp.PREMULTIPLY
    return AlphaOp.NONE


def plan_conversion(source: ColorEncoding, target: ColorEncoding) -> ConversionPlan:
    """Decides which stages the ``source`` -> ``target`` conversion needs."""
    identity = source is target
    alpha_op = _alpha_op(source, target)
    # Premultiplied alpha leaving the pipeline (RGBA -> RGB) is undone first,
    # so dropping the alpha channel leaves straight color.
    if source.is_premultiplied and not target.has_alpha:
        alpha_op = AlphaOp.UNPREMULTIPLY

    passthrough = (
        not identity
        and source.transfer == target.transfer
        and source.perceptual == target.perceptual
        and source.space == target.space
        and alpha_op is AlphaOp.NONE
    )
    if identity or passthrough:
        return ConversionPlan(source, target, identity, passthrough,
                              None, None, AlphaOp.NONE, None, None, None)

    return ConversionPlan(
        source=source,
        target=target,
        identity=False,
        passthrough=False,
        decode=source.transfer,
        from_perceptual=source.perceptual,
        alpha_op=alpha_op,
        matrix_t=conversion_matrix(source.linear_space, target.linear_space),
        to_perceptual=target.perceptual,
        encode=target.transfer,
    )


def _build_table() -> Dict[Tuple[ColorEncoding, ColorEncoding], ConversionPlan]:
    table = {(a, b): plan_conversion(a, b) for a in ENCODINGS for b in ENCODINGS}
    _log.debug("Built %d conversion plans over %d encodings", len(table), len(ENCODINGS))
    return table

CONVERSION_TABLE: Final[Dict[Tuple[ColorEncoding, ColorEncoding], ConversionPlan]] = _build_table()


def conversion_plan(source: ColorEncoding, target: ColorEncoding) -> ConversionPlan:
    """
    Looks up the precomputed plan for ``source`` -> ``target``.

    Raises:
        ValueError: If either encoding is not part of the catalog.
    """
    try:
        return CONVERSION_TABLE[(source, target)]
    except KeyError:
        raise ValueError(
            f"No conversion from {source!r} to {target!r}; "
            "both must be catalog encodings"
        ) from None


# =============================================================================
# 3. STAGES
# =============================================================================

def _to_float(rows: np.ndarray, encoding: ColorEncoding) -> ArrayFloat:
    """Upcast storage rows to float64."""
    if encoding.is_integer:
        return dequantize_u8(rows)
    return rows.astype(np.float64)

def _to_storage(rows: ArrayFloat, encoding: ColorEncoding) -> np.ndarray:
    """Downcast float64 rows to the encoding's element type."""
    if encoding.is_integer:
        return quantize_u8(rows)
    return rows.astype(encoding.element)

def decode_to_linear(rows: np.ndarray, encoding: ColorEncoding) -> Tuple[ArrayFloat, Optional[ArrayFloat]]:
    """
    Decodes storage rows of ``encoding`` into straight-alpha linear color.

    Returns:
        (N, 3) float64 color in ``encoding.linear_space`` and (N,) alpha,
        or None when the encoding has no alpha channel.
    """
    work = _to_float(rows, encoding)
    color = np.ascontiguousarray(work[:, :3])
    alpha = np.ascontiguousarray(work[:, 3]) if encoding.has_alpha else None
    if encoding.transfer is not None:
        color = encoding.transfer.decode_rows(color)
    elif encoding.perceptual is not None:
        color = encoding.perceptual.to_reference(color)
    if encoding.is_premultiplied and alpha is not None:
        color = _unpremultiply_kernel(color, alpha)
    return color, alpha

def encode_linear(linear: ArrayFloat, alpha: Optional[ArrayFloat],
                  encoding: ColorEncoding) -> np.ndarray:
    """
    Encodes straight-alpha linear color already expressed in
    ``encoding.space`` into storage rows of ``encoding``.

    Args:
        linear: (N, 3) float64 linear color.
        alpha: (N,) straight alpha, or None for opaque.
        encoding: Target encoding.

    Returns:
        (N, arity) array of the encoding's element type.
    """
    color = np.ascontiguousarray(linear, dtype=np.float64)
    if encoding.has_alpha:
        a = np.ones(color.shape[0]) if alpha is None else np.ascontiguousarray(alpha, dtype=np.float64)
        if encoding.is_premultiplied:
            color = _premultiply_kernel(color, a)
    if encoding.perceptual is not None:
        color = encoding.perceptual.from_reference(color)
    elif encoding.transfer is not None:
        color = encoding.transfer.encode_rows(color)
    if encoding.has_alpha:
        color = np.column_stack((color, a))
    return _to_storage(color, encoding)

def _run_plan(plan: ConversionPlan, rows: np.ndarray) -> np.ndarray:
    source, target = plan.source, plan.target
    if plan.identity:
        return rows.copy()

    work = _to_float(rows, source)
    if plan.passthrough:
        if target.has_alpha and not source.has_alpha:
            work = np.column_stack((work, np.ones(work.shape[0])))
        return _to_storage(work[:, :target.arity], target)

    color = np.ascontiguousarray(work[:, :3])
    alpha = np.ascontiguousarray(work[:, 3]) if source.has_alpha else None

    if plan.decode is not None:
        color = plan.decode.decode_rows(color)
    elif plan.from_perceptual is not None:
        color = plan.from_perceptual.to_reference(color)

    if alpha is not None:
        if plan.alpha_op is AlphaOp.UNPREMULTIPLY:
            color = _unpremultiply_kernel(color, alpha)
        elif plan.alpha_op is AlphaOp.PREMULTIPLY:
            color = _premultiply_kernel(color, alpha)

    if plan.matrix_t is not None:
        color = np.dot(color, plan.matrix_t)

    if plan.to_perceptual is not None:
        color = plan.to_perceptual.from_reference(color)
    elif plan.encode is not None:
        color = plan.encode.encode_rows(color)

    if target.has_alpha:
        a = np.ones(color.shape[0]) if alpha is None else alpha
        color = np.column_stack((color, a))
    return _to_storage(color, target)


# =============================================================================
# 4. PUBLIC API
# =============================================================================

EncodingLike = Union[ColorEncoding, Type[Any]]

def _resolve(encoding: EncodingLike) -> ColorEncoding:
    """Accepts an encoding or any class carrying an ``ENCODING`` attribute."""
    resolved = getattr(encoding, "ENCODING", encoding)
    if not isinstance(resolved, ColorEncoding):
        raise TypeError(f"Expected a ColorEncoding or Color class, got {encoding!r}")
    return resolved

def convert_rows(rows: np.ndarray, source: ColorEncoding, target: ColorEncoding) -> np.ndarray:
    """
    Raw fast path: (N, k) rows already in ``source``'s element type.

    No validation is performed; use ``convert_array`` for untrusted input.
    """
    return _run_plan(conversion_plan(source, target), rows)

def convert_array(values: ArrayLike, source: EncodingLike, target: EncodingLike) -> np.ndarray:
    """
    Converts raw channel values between two encodings.

    Args:
        values: (k,) or (N, k) channel values in ``source``'s layout, where
            k is the source arity.
        source: Source encoding or Color class.
        target: Target encoding or Color class.

    Returns:
        (k',) or (N, k') array in ``target``'s element type and arity.

    Raises:
        ValueError: If ``values`` does not fit the source layout.
    """
    src, dst = _resolve(source), _resolve(target)
    plan = conversion_plan(src, dst)
    arr = np.asarray(values)
    rows = np.ascontiguousarray(src.layout.validate(np.atleast_2d(arr)))
    out = _run_plan(plan, rows)
    if arr.ndim == 1:
        single: np.ndarray = out[0]
        return single
    return out
