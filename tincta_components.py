# -*- coding: utf-8 -*-
"""
Tincta: Typed color encodings and exact conversions between them
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Component Storage
=================
Fixed-arity numeric tuples that hold raw channel values without any
meaning of their own.  Meaning is attached by an encoding (see
``tincta_encodings``); this module only defines the storage contract:

* channel count and order (red, green, blue, optional alpha / L, a, b),
* element type (``uint8`` or ``float32``),
* a packed binary layout (no padding, no reordering) used for zero-copy
  reinterpretation of raw buffers.
"""

import functools
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Final, NamedTuple, Tuple, Type, TypeAlias

import numpy as np
import numpy.typing as npt

__all__ = [
    # --- Type Aliases ---
    "ArrayFloat",
    "ArrayLike",

    # --- Decorators ---
    "handle_shapes",

    # --- Records ---
    "Rgb",
    "Rgba",
    "Lab",
    "AlphaState",

    # --- Layouts ---
    "ComponentLayout",
    "RGB_U8",
    "RGBA_U8",
    "RGB_F32",
    "RGBA_F32",
    "LAB_F32",
]

# --- Type Aliases ---
ArrayFloat: TypeAlias = npt.NDArray[np.floating[Any]]
ArrayLike: TypeAlias = npt.ArrayLike


# =============================================================================
# 1. ROBUST DECORATORS
# =============================================================================

def handle_shapes(func: Callable[..., ArrayFloat]) -> Callable[..., ArrayFloat]:
    """
    Decorator to normalize inputs to a contiguous float64 (N, 3) batch.

    Single triplets are treated as one-row batches internally, so kernels
    only ever see 2D input.

    Returns:
        The wrapped function with shape handling.
        - If input is (3,), returns (3,)
        - If input is (N, 3), returns (N, 3)
    """
    @functools.wraps(func)
    def wrapper(arr: ArrayLike, *args: Any, **kwargs: Any) -> ArrayFloat:
        arr_np = np.asarray(arr)
        arr_in = np.ascontiguousarray(np.atleast_2d(arr_np), dtype=np.float64)

        if arr_in.ndim != 2 or arr_in.shape[-1] != 3:
            raise ValueError(f"Expected shape (3,) or (N, 3), got {arr_np.shape}")

        res = func(arr_in, *args, **kwargs)

        if arr_np.ndim == 1:
            single: ArrayFloat = res[0]
            return single
        return res
    return wrapper


# =============================================================================
# 2. CHANNEL RECORDS
# =============================================================================

class Rgb(NamedTuple):
    """Red, green, blue."""
    r: float
    g: float
    b: float


class Rgba(NamedTuple):
    """Red, green, blue, alpha."""
    r: float
    g: float
    b: float
    a: float


class Lab(NamedTuple):
    """Lightness and two opponent chroma axes."""
    l: float
    a: float
    b: float


class AlphaState(Enum):
    """How (and whether) an encoding carries coverage."""
    NONE = "none"
    SEPARATE = "separate"
    PREMULTIPLIED = "premultiplied"


# =============================================================================
# 3. LAYOUTS
# =============================================================================

@dataclass(frozen=True, slots=True)
class ComponentLayout:
    """
    Storage contract for one family of colors.

    Attributes:
        name: Short identifier, e.g. ``"rgba_u8"``.
        record: NamedTuple type naming the channels in storage order.
        element: Numpy element type, ``uint8`` or ``float32``.
    """
    name: str
    record: Type[Tuple[Any, ...]]
    element: np.dtype[Any]

    @property
    def channels(self) -> Tuple[str, ...]:
        return tuple(self.record._fields)  # type: ignore[attr-defined]

    @property
    def arity(self) -> int:
        return len(self.channels)

    @property
    def has_alpha(self) -> bool:
        return self.channels[-1] == "a" and self.arity == 4

    @property
    def is_integer(self) -> bool:
        return self.element.kind == "u"

    @property
    def itemsize(self) -> int:
        """Bytes per color, equal to ``arity * element.itemsize``."""
        return self.arity * self.element.itemsize

    @property
    def record_dtype(self) -> np.dtype[Any]:
        """Packed structured dtype, one named field per channel."""
        return np.dtype([(c, self.element) for c in self.channels])

    def validate(self, values: ArrayLike) -> np.ndarray:
        """
        Checks raw channel values against this layout and returns a copy
        cast to the element type, shape ``(arity,)`` or ``(N, arity)``.

        Integer layouts only accept integral values inside the element
        range; silent wrap-around on cast is never allowed.

        Raises:
            ValueError: On wrong arity, non-numeric input, or values an
                integer element cannot represent.
        """
        arr = np.asarray(values)
        if arr.dtype.kind not in "iuf":
            raise ValueError(f"{self.name}: expected numeric channels, got dtype {arr.dtype}")
        if arr.ndim not in (1, 2) or arr.shape[-1] != self.arity:
            raise ValueError(
                f"{self.name}: expected {self.arity} channels {self.channels}, "
                f"got shape {arr.shape}"
            )
        if self.is_integer:
            info = np.iinfo(self.element)
            if arr.dtype.kind == "f" and not np.all(np.isfinite(arr) & (arr == np.round(arr))):
                raise ValueError(f"{self.name}: channel values must be integers")
            if arr.size and (arr.min() < info.min or arr.max() > info.max):
                raise ValueError(
                    f"{self.name}: channel values must lie in [{info.min}, {info.max}]"
                )
        return arr.astype(self.element)

    def view_buffer(self, buffer: Any) -> np.ndarray:
        """
        Reinterprets a raw buffer as an ``(N, arity)`` array without copying.

        Raises:
            ValueError: If the buffer size is not a whole number of colors.
        """
        nbytes = memoryview(buffer).nbytes
        if nbytes % self.itemsize:
            raise ValueError(
                f"{self.name}: buffer of {nbytes} bytes is not a multiple of "
                f"{self.itemsize}-byte colors"
            )
        return np.frombuffer(buffer, dtype=self.element).reshape(-1, self.arity)

    def view_records(self, buffer: Any) -> np.ndarray:
        """Reinterprets a raw buffer as a structured array with named channels."""
        return self.view_buffer(buffer).view(self.record_dtype).reshape(-1)


RGB_U8: Final[ComponentLayout] = ComponentLayout("rgb_u8", Rgb, np.dtype(np.uint8))
RGBA_U8: Final[ComponentLayout] = ComponentLayout("rgba_u8", Rgba, np.dtype(np.uint8))
RGB_F32: Final[ComponentLayout] = ComponentLayout("rgb_f32", Rgb, np.dtype(np.float32))
RGBA_F32: Final[ComponentLayout] = ComponentLayout("rgba_f32", Rgba, np.dtype(np.float32))
LAB_F32: Final[ComponentLayout] = ComponentLayout("lab_f32", Lab, np.dtype(np.float32))
