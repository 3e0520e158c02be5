# -*- coding: utf-8 -*-
"""
Tincta: Typed color encodings and exact conversions between them
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Tagged Color Values
===================
A color is raw component storage plus an encoding tag.  The tag is the
class: ``SrgbU8(255, 0, 0)`` and ``LinearSrgb(1.0, 0.0, 0.0)`` are
different types, and moving between them always goes through an explicit
``convert`` call.

Arithmetic is a capability of working encodings only.  The operators and
blend methods live on ``WorkingColor`` and its subclasses; display classes
such as ``SrgbU8`` never define them, so a type checker rejects
``SrgbU8(...) + SrgbU8(...)`` statically and the interpreter raises
``TypeError`` at runtime.  Each concrete class is checked against its
encoding's working flag when the class is defined.

Example:
    >>> c = SrgbU8(102, 54, 220).convert(LinearSrgb) * 0.5
    >>> (c + SrgbF32(0.5, 0.8, 0.1).convert(LinearSrgb)).convert(SrgbU8)
    SrgbU8(r=144, g=207, b=163)
"""

import json
from typing import Any, ClassVar, Iterator, List, Optional, Sequence, Tuple, Type, TypeVar, Union

import numpy as np

from tincta_components import ArrayLike
from tincta_convert import convert_rows
from tincta_encodings import (
    ACES_2065_LINEAR,
    ACES_CG_LINEAR,
    ENCODED_ADOBE_RGB_U8,
    ENCODED_PROPHOTO_RGB_U8,
    ENCODED_SRGB_F32,
    ENCODED_SRGB_U8,
    ENCODED_SRGBA_F32,
    ENCODED_SRGBA_PREMULTIPLIED_U8,
    ENCODED_SRGBA_U8,
    LINEAR_ADOBE_RGB,
    LINEAR_BT2020,
    LINEAR_DISPLAY_P3,
    LINEAR_PROPHOTO_RGB,
    LINEAR_SRGB,
    LINEAR_SRGBA,
    LINEAR_SRGBA_PREMULTIPLIED,
    OKLAB,
    ColorEncoding,
)

__all__ = [
    # --- Bases ---
    "Color",
    "WorkingColor",
    "LinearRgbColor",
    "PerceptualColor",
    "AlphaCompositingColor",
    "RgbChannels",
    "RgbaChannels",
    "LabChannels",
    "convert",

    # --- Display encodings ---
    "SrgbU8",
    "SrgbF32",
    "SrgbaU8",
    "SrgbaF32",
    "SrgbaPremultipliedU8",
    "AdobeRgbU8",
    "ProPhotoRgbU8",

    # --- Working encodings ---
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
]

C = TypeVar("C", bound="Color")
W = TypeVar("W", bound="WorkingColor")
A = TypeVar("A", bound="AlphaCompositingColor")

Operand = Union[float, Sequence[float], np.ndarray]


# =============================================================================
# 1. BASE VALUE TYPE
# =============================================================================

class Color:
    """
    Immutable color value tagged with a catalog encoding.

    Construct from raw channel values in the encoding's native layout::

        SrgbU8(255, 128, 0)
        LinearSrgba(1.0, 0.5, 0.0, 0.25)
        Oklab(0.63, 0.22, 0.13)

    Channels are readable by name (``c.r``, ``c.a``, ``c.l``) and as a
    NamedTuple via ``components``.

    Raises:
        ValueError: On wrong arity, or integer channels that are not
            integral or outside [0, 255].
    """

    __slots__ = ("_data",)

    ENCODING: ClassVar[ColorEncoding]

    # numpy scalars defer to our reflected operators instead of iterating us
    __array_ufunc__ = None

    _data: np.ndarray

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        encoding = cls.__dict__.get("ENCODING")
        if encoding is None:
            return
        if encoding.working != issubclass(cls, WorkingColor):
            kind = "working" if encoding.working else "display"
            raise TypeError(
                f"{cls.__name__}: {kind} encoding {encoding.name!r} must "
                f"{'' if encoding.working else 'not '}derive from WorkingColor"
            )

    def __init__(self, *components: float) -> None:
        data = self.ENCODING.layout.validate(components)
        if data.ndim != 1:
            raise ValueError(f"{type(self).__name__} takes one value per channel")
        data.flags.writeable = False
        object.__setattr__(self, "_data", data)

    @classmethod
    def _wrap(cls: Type[C], data: np.ndarray) -> C:
        """Builds an instance from already-valid storage without checks."""
        obj = cls.__new__(cls)
        data = np.array(data, dtype=cls.ENCODING.element)
        data.flags.writeable = False
        object.__setattr__(obj, "_data", data)
        return obj

    # --- Channel access ---

    def _channel(self, index: int) -> float:
        value: float = self._data[index].item()
        return value

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def components(self) -> Tuple[Any, ...]:
        """Channels as the layout's NamedTuple (``Rgb``, ``Rgba`` or ``Lab``)."""
        return self.ENCODING.layout.record(*self._data.tolist())

    def __iter__(self) -> Iterator[Any]:
        return iter(self.to_list())

    def __len__(self) -> int:
        return self.ENCODING.arity

    # --- Value semantics ---

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return bool(np.array_equal(self._data, other._data))

    def __hash__(self) -> int:
        # + 0 folds -0.0 into 0.0 so equal floats hash equally
        return hash((type(self).__name__, (self._data + self._data.dtype.type(0)).tobytes()))

    def isclose(self: C, other: C, rel_tol: float = 1e-5, abs_tol: float = 1e-6) -> bool:
        """Channel-wise approximate equality against a color of the same encoding."""
        if type(other) is not type(self):
            raise TypeError(
                f"Cannot compare {type(self).__name__} with {type(other).__name__}; convert first"
            )
        return bool(np.allclose(self._data, other._data, rtol=rel_tol, atol=abs_tol))

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v!r}" for k, v in zip(self.ENCODING.layout.channels, self))
        return f"{type(self).__name__}({fields})"

    def __copy__(self: C) -> C:
        return self

    def __deepcopy__(self: C, memo: Any) -> C:
        return self

    def __reduce__(self) -> Tuple[Any, ...]:
        return (type(self), tuple(self._data.tolist()))

    # --- Conversion ---

    def convert(self, target: Type[C]) -> C:
        """
        Converts to another encoding.

        Defined for every pair of catalog encodings, including display
        ones; only arithmetic requires a working encoding.
        """
        rows = convert_rows(self._data[np.newaxis, :], self.ENCODING, target.ENCODING)
        return target._wrap(rows[0])

    # --- Serialization ---
    # The payload is the raw tuple in channel order; the encoding is
    # recovered from the class used to deserialize.

    def to_list(self) -> List[Any]:
        values: List[Any] = self._data.tolist()
        return values

    @classmethod
    def from_list(cls: Type[C], values: Sequence[float]) -> C:
        return cls(*values)

    def to_json(self) -> str:
        return json.dumps(self.to_list())

    @classmethod
    def from_json(cls: Type[C], payload: str) -> C:
        """
        Raises:
            ValueError: If the payload is not a JSON array of channel values.
        """
        values = json.loads(payload)
        if not isinstance(values, list):
            raise ValueError(f"{cls.__name__}: expected a JSON array, got {type(values).__name__}")
        return cls.from_list(values)

    def to_bytes(self) -> bytes:
        """Packed native-endian storage, ``ENCODING.layout.itemsize`` bytes."""
        return self._data.tobytes()

    @classmethod
    def from_bytes(cls: Type[C], buffer: Any) -> C:
        rows = cls.ENCODING.layout.view_buffer(buffer)
        if rows.shape[0] != 1:
            raise ValueError(
                f"{cls.__name__}: expected {cls.ENCODING.layout.itemsize} bytes, "
                f"got {rows.shape[0] * cls.ENCODING.layout.itemsize}"
            )
        return cls._wrap(rows[0])

    def to_array(self) -> np.ndarray:
        """Writable copy of the storage."""
        return self._data.copy()

    @classmethod
    def from_array(cls: Type[C], values: ArrayLike) -> C:
        return cls(*np.asarray(values).tolist())

    @classmethod
    def view_buffer(cls, buffer: Any) -> np.ndarray:
        """Zero-copy (N, arity) view of a raw buffer laid out as this encoding."""
        return cls.ENCODING.layout.view_buffer(buffer)


def convert(color: Color, target: Type[C]) -> C:
    """Free-function form of ``Color.convert``."""
    return color.convert(target)


# =============================================================================
# 2. CHANNEL ACCESS
# =============================================================================
# Named channels are per layout, so a checker sees ``c.a`` on RGBA and Lab
# colors only.

class RgbChannels(Color):
    __slots__ = ()

    @property
    def r(self) -> float:
        return self._channel(0)

    @property
    def g(self) -> float:
        return self._channel(1)

    @property
    def b(self) -> float:
        return self._channel(2)


class RgbaChannels(RgbChannels):
    __slots__ = ()

    @property
    def a(self) -> float:
        """Alpha; straight or premultiplied as the encoding states."""
        return self._channel(3)


class LabChannels(Color):
    __slots__ = ()

    @property
    def l(self) -> float:
        return self._channel(0)

    @property
    def a(self) -> float:
        return self._channel(1)

    @property
    def b(self) -> float:
        return self._channel(2)


# =============================================================================
# 3. CAPABILITIES
# =============================================================================

class WorkingColor(Color):
    """
    Color whose raw values are linear in light (or perceptually uniform)
    and may be combined arithmetically.

    ``+`` and ``-`` take a color of the same encoding.  ``*`` and ``/`` take
    a scalar or a per-channel sequence; ``*`` also takes a color of the same
    encoding (channel-wise product, e.g. light times albedo).
    """

    __slots__ = ()

    def _operand(self, other: Any) -> Optional[np.ndarray]:
        if isinstance(other, Color):
            if type(other) is not type(self):
                return None
            return other._data
        if isinstance(other, (int, float, np.integer, np.floating)):
            return np.asarray(other, dtype=np.float32)
        try:
            arr = np.asarray(other, dtype=np.float32)
        except (TypeError, ValueError):
            return None
        if arr.shape != (self.ENCODING.arity,):
            raise ValueError(
                f"{type(self).__name__}: expected {self.ENCODING.arity} factors, got shape {arr.shape}"
            )
        return arr

    def __add__(self: W, other: W) -> W:
        if type(other) is not type(self):
            return NotImplemented
        return self._wrap(self._data + other._data)

    def __sub__(self: W, other: W) -> W:
        if type(other) is not type(self):
            return NotImplemented
        return self._wrap(self._data - other._data)

    def __mul__(self: W, other: Union[Operand, W]) -> W:
        factor = self._operand(other)
        if factor is None:
            return NotImplemented
        return self._wrap(self._data * factor)

    def __rmul__(self: W, other: Operand) -> W:
        return self.__mul__(other)

    def __truediv__(self: W, other: Operand) -> W:
        if isinstance(other, Color):
            return NotImplemented
        divisor = self._operand(other)
        if divisor is None:
            return NotImplemented
        return self._wrap(self._data / divisor)

    def __neg__(self: W) -> W:
        return self._wrap(-self._data)

    def lerp(self: W, other: W, factor: float) -> W:
        """Linear interpolation; ``factor`` 0 gives ``self``, 1 gives ``other``."""
        if type(other) is not type(self):
            raise TypeError(f"Cannot lerp {type(self).__name__} with {type(other).__name__}")
        t = np.float32(factor)
        return self._wrap(self._data + (other._data - self._data) * t)


class LinearRgbColor(WorkingColor):
    """Working color in a linear RGB space."""

    __slots__ = ()

    def saturate(self: W) -> W:
        """Clamps every channel to [0, 1]."""
        return self._wrap(np.clip(self._data, 0.0, 1.0))


class PerceptualColor(WorkingColor):
    """Working color in a perceptually uniform space."""

    __slots__ = ()

    def perceptual_blend(self: W, other: W, factor: float) -> W:
        """
        Interpolates in the perceptual space, giving even-looking steps.

        Equivalent to ``lerp`` here; the separate name states intent at the
        call site.
        """
        return self.lerp(other, factor)


class AlphaCompositingColor(LinearRgbColor):
    """Linear RGBA color supporting Porter-Duff "over" compositing."""

    __slots__ = ()

    def alpha_over(self: A, under: A) -> A:
        """
        Composites ``self`` over ``under``.

        Computed in premultiplied linear sRGB as
        ``over + under * (1 - over.a)`` and converted back to this encoding.
        """
        if type(under) is not type(self):
            raise TypeError(f"Cannot composite {type(self).__name__} over {type(under).__name__}")
        over_p = self.convert(LinearSrgbaPremultiplied)._data
        under_p = under.convert(LinearSrgbaPremultiplied)._data
        comp = over_p + under_p * (np.float32(1.0) - over_p[3])
        return LinearSrgbaPremultiplied._wrap(comp).convert(type(self))


# =============================================================================
# 4. DISPLAY ENCODINGS
# =============================================================================

class SrgbU8(RgbChannels):
    """sRGB with the OETF applied, 8 bits per channel; what "hex colors" mean."""

    __slots__ = ()
    ENCODING: ClassVar[ColorEncoding] = ENCODED_SRGB_U8

    @classmethod
    def from_hex(cls, hex_color: str) -> "SrgbU8":
        """
        Parses ``"#RRGGBB"`` or ``"RRGGBB"``.

        Raises:
            ValueError: If the string is not six hex digits.
        """
        digits = hex_color.lstrip("#")
        if len(digits) != 6:
            raise ValueError(f"Expected 6 hex digits, got {hex_color!r}")
        return cls(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))

    def to_hex(self) -> str:
        r, g, b = self._data.tolist()
        return f"#{r:02X}{g:02X}{b:02X}"


class SrgbF32(RgbChannels):
    """sRGB with the OETF applied, stored as float32 in [0, 1]."""

    __slots__ = ()
    ENCODING: ClassVar[ColorEncoding] = ENCODED_SRGB_F32


class SrgbaU8(RgbaChannels):
    """
    sRGB with a separate, linearly stored alpha, 8 bits per channel.

    The OETF is applied to the color channels only.
    """

    __slots__ = ()
    ENCODING: ClassVar[ColorEncoding] = ENCODED_SRGBA_U8

    @classmethod
    def from_hex(cls, hex_color: str) -> "SrgbaU8":
        """Parses ``"#RRGGBBAA"`` or ``"#RRGGBB"`` (opaque)."""
        digits = hex_color.lstrip("#")
        if len(digits) == 6:
            digits += "FF"
        if len(digits) != 8:
            raise ValueError(f"Expected 6 or 8 hex digits, got {hex_color!r}")
        return cls(*(int(digits[i:i + 2], 16) for i in range(0, 8, 2)))

    def to_hex(self) -> str:
        r, g, b, a = self._data.tolist()
        return f"#{r:02X}{g:02X}{b:02X}{a:02X}"


class SrgbaF32(RgbaChannels):
    """sRGB with separate alpha, stored as float32."""

    __slots__ = ()
    ENCODING: ClassVar[ColorEncoding] = ENCODED_SRGBA_F32


class SrgbaPremultipliedU8(RgbaChannels):
    """
    sRGB with premultiplied alpha, 8 bits per channel.

    Color channels are multiplied by alpha in linear light and then
    encoded; a common texture upload format.
    """

    __slots__ = ()
    ENCODING: ClassVar[ColorEncoding] = ENCODED_SRGBA_PREMULTIPLIED_U8

    def alpha_over(self, under: "SrgbaPremultipliedU8") -> "SrgbaPremultipliedU8":
        """
        Composites ``self`` over ``under``.

        The stored bytes are never combined directly; both sides are
        decoded to ``LinearSrgbaPremultiplied``, composited there and
        encoded back.  The class stays a display encoding without
        arithmetic.
        """
        if type(under) is not type(self):
            raise TypeError(f"Cannot composite {type(self).__name__} over {type(under).__name__}")
        over = self.convert(LinearSrgbaPremultiplied)
        return over.alpha_over(under.convert(LinearSrgbaPremultiplied)).convert(SrgbaPremultipliedU8)


class AdobeRgbU8(RgbChannels):
    """Adobe RGB (1998), gamma encoded, 8 bits per channel."""

    __slots__ = ()
    ENCODING: ClassVar[ColorEncoding] = ENCODED_ADOBE_RGB_U8


class ProPhotoRgbU8(RgbChannels):
    """ProPhoto (ROMM) RGB, gamma encoded, 8 bits per channel."""

    __slots__ = ()
    ENCODING: ClassVar[ColorEncoding] = ENCODED_PROPHOTO_RGB_U8


# =============================================================================
# 5. WORKING ENCODINGS
# =============================================================================

class LinearSrgb(LinearRgbColor, RgbChannels):
    """Linear-light sRGB (BT.709 primaries, D65)."""

    __slots__ = ()
    ENCODING: ClassVar[ColorEncoding] = LINEAR_SRGB


class LinearSrgba(AlphaCompositingColor, RgbaChannels):
    """Linear-light sRGB with separate alpha."""

    __slots__ = ()
    ENCODING: ClassVar[ColorEncoding] = LINEAR_SRGBA


class LinearSrgbaPremultiplied(AlphaCompositingColor, RgbaChannels):
    """Linear-light sRGB with premultiplied alpha."""

    __slots__ = ()
    ENCODING: ClassVar[ColorEncoding] = LINEAR_SRGBA_PREMULTIPLIED


class Oklab(PerceptualColor, LabChannels):
    """Oklab (L, a, b), float32."""

    __slots__ = ()
    ENCODING: ClassVar[ColorEncoding] = OKLAB


class LinearAdobeRgb(LinearRgbColor, RgbChannels):
    __slots__ = ()
    ENCODING: ClassVar[ColorEncoding] = LINEAR_ADOBE_RGB


class LinearProPhotoRgb(LinearRgbColor, RgbChannels):
    """Linear ProPhoto RGB; D50 white, adapted to D65 on conversion."""

    __slots__ = ()
    ENCODING: ClassVar[ColorEncoding] = LINEAR_PROPHOTO_RGB


class LinearDisplayP3(LinearRgbColor, RgbChannels):
    __slots__ = ()
    ENCODING: ClassVar[ColorEncoding] = LINEAR_DISPLAY_P3


class AcesCg(LinearRgbColor, RgbChannels):
    """ACEScg (AP1 primaries), the ACES working space for rendering."""

    __slots__ = ()
    ENCODING: ClassVar[ColorEncoding] = ACES_CG_LINEAR


class Aces2065(LinearRgbColor, RgbChannels):
    """ACES2065-1 (AP0 primaries), the ACES archival interchange space."""

    __slots__ = ()
    ENCODING: ClassVar[ColorEncoding] = ACES_2065_LINEAR


class LinearBt2020(LinearRgbColor, RgbChannels):
    __slots__ = ()
    ENCODING: ClassVar[ColorEncoding] = LINEAR_BT2020
