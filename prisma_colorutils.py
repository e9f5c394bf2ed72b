# -*- coding: utf-8 -*-
"""
Prisma: Weaving perceptual color schemes from a single seed
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Color Utilities
===============
Numeric primitives shared by the appearance model, the HCT solver and the
contrast layer.

Packed colors are plain Python ``int`` values laid out as 0xAARRGGBB
(alpha in bits 31-24, then red, green, blue).  Linear RGB components are
expressed on a 0-100 scale, XYZ is relative to D65 with Y=100 for white,
and L* (tone) runs from 0 (black) to 100 (white).

Scalar helpers are plain Python; the ``*_batch`` variants are Numba kernels
for (N,) / (N, 3) arrays with a process-wide fast/strict IEEE switch.

References:
    - IEC 61966-2-1:1999 (sRGB Standard)
    - CIE 15:2004 "Colorimetry"
"""

import enum
import math
import string
from typing import Final, Sequence, Tuple, TypeAlias

import numpy as np
import numpy.typing as npt
from numba import njit

__all__ = [
    # --- Type Aliases ---
    "ArrayFloat",
    "Vec3",

    # --- Result Types ---
    "Attainment",

    # --- Constants ---
    "SRGB_TO_XYZ",
    "XYZ_TO_SRGB",
    "WHITE_POINT_D65",
    "LAB_EPSILON",
    "LAB_KAPPA",

    # --- Configuration ---
    "set_strict_ieee",

    # --- Math ---
    "signum",
    "lerp",
    "clamp_int",
    "clamp_double",
    "round_half_up",
    "sanitize_degrees_int",
    "sanitize_degrees_double",
    "rotation_direction",
    "difference_degrees",
    "matrix_multiply",

    # --- Color ---
    "argb_from_rgb",
    "alpha_from_argb",
    "red_from_argb",
    "green_from_argb",
    "blue_from_argb",
    "is_opaque",
    "argb_from_linrgb",
    "argb_from_xyz",
    "xyz_from_argb",
    "argb_from_lab",
    "lab_from_argb",
    "argb_from_lstar",
    "lstar_from_argb",
    "y_from_lstar",
    "lstar_from_y",
    "linearized",
    "delinearized",
    "white_point_d65",
    "hex_from_argb",
    "argb_from_hex",

    # --- Batch ---
    "linearized_batch",
    "delinearized_batch",
    "argb_from_linrgb_batch",
]

# --- Type Aliases ---
ArrayFloat: TypeAlias = npt.NDArray[np.floating]
Vec3: TypeAlias = Tuple[float, float, float]


# --- Result Types ---
class Attainment(enum.Enum):
    """How well a requested color or tone could be met."""
    EXACT = "exact"
    BEST_EFFORT = "best_effort"
    UNATTAINABLE = "unattainable"

# --- Constants ---

# Linear sRGB (0-100) -> XYZ (D65, Y=100).  Middle row is the luminance row
# used throughout the solver.
SRGB_TO_XYZ: Final[ArrayFloat] = np.array([
    [0.41233895, 0.35762064, 0.18051042],
    [0.2126,     0.7152,     0.0722],
    [0.01932141, 0.11916382, 0.95034478],
], dtype=np.float64)

XYZ_TO_SRGB: Final[ArrayFloat] = np.array([
    [ 3.2413774792388685, -1.5376652402851851, -0.49885366846268053],
    [-0.9691452513005321,  1.8758853451067872,  0.04156585616912061],
    [ 0.05562093689691305, -0.20395524564742123, 1.0571799111220335],
], dtype=np.float64)

# D65 on the Y=100 scale.
WHITE_POINT_D65: Final[ArrayFloat] = np.array([95.047, 100.0, 108.883], dtype=np.float64)

# Exact rational CIE 1976 constants.
LAB_EPSILON: Final[float] = 216.0 / 24389.0
LAB_KAPPA: Final[float] = 24389.0 / 27.0


# --- Runtime Configuration ---
# Selects fastmath=False batch kernels when True.  The scalar paths below
# are plain Python and unaffected.
_STRICT_IEEE: bool = False

def set_strict_ieee(enabled: bool = True) -> None:
    """
    Toggle between fast (default) and strict IEEE 754 batch kernels.

    Args:
        enabled: If True, use the ``fastmath=False`` kernels.
    """
    global _STRICT_IEEE
    _STRICT_IEEE = bool(enabled)


# =============================================================================
# 1. MATH
# =============================================================================

def signum(num: float) -> int:
    """-1 if num < 0, 0 if num == 0, 1 otherwise."""
    if num < 0:
        return -1
    elif num == 0:
        return 0
    return 1


def lerp(start: float, stop: float, amount: float) -> float:
    """Linear interpolation; amount 0 gives start, 1 gives stop."""
    return (1.0 - amount) * start + amount * stop


def clamp_int(min_value: int, max_value: int, value: int) -> int:
    if value < min_value:
        return min_value
    elif value > max_value:
        return max_value
    return value


def clamp_double(min_value: float, max_value: float, value: float) -> float:
    if value < min_value:
        return min_value
    elif value > max_value:
        return max_value
    return value


def round_half_up(value: float) -> int:
    """Rounds .5 away from the floor, unlike the built-in banker's ``round``."""
    return int(math.floor(value + 0.5))


def sanitize_degrees_int(degrees: int) -> int:
    """Wraps an integer angle into [0, 360)."""
    degrees = degrees % 360
    if degrees < 0:
        degrees = degrees + 360
    return degrees


def sanitize_degrees_double(degrees: float) -> float:
    """Wraps an angle in degrees into [0.0, 360.0)."""
    degrees = math.fmod(degrees, 360.0)
    if degrees < 0:
        degrees = degrees + 360.0
    return degrees


def rotation_direction(from_degrees: float, to_degrees: float) -> float:
    """
    Sign of the shortest rotation from ``from_degrees`` to ``to_degrees``.

    Returns:
        1.0 for a counter-clockwise (increasing) rotation, -1.0 otherwise.
    """
    increasing_difference = sanitize_degrees_double(to_degrees - from_degrees)
    return 1.0 if increasing_difference <= 180.0 else -1.0


def difference_degrees(a: float, b: float) -> float:
    """Distance of two points on a circle, in degrees (0-180)."""
    return 180.0 - abs(abs(a - b) - 180.0)


def matrix_multiply(row: Sequence[float], matrix: ArrayFloat) -> ArrayFloat:
    """
    Multiplies a 3x3 matrix by a 3-vector, ``matrix @ row``.

    Returns:
        (3,) float64 array.
    """
    return matrix @ np.asarray(row, dtype=np.float64)


# =============================================================================
# 2. PACKED COLOR
# =============================================================================

def argb_from_rgb(red: int, green: int, blue: int) -> int:
    """Packs 8-bit channels into an opaque ARGB int."""
    return (255 << 24) | ((red & 255) << 16) | ((green & 255) << 8) | (blue & 255)


def alpha_from_argb(argb: int) -> int:
    return (argb >> 24) & 255


def red_from_argb(argb: int) -> int:
    return (argb >> 16) & 255


def green_from_argb(argb: int) -> int:
    return (argb >> 8) & 255


def blue_from_argb(argb: int) -> int:
    return argb & 255


def is_opaque(argb: int) -> bool:
    return alpha_from_argb(argb) >= 255


def linearized(rgb_component: int) -> float:
    """
    sRGB EOTF for one 8-bit channel.

    Args:
        rgb_component: 0 <= rgb_component <= 255.

    Returns:
        Linear channel, 0.0 <= output <= 100.0.
    """
    normalized = rgb_component / 255.0
    if normalized <= 0.040449936:
        return normalized / 12.92 * 100.0
    return math.pow((normalized + 0.055) / 1.055, 2.4) * 100.0


def delinearized(rgb_component: float) -> int:
    """
    sRGB OETF for one linear channel.

    Args:
        rgb_component: 0.0 <= rgb_component <= 100.0 (out-of-range is clamped).

    Returns:
        8-bit channel, 0 <= output <= 255.
    """
    normalized = rgb_component / 100.0
    if normalized <= 0.0031308:
        delinearized_value = normalized * 12.92
    else:
        delinearized_value = 1.055 * math.pow(normalized, 1.0 / 2.4) - 0.055
    return clamp_int(0, 255, round_half_up(delinearized_value * 255.0))


def argb_from_linrgb(linrgb: Sequence[float]) -> int:
    """Packs a linear RGB triple (0-100 scale) into an opaque ARGB int."""
    r = delinearized(linrgb[0])
    g = delinearized(linrgb[1])
    b = delinearized(linrgb[2])
    return argb_from_rgb(r, g, b)


def white_point_d65() -> ArrayFloat:
    """Returns a copy of the D65 white point (Y=100)."""
    return WHITE_POINT_D65.copy()


def argb_from_xyz(x: float, y: float, z: float) -> int:
    """Converts D65 XYZ (Y=100 for white) to ARGB."""
    linear = XYZ_TO_SRGB @ np.array([x, y, z], dtype=np.float64)
    return argb_from_rgb(
        delinearized(linear[0]),
        delinearized(linear[1]),
        delinearized(linear[2]),
    )


def xyz_from_argb(argb: int) -> ArrayFloat:
    """Converts ARGB to D65 XYZ (Y=100 for white); returns a (3,) array."""
    r = linearized(red_from_argb(argb))
    g = linearized(green_from_argb(argb))
    b = linearized(blue_from_argb(argb))
    return matrix_multiply((r, g, b), SRGB_TO_XYZ)


def _lab_f(t: float) -> float:
    if t > LAB_EPSILON:
        return math.pow(t, 1.0 / 3.0)
    return (LAB_KAPPA * t + 16.0) / 116.0


def _lab_invf(ft: float) -> float:
    ft3 = ft * ft * ft
    if ft3 > LAB_EPSILON:
        return ft3
    return (116.0 * ft - 16.0) / LAB_KAPPA


def argb_from_lab(l: float, a: float, b: float) -> int:
    """Converts CIE L*a*b* (D65) to ARGB."""
    fy = (l + 16.0) / 116.0
    fx = a / 500.0 + fy
    fz = fy - b / 200.0
    x = _lab_invf(fx) * WHITE_POINT_D65[0]
    y = _lab_invf(fy) * WHITE_POINT_D65[1]
    z = _lab_invf(fz) * WHITE_POINT_D65[2]
    return argb_from_xyz(x, y, z)


def lab_from_argb(argb: int) -> Vec3:
    """Converts ARGB to CIE L*a*b* (D65) as ``(L, a, b)``."""
    x, y, z = xyz_from_argb(argb)
    fx = _lab_f(x / WHITE_POINT_D65[0])
    fy = _lab_f(y / WHITE_POINT_D65[1])
    fz = _lab_f(z / WHITE_POINT_D65[2])
    return (116.0 * fy - 16.0, 500.0 * (fx - fy), 200.0 * (fy - fz))


def y_from_lstar(lstar: float) -> float:
    """
    Relative luminance Y (0-100) from L*.

    L* in L*a*b* and Y in XYZ measure the same quantity, luminance; L* is
    perceptually uniform, Y is linear in light.
    """
    return 100.0 * _lab_invf((lstar + 16.0) / 116.0)


def lstar_from_y(y: float) -> float:
    """L* (0-100) from relative luminance Y (0-100)."""
    return _lab_f(y / 100.0) * 116.0 - 16.0


def argb_from_lstar(lstar: float) -> int:
    """The achromatic gray whose L* equals ``lstar``."""
    y = y_from_lstar(lstar)
    component = delinearized(y)
    return argb_from_rgb(component, component, component)


def lstar_from_argb(argb: int) -> float:
    """L* of an ARGB color."""
    y = xyz_from_argb(argb)[1]
    return 116.0 * _lab_f(y / 100.0) - 16.0


# =============================================================================
# 3. HEX STRINGS
# =============================================================================

def hex_from_argb(argb: int) -> str:
    """Formats the RGB channels of ``argb`` as ``#rrggbb`` (alpha dropped)."""
    return "#{:02x}{:02x}{:02x}".format(
        red_from_argb(argb), green_from_argb(argb), blue_from_argb(argb)
    )


def argb_from_hex(hex_string: str) -> int:
    """
    Parses ``#rgb``, ``#rrggbb`` or ``#aarrggbb`` (leading ``#`` optional).

    Raises:
        ValueError: If the string has any other length or non-hex digits.
    """
    digits = hex_string[1:] if hex_string.startswith("#") else hex_string
    if not digits or any(ch not in string.hexdigits for ch in digits):
        raise ValueError(f"Invalid hex color: {hex_string!r}")
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    if len(digits) not in (6, 8):
        raise ValueError(
            f"Hex color must have 3, 6 or 8 digits, got {len(digits)}: {hex_string!r}"
        )
    value = int(digits, 16)
    if len(digits) == 6:
        value |= 0xFF000000
    return value


# =============================================================================
# 4. BATCH KERNELS (Numba Optimized)
# =============================================================================

@njit(cache=True, fastmath=True)
def _linearized_kernel(channels: ArrayFloat) -> ArrayFloat:
    """8-bit channels (as float64) -> linear 0-100."""
    out = np.empty_like(channels)
    c_flat = channels.ravel()
    out_flat = out.ravel()
    for i in range(channels.size):
        v = c_flat[i] / 255.0
        if v <= 0.040449936:
            out_flat[i] = v / 12.92 * 100.0
        else:
            out_flat[i] = ((v + 0.055) / 1.055) ** 2.4 * 100.0
    return out

@njit(cache=True, fastmath=True)
def _delinearized_kernel(linear: ArrayFloat) -> ArrayFloat:
    """Linear 0-100 -> unrounded 8-bit scale, clamped to [0, 255]."""
    out = np.empty_like(linear)
    l_flat = linear.ravel()
    out_flat = out.ravel()
    for i in range(linear.size):
        v = l_flat[i] / 100.0
        if v <= 0.0031308:
            d = v * 12.92
        else:
            d = 1.055 * (v ** (1.0 / 2.4)) - 0.055
        d = np.floor(d * 255.0 + 0.5)
        if d < 0.0:
            d = 0.0
        elif d > 255.0:
            d = 255.0
        out_flat[i] = d
    return out

# --- Strict IEEE 754 kernel variants (fastmath=False) ---

@njit(cache=True, fastmath=False)
def _linearized_kernel_strict(channels: ArrayFloat) -> ArrayFloat:
    """sRGB EOTF, strict IEEE 754 variant."""
    out = np.empty_like(channels)
    c_flat = channels.ravel()
    out_flat = out.ravel()
    for i in range(channels.size):
        v = c_flat[i] / 255.0
        if v <= 0.040449936:
            out_flat[i] = v / 12.92 * 100.0
        else:
            out_flat[i] = ((v + 0.055) / 1.055) ** 2.4 * 100.0
    return out

@njit(cache=True, fastmath=False)
def _delinearized_kernel_strict(linear: ArrayFloat) -> ArrayFloat:
    """sRGB OETF, strict IEEE 754 variant."""
    out = np.empty_like(linear)
    l_flat = linear.ravel()
    out_flat = out.ravel()
    for i in range(linear.size):
        v = l_flat[i] / 100.0
        if v <= 0.0031308:
            d = v * 12.92
        else:
            d = 1.055 * (v ** (1.0 / 2.4)) - 0.055
        d = np.floor(d * 255.0 + 0.5)
        if d < 0.0:
            d = 0.0
        elif d > 255.0:
            d = 255.0
        out_flat[i] = d
    return out


def linearized_batch(channels: ArrayFloat) -> ArrayFloat:
    """
    Vectorised ``linearized`` over any array shape.

    Args:
        channels: 8-bit channel values (any integer or float dtype).

    Returns:
        float64 array of the same shape, 0-100 scale.
    """
    arr = np.ascontiguousarray(channels, dtype=np.float64)
    if _STRICT_IEEE:
        return _linearized_kernel_strict(arr)
    return _linearized_kernel(arr)


def delinearized_batch(linear: ArrayFloat) -> np.ndarray:
    """
    Vectorised ``delinearized`` over any array shape.

    Returns:
        uint8 array of the same shape.
    """
    arr = np.ascontiguousarray(linear, dtype=np.float64)
    if _STRICT_IEEE:
        out = _delinearized_kernel_strict(arr)
    else:
        out = _delinearized_kernel(arr)
    return out.astype(np.uint8)


def argb_from_linrgb_batch(linrgb: ArrayFloat) -> np.ndarray:
    """
    Packs an (N, 3) linear RGB array into opaque ARGB values.

    Returns:
        (N,) uint32 array.
    """
    arr = np.atleast_2d(linrgb)
    if arr.shape[-1] != 3:
        raise ValueError(f"Expected last dimension size 3, got {arr.shape[-1]}")
    rgb = delinearized_batch(arr).astype(np.uint32)
    return (
        np.uint32(0xFF000000)
        | (rgb[:, 0] << np.uint32(16))
        | (rgb[:, 1] << np.uint32(8))
        | rgb[:, 2]
    )


# =============================================================================
# Validation Block
# =============================================================================
if __name__ == "__main__":
    print("--- Prisma Color Utilities Validation ---")

    print("1. L* <-> Y round trip...")
    worst = max(abs(lstar_from_y(y_from_lstar(t)) - t) for t in range(0, 101))
    print(f"   Max Error: {worst:.2e} {'[PASS]' if worst < 1e-9 else '[FAIL]'}")

    print("2. Hex round trip...")
    ok = hex_from_argb(argb_from_hex("#6750a4")) == "#6750a4"
    print(f"   #6750a4 {'[PASS]' if ok else '[FAIL]'}")

    print("3. Batch vs scalar delinearization...")
    lin = np.linspace(0.0, 100.0, 1001)
    batch = delinearized_batch(lin)
    scalar = np.array([delinearized(v) for v in lin], dtype=np.uint8)
    print(f"   Mismatches: {int(np.count_nonzero(batch != scalar))}")
