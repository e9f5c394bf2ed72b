# -*- coding: utf-8 -*-
"""
Prisma: Weaving perceptual color schemes from a single seed
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: prisma_solver.py — Gamut-constrained HCT -> sRGB solver.

Given a CAM16 hue, CAM16 chroma and an L* tone, find the sRGB color that
matches them as closely as the [0, 255]^3 cube allows.  The solver never
fails; an unreachable chroma degrades to the most chromatic in-gamut color
of that hue and tone.

Algorithm:
  1. Degenerate requests (chroma ~0, tone at 0 or 100) return the gray of
     that tone directly.
  2. Newton phase: iterate the inverse CAM16 chain in lightness J (at most
     5 steps) until the luminance of the candidate matches Y.  A negative
     channel at any step, or a channel above 100.01 at the end, means the
     requested chroma is out of gamut and the phase aborts.
  3. Bisection phase: intersect the RGB cube with the plane of constant Y,
     find the polygon edge bracketing the target hue, then bisect along it
     across the sRGB critical planes (the linear values half-way between
     consecutive 8-bit codes) until the bracket is one code wide.

Both phases run as Numba kernels; ``solve_batch`` spreads a whole array of
requests over threads with ``prange``.

The scalar kernels are compiled with ``fastmath=False`` so that a solved
color re-solves to the same packed int.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Final, Tuple

import numpy as np
from numba import njit, prange

from prisma_cam16 import Cam16
from prisma_colorutils import (
    ArrayFloat,
    Attainment,
    argb_from_linrgb,
    argb_from_linrgb_batch,
    argb_from_lstar,
    sanitize_degrees_double,
    y_from_lstar,
)
from prisma_viewing import ViewingConditions

__all__ = ["HctSolver", "SolveResult", "CRITICAL_PLANES"]

# =============================================================================
# Constants
# =============================================================================

# Linear RGB -> cone responses, pre-scaled by the standard viewing
# conditions' F_L and discount factors.
_SCALED_DISCOUNT_FROM_LINRGB: Final[ArrayFloat] = np.array([
    [0.001200833568784504, 0.002389694492170889, 0.0002795742885861124],
    [0.0005891086651375999, 0.0029785502573438758, 0.0003270666104008398],
    [0.00010146692491640572, 0.0005364214359186694, 0.0032979401770712076],
], dtype=np.float64)

_LINRGB_FROM_SCALED_DISCOUNT: Final[ArrayFloat] = np.array([
    [1373.2198709594231, -1100.4251190754821, -7.278681089101213],
    [-271.815969077903, 559.6580465940733, -32.46047482791194],
    [1.9622899599665666, -57.173814538844006, 308.7233197812385],
], dtype=np.float64)

_Y_FROM_LINRGB: Final[ArrayFloat] = np.array([0.2126, 0.7152, 0.0722], dtype=np.float64)


def _build_critical_planes() -> ArrayFloat:
    """Linear (0-100) values half-way between consecutive 8-bit sRGB codes."""
    normalized = (np.arange(255, dtype=np.float64) + 0.5) / 255.0
    return np.where(
        normalized <= 0.040449936,
        normalized / 12.92,
        ((normalized + 0.055) / 1.055) ** 2.4,
    ) * 100.0


CRITICAL_PLANES: Final[ArrayFloat] = _build_critical_planes()

# Requests at or beyond these bounds are answered with a gray.
_MIN_CHROMA: Final[float] = 0.0001
_MIN_TONE: Final[float] = 0.0001
_MAX_TONE: Final[float] = 99.9999


# =============================================================================
# 1. SCALAR KERNELS (Numba, strict IEEE)
# =============================================================================

@njit(cache=True)
def _signum(x: float) -> float:
    if x < 0.0:
        return -1.0
    elif x == 0.0:
        return 0.0
    return 1.0

@njit(cache=True)
def _sanitize_radians(angle: float) -> float:
    return (angle + math.pi * 8.0) % (math.pi * 2.0)

@njit(cache=True)
def _true_delinearized(rgb_component: float) -> float:
    """sRGB OETF without rounding, on the 0-255 scale."""
    normalized = rgb_component / 100.0
    if normalized <= 0.0031308:
        delinearized = normalized * 12.92
    else:
        delinearized = 1.055 * normalized ** (1.0 / 2.4) - 0.055
    return delinearized * 255.0

@njit(cache=True)
def _chromatic_adaptation(component: float) -> float:
    af = abs(component) ** 0.42
    return _signum(component) * 400.0 * af / (af + 27.13)

@njit(cache=True)
def _inverse_chromatic_adaptation(adapted: float) -> float:
    adapted_abs = abs(adapted)
    base = max(0.0, 27.13 * adapted_abs / (400.0 - adapted_abs))
    return _signum(adapted) * base ** (1.0 / 0.42)

@njit(cache=True)
def _hue_of(linrgb: ArrayFloat) -> float:
    """CAM16 hue (radians, -pi..pi) of a linear RGB point, ignoring lightness."""
    m = _SCALED_DISCOUNT_FROM_LINRGB
    r_a = _chromatic_adaptation(m[0, 0] * linrgb[0] + m[0, 1] * linrgb[1] + m[0, 2] * linrgb[2])
    g_a = _chromatic_adaptation(m[1, 0] * linrgb[0] + m[1, 1] * linrgb[1] + m[1, 2] * linrgb[2])
    b_a = _chromatic_adaptation(m[2, 0] * linrgb[0] + m[2, 1] * linrgb[1] + m[2, 2] * linrgb[2])
    a = (11.0 * r_a + -12.0 * g_a + b_a) / 11.0
    b = (r_a + g_a - 2.0 * b_a) / 9.0
    return math.atan2(b, a)

@njit(cache=True)
def _are_in_cyclic_order(a: float, b: float, c: float) -> bool:
    """True when travelling counter-clockwise from a reaches b before c."""
    delta_a_b = _sanitize_radians(b - a)
    delta_a_c = _sanitize_radians(c - a)
    return delta_a_b < delta_a_c

@njit(cache=True)
def _set_coordinate(source: ArrayFloat, coordinate: float, target: ArrayFloat, axis: int) -> ArrayFloat:
    """Point on segment source->target whose ``axis`` equals ``coordinate``."""
    t = (coordinate - source[axis]) / (target[axis] - source[axis])
    return source + (target - source) * t

@njit(cache=True)
def _is_bounded(x: float) -> bool:
    return 0.0 <= x <= 100.0

@njit(cache=True)
def _nth_vertex(y: float, n: int) -> ArrayFloat:
    """
    The nth of 12 possible vertices of the cube's cross-section at
    luminance ``y``.  Invalid vertices are returned as (-1, -1, -1).
    """
    k_r = _Y_FROM_LINRGB[0]
    k_g = _Y_FROM_LINRGB[1]
    k_b = _Y_FROM_LINRGB[2]
    coord_a = 0.0 if n % 4 <= 1 else 100.0
    coord_b = 0.0 if n % 2 == 0 else 100.0
    out = np.full(3, -1.0)
    if n < 4:
        g = coord_a
        b = coord_b
        r = (y - g * k_g - b * k_b) / k_r
        if _is_bounded(r):
            out[0] = r
            out[1] = g
            out[2] = b
    elif n < 8:
        b = coord_a
        r = coord_b
        g = (y - r * k_r - b * k_b) / k_g
        if _is_bounded(g):
            out[0] = r
            out[1] = g
            out[2] = b
    else:
        r = coord_a
        g = coord_b
        b = (y - r * k_r - g * k_g) / k_b
        if _is_bounded(b):
            out[0] = r
            out[1] = g
            out[2] = b
    return out

@njit(cache=True)
def _bisect_to_segment(y: float, target_hue: float) -> Tuple[ArrayFloat, ArrayFloat]:
    """The two cross-section vertices that cyclically bracket ``target_hue``."""
    left = np.full(3, -1.0)
    right = left.copy()
    left_hue = 0.0
    right_hue = 0.0
    initialized = False
    uncut = True
    for n in range(12):
        mid = _nth_vertex(y, n)
        if mid[0] < 0.0:
            continue
        mid_hue = _hue_of(mid)
        if not initialized:
            left = mid
            right = mid
            left_hue = mid_hue
            right_hue = mid_hue
            initialized = True
            continue
        if uncut or _are_in_cyclic_order(left_hue, mid_hue, right_hue):
            uncut = False
            if _are_in_cyclic_order(left_hue, target_hue, mid_hue):
                right = mid
                right_hue = mid_hue
            else:
                left = mid
                left_hue = mid_hue
    return left, right

@njit(cache=True)
def _critical_plane_below(x: float) -> int:
    return int(math.floor(x - 0.5))

@njit(cache=True)
def _critical_plane_above(x: float) -> int:
    return int(math.ceil(x - 0.5))

@njit(cache=True)
def _bisect_to_limit(y: float, target_hue: float) -> ArrayFloat:
    """Linear RGB on the gamut boundary at luminance ``y`` with hue ``target_hue``."""
    left, right = _bisect_to_segment(y, target_hue)
    left_hue = _hue_of(left)
    for axis in range(3):
        if left[axis] != right[axis]:
            if left[axis] < right[axis]:
                l_plane = _critical_plane_below(_true_delinearized(left[axis]))
                r_plane = _critical_plane_above(_true_delinearized(right[axis]))
            else:
                l_plane = _critical_plane_above(_true_delinearized(left[axis]))
                r_plane = _critical_plane_below(_true_delinearized(right[axis]))
            for _ in range(8):
                if abs(r_plane - l_plane) <= 1:
                    break
                m_plane = int(math.floor((l_plane + r_plane) / 2.0))
                mid_plane_coordinate = CRITICAL_PLANES[m_plane]
                mid = _set_coordinate(left, mid_plane_coordinate, right, axis)
                mid_hue = _hue_of(mid)
                if _are_in_cyclic_order(left_hue, target_hue, mid_hue):
                    right = mid
                    r_plane = m_plane
                else:
                    left = mid
                    left_hue = mid_hue
                    l_plane = m_plane
    return (left + right) / 2.0

@njit(cache=True)
def _find_result_by_j(
    hue_radians: float, chroma: float, y: float,
    aw: float, nbb: float, c: float, z: float, n_c: float, ncb: float, n: float,
) -> Tuple[bool, float, float, float]:
    """
    Newton iteration on J.

    Returns:
        ``(found, r, g, b)``; the linear RGB is only meaningful when found.
    """
    # Initial estimate of j.
    j = math.sqrt(y) * 11.0
    t_inner_coeff = 1.0 / (1.64 - 0.29 ** n) ** 0.73
    e_hue = 0.25 * (math.cos(hue_radians + 2.0) + 3.8)
    p1 = e_hue * (50000.0 / 13.0) * n_c * ncb
    h_sin = math.sin(hue_radians)
    h_cos = math.cos(hue_radians)
    inv = _LINRGB_FROM_SCALED_DISCOUNT
    for iteration_round in range(5):
        j_normalized = j / 100.0
        if chroma == 0.0 or j == 0.0:
            alpha = 0.0
        else:
            alpha = chroma / math.sqrt(j_normalized)
        t = (alpha * t_inner_coeff) ** (1.0 / 0.9)
        ac = aw * j_normalized ** (1.0 / c / z)
        p2 = ac / nbb
        gamma = 23.0 * (p2 + 0.305) * t / (23.0 * p1 + 11.0 * t * h_cos + 108.0 * t * h_sin)
        a = gamma * h_cos
        b = gamma * h_sin
        r_a = (460.0 * p2 + 451.0 * a + 288.0 * b) / 1403.0
        g_a = (460.0 * p2 - 891.0 * a - 261.0 * b) / 1403.0
        b_a = (460.0 * p2 - 220.0 * a - 6300.0 * b) / 1403.0
        r_cs = _inverse_chromatic_adaptation(r_a)
        g_cs = _inverse_chromatic_adaptation(g_a)
        b_cs = _inverse_chromatic_adaptation(b_a)
        lr = inv[0, 0] * r_cs + inv[0, 1] * g_cs + inv[0, 2] * b_cs
        lg = inv[1, 0] * r_cs + inv[1, 1] * g_cs + inv[1, 2] * b_cs
        lb = inv[2, 0] * r_cs + inv[2, 1] * g_cs + inv[2, 2] * b_cs
        if lr < 0.0 or lg < 0.0 or lb < 0.0:
            return False, 0.0, 0.0, 0.0
        fnj = _Y_FROM_LINRGB[0] * lr + _Y_FROM_LINRGB[1] * lg + _Y_FROM_LINRGB[2] * lb
        if fnj <= 0.0:
            return False, 0.0, 0.0, 0.0
        if iteration_round == 4 or abs(fnj - y) < 0.002:
            if lr > 100.01 or lg > 100.01 or lb > 100.01:
                return False, 0.0, 0.0, 0.0
            return True, lr, lg, lb
        # 2 * fnj approximates the derivative of fnj with respect to j.
        j = j - (fnj - y) * j / (2.0 * fnj)
    return False, 0.0, 0.0, 0.0


# =============================================================================
# 2. BATCH KERNEL
# =============================================================================

@njit(cache=True)
def _y_from_lstar_kernel(lstar: float) -> float:
    ft = (lstar + 16.0) / 116.0
    ft3 = ft * ft * ft
    if ft3 > 216.0 / 24389.0:
        return 100.0 * ft3
    return 100.0 * (116.0 * ft - 16.0) / (24389.0 / 27.0)

@njit(cache=True, parallel=True)
def _solve_batch_kernel(
    hues: ArrayFloat, chromas: ArrayFloat, tones: ArrayFloat,
    aw: float, nbb: float, c: float, z: float, n_c: float, ncb: float, n: float,
) -> Tuple[ArrayFloat, np.ndarray]:
    """
    Solves N requests in parallel.

    Returns:
        ``(linrgb, exact)``: (N, 3) linear RGB and an (N,) flag that is True
        where the Newton phase (or the gray shortcut) produced the answer.
    """
    size = hues.shape[0]
    out = np.empty((size, 3), dtype=np.float64)
    exact = np.empty(size, dtype=np.bool_)
    for i in prange(size):
        chroma = chromas[i]
        tone = tones[i]
        y = _y_from_lstar_kernel(tone)
        if chroma < 0.0001 or tone < 0.0001 or tone > 99.9999:
            out[i, 0] = y
            out[i, 1] = y
            out[i, 2] = y
            exact[i] = True
            continue
        hue_degrees = hues[i] % 360.0
        hue_radians = hue_degrees / 180.0 * math.pi
        found, lr, lg, lb = _find_result_by_j(hue_radians, chroma, y, aw, nbb, c, z, n_c, ncb, n)
        if found:
            out[i, 0] = lr
            out[i, 1] = lg
            out[i, 2] = lb
            exact[i] = True
        else:
            linrgb = _bisect_to_limit(y, hue_radians)
            out[i, 0] = linrgb[0]
            out[i, 1] = linrgb[1]
            out[i, 2] = linrgb[2]
            exact[i] = False
    return out, exact


# =============================================================================
# 3. PUBLIC API
# =============================================================================

@dataclass(slots=True, frozen=True)
class SolveResult:
    """A solved color and how it was reached."""
    argb: int
    attainment: Attainment


def _vc_args() -> Tuple[float, float, float, float, float, float, float]:
    vc = ViewingConditions.standard()
    return (vc.aw, vc.nbb, vc.c, vc.z, vc.n_c, vc.ncb, vc.n)


class HctSolver:
    """Maps (hue, chroma, tone) requests to the closest in-gamut sRGB color."""

    @staticmethod
    def solve(hue_degrees: float, chroma: float, lstar: float) -> SolveResult:
        """
        Solves one request and reports whether it was met.

        Args:
            hue_degrees: CAM16 hue; any value, wrapped into [0, 360).
            chroma: Requested CAM16 chroma.
            lstar: Requested L*, 0-100.

        Returns:
            ``SolveResult`` with ``Attainment.EXACT`` when the Newton phase
            converged in gamut (or the request was achromatic) and
            ``Attainment.BEST_EFFORT`` when the chroma was reduced onto the
            gamut boundary.
        """
        if chroma < _MIN_CHROMA or lstar < _MIN_TONE or lstar > _MAX_TONE:
            return SolveResult(argb_from_lstar(lstar), Attainment.EXACT)
        hue_degrees = sanitize_degrees_double(hue_degrees)
        hue_radians = hue_degrees / 180.0 * math.pi
        y = y_from_lstar(lstar)
        found, lr, lg, lb = _find_result_by_j(hue_radians, chroma, y, *_vc_args())
        if found:
            return SolveResult(argb_from_linrgb((lr, lg, lb)), Attainment.EXACT)
        linrgb = _bisect_to_limit(y, hue_radians)
        return SolveResult(argb_from_linrgb(linrgb), Attainment.BEST_EFFORT)

    @staticmethod
    def solve_to_int(hue_degrees: float, chroma: float, lstar: float) -> int:
        """Packed ARGB of the closest in-gamut color to (hue, chroma, L*)."""
        return HctSolver.solve(hue_degrees, chroma, lstar).argb

    @staticmethod
    def solve_to_cam(hue_degrees: float, chroma: float, lstar: float) -> Cam16:
        return Cam16.from_int(HctSolver.solve_to_int(hue_degrees, chroma, lstar))

    @staticmethod
    def solve_batch(hues: ArrayFloat, chromas: ArrayFloat, tones: ArrayFloat) -> np.ndarray:
        """
        Vectorised ``solve_to_int``.

        Args:
            hues, chromas, tones: Broadcastable 1D arrays.

        Returns:
            (N,) uint32 array of packed ARGB colors.
        """
        h, c, t = np.broadcast_arrays(
            np.atleast_1d(np.asarray(hues, dtype=np.float64)),
            np.atleast_1d(np.asarray(chromas, dtype=np.float64)),
            np.atleast_1d(np.asarray(tones, dtype=np.float64)),
        )
        if h.ndim != 1:
            raise ValueError(f"Expected 1D inputs, got shape {h.shape}")
        # broadcast_to views must be materialised before entering prange.
        h = np.ascontiguousarray(h)
        c = np.ascontiguousarray(c)
        t = np.ascontiguousarray(t)
        linrgb, _ = _solve_batch_kernel(h, c, t, *_vc_args())
        return argb_from_linrgb_batch(linrgb)


# =============================================================================
# Validation Block
# =============================================================================
if __name__ == "__main__":
    import time

    print("--- Prisma HCT Solver Validation ---")

    print("1. Solve and read back (hue 120, chroma 20, tone 50)...")
    cam = HctSolver.solve_to_cam(120.0, 20.0, 50.0)
    print(f"   hue={cam.hue:.2f} chroma={cam.chroma:.2f}")

    print("2. Out-of-gamut chroma degrades instead of failing...")
    res = HctSolver.solve(270.0, 200.0, 50.0)
    print(f"   {res.attainment.name} -> {res.argb:#010x}")

    print("3. Batch vs scalar...")
    rng = np.random.default_rng(7)
    hs = rng.uniform(0.0, 360.0, 2000)
    cs = rng.uniform(0.0, 120.0, 2000)
    ts = rng.uniform(0.0, 100.0, 2000)
    t0 = time.perf_counter()
    batch = HctSolver.solve_batch(hs, cs, ts)
    t1 = time.perf_counter()
    scalar = np.array([HctSolver.solve_to_int(*v) for v in zip(hs, cs, ts)], dtype=np.uint32)
    print(f"   Mismatches: {int(np.count_nonzero(batch != scalar))} "
          f"({(t1 - t0) * 1000:.2f} ms for {hs.size} colors)")
