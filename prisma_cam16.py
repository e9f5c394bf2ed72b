# -*- coding: utf-8 -*-
"""
Prisma: Weaving perceptual color schemes from a single seed
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: prisma_cam16.py — CAM16 color appearance model.

CAM16 predicts how a color is perceived (hue, lightness, chroma, ...)
under a given set of viewing conditions.  Every attribute is derived at
construction time, including the CAM16-UCS coordinates used for color
difference.

Pipeline (forward):
    XYZ -> cone responses (M16) -> illuminant discount (rgb_d)
        -> post-adaptation compression (exponent 0.42, 27.13)
        -> opponent axes a, b -> hue, J, Q, C, M, s -> J*, a*, b*

The inverse path (``xyz_in_viewing_conditions``) reconstructs the opponent
axes from (J, C, h) and inverts the compression, clamped at zero before the
power.

References:
    - Li, C. et al. (2017). "Comprehensive color solutions: CAM16, CAT16,
      and CAM16-UCS". Color Research & Application 42(6).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from prisma_colorutils import argb_from_xyz, signum, xyz_from_argb
from prisma_viewing import ViewingConditions

__all__ = ["Cam16"]

# Inverse of the M16 cone matrix.
_M16_INV: Tuple[Tuple[float, float, float], ...] = (
    (1.86206786, -1.01125463, 0.14918677),
    (0.38752654, 0.62144744, -0.00897398),
    (-0.01584150, -0.03412294, 1.04996444),
)


def _ucs(j: float, m: float, hue_radians: float) -> Tuple[float, float, float]:
    """CAM16-UCS coordinates (J*, a*, b*)."""
    jstar = (1.0 + 100.0 * 0.007) * j / (1.0 + 0.007 * j)
    mstar = math.log(1.0 + 0.0228 * m) / 0.0228
    return jstar, mstar * math.cos(hue_radians), mstar * math.sin(hue_radians)


@dataclass(slots=True, frozen=True)
class Cam16:
    """
    CAM16 appearance attributes of one color.

    Attributes:
        hue: Hue angle in degrees, [0, 360).
        chroma: Colorfulness relative to a similarly lit white, >= 0.
        j: Lightness, 0-100.
        q: Brightness.
        m: Colorfulness.
        s: Saturation.
        jstar, astar, bstar: CAM16-UCS coordinates.
    """
    hue: float
    chroma: float
    j: float
    q: float
    m: float
    s: float
    jstar: float
    astar: float
    bstar: float

    def distance(self, other: Cam16) -> float:
        """
        CAM16-UCS color difference, ``1.41 * dE' ** 0.63``.

        Symmetric and zero for identical colors.
        """
        d_j = self.jstar - other.jstar
        d_a = self.astar - other.astar
        d_b = self.bstar - other.bstar
        d_e_prime = math.sqrt(d_j * d_j + d_a * d_a + d_b * d_b)
        return 1.41 * math.pow(d_e_prime, 0.63)

    # -- forward ----------------------------------------------------------
    @classmethod
    def from_int(cls, argb: int) -> Cam16:
        """CAM16 of an ARGB color under the standard viewing conditions."""
        return cls.from_int_in_viewing_conditions(argb, ViewingConditions.standard())

    @classmethod
    def from_int_in_viewing_conditions(cls, argb: int, vc: ViewingConditions) -> Cam16:
        x, y, z = xyz_from_argb(argb)
        return cls.from_xyz_in_viewing_conditions(float(x), float(y), float(z), vc)

    @classmethod
    def from_xyz_in_viewing_conditions(
        cls, x: float, y: float, z: float, vc: ViewingConditions
    ) -> Cam16:
        """
        Forward CAM16 transform.

        Args:
            x, y, z: Tristimulus values relative to ``vc.white_point``.
            vc: Viewing conditions the color is observed under.
        """
        r_c = 0.401288 * x + 0.650173 * y - 0.051461 * z
        g_c = -0.250268 * x + 1.204414 * y + 0.045854 * z
        b_c = -0.002079 * x + 0.048952 * y + 0.953127 * z

        r_d = vc.rgb_d[0] * r_c
        g_d = vc.rgb_d[1] * g_c
        b_d = vc.rgb_d[2] * b_c

        r_af = math.pow(vc.fl * abs(r_d) / 100.0, 0.42)
        g_af = math.pow(vc.fl * abs(g_d) / 100.0, 0.42)
        b_af = math.pow(vc.fl * abs(b_d) / 100.0, 0.42)
        r_a = signum(r_d) * 400.0 * r_af / (r_af + 27.13)
        g_a = signum(g_d) * 400.0 * g_af / (g_af + 27.13)
        b_a = signum(b_d) * 400.0 * b_af / (b_af + 27.13)

        # Opponent axes
        a = (11.0 * r_a + -12.0 * g_a + b_a) / 11.0
        b = (r_a + g_a - 2.0 * b_a) / 9.0

        u = (20.0 * r_a + 20.0 * g_a + 21.0 * b_a) / 20.0
        p2 = (40.0 * r_a + 20.0 * g_a + b_a) / 20.0

        atan_degrees = math.degrees(math.atan2(b, a))
        if atan_degrees < 0:
            hue = atan_degrees + 360.0
        elif atan_degrees >= 360:
            hue = atan_degrees - 360.0
        else:
            hue = atan_degrees
        hue_radians = math.radians(hue)

        ac = p2 * vc.nbb

        j = 100.0 * math.pow(ac / vc.aw, vc.c * vc.z)
        q = 4.0 / vc.c * math.sqrt(j / 100.0) * (vc.aw + 4.0) * vc.fl_root

        hue_prime = hue + 360.0 if hue < 20.14 else hue
        e_hue = 0.25 * (math.cos(math.radians(hue_prime) + 2.0) + 3.8)
        p1 = 50000.0 / 13.0 * e_hue * vc.n_c * vc.ncb
        t = p1 * math.hypot(a, b) / (u + 0.305)
        alpha = math.pow(t, 0.9) * math.pow(1.64 - math.pow(0.29, vc.n), 0.73)

        c = alpha * math.sqrt(j / 100.0)
        m = c * vc.fl_root
        s = 50.0 * math.sqrt(alpha * vc.c / (vc.aw + 4.0))

        jstar, astar, bstar = _ucs(j, m, hue_radians)
        return cls(hue, c, j, q, m, s, jstar, astar, bstar)

    # -- alternate constructors -------------------------------------------
    @classmethod
    def from_jch(cls, j: float, c: float, h: float) -> Cam16:
        """Builds from lightness J, chroma C and hue h (degrees)."""
        return cls.from_jch_in_viewing_conditions(j, c, h, ViewingConditions.standard())

    @classmethod
    def from_jch_in_viewing_conditions(
        cls, j: float, c: float, h: float, vc: ViewingConditions
    ) -> Cam16:
        q = 4.0 / vc.c * math.sqrt(j / 100.0) * (vc.aw + 4.0) * vc.fl_root
        m = c * vc.fl_root
        alpha = c / math.sqrt(j / 100.0) if j != 0.0 else 0.0
        s = 50.0 * math.sqrt(alpha * vc.c / (vc.aw + 4.0))

        jstar, astar, bstar = _ucs(j, m, math.radians(h))
        return cls(h, c, j, q, m, s, jstar, astar, bstar)

    @classmethod
    def from_ucs(cls, jstar: float, astar: float, bstar: float) -> Cam16:
        """Builds from CAM16-UCS coordinates under the standard conditions."""
        return cls.from_ucs_in_viewing_conditions(jstar, astar, bstar, ViewingConditions.standard())

    @classmethod
    def from_ucs_in_viewing_conditions(
        cls, jstar: float, astar: float, bstar: float, vc: ViewingConditions
    ) -> Cam16:
        m = math.hypot(astar, bstar)
        big_m = (math.exp(m * 0.0228) - 1.0) / 0.0228
        c = big_m / vc.fl_root
        h = math.degrees(math.atan2(bstar, astar))
        if h < 0.0:
            h += 360.0
        j = jstar / (1.0 - (jstar - 100.0) * 0.007)
        return cls.from_jch_in_viewing_conditions(j, c, h, vc)

    # -- inverse ----------------------------------------------------------
    def to_int(self) -> int:
        """ARGB under the standard viewing conditions."""
        return self.viewed(ViewingConditions.standard())

    def viewed(self, vc: ViewingConditions) -> int:
        """ARGB of this appearance when seen under ``vc``."""
        x, y, z = self.xyz_in_viewing_conditions(vc)
        return argb_from_xyz(x, y, z)

    def xyz_in_viewing_conditions(
        self, vc: Optional[ViewingConditions] = None
    ) -> Tuple[float, float, float]:
        """Inverse CAM16 transform to XYZ."""
        if vc is None:
            vc = ViewingConditions.standard()

        if self.chroma == 0.0 or self.j == 0.0:
            alpha = 0.0
        else:
            alpha = self.chroma / math.sqrt(self.j / 100.0)

        t = math.pow(alpha / math.pow(1.64 - math.pow(0.29, vc.n), 0.73), 1.0 / 0.9)
        h_rad = math.radians(self.hue)

        e_hue = 0.25 * (math.cos(h_rad + 2.0) + 3.8)
        ac = vc.aw * math.pow(self.j / 100.0, 1.0 / vc.c / vc.z)
        p1 = e_hue * (50000.0 / 13.0) * vc.n_c * vc.ncb
        p2 = ac / vc.nbb

        h_sin = math.sin(h_rad)
        h_cos = math.cos(h_rad)

        gamma = 23.0 * (p2 + 0.305) * t / (23.0 * p1 + 11.0 * t * h_cos + 108.0 * t * h_sin)
        a = gamma * h_cos
        b = gamma * h_sin
        r_a = (460.0 * p2 + 451.0 * a + 288.0 * b) / 1403.0
        g_a = (460.0 * p2 - 891.0 * a - 261.0 * b) / 1403.0
        b_a = (460.0 * p2 - 220.0 * a - 6300.0 * b) / 1403.0

        r_c_base = max(0.0, 27.13 * abs(r_a) / (400.0 - abs(r_a)))
        r_c = signum(r_a) * (100.0 / vc.fl) * math.pow(r_c_base, 1.0 / 0.42)
        g_c_base = max(0.0, 27.13 * abs(g_a) / (400.0 - abs(g_a)))
        g_c = signum(g_a) * (100.0 / vc.fl) * math.pow(g_c_base, 1.0 / 0.42)
        b_c_base = max(0.0, 27.13 * abs(b_a) / (400.0 - abs(b_a)))
        b_c = signum(b_a) * (100.0 / vc.fl) * math.pow(b_c_base, 1.0 / 0.42)

        r_f = r_c / vc.rgb_d[0]
        g_f = g_c / vc.rgb_d[1]
        b_f = b_c / vc.rgb_d[2]

        x = _M16_INV[0][0] * r_f + _M16_INV[0][1] * g_f + _M16_INV[0][2] * b_f
        y = _M16_INV[1][0] * r_f + _M16_INV[1][1] * g_f + _M16_INV[1][2] * b_f
        z = _M16_INV[2][0] * r_f + _M16_INV[2][1] * g_f + _M16_INV[2][2] * b_f
        return x, y, z


# =============================================================================
# Validation Block
# =============================================================================
if __name__ == "__main__":
    print("--- Prisma CAM16 Validation ---")

    print("1. ARGB -> CAM16 -> ARGB round trip...")
    samples = [0xFFFF0000, 0xFF00FF00, 0xFF0000FF, 0xFF6750A4, 0xFF808080]
    failures = [hex(x) for x in samples if Cam16.from_int(x).to_int() != x]
    print(f"   {'[PASS]' if not failures else '[FAIL] ' + ', '.join(failures)}")

    print("2. UCS reconstruction...")
    cam = Cam16.from_int(0xFF6750A4)
    again = Cam16.from_ucs(cam.jstar, cam.astar, cam.bstar)
    print(f"   dE: {cam.distance(again):.2e}")
