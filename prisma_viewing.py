# -*- coding: utf-8 -*-
"""
Prisma: Weaving perceptual color schemes from a single seed
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: prisma_viewing.py — CAM16 viewing conditions.

In traditional color spaces a color can be identified solely by the
observer's measurement of the color.  Color appearance models such as
CAM16 also use information about the environment where the color was
observed, known as the viewing conditions.

For example, white under the traditional assumption of a midday sun white
point is accurately measured as a slightly chromatic blue by CAM16 (roughly
hue 203, chroma 3, lightness 100).

This module precomputes every constant that depends only on the viewing
conditions, so that the per-color CAM16 transforms stay cheap.

References:
    - Li, C. et al. (2017). "Comprehensive color solutions: CAM16, CAT16,
      and CAM16-UCS". Color Research & Application 42(6).
"""

from __future__ import annotations

import functools
import math
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from prisma_colorutils import lerp, white_point_d65, y_from_lstar

__all__ = ["ViewingConditions"]

# XYZ -> CAM16 cone response matrix (rows: R, G, B).
_M16: Tuple[Tuple[float, float, float], ...] = (
    (0.401288, 0.650173, -0.051461),
    (-0.250268, 1.204414, 0.045854),
    (-0.002079, 0.048952, 0.953127),
)


@dataclass(slots=True, frozen=True)
class ViewingConditions:
    """
    Fully resolved, immutable CAM16 parameter set.

    Build instances with :meth:`make`; :meth:`standard` returns the shared
    sRGB-like default (D65, 50 L* gray background, average surround).

    Attributes:
        white_point: XYZ of the adopted white (Y=100).
        adapting_luminance: L_A, in cd/m^2.
        background_lstar: L* of the background, floored at 0.1.
        surround: Input surround in [0, 2].
        discounting_illuminant: Whether the observer fully adapts.
        n: Background-to-white luminance ratio Y_b / Y_w.
        aw: Achromatic response of the white point.
        nbb, ncb: Brightness and chromatic induction factors.
        c: Exponential non-linearity of the surround.
        n_c: Chromatic induction factor of the surround.
        rgb_d: Per-channel discounting factors.
        fl: Luminance-level adaptation factor F_L.
        fl_root: F_L ** 0.25.
        z: Base exponential non-linearity 1.48 + sqrt(n).
    """
    white_point: Tuple[float, float, float]
    adapting_luminance: float
    background_lstar: float
    surround: float
    discounting_illuminant: bool
    n: float
    aw: float
    nbb: float
    ncb: float
    c: float
    n_c: float
    rgb_d: Tuple[float, float, float]
    fl: float
    fl_root: float
    z: float

    @classmethod
    def make(
        cls,
        white_point: Optional[Sequence[float]] = None,
        adapting_luminance: float = -1.0,
        background_lstar: float = 50.0,
        surround: float = 2.0,
        discounting_illuminant: bool = False,
    ) -> ViewingConditions:
        """
        Create viewing conditions from physically measurable inputs.

        Args:
            white_point: XYZ of white (Y=100). Defaults to D65.
            adapting_luminance: Light strength in lux.  Non-positive values
                are replaced by the luminance of a 50 L* gray under an
                average 200 lux office light.
            background_lstar: Average L* of the 10 degrees around the color.
            surround: Brightness of the entire environment, 0 (dark room)
                to 2 (average daylight).
            discounting_illuminant: Whether the eyes have adjusted to the
                lighting.

        Raises:
            ValueError: If ``surround`` is outside [0, 2].
        """
        if not (0.0 <= surround <= 2.0):
            raise ValueError(f"Surround must be between 0.0 and 2.0, got {surround}")

        wp = tuple(float(v) for v in (white_point if white_point is not None else white_point_d65()))
        if len(wp) != 3:
            raise ValueError(f"White point must have 3 components, got {len(wp)}")

        if adapting_luminance <= 0.0:
            adapting_luminance = (200.0 / math.pi) * y_from_lstar(50.0) / 100.0
        # Black backgrounds are non-physical and produce infinities.
        background_lstar = max(0.1, background_lstar)

        r_w = wp[0] * _M16[0][0] + wp[1] * _M16[0][1] + wp[2] * _M16[0][2]
        g_w = wp[0] * _M16[1][0] + wp[1] * _M16[1][1] + wp[2] * _M16[1][2]
        b_w = wp[0] * _M16[2][0] + wp[1] * _M16[2][1] + wp[2] * _M16[2][2]

        # Surround domain [0, 2] maps onto CAM16's F in [0.8, 1.0].
        f = 0.8 + surround / 10.0
        if f >= 0.9:
            c = lerp(0.59, 0.69, (f - 0.9) * 10.0)
        else:
            c = lerp(0.525, 0.59, (f - 0.8) * 10.0)

        if discounting_illuminant:
            d = 1.0
        else:
            d = f * (1.0 - (1.0 / 3.6) * math.exp((-adapting_luminance - 42.0) / 92.0))
        d = min(1.0, max(0.0, d))

        n_c = f
        rgb_d = (
            d * (100.0 / r_w) + 1.0 - d,
            d * (100.0 / g_w) + 1.0 - d,
            d * (100.0 / b_w) + 1.0 - d,
        )

        k = 1.0 / (5.0 * adapting_luminance + 1.0)
        k4 = k * k * k * k
        k4f = 1.0 - k4
        fl = k4 * adapting_luminance + 0.1 * k4f * k4f * math.pow(5.0 * adapting_luminance, 1.0 / 3.0)

        n = y_from_lstar(background_lstar) / wp[1]
        z = 1.48 + math.sqrt(n)
        nbb = 0.725 / math.pow(n, 0.2)
        ncb = nbb

        rgb_a_factors = (
            math.pow(fl * rgb_d[0] * r_w / 100.0, 0.42),
            math.pow(fl * rgb_d[1] * g_w / 100.0, 0.42),
            math.pow(fl * rgb_d[2] * b_w / 100.0, 0.42),
        )
        rgb_a = tuple(400.0 * v / (v + 27.13) for v in rgb_a_factors)
        aw = (2.0 * rgb_a[0] + rgb_a[1] + 0.05 * rgb_a[2]) * nbb

        return cls(
            white_point=wp,  # type: ignore[arg-type]
            adapting_luminance=adapting_luminance,
            background_lstar=background_lstar,
            surround=surround,
            discounting_illuminant=discounting_illuminant,
            n=n,
            aw=aw,
            nbb=nbb,
            ncb=ncb,
            c=c,
            n_c=n_c,
            rgb_d=rgb_d,
            fl=fl,
            fl_root=math.pow(fl, 0.25),
            z=z,
        )

    @staticmethod
    @functools.lru_cache(maxsize=1)
    def standard() -> ViewingConditions:
        """The process-wide default, built on first use and shared thereafter."""
        return ViewingConditions.make()

    # CAM16 literature and other ports call the default "sRGB".
    s_rgb = standard

    @property
    def background_y_to_white_point_y(self) -> float:
        return self.n
