# -*- coding: utf-8 -*-
"""
Prisma: Weaving perceptual color schemes from a single seed
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: prisma_contrast.py — Tone-space contrast ratios.

Contrast ratio is the WCAG measure ``(Y_light + 5) / (Y_dark + 5)`` on a
0-100 luminance scale, ranging from 1 (identical) to 21 (black on white).
Because HCT tone is L*, and L* is a function of Y alone, every query in this
module works directly on tones.

``Contrast.lighter`` / ``Contrast.darker`` invert the ratio and report the
outcome as a :class:`ToneResult`; the ``*_unsafe`` variants collapse an
unattainable result onto white or black.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Optional

from prisma_colorutils import Attainment, clamp_double, lerp, lstar_from_y, y_from_lstar

__all__ = ["Attainment", "ToneResult", "Contrast", "ContrastCurve"]

# Tolerance on the achieved ratio before a result counts as unattainable.
CONTRAST_RATIO_EPSILON: Final[float] = 0.04

# Tone nudge applied away from the reference so that rounding to an 8-bit
# color never drops the achieved ratio below the target.
LUMINANCE_GAMUT_MAP_TOLERANCE: Final[float] = 0.4


@dataclass(slots=True, frozen=True)
class ToneResult:
    """
    Outcome of a contrast query.

    Attributes:
        tone: The resolved L*, or None when unattainable.
        attainment: EXACT if the ratio is met, BEST_EFFORT if it falls short
            by no more than the 0.04 tolerance, UNATTAINABLE otherwise.
    """
    tone: Optional[float]
    attainment: Attainment

    @property
    def attained(self) -> bool:
        return self.attainment is not Attainment.UNATTAINABLE

    def unwrap_or(self, default: float) -> float:
        """The resolved tone, or ``default`` when unattainable."""
        return self.tone if self.tone is not None else default


_UNATTAINABLE: Final[ToneResult] = ToneResult(None, Attainment.UNATTAINABLE)


class Contrast:
    """Static helpers for contrast ratios between tones."""

    @staticmethod
    def ratio_of_tones(tone_a: float, tone_b: float) -> float:
        """
        Contrast ratio of two tones; symmetric, in [1, 21].

        Tones are clamped to [0, 100] first.
        """
        tone_a = clamp_double(0.0, 100.0, tone_a)
        tone_b = clamp_double(0.0, 100.0, tone_b)
        return Contrast.ratio_of_ys(y_from_lstar(tone_a), y_from_lstar(tone_b))

    @staticmethod
    def ratio_of_ys(y1: float, y2: float) -> float:
        lighter = max(y1, y2)
        darker = y1 if lighter == y2 else y2
        return (lighter + 5.0) / (darker + 5.0)

    @staticmethod
    def lighter(tone: float, ratio: float) -> ToneResult:
        """
        A tone >= ``tone`` whose contrast with it is at least ``ratio``.

        Args:
            tone: Reference tone, 0-100.
            ratio: Target contrast ratio, 1-21.
        """
        if tone < 0.0 or tone > 100.0:
            return _UNATTAINABLE
        dark_y = y_from_lstar(tone)
        light_y = ratio * (dark_y + 5.0) - 5.0
        if light_y < 0.0 or light_y > 100.0:
            return _UNATTAINABLE
        real_contrast = Contrast.ratio_of_ys(light_y, dark_y)
        delta = abs(real_contrast - ratio)
        if real_contrast < ratio and delta > CONTRAST_RATIO_EPSILON:
            return _UNATTAINABLE
        value = lstar_from_y(light_y) + LUMINANCE_GAMUT_MAP_TOLERANCE
        if value < 0.0 or value > 100.0:
            return _UNATTAINABLE
        attainment = Attainment.EXACT if real_contrast >= ratio else Attainment.BEST_EFFORT
        return ToneResult(value, attainment)

    @staticmethod
    def darker(tone: float, ratio: float) -> ToneResult:
        """A tone <= ``tone`` whose contrast with it is at least ``ratio``."""
        if tone < 0.0 or tone > 100.0:
            return _UNATTAINABLE
        light_y = y_from_lstar(tone)
        dark_y = (light_y + 5.0) / ratio - 5.0
        if dark_y < 0.0 or dark_y > 100.0:
            return _UNATTAINABLE
        real_contrast = Contrast.ratio_of_ys(light_y, dark_y)
        delta = abs(real_contrast - ratio)
        if real_contrast < ratio and delta > CONTRAST_RATIO_EPSILON:
            return _UNATTAINABLE
        # Subtracting the tolerance can dip just below 0.
        value = lstar_from_y(dark_y) - LUMINANCE_GAMUT_MAP_TOLERANCE
        if value < 0.0 or value > 100.0:
            return _UNATTAINABLE
        attainment = Attainment.EXACT if real_contrast >= ratio else Attainment.BEST_EFFORT
        return ToneResult(value, attainment)

    @staticmethod
    def lighter_unsafe(tone: float, ratio: float) -> float:
        """Like :meth:`lighter`, but 100 when unattainable."""
        return Contrast.lighter(tone, ratio).unwrap_or(100.0)

    @staticmethod
    def darker_unsafe(tone: float, ratio: float) -> float:
        """Like :meth:`darker`, but 0 when unattainable."""
        return Contrast.darker(tone, ratio).unwrap_or(0.0)


@dataclass(slots=True, frozen=True)
class ContrastCurve:
    """
    Piecewise-linear contrast target over the contrast level.

    Breakpoints sit at levels -1 (low), 0 (normal), 0.5 (medium) and 1
    (high); levels outside [-1, 1] clamp to the end values.
    """
    low: float
    normal: float
    medium: float
    high: float

    def get(self, contrast_level: float) -> float:
        if contrast_level <= -1.0:
            return self.low
        elif contrast_level < 0.0:
            return lerp(self.low, self.normal, (contrast_level + 1.0) / 1.0)
        elif contrast_level < 0.5:
            return lerp(self.normal, self.medium, contrast_level / 0.5)
        elif contrast_level < 1.0:
            return lerp(self.medium, self.high, (contrast_level - 0.5) / 0.5)
        return self.high


# =============================================================================
# Validation Block
# =============================================================================
if __name__ == "__main__":
    print("--- Prisma Contrast Validation ---")

    print("1. Identity and bounds...")
    ok = all(Contrast.ratio_of_tones(t, t) == 1.0 for t in range(101))
    print(f"   ratio(t, t) == 1 {'[PASS]' if ok else '[FAIL]'}")
    print(f"   ratio(0, 100) = {Contrast.ratio_of_tones(0.0, 100.0):.3f}")

    print("2. Lighter/darker meet the target...")
    res = Contrast.lighter(40.0, 4.5)
    print(f"   lighter(40, 4.5) -> {res}")
    print(f"   darker(10, 4.5)  -> {Contrast.darker(10.0, 4.5)}")
    print(f"   darker_unsafe(10, 4.5) = {Contrast.darker_unsafe(10.0, 4.5)}")

    print("3. Curve...")
    curve = ContrastCurve(3.0, 4.5, 7.0, 11.0)
    print("   " + ", ".join(f"{lvl:+.2f}:{curve.get(lvl):.2f}" for lvl in (-2, -1, -0.5, 0, 0.25, 0.5, 1, 2)))
