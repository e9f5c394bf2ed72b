# -*- coding: utf-8 -*-
"""
Prisma: Weaving perceptual color schemes from a single seed
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: prisma_hct.py — Hue, Chroma, Tone.

HCT combines CAM16 hue and chroma with CIE L* as tone.  L* tracks
perceived lightness and relative luminance together, which makes contrast
ratios a function of tone alone; CAM16 hue and chroma stay stable across
lightness changes.

An ``Hct`` is an immutable value backed by one packed sRGB color.  The
three attributes are always re-measured from that color, so a request the
gamut cannot hold (e.g. chroma 150 at tone 90) settles on the nearest
attainable chroma instead of failing.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from prisma_cam16 import Cam16
from prisma_colorutils import hex_from_argb, lstar_from_argb, lstar_from_y, round_half_up
from prisma_solver import HctSolver
from prisma_viewing import ViewingConditions

__all__ = ["Hct"]


@dataclass(slots=True, frozen=True, repr=False)
class Hct:
    """
    Immutable HCT color.

    Build with :meth:`from_hct` or :meth:`from_int`; derive variations with
    :meth:`with_hue`, :meth:`with_chroma` and :meth:`with_tone`.  Two values
    are equal when they are backed by the same packed color.
    """
    argb: int
    hue: float = field(compare=False)
    chroma: float = field(compare=False)
    tone: float = field(compare=False)

    @classmethod
    def from_hct(cls, hue: float, chroma: float, tone: float) -> Hct:
        """
        Args:
            hue: 0 <= hue < 360; other values are wrapped.
            chroma: Requested colorfulness; may be clipped to the gamut.
            tone: L*, 0-100.
        """
        return cls.from_int(HctSolver.solve_to_int(hue, chroma, tone))

    @classmethod
    def from_int(cls, argb: int) -> Hct:
        cam = Cam16.from_int(argb)
        return cls(argb, cam.hue, cam.chroma, lstar_from_argb(argb))

    def to_int(self) -> int:
        return self.argb

    def with_hue(self, hue: float) -> Hct:
        return Hct.from_hct(hue, self.chroma, self.tone)

    def with_chroma(self, chroma: float) -> Hct:
        return Hct.from_hct(self.hue, chroma, self.tone)

    def with_tone(self, tone: float) -> Hct:
        return Hct.from_hct(self.hue, self.chroma, tone)

    def in_viewing_conditions(self, vc: ViewingConditions) -> Hct:
        """
        Translates this color to how it would appear under ``vc``.

        The color is viewed in ``vc`` and the resulting XYZ is re-measured
        under the standard conditions, which is what a designer needs when
        matching a color seen in a dim room on a default display.
        """
        cam = Cam16.from_int(self.argb)
        x, y, z = cam.xyz_in_viewing_conditions(vc)
        recast = Cam16.from_xyz_in_viewing_conditions(x, y, z, ViewingConditions.make())
        return Hct.from_hct(recast.hue, recast.chroma, lstar_from_y(y))

    def is_yellow(self) -> bool:
        """True for the dark-yellow/olive hue band (rounded hue 90-111)."""
        return 90 <= round_half_up(self.hue) <= 111

    def __repr__(self) -> str:
        return (
            f"Hct(hue={self.hue:.2f}, chroma={self.chroma:.2f}, "
            f"tone={self.tone:.2f}, argb={hex_from_argb(self.argb)})"
        )


# =============================================================================
# Validation Block
# =============================================================================
if __name__ == "__main__":
    print("--- Prisma HCT Validation ---")

    h = Hct.from_hct(120.0, 20.0, 50.0)
    print(f"1. {h}")
    again = Hct.from_int(h.to_int())
    ok = abs(again.hue - 120.0) <= 1.0 and abs(again.chroma - 20.0) <= 1.0 and abs(again.tone - 50.0) <= 0.5
    print(f"   Round trip {'[PASS]' if ok else '[FAIL]'}")

    print("2. Idempotent once materialised...")
    print(f"   {'[PASS]' if Hct.from_int(again.to_int()) == again else '[FAIL]'}")

    print("3. Unreachable chroma clips...")
    print(f"   {Hct.from_hct(270.0, 200.0, 90.0)}")
