# -*- coding: utf-8 -*-
"""
Prisma: Weaving perceptual color schemes from a single seed
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: tonal.py — Fixed-offset scheme variants.

Each variant here places its palettes at fixed hue offsets and fixed
chromas relative to the source, independent of how colorful the source is:

    Variant       primary    secondary  tertiary   neutral  neutral var.
    tonal-spot    (+0, 36)   (+0, 16)   (+60, 24)  (+0, 6)  (+0, 8)
    neutral       (+0, 12)   (+0, 8)    (+0, 16)   (+0, 2)  (+0, 2)
    rainbow       (+0, 48)   (+0, 16)   (+60, 24)  (+0, 0)  (+0, 0)
    fruit-salad   (-50, 48)  (-50, 36)  (+0, 36)   (+0, 10) (+0, 16)
"""

from typing import ClassVar, Tuple

from prisma_dynamic import Variant
from prisma_hct import Hct

from .variant import PaletteSet, VariantScheme

__all__ = ["FixedOffsetScheme", "SchemeTonalSpot", "SchemeNeutral", "SchemeRainbow", "SchemeFruitSalad"]


class FixedOffsetScheme(VariantScheme):
    """Variant described entirely by a table of (hue offset, chroma) pairs."""

    __slots__ = ()

    PALETTE_OFFSETS: ClassVar[Tuple[Tuple[float, float], ...]]

    @classmethod
    def palettes(cls, source: Hct) -> PaletteSet:
        if len(cls.PALETTE_OFFSETS) != 5:
            raise ValueError(
                f"{cls.__name__}.PALETTE_OFFSETS must hold 5 entries, got {len(cls.PALETTE_OFFSETS)}"
            )
        return tuple(  # type: ignore[return-value]
            cls.offset_palette(source, offset, chroma) for offset, chroma in cls.PALETTE_OFFSETS
        )


class SchemeTonalSpot(FixedOffsetScheme):
    """The default Material theme: a calm primary with a 60 degree tertiary."""
    __slots__ = ()
    VARIANT = Variant.TONAL_SPOT
    PALETTE_OFFSETS = ((0.0, 36.0), (0.0, 16.0), (60.0, 24.0), (0.0, 6.0), (0.0, 8.0))


class SchemeNeutral(FixedOffsetScheme):
    """Nearly grayscale, with a hint of the source hue."""
    __slots__ = ()
    VARIANT = Variant.NEUTRAL
    PALETTE_OFFSETS = ((0.0, 12.0), (0.0, 8.0), (0.0, 16.0), (0.0, 2.0), (0.0, 2.0))


class SchemeRainbow(FixedOffsetScheme):
    """Playful accents on fully gray surfaces."""
    __slots__ = ()
    VARIANT = Variant.RAINBOW
    PALETTE_OFFSETS = ((0.0, 48.0), (0.0, 16.0), (60.0, 24.0), (0.0, 0.0), (0.0, 0.0))


class SchemeFruitSalad(FixedOffsetScheme):
    """Playful theme; the source hue lands in the tertiary palette."""
    __slots__ = ()
    VARIANT = Variant.FRUIT_SALAD
    PALETTE_OFFSETS = ((-50.0, 48.0), (-50.0, 36.0), (0.0, 36.0), (0.0, 10.0), (0.0, 16.0))
