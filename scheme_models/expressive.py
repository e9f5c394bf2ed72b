# -*- coding: utf-8 -*-
"""
Prisma: Weaving perceptual color schemes from a single seed
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: expressive.py — Hue-band rotated scheme variants.

Secondary and tertiary hues are rotated by an amount that depends on which
band of the hue circle the source falls in, so that e.g. a blue source does
not produce a muddy secondary.  Band edges and rotations are listed per
variant below.
"""

from typing import ClassVar, Tuple

from prisma_dynamic import Variant
from prisma_hct import Hct
from prisma_palette import TonalPalette

from .variant import PaletteSet, VariantScheme

__all__ = ["SchemeVibrant", "SchemeExpressive"]


class SchemeVibrant(VariantScheme):
    """Maximum-chroma primary; neighbouring hues for the other accents."""

    __slots__ = ()

    VARIANT = Variant.VIBRANT
    HUES: ClassVar[Tuple[float, ...]] = (0.0, 41.0, 61.0, 101.0, 131.0, 181.0, 251.0, 301.0, 360.0)
    SECONDARY_ROTATIONS: ClassVar[Tuple[float, ...]] = (18.0, 15.0, 10.0, 12.0, 15.0, 18.0, 15.0, 12.0, 12.0)
    TERTIARY_ROTATIONS: ClassVar[Tuple[float, ...]] = (35.0, 30.0, 20.0, 25.0, 30.0, 35.0, 30.0, 25.0, 25.0)

    @classmethod
    def palettes(cls, source: Hct) -> PaletteSet:
        return (
            TonalPalette.of(source.hue, 200.0),
            cls.rotated_palette(source, cls.HUES, cls.SECONDARY_ROTATIONS, 24.0),
            cls.rotated_palette(source, cls.HUES, cls.TERTIARY_ROTATIONS, 32.0),
            TonalPalette.of(source.hue, 10.0),
            TonalPalette.of(source.hue, 12.0),
        )


class SchemeExpressive(VariantScheme):
    """The source hue is deliberately absent from the primary palette."""

    __slots__ = ()

    VARIANT = Variant.EXPRESSIVE
    HUES: ClassVar[Tuple[float, ...]] = (0.0, 21.0, 51.0, 121.0, 151.0, 191.0, 271.0, 321.0, 360.0)
    SECONDARY_ROTATIONS: ClassVar[Tuple[float, ...]] = (45.0, 95.0, 45.0, 20.0, 45.0, 90.0, 45.0, 45.0, 45.0)
    TERTIARY_ROTATIONS: ClassVar[Tuple[float, ...]] = (120.0, 120.0, 20.0, 45.0, 20.0, 15.0, 20.0, 120.0, 120.0)

    @classmethod
    def palettes(cls, source: Hct) -> PaletteSet:
        return (
            cls.offset_palette(source, 240.0, 40.0),
            cls.rotated_palette(source, cls.HUES, cls.SECONDARY_ROTATIONS, 24.0),
            cls.rotated_palette(source, cls.HUES, cls.TERTIARY_ROTATIONS, 32.0),
            cls.offset_palette(source, 15.0, 8.0),
            cls.offset_palette(source, 15.0, 12.0),
        )
