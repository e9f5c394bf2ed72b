# -*- coding: utf-8 -*-
"""
Prisma: Weaving perceptual color schemes from a single seed
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: fidelity.py — Source-faithful scheme variants.

Fidelity and content keep the source's own chroma in the primary palette
(and, through the role tones, its tone in the primary container), which
suits themes derived from images.  Chroma of the remaining palettes scales
with the source.  The tertiary comes from temperature analysis, with
disliked dark yellow-greens lifted out of the way.
"""

from prisma_dynamic import Variant
from prisma_hct import Hct
from prisma_palette import TonalPalette
from prisma_temperature import DislikeAnalyzer, TemperatureCache

from .variant import PaletteSet, VariantScheme

__all__ = ["SchemeFidelity", "SchemeContent"]


def _source_scaled(source: Hct, tertiary: Hct) -> PaletteSet:
    return (
        TonalPalette.of(source.hue, source.chroma),
        TonalPalette.of(source.hue, max(source.chroma - 32.0, source.chroma * 0.5)),
        TonalPalette.from_hct(DislikeAnalyzer.fix_if_disliked(tertiary)),
        TonalPalette.of(source.hue, source.chroma / 8.0),
        TonalPalette.of(source.hue, source.chroma / 8.0 + 4.0),
    )


class SchemeFidelity(VariantScheme):
    """Tertiary is the temperature complement of the source."""

    __slots__ = ()

    VARIANT = Variant.FIDELITY

    @classmethod
    def palettes(cls, source: Hct) -> PaletteSet:
        return _source_scaled(source, TemperatureCache(source).complement)


class SchemeContent(VariantScheme):
    """Tertiary is the third of three analogous colors over six steps."""

    __slots__ = ()

    VARIANT = Variant.CONTENT

    @classmethod
    def palettes(cls, source: Hct) -> PaletteSet:
        return _source_scaled(source, TemperatureCache(source).analogous(count=3, divisions=6)[2])
