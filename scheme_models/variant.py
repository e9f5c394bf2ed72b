# -*- coding: utf-8 -*-
"""
Prisma: Weaving perceptual color schemes from a single seed
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: variant.py — Base class for scheme variants.

A variant is a recipe turning one source color into the five key palettes
of a ``DynamicScheme``.  Subclasses set ``VARIANT`` and override
``palettes()``; everything else (role resolution, caching, contrast) is
inherited unchanged.
"""

from typing import ClassVar, Sequence, Tuple

from prisma_colorutils import sanitize_degrees_double
from prisma_dynamic import DynamicScheme, Variant
from prisma_hct import Hct
from prisma_palette import TonalPalette

__all__ = ["VariantScheme", "PaletteSet"]

# (primary, secondary, tertiary, neutral, neutral_variant)
PaletteSet = Tuple[TonalPalette, TonalPalette, TonalPalette, TonalPalette, TonalPalette]


class VariantScheme(DynamicScheme):
    """
    DynamicScheme whose palettes are derived from ``source_color_hct``.

    Subclasses must override ``palettes()``.

    Args:
        source_color_hct: The seed color.
        is_dark: Dark theme when True.
        contrast_level: -1 (reduced) to 1 (maximum); 0 is the default.
    """

    __slots__ = ()

    VARIANT: ClassVar[Variant]

    def __init__(self, source_color_hct: Hct, is_dark: bool, contrast_level: float = 0.0):
        primary, secondary, tertiary, neutral, neutral_variant = self.palettes(source_color_hct)
        super().__init__(
            source_color_argb=source_color_hct.to_int(),
            variant=self.VARIANT,
            is_dark=is_dark,
            contrast_level=contrast_level,
            primary_palette=primary,
            secondary_palette=secondary,
            tertiary_palette=tertiary,
            neutral_palette=neutral,
            neutral_variant_palette=neutral_variant,
        )

    @classmethod
    def palettes(cls, source: Hct) -> PaletteSet:
        """Override in subclass: return the five key palettes."""
        raise NotImplementedError(
            f"{cls.__name__} must implement palettes()"
        )

    @staticmethod
    def offset_palette(source: Hct, hue_offset: float, chroma: float) -> TonalPalette:
        """Palette at the source hue rotated by ``hue_offset`` degrees."""
        return TonalPalette.of(sanitize_degrees_double(source.hue + hue_offset), chroma)

    @staticmethod
    def rotated_palette(
        source: Hct, hues: Sequence[float], rotations: Sequence[float], chroma: float
    ) -> TonalPalette:
        """Palette at the band-dependent rotation of the source hue."""
        return TonalPalette.of(DynamicScheme.get_rotated_hue(source, hues, rotations), chroma)
