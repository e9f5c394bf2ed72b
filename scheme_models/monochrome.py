# -*- coding: utf-8 -*-
"""
Prisma: Weaving perceptual color schemes from a single seed
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: monochrome.py — Grayscale scheme variant.
"""

from prisma_dynamic import Variant
from prisma_hct import Hct
from prisma_palette import TonalPalette

from .variant import PaletteSet, VariantScheme

__all__ = ["SchemeMonochrome"]


class SchemeMonochrome(VariantScheme):
    """All palettes at zero chroma; the roles switch to black/white accents."""

    __slots__ = ()

    VARIANT = Variant.MONOCHROME

    @classmethod
    def palettes(cls, source: Hct) -> PaletteSet:
        gray = TonalPalette.of(source.hue, 0.0)
        return (gray, gray, gray, gray, gray)
