# -*- coding: utf-8 -*-
"""
Prisma: Weaving perceptual color schemes from a single seed
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: factory.py — Variant name -> scheme class.
"""

from typing import Dict, Type, Union

from prisma_dynamic import Variant
from prisma_hct import Hct

from .expressive import SchemeExpressive, SchemeVibrant
from .fidelity import SchemeContent, SchemeFidelity
from .monochrome import SchemeMonochrome
from .tonal import SchemeFruitSalad, SchemeNeutral, SchemeRainbow, SchemeTonalSpot
from .variant import VariantScheme

__all__ = ["SCHEME_MODELS", "scheme_for_variant"]

SCHEME_MODELS: Dict[Variant, Type[VariantScheme]] = {
    cls.VARIANT: cls
    for cls in (
        SchemeMonochrome,
        SchemeNeutral,
        SchemeTonalSpot,
        SchemeVibrant,
        SchemeExpressive,
        SchemeFidelity,
        SchemeContent,
        SchemeRainbow,
        SchemeFruitSalad,
    )
}


def scheme_for_variant(
    variant: Union[Variant, str],
    source_color_hct: Hct,
    is_dark: bool,
    contrast_level: float = 0.0,
) -> VariantScheme:
    """
    Build the scheme of ``variant`` for ``source_color_hct``.

    Raises:
        ValueError: If ``variant`` names no known variant.
    """
    model = SCHEME_MODELS[Variant.parse(variant)]
    return model(source_color_hct, is_dark, contrast_level)
