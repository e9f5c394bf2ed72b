# -*- coding: utf-8 -*-
"""
Prisma: Weaving perceptual color schemes from a single seed
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: prisma_roles.py — The Material color roles.

Every role is a ``DynamicColor`` record: a palette, a named default-tone
strategy, and (where it carries content) the role it is drawn on and the
contrast curve it must meet there.  The roles are registered by name on
import so that backgrounds and tone-delta partners can be referenced as
plain strings.

Default tones follow the 2021 Material 3 baseline: tone 40 / 80 accents,
90 / 30 containers, 98 / 6 surfaces, with the content-driven variants
(fidelity, content) keeping the seed's own tone for primary containers.
"""

from __future__ import annotations

from typing import Final, Tuple

from prisma_contrast import ContrastCurve
from prisma_dynamic import (
    HIGHEST_SURFACE,
    DynamicColor,
    DynamicScheme,
    PaletteRole,
    ToneDeltaPair,
    TonePolarity,
    ToneStrategy,
    Variant,
    register_role,
)
from prisma_hct import Hct
from prisma_temperature import DislikeAnalyzer

__all__ = ["MaterialDynamicColors", "find_desired_chroma_by_tone", "ALL_ROLES"]


# =============================================================================
# 1. TONE STRATEGIES
# =============================================================================

def _is_fidelity(s: DynamicScheme) -> bool:
    return s.variant in (Variant.FIDELITY, Variant.CONTENT)


def _is_monochrome(s: DynamicScheme) -> bool:
    return s.variant is Variant.MONOCHROME


def find_desired_chroma_by_tone(hue: float, chroma: float, tone: float, by_decreasing_tone: bool) -> float:
    """
    Walks tone from ``tone`` until the palette can hold ``chroma``.

    Stops at the first tone within 0.4 of the requested chroma, or as soon
    as the reachable chroma starts falling again.
    """
    answer = tone
    closest = Hct.from_hct(hue, chroma, tone)
    if closest.chroma < chroma:
        chroma_peak = closest.chroma
        while closest.chroma < chroma:
            answer += -1.0 if by_decreasing_tone else 1.0
            candidate = Hct.from_hct(hue, chroma, answer)
            if chroma_peak > candidate.chroma:
                break
            if abs(candidate.chroma - chroma) < 0.4:
                break
            if abs(candidate.chroma - chroma) < abs(closest.chroma - chroma):
                closest = candidate
            chroma_peak = max(chroma_peak, candidate.chroma)
    return answer


def _by_brightness(light: float, dark: float) -> ToneStrategy:
    def tone(s: DynamicScheme) -> float:
        return dark if s.is_dark else light
    tone.__name__ = f"tone_{light:g}_{dark:g}"
    return tone


def _curve_by_brightness(light: ContrastCurve, dark: ContrastCurve) -> ToneStrategy:
    def tone(s: DynamicScheme) -> float:
        return (dark if s.is_dark else light).get(s.contrast_level)
    return tone


def _key_color_tone(role: PaletteRole) -> ToneStrategy:
    def tone(s: DynamicScheme) -> float:
        return s.palette_for(role).key_color.tone
    tone.__name__ = f"{role.value}_key_tone"
    return tone


def _primary_tone(s: DynamicScheme) -> float:
    if _is_monochrome(s):
        return 100.0 if s.is_dark else 0.0
    return 80.0 if s.is_dark else 40.0


def _on_primary_tone(s: DynamicScheme) -> float:
    if _is_monochrome(s):
        return 10.0 if s.is_dark else 90.0
    return 20.0 if s.is_dark else 100.0


def _primary_container_tone(s: DynamicScheme) -> float:
    if _is_fidelity(s):
        return s.source_color_hct.tone
    if _is_monochrome(s):
        return 85.0 if s.is_dark else 25.0
    return 30.0 if s.is_dark else 90.0


def _on_primary_container_tone(s: DynamicScheme) -> float:
    if _is_fidelity(s):
        return DynamicColor.foreground_tone(MaterialDynamicColors.primary_container.tone(s), 4.5)
    if _is_monochrome(s):
        return 0.0 if s.is_dark else 100.0
    return 90.0 if s.is_dark else 10.0


def _on_secondary_tone(s: DynamicScheme) -> float:
    if _is_monochrome(s):
        return 10.0 if s.is_dark else 100.0
    return 20.0 if s.is_dark else 100.0


def _secondary_container_tone(s: DynamicScheme) -> float:
    initial = 30.0 if s.is_dark else 90.0
    if _is_monochrome(s):
        return 30.0 if s.is_dark else 85.0
    if not _is_fidelity(s):
        return initial
    return find_desired_chroma_by_tone(
        s.secondary_palette.hue, s.secondary_palette.chroma, initial, not s.is_dark
    )


def _on_secondary_container_tone(s: DynamicScheme) -> float:
    if not _is_fidelity(s):
        return 90.0 if s.is_dark else 10.0
    return DynamicColor.foreground_tone(MaterialDynamicColors.secondary_container.tone(s), 4.5)


def _tertiary_tone(s: DynamicScheme) -> float:
    if _is_monochrome(s):
        return 90.0 if s.is_dark else 25.0
    return 80.0 if s.is_dark else 40.0


def _on_tertiary_tone(s: DynamicScheme) -> float:
    if _is_monochrome(s):
        return 10.0 if s.is_dark else 90.0
    return 20.0 if s.is_dark else 100.0


def _tertiary_container_tone(s: DynamicScheme) -> float:
    if _is_monochrome(s):
        return 60.0 if s.is_dark else 49.0
    if not _is_fidelity(s):
        return 30.0 if s.is_dark else 90.0
    proposed = s.tertiary_palette.get_hct(s.source_color_hct.tone)
    return DislikeAnalyzer.fix_if_disliked(proposed).tone


def _on_tertiary_container_tone(s: DynamicScheme) -> float:
    if _is_monochrome(s):
        return 0.0 if s.is_dark else 100.0
    if not _is_fidelity(s):
        return 90.0 if s.is_dark else 10.0
    return DynamicColor.foreground_tone(MaterialDynamicColors.tertiary_container.tone(s), 4.5)


def _fixed_tone(mono: float, normal: float) -> ToneStrategy:
    def tone(s: DynamicScheme) -> float:
        return mono if _is_monochrome(s) else normal
    tone.__name__ = f"fixed_tone_{normal:g}"
    return tone


# =============================================================================
# 2. CONTRAST CURVES
# =============================================================================

_TEXT: Final[ContrastCurve] = ContrastCurve(4.5, 7.0, 11.0, 21.0)
_SUBTLE_TEXT: Final[ContrastCurve] = ContrastCurve(3.0, 4.5, 7.0, 11.0)
_ACCENT: Final[ContrastCurve] = ContrastCurve(3.0, 4.5, 7.0, 7.0)
_CONTAINER: Final[ContrastCurve] = ContrastCurve(1.0, 1.0, 3.0, 4.5)


# =============================================================================
# 3. ROLES
# =============================================================================

def _accent_pair(container: str, accent: str) -> ToneDeltaPair:
    return ToneDeltaPair(container, accent, 10.0, TonePolarity.NEARER, False)


def _fixed_pair(fixed: str, fixed_dim: str) -> ToneDeltaPair:
    return ToneDeltaPair(fixed, fixed_dim, 10.0, TonePolarity.LIGHTER, True)


class MaterialDynamicColors:
    """Namespace of the built-in roles, one class attribute per role."""

    # -- palette key colors ------------------------------------------------
    primary_palette_key_color = DynamicColor(
        "primary_palette_key_color", PaletteRole.PRIMARY, _key_color_tone(PaletteRole.PRIMARY))
    secondary_palette_key_color = DynamicColor(
        "secondary_palette_key_color", PaletteRole.SECONDARY, _key_color_tone(PaletteRole.SECONDARY))
    tertiary_palette_key_color = DynamicColor(
        "tertiary_palette_key_color", PaletteRole.TERTIARY, _key_color_tone(PaletteRole.TERTIARY))
    neutral_palette_key_color = DynamicColor(
        "neutral_palette_key_color", PaletteRole.NEUTRAL, _key_color_tone(PaletteRole.NEUTRAL))
    neutral_variant_palette_key_color = DynamicColor(
        "neutral_variant_palette_key_color", PaletteRole.NEUTRAL_VARIANT,
        _key_color_tone(PaletteRole.NEUTRAL_VARIANT))

    # -- surfaces ----------------------------------------------------------
    background = DynamicColor(
        "background", PaletteRole.NEUTRAL, _by_brightness(98.0, 6.0), is_background=True)
    on_background = DynamicColor(
        "on_background", PaletteRole.NEUTRAL, _by_brightness(10.0, 90.0),
        background="background", contrast_curve=ContrastCurve(3.0, 3.0, 4.5, 7.0))
    surface = DynamicColor(
        "surface", PaletteRole.NEUTRAL, _by_brightness(98.0, 6.0), is_background=True)
    surface_dim = DynamicColor(
        "surface_dim", PaletteRole.NEUTRAL,
        _curve_by_brightness(ContrastCurve(87.0, 87.0, 80.0, 75.0), ContrastCurve(6.0, 6.0, 6.0, 6.0)),
        is_background=True)
    surface_bright = DynamicColor(
        "surface_bright", PaletteRole.NEUTRAL,
        _curve_by_brightness(ContrastCurve(98.0, 98.0, 98.0, 98.0), ContrastCurve(24.0, 24.0, 29.0, 34.0)),
        is_background=True)
    surface_container_lowest = DynamicColor(
        "surface_container_lowest", PaletteRole.NEUTRAL,
        _curve_by_brightness(ContrastCurve(100.0, 100.0, 100.0, 100.0), ContrastCurve(4.0, 4.0, 2.0, 0.0)),
        is_background=True)
    surface_container_low = DynamicColor(
        "surface_container_low", PaletteRole.NEUTRAL,
        _curve_by_brightness(ContrastCurve(96.0, 96.0, 96.0, 95.0), ContrastCurve(10.0, 10.0, 11.0, 12.0)),
        is_background=True)
    surface_container = DynamicColor(
        "surface_container", PaletteRole.NEUTRAL,
        _curve_by_brightness(ContrastCurve(94.0, 94.0, 92.0, 90.0), ContrastCurve(12.0, 12.0, 16.0, 20.0)),
        is_background=True)
    surface_container_high = DynamicColor(
        "surface_container_high", PaletteRole.NEUTRAL,
        _curve_by_brightness(ContrastCurve(92.0, 92.0, 88.0, 85.0), ContrastCurve(17.0, 17.0, 21.0, 25.0)),
        is_background=True)
    surface_container_highest = DynamicColor(
        "surface_container_highest", PaletteRole.NEUTRAL,
        _curve_by_brightness(ContrastCurve(90.0, 90.0, 84.0, 80.0), ContrastCurve(22.0, 22.0, 26.0, 30.0)),
        is_background=True)
    on_surface = DynamicColor(
        "on_surface", PaletteRole.NEUTRAL, _by_brightness(10.0, 90.0),
        background=HIGHEST_SURFACE, contrast_curve=_TEXT)
    surface_variant = DynamicColor(
        "surface_variant", PaletteRole.NEUTRAL_VARIANT, _by_brightness(90.0, 30.0), is_background=True)
    on_surface_variant = DynamicColor(
        "on_surface_variant", PaletteRole.NEUTRAL_VARIANT, _by_brightness(30.0, 80.0),
        background=HIGHEST_SURFACE, contrast_curve=_SUBTLE_TEXT)
    inverse_surface = DynamicColor(
        "inverse_surface", PaletteRole.NEUTRAL, _by_brightness(20.0, 90.0))
    inverse_on_surface = DynamicColor(
        "inverse_on_surface", PaletteRole.NEUTRAL, _by_brightness(95.0, 20.0),
        background="inverse_surface", contrast_curve=_TEXT)
    outline = DynamicColor(
        "outline", PaletteRole.NEUTRAL_VARIANT, _by_brightness(50.0, 60.0),
        background=HIGHEST_SURFACE, contrast_curve=ContrastCurve(1.5, 3.0, 4.5, 7.0))
    outline_variant = DynamicColor(
        "outline_variant", PaletteRole.NEUTRAL_VARIANT, _by_brightness(80.0, 30.0),
        background=HIGHEST_SURFACE, contrast_curve=ContrastCurve(1.0, 1.0, 3.0, 4.5))
    shadow = DynamicColor("shadow", PaletteRole.NEUTRAL, _by_brightness(0.0, 0.0))
    scrim = DynamicColor("scrim", PaletteRole.NEUTRAL, _by_brightness(0.0, 0.0))
    surface_tint = DynamicColor(
        "surface_tint", PaletteRole.PRIMARY, _by_brightness(40.0, 80.0), is_background=True)

    # -- primary -----------------------------------------------------------
    primary = DynamicColor(
        "primary", PaletteRole.PRIMARY, _primary_tone, is_background=True,
        background=HIGHEST_SURFACE, contrast_curve=_ACCENT,
        tone_delta_pair=_accent_pair("primary_container", "primary"))
    on_primary = DynamicColor(
        "on_primary", PaletteRole.PRIMARY, _on_primary_tone,
        background="primary", contrast_curve=_TEXT)
    primary_container = DynamicColor(
        "primary_container", PaletteRole.PRIMARY, _primary_container_tone, is_background=True,
        background=HIGHEST_SURFACE, contrast_curve=_CONTAINER,
        tone_delta_pair=_accent_pair("primary_container", "primary"))
    on_primary_container = DynamicColor(
        "on_primary_container", PaletteRole.PRIMARY, _on_primary_container_tone,
        background="primary_container", contrast_curve=_TEXT)
    inverse_primary = DynamicColor(
        "inverse_primary", PaletteRole.PRIMARY, _by_brightness(80.0, 40.0),
        background="inverse_surface", contrast_curve=_ACCENT)

    # -- secondary ---------------------------------------------------------
    secondary = DynamicColor(
        "secondary", PaletteRole.SECONDARY, _by_brightness(40.0, 80.0), is_background=True,
        background=HIGHEST_SURFACE, contrast_curve=_ACCENT,
        tone_delta_pair=_accent_pair("secondary_container", "secondary"))
    on_secondary = DynamicColor(
        "on_secondary", PaletteRole.SECONDARY, _on_secondary_tone,
        background="secondary", contrast_curve=_TEXT)
    secondary_container = DynamicColor(
        "secondary_container", PaletteRole.SECONDARY, _secondary_container_tone, is_background=True,
        background=HIGHEST_SURFACE, contrast_curve=_CONTAINER,
        tone_delta_pair=_accent_pair("secondary_container", "secondary"))
    on_secondary_container = DynamicColor(
        "on_secondary_container", PaletteRole.SECONDARY, _on_secondary_container_tone,
        background="secondary_container", contrast_curve=_TEXT)

    # -- tertiary ----------------------------------------------------------
    tertiary = DynamicColor(
        "tertiary", PaletteRole.TERTIARY, _tertiary_tone, is_background=True,
        background=HIGHEST_SURFACE, contrast_curve=_ACCENT,
        tone_delta_pair=_accent_pair("tertiary_container", "tertiary"))
    on_tertiary = DynamicColor(
        "on_tertiary", PaletteRole.TERTIARY, _on_tertiary_tone,
        background="tertiary", contrast_curve=_TEXT)
    tertiary_container = DynamicColor(
        "tertiary_container", PaletteRole.TERTIARY, _tertiary_container_tone, is_background=True,
        background=HIGHEST_SURFACE, contrast_curve=_CONTAINER,
        tone_delta_pair=_accent_pair("tertiary_container", "tertiary"))
    on_tertiary_container = DynamicColor(
        "on_tertiary_container", PaletteRole.TERTIARY, _on_tertiary_container_tone,
        background="tertiary_container", contrast_curve=_TEXT)

    # -- error -------------------------------------------------------------
    error = DynamicColor(
        "error", PaletteRole.ERROR, _by_brightness(40.0, 80.0), is_background=True,
        background=HIGHEST_SURFACE, contrast_curve=_ACCENT,
        tone_delta_pair=_accent_pair("error_container", "error"))
    on_error = DynamicColor(
        "on_error", PaletteRole.ERROR, _by_brightness(100.0, 20.0),
        background="error", contrast_curve=_TEXT)
    error_container = DynamicColor(
        "error_container", PaletteRole.ERROR, _by_brightness(90.0, 30.0), is_background=True,
        background=HIGHEST_SURFACE, contrast_curve=_CONTAINER,
        tone_delta_pair=_accent_pair("error_container", "error"))
    on_error_container = DynamicColor(
        "on_error_container", PaletteRole.ERROR, _by_brightness(10.0, 90.0),
        background="error_container", contrast_curve=_TEXT)

    # -- fixed -------------------------------------------------------------
    primary_fixed = DynamicColor(
        "primary_fixed", PaletteRole.PRIMARY, _fixed_tone(40.0, 90.0), is_background=True,
        background=HIGHEST_SURFACE, contrast_curve=_CONTAINER,
        tone_delta_pair=_fixed_pair("primary_fixed", "primary_fixed_dim"))
    primary_fixed_dim = DynamicColor(
        "primary_fixed_dim", PaletteRole.PRIMARY, _fixed_tone(30.0, 80.0), is_background=True,
        background=HIGHEST_SURFACE, contrast_curve=_CONTAINER,
        tone_delta_pair=_fixed_pair("primary_fixed", "primary_fixed_dim"))
    on_primary_fixed = DynamicColor(
        "on_primary_fixed", PaletteRole.PRIMARY, _fixed_tone(100.0, 10.0),
        background="primary_fixed_dim", second_background="primary_fixed", contrast_curve=_TEXT)
    on_primary_fixed_variant = DynamicColor(
        "on_primary_fixed_variant", PaletteRole.PRIMARY, _fixed_tone(90.0, 30.0),
        background="primary_fixed_dim", second_background="primary_fixed", contrast_curve=_SUBTLE_TEXT)

    secondary_fixed = DynamicColor(
        "secondary_fixed", PaletteRole.SECONDARY, _fixed_tone(80.0, 90.0), is_background=True,
        background=HIGHEST_SURFACE, contrast_curve=_CONTAINER,
        tone_delta_pair=_fixed_pair("secondary_fixed", "secondary_fixed_dim"))
    secondary_fixed_dim = DynamicColor(
        "secondary_fixed_dim", PaletteRole.SECONDARY, _fixed_tone(70.0, 80.0), is_background=True,
        background=HIGHEST_SURFACE, contrast_curve=_CONTAINER,
        tone_delta_pair=_fixed_pair("secondary_fixed", "secondary_fixed_dim"))
    on_secondary_fixed = DynamicColor(
        "on_secondary_fixed", PaletteRole.SECONDARY, _by_brightness(10.0, 10.0),
        background="secondary_fixed_dim", second_background="secondary_fixed", contrast_curve=_TEXT)
    on_secondary_fixed_variant = DynamicColor(
        "on_secondary_fixed_variant", PaletteRole.SECONDARY, _fixed_tone(25.0, 30.0),
        background="secondary_fixed_dim", second_background="secondary_fixed", contrast_curve=_SUBTLE_TEXT)

    tertiary_fixed = DynamicColor(
        "tertiary_fixed", PaletteRole.TERTIARY, _fixed_tone(40.0, 90.0), is_background=True,
        background=HIGHEST_SURFACE, contrast_curve=_CONTAINER,
        tone_delta_pair=_fixed_pair("tertiary_fixed", "tertiary_fixed_dim"))
    tertiary_fixed_dim = DynamicColor(
        "tertiary_fixed_dim", PaletteRole.TERTIARY, _fixed_tone(30.0, 80.0), is_background=True,
        background=HIGHEST_SURFACE, contrast_curve=_CONTAINER,
        tone_delta_pair=_fixed_pair("tertiary_fixed", "tertiary_fixed_dim"))
    on_tertiary_fixed = DynamicColor(
        "on_tertiary_fixed", PaletteRole.TERTIARY, _fixed_tone(100.0, 10.0),
        background="tertiary_fixed_dim", second_background="tertiary_fixed", contrast_curve=_TEXT)
    on_tertiary_fixed_variant = DynamicColor(
        "on_tertiary_fixed_variant", PaletteRole.TERTIARY, _fixed_tone(90.0, 30.0),
        background="tertiary_fixed_dim", second_background="tertiary_fixed", contrast_curve=_SUBTLE_TEXT)

    @staticmethod
    def highest_surface(s: DynamicScheme) -> DynamicColor:
        return MaterialDynamicColors.surface_bright if s.is_dark else MaterialDynamicColors.surface_dim


ALL_ROLES: Final[Tuple[DynamicColor, ...]] = tuple(
    value for value in vars(MaterialDynamicColors).values() if isinstance(value, DynamicColor)
)

for _role in ALL_ROLES:
    register_role(_role)
del _role
