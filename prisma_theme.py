# -*- coding: utf-8 -*-
"""
Prisma: Weaving perceptual color schemes from a single seed
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: prisma_theme.py — Seed color in, named role colors out.

    scheme = create_color_scheme("#6750A4", brightness="dark")
    scheme["primary"]        # "#rrggbb"
    scheme["onPrimary"]      # legible on primary at the requested contrast

Keys of the returned mapping are camelCase role names (``onPrimary``,
``surfaceContainerHigh``, ...) so the result can be dropped straight into
a stylesheet or JSON document.
"""

from __future__ import annotations

from typing import Dict, Final, Tuple, Union

from prisma_colorutils import argb_from_hex, hex_from_argb
from prisma_dynamic import DynamicScheme, Variant
from prisma_hct import Hct
from scheme_models.factory import scheme_for_variant

__all__ = ["create_color_scheme", "scheme_from_seed", "SCHEME_ROLES", "BRIGHTNESS_VALUES"]

BRIGHTNESS_VALUES: Final[Tuple[str, str]] = ("light", "dark")

# Roles exported by ``create_color_scheme``, in output order.
SCHEME_ROLES: Final[Tuple[str, ...]] = (
    "primary", "on_primary", "primary_container", "on_primary_container",
    "primary_fixed", "on_primary_fixed", "primary_fixed_dim", "on_primary_fixed_variant",
    "secondary", "on_secondary", "secondary_container", "on_secondary_container",
    "secondary_fixed", "on_secondary_fixed", "secondary_fixed_dim", "on_secondary_fixed_variant",
    "tertiary", "on_tertiary", "tertiary_container", "on_tertiary_container",
    "tertiary_fixed", "on_tertiary_fixed", "tertiary_fixed_dim", "on_tertiary_fixed_variant",
    "error", "on_error", "error_container", "on_error_container",
    "background", "on_background",
    "surface", "on_surface", "surface_dim", "surface_bright",
    "surface_container_lowest", "surface_container_low", "surface_container",
    "surface_container_high", "surface_container_highest",
    "surface_variant", "on_surface_variant",
    "outline", "outline_variant", "shadow", "scrim",
    "inverse_surface", "inverse_on_surface", "inverse_primary",
    "surface_tint",
)


def _camel_case(name: str) -> str:
    head, *tail = name.split("_")
    return head + "".join(part.capitalize() for part in tail)


def scheme_from_seed(
    seed: Union[int, str],
    is_dark: bool = False,
    contrast_level: float = 0.0,
    variant: Union[Variant, str] = Variant.TONAL_SPOT,
) -> DynamicScheme:
    """
    Build a DynamicScheme from a seed color.

    Args:
        seed: Packed ARGB int or hex string (``#rgb``, ``#rrggbb``, ``#aarrggbb``).
        is_dark: Dark theme when True.
        contrast_level: -1 (reduced) to 1 (maximum); values outside are
            clamped with a warning.
        variant: ``Variant`` member or its name (``"tonal-spot"``).

    Raises:
        ValueError: Malformed hex string or unknown variant.
        TypeError: ``seed`` is neither int nor str.
    """
    if isinstance(seed, str):
        argb = argb_from_hex(seed)
    elif isinstance(seed, int) and not isinstance(seed, bool):
        argb = seed
    else:
        raise TypeError(f"seed must be an ARGB int or hex string, got {type(seed).__name__}")
    return scheme_for_variant(variant, Hct.from_int(argb), is_dark, contrast_level)


def create_color_scheme(
    seed_color: str,
    brightness: str = "light",
    contrast_level: float = 0.0,
    variant: Union[Variant, str] = Variant.TONAL_SPOT,
) -> Dict[str, str]:
    """
    Theme colors for ``seed_color`` as ``#rrggbb`` strings.

    Returns:
        ``{"brightness": brightness, "primary": "#...", "onPrimary": "#...", ...}``

    Raises:
        ValueError: Unknown brightness, malformed hex string or unknown variant.
    """
    if brightness not in BRIGHTNESS_VALUES:
        raise ValueError(f"brightness must be one of {BRIGHTNESS_VALUES}, got {brightness!r}")
    scheme = scheme_from_seed(seed_color, brightness == "dark", contrast_level, variant)
    result: Dict[str, str] = {"brightness": brightness}
    for role in SCHEME_ROLES:
        result[_camel_case(role)] = hex_from_argb(scheme.get_role(role))
    return result


# =============================================================================
# Validation Block
# =============================================================================
if __name__ == "__main__":
    from prisma_contrast import Contrast

    print("--- Prisma Theme Validation ---")
    for mode in BRIGHTNESS_VALUES:
        s = scheme_from_seed(0xFF6750A4, is_dark=(mode == "dark"))
        ratio = Contrast.ratio_of_tones(
            Hct.from_int(s.primary).tone, Hct.from_int(s.on_primary).tone
        )
        print(f"{mode:>5}: primary={hex_from_argb(s.primary)} on_primary={hex_from_argb(s.on_primary)} "
              f"ratio={ratio:.2f} {'[PASS]' if ratio >= 4.5 else '[FAIL]'}")

    print(create_color_scheme("#6750A4", "dark", variant="vibrant"))
