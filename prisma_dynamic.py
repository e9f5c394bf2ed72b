# -*- coding: utf-8 -*-
"""
Prisma: Weaving perceptual color schemes from a single seed
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: prisma_dynamic.py — Contrast-constrained color roles.

A ``DynamicScheme`` holds the five palettes derived from a seed color plus
the brightness and contrast level the UI asked for.  A ``DynamicColor`` is
a role descriptor (``primary``, ``on_surface``, ...): pure data naming a
palette, a default-tone strategy, and the roles it must stay legible
against.  Resolving a role against a scheme is a pure function of both.

Tone resolution
---------------
1. Paired roles (``tone_delta_pair``): both roles are first solved against
   the shared background, then pushed apart until they are ``delta`` tones
   apart in the direction of the scheme's brightness, avoiding the 50-59
   band where neither light nor dark text reads well.
2. Single background: the default tone is replaced by the nearest tone
   meeting the role's contrast curve; background roles snap out of the
   50-59 band.
3. Second background: the result must also meet the curve against the
   second background; otherwise the lighter or darker option that clears
   both is chosen.

Backgrounds are referenced by role name.  ``HIGHEST_SURFACE`` is a symbolic
name resolved per scheme (``surface_bright`` when dark, ``surface_dim``
otherwise).

Caching
-------
Resolved colors are cached per role, keyed by the scheme's process-unique
``uid``.  A role cache holds at most ``ROLE_CACHE_SIZE`` schemes and is
cleared when it overflows.
"""

from __future__ import annotations

import enum
import itertools
import threading
import warnings
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Dict, Final, Iterator, List, Optional, Sequence

from prisma_colorutils import clamp_double, round_half_up, sanitize_degrees_double
from prisma_contrast import Contrast, ContrastCurve
from prisma_hct import Hct
from prisma_palette import TonalPalette

__all__ = [
    # --- Enums ---
    "Variant",
    "PaletteRole",
    "TonePolarity",

    # --- Descriptors ---
    "ToneDeltaPair",
    "DynamicColor",
    "DynamicScheme",

    # --- Registry ---
    "HIGHEST_SURFACE",
    "register_role",
    "lookup_role",
    "role_names",

    # --- Constants ---
    "ROLE_CACHE_SIZE",
]

ROLE_CACHE_SIZE: Final[int] = 4

HIGHEST_SURFACE: Final[str] = "highest_surface"

# Error palette shared by every scheme.
_ERROR_HUE: Final[float] = 25.0
_ERROR_CHROMA: Final[float] = 84.0


# =============================================================================
# 1. ENUMS
# =============================================================================

class Variant(enum.Enum):
    """Scheme styles; the value is the external (kebab-case) name."""
    MONOCHROME = "monochrome"
    NEUTRAL = "neutral"
    TONAL_SPOT = "tonal-spot"
    VIBRANT = "vibrant"
    EXPRESSIVE = "expressive"
    FIDELITY = "fidelity"
    CONTENT = "content"
    RAINBOW = "rainbow"
    FRUIT_SALAD = "fruit-salad"

    @classmethod
    def parse(cls, value: "Variant | str") -> Variant:
        """
        Accepts a member, its value (``"tonal-spot"``) or its name
        (``"TONAL_SPOT"`` / ``"tonal_spot"``).

        Raises:
            ValueError: For anything else.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower().replace("_", "-")
            for member in cls:
                if member.value == key:
                    return member
        valid = ", ".join(m.value for m in cls)
        raise ValueError(f"Unknown variant {value!r}; expected one of: {valid}")


class PaletteRole(enum.Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"
    TERTIARY = "tertiary"
    NEUTRAL = "neutral"
    NEUTRAL_VARIANT = "neutral_variant"
    ERROR = "error"


class TonePolarity(enum.Enum):
    """Which role of a ``ToneDeltaPair`` sits nearer the background."""
    DARKER = "darker"
    LIGHTER = "lighter"
    NEARER = "nearer"
    FARTHER = "farther"


# =============================================================================
# 2. ROLE REGISTRY
# =============================================================================

_REGISTRY: Dict[str, DynamicColor] = {}
_REGISTRY_LOCK = threading.RLock()
_BUILTINS_LOADED: bool = False


def register_role(color: DynamicColor) -> DynamicColor:
    """
    Adds ``color`` to the name registry used to resolve backgrounds and
    tone-delta partners.  Returns ``color`` for chaining.

    Raises:
        ValueError: If another role is already registered under the name.
    """
    with _REGISTRY_LOCK:
        existing = _REGISTRY.get(color.name)
        if existing is not None and existing is not color:
            raise ValueError(f"Role {color.name!r} is already registered")
        _REGISTRY[color.name] = color
    return color


def _ensure_builtin_roles() -> None:
    global _BUILTINS_LOADED
    if not _BUILTINS_LOADED:
        _BUILTINS_LOADED = True
        import prisma_roles  # noqa: F401  (registers the built-in roles)


def lookup_role(name: str, scheme: Optional[DynamicScheme] = None) -> DynamicColor:
    """
    Role by name.  ``HIGHEST_SURFACE`` needs ``scheme`` to resolve.

    Raises:
        ValueError: If no such role is registered.
    """
    _ensure_builtin_roles()
    if name == HIGHEST_SURFACE:
        if scheme is None:
            raise ValueError(f"{HIGHEST_SURFACE!r} can only be resolved against a scheme")
        name = "surface_bright" if scheme.is_dark else "surface_dim"
    role = _REGISTRY.get(name)
    if role is None:
        raise ValueError(f"Unknown color role {name!r}")
    return role


def role_names() -> List[str]:
    """Registered role names, in registration order."""
    _ensure_builtin_roles()
    with _REGISTRY_LOCK:
        return list(_REGISTRY)


# =============================================================================
# 3. DESCRIPTORS
# =============================================================================

@dataclass(slots=True, frozen=True)
class ToneDeltaPair:
    """
    Two roles that must stay ``delta`` tones apart.

    Attributes:
        role_a, role_b: Role names.
        delta: Required tone separation, >= 0.
        polarity: Which of the two sits nearer the background; ``LIGHTER``
            and ``DARKER`` name role A's side and flip meaning with the
            scheme's brightness.
        stay_together: When only the farther role lands in the 50-59 band,
            move the nearer role with it instead of snapping it alone.
    """
    role_a: str
    role_b: str
    delta: float
    polarity: TonePolarity
    stay_together: bool = True


ToneStrategy = Callable[["DynamicScheme"], float]


class DynamicColor:
    """
    Role descriptor.

    Attributes:
        name: Registry name (snake_case).
        palette: Which of the scheme's palettes the role draws from.
        tone: Default-tone strategy, a named function of the scheme.
        is_background: Whether other roles are drawn on top of this one.
        background: Role name this role must contrast with.
        second_background: Optional second role name to contrast with.
        contrast_curve: Minimum contrast against the background(s) by
            contrast level. Required whenever ``background`` is set.
        tone_delta_pair: Pair constraint shared with a partner role, if any.
    """

    __slots__ = (
        "name",
        "palette",
        "tone",
        "is_background",
        "background",
        "second_background",
        "contrast_curve",
        "tone_delta_pair",
        "_cache",
        "_lock",
    )

    def __init__(
        self,
        name: str,
        palette: PaletteRole,
        tone: ToneStrategy,
        is_background: bool = False,
        background: Optional[str] = None,
        second_background: Optional[str] = None,
        contrast_curve: Optional[ContrastCurve] = None,
        tone_delta_pair: Optional[ToneDeltaPair] = None,
    ) -> None:
        if not isinstance(palette, PaletteRole):
            raise TypeError(f"DynamicColor {name!r}: palette must be a PaletteRole, got {type(palette).__name__}")
        self.name = name
        self.palette = palette
        self.tone = tone
        self.is_background = is_background
        self.background = background
        self.second_background = second_background
        self.contrast_curve = contrast_curve
        self.tone_delta_pair = tone_delta_pair
        self._cache: OrderedDict[int, Hct] = OrderedDict()
        self._lock = threading.RLock()

    # -- resolution --------------------------------------------------------
    def get_argb(self, scheme: DynamicScheme) -> int:
        return self.get_hct(scheme).to_int()

    def get_hct(self, scheme: DynamicScheme) -> Hct:
        """Resolved color of this role in ``scheme`` (cached per scheme uid)."""
        if not isinstance(scheme, DynamicScheme):
            raise TypeError(f"Expected a DynamicScheme, got {type(scheme).__name__}")
        with self._lock:
            cached = self._cache.get(scheme.uid)
        if cached is not None:
            return cached

        tone = self.get_tone(scheme)
        hct = scheme.palette_for(self.palette).get_hct(tone)

        with self._lock:
            if len(self._cache) >= ROLE_CACHE_SIZE:
                self._cache.clear()
            self._cache[scheme.uid] = hct
        return hct

    def get_tone(self, scheme: DynamicScheme) -> float:
        """
        Unrounded tone satisfying every contrast constraint of the role.

        Raises:
            ValueError: If the role names a background but has no contrast curve.
        """
        decreasing_contrast = scheme.contrast_level < 0.0

        # Case 1: paired roles.
        if self.tone_delta_pair is not None:
            pair = self.tone_delta_pair
            role_a = lookup_role(pair.role_a, scheme)
            role_b = lookup_role(pair.role_b, scheme)
            delta = pair.delta
            polarity = pair.polarity

            a_is_nearer = (
                polarity is TonePolarity.NEARER
                or (polarity is TonePolarity.LIGHTER and not scheme.is_dark)
                or (polarity is TonePolarity.DARKER and scheme.is_dark)
            )
            nearer, farther = (role_a, role_b) if a_is_nearer else (role_b, role_a)
            am_nearer = self.name == nearer.name
            expansion_dir = 1.0 if scheme.is_dark else -1.0

            if self.background is None or nearer.contrast_curve is None or farther.contrast_curve is None:
                warnings.warn(
                    f"DynamicColor {self.name!r}: tone delta pair "
                    f"({pair.role_a}, {pair.role_b}) needs a background and contrast "
                    "curves on both roles; using the default tone.",
                    stacklevel=2,
                )
                return self.tone(scheme)

            bg_tone = lookup_role(self.background, scheme).get_tone(scheme)
            n_contrast = nearer.contrast_curve.get(scheme.contrast_level)
            f_contrast = farther.contrast_curve.get(scheme.contrast_level)

            n_initial = nearer.tone(scheme)
            if Contrast.ratio_of_tones(bg_tone, n_initial) >= n_contrast:
                n_tone = n_initial
            else:
                n_tone = DynamicColor.foreground_tone(bg_tone, n_contrast)
            f_initial = farther.tone(scheme)
            if Contrast.ratio_of_tones(bg_tone, f_initial) >= f_contrast:
                f_tone = f_initial
            else:
                f_tone = DynamicColor.foreground_tone(bg_tone, f_contrast)

            if decreasing_contrast:
                n_tone = DynamicColor.foreground_tone(bg_tone, n_contrast)
                f_tone = DynamicColor.foreground_tone(bg_tone, f_contrast)

            if (f_tone - n_tone) * expansion_dir < delta:
                # Expand the farther tone first; contract the nearer one
                # only if that runs out of room.
                f_tone = clamp_double(0.0, 100.0, n_tone + delta * expansion_dir)
                if (f_tone - n_tone) * expansion_dir < delta:
                    n_tone = clamp_double(0.0, 100.0, f_tone - delta * expansion_dir)

            if 50.0 <= n_tone < 60.0:
                n_tone, f_tone = self._leave_awkward_band(n_tone, f_tone, delta, expansion_dir)
            elif 50.0 <= f_tone < 60.0:
                if pair.stay_together:
                    n_tone, f_tone = self._leave_awkward_band(n_tone, f_tone, delta, expansion_dir)
                else:
                    f_tone = 60.0 if expansion_dir > 0 else 49.0

            return n_tone if am_nearer else f_tone

        # Case 2: single background.
        answer = self.tone(scheme)
        if self.background is None:
            return answer
        if self.contrast_curve is None:
            raise ValueError(
                f"DynamicColor {self.name!r}: background {self.background!r} requires a contrast_curve"
            )

        bg_tone = lookup_role(self.background, scheme).get_tone(scheme)
        desired_ratio = self.contrast_curve.get(scheme.contrast_level)

        if Contrast.ratio_of_tones(bg_tone, answer) < desired_ratio:
            answer = DynamicColor.foreground_tone(bg_tone, desired_ratio)
        if decreasing_contrast:
            answer = DynamicColor.foreground_tone(bg_tone, desired_ratio)

        if self.is_background and 50.0 <= answer < 60.0:
            answer = 49.0 if Contrast.ratio_of_tones(49.0, bg_tone) >= desired_ratio else 60.0

        # Case 3: second background.
        if self.second_background is None:
            return answer

        bg_tone_1 = bg_tone
        bg_tone_2 = lookup_role(self.second_background, scheme).get_tone(scheme)
        upper = max(bg_tone_1, bg_tone_2)
        lower = min(bg_tone_1, bg_tone_2)

        if (Contrast.ratio_of_tones(upper, answer) >= desired_ratio
                and Contrast.ratio_of_tones(lower, answer) >= desired_ratio):
            return answer

        light_option = Contrast.lighter(upper, desired_ratio)
        dark_option = Contrast.darker(lower, desired_ratio)
        availables = [r.tone for r in (light_option, dark_option) if r.attained]

        prefers_light = (
            DynamicColor.tone_prefers_light_foreground(bg_tone_1)
            or DynamicColor.tone_prefers_light_foreground(bg_tone_2)
        )
        if prefers_light:
            return light_option.unwrap_or(100.0)
        if len(availables) == 1:
            return availables[0]
        return dark_option.unwrap_or(0.0)

    @staticmethod
    def _leave_awkward_band(n_tone: float, f_tone: float, delta: float, expansion_dir: float):
        if expansion_dir > 0:
            n_tone = 60.0
            f_tone = max(f_tone, n_tone + delta * expansion_dir)
        else:
            n_tone = 49.0
            f_tone = min(f_tone, n_tone + delta * expansion_dir)
        return n_tone, f_tone

    # -- tone helpers ------------------------------------------------------
    @staticmethod
    def foreground_tone(bg_tone: float, ratio: float) -> float:
        """
        Tone of legible content on ``bg_tone`` at ``ratio``.

        Picks the lighter option on backgrounds that prefer light
        foregrounds and the darker one elsewhere, switching sides only when
        the preferred side falls shorter of the ratio.
        """
        lighter_tone = Contrast.lighter_unsafe(bg_tone, ratio)
        darker_tone = Contrast.darker_unsafe(bg_tone, ratio)
        lighter_ratio = Contrast.ratio_of_tones(lighter_tone, bg_tone)
        darker_ratio = Contrast.ratio_of_tones(darker_tone, bg_tone)

        if DynamicColor.tone_prefers_light_foreground(bg_tone):
            # Both fall short by about the same amount: stay light.
            negligible_difference = (
                abs(lighter_ratio - darker_ratio) < 0.1
                and lighter_ratio < ratio
                and darker_ratio < ratio
            )
            if lighter_ratio >= ratio or lighter_ratio >= darker_ratio or negligible_difference:
                return lighter_tone
            return darker_tone
        if darker_ratio >= ratio or darker_ratio >= lighter_ratio:
            return darker_tone
        return lighter_tone

    @staticmethod
    def enable_light_foreground(tone: float) -> float:
        """Darkens a 50-59 tone to 49 so that light text works on it."""
        if (DynamicColor.tone_prefers_light_foreground(tone)
                and not DynamicColor.tone_allows_light_foreground(tone)):
            return 49.0
        return tone

    @staticmethod
    def tone_prefers_light_foreground(tone: float) -> bool:
        return round_half_up(tone) < 60

    @staticmethod
    def tone_allows_light_foreground(tone: float) -> bool:
        return round_half_up(tone) <= 49

    # -- diagnostics -------------------------------------------------------
    def cache_info(self) -> Dict[str, int]:
        with self._lock:
            return {"size": len(self._cache), "maxsize": ROLE_CACHE_SIZE}

    def clear_cache(self) -> None:
        with self._lock:
            self._cache.clear()

    def __repr__(self) -> str:
        return f"DynamicColor({self.name!r}, palette={self.palette.value})"


# =============================================================================
# 4. SCHEME
# =============================================================================

class DynamicScheme:
    """
    Five palettes plus the brightness and contrast level of one theme.

    Every registered role is readable as an attribute returning packed ARGB
    (``scheme.primary``, ``scheme.on_surface_variant``, ...).

    Identity
    --------
    Each scheme gets a process-unique, monotonically increasing ``uid``
    used to key role caches.
    """

    __slots__ = (
        "uid",
        "source_color_argb",
        "source_color_hct",
        "variant",
        "is_dark",
        "contrast_level",
        "primary_palette",
        "secondary_palette",
        "tertiary_palette",
        "neutral_palette",
        "neutral_variant_palette",
        "error_palette",
    )

    _uid_gen: itertools.count = itertools.count()

    def __init__(
        self,
        source_color_argb: int,
        variant: Variant,
        is_dark: bool,
        contrast_level: float,
        primary_palette: TonalPalette,
        secondary_palette: TonalPalette,
        tertiary_palette: TonalPalette,
        neutral_palette: TonalPalette,
        neutral_variant_palette: TonalPalette,
        error_palette: Optional[TonalPalette] = None,
    ) -> None:
        if not -1.0 <= contrast_level <= 1.0:
            warnings.warn(
                f"DynamicScheme: contrast_level {contrast_level} outside [-1, 1]; clamping.",
                stacklevel=2,
            )
            contrast_level = clamp_double(-1.0, 1.0, contrast_level)
        self.uid: int = next(DynamicScheme._uid_gen)
        self.source_color_argb: int = int(source_color_argb)
        self.source_color_hct: Hct = Hct.from_int(self.source_color_argb)
        self.variant: Variant = Variant.parse(variant)
        self.is_dark: bool = bool(is_dark)
        self.contrast_level: float = float(contrast_level)
        self.primary_palette = primary_palette
        self.secondary_palette = secondary_palette
        self.tertiary_palette = tertiary_palette
        self.neutral_palette = neutral_palette
        self.neutral_variant_palette = neutral_variant_palette
        self.error_palette = error_palette if error_palette is not None else TonalPalette.of(_ERROR_HUE, _ERROR_CHROMA)

    def palette_for(self, role: PaletteRole) -> TonalPalette:
        """
        Raises:
            ValueError: If ``role`` is not a PaletteRole.
        """
        if role is PaletteRole.PRIMARY:
            return self.primary_palette
        elif role is PaletteRole.SECONDARY:
            return self.secondary_palette
        elif role is PaletteRole.TERTIARY:
            return self.tertiary_palette
        elif role is PaletteRole.NEUTRAL:
            return self.neutral_palette
        elif role is PaletteRole.NEUTRAL_VARIANT:
            return self.neutral_variant_palette
        elif role is PaletteRole.ERROR:
            return self.error_palette
        raise ValueError(f"Unknown palette role {role!r}")

    @staticmethod
    def get_rotated_hue(source_color_hct: Hct, hues: Sequence[float], rotations: Sequence[float]) -> float:
        """
        Rotates the source hue by the rotation of the hue band it falls in.

        ``hues`` are ascending band edges in [0, 360]; ``rotations[i]``
        applies to sources strictly inside ``(hues[i], hues[i + 1])``.  A
        single rotation applies everywhere.

        Raises:
            ValueError: If the two lists differ in length.
        """
        source_hue = source_color_hct.hue
        if len(hues) != len(rotations):
            raise ValueError(
                f"Mismatch between hue length {len(hues)} & rotations {len(rotations)}"
            )
        if len(rotations) == 1:
            return sanitize_degrees_double(source_hue + rotations[0])
        for i in range(len(hues) - 1):
            this_hue = hues[i]
            next_hue = hues[i + 1]
            if this_hue < source_hue < next_hue:
                return sanitize_degrees_double(source_hue + rotations[i])
        # Exactly on a band edge: no rotation.
        return source_hue

    # -- role access -------------------------------------------------------
    def get_role(self, name: str) -> int:
        """ARGB of the named role.  Raises ValueError for unknown names."""
        return lookup_role(name, self).get_argb(self)

    def __getattr__(self, name: str) -> int:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            role = lookup_role(name, self)
        except ValueError:
            raise AttributeError(f"{type(self).__name__!s} has no role {name!r}") from None
        return role.get_argb(self)

    def __iter__(self) -> Iterator[str]:
        return iter(role_names())

    def to_dict(self) -> Dict[str, int]:
        """Every registered role, name -> ARGB."""
        return {name: self.get_role(name) for name in role_names()}

    def __repr__(self) -> str:
        return (
            f"DynamicScheme(uid={self.uid}, source={self.source_color_argb:#010x}, "
            f"variant={self.variant.value}, is_dark={self.is_dark}, "
            f"contrast_level={self.contrast_level})"
        )
