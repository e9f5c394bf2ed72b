# -*- coding: utf-8 -*-
"""
Prisma: Weaving perceptual color schemes from a single seed
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: prisma_palette.py — Tonal palettes.

A TonalPalette is a hue/chroma pair swept across tone.  Colors are solved
lazily and memoised per tone, so a palette can be shared between the light
and dark schemes of one theme and only pays for the tones it serves.

Provenance
----------
Palettes built from an anchor (``of`` / ``from_hct``) compare by their
(hue, chroma).  Palettes rebuilt from a fixed color list (``from_list``)
compare by the 13 canonical swatches, since hue and chroma are only an
estimate for them.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Dict, Final, List, Optional, Sequence, Tuple

from prisma_cam16 import Cam16
from prisma_colorutils import round_half_up, sanitize_degrees_double
from prisma_hct import Hct

__all__ = ["TonalPalette", "CorePalettes", "COMMON_TONES"]

COMMON_TONES: Final[Tuple[int, ...]] = (0, 10, 20, 30, 40, 50, 60, 70, 80, 90, 95, 99, 100)

# Swatches lighter than this are too washed out to estimate hue/chroma from.
_FROM_LIST_MAX_TONE: Final[float] = 98.0


class TonalPalette:
    """
    Tone -> ARGB lookup for a fixed hue and chroma.

    Identity
    --------
    ``key_color`` is the swatch closest to the requested chroma, searched
    outward from tone 50 on first access.

    Thread safety
    -------------
    The tone cache is guarded by an ``RLock``; concurrent readers may solve
    the same tone twice but always store the same value.
    """

    __slots__ = ("hue", "chroma", "_key_color", "_cache", "_from_list", "_lock")

    def __init__(
        self,
        hue: float,
        chroma: float,
        key_color: Optional[Hct] = None,
        cache: Optional[Dict[float, int]] = None,
        from_list: bool = False,
    ) -> None:
        self.hue: float = hue
        self.chroma: float = chroma
        self._key_color: Optional[Hct] = key_color
        self._cache: Dict[float, int] = dict(cache) if cache else {}
        self._from_list: bool = from_list
        self._lock = threading.RLock()

    # -- constructors ------------------------------------------------------
    @classmethod
    def of(cls, hue: float, chroma: float) -> TonalPalette:
        """Palette for ``hue`` and ``chroma``; the key color is found lazily."""
        return cls(hue, chroma)

    @classmethod
    def from_hct(cls, hct: Hct) -> TonalPalette:
        """Palette anchored on ``hct``, which also becomes the key color."""
        return cls(hct.hue, hct.chroma, key_color=hct)

    @classmethod
    def from_int(cls, argb: int) -> TonalPalette:
        return cls.from_hct(Hct.from_int(argb))

    @classmethod
    def from_list(cls, colors: Sequence[int]) -> TonalPalette:
        """
        Rebuild a palette from its 13 canonical swatches.

        Hue and chroma are taken from the most chromatic swatch at or below
        tone 98; tones outside the canonical set are solved from them.

        Raises
        ------
        ValueError
            If ``colors`` does not hold exactly one color per canonical tone.
        """
        if len(colors) != len(COMMON_TONES):
            raise ValueError(
                f"TonalPalette.from_list: expected {len(COMMON_TONES)} colors, got {len(colors)}"
            )
        cache = {float(tone): int(argb) for tone, argb in zip(COMMON_TONES, colors)}

        best_hue = 0.0
        best_chroma = 0.0
        for argb in colors:
            hct = Hct.from_int(int(argb))
            if hct.tone > _FROM_LIST_MAX_TONE:
                continue
            if hct.chroma > best_chroma:
                best_hue = hct.hue
                best_chroma = hct.chroma

        return cls(best_hue, best_chroma, cache=cache, from_list=True)

    @staticmethod
    def create_key_color(hue: float, chroma: float) -> Hct:
        """
        The tone, searched outward from 50, whose solved chroma is closest
        to ``chroma``.  Stops as soon as the chroma rounds to the request.
        """
        start_tone = 50.0
        best = Hct.from_hct(hue, chroma, start_tone)
        best_delta = abs(best.chroma - chroma)
        target = round_half_up(chroma)

        delta = 1.0
        while delta < 50.0:
            if round_half_up(best.chroma) == target:
                return best

            up = Hct.from_hct(hue, chroma, start_tone + delta)
            up_delta = abs(up.chroma - chroma)
            if up_delta < best_delta:
                best_delta = up_delta
                best = up

            down = Hct.from_hct(hue, chroma, start_tone - delta)
            down_delta = abs(down.chroma - chroma)
            if down_delta < best_delta:
                best_delta = down_delta
                best = down

            delta += 1.0
        return best

    # -- read interface ----------------------------------------------------
    @property
    def key_color(self) -> Hct:
        with self._lock:
            if self._key_color is None:
                self._key_color = TonalPalette.create_key_color(self.hue, self.chroma)
            return self._key_color

    def tone(self, tone: float) -> int:
        """ARGB of this palette at ``tone`` (0-100)."""
        key = float(tone)
        cached = self._cache.get(key)
        if cached is not None:
            return cached
        argb = Hct.from_hct(self.hue, self.chroma, key).to_int()
        with self._lock:
            self._cache.setdefault(key, argb)
            return self._cache[key]

    get = tone

    def get_hct(self, tone: float) -> Hct:
        return Hct.from_int(self.tone(tone))

    @property
    def as_list(self) -> List[int]:
        """ARGB at each of the 13 canonical tones."""
        return [self.tone(t) for t in COMMON_TONES]

    @property
    def is_from_list(self) -> bool:
        return self._from_list

    def cache_size(self) -> int:
        with self._lock:
            return len(self._cache)

    # -- identity ----------------------------------------------------------
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TonalPalette):
            return NotImplemented
        if not self._from_list and not other._from_list:
            return self.hue == other.hue and self.chroma == other.chroma
        return self.as_list == other.as_list

    def __hash__(self) -> int:
        return hash(tuple(self.as_list))

    def __repr__(self) -> str:
        if self._from_list:
            return f"TonalPalette.from_list({[f'{c:#010x}' for c in self.as_list]})"
        return f"TonalPalette.of({self.hue:.4f}, {self.chroma:.4f})"


@dataclass(slots=True, frozen=True)
class CorePalettes:
    """
    The five key palettes of a seed color plus the error palette.

    ``of`` keeps every palette at a usable chroma regardless of the seed;
    ``content_of`` scales chroma with the seed so that muted sources stay
    muted.
    """
    primary: TonalPalette
    secondary: TonalPalette
    tertiary: TonalPalette
    neutral: TonalPalette
    neutral_variant: TonalPalette
    error: TonalPalette

    @classmethod
    def of(cls, argb: int) -> CorePalettes:
        cam = Cam16.from_int(argb)
        hue, chroma = cam.hue, cam.chroma
        return cls(
            primary=TonalPalette.of(hue, max(48.0, chroma)),
            secondary=TonalPalette.of(hue, 16.0),
            tertiary=TonalPalette.of(sanitize_degrees_double(hue + 60.0), 24.0),
            neutral=TonalPalette.of(hue, 4.0),
            neutral_variant=TonalPalette.of(hue, 8.0),
            error=TonalPalette.of(25.0, 84.0),
        )

    @classmethod
    def content_of(cls, argb: int) -> CorePalettes:
        cam = Cam16.from_int(argb)
        hue, chroma = cam.hue, cam.chroma
        return cls(
            primary=TonalPalette.of(hue, chroma),
            secondary=TonalPalette.of(hue, chroma / 3.0),
            tertiary=TonalPalette.of(sanitize_degrees_double(hue + 60.0), chroma / 2.0),
            neutral=TonalPalette.of(hue, min(chroma / 12.0, 4.0)),
            neutral_variant=TonalPalette.of(hue, min(chroma / 6.0, 8.0)),
            error=TonalPalette.of(25.0, 84.0),
        )


# =============================================================================
# Validation Block
# =============================================================================
if __name__ == "__main__":
    print("--- Prisma Tonal Palette Validation ---")

    pal = TonalPalette.of(270.0, 36.0)
    print(f"1. {pal!r} key color: {pal.key_color}")

    print("2. Rebuild from list...")
    rebuilt = TonalPalette.from_list(pal.as_list)
    print(f"   equal by swatches: {'[PASS]' if rebuilt == pal else '[FAIL]'}")
    print(f"   estimated hue/chroma: {rebuilt.hue:.2f} / {rebuilt.chroma:.2f}")

    print("3. Core palettes of #6750a4...")
    core = CorePalettes.of(0xFF6750A4)
    print(f"   primary={core.primary!r} tertiary={core.tertiary!r}")
