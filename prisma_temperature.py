# -*- coding: utf-8 -*-
"""
Prisma: Weaving perceptual color schemes from a single seed
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: prisma_temperature.py — Color temperature and dislike analysis.

``TemperatureCache`` sweeps the hue circle at the chroma and tone of an
input color and ranks every hue by a warm/cool estimate derived from its
L*a*b* hue and chroma (Ou, Woodcock & Wright, 2004).  The ranking yields
temperature-aware complements and analogous sets, which read as more
harmonious than a plain 180 degree rotation.

``DislikeAnalyzer`` flags the dark yellow-green band that is consistently
rated unpleasant (Palmer & Schloss, 2010) and lifts it to a lighter tone.
"""

from __future__ import annotations

import math
import threading
from typing import Dict, Final, List, Optional

import numpy as np

from prisma_colorutils import lab_from_argb, round_half_up, sanitize_degrees_double, sanitize_degrees_int
from prisma_hct import Hct
from prisma_solver import HctSolver

__all__ = ["TemperatureCache", "DislikeAnalyzer"]

# Hue sweep is inclusive of 360 so that a rounded 359.5+ hue has a slot.
_HUE_STEPS: Final[int] = 361


class TemperatureCache:
    """
    Lazily computed temperature ranking around one input color.

    All derived tables are built on first use and kept for the lifetime of
    the cache; the instance is safe to share between threads.
    """

    __slots__ = (
        "input",
        "_hcts_by_hue",
        "_hcts_by_temp",
        "_temps_by_hct",
        "_input_relative_temperature",
        "_complement",
        "_lock",
    )

    def __init__(self, input_hct: Hct) -> None:
        self.input: Hct = input_hct
        self._hcts_by_hue: Optional[List[Hct]] = None
        self._hcts_by_temp: Optional[List[Hct]] = None
        self._temps_by_hct: Optional[Dict[Hct, float]] = None
        self._input_relative_temperature: Optional[float] = None
        self._complement: Optional[Hct] = None
        self._lock = threading.RLock()

    # -- tables ------------------------------------------------------------
    @property
    def hcts_by_hue(self) -> List[Hct]:
        """The input's chroma and tone at every integer hue 0..360."""
        with self._lock:
            if self._hcts_by_hue is None:
                hues = np.arange(_HUE_STEPS, dtype=np.float64)
                argbs = HctSolver.solve_batch(hues, self.input.chroma, self.input.tone)
                self._hcts_by_hue = [Hct.from_int(int(a)) for a in argbs]
            return self._hcts_by_hue

    @property
    def temps_by_hct(self) -> Dict[Hct, float]:
        with self._lock:
            if self._temps_by_hct is None:
                temps: Dict[Hct, float] = {}
                for hct in self.hcts_by_hue + [self.input]:
                    temps[hct] = TemperatureCache.raw_temperature(hct)
                self._temps_by_hct = temps
            return self._temps_by_hct

    @property
    def hcts_by_temp(self) -> List[Hct]:
        """The hue sweep plus the input, coldest first."""
        with self._lock:
            if self._hcts_by_temp is None:
                temps = self.temps_by_hct
                self._hcts_by_temp = sorted(self.hcts_by_hue + [self.input], key=lambda h: temps[h])
            return self._hcts_by_temp

    @property
    def warmest(self) -> Hct:
        return self.hcts_by_temp[-1]

    @property
    def coldest(self) -> Hct:
        return self.hcts_by_temp[0]

    # -- queries -----------------------------------------------------------
    def relative_temperature(self, hct: Hct) -> float:
        """Temperature of ``hct`` on a 0 (coldest) to 1 (warmest) scale."""
        temps = self.temps_by_hct
        coldest_temp = temps[self.coldest]
        span = temps[self.warmest] - coldest_temp
        if span == 0.0:
            return 0.5
        return (temps[hct] - coldest_temp) / span

    @property
    def input_relative_temperature(self) -> float:
        with self._lock:
            if self._input_relative_temperature is None:
                self._input_relative_temperature = self.relative_temperature(self.input)
            return self._input_relative_temperature

    @property
    def complement(self) -> Hct:
        """
        The hue whose relative temperature mirrors the input's, searched on
        the opposite side of the coldest-warmest axis.
        """
        with self._lock:
            if self._complement is not None:
                return self._complement

            temps = self.temps_by_hct
            coldest_hue = self.coldest.hue
            coldest_temp = temps[self.coldest]
            warmest_hue = self.warmest.hue
            span = temps[self.warmest] - coldest_temp

            start_is_cold_to_warm = TemperatureCache.is_between(self.input.hue, coldest_hue, warmest_hue)
            start_hue = warmest_hue if start_is_cold_to_warm else coldest_hue
            end_hue = coldest_hue if start_is_cold_to_warm else warmest_hue

            smallest_error = 1000.0
            answer = self.hcts_by_hue[round_half_up(self.input.hue)]
            complement_relative_temp = 1.0 - self.input_relative_temperature

            hue_addend = 0.0
            while hue_addend <= 360.0:
                hue = sanitize_degrees_double(start_hue + hue_addend)
                hue_addend += 1.0
                if not TemperatureCache.is_between(hue, start_hue, end_hue):
                    continue
                candidate = self.hcts_by_hue[round_half_up(hue)]
                relative_temp = 0.5 if span == 0.0 else (temps[candidate] - coldest_temp) / span
                error = abs(complement_relative_temp - relative_temp)
                if error < smallest_error:
                    smallest_error = error
                    answer = candidate

            self._complement = answer
            return answer

    def analogous(self, count: int = 5, divisions: int = 12) -> List[Hct]:
        """
        ``count`` colors around the input, spaced by equal temperature
        steps rather than equal hue steps.

        Args:
            count: Number of colors returned, input included (centred).
            divisions: Number of temperature steps around the full circle.
        """
        start_hue = round_half_up(self.input.hue)
        start_hct = self.hcts_by_hue[start_hue]
        last_temp = self.relative_temperature(start_hct)
        all_colors: List[Hct] = [start_hct]

        absolute_total_temp_delta = 0.0
        for i in range(360):
            hct = self.hcts_by_hue[sanitize_degrees_int(start_hue + i)]
            temp = self.relative_temperature(hct)
            absolute_total_temp_delta += abs(temp - last_temp)
            last_temp = temp

        hue_addend = 1
        temp_step = absolute_total_temp_delta / float(divisions)
        total_temp_delta = 0.0
        last_temp = self.relative_temperature(start_hct)
        while len(all_colors) < divisions:
            hct = self.hcts_by_hue[sanitize_degrees_int(start_hue + hue_addend)]
            temp = self.relative_temperature(hct)
            total_temp_delta += abs(temp - last_temp)

            index_addend = 1
            index_satisfied = total_temp_delta >= len(all_colors) * temp_step
            while index_satisfied and len(all_colors) < divisions:
                all_colors.append(hct)
                index_satisfied = total_temp_delta >= (len(all_colors) + index_addend) * temp_step
                index_addend += 1

            last_temp = temp
            hue_addend += 1
            if hue_addend > 360:
                while len(all_colors) < divisions:
                    all_colors.append(hct)
                break

        answers = [self.input]
        increase_hue_count = int(math.floor((count - 1) / 2.0))
        for i in range(1, increase_hue_count + 1):
            answers.insert(0, all_colors[(-i) % len(all_colors)])
        decrease_hue_count = count - increase_hue_count - 1
        for i in range(1, decrease_hue_count + 1):
            answers.append(all_colors[i % len(all_colors)])
        return answers

    # -- static helpers ----------------------------------------------------
    @staticmethod
    def is_between(angle: float, a: float, b: float) -> bool:
        """Whether ``angle`` lies on the arc travelling from ``a`` up to ``b``."""
        if a < b:
            return a <= angle <= b
        return a <= angle or angle <= b

    @staticmethod
    def raw_temperature(color: Hct) -> float:
        """
        Warm/cool estimate from L*a*b* hue and chroma.

        Values run from about -0.5 (cold blue) to 3 (warm orange); only the
        ordering matters for the queries above.
        """
        _, a, b = lab_from_argb(color.to_int())
        hue = sanitize_degrees_double(math.degrees(math.atan2(b, a)))
        chroma = math.hypot(a, b)
        return -0.5 + 0.02 * math.pow(chroma, 1.07) * math.cos(
            math.radians(sanitize_degrees_double(hue - 50.0))
        )


class DislikeAnalyzer:
    """Detects and fixes dark yellow-greens."""

    @staticmethod
    def is_disliked(hct: Hct) -> bool:
        hue_passes = hct.is_yellow()
        chroma_passes = round_half_up(hct.chroma) > 16
        tone_passes = round_half_up(hct.tone) < 65
        return hue_passes and chroma_passes and tone_passes

    @staticmethod
    def fix_if_disliked(hct: Hct) -> Hct:
        """Lifts a disliked color to tone 70, keeping hue and chroma."""
        if DislikeAnalyzer.is_disliked(hct):
            return Hct.from_hct(hct.hue, hct.chroma, 70.0)
        return hct


# =============================================================================
# Validation Block
# =============================================================================
if __name__ == "__main__":
    print("--- Prisma Temperature Validation ---")

    cache = TemperatureCache(Hct.from_int(0xFF0000FF))
    print(f"1. Coldest: {cache.coldest}")
    print(f"   Warmest: {cache.warmest}")
    print(f"2. Complement of blue: {cache.complement}")
    print("3. Analogous:")
    for h in cache.analogous():
        print(f"   {h}")
    print(f"4. Olive disliked: {DislikeAnalyzer.is_disliked(Hct.from_hct(100.0, 40.0, 40.0))}")
