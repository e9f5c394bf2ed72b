# -*- coding: utf-8 -*-
import pytest

from prisma_cam16 import Cam16
from prisma_hct import Hct
from prisma_palette import COMMON_TONES, CorePalettes, TonalPalette


class TestTonalPalette:
    def test_extremes(self):
        pal = TonalPalette.of(270.0, 36.0)
        assert pal.tone(0) == 0xFF000000
        assert pal.tone(100) == 0xFFFFFFFF

    def test_tones_are_cached(self):
        pal = TonalPalette.of(120.0, 20.0)
        assert pal.cache_size() == 0
        first = pal.tone(40)
        assert pal.cache_size() == 1
        assert pal.tone(40) == first
        assert pal.get(40.0) == first
        assert pal.cache_size() == 1

    def test_tone_is_respected(self):
        pal = TonalPalette.of(30.0, 40.0)
        for tone in (10.0, 35.0, 60.0, 85.0):
            assert pal.get_hct(tone).tone == pytest.approx(tone, abs=0.5)

    def test_as_list_matches_common_tones(self):
        pal = TonalPalette.of(200.0, 16.0)
        swatches = pal.as_list
        assert len(swatches) == len(COMMON_TONES)
        assert swatches == [pal.tone(t) for t in COMMON_TONES]

    def test_key_color_is_lazy_and_close_to_chroma(self):
        pal = TonalPalette.of(270.0, 36.0)
        assert pal._key_color is None
        key = pal.key_color
        assert abs(key.chroma - 36.0) < 1.0
        assert pal.key_color is key

    def test_key_color_for_unreachable_chroma(self):
        key = TonalPalette.create_key_color(90.0, 200.0)
        assert key.chroma < 200.0
        assert 0.0 <= key.tone <= 100.0

    def test_from_hct_keeps_key_color(self):
        hct = Hct.from_int(0xFF6750A4)
        pal = TonalPalette.from_hct(hct)
        assert pal.key_color is hct
        assert pal.hue == hct.hue and pal.chroma == hct.chroma
        assert TonalPalette.from_int(0xFF6750A4) == pal

    def test_equality_by_anchor(self):
        assert TonalPalette.of(10.0, 20.0) == TonalPalette.of(10.0, 20.0)
        assert TonalPalette.of(10.0, 20.0) != TonalPalette.of(11.0, 20.0)
        assert hash(TonalPalette.of(10.0, 20.0)) == hash(TonalPalette.of(10.0, 20.0))

    def test_from_list_round_trip(self):
        pal = TonalPalette.of(270.0, 36.0)
        rebuilt = TonalPalette.from_list(pal.as_list)
        assert rebuilt.is_from_list and not pal.is_from_list
        assert rebuilt == pal
        assert hash(rebuilt) == hash(pal)
        assert rebuilt.hue == pytest.approx(270.0, abs=2.0)
        assert rebuilt.chroma == pytest.approx(36.0, abs=2.0)
        assert rebuilt.tone(50) == pal.tone(50)

    @pytest.mark.parametrize("count", [0, 12, 14])
    def test_from_list_wrong_length(self, count):
        with pytest.raises(ValueError):
            TonalPalette.from_list([0xFF000000] * count)

    def test_repr(self):
        assert repr(TonalPalette.of(1.5, 2.0)) == "TonalPalette.of(1.5000, 2.0000)"
        assert repr(TonalPalette.from_list(TonalPalette.of(1.5, 2.0).as_list)).startswith("TonalPalette.from_list(")


class TestCorePalettes:
    def test_of_floors_primary_chroma(self):
        core = CorePalettes.of(0xFF808080)
        assert core.primary.chroma == 48.0
        assert core.secondary.chroma == 16.0
        assert core.tertiary.chroma == 24.0
        assert core.neutral.chroma == 4.0
        assert core.neutral_variant.chroma == 8.0
        assert (core.error.hue, core.error.chroma) == (25.0, 84.0)

    def test_content_of_follows_source(self):
        cam = Cam16.from_int(0xFF6750A4)
        core = CorePalettes.content_of(0xFF6750A4)
        assert core.primary.chroma == pytest.approx(cam.chroma)
        assert core.secondary.chroma == pytest.approx(cam.chroma / 3.0)
        assert core.tertiary.hue == pytest.approx((cam.hue + 60.0) % 360.0)
        assert core.neutral.chroma <= 4.0

    @pytest.mark.parametrize("factory", [CorePalettes.of, CorePalettes.content_of])
    def test_tertiary_hue_wraps(self, factory):
        seed = 0xFFFF00FF
        cam = Cam16.from_int(seed)
        assert cam.hue > 300.0
        tertiary = factory(seed).tertiary
        assert 0.0 <= tertiary.hue < 360.0
        assert tertiary.hue == pytest.approx(cam.hue + 60.0 - 360.0)


class TestGamutShrinkage:
    @pytest.mark.parametrize("chroma", [60.0, 120.0, 200.0])
    @pytest.mark.parametrize("hue", [0.0, 90.0, 180.0, 270.0])
    def test_mid_tone_holds_most_chroma(self, hue, chroma):
        pal = TonalPalette.of(hue, chroma)
        mid = pal.get_hct(50.0).chroma
        assert mid >= pal.get_hct(0.0).chroma
        assert mid >= pal.get_hct(100.0).chroma
        assert mid <= chroma + 1.0

    @pytest.mark.parametrize("chroma", [60.0, 120.0, 200.0])
    @pytest.mark.parametrize("hue", [0.0, 90.0, 180.0, 270.0])
    def test_extremes_are_achromatic(self, hue, chroma):
        pal = TonalPalette.of(hue, chroma)
        assert pal.tone(0) == 0xFF000000
        assert pal.tone(100) == 0xFFFFFFFF
        assert pal.get_hct(0.0).chroma == pytest.approx(0.0, abs=1e-6)
        assert pal.get_hct(100.0).chroma == pytest.approx(Hct.from_int(0xFFFFFFFF).chroma)
