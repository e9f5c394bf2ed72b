# -*- coding: utf-8 -*-
import pytest

import prisma_dynamic
from prisma_contrast import Contrast, ContrastCurve
from prisma_dynamic import (
    HIGHEST_SURFACE,
    ROLE_CACHE_SIZE,
    DynamicColor,
    DynamicScheme,
    PaletteRole,
    ToneDeltaPair,
    TonePolarity,
    Variant,
    lookup_role,
    register_role,
    role_names,
)
from prisma_hct import Hct
from prisma_palette import TonalPalette
from prisma_roles import ALL_ROLES, MaterialDynamicColors as MDC
from prisma_theme import scheme_from_seed


def tone_of(argb: int) -> float:
    return Hct.from_int(argb).tone


def measured_ratio(scheme: DynamicScheme, fg: DynamicColor, bg: DynamicColor) -> float:
    return Contrast.ratio_of_tones(tone_of(fg.get_argb(scheme)), tone_of(bg.get_argb(scheme)))


def plain_scheme(is_dark: bool = False, contrast_level: float = 0.0) -> DynamicScheme:
    return DynamicScheme(
        source_color_argb=0xFF6750A4,
        variant=Variant.TONAL_SPOT,
        is_dark=is_dark,
        contrast_level=contrast_level,
        primary_palette=TonalPalette.of(280.0, 36.0),
        secondary_palette=TonalPalette.of(280.0, 16.0),
        tertiary_palette=TonalPalette.of(340.0, 24.0),
        neutral_palette=TonalPalette.of(280.0, 6.0),
        neutral_variant_palette=TonalPalette.of(280.0, 8.0),
    )


# =============================================================================
# Scheme-level guarantees
# =============================================================================

class TestContrastGuarantees:
    def test_on_primary_is_legible(self, light_scheme, dark_scheme):
        for scheme in (light_scheme, dark_scheme):
            assert measured_ratio(scheme, MDC.on_primary, MDC.primary) >= 4.5

    def test_surface_tones(self, light_scheme, dark_scheme):
        assert tone_of(dark_scheme.surface) <= 10.0
        assert tone_of(light_scheme.surface) >= 95.0

    def test_high_contrast_background_text(self, high_contrast_scheme):
        assert measured_ratio(high_contrast_scheme, MDC.on_background, MDC.background) >= 7.0

    def test_reduced_contrast_lands_on_low_breakpoint(self, reduced_contrast_scheme):
        ratio = measured_ratio(reduced_contrast_scheme, MDC.on_background, MDC.background)
        assert 2.95 <= ratio <= 3.3

    def test_text_roles_meet_their_curves(self, light_scheme, dark_scheme):
        for scheme in (light_scheme, dark_scheme):
            for role in (MDC.on_surface, MDC.on_primary_container, MDC.on_secondary_container,
                         MDC.on_tertiary_container, MDC.on_error_container,
                         MDC.inverse_on_surface):
                bg = lookup_role(role.background, scheme)
                target = role.contrast_curve.get(scheme.contrast_level)
                assert measured_ratio(scheme, role, bg) >= target - 0.1, role.name

    def test_fixed_text_clears_both_backgrounds(self, light_scheme):
        for bg in (MDC.primary_fixed, MDC.primary_fixed_dim):
            assert measured_ratio(light_scheme, MDC.on_primary_fixed, bg) >= 7.0 - 0.1

    def test_accent_pairs_stay_apart(self, light_scheme, dark_scheme):
        for scheme in (light_scheme, dark_scheme):
            for a, b in ((MDC.primary, MDC.primary_container), (MDC.error, MDC.error_container)):
                assert abs(tone_of(a.get_argb(scheme)) - tone_of(b.get_argb(scheme))) >= 9.0

    def test_fixed_is_lighter_than_fixed_dim(self, light_scheme, dark_scheme):
        for scheme in (light_scheme, dark_scheme):
            assert tone_of(scheme.primary_fixed) > tone_of(scheme.primary_fixed_dim)
            assert tone_of(scheme.tertiary_fixed) > tone_of(scheme.tertiary_fixed_dim)


@pytest.mark.parametrize("variant", list(Variant))
@pytest.mark.parametrize("is_dark", [False, True])
def test_every_variant_resolves(variant, is_dark):
    scheme = scheme_from_seed(0xFF6750A4, is_dark=is_dark, variant=variant)
    assert scheme.variant is variant
    colors = scheme.to_dict()
    assert all(0xFF000000 <= argb <= 0xFFFFFFFF for argb in colors.values())
    assert measured_ratio(scheme, MDC.on_primary, MDC.primary) >= 4.5
    assert measured_ratio(scheme, MDC.on_surface, lookup_role(HIGHEST_SURFACE, scheme)) >= 4.5


# =============================================================================
# DynamicScheme
# =============================================================================

class TestDynamicScheme:
    def test_tonal_spot_palettes(self, light_scheme):
        source = light_scheme.source_color_hct
        assert light_scheme.primary_palette.hue == pytest.approx(source.hue)
        assert light_scheme.primary_palette.chroma == 36.0
        assert light_scheme.tertiary_palette.hue == pytest.approx((source.hue + 60.0) % 360.0)

    def test_default_error_palette(self):
        scheme = plain_scheme()
        assert (scheme.error_palette.hue, scheme.error_palette.chroma) == (25.0, 84.0)

    def test_uids_increase(self):
        a, b = plain_scheme(), plain_scheme()
        assert b.uid > a.uid

    @pytest.mark.parametrize("level, clamped", [(2.0, 1.0), (-1.5, -1.0)])
    def test_contrast_level_is_clamped(self, level, clamped):
        with pytest.warns(UserWarning, match="contrast_level"):
            scheme = plain_scheme(contrast_level=level)
        assert scheme.contrast_level == clamped

    def test_attribute_access(self, light_scheme):
        assert light_scheme.primary == MDC.primary.get_argb(light_scheme)
        assert light_scheme.get_role("on_surface") == light_scheme.on_surface
        with pytest.raises(AttributeError):
            light_scheme.not_a_role
        with pytest.raises(ValueError):
            light_scheme.get_role("not_a_role")

    def test_to_dict_covers_registry(self, dark_scheme):
        colors = dark_scheme.to_dict()
        assert list(colors) == role_names()
        assert set(list(dark_scheme)) == set(colors)

    def test_palette_for(self, light_scheme):
        assert light_scheme.palette_for(PaletteRole.ERROR) is light_scheme.error_palette
        with pytest.raises(ValueError):
            light_scheme.palette_for("primary")  # type: ignore[arg-type]

    def test_repr(self):
        assert "variant=tonal-spot" in repr(plain_scheme())


class TestRotatedHue:
    HUES = (0.0, 41.0, 61.0, 101.0, 131.0, 181.0, 251.0, 301.0, 360.0)
    ROTATIONS = (18.0, 15.0, 10.0, 12.0, 15.0, 18.0, 15.0, 12.0, 12.0)

    @staticmethod
    def source(hue: float) -> Hct:
        return Hct(argb=0xFF000000, hue=hue, chroma=0.0, tone=0.0)

    def test_band_rotation(self):
        assert DynamicScheme.get_rotated_hue(self.source(50.0), self.HUES, self.ROTATIONS) == pytest.approx(65.0)
        assert DynamicScheme.get_rotated_hue(self.source(350.0), self.HUES, self.ROTATIONS) == pytest.approx(2.0)

    def test_band_edge_is_unrotated(self):
        assert DynamicScheme.get_rotated_hue(self.source(41.0), self.HUES, self.ROTATIONS) == 41.0

    def test_single_rotation(self):
        assert DynamicScheme.get_rotated_hue(self.source(350.0), (0.0,), (20.0,)) == pytest.approx(10.0)

    def test_length_mismatch(self):
        with pytest.raises(ValueError, match="Mismatch"):
            DynamicScheme.get_rotated_hue(self.source(10.0), (0.0, 360.0), (10.0,))


# =============================================================================
# DynamicColor
# =============================================================================

class TestDynamicColor:
    def test_rejects_non_scheme(self):
        with pytest.raises(TypeError):
            MDC.primary.get_argb(object())  # type: ignore[arg-type]

    def test_rejects_non_palette_role(self):
        with pytest.raises(TypeError):
            DynamicColor("bad", "primary", lambda s: 50.0)  # type: ignore[arg-type]

    def test_cache_is_bounded(self):
        role = MDC.background
        role.clear_cache()
        schemes = [plain_scheme() for _ in range(ROLE_CACHE_SIZE + 2)]
        for scheme in schemes:
            role.get_hct(scheme)
        assert role.cache_info()["size"] <= ROLE_CACHE_SIZE
        assert role.get_hct(schemes[-1]) is role.get_hct(schemes[-1])

    def test_highest_surface(self, light_scheme, dark_scheme):
        assert lookup_role(HIGHEST_SURFACE, dark_scheme) is MDC.surface_bright
        assert lookup_role(HIGHEST_SURFACE, light_scheme) is MDC.surface_dim
        assert MDC.highest_surface(dark_scheme) is MDC.surface_bright
        with pytest.raises(ValueError):
            lookup_role(HIGHEST_SURFACE)

    def test_unknown_role(self):
        with pytest.raises(ValueError):
            lookup_role("no_such_role")

    def test_duplicate_registration(self):
        with pytest.raises(ValueError):
            register_role(DynamicColor("primary", PaletteRole.PRIMARY, lambda s: 40.0))
        assert register_role(MDC.primary) is MDC.primary

    def test_all_roles_registered(self):
        names = role_names()
        assert all(role.name in names for role in ALL_ROLES)
        assert len(ALL_ROLES) == len(set(r.name for r in ALL_ROLES))

    def test_role_without_background_uses_default_tone(self):
        role = DynamicColor("loose", PaletteRole.PRIMARY, lambda s: 33.0, contrast_curve=ContrastCurve(3, 4.5, 7, 11))
        assert role.get_tone(plain_scheme()) == 33.0

    def test_incomplete_pair_warns_and_falls_back(self, monkeypatch):
        pair = ToneDeltaPair("pair_a", "pair_b", 10.0, TonePolarity.NEARER)
        a = DynamicColor("pair_a", PaletteRole.PRIMARY, lambda s: 70.0, background="surface", tone_delta_pair=pair)
        b = DynamicColor("pair_b", PaletteRole.PRIMARY, lambda s: 65.0, background="surface", tone_delta_pair=pair)
        lookup_role("surface")
        monkeypatch.setitem(prisma_dynamic._REGISTRY, "pair_a", a)
        monkeypatch.setitem(prisma_dynamic._REGISTRY, "pair_b", b)
        with pytest.warns(UserWarning, match="tone delta pair"):
            assert a.get_tone(plain_scheme()) == 70.0

    def test_custom_pair_is_pushed_apart(self, monkeypatch):
        curve = ContrastCurve(1.0, 1.0, 1.0, 1.0)
        pair = ToneDeltaPair("near_role", "far_role", 15.0, TonePolarity.NEARER)
        near = DynamicColor("near_role", PaletteRole.PRIMARY, lambda s: 80.0, background="surface",
                            contrast_curve=curve, tone_delta_pair=pair)
        far = DynamicColor("far_role", PaletteRole.PRIMARY, lambda s: 75.0, background="surface",
                           contrast_curve=curve, tone_delta_pair=pair)
        lookup_role("surface")
        monkeypatch.setitem(prisma_dynamic._REGISTRY, "near_role", near)
        monkeypatch.setitem(prisma_dynamic._REGISTRY, "far_role", far)
        scheme = plain_scheme()
        assert near.get_tone(scheme) == 80.0
        assert far.get_tone(scheme) == pytest.approx(65.0)

    def test_background_without_curve_raises(self):
        role = DynamicColor("uncurved", PaletteRole.PRIMARY, lambda s: 40.0, background="surface")
        with pytest.raises(ValueError, match="requires a contrast_curve"):
            role.get_tone(plain_scheme())


def install_roles(monkeypatch, *roles):
    lookup_role("surface")
    for role in roles:
        monkeypatch.setitem(prisma_dynamic._REGISTRY, role.name, role)


def make_pair(near_tone, far_tone, stay_together=True):
    curve = ContrastCurve(1.0, 1.0, 1.0, 1.0)
    pair = ToneDeltaPair("band_near", "band_far", 10.0, TonePolarity.NEARER, stay_together=stay_together)
    near = DynamicColor("band_near", PaletteRole.PRIMARY, lambda s: near_tone, background="surface",
                        contrast_curve=curve, tone_delta_pair=pair)
    far = DynamicColor("band_far", PaletteRole.PRIMARY, lambda s: far_tone, background="surface",
                       contrast_curve=curve, tone_delta_pair=pair)
    return near, far


class TestAwkwardBand:
    """Tones in [50, 60) are pushed out of the band."""

    def test_nearer_in_band_moves_pair(self, monkeypatch):
        near, far = make_pair(55.0, 70.0)
        install_roles(monkeypatch, near, far)
        scheme = plain_scheme(is_dark=True)
        assert near.get_tone(scheme) == 60.0
        assert far.get_tone(scheme) == 70.0

    def test_farther_in_band_stays_together(self, monkeypatch):
        near, far = make_pair(45.0, 55.0, stay_together=True)
        install_roles(monkeypatch, near, far)
        scheme = plain_scheme(is_dark=True)
        near_tone, far_tone = near.get_tone(scheme), far.get_tone(scheme)
        assert near_tone >= 60.0 and far_tone >= 60.0
        assert (near_tone, far_tone) == (60.0, 70.0)

    def test_farther_in_band_moves_alone(self, monkeypatch):
        near, far = make_pair(45.0, 55.0, stay_together=False)
        install_roles(monkeypatch, near, far)
        scheme = plain_scheme(is_dark=True)
        assert near.get_tone(scheme) == 45.0
        assert far.get_tone(scheme) == 60.0

    def test_light_scheme_moves_down(self, monkeypatch):
        near, far = make_pair(55.0, 40.0)
        install_roles(monkeypatch, near, far)
        scheme = plain_scheme()
        assert near.get_tone(scheme) == 49.0
        assert far.get_tone(scheme) == 39.0

    @pytest.mark.parametrize("ratio, expected", [(1.0, 49.0), (4.8, 60.0)])
    def test_background_role_snaps_out(self, ratio, expected):
        # Dark surface sits at tone 6: 49 reaches ~4.0:1, 55 reaches ~4.9:1.
        role = DynamicColor("band_bg", PaletteRole.PRIMARY, lambda s: 55.0, is_background=True,
                            background="surface", contrast_curve=ContrastCurve(ratio, ratio, ratio, ratio))
        assert role.get_tone(plain_scheme(is_dark=True)) == expected


class TestDualBackground:
    @staticmethod
    def backdrop(name, tone):
        return DynamicColor(name, PaletteRole.NEUTRAL, lambda s: tone, is_background=True)

    def test_prefers_light_takes_light_extreme(self, monkeypatch):
        low, high = self.backdrop("bd_low", 40.0), self.backdrop("bd_high", 70.0)
        fg = DynamicColor("bd_fg", PaletteRole.PRIMARY, lambda s: 50.0, background="bd_low",
                          second_background="bd_high", contrast_curve=ContrastCurve(4.5, 4.5, 4.5, 4.5))
        install_roles(monkeypatch, low, high, fg)
        assert DynamicColor.tone_prefers_light_foreground(40.0)
        assert fg.get_tone(plain_scheme()) == 100.0

    def test_prefers_dark_takes_only_attainable_side(self, monkeypatch):
        high, mid = self.backdrop("bd_top", 95.0), self.backdrop("bd_mid", 60.0)
        fg = DynamicColor("bd_dark_fg", PaletteRole.PRIMARY, lambda s: 30.0, background="bd_top",
                          second_background="bd_mid", contrast_curve=ContrastCurve(4.5, 4.5, 4.5, 4.5))
        install_roles(monkeypatch, high, mid, fg)
        assert not DynamicColor.tone_prefers_light_foreground(60.0)
        assert not Contrast.lighter(95.0, 4.5).attained
        tone = fg.get_tone(plain_scheme())
        assert tone == pytest.approx(Contrast.darker(60.0, 4.5).tone)
        assert Contrast.ratio_of_tones(tone, 60.0) >= 4.5 - 0.04
        assert Contrast.ratio_of_tones(tone, 95.0) >= 4.5


class TestToneHelpers:
    def test_prefers_light_foreground(self):
        assert DynamicColor.tone_prefers_light_foreground(59.4)
        assert not DynamicColor.tone_prefers_light_foreground(59.5)

    def test_allows_light_foreground(self):
        assert DynamicColor.tone_allows_light_foreground(49.4)
        assert not DynamicColor.tone_allows_light_foreground(49.5)

    @pytest.mark.parametrize("tone, expected", [(55.0, 49.0), (40.0, 40.0), (70.0, 70.0)])
    def test_enable_light_foreground(self, tone, expected):
        assert DynamicColor.enable_light_foreground(tone) == expected

    def test_foreground_tone_picks_side(self):
        assert DynamicColor.foreground_tone(98.0, 4.5) < 50.0
        assert DynamicColor.foreground_tone(10.0, 4.5) > 50.0
        assert Contrast.ratio_of_tones(DynamicColor.foreground_tone(30.0, 4.5), 30.0) >= 4.5 - 0.04


class TestVariant:
    @pytest.mark.parametrize("text", ["tonal-spot", "TONAL_SPOT", "tonal_spot", " Tonal-Spot "])
    def test_parse(self, text):
        assert Variant.parse(text) is Variant.TONAL_SPOT

    def test_parse_member(self):
        assert Variant.parse(Variant.VIBRANT) is Variant.VIBRANT

    @pytest.mark.parametrize("value", ["psychedelic", 3, None])
    def test_parse_rejects(self, value):
        with pytest.raises(ValueError):
            Variant.parse(value)
