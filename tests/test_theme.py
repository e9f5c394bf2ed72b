# -*- coding: utf-8 -*-
import re

import pytest

from __about__ import __version__, metadata_summary
from prisma_dynamic import Variant
from prisma_theme import SCHEME_ROLES, create_color_scheme, scheme_from_seed
from scheme_models.expressive import SchemeExpressive, SchemeVibrant
from scheme_models.factory import SCHEME_MODELS, scheme_for_variant
from scheme_models.fidelity import SchemeContent, SchemeFidelity
from scheme_models.monochrome import SchemeMonochrome
from scheme_models.tonal import FixedOffsetScheme, SchemeTonalSpot
from scheme_models.variant import VariantScheme
from prisma_hct import Hct

HEX = re.compile(r"^#[0-9a-f]{6}$")


@pytest.fixture(scope="module")
def light_theme():
    return create_color_scheme("#6750A4")


class TestCreateColorScheme:
    def test_keys_are_camel_case(self, light_theme):
        assert light_theme["brightness"] == "light"
        for key in ("primary", "onPrimary", "primaryContainer", "surfaceContainerHighest",
                    "onTertiaryFixedVariant", "inverseOnSurface", "surfaceTint"):
            assert key in light_theme
        assert len(light_theme) == len(SCHEME_ROLES) + 1

    def test_values_are_hex(self, light_theme):
        for key, value in light_theme.items():
            if key != "brightness":
                assert HEX.match(value), key

    def test_matches_scheme(self, light_theme, light_scheme):
        assert light_theme["primary"] == "#%06x" % (light_scheme.primary & 0xFFFFFF)

    def test_dark_differs(self, light_theme):
        dark = create_color_scheme("#6750A4", brightness="dark")
        assert dark["brightness"] == "dark"
        assert dark["surface"] != light_theme["surface"]

    def test_invalid_brightness(self):
        with pytest.raises(ValueError, match="brightness"):
            create_color_scheme("#6750A4", brightness="dim")

    def test_invalid_hex(self):
        with pytest.raises(ValueError):
            create_color_scheme("#6750A")

    def test_invalid_variant(self):
        with pytest.raises(ValueError):
            create_color_scheme("#6750A4", variant="psychedelic")


class TestSchemeFromSeed:
    def test_int_and_hex_agree(self):
        assert scheme_from_seed(0xFF6750A4).primary == scheme_from_seed("#6750a4").primary

    @pytest.mark.parametrize("seed", [1.5, None, True])
    def test_rejects_other_types(self, seed):
        with pytest.raises(TypeError):
            scheme_from_seed(seed)  # type: ignore[arg-type]

    def test_variant_by_name(self):
        scheme = scheme_from_seed("#6750A4", variant="vibrant")
        assert isinstance(scheme, SchemeVibrant)
        assert scheme.variant is Variant.VIBRANT


class TestSchemeModels:
    def test_every_variant_has_a_model(self):
        assert set(SCHEME_MODELS) == set(Variant)
        for variant, model in SCHEME_MODELS.items():
            assert model.VARIANT is variant
            assert issubclass(model, VariantScheme)

    @pytest.mark.parametrize("variant, model", [
        (Variant.TONAL_SPOT, SchemeTonalSpot),
        (Variant.EXPRESSIVE, SchemeExpressive),
        (Variant.FIDELITY, SchemeFidelity),
        (Variant.CONTENT, SchemeContent),
        (Variant.MONOCHROME, SchemeMonochrome),
    ])
    def test_factory(self, variant, model):
        scheme = scheme_for_variant(variant, Hct.from_int(0xFF6750A4), False)
        assert type(scheme) is model

    def test_monochrome_is_gray(self):
        scheme = SchemeMonochrome(Hct.from_int(0xFF6750A4), is_dark=False)
        for palette in (scheme.primary_palette, scheme.neutral_palette, scheme.tertiary_palette):
            assert palette.chroma == 0.0

    def test_fidelity_keeps_source_chroma(self):
        source = Hct.from_int(0xFFB3261E)
        scheme = SchemeFidelity(source, is_dark=False)
        assert scheme.primary_palette.chroma == pytest.approx(source.chroma)
        assert scheme.primary_palette.hue == pytest.approx(source.hue)

    def test_base_class_requires_palettes(self):
        with pytest.raises(NotImplementedError, match="palettes"):
            VariantScheme(Hct.from_int(0xFF6750A4), is_dark=False)

    def test_offset_table_must_have_five_entries(self):
        class Broken(FixedOffsetScheme):
            __slots__ = ()
            VARIANT = Variant.TONAL_SPOT
            PALETTE_OFFSETS = ((0.0, 36.0),)

        with pytest.raises(ValueError, match="5 entries"):
            Broken(Hct.from_int(0xFF6750A4), is_dark=False)


def test_metadata_summary():
    summary = metadata_summary()
    assert summary["version"] == __version__
    assert summary["title"] == "Prisma"
