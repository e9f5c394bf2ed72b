# -*- coding: utf-8 -*-
import numpy as np
import pytest

from prisma_colorutils import Attainment, argb_from_lstar, alpha_from_argb, blue_from_argb, green_from_argb, red_from_argb
from prisma_hct import Hct
from prisma_solver import CRITICAL_PLANES, HctSolver
from prisma_viewing import ViewingConditions


class TestCriticalPlanes:
    def test_shape_and_order(self):
        assert CRITICAL_PLANES.shape == (255,)
        assert np.all(np.diff(CRITICAL_PLANES) > 0.0)

    def test_end_values(self):
        assert CRITICAL_PLANES[0] == pytest.approx(0.015176349177441876)
        assert CRITICAL_PLANES[-1] == pytest.approx(99.55452497210776)


class TestHctSolver:
    @pytest.mark.parametrize("hue", [0.0, 60.0, 135.0, 220.0, 300.0])
    @pytest.mark.parametrize("chroma", [0.0, 16.0, 48.0, 200.0])
    @pytest.mark.parametrize("tone", [0.0, 25.0, 50.0, 90.0, 100.0])
    def test_result_is_opaque_and_valid(self, hue, chroma, tone):
        argb = HctSolver.solve_to_int(hue, chroma, tone)
        assert 0 <= argb <= 0xFFFFFFFF
        assert alpha_from_argb(argb) == 0xFF

    def test_achromatic_shortcut(self):
        res = HctSolver.solve(123.0, 0.0, 50.0)
        assert res.argb == argb_from_lstar(50.0)
        assert res.attainment is Attainment.EXACT

    def test_tone_extremes(self):
        assert HctSolver.solve_to_int(10.0, 80.0, 0.0) == 0xFF000000
        assert HctSolver.solve_to_int(10.0, 80.0, 100.0) == 0xFFFFFFFF

    def test_in_gamut_is_exact(self):
        assert HctSolver.solve(120.0, 20.0, 50.0).attainment is Attainment.EXACT

    def test_out_of_gamut_is_best_effort(self):
        res = HctSolver.solve(270.0, 200.0, 50.0)
        assert res.attainment is Attainment.BEST_EFFORT
        assert Hct.from_int(res.argb).tone == pytest.approx(50.0, abs=1.0)

    def test_hue_wraps(self):
        assert HctSolver.solve_to_int(-60.0, 30.0, 50.0) == HctSolver.solve_to_int(300.0, 30.0, 50.0)

    def test_solve_to_cam(self):
        cam = HctSolver.solve_to_cam(120.0, 20.0, 50.0)
        assert cam.hue == pytest.approx(120.0, abs=1.0)
        assert cam.chroma == pytest.approx(20.0, abs=1.0)

    def test_batch_agrees_with_scalar(self):
        rng = np.random.default_rng(11)
        hues = rng.uniform(0.0, 360.0, 200)
        chromas = rng.uniform(0.0, 120.0, 200)
        tones = rng.uniform(0.0, 100.0, 200)
        batch = HctSolver.solve_batch(hues, chromas, tones)
        assert batch.dtype == np.uint32
        for argb, h, c, t in zip(batch.tolist(), hues, chromas, tones):
            expected = HctSolver.solve_to_int(h, c, t)
            for channel in (red_from_argb, green_from_argb, blue_from_argb):
                assert abs(channel(argb) - channel(expected)) <= 1

    def test_batch_broadcasts_scalars(self):
        out = HctSolver.solve_batch(np.arange(10.0), 30.0, 60.0)
        assert out.shape == (10,)

    def test_batch_rejects_2d(self):
        with pytest.raises(ValueError):
            HctSolver.solve_batch(np.zeros((2, 3)), 10.0, 50.0)


class TestHct:
    def test_round_trip_tolerance(self):
        hct = Hct.from_hct(120.0, 20.0, 50.0)
        assert hct.hue == pytest.approx(120.0, abs=1.0)
        assert hct.chroma == pytest.approx(20.0, abs=1.0)
        assert hct.tone == pytest.approx(50.0, abs=0.5)

    def test_idempotent_once_materialised(self):
        hct = Hct.from_hct(120.0, 20.0, 50.0)
        again = Hct.from_int(hct.to_int())
        assert again == hct
        assert Hct.from_int(again.to_int()).tone == again.tone

    def test_equality_and_hash_follow_argb(self):
        a = Hct.from_int(0xFF6750A4)
        b = Hct.from_int(0xFF6750A4)
        assert a == b and hash(a) == hash(b)
        assert a != Hct.from_int(0xFF6750A5)

    def test_with_tone_returns_new_value(self):
        base = Hct.from_int(0xFF6750A4)
        lighter = base.with_tone(80.0)
        assert lighter.tone == pytest.approx(80.0, abs=0.5)
        assert base.to_int() == 0xFF6750A4
        with pytest.raises(AttributeError):
            base.tone = 10.0  # type: ignore[misc]

    def test_with_hue_and_chroma(self):
        base = Hct.from_hct(200.0, 30.0, 60.0)
        assert base.with_hue(20.0).hue == pytest.approx(20.0, abs=1.5)
        assert base.with_chroma(10.0).chroma == pytest.approx(10.0, abs=1.0)

    def test_out_of_gamut_chroma_is_clipped(self):
        hct = Hct.from_hct(270.0, 200.0, 90.0)
        assert hct.chroma < 200.0
        assert hct.tone == pytest.approx(90.0, abs=1.0)

    def test_standard_viewing_conditions_are_neutral(self):
        hct = Hct.from_int(0xFF6750A4)
        seen = hct.in_viewing_conditions(ViewingConditions.standard())
        assert seen.tone == pytest.approx(hct.tone, abs=0.5)
        assert seen.hue == pytest.approx(hct.hue, abs=1.0)
        assert seen.chroma == pytest.approx(hct.chroma, abs=1.0)

    def test_is_yellow(self):
        assert Hct.from_hct(100.0, 40.0, 40.0).is_yellow()
        assert not Hct.from_int(0xFF0000FF).is_yellow()

    def test_repr(self):
        assert repr(Hct.from_int(0xFF6750A4)).endswith("argb=#6750a4)")
