# -*- coding: utf-8 -*-
"""Shared fixtures: schemes are costly to resolve, so build each one once."""

import pytest

from prisma_dynamic import DynamicScheme
from prisma_theme import scheme_from_seed

BASELINE_SEED = 0xFF6750A4


@pytest.fixture(scope="session")
def light_scheme() -> DynamicScheme:
    return scheme_from_seed(BASELINE_SEED, is_dark=False)


@pytest.fixture(scope="session")
def dark_scheme() -> DynamicScheme:
    return scheme_from_seed(BASELINE_SEED, is_dark=True)


@pytest.fixture(scope="session")
def high_contrast_scheme() -> DynamicScheme:
    return scheme_from_seed(BASELINE_SEED, is_dark=False, contrast_level=1.0)


@pytest.fixture(scope="session")
def reduced_contrast_scheme() -> DynamicScheme:
    return scheme_from_seed(BASELINE_SEED, is_dark=False, contrast_level=-1.0)
