"""Shared fixtures: small generation parameters so full pipeline runs stay fast."""

import os

# pygame must never open a real window during tests
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest

from simple_rts.game.data.maps import GenerationParameters, TerrainGenerator


def small_params(**overrides):
    values = dict(
        region_width_range=(10, 14),
        region_height_range=(10, 12),
        carve_radius_range=(3, 6),
        extra_island_count_range=(0, 20),
        upscale_factor=4,
    )
    values.update(overrides)
    return GenerationParameters(**values)


@pytest.fixture
def params():
    return small_params(seed=1234)


@pytest.fixture
def generator(params):
    return TerrainGenerator(params)


@pytest.fixture
def tile_map(generator):
    return generator.generate()
