from pathlib import Path

import pytest

from crucible.core.grid_io import load_map, parse_grid

MAPS = Path(__file__).resolve().parents[1] / "maps"


@pytest.fixture
def maps_dir():
    return MAPS


@pytest.fixture
def sample_grid():
    return load_map(MAPS / "sample.txt")


@pytest.fixture
def long_straight_grid():
    return load_map(MAPS / "long_straight.txt")


@pytest.fixture
def detour_grid():
    return parse_grid("1111\n9991\n1111\n1111\n")
