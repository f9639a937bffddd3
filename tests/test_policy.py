import pytest

from crucible.core.policy import (
    BOUNDED_RUN,
    BOUNDED_RUN_WITH_MINIMUM,
    MovePolicy,
    PolicyVariant,
)
from crucible.core.types import Direction

L, R, U, D = Direction.LEFT, Direction.RIGHT, Direction.UP, Direction.DOWN


def test_presets():
    assert (BOUNDED_RUN.min_run, BOUNDED_RUN.max_run) == (0, 3)
    assert (BOUNDED_RUN_WITH_MINIMUM.min_run, BOUNDED_RUN_WITH_MINIMUM.max_run) == (4, 10)


def test_bounded_allows_straight_and_turns_below_max():
    assert BOUNDED_RUN.legal_directions(R, 0) == [R, U, D]
    assert BOUNDED_RUN.legal_directions(R, 2) == [R, U, D]
    assert BOUNDED_RUN.legal_directions(D, 1) == [L, R, D]


def test_bounded_forces_turn_at_max():
    assert BOUNDED_RUN.legal_directions(R, 3) == [U, D]
    assert BOUNDED_RUN.legal_directions(U, 3) == [L, R]


@pytest.mark.parametrize("policy", [BOUNDED_RUN, BOUNDED_RUN_WITH_MINIMUM])
def test_never_reverses(policy):
    for facing in Direction:
        for run in range(policy.max_run + 1):
            assert facing.opposite not in policy.legal_directions(facing, run)


def test_minimum_forces_straight_until_min():
    for run in range(4):
        assert BOUNDED_RUN_WITH_MINIMUM.legal_directions(L, run) == [L]
    assert BOUNDED_RUN_WITH_MINIMUM.legal_directions(L, 4) == [L, U, D]
    assert BOUNDED_RUN_WITH_MINIMUM.legal_directions(L, 10) == [U, D]


def test_terminal_gating():
    assert all(BOUNDED_RUN.is_terminal(r) for r in range(4))
    assert not BOUNDED_RUN_WITH_MINIMUM.is_terminal(3)
    assert BOUNDED_RUN_WITH_MINIMUM.is_terminal(4)
    assert BOUNDED_RUN_WITH_MINIMUM.is_terminal(10)


def test_for_variant_overrides():
    p = MovePolicy.for_variant(PolicyVariant.BOUNDED_RUN_WITH_MINIMUM, max_run=6, min_run=2)
    assert (p.min_run, p.max_run) == (2, 6)
    assert p.variant is PolicyVariant.BOUNDED_RUN_WITH_MINIMUM
    q = MovePolicy.for_variant(PolicyVariant.BOUNDED_RUN, max_run=5, min_run=0)
    assert (q.min_run, q.max_run) == (0, 5)


def test_bounded_variant_rejects_minimum():
    with pytest.raises(ValueError, match="no minimum run"):
        MovePolicy.for_variant(PolicyVariant.BOUNDED_RUN, min_run=4)


@pytest.mark.parametrize("max_run,min_run", [(0, 0), (3, -1), (3, 4)])
def test_invalid_thresholds(max_run, min_run):
    with pytest.raises(ValueError):
        MovePolicy(max_run=max_run, min_run=min_run)
