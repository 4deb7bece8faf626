import random

import pytest

from src.inputs import (
    INPUT_SHAPES,
    alternating_high_low,
    best_case,
    many_duplicates,
    trend_with_jumps,
    unique_spread,
    worst_case,
)


@pytest.mark.parametrize("name", list(INPUT_SHAPES))
@pytest.mark.parametrize("n", [0, 1, 17, 500])
def test_shapes_have_requested_length(name, n):
    assert len(INPUT_SHAPES[name](n, random.Random(n))) == n


def test_ordered_shapes():
    assert best_case(5) == [0, 1, 2, 3, 4]
    assert worst_case(5) == [5, 4, 3, 2, 1]
    assert alternating_high_low(5) == [5, 1, 4, 2, 3]


def test_trend_with_jumps_stays_positive():
    arr = trend_with_jumps(2000, random.Random(1), jump_prob=0.5)
    assert min(arr) >= 1


def test_many_duplicates_uses_few_values():
    arr = many_duplicates(1000, random.Random(2), distinct_values=3, max_value=20)
    assert len(set(arr)) <= 3
    assert all(1 <= x <= 20 for x in arr)


def test_unique_spread_is_unique():
    arr = unique_spread(1000, random.Random(3), range_multiplier=10)
    assert len(set(arr)) == 1000
    assert max(arr) <= 10_000


def test_same_seed_same_input():
    for generate in INPUT_SHAPES.values():
        assert generate(100, random.Random(5)) == generate(100, random.Random(5))
