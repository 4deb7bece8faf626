from __future__ import annotations

import random
from typing import Callable

InputShape = Callable[[int, random.Random], list[int]]


def random_uniform(n: int, rng: random.Random, max_value: int = 10_000_000) -> list[int]:
    return [rng.randint(1, max_value) for _ in range(n)]


def trend_with_jumps(n: int, rng: random.Random, jump_prob: float = 0.05) -> list[int]:
    arr = []
    value = 1
    for _ in range(n):
        if rng.random() < jump_prob:
            value += rng.randint(-10, 10)
        else:
            value += rng.randint(0, 1)

        if value < 1:
            value = 1

        arr.append(value)

    return arr


def best_case(n: int, rng: random.Random | None = None) -> list[int]:
    return list(range(n))


def worst_case(n: int, rng: random.Random | None = None) -> list[int]:
    return list(range(n, 0, -1))


def alternating_high_low(n: int, rng: random.Random | None = None) -> list[int]:
    arr = []
    for h, l in zip(range(n, 0, -1), range(1, n + 1)):
        arr.append(h)
        arr.append(l)
    return arr[:n]


def many_duplicates(
    n: int,
    rng: random.Random,
    distinct_values: int = 3,
    max_value: int = 20,
) -> list[int]:
    base_values = rng.sample(range(1, max_value + 1), k=distinct_values)
    return [rng.choice(base_values) for _ in range(n)]


def unique_spread(n: int, rng: random.Random, range_multiplier: int = 1000) -> list[int]:
    """
    range_multiplier - values are drawn without repetition from 1..n * range_multiplier
    """
    return rng.sample(range(1, n * range_multiplier + 1), n)


INPUT_SHAPES: dict[str, InputShape] = {
    "random": random_uniform,
    "jumps": trend_with_jumps,
    "best": best_case,
    "worst": worst_case,
    "alternating": alternating_high_low,
    "duplicates": many_duplicates,
    "unique": unique_spread,
}
