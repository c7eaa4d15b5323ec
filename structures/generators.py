"""
generators.py — Dataset Generators
==================================
Builds the initial dataset of each page.  All randomness goes through an
optional `random.Random` so tests can pass a seeded instance.

Array presets (sorting page, values 10–99):
  • random        – uniform
  • nearly_sorted – linear ramp with ~size/10 adjacent swaps
  • reversed      – descending ramp
  • few_unique    – drawn from {20, 45, 70, 95}

Search arrays use values 1–99 and are pre-sorted for every search that
requires it (all but linear).
"""

import random
from typing import Callable, Dict, List, Optional

from structures.element import ElementArray
from structures.linked_list import LinkedList

MIN_SIZE = 5
MAX_SIZE = 50

MIN_CUSTOM_VALUES = 2
MAX_CUSTOM_VALUES = 50
MIN_CUSTOM_VALUE  = 1
MAX_CUSTOM_VALUE  = 100

FEW_UNIQUE_VALUES = (20, 45, 70, 95)


def _random(size: int, rng: random.Random) -> List[int]:
    return [rng.randint(10, 99) for _ in range(size)]


def _nearly_sorted(size: int, rng: random.Random) -> List[int]:
    arr = [int(i / size * 90) + 10 for i in range(size)]
    for _ in range((size + 9) // 10):
        idx = rng.randrange(size)
        swap_idx = min(idx + 1, size - 1)
        arr[idx], arr[swap_idx] = arr[swap_idx], arr[idx]
    return arr


def _reversed(size: int, rng: random.Random) -> List[int]:
    return [int((size - i) / size * 90) + 10 for i in range(size)]


def _few_unique(size: int, rng: random.Random) -> List[int]:
    return [rng.choice(FEW_UNIQUE_VALUES) for _ in range(size)]


PRESETS: Dict[str, Callable[[int, random.Random], List[int]]] = {
    "random":        _random,
    "nearly_sorted": _nearly_sorted,
    "reversed":      _reversed,
    "few_unique":    _few_unique,
}


def check_size(size: int) -> int:
    if not MIN_SIZE <= size <= MAX_SIZE:
        raise ValueError(f"Array size must be between {MIN_SIZE} and {MAX_SIZE}")
    return size


def make_array(
    size: int,
    preset: str = "random",
    sort: bool = False,
    rng: Optional[random.Random] = None,
) -> ElementArray:
    """Return a fresh ElementArray; ids are the initial positions."""
    check_size(size)
    gen = PRESETS.get(preset)
    if gen is None:
        raise ValueError(f"Unknown preset '{preset}'. Choose from: {', '.join(PRESETS)}")
    values = gen(size, rng or random.Random())
    if sort:
        values.sort()
    return ElementArray(values)


def make_search_array(size: int, sort: bool = True, rng: Optional[random.Random] = None) -> ElementArray:
    check_size(size)
    rng = rng or random.Random()
    values = [rng.randint(1, 99) for _ in range(size)]
    if sort:
        values.sort()
    return ElementArray(values)


def check_values(values: List[int]) -> List[int]:
    """Range and count rules every custom array goes through (1–100, 2–50 values)."""
    values = list(values)
    if any(not MIN_CUSTOM_VALUE <= v <= MAX_CUSTOM_VALUE for v in values):
        raise ValueError(f"Values must be between {MIN_CUSTOM_VALUE} and {MAX_CUSTOM_VALUE}")
    if len(values) < MIN_CUSTOM_VALUES:
        raise ValueError("Need at least 2 values (comma-separated numbers 1-100)")
    if len(values) > MAX_CUSTOM_VALUES:
        raise ValueError("Max 50 values")
    return values


def parse_values(text: str) -> List[int]:
    """
    Parse custom comma-separated input.

    Tokens that are not integers, or fall outside 1–100, are dropped
    silently; the rest must pass `check_values`.
    """
    values = []
    for token in text.split(","):
        token = token.strip()
        try:
            n = int(token)
        except ValueError:
            continue
        if MIN_CUSTOM_VALUE <= n <= MAX_CUSTOM_VALUE:
            values.append(n)
    return check_values(values)


def make_linked_list(
    values: Optional[List[int]] = None,
    cycle_target: Optional[int] = None,
    size: int = 6,
    rng: Optional[random.Random] = None,
) -> LinkedList:
    """Explicit values win; otherwise `size` random values 1–99."""
    if values is None:
        rng = rng or random.Random()
        values = [rng.randint(1, 99) for _ in range(size)]
    return LinkedList(values, cycle_target=cycle_target)
