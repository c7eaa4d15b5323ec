"""Tests for the searching runners."""
import math
import random
import unittest

from algorithms import get_algorithm, list_algorithms
from algorithms.step import Tracer
from structures import ElementArray, make_search_array

SEARCH_KEYS = [a.key for a in list_algorithms("searching")]


def drain(key, arr, target):
    info = get_algorithm(key)
    tr = Tracer(arr, None, info.counters)
    gen = info.fn(tr, arr, target=target)
    steps = []
    while True:
        try:
            steps.append(next(gen))
        except StopIteration as stop:
            return steps, stop.value, tr


class TestSearchCorrectness(unittest.TestCase):

    def test_registry_has_six_searches(self):
        self.assertEqual(SEARCH_KEYS, ["linear", "binary", "jump", "interpolation", "exponential", "ternary"])

    def test_only_linear_accepts_unsorted_input(self):
        for key in SEARCH_KEYS:
            self.assertEqual(get_algorithm(key).requires_sorted, key != "linear")

    def test_every_present_value_is_found(self):
        rng = random.Random(11)
        for key in SEARCH_KEYS:
            arr = make_search_array(30, sort=True, rng=rng)
            for target in set(arr.values()):
                with self.subTest(algorithm=key, target=target):
                    fresh = ElementArray(arr.values())
                    steps, result, _ = drain(key, fresh, target)
                    self.assertTrue(result.found)
                    self.assertEqual(fresh.values()[result.index], target)
                    self.assertTrue(steps[-1].is_final)

    def test_absent_values_are_reported_missing(self):
        arr_values = [2, 4, 8, 16, 32, 64]
        for key in SEARCH_KEYS:
            for target in (1, 5, 33, 99):
                with self.subTest(algorithm=key, target=target):
                    _, result, _ = drain(key, ElementArray(arr_values), target)
                    self.assertFalse(result.found)
                    self.assertIsNone(result.index)

    def test_linear_search_on_unsorted_array(self):
        _, result, tr = drain("linear", ElementArray([9, 4, 7, 1]), 7)
        self.assertEqual(result.index, 2)
        self.assertEqual(tr.counters["comparisons"], 3)

    def test_empty_array(self):
        for key in SEARCH_KEYS:
            with self.subTest(algorithm=key):
                steps, result, _ = drain(key, ElementArray([]), 5)
                self.assertFalse(result.found)
                self.assertEqual(len(steps), 1)


class TestSearchBounds(unittest.TestCase):

    def test_binary_search_probe_bound(self):
        arr = ElementArray(range(1, 51))
        for target in range(0, 52):
            with self.subTest(target=target):
                _, _, tr = drain("binary", ElementArray(arr.values()), target)
                self.assertLessEqual(tr.counters["comparisons"], math.floor(math.log2(50)) + 1)

    def test_linear_search_probe_bound(self):
        _, _, tr = drain("linear", ElementArray(range(1, 21)), 99)
        self.assertEqual(tr.counters["comparisons"], 20)

    def test_exponential_search_checks_first_element(self):
        _, result, tr = drain("exponential", ElementArray([3, 5, 9]), 3)
        self.assertEqual(result.index, 0)
        self.assertEqual(tr.counters["comparisons"], 1)

    def test_ternary_counts_two_per_round(self):
        _, _, tr = drain("ternary", ElementArray([1, 2, 3, 4, 5, 6, 7, 8, 9]), 5)
        self.assertEqual(tr.counters["comparisons"] % 2, 0)

    def test_steps_carry_the_search_window(self):
        steps, _, _ = drain("binary", ElementArray(range(1, 17)), 13)
        windows = [s.overlay["range"] for s in steps if "range" in s.overlay]
        self.assertTrue(windows)
        self.assertEqual(windows[0], [0, 15])


if __name__ == "__main__":
    unittest.main()
