"""Tests for the sorting runners.

Every sort must leave the array ascending, keep the same Element objects
(ids and values), and finish with a single final step.
"""
import random
import unittest

from algorithms import FAMILY_COUNTERS, get_algorithm, list_algorithms
from algorithms.step import Tracer
from structures import ElementArray, ElementState, make_array

SORT_KEYS = [a.key for a in list_algorithms("sorting")]


def drain(key, arr, session=None):
    """Pull every Step out of a runner; returns (steps, result, tracer)."""
    info = get_algorithm(key)
    tr = Tracer(arr, session, info.counters)
    gen = info.fn(tr, arr)
    steps = []
    while True:
        try:
            steps.append(next(gen))
        except StopIteration as stop:
            return steps, stop.value, tr


class TestSortCorrectness(unittest.TestCase):

    def test_registry_has_nine_sorts(self):
        self.assertEqual(
            SORT_KEYS,
            ["bubble", "selection", "insertion", "merge", "quick", "heap", "counting", "radix", "shell"],
        )

    def test_every_sort_orders_random_arrays(self):
        rng = random.Random(7)
        for key in SORT_KEYS:
            for preset in ("random", "nearly_sorted", "reversed", "few_unique"):
                with self.subTest(algorithm=key, preset=preset):
                    arr = make_array(20, preset, rng=rng)
                    before = sorted(arr.values())
                    ids = sorted(arr.ids())
                    steps, result, _ = drain(key, arr)
                    self.assertEqual(arr.values(), before)
                    self.assertEqual(sorted(arr.ids()), ids)
                    self.assertEqual(result.values, before)
                    self.assertTrue(steps[-1].is_final)
                    self.assertEqual(sum(s.is_final for s in steps), 1)

    def test_elements_keep_their_values(self):
        arr = ElementArray([42, 7, 19, 7, 88, 3])
        by_id = {e.id: e.value for e in arr.elements}
        for key in SORT_KEYS:
            with self.subTest(algorithm=key):
                copy = ElementArray(arr.values())
                drain(key, copy)
                self.assertEqual({e.id: e.value for e in copy.elements}, by_id)

    def test_final_step_marks_everything_sorted(self):
        arr = make_array(10, rng=random.Random(1))
        steps, _, _ = drain("quick", arr)
        states = {e["state"] for e in steps[-1].data["elements"]}
        self.assertEqual(states, {ElementState.SORTED.value})

    def test_edge_sizes(self):
        for key in SORT_KEYS:
            for values in ([], [5], [2, 1], [3, 3, 3]):
                with self.subTest(algorithm=key, values=values):
                    arr = ElementArray(values)
                    drain(key, arr)
                    self.assertEqual(arr.values(), sorted(values))

    def test_counting_and_radix_take_any_integers(self):
        for key in ("counting", "radix"):
            for values in ([5, -3, 8, 1], [-7, -7, -1, -40], [1000, 5, 250, 0, 99]):
                with self.subTest(algorithm=key, values=values):
                    arr = ElementArray(values)
                    _, result, _ = drain(key, arr)
                    self.assertEqual(result.values, sorted(values))
                    self.assertEqual(arr.values(), sorted(values))

    def test_stable_sorts_keep_equal_values_in_order(self):
        values = [5, 1, 5, 3, 1, 5]
        for key in SORT_KEYS:
            if not get_algorithm(key).stable:
                continue
            with self.subTest(algorithm=key):
                arr = ElementArray(values)
                drain(key, arr)
                fives = [e.id for e in arr.elements if e.value == 5]
                self.assertEqual(fives, sorted(fives))


class TestSortCounters(unittest.TestCase):

    def test_bubble_counts_on_known_input(self):
        arr = ElementArray([5, 3, 8, 1])
        steps, result, tr = drain("bubble", arr)
        self.assertEqual(result.values, [1, 3, 5, 8])
        self.assertEqual(tr.counters, {"comparisons": 6, "swaps": 4})
        self.assertEqual(steps[-1].counters, {"comparisons": 6, "swaps": 4})

    def test_counters_never_decrease(self):
        arr = make_array(15, rng=random.Random(3))
        steps, _, _ = drain("heap", arr)
        for name in FAMILY_COUNTERS["sorting"]:
            series = [s.counters[name] for s in steps]
            self.assertEqual(series, sorted(series))

    def test_step_numbers_are_consecutive(self):
        arr = make_array(12, rng=random.Random(5))
        steps, _, _ = drain("merge", arr)
        self.assertEqual([s.step_number for s in steps], list(range(len(steps))))

    def test_selection_sort_swaps_at_most_n_minus_one(self):
        arr = make_array(20, "reversed")
        _, _, tr = drain("selection", arr)
        self.assertLessEqual(tr.counters["swaps"], 19)

    def test_sorted_input_needs_no_swaps(self):
        for key in ("bubble", "insertion"):
            with self.subTest(algorithm=key):
                arr = ElementArray([1, 2, 3, 4, 5])
                _, _, tr = drain(key, arr)
                self.assertEqual(tr.counters["swaps"], 0)


if __name__ == "__main__":
    unittest.main()
