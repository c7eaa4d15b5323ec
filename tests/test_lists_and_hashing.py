"""Tests for Floyd cycle detection, linked-list search and the hash table runners."""
import unittest

from algorithms import get_algorithm
from algorithms.step import Tracer
from structures import EntryState, HashTable, LinkedList, ListNodeState, hash_key, hash_steps


def drain(key, dataset, /, **params):
    info = get_algorithm(key)
    tr = Tracer(dataset, None, info.counters)
    gen = info.fn(tr, dataset, **params)
    steps = []
    while True:
        try:
            steps.append(next(gen))
        except StopIteration as stop:
            return steps, stop.value, tr


class TestFloyd(unittest.TestCase):

    def test_detects_cycle_and_its_entry(self):
        for target in range(6):
            with self.subTest(cycle_target=target):
                lst = LinkedList([10, 20, 30, 40, 50, 60], cycle_target=target)
                steps, result, tr = drain("floyd", lst)
                self.assertTrue(result.has_cycle)
                self.assertEqual(result.cycle_start, target)
                self.assertEqual(result.iterations, tr.counters["iterations"])
                self.assertTrue(steps[-1].is_final)

    def test_acyclic_lists(self):
        for values in ([], [1], [1, 2], [1, 2, 3, 4, 5]):
            with self.subTest(values=values):
                _, result, _ = drain("floyd", LinkedList(values))
                self.assertFalse(result.has_cycle)
                self.assertIsNone(result.cycle_start)

    def test_self_loop_on_single_node(self):
        _, result, _ = drain("floyd", LinkedList([7], cycle_target=0))
        self.assertTrue(result.has_cycle)
        self.assertEqual(result.cycle_start, 0)

    def test_final_step_highlights_cycle_start(self):
        lst = LinkedList([1, 2, 3, 4, 5], cycle_target=2)
        steps, _, _ = drain("floyd", lst)
        states = [n["state"] for n in steps[-1].data["list"]]
        self.assertEqual(states[2], ListNodeState.CYCLE_START.value)

    def test_pointer_positions_are_in_the_overlay(self):
        steps, _, _ = drain("floyd", LinkedList([1, 2, 3, 4], cycle_target=1))
        self.assertEqual((steps[0].overlay["slow"], steps[0].overlay["fast"]), (0, 0))


class TestListSearch(unittest.TestCase):

    def test_found(self):
        _, result, tr = drain("list_search", LinkedList([4, 8, 15, 16]), target=15)
        self.assertTrue(result.found)
        self.assertEqual(result.index, 2)
        self.assertEqual(tr.counters["comparisons"], 3)

    def test_missing_value_terminates_on_a_cycle(self):
        lst = LinkedList([4, 8, 15, 16], cycle_target=1)
        _, result, tr = drain("list_search", lst, target=99)
        self.assertFalse(result.found)
        self.assertEqual(tr.counters["comparisons"], 4)


class TestLinkedListEditing(unittest.TestCase):

    def test_insert_before_cycle_target_shifts_it(self):
        lst = LinkedList([1, 2, 3], cycle_target=1)
        lst.insert_head(0)
        self.assertEqual(lst.values(), [0, 1, 2, 3])
        self.assertEqual(lst.cycle_target, 2)

    def test_deleting_cycle_target_clears_cycle(self):
        lst = LinkedList([1, 2, 3], cycle_target=1)
        lst.delete_value(2)
        self.assertIsNone(lst.cycle_target)

    def test_next_index_follows_back_edge(self):
        lst = LinkedList([1, 2, 3], cycle_target=0)
        self.assertEqual(lst.next_index(2), 0)
        self.assertIsNone(LinkedList([1, 2]).next_index(1))


class TestHashFunction(unittest.TestCase):

    def test_hash_steps(self):
        self.assertEqual(hash_steps("a"), [("a", 97 % 7)])
        self.assertEqual(hash_steps("ab"), [("a", 6), ("b", (6 * 31 + 98) % 7)])
        self.assertEqual(hash_key(""), 0)

    def test_astral_characters_hash_per_utf16_unit(self):
        # U+1F600 is the surrogate pair D83D DE00
        first = 0xD83D % 7
        self.assertEqual(hash_steps("😀"), [("😀", first), ("😀", (first * 31 + 0xDE00) % 7)])
        self.assertEqual(hash_key("a😀"), ((97 % 7 * 31 + 0xD83D) % 7 * 31 + 0xDE00) % 7)

    def test_hash_key_is_in_range(self):
        for key in ("apple", "banana", "cherry", "x" * 40):
            self.assertIn(hash_key(key), range(7))


class TestHashRunners(unittest.TestCase):

    def test_insert_then_search(self):
        table = HashTable()
        _, result, _ = drain("hash_insert", table, key="apple", value="red")
        self.assertFalse(result.updated)
        self.assertEqual(result.bucket, hash_key("apple"))
        self.assertEqual(table.get("apple"), "red")

        _, found, tr = drain("hash_search", table, key="apple")
        self.assertTrue(found.found)
        self.assertEqual(found.value, "red")
        self.assertEqual(tr.counters["probes"], 1)

    def test_insert_existing_key_updates(self):
        table = HashTable()
        drain("hash_insert", table, key="k", value="1")
        _, result, _ = drain("hash_insert", table, key="k", value="2")
        self.assertTrue(result.updated)
        self.assertEqual(len(table), 1)
        self.assertEqual(table.get("k"), "2")

    def test_collision_is_chained(self):
        table = HashTable()
        # single characters seven code points apart share a bucket
        drain("hash_insert", table, key="a", value="1")
        steps, result, _ = drain("hash_insert", table, key="h", value="2")
        self.assertTrue(result.collision)
        self.assertIn("Collision handled!", steps[-1].explanation)
        self.assertEqual(table.collisions, 1)
        self.assertEqual(len(table.buckets[hash_key("a")].entries), 2)

    def test_hash_trace_overlay(self):
        steps, _, _ = drain("hash_search", HashTable(), key="abc")
        traced = [s for s in steps if "hash_trace" in s.overlay]
        self.assertEqual(len(traced), 4)
        self.assertEqual(traced[-1].overlay["hash_trace"][-1][1], hash_key("abc"))

    def test_delete(self):
        table = HashTable()
        drain("hash_insert", table, key="x", value="1")
        steps, result, _ = drain("hash_delete", table, key="x")
        self.assertTrue(result.found)
        self.assertEqual(len(table), 0)
        deleted = [s for s in steps if any(
            e["state"] == EntryState.DELETED.value
            for b in s.data["buckets"] for e in b["entries"]
        )]
        self.assertEqual(len(deleted), 1)

    def test_search_and_delete_missing_key(self):
        for key in ("hash_search", "hash_delete"):
            with self.subTest(algorithm=key):
                _, result, _ = drain(key, HashTable(), key="ghost")
                self.assertFalse(result.found)

    def test_load_factor(self):
        table = HashTable()
        for i, key in enumerate(("a", "b", "c")):
            drain("hash_insert", table, key=key, value=str(i))
        self.assertEqual(table.load_factor, round(3 / 7, 2))


if __name__ == "__main__":
    unittest.main()
