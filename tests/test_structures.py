"""Tests for the editable structures and the dataset generators."""
import random
import unittest

from structures import (
    CapacityError,
    ElementArray,
    EmptyStructureError,
    Queue,
    Stack,
    StructureError,
    check_values,
    make_array,
    make_linked_list,
    make_search_array,
    parse_values,
)
from structures.containers import QUEUE_EXAMPLES


class TestStack(unittest.TestCase):

    def test_push_pop_peek(self):
        s = Stack()
        for v in (1, 2, 3):
            s.push(v)
        self.assertEqual(s.peek().value, 3)
        self.assertEqual(s.pop().value, 3)
        self.assertEqual(len(s), 2)
        self.assertEqual(s.snapshot()["top"], 1)

    def test_overflow_at_capacity(self):
        s = Stack()
        for v in range(10):
            s.push(v)
        self.assertEqual(s.fill_percentage, 100)
        with self.assertRaises(CapacityError) as ctx:
            s.push(99)
        self.assertEqual(str(ctx.exception), "Stack Overflow! Maximum capacity reached")

    def test_underflow(self):
        with self.assertRaises(EmptyStructureError) as ctx:
            Stack().pop()
        self.assertEqual(str(ctx.exception), "Stack Underflow! Stack is empty")
        with self.assertRaises(EmptyStructureError):
            Stack().peek()


class TestQueue(unittest.TestCase):

    def test_fifo(self):
        q = Queue()
        for v in (1, 2, 3):
            q.enqueue(v)
        self.assertEqual(q.dequeue().value, 1)
        self.assertEqual(q.peek_front().value, 2)
        self.assertEqual(q.peek_rear().value, 3)

    def test_full_and_empty(self):
        q = Queue()
        for v in range(8):
            q.enqueue(v)
        with self.assertRaises(CapacityError):
            q.enqueue(9)
        q.clear()
        with self.assertRaises(EmptyStructureError):
            q.dequeue()

    def test_circular_indices_wrap(self):
        q = Queue("circular")
        for v in range(8):
            q.enqueue(v)
        self.assertEqual(q.rear, 0)
        q.dequeue()
        q.enqueue(42)
        self.assertEqual((q.front, q.rear), (1, 1))

    def test_priority_order_is_stable_descending(self):
        q = Queue("priority")
        q.enqueue(1, priority=2)
        q.enqueue(2, priority=9)
        q.enqueue(3)
        q.enqueue(4, priority=9)
        self.assertEqual([i.value for i in q.items], [2, 4, 3, 1])
        self.assertEqual(q.items[2].priority, 5)

    def test_deque_only_operations(self):
        q = Queue("linear")
        with self.assertRaises(StructureError):
            q.enqueue_front(1)
        q.enqueue(1)
        with self.assertRaises(StructureError):
            q.dequeue_rear()

        d = Queue("deque")
        d.enqueue(2)
        d.enqueue_front(1)
        d.enqueue(3)
        self.assertEqual(d.dequeue_rear().value, 3)
        self.assertEqual([i.value for i in d.items], [1, 2])

    def test_switching_kind_empties_the_queue(self):
        q = Queue()
        q.enqueue(1)
        q.set_kind("priority")
        self.assertEqual(len(q), 0)
        with self.assertRaises(StructureError):
            q.set_kind("ring")

    def test_load_example(self):
        for kind, (title, rows) in QUEUE_EXAMPLES.items():
            with self.subTest(kind=kind):
                q = Queue(kind)
                self.assertEqual(q.load_example(), title)
                self.assertEqual(len(q), len(rows))
        q = Queue("priority")
        q.load_example()
        self.assertEqual(q.peek_front().label, "Heart Attack")


class TestGenerators(unittest.TestCase):

    def test_size_bounds(self):
        self.assertEqual(len(make_array(5)), 5)
        self.assertEqual(len(make_array(50)), 50)
        for size in (4, 51):
            with self.assertRaises(ValueError):
                make_array(size)

    def test_presets(self):
        rng = random.Random(2)
        self.assertEqual(make_array(10, "reversed").values(), sorted(make_array(10, "reversed").values(), reverse=True))
        self.assertTrue(set(make_array(30, "few_unique", rng=rng).values()) <= {20, 45, 70, 95})
        self.assertTrue(all(10 <= v <= 99 for v in make_array(40, rng=rng).values()))
        with self.assertRaises(ValueError):
            make_array(10, "zigzag")

    def test_search_array_is_sorted(self):
        values = make_search_array(30, rng=random.Random(4)).values()
        self.assertEqual(values, sorted(values))
        self.assertTrue(all(1 <= v <= 99 for v in values))

    def test_ids_are_initial_positions(self):
        arr = ElementArray([30, 10, 20])
        self.assertEqual(arr.ids(), [0, 1, 2])

    def test_parse_values_drops_invalid_tokens(self):
        self.assertEqual(parse_values("5, x, 12, 0, 101, 7"), [5, 12, 7])

    def test_parse_values_needs_two(self):
        with self.assertRaises(ValueError):
            parse_values("5, abc")
        with self.assertRaises(ValueError):
            parse_values(",".join(["3"] * 51))

    def test_check_values(self):
        self.assertEqual(check_values((1, 100)), [1, 100])
        for values in ([5, -3, 8], [0, 4], [5, 101], [4], [9] * 51):
            with self.subTest(values=values):
                with self.assertRaises(ValueError):
                    check_values(values)

    def test_make_linked_list(self):
        lst = make_linked_list([1, 2, 3], cycle_target=1)
        self.assertEqual(lst.values(), [1, 2, 3])
        self.assertTrue(lst.has_cycle)
        self.assertEqual(len(make_linked_list(size=4, rng=random.Random(0))), 4)
        with self.assertRaises(StructureError):
            make_linked_list([1, 2], cycle_target=5)


if __name__ == "__main__":
    unittest.main()
