"""Tests for the run-control layer: sessions, the step driver, recorders and pages."""
import random
import threading
import time
import unittest

from algorithms import get_algorithm, list_algorithms
from algorithms.step import Tracer
from engine import (
    InvalidParameterError,
    Recorder,
    RunInProgressError,
    RunSession,
    RunState,
    Runner,
    VisualizerPage,
    compare,
    make_pages,
    PAGES,
)
from structures import ElementArray, Graph, StructureError

SORT_KEYS = [a.key for a in list_algorithms("sorting")]


def build_runner(key, dataset, speed_ms=0, **kwargs):
    info = get_algorithm(key)
    session = RunSession(speed_ms=speed_ms)
    tracer = Tracer(dataset, session, info.counters)
    return Runner(info.fn(tracer, dataset), session, tracer, **kwargs)


class TestRunSession(unittest.TestCase):

    def test_sleep_returns_at_once_when_cancelled(self):
        s = RunSession()
        s.cancel()
        t0 = time.monotonic()
        s.sleep(10_000)
        self.assertLess(time.monotonic() - t0, 0.5)

    def test_cancel_wakes_a_paused_sleeper(self):
        s = RunSession()
        s.pause()
        threading.Timer(0.1, s.cancel).start()
        t0 = time.monotonic()
        s.sleep(10)
        self.assertLess(time.monotonic() - t0, 2.0)
        self.assertTrue(s.is_cancelled)

    def test_resume_releases_a_paused_sleeper(self):
        s = RunSession()
        s.pause()
        threading.Timer(0.1, s.resume).start()
        s.sleep(0)
        self.assertFalse(s.is_paused)

    def test_toggle_and_speed(self):
        s = RunSession()
        self.assertTrue(s.toggle_pause())
        self.assertFalse(s.toggle_pause())
        s.set_speed(-5)
        self.assertEqual(s.speed_ms, 0.0)
        self.assertIs(s.state, RunState.IDLE)


class TestRunner(unittest.TestCase):

    def test_full_speed_run_completes(self):
        arr = ElementArray([5, 3, 8, 1])
        runner = build_runner("bubble", arr, keep_history=True)
        outcome = runner.drive()
        self.assertIs(outcome.status, RunState.COMPLETED)
        self.assertEqual(outcome.result.values, [1, 3, 5, 8])
        self.assertEqual(outcome.counters, {"comparisons": 6, "swaps": 4})
        self.assertEqual(outcome.steps, len(runner.history))
        self.assertIs(runner.current_step(), runner.history[-1])
        self.assertFalse(runner.session.is_running)

    def test_counters_do_not_depend_on_speed(self):
        values = [42, 7, 19, 7, 88, 3, 56, 21]
        rec = Recorder()
        rec.start("quick", ElementArray(values))
        metrics = rec.run_to_completion()

        outcome = build_runner("quick", ElementArray(values), speed_ms=1).drive()
        self.assertEqual(outcome.counters, metrics.counters)
        self.assertEqual(outcome.steps, metrics.total_steps)

    def test_cancel_mid_run(self):
        arr = ElementArray([9, 8, 7, 6, 5, 4, 3, 2, 1])
        seen = []

        def on_step(step):
            seen.append(step)
            if len(seen) == 5:
                runner.session.cancel()

        runner = build_runner("bubble", arr, on_step=on_step)
        outcome = runner.drive()
        self.assertIs(outcome.status, RunState.CANCELLED)
        self.assertIsNone(outcome.result)
        self.assertEqual(len(seen), 5)
        self.assertEqual(sorted(arr.values()), list(range(1, 10)))
        self.assertFalse(runner.session.is_running)

    def test_runner_exception_is_reported(self):
        def broken(tr, ds):
            yield tr.emit(0, "first")
            raise RuntimeError("boom")

        tracer = Tracer(ElementArray([1]), RunSession(0))
        runner = Runner(broken(tracer, None), tracer.session, tracer)
        with self.assertLogs("engine.runner", level="ERROR"):
            outcome = runner.drive()
        self.assertIs(outcome.status, RunState.FAILED)
        self.assertEqual(outcome.error, "boom")


class TestRecorder(unittest.TestCase):

    def test_metrics_and_export(self):
        rec = Recorder()
        rec.start("linear", ElementArray([9, 4, 7, 1]), target=7)
        m = rec.run_to_completion()
        self.assertEqual(m.algo_key, "linear")
        self.assertEqual(m.status, "completed")
        self.assertEqual(m.result, {"found": True, "index": 2})
        self.assertEqual(m.get("comparisons"), 3)
        exported = rec.export()
        self.assertEqual(exported["params"], {"target": 7})
        self.assertEqual(len(exported["steps"]), m.total_steps)

    def test_unknown_algorithm(self):
        with self.assertRaises(InvalidParameterError):
            Recorder().start("bogo", ElementArray([1, 2]))

    def test_run_before_start(self):
        with self.assertRaises(RuntimeError):
            Recorder().run_to_completion()

    def test_compare(self):
        values = [5, 1, 4, 2, 3]
        left, right = Recorder(), Recorder()
        left.start("bubble", ElementArray(values))
        right.start("selection", ElementArray(values))
        left.run_to_completion()
        right.run_to_completion()
        comp = compare(left, right)
        self.assertEqual(comp.winner_comparisons, "tie")
        self.assertEqual(comp.winner_swaps, "Selection Sort")
        self.assertEqual(comp.to_dict()["left"]["algo_key"], "bubble")


class TestVisualizerPage(unittest.TestCase):

    def test_make_pages(self):
        pages = make_pages(10)
        self.assertEqual(set(pages), set(PAGES))
        self.assertEqual(len(pages["sorting"].dataset), 10)

    def test_run_to_completion(self):
        page = VisualizerPage("sorting", rng=random.Random(1))
        page.regenerate(values="5,3,8,1")
        page.set_speed("ultra")
        page.start("bubble")
        outcome = page.wait(10)
        self.assertIs(outcome.status, RunState.COMPLETED)
        snap = page.snapshot()
        self.assertEqual(snap["status"], "completed")
        self.assertEqual(snap["result"], {"values": [1, 3, 5, 8]})
        self.assertEqual(snap["counters"], {"comparisons": 6, "swaps": 4})

    def test_second_start_is_rejected_then_stop_cancels(self):
        page = VisualizerPage("sorting", size=50, rng=random.Random(2))
        before = sorted(page.dataset.values())
        page.set_speed("slow")
        page.start("bubble")
        try:
            self.assertTrue(page.is_running)
            with self.assertRaises(RunInProgressError):
                page.start("quick")
            with self.assertRaises(RunInProgressError):
                page.regenerate(size=10)
            self.assertTrue(page.toggle_pause())
            self.assertTrue(page.is_paused)
        finally:
            snap = page.stop()
        self.assertFalse(page.is_running)
        self.assertEqual(snap["status"], "cancelled")
        self.assertFalse(snap["paused"])
        self.assertEqual(sorted(page.dataset.values()), before)
        self.assertEqual({e["state"] for e in snap["data"]["elements"]}, {"default"})

    def test_search_validation(self):
        page = VisualizerPage("searching", rng=random.Random(3))
        for target in (None, "", "abc", 0, 100):
            with self.subTest(target=target):
                with self.assertRaises(InvalidParameterError):
                    page.start("binary", target=target)
        self.assertEqual(page.status, "idle")

    def test_selecting_a_sorted_search_regenerates(self):
        page = VisualizerPage("searching", rng=random.Random(4))
        page.select("binary")
        values = page.dataset.values()
        self.assertEqual(values, sorted(values))

    def test_graph_and_hash_validation(self):
        graph = VisualizerPage("graph")
        with self.assertRaises(InvalidParameterError):
            graph.start("bfs", start=42)
        with self.assertRaises(InvalidParameterError):
            graph.start("bubble")
        table = VisualizerPage("hash-table")
        with self.assertRaises(InvalidParameterError):
            table.start("hash_insert", key="  ")
        with self.assertRaises(InvalidParameterError):
            table.start("hash_insert", key="k")

    def test_set_speed(self):
        page = VisualizerPage("graph")
        self.assertEqual(page.set_speed("fast"), 150)
        with self.assertRaises(InvalidParameterError):
            page.set_speed("ultra")

    def test_stack_operations(self):
        page = VisualizerPage("stack")
        self.assertEqual(page.apply("push", value="7")["message"], "Pushed 7 onto the stack")
        self.assertEqual(page.apply("peek")["message"], "Top element is 7")
        self.assertEqual(page.apply("pop")["message"], "Popped 7 from the stack")
        with self.assertRaises(StructureError):
            page.apply("pop")
        with self.assertRaises(InvalidParameterError):
            page.apply("push", value="seven")
        with self.assertRaises(InvalidParameterError):
            page.apply("rotate")

    def test_queue_and_list_operations(self):
        queue = VisualizerPage("queue")
        queue.apply("set_kind", kind="priority")
        out = queue.apply("enqueue", value=3, priority=8)
        self.assertEqual(out["message"], "Added 3 with priority 8")
        self.assertEqual(queue.apply("load_example")["message"], "Loaded: Hospital ER")

        lst = VisualizerPage("linked-list")
        lst.apply("clear")
        lst.apply("insert_tail", value=1)
        lst.apply("insert_tail", value=2)
        self.assertEqual(lst.apply("set_cycle", target=0)["message"], "Tail now links back to index 0")
        lst.start("floyd")
        outcome = lst.wait(10)
        self.assertTrue(outcome.result.has_cycle)

    def test_custom_value_lists_are_range_checked(self):
        page = VisualizerPage("sorting", rng=random.Random(5))
        before = page.dataset.values()
        for values in ([5, -3, 8, 1], [5, 101], [7], [3] * 51):
            with self.subTest(values=values):
                with self.assertRaises(InvalidParameterError):
                    page.regenerate(values=values)
        self.assertEqual(page.dataset.values(), before)
        page.regenerate(values=[9, "4", 7])
        self.assertEqual(page.dataset.values(), [9, 4, 7])

    def test_pause_holds_the_step_until_resumed(self):
        page = VisualizerPage("sorting", size=50, rng=random.Random(6))
        page.set_speed("fast")
        page.start("bubble")
        try:
            deadline = time.monotonic() + 5
            while page.snapshot()["step"] is None and time.monotonic() < deadline:
                time.sleep(0.01)
            self.assertTrue(page.pause())
            # a step already sleeping may still land once
            time.sleep(0.3)
            held = page.snapshot()["step"]
            time.sleep(0.4)
            self.assertEqual(page.snapshot()["step"], held)
            self.assertTrue(page.is_running)

            self.assertFalse(page.resume())
            deadline = time.monotonic() + 5
            while page.snapshot()["step"] == held and time.monotonic() < deadline:
                time.sleep(0.01)
            self.assertGreater(page.snapshot()["step"], held)
        finally:
            page.stop()
        self.assertFalse(page.is_running)


class TestGraphEditing(unittest.TestCase):

    def build(self):
        page = VisualizerPage("graph", rng=random.Random(7))
        page.apply("clear")
        for _ in range(4):
            page.apply("add_node")
        page.apply("connect", source=0, target=1)
        page.apply("connect", source=2, target=3, weight=4)
        page.apply("set_start", node=0)
        page.apply("set_end", node=3)
        page.set_speed("fast")
        return page

    def test_user_graph_shape(self):
        page = self.build()
        g = page.dataset
        self.assertEqual(sorted(g.nodes), [0, 1, 2, 3])
        self.assertEqual(len(g.edges), 2)
        self.assertIn(g.edge_between(0, 1).weight, range(1, 10))
        self.assertEqual(g.edge_between(2, 3).weight, 4)
        self.assertEqual((g.start, g.end), (0, 3))
        self.assertEqual(page.apply("add_node", x=100, y=120)["message"], "Added node 4")
        self.assertEqual((g.nodes[4].x, g.nodes[4].y), (100, 120))

    def test_search_reports_no_path(self):
        for key in ("bfs", "dijkstra"):
            with self.subTest(algorithm=key):
                page = self.build()
                page.start(key)
                outcome = page.wait(10)
                self.assertIs(outcome.status, RunState.COMPLETED)
                self.assertFalse(outcome.result.found)
                self.assertEqual(outcome.result.path, [])
                self.assertEqual(sorted(outcome.result.visited), [0, 1])

    def test_bad_edits(self):
        page = self.build()
        with self.assertRaises(StructureError):
            page.apply("connect", source=1, target=0)
        with self.assertRaises(StructureError):
            page.apply("connect", source=2, target=2)
        with self.assertRaises(StructureError):
            page.apply("connect", source=0, target=9)
        with self.assertRaises(StructureError):
            page.apply("set_end", node=0)
        with self.assertRaises(InvalidParameterError):
            page.apply("connect", source=0, target=2, weight=0)
        self.assertEqual(len(page.dataset.edges), 2)

    def test_cleared_graph_needs_endpoints(self):
        page = VisualizerPage("graph")
        self.assertEqual(page.apply("clear")["message"], "Graph cleared")
        with self.assertRaises(InvalidParameterError) as ctx:
            page.start("bfs")
        self.assertEqual(str(ctx.exception), "Please select start and end nodes")
        page.regenerate()
        self.assertEqual(len(page.dataset), 8)

    def test_edits_are_rejected_during_a_run(self):
        page = VisualizerPage("graph")
        page.set_speed("slow")
        page.start("dfs")
        try:
            with self.assertRaises(RunInProgressError):
                page.apply("add_node")
            with self.assertRaises(RunInProgressError):
                page.apply("connect", source=0, target=7)
        finally:
            page.stop()
        self.assertEqual(len(page.dataset), 8)


class TestCancellationAtEveryStep(unittest.TestCase):

    def cancel_at(self, key, dataset, k):
        seen = []

        def on_step(step):
            seen.append(step)
            if len(seen) == k:
                runner.session.cancel()

        runner = build_runner(key, dataset, on_step=on_step)
        return runner, seen, runner.drive()

    def test_sorts_keep_their_elements(self):
        values = [42, 7, 19, 7, 88, 3, 56, 21]
        for key in SORT_KEYS:
            total = build_runner(key, ElementArray(values)).drive().steps
            for k in range(1, total):
                with self.subTest(algorithm=key, step=k):
                    arr = ElementArray(values)
                    runner, seen, outcome = self.cancel_at(key, arr, k)
                    self.assertIs(outcome.status, RunState.CANCELLED)
                    self.assertIsNone(outcome.result)
                    self.assertEqual(len(seen), k)
                    self.assertFalse(any(s.is_final for s in seen))
                    self.assertEqual(sorted(arr.values()), sorted(values))
                    self.assertEqual(sorted(arr.ids()), list(range(len(values))))
                    self.assertFalse(runner.session.is_running)

    def test_dfs_leaves_the_graph_intact(self):
        total = build_runner("dfs", Graph.sample()).drive().steps
        for k in range(1, total):
            with self.subTest(step=k):
                g = Graph.sample()
                runner, seen, outcome = self.cancel_at("dfs", g, k)
                self.assertIs(outcome.status, RunState.CANCELLED)
                self.assertIsNone(outcome.result)
                self.assertEqual(len(seen), k)
                self.assertEqual((len(g.nodes), len(g.edges)), (8, 11))
                self.assertEqual((g.start, g.end), (0, 7))
                self.assertFalse(runner.session.is_running)


if __name__ == "__main__":
    unittest.main()
