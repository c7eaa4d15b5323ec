"""
page.py — Visualizer Page (Control Surface)
============================================
One VisualizerPage per page of the app.  It owns the page's dataset and
at most one active run, and is the only object the HTTP layer talks to.

    page = VisualizerPage("sorting")
    page.regenerate(size=25, preset="reversed")
    page.start("quick")
    page.toggle_pause()
    page.snapshot()          # latest published Step + status + counters
    page.stop()              # cancel, join, reset states

Runs execute on a daemon worker thread.  All control calls come from
request threads and only flip flags on the RunSession; the worker
observes them at its next suspension point.

Editing pages (stack, queue), the linked-list page and the graph page also accept
instantaneous operations through `apply(op, **args)`.
"""

import logging
import random
import threading
from typing import Any, Callable, Dict, Optional

from algorithms import FAMILIES, FAMILY_COUNTERS, AlgoInfo, get_algorithm, list_algorithms
from algorithms.step import Step, Tracer
from engine.errors import InvalidParameterError, RunInProgressError
from engine.runner import RunOutcome, Runner
from engine.session import RunSession, RunState
from structures import (
    ElementArray, Graph, HashTable, Queue, Stack,
    check_values, make_array, make_linked_list, make_search_array, parse_values,
)

log = logging.getLogger(__name__)

PAGES = FAMILIES + ("stack", "queue")

# ---------------------------------------------------------------------------
# Speed presets (milliseconds per step)
# ---------------------------------------------------------------------------
SPEED_PRESETS: Dict[str, Dict[str, int]] = {
    "sorting":     {"slow": 200, "medium": 100, "fast": 50, "ultra": 10},
    "searching":   {"slow": 500, "medium": 250, "fast": 100},
    "graph":       {"slow": 800, "medium": 400, "fast": 150},
    "linked-list": {"medium": 400},
    "hash-table":  {"medium": 400},
}

DEFAULT_ALGORITHM: Dict[str, str] = {
    "sorting":     "bubble",
    "searching":   "linear",
    "graph":       "bfs",
    "linked-list": "floyd",
    "hash-table":  "hash_insert",
}

SEARCH_TARGET_RANGE = (1, 99)
EDGE_WEIGHT_RANGE = (1, 9)
NODE_X_RANGE = (60, 840)
NODE_Y_RANGE = (60, 540)
STOP_JOIN_TIMEOUT = 2.0


def _int(value: Any, what: str = "value") -> int:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        raise InvalidParameterError(f"Please enter a valid {what}") from None


class VisualizerPage:
    """
    Attributes:
        family    : Page name, one of PAGES.
        dataset   : ElementArray / Graph / LinkedList / HashTable / Stack / Queue.
        algorithm : Selected registry key (runner pages only).
        session   : RunSession of the current or last run, None when idle.
        runner    : Runner of the current or last run.
        outcome   : RunOutcome once the last run has finished.
    """

    def __init__(self, family: str, size: int = 25, rng: Optional[random.Random] = None):
        if family not in PAGES:
            raise ValueError(f"Unknown page: {family}")
        self.family     = family
        self.size       = size
        self.preset     = "random"
        self.algorithm: Optional[str] = DEFAULT_ALGORITHM.get(family)
        self.session:   Optional[RunSession] = None
        self.runner:    Optional[Runner]     = None
        self.outcome:   Optional[RunOutcome] = None
        self._thread:   Optional[threading.Thread] = None
        self._lock      = threading.RLock()
        self._rng       = rng or random.Random()

        presets = SPEED_PRESETS.get(family, {})
        self.speed_level = "medium" if "medium" in presets else ""
        self.speed_ms    = presets.get(self.speed_level, 0)

        self.dataset: Any = self._build(size, "random", None)

    # ==================================================================
    # STATUS
    # ==================================================================
    @property
    def is_running(self) -> bool:
        return self.session is not None and self.session.is_running

    @property
    def status(self) -> str:
        if self.session is None:
            return RunState.IDLE.value
        return self.session.state.value

    def _ensure_idle(self) -> None:
        if self.is_running:
            raise RunInProgressError("A run is already in progress on this page")

    # ==================================================================
    # DATASET
    # ==================================================================
    def _build(self, size: int, preset: str, values, cycle_target: Optional[int] = None) -> Any:
        try:
            if self.family == "sorting":
                if values:
                    if isinstance(values, str):
                        return ElementArray(parse_values(values))
                    return ElementArray(check_values([_int(v) for v in values]))
                return make_array(size, preset, rng=self._rng)
            if self.family == "searching":
                info = get_algorithm(self.algorithm)
                return make_search_array(size, sort=info.requires_sorted, rng=self._rng)
            if self.family == "graph":
                return Graph.sample()
            if self.family == "linked-list":
                vals = [_int(v) for v in values] if values else None
                return make_linked_list(vals, cycle_target, rng=self._rng)
            if self.family == "hash-table":
                return HashTable()
            if self.family == "stack":
                return Stack()
            return Queue()
        except ValueError as exc:
            raise InvalidParameterError(str(exc)) from exc

    def regenerate(
        self,
        size: Optional[int] = None,
        preset: Optional[str] = None,
        values=None,
        cycle_target: Optional[int] = None,
    ) -> Dict[str, Any]:
        """Replace the dataset.  Rejected while a run is active."""
        with self._lock:
            self._ensure_idle()
            size = self.size if size is None else _int(size, "size")
            preset = preset or self.preset
            if cycle_target is not None:
                cycle_target = _int(cycle_target, "cycle target")
            self.dataset = self._build(size, preset, values, cycle_target)
            self.size, self.preset = size, preset
            self._clear_run()
            log.debug("%s regenerated (size=%s, preset=%s)", self.family, size, preset)
            return self.snapshot()

    def select(self, algorithm: str) -> AlgoInfo:
        """Choose the page's algorithm; searches regenerate so the input matches."""
        with self._lock:
            self._ensure_idle()
            info = self._lookup(algorithm)
            changed = algorithm != self.algorithm
            self.algorithm = algorithm
            if changed and self.family == "searching":
                self.dataset = self._build(self.size, self.preset, None)
                self._clear_run()
            return info

    def _clear_run(self) -> None:
        self.session = None
        self.runner = None
        self.outcome = None
        self._thread = None

    # ==================================================================
    # RUN CONTROL
    # ==================================================================
    def start(self, algorithm: Optional[str] = None, **params: Any) -> Dict[str, Any]:
        with self._lock:
            self._ensure_idle()
            info = self.select(algorithm or self.algorithm or "")
            kwargs = self._validate(info, params)

            self.dataset.reset_states()
            session = RunSession(speed_ms=self.speed_ms)
            tracer = Tracer(self.dataset, session, info.counters)
            gen = info.fn(tracer, self.dataset, **kwargs)

            self.session = session
            self.outcome = None
            self.runner = Runner(gen, session, tracer, label=f"{self.family}/{info.key}")
            session.state = RunState.RUNNING
            self._thread = threading.Thread(
                target=self._work, name=f"run-{self.family}-{info.key}", daemon=True,
            )
            self._thread.start()
            return self.snapshot()

    def _work(self) -> None:
        self.outcome = self.runner.drive()

    def pause(self) -> bool:
        if self.is_running:
            self.session.pause()
        return self.is_paused

    def resume(self) -> bool:
        if self.session is not None:
            self.session.resume()
        return self.is_paused

    def toggle_pause(self) -> bool:
        if not self.is_running:
            return False
        return self.session.toggle_pause()

    @property
    def is_paused(self) -> bool:
        return self.is_running and self.session.is_paused

    def stop(self) -> Dict[str, Any]:
        """Request cancellation, wait for the worker, then reset every state."""
        with self._lock:
            thread = self._thread
            if self.session is not None:
                self.session.cancel()
            if thread is not None:
                thread.join(STOP_JOIN_TIMEOUT)
                if thread.is_alive():
                    log.warning("%s: worker did not stop within %.1fs", self.family, STOP_JOIN_TIMEOUT)
            if self.family in FAMILIES:
                self.dataset.reset_states()
            self.runner = None
            self._thread = None
            return self.snapshot()

    def wait(self, timeout: Optional[float] = None) -> Optional[RunOutcome]:
        """Block until the current run finishes (tests and the CLI use this)."""
        thread = self._thread
        if thread is not None:
            thread.join(timeout)
        return self.outcome

    def set_speed(self, level: str) -> int:
        presets = SPEED_PRESETS.get(self.family, {})
        if level not in presets:
            raise InvalidParameterError(
                f"Unknown speed '{level}'. Choose from: {', '.join(presets) or 'none'}"
            )
        self.speed_level = level
        self.speed_ms = presets[level]
        if self.session is not None:
            self.session.set_speed(self.speed_ms)
        return self.speed_ms

    # ==================================================================
    # VALIDATION
    # ==================================================================
    def _lookup(self, algorithm: str) -> AlgoInfo:
        info = get_algorithm(algorithm)
        if info is None:
            raise InvalidParameterError(f"Unknown algorithm: {algorithm}")
        if info.family != self.family:
            raise InvalidParameterError(f"{info.label} does not run on the {self.family} page")
        return info

    def _validate(self, info: AlgoInfo, params: Dict[str, Any]) -> Dict[str, Any]:
        if self.family == "searching":
            if params.get("target") in (None, ""):
                raise InvalidParameterError("Enter a target (1-99)")
            target = _int(params["target"], "target")
            lo, hi = SEARCH_TARGET_RANGE
            if not lo <= target <= hi:
                raise InvalidParameterError("Enter a target (1-99)")
            return {"target": target}

        if self.family == "graph":
            out = {}
            for name in ("start", "end"):
                raw = params.get(name)
                if raw in (None, ""):
                    continue
                nid = _int(raw, f"{name} node")
                if nid not in self.dataset.nodes:
                    raise InvalidParameterError(f"Unknown {name} node: {nid}")
                out[name] = nid
            if out.get("start", self.dataset.start) is None or out.get("end", self.dataset.end) is None:
                raise InvalidParameterError("Please select start and end nodes")
            return out

        if self.family == "linked-list":
            if "target" in info.params:
                return {"target": _int(params.get("target"), "number")}
            return {}

        if self.family == "hash-table":
            key = str(params.get("key") or "").strip()
            if not key:
                raise InvalidParameterError("Please enter a key")
            out = {"key": key}
            if "value" in info.params:
                value = str(params.get("value") or "").strip()
                if not value:
                    raise InvalidParameterError("Please enter a value")
                out["value"] = value
            return out

        return {}

    # ==================================================================
    # EDITING OPERATIONS (stack / queue / linked list / graph)
    # ==================================================================
    def apply(self, op: str, **args: Any) -> Dict[str, Any]:
        """
        Run one instantaneous editing operation.  StructureError from the
        data structure propagates unchanged (overflow, empty, bad index).
        """
        with self._lock:
            self._ensure_idle()
            handlers = self._operations()
            handler = handlers.get(op)
            if handler is None:
                raise InvalidParameterError(
                    f"Unknown operation '{op}' for {self.family}. Choose from: {', '.join(handlers)}"
                )
            message = handler(**args)
            self._clear_run()
            log.debug("%s: %s", self.family, message)
            return {"message": message, "state": self.snapshot()}

    def _operations(self) -> Dict[str, Callable[..., str]]:
        ds = self.dataset
        if self.family == "stack":
            return {
                "push":  lambda value=None, **_: f"Pushed {ds.push(_int(value, 'number')).value} onto the stack",
                "pop":   lambda **_: f"Popped {ds.pop().value} from the stack",
                "peek":  lambda **_: f"Top element is {ds.peek().value}",
                "clear": lambda **_: self._clear_container("Stack"),
            }
        if self.family == "queue":
            return {
                "enqueue":       self._enqueue,
                "enqueue_front": lambda value=None, **_: f"Added {ds.enqueue_front(_int(value, 'number')).value} to front",
                "dequeue":       lambda **_: f"Dequeued {ds.dequeue().value} from front",
                "dequeue_rear":  lambda **_: f"Removed {ds.dequeue_rear().value} from rear",
                "peek_front":    self._peek_front,
                "peek_rear":     lambda **_: f"Rear: {ds.peek_rear().value}",
                "clear":         lambda **_: self._clear_container("Queue"),
                "set_kind":      lambda kind=None, **_: self._set_kind(kind),
                "load_example":  lambda **_: f"Loaded: {ds.load_example()}",
            }
        if self.family == "graph":
            return {
                "add_node":  self._add_node,
                "connect":   self._connect,
                "set_start": lambda node=None, **_: self._set_endpoint("start", node),
                "set_end":   lambda node=None, **_: self._set_endpoint("end", node),
                "reset":     lambda **_: self._reset_graph(),
                "clear":     lambda **_: self._clear_container("Graph"),
            }
        if self.family == "linked-list":
            return {
                "insert_head":  lambda value=None, **_: f"Inserted {ds.insert_head(_int(value, 'number')).value} at the beginning",
                "insert_tail":  lambda value=None, **_: f"Inserted {ds.insert_tail(_int(value, 'number')).value} at the end",
                "insert_at":    self._insert_at,
                "delete_value": lambda value=None, **_: f"Deleted {ds.delete_value(_int(value, 'value to delete')).value} from the list",
                "delete_at":    lambda position=None, **_: self._delete_at(position),
                "set_cycle":    lambda target=None, **_: self._set_cycle(target),
                "clear_cycle":  lambda **_: self._clear_cycle(),
                "clear":        lambda **_: self._clear_container("List"),
            }
        return {}

    def _clear_container(self, name: str) -> str:
        if not len(self.dataset):
            return f"{name} is already empty"
        self.dataset.clear()
        return f"{name} cleared"

    def _enqueue(self, value=None, priority=None, label=None, **_) -> str:
        q = self.dataset
        v = _int(value, "number")
        if q.kind == "priority":
            p = None if priority in (None, "") else _int(priority, "priority")
            item = q.enqueue(v, priority=p, label=label)
            return f"Added {item.value} with priority {item.priority}"
        q.enqueue(v, label=label)
        return f"Enqueued {v} to rear"

    def _peek_front(self, **_) -> str:
        item = self.dataset.peek_front()
        extra = f" (priority {item.priority})" if item.priority is not None else ""
        return f"Front: {item.value}{extra}"

    def _set_kind(self, kind) -> str:
        self.dataset.set_kind(str(kind))
        return f"Switched to {kind} queue"

    def _insert_at(self, value=None, position=None, **_) -> str:
        v = _int(value, "value")
        pos = _int(position, "position")
        self.dataset.insert_at(pos, v)
        return f"Inserted {v} at position {pos}"

    def _delete_at(self, position) -> str:
        pos = _int(position, "position")
        node = self.dataset.delete_at(pos)
        return f"Deleted {node.value} from position {pos}"

    def _set_cycle(self, target) -> str:
        idx = _int(target, "cycle target")
        self.dataset.set_cycle(idx)
        return f"Tail now links back to index {idx}"

    def _clear_cycle(self) -> str:
        self.dataset.clear_cycle()
        return "Cycle removed"

    def _add_node(self, x=None, y=None, **_) -> str:
        g = self.dataset
        # unplaced nodes land somewhere on the canvas
        px = self._rng.randint(*NODE_X_RANGE) if x in (None, "") else _int(x, "x position")
        py = self._rng.randint(*NODE_Y_RANGE) if y in (None, "") else _int(y, "y position")
        node = g.create_node(g.next_id(), px, py)
        return f"Added node {node.id}"

    def _connect(self, source=None, target=None, weight=None, **_) -> str:
        a = _int(source, "source node")
        b = _int(target, "target node")
        if weight in (None, ""):
            w = self._rng.randint(*EDGE_WEIGHT_RANGE)
        else:
            w = _int(weight, "weight")
            if w < 1:
                raise InvalidParameterError("Weight must be a positive number")
        self.dataset.connect(a, b, w)
        return f"Connected {a} and {b} (weight {w})"

    def _set_endpoint(self, which: str, node) -> str:
        nid = _int(node, f"{which} node")
        if which == "start":
            self.dataset.set_start(nid)
        else:
            self.dataset.set_end(nid)
        return f"{which.capitalize()} node set to {nid}"

    def _reset_graph(self) -> str:
        self.dataset.reset_states()
        return "Graph reset"

    # ==================================================================
    # SNAPSHOT
    # ==================================================================
    def snapshot(self) -> Dict[str, Any]:
        step: Optional[Step] = self.runner.current_step() if self.runner is not None else None
        outcome = self.outcome
        result = outcome.result if outcome is not None else None
        if step is not None:
            data, counters = step.data, step.counters
        else:
            data = self.dataset.snapshot()
            counters = dict(outcome.counters) if outcome is not None else {
                name: 0 for name in FAMILY_COUNTERS.get(self.family, ())
            }
        return {
            "page":            self.family,
            "status":          self.status,
            "paused":          self.is_paused,
            "algorithm":       self.algorithm,
            "speed":           {"level": self.speed_level, "ms": self.speed_ms},
            "data":            data,
            "counters":        counters,
            "step":            step.step_number if step else None,
            "pseudocode_line": step.pseudocode_line if step else -1,
            "explanation":     step.explanation if step else "",
            "overlay":         step.overlay if step else {},
            "result":          result.to_dict() if result is not None else None,
            "error":           outcome.error if outcome is not None else None,
        }

    def algorithms(self):
        return list_algorithms(self.family)


def make_pages(size: int = 25) -> Dict[str, VisualizerPage]:
    """One page object per route, as the app holds them."""
    return {name: VisualizerPage(name, size=size) for name in PAGES}
