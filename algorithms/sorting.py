"""
sorting.py — Sorting Runners
============================
Generator-based sorts over an ElementArray.  Yields a Step at every
meaningful event:
  1. Two elements are compared   →  mark them COMPARING
  2. An element is about to move →  mark it SWAPPING
  3. Final step                  →  every element SORTED

Every sort only *moves* elements (swap, or pop-and-insert), never
rewrites a value, so the array is a permutation of its input at every
published Step, including after a cancelled run.

Recursive sorts (merge, quick, heap) recurse with `yield from` and check
`tr.cancelled` on entry to every call.
"""

from typing import Dict, Generator, List, Optional

from structures.element import ElementArray, ElementState
from algorithms.step import Step, Tracer
from algorithms.results import SortResult

SortGen = Generator[Step, None, Optional[SortResult]]

S = ElementState


# ---------------------------------------------------------------------------
# Pseudocode — each string is one displayed line; index = pseudocode_line
# ---------------------------------------------------------------------------
PSEUDOCODE: Dict[str, List[str]] = {
    "bubble": [
        "for i = 0 to n-1:",
        "  for j = 0 to n-i-1:",
        "    if arr[j] > arr[j+1]:",
        "      swap(arr[j], arr[j+1])",
    ],
    "selection": [
        "for i = 0 to n-1:",
        "  min_idx = i",
        "  for j = i+1 to n:",
        "    if arr[j] < arr[min_idx]:",
        "      min_idx = j",
        "  swap(arr[i], arr[min_idx])",
    ],
    "insertion": [
        "for i = 1 to n:",
        "  key = arr[i]",
        "  j = i - 1",
        "  while j >= 0 and arr[j] > key:",
        "    arr[j+1] = arr[j]",
        "    j = j - 1",
        "  arr[j+1] = key",
    ],
    "merge": [
        "mergeSort(arr, l, r):",
        "  if l < r:",
        "    m = (l + r) / 2",
        "    mergeSort(arr, l, m)",
        "    mergeSort(arr, m+1, r)",
        "    merge(arr, l, m, r)",
    ],
    "quick": [
        "quickSort(arr, low, high):",
        "  if low < high:",
        "    pivot = partition(arr, low, high)",
        "    quickSort(arr, low, pivot-1)",
        "    quickSort(arr, pivot+1, high)",
    ],
    "heap": [
        "buildMaxHeap(arr)",
        "for i = n-1 to 1:",
        "  swap(arr[0], arr[i])",
        "  heapify(arr, 0, i)",
    ],
    "counting": [
        "count[0..k] = 0",
        "for each x in arr:",
        "  count[x]++",
        "for i = 1 to k:",
        "  count[i] += count[i-1]",
        "for x in arr (reverse):",
        "  output[count[x]-1] = x",
    ],
    "radix": [
        "for each digit position:",
        "  countingSort(arr, digit)",
    ],
    "shell": [
        "gap = n / 2",
        "while gap > 0:",
        "  for i = gap to n:",
        "    temp = arr[i]",
        "    j = i",
        "    while j >= gap and arr[j-gap] > temp:",
        "      arr[j] = arr[j-gap]",
        "      j -= gap",
        "    arr[j] = temp",
        "  gap /= 2",
    ],
}


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------
def _finish(tr: Tracer, arr: ElementArray) -> SortGen:
    """Terminal step, skipped entirely when the run was cancelled."""
    if tr.cancelled:
        return None
    arr.mark_all(S.SORTED)
    yield tr.emit(-1, f"Sorted {len(arr)} elements.", delay=0.0, is_final=True)
    return SortResult(values=arr.values())


def _compare(tr: Tracer, arr: ElementArray, line: int, i: int, j: int, text: str = "") -> Step:
    tr.count("comparisons")
    arr.mark(S.COMPARING, i, j)
    a = arr.elements
    return tr.emit(line, text or f"Compare {a[i].value} and {a[j].value}")


# ---------------------------------------------------------------------------
# Bubble
# ---------------------------------------------------------------------------
def bubble_sort(tr: Tracer, arr: ElementArray) -> SortGen:
    a = arr.elements
    n = len(a)
    for i in range(n - 1):
        for j in range(n - i - 1):
            if tr.cancelled:
                return None
            yield _compare(tr, arr, 2, j, j + 1)
            if a[j].value > a[j + 1].value:
                arr.mark(S.SWAPPING, j, j + 1)
                yield tr.emit(3, f"{a[j].value} > {a[j + 1].value}, swap them")
                arr.swap(j, j + 1)
                tr.count("swaps")
            arr.mark(S.DEFAULT, j, j + 1)
        a[n - 1 - i].state = S.SORTED
    return (yield from _finish(tr, arr))


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------
def selection_sort(tr: Tracer, arr: ElementArray) -> SortGen:
    a = arr.elements
    n = len(a)
    for i in range(n - 1):
        if tr.cancelled:
            return None
        min_idx = i
        a[i].state = S.COMPARING
        for j in range(i + 1, n):
            if tr.cancelled:
                return None
            tr.count("comparisons")
            a[j].state = S.COMPARING
            yield tr.emit(3, f"Is {a[j].value} smaller than the minimum {a[min_idx].value}?")
            if a[j].value < a[min_idx].value:
                if min_idx != i:
                    a[min_idx].state = S.DEFAULT
                min_idx = j
                a[min_idx].state = S.PIVOT
            else:
                a[j].state = S.DEFAULT
        if min_idx != i:
            arr.mark(S.SWAPPING, i, min_idx)
            yield tr.emit(5, f"Move minimum {a[min_idx].value} to index {i}")
            arr.swap(i, min_idx)
            tr.count("swaps")
            a[min_idx].state = S.DEFAULT
        a[i].state = S.SORTED
    return (yield from _finish(tr, arr))


# ---------------------------------------------------------------------------
# Insertion (key sinks left by adjacent swaps)
# ---------------------------------------------------------------------------
def insertion_sort(tr: Tracer, arr: ElementArray) -> SortGen:
    a = arr.elements
    n = len(a)
    if n:
        a[0].state = S.SORTED
    for i in range(1, n):
        if tr.cancelled:
            return None
        a[i].state = S.PIVOT
        yield tr.emit(1, f"Key = {a[i].value}")
        j = i
        while j > 0:
            if tr.cancelled:
                return None
            tr.count("comparisons")
            a[j - 1].state = S.COMPARING
            yield tr.emit(3, f"Is {a[j - 1].value} > key {a[j].value}?")
            if a[j - 1].value <= a[j].value:
                a[j - 1].state = S.SORTED
                break
            arr.mark(S.SWAPPING, j - 1, j)
            yield tr.emit(4, f"Shift {a[j - 1].value} one place right")
            arr.swap(j - 1, j)
            tr.count("swaps")
            a[j].state = S.SORTED
            a[j - 1].state = S.PIVOT
            j -= 1
        a[j].state = S.SORTED
    return (yield from _finish(tr, arr))


# ---------------------------------------------------------------------------
# Merge (in place: right-run elements are rotated in front of the left run)
# ---------------------------------------------------------------------------
def merge_sort(tr: Tracer, arr: ElementArray) -> SortGen:
    yield from _merge_sort(tr, arr, 0, len(arr) - 1)
    return (yield from _finish(tr, arr))


def _merge_sort(tr: Tracer, arr: ElementArray, l: int, r: int) -> Generator[Step, None, None]:
    if tr.cancelled or l >= r:
        return
    m = (l + r) // 2
    yield from _merge_sort(tr, arr, l, m)
    yield from _merge_sort(tr, arr, m + 1, r)
    yield from _merge(tr, arr, l, m, r)


def _merge(tr: Tracer, arr: ElementArray, l: int, m: int, r: int) -> Generator[Step, None, None]:
    a = arr.elements
    i, mid, j = l, m, m + 1       # left run a[i..mid], right run a[j..r]
    while i <= mid and j <= r:
        if tr.cancelled:
            return
        yield _compare(tr, arr, 5, i, j, f"Merge: compare {a[i].value} and {a[j].value}")
        if a[i].value <= a[j].value:
            arr.mark(S.DEFAULT, i, j)
            i += 1
            continue
        a[i].state = S.DEFAULT
        a[j].state = S.SWAPPING
        yield tr.emit(5, f"{a[j].value} moves in front of {a[i].value}")
        arr.move(j, i)
        tr.count("swaps")
        a[i].state = S.DEFAULT
        i, mid, j = i + 1, mid + 1, j + 1


# ---------------------------------------------------------------------------
# Quick (Lomuto partition, last element as pivot)
# ---------------------------------------------------------------------------
def quick_sort(tr: Tracer, arr: ElementArray) -> SortGen:
    yield from _quick_sort(tr, arr, 0, len(arr) - 1)
    return (yield from _finish(tr, arr))


def _quick_sort(tr: Tracer, arr: ElementArray, low: int, high: int) -> Generator[Step, None, None]:
    if tr.cancelled:
        return
    if low < high:
        p = yield from _partition(tr, arr, low, high)
        if p is None:
            return
        yield from _quick_sort(tr, arr, low, p - 1)
        yield from _quick_sort(tr, arr, p + 1, high)
    elif low == high:
        arr.elements[low].state = S.SORTED


def _partition(tr: Tracer, arr: ElementArray, low: int, high: int) -> Generator[Step, None, Optional[int]]:
    a = arr.elements
    pivot = a[high]
    pivot.state = S.PIVOT
    i = low - 1
    for j in range(low, high):
        if tr.cancelled:
            return None
        tr.count("comparisons")
        a[j].state = S.COMPARING
        yield tr.emit(2, f"Compare {a[j].value} with pivot {pivot.value}")
        if a[j].value < pivot.value:
            i += 1
            if i != j:
                arr.mark(S.SWAPPING, i, j)
                yield tr.emit(2, f"{a[j].value} < {pivot.value}: swap into the low side")
                arr.swap(i, j)
                tr.count("swaps")
        a[j].state = S.DEFAULT
        if i >= low:
            a[i].state = S.DEFAULT
    arr.mark(S.SWAPPING, i + 1, high)
    yield tr.emit(3, f"Place pivot {pivot.value} at index {i + 1}")
    arr.swap(i + 1, high)
    tr.count("swaps")
    a[i + 1].state = S.SORTED
    return i + 1


# ---------------------------------------------------------------------------
# Heap
# ---------------------------------------------------------------------------
def heap_sort(tr: Tracer, arr: ElementArray) -> SortGen:
    a = arr.elements
    n = len(a)
    for i in range(n // 2 - 1, -1, -1):
        if tr.cancelled:
            return None
        yield from _heapify(tr, arr, n, i, 0)
    for i in range(n - 1, 0, -1):
        if tr.cancelled:
            return None
        arr.mark(S.SWAPPING, 0, i)
        yield tr.emit(2, f"Move max {a[0].value} to index {i}")
        arr.swap(0, i)
        tr.count("swaps")
        a[i].state = S.SORTED
        a[0].state = S.DEFAULT
        yield from _heapify(tr, arr, i, 0, 3)
    return (yield from _finish(tr, arr))


def _heapify(tr: Tracer, arr: ElementArray, n: int, i: int, line: int) -> Generator[Step, None, None]:
    if tr.cancelled:
        return
    a = arr.elements
    largest = i
    for child in (2 * i + 1, 2 * i + 2):
        if child < n:
            yield _compare(tr, arr, line, child, largest)
            a[child].state = S.DEFAULT
            a[largest].state = S.DEFAULT
            if a[child].value > a[largest].value:
                largest = child
    if largest != i:
        arr.mark(S.SWAPPING, i, largest)
        yield tr.emit(line, f"Sift {a[i].value} down below {a[largest].value}")
        arr.swap(i, largest)
        tr.count("swaps")
        arr.mark(S.DEFAULT, i, largest)
        yield from _heapify(tr, arr, n, largest, line)


# ---------------------------------------------------------------------------
# Counting & radix: placement rebuilt as a permutation of the elements
# ---------------------------------------------------------------------------
def _arrange(arr: ElementArray, placed: list, original: list) -> None:
    """Placed elements take their slots; the rest fill the gaps in original order."""
    taken = {e.id for e in placed if e is not None}
    rest = iter([e for e in original if e.id not in taken])
    arr.elements[:] = [e if e is not None else next(rest) for e in placed]


def counting_sort(tr: Tracer, arr: ElementArray) -> SortGen:
    a = arr.elements
    n = len(a)
    if not n:
        return (yield from _finish(tr, arr))
    # offset by the minimum so any integer input indexes from 0
    lo = min(e.value for e in a)
    count = [0] * (max(e.value for e in a) - lo + 1)
    for i in range(n):
        if tr.cancelled:
            return None
        tr.count("comparisons")
        a[i].state = S.COMPARING
        yield tr.emit(2, f"count[{a[i].value}]++", delay=0.5)
        count[a[i].value - lo] += 1
        a[i].state = S.DEFAULT
    for v in range(1, len(count)):
        count[v] += count[v - 1]

    original = list(a)
    placed = [None] * n
    for idx in range(n - 1, -1, -1):
        if tr.cancelled:
            return None
        el = original[idx]
        count[el.value - lo] -= 1
        pos = count[el.value - lo]
        placed[pos] = el
        tr.count("swaps")
        _arrange(arr, placed, original)
        el.state = S.SWAPPING
        yield tr.emit(6, f"Place {el.value} at index {pos}")
        el.state = S.DEFAULT
    return (yield from _finish(tr, arr))


def radix_sort(tr: Tracer, arr: ElementArray) -> SortGen:
    a = arr.elements
    n = len(a)
    lo = min((e.value for e in a), default=0)
    biggest = max((e.value - lo for e in a), default=0)
    exp = 1
    while biggest // exp > 0:
        if tr.cancelled:
            return None
        count = [0] * 10
        for i in range(n):
            if tr.cancelled:
                return None
            tr.count("comparisons")
            a[i].state = S.COMPARING
            digit = (a[i].value - lo) // exp % 10
            yield tr.emit(1, f"Digit of {a[i].value} at place {exp}: {digit}", delay=1 / 3)
            count[digit] += 1
            a[i].state = S.DEFAULT
        for d in range(1, 10):
            count[d] += count[d - 1]

        original = list(a)
        placed = [None] * n
        for el in reversed(original):
            digit = (el.value - lo) // exp % 10
            count[digit] -= 1
            placed[count[digit]] = el
            tr.count("swaps")
        _arrange(arr, placed, original)
        arr.mark_all(S.SWAPPING)
        yield tr.emit(1, f"Pass on place {exp} complete")
        arr.reset_states()
        exp *= 10
    return (yield from _finish(tr, arr))


# ---------------------------------------------------------------------------
# Shell (gapped insertion by swaps, gaps n/2, n/4, …, 1)
# ---------------------------------------------------------------------------
def shell_sort(tr: Tracer, arr: ElementArray) -> SortGen:
    a = arr.elements
    n = len(a)
    gap = n // 2
    while gap > 0:
        for i in range(gap, n):
            if tr.cancelled:
                return None
            a[i].state = S.PIVOT
            j = i
            while j >= gap:
                if tr.cancelled:
                    return None
                tr.count("comparisons")
                a[j - gap].state = S.COMPARING
                yield tr.emit(5, f"gap {gap}: is {a[j - gap].value} > {a[j].value}?")
                if a[j - gap].value <= a[j].value:
                    a[j - gap].state = S.DEFAULT
                    break
                arr.mark(S.SWAPPING, j - gap, j)
                yield tr.emit(6, f"Shift {a[j - gap].value} forward by {gap}")
                arr.swap(j - gap, j)
                tr.count("swaps")
                a[j].state = S.DEFAULT
                a[j - gap].state = S.PIVOT
                j -= gap
            a[j].state = S.DEFAULT
        gap //= 2
    return (yield from _finish(tr, arr))
