"""
searching.py — Searching Runners
================================
Linear, binary, jump, interpolation, exponential and ternary search over
an ElementArray.  All but linear expect ascending input; the page sorts
the array when it is generated, never at run time.

States: RANGE is the window still in play, SEARCHING the probe(s),
CHECKED what has been ruled out, FOUND the hit.
"""

import math
from typing import Dict, Generator, List, Optional

from structures.element import ElementArray, ElementState
from algorithms.step import Step, Tracer
from algorithms.results import SearchResult

SearchGen = Generator[Step, None, Optional[SearchResult]]

S = ElementState


PSEUDOCODE: Dict[str, List[str]] = {
    "linear": [
        "for i = 0 to n-1:",
        "  if arr[i] == target:",
        "    return i",
        "return -1",
    ],
    "binary": [
        "left = 0, right = n-1",
        "while left <= right:",
        "  mid = (left + right) / 2",
        "  if arr[mid] == target: return mid",
        "  if arr[mid] < target: left = mid + 1",
        "  else: right = mid - 1",
        "return -1",
    ],
    "jump": [
        "step = √n",
        "while arr[min(step,n)-1] < target:",
        "  prev = step",
        "  step += √n",
        "  if prev >= n: return -1",
        "for i = prev to min(step,n):",
        "  if arr[i] == target: return i",
        "return -1",
    ],
    "interpolation": [
        "while lo <= hi and target in range:",
        "  pos = lo + ((target - arr[lo]) *",
        "         (hi - lo)) / (arr[hi] - arr[lo])",
        "  if arr[pos] == target: return pos",
        "  if arr[pos] < target: lo = pos + 1",
        "  else: hi = pos - 1",
        "return -1",
    ],
    "exponential": [
        "if arr[0] == target: return 0",
        "i = 1",
        "while i < n and arr[i] <= target:",
        "  i *= 2  // double the range",
        "binary_search(arr, i/2, min(i,n-1), target)",
    ],
    "ternary": [
        "while left <= right:",
        "  mid1 = left + (right-left)/3",
        "  mid2 = right - (right-left)/3",
        "  if arr[mid1] == target: return mid1",
        "  if arr[mid2] == target: return mid2",
        "  if target < arr[mid1]: right = mid1 - 1",
        "  else if target > arr[mid2]: left = mid2 + 1",
        "  else: left = mid1 + 1, right = mid2 - 1",
    ],
}


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------
def _window(arr: ElementArray, lo: int, hi: int) -> None:
    """Everything DEFAULT except [lo, hi] which is RANGE."""
    for idx, el in enumerate(arr.elements):
        el.state = S.RANGE if lo <= idx <= hi else S.DEFAULT


def _rule_out(arr: ElementArray, lo: int, hi: int) -> None:
    arr.mark(S.CHECKED, *range(lo, hi + 1))


def _found(tr: Tracer, arr: ElementArray, idx: int, line: int, target: int) -> SearchGen:
    arr.elements[idx].state = S.FOUND
    yield tr.emit(line, f"Found {target} at index {idx}!", delay=0.0, is_final=True)
    return SearchResult(found=True, index=idx)


def _not_found(tr: Tracer, arr: ElementArray, line: int, target: int) -> SearchGen:
    if tr.cancelled:
        return None
    arr.mark_all(S.CHECKED)
    yield tr.emit(line, f"{target} not found", delay=0.0, is_final=True)
    return SearchResult(found=False, index=None)


# ---------------------------------------------------------------------------
# Linear
# ---------------------------------------------------------------------------
def linear_search(tr: Tracer, arr: ElementArray, target: int) -> SearchGen:
    a = arr.elements
    for i in range(len(a)):
        if tr.cancelled:
            return None
        for idx, el in enumerate(a):
            el.state = S.CHECKED if idx < i else S.DEFAULT
        a[i].state = S.SEARCHING
        tr.count("comparisons")
        yield tr.emit(1, f"Is arr[{i}] = {a[i].value} equal to {target}?")
        if a[i].value == target:
            return (yield from _found(tr, arr, i, 2, target))
    return (yield from _not_found(tr, arr, 3, target))


# ---------------------------------------------------------------------------
# Binary
# ---------------------------------------------------------------------------
def _bisect(tr: Tracer, arr: ElementArray, target: int, left: int, right: int,
            probe_line: int, window=None) -> Generator[Step, None, Optional[int]]:
    """
    Classic halving loop shared by binary and exponential search.
    Returns the hit index, -1 on a miss, None if cancelled.
    """
    a = arr.elements
    while left <= right:
        if tr.cancelled:
            return None
        if window is None:
            _window(arr, left, right)
        else:
            for idx in range(window[0], window[1] + 1):
                if a[idx].state is not S.CHECKED:
                    a[idx].state = S.RANGE
        mid = (left + right) // 2
        a[mid].state = S.SEARCHING
        tr.count("comparisons")
        yield tr.emit(probe_line, f"mid = {mid}: compare {a[mid].value} with {target}", range=[left, right])
        if a[mid].value == target:
            return mid
        if a[mid].value < target:
            if window is None:
                _rule_out(arr, left, mid)
            left = mid + 1
            line, text = 4, f"{a[mid].value} < {target}: search the right half"
        else:
            if window is None:
                _rule_out(arr, mid, right)
            right = mid - 1
            line, text = 5, f"{a[mid].value} > {target}: search the left half"
        if window is None:
            yield tr.emit(line, text, delay=0.5, range=[left, right])
        else:
            a[mid].state = S.CHECKED
    return -1


def binary_search(tr: Tracer, arr: ElementArray, target: int) -> SearchGen:
    hit = yield from _bisect(tr, arr, target, 0, len(arr) - 1, 2)
    if hit is None:
        return None
    if hit >= 0:
        return (yield from _found(tr, arr, hit, 3, target))
    return (yield from _not_found(tr, arr, 6, target))


# ---------------------------------------------------------------------------
# Jump
# ---------------------------------------------------------------------------
def jump_search(tr: Tracer, arr: ElementArray, target: int) -> SearchGen:
    a = arr.elements
    n = len(a)
    step = math.isqrt(n)
    prev, curr = 0, step
    while curr < n and a[curr].value < target:
        if tr.cancelled:
            return None
        _rule_out(arr, prev, curr)
        a[curr].state = S.SEARCHING
        tr.count("comparisons")
        yield tr.emit(1, f"Jump: arr[{curr}] = {a[curr].value} < {target}, keep jumping")
        prev, curr = curr, curr + step

    for i in range(prev, min(curr + 1, n)):
        if tr.cancelled:
            return None
        a[i].state = S.SEARCHING
        tr.count("comparisons")
        yield tr.emit(5, f"Scan block: is arr[{i}] = {a[i].value} equal to {target}?")
        if a[i].value == target:
            return (yield from _found(tr, arr, i, 6, target))
        a[i].state = S.CHECKED
    return (yield from _not_found(tr, arr, 7, target))


# ---------------------------------------------------------------------------
# Interpolation
# ---------------------------------------------------------------------------
def interpolation_search(tr: Tracer, arr: ElementArray, target: int) -> SearchGen:
    a = arr.elements
    lo, hi = 0, len(a) - 1
    while lo <= hi and a[lo].value <= target <= a[hi].value:
        if tr.cancelled:
            return None
        _window(arr, lo, hi)
        spread = (a[hi].value - a[lo].value) or 1
        pos = lo + (target - a[lo].value) * (hi - lo) // spread
        a[pos].state = S.SEARCHING
        tr.count("comparisons")
        yield tr.emit(1, f"Estimated position {pos}: arr[{pos}] = {a[pos].value}", range=[lo, hi])
        if a[pos].value == target:
            return (yield from _found(tr, arr, pos, 3, target))
        if a[pos].value < target:
            _rule_out(arr, lo, pos)
            lo = pos + 1
            line = 4
        else:
            _rule_out(arr, pos, hi)
            hi = pos - 1
            line = 5
        yield tr.emit(line, f"Narrow to [{lo}, {hi}]", delay=0.5, range=[lo, hi])
    return (yield from _not_found(tr, arr, 6, target))


# ---------------------------------------------------------------------------
# Exponential
# ---------------------------------------------------------------------------
def exponential_search(tr: Tracer, arr: ElementArray, target: int) -> SearchGen:
    a = arr.elements
    n = len(a)
    if not n:
        return (yield from _not_found(tr, arr, 4, target))
    a[0].state = S.SEARCHING
    tr.count("comparisons")
    yield tr.emit(0, f"Is arr[0] = {a[0].value} equal to {target}?")
    if a[0].value == target:
        return (yield from _found(tr, arr, 0, 0, target))
    a[0].state = S.DEFAULT

    i = 1
    while i < n and a[i].value <= target:
        if tr.cancelled:
            return None
        a[i].state = S.SEARCHING
        tr.count("comparisons")
        yield tr.emit(2, f"arr[{i}] = {a[i].value} <= {target}: double the bound", delay=0.5)
        a[i].state = S.RANGE
        i *= 2

    lo, hi = i // 2, min(i, n - 1)
    hit = yield from _bisect(tr, arr, target, lo, hi, 4, window=(lo, hi))
    if hit is None:
        return None
    if hit >= 0:
        return (yield from _found(tr, arr, hit, 4, target))
    return (yield from _not_found(tr, arr, 4, target))


# ---------------------------------------------------------------------------
# Ternary
# ---------------------------------------------------------------------------
def ternary_search(tr: Tracer, arr: ElementArray, target: int) -> SearchGen:
    a = arr.elements
    left, right = 0, len(a) - 1
    while left <= right:
        if tr.cancelled:
            return None
        _window(arr, left, right)
        third = (right - left) // 3
        mid1, mid2 = left + third, right - third
        arr.mark(S.SEARCHING, mid1, mid2)
        tr.count("comparisons", 2)
        yield tr.emit(1, f"mid1 = {mid1} ({a[mid1].value}), mid2 = {mid2} ({a[mid2].value})",
                      range=[left, right])
        if a[mid1].value == target:
            return (yield from _found(tr, arr, mid1, 3, target))
        if a[mid2].value == target:
            return (yield from _found(tr, arr, mid2, 4, target))
        if target < a[mid1].value:
            _rule_out(arr, mid1, right)
            right = mid1 - 1
            line = 5
        elif target > a[mid2].value:
            _rule_out(arr, left, mid2)
            left = mid2 + 1
            line = 6
        else:
            _rule_out(arr, left, mid1)
            _rule_out(arr, mid2, right)
            left, right = mid1 + 1, mid2 - 1
            line = 7
        yield tr.emit(line, f"Narrow to [{left}, {right}]", delay=0.5, range=[left, right])
    return (yield from _not_found(tr, arr, 0, target))
