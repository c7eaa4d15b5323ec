"""
hashing.py — Hash Table Runners
===============================
Insert, search and delete on a separate-chaining HashTable.  Each runner
animates the same three phases before touching the table:

  1. hashing      – one short step per character of the key
  2. bucket       – the target bucket lights up
  3. chain probe  – walk the chain comparing keys

The mutation itself (append / update / remove) happens only after the
walk, so a cancelled run leaves the table unchanged.
"""

from typing import Dict, Generator, List, Optional, Tuple

from structures.hash_table import EntryState, HashTable, hash_steps
from algorithms.step import Step, Tracer
from algorithms.results import HashResult

HashGen = Generator[Step, None, Optional[HashResult]]


PSEUDOCODE: Dict[str, List[str]] = {
    "insert": [
        "h = 0",
        "for ch in key: h = (h*31 + code(ch)) % size",
        "bucket = table[h]",
        "for entry in bucket:",
        "  if entry.key == key: entry.value = value; return",
        "bucket.append((key, value))",
    ],
    "search": [
        "h = 0",
        "for ch in key: h = (h*31 + code(ch)) % size",
        "bucket = table[h]",
        "for entry in bucket:",
        "  if entry.key == key: return entry.value",
        "return NOT FOUND",
    ],
    "delete": [
        "h = 0",
        "for ch in key: h = (h*31 + code(ch)) % size",
        "bucket = table[h]",
        "for entry in bucket:",
        "  if entry.key == key: bucket.remove(entry); return",
        "return NOT FOUND",
    ],
}


# ---------------------------------------------------------------------------
# Shared phases
# ---------------------------------------------------------------------------
def _hash_and_probe(tr: Tracer, table: HashTable, key: str) -> Generator[Step, None, Optional[Tuple[int, Optional[int]]]]:
    """
    Phases 1–3.  Returns (bucket, position-or-None), or None if cancelled.
    """
    trace = []
    h = 0
    for ch, h in hash_steps(key, table.size):
        if tr.cancelled:
            return None
        trace.append([ch, h])
        yield tr.emit(1, f"'{ch}' → hash = {h}", delay=0.25, hash_trace=list(trace), key=key)
    yield tr.emit(1, f'hash("{key}") = {h}', delay=2.0, hash_trace=list(trace), key=key)
    if tr.cancelled:
        return None

    bucket = table.buckets[h]
    bucket.highlighted = True
    yield tr.emit(2, f"Go to bucket {h} ({len(bucket.entries)} entr{'y' if len(bucket.entries) == 1 else 'ies'})", key=key)

    for pos, entry in enumerate(bucket.entries):
        if tr.cancelled:
            return None
        tr.count("probes")
        entry.state = EntryState.PROBING
        yield tr.emit(4, f'Compare "{entry.key}" with "{key}"', key=key)
        if entry.key == key:
            entry.state = EntryState.FOUND
            return h, pos
        entry.state = EntryState.DEFAULT
    return h, None


# ---------------------------------------------------------------------------
# Runners
# ---------------------------------------------------------------------------
def hash_insert(tr: Tracer, table: HashTable, key: str, value: str) -> HashGen:
    table.reset_states()
    located = yield from _hash_and_probe(tr, table, key)
    if located is None or tr.cancelled:
        return None
    bucket, pos = located
    if pos is not None:
        table.update(bucket, pos, value)
        yield tr.emit(4, f'Updated key "{key}" with new value', delay=0.0, is_final=True)
        return HashResult("insert", key, bucket, found=True, value=value, updated=True)

    collision = bool(table.buckets[bucket].entries)
    entry = table.append(bucket, key, value)
    entry.state = EntryState.NEW
    text = f'Inserted "{key}" at bucket {bucket}'
    if collision:
        text += " (Collision handled!)"
    yield tr.emit(5, text, delay=0.0, is_final=True)
    return HashResult("insert", key, bucket, found=False, value=value, collision=collision)


def hash_search(tr: Tracer, table: HashTable, key: str) -> HashGen:
    table.reset_states()
    located = yield from _hash_and_probe(tr, table, key)
    if located is None or tr.cancelled:
        return None
    bucket, pos = located
    if pos is None:
        yield tr.emit(5, f'Key "{key}" not found', delay=0.0, is_final=True)
        return HashResult("search", key, bucket, found=False)
    entry = table.buckets[bucket].entries[pos]
    yield tr.emit(4, f'Found! Key: "{entry.key}", Value: "{entry.value}"', delay=0.0, is_final=True)
    return HashResult("search", key, bucket, found=True, value=entry.value)


def hash_delete(tr: Tracer, table: HashTable, key: str) -> HashGen:
    table.reset_states()
    located = yield from _hash_and_probe(tr, table, key)
    if located is None or tr.cancelled:
        return None
    bucket, pos = located
    if pos is None:
        yield tr.emit(5, f'Key "{key}" not found', delay=0.0, is_final=True)
        return HashResult("delete", key, bucket, found=False)
    entry = table.buckets[bucket].entries[pos]
    entry.state = EntryState.DELETED
    yield tr.emit(4, f'Remove "{key}" from bucket {bucket}', delay=1.25)
    if tr.cancelled:
        return None
    table.remove(bucket, pos)
    yield tr.emit(4, f'Deleted key "{key}"', delay=0.0, is_final=True)
    return HashResult("delete", key, bucket, found=True, value=entry.value)
