"""
structures/
-----------
Core data layer.  Public API:

    from structures import ElementArray, Graph, LinkedList, HashTable
    from structures import Stack, Queue, make_array
"""

from structures.errors      import StructureError, CapacityError, EmptyStructureError
from structures.element     import Element, ElementState, ElementArray
from structures.node        import Node, NodeState
from structures.edge        import Edge, EdgeState
from structures.graph       import Graph
from structures.linked_list import ListNode, ListNodeState, LinkedList
from structures.hash_table  import HashEntry, EntryState, Bucket, HashTable, hash_key, hash_steps
from structures.containers  import Stack, Queue, QUEUE_KINDS
from structures.generators  import make_array, make_search_array, make_linked_list, parse_values, check_values, PRESETS

__all__ = [
    "StructureError", "CapacityError", "EmptyStructureError",
    "Element",   "ElementState", "ElementArray",
    "Node",      "NodeState",
    "Edge",      "EdgeState",
    "Graph",
    "ListNode",  "ListNodeState", "LinkedList",
    "HashEntry", "EntryState", "Bucket", "HashTable", "hash_key", "hash_steps",
    "Stack",     "Queue", "QUEUE_KINDS",
    "make_array", "make_search_array", "make_linked_list", "parse_values", "check_values", "PRESETS",
]
