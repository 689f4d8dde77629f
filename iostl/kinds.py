"""
Container kinds supported by the formatters and readers.

Maps Python container types onto the fixed set of kinds shown in headers,
e.g. `queue.LifoQueue` is a stack and `collections.Counter` is a multiset.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import array
import collections
import collections.abc as abc
import queue
from enum import StrEnum, unique
from typing import Any

# Local ----------------------------------------------------------------------------------------------------------------
from .collections import Multimap, Pair
from .utils import fmt_type


# Classes --------------------------------------------------------------------------------------------------------------

@unique
class ContainerKind(StrEnum):
    """
    Container kinds, valued by the label shown in the header.

    Attributes:
        STACK: `queue.LifoQueue`, shows its top only.
        QUEUE: `queue.Queue`, shows its front and back only.
        PRIORITY_QUEUE: `queue.PriorityQueue`, shows its front (next out) and back.
        LIST: `list`.
        VECTOR: `array.array`.
        DEQUE: `collections.deque`.
        SET: `set` and `frozenset`.
        MULTISET: `collections.Counter`, each element repeated by its count.
        MAP: any Mapping, shown as key:value items.
        MULTIMAP: `iostl.collections.Multimap`, shown as key:value items.
        PAIR: `iostl.collections.Pair`, shown as (first,second) without header.
    """
    STACK = "stack"
    QUEUE = "queue"
    PRIORITY_QUEUE = "priority_queue"
    LIST = "list"
    VECTOR = "vector"
    DEQUE = "deque"
    SET = "set"
    MULTISET = "multiset"
    MAP = "map"
    MULTIMAP = "multimap"
    PAIR = "pair"

    @property
    def is_adapter(self) -> bool:
        """Kinds exposing endpoints only, never a traversal."""
        return self in (ContainerKind.STACK, ContainerKind.QUEUE, ContainerKind.PRIORITY_QUEUE)

    @property
    def is_associative(self) -> bool:
        """Kinds whose elements are key:value items."""
        return self in (ContainerKind.MAP, ContainerKind.MULTIMAP)


# Methods --------------------------------------------------------------------------------------------------------------

def container_kind(obj: Any) -> ContainerKind | None:
    """
    Detect the container kind of obj.

    Subclasses resolve to the kind of their closest supported base, checked
    most specific first: LifoQueue and PriorityQueue before Queue, Counter
    before Mapping, Pair before everything else.

    Returns:
        The kind, or None if obj is not a supported container.

    Examples:
        >>> container_kind([1, 2])
        <ContainerKind.LIST: 'list'>
        >>> container_kind(collections.Counter("aab"))
        <ContainerKind.MULTISET: 'multiset'>
        >>> container_kind((1, 2)) is None
        True
    """
    # Priority 1: Records
    if isinstance(obj, Pair):
        return ContainerKind.PAIR

    # Priority 2: Stdlib queues, subclasses first
    if isinstance(obj, queue.LifoQueue):
        return ContainerKind.STACK
    if isinstance(obj, queue.PriorityQueue):
        return ContainerKind.PRIORITY_QUEUE
    if isinstance(obj, queue.Queue):
        return ContainerKind.QUEUE

    # Priority 3: Associative, Counter is a dict subclass
    if isinstance(obj, collections.Counter):
        return ContainerKind.MULTISET
    if isinstance(obj, Multimap):
        return ContainerKind.MULTIMAP
    if isinstance(obj, abc.Mapping):
        return ContainerKind.MAP

    # Priority 4: Sequences and sets
    if isinstance(obj, (set, frozenset)):
        return ContainerKind.SET
    if isinstance(obj, collections.deque):
        return ContainerKind.DEQUE
    if isinstance(obj, array.array):
        return ContainerKind.VECTOR
    if isinstance(obj, list):
        return ContainerKind.LIST

    return None


def require_kind(obj: Any) -> ContainerKind:
    """
    Detect the container kind of obj, raising for unsupported objects.

    Raises:
        TypeError: If obj is not a supported container.
    """
    kind = container_kind(obj)
    if kind is None:
        supported = ", ".join(k.value for k in ContainerKind)
        raise TypeError(f"unsupported container type {fmt_type(obj)}, expected one of: {supported}")
    return kind
