"""
Truncation-aware formatters for standard containers.

Every supported container renders as a header followed by a body:

    (list:0x7f3a2c1e8b40)[100]{0,1,2,3,4,5,6,7,8,9,...,90,91,92,93,94,95,96,97,98,99}

Containers with more than 2*THRESHOLD elements show the first and last
THRESHOLD elements around a single `...` token, see iostl.config.
Stacks and queues show their endpoints only, pairs show both fields and no header.
The fmt_container() function dispatches to the adapter of each container kind.
"""

# Standard library -----------------------------------------------------------------------------------------------------

import array
import collections
import collections.abc as abc
import sys
from itertools import islice
from typing import IO, Any, Callable, Iterable

# Local ----------------------------------------------------------------------------------------------------------------

from .config import THRESHOLD
from .kinds import ContainerKind, container_kind, require_kind
from .utils import identity

# Constants ------------------------------------------------------------------------------------------------------------

ELLIPSIS = "..."
SEPARATOR = ","
KEY_VALUE_SEPARATOR = ":"
MAX_DEPTH = 32  # nested containers expanded below the outermost one


# Methods --------------------------------------------------------------------------------------------------------------


def fmt_container(obj: Any) -> str:
    """Format a supported container for debugging.

    Main entry point. Detects the container kind and routes to its adapter:
    the header always comes first, then either the endpoints (stack, queue,
    priority queue) or the truncating body (everything else). Pairs have no header.

    Args:
        obj: A supported container, see iostl.kinds.ContainerKind.

    Returns:
        Formatted string like "(list:0x7f3a2c1e8b40)[3]{1,2,3}".

    Raises:
        TypeError: If obj is not a supported container.

    Dispatch Logic:
        - stack → header + {top:<top>}
        - queue, priority_queue → header + {front:<front>,back:<back>}
        - list, vector, deque, set, multiset → header + fmt_values()
        - map, multimap → header + fmt_items()
        - pair → fmt_pair()

    Examples:
        >>> fmt_container([1, 2, 3]).endswith("[3]{1,2,3}")
        True

        >>> fmt_container({"a": 1}).endswith("[1]{a:1}")
        True

        >>> from iostl.collections import Pair
        >>> fmt_container(Pair(1, "one"))
        '(1,one)'

    Notes:
        - Nested supported containers are formatted recursively, headers included
        - A container reached again through itself renders its header and {...}
        - Containers nested deeper than MAX_DEPTH render their header and {...},
          pairs render (...)
        - Elements with broken __str__ are shown as a fallback token
    """
    return _fmt_container(obj, require_kind(obj), frozenset(), MAX_DEPTH)


def fmt_header(container: Any, kind: str | None = None) -> str:
    """Format the `(<kind>:<identity>)[<size>]` header of a container.

    Args:
        container: Any sized container; supported kinds also report their size
            the way their body counts it (e.g. multiset counts repetitions).
        kind: Label shown in the header. Detected from the container if None.
            The label is display only, the size always follows the detected kind.

    Returns:
        Header string, identity is an address-like token of the instance.

    Raises:
        TypeError: If kind is None and the container is not supported.

    Examples:
        >>> fmt_header([], "list").endswith(")[0]")
        True
        >>> fmt_header([1], "stack").endswith(")[1]")
        True
    """
    if kind is None:
        kind = require_kind(container)
    return f"({kind}:{identity(container)})[{_container_size(container)}]"


def fmt_values(items: Iterable[Any], size: int | None = None) -> str:
    """Format elements as a truncating `{e0,e1,...}` body.

    Args:
        items: Elements in traversal order. Sequences are walked by index,
            other iterables in a single forward pass.
        size: Number of elements. Defaults to len(items); iterables without
            len() are materialized first.

    Returns:
        Body string; elides the middle if there are more than 2*THRESHOLD elements.

    Examples:
        >>> fmt_values([1, 2, 3])
        '{1,2,3}'

        >>> fmt_values(range(100))
        '{0,1,2,3,4,5,6,7,8,9,...,90,91,92,93,94,95,96,97,98,99}'
    """
    items, size = _sized(items, size)
    return _fmt_body(items, size, _fmt_element)


def fmt_items(items: abc.Mapping | Iterable[tuple[Any, Any]], size: int | None = None) -> str:
    """Format key-value pairs as a truncating `{k0:v0,k1:v1,...}` body.

    Same truncation as fmt_values(), with each element rendered as key:value.

    Args:
        items: A Mapping, or (key, value) pairs in traversal order.
        size: Number of pairs. Defaults to len(items).

    Examples:
        >>> fmt_items({"a": 1, "b": 2})
        '{a:1,b:2}'
    """
    if isinstance(items, abc.Mapping):
        size = len(items) if size is None else size
        items = items.items()
    items, size = _sized(items, size)
    return _fmt_body(items, size, _fmt_item)


def fmt_pair(pair: Any) -> str:
    """Format a two-field record as `(<first>,<second>)`, never truncated.

    Accepts a Pair, or any object with first/second attributes, or a 2-tuple.

    Examples:
        >>> fmt_pair((1, "one"))
        '(1,one)'
    """
    return _fmt_pair(pair, frozenset(), MAX_DEPTH)


def write_container(stream: IO[str], obj: Any) -> IO[str]:
    """Write fmt_container(obj) to a text stream.

    The stream's own error state is not inspected; write errors propagate.

    Returns:
        The stream, so writes can be chained.

    Examples:
        >>> import io
        >>> buf = io.StringIO()
        >>> _ = write_container(write_container(buf, [1]), [2])
    """
    stream.write(fmt_container(obj))
    return stream


def print_container(*objs: Any, sep: str = " ", end: str = "\n", file: IO[str] | None = None) -> None:
    """Print objects like print(), formatting supported containers with fmt_container().

    Other objects are printed with str().
    """
    file = sys.stdout if file is None else file
    file.write(sep.join(_fmt_element(obj) for obj in objs) + end)


# Private Methods ------------------------------------------------------------------------------------------------------


def _fmt_container(obj: Any, kind: ContainerKind, seen: frozenset[int], depth: int) -> str:
    """
    Format obj of a known kind.

    seen holds ids of containers being formatted up the stack, depth is the
    number of nesting levels still expanded below obj.
    """
    if kind is ContainerKind.PAIR:
        return _fmt_pair(obj, seen, depth)

    header = fmt_header(obj, kind)
    if id(obj) in seen or depth < 0:
        return header + "{" + ELLIPSIS + "}"
    seen = seen | {id(obj)}

    def render(x: Any) -> str:
        return _fmt_element(x, seen, depth - 1)

    def render_item(kv: tuple[Any, Any]) -> str:
        return _fmt_item(kv, seen, depth - 1)

    if kind.is_adapter:
        return header + _fmt_endpoints(obj, kind, render)

    size = _container_size(obj, kind)
    if kind is ContainerKind.MULTISET:
        return header + _fmt_body(obj.elements(), size, render)
    if kind is ContainerKind.MAP or kind is ContainerKind.MULTIMAP:
        return header + _fmt_body(obj.items(), size, render_item)
    return header + _fmt_body(obj, size, render)


def _fmt_body(
    items: Iterable[Any],
    size: int,
    render: Callable[[Any], str],
    threshold: int = THRESHOLD,
) -> str:
    """
    Render size elements as `{...}`, eliding the middle when size > 2*threshold.

    Sequences (bidirectional access) jump to the tail window by index;
    other iterables keep the tail window in a ring buffer during a single pass.
    Both paths yield the same text.
    """
    if isinstance(items, (abc.Sequence, array.array)):
        parts = _body_indexed(items, size, render, threshold)
    else:
        parts = _body_forward(items, size, render, threshold)
    return "{" + SEPARATOR.join(parts) + "}"


def _body_indexed(seq: Any, size: int, render: Callable[[Any], str], threshold: int) -> list[str]:
    """Walk seq by index; past the head window, jump once to size - threshold."""
    parts: list[str] = []
    may_truncate = size > 2 * threshold
    i = 0
    while i < size:
        if may_truncate and i >= threshold:
            i = size - threshold
            may_truncate = False
            parts.append(ELLIPSIS)
            # threshold 0 jumps straight to the end
            if i >= size:
                break
        parts.append(render(seq[i]))
        i += 1
    return parts


def _body_forward(items: Iterable[Any], size: int, render: Callable[[Any], str], threshold: int) -> list[str]:
    """Single pass over items; the tail window lives in a deque of maxlen threshold."""
    it = iter(items)
    if size <= 2 * threshold:
        return [render(x) for x in it]

    parts = [render(x) for x in islice(it, threshold)]
    parts.append(ELLIPSIS)
    tail = collections.deque(it, maxlen=threshold)
    parts.extend(render(x) for x in tail)
    return parts


def _fmt_endpoints(obj: Any, kind: ContainerKind, render: Callable[[Any], str]) -> str:
    """Endpoints of a stdlib queue, picked under the queue's own lock and rendered after release."""
    with obj.mutex:
        buffer = obj.queue
        if not buffer:
            return "{}"
        if kind is ContainerKind.STACK:
            top = buffer[-1]
        elif kind is ContainerKind.PRIORITY_QUEUE:
            # Heap invariant keeps the next-out item at index 0, the largest anywhere
            front, back = buffer[0], max(buffer)
        else:
            front, back = buffer[0], buffer[-1]

    if kind is ContainerKind.STACK:
        return "{top:" + render(top) + "}"
    return "{front:" + render(front) + ",back:" + render(back) + "}"


def _fmt_pair(pair: Any, seen: frozenset[int] = frozenset(), depth: int = MAX_DEPTH) -> str:
    if depth < 0:
        return "(" + ELLIPSIS + ")"
    if hasattr(pair, "first") and hasattr(pair, "second"):
        first, second = pair.first, pair.second
    else:
        first, second = pair
    return "(" + _fmt_element(first, seen, depth - 1) + SEPARATOR + _fmt_element(second, seen, depth - 1) + ")"


def _fmt_element(x: Any, seen: frozenset[int] = frozenset(), depth: int = MAX_DEPTH) -> str:
    """Supported containers recurse through their adapter, anything else is str()."""
    kind = container_kind(x)
    if kind is not None:
        return _fmt_container(x, kind, seen, depth)
    return _safe_str(x)


def _fmt_item(kv: tuple[Any, Any], seen: frozenset[int] = frozenset(), depth: int = MAX_DEPTH) -> str:
    key, value = kv
    return _fmt_element(key, seen, depth) + KEY_VALUE_SEPARATOR + _fmt_element(value, seen, depth)


def _container_size(obj: Any, kind: str | None = None) -> int:
    """Element count as traversed by the body, or queue length for adapters."""
    if kind is None:
        kind = container_kind(obj)
    if kind == ContainerKind.MULTISET:
        return sum(n for n in obj.values() if n > 0)
    if kind in (ContainerKind.STACK, ContainerKind.QUEUE, ContainerKind.PRIORITY_QUEUE):
        with obj.mutex:
            return len(obj.queue)
    if kind == ContainerKind.PAIR:
        return 2
    return len(obj)


def _sized(items: Iterable[Any], size: int | None) -> tuple[Iterable[Any], int]:
    """Return items with their size, materializing unsized iterables."""
    if size is not None:
        return items, size
    if not isinstance(items, abc.Sized):
        items = list(items)
    return items, len(items)


def _safe_str(obj: Any) -> str:
    """
    Defensive str() call - handle broken __str__ methods gracefully
    """
    try:
        return str(obj)
    except Exception as e:
        return f"<{type(obj).__name__} object (str failed: {type(e).__name__})>"
