"""
Single-element readers for standard containers.

Each read_into() call consumes exactly one element from a text stream
(a key and a value for maps) and inserts it with the container's own
insertion operation. Repeated calls assemble a container from input.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import array
import collections.abc as abc
from typing import IO, Any, Callable, TypeVar

# Local ----------------------------------------------------------------------------------------------------------------
from .kinds import ContainerKind, require_kind
from .utils import class_name, fmt_type

# Constants ------------------------------------------------------------------------------------------------------------

T = TypeVar("T")

ARRAY_PARSERS: dict[str, Callable[[str], Any]] = {
    **{code: int for code in "bBhHiIlLqQ"},
    "f": float,
    "d": float,
    "u": str,
    "w": str,
}


# Classes --------------------------------------------------------------------------------------------------------------

class TextReader:
    """
    Whitespace-delimited token reader over a text stream, with stream state.

    The reader tracks two flags the caller inspects after reading:

    - failed: the last read could not produce a value (parse error or end of input).
      A failed reader refuses further reads until clear() is called; the token that
      failed to parse is kept and is returned again by the next read.
    - eof: the end of the underlying stream was reached.

    Args:
        stream: Text stream to read from, only its read(1) method is used.

    Attributes:
        tokens_read: Number of tokens consumed from the underlying stream.

    Example:
        >>> import io
        >>> reader = TextReader(io.StringIO("7 x"))
        >>> reader.read_value(int)
        7
        >>> reader.read_value(int)
        Traceback (most recent call last):
        ...
        ValueError: cannot parse 'x' as int
        >>> reader.clear()
        >>> reader.read_value(str)
        'x'
    """

    def __init__(self, stream: IO[str]) -> None:
        if stream is None:
            raise ValueError("TextReader stream required")
        self.stream = stream
        self.failed = False
        self.eof = False
        self.tokens_read = 0
        self._pending: list[str] = []

    def __bool__(self) -> bool:
        """True while the reader is usable (not failed)."""
        return not self.failed

    def clear(self) -> None:
        """Reset failed and eof flags, keeping any pushed-back token."""
        self.failed = False
        self.eof = False

    def unread(self, token: str) -> None:
        """Push a token back; tokens are returned last-in first-out."""
        self._pending.append(token)

    def read_token(self) -> str:
        """
        Read the next whitespace-delimited token.

        Raises:
            ValueError: If the reader is in the failed state.
            EOFError: If only whitespace is left; the reader becomes failed and eof.
        """
        if self.failed:
            raise ValueError("reader is in failed state, call clear() first")
        if self._pending:
            return self._pending.pop()

        ch = self.stream.read(1)
        while ch and ch.isspace():
            ch = self.stream.read(1)
        if not ch:
            self.eof = True
            self.failed = True
            raise EOFError("no token left in stream")

        chars = []
        while ch and not ch.isspace():
            chars.append(ch)
            ch = self.stream.read(1)
        if not ch:
            self.eof = True

        self.tokens_read += 1
        return "".join(chars)

    def read_value(self, parse: Callable[[str], T] = str) -> T:
        """
        Read the next token and parse it.

        On a parse error the token is pushed back and the reader becomes failed.

        Raises:
            ValueError: If the token cannot be parsed, chained from the parser's error.
            EOFError: If no token is left.
        """
        return self.parse_token(self.read_token(), parse)

    def parse_token(self, token: str, parse: Callable[[str], T] = str) -> T:
        """Parse a token already read; failure pushes it back and marks the reader failed."""
        try:
            return parse(token)
        except Exception as e:
            self.unread(token)
            self.failed = True
            raise ValueError(f"cannot parse {token!r} as {_parser_name(parse)}") from e


# Methods --------------------------------------------------------------------------------------------------------------

def read_into(
        stream: TextReader | IO[str],
        container: Any,
        parse: Callable[[str], Any] | None = None,
        *,
        key: Callable[[str], Any] | None = None,
) -> TextReader | IO[str]:
    """
    Read one element from stream and insert it into container.

    Insertion per kind:
        - stack, queue, priority_queue: put_nowait(v)
        - list, vector, deque: append(v)
        - set: add(v)
        - multiset: counter[v] += 1
        - map: setdefault(k, v), an existing key keeps its value
        - multimap: add(k, v)

    Args:
        stream: A TextReader, or a text stream wrapped in one for this call.
            A seekable text stream is rewound to where the element started when
            the read fails; on a non-seekable one the consumed tokens are lost.
        container: Target container, see iostl.kinds.ContainerKind.
        parse: Parse rule for the value. Defaults to the array typecode rule for
            array.array and to str otherwise.
        key: Parse rule for the key of map and multimap. Defaults to str.

    Returns:
        The stream passed in, so reads can be chained.

    Raises:
        TypeError: If container is unsupported, immutable, or a pair.
        ValueError: If a token cannot be parsed; container is left unchanged.
        EOFError: If the stream holds no further token; container is left unchanged.
        queue.Full: If a bounded stdlib queue is full.

    Examples:
        >>> import io
        >>> numbers = []
        >>> _ = read_into(io.StringIO("42"), numbers, int)
        >>> numbers
        [42]
    """
    kind = require_kind(container)
    insert = _inserter(container, kind)
    if parse is None:
        parse = _default_parser(container)

    if isinstance(stream, TextReader):
        insert(_read_element(stream, kind, parse, key))
        return stream

    mark = stream.tell() if _seekable(stream) else None
    try:
        element = _read_element(TextReader(stream), kind, parse, key)
    except (ValueError, EOFError):
        if mark is not None:
            stream.seek(mark)
        raise
    insert(element)
    return stream


# Private Methods ------------------------------------------------------------------------------------------------------

def _read_element(
        reader: TextReader,
        kind: ContainerKind,
        parse: Callable[[str], Any],
        key: Callable[[str], Any] | None,
) -> Any:
    """One value, or a (key, value) tuple for associative kinds; a failed value pushes the key back."""
    if not kind.is_associative:
        return reader.read_value(parse)

    key_token = reader.read_token()
    k = reader.parse_token(key_token, key or str)
    try:
        v = reader.read_value(parse)
    except (ValueError, EOFError):
        reader.unread(key_token)
        raise
    return k, v


def _seekable(stream: Any) -> bool:
    seekable = getattr(stream, "seekable", None)
    return callable(seekable) and seekable()


def _inserter(container: Any, kind: ContainerKind) -> Callable[[Any], None]:
    """Native insertion operation of container, checked before any input is consumed."""
    if kind.is_adapter:
        return container.put_nowait

    if kind in (ContainerKind.LIST, ContainerKind.VECTOR, ContainerKind.DEQUE):
        return container.append

    if kind is ContainerKind.SET and isinstance(container, abc.MutableSet):
        return container.add

    if kind is ContainerKind.MULTISET:
        def insert(v: Any) -> None:
            container[v] += 1

        return insert

    if kind is ContainerKind.MAP and isinstance(container, abc.MutableMapping):
        def insert(kv: tuple[Any, Any]) -> None:
            container.setdefault(*kv)

        return insert

    if kind is ContainerKind.MULTIMAP:
        def insert(kv: tuple[Any, Any]) -> None:
            container.add(*kv)

        return insert

    raise TypeError(f"cannot read into {kind} container {fmt_type(container)}")


def _default_parser(container: Any) -> Callable[[str], Any]:
    if isinstance(container, array.array):
        return ARRAY_PARSERS.get(container.typecode, str)
    return str


def _parser_name(parse: Callable[..., Any]) -> str:
    name = getattr(parse, "__name__", None)
    return name if isinstance(name, str) else class_name(parse)
