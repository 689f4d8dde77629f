"""
iostl utilities shared across the package.

Contains functions used by multiple modules to avoid circular imports.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any


# Methods --------------------------------------------------------------------------------------------------------------


def class_name(obj: Any, fully_qualified: bool = False) -> str:
    """
    Get the class name of an object or a class.

    Returns class name whether given an instance or the class itself.
    For example, both `class_name(10)` and `class_name(int)` return 'int'.
    Builtins are never qualified.

    Examples:
        >>> class_name(10)
        'int'
        >>> import queue
        >>> class_name(queue.LifoQueue(), fully_qualified=True)
        'queue.LifoQueue'
    """
    cls = obj if isinstance(obj, type) else type(obj)
    if fully_qualified and cls.__module__ != "builtins":
        return f"{cls.__module__}.{cls.__qualname__}"
    return cls.__name__


def identity(obj: Any) -> str:
    """
    Address-like identity token of an object, as shown in container headers.

    The token is unique among simultaneously alive objects only; it is meant
    for eyeballing debug output, not for asserting on.

    Examples:
        >>> identity([]).startswith("0x")
        True
    """
    return hex(id(obj))


def fmt_type(obj: Any) -> str:
    """Format the type of obj for exception messages, like '<queue.SimpleQueue>'."""
    return f"<{class_name(obj, fully_qualified=True)}>"
