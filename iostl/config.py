"""
Process-wide configuration of the container formatters.

The truncation threshold is resolved once, at import time, from the
``IOSTL_THRESHOLD`` environment variable and never changes afterwards.
Set the variable before the first import of the package:

    $ IOSTL_THRESHOLD=20 python my_script.py

Containers holding more than ``2 * THRESHOLD`` elements are shown as the first
THRESHOLD elements, an ellipsis and the last THRESHOLD elements.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import os
import warnings
from typing import Any, Final

# Constants ------------------------------------------------------------------------------------------------------------

DEFAULT_THRESHOLD: Final[int] = 10
THRESHOLD_ENV: Final[str] = "IOSTL_THRESHOLD"


# Methods --------------------------------------------------------------------------------------------------------------

def resolve_threshold(value: Any) -> int:
    """
    Resolve a raw threshold setting into a valid threshold.

    None or an empty string selects DEFAULT_THRESHOLD. Zero is a legal setting
    (every non-empty container collapses into an ellipsis), so is any value
    larger than realistic container sizes (truncation never happens).

    Args:
        value: Raw setting, typically the environment variable string.

    Returns:
        int: The threshold, or DEFAULT_THRESHOLD if value is not a non-negative integer.

    Warns:
        RuntimeWarning: If value is set but is not a non-negative integer.

    Examples:
        >>> resolve_threshold("20")
        20
        >>> resolve_threshold(None)
        10
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return DEFAULT_THRESHOLD

    try:
        threshold = int(str(value).strip())
    except ValueError:
        threshold = -1

    if threshold < 0:
        warnings.warn(
            f"{THRESHOLD_ENV} must be a non-negative integer, got {value!r}; "
            f"using default {DEFAULT_THRESHOLD}",
            RuntimeWarning,
            stacklevel=2,
        )
        return DEFAULT_THRESHOLD

    return threshold


THRESHOLD: Final[int] = resolve_threshold(os.environ.get(THRESHOLD_ENV))
