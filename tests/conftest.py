#
# Pytest Fixtures
#

# Standard library -----------------------------------------------------------------------------------------------------
import io
import re
from typing import Callable

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from iostl.io import TextReader

HEADER_RE = re.compile(r"^\((?P<kind>[a-z_]+):(?P<identity>0x[0-9a-f]+)\)\[(?P<size>\d+)\]")


# Fixtures -------------------------------------------------------------------------------------------------------------

@pytest.fixture
def reader() -> Callable[[str], TextReader]:
    """Fixture to create a TextReader over the given text."""

    def _create_reader(text: str = "") -> TextReader:
        return TextReader(io.StringIO(text))

    return _create_reader


@pytest.fixture
def split_header() -> Callable[[str], tuple[str, str, int, str]]:
    """Fixture splitting formatted output into (kind, identity, size, body)."""

    def _split(text: str) -> tuple[str, str, int, str]:
        m = HEADER_RE.match(text)
        assert m is not None, f"no header in {text!r}"
        return m["kind"], m["identity"], int(m["size"]), text[m.end():]

    return _split
