"""Test setup for page2md."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from bs4 import BeautifulSoup  # noqa: E402
from bs4.element import Tag  # noqa: E402


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for pytest.

    This allows running integration tests selectively:
        pytest -m integration       # run only integration tests
        pytest -m "not integration" # skip integration tests
    """
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests (make real network calls)",
    )


@pytest.fixture
def parse_fragment() -> Callable[[str], Tag]:
    """Parse an HTML fragment and return its first element.

    Uses the stdlib-backed ``html.parser`` builder so whitespace-only text
    nodes survive exactly as written.
    """

    def _parse(html: str) -> Tag:
        element = BeautifulSoup(html, "html.parser").find(True)
        assert element is not None
        return element

    return _parse


@pytest.fixture
def network_timeout() -> float:
    """Default timeout for network operations in seconds."""
    return 60.0
