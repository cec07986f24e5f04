"""Common fixtures for example tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from tests.utils import import_module_from_file

# Get examples directory
EXAMPLES_DIR = Path(__file__).parent.parent.parent / "examples"


@pytest.fixture
def examples_dir():
    """Fixture providing the examples directory path."""
    return EXAMPLES_DIR


@pytest.fixture
def demo_module(request):
    """Fresh import of the ASGI demo for each test."""
    return import_module_from_file(
        f"asgi_demo_{request.node.name}", EXAMPLES_DIR / "asgi_demo.py"
    )
