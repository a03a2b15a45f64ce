import logging
import sys
from datetime import date
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from routines.core.routine_models import Person  # noqa: E402


@pytest.fixture
def people() -> list[Person]:
    """Household members used across the parser tests."""
    return [
        Person(id="iris-id", name="Iris"),
        Person(id="scott-id", name="Scott"),
        Person(id="john-smith-id", name="John Smith"),
    ]


@pytest.fixture
def today() -> date:
    return date(2026, 3, 2)


@pytest.fixture
def restore_root_logger():
    """configure_logging() replaces root handlers; put pytest's back afterwards."""
    root = logging.getLogger()
    saved_handlers = root.handlers[:]
    saved_level = root.level
    yield
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        if handler not in saved_handlers:
            handler.close()
    for handler in saved_handlers:
        root.addHandler(handler)
    root.setLevel(saved_level)
