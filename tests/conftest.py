"""
Shared pytest fixtures for snapmetrics tests.
"""

import logging
from pathlib import Path

import pytest

# NIST/SEMATECH e-Handbook, section 7.2.6.2: P90 of this set is 95.1972.
CONTROL_VALUES = [
    95.1772, 95.1567, 95.1937, 95.1959, 95.1442, 95.0610,
    95.1591, 95.1195, 95.1065, 95.0925, 95.1990, 95.1682,
]
CONTROL_P90 = 95.1972
CONTROL_SUM = 1141.7735
CONTROL_MIN = 95.0610
CONTROL_MAX = 95.1990


class ScriptedRandom:
    """Random source that always returns the same slot.

    Lets a test decide exactly which sample slot Algorithm R overwrites.
    """

    def __init__(self, value: int = 0):
        self.value = value
        self.calls: list[int] = []

    def randrange(self, stop: int) -> int:
        self.calls.append(stop)
        return min(self.value, stop - 1)


@pytest.fixture
def scripted_random() -> ScriptedRandom:
    return ScriptedRandom(0)


@pytest.fixture(scope="session")
def test_output_root() -> Path:
    """
    Returns the root test_output directory. Created once per test session.
    Files here persist after tests complete for easy access.
    """
    output_dir = Path(__file__).parent.parent / "test_output"
    output_dir.mkdir(exist_ok=True)
    return output_dir


@pytest.fixture
def test_output_dir(request, test_output_root) -> Path:
    """
    Returns a directory for the current test to write output files.
    Directory structure: test_output/<module_name>/<test_name>/
    """
    module_name = request.module.__name__.split(".")[-1]
    test_name = request.node.name

    test_dir = test_output_root / module_name / test_name
    test_dir.mkdir(parents=True, exist_ok=True)
    return test_dir


@pytest.fixture(autouse=True)
def reset_snapmetrics_logging():
    """Reset the library logger before and after each test.

    Removes every handler except a fresh NullHandler and resets the level
    to NOTSET, so one test's logging setup never leaks into the next.
    """
    logger = logging.getLogger("snapmetrics")

    def _reset():
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
            if not isinstance(handler, logging.NullHandler):
                handler.close()
        logger.addHandler(logging.NullHandler())
        logger.setLevel(logging.NOTSET)

    _reset()
    yield
    _reset()
