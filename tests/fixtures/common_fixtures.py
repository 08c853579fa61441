"""Common pytest fixtures used across multiple test files.

This module provides sample datasets, range files and settings so that the
individual test modules share one set of inputs.
"""

import pytest

from svmscale.core.config import Settings, get_settings
from svmscale.core.logging import setup_structured_logging
from svmscale.models.problem import Problem
from svmscale.services.problem_reader import parse_problem

# Three records, two feature positions (indices 1 and 3).
# Position ranges: [0.5, 1.5] and [-2.0, 2.0].
SAMPLE_DATA = """\
# training set
+1 1:0.5 3:2.0
-1 1:1.5 3:-2.0  # second record

+1 1:1.0 3:0.0
"""

# The same records scaled into [-1, 1].
SAMPLE_SCALED_LINES = [
    "1 1:-1 3:1",
    "-1 1:1 3:-1",
    "1 1:0 3:0",
]

RAGGED_DATA = """\
1 1:1.0
2 1:2.0 2:4.0
3 1:3.0 2:6.0 3:9.0
"""


@pytest.fixture(scope="session", autouse=True)
def configure_logging():
    """Route structured logs to stderr for the whole test session."""
    setup_structured_logging(Settings(log_level="DEBUG"))


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Ensure every test sees settings built from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings():
    """Provide default settings for testing."""
    return Settings()


@pytest.fixture
def sample_problem() -> Problem:
    """Provide the uniform three-record sample dataset."""
    return parse_problem(SAMPLE_DATA.splitlines(), source="sample")


@pytest.fixture
def ragged_problem() -> Problem:
    """Provide a dataset whose vectors all have different lengths."""
    return parse_problem(RAGGED_DATA.splitlines(), source="ragged")


@pytest.fixture
def sample_data_file(tmp_path):
    """Write the sample dataset to a temporary file and return its path."""
    path = tmp_path / "train.txt"
    path.write_text(SAMPLE_DATA, encoding="utf-8")
    return path


@pytest.fixture
def ragged_data_file(tmp_path):
    """Write the ragged dataset to a temporary file and return its path."""
    path = tmp_path / "ragged.txt"
    path.write_text(RAGGED_DATA, encoding="utf-8")
    return path


@pytest.fixture
def sample_range_file(tmp_path):
    """Write a one-feature range file mapping [0, 10] onto [-1, 1]."""
    path = tmp_path / "ranges.txt"
    path.write_text("x\n-1 1\n1 0 10\n", encoding="utf-8")
    return path
