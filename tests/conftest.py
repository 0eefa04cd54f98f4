# tests/conftest.py
import sys
from pathlib import Path

# Add `src/` and `tests/` to sys.path if not already present
BASE_DIR = Path(__file__).resolve().parent.parent
for subdir in ["src", "tests"]:
    path = str(BASE_DIR / subdir)
    if path not in sys.path:
        sys.path.insert(0, path)

import pytest  # noqa: E402

from step_report.config.config_dataclass import TrackerConfig  # noqa: E402
from step_report.results.run_result import RunResult  # noqa: E402
from step_report.tracking.tracker import StepTracker  # noqa: E402


# ---------- fixtures ------------------------------------------------


@pytest.fixture
def run_result():
    return RunResult(test_name="test_checkout_flow")


@pytest.fixture
def tracker(run_result):
    return StepTracker(run_result)


@pytest.fixture
def lenient_tracker(run_result):
    """A tracker that blames unexplained open steps instead of raising."""
    return StepTracker(run_result, config=TrackerConfig(unexplained_open_step="attach"))


@pytest.fixture
def crashed_tracker(tracker):
    """
    The run from the docs: A{B, C{D}} where D fails and the test crashes
    before C and A are closed.
    """
    a = tracker.open("A")
    b = tracker.open("B")
    tracker.close(b)
    c = tracker.open("C")
    d = tracker.open("D")
    error = ValueError("D went wrong")
    tracker.close(d, error)
    return tracker, error, (a, b, c, d)
