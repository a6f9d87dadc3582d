import os
import sys
from pathlib import Path
import pytest

# Ensure src/ is on sys.path so tests can import the local package
SRC = Path(__file__).resolve().parents[1] / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def session():
    from condenserlab.controller.session import LabSession
    return LabSession()


@pytest.fixture
def charged_state():
    """Fully charged condenser with both keys open."""
    from condenserlab.model.state import CircuitState
    return CircuitState(capacitor_voltage=100.0)


@pytest.fixture(scope="session")
def qapp():
    """One QApplication for widget and thread tests, rendered offscreen."""
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    from PySide6.QtWidgets import QApplication
    app = QApplication.instance() or QApplication([])
    yield app
