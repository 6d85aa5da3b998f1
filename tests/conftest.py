"""
Shared test fixtures for the mcdu-leds test suite.

Local fixtures in individual test files override these (pytest convention).
"""

import pytest

from mcdu_leds.commands import LEDCommandHandler
from mcdu_leds.driver import MockMCDU
from mcdu_leds.leds import LEDController


# ---------------------------------------------------------------------------
# Drivers
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_mcdu():
    """In-memory panel that records every call."""
    return MockMCDU()


@pytest.fixture
def failing_mcdu():
    """Panel whose every call raises, like a USB bus that dropped out."""
    return MockMCDU(fail_with=RuntimeError("bus timeout"))


# ---------------------------------------------------------------------------
# Controllers
# ---------------------------------------------------------------------------

@pytest.fixture
def controller(mock_mcdu):
    """LEDController wired to the mock panel."""
    return LEDController(mock_mcdu)


@pytest.fixture
def commands(controller):
    """LEDCommandHandler on top of the mock-backed controller."""
    return LEDCommandHandler(controller)


# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------

@pytest.fixture
def clean_env(monkeypatch):
    """Strip MCDU_* overrides so config tests see file values only."""
    for var in ("MCDU_MOCK_MODE", "MCDU_LOG_LEVEL", "MCDU_LEDS_CONFIG"):
        monkeypatch.delenv(var, raising=False)
    return monkeypatch
