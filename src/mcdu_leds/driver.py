"""
MCDU driver interface and mock backend.

The controller only needs two operations from a panel driver:
set_led(name, value) and set_all_leds(value). Real hardware drivers
subclass MCDUDriver and are registered with register_driver(); without one,
get_driver() falls back to MockMCDU so everything runs off-panel.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional, Tuple

from .types import BRIGHTNESS_MAX, VALID_LEDS

logger = logging.getLogger(__name__)


class MCDUDriver(ABC):
    """Abstract panel driver - implemented by mock and hardware backends."""

    @abstractmethod
    def set_led(self, name: str, value: int) -> None:
        """Set one LED (canonical uppercase name) to 0-255. May raise."""
        pass

    @abstractmethod
    def set_all_leds(self, value: int) -> None:
        """Set every LED to 0-255. May raise."""
        pass

    def is_available(self) -> bool:
        """Is a physical panel attached?"""
        return False


class MockMCDU(MCDUDriver):
    """
    In-memory panel for mock mode and tests.

    Records every call in `calls` as (method, args) and tracks the last
    brightness per LED. Set `fail_with` to an exception to simulate a flaky
    bus; it is raised on every call until cleared.
    """

    def __init__(self, fail_with: Optional[Exception] = None):
        self.calls: List[Tuple[str, Tuple[Any, ...]]] = []
        self.fail_with = fail_with
        self._leds: Dict[str, int] = {name: 0 for name in VALID_LEDS}
        self._leds["BACKLIGHT"] = BRIGHTNESS_MAX
        self._leds["SCREEN_BACKLIGHT"] = BRIGHTNESS_MAX

    def set_led(self, name: str, value: int) -> None:
        self.calls.append(("set_led", (name, value)))
        if self.fail_with is not None:
            raise self.fail_with
        self._leds[name] = value
        logger.debug("[mock] %s = %d", name, value)

    def set_all_leds(self, value: int) -> None:
        self.calls.append(("set_all_leds", (value,)))
        if self.fail_with is not None:
            raise self.fail_with
        for name in self._leds:
            self._leds[name] = value
        logger.debug("[mock] all LEDs = %d", value)

    def get_led(self, name: str) -> Optional[int]:
        return self._leds.get(name)

    def snapshot(self) -> Dict[str, int]:
        """Current brightness of every LED."""
        return dict(self._leds)

    def reset(self):
        self.calls.clear()


_hardware_factory: Optional[Callable[[], MCDUDriver]] = None


def register_driver(factory: Optional[Callable[[], MCDUDriver]]) -> None:
    """Register a factory for the hardware backend (None to unregister)."""
    global _hardware_factory
    _hardware_factory = factory


def get_driver(backend: str = "auto") -> MCDUDriver:
    """Get panel driver. "auto" uses hardware when a backend is registered."""
    if backend == "auto":
        backend = "hardware" if _hardware_factory else "mock"

    if backend == "hardware":
        if _hardware_factory is None:
            logger.warning("No hardware driver registered, using mock panel")
            return MockMCDU()
        try:
            return _hardware_factory()
        except Exception as e:
            logger.error("Failed to initialize panel driver: %s, using mock panel", e)
            return MockMCDU()
    return MockMCDU()
