"""
MCDU LEDs - name-checked brightness control for the MCDU panel LEDs.

Friendly LED names and 0-255 brightness values in, driver calls out.
Bad input and panel failures are logged, never raised.
"""

__version__ = "0.1.0"

from .types import LEDName, VALID_LEDS, BRIGHTNESS_MIN, BRIGHTNESS_MAX
from .driver import MCDUDriver, MockMCDU, get_driver, register_driver
from .leds import LEDController, normalize_led_name, parse_brightness
from .commands import LEDCommandHandler, coerce_led_value
from .config import LEDConfig, ConfigManager, get_config_manager, get_led_config
from .error_recovery import HardwareError, safe_call

__all__ = [
    "LEDName",
    "VALID_LEDS",
    "BRIGHTNESS_MIN",
    "BRIGHTNESS_MAX",
    "MCDUDriver",
    "MockMCDU",
    "get_driver",
    "register_driver",
    "LEDController",
    "normalize_led_name",
    "parse_brightness",
    "LEDCommandHandler",
    "coerce_led_value",
    "LEDConfig",
    "ConfigManager",
    "get_config_manager",
    "get_led_config",
    "HardwareError",
    "safe_call",
]
