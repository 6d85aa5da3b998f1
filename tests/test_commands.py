"""
Tests for LED command payloads (leds/set, leds/single) and the LED state cache.

Run with: pytest tests/test_commands.py -v
"""

import logging

import pytest

from mcdu_leds.commands import LEDCommandHandler, coerce_led_value


class TestCoerceLedValue:

    @pytest.mark.parametrize("value,expected", [
        (True, 255),
        (False, 0),
        (0, 0),
        (128, 128),
        (300, 255),
        (-20, 0),
        (99.9, 99),
        (float("nan"), 0),
        ("bright", 0),
        (None, 0),
    ])
    def test_mapping(self, value, expected):
        assert coerce_led_value(value) == expected


class TestDefaults:

    def test_backlights_on_everything_else_off(self, commands):
        state = commands.get_state()
        assert state["BACKLIGHT"] == 255
        assert state["SCREEN_BACKLIGHT"] == 255
        assert all(v == 0 for k, v in state.items() if "BACKLIGHT" not in k)
        assert len(state) == 11

    def test_get_state_is_a_copy(self, commands):
        commands.get_state()["FAIL"] = 200
        assert commands.get_state()["FAIL"] == 0


class TestLedsSet:

    def test_boolean_and_numeric_values(self, commands, mock_mcdu):
        commands.handle_leds_set({"leds": {"FAIL": True, "RDY": 128, "BACKLIGHT": False}})
        assert mock_mcdu.calls == [
            ("set_led", ("FAIL", 255)),
            ("set_led", ("RDY", 128)),
            ("set_led", ("BACKLIGHT", 0)),
        ]
        state = commands.get_state()
        assert (state["FAIL"], state["RDY"], state["BACKLIGHT"]) == (255, 128, 0)

    def test_numbers_clamped(self, commands, mock_mcdu):
        commands.handle_leds_set({"leds": {"MENU": 999, "IND": -4}})
        assert mock_mcdu.get_led("MENU") == 255
        assert mock_mcdu.get_led("IND") == 0

    def test_unknown_led_skipped(self, commands, mock_mcdu, caplog):
        with caplog.at_level(logging.WARNING):
            commands.handle_leds_set({"leds": {"LANDING": True, "FM": True}})
        assert mock_mcdu.calls == [("set_led", ("FM", 255))]
        assert "Unknown LED: LANDING" in caplog.text
        assert "LANDING" not in commands.get_state()

    def test_lowercase_names_accepted(self, commands, mock_mcdu):
        commands.handle_leds_set({"leds": {"status": 40}})
        assert mock_mcdu.calls == [("set_led", ("STATUS", 40))]

    @pytest.mark.parametrize("payload", [{}, {"leds": "FAIL"}, {"leds": ["FAIL"]}, None, "x"])
    def test_invalid_payload_is_noop(self, commands, mock_mcdu, payload, caplog):
        with caplog.at_level(logging.ERROR):
            commands.handle_leds_set(payload)
        assert mock_mcdu.calls == []
        assert "Invalid leds/set" in caplog.text


class TestLedSingle:

    def test_brightness(self, commands, mock_mcdu):
        commands.handle_led_single({"name": "RDY", "brightness": 200})
        assert mock_mcdu.calls == [("set_led", ("RDY", 200))]

    def test_brightness_string_clamped(self, commands, mock_mcdu):
        commands.handle_led_single({"name": "RDY", "brightness": "400"})
        assert mock_mcdu.calls == [("set_led", ("RDY", 255))]

    def test_brightness_string_with_suffix_clamped(self, commands, mock_mcdu):
        commands.handle_led_single({"name": "RDY", "brightness": "300abc"})
        commands.handle_led_single({"name": "RDY", "brightness": "-20 %"})
        assert mock_mcdu.calls == [("set_led", ("RDY", 255)), ("set_led", ("RDY", 0))]

    def test_state(self, commands, mock_mcdu):
        commands.handle_led_single({"name": "fail", "state": True})
        commands.handle_led_single({"name": "fail", "state": False})
        assert mock_mcdu.calls == [("set_led", ("FAIL", 255)), ("set_led", ("FAIL", 0))]

    def test_brightness_wins_over_state(self, commands, mock_mcdu):
        commands.handle_led_single({"name": "MCDU", "brightness": 10, "state": True})
        assert mock_mcdu.calls == [("set_led", ("MCDU", 10))]

    def test_missing_value_is_noop(self, commands, mock_mcdu, caplog):
        with caplog.at_level(logging.WARNING):
            commands.handle_led_single({"name": "MCDU"})
        assert mock_mcdu.calls == []
        assert "missing state or brightness" in caplog.text

    def test_unparseable_brightness_is_noop(self, commands, mock_mcdu):
        commands.handle_led_single({"name": "MCDU", "brightness": "dim"})
        assert mock_mcdu.calls == []
        assert commands.get_state()["MCDU"] == 0

    @pytest.mark.parametrize("name", [None, "", "LANDING"])
    def test_unknown_name_is_noop(self, commands, mock_mcdu, name):
        commands.handle_led_single({"name": name, "state": True})
        assert mock_mcdu.calls == []


class TestDispatch:

    def test_routes_by_topic(self, commands, mock_mcdu):
        commands.handle("leds/set", {"leds": {"FM1": 1}})
        commands.handle("leds/single", {"name": "FM2", "brightness": 2})
        assert mock_mcdu.calls == [("set_led", ("FM1", 1)), ("set_led", ("FM2", 2))]
        assert commands.messages_handled == 2

    def test_unknown_topic(self, commands, mock_mcdu, caplog):
        with caplog.at_level(logging.WARNING):
            commands.handle("display/set", {"lines": []})
        assert mock_mcdu.calls == []
        assert "Unknown topic: display/set" in caplog.text


class TestSetAllAndRestore:

    def test_set_all_updates_cache(self, commands, mock_mcdu):
        commands.set_all(30)
        assert set(commands.get_state().values()) == {30}
        assert mock_mcdu.calls == [("set_all_leds", (30,))]

    def test_restore_resends_cache(self, commands, mock_mcdu):
        commands.handle_led_single({"name": "RDY", "state": True})
        mock_mcdu.reset()

        commands.restore()

        sent = dict(args for _, args in mock_mcdu.calls)
        assert len(mock_mcdu.calls) == 11
        assert sent["RDY"] == 255
        assert sent["BACKLIGHT"] == 255
        assert sent["FAIL"] == 0

    def test_failing_panel_keeps_cache(self, failing_mcdu):
        from mcdu_leds.leds import LEDController

        handler = LEDCommandHandler(LEDController(failing_mcdu))
        handler.handle_led_single({"name": "FAIL", "state": True})
        assert handler.get_state()["FAIL"] == 255
