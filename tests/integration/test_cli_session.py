"""
Integration tests for the command line front end.

Runs the scripted simulated session end to end through the monitor and
checks the printed event stream.
"""

import json
import tempfile
import unittest
from pathlib import Path

from pyjoyevents.config import Config, get_settings, reset_config, reset_settings, set_config
from pyjoyevents.main import (
    apply_command_line_overrides, main, run_simulation, setup_argument_parser,
)


RAW_SESSION = [
    "-- standard gamepad plugged into slot 0",
    "Pad 0 connected",
    "-- left stick pushed",
    "Pad 0 Axis 0: 0.500",
    "Pad 0 Axis 1: -0.250",
    "-- south button pressed",
    "Pad 0 Button 0: pressed",
    "Pad 0 Button 0 value: 1.000",
    "-- right trigger half pulled",
    "Pad 0 Button 7: pressed",
    "Pad 0 Button 7 value: 0.400",
    "-- buttons released",
    "Pad 0 Button 0: released",
    "Pad 0 Button 7: released",
    "Pad 0 Button 0 value: 0.000",
    "Pad 0 Button 7 value: 0.000",
    "-- unmapped flight stick plugged into slot 1",
    "Pad 1 connected",
    "Pad 1 Axis 2: -1.000",
    "-- slot 0 replugged",
    "Pad 0 disconnected",
    "Pad 0 connected",
    "-- all gamepads unplugged",
    "Pad 0 disconnected",
    "Pad 1 disconnected",
]

MAPPED_SESSION = [
    "-- standard gamepad plugged into slot 0",
    "-- left stick pushed",
    "LEFT_STICK_X: 0.500",
    "LEFT_STICK_Y: -0.250",
    "-- south button pressed",
    "SOUTH press",
    "SOUTH value: 1.000",
    "-- right trigger half pulled",
    "RT2 press",
    "RT2 value: 0.400",
    "-- buttons released",
    "SOUTH release",
    "RT2 release",
    "SOUTH value: 0.000",
    "RT2 value: 0.000",
    "-- unmapped flight stick plugged into slot 1",
    "-- slot 0 replugged",
    "-- all gamepads unplugged",
]


class CLITestCase(unittest.TestCase):
    """Runs each test against default configuration."""

    def setUp(self):
        set_config(Config(load_env=False))
        reset_settings()
        self.parser = setup_argument_parser()

    def tearDown(self):
        reset_config()
        reset_settings()


class TestSimulatedSession(CLITestCase):
    """Test the scripted session output."""

    def run_session(self, *argv):
        lines = []
        result = run_simulation(self.parser.parse_args(["--simulate", *argv]), emit=lines.append)
        self.assertEqual(result, 0)
        return lines

    def test_raw_events(self):
        """The scripted session prints every raw event."""
        self.assertEqual(self.run_session(), RAW_SESSION)

    def test_mapped_events(self):
        """--mapped prints only standard-layout events."""
        self.assertEqual(self.run_session("--mapped"), MAPPED_SESSION)

    def test_axis_precision(self):
        """Axis values honor the configured precision."""
        get_settings().update_setting("monitor.axis_precision", 1)
        lines = self.run_session()

        self.assertIn("Pad 0 Axis 1: -0.2", lines)
        self.assertIn("Pad 0 Button 7 value: 0.4", lines)


class TestArguments(CLITestCase):
    """Test command line parsing and configuration overrides."""

    def test_defaults(self):
        """Parser defaults leave configuration untouched."""
        args = self.parser.parse_args([])

        self.assertFalse(args.mapped)
        self.assertFalse(args.simulate)
        self.assertIsNone(args.rate)
        self.assertIsNone(args.log_level)

    def test_overrides(self):
        """--debug and --rate update the configuration."""
        apply_command_line_overrides(self.parser.parse_args(["--debug", "--rate", "120"]))

        settings = get_settings()
        self.assertTrue(settings.debug_mode)
        self.assertEqual(settings.log_level, "DEBUG")
        self.assertEqual(settings.poll_rate, 120)

    def test_explicit_log_level_wins(self):
        """--log-level overrides the level set by --debug."""
        apply_command_line_overrides(self.parser.parse_args(["--debug", "--log-level", "ERROR"]))
        self.assertEqual(get_settings().log_level, "ERROR")

    def test_invalid_rate(self):
        """A non-positive rate is rejected."""
        with self.assertRaises(ValueError):
            apply_command_line_overrides(self.parser.parse_args(["--rate", "0"]))

    def test_main_rejects_invalid_rate(self):
        """main exits with 1 on a bad rate."""
        self.assertEqual(main(["--simulate", "--rate", "-5"]), 1)

    def test_missing_config_file(self):
        """main exits with 1 when --config does not exist."""
        self.assertEqual(main(["--config", "/nonexistent/pyjoyevents.json"]), 1)

    def test_non_numeric_setting_in_config_file(self):
        """main exits with 1 instead of crashing on a non-numeric poll rate."""
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            path.write_text(json.dumps({"monitor": {"poll_rate": "fast"}}), encoding="utf-8")

            self.assertEqual(main(["--config", str(path), "--simulate"]), 1)


if __name__ == '__main__':
    unittest.main()
