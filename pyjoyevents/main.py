"""
Command line entry point for PyJoyEvents.

Prints the event stream of connected gamepads, or of a scripted simulated
session with ``--simulate``.
"""

import sys
import time
import argparse
from pathlib import Path
from typing import Callable, Iterator, List, Optional

from .config import get_config, get_settings
from .core.logging import configure_logging, get_logger, shutdown_logging
from .core.exceptions import PyJoyEventsError, setup_exception_handling, handle_error, handle_crash
from .input.event import format_event_data
from .input.gamepad import MappingType
from .input.monitor import Monitor
from .input.testing import SimulatedGamepad, SimulatedNotifications, SimulatedSource


def setup_argument_parser() -> argparse.ArgumentParser:
    """
    Set up command line argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="pyjoyevents",
        description="PyJoyEvents - print gamepad events as they happen",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  pyjoyevents                       # Print raw events from connected gamepads
  pyjoyevents --mapped              # Print standard-layout events only
  pyjoyevents --simulate            # Replay a scripted session, no hardware needed
  pyjoyevents --list-gamepads       # List connected gamepads and exit
  pyjoyevents --rate 120            # Poll 120 times per second
        """
    )

    parser.add_argument(
        "--version",
        action="version",
        version="PyJoyEvents 0.1.0"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode with verbose logging"
    )

    parser.add_argument(
        "--config",
        type=str,
        metavar="FILE",
        help="Path to configuration file"
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Set logging level (overrides config)"
    )

    parser.add_argument(
        "--log-file",
        type=str,
        metavar="FILE",
        help="Also write logs to the directory of FILE"
    )

    parser.add_argument(
        "--mapped",
        action="store_true",
        help="Print only events that resolve to standard-layout names"
    )

    parser.add_argument(
        "--simulate",
        action="store_true",
        help="Run against a scripted simulated gamepad session"
    )

    parser.add_argument(
        "--rate",
        type=int,
        metavar="HZ",
        help="Polls per second (overrides config)"
    )

    parser.add_argument(
        "--list-gamepads",
        action="store_true",
        help="List connected gamepads and exit"
    )

    parser.add_argument(
        "--reset-config",
        action="store_true",
        help="Reset configuration to defaults"
    )

    return parser


def apply_command_line_overrides(args: argparse.Namespace) -> None:
    """
    Apply command line argument overrides to configuration.

    Args:
        args: Parsed command line arguments
    """
    config = get_config()

    if args.debug:
        config.set("app.debug", True)
        config.set("app.log_level", "DEBUG")

    if args.log_level:
        config.set("app.log_level", args.log_level)

    if args.rate is not None:
        if args.rate <= 0:
            raise ValueError(f"Invalid poll rate '{args.rate}'. Must be positive")
        config.set("monitor.poll_rate", args.rate)


def list_gamepads() -> None:
    """List connected gamepads and their layouts."""
    from .input.pygame_source import PygameSnapshotSource

    source = PygameSnapshotSource(max_gamepads=get_settings().max_gamepads)
    try:
        pads = source.get_gamepads()
        connected = [(slot, pad) for slot, pad in enumerate(pads) if pad is not None]
        print(f"Found {len(connected)} gamepad(s):")

        if not connected:
            print("  No gamepads detected. Make sure your controller is connected.")
            return

        for slot, pad in connected:
            print(f"  {slot}: {pad.name}")
            print(f"      Layout: {pad.mapping.name.lower()}")
            print(f"      Axes: {len(pad.axes)}")
            print(f"      Buttons: {len(pad.buttons)}")
    finally:
        source.close()


def simulated_session(source: SimulatedSource,
                      notifications: SimulatedNotifications) -> Iterator[str]:
    """
    Drive a scripted session, one step per poll.

    Yields a short description of each step after applying it.
    """
    pad = SimulatedGamepad("Simulated Standard Gamepad")
    source.connect(pad, 0)
    notifications.notify_connected(0)
    yield "standard gamepad plugged into slot 0"

    pad.set_axes([0.5, -0.25, 0.0, 0.0])
    yield "left stick pushed"

    pad.press(0)
    yield "south button pressed"

    pad.set_button_value(7, 0.4, pressed=True)
    yield "right trigger half pulled"

    pad.release(0)
    pad.set_button_value(7, 0.0, pressed=False)
    yield "buttons released"

    generic = SimulatedGamepad("Simulated Flight Stick", MappingType.UNKNOWN,
                               axis_count=3, button_count=8)
    source.connect(generic, 1)
    notifications.notify_connected(1)
    generic.set_axis(2, -1.0)
    yield "unmapped flight stick plugged into slot 1"

    # Unplug and replug between two polls.
    source.disconnect(0)
    notifications.notify_disconnected(0)
    source.connect(SimulatedGamepad("Simulated Standard Gamepad"), 0)
    notifications.notify_connected(0)
    yield "slot 0 replugged"

    source.resize(0)
    notifications.notify_disconnected(0)
    notifications.notify_disconnected(1)
    yield "all gamepads unplugged"


def drain_events(monitor: Monitor, mapped: bool, emit: Callable[[str], None]) -> int:
    """
    Print every event the monitor has for this tick.

    Returns:
        Number of events printed
    """
    precision = get_settings().axis_precision
    count = 0

    if mapped:
        while (event := monitor.poll_mapped()) is not None:
            emit(str(event))
            count += 1
        return count

    while (event := monitor.poll()) is not None:
        emit(f"Pad {event.gamepad.slot} {format_event_data(event.data, precision)}")
        count += 1
    return count


def run_simulation(args: argparse.Namespace, emit: Callable[[str], None] = print) -> int:
    """Run the scripted session to completion."""
    source = SimulatedSource()
    notifications = SimulatedNotifications()

    with Monitor(source, notifications) as monitor:
        for step in simulated_session(source, notifications):
            emit(f"-- {step}")
            drain_events(monitor, args.mapped, emit)
    return 0


def run_event_loop(args: argparse.Namespace) -> int:
    """Poll connected gamepads until interrupted."""
    from .input.pygame_source import PygameNotificationSource

    logger = get_logger("main")
    settings = get_settings()
    interval = 1.0 / settings.poll_rate
    notifications = PygameNotificationSource()

    print(f"PyJoyEvents v{settings.app_version} - polling at {settings.poll_rate} Hz")
    print("Press Ctrl+C to exit")
    print("-" * 50)

    with Monitor(notifications=notifications) as monitor:
        logger.info("Event loop started", extra={
            "poll_rate": settings.poll_rate,
            "mapped": args.mapped
        })
        try:
            while True:
                notifications.dispatch()
                drain_events(monitor, args.mapped, print)
                time.sleep(interval)
        except KeyboardInterrupt:
            print("\nStopped.")

    logger.info("Event loop stopped")
    return 0


def initialize_application(args: argparse.Namespace) -> bool:
    """
    Load configuration and set up logging.

    Args:
        args: Parsed command line arguments

    Returns:
        True if initialization successful, False otherwise
    """
    try:
        if args.config:
            config_path = Path(args.config)
            if not config_path.exists():
                print(f"Error: Configuration file '{args.config}' not found", file=sys.stderr)
                return False

            from .config import Config, set_config, reset_settings
            set_config(Config(config_path))
            reset_settings()

        apply_command_line_overrides(args)

        settings = get_settings()
        settings.validate()
        log_kwargs = {}
        if args.log_file:
            log_kwargs['file_output'] = True
            log_kwargs['log_dir'] = Path(args.log_file).parent

        configure_logging(log_level=settings.log_level, **log_kwargs)
        setup_exception_handling()

        get_logger("main").debug("PyJoyEvents starting", extra={
            "version": settings.app_version,
            "debug_mode": settings.debug_mode,
            "poll_rate": settings.poll_rate,
        })
        return True

    except (PyJoyEventsError, ValueError) as e:
        print(f"Failed to initialize: {e}", file=sys.stderr)
        handle_error(e)
        return False


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the PyJoyEvents CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = setup_argument_parser()
    args = parser.parse_args(argv)

    try:
        if args.reset_config:
            print("Resetting configuration to defaults...")
            config = get_config()
            config.reset_to_defaults()
            config.save()
            print("Configuration reset complete.")
            return 0

        if not initialize_application(args):
            return 1

        if args.list_gamepads:
            list_gamepads()
            return 0

        if args.simulate:
            return run_simulation(args)

        return run_event_loop(args)

    except KeyboardInterrupt:
        print("\nInterrupted by user")
        return 0
    except Exception as e:
        get_logger("main").critical("Critical error in main application", extra={
            "error": str(e),
            "error_type": type(e).__name__
        })
        handle_crash(e)
        return 1
    finally:
        shutdown_logging()


if __name__ == "__main__":
    sys.exit(main())
