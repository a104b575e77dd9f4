#!/usr/bin/env python3
"""
SimRig - Main Entry Point
Collision check and safe ranges for a rig configuration
"""

import sys
import json
import argparse
import logging
from typing import Dict, List, Optional, Tuple

from simrig import __version__
from simrig.config import Settings
from simrig.control import RigController, RigStatus, finite_or_none
from simrig.exceptions import ConfigurationError
from simrig.hardware import SerialConnection, find_port, list_available_ports
from simrig.motion import AxisSpec, DEFAULT_LIVE_CONFIGURATION, resolve_axis

logger = logging.getLogger("simrig")

_console_handler: Optional[logging.Handler] = None

def setup_logging(level: str = "INFO"):
    """Configure logging to stderr, replacing an earlier console handler"""
    global _console_handler

    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    root_logger = logging.getLogger()
    if _console_handler is not None:
        root_logger.removeHandler(_console_handler)

    # Console handler
    _console_handler = logging.StreamHandler()
    _console_handler.setFormatter(logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    ))

    root_logger.setLevel(numeric_level)
    root_logger.addHandler(_console_handler)

    # Reduce noise from pyserial
    logging.getLogger('serial').setLevel(logging.WARNING)

def axis_assignment(text: str) -> Tuple[AxisSpec, float]:
    """argparse type for AXIS=VALUE"""
    name, sep, raw = text.partition("=")
    if not sep:
        raise argparse.ArgumentTypeError(f"expected AXIS=VALUE, got {text!r}")
    try:
        return resolve_axis(name), float(raw)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))

def list_ports_command():
    """List available serial ports"""
    print("📋 Available Serial Ports:")
    print("-" * 50)

    ports = list_available_ports()

    if not ports:
        print("❌ No serial ports found!")
        print("\nPossible issues:")
        print("  - BLE-UART bridge not plugged in")
        print("  - Missing USB drivers")
        print("  - Permission issues")
        return

    for port in ports:
        print(f"\n📍 {port['device']}")
        print(f"   Description: {port['description']}")
        print(f"   Hardware ID: {port['hwid']}")
        if port['is_bridge']:
            print("   ✅ Likely bridge")

def format_status(status: RigStatus, controller: RigController) -> str:
    """Human readable status block"""
    lines = []
    if status.clearance.is_risk:
        lines.append(f"⚠️  COLLISION RISK - adjust H5 / HF / H17 "
                     f"(Remaining: {status.clearance.display_clearance:.1f})")
    else:
        lines.append(f"✅ Clearance OK (Remaining: {status.clearance.display_clearance:.1f})")
    lines.append(f"H30 point: {status.h30:.1f}")
    lines.append("")

    for axis in controller.validator.axes:
        value = status.live.value_of(axis.id)
        limits = status.safe_ranges[axis.id]
        shown = "-" if value is None else f"{value:g}"
        note = ""
        if limits.fully_restricted:
            note = "  (no safe position)"
        elif limits.is_narrower_than(axis):
            note = "  (restricted)"
        lines.append(
            f"{axis.label:<20} = {shown:>7}   safe {limits.lower:g} .. {limits.upper:g}{note}"
        )
    return "\n".join(lines)

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=f'SimRig v{__version__} - Rig collision safety',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  simrig                                # Check the power-up configuration
  simrig --seat-z 845 --floor-z 300     # Check a configuration
  simrig --clamp z=900                  # Clamp a request into the safe range
  simrig --send z=700 --port COM5       # Send a gated move to the rig
  simrig --list-ports                   # Show available ports
        """
    )

    parser.add_argument('--version', action='version', version=f'SimRig v{__version__}')
    parser.add_argument('--seat-x', type=float, default=None, help='Seat X (L63) position')
    parser.add_argument('--seat-z', type=float, default=None, help='Seat Z (H5) position')
    parser.add_argument('--floor-z', type=float, default=None, help='Floor Z (HF) position')
    parser.add_argument('--steer-tilt', type=float, default=None, help='STG-Center (H17) position')
    parser.add_argument('--clamp', type=axis_assignment, action='append', default=[],
                        metavar='AXIS=VALUE', help='Clamp a requested value into its safe range')
    parser.add_argument('--send', type=axis_assignment, action='append', default=[],
                        metavar='AXIS=VALUE', help='Send a gated move to the rig')
    parser.add_argument('--config', default=None, help='Settings YAML (default: ~/.simrig/settings.yaml)')
    parser.add_argument('--port', '-p', default=None, help='Serial port (auto-detect if not specified)')
    parser.add_argument('--list-ports', '-l', action='store_true',
                        help='List available serial ports and exit')
    parser.add_argument('--json', action='store_true', help='Print machine readable output')
    parser.add_argument('--debug', '-d', action='store_true', help='Enable debug logging')
    parser.add_argument('--log-level', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        default=None, help='Set logging level (default: from settings)')
    return parser

def send_moves(controller: RigController, moves: List[Tuple[AxisSpec, float]],
               explicit: bool) -> Dict[str, bool]:
    """
    Send gated moves, judged against the positions the rig reports

    Reported positions override the command line. If the rig reports none
    of seat, floor or tilt, nothing is sent unless those positions were
    given explicitly.
    """
    reported = controller.poll()
    if not explicit and not any(item.axis.in_collision_model for item in reported):
        logger.error("🚫 Rig reported no seat/floor/tilt position, not sending")
        return {axis.id.name.lower(): False for axis, _ in moves}

    return {axis.id.name.lower(): controller.request_move(axis.id, value)
            for axis, value in moves}

def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    args = build_parser().parse_args(argv)

    settings = Settings.load(args.config)
    level = 'DEBUG' if args.debug or settings.debug_mode else (args.log_level or settings.log_level)
    setup_logging(level)

    if args.list_ports:
        list_ports_command()
        return 0

    try:
        calibration = settings.calibration_model()
    except ConfigurationError as e:
        logger.error(f"Invalid calibration: {e}")
        return 2

    live = DEFAULT_LIVE_CONFIGURATION
    explicit = False
    for axis_value, field_name in ((args.seat_x, "seat_x"), (args.seat_z, "seat_z"),
                                   (args.floor_z, "floor_z"), (args.steer_tilt, "steer_tilt")):
        if axis_value is not None:
            live = live.with_axis(resolve_axis(field_name).id, axis_value)
            explicit = explicit or field_name != "seat_x"

    controller = RigController(calibration=calibration, live=live,
                               command_delay=settings.command_delay)

    clamped = {}
    for axis, value in args.clamp:
        clamped[axis.id.name.lower()] = {
            "requested": value,
            "clamped": controller.validator.clamp(axis.id, value, live),
            "message": controller.validator.message(axis.id, value, live),
        }

    sent = {}
    if args.send:
        port = find_port(args.port or settings.port)
        controller.connection = SerialConnection(port, settings.baudrate, settings.timeout,
                                                 settings.settle_time)
        if not controller.connect():
            logger.error(f"Could not connect to {port}")
            return 1
        try:
            sent = send_moves(controller, args.send, explicit)
        finally:
            controller.disconnect()

    status = controller.status()

    if args.json:
        payload = status.to_dict()
        if clamped:
            payload["clamp"] = {
                name: {**result, "requested": finite_or_none(result["requested"]),
                       "clamped": finite_or_none(result["clamped"])}
                for name, result in clamped.items()
            }
        if sent:
            payload["sent"] = sent
        print(json.dumps(payload, indent=2, allow_nan=False))
    else:
        print(format_status(status, controller))
        for name, result in clamped.items():
            line = f"{name}: {result['requested']:g} -> {result['clamped']:g}"
            if result["message"]:
                line += f"  ({result['message']})"
            print(line)
        for name, ok in sent.items():
            print(f"{name}: {'sent' if ok else 'refused'}")

    if sent and not all(sent.values()):
        return 1
    return 0

if __name__ == "__main__":
    sys.exit(main())
