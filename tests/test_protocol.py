from __future__ import annotations

import json

from simrig.hardware import AxisValue, CommandBuilder, parse_notification
from simrig.motion import AxisIdentity


def test_parse_full_notification() -> None:
    values = parse_notification("x:432,z:720,f:425,s:697")

    assert values == [
        AxisValue(AxisIdentity.SEAT_X, 432),
        AxisValue(AxisIdentity.SEAT_Z, 720),
        AxisValue(AxisIdentity.FLOOR_Z, 425),
        AxisValue(AxisIdentity.STEER_TILT, 697),
    ]


def test_parse_skips_bad_pairs_and_truncates() -> None:
    values = parse_notification(" z : 720.9 , f:abc, q:5, s, ,x:-3.7\n")

    assert values == [
        AxisValue(AxisIdentity.SEAT_Z, 720),
        AxisValue(AxisIdentity.SEAT_X, -3),
    ]


def test_parse_skips_non_finite_values() -> None:
    assert parse_notification("z:nan,f:inf,s:-inf") == []


def test_parse_empty_message() -> None:
    assert parse_notification("") == []


def test_axis_value_serializes_axis_tag() -> None:
    payload = json.loads(AxisValue(AxisIdentity.SEAT_Z, 720).to_json())

    assert payload == {"axis": "seat_z_axis", "value": 720}


def test_axis_command_truncates_value() -> None:
    builder = CommandBuilder()

    assert builder.axis_command(AxisIdentity.SEAT_Z, 720.9) == "z:720"
    assert builder.axis_command(AxisIdentity.STEER_TILT, 697.5) == "s:697"


def test_sequence_follows_table_order() -> None:
    commands = CommandBuilder().sequence({
        AxisIdentity.FLOOR_Z: 425.0,
        AxisIdentity.SEAT_X: 432.5,
    })

    assert commands == ["x:432", "f:425"]


def test_encode_appends_line_terminator() -> None:
    assert CommandBuilder.encode("z:720") == b"z:720\n"
