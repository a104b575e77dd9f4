from __future__ import annotations

import itertools
import json
import math

import pytest

from simrig.motion import limits
from simrig.motion import (AxisIdentity, Calibration, LiveConfiguration, SafeRange, evaluate,
                           get_axis, safe_range, scan_safe_range)

COUPLED = (AxisIdentity.SEAT_Z, AxisIdentity.FLOOR_Z, AxisIdentity.STEER_TILT)


def test_start_positions_leave_every_axis_unrestricted(start_live: LiveConfiguration) -> None:
    for axis_id in AxisIdentity:
        axis = get_axis(axis_id)
        assert safe_range(axis, start_live) == SafeRange(axis.min_value, axis.max_value)


def test_raised_seat_limits_seat_travel(seat_axis, raised_live: LiveConfiguration) -> None:
    assert safe_range(seat_axis, raised_live) == SafeRange(595.0, 745.0)


def test_raised_seat_pushes_floor_lower_bound_up(floor_axis, raised_live: LiveConfiguration) -> None:
    limits = safe_range(floor_axis, raised_live)

    assert limits == SafeRange(400.0, 550.0)
    assert limits.is_narrower_than(floor_axis)


def test_tilt_alone_cannot_recover_raised_seat(tilt_axis, raised_live: LiveConfiguration) -> None:
    limits = safe_range(tilt_axis, raised_live)

    assert limits.fully_restricted is True
    assert limits.lower == limits.upper == 745.0
    assert not limits.contains(745.0)
    # least risky, yet still at risk
    assert evaluate(845.0, 300.0, 745.0).is_risk is True


@pytest.mark.parametrize(
    "live",
    [
        LiveConfiguration(seat_z=845.0, floor_z=300.0, steer_tilt=650.0),
        LiveConfiguration(seat_z=595.0, floor_z=550.0, steer_tilt=745.0),
        LiveConfiguration(seat_z=1200.0, floor_z=0.0, steer_tilt=0.0),
    ],
)
def test_seat_x_is_never_restricted(seat_x_axis, live: LiveConfiguration) -> None:
    assert safe_range(seat_x_axis, live) == SafeRange(345.0, 520.0)
    assert scan_safe_range(seat_x_axis, live) == SafeRange(345.0, 520.0)


def test_axis_own_live_value_is_ignored(seat_axis, raised_live: LiveConfiguration) -> None:
    moved = raised_live.with_axis(AxisIdentity.SEAT_Z, 600.0)

    assert safe_range(seat_axis, moved) == safe_range(seat_axis, raised_live)


def test_fully_restricted_seat_holds_at_minimum(seat_axis) -> None:
    # floor and tilt far below baseline: even the lowest seat loses too much
    live = LiveConfiguration(seat_z=700.0, floor_z=100.0, steer_tilt=600.0)

    assert safe_range(seat_axis, live) == SafeRange(595.0, 595.0, fully_restricted=True)


def test_zero_tilt_factor_makes_tilt_all_or_nothing(tilt_axis, start_live, raised_live) -> None:
    calibration = Calibration(steer_tilt_factor=0.0)

    assert safe_range(tilt_axis, start_live, calibration) == SafeRange(650.0, 745.0)
    assert safe_range(tilt_axis, raised_live, calibration) == SafeRange(650.0, 650.0, fully_restricted=True)


def test_nan_position_gives_flagged_nan_range(seat_axis) -> None:
    limits = safe_range(seat_axis, LiveConfiguration(seat_z=700.0, floor_z=math.nan, steer_tilt=650.0))

    assert limits.fully_restricted is True
    assert math.isnan(limits.lower) and math.isnan(limits.upper)
    assert math.isnan(limits.clamp(700.0))


def test_bounds_are_safe_under_float_rounding() -> None:
    seats = [595.0 + 0.1 * i for i in range(0, 2500, 97)]
    floors = [300.0 + 0.1 * i for i in range(0, 2500, 131)]
    tilts = [650.0 + 0.1 * i for i in range(0, 950, 53)]

    for seat_z, floor_z, steer_tilt in itertools.product(seats, floors, tilts):
        live = LiveConfiguration(seat_z=seat_z, floor_z=floor_z, steer_tilt=steer_tilt)
        for axis_id in COUPLED:
            limits = safe_range(get_axis(axis_id), live)
            if limits.fully_restricted:
                continue
            for bound in (limits.lower, limits.upper):
                probe = live.with_axis(axis_id, bound)
                assert not evaluate(probe.seat_z, probe.floor_z, probe.steer_tilt).is_risk


@pytest.mark.parametrize("axis_id", COUPLED)
def test_closed_form_matches_scan_within_one_step(axis_id: AxisIdentity) -> None:
    axis = get_axis(axis_id)
    seats = [595.0, 650.5, 720.0, 780.0, 812.5, 845.0]
    floors = [300.0, 303.0, 312.5, 360.0, 425.0, 550.0]
    tilts = [650.0, 651.5, 672.5, 697.5, 745.0]

    for seat_z, floor_z, steer_tilt in itertools.product(seats, floors, tilts):
        live = LiveConfiguration(seat_z=seat_z, floor_z=floor_z, steer_tilt=steer_tilt)
        closed = safe_range(axis, live)
        scanned = scan_safe_range(axis, live)

        assert closed.fully_restricted == scanned.fully_restricted, live
        assert abs(closed.lower - scanned.lower) <= 1.0, live
        assert abs(closed.upper - scanned.upper) <= 1.0, live
        # the scan only sees grid points inside the real range
        if not closed.fully_restricted:
            assert closed.lower <= scanned.lower
            assert closed.upper >= scanned.upper


def test_scan_with_finer_step_closes_in_on_threshold(seat_axis) -> None:
    live = LiveConfiguration(seat_z=700.0, floor_z=300.0, steer_tilt=650.3)

    closed = safe_range(seat_axis, live)
    scanned = scan_safe_range(seat_axis, live, step=0.25)

    assert closed.upper == pytest.approx(745.3)
    assert closed.upper - 0.25 < scanned.upper <= closed.upper


def test_scan_rejects_non_positive_step(seat_axis, start_live) -> None:
    with pytest.raises(ValueError):
        scan_safe_range(seat_axis, start_live, step=0.0)


def test_safe_range_clamp_and_contains() -> None:
    limits = SafeRange(400.0, 550.0)

    assert limits.clamp(320.0) == 400.0
    assert limits.clamp(480.0) == 480.0
    assert limits.clamp(600.0) == 550.0
    assert limits.contains(400.0)
    assert not limits.contains(399.9)


def test_safe_range_serializes_to_json() -> None:
    payload = json.loads(SafeRange(595.0, 745.0).to_json())

    assert payload == {"lower": 595.0, "upper": 745.0, "fully_restricted": False}


def test_unsettled_bound_falls_back_to_restricted(monkeypatch, seat_axis, floor_axis, raised_live) -> None:
    # model never accepts the computed bound
    monkeypatch.setattr(limits, "_is_risk_at", lambda *args: True)

    assert safe_range(seat_axis, raised_live) == SafeRange(595.0, 595.0, fully_restricted=True)
    assert safe_range(floor_axis, raised_live) == SafeRange(550.0, 550.0, fully_restricted=True)
