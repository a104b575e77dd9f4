#!/usr/bin/env python3
"""
Basic usage example for SimRig
Shows how to use the safety functions programmatically
"""

from simrig.motion import (AxisIdentity, LiveConfiguration, get_axis, evaluate,
                           safe_range, clamp_to_safe_range, is_movement_allowed_under_risk)

def main():
    # 1. Seat fully raised, floor and tilt at baseline
    live = LiveConfiguration(seat_z=845, floor_z=300, steer_tilt=650)
    result = evaluate(live.seat_z, live.floor_z, live.steer_tilt)
    print("1. Seat fully raised:")
    print(f"   risk={result.is_risk} remaining={result.remaining_clearance:.1f} "
          f"(display {result.display_clearance:.1f})")

    # 2. Where can each axis go from here?
    print("\n2. Safe ranges:")
    for axis_id in AxisIdentity:
        limits = safe_range(get_axis(axis_id), live)
        flag = " (fully restricted)" if limits.fully_restricted else ""
        print(f"   {axis_id.name:<10} {limits.lower:g} .. {limits.upper:g}{flag}")

    # 3. Clamp a request for the floor plate
    floor = get_axis(AxisIdentity.FLOOR_Z)
    print("\n3. Floor request 320 clamps to "
          f"{clamp_to_safe_range(320, floor, live):g}")

    # 4. While at risk, only risk-reducing moves pass
    print("\n4. Movement gate while at risk:")
    print(f"   seat 845 -> 800: {is_movement_allowed_under_risk(AxisIdentity.SEAT_Z, 800, 845, True)}")
    print(f"   seat 845 -> 845: {is_movement_allowed_under_risk(AxisIdentity.SEAT_Z, 845, 845, True)}")
    print(f"   floor 300 -> 350: {is_movement_allowed_under_risk(AxisIdentity.FLOOR_Z, 350, 300, True)}")

if __name__ == "__main__":
    main()
