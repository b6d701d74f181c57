################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

from __future__ import annotations

from types import SimpleNamespace

import pytest

from oasis_eskf.fusion.fusion_types import FusionTime
from oasis_eskf.fusion.fusion_types import to_seconds
from oasis_eskf.fusion.fusion_types import to_us
from oasis_eskf.fusion.message_conversions import OpticalFlowFields
from oasis_eskf.fusion.message_conversions import fusion_time_from_stamp
from oasis_eskf.fusion.message_conversions import gps_from_msg
from oasis_eskf.fusion.message_conversions import imu_from_msg
from oasis_eskf.fusion.message_conversions import in_air_from_extended_state
from oasis_eskf.fusion.message_conversions import optical_flow_from_msg
from oasis_eskf.fusion.message_conversions import vision_from_msg


def _vector3(x: float, y: float, z: float) -> SimpleNamespace:
    return SimpleNamespace(x=x, y=y, z=z)


def _pose(
    position: SimpleNamespace, orientation: SimpleNamespace
) -> SimpleNamespace:
    return SimpleNamespace(
        pose=SimpleNamespace(position=position, orientation=orientation)
    )


def test_header_stamp_to_wall_time_and_microseconds() -> None:
    stamp: SimpleNamespace = SimpleNamespace(sec=1_700_000_000, nanosec=123_456_789)
    timestamp: FusionTime = fusion_time_from_stamp(stamp)

    assert timestamp == FusionTime(sec=1_700_000_000, nanosec=123_456_789)
    assert to_us(timestamp) == 1_700_000_000_123_456
    assert to_seconds(timestamp) == pytest.approx(1_700_000_000.123_456_789)


def test_microseconds_truncate_sub_microsecond_part() -> None:
    assert to_us(FusionTime(sec=0, nanosec=999)) == 0
    assert to_us(FusionTime(sec=2, nanosec=1_999)) == 2_000_001


def test_imu_fields() -> None:
    message: SimpleNamespace = SimpleNamespace(
        angular_velocity=_vector3(0.1, -0.2, 0.3),
        linear_acceleration=_vector3(0.0, 0.5, 9.8),
    )

    angular_rate, linear_accel = imu_from_msg(message)

    assert angular_rate == [0.1, -0.2, 0.3]
    assert linear_accel == [0.0, 0.5, 9.8]


def test_vision_orientation_is_wxyz() -> None:
    message: SimpleNamespace = SimpleNamespace(
        pose=_pose(
            _vector3(1.0, 2.0, 3.0),
            SimpleNamespace(w=0.5, x=0.5, y=-0.5, z=0.5),
        )
    )

    orientation, position = vision_from_msg(message)

    assert orientation == [0.5, 0.5, -0.5, 0.5]
    assert position == [1.0, 2.0, 3.0]


def test_gps_velocity_from_twist() -> None:
    message: SimpleNamespace = SimpleNamespace(
        pose=_pose(
            _vector3(10.0, 20.0, 30.0),
            SimpleNamespace(w=1.0, x=0.0, y=0.0, z=0.0),
        ),
        twist=SimpleNamespace(
            twist=SimpleNamespace(
                linear=_vector3(1.0, -1.0, 0.25), angular=_vector3(0.0, 0.0, 0.0)
            )
        ),
    )

    velocity, position = gps_from_msg(message)

    assert velocity == [1.0, -1.0, 0.25]
    assert position == [10.0, 20.0, 30.0]


def test_optical_flow_fields() -> None:
    message: SimpleNamespace = SimpleNamespace(
        integrated_x=0.01,
        integrated_y=-0.02,
        integrated_xgyro=0.003,
        integrated_ygyro=-0.004,
        integration_time_us=10_000,
        distance=2.5,
        quality=255,
    )

    flow: OpticalFlowFields = optical_flow_from_msg(message)

    assert flow.integrated_xy_rad == [0.01, -0.02]
    assert flow.integrated_gyro_xy_rad == [0.003, -0.004]
    assert flow.integration_time_us == 10_000
    assert flow.distance_m == 2.5
    assert flow.quality == 255


@pytest.mark.parametrize(
    "landed_state, in_air",
    [
        (0, False),  # UNDEFINED
        (1, False),  # ON_GROUND
        (2, True),  # IN_AIR
        (3, True),  # TAKEOFF
        (4, False),  # LANDING
    ],
)
def test_in_air_from_extended_state(landed_state: int, in_air: bool) -> None:
    message: SimpleNamespace = SimpleNamespace(landed_state=landed_state)

    assert in_air_from_extended_state(message) is in_air
