################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""
Field mappings from decoded sensor messages to fusion measurements

Messages are read by attribute, so any object with the ROS message layout
is accepted.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from oasis_eskf.fusion.fusion_types import FusionTime


if TYPE_CHECKING:
    from builtin_interfaces.msg import Time as TimeMsg
    from geometry_msgs.msg import PoseWithCovarianceStamped as PoseMsg
    from mavros_msgs.msg import ExtendedState as ExtendedStateMsg
    from mavros_msgs.msg import OpticalFlowRad as OpticalFlowRadMsg
    from nav_msgs.msg import Odometry as OdometryMsg
    from sensor_msgs.msg import Imu as ImuMsg
else:
    TimeMsg = object
    PoseMsg = object
    ExtendedStateMsg = object
    OpticalFlowRadMsg = object
    OdometryMsg = object
    ImuMsg = object


# Value of mavros_msgs/ExtendedState.LANDED_STATE_IN_AIR
LANDED_STATE_IN_AIR: int = 2


@dataclass(frozen=True)
class OpticalFlowFields:
    """
    Optical flow payload read from an OpticalFlowRad message

    Fields:
        integrated_xy_rad: Integrated flow about X and Y in radians
        integrated_gyro_xy_rad: Integrated gyro rotation about X and Y in radians
        integration_time_us: Integration window in microseconds
        distance_m: Distance to the ground in meters
        quality: Flow quality, 0 (bad) to 255 (best)
    """

    integrated_xy_rad: list[float]
    integrated_gyro_xy_rad: list[float]
    integration_time_us: int
    distance_m: float
    quality: int


def fusion_time_from_stamp(stamp: TimeMsg) -> FusionTime:
    return FusionTime(sec=int(stamp.sec), nanosec=int(stamp.nanosec))


def imu_from_msg(message: ImuMsg) -> tuple[list[float], list[float]]:
    """
    Return (angular rate, linear acceleration) of an Imu message
    """

    return (
        [
            float(message.angular_velocity.x),
            float(message.angular_velocity.y),
            float(message.angular_velocity.z),
        ],
        [
            float(message.linear_acceleration.x),
            float(message.linear_acceleration.y),
            float(message.linear_acceleration.z),
        ],
    )


def vision_from_msg(message: PoseMsg) -> tuple[list[float], list[float]]:
    """
    Return (orientation wxyz, position) of a PoseWithCovarianceStamped message
    """

    orientation = message.pose.pose.orientation
    position = message.pose.pose.position

    return (
        [
            float(orientation.w),
            float(orientation.x),
            float(orientation.y),
            float(orientation.z),
        ],
        [float(position.x), float(position.y), float(position.z)],
    )


def gps_from_msg(message: OdometryMsg) -> tuple[list[float], list[float]]:
    """
    Return (velocity, position) of an Odometry message
    """

    velocity = message.twist.twist.linear
    position = message.pose.pose.position

    return (
        [float(velocity.x), float(velocity.y), float(velocity.z)],
        [float(position.x), float(position.y), float(position.z)],
    )


def optical_flow_from_msg(message: OpticalFlowRadMsg) -> OpticalFlowFields:
    return OpticalFlowFields(
        integrated_xy_rad=[float(message.integrated_x), float(message.integrated_y)],
        integrated_gyro_xy_rad=[
            float(message.integrated_xgyro),
            float(message.integrated_ygyro),
        ],
        integration_time_us=int(message.integration_time_us),
        distance_m=float(message.distance),
        quality=int(message.quality),
    )


def in_air_from_extended_state(message: ExtendedStateMsg) -> bool:
    # Bit test, so TAKEOFF (3) also counts as airborne while LANDING (4) does not
    return bool(int(message.landed_state) & LANDED_STATE_IN_AIR)
