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
Types and helpers for multi-stream ESKF fusion
"""

import enum
from dataclasses import dataclass

import numpy as np


# Nanoseconds per second for converting header stamps
_NS_PER_S: int = 1_000_000_000

# Nanoseconds per microsecond for converting header stamps
_NS_PER_US: int = 1_000

# Microseconds per second for converting header stamps
_US_PER_S: int = 1_000_000

# Number of entries in a row-major 6x6 pose covariance
POSE_COVARIANCE_SIZE: int = 36


@dataclass(frozen=True)
class FusionTime:
    """
    Header timestamp stored as seconds and nanoseconds

    Fields:
        sec: Whole seconds since the clock epoch
        nanosec: Sub-second remainder in nanoseconds [0, 1e9)
    """

    sec: int
    nanosec: int


def to_seconds(t: FusionTime) -> float:
    return float(t.sec) + float(t.nanosec) / _NS_PER_S


def to_us(t: FusionTime) -> int:
    return t.sec * _US_PER_S + t.nanosec // _NS_PER_US


class ChannelId(enum.Enum):
    """
    Enumerates the sensor channels handled by the fusion orchestrator

    Attributes:
        IMU: Inertial samples driving propagation
        VISION: Visual pose corrections
        GPS: GPS position and velocity corrections
        OPTICAL_FLOW: Integrated optical flow corrections
        LANDED_STATE: Discrete landed/airborne signal
    """

    IMU = "imu"
    VISION = "vision"
    GPS = "gps"
    OPTICAL_FLOW = "optical_flow"
    LANDED_STATE = "landed_state"


@dataclass(frozen=True)
class ImuSample:
    """
    Inertial sample forwarded to the propagation step

    Fields:
        angular_rate_rps: Angular rate in rad/s, XYZ order
        linear_accel_mps2: Linear acceleration in m/s^2, XYZ order
        timestamp_us: Measurement time in microseconds
        delta_s: Seconds since the previous IMU sample
    """

    angular_rate_rps: np.ndarray
    linear_accel_mps2: np.ndarray
    timestamp_us: int
    delta_s: float


@dataclass(frozen=True)
class VisionSample:
    """
    Visual pose correction

    Fields:
        orientation_wxyz: Unit quaternion in wxyz order
        position_m: Position in meters, XYZ order
        timestamp_us: Measurement time in microseconds
        delta_s: Seconds since the previous vision sample
    """

    orientation_wxyz: np.ndarray
    position_m: np.ndarray
    timestamp_us: int
    delta_s: float


@dataclass(frozen=True)
class GpsSample:
    """
    GPS odometry correction

    Fields:
        velocity_mps: Velocity in m/s, XYZ order
        position_m: Position in meters, XYZ order
        timestamp_us: Measurement time in microseconds
        delta_s: Seconds since the previous GPS sample
    """

    velocity_mps: np.ndarray
    position_m: np.ndarray
    timestamp_us: int
    delta_s: float


@dataclass(frozen=True)
class OpticalFlowSample:
    """
    Integrated optical flow correction

    Fields:
        integrated_xy_rad: Integrated flow about X and Y in radians
        integrated_gyro_xy_rad: Integrated gyro rotation about X and Y in radians
        integration_time_us: Integration window in microseconds
        distance_m: Distance to the ground in meters
        quality: Flow quality, 0 (bad) to 255 (best)
        timestamp_us: Measurement time in microseconds
        delta_s: Seconds since the previous optical flow sample
    """

    integrated_xy_rad: np.ndarray
    integrated_gyro_xy_rad: np.ndarray
    integration_time_us: int
    distance_m: float
    quality: int
    timestamp_us: int
    delta_s: float


@dataclass(frozen=True)
class LandedStateSample:
    """
    Landed/airborne signal

    Fields:
        in_air: True when the vehicle is airborne
    """

    in_air: bool


@dataclass(frozen=True)
class FusedPose:
    """
    Estimator belief sampled by the publish timer

    Fields:
        orientation_wxyz: Unit quaternion in wxyz order
        position_m: Position in meters, XYZ order
        covariance: Row-major 6x6 pose covariance, always zero
        seq: Publish sequence number, starting at 0
        stamp: Wall-clock publish time
        frame_id: Frame of the published pose
    """

    orientation_wxyz: np.ndarray
    position_m: np.ndarray
    covariance: list[float]
    seq: int
    stamp: FusionTime
    frame_id: str
