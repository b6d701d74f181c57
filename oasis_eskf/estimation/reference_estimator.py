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
Loosely coupled reference estimator

Integrates the gyro for orientation and dead-reckons velocity and position
while airborne. Corrections overwrite the components their mask flags
select. There is no covariance and no innovation gating, so this is a
stand-in for bench testing the node rather than an error-state filter.
"""

from __future__ import annotations

import numpy as np

from oasis_eskf.estimation.estimator import Estimator
from oasis_eskf.estimation.quaternion import quat_from_rotvec_wxyz
from oasis_eskf.estimation.quaternion import quat_identity_wxyz
from oasis_eskf.estimation.quaternion import quat_mul_wxyz
from oasis_eskf.estimation.quaternion import quat_normalize_wxyz
from oasis_eskf.estimation.quaternion import quat_to_rotation_matrix_wxyz
from oasis_eskf.fusion.fusion_mask import FusionMask
from oasis_eskf.fusion.fusion_types import GpsSample
from oasis_eskf.fusion.fusion_types import ImuSample
from oasis_eskf.fusion.fusion_types import LandedStateSample
from oasis_eskf.fusion.fusion_types import OpticalFlowSample
from oasis_eskf.fusion.fusion_types import VisionSample


# Units: m/s^2. Meaning: standard gravity along world -Z
GRAVITY_MPS2: float = 9.80665

# Microseconds per second for optical flow integration windows
_US_PER_S: float = 1.0e6


class ReferenceEstimator(Estimator):
    def __init__(self) -> None:
        self._mask: FusionMask = FusionMask.NONE
        self._in_air: bool = False

        self._orientation_wxyz: np.ndarray = quat_identity_wxyz()
        self._position_m: np.ndarray = np.zeros(3, dtype=np.float64)
        self._velocity_mps: np.ndarray = np.zeros(3, dtype=np.float64)

    @property
    def in_air(self) -> bool:
        return self._in_air

    @property
    def velocity(self) -> np.ndarray:
        return self._velocity_mps.copy()

    def configure_fusion(self, mask: int) -> None:
        self._mask = FusionMask(mask)

    def propagate(self, sample: ImuSample) -> None:
        dt: float = sample.delta_s
        if dt <= 0.0:
            return

        delta_q: np.ndarray = quat_from_rotvec_wxyz(sample.angular_rate_rps * dt)
        self._orientation_wxyz = quat_normalize_wxyz(
            quat_mul_wxyz(self._orientation_wxyz, delta_q)
        )

        if not self._in_air:
            self._velocity_mps[:] = 0.0
            return

        rotation: np.ndarray = quat_to_rotation_matrix_wxyz(self._orientation_wxyz)

        # Units: m/s^2. Meaning: specific force rotated to world, gravity removed
        accel_world: np.ndarray = rotation @ sample.linear_accel_mps2
        accel_world[2] -= GRAVITY_MPS2

        self._position_m += self._velocity_mps * dt + 0.5 * accel_world * dt * dt
        self._velocity_mps += accel_world * dt

    def correct_vision(self, sample: VisionSample) -> None:
        if self._mask & FusionMask.EV_YAW:
            self._orientation_wxyz = quat_normalize_wxyz(sample.orientation_wxyz)
        if self._mask & FusionMask.EV_POS:
            self._position_m[:2] = sample.position_m[:2]
        if self._mask & FusionMask.EV_HGT:
            self._position_m[2] = sample.position_m[2]

    def correct_gps(self, sample: GpsSample) -> None:
        if self._mask & FusionMask.GPS_POS:
            self._position_m[:2] = sample.position_m[:2]
        if self._mask & FusionMask.GPS_HGT:
            self._position_m[2] = sample.position_m[2]
        if self._mask & FusionMask.GPS_VEL:
            self._velocity_mps[:] = sample.velocity_mps

    def correct_optical_flow(self, sample: OpticalFlowSample) -> None:
        """
        Set horizontal velocity from gyro-compensated flow and ground distance

        Rotation about sensor X is induced by motion along -Y, and rotation
        about sensor Y by motion along +X.
        """

        if not self._mask & FusionMask.OPTICAL_FLOW:
            return
        if sample.quality == 0 or sample.integration_time_us == 0:
            return
        if sample.distance_m <= 0.0:
            return

        integration_time_s: float = sample.integration_time_us / _US_PER_S

        # Units: rad/s. Meaning: flow rate with the body rotation removed
        flow_rate: np.ndarray = (
            sample.integrated_xy_rad - sample.integrated_gyro_xy_rad
        ) / integration_time_s

        velocity_body: np.ndarray = np.array(
            [
                flow_rate[1] * sample.distance_m,
                -flow_rate[0] * sample.distance_m,
                0.0,
            ],
            dtype=np.float64,
        )
        rotation: np.ndarray = quat_to_rotation_matrix_wxyz(self._orientation_wxyz)
        self._velocity_mps[:2] = (rotation @ velocity_body)[:2]

    def set_landed_state(self, sample: LandedStateSample) -> None:
        self._in_air = sample.in_air
        if not sample.in_air:
            self._velocity_mps[:] = 0.0

    def current_orientation(self) -> np.ndarray:
        return self._orientation_wxyz.copy()

    def current_position(self) -> np.ndarray:
        return self._position_m.copy()
