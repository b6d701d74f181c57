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
Time bookkeeping and measurement dispatch for the ESKF
"""

from __future__ import annotations

from typing import Optional
from typing import Sequence

import numpy as np

from oasis_eskf.estimation.estimator import Estimator
from oasis_eskf.fusion.fusion_mask import FusionConfig
from oasis_eskf.fusion.fusion_types import POSE_COVARIANCE_SIZE
from oasis_eskf.fusion.fusion_types import FusedPose
from oasis_eskf.fusion.fusion_types import FusionTime
from oasis_eskf.fusion.fusion_types import GpsSample
from oasis_eskf.fusion.fusion_types import ImuSample
from oasis_eskf.fusion.fusion_types import LandedStateSample
from oasis_eskf.fusion.fusion_types import OpticalFlowSample
from oasis_eskf.fusion.fusion_types import VisionSample
from oasis_eskf.fusion.timed_stream import TimedStream


class FusionOrchestrator:
    """
    Drives an estimator from independently clocked sensor channels

    Each timed channel keeps its own baseline: the first message on a
    channel only records its time, later messages are forwarded together
    with the delta to the previous message. The filter counts as
    initialized from the second IMU message on, and stays initialized.

    Handlers return the forwarded delta in seconds, or None when nothing
    was forwarded. Vectors of the wrong size raise ValueError before any
    channel state changes.
    """

    def __init__(
        self,
        estimator: Estimator,
        fusion: FusionConfig,
        *,
        frame_id: str,
        gate_corrections_until_initialized: bool = False,
    ) -> None:
        self._estimator: Estimator = estimator
        self._fusion: FusionConfig = fusion
        self._frame_id: str = frame_id
        self._gate_corrections: bool = gate_corrections_until_initialized

        self._imu_stream: TimedStream = TimedStream()
        self._vision_stream: TimedStream = TimedStream()
        self._gps_stream: TimedStream = TimedStream()
        self._optical_flow_stream: TimedStream = TimedStream()

        self._initialized: bool = False
        self._seq: int = 0

        self._estimator.configure_fusion(fusion.mask)

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def fusion(self) -> FusionConfig:
        return self._fusion

    def on_imu(
        self,
        angular_rate_rps: Sequence[float],
        linear_accel_mps2: Sequence[float],
        timestamp_us: int,
        wall_timestamp: float,
    ) -> Optional[float]:
        angular_rate: np.ndarray = _vector(angular_rate_rps, 3)
        linear_accel: np.ndarray = _vector(linear_accel_mps2, 3)

        delta: Optional[float] = self._imu_stream.observe(wall_timestamp)
        if delta is None:
            return None

        self._initialized = True

        sample: ImuSample = ImuSample(
            angular_rate_rps=angular_rate,
            linear_accel_mps2=linear_accel,
            timestamp_us=int(timestamp_us),
            delta_s=delta,
        )
        self._estimator.propagate(sample)

        return delta

    def on_vision(
        self,
        orientation_wxyz: Sequence[float],
        position_m: Sequence[float],
        timestamp_us: int,
        wall_timestamp: float,
    ) -> Optional[float]:
        orientation: np.ndarray = _vector(orientation_wxyz, 4)
        position: np.ndarray = _vector(position_m, 3)

        delta: Optional[float] = self._vision_stream.observe(wall_timestamp)
        if delta is None or self._withhold_correction():
            return None

        sample: VisionSample = VisionSample(
            orientation_wxyz=orientation,
            position_m=position,
            timestamp_us=int(timestamp_us),
            delta_s=delta,
        )
        self._estimator.correct_vision(sample)

        return delta

    def on_gps(
        self,
        velocity_mps: Sequence[float],
        position_m: Sequence[float],
        timestamp_us: int,
        wall_timestamp: float,
    ) -> Optional[float]:
        velocity: np.ndarray = _vector(velocity_mps, 3)
        position: np.ndarray = _vector(position_m, 3)

        delta: Optional[float] = self._gps_stream.observe(wall_timestamp)
        if delta is None or self._withhold_correction():
            return None

        sample: GpsSample = GpsSample(
            velocity_mps=velocity,
            position_m=position,
            timestamp_us=int(timestamp_us),
            delta_s=delta,
        )
        self._estimator.correct_gps(sample)

        return delta

    def on_optical_flow(
        self,
        integrated_xy_rad: Sequence[float],
        integrated_gyro_xy_rad: Sequence[float],
        integration_time_us: int,
        distance_m: float,
        quality: int,
        timestamp_us: int,
        wall_timestamp: float,
    ) -> Optional[float]:
        flow: np.ndarray = _vector(integrated_xy_rad, 2)
        gyro: np.ndarray = _vector(integrated_gyro_xy_rad, 2)

        delta: Optional[float] = self._optical_flow_stream.observe(wall_timestamp)
        if delta is None or self._withhold_correction():
            return None

        sample: OpticalFlowSample = OpticalFlowSample(
            integrated_xy_rad=flow,
            integrated_gyro_xy_rad=gyro,
            integration_time_us=int(integration_time_us),
            distance_m=float(distance_m),
            quality=int(quality),
            timestamp_us=int(timestamp_us),
            delta_s=delta,
        )
        self._estimator.correct_optical_flow(sample)

        return delta

    def on_landed_state(self, in_air: bool) -> None:
        self._estimator.set_landed_state(LandedStateSample(in_air=bool(in_air)))

    def publish_tick(self, stamp: FusionTime) -> FusedPose:
        """
        Sample the estimator belief as a fused pose

        Runs regardless of initialization, in which case the pose is the
        estimator's prior.
        """

        orientation: np.ndarray = _vector(self._estimator.current_orientation(), 4)
        position: np.ndarray = _vector(self._estimator.current_position(), 3)

        pose: FusedPose = FusedPose(
            orientation_wxyz=orientation,
            position_m=position,
            covariance=[0.0] * POSE_COVARIANCE_SIZE,
            seq=self._seq,
            stamp=stamp,
            frame_id=self._frame_id,
        )
        self._seq += 1

        return pose

    def _withhold_correction(self) -> bool:
        return self._gate_corrections and not self._initialized


def _vector(values: Sequence[float], size: int) -> np.ndarray:
    vector: np.ndarray = np.array(values, dtype=np.float64).reshape(-1)
    if vector.shape != (size,):
        raise ValueError(f"Expected {size} components, got {vector.shape[0]}")
    return vector
