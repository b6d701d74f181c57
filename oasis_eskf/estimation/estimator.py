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
Estimator interface driven by the fusion orchestrator
"""

from __future__ import annotations

import numpy as np

from oasis_eskf.fusion.fusion_types import GpsSample
from oasis_eskf.fusion.fusion_types import ImuSample
from oasis_eskf.fusion.fusion_types import LandedStateSample
from oasis_eskf.fusion.fusion_types import OpticalFlowSample
from oasis_eskf.fusion.fusion_types import VisionSample


class Estimator:
    """
    Recursive state estimator consuming propagation and correction inputs

    Calls arrive serially from a single thread, with propagation and
    corrections interleaved in arrival order.
    """

    def configure_fusion(self, mask: int) -> None:
        """
        Select the fused measurements from a FusionMask bitmask
        """

        raise NotImplementedError

    def propagate(self, sample: ImuSample) -> None:
        """
        Run the time update with an inertial sample
        """

        raise NotImplementedError

    def correct_vision(self, sample: VisionSample) -> None:
        raise NotImplementedError

    def correct_gps(self, sample: GpsSample) -> None:
        raise NotImplementedError

    def correct_optical_flow(self, sample: OpticalFlowSample) -> None:
        raise NotImplementedError

    def set_landed_state(self, sample: LandedStateSample) -> None:
        raise NotImplementedError

    def current_orientation(self) -> np.ndarray:
        """
        Return the orientation as a unit quaternion in wxyz order
        """

        raise NotImplementedError

    def current_position(self) -> np.ndarray:
        """
        Return the position in meters, XYZ order
        """

        raise NotImplementedError
