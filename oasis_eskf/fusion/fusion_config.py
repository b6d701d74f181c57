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
Configuration data for the ESKF fusion node
"""

import math
from dataclasses import dataclass
from dataclasses import field

from oasis_eskf.fusion.fusion_mask import FusionConfig


@dataclass(frozen=True)
class FusionNodeConfig:
    """
    Startup configuration of the fusion node

    Fields:
        fusion_mask: Bitmask of FusionMask flags
        publish_rate_hz: Fused pose publish rate in Hz
        frame_id: Frame id stamped on the fused pose
        estimator: Estimator class as "package.module:Class"
        gate_corrections_until_initialized: Withhold corrections until the
            first propagation step
        publish_period_sec: Timer period in seconds, derived from the rate
        fusion: Channel activation policy, derived from the mask
    """

    fusion_mask: int
    publish_rate_hz: float
    frame_id: str
    estimator: str
    gate_corrections_until_initialized: bool = False

    publish_period_sec: float = field(init=False)
    fusion: FusionConfig = field(init=False)

    def __post_init__(self) -> None:
        if not math.isfinite(self.publish_rate_hz) or self.publish_rate_hz <= 0.0:
            raise ValueError(
                f"Publish rate must be a positive number, got {self.publish_rate_hz}"
            )
        if not self.frame_id:
            raise ValueError("Fused pose frame id must not be empty")

        object.__setattr__(self, "publish_period_sec", 1.0 / self.publish_rate_hz)
        object.__setattr__(self, "fusion", FusionConfig.from_mask(self.fusion_mask))
