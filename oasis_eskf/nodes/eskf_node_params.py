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
Centralized ESKF node ROS parameter names and defaults
"""

from oasis_eskf.fusion.fusion_mask import DEFAULT_FUSION_MASK as _DEFAULT_MASK


# Bitmask of FusionMask flags selecting the fused measurements
PARAM_FUSION_MASK: str = "fusion_mask"

# Default fusion mask, external vision position, yaw and height
DEFAULT_FUSION_MASK: int = _DEFAULT_MASK

# Rate at which the fused pose is published, Hz
PARAM_PUBLISH_RATE: str = "publish_rate"

# Default rate at which the fused pose is published, Hz
DEFAULT_PUBLISH_RATE: float = 100.0

# Frame id stamped on the fused pose
PARAM_FRAME_ID: str = "frame_id"

# Default frame id stamped on the fused pose
DEFAULT_FRAME_ID: str = "pose"

# Estimator implementation as "package.module:Class"
PARAM_ESTIMATOR: str = "estimator"

# Default estimator implementation
DEFAULT_ESTIMATOR: str = (
    "oasis_eskf.estimation.reference_estimator:ReferenceEstimator"
)

# Withhold corrections until the first propagation step
PARAM_GATE_CORRECTIONS: str = "gate_corrections_until_initialized"

# Default correction gating, corrections are forwarded immediately
DEFAULT_GATE_CORRECTIONS: bool = False
