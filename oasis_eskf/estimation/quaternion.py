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
Quaternion helpers for the reference estimator

Conventions:
    * Quaternions are numpy arrays in wxyz order
    * Orientation maps body vectors into the world frame
    * Body-rate integration uses q_new = q ⊗ Exp(omega * dt)
"""

from __future__ import annotations

import math

import numpy as np


# Rotation magnitude threshold in rad for the small-angle series
_SMALL_ANGLE_RAD: float = 1.0e-12


def quat_identity_wxyz() -> np.ndarray:
    return np.array([1.0, 0.0, 0.0, 0.0], dtype=np.float64)


def quat_mul_wxyz(q_left: np.ndarray, q_right: np.ndarray) -> np.ndarray:
    w1, x1, y1, z1 = (float(value) for value in q_left)
    w2, x2, y2, z2 = (float(value) for value in q_right)

    return np.array(
        [
            w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2,
            w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2,
            w1 * y2 - x1 * z2 + y1 * w2 + z1 * x2,
            w1 * z2 + x1 * y2 - y1 * x2 + z1 * w2,
        ],
        dtype=np.float64,
    )


def quat_normalize_wxyz(q_wxyz: np.ndarray) -> np.ndarray:
    norm: float = float(np.linalg.norm(q_wxyz))
    if norm <= 0.0 or not math.isfinite(norm):
        raise ValueError("Quaternion norm must be positive and finite")
    return np.asarray(q_wxyz, dtype=np.float64) / norm


def quat_from_rotvec_wxyz(rotvec: np.ndarray) -> np.ndarray:
    """
    Build a quaternion from a rotation vector using Exp(delta_theta)
    """

    angle: float = float(np.linalg.norm(rotvec))

    if angle < _SMALL_ANGLE_RAD:
        return quat_normalize_wxyz(
            np.array(
                [1.0, 0.5 * rotvec[0], 0.5 * rotvec[1], 0.5 * rotvec[2]],
                dtype=np.float64,
            )
        )

    # Half-angle term used in the quaternion exponential
    half_angle: float = 0.5 * angle
    axis: np.ndarray = np.asarray(rotvec, dtype=np.float64) / angle

    return np.concatenate(([math.cos(half_angle)], axis * math.sin(half_angle)))


def quat_to_rotation_matrix_wxyz(q_wxyz: np.ndarray) -> np.ndarray:
    """
    Rotation matrix taking body vectors into the world frame
    """

    w, x, y, z = (float(value) for value in q_wxyz)

    return np.array(
        [
            [1.0 - 2.0 * (y * y + z * z), 2.0 * (x * y - w * z), 2.0 * (x * z + w * y)],
            [2.0 * (x * y + w * z), 1.0 - 2.0 * (x * x + z * z), 2.0 * (y * z - w * x)],
            [2.0 * (x * z - w * y), 2.0 * (y * z + w * x), 1.0 - 2.0 * (x * x + y * y)],
        ],
        dtype=np.float64,
    )
