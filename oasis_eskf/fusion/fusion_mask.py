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
Fusion mask flags and the channel activation policy derived from them
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from oasis_eskf.fusion.fusion_types import ChannelId


class FusionMask(enum.IntFlag):
    """
    Bit flags selecting which measurements the estimator fuses

    Attributes:
        EV_POS: External vision position
        EV_YAW: External vision yaw (orientation)
        EV_HGT: External vision height
        GPS_POS: GPS horizontal position
        GPS_VEL: GPS velocity
        GPS_HGT: GPS height
        MAG_INHIBIT: Inhibit magnetometer fusion
        OPTICAL_FLOW: Optical flow
        RANGEFINDER: Range finder height
        MAG_HEADING: Magnetometer heading
    """

    NONE = 0
    EV_POS = 1 << 0
    EV_YAW = 1 << 1
    EV_HGT = 1 << 2
    GPS_POS = 1 << 3
    GPS_VEL = 1 << 4
    GPS_HGT = 1 << 5
    MAG_INHIBIT = 1 << 6
    OPTICAL_FLOW = 1 << 7
    RANGEFINDER = 1 << 8
    MAG_HEADING = 1 << 9

    EV = EV_POS | EV_YAW | EV_HGT
    GPS = GPS_POS | GPS_VEL | GPS_HGT


# Mask used when no fusion_mask parameter is given
DEFAULT_FUSION_MASK: int = int(FusionMask.EV)


def active_channels(mask: int) -> frozenset[ChannelId]:
    """
    Return the correction channels requested by a fusion mask

    Any vision flag enables the vision channel and any GPS flag enables the
    GPS channel. Flags without a dedicated channel are ignored.
    """

    channels: set[ChannelId] = set()

    if mask & FusionMask.EV:
        channels.add(ChannelId.VISION)
    if mask & FusionMask.GPS:
        channels.add(ChannelId.GPS)
    if mask & FusionMask.OPTICAL_FLOW:
        channels.add(ChannelId.OPTICAL_FLOW)

    return frozenset(channels)


@dataclass(frozen=True)
class FusionConfig:
    """
    Channel activation policy evaluated once at startup

    Fields:
        mask: Raw fusion mask passed to the estimator
        channels_enabled: Correction channels requested by the mask
    """

    mask: int
    channels_enabled: frozenset[ChannelId]

    @classmethod
    def from_mask(cls, mask: int) -> FusionConfig:
        if mask < 0:
            raise ValueError(f"Fusion mask must be non-negative, got {mask}")

        return cls(mask=int(mask), channels_enabled=active_channels(mask))

    def is_enabled(self, channel: ChannelId) -> bool:
        return channel in self.channels_enabled

    def has_flag(self, flag: FusionMask) -> bool:
        return bool(self.mask & flag)
