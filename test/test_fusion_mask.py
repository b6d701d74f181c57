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

import pytest

from oasis_eskf.fusion.fusion_mask import DEFAULT_FUSION_MASK
from oasis_eskf.fusion.fusion_mask import FusionConfig
from oasis_eskf.fusion.fusion_mask import FusionMask
from oasis_eskf.fusion.fusion_mask import active_channels
from oasis_eskf.fusion.fusion_types import ChannelId


def test_empty_mask_enables_nothing() -> None:
    assert active_channels(0) == frozenset()


@pytest.mark.parametrize(
    "flag", [FusionMask.EV_POS, FusionMask.EV_YAW, FusionMask.EV_HGT]
)
def test_any_vision_flag_enables_vision(flag: FusionMask) -> None:
    assert active_channels(int(flag)) == frozenset({ChannelId.VISION})


@pytest.mark.parametrize(
    "flag", [FusionMask.GPS_POS, FusionMask.GPS_VEL, FusionMask.GPS_HGT]
)
def test_any_gps_flag_enables_gps(flag: FusionMask) -> None:
    assert active_channels(int(flag)) == frozenset({ChannelId.GPS})


def test_optical_flow_flag() -> None:
    assert active_channels(int(FusionMask.OPTICAL_FLOW)) == frozenset(
        {ChannelId.OPTICAL_FLOW}
    )


def test_gps_velocity_with_optical_flow() -> None:
    mask: int = int(FusionMask.GPS_VEL | FusionMask.OPTICAL_FLOW)

    assert active_channels(mask) == frozenset(
        {ChannelId.GPS, ChannelId.OPTICAL_FLOW}
    )


def test_flags_without_channel_are_ignored() -> None:
    mask: int = int(
        FusionMask.MAG_INHIBIT | FusionMask.RANGEFINDER | FusionMask.MAG_HEADING
    )

    assert active_channels(mask) == frozenset()


def test_active_channels_is_pure() -> None:
    mask: int = int(FusionMask.EV_HGT | FusionMask.GPS_POS)

    assert active_channels(mask) == active_channels(mask)


def test_flag_bit_positions() -> None:
    assert int(FusionMask.EV_POS) == 1
    assert int(FusionMask.EV_YAW) == 2
    assert int(FusionMask.EV_HGT) == 4
    assert int(FusionMask.GPS_POS) == 8
    assert int(FusionMask.GPS_VEL) == 16
    assert int(FusionMask.GPS_HGT) == 32
    assert int(FusionMask.OPTICAL_FLOW) == 128
    assert DEFAULT_FUSION_MASK == 7


def test_fusion_config_from_mask() -> None:
    config: FusionConfig = FusionConfig.from_mask(DEFAULT_FUSION_MASK)

    assert config.mask == DEFAULT_FUSION_MASK
    assert config.is_enabled(ChannelId.VISION)
    assert not config.is_enabled(ChannelId.GPS)
    assert not config.is_enabled(ChannelId.OPTICAL_FLOW)
    assert config.has_flag(FusionMask.EV_YAW)
    assert not config.has_flag(FusionMask.GPS_VEL)


def test_fusion_config_rejects_negative_mask() -> None:
    with pytest.raises(ValueError):
        FusionConfig.from_mask(-1)
