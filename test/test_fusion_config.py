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

import dataclasses

import pytest

from oasis_eskf.fusion.fusion_config import FusionNodeConfig
from oasis_eskf.fusion.fusion_mask import FusionMask
from oasis_eskf.fusion.fusion_types import ChannelId


def _build_config(
    *,
    fusion_mask: int = int(FusionMask.EV),
    publish_rate_hz: float = 100.0,
    frame_id: str = "pose",
) -> FusionNodeConfig:
    return FusionNodeConfig(
        fusion_mask=fusion_mask,
        publish_rate_hz=publish_rate_hz,
        frame_id=frame_id,
        estimator="oasis_eskf.estimation.reference_estimator:ReferenceEstimator",
    )


def test_publish_period_from_rate() -> None:
    config: FusionNodeConfig = _build_config(publish_rate_hz=50.0)

    assert config.publish_period_sec == pytest.approx(0.02)
    assert not config.gate_corrections_until_initialized


def test_fusion_policy_from_mask() -> None:
    config: FusionNodeConfig = _build_config(
        fusion_mask=int(FusionMask.GPS_POS | FusionMask.OPTICAL_FLOW)
    )

    assert config.fusion.channels_enabled == frozenset(
        {ChannelId.GPS, ChannelId.OPTICAL_FLOW}
    )


@pytest.mark.parametrize("rate", [0.0, -10.0, float("nan"), float("inf")])
def test_invalid_publish_rate(rate: float) -> None:
    with pytest.raises(ValueError):
        _build_config(publish_rate_hz=rate)


def test_invalid_fusion_mask() -> None:
    with pytest.raises(ValueError):
        _build_config(fusion_mask=-4)


def test_empty_frame_id() -> None:
    with pytest.raises(ValueError):
        _build_config(frame_id="")


def test_config_is_immutable() -> None:
    config: FusionNodeConfig = _build_config()

    with pytest.raises(dataclasses.FrozenInstanceError):
        config.fusion_mask = 0  # type: ignore[misc]
