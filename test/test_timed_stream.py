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

from typing import Optional

import pytest

from oasis_eskf.fusion.timed_stream import TimedStream


def test_first_observation_has_no_delta() -> None:
    stream: TimedStream = TimedStream()

    assert stream.last_timestamp is None
    assert stream.observe(12.5) is None
    assert stream.last_timestamp == 12.5


def test_second_observation_returns_delta() -> None:
    stream: TimedStream = TimedStream()
    stream.observe(100.0)

    delta: Optional[float] = stream.observe(100.25)

    assert delta == pytest.approx(0.25)
    assert stream.last_timestamp == 100.25


def test_delta_is_relative_to_previous_observation() -> None:
    stream: TimedStream = TimedStream()
    deltas: list[Optional[float]] = [
        stream.observe(timestamp) for timestamp in [1.0, 1.5, 1.75, 2.75]
    ]

    assert deltas[0] is None
    assert deltas[1:] == pytest.approx([0.5, 0.25, 1.0])


def test_out_of_order_timestamps_are_not_clamped() -> None:
    stream: TimedStream = TimedStream()
    stream.observe(5.0)

    assert stream.observe(4.0) == pytest.approx(-1.0)
    assert stream.observe(4.0) == 0.0
    assert stream.last_timestamp == 4.0
