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
Per-channel inter-arrival time bookkeeping
"""

from __future__ import annotations

from typing import Optional


class TimedStream:
    """
    Tracks the previous message time of one sensor channel

    The first observed message only seeds the baseline. Every later message
    yields the signed delta to the previous one. Out-of-order input produces
    zero or negative deltas, which are reported unchanged.
    """

    def __init__(self) -> None:
        self._last_timestamp: Optional[float] = None

    @property
    def last_timestamp(self) -> Optional[float]:
        return self._last_timestamp

    def observe(self, timestamp: float) -> Optional[float]:
        """
        Record a message time and return the delta since the previous one

        Args:
            timestamp: Message time in seconds

        Returns:
            Delta in seconds, or None for the first message of the channel
        """

        delta: Optional[float] = None
        if self._last_timestamp is not None:
            delta = timestamp - self._last_timestamp

        self._last_timestamp = timestamp

        return delta
