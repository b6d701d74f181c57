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
Load an estimator implementation from a "package.module:Class" string
"""

from __future__ import annotations

import importlib
from types import ModuleType
from typing import Optional

from oasis_eskf.estimation.estimator import Estimator


def load_estimator(spec: str) -> Estimator:
    module_name, separator, class_name = spec.partition(":")
    if not separator or not module_name or not class_name:
        raise ValueError(
            f"Estimator must be given as 'package.module:Class', got '{spec}'"
        )

    module: ModuleType = importlib.import_module(module_name)

    estimator_class: Optional[object] = getattr(module, class_name, None)
    if estimator_class is None:
        raise ValueError(f"Module '{module_name}' has no attribute '{class_name}'")
    if not isinstance(estimator_class, type) or not issubclass(
        estimator_class, Estimator
    ):
        raise TypeError(f"'{spec}' is not an Estimator implementation")

    return estimator_class()
