################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

import socket

from launch import LaunchDescription

from oasis_eskf.launch.eskf_descriptions import EskfDescriptions


################################################################################
# Host parameters
################################################################################


# Get the hostname
HOSTNAME: str = socket.gethostname().replace("-", "_")

print(f"Launching ESKF fusion on {HOSTNAME}")


################################################################################
# Launch description
################################################################################


def generate_launch_description() -> LaunchDescription:
    ld: LaunchDescription = LaunchDescription()

    EskfDescriptions.add_eskf_node(ld, HOSTNAME)

    return ld
