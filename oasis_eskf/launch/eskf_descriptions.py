################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

from launch.launch_description import LaunchDescription
from launch_ros.actions import Node

from oasis_eskf.nodes import eskf_node_params as eskf_params


################################################################################
# ROS parameters
################################################################################


ROS_NAMESPACE: str = "oasis"

ESKF_PACKAGE_NAME: str = "oasis_eskf"


################################################################################
# Node descriptions
################################################################################


class EskfDescriptions:
    #
    # ESKF fusion
    #

    @staticmethod
    def add_eskf_node(
        ld: LaunchDescription,
        host_id: str,
        fusion_mask: int = eskf_params.DEFAULT_FUSION_MASK,
        publish_rate: float = eskf_params.DEFAULT_PUBLISH_RATE,
    ) -> None:
        eskf_node: Node = Node(
            namespace=ROS_NAMESPACE,
            package=ESKF_PACKAGE_NAME,
            executable="eskf_node",
            name=f"eskf_node_{host_id}",
            output="screen",
            parameters=[
                {
                    eskf_params.PARAM_FUSION_MASK: fusion_mask,
                    eskf_params.PARAM_PUBLISH_RATE: float(publish_rate),
                },
            ],
            remappings=[
                ("extended_state", f"{host_id}/extended_state"),
                ("gps", f"{host_id}/gps"),
                ("imu", f"{host_id}/imu"),
                ("optical_flow", f"{host_id}/optical_flow"),
                ("pose", f"{host_id}/pose"),
                ("vision", f"{host_id}/vision"),
            ],
        )
        ld.add_action(eskf_node)
