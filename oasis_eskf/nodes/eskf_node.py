################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

import math
import time
from typing import Optional

import rclpy.node
import rclpy.publisher
import rclpy.qos
import rclpy.subscription
import rclpy.timer
from builtin_interfaces.msg import Time as TimeMsg
from geometry_msgs.msg import PoseWithCovarianceStamped as PoseMsg
from mavros_msgs.msg import ExtendedState as ExtendedStateMsg
from mavros_msgs.msg import OpticalFlowRad as OpticalFlowRadMsg
from nav_msgs.msg import Odometry as OdometryMsg
from sensor_msgs.msg import Imu as ImuMsg

from oasis_eskf.estimation.estimator import Estimator
from oasis_eskf.estimation.estimator_loader import load_estimator
from oasis_eskf.fusion.fusion_config import FusionNodeConfig
from oasis_eskf.fusion.fusion_orchestrator import FusionOrchestrator
from oasis_eskf.fusion.fusion_types import ChannelId
from oasis_eskf.fusion.fusion_types import FusedPose
from oasis_eskf.fusion.fusion_types import FusionTime
from oasis_eskf.fusion.fusion_types import to_seconds
from oasis_eskf.fusion.fusion_types import to_us
from oasis_eskf.fusion.message_conversions import OpticalFlowFields
from oasis_eskf.fusion.message_conversions import fusion_time_from_stamp
from oasis_eskf.fusion.message_conversions import gps_from_msg
from oasis_eskf.fusion.message_conversions import imu_from_msg
from oasis_eskf.fusion.message_conversions import in_air_from_extended_state
from oasis_eskf.fusion.message_conversions import optical_flow_from_msg
from oasis_eskf.fusion.message_conversions import vision_from_msg
from oasis_eskf.nodes import eskf_node_params as eskf_params


################################################################################
# ROS parameters
################################################################################


NODE_NAME: str = "eskf_node"

# ROS topics
IMU_TOPIC: str = "imu"
EXTENDED_STATE_TOPIC: str = "extended_state"
VISION_TOPIC: str = "vision"
GPS_TOPIC: str = "gps"
OPTICAL_FLOW_TOPIC: str = "optical_flow"

POSE_TOPIC: str = "pose"

# Minimum time between repeated timing warnings on one topic, seconds
TIMING_WARNING_PERIOD_SECS: float = 1.0


################################################################################
# ROS node
################################################################################


class EskfNode(rclpy.node.Node):
    def __init__(self, estimator: Optional[Estimator] = None) -> None:
        """
        Initialize resources

        Args:
            estimator: Estimator to drive, loaded from the estimator parameter
                when omitted
        """

        super().__init__(NODE_NAME)

        self.declare_parameter(
            eskf_params.PARAM_FUSION_MASK, eskf_params.DEFAULT_FUSION_MASK
        )
        self.declare_parameter(
            eskf_params.PARAM_PUBLISH_RATE, eskf_params.DEFAULT_PUBLISH_RATE
        )
        self.declare_parameter(eskf_params.PARAM_FRAME_ID, eskf_params.DEFAULT_FRAME_ID)
        self.declare_parameter(
            eskf_params.PARAM_ESTIMATOR, eskf_params.DEFAULT_ESTIMATOR
        )
        self.declare_parameter(
            eskf_params.PARAM_GATE_CORRECTIONS, eskf_params.DEFAULT_GATE_CORRECTIONS
        )

        self._config: FusionNodeConfig = FusionNodeConfig(
            fusion_mask=int(self.get_parameter(eskf_params.PARAM_FUSION_MASK).value),
            publish_rate_hz=float(
                self.get_parameter(eskf_params.PARAM_PUBLISH_RATE).value
            ),
            frame_id=str(self.get_parameter(eskf_params.PARAM_FRAME_ID).value),
            estimator=str(self.get_parameter(eskf_params.PARAM_ESTIMATOR).value),
            gate_corrections_until_initialized=bool(
                self.get_parameter(eskf_params.PARAM_GATE_CORRECTIONS).value
            ),
        )

        if estimator is None:
            self.get_logger().info(f"Loading estimator {self._config.estimator}")
            estimator = load_estimator(self._config.estimator)

        self._orchestrator: FusionOrchestrator = FusionOrchestrator(
            estimator,
            self._config.fusion,
            frame_id=self._config.frame_id,
            gate_corrections_until_initialized=(
                self._config.gate_corrections_until_initialized
            ),
        )

        qos_profile: rclpy.qos.QoSProfile = (
            rclpy.qos.QoSPresetProfiles.SENSOR_DATA.value
        )

        self.get_logger().info("Subscribing to imu")
        self._imu_sub: rclpy.subscription.Subscription = self.create_subscription(
            msg_type=ImuMsg,
            topic=IMU_TOPIC,
            callback=self._handle_imu,
            qos_profile=qos_profile,
        )

        self.get_logger().info("Subscribing to extended state")
        self._extended_state_sub: rclpy.subscription.Subscription = (
            self.create_subscription(
                msg_type=ExtendedStateMsg,
                topic=EXTENDED_STATE_TOPIC,
                callback=self._handle_extended_state,
                qos_profile=qos_profile,
            )
        )

        self._vision_sub: Optional[rclpy.subscription.Subscription] = None
        if self._config.fusion.is_enabled(ChannelId.VISION):
            self.get_logger().info("Subscribing to vision")
            self._vision_sub = self.create_subscription(
                msg_type=PoseMsg,
                topic=VISION_TOPIC,
                callback=self._handle_vision,
                qos_profile=qos_profile,
            )

        self._gps_sub: Optional[rclpy.subscription.Subscription] = None
        if self._config.fusion.is_enabled(ChannelId.GPS):
            self.get_logger().info("Subscribing to gps")
            self._gps_sub = self.create_subscription(
                msg_type=OdometryMsg,
                topic=GPS_TOPIC,
                callback=self._handle_gps,
                qos_profile=qos_profile,
            )

        self._optical_flow_sub: Optional[rclpy.subscription.Subscription] = None
        if self._config.fusion.is_enabled(ChannelId.OPTICAL_FLOW):
            self.get_logger().info("Subscribing to optical_flow")
            self._optical_flow_sub = self.create_subscription(
                msg_type=OpticalFlowRadMsg,
                topic=OPTICAL_FLOW_TOPIC,
                callback=self._handle_optical_flow,
                qos_profile=qos_profile,
            )

        self._pose_pub: rclpy.publisher.Publisher = self.create_publisher(
            msg_type=PoseMsg,
            topic=POSE_TOPIC,
            qos_profile=qos_profile,
        )

        self._timing_warning_times: dict[str, float] = {}

        self._publish_state_timer: rclpy.timer.Timer = self.create_timer(
            timer_period_sec=self._config.publish_period_sec,
            callback=self._publish_state,
        )

        self.get_logger().info(
            f"ESKF node initialized (fusion_mask={self._config.fusion_mask}, "
            f"publish_rate={self._config.publish_rate_hz:g} Hz)"
        )

    def stop(self) -> None:
        self.get_logger().info("ESKF node deinitialized")

        self.destroy_node()

    def _handle_imu(self, message: ImuMsg) -> None:
        timestamp: FusionTime = fusion_time_from_stamp(message.header.stamp)
        angular_rate: list[float]
        linear_accel: list[float]
        angular_rate, linear_accel = imu_from_msg(message)

        was_initialized: bool = self._orchestrator.initialized

        delta: Optional[float] = self._orchestrator.on_imu(
            angular_rate, linear_accel, to_us(timestamp), to_seconds(timestamp)
        )

        if not was_initialized and self._orchestrator.initialized:
            self.get_logger().info("Initialized ESKF")

        self._check_delta(IMU_TOPIC, delta)

    def _handle_vision(self, message: PoseMsg) -> None:
        timestamp: FusionTime = fusion_time_from_stamp(message.header.stamp)
        orientation: list[float]
        position: list[float]
        orientation, position = vision_from_msg(message)

        delta: Optional[float] = self._orchestrator.on_vision(
            orientation, position, to_us(timestamp), to_seconds(timestamp)
        )
        self._check_delta(VISION_TOPIC, delta)

    def _handle_gps(self, message: OdometryMsg) -> None:
        timestamp: FusionTime = fusion_time_from_stamp(message.header.stamp)
        velocity: list[float]
        position: list[float]
        velocity, position = gps_from_msg(message)

        delta: Optional[float] = self._orchestrator.on_gps(
            velocity, position, to_us(timestamp), to_seconds(timestamp)
        )
        self._check_delta(GPS_TOPIC, delta)

    def _handle_optical_flow(self, message: OpticalFlowRadMsg) -> None:
        timestamp: FusionTime = fusion_time_from_stamp(message.header.stamp)
        flow: OpticalFlowFields = optical_flow_from_msg(message)

        delta: Optional[float] = self._orchestrator.on_optical_flow(
            flow.integrated_xy_rad,
            flow.integrated_gyro_xy_rad,
            flow.integration_time_us,
            flow.distance_m,
            flow.quality,
            to_us(timestamp),
            to_seconds(timestamp),
        )
        self._check_delta(OPTICAL_FLOW_TOPIC, delta)

    def _handle_extended_state(self, message: ExtendedStateMsg) -> None:
        self._orchestrator.on_landed_state(in_air_from_extended_state(message))

    def _publish_state(self) -> None:
        stamp_msg: TimeMsg = self.get_clock().now().to_msg()
        pose: FusedPose = self._orchestrator.publish_tick(
            fusion_time_from_stamp(stamp_msg)
        )

        self._pose_pub.publish(self._build_pose(pose, stamp_msg))

    def _build_pose(self, pose: FusedPose, stamp: TimeMsg) -> PoseMsg:
        message: PoseMsg = PoseMsg()
        message.header.stamp = stamp
        message.header.frame_id = pose.frame_id
        message.pose.pose.position.x = float(pose.position_m[0])
        message.pose.pose.position.y = float(pose.position_m[1])
        message.pose.pose.position.z = float(pose.position_m[2])
        message.pose.pose.orientation.w = float(pose.orientation_wxyz[0])
        message.pose.pose.orientation.x = float(pose.orientation_wxyz[1])
        message.pose.pose.orientation.y = float(pose.orientation_wxyz[2])
        message.pose.pose.orientation.z = float(pose.orientation_wxyz[3])

        # Consumers of the vision pose ignore covariance
        message.pose.covariance = pose.covariance
        return message

    def _check_delta(self, topic: str, delta: Optional[float]) -> None:
        if delta is None or delta > 0.0:
            return

        last_time: float = self._timing_warning_times.get(topic, -math.inf)
        monotonic_now: float = time.monotonic()
        if monotonic_now - last_time < TIMING_WARNING_PERIOD_SECS:
            return
        self._timing_warning_times[topic] = monotonic_now
        self.get_logger().warn(
            f"Non-increasing timestamp on {topic}: dt={delta:.6f}s, "
            "forwarding to estimator"
        )
