"""
신체 부위 분류기 (world landmarks 33개 → 부위별 이산 상태)

- 입력은 반드시 world space (미터, 엉덩이 중심, y축 아래 방향)
- 모든 함수는 순수 함수. 판단 불가 시 None 반환 (예외 X)
"""
from typing import Any, Optional, Sequence

import numpy as np

from playground.analyze.constants import (
    POSE_LANDMARK_COUNT,
    L_SHOULDER, R_SHOULDER, L_HIP, R_HIP,
    LEFT_SHOULDER_ANGLE, RIGHT_SHOULDER_ANGLE,
    LEFT_ARM, RIGHT_ARM, LEFT_LEG, RIGHT_LEG,
    LEFT_HIP_ANGLE, RIGHT_HIP_ANGLE,
    DEGENERATE_EPS,
    TORSO_UPRIGHT_MAX_DEG,
    ARM_DOWN_MAX_DEG, ARM_OUT_MIN_DEG, ARM_OUT_MAX_DEG, ARM_UP_MIN_DEG,
    ARM_SUPPORT_ELBOW_MIN_DEG, ARM_SUPPORT_SHOULDER_MIN_DEG,
    LEGS_STRAIGHT_MIN_DEG,
)
from playground.analyze.geometry import angle_from_triplet, midpoint, vector_angle_deg, xyz
from playground.schemas.pose_dto import BodyPartStates, PoseAngles
from playground.utils.enums.enums import ArmState, LegState, SideEnum, TorsoState

# MediaPipe world 좌표계는 y가 아래 방향 → "위"는 -y
_UP = np.array([0.0, -1.0, 0.0])


def _usable(landmarks: Optional[Sequence[Any]]) -> bool:
    return landmarks is not None and len(landmarks) >= POSE_LANDMARK_COUNT


def _spine(landmarks: Sequence[Any]) -> np.ndarray:
    """엉덩이 중점 → 어깨 중점"""
    shoulder_mid = midpoint(landmarks[L_SHOULDER], landmarks[R_SHOULDER])
    hip_mid = midpoint(landmarks[L_HIP], landmarks[R_HIP])
    return shoulder_mid - hip_mid


def torso_tilt_deg(landmarks: Sequence[Any]) -> float:
    """척추와 수직축 사이 각도 (0 = 똑바로 섬, 90 = 누움)"""
    return vector_angle_deg(_spine(landmarks), _UP)


def classify_torso(landmarks: Sequence[Any]) -> Optional[TorsoState]:
    """
    1) 척추-수직축 각도 < 45° → upright
    2) 누운 자세: n = (왼어깨 - 오른어깨) × spine
       n.y > 0 (가슴이 바닥 방향) → prone, n.y < 0 → supine
    좌우 반전/평행이동에 무관한 부호 하나로 판단.
    """
    if not _usable(landmarks):
        return None

    spine = _spine(landmarks)
    if vector_angle_deg(spine, _UP) < TORSO_UPRIGHT_MAX_DEG:
        return TorsoState.upright

    shoulder_line = xyz(landmarks[L_SHOULDER]) - xyz(landmarks[R_SHOULDER])
    normal = np.cross(shoulder_line, spine)
    if normal[1] > DEGENERATE_EPS:
        return TorsoState.prone
    if normal[1] < -DEGENERATE_EPS:
        return TorsoState.supine
    return None


def classify_arm(
    landmarks: Sequence[Any],
    side: SideEnum,
    upright: bool,
) -> Optional[ArmState]:
    """
    어깨각(팔꿈치-어깨-엉덩이), 팔꿈치각(어깨-팔꿈치-손목) 기준.
    판단 순서가 중요: supporting 을 먼저 검사해야 엎드린 팔이 out 으로 섞이지 않음.
    구간 사이(45~55°, 125~135°)는 None.
    """
    if not _usable(landmarks):
        return None

    side = SideEnum(side)
    shoulder_tri, arm_tri = (
        (LEFT_SHOULDER_ANGLE, LEFT_ARM) if side == SideEnum.left
        else (RIGHT_SHOULDER_ANGLE, RIGHT_ARM)
    )
    shoulder = angle_from_triplet(landmarks, shoulder_tri)
    elbow = angle_from_triplet(landmarks, arm_tri)

    if (
        not upright
        and elbow > ARM_SUPPORT_ELBOW_MIN_DEG
        and shoulder > ARM_SUPPORT_SHOULDER_MIN_DEG
    ):
        return ArmState.supporting
    if shoulder < ARM_DOWN_MAX_DEG:
        return ArmState.down
    if ARM_OUT_MIN_DEG <= shoulder <= ARM_OUT_MAX_DEG:
        return ArmState.out
    if shoulder > ARM_UP_MIN_DEG:
        return ArmState.up
    return None


def classify_legs(landmarks: Sequence[Any]) -> Optional[LegState]:
    """양 무릎각 평균 > 140° → straight (다른 다리 상태는 아직 없음)"""
    if not _usable(landmarks):
        return None
    knee = (
        angle_from_triplet(landmarks, LEFT_LEG)
        + angle_from_triplet(landmarks, RIGHT_LEG)
    ) / 2.0
    return LegState.straight if knee > LEGS_STRAIGHT_MIN_DEG else None


def classify_body_parts(landmarks: Sequence[Any]) -> Optional[BodyPartStates]:
    """
    부위 하나라도 None 이면 전체 None (부분 판정은 사용하지 않음).
    """
    if not _usable(landmarks):
        return None

    torso = classify_torso(landmarks)
    if torso is None:
        return None
    upright = torso == TorsoState.upright

    left_arm = classify_arm(landmarks, SideEnum.left, upright)
    right_arm = classify_arm(landmarks, SideEnum.right, upright)
    legs = classify_legs(landmarks)
    if left_arm is None or right_arm is None or legs is None:
        return None

    return BodyPartStates(torso=torso, left_arm=left_arm, right_arm=right_arm, legs=legs)


def get_pose_angles(landmarks: Sequence[Any]) -> Optional[PoseAngles]:
    """디버그 출력용 평균 관절각 (도)"""
    if not _usable(landmarks):
        return None

    def avg(a, b):
        return (angle_from_triplet(landmarks, a) + angle_from_triplet(landmarks, b)) / 2.0

    return PoseAngles(
        avg_shoulder=avg(LEFT_SHOULDER_ANGLE, RIGHT_SHOULDER_ANGLE),
        avg_elbow=avg(LEFT_ARM, RIGHT_ARM),
        avg_knee=avg(LEFT_LEG, RIGHT_LEG),
        avg_hip=avg(LEFT_HIP_ANGLE, RIGHT_HIP_ANGLE),
        torso_tilt=torso_tilt_deg(landmarks),
    )
