"""
요가 포즈 매칭
- get_yoga_pose: BodyPartStates 정확 일치 조회 (부분 점수 없음)
- calc_accuracy: 관절각 거리 기반 0~1 진행도 (UI 피드백 전용, 판정용 아님)
"""
import math
from typing import Any, Dict, List, Optional, Sequence, Union

from playground.analyze.body_parts import classify_body_parts
from playground.analyze.constants import (
    ACCURACY_MAX_DIFF_DEG,
    ACCURACY_TRIPLETS,
    POSE_LANDMARK_COUNT,
)
from playground.analyze.geometry import angle_from_triplet
from playground.schemas.pose_dto import BodyPartStates
from playground.utils.enums.enums import ArmState, LegState, TorsoState, YogaPose


# 포즈 정의 테이블 (순서대로 선형 탐색)
POSE_PARTS: Dict[YogaPose, BodyPartStates] = {
    YogaPose.mountain: BodyPartStates(
        torso=TorsoState.upright, left_arm=ArmState.down, right_arm=ArmState.down, legs=LegState.straight
    ),
    YogaPose.volcano: BodyPartStates(
        torso=TorsoState.upright, left_arm=ArmState.up, right_arm=ArmState.up, legs=LegState.straight
    ),
    YogaPose.tpose: BodyPartStates(
        torso=TorsoState.upright, left_arm=ArmState.out, right_arm=ArmState.out, legs=LegState.straight
    ),
    YogaPose.plank: BodyPartStates(
        torso=TorsoState.prone, left_arm=ArmState.supporting, right_arm=ArmState.supporting, legs=LegState.straight
    ),
    YogaPose.shavasana: BodyPartStates(
        torso=TorsoState.supine, left_arm=ArmState.down, right_arm=ArmState.down, legs=LegState.straight
    ),
}

# calc_accuracy 용 목표 관절각 (도). 좌우 동일.
POSE_TARGET_ANGLES: Dict[YogaPose, Dict[str, float]] = {
    YogaPose.mountain:  {"shoulder": 15.0,  "elbow": 175.0, "hip": 175.0, "knee": 178.0},
    YogaPose.volcano:   {"shoulder": 170.0, "elbow": 175.0, "hip": 175.0, "knee": 178.0},
    YogaPose.tpose:     {"shoulder": 90.0,  "elbow": 175.0, "hip": 175.0, "knee": 178.0},
    YogaPose.plank:     {"shoulder": 85.0,  "elbow": 175.0, "hip": 170.0, "knee": 178.0},
    YogaPose.shavasana: {"shoulder": 15.0,  "elbow": 175.0, "hip": 178.0, "knee": 178.0},
}


def pose_from_parts(parts: Optional[BodyPartStates]) -> Optional[YogaPose]:
    if parts is None:
        return None
    for name, target in POSE_PARTS.items():
        if parts == target:
            return name
    return None


def get_yoga_pose(landmarks: Sequence[Any]) -> Optional[YogaPose]:
    """world landmarks → 포즈 이름 (정확히 일치할 때만)"""
    return pose_from_parts(classify_body_parts(landmarks))


def mismatched_parts(parts: Optional[BodyPartStates], target: YogaPose) -> List[str]:
    """목표 포즈와 다른 부위 목록. 분류 실패 시 전 부위."""
    wanted = POSE_PARTS[YogaPose(target)]
    if parts is None:
        return ["torso", "left_arm", "right_arm", "legs"]
    return parts.mismatched_parts(wanted)


def _target_angles(target: Union[YogaPose, str, Sequence[Any]]) -> Optional[Dict[str, float]]:
    if isinstance(target, (str, YogaPose)):
        per_joint = POSE_TARGET_ANGLES[YogaPose(target)]
        # "l_shoulder" → "shoulder"
        return {key: per_joint[key[2:]] for key in ACCURACY_TRIPLETS}
    if len(target) < POSE_LANDMARK_COUNT:
        return None
    return {key: angle_from_triplet(target, tri) for key, tri in ACCURACY_TRIPLETS.items()}


def joint_scores(
    landmarks: Sequence[Any],
    target: Union[YogaPose, str, Sequence[Any]],
) -> Optional[Dict[str, float]]:
    """관절별 점수 max(0, 1 - |diff| / 90°)"""
    if landmarks is None or len(landmarks) < POSE_LANDMARK_COUNT:
        return None
    wanted = _target_angles(target)
    if wanted is None:
        return None

    scores: Dict[str, float] = {}
    for key, tri in ACCURACY_TRIPLETS.items():
        actual = angle_from_triplet(landmarks, tri)
        if math.isnan(actual) or math.isnan(wanted[key]):
            continue
        scores[key] = max(0.0, 1.0 - abs(actual - wanted[key]) / ACCURACY_MAX_DIFF_DEG)
    return scores


def calc_accuracy(
    landmarks: Sequence[Any],
    target: Union[YogaPose, str, Sequence[Any]],
) -> Optional[float]:
    """
    0~1 진행도. target = 포즈 이름(내장 목표각) 또는 기준 landmarks.
    입력 부족 시 None.
    """
    scores = joint_scores(landmarks, target)
    if not scores:
        return None
    return sum(scores.values()) / len(scores)
