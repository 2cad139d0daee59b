"""
상태 없는 분류 요청 처리 (포즈 분류 / 정확도 / 고개 방향)
"""
from playground.analyze.body_parts import classify_body_parts, get_pose_angles
from playground.analyze.head import eyes_closed, get_head_dir
from playground.analyze.yoga import calc_accuracy, joint_scores, pose_from_parts
from playground.schemas.face_dto import FaceData, HeadPoseResponse
from playground.schemas.pose_dto import (
    AccuracyRequest,
    AccuracyResponse,
    ClassifyPoseRequest,
    ClassifyPoseResponse,
)


def classify_pose(req: ClassifyPoseRequest) -> ClassifyPoseResponse:
    parts = classify_body_parts(req.landmarks)
    return ClassifyPoseResponse(
        pose=pose_from_parts(parts),
        parts=parts,
        angles=get_pose_angles(req.landmarks),
    )


def score_accuracy(req: AccuracyRequest) -> AccuracyResponse:
    accuracy = calc_accuracy(req.landmarks, req.target)
    return AccuracyResponse(
        accuracy=None if accuracy is None else round(accuracy * 100, 2),
        per_joint={k: round(v, 4) for k, v in (joint_scores(req.landmarks, req.target) or {}).items()},
    )


def head_pose(face: FaceData) -> HeadPoseResponse:
    return HeadPoseResponse(
        pitch=face.head_pitch,
        yaw=face.head_yaw,
        direction=get_head_dir(face.head_pitch, face.head_yaw),
        eyes_closed=eyes_closed(face.blendshapes),
    )
