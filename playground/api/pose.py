from fastapi import APIRouter, Depends

from playground.common.dependencies import verify_api_key
from playground.schemas.pose_dto import (
    AccuracyRequest,
    AccuracyResponse,
    ClassifyPoseRequest,
    ClassifyPoseResponse,
)
from playground.services.pose_service import classify_pose, score_accuracy

router = APIRouter(prefix="/pose", tags=["Pose"], dependencies=[Depends(verify_api_key)])


@router.post("/classify", response_model=ClassifyPoseResponse)
def classify(req: ClassifyPoseRequest) -> ClassifyPoseResponse:
    """
    world landmarks 33개 → 부위별 상태 + 요가 포즈 (정확 일치만)
    33개 미만이면 pose/parts/angles 모두 null
    """
    return classify_pose(req)


@router.post("/accuracy", response_model=AccuracyResponse)
def accuracy(req: AccuracyRequest) -> AccuracyResponse:
    """목표 포즈 대비 관절각 근접도 0~100 % (UI 진행도 표시용)"""
    return score_accuracy(req)


ROUTERS = [router]
