from fastapi import APIRouter, Depends

from playground.common.dependencies import verify_api_key
from playground.schemas.face_dto import FaceData, HeadPoseResponse
from playground.services.pose_service import head_pose as compute_head_pose

router = APIRouter(prefix="/face", tags=["Face"], dependencies=[Depends(verify_api_key)])


@router.post("/head-pose", response_model=HeadPoseResponse)
def head_pose(face: FaceData) -> HeadPoseResponse:
    """
    matrix(4x4 column-major) 또는 head_pitch/head_yaw → 방향 제스처 + 눈 감음
    """
    return compute_head_pose(face)


ROUTERS = [router]
