"""
Landmark 관련 DTO
두 좌표계를 사용:
- image space: x,y ∈ [0,1] (카메라 프레임 기준), z는 x와 비슷한 스케일
- world space: 미터 단위, 엉덩이 중심 (분류기 입력은 반드시 world space)
"""
from pydantic import BaseModel, Field
from typing import Optional


class Landmark(BaseModel):
    """3D 점 1개 (포즈 관절 또는 얼굴 특징점)"""
    x: float
    y: float
    z: float = Field(0.0, description="깊이 (없으면 0)")
    visibility: Optional[float] = Field(None, ge=0.0, le=1.0, description="가시성 점수 (image landmarks만)")


class ImageLandmark(BaseModel):
    """image-landmarks fixture 1개 항목 (정규화 좌표 + 가시성)"""
    x: float = Field(..., ge=0.0, le=1.0, description="정규화된 X 좌표 (0~1)")
    y: float = Field(..., ge=0.0, le=1.0, description="정규화된 Y 좌표 (0~1)")
    z: float = Field(..., description="깊이 (상대적)")
    visibility: float = Field(..., ge=0.0, le=1.0, description="가시성 점수")
