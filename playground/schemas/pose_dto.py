"""
포즈 분류 관련 DTO
body_parts / yoga 분류기 입출력용
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional, Union

from playground.schemas.landmark_dto import Landmark
from playground.utils.enums.enums import ArmState, LegState, TorsoState, YogaPose


class BodyPartStates(BaseModel):
    """한 프레임의 신체 부위별 이산 상태 (pose tuple)"""
    model_config = ConfigDict(frozen=True)

    torso: TorsoState
    left_arm: ArmState
    right_arm: ArmState
    legs: LegState

    def mismatched_parts(self, target: "BodyPartStates") -> List[str]:
        """target과 다른 부위 이름 목록 (피드백 표시용)"""
        return [
            name
            for name in ("torso", "left_arm", "right_arm", "legs")
            if getattr(self, name) != getattr(target, name)
        ]


class PoseAngles(BaseModel):
    """디버깅용 원시 각도 (도 단위)"""
    avg_shoulder: float = Field(..., description="어깨각 평균 (팔꿈치-어깨-엉덩이)")
    avg_elbow: float = Field(..., description="팔꿈치각 평균 (어깨-팔꿈치-손목)")
    avg_knee: float = Field(..., description="무릎각 평균 (엉덩이-무릎-발목)")
    avg_hip: float = Field(..., description="엉덩이각 평균 (어깨-엉덩이-무릎)")
    torso_tilt: float = Field(..., description="척추와 수직축 사이 각도")


# ============ API DTO ============
class ClassifyPoseRequest(BaseModel):
    """world landmarks (미터, 엉덩이 중심) 33개"""
    landmarks: List[Landmark] = Field(..., description="world-space landmarks")

    class Config:
        json_schema_extra = {
            "example": {
                "landmarks": [{"x": 0.18, "y": -0.5, "z": 0.0}],
            }
        }


class ClassifyPoseResponse(BaseModel):
    pose: Optional[YogaPose] = Field(None, description="정확히 일치하는 요가 포즈 (없으면 null)")
    parts: Optional[BodyPartStates] = Field(None, description="부위별 상태 (미분류면 null)")
    angles: Optional[PoseAngles] = Field(None, description="디버깅용 각도")


class AccuracyRequest(BaseModel):
    landmarks: List[Landmark]
    target: Union[YogaPose, List[Landmark]] = Field(
        ..., description="목표 포즈 이름 또는 기준 landmarks"
    )


class AccuracyResponse(BaseModel):
    accuracy: Optional[float] = Field(None, ge=0.0, le=100.0, description="0~100 %")
    per_joint: Dict[str, float] = Field(default_factory=dict, description="관절별 0~1 점수")
