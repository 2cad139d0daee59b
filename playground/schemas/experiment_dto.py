"""
실험 세션 API DTO
Router ↔ ExperimentService 간 데이터 전달용
"""
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional

from playground.schemas.face_dto import FaceData
from playground.schemas.landmark_dto import Landmark
from playground.utils.enums.enums import ExperimentKind


# ============ API Request DTO ============
class CreateExperimentRequest(BaseModel):
    kind: ExperimentKind = Field(..., description="실험 종류")
    options: Dict[str, Any] = Field(
        default_factory=dict,
        description="실험별 생성 옵션 (예: mindfulness 의 target_duration, policy)",
    )
    demo: bool = Field(False, description="생성 직후 데모 상태 로드")

    class Config:
        json_schema_extra = {
            "example": {
                "kind": "mindfulness",
                "options": {"target_duration": 10, "policy": "decay"},
            }
        }


class FrameInput(BaseModel):
    """한 프레임 입력. face / poses 는 감지되지 않았으면 생략"""
    dt: float = Field(..., gt=0.0, le=1.0, description="직전 프레임과의 간격 (초)")
    face: Optional[FaceData] = Field(None, description="얼굴 데이터 (없으면 '얼굴 없음')")
    poses: Optional[List[List[Landmark]]] = Field(
        None, description="image space body landmarks (사람별 33개)"
    )
    world_poses: Optional[List[List[Landmark]]] = Field(
        None, description="world space body landmarks (poses 와 같은 순서)"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "dt": 0.0333,
                "face": {
                    "landmarks": [{"x": 0.5, "y": 0.42}, {"x": 0.5, "y": 0.45}],
                    "blendshapes": {"eyeBlinkLeft": 0.9, "eyeBlinkRight": 0.88},
                    "head_pitch": 0.02,
                    "head_yaw": -0.01,
                },
            }
        }


# ============ API Response DTO ============
class ExperimentSnapshot(BaseModel):
    id: str = Field(..., description="세션 ID")
    kind: ExperimentKind
    time: float = Field(..., description="세션 경과 시간 (초)")
    state: Dict[str, Any] = Field(..., description="실험별 상태")


class ExperimentListResponse(BaseModel):
    sessions: List[ExperimentSnapshot] = Field(default_factory=list)
