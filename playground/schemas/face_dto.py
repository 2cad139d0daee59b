"""
얼굴 데이터 DTO
매 프레임 외부 모델 출력으로 새로 만들어짐 (프레임 간 상태 없음)
"""
from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Dict, List, Optional

from playground.analyze.head import head_angles_from_matrix
from playground.schemas.landmark_dto import Landmark
from playground.utils.enums.enums import HeadDirection


class FaceData(BaseModel):
    """
    - landmarks: face mesh (정규화 image 좌표, 개수 가변)
    - blendshapes: 이름 → 0~1 활성값
    - head_pitch / head_yaw: rad. 생략 시 matrix 에서 유도, 둘 다 없으면 0
    """
    landmarks: List[Landmark] = Field(default_factory=list, description="face mesh landmarks")
    blendshapes: Dict[str, float] = Field(default_factory=dict, description="blendshape 이름 → 값")
    head_pitch: Optional[float] = Field(None, description="pitch (rad, +면 아래)")
    head_yaw: Optional[float] = Field(None, description="yaw (rad, +면 왼쪽)")
    matrix: Optional[List[float]] = Field(None, description="4x4 column-major 변환 행렬 (16개)")

    @field_validator("matrix")
    @classmethod
    def _check_matrix(cls, v):
        if v is not None and len(v) != 16:
            raise ValueError("matrix must have 16 entries (4x4 column-major)")
        return v

    @model_validator(mode="after")
    def _derive_angles(self):
        derived = head_angles_from_matrix(self.matrix) if self.matrix else None
        if self.head_pitch is None:
            self.head_pitch = derived[0] if derived else 0.0
        if self.head_yaw is None:
            self.head_yaw = derived[1] if derived else 0.0
        return self

    class Config:
        json_schema_extra = {
            "example": {
                "landmarks": [{"x": 0.5, "y": 0.45, "z": -0.02}],
                "blendshapes": {"eyeBlinkLeft": 0.8, "eyeBlinkRight": 0.75, "jawOpen": 0.05},
                "matrix": [1, 0, 0, 0, 0, 1, 0, 0, 0, 0, 1, 0, 0, 0, -40, 1],
            }
        }


class HeadPoseResponse(BaseModel):
    pitch: float = Field(..., description="rad")
    yaw: float = Field(..., description="rad")
    direction: Optional[HeadDirection] = Field(None, description="중립이면 null")
    eyes_closed: bool
