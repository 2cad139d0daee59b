"""
실험(미니게임) 공통 인터페이스
- 상태는 전부 인스턴스가 소유 (세션마다 독립, 전역 상태 없음)
- 매 프레임 update(face, dt) → (선택) update_pose(poses, dt, world_poses)
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Sequence

from playground.schemas.face_dto import FaceData
from playground.utils.enums.enums import ExperimentKind


class Experiment(ABC):
    kind: ExperimentKind

    def __init__(self):
        self.time = 0.0

    @abstractmethod
    def update(self, face: Optional[FaceData], dt: float) -> None:
        """얼굴 프레임 1개 반영. face 가 None 이면 '얼굴 없음' (정상 상황)"""

    def update_pose(
        self,
        poses: Sequence[Sequence[Any]],
        dt: float,
        world_poses: Optional[Sequence[Sequence[Any]]] = None,
    ) -> None:
        """body 를 쓰는 실험만 구현. poses 는 image space, world_poses 는 world space"""
        return None

    def demo(self) -> None:
        """스크린샷/미리보기용 대표 상태"""
        return None

    @abstractmethod
    def reset(self) -> None:
        """명시적 재시작"""

    def cleanup(self) -> None:
        """세션 종료 시 호출"""
        self.reset()

    @abstractmethod
    def state(self) -> Dict[str, Any]:
        """실험별 상태 (JSON 직렬화 가능한 값만)"""

    def snapshot(self) -> Dict[str, Any]:
        return {"kind": self.kind.value, "time": round(self.time, 4), "state": self.state()}


def require_positive(name: str, value: float) -> float:
    if value is None or value <= 0:
        raise ValueError(f"{name} must be > 0, got {value}")
    return float(value)


def enum_value(v) -> Optional[str]:
    return None if v is None else getattr(v, "value", v)
