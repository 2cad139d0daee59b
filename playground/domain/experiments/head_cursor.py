"""
코끝으로 움직이는 커서 (image space 직접 매핑, 좌우 반전)
"""
from collections import deque
from typing import Any, Dict, Optional

from playground.analyze.constants import FACE_NOSE_TIP
from playground.domain.experiments.base import Experiment
from playground.domain.motion.smoothing import ema
from playground.schemas.face_dto import FaceData
from playground.utils.enums.enums import ExperimentKind

SMOOTH = 0.7
TRAIL_LEN = 20


def _clamp01(v: float) -> float:
    return max(0.0, min(1.0, v))


class HeadCursor(Experiment):
    kind = ExperimentKind.head_cursor

    def __init__(self, smooth: float = SMOOTH, trail_len: int = TRAIL_LEN):
        super().__init__()
        if not 0.0 <= smooth < 1.0:
            raise ValueError(f"smooth must be in [0, 1), got {smooth}")
        if trail_len < 1:
            raise ValueError("trail_len must be >= 1")
        self.smooth = smooth
        self.trail_len = trail_len
        self.reset()

    def reset(self) -> None:
        self.time = 0.0
        self.x = 0.5
        self.y = 0.5
        self.tracking = False
        self.trail = deque(maxlen=self.trail_len)

    def demo(self) -> None:
        self.reset()
        self.tracking = True
        for i in range(self.trail_len):
            self.trail.append((0.3 + i * 0.015, 0.5 - i * 0.005))
        self.x, self.y = self.trail[-1]

    def update(self, face: Optional[FaceData], dt: float) -> None:
        self.time += dt
        self.tracking = face is not None and len(face.landmarks) > FACE_NOSE_TIP
        if not self.tracking:
            return
        nose = face.landmarks[FACE_NOSE_TIP]
        self.x = _clamp01(ema(self.x, 1.0 - nose.x, self.smooth))
        self.y = _clamp01(ema(self.y, nose.y, self.smooth))
        self.trail.append((self.x, self.y))

    def state(self) -> Dict[str, Any]:
        return {
            "x": round(self.x, 4),
            "y": round(self.y, 4),
            "tracking": self.tracking,
            "trail": [[round(x, 4), round(y, 4)] for x, y in self.trail],
        }
