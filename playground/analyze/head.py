"""
얼굴 기반 신호
- 4x4 변환 행렬(column-major) → pitch / yaw (rad)
- pitch/yaw → 고개 방향 제스처 (리듬 게임 입력)
- blendshape → 눈 감음 / 입 벌림
"""
import math
from typing import Mapping, Optional, Sequence, Tuple

from playground.analyze.constants import (
    BLINK_LEFT,
    BLINK_RIGHT,
    EYES_CLOSED_THRESHOLD,
    HEAD_PITCH_THRESHOLD,
    HEAD_YAW_THRESHOLD,
    JAW_OPEN,
)
from playground.utils.enums.enums import HeadDirection


def head_angles_from_matrix(m: Sequence[float]) -> Optional[Tuple[float, float]]:
    """
    ZYX 오일러 분해 (column-major 16개 원소)
      pitch = atan2(m[6], m[10])
      yaw   = atan2(-m[2], sqrt(m[0]^2 + m[1]^2))
    """
    if m is None or len(m) != 16:
        return None
    pitch = math.atan2(m[6], m[10])
    yaw = math.atan2(-m[2], math.sqrt(m[0] * m[0] + m[1] * m[1]))
    return pitch, yaw


def get_head_dir(pitch: float, yaw: float) -> Optional[HeadDirection]:
    """
    두 축 모두 임계값 미만 → None (중립).
    그 외엔 |pitch| vs |yaw| 중 큰 쪽이 축을 고르고 부호가 방향을 고름.
    pitch > 0 = 아래, yaw > 0 = 왼쪽.
    """
    if abs(pitch) < HEAD_PITCH_THRESHOLD and abs(yaw) < HEAD_YAW_THRESHOLD:
        return None
    if abs(pitch) > abs(yaw):
        return HeadDirection.down if pitch > 0 else HeadDirection.up
    return HeadDirection.left if yaw > 0 else HeadDirection.right


class HeadDirectionTrigger:
    """
    엣지 트리거: 새 방향으로 "바뀌는 순간"에만 방향을 돌려줌.
    같은 방향을 유지하는 동안은 None. 방향이 바뀌면 held 플래그 초기화.
    """

    def __init__(self):
        self.prev: Optional[HeadDirection] = None
        self.held = False

    def feed(self, direction: Optional[HeadDirection]) -> Optional[HeadDirection]:
        if direction != self.prev:
            self.prev = direction
            self.held = False
        if direction is None or self.held:
            return None
        self.held = True
        return direction

    def reset(self) -> None:
        self.prev = None
        self.held = False


def eyes_closed(
    blendshapes: Optional[Mapping[str, float]],
    threshold: float = EYES_CLOSED_THRESHOLD,
) -> bool:
    """양쪽 blink 값이 모두 threshold 초과. 누락된 값은 0 취급."""
    if not blendshapes:
        return False
    left = blendshapes.get(BLINK_LEFT, 0.0) or 0.0
    right = blendshapes.get(BLINK_RIGHT, 0.0) or 0.0
    return left > threshold and right > threshold


def mouth_open(blendshapes: Optional[Mapping[str, float]], threshold: float = 0.4) -> bool:
    if not blendshapes:
        return False
    return (blendshapes.get(JAW_OPEN, 0.0) or 0.0) > threshold
