"""
landmark 떨림 보정용 지수 평활 + 게임 좌표 변환
"""
from typing import Any, List, Optional, Sequence, Tuple

from playground.analyze.constants import BODY_SMOOTH, GAME_HEIGHT, GAME_WIDTH
from playground.analyze.geometry import _get

Point = Tuple[float, float]


def ema(prev: float, target: float, smooth: float) -> float:
    """prev * smooth + target * (1 - smooth). smooth 가 클수록 느리게 따라감"""
    return prev * smooth + target * (1.0 - smooth)


def smooth_points(
    existing: Sequence[Point],
    target: Sequence[Point],
    smooth: float = BODY_SMOOTH,
) -> List[Point]:
    """점 목록 평활. 길이가 다르면 (사람 수/모델 변경) target 으로 리셋."""
    if len(existing) != len(target):
        return [(float(x), float(y)) for x, y in target]
    return [
        (ema(px, tx, smooth), ema(py, ty, smooth))
        for (px, py), (tx, ty) in zip(existing, target)
    ]


def to_game_space(
    landmarks: Sequence[Any],
    width: float = GAME_WIDTH,
    height: float = GAME_HEIGHT,
) -> List[Point]:
    """정규화 image 좌표(0~1) → 게임 캔버스 단위"""
    return [(_get(lm, "x") * width, _get(lm, "y") * height) for lm in landmarks]


def mirror(points: Sequence[Point], width: float = GAME_WIDTH) -> List[Point]:
    """셀피 화면처럼 좌우 반전"""
    return [(width - x, y) for x, y in points]


class ExponentialSmoother:
    """스칼라 1개용 EMA. 첫 샘플로 초기화."""

    def __init__(self, smooth: float):
        if not 0.0 <= smooth < 1.0:
            raise ValueError(f"smooth must be in [0, 1), got {smooth}")
        self.smooth = smooth
        self.value: Optional[float] = None

    def update(self, sample: float) -> float:
        self.value = sample if self.value is None else ema(self.value, sample, self.smooth)
        return self.value

    def reset(self) -> None:
        self.value = None
