"""
왜 분리했나?
- 수학/기하(각도 계산) 로직을 분류기(body_parts/yoga/head)에서 분리하면 테스트/재사용이 쉬움.
- 어깨/팔꿈치/무릎/엉덩이 등 모든 관절 각도 계산에 공통 패턴을 적용.

좌표 입력은 dict({"x","y","z"}), 속성 객체(pydantic Landmark, MediaPipe landmark),
(x, y[, z]) 시퀀스를 모두 받는다.
"""
from typing import Any, Sequence, Tuple
import math
import numpy as np

from playground.analyze.constants import DEGENERATE_EPS


def angle_at(a: Any, b: Any, c: Any) -> float:
    """
    꼭짓점 B에서 B→A, B→C 사이 끼인각(rad, 0..π).
    cosθ = (BA·BC)/(|BA||BC|), 수치 안정성을 위해 clamp.
    두 벡터 중 하나라도 길이 < 1e-9 이면 NaN 대신 0 반환.
    """
    A, B, C = xyz(a), xyz(b), xyz(c)
    ba = A - B
    bc = C - B
    nba = float(np.linalg.norm(ba))
    nbc = float(np.linalg.norm(bc))
    if nba < DEGENERATE_EPS or nbc < DEGENERATE_EPS:
        return 0.0
    cosv = float(np.dot(ba, bc) / (nba * nbc))
    cosv = max(-1.0, min(1.0, cosv))
    return float(np.arccos(cosv))


def angle_at_2d(a: Any, b: Any, c: Any) -> float:
    """
    2D 버전: atan2(|cross|, dot). 회전 방향(부호)과 무관하게 0..π.
    """
    ax, ay = _get(a, "x"), _get(a, "y")
    bx, by = _get(b, "x"), _get(b, "y")
    cx, cy = _get(c, "x"), _get(c, "y")
    bax, bay = ax - bx, ay - by
    bcx, bcy = cx - bx, cy - by
    if math.hypot(bax, bay) < DEGENERATE_EPS or math.hypot(bcx, bcy) < DEGENERATE_EPS:
        return 0.0
    dot = bax * bcx + bay * bcy
    cross = bax * bcy - bay * bcx
    return math.atan2(abs(cross), dot)


def angle_deg(a: Any, b: Any, c: Any) -> float:
    """angle_at 의 도(degree) 버전"""
    return math.degrees(angle_at(a, b, c))


def angle_from_triplet(frame: Sequence[Any], triplet: Tuple[int, int, int]) -> float:
    """
    단일 프레임에서 (A,B,C) 인덱스의 끼인각 ∠ABC (도 단위).
    인덱스가 범위를 벗어나면 NaN.
    """
    if max(triplet) >= len(frame):
        return float("nan")
    a_idx, b_idx, c_idx = triplet
    return angle_deg(frame[a_idx], frame[b_idx], frame[c_idx])


def vector_angle_deg(u: np.ndarray, v: np.ndarray) -> float:
    """두 벡터 사이 각도(도). 퇴화 시 0."""
    nu = float(np.linalg.norm(u))
    nv = float(np.linalg.norm(v))
    if nu < DEGENERATE_EPS or nv < DEGENERATE_EPS:
        return 0.0
    cosv = max(-1.0, min(1.0, float(np.dot(u, v) / (nu * nv))))
    return math.degrees(math.acos(cosv))


def midpoint(p: Any, q: Any) -> np.ndarray:
    return (xyz(p) + xyz(q)) / 2.0


def distance_2d(ax: float, ay: float, bx: float, by: float) -> float:
    return math.hypot(ax - bx, ay - by)


def xyz(lm: Any) -> np.ndarray:
    """
    landmark → np.array([x, y, z]) 변환.
    - z가 없으면 0 (2D 좌표)
    """
    return np.array([_get(lm, "x"), _get(lm, "y"), _get(lm, "z")], dtype=float)


# 내부 유틸 (모듈 외부로 공개하지 않음)
_AXIS = {"x": 0, "y": 1, "z": 2}


def _get(lm: Any, k: str, default: float = 0.0) -> float:
    """
    dict / 속성 객체 / 시퀀스 안전 접근. 값이 없으면 default.
    """
    if isinstance(lm, dict):
        v = lm.get(k, default)
    elif isinstance(lm, (list, tuple, np.ndarray)):
        i = _AXIS[k]
        v = lm[i] if i < len(lm) else default
    else:
        v = getattr(lm, k, default)
    if v is None:
        return default
    try:
        return float(v)
    except (TypeError, ValueError):
        return default
