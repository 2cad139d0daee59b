"""
간단한 물리 연출 상태 (렌더링은 프론트 담당, 여기서는 상태만 갱신)
- 스프링-댐퍼 눈동자
- 중력 받는 spark 파티클
"""
from dataclasses import dataclass
from typing import List, Optional, Tuple
import math

import numpy as np

from playground.analyze.constants import EYE_RADIUS, PUPIL_DAMPING, PUPIL_STIFFNESS, SPARK_GRAVITY


@dataclass
class Pupil:
    x: float = 0.0
    y: float = 0.0
    vx: float = 0.0
    vy: float = 0.0


def update_pupil(pupil: Pupil, target_x: float, target_y: float, dt: float) -> Pupil:
    """
    a = k(target - p) - c v, 반암시적 오일러 (v 먼저 갱신 후 p)
    """
    ax = PUPIL_STIFFNESS * (target_x - pupil.x) - PUPIL_DAMPING * pupil.vx
    ay = PUPIL_STIFFNESS * (target_y - pupil.y) - PUPIL_DAMPING * pupil.vy
    pupil.vx += ax * dt
    pupil.vy += ay * dt
    pupil.x += pupil.vx * dt
    pupil.y += pupil.vy * dt
    return pupil


def clamp_pupil(pupil: Pupil, eye_x: float, eye_y: float, max_offset: float = EYE_RADIUS * 0.5) -> Pupil:
    """눈 중심에서 max_offset 이상 벗어나지 않게 (속도는 유지)"""
    dx, dy = pupil.x - eye_x, pupil.y - eye_y
    d = math.hypot(dx, dy)
    if d > max_offset:
        pupil.x = eye_x + dx / d * max_offset
        pupil.y = eye_y + dy / d * max_offset
    return pupil


@dataclass
class Spark:
    x: float
    y: float
    vx: float
    vy: float
    life: float = 1.0  # 1 → 0
    max_life: float = 0.6  # 초
    size: float = 0.1


def spawn_sparks(
    x: float,
    y: float,
    count: int = 12,
    rng: Optional[np.random.Generator] = None,
    speed_range: Tuple[float, float] = (1.5, 6.5),
) -> List[Spark]:
    """(x, y)에서 사방으로 터지는 파티클"""
    rng = rng or np.random.default_rng()
    angles = rng.uniform(0.0, 2.0 * math.pi, count)
    speeds = rng.uniform(speed_range[0], speed_range[1], count)
    lives = rng.uniform(0.4, 0.9, count)
    return [
        Spark(x=x, y=y, vx=float(math.cos(a) * s), vy=float(math.sin(a) * s), max_life=float(lf))
        for a, s, lf in zip(angles, speeds, lives)
    ]


def update_sparks(sparks: List[Spark], dt: float) -> List[Spark]:
    """이동 → 중력 → 수명 감소. 수명 다한 파티클은 제거."""
    for s in sparks:
        s.x += s.vx * dt
        s.y += s.vy * dt
        s.vy += SPARK_GRAVITY * dt
        s.life -= dt / s.max_life
    return [s for s in sparks if s.life > 0]
