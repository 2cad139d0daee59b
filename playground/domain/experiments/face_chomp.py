"""
페이스 촘프: 코끝으로 캐릭터를 움직여 과일을 먹고 해골을 피함
- 좌표는 전부 정규화(0~1), 화면 좌우 반전
- 과일 5개마다 해골 추가, 해골에 닿으면 2초 뒤 자동 재시작
"""
import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import numpy as np

from playground.analyze.constants import FACE_NOSE_TIP
from playground.analyze.geometry import distance_2d
from playground.domain.experiments.base import Experiment, require_positive
from playground.domain.motion.smoothing import ema
from playground.schemas.face_dto import FaceData
from playground.utils.enums.enums import ExperimentKind

logger = logging.getLogger(__name__)

SMOOTH = 0.6
# 반지름은 화면 픽셀 기준 → 짧은 변 길이로 나눠 정규화
PLAYER_R = 20
FRUIT_R = 14
SKULL_R = 16
FRUIT_COUNT = 3
SKULL_COUNT = 2
SKULL_SPEED = 0.06  # 초당
SKULL_EVERY = 5
WALL_MIN, WALL_MAX = 0.05, 0.95
RESPAWN_DELAY = 2.0
VIEW_SIZE = 720.0


@dataclass
class Thing:
    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0


def _clamp(v: float, lo: float = 0.0, hi: float = 1.0) -> float:
    return max(lo, min(hi, v))


class FaceChomp(Experiment):
    kind = ExperimentKind.face_chomp

    def __init__(self, view_size: float = VIEW_SIZE, smooth: float = SMOOTH, seed: Optional[int] = None):
        super().__init__()
        if not 0.0 <= smooth < 1.0:
            raise ValueError(f"smooth must be in [0, 1), got {smooth}")
        self.view_size = require_positive("view_size", view_size)
        self.smooth = smooth
        self.rng = np.random.default_rng(seed)
        self.collect_r = (PLAYER_R + FRUIT_R) / self.view_size
        self.hit_r = (PLAYER_R + SKULL_R) / self.view_size
        self.reset()

    # ── spawn ────────────────────────────────────────────
    def _rand_pos(self) -> Thing:
        x, y = 0.1 + self.rng.random(2) * 0.8
        return Thing(float(x), float(y))

    def _spawn_fruit(self) -> Thing:
        return self._rand_pos()

    def _spawn_skull(self) -> Thing:
        skull = self._rand_pos()
        angle = self.rng.uniform(0.0, 2.0 * math.pi)
        skull.vx = math.cos(angle) * SKULL_SPEED
        skull.vy = math.sin(angle) * SKULL_SPEED
        return skull

    def _respawn(self) -> None:
        self.x, self.y = 0.5, 0.5
        self.score = 0
        self.alive = True
        self.death_time: Optional[float] = None
        self.fruits: List[Thing] = [self._spawn_fruit() for _ in range(FRUIT_COUNT)]
        self.skulls: List[Thing] = [self._spawn_skull() for _ in range(SKULL_COUNT)]

    # ── lifecycle ────────────────────────────────────────
    def reset(self) -> None:
        self.time = 0.0
        self.tracking = False
        self.best_score = 0
        self._respawn()

    def demo(self) -> None:
        self.reset()
        self.tracking = True
        self.x, self.y = 0.45, 0.5
        self.score = 7
        self.best_score = 7
        self.fruits = [Thing(0.25, 0.3), Thing(0.7, 0.25), Thing(0.6, 0.75)]
        self.skulls = [Thing(0.8, 0.55, -0.04, 0.04), Thing(0.2, 0.7, 0.05, -0.03), Thing(0.4, 0.15, 0.06, 0.0)]

    # ── per-frame ────────────────────────────────────────
    def update(self, face: Optional[FaceData], dt: float) -> None:
        self.time += dt
        if not self.alive:
            if self.time - self.death_time > RESPAWN_DELAY:
                logger.debug("face chomp respawn (score=%d)", self.score)
                self._respawn()
            return

        self.tracking = face is not None and len(face.landmarks) > FACE_NOSE_TIP
        if self.tracking:
            nose = face.landmarks[FACE_NOSE_TIP]
            self.x = _clamp(ema(self.x, 1.0 - nose.x, self.smooth))
            self.y = _clamp(ema(self.y, nose.y, self.smooth))

        self._move_skulls(dt)
        self._eat_fruits()
        self._check_skulls()

    def _move_skulls(self, dt: float) -> None:
        for s in self.skulls:
            s.x += s.vx * dt
            s.y += s.vy * dt
            if not WALL_MIN <= s.x <= WALL_MAX:
                s.vx = -s.vx
            if not WALL_MIN <= s.y <= WALL_MAX:
                s.vy = -s.vy
            s.x = _clamp(s.x, WALL_MIN, WALL_MAX)
            s.y = _clamp(s.y, WALL_MIN, WALL_MAX)

    def _eat_fruits(self) -> None:
        # 새로 생긴 과일은 다음 프레임부터 판정
        for i in reversed(range(len(self.fruits))):
            f = self.fruits[i]
            if distance_2d(self.x, self.y, f.x, f.y) >= self.collect_r:
                continue
            self.score += 1
            self.best_score = max(self.best_score, self.score)
            self.fruits[i] = self._spawn_fruit()
            if self.score % SKULL_EVERY == 0:
                self.skulls.append(self._spawn_skull())
                logger.debug("score %d: skull added (%d total)", self.score, len(self.skulls))

    def _check_skulls(self) -> None:
        for s in self.skulls:
            if distance_2d(self.x, self.y, s.x, s.y) < self.hit_r:
                self.alive = False
                self.death_time = self.time
                logger.info("face chomp: caught by a skull at score %d", self.score)
                return

    # ── accessor ─────────────────────────────────────────
    def state(self) -> Dict[str, Any]:
        return {
            "x": round(self.x, 4),
            "y": round(self.y, 4),
            "score": self.score,
            "best_score": self.best_score,
            "alive": self.alive,
            "tracking": self.tracking,
            "respawn_in": (
                None if self.alive else round(max(0.0, RESPAWN_DELAY - (self.time - self.death_time)), 4)
            ),
            "fruits": [[round(f.x, 4), round(f.y, 4)] for f in self.fruits],
            "skulls": [[round(s.x, 4), round(s.y, 4)] for s in self.skulls],
        }
