"""
바디 크리처: 전신 포즈로 움직이는 캐릭터 놀이터
- 사과: 손목을 가져다 대면 터지고, 사람이 보이면 새로 생김
- T 포즈: 양 손목이 어깨 높이 + 어깨폭의 1.8배 이상 벌리면 손끝에서 반짝이
- 비치볼: 6초마다 위에서 떨어지고 손목으로 튕겨 올림
"""
import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from playground.analyze.constants import (
    GAME_HEIGHT,
    GAME_WIDTH,
    L_SHOULDER,
    L_WRIST,
    POSE_LANDMARK_COUNT,
    R_SHOULDER,
    R_WRIST,
)
from playground.analyze.geometry import distance_2d
from playground.domain.experiments.base import Experiment
from playground.domain.motion.people import PersonState, PersonTracker, make_demo_pose
from playground.domain.motion.physics import Spark, spawn_sparks, update_sparks
from playground.domain.motion.smoothing import Point, mirror, to_game_space
from playground.schemas.face_dto import FaceData
from playground.utils.enums.enums import ExperimentKind

logger = logging.getLogger(__name__)

APPLE_R = 0.4
GRAB_DIST = 0.9
APPLE_SPARKS = 20

TPOSE_WRIST_BAND = 1.0
TPOSE_SPREAD_RATIO = 1.8
TPOSE_SPARKS = 3

BALL_R = 0.8
BOUNCE_DIST = 1.2
BALL_GRAVITY = 1.5
BALL_SPAWN_INTERVAL = 6.0
MAX_BALLS = 1
WALL_RESTITUTION = 0.8

# FaceMesh 전체 점 개수 (이보다 적으면 얼굴 무시)
FACE_MESH_POINTS = 468


@dataclass
class Ball:
    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    r: float = BALL_R
    spin: float = 0.0


def is_tpose(pts: Sequence[Point]) -> bool:
    shoulder_y = (pts[L_SHOULDER][1] + pts[R_SHOULDER][1]) / 2
    if abs(pts[L_WRIST][1] - shoulder_y) >= TPOSE_WRIST_BAND:
        return False
    if abs(pts[R_WRIST][1] - shoulder_y) >= TPOSE_WRIST_BAND:
        return False
    spread = abs(pts[L_WRIST][0] - pts[R_WRIST][0])
    shoulder_w = abs(pts[L_SHOULDER][0] - pts[R_SHOULDER][0])
    return spread > shoulder_w * TPOSE_SPREAD_RATIO


class BodyCreature(Experiment):
    kind = ExperimentKind.body_creature

    def __init__(self, width: float = GAME_WIDTH, height: float = GAME_HEIGHT, seed: Optional[int] = None):
        super().__init__()
        if width <= 3 or height <= 3:
            raise ValueError(f"canvas too small: {width}x{height}")
        self.width = width
        self.height = height
        self.rng = np.random.default_rng(seed)
        self.tracker = PersonTracker(width, height)
        self.reset()

    def reset(self) -> None:
        self.time = 0.0
        self.tracker.reset()
        self.sparks: List[Spark] = []
        self.balls: List[Ball] = []
        self.spawn_timer = 0.0
        self.apple: Optional[Point] = None
        self.apples_grabbed = 0
        self.bounces = 0
        self.face_points: Optional[List[Point]] = None

    @property
    def people(self) -> List[PersonState]:
        return self.tracker.people

    def demo(self) -> None:
        self.reset()
        left, right = PersonState(pts=make_demo_pose(5.0)), PersonState(pts=make_demo_pose(11.0))
        left.left_pupil.x, left.left_pupil.y = 4.5, 1.3
        left.right_pupil.x, left.right_pupil.y = 5.5, 1.3
        right.left_pupil.x, right.left_pupil.y = 10.5, 1.3
        right.right_pupil.x, right.right_pupil.y = 11.5, 1.3
        self.tracker.people = [left, right]
        self.balls = [Ball(8.0, 3.0, spin=0.3), Ball(3.0, 5.0, spin=-0.5)]
        for _ in range(15):
            cx = 2.0 if self.rng.random() < 0.5 else 14.0
            angle = self.rng.uniform(0.0, 2.0 * math.pi)
            d = self.rng.uniform(0.0, 1.2)
            self.sparks.append(
                Spark(
                    x=cx + math.cos(angle) * d,
                    y=2.0 + math.sin(angle) * d,
                    vx=0.0,
                    vy=0.0,
                    life=float(self.rng.uniform(0.3, 1.0)),
                    max_life=1.0,
                )
            )

    # ── per-frame ────────────────────────────────────────
    def update(self, face: Optional[FaceData], dt: float) -> None:
        self.time += dt
        if face is not None and len(face.landmarks) >= FACE_MESH_POINTS:
            self.face_points = mirror(to_game_space(face.landmarks, self.width, self.height), self.width)
        else:
            self.face_points = None

    def update_pose(
        self,
        poses: Sequence[Sequence[Any]],
        dt: float,
        world_poses: Optional[Sequence[Sequence[Any]]] = None,
    ) -> None:
        people = self.tracker.update(poses, dt)

        if self.apple is None and len(poses) > 0:
            self._spawn_apple()

        for person in people:
            pts = person.pts
            if len(pts) < POSE_LANDMARK_COUNT:
                continue
            self._grab_apple(pts)
            if is_tpose(pts):
                self._sparkle(pts)
            self._bounce_balls(pts)

        self.spawn_timer += dt
        if self.spawn_timer > BALL_SPAWN_INTERVAL and len(self.balls) < MAX_BALLS:
            self._spawn_ball()
            self.spawn_timer = 0.0

        self._move_balls(dt)
        self.sparks = update_sparks(self.sparks, dt)

    # ── apple ────────────────────────────────────────────
    def _spawn_apple(self) -> None:
        x = 1.5 + self.rng.random() * (self.width - 3)
        y = 1.5 + self.rng.random() * (self.height - 3)
        self.apple = (float(x), float(y))

    def _grab_apple(self, pts: Sequence[Point]) -> None:
        if self.apple is None:
            return
        ax, ay = self.apple
        for wrist in (L_WRIST, R_WRIST):
            wx, wy = pts[wrist]
            if distance_2d(wx, wy, ax, ay) < GRAB_DIST:
                self._burst(ax, ay, APPLE_SPARKS, (1.5, 6.5))
                self.apple = None
                self.apples_grabbed += 1
                logger.debug("apple grabbed (%d total)", self.apples_grabbed)
                return

    # ── sparks ───────────────────────────────────────────
    def _burst(self, x: float, y: float, count: int, speed_range) -> None:
        """위쪽으로 치우친 파티클 (vy - 2)"""
        sparks = spawn_sparks(x, y, count, rng=self.rng, speed_range=speed_range)
        for s in sparks:
            s.vy -= 2.0
        self.sparks.extend(sparks)

    def _sparkle(self, pts: Sequence[Point]) -> None:
        for _ in range(TPOSE_SPARKS):
            wx, wy = pts[L_WRIST if self.rng.random() < 0.5 else R_WRIST]
            self._burst(wx, wy, 1, (1.0, 5.0))

    # ── beach balls ──────────────────────────────────────
    def _spawn_ball(self) -> None:
        ball = Ball(
            x=float(1 + self.rng.random() * (self.width - 2)),
            y=-BALL_R,
            vx=float((self.rng.random() - 0.5) * 2),
            vy=float(0.3 + self.rng.random() * 0.5),
        )
        self.balls.append(ball)
        logger.debug("beach ball spawned at x=%.2f", ball.x)

    def _bounce_balls(self, pts: Sequence[Point]) -> None:
        for ball in self.balls:
            for wrist in (L_WRIST, R_WRIST):
                wx, wy = pts[wrist]
                reach = BOUNCE_DIST + ball.r
                d = distance_2d(ball.x, ball.y, wx, wy)
                if d >= reach:
                    continue
                d = d or 0.01
                nx, ny = (ball.x - wx) / d, (ball.y - wy) / d
                ball.vx = nx * 2 + (self.rng.random() - 0.5)
                ball.vy = -2 - self.rng.random() * 1.5
                ball.x, ball.y = wx + nx * reach, wy + ny * reach
                self.bounces += 1

    def _move_balls(self, dt: float) -> None:
        for ball in self.balls:
            ball.vy += BALL_GRAVITY * dt
            ball.x += ball.vx * dt
            ball.y += ball.vy * dt
            ball.spin += ball.vx * dt * 2
            if ball.x < ball.r:
                ball.x, ball.vx = ball.r, abs(ball.vx) * WALL_RESTITUTION
            if ball.x > self.width - ball.r:
                ball.x, ball.vx = self.width - ball.r, -abs(ball.vx) * WALL_RESTITUTION
        # 화면 아래로 떨어진 공은 제거
        self.balls = [b for b in self.balls if b.y < self.height + 2]

    # ── accessor ─────────────────────────────────────────
    def state(self) -> Dict[str, Any]:
        return {
            "people": len(self.people),
            "apple": None if self.apple is None else [round(v, 4) for v in self.apple],
            "apples_grabbed": self.apples_grabbed,
            "balls": [
                {"x": round(b.x, 4), "y": round(b.y, 4), "r": b.r, "spin": round(b.spin, 4)}
                for b in self.balls
            ],
            "bounces": self.bounces,
            "sparks": len(self.sparks),
            "face_tracked": self.face_points is not None,
            "tpose": [is_tpose(p.pts) for p in self.people if len(p.pts) >= POSE_LANDMARK_COUNT],
        }
