"""
여러 사람(body) 추적 상태
- 사람별 평활된 게임 좌표 + 눈동자 물리
- 프레임 간 움직임량 측정 (red light 게임)
"""
from dataclasses import dataclass, field
from typing import Any, List, Sequence

from playground.analyze.constants import (
    POSE_LANDMARK_COUNT,
    NOSE, L_EYE, R_EYE, L_MOUTH, R_MOUTH,
    L_SHOULDER, R_SHOULDER, L_ELBOW, R_ELBOW, L_WRIST, R_WRIST,
    L_HIP, R_HIP, L_KNEE, R_KNEE, L_ANKLE, R_ANKLE,
    EYE_RADIUS, GAME_HEIGHT, GAME_WIDTH,
)
from playground.analyze.geometry import distance_2d
from playground.domain.motion.physics import Pupil, clamp_pupil, update_pupil
from playground.domain.motion.smoothing import Point, mirror, smooth_points, to_game_space

# 움직임 측정 대상: 양 손목 + 양 어깨
TRACKED_POINTS = (L_WRIST, R_WRIST, L_SHOULDER, R_SHOULDER)


@dataclass
class PersonState:
    pts: List[Point] = field(default_factory=list)
    left_pupil: Pupil = field(default_factory=Pupil)
    right_pupil: Pupil = field(default_factory=Pupil)


class PersonTracker:
    """
    poses(image space, 0~1) → 사람별 상태.
    사람 수는 poses 길이에 맞춰 늘리거나 줄임. 33개 미만인 body 는 이번 프레임 건너뜀.
    """

    def __init__(self, width: float = GAME_WIDTH, height: float = GAME_HEIGHT):
        self.width = width
        self.height = height
        self.people: List[PersonState] = []

    def update(self, poses: Sequence[Sequence[Any]], dt: float) -> List[PersonState]:
        while len(self.people) < len(poses):
            self.people.append(PersonState())
        del self.people[len(poses):]

        max_off = EYE_RADIUS * 0.5
        for person, pose in zip(self.people, poses):
            if len(pose) < POSE_LANDMARK_COUNT:
                continue
            target = mirror(to_game_space(pose, self.width, self.height), self.width)
            person.pts = smooth_points(person.pts, target)

            for pupil, eye in ((person.left_pupil, L_EYE), (person.right_pupil, R_EYE)):
                ex, ey = person.pts[eye]
                update_pupil(pupil, ex, ey, dt)
                clamp_pupil(pupil, ex, ey, max_off)
        return self.people

    def reset(self) -> None:
        self.people = []


def tracked_points(pts: Sequence[Point]) -> List[Point]:
    return [pts[i] for i in TRACKED_POINTS]


def save_positions(people: Sequence[PersonState]) -> List[List[Point]]:
    return [
        tracked_points(p.pts) if len(p.pts) >= POSE_LANDMARK_COUNT else []
        for p in people
    ]


def measure_movement(people: Sequence[PersonState], prev: Sequence[Sequence[Point]]) -> float:
    """직전 프레임 대비 추적점 이동거리 합 (게임 단위). 이전 기록 없는 사람은 0."""
    total = 0.0
    for i, person in enumerate(people):
        if len(person.pts) < POSE_LANDMARK_COUNT:
            continue
        current = tracked_points(person.pts)
        if i < len(prev) and len(prev[i]) == len(current):
            for (cx, cy), (px, py) in zip(current, prev[i]):
                total += distance_2d(cx, cy, px, py)
    return total


def make_demo_pose(cx: float) -> List[Point]:
    """데모 화면용 만세 자세 (게임 좌표)"""
    pts: List[Point] = [(cx, 4.5)] * POSE_LANDMARK_COUNT
    layout = {
        NOSE: (cx, 1.5),
        L_EYE: (cx - 0.5, 1.3), R_EYE: (cx + 0.5, 1.3),
        L_SHOULDER: (cx - 1.5, 3.0), R_SHOULDER: (cx + 1.5, 3.0),
        L_ELBOW: (cx - 2.5, 2.5), R_ELBOW: (cx + 2.5, 2.5),
        L_WRIST: (cx - 3.0, 1.8), R_WRIST: (cx + 3.0, 1.8),
        L_HIP: (cx - 1.0, 5.5), R_HIP: (cx + 1.0, 5.5),
        L_KNEE: (cx - 1.2, 7.0), R_KNEE: (cx + 1.2, 7.0),
        L_ANKLE: (cx - 1.5, 8.5), R_ANKLE: (cx + 1.5, 8.5),
        L_MOUTH: (cx - 0.4, 1.9), R_MOUTH: (cx + 0.4, 1.9),
    }
    for idx, pt in layout.items():
        pts[idx] = pt
    return pts
