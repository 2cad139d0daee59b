"""
요가 포즈 따라하기: 목표 포즈를 일정 시간 유지하면 다음 포즈로
- 판정은 world landmarks + get_yoga_pose (정확 일치)
- 불일치 시 유지 타이머가 절반 속도로 감소
- 포즈 사이 2초 전환 구간 (판정 안 함)
"""
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from playground.analyze.body_parts import classify_body_parts
from playground.analyze.constants import POSE_LANDMARK_COUNT
from playground.analyze.yoga import calc_accuracy, mismatched_parts, pose_from_parts
from playground.domain.experiments.base import Experiment, enum_value
from playground.domain.motion.people import PersonTracker
from playground.schemas.face_dto import FaceData
from playground.schemas.pose_dto import BodyPartStates
from playground.utils.enums.enums import ExperimentKind, YogaPose

logger = logging.getLogger(__name__)

# (포즈, 유지 시간 초)
POSE_SEQUENCE: Tuple[Tuple[YogaPose, float], ...] = (
    (YogaPose.mountain, 3.0),
    (YogaPose.volcano, 3.0),
    (YogaPose.tpose, 3.0),
    (YogaPose.plank, 5.0),
    (YogaPose.shavasana, 5.0),
)
TRANSITION_DURATION = 2.0
MISMATCH_DECAY_RATE = 0.5


class YogaHoldGame(Experiment):
    kind = ExperimentKind.yoga

    def __init__(self, sequence: Optional[Sequence[Tuple[str, float]]] = None):
        super().__init__()
        seq = sequence if sequence is not None else POSE_SEQUENCE
        if not seq:
            raise ValueError("pose sequence must not be empty")
        self.sequence: List[Tuple[YogaPose, float]] = []
        for name, hold in seq:
            if hold <= 0:
                raise ValueError(f"hold time for {name} must be > 0")
            self.sequence.append((YogaPose(name), float(hold)))
        self.tracker = PersonTracker()
        self.reset()

    def reset(self) -> None:
        self.time = 0.0
        self.current_idx = 0
        self.hold_timer = 0.0
        self.pose_matched = False
        self.poses_completed = 0
        self.in_transition = True
        self.transition_timer = 0.0
        self.parts: Optional[BodyPartStates] = None
        self.detected: Optional[YogaPose] = None
        self.accuracy: Optional[float] = None
        self.tracker.reset()

    def demo(self) -> None:
        self.reset()
        self.current_idx = 2
        self.hold_timer = 1.5
        self.pose_matched = True
        self.poses_completed = 2
        self.in_transition = False
        self.detected = YogaPose.tpose
        self.accuracy = 0.82

    @property
    def target(self) -> YogaPose:
        return self.sequence[self.current_idx][0]

    @property
    def hold_time(self) -> float:
        return self.sequence[self.current_idx][1]

    def update(self, face: Optional[FaceData], dt: float) -> None:
        self.time += dt

    def update_pose(
        self,
        poses: Sequence[Sequence[Any]],
        dt: float,
        world_poses: Optional[Sequence[Sequence[Any]]] = None,
    ) -> None:
        self.tracker.update(poses, dt)

        if self.in_transition:
            self.transition_timer += dt
            if self.transition_timer >= TRANSITION_DURATION:
                self.in_transition = False
            return

        people = self.tracker.people
        if not people or len(people[0].pts) < POSE_LANDMARK_COUNT:
            return

        world = world_poses[0] if world_poses else None
        if world is not None:
            self.parts = classify_body_parts(world)
            self.detected = pose_from_parts(self.parts)
            self.accuracy = calc_accuracy(world, self.target)
        else:
            self.parts, self.detected, self.accuracy = None, None, None
        self.pose_matched = self.detected == self.target

        if self.pose_matched:
            self.hold_timer += dt
            if self.hold_timer >= self.hold_time:
                self._advance()
        else:
            self.hold_timer = max(0.0, self.hold_timer - dt * MISMATCH_DECAY_RATE)

    def _advance(self) -> None:
        logger.info("yoga pose %s held for %.1fs", self.target.value, self.hold_time)
        self.poses_completed += 1
        self.current_idx = (self.current_idx + 1) % len(self.sequence)
        self.hold_timer = 0.0
        self.pose_matched = False
        self.in_transition = True
        self.transition_timer = 0.0

    def state(self) -> Dict[str, Any]:
        return {
            "target": self.target.value,
            "hold_time": self.hold_time,
            "hold_timer": round(self.hold_timer, 4),
            "pose_matched": self.pose_matched,
            "detected": enum_value(self.detected),
            "parts": self.parts.model_dump(mode="json") if self.parts else None,
            "mismatched": mismatched_parts(self.parts, self.target),
            "accuracy": None if self.accuracy is None else round(self.accuracy * 100, 1),
            "poses_completed": self.poses_completed,
            "in_transition": self.in_transition,
            "people": len(self.tracker.people),
        }
