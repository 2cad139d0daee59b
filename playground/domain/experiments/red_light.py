"""
무궁화 꽃이 피었습니다 (red light, green light)
green 6s → countdown 3s → red 4s 반복. red 동안 손목/어깨가 움직이면 caught.
"""
import logging
from typing import Any, Dict, List, Optional, Sequence

from playground.domain.experiments.base import Experiment
from playground.domain.motion.people import (
    PersonState,
    PersonTracker,
    make_demo_pose,
    measure_movement,
    save_positions,
)
from playground.domain.motion.smoothing import Point
from playground.schemas.face_dto import FaceData
from playground.utils.enums.enums import ExperimentKind, LightPhase

logger = logging.getLogger(__name__)

PHASE_DURATIONS = {
    LightPhase.green: 6.0,
    LightPhase.countdown: 3.0,
    LightPhase.red: 4.0,
}
NEXT_PHASE = {
    LightPhase.green: LightPhase.countdown,
    LightPhase.countdown: LightPhase.red,
    LightPhase.red: LightPhase.green,
}
# 프레임당 이동량 합 (게임 단위). 어린아이 기준으로 넉넉하게
MOVEMENT_THRESHOLD = 0.8


class RedLightGreenLight(Experiment):
    kind = ExperimentKind.red_light

    def __init__(self, movement_threshold: float = MOVEMENT_THRESHOLD):
        super().__init__()
        if movement_threshold <= 0:
            raise ValueError("movement_threshold must be > 0")
        self.movement_threshold = movement_threshold
        self.tracker = PersonTracker()
        self.reset()

    def reset(self) -> None:
        self.time = 0.0
        self.tracker.reset()
        self.prev_positions: List[List[Point]] = []
        self.last_movement = 0.0
        self.flash = 0.0
        self._enter(LightPhase.green)

    def _enter(self, phase: LightPhase) -> None:
        self.phase = phase
        self.phase_timer = 0.0
        if phase == LightPhase.green:
            self.caught = False

    def demo(self) -> None:
        self.reset()
        person = PersonState(pts=make_demo_pose(8.0))
        person.left_pupil.x, person.left_pupil.y = 7.5, 1.3
        person.right_pupil.x, person.right_pupil.y = 8.5, 1.3
        self.tracker.people = [person]
        self.phase = LightPhase.red
        self.phase_timer = 1.0

    @property
    def people(self) -> List[PersonState]:
        return self.tracker.people

    def update(self, face: Optional[FaceData], dt: float) -> None:
        self.time += dt
        self.flash = max(0.0, self.flash - dt * 1.5)

    def update_pose(
        self,
        poses: Sequence[Sequence[Any]],
        dt: float,
        world_poses: Optional[Sequence[Sequence[Any]]] = None,
    ) -> None:
        people = self.tracker.update(poses, dt)
        self.phase_timer += dt

        # 측정은 항상, 판정은 red 에서만
        if people:
            self.last_movement = measure_movement(people, self.prev_positions)
            if self.phase == LightPhase.red and self.last_movement > self.movement_threshold:
                if not self.caught:
                    logger.info("caught moving during red (movement=%.2f)", self.last_movement)
                self.flash = 1.0
                self.caught = True
        self.prev_positions = save_positions(people)

        if self.phase_timer > PHASE_DURATIONS[self.phase]:
            self._enter(NEXT_PHASE[self.phase])

    def state(self) -> Dict[str, Any]:
        return {
            "phase": self.phase.value,
            "phase_timer": round(self.phase_timer, 4),
            "phase_duration": PHASE_DURATIONS[self.phase],
            "caught": self.caught,
            "movement": round(self.last_movement, 4),
            "flash": round(self.flash, 4),
            "people": len(self.people),
        }
