"""
리듬 게임: 고정 8박 패턴으로 화살표가 내려오고, 고개 방향 제스처로 맞춤
- 박자 번호는 1부터 시작, 패턴은 8박마다 반복
- center = 쉬는 박자 (자동 통과, 점수 없음)
- 제스처는 엣지 트리거: 새 방향으로 바뀌는 순간 한 번만 발사
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from playground.analyze.head import HeadDirectionTrigger, get_head_dir
from playground.config.settings import settings
from playground.domain.experiments.base import Experiment, enum_value, require_positive
from playground.domain.motion.physics import Spark, spawn_sparks, update_sparks
from playground.domain.motion.smoothing import ema
from playground.schemas.face_dto import FaceData
from playground.utils.enums.enums import ArrowDirection, ExperimentKind, HeadDirection

logger = logging.getLogger(__name__)

PATTERN: Tuple[ArrowDirection, ...] = (
    ArrowDirection.up, ArrowDirection.center, ArrowDirection.down, ArrowDirection.center,
    ArrowDirection.left, ArrowDirection.right, ArrowDirection.left, ArrowDirection.right,
)
PATTERN_LENGTH = len(PATTERN)

# 화살표 목표 지점 (게임 좌표)
TARGET_X, TARGET_Y = 8.0, 7.0
# 판정 후 화면에 남아 있는 시간
JUDGED_LINGER_SEC = 0.5


def get_arrow_direction(beat: int) -> ArrowDirection:
    """1-indexed 박자 → 화살표 방향. 0 이하 박자도 패턴대로 순환."""
    return PATTERN[(int(beat) - 1) % PATTERN_LENGTH]


@dataclass
class Arrow:
    beat: int
    spawn_time: float
    target_time: float
    direction: ArrowDirection
    result: Optional[str] = None  # "hit" | "miss"
    judged_at: Optional[float] = None


@dataclass
class Gesture:
    time: float
    direction: HeadDirection
    consumed: bool = False


class RhythmGame(Experiment):
    kind = ExperimentKind.rhythm

    def __init__(
        self,
        bpm: float = None,
        travel_time: float = None,
        hit_window: float = None,
        smooth: float = None,
    ):
        super().__init__()
        self.bpm = require_positive("bpm", settings.RHYTHM_BPM if bpm is None else bpm)
        self.travel_time = require_positive(
            "travel_time", settings.RHYTHM_TRAVEL_TIME if travel_time is None else travel_time
        )
        self.hit_window = require_positive(
            "hit_window", settings.RHYTHM_HIT_WINDOW if hit_window is None else hit_window
        )
        self.smooth = settings.RHYTHM_SMOOTH if smooth is None else smooth
        self.beat_interval = 60.0 / self.bpm
        self.trigger = HeadDirectionTrigger()
        self.reset()

    def reset(self) -> None:
        self.time = 0.0
        self.arrows: List[Arrow] = []
        self.gestures: List[Gesture] = []
        self.sparks: List[Spark] = []
        self.next_spawn_beat = 1
        self.score = 0
        self.combo = 0
        self.max_combo = 0
        self.hits = 0
        self.misses = 0
        self.feedback: Optional[str] = None
        self.feedback_time = 0.0
        self.pitch = 0.0
        self.yaw = 0.0
        self.head_direction: Optional[HeadDirection] = None
        self.trigger.reset()

    def beat_time(self, beat: int) -> float:
        return beat * self.beat_interval

    def demo(self) -> None:
        self.reset()
        self.time = 5.0
        self._spawn_arrows()
        self.score = 1250
        self.combo = 8
        self.max_combo = 12
        self.feedback = "HIT!"
        self.feedback_time = self.time - 0.1

    # ── per-frame ────────────────────────────────────────
    def update(self, face: Optional[FaceData], dt: float) -> None:
        self.time += dt

        if face is not None:
            self.pitch = ema(self.pitch, face.head_pitch, self.smooth)
            self.yaw = ema(self.yaw, face.head_yaw, self.smooth)
            self.head_direction = get_head_dir(self.pitch, self.yaw)
        else:
            self.head_direction = None

        fired = self.trigger.feed(self.head_direction)
        if fired is not None:
            self.gestures.append(Gesture(time=self.time, direction=fired))

        self._spawn_arrows()
        self._judge_arrows()
        self.sparks = update_sparks(self.sparks, dt)
        self._cleanup()

    def _spawn_arrows(self) -> None:
        while self.beat_time(self.next_spawn_beat) - self.travel_time <= self.time:
            beat = self.next_spawn_beat
            target = self.beat_time(beat)
            self.arrows.append(
                Arrow(
                    beat=beat,
                    spawn_time=target - self.travel_time,
                    target_time=target,
                    direction=get_arrow_direction(beat),
                )
            )
            self.next_spawn_beat += 1

    def _matching_gesture(self, arrow: Arrow) -> Optional[Gesture]:
        for g in self.gestures:
            if g.consumed or g.direction.value != arrow.direction.value:
                continue
            if abs(g.time - arrow.target_time) <= self.hit_window:
                return g
        return None

    def _judge_arrows(self) -> None:
        for arrow in self.arrows:
            if arrow.result is not None:
                continue
            if arrow.direction == ArrowDirection.center:
                if self.time >= arrow.target_time:
                    arrow.result, arrow.judged_at = "hit", self.time
                continue
            if self.time < arrow.target_time - self.hit_window:
                continue

            gesture = self._matching_gesture(arrow)
            if gesture is not None:
                gesture.consumed = True
                self._on_hit(arrow)
            elif self.time > arrow.target_time + self.hit_window:
                self._on_miss(arrow)

    def _on_hit(self, arrow: Arrow) -> None:
        arrow.result, arrow.judged_at = "hit", self.time
        self.score += 100 * (1 + self.combo // 10)
        self.combo += 1
        self.hits += 1
        self.max_combo = max(self.max_combo, self.combo)
        self.feedback, self.feedback_time = "HIT!", self.time
        self.sparks.extend(spawn_sparks(TARGET_X, TARGET_Y))

    def _on_miss(self, arrow: Arrow) -> None:
        arrow.result, arrow.judged_at = "miss", self.time
        if self.combo >= 10:
            logger.debug("combo %d broken at beat %d", self.combo, arrow.beat)
        self.combo = 0
        self.misses += 1
        self.feedback, self.feedback_time = "MISS", self.time

    def _cleanup(self) -> None:
        self.arrows = [
            a for a in self.arrows
            if a.result is None or self.time - a.judged_at < JUDGED_LINGER_SEC
        ]
        horizon = self.time - 2 * self.hit_window
        self.gestures = [g for g in self.gestures if not g.consumed and g.time >= horizon]

    # ── accessor ─────────────────────────────────────────
    @property
    def current_beat(self) -> int:
        return int(self.time // self.beat_interval)

    def state(self) -> Dict[str, Any]:
        return {
            "beat": self.current_beat,
            "score": self.score,
            "combo": self.combo,
            "max_combo": self.max_combo,
            "hits": self.hits,
            "misses": self.misses,
            "feedback": self.feedback,
            "feedback_age": round(self.time - self.feedback_time, 4) if self.feedback else None,
            "head_direction": enum_value(self.head_direction),
            "pitch": round(self.pitch, 4),
            "yaw": round(self.yaw, 4),
            "sparks": len(self.sparks),
            "arrows": [
                {
                    "beat": a.beat,
                    "direction": a.direction.value,
                    "target_time": round(a.target_time, 4),
                    "progress": round(min(1.0, max(0.0, (self.time - a.spawn_time) / self.travel_time)), 4),
                    "result": a.result,
                }
                for a in self.arrows
                if a.direction != ArrowDirection.center
            ],
        }
