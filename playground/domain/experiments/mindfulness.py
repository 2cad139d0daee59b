"""
마인드풀니스 세션 상태 머신

waiting ──(눈 감음[+정지])──▶ active ──(누적 ≥ 목표)──▶ complete
   ▲                            │
   └──── (reset 정책: 중단 시) ──┘

- decay 정책 (기본): 눈 감은 채 움직이면 초과 이동량에 비례해 감소,
  눈 뜨면 고정 속도로 감소. 한번 active 가 되면 waiting 으로 돌아가지 않음.
- reset 정책 (엄격): 중단 즉시 누적 0 + waiting 복귀.
- complete 는 reset() 으로만 빠져나옴.
- 얼굴이 한 번도 안 보인 채 목표 시간이 지나면 자리 비움으로 보고 자동 완료.
"""
import logging
import math
from typing import Any, Callable, Dict, List, Optional

from playground.analyze.constants import FACE_NOSE_TIP
from playground.analyze.head import eyes_closed as eyes_closed_from
from playground.config.settings import settings
from playground.domain.experiments.base import Experiment, require_positive
from playground.domain.motion.smoothing import ExponentialSmoother
from playground.schemas.face_dto import FaceData
from playground.utils.enums.enums import ExperimentKind, InterruptionPolicy, MindfulnessPhase

logger = logging.getLogger(__name__)

PhaseListener = Callable[[MindfulnessPhase, MindfulnessPhase], None]

# 이 시간 이상 누적된 뒤 끊겼을 때만 중단 사유 표시
MEANINGFUL_SESSION_SEC = 0.5
# 부동소수 누적 오차 허용 (dt=1/30 으로 정확히 목표 프레임 수를 채운 경우)
_COMPLETE_EPS = 1e-9


class MindfulnessSession(Experiment):
    kind = ExperimentKind.mindfulness

    def __init__(
        self,
        target_duration: float = None,
        stillness_threshold: float = None,
        policy: str = None,
        nose_smooth: float = None,
        motion_decay_scale: float = None,
        open_eyes_decay_rate: float = None,
    ):
        super().__init__()
        self.target_duration = require_positive(
            "target_duration",
            settings.MINDFULNESS_TARGET_DURATION if target_duration is None else target_duration,
        )
        self.stillness_threshold = require_positive(
            "stillness_threshold",
            settings.MINDFULNESS_STILLNESS_THRESHOLD if stillness_threshold is None else stillness_threshold,
        )
        try:
            self.policy = InterruptionPolicy(policy or settings.MINDFULNESS_POLICY)
        except ValueError:
            raise ValueError(f"unknown interruption policy: {policy!r} (use 'decay' or 'reset')")
        self.nose_smooth = settings.MINDFULNESS_NOSE_SMOOTH if nose_smooth is None else nose_smooth
        # 범위 밖이면 ValueError
        self._nose_x = ExponentialSmoother(self.nose_smooth)
        self._nose_y = ExponentialSmoother(self.nose_smooth)
        self.motion_decay_scale = (
            settings.MINDFULNESS_MOTION_DECAY_SCALE if motion_decay_scale is None else motion_decay_scale
        )
        self.open_eyes_decay_rate = (
            settings.MINDFULNESS_OPEN_EYES_DECAY_RATE if open_eyes_decay_rate is None else open_eyes_decay_rate
        )
        self._listeners: List[PhaseListener] = []
        self.reset()

    # ── observer ─────────────────────────────────────────
    def subscribe(self, listener: PhaseListener) -> Callable[[], None]:
        """phase 변경 시 listener(old, new) 호출. 반환값 호출 시 구독 해제."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_phase(self, new: MindfulnessPhase) -> None:
        old = self.phase
        if old == new:
            return
        self.phase = new
        logger.info(
            "mindfulness phase %s → %s (closed_still=%.2fs, peak=%.2fs)",
            old.value, new.value, self.closed_still_time, self.peak_time,
        )
        for listener in list(self._listeners):
            listener(old, new)

    # ── lifecycle ────────────────────────────────────────
    def reset(self) -> None:
        old = getattr(self, "phase", MindfulnessPhase.waiting)
        self.phase = MindfulnessPhase.waiting
        self.time = 0.0
        self.closed_still_time = 0.0
        self.peak_time = 0.0
        self.interrupt_reason: Optional[str] = None
        self.eyes_closed = False
        self.is_still = True
        self.nose_delta: Optional[float] = None
        self._nose_x.reset()
        self._nose_y.reset()
        self.has_had_face = False
        self.absent_time = 0.0
        if old != MindfulnessPhase.waiting:
            logger.info("mindfulness session reset (%s → waiting)", old.value)
            for listener in list(self._listeners):
                listener(old, MindfulnessPhase.waiting)

    def demo(self) -> None:
        self.reset()
        self.has_had_face = True
        self.phase = MindfulnessPhase.active
        self.eyes_closed = True
        self.closed_still_time = self.target_duration * 0.6
        self.peak_time = self.closed_still_time
        self.time = 8.0

    # ── per-frame ────────────────────────────────────────
    def update(self, face: Optional[FaceData], dt: float) -> None:
        self.time += dt

        if face is None:
            self._on_no_face(dt)
            return

        self.has_had_face = True
        closed = eyes_closed_from(face.blendshapes)
        self._track_nose(face)
        still = self.nose_delta is not None and self.nose_delta < self.stillness_threshold
        self.step(closed, still, dt, self.nose_delta)

    def _track_nose(self, face: FaceData) -> None:
        """코끝 위치 EMA → 직전 평활값과의 거리"""
        if len(face.landmarks) <= FACE_NOSE_TIP:
            self.nose_delta = None
            return
        nose = face.landmarks[FACE_NOSE_TIP]
        sx, sy = self._nose_x.value, self._nose_y.value
        nx, ny = self._nose_x.update(nose.x), self._nose_y.update(nose.y)
        # 첫 샘플은 기준점만 잡음
        self.nose_delta = 0.0 if sx is None else math.hypot(nx - sx, ny - sy)

    def _on_no_face(self, dt: float) -> None:
        if self.phase == MindfulnessPhase.complete:
            return
        if not self.has_had_face:
            self.absent_time += dt
            if self.absent_time >= self.target_duration:
                logger.info("no face for %.1fs, treating as away", self.absent_time)
                self._set_phase(MindfulnessPhase.complete)
            return
        # 일시정지 (누적값 유지)
        if self.phase == MindfulnessPhase.active:
            self.interrupt_reason = "face lost"

    def step(
        self,
        eyes_closed: bool,
        is_still: bool,
        dt: float,
        nose_delta: Optional[float] = None,
    ) -> MindfulnessPhase:
        """
        신호(눈 감음, 정지) 만으로 상태 갱신. update() 가 얼굴 데이터에서 신호를 뽑아 호출.
        """
        self.eyes_closed = eyes_closed
        self.is_still = is_still
        if self.phase == MindfulnessPhase.complete:
            return self.phase

        if self.phase == MindfulnessPhase.waiting:
            can_start = eyes_closed and (is_still or self.policy == InterruptionPolicy.decay)
            if not can_start:
                return self.phase
            self.interrupt_reason = None
            self._set_phase(MindfulnessPhase.active)

        if eyes_closed and is_still:
            self.closed_still_time += dt
            self.interrupt_reason = None
            self.peak_time = max(self.peak_time, self.closed_still_time)
            if self.closed_still_time + _COMPLETE_EPS >= self.target_duration:
                self.closed_still_time = max(self.closed_still_time, self.target_duration)
                self.peak_time = max(self.peak_time, self.closed_still_time)
                self._set_phase(MindfulnessPhase.complete)
            return self.phase

        self._interrupt(eyes_closed, is_still, dt, nose_delta)
        return self.phase

    def _interrupt(self, eyes_closed: bool, is_still: bool, dt: float, nose_delta: Optional[float]) -> None:
        if self.closed_still_time > MEANINGFUL_SESSION_SEC:
            if not eyes_closed and not is_still:
                self.interrupt_reason = "eyes opened + moved"
            elif not eyes_closed:
                self.interrupt_reason = "eyes opened"
            else:
                self.interrupt_reason = "movement detected"

        if self.policy == InterruptionPolicy.reset:
            self.closed_still_time = 0.0
            self._set_phase(MindfulnessPhase.waiting)
            return

        if eyes_closed:
            delta = self.stillness_threshold * 2 if nose_delta is None else nose_delta
            excess = max(0.0, delta - self.stillness_threshold)
            loss = excess * self.motion_decay_scale * dt
        else:
            loss = self.open_eyes_decay_rate * dt
        self.closed_still_time = max(0.0, self.closed_still_time - loss)

    # ── accessor ─────────────────────────────────────────
    @property
    def progress(self) -> float:
        return min(1.0, self.closed_still_time / self.target_duration)

    def state(self) -> Dict[str, Any]:
        return {
            "phase": self.phase.value,
            "policy": self.policy.value,
            "closed_still_time": round(self.closed_still_time, 4),
            "peak_time": round(self.peak_time, 4),
            "target_duration": self.target_duration,
            "progress": round(self.progress, 4),
            "interrupt_reason": self.interrupt_reason,
            "eyes_closed": self.eyes_closed,
            "is_still": self.is_still,
            "nose_delta": self.nose_delta,
        }
