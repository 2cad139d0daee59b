"""
자세 모니터
1) 보정: 입 벌림 + 눈 감음을 1.5초 유지 → 현재 코 높이/pitch 를 기준값으로 저장
   (제스처를 풀면 카운트다운이 2배 속도로 줄어듦)
2) 이후: 기준 대비 코가 내려가거나 고개가 숙여진 정도를 0~1 drift 로 표시
"""
import logging
from typing import Any, Dict, Optional

from playground.analyze.constants import FACE_NOSE_TIP, GAME_HEIGHT
from playground.analyze.head import eyes_closed, mouth_open
from playground.config.settings import settings
from playground.domain.experiments.base import Experiment, require_positive
from playground.domain.motion.smoothing import ema
from playground.schemas.face_dto import FaceData
from playground.utils.enums.enums import ExperimentKind

logger = logging.getLogger(__name__)

SMOOTH = 0.85
# 보정 제스처용 blendshape 임계값 (눈 감음 판정보다 느슨)
GESTURE_THRESHOLD = 0.4
# drift 정규화: 코 하강 (게임 단위), pitch 증가 (rad)
NOSE_DROP_SCALE = 0.4
PITCH_SCALE = 0.15


class PostureMonitor(Experiment):
    kind = ExperimentKind.posture

    def __init__(self, calibrate_hold: float = None, alert_drift: float = None):
        super().__init__()
        self.calibrate_hold = require_positive(
            "calibrate_hold",
            settings.POSTURE_CALIBRATE_HOLD if calibrate_hold is None else calibrate_hold,
        )
        self.alert_drift = require_positive(
            "alert_drift", settings.POSTURE_ALERT_DRIFT if alert_drift is None else alert_drift
        )
        self.reset()

    def reset(self) -> None:
        self.time = 0.0
        self.calibrated = False
        self.calibrating = 0.0
        self.smooth_nose_y = GAME_HEIGHT / 2
        self.smooth_pitch = 0.0
        self.baseline_nose_y = 0.0
        self.baseline_pitch = 0.0
        self.drift = 0.0

    def demo(self) -> None:
        self.reset()
        self.calibrated = True
        self.drift = 0.15
        self.smooth_nose_y = GAME_HEIGHT / 2
        self.time = 3.0

    @property
    def alert(self) -> bool:
        return self.calibrated and self.drift > self.alert_drift

    def update(self, face: Optional[FaceData], dt: float) -> None:
        self.time += dt
        if face is None or len(face.landmarks) <= FACE_NOSE_TIP:
            return

        nose_y = face.landmarks[FACE_NOSE_TIP].y * GAME_HEIGHT
        self.smooth_nose_y = ema(self.smooth_nose_y, nose_y, SMOOTH)
        self.smooth_pitch = ema(self.smooth_pitch, face.head_pitch, SMOOTH)

        if not self.calibrated:
            gesture = (
                mouth_open(face.blendshapes, GESTURE_THRESHOLD)
                and eyes_closed(face.blendshapes, GESTURE_THRESHOLD)
            )
            if gesture:
                self.calibrating += dt
                if self.calibrating >= self.calibrate_hold:
                    self.baseline_nose_y = self.smooth_nose_y
                    self.baseline_pitch = self.smooth_pitch
                    self.calibrated = True
                    self.calibrating = 0.0
                    logger.info(
                        "posture baseline set (nose_y=%.3f, pitch=%.3f)",
                        self.baseline_nose_y, self.baseline_pitch,
                    )
            else:
                self.calibrating = max(0.0, self.calibrating - dt * 2)
            return

        # 아래/앞으로 기우는 쪽(+)만 본다
        y_drift = (self.smooth_nose_y - self.baseline_nose_y) / NOSE_DROP_SCALE
        pitch_drift = (self.smooth_pitch - self.baseline_pitch) / PITCH_SCALE
        self.drift = min(1.0, max(0.0, y_drift, pitch_drift))

    def state(self) -> Dict[str, Any]:
        return {
            "calibrated": self.calibrated,
            "calibration_progress": round(min(1.0, self.calibrating / self.calibrate_hold), 4),
            "drift": round(self.drift, 4),
            "alert": self.alert,
            "baseline_nose_y": round(self.baseline_nose_y, 4) if self.calibrated else None,
            "baseline_pitch": round(self.baseline_pitch, 4) if self.calibrated else None,
        }
