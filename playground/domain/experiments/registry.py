"""
실험 종류 → 구현 클래스 (tagged-union dispatch)
"""
from typing import Any, Dict, Optional, Type

from playground.domain.experiments.base import Experiment
from playground.domain.experiments.body_creature import BodyCreature
from playground.domain.experiments.face_chomp import FaceChomp
from playground.domain.experiments.head_cursor import HeadCursor
from playground.domain.experiments.mindfulness import MindfulnessSession
from playground.domain.experiments.posture import PostureMonitor
from playground.domain.experiments.red_light import RedLightGreenLight
from playground.domain.experiments.rhythm import RhythmGame
from playground.domain.experiments.yoga_hold import YogaHoldGame
from playground.utils.enums.enums import ExperimentKind

EXPERIMENTS: Dict[ExperimentKind, Type[Experiment]] = {
    ExperimentKind.mindfulness: MindfulnessSession,
    ExperimentKind.rhythm: RhythmGame,
    ExperimentKind.yoga: YogaHoldGame,
    ExperimentKind.posture: PostureMonitor,
    ExperimentKind.red_light: RedLightGreenLight,
    ExperimentKind.head_cursor: HeadCursor,
    ExperimentKind.face_chomp: FaceChomp,
    ExperimentKind.body_creature: BodyCreature,
}


def create_experiment(kind: str, options: Optional[Dict[str, Any]] = None) -> Experiment:
    """
    kind 문자열 → 실험 인스턴스.
    알 수 없는 kind / 옵션 이름 / 옵션 값은 ValueError.
    """
    try:
        kind_enum = ExperimentKind(kind)
    except ValueError:
        raise ValueError(f"unknown experiment kind: {kind!r}")

    cls = EXPERIMENTS[kind_enum]
    try:
        return cls(**(options or {}))
    except TypeError as e:
        raise ValueError(f"invalid options for {kind_enum.value}: {e}")
