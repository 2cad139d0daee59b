"""
실험 세션 서비스: 생성 → 프레임 반영 → 상태 조회 → 재시작/데모 → 정리
"""
import logging
from typing import List

from playground.config.settings import settings
from playground.domain.experiments.base import Experiment
from playground.domain.experiments.registry import create_experiment
from playground.schemas.experiment_dto import (
    CreateExperimentRequest,
    ExperimentSnapshot,
    FrameInput,
)
from playground.services.session_store import SessionStore

logger = logging.getLogger(__name__)


class ExperimentService:
    def __init__(self, store: SessionStore, enabled_kinds: List[str] = None):
        self.store = store
        self.enabled_kinds = list(enabled_kinds if enabled_kinds is not None else settings.EXPERIMENT_KINDS)

    @staticmethod
    def _snapshot(session_id: str, experiment: Experiment) -> ExperimentSnapshot:
        return ExperimentSnapshot(id=session_id, **experiment.snapshot())

    def create(self, req: CreateExperimentRequest) -> ExperimentSnapshot:
        kind = req.kind.value
        if kind not in self.enabled_kinds:
            raise ValueError(f"experiment kind disabled: {kind}")
        experiment = create_experiment(kind, req.options)
        if req.demo:
            experiment.demo()
        session_id = self.store.add(experiment)
        return self._snapshot(session_id, experiment)

    def push_frame(self, session_id: str, frame: FrameInput) -> ExperimentSnapshot:
        with self.store.lock:
            experiment = self.store.get(session_id)
            experiment.update(frame.face, frame.dt)
            # body 미검출 프레임도 빈 목록으로 전달 (phase 타이머는 계속 진행)
            experiment.update_pose(frame.poses or [], frame.dt, frame.world_poses)
            return self._snapshot(session_id, experiment)

    def get(self, session_id: str) -> ExperimentSnapshot:
        return self._snapshot(session_id, self.store.get(session_id))

    def list(self) -> List[ExperimentSnapshot]:
        return [self._snapshot(sid, exp) for sid, exp in self.store.items()]

    def reset(self, session_id: str) -> ExperimentSnapshot:
        with self.store.lock:
            experiment = self.store.get(session_id)
            experiment.reset()
            logger.info("session reset: %s (%s)", session_id, experiment.kind.value)
            return self._snapshot(session_id, experiment)

    def demo(self, session_id: str) -> ExperimentSnapshot:
        with self.store.lock:
            experiment = self.store.get(session_id)
            experiment.demo()
            return self._snapshot(session_id, experiment)

    def delete(self, session_id: str) -> None:
        self.store.remove(session_id)
