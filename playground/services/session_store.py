"""
실험 세션 저장소 (프로세스 메모리)
- 세션 ID(uuid hex) → Experiment
- 용량(MAX_SESSIONS) 초과 시 가장 오래된 세션부터 정리
"""
import logging
import threading
import uuid
from collections import OrderedDict
from typing import Iterator, Optional, Tuple

from playground.config.settings import settings
from playground.domain.experiments.base import Experiment

# ---------- 로거 ----------
logger = logging.getLogger(__name__)
if not logging.getLogger().handlers:
    logging.basicConfig(
        level=settings.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )


class SessionNotFoundError(KeyError):
    """존재하지 않거나 이미 정리된 세션"""


class SessionStore:
    def __init__(self, max_sessions: Optional[int] = None):
        self.max_sessions = settings.MAX_SESSIONS if max_sessions is None else max_sessions
        if self.max_sessions < 1:
            raise ValueError("max_sessions must be >= 1")
        self._sessions: "OrderedDict[str, Experiment]" = OrderedDict()
        # 프레임 처리는 세션 단위로 직렬화 (단일 writer)
        self._lock = threading.RLock()

    def __len__(self) -> int:
        return len(self._sessions)

    def add(self, experiment: Experiment) -> str:
        with self._lock:
            while len(self._sessions) >= self.max_sessions:
                old_id, old = self._sessions.popitem(last=False)
                old.cleanup()
                logger.warning("session capacity reached, evicted %s (%s)", old_id, old.kind.value)
            session_id = uuid.uuid4().hex
            self._sessions[session_id] = experiment
        logger.info("session created: %s (%s)", session_id, experiment.kind.value)
        return session_id

    def get(self, session_id: str) -> Experiment:
        with self._lock:
            try:
                return self._sessions[session_id]
            except KeyError:
                raise SessionNotFoundError(session_id)

    def remove(self, session_id: str) -> Experiment:
        with self._lock:
            try:
                experiment = self._sessions.pop(session_id)
            except KeyError:
                raise SessionNotFoundError(session_id)
        experiment.cleanup()
        logger.info("session deleted: %s (%s)", session_id, experiment.kind.value)
        return experiment

    def items(self) -> Iterator[Tuple[str, Experiment]]:
        with self._lock:
            return iter(list(self._sessions.items()))

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    def clear(self) -> None:
        with self._lock:
            for experiment in self._sessions.values():
                experiment.cleanup()
            self._sessions.clear()
