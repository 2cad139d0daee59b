from typing import Optional

from playground.config.settings import settings
from playground.services.experiment_service import ExperimentService
from playground.services.session_store import SessionStore

_store: Optional[SessionStore] = None


def get_session_store() -> SessionStore:
    """프로세스 전역 세션 저장소 (최초 호출 시 생성)"""
    global _store
    if _store is None:
        _store = SessionStore(max_sessions=settings.MAX_SESSIONS)
    return _store


def create_experiment_service(store: Optional[SessionStore] = None) -> ExperimentService:
    """
    ExperimentService 인스턴스 생성

    Args:
        store: 세션 저장소 (테스트에서 교체용). 없으면 전역 저장소

    Returns:
        ExperimentService 인스턴스
    """
    return ExperimentService(
        store=store if store is not None else get_session_store(),
        enabled_kinds=settings.EXPERIMENT_KINDS,
    )
