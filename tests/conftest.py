"""
Pytest Configuration & Shared Fixtures

이 파일은 모든 테스트에서 재사용 가능한 fixture를 정의합니다.
"""
import pytest
from fastapi.testclient import TestClient
from typing import Dict, List

import numpy as np

from playground.config.settings import settings
from playground.schemas.landmark_dto import Landmark
from playground.utils.fixtures import fixture_path, load_landmarks

from tests.test_helpers import FIXTURES_DIR


# ========================================
# Application Fixtures
# ========================================

@pytest.fixture(scope="session")
def app():
    """FastAPI 애플리케이션 인스턴스"""
    from playground.main import app as fastapi_app
    return fastapi_app


@pytest.fixture
def session_store():
    """테스트마다 새 세션 저장소"""
    from playground.services.session_store import SessionStore
    return SessionStore(max_sessions=8)


@pytest.fixture
def client(app, session_store):
    """FastAPI TestClient (세션 저장소 격리)"""
    from playground.common.dependencies import get_experiment_service
    from playground.services.service_factory import create_experiment_service

    app.dependency_overrides[get_experiment_service] = lambda: create_experiment_service(session_store)
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    """인증 헤더 (X-Internal-Api-Key)"""
    return {"X-Internal-Api-Key": "test-api-key"}


@pytest.fixture
def require_api_key(monkeypatch):
    """INTERNAL_API_KEY 설정 상태로 전환"""
    monkeypatch.setattr(settings, "INTERNAL_API_KEY", "test-api-key")


# ========================================
# Landmark Fixtures
# ========================================

@pytest.fixture
def load_world():
    """fixtures/<name>.landmarks.json 로더"""
    def _load(name: str) -> List[Landmark]:
        return load_landmarks(fixture_path(name, base_dir=FIXTURES_DIR))
    return _load


@pytest.fixture
def mountain_landmarks(load_world) -> List[Landmark]:
    return load_world("yoga-mountain")


@pytest.fixture
def plank_landmarks(load_world) -> List[Landmark]:
    return load_world("yoga-plank")


@pytest.fixture
def landmarks_payload():
    """Landmark 목록 → JSON 요청 본문용 dict 목록"""
    def _payload(landmarks: List[Landmark]) -> List[Dict[str, float]]:
        return [{"x": lm.x, "y": lm.y, "z": lm.z} for lm in landmarks]
    return _payload


# ========================================
# Utility Functions
# ========================================

@pytest.fixture
def assert_valid_angle():
    """각도 값 유효성 검증 헬퍼 (rad)"""
    def _assert(angle: float, min_val: float = 0.0, max_val: float = np.pi):
        assert not np.isnan(angle), "Angle should not be NaN"
        assert min_val <= angle <= max_val, f"Angle {angle} out of range [{min_val}, {max_val}]"
    return _assert
