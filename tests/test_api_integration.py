"""
API Integration Tests

FastAPI 엔드포인트 통합 테스트
"""
import pytest
from fastapi import FastAPI, status

from playground.api import discover_routers, include_all_routers
from playground.config.settings import settings
from tests.test_helpers import face_payload, rotation_matrix


@pytest.fixture(autouse=True)
def no_api_key(monkeypatch):
    """기본은 인증 비활성 (.env 영향 제거). require_api_key 가 이후에 덮어씀"""
    monkeypatch.setattr(settings, "INTERNAL_API_KEY", None)


class TestHealthEndpoints:
    """Health Check 엔드포인트 테스트"""

    def test_basic_health_check(self, client):
        response = client.get("/health")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["status"] == "ok"
        assert "env" in data

    def test_openapi_title(self, client):
        response = client.get("/openapi.json")
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["info"]["title"] == "Pose Playground API"

    def test_every_api_module_is_mounted(self):
        app = FastAPI()
        assert include_all_routers(app) == ["experiments", "face", "health", "pose", "rhythm"]
        paths = {route.path for route in app.routes}
        assert {"/health", "/pose/classify", "/experiments/{session_id}/frames"} <= paths

    def test_non_router_export_is_rejected(self, monkeypatch):
        from playground.api import health

        monkeypatch.setattr(health, "ROUTERS", [object()])
        with pytest.raises(TypeError):
            list(discover_routers())


class TestPoseEndpoints:
    """포즈 분류 / 정확도 엔드포인트 테스트"""

    def test_classify_mountain(self, client, mountain_landmarks, landmarks_payload):
        response = client.post("/pose/classify", json={"landmarks": landmarks_payload(mountain_landmarks)})

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["pose"] == "mountain"
        assert data["parts"] == {
            "torso": "upright",
            "left_arm": "down",
            "right_arm": "down",
            "legs": "straight",
        }
        assert data["angles"]["torso_tilt"] < 45.0

    def test_classify_plank(self, client, plank_landmarks, landmarks_payload):
        response = client.post("/pose/classify", json={"landmarks": landmarks_payload(plank_landmarks)})

        data = response.json()
        assert data["pose"] == "plank"
        assert data["parts"]["torso"] == "prone"

    def test_classify_incomplete_input(self, client, mountain_landmarks, landmarks_payload):
        response = client.post("/pose/classify", json={"landmarks": landmarks_payload(mountain_landmarks[:5])})

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"pose": None, "parts": None, "angles": None}

    def test_classify_missing_body(self, client):
        response = client.post("/pose/classify", json={})
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_accuracy_by_pose_name(self, client, mountain_landmarks, landmarks_payload):
        response = client.post(
            "/pose/accuracy",
            json={"landmarks": landmarks_payload(mountain_landmarks), "target": "mountain"},
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert 0.0 <= data["accuracy"] <= 100.0
        assert len(data["per_joint"]) == 8

    def test_accuracy_mountain_beats_plank(self, client, mountain_landmarks, landmarks_payload):
        body = landmarks_payload(mountain_landmarks)
        same = client.post("/pose/accuracy", json={"landmarks": body, "target": "mountain"}).json()
        other = client.post("/pose/accuracy", json={"landmarks": body, "target": "plank"}).json()
        assert same["accuracy"] > other["accuracy"]

    def test_accuracy_unknown_pose(self, client, mountain_landmarks, landmarks_payload):
        response = client.post(
            "/pose/accuracy",
            json={"landmarks": landmarks_payload(mountain_landmarks), "target": "crow"},
        )
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


class TestFaceEndpoints:
    """고개 방향 엔드포인트 테스트"""

    def test_head_pose_from_matrix(self, client):
        response = client.post("/face/head-pose", json={"matrix": rotation_matrix(0.4, 0.0)})

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["direction"] == "down"
        assert data["pitch"] == pytest.approx(0.4)
        assert data["eyes_closed"] is False

    def test_head_pose_neutral(self, client):
        response = client.post("/face/head-pose", json=face_payload(blink=0.9, pitch=0.1, yaw=-0.1))

        data = response.json()
        assert data["direction"] is None
        assert data["eyes_closed"] is True

    def test_bad_matrix(self, client):
        response = client.post("/face/head-pose", json={"matrix": [1.0, 0.0, 0.0]})
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


class TestRhythmEndpoints:
    @pytest.mark.parametrize("beat, direction", [(1, "up"), (2, "center"), (6, "right"), (9, "up")])
    def test_pattern(self, client, beat, direction):
        response = client.get("/rhythm/pattern", params={"beat": beat})

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"beat": beat, "direction": direction, "pattern_length": 8}

    def test_pattern_requires_beat(self, client):
        assert client.get("/rhythm/pattern").status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


class TestExperimentEndpoints:
    """실험 세션 lifecycle 테스트"""

    def _create(self, client, kind: str = "mindfulness", **extra) -> dict:
        response = client.post("/experiments", json={"kind": kind, **extra})
        assert response.status_code == status.HTTP_201_CREATED
        return response.json()

    def test_create_and_get(self, client):
        created = self._create(client)

        assert created["kind"] == "mindfulness"
        assert created["state"]["phase"] == "waiting"

        response = client.get(f"/experiments/{created['id']}")
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["id"] == created["id"]

    def test_mindfulness_completes_over_frames(self, client):
        sid = self._create(client, options={"target_duration": 1.0})["id"]

        frame = {"dt": 1 / 30, "face": face_payload(blink=0.9)}
        for _ in range(35):
            response = client.post(f"/experiments/{sid}/frames", json=frame)
            assert response.status_code == status.HTTP_200_OK

        state = response.json()["state"]
        assert state["phase"] == "complete"
        assert state["progress"] == pytest.approx(1.0)

    def test_frame_without_face(self, client):
        sid = self._create(client, kind="head_cursor")["id"]
        response = client.post(f"/experiments/{sid}/frames", json={"dt": 0.05})

        assert response.json()["state"]["tracking"] is False
        assert response.json()["time"] == pytest.approx(0.05)

    def test_red_light_with_poses(self, client):
        sid = self._create(client, kind="red_light")["id"]
        pose = [{"x": 0.5, "y": 0.5} for _ in range(33)]
        response = client.post(f"/experiments/{sid}/frames", json={"dt": 0.05, "poses": [pose, pose]})

        assert response.json()["state"]["people"] == 2

    @pytest.mark.parametrize("kind", ["face_chomp", "body_creature"])
    def test_creature_sessions(self, client, kind):
        sid = self._create(client, kind=kind, options={"seed": 3})["id"]
        pose = [{"x": 0.5, "y": 0.5} for _ in range(33)]
        response = client.post(f"/experiments/{sid}/frames", json={"dt": 0.05, "poses": [pose]})

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["kind"] == kind
        assert response.json()["time"] == pytest.approx(0.05)

    def test_invalid_dt(self, client):
        sid = self._create(client)["id"]
        response = client.post(f"/experiments/{sid}/frames", json={"dt": 0})
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_reset_and_demo(self, client):
        sid = self._create(client, kind="rhythm", demo=True)["id"]
        assert client.get(f"/experiments/{sid}").json()["state"]["score"] == 1250

        reset = client.post(f"/experiments/{sid}/reset").json()
        assert reset["state"]["score"] == 0
        assert reset["time"] == 0.0

        demo = client.post(f"/experiments/{sid}/demo").json()
        assert demo["state"]["max_combo"] == 12

    def test_list_and_delete(self, client):
        a = self._create(client)["id"]
        b = self._create(client, kind="posture")["id"]

        ids = [s["id"] for s in client.get("/experiments").json()["sessions"]]
        assert ids == [a, b]

        assert client.delete(f"/experiments/{a}").status_code == status.HTTP_204_NO_CONTENT
        assert client.get(f"/experiments/{a}").status_code == status.HTTP_404_NOT_FOUND
        assert client.delete(f"/experiments/{a}").status_code == status.HTTP_404_NOT_FOUND

    @pytest.mark.parametrize("path", ["", "/frames", "/reset", "/demo"])
    def test_unknown_session(self, client, path):
        method = client.get if path == "" else client.post
        kwargs = {"json": {"dt": 0.1}} if path == "/frames" else {}
        response = method(f"/experiments/nope{path}", **kwargs)
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_unknown_kind(self, client):
        response = client.post("/experiments", json={"kind": "snake"})
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_bad_options(self, client):
        response = client.post("/experiments", json={"kind": "mindfulness", "options": {"policy": "bogus"}})
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert "policy" in response.json()["detail"]


class TestAuth:
    """X-Internal-Api-Key 인증 테스트"""

    def test_missing_header(self, client, require_api_key):
        response = client.post("/experiments", json={"kind": "mindfulness"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_wrong_key(self, client, require_api_key):
        response = client.post(
            "/face/head-pose", json={}, headers={"X-Internal-Api-Key": "wrong"}
        )
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_valid_key(self, client, require_api_key, auth_headers):
        response = client.post("/experiments", json={"kind": "mindfulness"}, headers=auth_headers)
        assert response.status_code == status.HTTP_201_CREATED

    def test_health_is_public(self, client, require_api_key):
        assert client.get("/health").status_code == status.HTTP_200_OK
        assert client.get("/rhythm/pattern", params={"beat": 1}).status_code == status.HTTP_200_OK
