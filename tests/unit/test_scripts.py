# tests/unit/test_scripts.py
from unittest.mock import Mock

import pytest
import requests

from playground.config.settings import settings
from scripts import mindfulness_gate
from scripts.fixtures.classify_fixtures import build_report, main as classify_main
from tests.test_helpers import FIXTURES_DIR


class TestClassifyFixtures:
    def test_report_has_every_pose(self):
        df = build_report(FIXTURES_DIR)
        poses = dict(zip(df["fixture"], df["pose"]))
        assert poses == {
            "yoga-mountain": "mountain",
            "yoga-plank": "plank",
            "yoga-shavasana": "shavasana",
            "yoga-tpose": "tpose",
            "yoga-volcano": "volcano",
        }
        assert (df["points"] == 33).all()
        assert "angle.torso_tilt" in df.columns

    def test_writes_csv(self, tmp_path):
        out = tmp_path / "report.csv"
        classify_main(["--fixtures-dir", str(FIXTURES_DIR), "--out", str(out)])
        assert out.read_text(encoding="utf-8").startswith("fixture,")


def _response(payload):
    res = Mock()
    res.json.return_value = payload
    res.raise_for_status.return_value = None
    return res


class TestMindfulnessGate:
    def _patch_session(self, monkeypatch, http):
        monkeypatch.setattr(mindfulness_gate.requests, "Session", lambda: http)
        monkeypatch.setattr(mindfulness_gate.time, "sleep", lambda _: None)

    def test_created_session_is_fed_faceless_frames(self, monkeypatch):
        http = Mock()
        http.headers = {}
        http.post.side_effect = [_response({"id": "abc"})] + [
            _response({"state": {"phase": p}}) for p in ("waiting", "waiting", "complete")
        ]
        self._patch_session(monkeypatch, http)

        assert mindfulness_gate.main(["--duration", "3", "--api-key", "k"]) == 0
        http.get.assert_not_called()
        assert http.headers["X-Internal-Api-Key"] == "k"
        create, *frames = http.post.call_args_list
        assert create.kwargs["json"]["options"] == {"target_duration": 3.0, "policy": "decay"}
        assert len(frames) == 3
        assert all(c.args[0].endswith("/experiments/abc/frames") for c in frames)
        assert frames[0].kwargs["json"] == {"dt": 0.5}

    def test_frame_dt_is_capped(self, monkeypatch):
        http = Mock()
        http.headers = {}
        http.post.side_effect = [_response({"id": "abc"}), _response({"state": {"phase": "complete"}})]
        self._patch_session(monkeypatch, http)

        assert mindfulness_gate.main(["--interval", "2"]) == 0
        assert http.post.call_args.kwargs["json"] == {"dt": 1.0}

    def test_existing_session_is_only_polled(self, monkeypatch):
        http = Mock()
        http.headers = {}
        http.get.side_effect = [
            _response({"state": {"phase": p}}) for p in ("waiting", "active", "complete")
        ]
        self._patch_session(monkeypatch, http)

        assert mindfulness_gate.main(["--session", "xyz"]) == 0
        http.post.assert_not_called()
        assert http.get.call_count == 3
        assert http.get.call_args.args[0].endswith("/experiments/xyz")

    def test_request_error_exits_nonzero(self, monkeypatch):
        http = Mock()
        http.headers = {}
        http.post.side_effect = requests.ConnectionError("refused")
        self._patch_session(monkeypatch, http)

        assert mindfulness_gate.main([]) == 1

    def test_completes_against_running_service(self, client, monkeypatch, capsys):
        """실제 라우터 + 서비스: 얼굴 없는 프레임만으로 목표 시간 후 완료"""
        monkeypatch.setattr(settings, "INTERNAL_API_KEY", None)
        self._patch_session(monkeypatch, client)

        code = mindfulness_gate.main([
            "--base-url", "http://testserver",
            "--duration", "1", "--interval", "0.25", "--timeout", "30",
        ])

        out = capsys.readouterr().out
        assert code == 0
        assert "phase=complete" in out
        session_id = out.split("session=")[1].split(",")[0]
        snap = client.get(f"/experiments/{session_id}").json()
        assert snap["state"]["phase"] == "complete"
        assert snap["time"] == pytest.approx(1.0)
