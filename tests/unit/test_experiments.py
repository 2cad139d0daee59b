# tests/unit/test_experiments.py
"""posture / red light / head cursor / yoga hold / registry"""
import pytest

from playground.domain.experiments.head_cursor import HeadCursor
from playground.domain.experiments.posture import PostureMonitor
from playground.domain.experiments.red_light import PHASE_DURATIONS, RedLightGreenLight
from playground.domain.experiments.registry import EXPERIMENTS, create_experiment
from playground.domain.experiments.yoga_hold import POSE_SEQUENCE, TRANSITION_DURATION, YogaHoldGame
from playground.utils.enums.enums import ExperimentKind, LightPhase, YogaPose
from tests.test_helpers import make_face, run_frames

DT = 1.0 / 30.0


class TestPosture:
    def test_calibration_gesture(self):
        m = PostureMonitor(calibrate_hold=1.5)
        gesture = make_face(blink=0.9, jaw_open=0.6)
        run_frames(m, 44, DT, gesture)
        assert not m.calibrated
        run_frames(m, 2, DT, gesture)
        assert m.calibrated

    def test_release_decays_countdown_twice_as_fast(self):
        m = PostureMonitor(calibrate_hold=1.5)
        run_frames(m, 30, DT, make_face(blink=0.9, jaw_open=0.6))
        held = m.calibrating
        run_frames(m, 10, DT, make_face())
        assert m.calibrating == pytest.approx(held - 20 * DT)

    def test_slouch_raises_alert(self):
        m = PostureMonitor()
        m.calibrated = True
        m.baseline_nose_y = m.smooth_nose_y
        m.baseline_pitch = 0.0
        run_frames(m, 60, DT, make_face(nose_y=0.5, pitch=0.3))
        assert m.drift == pytest.approx(1.0)
        assert m.alert

    def test_leaning_back_is_not_drift(self):
        m = PostureMonitor()
        m.calibrated = True
        m.baseline_nose_y = m.smooth_nose_y
        run_frames(m, 60, DT, make_face(nose_y=0.3, pitch=-0.3))
        assert m.drift == 0.0
        assert not m.alert

    def test_no_face_keeps_state(self):
        m = PostureMonitor()
        m.demo()
        m.update(None, DT)
        assert m.state()["drift"] == pytest.approx(0.15)


class TestRedLight:
    @staticmethod
    def _pose(dx: float = 0.0):
        return [{"x": 0.5 + dx, "y": 0.5} for _ in range(33)]

    def test_phase_cycle(self):
        g = RedLightGreenLight()
        order = []
        for _ in range(int(14 / 0.1)):
            g.update_pose([self._pose()], 0.1)
            if not order or order[-1] != g.phase:
                order.append(g.phase)
        assert order == [LightPhase.green, LightPhase.countdown, LightPhase.red, LightPhase.green]

    def test_moving_during_red_is_caught(self):
        g = RedLightGreenLight()
        g.phase = LightPhase.red
        g.update_pose([self._pose()], DT)
        g.update_pose([self._pose(0.3)], DT)
        assert g.last_movement > g.movement_threshold
        assert g.caught

    def test_moving_during_green_is_fine(self):
        g = RedLightGreenLight()
        g.update_pose([self._pose()], DT)
        g.update_pose([self._pose(0.3)], DT)
        assert g.last_movement > g.movement_threshold
        assert not g.caught

    def test_green_clears_caught(self):
        g = RedLightGreenLight()
        g.phase, g.caught = LightPhase.red, True
        g.phase_timer = PHASE_DURATIONS[LightPhase.red]
        g.update_pose([self._pose()], DT)
        assert g.phase == LightPhase.green
        assert not g.caught

    def test_demo(self):
        g = RedLightGreenLight()
        g.demo()
        assert g.state()["phase"] == "red"
        assert g.state()["people"] == 1


class TestHeadCursor:
    def test_mirrored_and_smoothed(self):
        c = HeadCursor()
        c.update(make_face(nose_x=0.2, nose_y=0.5), DT)
        # 0.5*0.7 + (1-0.2)*0.3
        assert c.x == pytest.approx(0.59)
        assert c.y == pytest.approx(0.5)

    def test_clamped_and_trail_bounded(self):
        c = HeadCursor()
        run_frames(c, 50, DT, make_face(nose_x=-1.0, nose_y=2.0))
        assert c.x == 1.0
        assert c.y == 1.0
        assert len(c.trail) == 20

    def test_tracking_flag(self):
        c = HeadCursor()
        c.update(None, DT)
        assert c.state()["tracking"] is False


class TestYogaHold:
    def test_holds_then_advances(self, mountain_landmarks):
        g = YogaHoldGame()
        image = [[{"x": 0.5, "y": 0.5} for _ in range(33)]]
        # 전환 구간
        for _ in range(int(TRANSITION_DURATION / 0.1) + 1):
            g.update_pose(image, 0.1, [mountain_landmarks])
        assert not g.in_transition
        for _ in range(31):
            g.update_pose(image, 0.1, [mountain_landmarks])
        assert g.poses_completed == 1
        assert g.target == YogaPose.volcano
        assert g.in_transition

    def test_mismatch_decays_at_half_rate(self, plank_landmarks):
        g = YogaHoldGame()
        g.in_transition = False
        g.hold_timer = 1.0
        image = [[{"x": 0.5, "y": 0.5} for _ in range(33)]]
        g.update_pose(image, 0.2, [plank_landmarks])
        assert g.hold_timer == pytest.approx(0.9)
        state = g.state()
        assert state["detected"] == "plank"
        assert "torso" in state["mismatched"]

    def test_default_sequence(self):
        assert [p for p, _ in POSE_SEQUENCE] == list(YogaPose)
        assert dict(POSE_SEQUENCE)[YogaPose.plank] == 5.0

    def test_bad_sequence(self):
        with pytest.raises(ValueError):
            YogaHoldGame(sequence=[("mountain", 0)])
        with pytest.raises(ValueError):
            YogaHoldGame(sequence=[("crow", 3)])


class TestRegistry:
    def test_every_kind_registered(self):
        assert set(EXPERIMENTS) == set(ExperimentKind)

    @pytest.mark.parametrize("kind", [k.value for k in ExperimentKind])
    def test_create_and_snapshot(self, kind):
        exp = create_experiment(kind)
        exp.update(None, DT)
        exp.update_pose([], DT)
        snap = exp.snapshot()
        assert snap["kind"] == kind
        assert isinstance(snap["state"], dict)
        exp.demo()
        exp.cleanup()

    def test_unknown_kind(self):
        with pytest.raises(ValueError):
            create_experiment("snake")

    def test_unknown_option(self):
        with pytest.raises(ValueError):
            create_experiment("rhythm", {"tempo": 90})
