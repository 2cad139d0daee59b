# tests/unit/test_motion.py
import math

import numpy as np
import pytest

from playground.analyze.constants import EYE_RADIUS, L_EYE, L_WRIST, R_SHOULDER
from playground.domain.motion.people import PersonTracker, make_demo_pose, measure_movement, save_positions
from playground.domain.motion.physics import Pupil, Spark, clamp_pupil, spawn_sparks, update_pupil, update_sparks
from playground.domain.motion.smoothing import ExponentialSmoother, ema, mirror, smooth_points, to_game_space


class TestSmoothing:
    def test_ema(self):
        assert ema(0.0, 10.0, 0.5) == pytest.approx(5.0)
        assert ema(4.0, 10.0, 0.0) == pytest.approx(10.0)

    def test_smooth_points_blends(self):
        out = smooth_points([(0.0, 0.0)], [(2.0, 4.0)], smooth=0.5)
        assert out == [(1.0, 2.0)]

    def test_length_change_resets_to_target(self):
        target = [(1.0, 1.0), (2.0, 2.0)]
        assert smooth_points([(0.0, 0.0)], target) == target

    def test_mirror_and_scale(self):
        pts = to_game_space([{"x": 0.25, "y": 0.5}], width=16, height=9)
        assert pts == [(4.0, 4.5)]
        assert mirror(pts, 16) == [(12.0, 4.5)]

    def test_smoother_initialises_on_first_sample(self):
        s = ExponentialSmoother(0.8)
        assert s.update(3.0) == 3.0
        assert s.update(8.0) == pytest.approx(4.0)
        s.reset()
        assert s.value is None

    def test_smoother_rejects_bad_factor(self):
        with pytest.raises(ValueError):
            ExponentialSmoother(1.0)


class TestPupil:
    def test_spring_moves_toward_target(self):
        p = Pupil()
        for _ in range(5):
            update_pupil(p, 1.0, 0.0, 1 / 60)
        assert 0.0 < p.x
        assert p.vx > 0.0

    def test_settles_at_target(self):
        p = Pupil()
        for _ in range(600):
            update_pupil(p, 0.3, -0.2, 1 / 60)
        assert p.x == pytest.approx(0.3, abs=1e-3)
        assert p.y == pytest.approx(-0.2, abs=1e-3)

    def test_clamp_to_half_eye_radius(self):
        p = clamp_pupil(Pupil(x=5.0, y=0.0), 0.0, 0.0)
        assert math.hypot(p.x, p.y) == pytest.approx(EYE_RADIUS * 0.5)
        inside = clamp_pupil(Pupil(x=0.01, y=0.0), 0.0, 0.0)
        assert inside.x == 0.01


class TestSparks:
    def test_gravity_and_life(self):
        s = Spark(x=0.0, y=0.0, vx=1.0, vy=0.0, max_life=1.0)
        [s] = update_sparks([s], 0.1)
        assert s.x == pytest.approx(0.1)
        assert s.vy == pytest.approx(0.3)
        assert s.life == pytest.approx(0.9)

    def test_dead_sparks_removed(self):
        sparks = [Spark(x=0, y=0, vx=0, vy=0, max_life=0.1), Spark(x=0, y=0, vx=0, vy=0, max_life=5.0)]
        alive = update_sparks(sparks, 0.2)
        assert len(alive) == 1
        assert alive[0].max_life == 5.0

    def test_spawn_is_seedable(self):
        a = spawn_sparks(1.0, 2.0, count=5, rng=np.random.default_rng(3))
        b = spawn_sparks(1.0, 2.0, count=5, rng=np.random.default_rng(3))
        assert [(s.vx, s.vy) for s in a] == [(s.vx, s.vy) for s in b]
        assert all(s.x == 1.0 and s.y == 2.0 for s in a)


def _image_pose(cx: float = 0.5):
    return [{"x": cx, "y": 0.5} for _ in range(33)]


class TestPeople:
    def test_tracks_people_count(self):
        tracker = PersonTracker()
        tracker.update([_image_pose(0.3), _image_pose(0.7)], 1 / 30)
        assert len(tracker.people) == 2
        tracker.update([_image_pose(0.3)], 1 / 30)
        assert len(tracker.people) == 1

    def test_short_body_is_skipped(self):
        tracker = PersonTracker()
        tracker.update([_image_pose()[:20]], 1 / 30)
        assert len(tracker.people) == 1
        assert tracker.people[0].pts == []

    def test_points_are_mirrored_game_space(self):
        tracker = PersonTracker(width=16, height=9)
        tracker.update([_image_pose(0.25)], 1 / 30)
        assert tracker.people[0].pts[0] == pytest.approx((12.0, 4.5))

    def test_pupils_stay_within_eye(self):
        tracker = PersonTracker()
        for i in range(30):
            tracker.update([_image_pose(0.2 + 0.02 * i)], 1 / 30)
        person = tracker.people[0]
        ex, ey = person.pts[L_EYE]
        assert math.hypot(person.left_pupil.x - ex, person.left_pupil.y - ey) <= EYE_RADIUS * 0.5 + 1e-9

    def test_measure_movement(self):
        tracker = PersonTracker()
        tracker.update([_image_pose()], 1 / 30)
        prev = save_positions(tracker.people)
        assert measure_movement(tracker.people, prev) == 0.0

        tracker.people[0].pts[L_WRIST] = (tracker.people[0].pts[L_WRIST][0] + 0.3, 4.5)
        tracker.people[0].pts[R_SHOULDER] = (tracker.people[0].pts[R_SHOULDER][0], 4.5 + 0.4)
        assert measure_movement(tracker.people, prev) == pytest.approx(0.7)

    def test_no_history_no_movement(self):
        tracker = PersonTracker()
        tracker.update([_image_pose()], 1 / 30)
        assert measure_movement(tracker.people, []) == 0.0

    def test_demo_pose_shape(self):
        pts = make_demo_pose(8.0)
        assert len(pts) == 33
        assert pts[L_EYE] == (7.5, 1.3)
