"""Tests for kinematics.py: sash state machine and hinge transforms."""
import math

import numpy as np
import pytest

from window_geometry.contracts import OpeningKind, SashMode
from window_geometry.kinematics import (
    HINGES, KinematicsConfig, SashBank, SashPhase, active_hinge,
    create_sash_state, hinge_transform, motion_transform, open_target,
    opening_fraction, select_mode, tick, toggle, toggle_mode,
)

DT = 1.0 / 60.0


def _settle(state, config=None, dt=DT, max_ticks=5000):
    config = config or KinematicsConfig()
    ticks = 0
    while state.is_animating and ticks < max_ticks:
        tick(state, dt, config)
        ticks += 1
    return ticks


class TestHinges:
    def test_targets_per_kind(self):
        cfg = KinematicsConfig()
        assert active_hinge(OpeningKind.TILT).open_angle(cfg) == pytest.approx(math.pi / 16)
        assert active_hinge(OpeningKind.TURN_LEFT).open_angle(cfg) == pytest.approx(-0.6 * math.pi)
        assert active_hinge(OpeningKind.TURN_RIGHT).open_angle(cfg) == pytest.approx(0.6 * math.pi)

    def test_fixed_has_no_hinge(self):
        assert active_hinge(OpeningKind.FIXED) is None
        assert create_sash_state(0, OpeningKind.FIXED).pivot is None

    def test_hybrid_hinge_follows_mode(self):
        assert active_hinge(OpeningKind.TILT_TURN_LEFT, SashMode.TURN) is HINGES["turn-left"]
        assert active_hinge(OpeningKind.TILT_TURN_LEFT, SashMode.TILT) is HINGES["tilt"]
        assert active_hinge(OpeningKind.TILT_TURN_RIGHT, SashMode.TURN) is HINGES["turn-right"]

    def test_pivots(self):
        assert HINGES["tilt"].pivot_fraction == (0.0, -0.5)
        assert HINGES["turn-left"].pivot_fraction == (-0.5, 0.0)
        assert HINGES["turn-right"].pivot_fraction == (0.5, 0.0)

    @pytest.mark.parametrize("kind,mode", [
        (OpeningKind.TILT, SashMode.TURN),
        (OpeningKind.TURN_LEFT, SashMode.TURN),
        (OpeningKind.TURN_RIGHT, SashMode.TURN),
        (OpeningKind.TILT_TURN_LEFT, SashMode.TILT),
        (OpeningKind.TILT_TURN_RIGHT, SashMode.TURN),
    ])
    def test_open_sash_swings_into_room(self, kind, mode):
        state = create_sash_state(0, kind)
        state.mode = mode
        state.current_angle = open_target(state)
        transform = hinge_transform(state, 400, 1000, 0.0)
        # Every sash corner moves toward +Z or stays on the hinge line.
        for x, y in [(-200, -500), (200, -500), (200, 500), (-200, 500)]:
            moved = transform @ [x, y, 0.0, 1.0]
            assert moved[2] >= -1e-9


class TestToggle:
    def test_open_then_close(self):
        state = create_sash_state(0, OpeningKind.TURN_LEFT)
        toggle(state)
        assert state.phase is SashPhase.OPENING
        assert state.is_open
        _settle(state)
        assert state.phase is SashPhase.OPEN
        assert state.current_angle == pytest.approx(-0.6 * math.pi)

        toggle(state)
        assert state.phase is SashPhase.CLOSING
        _settle(state)
        assert state.phase is SashPhase.CLOSED
        assert state.current_angle == 0.0

    def test_fixed_toggle_is_noop(self):
        state = create_sash_state(0, OpeningKind.FIXED)
        toggle(state)
        assert state.phase is SashPhase.CLOSED
        assert not state.is_open
        assert state.target_angle == 0.0

    def test_reverse_mid_opening(self):
        state = create_sash_state(0, OpeningKind.TILT)
        toggle(state)
        tick(state, DT)
        assert 0 < state.current_angle < math.pi / 16
        toggle(state)
        assert state.phase is SashPhase.CLOSING
        assert state.target_angle == 0.0
        _settle(state)
        assert state.phase is SashPhase.CLOSED

    def test_close_before_first_tick_is_immediate(self):
        state = create_sash_state(0, OpeningKind.TILT)
        toggle(state)
        toggle(state)
        assert state.phase is SashPhase.CLOSED
        assert not state.is_animating


class TestConvergence:
    @pytest.mark.parametrize("kind", [
        OpeningKind.TILT, OpeningKind.TURN_LEFT, OpeningKind.TURN_RIGHT,
    ])
    @pytest.mark.parametrize("dt", [1 / 144, 1 / 60, 1 / 30, 0.1, 0.5, 2.0])
    def test_converges_without_overshoot(self, kind, dt):
        config = KinematicsConfig()
        state = create_sash_state(0, kind)
        toggle(state, config)
        target = state.target_angle
        ticks = 0
        while state.is_animating:
            tick(state, dt, config)
            ticks += 1
            assert abs(state.current_angle) <= abs(target) + 1e-12
            assert state.current_angle * target >= 0
            assert ticks < 1000
        assert abs(state.current_angle - target) < config.snap_tolerance

    def test_tick_count_bounded(self):
        config = KinematicsConfig()
        state = create_sash_state(0, OpeningKind.TURN_RIGHT)
        toggle(state, config)
        target = abs(state.target_angle)
        factor = 1 - config.rate * DT
        bound = math.ceil(math.log(config.snap_tolerance / target) / math.log(factor)) + 1
        assert _settle(state, config) <= bound

    def test_non_positive_dt_is_ignored(self):
        state = create_sash_state(0, OpeningKind.TILT)
        toggle(state)
        tick(state, 0.0)
        tick(state, -1.0)
        assert state.current_angle == 0.0

    def test_monotonic_approach(self):
        state = create_sash_state(0, OpeningKind.TURN_LEFT)
        toggle(state)
        previous = 0.0
        while state.is_animating:
            tick(state, DT)
            assert state.current_angle <= previous
            previous = state.current_angle


class TestModeSwitching:
    def _open_hybrid(self, mode=SashMode.TURN):
        state = create_sash_state(0, OpeningKind.TILT_TURN_LEFT)
        select_mode(state, mode)
        toggle(state)
        _settle(state)
        return state

    def test_closed_switch_is_immediate(self):
        state = create_sash_state(0, OpeningKind.TILT_TURN_RIGHT)
        select_mode(state, SashMode.TILT)
        assert state.mode is SashMode.TILT
        assert state.phase is SashPhase.CLOSED

    def test_open_switch_closes_first(self):
        state = self._open_hybrid()
        select_mode(state, SashMode.TILT)
        assert state.phase is SashPhase.SWITCHING_MODE
        assert state.target_angle == 0.0
        assert state.mode is SashMode.TURN
        assert state.pending_mode is SashMode.TILT

        # The turn hinge stays in use until the sash is back at 0.
        while state.phase is SashPhase.SWITCHING_MODE:
            assert state.mode is SashMode.TURN
            assert state.current_angle <= 0.0
            tick(state, DT)
        assert state.current_angle == 0.0
        assert state.mode is SashMode.TILT
        assert state.phase is SashPhase.OPENING

        _settle(state)
        assert state.phase is SashPhase.OPEN
        assert state.current_angle == pytest.approx(math.pi / 16)

    def test_toggle_during_switch_cancels_reopen(self):
        state = self._open_hybrid()
        select_mode(state, SashMode.TILT)
        tick(state, DT)
        toggle(state)
        assert state.phase is SashPhase.CLOSING
        assert not state.is_open
        _settle(state)
        assert state.phase is SashPhase.CLOSED
        assert state.current_angle == 0.0
        assert state.mode is SashMode.TILT

    def test_reselecting_current_mode_cancels_switch(self):
        state = self._open_hybrid()
        select_mode(state, SashMode.TILT)
        tick(state, DT)
        select_mode(state, SashMode.TURN)
        assert state.phase is SashPhase.OPENING
        assert state.pending_mode is None
        _settle(state)
        assert state.current_angle == pytest.approx(-0.6 * math.pi)

    def test_mode_change_while_closing_is_deferred(self):
        state = self._open_hybrid()
        toggle(state)
        tick(state, DT)
        select_mode(state, SashMode.TILT)
        assert state.mode is SashMode.TURN
        _settle(state)
        assert state.phase is SashPhase.CLOSED
        assert state.mode is SashMode.TILT

    def test_reopen_while_closing_with_pending_mode(self):
        state = self._open_hybrid()
        toggle(state)
        tick(state, DT)
        select_mode(state, SashMode.TILT)
        toggle(state)
        assert state.phase is SashPhase.SWITCHING_MODE
        _settle(state)
        assert state.mode is SashMode.TILT
        assert state.phase is SashPhase.OPEN

    def test_toggle_mode_flips(self):
        state = create_sash_state(0, OpeningKind.TILT_TURN_LEFT)
        toggle_mode(state)
        assert state.mode is SashMode.TILT
        toggle_mode(state)
        assert state.mode is SashMode.TURN

    def test_non_hybrid_ignores_mode(self):
        state = create_sash_state(0, OpeningKind.TURN_LEFT)
        select_mode(state, SashMode.TILT)
        assert state.mode is SashMode.TURN


class TestTransforms:
    def test_closed_is_identity(self):
        state = create_sash_state(0, OpeningKind.TURN_LEFT)
        np.testing.assert_allclose(hinge_transform(state, 400, 1000, 10.5), np.eye(4))

    def test_pivot_is_fixed_point(self):
        state = create_sash_state(0, OpeningKind.TURN_LEFT)
        state.current_angle = -1.0
        transform = hinge_transform(state, 400, 1000, 10.5)
        pivot = [-200.0, 123.0, 10.5, 1.0]
        np.testing.assert_allclose(transform @ pivot, pivot, atol=1e-9)

    def test_opening_fraction_and_forward_offset(self):
        state = create_sash_state(0, OpeningKind.TILT)
        assert opening_fraction(state) == 0.0
        state.current_angle = math.pi / 32
        assert opening_fraction(state) == pytest.approx(0.5)
        transform = motion_transform(state, 400, 1000, 0.0, 7.0)
        bottom_center = transform @ [0.0, -500.0, 0.0, 1.0]
        assert bottom_center[2] == pytest.approx(3.5)

    def test_fixed_fraction_is_zero(self):
        assert opening_fraction(create_sash_state(0, OpeningKind.FIXED)) == 0.0


class TestSashBank:
    def test_sized_to_pane_count(self):
        bank = SashBank([OpeningKind.TILT, OpeningKind.FIXED])
        assert len(bank) == 2
        assert [s.index for s in bank] == [0, 1]

    def test_pane_count_change_resets_all(self):
        bank = SashBank([OpeningKind.TILT, OpeningKind.TILT])
        bank.toggle(0)
        bank.tick(DT)
        bank.sync([OpeningKind.TILT, OpeningKind.TILT, OpeningKind.TILT])
        assert len(bank) == 3
        assert all(s.phase is SashPhase.CLOSED and s.current_angle == 0 for s in bank)

    def test_same_count_keeps_state(self):
        bank = SashBank([OpeningKind.TILT, OpeningKind.TURN_LEFT])
        bank.toggle(0)
        bank.tick(DT)
        angle = bank[0].current_angle
        bank.sync([OpeningKind.TILT, OpeningKind.TURN_LEFT])
        assert bank[0].current_angle == angle

    def test_kind_change_resets_that_sash(self):
        bank = SashBank([OpeningKind.TILT, OpeningKind.TILT])
        bank.toggle(0)
        bank.toggle(1)
        bank.tick(DT)
        bank.sync([OpeningKind.TILT, OpeningKind.FIXED])
        assert bank[0].is_open
        assert bank[1].opening_kind is OpeningKind.FIXED
        assert not bank[1].is_open
