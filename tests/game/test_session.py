"""Tests for the survival session: damage, regeneration, revival and ticks."""

from __future__ import annotations

import math

import numpy as np
import pytest

from hazardwalk.events import (
    HealingZoneChangedEvent,
    PlayerDownedEvent,
    PlayerRevivedEvent,
    subscribe_to_event,
)
from hazardwalk.game.haptics import ImpactStyle, RecordingHapticBackend
from hazardwalk.game.session import SurvivalSession
from hazardwalk.game.stats import PlayerStats
from hazardwalk.geo.coords import Coordinate, calculate_distance_meters
from tests.helpers import (
    FAR_AWAY,
    HEALING_CENTER,
    ORIGIN,
    coordinate_at,
    fix_at,
    make_moving_hazard,
    make_zone_set,
)


def make_session(
    hp: float = 1000,
    *,
    use_position_filter: bool = False,
    backend: RecordingHapticBackend | None = None,
    **zone_options: object,
) -> SurvivalSession:
    return SurvivalSession(
        make_zone_set(**zone_options),  # type: ignore[arg-type]
        stats=PlayerStats(hp=hp),
        haptic_backend=backend,
        use_position_filter=use_position_filter,
    )


class TestDamage:
    def test_fix_on_hazard_applies_mitigated_damage(self) -> None:
        session = make_session()

        report = session.on_fix(fix_at(ORIGIN))

        assert report is not None
        assert report.total_damage == 13
        assert session.stats.hp == 987
        assert session.last_damage == 13
        assert session.current_coordinate == ORIGIN
        assert len(session.zone_summaries) == 1

    def test_standing_still_keeps_taking_damage(self) -> None:
        """Each tick re-scores the last coordinate after passive regen."""
        session = make_session()
        session.on_fix(fix_at(ORIGIN))

        session.tick(1.0)

        assert session.stats.hp == 987 + 1 - 13

    def test_far_from_everything_is_safe(self) -> None:
        session = make_session(hp=500)
        session.on_fix(fix_at(FAR_AWAY))
        session.tick(1.0)
        assert session.stats.hp == 501
        assert session.last_damage == 0

    def test_downed_event_published_once(self) -> None:
        downed: list[PlayerDownedEvent] = []
        subscribe_to_event(PlayerDownedEvent, downed.append)
        session = make_session(hp=10)

        session.on_fix(fix_at(ORIGIN))
        session.tick(1.0)

        assert session.stats.hp == 0
        assert downed == [PlayerDownedEvent(damage=13)]

    def test_no_passive_regen_at_zero_hp(self) -> None:
        session = make_session(hp=0)
        session.on_fix(fix_at(FAR_AWAY))
        for _ in range(10):
            session.tick(1.0)
        assert session.stats.hp == 0

    def test_non_finite_fix_keeps_last_coordinate(self) -> None:
        session = make_session()
        session.on_fix(fix_at(FAR_AWAY))

        report = session.on_fix(fix_at(Coordinate(math.nan, math.nan), 1.0))

        assert report is None
        assert session.current_coordinate == FAR_AWAY


class TestTick:
    @pytest.mark.parametrize(
        ("measured", "applied"),
        [(1.0, 1.0), (0.5, 0.5), (10.0, 2.0), (0.0, 1.0), (math.nan, 1.0)],
    )
    def test_delta_is_normalized(self, measured: float, applied: float) -> None:
        session = make_session(hp=100)

        assert session.tick(measured) == applied
        assert session.now == applied
        assert session.stats.hp == 100 + applied

    def test_passive_regen_caps_at_max(self) -> None:
        session = make_session(hp=999.5)
        session.tick(1.0)
        assert session.stats.hp == 1000
        session.tick(1.0)
        assert session.stats.hp == 1000

    def test_tick_without_coordinate_does_not_evaluate(self) -> None:
        session = make_session()
        session.tick(1.0)
        assert session.zone_summaries == []
        assert session.last_damage == 0

    def test_moving_hazard_advances_each_tick(self) -> None:
        session = make_session(moving_hazard=make_moving_hazard())
        assert session.moving_hazard is not None
        before = session.moving_hazard.coordinate

        session.tick(1.0)

        moved = calculate_distance_meters(before, session.moving_hazard.coordinate)
        assert moved == pytest.approx(4, abs=0.01)

    def test_moving_hazard_is_scored(self) -> None:
        session = make_session(moving_hazard=make_moving_hazard())
        assert session.moving_hazard is not None

        session.on_fix(fix_at(session.moving_hazard.coordinate))

        dynamic = [s for s in session.zone_summaries if s.is_dynamic]
        assert len(dynamic) == 1
        assert dynamic[0].distance == pytest.approx(0, abs=1e-6)
        assert session.stats.hp < 1000

    def test_haptics_repeat_on_the_session_clock(self) -> None:
        backend = RecordingHapticBackend()
        session = make_session(backend=backend)

        session.on_fix(fix_at(ORIGIN))
        assert backend.pulses == [ImpactStyle.HEAVY]

        session.tick(0.5)
        assert len(backend.pulses) == 1
        session.tick(0.5)
        assert len(backend.pulses) == 2

    def test_hp_stays_in_bounds_over_a_random_walk(self) -> None:
        generator = np.random.default_rng(99)
        session = make_session(hp=200, moving_hazard=make_moving_hazard())
        for _ in range(400):
            dx, dy = generator.uniform(-120, 120, size=2)
            session.on_fix(fix_at(coordinate_at(float(dx), float(dy))))
            session.tick(float(generator.uniform(0, 3)))
            assert 0 <= session.stats.hp <= session.stats.max_hp
            assert session.stats.hp == round(session.stats.hp, 2)


class TestHealingZone:
    def test_healing_zone_regen_stacks_with_passive(self) -> None:
        session = make_session(hp=500)
        session.on_fix(fix_at(HEALING_CENTER))

        session.tick(1.0)

        assert session.in_healing_zone
        assert session.stats.hp == 504

    def test_entering_and_leaving_publish_events(self) -> None:
        changes: list[HealingZoneChangedEvent] = []
        subscribe_to_event(HealingZoneChangedEvent, changes.append)
        session = make_session()

        session.on_fix(fix_at(HEALING_CENTER))
        session.on_fix(fix_at(HEALING_CENTER, 1.0))
        session.on_fix(fix_at(FAR_AWAY, 2.0))

        assert [c.inside for c in changes] == [True, False]

    def test_revival_after_sixty_seconds_at_zero_hp(self) -> None:
        revived: list[PlayerRevivedEvent] = []
        subscribe_to_event(PlayerRevivedEvent, revived.append)
        session = make_session(hp=0)
        session.on_fix(fix_at(HEALING_CENTER))

        for _ in range(59):
            session.tick(1.0)
        assert session.stats.hp == 0
        assert session.healing_dwell_seconds == 59

        session.tick(1.0)
        assert session.stats.hp == 3
        assert session.healing_dwell_seconds == 0
        assert revived == [PlayerRevivedEvent(hp=3)]

        session.tick(1.0)
        assert session.stats.hp == 7

    def test_dwell_timer_resets_on_leaving(self) -> None:
        session = make_session(hp=0)
        session.on_fix(fix_at(HEALING_CENTER))
        for _ in range(30):
            session.tick(1.0)

        session.on_fix(fix_at(FAR_AWAY, 30.0))
        assert session.healing_dwell_seconds == 0

        session.on_fix(fix_at(HEALING_CENTER, 31.0))
        for _ in range(59):
            session.tick(1.0)
        assert session.stats.hp == 0
        session.tick(1.0)
        assert session.stats.hp == 3

    def test_long_ticks_do_not_shortcut_the_dwell(self) -> None:
        """Capped deltas mean a stalled timer still needs 30 ticks of 2 s."""
        session = make_session(hp=0)
        session.on_fix(fix_at(HEALING_CENTER))
        for _ in range(29):
            session.tick(600.0)
        assert session.stats.hp == 0
        session.tick(600.0)
        assert session.stats.hp == 6

    def test_no_healing_zone_in_layout(self) -> None:
        session = make_session(hp=0, healing=False)
        session.on_fix(fix_at(HEALING_CENTER))
        for _ in range(120):
            session.tick(1.0)
        assert session.stats.hp == 0


class TestTrackingState:
    def test_tracking_lost_clears_position_and_haptics(self) -> None:
        backend = RecordingHapticBackend()
        session = make_session(backend=backend)
        session.on_fix(fix_at(ORIGIN))

        session.on_tracking_lost()

        assert session.current_coordinate is None
        assert session.last_fix is None
        assert session.zone_summaries == []
        assert session.last_damage == 0
        assert session.haptics.stage == 0

        hp = session.stats.hp
        session.tick(1.0)
        assert session.stats.hp == hp + 1
        assert len(backend.pulses) == 1

    def test_tracking_lost_leaves_healing_zone(self) -> None:
        session = make_session(hp=0)
        session.on_fix(fix_at(HEALING_CENTER))
        session.tick(1.0)

        session.on_tracking_lost()

        assert not session.in_healing_zone
        assert session.healing_dwell_seconds == 0

    def test_filtered_session_scores_stabilized_coordinate(self) -> None:
        session = make_session(use_position_filter=True)
        session.on_fix(fix_at(FAR_AWAY, 0.0))
        assert session.filter_deviation == pytest.approx(0)

        # A 3 m step is accepted but only partly followed by the tracker
        # (alpha 0.5) and the smoothing stage (0.35).
        raw = Coordinate(FAR_AWAY.latitude + 3 / 111320, FAR_AWAY.longitude)
        session.on_fix(fix_at(raw, 1.0))

        assert session.current_coordinate != raw
        assert session.filter_deviation == pytest.approx(3 - 0.525, abs=0.01)

    def test_unfiltered_session_has_no_deviation(self) -> None:
        session = make_session()
        session.on_fix(fix_at(FAR_AWAY))
        assert session.position_filter is None
        assert session.filter_deviation is None

    def test_filtered_session_ignores_non_finite_first_fix(self) -> None:
        session = make_session(use_position_filter=True)
        assert session.on_fix(fix_at(Coordinate(math.nan, 0.0))) is None
        assert session.current_coordinate is None

    def test_reset_tracking_clears_filter_and_dwell(self) -> None:
        session = make_session(hp=0, use_position_filter=True)
        session.on_fix(fix_at(HEALING_CENTER))
        session.tick(1.0)

        session.reset_tracking()

        assert session.position_filter is not None
        assert session.position_filter.reference is None
        assert session.healing_dwell_seconds == 0
