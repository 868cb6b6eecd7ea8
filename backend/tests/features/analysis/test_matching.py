"""
Tests for distance matching.

Band inclusion, fastest-first ordering and degenerate inputs.
"""

import pytest

from app.features.analysis import DistancePreset, band_bounds, custom_preset, in_band, match


TEN_K = DistancePreset(label="10K", target_km=10.0, tolerance_km=1.0)


# =============================================================================
# Band inclusion
# =============================================================================

class TestBand:
    """Tests for the inclusive tolerance band."""

    def test_bounds(self):
        assert band_bounds(TEN_K) == (9.0, 11.0)

    def test_edges_are_inclusive(self, make_activity):
        """8.9 and 11.1 fall outside, 9.0 / 10.0 / 11.0 inside."""
        activities = [
            make_activity(1, distance_km=8.9),
            make_activity(2, distance_km=9.0),
            make_activity(3, distance_km=10.0),
            make_activity(4, distance_km=11.0),
            make_activity(5, distance_km=11.1),
        ]

        matched = match(activities, TEN_K)

        assert sorted(a.external_id for a in matched) == [2, 3, 4]

    def test_zero_distance_never_matches(self, make_activity):
        """A small custom band can reach 0 km; pace would be undefined."""
        tiny = DistancePreset(label="0.3 km", target_km=0.3, tolerance_km=0.5)
        assert not in_band(make_activity(1, distance_km=0.0), tiny)
        assert in_band(make_activity(2, distance_km=0.4), tiny)

    @pytest.mark.parametrize("target_km,edge_km", [
        (5.1, 5.61),    # 5.1 + 0.51 is 5.609999999999999 in raw float
        (8.3, 7.47),    # 8.3 - 0.83 is 7.470000000000001 in raw float
        (8.3, 9.13),
        (21.0975, 23.20725),
    ])
    def test_custom_band_edges_are_inclusive(self, make_activity, target_km, edge_km):
        """A run exactly on a custom band edge is kept despite float error."""
        preset = custom_preset(target_km)

        assert [a.external_id for a in match([make_activity(1, distance_km=edge_km)], preset)] == [1]

    def test_custom_band_still_excludes_outside(self, make_activity):
        preset = custom_preset(5.1)

        assert match([make_activity(1, distance_km=5.611)], preset) == []
        assert match([make_activity(2, distance_km=4.589)], preset) == []

    def test_bounds_are_rounded(self):
        assert band_bounds(custom_preset(5.1)) == (4.59, 5.61)


# =============================================================================
# Ordering
# =============================================================================

class TestOrdering:
    """Tests for fastest-pace-first ordering."""

    def test_faster_run_first(self, make_activity):
        slow = make_activity(1, distance_km=10.0, moving_time=3000)
        fast = make_activity(2, distance_km=10.0, moving_time=2900)

        matched = match([slow, fast], TEN_K)

        assert [a.external_id for a in matched] == [2, 1]

    def test_orders_by_pace_not_time(self, make_activity):
        """A longer run with more time can still be the faster pace."""
        short = make_activity(1, distance_km=9.5, moving_time=2900)   # ~305 s/km
        long = make_activity(2, distance_km=10.8, moving_time=3100)   # ~287 s/km

        matched = match([short, long], TEN_K)

        assert [a.external_id for a in matched] == [2, 1]

    def test_ties_keep_input_order(self, make_activity):
        activities = [
            make_activity(7, distance_km=10.0, moving_time=3000),
            make_activity(3, distance_km=10.0, moving_time=3000),
            make_activity(5, distance_km=10.0, moving_time=3000),
        ]

        matched = match(activities, TEN_K)

        assert [a.external_id for a in matched] == [7, 3, 5]


# =============================================================================
# Degenerate input
# =============================================================================

class TestDegenerate:
    """Empty inputs give empty results, never errors."""

    def test_empty_activities(self):
        assert match([], TEN_K) == []

    def test_none_activities(self):
        assert match(None, TEN_K) == []

    def test_no_preset(self, make_activity):
        assert match([make_activity(1)], None) == []

    def test_nothing_in_band(self, make_activity):
        assert match([make_activity(1, distance_km=21.1)], TEN_K) == []

    @pytest.mark.parametrize("distance_km", [4.4, 5.6])
    def test_outside_5k_band(self, make_activity, distance_km):
        five_k = DistancePreset(label="5K", target_km=5.0, tolerance_km=0.5)
        assert match([make_activity(1, distance_km=distance_km)], five_k) == []
