"""Unit tests for the stability gate."""

import pytest

from domain.kiosk.core.value_objects.weight_sample import WeightSample
from domain.kiosk.scoring.stability_gate import (
    is_stable,
    is_weight_ready,
    population_std_dev,
    samples_in_window,
)

NOW = 10_000


def samples(*grams, start=NOW - 500, step=100, stable=None):
    return [WeightSample(g, start + i * step, stable) for i, g in enumerate(grams)]


class TestIsStable:
    """Stability decision."""

    def test_settled_readings_are_stable(self):
        recent = samples(100.0, 100.1, 100.2, 100.1, 100.0)

        assert is_stable(recent, std_dev_threshold=0.2, window_ms=800, now_ms=NOW) is True

    def test_noisy_readings_are_not_stable(self):
        recent = samples(100.0, 101.0, 99.0, 102.0)

        assert is_stable(recent, now_ms=NOW) is False

    def test_fewer_than_three_in_window(self):
        assert is_stable(samples(100.0, 100.0), now_ms=NOW) is False
        assert is_stable([], now_ms=NOW) is False

    def test_old_samples_are_ignored(self):
        """Only samples younger than the window count."""
        old = samples(100.0, 100.0, 100.0, start=NOW - 5_000)
        fresh = samples(100.0, 100.0, start=NOW - 100)

        assert is_stable(old + fresh, window_ms=800, now_ms=NOW) is False

    def test_hardware_flag_wins(self):
        recent = samples(90.0, 110.0)
        recent.append(WeightSample(100.0, NOW - 10, stable=True))

        assert is_stable(recent, now_ms=NOW) is True

    def test_flag_needs_minimum_samples(self):
        recent = [WeightSample(100.0, NOW - 10, stable=True)]

        assert is_stable(recent, now_ms=NOW) is False

    def test_threshold_is_strict(self):
        """std dev equal to the threshold is not stable."""
        recent = samples(99.0, 101.0, 99.0, 101.0)

        assert is_stable(recent, std_dev_threshold=1.0, now_ms=NOW) is False
        assert is_stable(recent, std_dev_threshold=1.01, now_ms=NOW) is True


class TestIsWeightReady:
    """Settled dish weight on the scale."""

    def test_settled_dish(self):
        assert is_weight_ready(samples(250.0, 250.1, 250.0), now_ms=NOW) is True

    def test_settled_empty_scale(self):
        assert is_weight_ready(samples(0.0, 0.0, 0.0), now_ms=NOW) is False

    def test_latest_reading_must_be_positive(self):
        assert is_weight_ready(samples(0.1, 0.1, -0.1), now_ms=NOW) is False

    def test_unsettled_dish(self):
        assert is_weight_ready(samples(120.0, 260.0, 410.0), now_ms=NOW) is False

    def test_no_readings(self):
        assert is_weight_ready([], now_ms=NOW) is False


class TestHelpers:
    """Window filter and std dev."""

    def test_window_boundary_excluded(self):
        recent = [WeightSample(1.0, NOW - 800), WeightSample(2.0, NOW - 799)]

        assert [s.grams for s in samples_in_window(recent, 800, NOW)] == [2.0]

    def test_population_std_dev(self):
        assert population_std_dev([2, 4, 4, 4, 5, 5, 7, 9]) == pytest.approx(2.0)
        assert population_std_dev([5.0]) == 0.0
