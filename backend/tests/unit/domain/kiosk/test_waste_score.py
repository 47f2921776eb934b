"""Unit tests for the waste score function and the dish score adapter."""

import pytest

from domain.kiosk.core.value_objects.dish_kind import DishKind
from domain.kiosk.scoring import dish_score, net_weight, score


class TestScore:
    """score(net, baseline, decay)."""

    @pytest.mark.parametrize("net", [0, -5, -1000])
    def test_empty_dish_scores_100(self, net):
        assert score(net) == 100

    def test_at_or_below_baseline_scores_100(self):
        assert score(1) == 100
        assert score(60) == 100

    def test_one_decay_constant_over_baseline(self):
        """delta == decay constant -> 100/e rounded half-up."""
        assert score(60 + 43.3) == 37

    def test_heavy_waste_floors_at_zero(self):
        assert score(600) == 0
        assert score(10_000) == 0

    def test_non_increasing(self):
        values = [score(w) for w in range(0, 800, 5)]

        assert values == sorted(values, reverse=True)
        assert all(0 <= v <= 100 for v in values)

    def test_custom_parameters(self):
        assert score(40, baseline=40, decay_constant=28.9) == 100
        assert score(140, baseline=40, decay_constant=28.9) == 3


class TestDishScore:
    """dish_score(raw, dish, override)."""

    def test_full_plate_scores_zero(self):
        assert dish_score(800, DishKind.PLATE) == 0

    def test_empty_salad_bowl_scores_100(self):
        assert dish_score(150, DishKind.SALAD) == 100

    def test_lighter_than_tare_scores_100(self):
        assert dish_score(50, DishKind.CEREAL) == 100

    def test_plate_with_some_waste(self):
        assert dish_score(300, DishKind.PLATE) == 40

    def test_override_bypasses_tare(self):
        """Override is a net weight: 60 g on a plate is at baseline."""
        assert dish_score(9_999, DishKind.PLATE, debug_override=60.0) == 100
        assert dish_score(0, DishKind.PLATE, debug_override=800.0) == 0

    @pytest.mark.parametrize("dish", list(DishKind))
    def test_non_positive_raw_weight(self, dish):
        assert dish_score(0, dish) == 100
        assert dish_score(-20, dish) == 100

    def test_net_weight_floors_at_zero(self):
        assert net_weight(120, DishKind.PLATE) == 0.0
        assert net_weight(260, DishKind.PLATE) == 60.0
