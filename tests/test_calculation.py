"""Tests for loan payment and utility cost calculations."""

import pytest
from housing_advice_jp import (
    Household,
    LoanParams,
    calc_monthly_payment,
    calc_rent_difference,
    calc_utility_cost_difference,
    estimate_utility_cost,
    estimate_utility_cost_flat,
)


class TestCalcMonthlyPayment:
    def test_known_value(self):
        """予算3000万 → 借入2700万, 年1.0%, 420回 → 76,217円"""
        assert calc_monthly_payment(3000) == 76217

    def test_returns_int(self):
        assert isinstance(calc_monthly_payment(2500), int)

    def test_zero_rate_integer_division(self):
        """金利0%は元金÷回数（整数除算）"""
        loan = LoanParams(annual_rate=0.0)
        assert calc_monthly_payment(3000, loan) == 27_000_000 // 420
        assert calc_monthly_payment(3000, loan) == 64285

    def test_smallest_budget_positive(self):
        assert calc_monthly_payment(1) > 0

    def test_monotonic_in_budget(self):
        payments = [calc_monthly_payment(b) for b in range(1, 10001, 37)]
        assert all(p > 0 for p in payments)
        assert payments == sorted(payments)

    def test_custom_term(self):
        shorter = calc_monthly_payment(3000, LoanParams(term_years=20))
        assert shorter > calc_monthly_payment(3000)

    def test_higher_rate_costs_more(self):
        assert calc_monthly_payment(3000, LoanParams(annual_rate=0.02)) > calc_monthly_payment(3000)


class TestEstimateUtilityCost:
    @pytest.mark.parametrize(
        "label, expected",
        [
            ("単身", 15000.0),
            ("夫婦2人", 22500.0),
            ("夫婦+子1人", 30000.0),
            ("夫婦+子3人", 45000.0),
        ],
    )
    def test_half_base_increment(self, label, expected):
        assert estimate_utility_cost(label) == pytest.approx(expected)

    @pytest.mark.parametrize(
        "label, expected",
        [
            ("単身", 15000),
            ("夫婦2人", 23000),
            ("夫婦+子2人", 39000),
        ],
    )
    def test_flat_increment(self, label, expected):
        """簡易版は2人目以降8,000円ずつ加算"""
        assert estimate_utility_cost_flat(label) == expected

    def test_variants_differ(self):
        assert estimate_utility_cost("夫婦2人") != estimate_utility_cost_flat("夫婦2人")

    def test_household_and_label_agree(self):
        assert estimate_utility_cost(Household.other(7)) == estimate_utility_cost("その他:7")


class TestUtilityCostDifference:
    def test_single(self):
        assert calc_utility_cost_difference("単身") == pytest.approx(10000.0)

    def test_couple(self):
        assert calc_utility_cost_difference("夫婦2人") == pytest.approx(2500.0)

    def test_larger_family_negative(self):
        assert calc_utility_cost_difference("夫婦+子1人") == pytest.approx(-5000.0)

    def test_unknown_label_defaults_to_two(self):
        assert calc_utility_cost_difference(None) == pytest.approx(2500.0)

    def test_non_increasing_in_household_size(self):
        diffs = [calc_utility_cost_difference(Household.other(n)) for n in range(1, 11)]
        assert all(a >= b for a, b in zip(diffs, diffs[1:]))
        assert diffs[0] > 0
        assert diffs[-1] < 0


class TestRentDifference:
    def test_signed(self):
        assert calc_rent_difference(76217, 90000) == -13783
        assert calc_rent_difference(76217, 60000) == 16217
        assert calc_rent_difference(76217, 76217) == 0
