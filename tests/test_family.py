"""Tests for family composition labels and household size estimation."""

import pytest
from housing_advice_jp import Household, estimate_family_size, FAMILY_CHOICES
from housing_advice_jp.family import resolve_family_size


class TestEstimateFamilySize:
    @pytest.mark.parametrize(
        "label, expected",
        [
            ("単身", 1),
            ("夫婦2人", 2),
            ("夫婦+子1人", 3),
            ("夫婦+子2人", 4),
            ("夫婦+子3人", 5),
        ],
    )
    def test_preset_labels(self, label, expected):
        assert estimate_family_size(label) == expected

    def test_other_with_count(self):
        assert estimate_family_size("その他:7") == 7

    def test_other_with_spaces(self):
        assert estimate_family_size("その他: 4 ") == 4

    def test_other_non_numeric(self):
        """数値変換できない場合は標準の2人"""
        assert estimate_family_size("その他:abc") == 2

    def test_other_zero_or_negative(self):
        assert estimate_family_size("その他:0") == 2
        assert estimate_family_size("その他:-3") == 2

    def test_other_without_count(self):
        assert estimate_family_size("その他") == 2

    def test_empty(self):
        assert estimate_family_size("") == 2

    def test_none(self):
        assert estimate_family_size(None) == 2

    def test_unknown_label(self):
        assert estimate_family_size("ルームシェア") == 2

    def test_substring_match(self):
        """Free-form labels match by containment."""
        assert estimate_family_size("単身（社会人）") == 1
        assert estimate_family_size("共働き 夫婦+子2人") == 4

    def test_priority_first_match_wins(self):
        assert estimate_family_size("単身赴任中の夫婦+子2人") == 1


class TestHousehold:
    def test_choices_include_other(self):
        assert FAMILY_CHOICES[-1] == "その他"
        assert len(FAMILY_CHOICES) == 6

    def test_preset(self):
        h = Household.preset("夫婦+子1人")
        assert h.size == 3
        assert not h.custom
        assert h.has_children

    def test_preset_unknown(self):
        with pytest.raises(ValueError, match="未対応の家族構成"):
            Household.preset("三世代")

    def test_other(self):
        h = Household.other(6)
        assert h.label == "その他"
        assert h.size == 6
        assert h.custom
        assert h.display_label() == "その他（6人）"

    def test_other_invalid_size(self):
        with pytest.raises(ValueError, match="1人以上"):
            Household.other(0)

    def test_from_label_preset(self):
        assert Household.from_label("単身") == Household.preset("単身")

    def test_from_label_free_form(self):
        h = Household.from_label("夫婦+子2人（共働き）")
        assert h.size == 4
        assert h.display_label() == "夫婦+子2人（共働き）"

    def test_no_children(self):
        assert not Household.preset("夫婦2人").has_children


class TestResolveFamilySize:
    def test_household(self):
        assert resolve_family_size(Household.other(9)) == 9

    def test_label(self):
        assert resolve_family_size("夫婦+子3人") == 5

    def test_none(self):
        assert resolve_family_size(None) == 2
