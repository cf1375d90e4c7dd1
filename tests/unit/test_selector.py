"""Unit tests for component selection."""

import pytest

from scentlab.engine.selector import (
    adjustment_components,
    base_components,
    category_scent_name,
    estimate_scent_category,
    profile_scent_index,
    select_components,
    specific_scent_components,
)
from scentlab.models.models import BaseProfile, Category, Feedback


class TestProfileScentIndex:
    """Test the stable ingredient index derived from a profile id."""

    def test_index_is_code_point_sum_modulo_size(self):
        # ord("p") + ord("1") = 161
        assert profile_scent_index("p1", 4) == 1
        # 383 % 4
        assert profile_scent_index("BK-2201", 4) == 3

    def test_index_is_deterministic(self):
        assert profile_scent_index("MD-8675", 4) == profile_scent_index("MD-8675", 4)

    def test_category_scent_name_uses_index(self):
        assert category_scent_name(Category.woody, "p1") == "시더우드"
        assert category_scent_name(Category.woody, "BK-2201") == "파인"
        assert category_scent_name(Category.fruity, "BK-2201") == "레드베리"


class TestEstimateScentCategory:
    """Test keyword-based category estimation."""

    @pytest.mark.parametrize(
        "name,category",
        [
            ("Grapefruit Zest", Category.citrus),
            ("자몽", Category.citrus),
            ("자스민 꽃", Category.floral),
            ("Cedar Moss", Category.woody),
            ("통카빈", Category.musky),
            ("블랙베리", Category.fruity),
            ("Pink Pepper", Category.spicy),
        ],
    )
    def test_keyword_match(self, name, category):
        assert estimate_scent_category(name) == category

    def test_first_matching_category_wins(self):
        # "로즈" (floral) is checked before "우디" (woody)
        assert estimate_scent_category("로즈우드") == Category.floral

    def test_no_match_defaults_to_woody(self):
        assert estimate_scent_category("Oud") == Category.woody
        assert estimate_scent_category("") == Category.woody


class TestBaseComponents:
    """Test base component selection."""

    def test_top_three_categories_scaled_by_retention(self, profile, full_retention):
        components = base_components(profile, full_retention)

        assert [c.category for c in components] == [Category.woody, Category.musky, Category.citrus]
        assert [c.name for c in components] == ["시더우드", "앰버", "레몬"]
        assert [c.ratio for c in components] == pytest.approx([56.0, 42.0, 21.0])

    def test_half_retention_halves_weights(self, profile):
        components = base_components(profile, Feedback(retention_percentage=50))
        assert [c.ratio for c in components] == pytest.approx([28.0, 21.0, 10.5])

    def test_zero_retention_gives_zero_weights(self, profile):
        components = base_components(profile, Feedback(retention_percentage=0))
        assert len(components) == 3
        assert all(c.ratio == 0 for c in components)

    def test_ties_keep_profile_order(self, full_retention):
        profile = BaseProfile(
            id="p1", name="x", category_scores={"spicy": 5, "citrus": 5, "floral": 5, "woody": 5}
        )
        components = base_components(profile, full_retention)
        assert [c.category for c in components] == [Category.spicy, Category.citrus, Category.floral]

    def test_fewer_than_three_categories(self, full_retention):
        profile = BaseProfile(id="p1", name="x", category_scores={"floral": 4})
        assert len(base_components(profile, full_retention)) == 1

    def test_empty_scores(self, empty_profile, full_retention):
        assert base_components(empty_profile, full_retention) == []


class TestAdjustmentComponents:
    """Test category preference and characteristic adjustments."""

    def test_increase_uses_category_increase_scent(self):
        components = adjustment_components(Feedback(category_preferences={"floral": "increase"}))

        assert len(components) == 1
        assert components[0].name == "로즈"
        assert components[0].category == Category.floral
        assert components[0].ratio == 15

    def test_decrease_boosts_opposite_category(self):
        components = adjustment_components(Feedback(category_preferences={"woody": "decrease"}))

        assert len(components) == 1
        assert components[0].name == "레몬"
        assert components[0].category == Category.citrus
        assert components[0].ratio == 10

    def test_maintain_adds_nothing(self):
        assert adjustment_components(Feedback(category_preferences={"musky": "maintain"})) == []

    def test_characteristics_follow_lookup_table(self):
        feedback = Feedback(user_characteristics={"weight": "veryHigh", "freshness": "low"})
        components = adjustment_components(feedback)

        assert [(c.name, c.category, c.ratio) for c in components] == [
            ("앰버 블렌드", Category.musky, 15.0),
            ("앰버 블렌드", Category.musky, 10.0),
        ]

    def test_medium_characteristic_is_no_op(self):
        assert adjustment_components(Feedback(user_characteristics={"sweetness": "medium"})) == []

    def test_preferences_precede_characteristics(self):
        feedback = Feedback(
            category_preferences={"citrus": "increase"},
            user_characteristics={"uniqueness": "high"},
        )
        names = [c.name for c in adjustment_components(feedback)]
        assert names == ["베르가못", "이국적 블렌드"]


class TestSpecificScentComponents:
    """Test specific scent components."""

    def test_ratio_scaled_to_cap(self):
        feedback = Feedback(specific_scents=[{"name": "자스민 꽃", "action": "add", "ratio": 50}])
        components = specific_scent_components(feedback)

        assert len(components) == 1
        assert components[0].ratio == pytest.approx(15.0)
        assert components[0].category == Category.floral

    def test_full_ratio_hits_cap(self):
        feedback = Feedback(specific_scents=[{"name": "Oud", "action": "add", "ratio": 100}])
        assert specific_scent_components(feedback)[0].ratio == pytest.approx(30.0)

    def test_removed_and_ratio_less_scents_are_skipped(self):
        feedback = Feedback(
            specific_scents=[
                {"name": "머스크", "action": "remove", "ratio": 40},
                {"name": "라임", "action": "add"},
                {"name": "레몬", "action": "add", "ratio": 0},
            ]
        )
        assert specific_scent_components(feedback) == []


class TestSelectComponents:
    """Test the concatenated component list."""

    def test_source_order(self, profile):
        feedback = Feedback(
            retention_percentage=100,
            category_preferences={"spicy": "increase"},
            specific_scents=[{"name": "Oud", "action": "add", "ratio": 50}],
        )
        names = [c.name for c in select_components(profile, feedback)]
        assert names == ["시더우드", "앰버", "레몬", "핑크페퍼", "Oud"]

    def test_names_are_not_merged(self, profile):
        feedback = Feedback(retention_percentage=100, category_preferences={"woody": "decrease"})
        names = [c.name for c in select_components(profile, feedback)]
        assert names.count("레몬") == 2

    def test_all_weights_non_negative(self, profile):
        feedback = Feedback(
            retention_percentage=0,
            category_preferences={category.value: "decrease" for category in Category},
            user_characteristics={"weight": "veryLow", "sweetness": "low"},
        )
        assert all(c.ratio >= 0 for c in select_components(profile, feedback))
