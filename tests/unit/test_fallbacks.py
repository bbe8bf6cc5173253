from daywise.models.meals import MealType
from daywise.routers.ai.config import FallbackThresholds
from daywise.routers.ai.fallbacks import (
    GENERIC_SUGGESTION,
    STATIC_SUGGESTIONS,
    fallback_suggestions,
    select_fallback_recommendations,
)
from daywise.utils.nutrition import Nutrition


def test_only_protein_rule_fires():
    recs = select_fallback_recommendations(Nutrition(calories=100, protein=25, fiber=5))
    assert [r.name for r in recs] == ["Kipfilet met Quinoa"]
    assert recs[0].calories == 100
    assert recs[0].meal_type == MealType.lunch


def test_all_rules_fire_in_order_with_capped_calories():
    recs = select_fallback_recommendations(Nutrition(calories=1800, protein=90, fiber=25), MealType.breakfast)
    assert [r.id for r in recs] == ["fallback-protein-1", "fallback-fiber-1", "fallback-energy-1"]
    assert [r.calories for r in recs] == [450, 380, 550]
    assert recs[0].meal_type == MealType.breakfast
    assert recs[2].meal_type == MealType.dinner


def test_below_thresholds_defaults_to_lunch():
    recs = select_fallback_recommendations(Nutrition(calories=200, protein=10, fiber=5))
    assert len(recs) == 1
    assert recs[0].meal_type == MealType.lunch


def test_below_thresholds_uses_requested_meal_type():
    recs = select_fallback_recommendations(Nutrition(), MealType.breakfast)
    assert len(recs) == 1
    assert recs[0].name == "Havermout met Fruit"
    assert recs[0].meal_type == MealType.breakfast


def test_snack_falls_back_to_lunch_default():
    recs = select_fallback_recommendations(Nutrition(), MealType.snack)
    assert recs[0].meal_type == MealType.lunch


def test_thresholds_are_configurable():
    strict = FallbackThresholds(protein=100, fiber=100, calories=5000)
    recs = select_fallback_recommendations(Nutrition(calories=1800, protein=90, fiber=25), None, strict)
    assert [r.name for r in recs] == ["Volkoren Sandwich met Ei"]


def test_fallback_suggestions_for_meal_planning_are_records():
    records = fallback_suggestions("meal_planning", Nutrition(protein=40), MealType.dinner)
    assert len(records) == 1
    assert records[0].recipe_name == "Kipfilet met Quinoa"
    assert records[0].meal == "dinner"


def test_fallback_suggestions_for_other_categories():
    assert fallback_suggestions("cleaning_schedule", Nutrition()) == STATIC_SUGGESTIONS["cleaning_schedule"]
    assert fallback_suggestions("unknown", Nutrition()) == [GENERIC_SUGGESTION]
