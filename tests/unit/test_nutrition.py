from daywise.models.meals import MealType, UserMeal
from daywise.utils.nutrition import (
    Nutrition,
    compute_deficit,
    nutrition_of,
    round_nutrition,
    sum_nutrition,
)


def test_nutrition_of_mapping_treats_missing_and_negative_as_zero():
    n = nutrition_of({"calories": 300, "protein": None, "fat": -5})
    assert n == Nutrition(calories=300, protein=0, carbs=0, fat=0, fiber=0)


def test_sum_nutrition_over_logged_meals():
    meals = [
        UserMeal(user_id=1, meal_name="Havermout", meal_type=MealType.breakfast, calories=350, protein=12, fiber=7),
        UserMeal(user_id=1, meal_name="Appel", meal_type=MealType.snack, calories=80, carbs=20),
        UserMeal(user_id=1, meal_name="Onbekend", meal_type=MealType.lunch),
    ]
    total = sum_nutrition(meals)
    assert total.calories == 430
    assert total.protein == 12
    assert total.carbs == 20
    assert total.fat == 0
    assert total.fiber == 7


def test_compute_deficit_never_negative():
    current = {"calories": 2500, "protein": 80, "carbs": 300, "fat": 90, "fiber": 10}
    target = {"calories": 2200, "protein": 150, "carbs": 250, "fat": 80, "fiber": 30}
    deficit = compute_deficit(current, target)
    assert deficit.calories == 0
    assert deficit.protein == 70
    assert deficit.carbs == 0
    assert deficit.fat == 0
    assert deficit.fiber == 20


def test_round_nutrition():
    r = round_nutrition(Nutrition(calories=100.04, protein=12.36, carbs=0.04, fat=3.0, fiber=1.449), 1)
    assert r.to_dict() == {"calories": 100.0, "protein": 12.4, "carbs": 0.0, "fat": 3.0, "fiber": 1.4}
