from __future__ import annotations

from typing import List, Optional

from daywise.models.meals import MealType


def _name(recipe_name: Optional[str]) -> str:
    return (recipe_name or "").lower()


def _has(name: str, *tokens: str) -> bool:
    return any(token in name for token in tokens)


def estimate_prep_time(recipe_name: Optional[str]) -> int:
    if not recipe_name:
        return 15
    name = _name(recipe_name)
    if _has(name, "smoothie", "yoghurt"):
        return 5
    if _has(name, "salad", "sandwich"):
        return 10
    if _has(name, "soup", "stew"):
        return 45
    return 20


def estimate_difficulty(recipe_name: Optional[str]) -> int:
    if not recipe_name:
        return 2
    name = _name(recipe_name)
    if _has(name, "smoothie", "yoghurt"):
        return 1
    if _has(name, "roast", "stew"):
        return 3
    return 2


def estimate_calories(recipe_name: Optional[str]) -> float:
    if not recipe_name:
        return 300.0
    name = _name(recipe_name)
    if "salad" in name:
        return 250.0
    if "smoothie" in name:
        return 200.0
    if "soup" in name:
        return 300.0
    return 400.0


def estimate_protein(recipe_name: Optional[str]) -> float:
    if not recipe_name:
        return 15.0
    name = _name(recipe_name)
    if _has(name, "chicken", "fish", "meat"):
        return 25.0
    if "egg" in name:
        return 20.0
    if "yoghurt" in name:
        return 12.0
    return 15.0


def estimate_carbs(recipe_name: Optional[str]) -> float:
    if not recipe_name:
        return 30.0
    name = _name(recipe_name)
    if "salad" in name:
        return 15.0
    if _has(name, "bread", "pasta"):
        return 45.0
    return 30.0


def estimate_fat(recipe_name: Optional[str]) -> float:
    if not recipe_name:
        return 12.0
    name = _name(recipe_name)
    if _has(name, "avocado", "nuts"):
        return 18.0
    if _has(name, "salmon", "fish"):
        return 15.0
    return 12.0


def estimate_fiber(recipe_name: Optional[str]) -> float:
    if not recipe_name:
        return 4.0
    name = _name(recipe_name)
    if _has(name, "bean", "bonen", "lentil", "linzen"):
        return 10.0
    if _has(name, "oat", "havermout", "volkoren", "wholegrain"):
        return 7.0
    if "salad" in name:
        return 5.0
    return 4.0


def default_ingredients(recipe_name: Optional[str]) -> List[str]:
    if not recipe_name:
        return ["diverse ingrediënten"]
    return ["hoofdingrediënt", "groenten", "kruiden", "olie"]


def determine_meal_type(name: Optional[str]) -> MealType:
    if not name:
        return MealType.lunch
    lower = name.lower()
    if _has(lower, "breakfast", "ontbijt"):
        return MealType.breakfast
    if _has(lower, "dinner", "diner"):
        return MealType.dinner
    if _has(lower, "snack", "tussendoortje"):
        return MealType.snack
    return MealType.lunch


def is_sports_friendly(name: Optional[str]) -> bool:
    if not name:
        return False
    return _has(name.lower(), "protein", "recovery", "energy")
