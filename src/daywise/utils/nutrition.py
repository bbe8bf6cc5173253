from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable

from .validators import non_negative

FIELDS = ("calories", "protein", "carbs", "fat", "fiber")


@dataclass
class Nutrition:
    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    fiber: float = 0.0

    def to_dict(self) -> Dict[str, float]:
        return {name: float(getattr(self, name)) for name in FIELDS}


def nutrition_of(obj: Any) -> Nutrition:
    """Read the five nutrition fields from a model, row or mapping.

    - Missing, None or non-numeric values count as 0.0
    - Negative values are clamped to 0
    """
    if obj is None:
        return Nutrition()
    if isinstance(obj, dict):
        return Nutrition(**{name: non_negative(obj.get(name) or 0.0) for name in FIELDS})
    return Nutrition(**{name: non_negative(getattr(obj, name, 0.0) or 0.0) for name in FIELDS})


def sum_nutrition(items: Iterable[Any]) -> Nutrition:
    total = Nutrition()
    for item in items:
        values = nutrition_of(item)
        total.calories += values.calories
        total.protein += values.protein
        total.carbs += values.carbs
        total.fat += values.fat
        total.fiber += values.fiber
    return total


def compute_deficit(current: Any, target: Any) -> Nutrition:
    """Target minus current per field, floored at zero."""
    have = nutrition_of(current)
    want = nutrition_of(target)
    return Nutrition(
        **{name: max(0.0, getattr(want, name) - getattr(have, name)) for name in FIELDS}
    )


def round_nutrition(n: Nutrition, ndigits: int = 1) -> Nutrition:
    return Nutrition(**{name: round(getattr(n, name), ndigits) for name in FIELDS})
