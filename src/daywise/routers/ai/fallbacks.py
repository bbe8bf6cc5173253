from __future__ import annotations

from typing import Dict, List, Optional

from daywise.models.meals import MealType
from daywise.utils.nutrition import Nutrition

from .config import FallbackThresholds
from .schemas import MealRecommendation, SuggestionRecord, SuggestionType

DEFAULT_MEALS: Dict[MealType, MealRecommendation] = {
    MealType.breakfast: MealRecommendation(
        id="fallback-breakfast-1",
        name="Havermout met Fruit",
        description="Voedzame havermout met seizoensfruit en noten",
        reason="Hoge vezels en langzame koolhydraten voor stabiele energie",
        prep_time=5,
        difficulty=1,
        calories=340,
        protein=12,
        carbs=52,
        fat=8,
        fiber=7,
        ingredients=["havermout", "melk", "banaan", "walnoten", "honing"],
        instructions=["Kook havermout met melk", "Voeg fruit toe", "Garneer met noten"],
        tags=["vezels", "gezond", "snel"],
        meal_type=MealType.breakfast,
        sports_friendly=True,
    ),
    MealType.lunch: MealRecommendation(
        id="fallback-lunch-1",
        name="Volkoren Sandwich met Ei",
        description="Protein-rijke lunch met volkoren brood",
        reason="Goede balans van eiwitten en complexe koolhydraten",
        prep_time=10,
        difficulty=1,
        calories=380,
        protein=18,
        carbs=35,
        fat=16,
        fiber=6,
        ingredients=["volkoren brood", "ei", "avocado", "tomaat", "rucola"],
        instructions=["Toast brood", "Bak ei", "Beleg met groenten"],
        tags=["eiwit", "verzadigend"],
        meal_type=MealType.lunch,
        sports_friendly=True,
    ),
    MealType.dinner: MealRecommendation(
        id="fallback-dinner-1",
        name="Zalm met Zoete Aardappel",
        description="Omega-3 rijke zalm met gepofte zoete aardappel",
        reason="Hoog in omega-3 en complexe koolhydraten",
        prep_time=25,
        difficulty=2,
        calories=450,
        protein=35,
        carbs=38,
        fat=18,
        fiber=6,
        ingredients=["zalm filet", "zoete aardappel", "broccoli", "olijfolie", "citroen"],
        instructions=["Grill zalm", "Bak zoete aardappel", "Stoom broccoli"],
        tags=["omega-3", "gezond"],
        meal_type=MealType.dinner,
        sports_friendly=True,
    ),
}

STATIC_SUGGESTIONS: Dict[str, List[SuggestionRecord]] = {
    "shopping_optimization": [
        SuggestionRecord(
            item="Seasonal vegetables",
            advice="Check local seasonal produce for best prices",
            category="groceries",
        ),
        SuggestionRecord(
            item="Store brands",
            advice="AH Basic products offer good value",
            category="groceries",
        ),
    ],
    "budget_analysis": [
        SuggestionRecord(
            category="groceries",
            advice="Track weekly spending and compare with Dutch averages",
        ),
    ],
    "cleaning_schedule": [
        SuggestionRecord(
            task="Weekly cleaning",
            advice="Plan cleaning around your schedule for consistency",
        ),
    ],
}

GENERIC_SUGGESTION = SuggestionRecord(
    advice="AI services temporarily unavailable. Please try again later."
)


def _high_protein(deficit: Nutrition, meal_type: MealType) -> MealRecommendation:
    return MealRecommendation(
        id="fallback-protein-1",
        name="Kipfilet met Quinoa",
        description="Hoge eiwit maaltijd met magere kipfilet en quinoa",
        reason=f"Je hebt nog {round(deficit.protein)}g eiwit nodig vandaag",
        prep_time=20,
        difficulty=2,
        calories=min(deficit.calories, 450),
        protein=35,
        carbs=40,
        fat=8,
        fiber=5,
        ingredients=["kipfilet", "quinoa", "broccoli", "olijfolie"],
        instructions=["Grill kipfilet", "Kook quinoa", "Stoom broccoli"],
        tags=["hoog eiwit", "magere keuze"],
        meal_type=meal_type,
        sports_friendly=True,
    )


def _high_fiber(deficit: Nutrition, meal_type: MealType) -> MealRecommendation:
    return MealRecommendation(
        id="fallback-fiber-1",
        name="Volkoren Wrap met Bonen",
        description="Vezelrijke wrap met zwarte bonen en groenten",
        reason=f"Goede bron van vezels ({round(deficit.fiber)}g tekort)",
        prep_time=10,
        difficulty=1,
        calories=min(deficit.calories, 380),
        protein=15,
        carbs=55,
        fat=12,
        fiber=14,
        ingredients=["volkoren wrap", "zwarte bonen", "paprika", "avocado"],
        instructions=["Verwarm wrap", "Voeg bonen toe", "Rol met groenten"],
        tags=["hoge vezels", "vegetarisch"],
        meal_type=meal_type,
        sports_friendly=False,
    )


def _energy_dinner(deficit: Nutrition) -> MealRecommendation:
    return MealRecommendation(
        id="fallback-energy-1",
        name="Nederlandse Stamppot",
        description="Traditionele Nederlandse stamppot met worst",
        reason=f"Energierijke maaltijd voor je resterende {round(deficit.calories)} calorieën",
        prep_time=30,
        difficulty=2,
        calories=min(deficit.calories, 550),
        protein=22,
        carbs=65,
        fat=18,
        fiber=8,
        ingredients=["aardappelen", "boerenkool", "rookworst", "ui"],
        instructions=["Kook aardappelen", "Stamp met boerenkool", "Voeg worst toe"],
        tags=["traditioneel", "winters", "verzadigend"],
        meal_type=MealType.dinner,
        sports_friendly=False,
    )


def default_meal(meal_type: Optional[MealType] = None) -> MealRecommendation:
    if meal_type is not None and MealType(meal_type) in DEFAULT_MEALS:
        return DEFAULT_MEALS[MealType(meal_type)]
    return DEFAULT_MEALS[MealType.lunch]


def select_fallback_recommendations(
    deficit: Nutrition,
    meal_type: Optional[MealType] = None,
    thresholds: Optional[FallbackThresholds] = None,
) -> List[MealRecommendation]:
    """Pick catalog records for a (floored) nutrient deficit.

    Rules run top to bottom and each adds at most one record. When none fires,
    a single default for the requested meal type is returned (lunch if unset).
    """
    limits = thresholds or FallbackThresholds()
    slot = MealType(meal_type) if meal_type is not None else MealType.lunch

    recommendations = []
    if deficit.protein > limits.protein:
        recommendations.append(_high_protein(deficit, slot))
    if deficit.fiber > limits.fiber:
        recommendations.append(_high_fiber(deficit, slot))
    if deficit.calories > limits.calories:
        recommendations.append(_energy_dinner(deficit))

    if not recommendations:
        return [default_meal(meal_type)]
    return recommendations


def recommendation_to_record(rec: MealRecommendation) -> SuggestionRecord:
    return SuggestionRecord(
        meal=rec.meal_type.value,
        recipe_name=rec.name,
        reasoning=rec.reason,
        prep_time=rec.prep_time,
        calories=rec.calories,
        protein=rec.protein,
        carbs=rec.carbs,
        fat=rec.fat,
        fiber=rec.fiber,
        ingredients=list(rec.ingredients),
        instructions=list(rec.instructions),
    )


def fallback_suggestions(
    category: SuggestionType,
    deficit: Nutrition,
    meal_type: Optional[MealType] = None,
    thresholds: Optional[FallbackThresholds] = None,
) -> List[SuggestionRecord]:
    if category == "meal_planning":
        return [
            recommendation_to_record(rec)
            for rec in select_fallback_recommendations(deficit, meal_type, thresholds)
        ]
    return list(STATIC_SUGGESTIONS.get(category, [GENERIC_SUGGESTION]))
