"""Prompt construction for the local LLM.

Everything here is deterministic string rendering. Deficits are always floored
at zero before they are shown; missing nutrition input drops the clause instead
of failing.
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from daywise.models.meals import MealType
from daywise.utils.nutrition import compute_deficit

from .schemas import (
    CalendarEvent,
    NutritionSnapshot,
    NutritionTarget,
    SuggestionPrompt,
    SuggestionType,
)

BASE_SYSTEM_PROMPT = (
    "You are a helpful nutrition and meal planning assistant. Provide practical, "
    "actionable advice focused on filling nutrition gaps and improving meal variety."
)

CATEGORY_PROMPTS = {
    "meal_planning": (
        "Help with meal planning by suggesting foods that complement what the user has "
        "already eaten. Focus on nutrition balance, food variety, and practical meal ideas. "
        "Suggest specific ingredients and portion sizes."
    ),
    "shopping_optimization": (
        "Help optimize shopping lists based on meal plans and nutrition goals. Provide "
        "practical advice on what to buy and how to save money."
    ),
    "budget_analysis": (
        "Analyze spending patterns and provide budget advice for healthy eating within "
        "budget constraints."
    ),
    "cleaning_schedule": "Create practical cleaning schedules that work with busy lifestyles.",
}

CLOSING_INSTRUCTION = (
    "Focus on practical meal suggestions that fill nutrition gaps. Be specific about "
    "ingredients and portions. Keep suggestions simple and achievable."
)

STRUCTURED_INSTRUCTION = (
    "Return ONLY JSON in the form "
    '{"suggestions": [{"meal": "...", "recipe_name": "...", "reasoning": "...", '
    '"prep_time": 20, "calories": 0, "protein": 0, "carbs": 0, "fat": 0, '
    '"ingredients": ["..."], "instructions": ["..."]}]}'
)

MEAL_REQUEST_TEMPLATES = {
    "nl": {
        "intake": "Ik heb vandaag al {current} calorieën gehad van mijn {target} calorie doel. ",
        "remaining": (
            "Ik heb nog {calories} calorieën, {protein}g eiwit, {carbs}g koolhydraten, "
            "en {fat}g vet nodig. "
        ),
        "fiber": "Ook zou ik nog {fiber}g vezels moeten hebben. ",
        "meal_type": "Geef me aanbevelingen voor {meal}. ",
        "closing": (
            "Geef specifieke recepten met ingrediënten en voedingswaarden die passen bij "
            "Nederlandse maaltijdpatronen."
        ),
        "meals": {
            MealType.breakfast: "ontbijt",
            MealType.lunch: "lunch",
            MealType.dinner: "diner",
            MealType.snack: "tussendoortje",
        },
    },
    "en": {
        "intake": "I have had {current} calories today out of my {target} calorie goal. ",
        "remaining": (
            "I still need {calories} calories, {protein}g protein, {carbs}g carbs, "
            "and {fat}g fat. "
        ),
        "fiber": "I should also get another {fiber}g of fiber. ",
        "meal_type": "Give me recommendations for {meal}. ",
        "closing": (
            "Give specific recipes with ingredients and nutrition values that fit everyday "
            "meal patterns."
        ),
        "meals": {
            MealType.breakfast: "breakfast",
            MealType.lunch: "lunch",
            MealType.dinner: "dinner",
            MealType.snack: "a snack",
        },
    },
}


def _fmt(value: float) -> str:
    return f"{value:.0f}"


def _fmt_date(value: datetime) -> str:
    return f"{value.day}-{value.month}-{value.year}"


def _fmt_datetime(value: datetime) -> str:
    return f"{_fmt_date(value)} {value:%H:%M}"


def build_system_prompt(category: SuggestionType) -> str:
    clause = CATEGORY_PROMPTS.get(category)
    return f"{BASE_SYSTEM_PROMPT} {clause}" if clause else BASE_SYSTEM_PROMPT


def build_meal_request(
    current: Optional[NutritionSnapshot],
    target: Optional[NutritionTarget],
    meal_type: Optional[MealType] = None,
    locale: str = "nl",
) -> str:
    """Render the user request for a meal-planning call in the given locale."""
    texts = MEAL_REQUEST_TEMPLATES.get(locale, MEAL_REQUEST_TEMPLATES["nl"])
    parts = []

    if current is not None and target is not None:
        deficit = compute_deficit(current, target)
        parts.append(
            texts["intake"].format(current=_fmt(current.calories), target=_fmt(target.calories))
        )
        parts.append(
            texts["remaining"].format(
                calories=_fmt(deficit.calories),
                protein=_fmt(deficit.protein),
                carbs=_fmt(deficit.carbs),
                fat=_fmt(deficit.fat),
            )
        )
        if deficit.fiber > 0:
            parts.append(texts["fiber"].format(fiber=_fmt(deficit.fiber)))

    if meal_type is not None:
        parts.append(texts["meal_type"].format(meal=texts["meals"][MealType(meal_type)]))

    parts.append(texts["closing"])
    return "".join(parts)


def _events_block(events: Sequence[CalendarEvent]) -> str:
    lines = ["", "Upcoming calendar events:"]
    for event in events:
        lines.append(f"- {event.title} at {_fmt_datetime(event.start_time)} ({event.event_type})")
    return "\n".join(lines) + "\n"


def build_user_prompt(prompt: SuggestionPrompt) -> str:
    context = prompt.context
    prefs = context.user_preferences

    out = f"Current date: {_fmt_date(context.current_date)}\n"
    out += f"Location: {context.location}\n"

    current = prefs.current_nutrition
    if current is not None:
        out += (
            f"\nNutrition today: {_fmt(current.calories)} kcal, {_fmt(current.protein)}g protein, "
            f"{_fmt(current.carbs)}g carbs, {_fmt(current.fat)}g fat\n"
        )
        goals = prefs.nutrition_goals
        if goals is not None:
            remaining = compute_deficit(current, goals)
            out += (
                f"Daily goals: {_fmt(goals.calories)} kcal, {_fmt(goals.protein)}g protein, "
                f"{_fmt(goals.carbs)}g carbs, {_fmt(goals.fat)}g fat\n"
            )
            out += (
                f"Remaining today: {_fmt(remaining.calories)} kcal, {_fmt(remaining.protein)}g protein, "
                f"{_fmt(remaining.carbs)}g carbs, {_fmt(remaining.fat)}g fat\n"
            )

    if prefs.meals_today:
        out += "\nMeals already eaten today:\n"
        out += "".join(f"- {meal}\n" for meal in prefs.meals_today)

    if context.calendar_events:
        out += _events_block(context.calendar_events)

    if prefs.dietary:
        out += f"\nDietary preferences: {', '.join(prefs.dietary)}\n"

    return f"{out}\nUser request: {prompt.user_input}\n\n{CLOSING_INSTRUCTION}"


def compose_prompt(prompt: SuggestionPrompt, structured: bool = False) -> str:
    system = build_system_prompt(prompt.type)
    if structured:
        system = f"{system} {STRUCTURED_INSTRUCTION}"
    return f"{system}\n\nUser: {build_user_prompt(prompt)}\n\nAssistant:"
