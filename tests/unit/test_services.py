from datetime import datetime

import pytest

from daywise.core.exceptions import ServiceUnavailable
from daywise.models.meals import MealType
from daywise.routers.ai.config import UNAVAILABLE_MESSAGE
from daywise.routers.ai.schemas import (
    ChatRequest,
    NutritionSnapshot,
    NutritionTarget,
    SuggestionContext,
    SuggestionPrompt,
    UserPreferences,
)
from daywise.routers.ai.services import CHAT_APOLOGY, CHAT_DEFAULT_CONTENT


def _prompt(category="meal_planning", **prefs) -> SuggestionPrompt:
    return SuggestionPrompt(
        type=category,
        context=SuggestionContext(current_date=datetime(2025, 1, 1, 12, 0), user_preferences=UserPreferences(**prefs)),
        user_input="Help me",
    )


@pytest.mark.asyncio
async def test_suggest_uses_llm_when_healthy(service, fake_ollama):
    fake_ollama.reply = "Good choices:\n\n- Lunch recipe: Lentil soup"
    outcome = await service.suggest(_prompt())
    assert outcome.from_llm
    assert outcome.provider == "ollama"
    assert outcome.reasoning == "Good choices:"
    assert outcome.suggestions[0].recipe_name == "Lentil soup"
    assert outcome.error is None
    assert "User: Current date: 1-1-2025" in fake_ollama.prompts[0]


@pytest.mark.asyncio
async def test_suggest_falls_back_when_unhealthy(service, fake_ollama):
    fake_ollama.healthy = False
    outcome = await service.suggest(
        _prompt(
            current_nutrition=NutritionSnapshot(calories=1500, protein=100, carbs=200, fat=60, fiber=25),
            nutrition_goals=NutritionTarget(),
        )
    )
    assert outcome.provider == "fallback"
    assert outcome.error == UNAVAILABLE_MESSAGE
    assert [s.recipe_name for s in outcome.suggestions] == ["Kipfilet met Quinoa", "Nederlandse Stamppot"]
    assert fake_ollama.prompts == []


@pytest.mark.asyncio
async def test_suggest_falls_back_on_upstream_error(service, fake_ollama):
    fake_ollama.generate_status = 500
    outcome = await service.suggest(_prompt("shopping_optimization"))
    assert outcome.provider == "fallback"
    assert outcome.suggestions[0].item == "Seasonal vegetables"


@pytest.mark.asyncio
async def test_disabled_llm_skips_health_check(service, fake_ollama):
    service.settings.ai_llm_enabled = False
    with pytest.raises(ServiceUnavailable):
        await service.complete(_prompt())
    assert fake_ollama.requests == []


@pytest.mark.asyncio
async def test_breakfast_recommendation_with_failing_health_check(service, fake_ollama):
    fake_ollama.healthy = False
    outcome = await service.recommend_meals(
        NutritionSnapshot(calories=2000, protein=140, carbs=240, fat=75, fiber=25),
        NutritionTarget(),
        meal_type=MealType.breakfast,
    )
    assert outcome.provider == "fallback"
    assert len(outcome.recommendations) == 1
    assert outcome.recommendations[0].model_dump(by_alias=True)["mealType"] == "breakfast"


@pytest.mark.asyncio
async def test_recommendations_from_llm(service, fake_ollama):
    fake_ollama.reply = "Try these:\n\n1. Dinner: make Chicken stew\n2. Snack: try Banana smoothie"
    outcome = await service.recommend_meals(None, NutritionTarget(), meal_type=MealType.dinner)
    assert outcome.provider == "ollama"
    assert [r.name for r in outcome.recommendations] == ["Chicken stew", "Banana smoothie"]
    assert [r.meal_type for r in outcome.recommendations] == [MealType.dinner, MealType.snack]
    assert "Geef me aanbevelingen voor diner." in fake_ollama.prompts[0]


@pytest.mark.asyncio
async def test_chat_returns_recommendations(service, fake_ollama):
    fake_ollama.reply = "Meer eiwit helpt.\n\n- Lunch recipe: Tuna salad"
    message = await service.chat(ChatRequest(message="Wat moet ik eten?"))
    assert message.type == "assistant"
    assert message.content == "Meer eiwit helpt."
    assert [r.name for r in message.recommendations] == ["Tuna salad"]
    assert "Nutrition consultation: Wat moet ik eten?." in fake_ollama.prompts[0]


@pytest.mark.asyncio
async def test_chat_without_meal_records_uses_default_content(service, fake_ollama):
    fake_ollama.reply = ""
    message = await service.chat(ChatRequest(message="Hoi"))
    assert message.recommendations == []
    assert message.content == CHAT_DEFAULT_CONTENT


@pytest.mark.asyncio
async def test_chat_apologises_when_unavailable(service, fake_ollama):
    fake_ollama.healthy = False
    message = await service.chat(ChatRequest(message="Hoi"))
    assert message.content == CHAT_APOLOGY
    assert message.recommendations == []
