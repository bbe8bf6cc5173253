from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Sequence

from fastapi import Depends

from daywise.core.config import Settings, get_settings
from daywise.core.exceptions import ServiceUnavailable
from daywise.models.meals import MealType
from daywise.utils.nutrition import Nutrition, compute_deficit

from .config import UNAVAILABLE_MESSAGE, FallbackThresholds
from .fallbacks import fallback_suggestions, select_fallback_recommendations
from .llm import OllamaGateway
from .parsing import DEFAULT_REASONING, ParsedCompletion, parse_completion, to_meal_recommendations
from .prompts import build_meal_request, compose_prompt
from .schemas import (
    CalendarEvent,
    ChatMessage,
    ChatRequest,
    MealRecommendation,
    NutritionSnapshot,
    NutritionTarget,
    Provider,
    SuggestionContext,
    SuggestionPrompt,
    SuggestionRecord,
    SuggestionType,
    UserPreferences,
)

logger = logging.getLogger(__name__)

CHAT_DEFAULT_CONTENT = "Hier zijn mijn aanbevelingen voor je voeding:"
CHAT_APOLOGY = "Sorry, ik kan momenteel geen voedingsadvies geven. Probeer het later opnieuw."
QUICK_MEAL_INPUT = "Suggest meals that fit my schedule for today"


@dataclass
class SuggestionOutcome:
    category: SuggestionType
    suggestions: List[SuggestionRecord]
    provider: Provider
    reasoning: Optional[str] = None
    confidence: Optional[float] = None
    error: Optional[str] = None

    @property
    def from_llm(self) -> bool:
        return self.provider == "ollama"


@dataclass
class MealRecommendationOutcome:
    recommendations: List[MealRecommendation]
    provider: Provider
    reasoning: Optional[str] = None


class SuggestionService:
    """Runs one suggestion request: prompt, health check, LLM call, parse or fallback.

    Built per request from explicit settings and a gateway; holds no state
    that outlives the request.
    """

    def __init__(self, gateway: OllamaGateway, settings: Settings):
        self.gateway = gateway
        self.settings = settings
        self.thresholds = FallbackThresholds.from_settings(settings)

    async def is_available(self) -> bool:
        return await self.gateway.check_health()

    async def complete(self, prompt: SuggestionPrompt) -> ParsedCompletion:
        """Ask the LLM and parse its answer; raises ServiceUnavailable otherwise."""
        text = compose_prompt(prompt, structured=self.gateway.structured)
        if not self.settings.ai_llm_enabled:
            raise ServiceUnavailable("LLM disabled by configuration")
        if not await self.gateway.check_health():
            raise ServiceUnavailable("Ollama service unavailable")
        logger.info("Using Ollama for %s suggestions", prompt.type)
        raw = await self.gateway.generate(text)
        return parse_completion(raw, prompt.type, structured=self.gateway.structured)

    def _deficit(self, current: Optional[NutritionSnapshot], target: Optional[NutritionTarget]) -> Nutrition:
        if current is None:
            return Nutrition()
        return compute_deficit(current, target or NutritionTarget())

    async def suggest(self, prompt: SuggestionPrompt) -> SuggestionOutcome:
        try:
            parsed = await self.complete(prompt)
        except ServiceUnavailable as exc:
            logger.warning("AI suggestions for %s fall back to catalog: %s", prompt.type, exc)
            prefs = prompt.context.user_preferences
            deficit = self._deficit(prefs.current_nutrition, prefs.nutrition_goals)
            return SuggestionOutcome(
                category=prompt.type,
                suggestions=fallback_suggestions(prompt.type, deficit, prefs.meal_type, self.thresholds),
                provider="fallback",
                error=UNAVAILABLE_MESSAGE,
            )
        return SuggestionOutcome(
            category=prompt.type,
            suggestions=parsed.suggestions,
            provider="ollama",
            reasoning=parsed.reasoning,
            confidence=parsed.confidence,
        )

    def meal_prompt(
        self,
        current: Optional[NutritionSnapshot],
        target: NutritionTarget,
        meal_type: Optional[MealType] = None,
        preferences: Sequence[str] = (),
        calendar_events: Sequence[CalendarEvent] = (),
        location: Optional[str] = None,
    ) -> SuggestionPrompt:
        return SuggestionPrompt(
            type="meal_planning",
            context=SuggestionContext(
                calendar_events=list(calendar_events),
                user_preferences=UserPreferences(
                    dietary=list(preferences),
                    nutrition_goals=target,
                    current_nutrition=current,
                    meal_type=meal_type,
                ),
                current_date=datetime.now(),
                location=location or self.settings.default_location,
            ),
            user_input=build_meal_request(current, target, meal_type, self.settings.prompt_locale),
        )

    async def recommend_meals(
        self,
        current: Optional[NutritionSnapshot],
        target: NutritionTarget,
        meal_type: Optional[MealType] = None,
        preferences: Sequence[str] = (),
        calendar_events: Sequence[CalendarEvent] = (),
        location: Optional[str] = None,
    ) -> MealRecommendationOutcome:
        prompt = self.meal_prompt(current, target, meal_type, preferences, calendar_events, location)
        try:
            parsed = await self.complete(prompt)
        except ServiceUnavailable as exc:
            logger.warning("Meal recommendations fall back to catalog: %s", exc)
        else:
            recommendations = to_meal_recommendations(parsed.suggestions)
            if recommendations:
                return MealRecommendationOutcome(recommendations, "ollama", parsed.reasoning)
            logger.info("LLM answer held no usable meal suggestion; using catalog")

        deficit = self._deficit(current, target)
        return MealRecommendationOutcome(
            select_fallback_recommendations(deficit, meal_type, self.thresholds), "fallback"
        )

    async def chat(self, request: ChatRequest) -> ChatMessage:
        prompt = SuggestionPrompt(
            type="meal_planning",
            context=SuggestionContext(
                user_preferences=UserPreferences(
                    dietary=request.preferences,
                    nutrition_goals=request.targets,
                    current_nutrition=request.current_nutrition,
                    recent_meals=request.recent_meals,
                ),
                current_date=datetime.now(),
                location=self.settings.default_location,
            ),
            user_input=(
                f"Nutrition consultation: {request.message}. "
                "Please provide personalized advice and specific meal suggestions."
            ),
        )
        message_id = str(int(time.time() * 1000))
        try:
            parsed = await self.complete(prompt)
        except ServiceUnavailable as exc:
            logger.warning("Nutrition chat unavailable: %s", exc)
            return ChatMessage(id=message_id, content=CHAT_APOLOGY, timestamp=datetime.now())

        meal_records = [r for r in parsed.suggestions if r.meal or r.recipe_name]
        return ChatMessage(
            id=message_id,
            content=CHAT_DEFAULT_CONTENT if parsed.reasoning == DEFAULT_REASONING else parsed.reasoning,
            timestamp=datetime.now(),
            recommendations=to_meal_recommendations(meal_records),
        )


def get_suggestion_service(settings: Settings = Depends(get_settings)) -> SuggestionService:
    return SuggestionService(OllamaGateway.from_settings(settings), settings)
