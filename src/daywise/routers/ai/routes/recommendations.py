from __future__ import annotations

import logging
from datetime import datetime

from fastapi import APIRouter, Depends
from sqlmodel import Session

from daywise.core.database import get_session, utc_now

from ...meals import daily_nutrition
from ..schemas import (
    MealRecommendationRequest,
    MealRecommendationsData,
    MealRecommendationsResponse,
    NutritionSnapshot,
    QuickMealRequest,
    SuggestionContext,
    SuggestionData,
    SuggestionPrompt,
    SuggestionsResponse,
    UserPreferences,
)
from ..services import QUICK_MEAL_INPUT, SuggestionService, get_suggestion_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/meal-recommendations",
    response_model=MealRecommendationsResponse,
    response_model_by_alias=True,
    response_model_exclude_none=True,
)
async def meal_recommendations(
    payload: MealRecommendationRequest,
    service: SuggestionService = Depends(get_suggestion_service),
    session: Session = Depends(get_session),
):
    current = payload.current_nutrition
    if current is None and payload.user_id is not None:
        day = payload.day or utc_now().date()
        totals = daily_nutrition(session, payload.user_id, day)
        current = NutritionSnapshot(**totals.to_dict())
        logger.debug("Nutrition for user %s on %s taken from meal log", payload.user_id, day)

    outcome = await service.recommend_meals(
        current,
        payload.targets,
        meal_type=payload.meal_type,
        preferences=payload.preferences,
        calendar_events=payload.calendar_events,
        location=payload.location,
    )
    return MealRecommendationsResponse(
        data=MealRecommendationsData(
            recommendations=outcome.recommendations,
            provider=outcome.provider,
            reasoning=outcome.reasoning,
        )
    )


@router.post(
    "/quick-meal-suggestions",
    response_model=SuggestionsResponse,
    response_model_exclude_none=True,
)
async def quick_meal_suggestions(
    payload: QuickMealRequest,
    service: SuggestionService = Depends(get_suggestion_service),
):
    prompt = SuggestionPrompt(
        type="meal_planning",
        context=SuggestionContext(
            calendar_events=payload.calendar_events,
            user_preferences=UserPreferences(dietary=payload.dietary_preferences),
            current_date=datetime.now(),
            location=service.settings.default_location,
        ),
        user_input=QUICK_MEAL_INPUT,
    )
    # ServiceUnavailable propagates to the app-level 503 handler.
    parsed = await service.complete(prompt)
    return SuggestionsResponse(
        data=SuggestionData(
            type="meal_planning",
            suggestions=parsed.suggestions,
            reasoning=parsed.reasoning,
            confidence=parsed.confidence,
        )
    )
