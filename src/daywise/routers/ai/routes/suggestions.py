from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..config import UNAVAILABLE_MESSAGE
from ..schemas import (
    SuggestionData,
    SuggestionPrompt,
    SuggestionsResponse,
    SuggestionsUnavailableResponse,
)
from ..services import SuggestionService, get_suggestion_service

router = APIRouter()


@router.post(
    "/suggestions",
    response_model=SuggestionsResponse,
    response_model_exclude_none=True,
    responses={503: {"model": SuggestionsUnavailableResponse}},
)
async def suggestions(
    payload: SuggestionPrompt,
    service: SuggestionService = Depends(get_suggestion_service),
):
    outcome = await service.suggest(payload)
    if not outcome.from_llm:
        body = SuggestionsUnavailableResponse(
            error=UNAVAILABLE_MESSAGE,
            fallback_suggestions=outcome.suggestions,
        )
        return JSONResponse(status_code=503, content=body.model_dump(mode="json", exclude_none=True))

    return SuggestionsResponse(
        data=SuggestionData(
            type=outcome.category,
            suggestions=outcome.suggestions,
            reasoning=outcome.reasoning,
            confidence=outcome.confidence,
            provider=outcome.provider,
        )
    )
