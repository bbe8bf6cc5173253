from __future__ import annotations

from fastapi import APIRouter, Depends

from ..config import STRATEGY
from ..schemas import OllamaStatus, StatusData, StatusResponse
from ..services import SuggestionService, get_suggestion_service

router = APIRouter()


@router.get("/status", response_model=StatusResponse)
async def status(service: SuggestionService = Depends(get_suggestion_service)):
    available = await service.is_available()
    return StatusResponse(
        data=StatusData(
            ollama=OllamaStatus(available=available, url=service.gateway.base_url),
            strategy=STRATEGY,
        )
    )
