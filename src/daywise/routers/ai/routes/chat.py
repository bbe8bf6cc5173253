from __future__ import annotations

from fastapi import APIRouter, Depends

from ..schemas import ChatMessage, ChatRequest
from ..services import SuggestionService, get_suggestion_service

router = APIRouter()


@router.post("/chat")
async def nutrition_chat(
    payload: ChatRequest,
    service: SuggestionService = Depends(get_suggestion_service),
):
    message: ChatMessage = await service.chat(payload)
    return {"success": True, "data": message.model_dump(mode="json", by_alias=True)}
