from __future__ import annotations

from dataclasses import dataclass

from daywise.core.config import Settings

STRATEGY = "local-only (Ollama)"
UNAVAILABLE_MESSAGE = "AI service temporarily unavailable"

# Fixed confidence reported for answers parsed from the local model.
LOCAL_LLM_CONFIDENCE = 0.7


@dataclass(frozen=True)
class FallbackThresholds:
    protein: float = 20.0
    fiber: float = 15.0
    calories: float = 500.0

    @classmethod
    def from_settings(cls, settings: Settings) -> "FallbackThresholds":
        return cls(
            protein=settings.fallback_protein_threshold,
            fiber=settings.fallback_fiber_threshold,
            calories=settings.fallback_calorie_threshold,
        )
