from __future__ import annotations

from datetime import date, datetime
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from daywise.models.meals import MealType

SuggestionType = Literal[
    "meal_planning",
    "shopping_optimization",
    "budget_analysis",
    "cleaning_schedule",
]
Provider = Literal["ollama", "fallback"]


class NutritionSnapshot(BaseModel):
    calories: float = Field(0.0, ge=0)
    protein: float = Field(0.0, ge=0)
    carbs: float = Field(0.0, ge=0)
    fat: float = Field(0.0, ge=0)
    fiber: float = Field(0.0, ge=0)


class NutritionTarget(BaseModel):
    calories: float = Field(2200.0, ge=0)
    protein: float = Field(150.0, ge=0)
    carbs: float = Field(250.0, ge=0)
    fat: float = Field(80.0, ge=0)
    fiber: float = Field(30.0, ge=0)


class CalendarEvent(BaseModel):
    title: str
    start_time: datetime
    end_time: datetime
    event_type: Literal["work", "sport", "personal", "meal"] = "personal"
    location: Optional[str] = None


class UserPreferences(BaseModel):
    model_config = ConfigDict(extra="allow")

    dietary: List[str] = []
    nutrition_goals: Optional[NutritionTarget] = None
    current_nutrition: Optional[NutritionSnapshot] = None
    meals_today: List[str] = []
    recent_meals: List[Any] = []
    meal_type: Optional[MealType] = None


class SuggestionContext(BaseModel):
    calendar_events: List[CalendarEvent] = []
    user_preferences: UserPreferences = Field(default_factory=UserPreferences)
    current_date: datetime
    location: str = "Netherlands"


class SuggestionPrompt(BaseModel):
    type: SuggestionType
    context: SuggestionContext
    user_input: str


class SuggestionRecord(BaseModel):
    """Loosely typed suggestion as extracted from LLM text or the catalog."""

    meal: Optional[str] = None
    recipe_name: Optional[str] = None
    reasoning: Optional[str] = None
    prep_time: Optional[int] = None
    item: Optional[str] = None
    advice: Optional[str] = None
    category: Optional[str] = None
    task: Optional[str] = None
    calories: Optional[float] = None
    protein: Optional[float] = None
    carbs: Optional[float] = None
    fat: Optional[float] = None
    fiber: Optional[float] = None
    ingredients: Optional[List[str]] = None
    instructions: Optional[List[str]] = None


class SuggestionData(BaseModel):
    type: SuggestionType
    suggestions: List[SuggestionRecord]
    reasoning: Optional[str] = None
    confidence: Optional[float] = Field(None, ge=0, le=1)
    provider: Provider = "ollama"


class SuggestionsResponse(BaseModel):
    success: bool = True
    data: SuggestionData


class SuggestionsUnavailableResponse(BaseModel):
    success: bool = False
    error: str
    fallback_suggestions: List[SuggestionRecord]


class MealRecommendation(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str
    name: str = Field(..., min_length=1)
    description: str
    reason: str
    prep_time: int = Field(..., ge=0)
    difficulty: int = Field(..., ge=1, le=5)
    calories: float = Field(..., ge=0)
    protein: float = Field(..., ge=0)
    carbs: float = Field(..., ge=0)
    fat: float = Field(..., ge=0)
    fiber: float = Field(0.0, ge=0)
    ingredients: List[str]
    instructions: List[str]
    tags: List[str]
    meal_type: MealType
    sports_friendly: bool = False


class MealRecommendationRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    current_nutrition: Optional[NutritionSnapshot] = None
    targets: NutritionTarget = Field(default_factory=NutritionTarget)
    preferences: List[str] = []
    calendar_events: List[CalendarEvent] = []
    meal_type: Optional[MealType] = None
    user_id: Optional[int] = Field(None, gt=0)
    day: Optional[date] = Field(None, alias="date")
    location: Optional[str] = None


class MealRecommendationsData(BaseModel):
    recommendations: List[MealRecommendation]
    provider: Provider
    reasoning: Optional[str] = None


class MealRecommendationsResponse(BaseModel):
    success: bool = True
    data: MealRecommendationsData


class QuickMealRequest(BaseModel):
    calendar_events: List[CalendarEvent] = []
    dietary_preferences: List[str] = []


class ChatRequest(BaseModel):
    message: str = Field(..., min_length=1, description="Question or request from the user")
    current_nutrition: Optional[NutritionSnapshot] = None
    targets: Optional[NutritionTarget] = None
    recent_meals: List[str] = []
    preferences: List[str] = []


class ChatMessage(BaseModel):
    id: str
    type: Literal["user", "assistant"] = "assistant"
    content: str
    timestamp: datetime
    recommendations: List[MealRecommendation] = []


class OllamaStatus(BaseModel):
    available: bool
    url: str


class StatusData(BaseModel):
    ollama: OllamaStatus
    strategy: str


class StatusResponse(BaseModel):
    success: bool = True
    data: StatusData
