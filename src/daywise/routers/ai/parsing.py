"""Best-effort extraction of suggestion records from free LLM text.

The heuristics below read list-marker lines (``1.``, ``-``, ``*``) and sniff
keywords. They miss suggestions and produce coarse estimates; that is the price
of not depending on structured model output. ``parse_structured`` is the hook
for a JSON-mode model and falls back to the heuristics when the JSON is unusable.
"""
from __future__ import annotations

import json
import logging
import re
import time
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional

from pydantic import ValidationError

from daywise.utils.validators import non_negative

from .config import LOCAL_LLM_CONFIDENCE
from .helpers import (
    default_ingredients,
    determine_meal_type,
    estimate_calories,
    estimate_carbs,
    estimate_difficulty,
    estimate_fat,
    estimate_fiber,
    estimate_prep_time,
    estimate_protein,
    is_sports_friendly,
)
from .schemas import MealRecommendation, SuggestionRecord, SuggestionType

logger = logging.getLogger(__name__)

LIST_MARKER = re.compile(r"^(\d+\.|-|\*)")

MEAL_KEYWORDS = (
    ("breakfast", "breakfast"),
    ("ontbijt", "breakfast"),
    ("lunch", "lunch"),
    ("dinner", "dinner"),
    ("diner", "dinner"),
    ("snack", "snack"),
    ("tussendoortje", "snack"),
)

RECIPE_PATTERNS = (
    re.compile(r"recipe:?\s*([^,.\n]+)", re.IGNORECASE),
    re.compile(r"recept:?\s*([^,.\n]+)", re.IGNORECASE),
    re.compile(r"\bmake\s+([^,.\n]+)", re.IGNORECASE),
    re.compile(r"\bmaak\s+([^,.\n]+)", re.IGNORECASE),
    re.compile(r"\btry\s+([^,.\n]+)", re.IGNORECASE),
    re.compile(r"\bprobeer\s+([^,.\n]+)", re.IGNORECASE),
)

BUDGET_CATEGORIES = ("groceries", "utilities", "transport", "entertainment")

DEFAULT_REASONING = "Local AI analysis completed"


@dataclass
class ParsedCompletion:
    suggestions: List[SuggestionRecord]
    reasoning: str
    confidence: float = LOCAL_LLM_CONFIDENCE
    structured: bool = False


def list_marker_lines(text: str) -> List[str]:
    lines = [line.strip() for line in (text or "").split("\n")]
    return [line for line in lines if line and LIST_MARKER.match(line)]


def strip_marker(line: str) -> str:
    return LIST_MARKER.sub("", line.strip(), count=1).strip()


def extract_meal_type(line: str) -> str:
    lower = line.lower()
    for keyword, meal in MEAL_KEYWORDS:
        if keyword in lower:
            return meal
    return "meal"


def extract_recipe_name(line: str) -> Optional[str]:
    for pattern in RECIPE_PATTERNS:
        match = pattern.search(line)
        if match:
            name = match.group(1).strip(" *_\t")
            if name:
                return name
    return None


def extract_item_name(line: str) -> str:
    words = strip_marker(line).split()
    return words[0] if words else "item"


def extract_category(line: str) -> str:
    lower = line.lower()
    for category in BUDGET_CATEGORIES:
        if category in lower:
            return category
    return "general"


def extract_task_name(line: str) -> str:
    words = strip_marker(line).split()
    return " ".join(words[:3]) or "cleaning task"


def extract_reasoning(text: str) -> str:
    first = (text or "").split("\n\n")[0].strip()
    return first or DEFAULT_REASONING


def _record_for_line(line: str, category: SuggestionType) -> Optional[SuggestionRecord]:
    if category == "meal_planning":
        recipe_name = extract_recipe_name(line)
        if not recipe_name:
            return None
        return SuggestionRecord(meal=extract_meal_type(line), recipe_name=recipe_name, reasoning=line)
    if category == "shopping_optimization":
        return SuggestionRecord(item=extract_item_name(line), advice=line)
    if category == "budget_analysis":
        return SuggestionRecord(category=extract_category(line), advice=line)
    if category == "cleaning_schedule":
        return SuggestionRecord(task=extract_task_name(line), advice=line)
    return None


def extract_suggestions(text: str, category: SuggestionType) -> List[SuggestionRecord]:
    """Heuristic parse; never returns an empty list."""
    suggestions = []
    for line in list_marker_lines(text):
        record = _record_for_line(line, category)
        if record is not None:
            suggestions.append(record)
    if not suggestions:
        logger.debug("No list-marker suggestions found for %s; wrapping full text", category)
        return [SuggestionRecord(advice=text)]
    return suggestions


def _strip_fences(s: str) -> str:
    s = s.strip()
    if s.startswith("```"):
        s = s.strip("` \n")
        if s.lower().startswith("json"):
            s = s[4:].lstrip()
    return s


def _records_from_json(data: Any) -> List[SuggestionRecord]:
    entries = data.get("suggestions") if isinstance(data, dict) else data
    if not isinstance(entries, list):
        return []

    records = []
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        try:
            records.append(SuggestionRecord.model_validate(entry))
        except ValidationError as exc:
            logger.debug("Skipping malformed suggestion entry: %s", exc)
    return records


def parse_structured(text: str, category: SuggestionType) -> ParsedCompletion:
    try:
        data = json.loads(_strip_fences(text or ""))
    except json.JSONDecodeError:
        data = None

    records = _records_from_json(data)
    if not records:
        logger.debug("Structured output unusable for %s; using text heuristics", category)
        return parse_completion(text, category)

    reasoning = data.get("reasoning") if isinstance(data, dict) else None
    return ParsedCompletion(
        suggestions=records,
        reasoning=str(reasoning) if reasoning else DEFAULT_REASONING,
        structured=True,
    )


def parse_completion(text: str, category: SuggestionType, structured: bool = False) -> ParsedCompletion:
    if structured:
        return parse_structured(text, category)
    return ParsedCompletion(
        suggestions=extract_suggestions(text, category),
        reasoning=extract_reasoning(text),
    )


def to_meal_recommendation(record: SuggestionRecord, rec_id: str) -> MealRecommendation:
    """Turn a parsed record into a complete recommendation.

    Any value the model left out (or reported as zero) is replaced by a
    keyword estimate based on the dish name.
    """
    recipe_name = record.recipe_name
    return MealRecommendation(
        id=rec_id,
        name=recipe_name or record.meal or "Maaltijdvoorstel",
        description=record.reasoning or record.advice or "AI-gegenereerd voorstel",
        reason=record.reasoning or "Aanbevolen door AI",
        prep_time=int(non_negative(record.prep_time or estimate_prep_time(recipe_name))),
        difficulty=estimate_difficulty(recipe_name),
        calories=non_negative(record.calories or estimate_calories(recipe_name)),
        protein=non_negative(record.protein or estimate_protein(recipe_name)),
        carbs=non_negative(record.carbs or estimate_carbs(recipe_name)),
        fat=non_negative(record.fat or estimate_fat(recipe_name)),
        fiber=non_negative(record.fiber or estimate_fiber(recipe_name)),
        ingredients=record.ingredients or default_ingredients(recipe_name),
        instructions=record.instructions or ["Bereid volgens traditionele Nederlandse wijze"],
        tags=["AI-aanbeveling", "personalized"],
        meal_type=determine_meal_type(record.meal or recipe_name),
        sports_friendly=is_sports_friendly(recipe_name or record.advice),
    )


def to_meal_recommendations(records: Iterable[SuggestionRecord]) -> List[MealRecommendation]:
    stamp = int(time.time() * 1000)
    recommendations = []
    for index, record in enumerate(records):
        if not (record.meal or record.recipe_name or record.advice):
            continue
        recommendations.append(to_meal_recommendation(record, f"ai-{stamp}-{index}"))
    return recommendations
