from __future__ import annotations

from datetime import date, datetime, time, timezone
from typing import Any, Dict, List, Optional, Tuple

from fastapi import APIRouter, Depends, HTTPException, Path, Query
from pydantic import BaseModel, Field
from sqlmodel import Session, select

from daywise.core.database import as_utc, get_session, utc_now
from daywise.models.meals import MealType, UserMeal
from daywise.utils.nutrition import FIELDS, Nutrition, round_nutrition, sum_nutrition

router = APIRouter(prefix="/meals", tags=["meals"])


class IngredientIn(BaseModel):
    name: str
    amount: str
    unit: Optional[str] = None


class NutritionIn(BaseModel):
    calories: float = Field(..., ge=0)
    protein: float = Field(..., ge=0)
    carbs: float = Field(..., ge=0)
    fat: float = Field(..., ge=0)
    fiber: Optional[float] = Field(None, ge=0)


class LogMealRequest(BaseModel):
    user_id: int = Field(..., gt=0)
    recipe_id: Optional[int] = Field(None, gt=0)
    meal_name: str = Field(..., min_length=1)
    meal_type: MealType
    ingredients: List[IngredientIn]
    nutrition: Optional[NutritionIn] = None
    portion_size: Optional[str] = None
    notes: Optional[str] = None
    logged_at: Optional[datetime] = None


class UpdateMealRequest(BaseModel):
    recipe_id: Optional[int] = Field(None, gt=0)
    meal_name: Optional[str] = Field(None, min_length=1)
    meal_type: Optional[MealType] = None
    ingredients: Optional[List[IngredientIn]] = None
    nutrition: Optional[NutritionIn] = None
    portion_size: Optional[str] = None
    notes: Optional[str] = None
    logged_at: Optional[datetime] = None


def _day_bounds(day: date) -> Tuple[datetime, datetime]:
    return (
        datetime.combine(day, time.min, tzinfo=timezone.utc),
        datetime.combine(day, time.max, tzinfo=timezone.utc),
    )


def _meals_for_day(session: Session, user_id: int, day: date) -> List[UserMeal]:
    start, end = _day_bounds(day)
    stmt = (
        select(UserMeal)
        .where(UserMeal.user_id == user_id)
        .where(UserMeal.logged_at >= start)
        .where(UserMeal.logged_at <= end)
        .order_by(UserMeal.logged_at.desc())
    )
    return list(session.exec(stmt).all())


def daily_nutrition(session: Session, user_id: int, day: date) -> Nutrition:
    """Sum the logged nutrition of one user for one day (missing values count as 0)."""
    return sum_nutrition(_meals_for_day(session, user_id, day))


def _nutrition_out(meal: UserMeal) -> Optional[Dict[str, Optional[float]]]:
    values = {name: getattr(meal, name) for name in FIELDS}
    if all(v is None for v in values.values()):
        return None
    return values


def _meal_out(meal: UserMeal) -> Dict[str, Any]:
    return {
        "id": meal.id,
        "user_id": meal.user_id,
        "recipe_id": meal.recipe_id,
        "meal_name": meal.meal_name,
        "meal_type": meal.meal_type.value if isinstance(meal.meal_type, MealType) else meal.meal_type,
        "ingredients": meal.ingredients,
        "nutrition": _nutrition_out(meal),
        "portion_size": meal.portion_size,
        "notes": meal.notes,
        "logged_at": meal.logged_at.isoformat(),
    }


@router.post("", status_code=201)
def log_meal(payload: LogMealRequest, session: Session = Depends(get_session)):
    nutrition = payload.nutrition.model_dump() if payload.nutrition else {}
    meal = UserMeal(
        user_id=payload.user_id,
        recipe_id=payload.recipe_id,
        meal_name=payload.meal_name,
        meal_type=payload.meal_type,
        ingredients=[item.model_dump(exclude_none=True) for item in payload.ingredients],
        portion_size=payload.portion_size,
        notes=payload.notes,
        logged_at=as_utc(payload.logged_at) if payload.logged_at else utc_now(),
        **nutrition,
    )
    session.add(meal)
    session.commit()
    session.refresh(meal)
    return {"success": True, "data": _meal_out(meal)}


@router.get("/user/{user_id}")
def list_meals(
    user_id: int = Path(..., gt=0),
    day: Optional[date] = Query(None, alias="date"),
    session: Session = Depends(get_session),
):
    if day is None:
        stmt = (
            select(UserMeal)
            .where(UserMeal.user_id == user_id)
            .order_by(UserMeal.logged_at.desc())
        )
        meals = session.exec(stmt).all()
    else:
        meals = _meals_for_day(session, user_id, day)
    return {"success": True, "data": [_meal_out(meal) for meal in meals]}


@router.get("/user/{user_id}/nutrition", summary="Daily nutrition totals of a user")
def nutrition_summary(
    user_id: int = Path(..., gt=0),
    day: Optional[date] = Query(None, alias="date"),
    session: Session = Depends(get_session),
):
    target_day = day or utc_now().date()
    meals = _meals_for_day(session, user_id, target_day)
    totals = round_nutrition(sum_nutrition(meals), 1)
    return {
        "success": True,
        "data": {
            "date": target_day.isoformat(),
            "total_nutrition": totals.to_dict(),
            "meal_count": len(meals),
            "meals": [
                {
                    "id": meal.id,
                    "meal_name": meal.meal_name,
                    "meal_type": _meal_out(meal)["meal_type"],
                    "nutrition": _nutrition_out(meal),
                    "logged_at": meal.logged_at.isoformat(),
                }
                for meal in meals
            ],
        },
    }


@router.put("/{meal_id}")
def update_meal(
    payload: UpdateMealRequest,
    meal_id: int = Path(..., gt=0),
    session: Session = Depends(get_session),
):
    meal = session.get(UserMeal, meal_id)
    if not meal:
        raise HTTPException(404, "Meal not found")

    changes = payload.model_dump(exclude_unset=True)
    nutrition = changes.pop("nutrition", None)
    # Columns that cannot be cleared keep their value when sent as null.
    for key in ("meal_name", "meal_type", "ingredients", "logged_at"):
        if key in changes and changes[key] is None:
            del changes[key]
    if "ingredients" in changes:
        changes["ingredients"] = [item.model_dump(exclude_none=True) for item in payload.ingredients]
    if "logged_at" in changes:
        changes["logged_at"] = as_utc(changes["logged_at"])
    # A nutrition block replaces all five values; omitted fiber becomes unknown.
    if nutrition is not None:
        changes.update({name: nutrition.get(name) for name in FIELDS})

    for key, value in changes.items():
        setattr(meal, key, value)
    session.add(meal)
    session.commit()
    session.refresh(meal)
    return {"success": True, "data": _meal_out(meal)}


@router.delete("/{meal_id}")
def delete_meal(meal_id: int, session: Session = Depends(get_session)):
    meal = session.get(UserMeal, meal_id)
    if not meal:
        raise HTTPException(404, "Meal not found")
    session.delete(meal)
    session.commit()
    return {"success": True, "message": "Meal deleted successfully"}
