from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel

from daywise.core.database import UTCDateTime, utc_now


class MealType(str, Enum):
    breakfast = "breakfast"
    lunch = "lunch"
    dinner = "dinner"
    snack = "snack"


class UserMeal(SQLModel, table=True):
    __tablename__ = "user_meal"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(index=True)
    recipe_id: Optional[int] = Field(default=None, index=True)
    meal_name: str
    meal_type: MealType = Field(index=True)
    ingredients: List[Dict[str, Any]] = Field(
        default_factory=list, sa_column=Column(JSON, nullable=False)
    )

    # Nutrition as logged; any value may be missing.
    calories: Optional[float] = Field(default=None, ge=0)
    protein: Optional[float] = Field(default=None, ge=0)
    carbs: Optional[float] = Field(default=None, ge=0)
    fat: Optional[float] = Field(default=None, ge=0)
    fiber: Optional[float] = Field(default=None, ge=0)

    portion_size: Optional[str] = None
    notes: Optional[str] = None
    # Stored as UTC; read back timezone-aware.
    logged_at: datetime = Field(
        default_factory=utc_now, sa_column=Column(UTCDateTime, nullable=False, index=True)
    )
    created_at: datetime = Field(
        default_factory=utc_now, sa_column=Column(UTCDateTime, nullable=False, index=True)
    )
