from .meals import MealType, UserMeal

__all__ = ["MealType", "UserMeal"]
