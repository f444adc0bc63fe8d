"""
NutriPlanner - Domain models.
"""

from nutriplanner.models.entities import (
    BudgetPlan,
    FamilyMember,
    ImageSelection,
    Ingredient,
    Location,
    MealRecord,
    Menu,
    Recipe,
    RecipePreferences,
    Store,
)

__all__ = [
    "BudgetPlan",
    "FamilyMember",
    "ImageSelection",
    "Ingredient",
    "Location",
    "MealRecord",
    "Menu",
    "Recipe",
    "RecipePreferences",
    "Store",
]
