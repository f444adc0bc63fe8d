"""
NutriPlanner - Domain Entity Models.

These models are used for:
- Typed values collected into a flow's context by the selection steps
- Structured LLM outputs via Instructor (the generator results)
- The payloads carried inside Interaction content
"""

from datetime import date
from typing import Literal
from uuid import uuid4

from pydantic import BaseModel, Field


def new_id() -> str:
    """Fresh opaque identifier for generated entities."""
    return uuid4().hex


# =============================================================================
# Family
# =============================================================================


class FamilyMember(BaseModel):
    """A household member whose preferences shape generated meals."""

    id: str = Field(default_factory=new_id)
    first_name: str
    last_name: str = ""
    birth_date: date | None = None
    role: Literal["parent", "child", "grandparent", "other"] = "other"
    dietary_preferences: list[str] = Field(default_factory=list)
    allergies: list[str] = Field(default_factory=list)
    medical_restrictions: list[str] = Field(default_factory=list)
    favorite_cuisines: list[str] = Field(default_factory=list)
    spice_level: int = Field(default=2, ge=0, le=5)
    calorie_target: int | None = None  # kcal/day
    favorite_meals: list[str] = Field(default_factory=list)

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def age_on(self, day: date) -> int | None:
        """Age in whole years on `day`, or None when no birth date is known."""
        if self.birth_date is None:
            return None
        born = self.birth_date
        return day.year - born.year - ((day.month, day.day) < (born.month, born.day))


# =============================================================================
# Pantry & Recipes
# =============================================================================


class Ingredient(BaseModel):
    """An ingredient in the household inventory."""

    id: str = Field(default_factory=new_id)
    name: str
    quantity: float = 0
    unit: str = "unit"
    category: str | None = None  # "vegetable", "meat", "dairy", ...
    unit_price: float | None = None
    perishable: bool = False
    expiry_date: date | None = None
    current_stock: float = 0


class RecipeIngredient(BaseModel):
    """An ingredient line inside a recipe."""

    name: str
    quantity: float = 0
    unit: str = ""


class Recipe(BaseModel):
    """A recipe - either selected from the user's book or generated."""

    id: str = Field(default_factory=new_id)
    name: str
    description: str = ""
    ingredients: list[RecipeIngredient] = Field(default_factory=list)
    instructions: list[str] = Field(default_factory=list)
    prep_time_minutes: int = 0
    cook_time_minutes: int = 0
    servings: int = 2
    difficulty: Literal["easy", "medium", "hard"] = "easy"
    cuisine: str | None = None
    tags: list[str] = Field(default_factory=list)
    calories_per_serving: float | None = None


class Menu(BaseModel):
    """A menu spanning one or more days."""

    id: str = Field(default_factory=new_id)
    title: str
    date_start: str  # ISO date
    date_end: str | None = None
    description: str = ""
    recipes: list[Recipe] = Field(default_factory=list)
    total_cost: float | None = None


class MealRecord(BaseModel):
    """A meal from a member's history."""

    id: str = Field(default_factory=new_id)
    member_id: str | None = None
    date: str  # ISO date
    meal_type: Literal["breakfast", "lunch", "dinner", "snack"] = "dinner"
    recipe_name: str
    notes: str = ""


class RecipePreferences(BaseModel):
    """Taste preferences submitted for a recipe suggestion."""

    spice_level: int = Field(default=2, ge=0, le=5)
    cuisines: list[str] = Field(default_factory=list)
    meal_type: str | None = None


# =============================================================================
# Budget & Stores
# =============================================================================


class BudgetAllocation(BaseModel):
    category: str
    amount: float
    tips: str = ""


class BudgetPlan(BaseModel):
    """Monthly food budget plan."""

    id: str = Field(default_factory=new_id)
    month: str  # "YYYY-MM"
    limit: float
    currency: str = "EUR"
    allocations: list[BudgetAllocation] = Field(default_factory=list)
    summary: str = ""


class Store(BaseModel):
    id: str = Field(default_factory=new_id)
    name: str
    address: str | None = None
    category: str | None = None  # "supermarket", "market", "butcher", ...
    distance_km: float | None = None


class Location(BaseModel):
    latitude: float
    longitude: float
    address: str | None = None


class ImageSelection(BaseModel):
    """A picture chosen by the user (dish photo, fridge contents...)."""

    url: str
    mime_type: str = "image/jpeg"
    description: str | None = None


# =============================================================================
# Generator Results
# =============================================================================


class ShoppingItem(BaseModel):
    name: str
    quantity: float
    unit: str
    stores: str = ""  # Where to buy it


class ShoppingListDraft(BaseModel):
    items: list[ShoppingItem] = Field(default_factory=list)


class NutrientValue(BaseModel):
    id: str = Field(default_factory=new_id)
    name: str  # "Protein", "Fiber", ...
    value: float
    unit: str = "g"


class RecipeAnalysis(BaseModel):
    """Nutritional analysis of a recipe or a past meal."""

    subject_id: str = ""  # Recipe or meal record analyzed
    calories: float
    nutrients: list[NutrientValue] = Field(default_factory=list)
    description: str = ""


class StoreSuggestion(BaseModel):
    stores: list[Store] = Field(default_factory=list)
    recommendation: str | None = None


class IngredientStock(BaseModel):
    name: str
    available: bool
    store: str | None = None


class IngredientAvailability(BaseModel):
    stores: list[Store] = Field(default_factory=list)
    ingredients: list[IngredientStock] = Field(default_factory=list)


class NutritionalInfo(BaseModel):
    calories: float
    nutrients: list[NutrientValue] = Field(default_factory=list)
    description: str | None = None


class TroubleshootAnswer(BaseModel):
    question: str
    solution: str


class CreativeIdea(BaseModel):
    name: str
    description: str


class CreativeIdeas(BaseModel):
    ideas: list[CreativeIdea] = Field(default_factory=list)


class FoodTrend(BaseModel):
    id: str = Field(default_factory=new_id)
    name: str
    description: str
    popularity: int = Field(default=80, ge=1, le=100)


class FoodTrendReport(BaseModel):
    trends: list[FoodTrend] = Field(default_factory=list)


class CompatibilityReport(BaseModel):
    """Whether a recipe suits a group of family members."""

    recipe: Recipe
    is_compatible: bool
    reasons: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
