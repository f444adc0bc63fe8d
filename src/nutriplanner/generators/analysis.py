"""
Analysis generators: nutrition of recipes and meals, compatibility checks,
free-form nutrition questions and food trends.
"""

import logging
from typing import Any

from nutriplanner.generators.prompts import (
    as_model,
    as_models,
    format_household,
    format_member,
    system_prompt,
)
from nutriplanner.llm.client import call_llm
from nutriplanner.models.entities import (
    CompatibilityReport,
    FamilyMember,
    FoodTrendReport,
    MealRecord,
    NutritionalInfo,
    Recipe,
    RecipeAnalysis,
)

logger = logging.getLogger(__name__)


def _format_recipe(recipe: Recipe) -> str:
    lines = [f"## RECIPE: {recipe.name} ({recipe.servings} servings)"]
    if recipe.description:
        lines.append(recipe.description)
    for ing in recipe.ingredients:
        qty = f"{ing.quantity:g} {ing.unit} " if ing.quantity else ""
        lines.append(f"- {qty}{ing.name}")
    return "\n".join(lines)


async def analyze_recipe(*, recipe: Any, members: Any = None) -> RecipeAnalysis:
    """Nutrition per serving; with a household, also how it suits each member."""
    recipe = as_model(Recipe, recipe)
    household = as_models(FamilyMember, members)
    prompt = (
        f"{_format_recipe(recipe)}\n\n"
        "Estimate calories per serving and the main nutrients "
        "(protein, carbohydrates, fat, fiber, sodium) with units."
    )
    if household:
        prompt = (
            f"{format_household(household)}\n\n{prompt}\n"
            "In the description, flag any conflict with a member's allergies "
            "or restrictions and suggest a portion for each member."
        )
    analysis = await call_llm(
        response_model=RecipeAnalysis,
        system_prompt=system_prompt(),
        user_prompt=prompt,
        generator="recipe_nutrition_analysis",
    )
    return analysis.model_copy(update={"subject_id": recipe.id})


async def analyze_meal(*, member: Any, meal: Any) -> RecipeAnalysis:
    """How a past meal fit the member's needs."""
    member = as_model(FamilyMember, member)
    meal = as_model(MealRecord, meal)
    prompt = (
        f"{format_member(member)}\n\n"
        f"## MEAL\n{meal.meal_type} on {meal.date}: {meal.recipe_name}"
        + (f"\nNotes: {meal.notes}" if meal.notes else "")
        + "\n\nEstimate its calories and nutrients, and explain in the description "
        "how well it fits this member's constraints and calorie target."
    )
    analysis = await call_llm(
        response_model=RecipeAnalysis,
        system_prompt=system_prompt(),
        user_prompt=prompt,
        generator="meal_analysis",
    )
    return analysis.model_copy(update={"subject_id": meal.id})


async def check_recipe_compatibility(*, members: Any, recipe: Any) -> CompatibilityReport:
    """Whether one recipe works for every selected member."""
    members = as_models(FamilyMember, members)
    recipe = as_model(Recipe, recipe)
    prompt = (
        f"{format_household(members)}\n\n{_format_recipe(recipe)}\n\n"
        "Decide whether this recipe is compatible with every member. List the "
        "reasons for your verdict and concrete substitutions that would fix "
        "any incompatibility."
    )
    report = await call_llm(
        response_model=CompatibilityReport,
        system_prompt=system_prompt(),
        user_prompt=prompt,
        generator="recipe_compatibility",
    )
    if not report.is_compatible:
        logger.info(f"recipe_compatibility: '{recipe.name}' flagged ({len(report.reasons)} reasons)")
    # Report on the recipe the user picked, not a paraphrase of it
    return report.model_copy(update={"recipe": recipe})


async def get_nutritional_info(*, query: str) -> NutritionalInfo:
    prompt = (
        f"Question: {query}\n\n"
        "Give calories and the key nutrients for the food or portion asked "
        "about. Use the description for a short plain-language answer."
    )
    return await call_llm(
        response_model=NutritionalInfo,
        system_prompt=system_prompt(),
        user_prompt=prompt,
        generator="nutritional_info",
        complexity="low",
    )


async def analyze_food_trends(*, members: Any) -> FoodTrendReport:
    members = as_models(FamilyMember, members)
    prompt = (
        f"{format_household(members)}\n\n"
        "List 5 current food trends this household would enjoy. Rate each "
        "trend's popularity from 1 to 100 and explain how it fits them."
    )
    return await call_llm(
        response_model=FoodTrendReport,
        system_prompt=system_prompt(),
        user_prompt=prompt,
        generator="food_trend_analysis",
    )
