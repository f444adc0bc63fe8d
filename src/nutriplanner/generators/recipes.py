"""
Recipe generators.

One async function per recipe-producing flow. Arguments are exactly the
context fields the flow declares in the dispatch table.
"""

import logging
from typing import Any

from nutriplanner.generators.prompts import (
    as_model,
    as_models,
    format_household,
    format_ingredients,
    format_member,
    system_prompt,
)
from nutriplanner.llm.client import call_llm
from nutriplanner.models.entities import (
    FamilyMember,
    ImageSelection,
    Ingredient,
    Recipe,
    RecipePreferences,
)

logger = logging.getLogger(__name__)


async def _recipe(generator: str, user_prompt: str, **kwargs: Any) -> Recipe:
    recipe = await call_llm(
        response_model=Recipe,
        system_prompt=system_prompt(),
        user_prompt=user_prompt,
        generator=generator,
        **kwargs,
    )
    logger.info(f"{generator}: generated '{recipe.name}'")
    return recipe


async def generate_personalized_recipe(*, member: Any) -> Recipe:
    """A recipe tailored to one member's tastes, allergies and calorie target."""
    member = as_model(FamilyMember, member)
    prompt = (
        f"{format_member(member)}\n\n"
        "Create one recipe made for this person, ready in under 60 minutes. "
        "Match their favorite cuisines and spice level, and keep a serving "
        "within a third of their daily calorie target when one is given."
    )
    return await _recipe("recipe_personalized", prompt)


async def generate_quick_recipe(*, member: Any) -> Recipe:
    """Something on the table in 20 minutes."""
    member = as_model(FamilyMember, member)
    prompt = (
        f"{format_member(member)}\n\n"
        "Create one recipe with total preparation and cooking time of 20 minutes "
        "or less, using at most 8 common ingredients."
    )
    return await _recipe("quick_recipe", prompt, complexity="low")


async def generate_kids_recipe(*, member: Any) -> Recipe:
    member = as_model(FamilyMember, member)
    prompt = (
        f"{format_member(member)}\n\n"
        "Create one child-friendly recipe for this member: mild flavors, fun "
        "presentation, balanced nutrition, and at least one step a child can help with."
    )
    return await _recipe("kids_recipe", prompt)


async def optimize_inventory(*, ingredients: Any) -> Recipe:
    """Use up what's in stock, perishables first."""
    ingredients = as_models(Ingredient, ingredients)
    perishable = [i.name for i in ingredients if i.perishable]
    prompt = (
        f"## INVENTORY\n{format_ingredients(ingredients)}\n\n"
        "Create one recipe that uses as much of this inventory as possible, "
        "with as few extra purchases as possible."
    )
    if perishable:
        prompt += f" Prioritize the perishable items: {', '.join(perishable)}."
    return await _recipe("inventory_optimization", prompt)


async def generate_ingredient_based_recipe(*, member: Any, ingredient: Any) -> Recipe:
    member = as_model(FamilyMember, member)
    ingredient = as_model(Ingredient, ingredient)
    prompt = (
        f"{format_member(member)}\n\n"
        f"Create one recipe built around **{ingredient.name}** as the main ingredient, "
        "suited to this member."
    )
    return await _recipe("ingredient_based_recipe", prompt)


async def generate_specific_diet_recipe(*, member: Any, diet: str) -> Recipe:
    member = as_model(FamilyMember, member)
    prompt = (
        f"{format_member(member)}\n\n"
        f"Create one recipe that strictly follows a **{diet}** diet and suits this member."
    )
    return await _recipe("specific_diet_recipe", prompt)


async def generate_recipe_from_image(*, member: Any, image: Any) -> Recipe:
    """Reconstruct a recipe from a photo (a dish, or the contents of a fridge)."""
    member = as_model(FamilyMember, member)
    if isinstance(image, str):
        image = ImageSelection(url=image)
    elif isinstance(image, list):
        # Multi-select image widgets submit a list; the first picture drives the recipe
        image = as_model(ImageSelection, image[0])
    else:
        image = as_model(ImageSelection, image)

    prompt = (
        f"{format_member(member)}\n\n"
        "Look at the attached image. If it shows a dish, write a recipe to "
        "reproduce it; if it shows ingredients, write a recipe that uses them. "
        "Adapt it to this member."
    )
    if image.description:
        prompt += f"\nUser's note about the image: {image.description}"
    return await _recipe("recipe_from_image", prompt, image_urls=[image.url])


async def generate_leftover_recipe(*, ingredients: Any) -> Recipe:
    ingredients = as_models(Ingredient, ingredients)
    prompt = (
        f"## LEFTOVERS\n{format_ingredients(ingredients)}\n\n"
        "Create one recipe that turns these leftovers into a fresh meal. "
        "Pantry staples (oil, salt, spices) may be added."
    )
    return await _recipe("leftover_recipe", prompt, complexity="low")


async def generate_guest_recipe(*, members: Any, guest_count: int) -> Recipe:
    """A dish for the household plus guests."""
    members = as_models(FamilyMember, members)
    guest_count = int(guest_count)
    if guest_count < 1:
        raise ValueError("Guest count must be at least 1")

    servings = len(members) + guest_count
    prompt = (
        f"{format_household(members)}\n\n"
        f"Create one shareable recipe for {servings} servings "
        f"({len(members)} household members and {guest_count} guests). "
        "It should impress guests while respecting every household constraint."
    )
    return await _recipe("guest_recipe", prompt)


async def suggest_recipe(*, ingredients: Any, preferences: Any) -> Recipe:
    """Recipe idea from chosen ingredients and taste preferences."""
    ingredients = as_models(Ingredient, ingredients)
    preferences = as_model(RecipePreferences, preferences)

    wishes = [f"spice level {preferences.spice_level}/5"]
    if preferences.cuisines:
        wishes.append(f"cuisines: {', '.join(preferences.cuisines)}")
    if preferences.meal_type:
        wishes.append(f"meal: {preferences.meal_type}")

    prompt = (
        f"## INGREDIENTS\n{format_ingredients(ingredients)}\n\n"
        f"Suggest one recipe using these ingredients ({'; '.join(wishes)})."
    )
    return await _recipe("recipe_suggestion", prompt)
