"""
Shopping generators: shopping lists, budget plans, and where to buy.
"""

import logging
from datetime import date
from typing import Any

from nutriplanner.generators.prompts import (
    as_model,
    as_models,
    budget_amount,
    format_ingredients,
    system_prompt,
)
from nutriplanner.llm.client import call_llm
from nutriplanner.models.entities import (
    BudgetPlan,
    Ingredient,
    IngredientAvailability,
    Location,
    Menu,
    ShoppingListDraft,
    StoreSuggestion,
)

logger = logging.getLogger(__name__)


async def generate_shopping_list(*, menu: Any, current_ingredients: Any) -> ShoppingListDraft:
    """
    What to buy for a menu, given what is already in the pantry.

    Items already stocked in sufficient quantity are dropped from the draft
    even if the model lists them.
    """
    menu = as_model(Menu, menu)
    stock = as_models(Ingredient, current_ingredients)

    dishes = "\n".join(f"- {r.name}" for r in menu.recipes) or "(no recipes)"
    prompt = (
        f"## MENU: {menu.title} ({menu.date_start})\n{dishes}\n\n"
        f"## ALREADY IN STOCK\n{format_ingredients(stock)}\n\n"
        "List everything that must be bought to cook this menu, merged by "
        "ingredient, with quantities and the kind of store to buy each item at."
    )
    draft = await call_llm(
        response_model=ShoppingListDraft,
        system_prompt=system_prompt(),
        user_prompt=prompt,
        generator="shopping_list",
    )

    on_hand = {i.name.lower(): i.current_stock or i.quantity for i in stock}
    items = [
        item for item in draft.items
        if on_hand.get(item.name.lower(), 0) < item.quantity
    ]
    if len(items) != len(draft.items):
        logger.debug(f"shopping_list: dropped {len(draft.items) - len(items)} stocked items")
    return ShoppingListDraft(items=items)


async def plan_budget(*, budget_limit: Any, month: Any) -> BudgetPlan:
    """Split a monthly food budget into categories."""
    amount, currency = budget_amount(budget_limit)
    if amount <= 0:
        raise ValueError("Budget limit must be positive")
    month = month.strftime("%Y-%m") if isinstance(month, date) else str(month)

    prompt = (
        f"Monthly food budget: {amount:.2f} {currency} for {month}.\n\n"
        "Allocate it across categories (produce, proteins, dairy, pantry, "
        "snacks, eating out) with a saving tip for each. Allocations must sum "
        "to the budget."
    )
    plan = await call_llm(
        response_model=BudgetPlan,
        system_prompt=system_prompt(),
        user_prompt=prompt,
        generator="budget_planning",
        complexity="high",
    )
    return plan.model_copy(update={"month": month, "limit": amount, "currency": currency})


async def suggest_stores(*, ingredient: Any) -> StoreSuggestion:
    ingredient = as_model(Ingredient, ingredient)
    prompt = (
        f"Where is the best place to buy **{ingredient.name}**"
        + (f" ({ingredient.category})" if ingredient.category else "")
        + "? Suggest up to 4 kinds of stores with a short recommendation."
    )
    return await call_llm(
        response_model=StoreSuggestion,
        system_prompt=system_prompt(),
        user_prompt=prompt,
        generator="store_suggestion",
        complexity="low",
    )


async def check_ingredient_availability(*, ingredient_name: str, location: Any) -> IngredientAvailability:
    location = as_model(Location, location)
    where = location.address or f"{location.latitude:.4f}, {location.longitude:.4f}"
    prompt = (
        f"Ingredient: {ingredient_name}\nLocation: {where}\n\n"
        "List nearby stores likely to carry this ingredient, with an "
        "approximate distance in km, and whether it is typically available at each."
    )
    return await call_llm(
        response_model=IngredientAvailability,
        system_prompt=system_prompt(),
        user_prompt=prompt,
        generator="ingredient_availability",
    )
