"""
Menu generators: multi-recipe plans for one day, a week, or an event.
"""

import logging
from datetime import date, timedelta
from typing import Any

from nutriplanner.generators.prompts import (
    as_iso_date,
    as_model,
    as_models,
    budget_amount,
    format_household,
    format_member,
    system_prompt,
)
from nutriplanner.llm.client import call_llm
from nutriplanner.models.entities import FamilyMember, Menu

logger = logging.getLogger(__name__)


def _end_of_week(start: date | str) -> str:
    if isinstance(start, str):
        start = date.fromisoformat(start)
    return (start + timedelta(days=6)).isoformat()


async def _menu(generator: str, user_prompt: str, **dates: str | None) -> Menu:
    menu = await call_llm(
        response_model=Menu,
        system_prompt=system_prompt(),
        user_prompt=user_prompt,
        generator=generator,
        complexity="high",
    )
    # The requested dates win over whatever the model wrote
    menu = menu.model_copy(update={k: v for k, v in dates.items() if v is not None})
    logger.info(f"{generator}: '{menu.title}' with {len(menu.recipes)} recipes")
    return menu


async def generate_weekly_menu(*, members: Any, date_start: Any) -> Menu:
    """Seven days of lunches and dinners for the selected members."""
    members = as_models(FamilyMember, members)
    start = as_iso_date(date_start)
    end = _end_of_week(start)
    prompt = (
        f"{format_household(members)}\n\n"
        f"Plan lunch and dinner for every day from {start} to {end}. "
        "Vary proteins and cuisines across the week, reuse ingredients between "
        "days to limit waste, and give each recipe a short description."
    )
    return await _menu("weekly_menu", prompt, date_start=start, date_end=end)


async def generate_special_occasion_menu(*, members: Any, occasion: str, date: Any) -> Menu:
    members = as_models(FamilyMember, members)
    day = as_iso_date(date)
    prompt = (
        f"{format_household(members)}\n\n"
        f"Plan a festive menu for **{occasion}** on {day}: "
        "a starter, a main course and a dessert. Include make-ahead tips."
    )
    return await _menu("special_occasion_menu", prompt, date_start=day, date_end=day)


async def generate_budget_menu(*, members: Any, budget_limit: Any) -> Menu:
    """A week of meals that fits within a spending limit."""
    members = as_models(FamilyMember, members)
    amount, currency = budget_amount(budget_limit)
    if amount <= 0:
        raise ValueError("Budget limit must be positive")

    start = date.today().isoformat()
    prompt = (
        f"{format_household(members)}\n\n"
        f"Plan a week of dinners starting {start} whose total ingredient cost "
        f"stays under {amount:.2f} {currency}. Report the estimated total in total_cost."
    )
    menu = await _menu("budget_menu", prompt, date_start=start, date_end=_end_of_week(start))
    if menu.total_cost is not None and menu.total_cost > amount:
        logger.warning(f"budget_menu: estimated cost {menu.total_cost:.2f} exceeds limit {amount:.2f}")
    return menu


async def generate_balanced_daily_menu(*, member: Any, date: Any) -> Menu:
    member = as_model(FamilyMember, member)
    day = as_iso_date(date)
    prompt = (
        f"{format_member(member)}\n\n"
        f"Plan breakfast, lunch, dinner and one snack for {day}, balanced across "
        "macronutrients and within the member's calorie target when one is given."
    )
    return await _menu("balanced_daily_menu", prompt, date_start=day, date_end=day)
