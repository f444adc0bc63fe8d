"""
Prompt building blocks shared by the generators.

Context values arrive from selection widgets, so they may be pydantic models
or plain dicts. The helpers here normalize them and render compact,
markdown-ish sections for prompt injection.
"""

from datetime import date
from typing import Any, TypeVar

from pydantic import BaseModel

from nutriplanner.config import settings
from nutriplanner.models.entities import FamilyMember, Ingredient

M = TypeVar("M", bound=BaseModel)

SYSTEM_PROMPT = (
    "You are NutriPlanner, a culinary assistant for families. "
    "Respect every allergy and medical restriction without exception. "
    "Prefer affordable, seasonal ingredients and realistic preparation times. "
    "Answer only with data matching the requested schema."
)

LANGUAGES = {
    "ar": "Arabic",
    "de": "German",
    "en": "English",
    "es": "Spanish",
    "fr": "French",
    "it": "Italian",
    "pt": "Portuguese",
    "wo": "Wolof",
}


def system_prompt(locale: str | None = None) -> str:
    """
    SYSTEM_PROMPT plus the language for every human-readable field.

    Args:
        locale: Locale code such as "fr" or "pt-BR"; defaults to
            settings.default_locale
    """
    code = (locale or settings.default_locale).replace("_", "-").split("-")[0].lower()
    language = LANGUAGES.get(code, code)
    return f"{SYSTEM_PROMPT} Write every text field in {language}."


def as_model(model: type[M], value: Any) -> M:
    """Coerce a widget value (model instance or dict) into `model`."""
    if isinstance(value, model):
        return value
    return model.model_validate(value)


def as_models(model: type[M], values: Any) -> list[M]:
    return [as_model(model, v) for v in (values or [])]


def as_iso_date(value: date | str) -> str:
    return value.isoformat() if isinstance(value, date) else str(value)


def budget_amount(value: Any) -> tuple[float, str]:
    """Budget widgets submit either a number or {"amount", "currency"}."""
    if isinstance(value, dict):
        return float(value["amount"]), value.get("currency", "EUR")
    return float(value), "EUR"


def format_member(member: FamilyMember, today: date | None = None) -> str:
    """One member as a compact profile block."""
    lines = [f"### {member.display_name} ({member.role})"]

    age = member.age_on(today or date.today())
    if age is not None:
        lines.append(f"Age: {age}")

    constraints = []
    if member.allergies:
        constraints.append(f"Allergies: {', '.join(member.allergies)}")
    if member.medical_restrictions:
        constraints.append(f"Medical: {', '.join(member.medical_restrictions)}")
    if member.dietary_preferences:
        constraints.append(f"Diet: {', '.join(member.dietary_preferences)}")
    if constraints:
        lines.append(f"**Constraints:** {' | '.join(constraints)}")

    tastes = [f"Spice: {member.spice_level}/5"]
    if member.favorite_cuisines:
        tastes.append(f"Cuisines: {', '.join(member.favorite_cuisines[:4])}")
    if member.favorite_meals:
        tastes.append(f"Favorites: {', '.join(member.favorite_meals[:3])}")
    lines.append(f"**Likes:** {' | '.join(tastes)}")

    if member.calorie_target:
        lines.append(f"Calorie target: {member.calorie_target} kcal/day")

    return "\n".join(lines)


def format_household(members: list[FamilyMember], today: date | None = None) -> str:
    """All selected members, with the union of their allergies called out first."""
    if not members:
        return "## HOUSEHOLD\n(no members selected)"

    allergies = sorted({a.lower() for m in members for a in m.allergies})
    parts = [f"## HOUSEHOLD ({len(members)} {'person' if len(members) == 1 else 'people'})"]
    if allergies:
        parts.append(f"**Never use:** {', '.join(allergies)}")
    parts.extend(format_member(m, today) for m in members)
    return "\n\n".join(parts)


def format_ingredients(ingredients: list[Ingredient]) -> str:
    if not ingredients:
        return "(none)"
    lines = []
    for ing in ingredients:
        line = f"- {ing.name}"
        if ing.quantity:
            line += f": {ing.quantity:g} {ing.unit}"
        if ing.expiry_date:
            line += f" (expires {ing.expiry_date.isoformat()})"
        lines.append(line)
    return "\n".join(lines)
