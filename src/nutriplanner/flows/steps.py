"""
Flow steps - what to collect next, and when.

A flow is an ordered tuple of FlowStep. Each step names the context field it
fills, the kind of selection widget that fills it, and a predicate over the
context saying whether the step is still needed. Branching lives in the
predicates, so adding a flow means declaring steps, not editing control flow.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

Predicate = Callable[[Mapping[str, Any]], bool]


class StepKind(Enum):
    """Selection capabilities a step can ask the UI for."""

    SELECT_MEMBER = "select_member"
    SELECT_MEMBERS = "select_members"
    SELECT_INGREDIENT = "select_ingredient"
    SELECT_INGREDIENTS = "select_ingredients"
    SELECT_DATE = "select_date"
    SELECT_MONTH = "select_month"
    SELECT_BUDGET = "select_budget"
    SELECT_OCCASION = "select_occasion"
    SELECT_DIET = "select_diet"
    SELECT_MEAL = "select_meal"
    SELECT_IMAGE = "select_image"
    SELECT_LOCATION = "select_location"
    INPUT_QUERY = "input_query"
    SELECT_MENU = "select_menu"
    SELECT_RECIPE = "select_recipe"
    SELECT_PREFERENCES = "select_preferences"
    SELECT_GUEST_COUNT = "select_guest_count"


# Default widget titles
STEP_TITLES: dict[StepKind, str] = {
    StepKind.SELECT_MEMBER: "Select a family member",
    StepKind.SELECT_MEMBERS: "Select family members",
    StepKind.SELECT_INGREDIENT: "Select an ingredient",
    StepKind.SELECT_INGREDIENTS: "Select ingredients",
    StepKind.SELECT_DATE: "Select a date",
    StepKind.SELECT_MONTH: "Select a month",
    StepKind.SELECT_BUDGET: "Set a budget",
    StepKind.SELECT_OCCASION: "Select an occasion",
    StepKind.SELECT_DIET: "Select a diet",
    StepKind.SELECT_MEAL: "Select a meal",
    StepKind.SELECT_IMAGE: "Select an image",
    StepKind.SELECT_LOCATION: "Select a location",
    StepKind.INPUT_QUERY: "Ask your question",
    StepKind.SELECT_MENU: "Select a menu",
    StepKind.SELECT_RECIPE: "Select a recipe",
    StepKind.SELECT_PREFERENCES: "Select your preferences",
    StepKind.SELECT_GUEST_COUNT: "How many guests?",
}


@dataclass(frozen=True)
class StepDescriptor:
    """
    The next thing to present.

    `is_terminal` means submitting this step ends the flow. FLOW_COMPLETE
    (no kind, no field) means nothing is left to collect.
    """

    kind: StepKind | None
    field: str | None
    is_terminal: bool
    title: str = ""

    @property
    def completes_flow(self) -> bool:
        return self.kind is None


FLOW_COMPLETE = StepDescriptor(kind=None, field=None, is_terminal=True)


# =============================================================================
# Predicates
# =============================================================================


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (str, list, tuple, set, dict)):
        return len(value) == 0
    return False


def missing(field: str) -> Predicate:
    """Step is needed while `field` is absent."""

    def predicate(context: Mapping[str, Any]) -> bool:
        return field not in context

    predicate.__qualname__ = f"missing({field!r})"
    return predicate


def missing_or_empty(field: str) -> Predicate:
    """Step is needed while `field` is absent, or present with an empty value."""

    def predicate(context: Mapping[str, Any]) -> bool:
        return field not in context or _is_empty(context[field])

    predicate.__qualname__ = f"missing_or_empty({field!r})"
    return predicate


def after(prerequisite: str, predicate: Predicate) -> Predicate:
    """Only consider `predicate` once `prerequisite` has been collected."""

    def gated(context: Mapping[str, Any]) -> bool:
        return prerequisite in context and predicate(context)

    gated.__qualname__ = f"after({prerequisite!r}, {predicate.__qualname__})"
    return gated


@dataclass(frozen=True)
class FlowStep:
    """One declared step of a flow."""

    field: str
    kind: StepKind
    needed: Predicate
    terminal: bool = False
    title: str | None = None

    def describe(self) -> StepDescriptor:
        return StepDescriptor(
            kind=self.kind,
            field=self.field,
            is_terminal=self.terminal,
            title=self.title or STEP_TITLES[self.kind],
        )


def ask(
    field: str,
    kind: StepKind,
    *,
    terminal: bool = False,
    when: Predicate | None = None,
    title: str | None = None,
) -> FlowStep:
    """
    Declare a step. Defaults to "needed while the field is missing".

    Example:
        ask("members", StepKind.SELECT_MEMBERS, when=missing_or_empty("members"))
    """
    return FlowStep(
        field=field,
        kind=kind,
        needed=when or missing(field),
        terminal=terminal,
        title=title,
    )
