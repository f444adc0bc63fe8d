"""
Flow table.

Every flow the assistant offers, and the ordered steps that collect its
inputs. The resolver walks these tuples; the dispatch table (see
nutriplanner.generators) declares which of the collected fields each
generator receives.
"""

from enum import Enum

from nutriplanner.flows.steps import (
    FlowStep,
    StepKind,
    after,
    ask,
    missing,
    missing_or_empty,
)


class FlowIdentifier(Enum):
    """The assistant's flows. Values match the prompt types used by the app."""

    RECIPE_PERSONALIZED = "recipe_personalized"
    WEEKLY_MENU = "weekly_menu"
    SHOPPING_LIST = "shopping_list"
    RECIPE_NUTRITION_ANALYSIS = "recipe_nutrition_analysis"
    RECIPE_SUGGESTION = "recipe_suggestion"
    QUICK_RECIPE = "quick_recipe"
    BUDGET_PLANNING = "budget_planning"
    STORE_SUGGESTION = "store_suggestion"
    MEAL_ANALYSIS = "meal_analysis"
    KIDS_RECIPE = "kids_recipe"
    SPECIAL_OCCASION_MENU = "special_occasion_menu"
    INVENTORY_OPTIMIZATION = "inventory_optimization"
    INGREDIENT_BASED_RECIPE = "ingredient_based_recipe"
    BUDGET_MENU = "budget_menu"
    RECIPE_COMPATIBILITY = "recipe_compatibility"
    SPECIFIC_DIET_RECIPE = "specific_diet_recipe"
    BALANCED_DAILY_MENU = "balanced_daily_menu"
    RECIPE_FROM_IMAGE = "recipe_from_image"
    LEFTOVER_RECIPE = "leftover_recipe"
    GUEST_RECIPE = "guest_recipe"
    INGREDIENT_AVAILABILITY = "ingredient_availability"
    NUTRITIONAL_INFO = "nutritional_info"
    TROUBLESHOOT_PROBLEM = "troubleshoot_problem"
    CREATIVE_IDEAS = "creative_ideas"
    FOOD_TREND_ANALYSIS = "food_trend_analysis"


# =============================================================================
# Reusable steps
# =============================================================================

# List selections re-ask when submitted empty
MEMBERS = ask("members", StepKind.SELECT_MEMBERS, when=missing_or_empty("members"))
INGREDIENTS = ask("ingredients", StepKind.SELECT_INGREDIENTS, when=missing_or_empty("ingredients"))
MEMBER = ask("member", StepKind.SELECT_MEMBER)
QUERY = ask("query", StepKind.INPUT_QUERY, terminal=True)


FLOW_STEPS: dict[FlowIdentifier, tuple[FlowStep, ...]] = {
    FlowIdentifier.RECIPE_PERSONALIZED: (
        ask("member", StepKind.SELECT_MEMBER, terminal=True),
    ),
    FlowIdentifier.WEEKLY_MENU: (
        MEMBERS,
        ask("date_start", StepKind.SELECT_DATE, terminal=True, title="Select the first day"),
    ),
    FlowIdentifier.SHOPPING_LIST: (
        ask("menu", StepKind.SELECT_MENU),
        ask(
            "current_ingredients",
            StepKind.SELECT_INGREDIENTS,
            terminal=True,
            when=missing("current_ingredients"),
            title="What do you already have?",
        ),
    ),
    FlowIdentifier.RECIPE_NUTRITION_ANALYSIS: (
        ask("recipe", StepKind.SELECT_RECIPE, terminal=True),
    ),
    FlowIdentifier.RECIPE_SUGGESTION: (
        INGREDIENTS,
        ask("preferences", StepKind.SELECT_PREFERENCES, terminal=True),
    ),
    FlowIdentifier.QUICK_RECIPE: (
        ask("member", StepKind.SELECT_MEMBER, terminal=True),
    ),
    FlowIdentifier.BUDGET_PLANNING: (
        ask("budget_limit", StepKind.SELECT_BUDGET),
        ask("month", StepKind.SELECT_MONTH, terminal=True),
    ),
    FlowIdentifier.STORE_SUGGESTION: (
        ask("ingredient", StepKind.SELECT_INGREDIENT, terminal=True),
    ),
    FlowIdentifier.MEAL_ANALYSIS: (
        MEMBER,
        ask("meal", StepKind.SELECT_MEAL, terminal=True),
    ),
    FlowIdentifier.KIDS_RECIPE: (
        ask("member", StepKind.SELECT_MEMBER, terminal=True, title="Select a child"),
    ),
    FlowIdentifier.SPECIAL_OCCASION_MENU: (
        MEMBERS,
        # A caller may pre-fill the occasion; then we go straight to the date
        ask("occasion", StepKind.SELECT_OCCASION, when=after("members", missing("occasion"))),
        ask("date", StepKind.SELECT_DATE, terminal=True),
    ),
    FlowIdentifier.INVENTORY_OPTIMIZATION: (
        ask("ingredients", StepKind.SELECT_INGREDIENTS, terminal=True, when=missing_or_empty("ingredients")),
    ),
    FlowIdentifier.INGREDIENT_BASED_RECIPE: (
        MEMBER,
        ask("ingredient", StepKind.SELECT_INGREDIENT, terminal=True),
    ),
    FlowIdentifier.BUDGET_MENU: (
        MEMBERS,
        ask("budget_limit", StepKind.SELECT_BUDGET, terminal=True),
    ),
    FlowIdentifier.RECIPE_COMPATIBILITY: (
        MEMBERS,
        ask("recipe", StepKind.SELECT_RECIPE, terminal=True),
    ),
    FlowIdentifier.SPECIFIC_DIET_RECIPE: (
        MEMBER,
        ask("diet", StepKind.SELECT_DIET, terminal=True),
    ),
    FlowIdentifier.BALANCED_DAILY_MENU: (
        MEMBER,
        ask("date", StepKind.SELECT_DATE, terminal=True),
    ),
    FlowIdentifier.RECIPE_FROM_IMAGE: (
        MEMBER,
        ask("image", StepKind.SELECT_IMAGE, terminal=True),
    ),
    FlowIdentifier.LEFTOVER_RECIPE: (
        ask("ingredients", StepKind.SELECT_INGREDIENTS, terminal=True, when=missing_or_empty("ingredients")),
    ),
    FlowIdentifier.GUEST_RECIPE: (
        MEMBERS,
        ask("guest_count", StepKind.SELECT_GUEST_COUNT, terminal=True),
    ),
    FlowIdentifier.INGREDIENT_AVAILABILITY: (
        ask("ingredient_name", StepKind.SELECT_INGREDIENT),
        ask("location", StepKind.SELECT_LOCATION, terminal=True),
    ),
    FlowIdentifier.NUTRITIONAL_INFO: (QUERY,),
    FlowIdentifier.TROUBLESHOOT_PROBLEM: (QUERY,),
    FlowIdentifier.CREATIVE_IDEAS: (QUERY,),
    FlowIdentifier.FOOD_TREND_ANALYSIS: (
        ask("members", StepKind.SELECT_MEMBERS, terminal=True, when=missing_or_empty("members")),
    ),
}
