"""
NutriPlanner Generators - one LLM-backed operation per flow.

build_dispatch_table() wires every flow to its generator, the context fields
it receives and the content kind of its result.
"""

from nutriplanner.flows.dispatch import GeneratorDispatchTable
from nutriplanner.flows.table import FlowIdentifier
from nutriplanner.generators import advice, analysis, menus, recipes, shopping

F = FlowIdentifier

# flow -> (required fields, generator, content kind)
GENERATORS = {
    F.RECIPE_PERSONALIZED: (("member",), recipes.generate_personalized_recipe, "recipe"),
    F.WEEKLY_MENU: (("members", "date_start"), menus.generate_weekly_menu, "menu_suggestion"),
    F.SHOPPING_LIST: (
        ("menu", "current_ingredients"),
        shopping.generate_shopping_list,
        "shopping_list_suggestion",
    ),
    F.RECIPE_NUTRITION_ANALYSIS: (("recipe",), analysis.analyze_recipe, "recipe_analysis"),
    F.RECIPE_SUGGESTION: (("ingredients", "preferences"), recipes.suggest_recipe, "recipe_suggestion"),
    F.QUICK_RECIPE: (("member",), recipes.generate_quick_recipe, "recipe"),
    F.BUDGET_PLANNING: (("budget_limit", "month"), shopping.plan_budget, "budget"),
    F.STORE_SUGGESTION: (("ingredient",), shopping.suggest_stores, "stores"),
    F.MEAL_ANALYSIS: (("member", "meal"), analysis.analyze_meal, "recipe_analysis"),
    F.KIDS_RECIPE: (("member",), recipes.generate_kids_recipe, "recipe"),
    F.SPECIAL_OCCASION_MENU: (
        ("members", "occasion", "date"),
        menus.generate_special_occasion_menu,
        "menu_suggestion",
    ),
    F.INVENTORY_OPTIMIZATION: (("ingredients",), recipes.optimize_inventory, "recipe"),
    F.INGREDIENT_BASED_RECIPE: (("member", "ingredient"), recipes.generate_ingredient_based_recipe, "recipe"),
    F.BUDGET_MENU: (("members", "budget_limit"), menus.generate_budget_menu, "menu_suggestion"),
    F.RECIPE_COMPATIBILITY: (
        ("members", "recipe"),
        analysis.check_recipe_compatibility,
        "recipe_compatibility",
    ),
    F.SPECIFIC_DIET_RECIPE: (("member", "diet"), recipes.generate_specific_diet_recipe, "recipe"),
    F.BALANCED_DAILY_MENU: (("member", "date"), menus.generate_balanced_daily_menu, "menu_suggestion"),
    F.RECIPE_FROM_IMAGE: (("member", "image"), recipes.generate_recipe_from_image, "recipe"),
    F.LEFTOVER_RECIPE: (("ingredients",), recipes.generate_leftover_recipe, "recipe"),
    F.GUEST_RECIPE: (("members", "guest_count"), recipes.generate_guest_recipe, "recipe"),
    F.INGREDIENT_AVAILABILITY: (
        ("ingredient_name", "location"),
        shopping.check_ingredient_availability,
        "ingredient_availability",
    ),
    F.NUTRITIONAL_INFO: (("query",), analysis.get_nutritional_info, "nutritional_info"),
    F.TROUBLESHOOT_PROBLEM: (("query",), advice.troubleshoot_problem, "troubleshoot_problem"),
    F.CREATIVE_IDEAS: (("query",), advice.creative_ideas, "creative_ideas"),
    F.FOOD_TREND_ANALYSIS: (("members",), analysis.analyze_food_trends, "food_trends"),
}

# Context the generator uses when the caller seeds it; never asked for
OPTIONAL_FIELDS = {
    F.RECIPE_NUTRITION_ANALYSIS: ("members",),
}


def build_dispatch_table() -> GeneratorDispatchTable:
    """A dispatch table with every flow registered."""
    table = GeneratorDispatchTable()
    for flow, (fields, operation, content_kind) in GENERATORS.items():
        table.register(flow, fields, operation, content_kind, OPTIONAL_FIELDS.get(flow, ()))
    return table


__all__ = ["GENERATORS", "OPTIONAL_FIELDS", "build_dispatch_table"]
