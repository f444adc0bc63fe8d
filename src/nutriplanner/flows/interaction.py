"""
Interactions - the one record a finished flow hands to the display layer.

Success and failure share the same shape: an Interaction whose `content` is
tagged by `type`. The display layer never sees a raw exception.
"""

from collections.abc import Callable
from datetime import UTC, datetime
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from nutriplanner.flows.errors import FlowValidationError, GenerationError
from nutriplanner.models.entities import (
    BudgetPlan,
    CompatibilityReport,
    CreativeIdea,
    CreativeIdeas,
    FoodTrend,
    FoodTrendReport,
    IngredientAvailability,
    IngredientStock,
    Menu,
    NutritionalInfo,
    Recipe,
    RecipeAnalysis,
    RecipeIngredient,
    ShoppingItem,
    ShoppingListDraft,
    Store,
    StoreSuggestion,
    TroubleshootAnswer,
    new_id,
)


ContentKind = Literal[
    "recipe",
    "menu_suggestion",
    "shopping_list_suggestion",
    "recipe_analysis",
    "recipe_suggestion",
    "budget",
    "stores",
    "ingredient_availability",
    "nutritional_info",
    "troubleshoot_problem",
    "creative_ideas",
    "food_trends",
    "recipe_compatibility",
    "error",
]


# =============================================================================
# Content Variants
# =============================================================================


class _Content(BaseModel):
    model_config = ConfigDict(frozen=True)


class RecipeContent(_Content):
    type: Literal["recipe"] = "recipe"
    recipe: Recipe


class MenuSuggestionContent(_Content):
    type: Literal["menu_suggestion"] = "menu_suggestion"
    menu: Menu
    description: str
    recipes: list[Recipe]


class ShoppingListSuggestionContent(_Content):
    type: Literal["shopping_list_suggestion"] = "shopping_list_suggestion"
    list_id: str
    items: list[ShoppingItem]


class RecipeAnalysisContent(_Content):
    type: Literal["recipe_analysis"] = "recipe_analysis"
    recipe_id: str
    analysis: RecipeAnalysis


class RecipeSuggestionContent(_Content):
    type: Literal["recipe_suggestion"] = "recipe_suggestion"
    recipe_id: str
    name: str
    description: str
    ingredients: list[RecipeIngredient]


class BudgetContent(_Content):
    type: Literal["budget"] = "budget"
    budget: BudgetPlan


class StoresContent(_Content):
    type: Literal["stores"] = "stores"
    stores: list[Store]
    recommendation: str | None = None


class IngredientAvailabilityContent(_Content):
    type: Literal["ingredient_availability"] = "ingredient_availability"
    stores: list[Store]
    ingredients: list[IngredientStock]


class NutritionalInfoContent(_Content):
    type: Literal["nutritional_info"] = "nutritional_info"
    analysis: NutritionalInfo


class TroubleshootProblemContent(_Content):
    type: Literal["troubleshoot_problem"] = "troubleshoot_problem"
    question: str
    solution: str


class CreativeIdeasContent(_Content):
    type: Literal["creative_ideas"] = "creative_ideas"
    ideas: list[CreativeIdea]


class FoodTrendsContent(_Content):
    type: Literal["food_trends"] = "food_trends"
    trends: list[FoodTrend]


class RecipeCompatibilityContent(_Content):
    type: Literal["recipe_compatibility"] = "recipe_compatibility"
    recipe: Recipe
    compatibility: CompatibilityReport


class ErrorContent(_Content):
    type: Literal["error"] = "error"
    message: str
    code: str | None = None


InteractionContent = Annotated[
    Union[
        RecipeContent,
        MenuSuggestionContent,
        ShoppingListSuggestionContent,
        RecipeAnalysisContent,
        RecipeSuggestionContent,
        BudgetContent,
        StoresContent,
        IngredientAvailabilityContent,
        NutritionalInfoContent,
        TroubleshootProblemContent,
        CreativeIdeasContent,
        FoodTrendsContent,
        RecipeCompatibilityContent,
        ErrorContent,
    ],
    Field(discriminator="type"),
]


class Interaction(BaseModel):
    """
    Canonical output of a flow run. Immutable once created.

    `type` mirrors `content.type`; `conversation_id` is minted per flow run.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    content: InteractionContent
    is_user: bool = False
    timestamp: datetime
    type: ContentKind
    conversation_id: str

    @property
    def is_error(self) -> bool:
        return self.type == "error"


# =============================================================================
# Formatter
# =============================================================================


ContentBuilder = Callable[[Any], _Content]


CONTENT_BUILDERS: dict[str, ContentBuilder] = {
    "recipe": lambda recipe: RecipeContent(recipe=recipe),
    "menu_suggestion": lambda menu: MenuSuggestionContent(
        menu=menu, description=menu.description, recipes=menu.recipes
    ),
    "shopping_list_suggestion": lambda draft: ShoppingListSuggestionContent(
        list_id=new_id(), items=draft.items
    ),
    "recipe_analysis": lambda analysis: RecipeAnalysisContent(
        recipe_id=analysis.subject_id, analysis=analysis
    ),
    "recipe_suggestion": lambda recipe: RecipeSuggestionContent(
        recipe_id=recipe.id,
        name=recipe.name,
        description=recipe.description,
        ingredients=recipe.ingredients,
    ),
    "budget": lambda plan: BudgetContent(budget=plan),
    "stores": lambda suggestion: StoresContent(
        stores=suggestion.stores, recommendation=suggestion.recommendation
    ),
    "ingredient_availability": lambda availability: IngredientAvailabilityContent(
        stores=availability.stores, ingredients=availability.ingredients
    ),
    "nutritional_info": lambda info: NutritionalInfoContent(analysis=info),
    "troubleshoot_problem": lambda answer: TroubleshootProblemContent(
        question=answer.question, solution=answer.solution
    ),
    "creative_ideas": lambda ideas: CreativeIdeasContent(ideas=ideas.ideas),
    "food_trends": lambda report: FoodTrendsContent(trends=report.trends),
    "recipe_compatibility": lambda report: RecipeCompatibilityContent(
        recipe=report.recipe, compatibility=report
    ),
}


# Result model each content kind expects from its generator
RESULT_TYPES: dict[str, type[BaseModel]] = {
    "recipe": Recipe,
    "menu_suggestion": Menu,
    "shopping_list_suggestion": ShoppingListDraft,
    "recipe_analysis": RecipeAnalysis,
    "recipe_suggestion": Recipe,
    "budget": BudgetPlan,
    "stores": StoreSuggestion,
    "ingredient_availability": IngredientAvailability,
    "nutritional_info": NutritionalInfo,
    "troubleshoot_problem": TroubleshootAnswer,
    "creative_ideas": CreativeIdeas,
    "food_trends": FoodTrendReport,
    "recipe_compatibility": CompatibilityReport,
}


def describe_error(error: BaseException) -> str:
    """Human-readable message for an error Interaction."""
    if isinstance(error, GenerationError):
        return error.message or "The assistant could not complete this request."
    message = str(error).strip()
    return message or error.__class__.__name__


def error_code(error: BaseException) -> str:
    if isinstance(error, FlowValidationError):
        return "validation_error"
    if isinstance(error, GenerationError):
        return "generation_error"
    return "internal_error"


class InteractionFormatter:
    """Wraps a flow outcome into an Interaction."""

    def __init__(self, clock: Callable[[], datetime] | None = None):
        self._clock = clock or (lambda: datetime.now(UTC))

    def format(
        self,
        outcome: Any,
        content_kind: str,
        conversation_id: str,
    ) -> Interaction:
        """
        Build the Interaction for a success or a failure.

        Args:
            outcome: Domain result from the generator, or the exception raised
            content_kind: Content discriminant declared for the flow
            conversation_id: Conversation id minted for this flow run
        """
        if isinstance(outcome, BaseException):
            content: _Content = ErrorContent(
                message=describe_error(outcome),
                code=error_code(outcome),
            )
        else:
            builder = CONTENT_BUILDERS.get(content_kind)
            if builder is None:
                raise ValueError(f"Unknown content kind: {content_kind}")
            # Generators may hand back plain dicts; validate into the result model
            result_type = RESULT_TYPES[content_kind]
            if not isinstance(outcome, result_type):
                outcome = result_type.model_validate(outcome)
            content = builder(outcome)

        return Interaction(
            id=new_id(),
            content=content,
            timestamp=self._clock(),
            type=content.type,
            conversation_id=conversation_id,
        )
