"""
Tests for InteractionFormatter and the Interaction model.
"""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from nutriplanner.flows import FlowIdentifier, FlowValidationError, GenerationError, Interaction
from nutriplanner.models import Menu, Recipe

FIXED_NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


class TestSuccess:
    def test_recipe(self, formatter, sample_recipe):
        recipe = Recipe.model_validate(sample_recipe)
        interaction = formatter.format(recipe, "recipe", "conv-1")

        assert interaction.type == "recipe"
        assert interaction.content.type == "recipe"
        assert interaction.content.recipe == recipe
        assert interaction.conversation_id == "conv-1"
        assert interaction.is_user is False
        assert interaction.timestamp == FIXED_NOW
        assert not interaction.is_error

    def test_menu_carries_description_and_recipes(self, formatter, sample_recipe):
        menu = Menu(title="Week", date_start="2025-07-01", description="Light week", recipes=[sample_recipe])
        interaction = formatter.format(menu, "menu_suggestion", "conv-1")

        assert interaction.content.description == "Light week"
        assert [r.name for r in interaction.content.recipes] == ["Peanut Stew"]

    def test_recipe_suggestion_flattens_recipe(self, formatter, sample_recipe):
        interaction = formatter.format(sample_recipe, "recipe_suggestion", "conv-1")

        assert interaction.content.recipe_id == "recipe-1"
        assert interaction.content.name == "Peanut Stew"
        assert len(interaction.content.ingredients) == 3

    def test_dict_results_are_validated(self, formatter):
        interaction = formatter.format({"question": "Sauce split", "solution": "Whisk in an ice cube"}, "troubleshoot_problem", "c")
        assert interaction.content.solution == "Whisk in an ice cube"

    def test_fresh_ids(self, formatter, sample_recipe):
        first = formatter.format(sample_recipe, "recipe", "c")
        second = formatter.format(sample_recipe, "recipe", "c")
        assert first.id != second.id

    def test_unknown_content_kind(self, formatter, sample_recipe):
        with pytest.raises(ValueError, match="Unknown content kind"):
            formatter.format(sample_recipe, "poem", "c")

    def test_mismatched_result_raises(self, formatter):
        with pytest.raises(ValueError):
            formatter.format({"unexpected": True}, "budget", "c")


class TestFailure:
    def test_generation_error_uses_upstream_message(self, formatter):
        error = GenerationError(FlowIdentifier.RECIPE_COMPATIBILITY, "rate limited")
        interaction = formatter.format(error, "recipe_compatibility", "c")

        assert interaction.type == "error"
        assert interaction.is_error
        assert interaction.content.message == "rate limited"
        assert interaction.content.code == "generation_error"

    def test_validation_error(self, formatter):
        error = FlowValidationError(FlowIdentifier.WEEKLY_MENU, ["date_start"])
        interaction = formatter.format(error, "menu_suggestion", "c")

        assert interaction.content.code == "validation_error"
        assert "date_start" in interaction.content.message

    def test_empty_generation_message_has_fallback(self, formatter):
        interaction = formatter.format(GenerationError("x", ""), "recipe", "c")
        assert interaction.content.message


class TestInteractionModel:
    def test_frozen(self, formatter, sample_recipe):
        interaction = formatter.format(sample_recipe, "recipe", "c")
        with pytest.raises(ValidationError):
            interaction.type = "error"

    def test_json_round_trip_keeps_variant(self, formatter, sample_recipe):
        interaction = formatter.format(sample_recipe, "recipe_suggestion", "c")
        restored = Interaction.model_validate_json(interaction.model_dump_json())
        assert restored == interaction
        assert restored.content.type == "recipe_suggestion"
