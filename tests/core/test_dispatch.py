"""
Tests for GeneratorDispatchTable and FlowContext.
"""

import asyncio
from unittest.mock import AsyncMock

import pytest

from nutriplanner.flows import (
    FlowContext,
    FlowIdentifier,
    FlowValidationError,
    GenerationError,
    GeneratorDispatchTable,
    UnsupportedFlowError,
)


def _run(coro):
    """Helper to run async functions in sync tests."""
    return asyncio.run(coro)


class TestRegistration:
    def test_register_and_lookup(self):
        table = GeneratorDispatchTable()
        generator = AsyncMock()
        table.register("quick_recipe", ["member"], generator, "recipe")

        entry = table.entry(FlowIdentifier.QUICK_RECIPE)
        assert entry.required_fields == ("member",)
        assert entry.operation is generator
        assert entry.content_kind == "recipe"
        assert FlowIdentifier.QUICK_RECIPE in table
        assert table.flows() == [FlowIdentifier.QUICK_RECIPE]

    def test_unregistered_flow(self):
        with pytest.raises(UnsupportedFlowError, match="no generator registered"):
            GeneratorDispatchTable().entry("quick_recipe")

    def test_unknown_flow_name(self):
        with pytest.raises(UnsupportedFlowError):
            GeneratorDispatchTable().register("not_a_flow", (), AsyncMock(), "recipe")


class TestDispatch:
    def test_passes_exactly_required_fields(self):
        table = GeneratorDispatchTable()
        generator = AsyncMock(return_value="ok")
        table.register("budget_planning", ("budget_limit", "month"), generator, "budget")

        context = FlowContext({"budget_limit": 200, "month": "2025-07", "extra": "ignored"})
        result = _run(table.dispatch("budget_planning", context))

        assert result == "ok"
        generator.assert_awaited_once_with(budget_limit=200, month="2025-07")

    def test_optional_fields_passed_when_present(self):
        table = GeneratorDispatchTable()
        generator = AsyncMock(return_value="ok")
        table.register("recipe_nutrition_analysis", ("recipe",), generator, "recipe_analysis", ("members",))

        _run(table.dispatch("recipe_nutrition_analysis", FlowContext({"recipe": "r"})))
        generator.assert_awaited_once_with(recipe="r")

        generator.reset_mock()
        _run(table.dispatch("recipe_nutrition_analysis", FlowContext({"recipe": "r", "members": ["m"]})))
        generator.assert_awaited_once_with(recipe="r", members=["m"])

    def test_missing_field_raises_before_call(self):
        table = GeneratorDispatchTable()
        generator = AsyncMock()
        table.register("budget_planning", ("budget_limit", "month"), generator, "budget")

        with pytest.raises(FlowValidationError) as exc_info:
            _run(table.dispatch("budget_planning", FlowContext({"budget_limit": 200})))

        assert exc_info.value.missing == ["month"]
        generator.assert_not_awaited()

    def test_wraps_generator_errors(self):
        table = GeneratorDispatchTable()
        upstream = RuntimeError("rate limited")
        table.register("nutritional_info", ("query",), AsyncMock(side_effect=upstream), "nutritional_info")

        with pytest.raises(GenerationError) as exc_info:
            _run(table.dispatch("nutritional_info", FlowContext({"query": "kiwi"})))

        assert exc_info.value.message == "rate limited"
        assert exc_info.value.flow is FlowIdentifier.NUTRITIONAL_INFO
        assert exc_info.value.__cause__ is upstream

    def test_no_retry(self):
        table = GeneratorDispatchTable()
        generator = AsyncMock(side_effect=TimeoutError("timed out"))
        table.register("nutritional_info", ("query",), generator, "nutritional_info")

        with pytest.raises(GenerationError):
            _run(table.dispatch("nutritional_info", FlowContext({"query": "kiwi"})))
        assert generator.await_count == 1


class TestFlowContext:
    def test_merge_overwrites_never_removes(self):
        context = FlowContext({"a": 1})
        context.merge({"a": 2, "b": 3})
        assert dict(context) == {"a": 2, "b": 3}

    def test_subset_and_missing(self):
        context = FlowContext({"a": 1, "b": 2})
        assert context.subset(["a"]) == {"a": 1}
        assert context.missing(["a", "c"]) == ["c"]

    def test_view_is_live_and_read_only(self):
        context = FlowContext()
        view = context.view()
        context.merge({"a": 1})
        assert view["a"] == 1
        with pytest.raises(TypeError):
            view["a"] = 2

    def test_seed_is_copied(self):
        seed = {"a": 1}
        context = FlowContext(seed)
        context.merge({"b": 2})
        assert seed == {"a": 1}
