"""
Tests for the step resolver and step predicates.
"""

import pytest

from nutriplanner.flows import (
    FLOW_COMPLETE,
    FlowIdentifier,
    StepKind,
    UnsupportedFlowError,
    resolve,
    steps_for,
)
from nutriplanner.flows.steps import after, ask, missing, missing_or_empty


class TestResolve:
    """resolve() picks the first step still needed."""

    def test_first_step_on_empty_context(self):
        step = resolve(FlowIdentifier.BUDGET_PLANNING, {})
        assert step.field == "budget_limit"
        assert step.kind is StepKind.SELECT_BUDGET
        assert step.is_terminal is False

    def test_budget_then_month(self):
        step = resolve(FlowIdentifier.BUDGET_PLANNING, {"budget_limit": 200})
        assert step.field == "month"
        assert step.kind is StepKind.SELECT_MONTH
        assert step.is_terminal is True

    def test_complete_when_all_collected(self):
        step = resolve(FlowIdentifier.BUDGET_PLANNING, {"budget_limit": 200, "month": "2025-07"})
        assert step is FLOW_COMPLETE
        assert step.completes_flow

    def test_accepts_string_flow(self):
        assert resolve("weekly_menu", {}).field == "members"

    def test_unknown_flow_raises(self):
        """An unknown flow is a caller bug and must not be swallowed."""
        with pytest.raises(UnsupportedFlowError):
            resolve("NotARealFlow", {})

    def test_default_title_from_kind(self):
        assert resolve(FlowIdentifier.QUICK_RECIPE, {}).title == "Select a family member"

    def test_custom_title(self):
        assert resolve(FlowIdentifier.KIDS_RECIPE, {}).title == "Select a child"

    def test_same_context_same_answer(self):
        context = {"members": [{"first_name": "Awa"}]}
        first = resolve(FlowIdentifier.GUEST_RECIPE, context)
        second = resolve(FlowIdentifier.GUEST_RECIPE, dict(context))
        assert first == second


class TestListSteps:
    """List selections re-ask when submitted empty."""

    def test_empty_members_reasks(self):
        step = resolve(FlowIdentifier.WEEKLY_MENU, {"members": []})
        assert step.field == "members"

    def test_empty_ingredients_reasks(self):
        step = resolve(FlowIdentifier.LEFTOVER_RECIPE, {"ingredients": []})
        assert step.field == "ingredients"

    def test_empty_pantry_is_an_answer_for_shopping_list(self):
        """Having nothing in stock is a valid reply."""
        step = resolve(FlowIdentifier.SHOPPING_LIST, {"menu": {"title": "x"}, "current_ingredients": []})
        assert step is FLOW_COMPLETE


class TestSpecialOccasion:
    """The occasion step is skipped when the caller already supplied one."""

    def test_members_first(self):
        assert resolve(FlowIdentifier.SPECIAL_OCCASION_MENU, {}).field == "members"

    def test_asks_occasion_after_members(self):
        step = resolve(FlowIdentifier.SPECIAL_OCCASION_MENU, {"members": [{"first_name": "Awa"}]})
        assert step.field == "occasion"
        assert step.kind is StepKind.SELECT_OCCASION

    def test_preset_occasion_goes_to_date(self):
        context = {"occasion": "birthday", "members": [{"first_name": "Awa"}]}
        step = resolve(FlowIdentifier.SPECIAL_OCCASION_MENU, context)
        assert step.field == "date"
        assert step.is_terminal


class TestStepsFor:
    def test_flow_without_terminal_step_is_unsupported(self):
        table = {FlowIdentifier.QUICK_RECIPE: (ask("member", StepKind.SELECT_MEMBER),)}
        with pytest.raises(UnsupportedFlowError, match="no terminal step"):
            steps_for(FlowIdentifier.QUICK_RECIPE, table)

    def test_flow_missing_from_table_is_unsupported(self):
        with pytest.raises(UnsupportedFlowError, match="no steps declared"):
            resolve(FlowIdentifier.QUICK_RECIPE, {}, table={})


class TestPredicates:
    def test_missing(self):
        assert missing("a")({}) is True
        assert missing("a")({"a": None}) is False

    def test_missing_or_empty(self):
        predicate = missing_or_empty("a")
        assert predicate({}) is True
        assert predicate({"a": []}) is True
        assert predicate({"a": ""}) is True
        assert predicate({"a": None}) is True
        assert predicate({"a": [1]}) is False
        assert predicate({"a": 0}) is False

    def test_after_gates_on_prerequisite(self):
        predicate = after("members", missing("occasion"))
        assert predicate({}) is False
        assert predicate({"members": ["x"]}) is True
        assert predicate({"members": ["x"], "occasion": "eid"}) is False
