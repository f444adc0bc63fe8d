"""
Pytest configuration and fixtures for NutriPlanner tests.
"""

import os
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

# Set test environment before importing nutriplanner modules
os.environ["NUTRIPLANNER_ENV"] = "development"
os.environ["NUTRIPLANNER_LOG_PROMPTS"] = "0"
os.environ.setdefault("OPENAI_API_KEY", "test-key-not-real")

from nutriplanner.flows import (  # noqa: E402
    FlowController,
    GeneratorDispatchTable,
    InteractionFormatter,
    ResultRouter,
)

FIXED_NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


class DisplaySink:
    """Stands in for the chat screen: records every delivered Interaction."""

    def __init__(self):
        self.delivered = []

    def __call__(self, interaction, flow):
        self.delivered.append((interaction, flow))

    @property
    def interactions(self):
        return [interaction for interaction, _ in self.delivered]


@pytest.fixture
def sample_members():
    """Two household members, one with an allergy."""
    return [
        {
            "id": "m1",
            "first_name": "Awa",
            "last_name": "Diallo",
            "role": "parent",
            "allergies": ["peanuts"],
            "favorite_cuisines": ["senegalese", "italian"],
            "spice_level": 3,
            "calorie_target": 2000,
        },
        {
            "id": "m2",
            "first_name": "Malik",
            "last_name": "Diallo",
            "role": "child",
            "birth_date": "2016-09-15",
            "dietary_preferences": ["vegetarian"],
        },
    ]


@pytest.fixture
def sample_recipe():
    """Sample recipe for testing."""
    return {
        "id": "recipe-1",
        "name": "Peanut Stew",
        "description": "Mafé with chicken and sweet potato",
        "servings": 4,
        "ingredients": [
            {"name": "peanut butter", "quantity": 150, "unit": "g"},
            {"name": "chicken thighs", "quantity": 600, "unit": "g"},
            {"name": "sweet potato", "quantity": 2, "unit": "count"},
        ],
        "instructions": ["Brown the chicken", "Simmer with peanut sauce"],
    }


@pytest.fixture
def sample_ingredients():
    """Sample pantry ingredients for testing."""
    return [
        {"id": "i1", "name": "rice", "quantity": 2, "unit": "kg", "current_stock": 2},
        {"id": "i2", "name": "spinach", "quantity": 300, "unit": "g", "perishable": True},
        {"id": "i3", "name": "eggs", "quantity": 6, "unit": "count", "current_stock": 6},
    ]


@pytest.fixture
def display():
    return DisplaySink()


@pytest.fixture
def formatter():
    """Formatter with a frozen clock."""
    return InteractionFormatter(clock=lambda: FIXED_NOW)


@pytest.fixture
def fake_table():
    """Dispatch table with AsyncMock generators for a handful of flows."""
    table = GeneratorDispatchTable()
    table.register(
        "budget_planning",
        ("budget_limit", "month"),
        AsyncMock(return_value={"month": "2025-07", "limit": 200.0, "allocations": []}),
        "budget",
    )
    table.register(
        "weekly_menu",
        ("members", "date_start"),
        AsyncMock(return_value={"title": "Week of June 2", "date_start": "2025-06-02", "recipes": []}),
        "menu_suggestion",
    )
    table.register(
        "recipe_compatibility",
        ("members", "recipe"),
        AsyncMock(side_effect=RuntimeError("rate limited")),
        "recipe_compatibility",
    )
    table.register(
        "guest_recipe",
        ("members", "guest_count"),
        AsyncMock(return_value={"name": "Shared Paella", "servings": 6}),
        "recipe",
    )
    table.register(
        "special_occasion_menu",
        ("members", "occasion", "date"),
        AsyncMock(return_value={"title": "Birthday", "date_start": "2025-07-04"}),
        "menu_suggestion",
    )
    table.register(
        "nutritional_info",
        ("query",),
        AsyncMock(return_value={"calories": 52, "description": "One apple"}),
        "nutritional_info",
    )
    return table


@pytest.fixture
def controller(fake_table, display, formatter):
    return FlowController(fake_table, ResultRouter(display), formatter)
