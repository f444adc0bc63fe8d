"""
NutriPlanner - Model Router.

Selects the OpenAI model and sampling settings for a generator call.

Complexity levels:
- low: Short factual answers (nutrition lookups, troubleshooting) → gpt-4.1-mini
- medium: Single recipes, analyses, store suggestions → gpt-4.1-mini
- high: Multi-day menus, budget plans → gpt-4.1
"""

from typing import Literal, TypedDict


class ModelConfig(TypedDict, total=False):
    """Configuration for model calls."""

    model: str
    temperature: float
    max_tokens: int


MODEL_CONFIGS: dict[str, ModelConfig] = {
    "low": {
        "model": "gpt-4.1-mini",
        "temperature": 0.2,
        "max_tokens": 800,
    },
    "medium": {
        "model": "gpt-4.1-mini",
        "temperature": 0.5,
        "max_tokens": 1500,
    },
    "high": {
        "model": "gpt-4.1",
        "temperature": 0.6,
        "max_tokens": 4000,  # A week of menus is long
    },
}

# Default config if complexity not recognized
DEFAULT_CONFIG: ModelConfig = {
    "model": "gpt-4.1-mini",
    "temperature": 0.5,
}


def get_model(complexity: Literal["low", "medium", "high"] | str) -> str:
    """Get the model name for a complexity level."""
    config = MODEL_CONFIGS.get(complexity, DEFAULT_CONFIG)
    return config["model"]


def get_model_config(complexity: Literal["low", "medium", "high"] | str) -> ModelConfig:
    """Get a copy of the full model configuration for a complexity level."""
    return MODEL_CONFIGS.get(complexity, DEFAULT_CONFIG).copy()


# Generator-specific temperature overrides
# Lower = more deterministic, higher = more creative
GENERATOR_TEMPERATURE: dict[str, float] = {
    "nutritional_info": 0.1,  # Numbers should be stable
    "troubleshoot_problem": 0.3,
    "recipe_compatibility": 0.2,
    "creative_ideas": 0.9,  # The whole point is variety
    "special_occasion_menu": 0.7,
    "food_trend_analysis": 0.7,
}


def get_generator_config(
    generator: str,
    complexity: Literal["low", "medium", "high"] | str,
) -> ModelConfig:
    """
    Get model configuration tuned for a specific generator.

    Args:
        generator: Generator name (usually the flow identifier value)
        complexity: Task complexity level

    Returns:
        Model configuration with the generator's temperature applied
    """
    config = get_model_config(complexity)
    if generator in GENERATOR_TEMPERATURE:
        config["temperature"] = GENERATOR_TEMPERATURE[generator]
    return config
