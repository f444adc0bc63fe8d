"""
Core health check: package imports and settings defaults.
"""

import sys


def test_import_nutriplanner():
    """Test that nutriplanner package can be imported."""
    import nutriplanner
    assert nutriplanner.__version__ == "1.0.0"


def test_flows_never_call_llm():
    """The orchestrator runs with any dispatch table; it never calls the LLM directly."""
    import nutriplanner.flows  # noqa: F401

    assert "nutriplanner.flows.controller" in sys.modules
    from nutriplanner.flows import controller, dispatch, interaction, resolver, router

    for module in (controller, dispatch, interaction, resolver, router):
        assert "call_llm" not in vars(module)


def test_settings_defaults(monkeypatch):
    """Settings load with nothing but the test environment."""
    monkeypatch.delenv("GENERATION_TIMEOUT_SECONDS", raising=False)
    from nutriplanner.config import Settings

    settings = Settings(_env_file=None)
    assert settings.is_development
    assert settings.generation_timeout_seconds == 60.0
    assert settings.nutriplanner_log_prompts is False


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("NUTRIPLANNER_ENV", "production")
    monkeypatch.setenv("GENERATION_TIMEOUT_SECONDS", "15")
    from nutriplanner.config import Settings

    settings = Settings(_env_file=None)
    assert settings.is_production
    assert settings.generation_timeout_seconds == 15.0
