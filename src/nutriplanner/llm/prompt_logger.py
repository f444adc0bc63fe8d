"""
NutriPlanner - Prompt Logger.

Writes each generator's LLM exchange to a markdown file under
prompt_logs/<run>/, numbered in call order. Off unless
NUTRIPLANNER_LOG_PROMPTS=1 or `nutriplanner run --log-prompts`.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from nutriplanner.config import settings

LOG_DIR = Path("prompt_logs")

# None follows settings.nutriplanner_log_prompts; the CLI flag forces True
LOG_PROMPTS: bool | None = None

_run_stamp: str | None = None
_calls = 0


def enable_prompt_logging(enabled: bool = True) -> None:
    global LOG_PROMPTS
    LOG_PROMPTS = enabled


def is_enabled() -> bool:
    if LOG_PROMPTS is None:
        return settings.nutriplanner_log_prompts
    return LOG_PROMPTS


def _run_dir() -> Path:
    global _run_stamp
    if _run_stamp is None:
        _run_stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    path = LOG_DIR / _run_stamp
    path.mkdir(parents=True, exist_ok=True)
    return path


def _fence(text: str, lang: str = "") -> str:
    return f"```{lang}\n{text}\n```"


def _render_response(response: Any) -> str:
    if isinstance(response, BaseModel):
        return _fence(response.model_dump_json(indent=2), "json")
    try:
        return _fence(json.dumps(response, indent=2, default=str), "json")
    except (TypeError, ValueError):
        return _fence(repr(response))


def log_prompt(
    *,
    generator: str,
    model: str,
    system_prompt: str,
    user_prompt: str,
    response_model: str,
    response: Any = None,
    error: str | None = None,
    image_urls: list[str] | None = None,
) -> Path | None:
    """
    Record one LLM exchange made on behalf of `generator`.

    Returns:
        The markdown file written, or None when logging is off
    """
    if not is_enabled():
        return None

    global _calls
    _calls += 1

    header = [
        f"# {generator} → {response_model}",
        "",
        f"- model: `{model}`",
        f"- at: {datetime.now().isoformat(timespec='seconds')}",
    ]
    header.extend(f"- image: {url}" for url in image_urls or [])

    if error:
        outcome = f"**FAILED:** {error}"
    elif response is None:
        outcome = "(no response)"
    else:
        outcome = _render_response(response)

    sections = [
        "\n".join(header),
        f"## System\n\n{_fence(system_prompt)}",
        f"## User\n\n{_fence(user_prompt)}",
        f"## Response\n\n{outcome}",
    ]
    path = _run_dir() / f"{_calls:02d}_{generator}.md"
    path.write_text("\n\n".join(sections) + "\n", encoding="utf-8")
    return path


def current_log_dir() -> Path | None:
    """Directory this run's prompts go to, or None when logging is off."""
    return _run_dir() if is_enabled() else None


def new_log_run() -> None:
    """Start numbering again in a fresh directory."""
    global _run_stamp, _calls
    _run_stamp = None
    _calls = 0
