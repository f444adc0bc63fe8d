"""
Free-form cooking advice.
"""

from nutriplanner.generators.prompts import system_prompt
from nutriplanner.llm.client import call_llm
from nutriplanner.models.entities import CreativeIdeas, TroubleshootAnswer


async def troubleshoot_problem(*, query: str) -> TroubleshootAnswer:
    """A kitchen problem ("my sauce split") and how to fix it."""
    answer = await call_llm(
        response_model=TroubleshootAnswer,
        system_prompt=system_prompt(),
        user_prompt=(
            f"Cooking problem: {query}\n\n"
            "Explain the likely cause and give step-by-step instructions to fix "
            "it now and avoid it next time."
        ),
        generator="troubleshoot_problem",
        complexity="low",
    )
    # Echo the user's own wording
    return answer.model_copy(update={"question": query})


async def creative_ideas(*, query: str) -> CreativeIdeas:
    return await call_llm(
        response_model=CreativeIdeas,
        system_prompt=system_prompt(),
        user_prompt=(
            f"Request: {query}\n\n"
            "Give 5 original, doable ideas, each with a name and a two-sentence description."
        ),
        generator="creative_ideas",
    )
