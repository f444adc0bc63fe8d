"""
NutriPlanner - AI flows for family meal planning.

Packages:
- flows: Multi-step flow orchestration (resolver, controller, dispatch, formatting)
- generators: LLM-backed generation operations, one per flow
- llm: Structured LLM client (OpenAI + Instructor)
- models: Domain entities (family members, recipes, menus, budgets, stores)
"""

__version__ = "1.0.0"
