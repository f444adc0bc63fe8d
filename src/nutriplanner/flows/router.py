"""
Result Router.

Hands a finished Interaction to the display surface, then puts the bound
controller back to idle so a new flow can start right away, unless the
display already started one while handling the result.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from nutriplanner.flows.interaction import Interaction
from nutriplanner.flows.table import FlowIdentifier

if TYPE_CHECKING:
    from nutriplanner.flows.controller import FlowController

logger = logging.getLogger(__name__)

NavigateToChat = Callable[[Interaction, FlowIdentifier], None]


class ResultRouter:
    """Forwards Interactions to `navigate_to_chat` (fire-and-forget)."""

    def __init__(self, navigate_to_chat: NavigateToChat):
        self._navigate_to_chat = navigate_to_chat
        self._controller: FlowController | None = None

    def bind(self, controller: FlowController) -> None:
        self._controller = controller

    def deliver(self, interaction: Interaction, flow: FlowIdentifier) -> None:
        run_id = self._controller.run_id if self._controller is not None else None
        try:
            self._navigate_to_chat(interaction, flow)
        except Exception as e:
            # The display's failure is its own; the flow is finished either way
            logger.error(f"Display hand-off failed for {flow.value}: {e}")
        finally:
            # A flow the display started during the hand-off is left alone
            if self._controller is not None and self._controller.run_id == run_id:
                self._controller.reset()
