"""
Deck Tracker - Rendering Interface
What the core calls into; UI toolkits and test harnesses subclass DeckRenderer.
"""
from typing import List, Optional

from logger import get_logger

logger = get_logger('renderer')


class DeckRenderer:
    """Presentation boundary. The base implementation renders nothing."""

    def render_deck(self, deck: List):
        """Redraw all slots. `deck` holds DeckSlotCard or None per slot."""

    def render_card_picker(self, elixir_cost: Optional[str], cards: List):
        """Show the cards of one elixir cost; `elixir_cost=None` hides the picker."""

    def notify_user(self, message: str):
        """Show a transient notification"""


class LoggingRenderer(DeckRenderer):
    """Renders into the application log, for headless runs"""

    def render_deck(self, deck: List):
        slots = [f"{card.name}{'*' if card.is_evo else ''}" if card else 'Unknown' for card in deck]
        logger.info(f"Deck | {' | '.join(slots)}")

    def render_card_picker(self, elixir_cost: Optional[str], cards: List):
        if elixir_cost is None:
            logger.info("Card picker hidden")
            return
        logger.info(f"Card picker | elixir={elixir_cost} | cards={[card.name for card in cards]}")

    def notify_user(self, message: str):
        logger.warning(f"Notification | {message}")
