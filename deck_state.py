"""
Deck Tracker - Deck State Machine
Fixed-size slot deck with insert/cycle/evolution rules and bounded undo
"""
from collections import deque
from typing import Dict, List, Optional

import config
from card_catalog import CardRecord
from logger import get_logger

# Initialize logger for this module
logger = get_logger('deck')


class DeckSlotCard:
    """
    A card placed in a deck slot.

    Holds its own copy of the catalog values so flipping `is_evo` never
    touches the catalog or another slot.
    """

    def __init__(self, name: str, image: str, elixir: str = None, alternatives=(), is_evo: bool = False):
        self.name = name
        self.image = image
        self.elixir = elixir
        self.alternatives = tuple(alternatives)
        self.is_evo = is_evo

    @classmethod
    def from_record(cls, card: CardRecord) -> 'DeckSlotCard':
        return cls(card.name, card.image, card.elixir, card.alternatives, is_evo=False)

    def copy(self) -> 'DeckSlotCard':
        return DeckSlotCard(self.name, self.image, self.elixir, self.alternatives, self.is_evo)

    def __eq__(self, other):
        if not isinstance(other, DeckSlotCard):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    __hash__ = None

    def __repr__(self):
        evo = ' evo' if self.is_evo else ''
        return f"<DeckSlotCard {self.name}{evo}>"

    def to_dict(self) -> Dict:
        return {
            'name': self.name,
            'image': self.image,
            'elixir': self.elixir,
            'alternatives': list(self.alternatives),
            'is_evo': self.is_evo,
        }


class DeckStateMachine:
    """Owns the deck slots and the undo history"""

    def __init__(self, size: int = config.DECK_SIZE, history_limit: int = config.HISTORY_LIMIT):
        self.size = size
        self.deck: List[Optional[DeckSlotCard]] = [None] * size
        # deque drops the oldest snapshot once full
        self.history = deque(maxlen=history_limit)
        logger.info(f"DeckStateMachine initialized | size={size} | history_limit={history_limit}")

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _snapshot(self) -> List[Optional[DeckSlotCard]]:
        return [card.copy() if card else None for card in self.deck]

    def _save_state(self):
        self.history.append(self._snapshot())

    def _check_position(self, position: int):
        if not isinstance(position, int) or isinstance(position, bool) or not 0 <= position < self.size:
            logger.error(f"Invalid slot position: {position!r}")
            raise ValueError(f"Slot position must be an integer in [0, {self.size}), got {position!r}")

    def find_position(self, name: str) -> Optional[int]:
        """Position of the slot holding `name`, or None"""
        for position, card in enumerate(self.deck):
            if card is not None and card.name == name:
                return position
        return None

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def insert_or_bump(self, card: CardRecord) -> List[Optional[DeckSlotCard]]:
        """
        Place `card` at the last slot.

        A card already in the deck is cycled from where it is (no eviction,
        evo flag kept). A new card evicts slot 0 and everything shifts left.
        """
        existing = self.find_position(card.name)
        if existing is not None:
            logger.debug(f"Bump existing card | name={card.name} | position={existing}")
            return self.cycle(existing)

        self._save_state()
        evicted = self.deck[0]
        self.deck = self.deck[1:] + [DeckSlotCard.from_record(card)]
        logger.info(f"Card inserted | name={card.name} | evicted={evicted.name if evicted else None}")
        return self.deck

    def cycle(self, position: int) -> List[Optional[DeckSlotCard]]:
        """Move the card at `position` to the last slot; empty slots are ignored"""
        self._check_position(position)
        card = self.deck[position]
        if card is None:
            logger.debug(f"Cycle ignored, empty slot | position={position}")
            return self.deck

        self._save_state()
        self.deck = self.deck[:position] + self.deck[position + 1:] + [card]
        logger.info(f"Card cycled | name={card.name} | from={position}")
        return self.deck

    def toggle_evolution(self, position: int) -> List[Optional[DeckSlotCard]]:
        self._check_position(position)
        card = self.deck[position]
        if card is None:
            logger.debug(f"Evolution toggle ignored, empty slot | position={position}")
            return self.deck

        self._save_state()
        card.is_evo = not card.is_evo
        logger.info(f"Evolution toggled | name={card.name} | is_evo={card.is_evo}")
        return self.deck

    def undo(self) -> List[Optional[DeckSlotCard]]:
        """Restore the most recent snapshot. Undo itself is not recorded."""
        if not self.history:
            logger.debug("Undo ignored, history empty")
            return self.deck

        self.deck = self.history.pop()
        logger.info(f"Undo applied | history_remaining={len(self.history)}")
        return self.deck

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def card_names(self) -> List[str]:
        return [card.name for card in self.deck if card is not None]

    def to_dict(self) -> Dict:
        return {
            'slots': [card.to_dict() if card else None for card in self.deck],
            'history_depth': len(self.history),
        }
