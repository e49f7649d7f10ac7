"""
Deck Tracker - Core Session
Explicit state object (catalog, deck, history, selection) behind the gesture interface
"""
from typing import Optional

from card_catalog import CardCatalog, CardRecord
from deck_state import DeckStateMachine
from fuzzy_matcher import FuzzyCardMatcher
from logger import get_logger
from renderer import DeckRenderer
from voice_commands import SpeechRecognizer, VoiceCommandInterpreter, VoiceSession

logger = get_logger('tracker')


class DeckTracker:
    """
    Receives user gestures from the presentation layer and re-renders through
    the injected DeckRenderer.
    """

    def __init__(self, catalog: CardCatalog = None, renderer: DeckRenderer = None,
                 recognizer: SpeechRecognizer = None):
        self.catalog = catalog if catalog is not None else CardCatalog.load()
        self.renderer = renderer or DeckRenderer()
        self.state = DeckStateMachine()
        self.matcher = FuzzyCardMatcher(self.catalog)
        self.interpreter = VoiceCommandInterpreter(self.matcher, self.state, self.renderer)
        self.voice = VoiceSession(recognizer, self.interpreter, self.renderer) if recognizer else None
        self.selected_elixir: Optional[str] = None
        logger.info(f"DeckTracker initialized | cards={len(self.catalog)} | voice={self.voice is not None}")

    @property
    def deck(self):
        return self.state.deck

    @property
    def history(self):
        return self.state.history

    # Gesture interface

    def on_elixir_selected(self, cost):
        self.selected_elixir = str(cost)
        self.renderer.render_card_picker(self.selected_elixir, self.catalog.cards_for_elixir(cost))

    def on_card_chosen(self, card: CardRecord):
        self.state.insert_or_bump(card)
        self.renderer.render_deck(self.deck)
        self.selected_elixir = None
        self.renderer.render_card_picker(None, [])

    def on_slot_clicked(self, position: int):
        self.state.cycle(position)
        self.renderer.render_deck(self.deck)

    def on_evolution_dropped(self, position: int):
        self.state.toggle_evolution(position)
        self.renderer.render_deck(self.deck)

    def on_undo_requested(self):
        self.state.undo()
        self.renderer.render_deck(self.deck)

    def on_voice_transcript(self, text: str) -> Optional[CardRecord]:
        return self.interpreter.handle_transcript(text)

    # Voice capability

    def start_listening(self) -> bool:
        if self.voice is None:
            logger.warning("Voice input requested but no speech recognizer is configured")
            return False
        return self.voice.start()

    def stop_listening(self):
        if self.voice is not None:
            self.voice.stop()
