"""
Deck Tracker - Voice Command Interpreter
Turns speech transcripts into deck commands and tracks the listening session
"""
from typing import NamedTuple, Optional, Union

import config
from card_catalog import CardRecord
from deck_state import DeckStateMachine
from fuzzy_matcher import FuzzyCardMatcher
from logger import get_logger, log_function_call
from renderer import DeckRenderer

# Initialize logger for this module
logger = get_logger('voice')


class AddCard(NamedTuple):
    card_name: str


class Unrecognized(NamedTuple):
    transcript: str


Command = Union[AddCard, Unrecognized]


def interpret(transcript: str) -> Command:
    """
    Parse a transcript into a command.

    Only "add <card name>" is understood; an empty name is unrecognized.
    """
    text = (transcript or '').lower().strip()
    prefix = config.VOICE_ADD_PREFIX
    if text.startswith(prefix):
        card_name = text[len(prefix):].strip()
        if card_name:
            return AddCard(card_name)
    return Unrecognized(text)


class VoiceCommandInterpreter:
    """Resolves commands through the matcher and applies them to the deck"""

    def __init__(self, matcher: FuzzyCardMatcher, deck: DeckStateMachine, renderer: DeckRenderer = None):
        self.matcher = matcher
        self.deck = deck
        self.renderer = renderer or DeckRenderer()

    @log_function_call(logger)
    def handle_transcript(self, transcript: str) -> Optional[CardRecord]:
        """
        Run one transcript end to end.

        Returns the card that was added (or bumped), None otherwise.
        """
        command = interpret(transcript)

        if isinstance(command, Unrecognized):
            logger.info(f"Unrecognized voice command: '{command.transcript}'")
            self.renderer.notify_user(config.MESSAGES['unrecognized_command'])
            return None

        card = self.matcher.find_best_match(command.card_name)
        if card is None:
            self.renderer.notify_user(self._not_found_message(command.card_name))
            return None

        self.deck.insert_or_bump(card)
        self.renderer.render_deck(self.deck.deck)
        return card

    def _not_found_message(self, card_name: str) -> str:
        message = config.MESSAGES['card_not_found'].format(name=card_name)
        suggestions = self.matcher.get_suggestions(card_name)
        if suggestions:
            message += '. ' + config.MESSAGES['did_you_mean'].format(suggestions=', '.join(suggestions))
        return message


class SpeechRecognizer:
    """
    Speech capability injected into a VoiceSession.

    Implementations start/stop the platform recognizer and report back through
    the attached session's on_result / on_error / on_end.
    """

    def __init__(self):
        self.session = None

    def attach(self, session: 'VoiceSession'):
        self.session = session

    def start(self):
        raise NotImplementedError

    def stop(self):
        raise NotImplementedError


class VoiceSession:
    """
    Listening state machine: idle -> listening -> idle.

    A start request while listening is rejected. Results arriving while idle
    (for instance after stop()) are dropped.
    """

    IDLE = 'idle'
    LISTENING = 'listening'

    def __init__(self, recognizer: SpeechRecognizer, interpreter: VoiceCommandInterpreter,
                 renderer: DeckRenderer = None):
        self.recognizer = recognizer
        self.interpreter = interpreter
        self.renderer = renderer or interpreter.renderer
        self.state = self.IDLE
        recognizer.attach(self)

    @property
    def is_listening(self) -> bool:
        return self.state == self.LISTENING

    def start(self) -> bool:
        if self.is_listening:
            logger.info("Start rejected, already listening")
            self.renderer.notify_user(config.MESSAGES['already_listening'])
            return False

        self.state = self.LISTENING
        logger.info("Listening started")
        try:
            self.recognizer.start()
        except Exception as e:
            self.on_error(e)
            return False
        return True

    def stop(self):
        if not self.is_listening:
            return
        self.state = self.IDLE
        logger.info("Listening stopped")
        self.recognizer.stop()

    def on_result(self, transcript: str) -> Optional[CardRecord]:
        if not self.is_listening:
            logger.debug(f"Ignoring trailing result after stop: '{transcript}'")
            return None
        self.state = self.IDLE
        logger.info(f"Voice result: '{transcript}'")
        return self.interpreter.handle_transcript(transcript)

    def on_error(self, error):
        self.state = self.IDLE
        logger.warning(f"Speech recognition error: {error}")
        self.renderer.notify_user(config.MESSAGES['voice_error'].format(error=error))

    def on_end(self):
        if self.is_listening:
            logger.debug("Speech recognition ended without result")
        self.state = self.IDLE
