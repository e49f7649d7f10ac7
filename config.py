"""
Deck Tracker - Configuration
"""
import os
from pathlib import Path

# Base directory
BASE_DIR = Path(__file__).parent

# Deck settings
DECK_SIZE = 8
HISTORY_LIMIT = 10  # undo snapshots kept

# Card catalog (local path or http(s) URL)
CATALOG_SOURCE = os.environ.get('CARD_CATALOG_SOURCE', str(BASE_DIR / 'cards.json'))
CATALOG_TIMEOUT = 10  # seconds

# Fuzzy matching
STOPWORDS = ('the', 'a', 'an')
SUGGESTION_MAX_EDIT_DISTANCE = 2
MAX_SUGGESTIONS = 3

# Voice commands
VOICE_ADD_PREFIX = 'add '

# User-facing notifications
MESSAGES = {
    'card_not_found': 'Card "{name}" not found',
    'did_you_mean': 'Did you mean: {suggestions}?',
    'unrecognized_command': 'Say "add" followed by a card name',
    'already_listening': 'Already listening',
    'voice_error': 'Voice input failed: {error}',
}
