"""
Deck Tracker - Test Configuration
Shared fixtures and configuration for all tests
"""
import pytest
import json
import sys
from pathlib import Path
from unittest.mock import MagicMock

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))


@pytest.fixture
def sample_catalog_data():
    """Catalog document as it would be fetched - a fresh dict per call"""
    return {
        '3': [
            {'name': 'Knight', 'image': 'https://example.com/knight.png'},
            {'name': 'Skeleton Army', 'image': 'https://example.com/skarmy.png', 'alternatives': ['skarmy']},
            {'name': 'Cannon', 'image': 'https://example.com/cannon.png'},
        ],
        '4': [
            {'name': 'Hog Rider', 'image': 'https://example.com/hog.png', 'alternatives': ['hog']},
            {'name': 'Musketeer', 'image': 'https://example.com/musketeer.png'},
        ],
        '7': [
            {'name': 'Mega Knight', 'image': 'https://example.com/mk.png', 'alternatives': ['mk']},
            {'name': 'P.E.K.K.A', 'image': 'https://example.com/pekka.png', 'alternatives': ['pekka']},
        ],
        '2': [
            {'name': 'Zap', 'image': 'https://example.com/zap.png'},
            {'name': 'The Log', 'image': 'https://example.com/log.png', 'alternatives': ['log']},
            {'name': 'Goblin Barrel', 'image': 'https://example.com/barrel.png'},
        ],
    }


@pytest.fixture
def catalog(sample_catalog_data):
    """Catalog built from the sample document"""
    from card_catalog import CardCatalog
    return CardCatalog.from_dict(sample_catalog_data)


@pytest.fixture
def catalog_file(tmp_path, sample_catalog_data):
    """Sample document written to disk"""
    filepath = tmp_path / 'cards.json'
    filepath.write_text(json.dumps(sample_catalog_data), encoding='utf-8')
    return filepath


@pytest.fixture
def make_card():
    """Factory for standalone card records"""
    from card_catalog import CardRecord

    def _make(name, elixir='3', alternatives=()):
        slug = name.lower().replace(' ', '_')
        return CardRecord(name, f'https://example.com/{slug}.png', elixir, alternatives)

    return _make


@pytest.fixture
def full_deck(make_card):
    """Deck state machine with eight cards A..H in slots 0..7 and a clean history"""
    from deck_state import DeckStateMachine

    state = DeckStateMachine()
    for name in 'ABCDEFGH':
        state.insert_or_bump(make_card(name))
    state.history.clear()
    return state


@pytest.fixture
def matcher(catalog):
    from fuzzy_matcher import FuzzyCardMatcher
    return FuzzyCardMatcher(catalog)


@pytest.fixture
def renderer():
    """Mock renderer recording every call"""
    from renderer import DeckRenderer
    return MagicMock(spec=DeckRenderer)


class FakeSpeechRecognizer:
    """Speech capability emitting canned results"""

    def __init__(self):
        self.session = None
        self.started = 0
        self.stopped = 0

    def attach(self, session):
        self.session = session

    def start(self):
        self.started += 1

    def stop(self):
        self.stopped += 1

    def emit_result(self, transcript):
        return self.session.on_result(transcript)

    def emit_error(self, error):
        self.session.on_error(error)

    def emit_end(self):
        self.session.on_end()


@pytest.fixture
def recognizer():
    return FakeSpeechRecognizer()


@pytest.fixture
def tracker(catalog, renderer, recognizer):
    """Fully wired tracker with mock renderer and fake speech"""
    from deck_tracker import DeckTracker
    return DeckTracker(catalog=catalog, renderer=renderer, recognizer=recognizer)
