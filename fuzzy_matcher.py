"""
Deck Tracker - Fuzzy Card Name Matcher
Resolves spoken card names against the catalog with a precision-first cascade.
SymSpell provides "did you mean" suggestions when the cascade misses.
"""
import re
from typing import Callable, Iterable, List, Optional, Tuple

from symspellpy import SymSpell, Verbosity

import config
from card_catalog import CardCatalog, CardRecord
from logger import get_logger

logger = get_logger('fuzzy_matcher')


def _normalize(text: str) -> str:
    return re.sub(r'\s+', ' ', (text or '').lower()).strip()


def _contains_either_way(spoken: str, candidate: str) -> bool:
    # Empty strings are substrings of everything, never treat them as a hit
    if not spoken or not candidate:
        return False
    return spoken in candidate or candidate in spoken


class FuzzyCardMatcher:
    """
    Finds the best catalog card for free text (usually a voice transcript).

    Tiers, first hit wins, each scanned in catalog order:
    1. exact name
    2. exact alternative name
    3. substring either way on name
    4. substring either way on alternatives
    5. substring either way on name with "the", "a", "an" stripped
    """

    def __init__(self, catalog: CardCatalog, stopwords: Iterable[str] = config.STOPWORDS,
                 max_edit_distance: int = config.SUGGESTION_MAX_EDIT_DISTANCE):
        self.catalog = catalog
        self.max_edit_distance = max_edit_distance
        words = '|'.join(re.escape(word) for word in stopwords)
        self._stopword_re = re.compile(rf'(?<!\S)(?:{words})(?!\S)') if words else None

        self.tiers: List[Tuple[str, Callable[[str, CardRecord], bool]]] = [
            ('exact_name', lambda text, card: _normalize(card.name) == text),
            ('exact_alternative', lambda text, card: any(
                _normalize(alt) == text for alt in card.alternatives)),
            ('substring_name', lambda text, card: _contains_either_way(text, _normalize(card.name))),
            ('substring_alternative', lambda text, card: any(
                _contains_either_way(text, _normalize(alt)) for alt in card.alternatives)),
            ('stopword_name', lambda text, card: _contains_either_way(
                self.strip_stopwords(text), self.strip_stopwords(card.name))),
        ]

        self._build_suggestion_dictionary()
        logger.info(f"FuzzyCardMatcher initialized | cards={len(catalog)}")

    def _build_suggestion_dictionary(self):
        self.sym_cards = SymSpell(max_dictionary_edit_distance=self.max_edit_distance)
        self._display_names = {}
        for card in self.catalog:
            for term in (card.name, *card.alternatives):
                key = _normalize(term)
                if key:
                    self.sym_cards.create_dictionary_entry(key, 1)
                    self._display_names.setdefault(key, card.name)

    def strip_stopwords(self, text: str) -> str:
        """
        Remove standalone stopwords, separated by whitespace.

        "the knight" -> "knight", but "another knight" is left alone.
        """
        text = _normalize(text)
        if self._stopword_re is None:
            return text
        return _normalize(self._stopword_re.sub(' ', text))

    def find_best_match(self, spoken_text: str) -> Optional[CardRecord]:
        """
        Resolve `spoken_text` to a catalog card.

        Args:
            spoken_text: Free text, case-insensitive

        Returns:
            The first card hit by the highest-precision tier, or None
        """
        text = _normalize(spoken_text)
        if not text:
            return None

        for tier_name, matches in self.tiers:
            for card in self.catalog:
                if matches(text, card):
                    logger.info(f"Match | tier={tier_name} | text='{text}' -> '{card.name}'")
                    return card

        logger.info(f"No match: '{text}'")
        return None

    def get_suggestions(self, text: str, max_results: int = config.MAX_SUGGESTIONS) -> List[str]:
        """
        Card names within edit distance of `text`, closest first.

        Used to enrich a "not found" notification. Names come back in their
        catalog spelling and without duplicates.
        """
        text = _normalize(text)
        if not text or not self._display_names:
            return []

        suggestions = self.sym_cards.lookup(
            text,
            Verbosity.CLOSEST,
            max_edit_distance=self.max_edit_distance
        )

        names = []
        for suggestion in suggestions:
            name = self._display_names.get(suggestion.term)
            if name and name not in names:
                names.append(name)
        return names[:max_results]
