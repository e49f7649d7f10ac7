"""
Deck Tracker - Card Catalog
Static elixir cost -> cards mapping, loaded once from a JSON document
"""
import json
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple

import requests

import config
from logger import get_logger, PerformanceLogger

# Initialize logger for this module
logger = get_logger('catalog')


class CardRecord:
    """Immutable card entry owned by the catalog"""

    __slots__ = ('name', 'image', 'elixir', 'alternatives')

    def __init__(self, name: str, image: str, elixir: str = None, alternatives=()):
        object.__setattr__(self, 'name', name)
        object.__setattr__(self, 'image', image)
        object.__setattr__(self, 'elixir', elixir)
        object.__setattr__(self, 'alternatives', tuple(alternatives or ()))

    def __setattr__(self, key, value):
        raise AttributeError(f"CardRecord is read-only (tried to set '{key}')")

    def __eq__(self, other):
        if not isinstance(other, CardRecord):
            return NotImplemented
        return (self.name, self.image, self.elixir, self.alternatives) == \
            (other.name, other.image, other.elixir, other.alternatives)

    def __hash__(self):
        return hash((self.name, self.image, self.elixir, self.alternatives))

    def __repr__(self):
        return f"CardRecord(name={self.name!r}, elixir={self.elixir!r})"

    @classmethod
    def from_dict(cls, data: Dict, elixir: str = None) -> 'CardRecord':
        """
        Build a record from one catalog entry.

        `name` and `image` are required strings, `alternatives` an optional
        list of strings. Anything else raises ValueError.
        """
        name = data['name']
        image = data['image']
        alternatives = data.get('alternatives') or []

        if not isinstance(name, str) or not name.strip():
            raise ValueError(f"Card name must be a non-empty string, got {name!r}")
        if not isinstance(image, str):
            raise ValueError(f"Card image must be a string | name={name} | image={image!r}")
        if not isinstance(alternatives, list) or not all(isinstance(alt, str) for alt in alternatives):
            raise ValueError(f"Card alternatives must be a list of strings | name={name} | alternatives={alternatives!r}")

        return cls(name=name, image=image, elixir=elixir, alternatives=alternatives)

    def to_dict(self) -> Dict:
        return {
            'name': self.name,
            'image': self.image,
            'elixir': self.elixir,
            'alternatives': list(self.alternatives),
        }


class CardCatalog:
    """
    Read-only mapping of elixir cost -> ordered card records.

    Iteration order follows the source document: groups in document order,
    cards within a group in document order. The fuzzy matcher relies on it.
    """

    def __init__(self, groups: Dict[str, List[CardRecord]] = None):
        self._groups: Dict[str, Tuple[CardRecord, ...]] = {
            str(cost): tuple(cards) for cost, cards in (groups or {}).items()
        }
        self._warn_duplicate_names()

    @classmethod
    def from_dict(cls, data: Dict) -> 'CardCatalog':
        """Build a catalog from the parsed JSON document"""
        if not isinstance(data, dict):
            raise ValueError(f"Catalog document must be an object, got {type(data).__name__}")

        groups = {}
        for cost, entries in data.items():
            groups[str(cost)] = [CardRecord.from_dict(entry, elixir=str(cost)) for entry in entries]
        return cls(groups)

    @classmethod
    def load(cls, source: str = None) -> 'CardCatalog':
        """
        Load the catalog from a local path or an http(s) URL.

        A missing, unreachable or unparseable source never raises: the failure
        is logged and an empty catalog is returned.
        """
        source = str(source or config.CATALOG_SOURCE)
        logger.info(f"Loading card catalog | source={source}")

        try:
            with PerformanceLogger(f"load catalog {source}", logger):
                data = cls._read_source(source)
                catalog = cls.from_dict(data)
        except (requests.RequestException, OSError, ValueError, KeyError, TypeError) as e:
            logger.error(f"Failed to load card catalog | source={source} | error={e}", exc_info=True)
            return cls()

        logger.info(f"Card catalog loaded | groups={len(catalog._groups)} | cards={len(catalog)}")
        return catalog

    @staticmethod
    def _read_source(source: str):
        if source.startswith(('http://', 'https://')):
            response = requests.get(source, timeout=config.CATALOG_TIMEOUT)
            response.raise_for_status()
            return response.json()

        with Path(source).open('r', encoding='utf-8') as f:
            return json.load(f)

    def _warn_duplicate_names(self):
        seen = {}
        for card in self:
            if card.name in seen:
                logger.warning(
                    f"Duplicate card name in catalog | name={card.name} | "
                    f"elixir={seen[card.name]} and {card.elixir}"
                )
            else:
                seen[card.name] = card.elixir

    def __iter__(self) -> Iterator[CardRecord]:
        for cards in self._groups.values():
            yield from cards

    def __len__(self) -> int:
        return sum(len(cards) for cards in self._groups.values())

    def __bool__(self) -> bool:
        return len(self) > 0

    def elixir_costs(self) -> List[str]:
        """Group keys in catalog order"""
        return list(self._groups)

    def cards_for_elixir(self, elixir) -> List[CardRecord]:
        """Cards of one elixir cost, alphabetical as shown in the card picker"""
        cards = self._groups.get(str(elixir), ())
        return sorted(cards, key=lambda card: card.name.casefold())

    def get(self, name: str) -> Optional[CardRecord]:
        """Exact (case-sensitive) lookup by card name"""
        for card in self:
            if card.name == name:
                return card
        return None
