"""Read-only industry catalogs loaded from YAML."""

import re
from pathlib import Path
from typing import Dict, Any, Optional, List, Tuple, Type, TypeVar

import yaml
from pydantic import BaseModel, ValidationError

from ..config import constants
from ..config.settings import Settings
from ..errors import CatalogError
from ..models import (
    BuyerProfile,
    ProducerProfile,
    ComparableTitleRecord,
    GenreMarketData,
    MarketReference,
    canonical_genre,
)
from ..utils.logging import get_logger

logger = get_logger('catalog')

RecordT = TypeVar('RecordT', bound=BaseModel)


class CatalogProvider:
    """
    Immutable buyer, producer, title and genre statistics catalogs.

    All files are loaded once at construction. Collections are exposed as
    tuples of frozen models so nothing downstream can mutate them.

    Usage:
        catalog = CatalogProvider()
        stats = catalog.genre_market_stats("Horror")
        buyers = catalog.buyers_matching_genre("Horror")
    """

    def __init__(self, catalog_dir: Optional[Path] = None):
        """
        Initialize catalog provider.

        Args:
            catalog_dir: Directory containing catalog YAML files
                (defaults to the bundled catalogs)

        Raises:
            CatalogError: If a catalog file is missing or malformed
        """
        self.catalog_dir = Path(catalog_dir) if catalog_dir else constants.BUNDLED_CATALOG_DIR

        genre_records = self._parse('genres', GenreMarketData, self._load_file('genres').get('genres'))
        self._genres: Dict[str, GenreMarketData] = {record.genre: record for record in genre_records}
        if constants.MARKET_FALLBACK_GENRE not in self._genres:
            raise CatalogError(
                f"genres catalog must include the fallback genre '{constants.MARKET_FALLBACK_GENRE}'"
            )

        self._buyers: Tuple[BuyerProfile, ...] = self._parse(
            'buyers', BuyerProfile, self._load_file('buyers').get('buyers')
        )
        self._producers: Tuple[ProducerProfile, ...] = self._parse(
            'producers', ProducerProfile, self._load_file('producers').get('producers')
        )
        self._titles: Tuple[ComparableTitleRecord, ...] = self._parse(
            'titles', ComparableTitleRecord, self._load_file('titles').get('titles')
        )

        try:
            self._market = MarketReference(**self._load_file('market'))
        except ValidationError as e:
            raise CatalogError(f"Invalid market catalog: {e}")

        logger.info(
            f"Loaded catalog from {self.catalog_dir}: {len(self._genres)} genres, "
            f"{len(self._buyers)} buyers, {len(self._producers)} producers, {len(self._titles)} titles"
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "CatalogProvider":
        """Create a provider honoring settings.catalog_dir."""
        return cls(settings.catalog_dir)

    def _load_file(self, key: str) -> Dict[str, Any]:
        """Load one catalog file as a dict."""
        path = self.catalog_dir / constants.CATALOG_FILES[key]

        if not path.exists():
            raise CatalogError(f"Catalog file not found: {path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise CatalogError(f"Failed to parse {path}: {e}")

        if not isinstance(data, dict):
            raise CatalogError(f"Expected YAML mapping in {path}, got {type(data).__name__}")

        return data

    @staticmethod
    def _parse(name: str, model: Type[RecordT], records: Any) -> Tuple[RecordT, ...]:
        """Validate a list of raw records into frozen models."""
        if not isinstance(records, list):
            raise CatalogError(f"Catalog '{name}' must contain a list of records")

        parsed = []
        for index, record in enumerate(records):
            try:
                parsed.append(model(**record))
            except (TypeError, ValidationError) as e:
                raise CatalogError(f"Invalid {name} record #{index + 1}: {e}")

        return tuple(parsed)

    # Collections

    @property
    def buyers(self) -> Tuple[BuyerProfile, ...]:
        """All buyers in catalog order."""
        return self._buyers

    @property
    def producers(self) -> Tuple[ProducerProfile, ...]:
        """All producers in catalog order."""
        return self._producers

    @property
    def titles(self) -> Tuple[ComparableTitleRecord, ...]:
        """All comparable titles in catalog order."""
        return self._titles

    @property
    def market_reference(self) -> MarketReference:
        """Timing advice, audience profiles and streaming context."""
        return self._market

    # Genre queries

    def available_genres(self) -> List[str]:
        """Genres with market statistics, in catalog order."""
        return list(self._genres)

    def has_genre_stats(self, genre: Optional[str]) -> bool:
        """Check whether a genre has its own statistics record."""
        return canonical_genre(genre) in self._genres

    def genre_market_stats(self, genre: Optional[str]) -> GenreMarketData:
        """
        Market statistics for a genre.

        Args:
            genre: Genre label (any spelling Genre.from_label accepts)

        Returns:
            The genre's record, or the Drama record for unknown genres
        """
        record = self._genres.get(canonical_genre(genre))
        if record is None:
            logger.debug(f"No market data for genre '{genre}', using {constants.MARKET_FALLBACK_GENRE}")
            return self._genres[constants.MARKET_FALLBACK_GENRE]
        return record

    def buyers_matching_genre(self, genre: Optional[str]) -> List[BuyerProfile]:
        """Buyers listing the genre among their preferred genres."""
        label = canonical_genre(genre)
        return [b for b in self._buyers if label in b.preferred_genres]

    def producers_matching_genre(self, genre: Optional[str]) -> List[ProducerProfile]:
        """Producers listing the genre among their specialties."""
        label = canonical_genre(genre)
        return [p for p in self._producers if label in p.specialties]

    def titles_matching_genre(self, genre: Optional[str]) -> List[ComparableTitleRecord]:
        """
        Comparable titles in a genre.

        Falls back to the Thriller titles when the genre has none.
        """
        label = canonical_genre(genre)
        titles = [t for t in self._titles if t.genre == label]
        if not titles:
            titles = [t for t in self._titles if t.genre == constants.TITLES_FALLBACK_GENRE]
        return titles

    # Other queries

    def buyers_by_type(self, buyer_type: str) -> List[BuyerProfile]:
        """Buyers of one type ('Streamer', 'Indie', ...), case insensitive."""
        wanted = buyer_type.strip().lower()
        return [b for b in self._buyers if b.type.value.lower() == wanted]

    def producers_by_budget_tier(self, budget_tier: str) -> List[ProducerProfile]:
        """
        Producers whose typical budget floor falls inside a budget tier.

        Args:
            budget_tier: Tier label such as 'Micro ($1-5M)' or 'Mid'

        Returns:
            Matching producers in catalog order (empty for unknown tiers)
        """
        bounds = _tier_bounds(budget_tier)
        if bounds is None:
            return []

        low, high = bounds
        matches = []
        for producer in self._producers:
            floor = _budget_floor(producer.typical_budget)
            if floor is None:
                continue
            if floor >= low and (high is None or floor < high):
                matches.append(producer)
        return matches


def _tier_bounds(budget_tier: str) -> Optional[Tuple[int, Optional[int]]]:
    """Resolve a budget tier label to its (low, high) bounds."""
    words = budget_tier.strip().split()
    if not words:
        return None
    return constants.BUDGET_TIERS.get(words[0].capitalize())


def _budget_floor(budget_range: str) -> Optional[int]:
    """Lower bound in millions of a range like '$3M - $15M'."""
    match = re.search(r'\$(\d+)M', budget_range)
    return int(match.group(1)) if match else None
