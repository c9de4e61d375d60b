from .concept import Concept, Genre, FormatKind, canonical_genre
from .version import ConceptVersion
from .catalog import (
    Saturation, BuyerType, GenreMarketData,
    BuyerProfile, ProducerProfile, ComparableTitleRecord, MarketReference
)

__all__ = [
    'Concept', 'Genre', 'FormatKind', 'canonical_genre',
    'ConceptVersion',
    'Saturation', 'BuyerType', 'GenreMarketData',
    'BuyerProfile', 'ProducerProfile', 'ComparableTitleRecord', 'MarketReference'
]
