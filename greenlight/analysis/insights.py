"""Market positioning insights and differentiation tips."""

from typing import List

from ..catalog import CatalogProvider
from ..config import constants
from ..models import Concept, Genre, Saturation
from . import rules
from .base import GenreMarketAnalysis, MarketInsights, ComparableTitle

SERIES_PLATFORMS = ['Netflix', 'HBO Max', 'Amazon Prime', 'Apple TV+']
THEATRICAL_PLATFORMS = ['Theatrical', 'Universal', 'Sony', 'Lionsgate']
STREAMING_FEATURE_PLATFORMS = ['Netflix', 'Amazon MGM', 'Apple TV+']
THEATRICAL_GENRES = frozenset({Genre.HORROR, Genre.COMEDY})

HIGH_ROI = 4

COMPETITIVE_POSITIONS = {
    Saturation.LOW: 'Favorable - less crowded space allows for differentiation',
    Saturation.MEDIUM: 'Moderate - room for fresh voices with clear positioning',
    Saturation.HIGH: 'Challenging - strong USP required to break through established competition',
}

GENRE_TIPS = {
    Genre.HORROR: [
        'Consider what the horror represents thematically - elevated horror is trending',
        'Fresh subgenres like folk horror, cosmic horror seeing renewed interest',
        'Practical effects over CGI can be a marketing differentiator',
    ],
    Genre.THRILLER: [
        'Psychological depth over action set pieces - character-driven thrillers resonating',
        'True story basis adds credibility and marketing angle',
        'Limited series allows for deeper exploration than feature format',
    ],
    Genre.COMEDY: [
        'Gen Z comedic sensibilities differ from millennial humor - know your demo',
        'Rom-com theatrical revival means opportunity for fresh voices',
        'Social commentary woven into comedy performing well',
    ],
    Genre.DRAMA: [
        'Streaming has appetite for stories traditional studios pass on',
        'International perspectives increasingly valued',
        'Shorter prestige dramas (under 2 hours) seeing theatrical success',
    ],
    Genre.SCI_FI: [
        'AI and technology anxiety themes particularly timely',
        'Hard sci-fi with practical grounding over pure fantasy',
        'Original IP hunger after franchise fatigue',
    ],
    Genre.ACTION: [
        'Practical stunt work creates buzz (John Wick model)',
        'R-rated action seeing theatrical revival',
        'Character depth elevates beyond generic action fare',
    ],
}

DEFAULT_TIPS = [
    'Study recent successful titles in your genre for inspiration',
    'Find the emotional core that makes your story personal',
    'Consider what unique perspective or voice you bring',
]

SERIES_TIPS = [
    'For series: Develop a clear multi-season vision even for limited series pitches',
    'Episode count matters: 6-8 episodes optimal for limited series acquisition',
]


class InsightsGenerator:
    """Build market insights and differentiation advice for a concept."""

    def __init__(self, catalog: CatalogProvider):
        """
        Initialize insights generator.

        Args:
            catalog: Catalog supplying genre statistics and market reference text
        """
        self.catalog = catalog

    def market_insights(self, concept: Concept, market: GenreMarketAnalysis) -> MarketInsights:
        """
        Summarize where the concept sits in the market.

        Args:
            concept: Analyzed concept
            market: Market analysis for its genre

        Returns:
            MarketInsights with platforms, budget, audience and timing advice
        """
        genre = concept.genre_label
        reference = self.catalog.market_reference

        if concept.is_series:
            platforms = list(SERIES_PLATFORMS)
        elif concept.genre_kind in THEATRICAL_GENRES:
            platforms = list(THEATRICAL_PLATFORMS)
        else:
            platforms = list(STREAMING_FEATURE_PLATFORMS)

        return MarketInsights(
            genre_trend=f"{genre} market {'expanding' if market.is_growing else 'contracting'}",
            genre_trend_percent=abs(market.growth_rate),
            genre_trend_up=market.is_growing,
            platform_fit=platforms[0],
            recommended_platforms=platforms,
            budget_recommendation=self._budget_recommendation(concept),
            target_demographic=reference.audience_for(genre),
            timing_advice=reference.timing_for(genre),
            market_context=reference.streaming_context,
            competitive_position=COMPETITIVE_POSITIONS[market.saturation_level],
            script_sale_ranges=dict(reference.script_sale_ranges),
        )

    def _budget_recommendation(self, concept: Concept) -> str:
        if not self.catalog.has_genre_stats(concept.genre):
            return 'Consider budget-to-market fit for your genre/format combination.'

        data = self.catalog.genre_market_stats(concept.genre)
        parts = [f'Genre average: ${data.average_budget}M.']
        if concept.budget_tier:
            parts.append(f'Your target: {concept.budget_tier}.')
        if data.avg_roi > HIGH_ROI:
            parts.append(f'Lower budgets in this genre see excellent ROI ({data.avg_roi:.1f}x average).')
        return ' '.join(parts)

    def differentiation_tips(self, concept: Concept, comparables: List[ComparableTitle]) -> List[str]:
        """
        Suggest how to stand out from similar projects.

        Three genre tips, a warning when the closest comparable is very
        similar, and two series tips for episodic formats; at most five.
        """
        tips = list(GENRE_TIPS.get(concept.genre_kind, DEFAULT_TIPS))

        if comparables:
            top = comparables[0]
            if top.concept_similarity > rules.HIGH_SIMILARITY:
                tips.append(
                    f'Your concept shares elements with "{top.title}" - emphasize what makes your take distinct'
                )

        if concept.is_series:
            tips.extend(SERIES_TIPS)

        return tips[:constants.MAX_DIFFERENTIATION_TIPS]
