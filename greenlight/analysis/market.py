"""Genre market position and the bonus it contributes to the score."""

from ..catalog import CatalogProvider
from ..config import constants
from ..models import GenreMarketData
from ..utils.logging import get_logger
from . import rules
from .base import GenreMarketAnalysis

logger = get_logger('analysis.market')


class MarketAnalyzer:
    """Look up genre statistics and derive a bounded genre bonus."""

    def __init__(self, catalog: CatalogProvider):
        """
        Initialize market analyzer.

        Args:
            catalog: Catalog supplying genre statistics
        """
        self.catalog = catalog

    def analyze(self, genre: str) -> GenreMarketAnalysis:
        """
        Analyze a genre's market position.

        Unknown genres use the Drama statistics instead of raising.

        Args:
            genre: Genre label

        Returns:
            GenreMarketAnalysis with genre_bonus in [-10, 15]
        """
        data = self.catalog.genre_market_stats(genre)
        bonus = self.genre_bonus(data)

        logger.debug(f"Market for '{genre}' -> {data.genre}: bonus {bonus}")

        return GenreMarketAnalysis(
            genre=data.genre,
            market_share=data.market_share,
            growth_rate=data.growth_rate,
            is_growing=data.is_growing,
            saturation_level=data.saturation_level,
            streaming_demand=data.streaming_demand,
            market_outlook=data.market_outlook,
            current_trends=list(data.hot_trends),
            genre_bonus=bonus,
            average_budget=data.average_budget,
            avg_roi=data.avg_roi,
        )

    @staticmethod
    def genre_bonus(data: GenreMarketData) -> int:
        """
        Compute the market bonus for one genre's statistics.

        Growth (up to +10, or -3 when shrinking), saturation (+5 low, -3 high),
        streaming demand relative to 75 (-3..+5) and ROI (+3 above 4x, +1 above 3x).
        """
        bonus = 0

        if data.is_growing:
            bonus += rules.clamp(rules.round_half_up(data.growth_rate / rules.GROWTH_DIVISOR), *rules.GROWTH_BONUS_RANGE)
        else:
            bonus += rules.SHRINKING_PENALTY

        bonus += rules.SATURATION_BONUS[data.saturation_level]

        demand = rules.round_half_up((data.streaming_demand - rules.DEMAND_BASELINE) / rules.DEMAND_DIVISOR)
        bonus += rules.clamp(demand, *rules.DEMAND_BONUS_RANGE)

        for threshold, points in rules.ROI_BONUSES:
            if data.avg_roi > threshold:
                bonus += points
                break

        return int(rules.clamp(bonus, constants.MIN_GENRE_BONUS, constants.MAX_GENRE_BONUS))
