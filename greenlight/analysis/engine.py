"""Concept analysis pipeline."""

import asyncio
import random
from typing import Optional

from ..catalog import CatalogProvider
from ..config import Settings, get_settings
from ..models import Concept
from ..utils.logging import get_logger
from .base import AnalysisResult
from .logline import LoglineAnalyzer
from .market import MarketAnalyzer
from .evaluator import SynopsisFormatEvaluator
from .scoring import ScoreSynthesizer
from .similarity import SimilarityAssessor
from .matching import MatchingEngine
from .feedback import FeedbackGenerator
from .insights import InsightsGenerator

logger = get_logger('analysis.engine')


class ConceptAnalyzer:
    """
    Run the full analysis pipeline on a concept.

    Construct once and reuse; the analyzer holds no per-call state. Each
    call builds its own random.Random, so concurrent calls never share a
    generator and a fixed seed always reproduces the same result.

    Usage:
        analyzer = ConceptAnalyzer()
        result = analyzer.analyze(concept, seed=42)
    """

    def __init__(
        self,
        catalog: Optional[CatalogProvider] = None,
        settings: Optional[Settings] = None
    ):
        """
        Initialize concept analyzer.

        Args:
            catalog: Catalog provider (defaults to the one named by settings)
            settings: Settings (defaults to get_settings())
        """
        self.settings = settings or get_settings()
        self.catalog = catalog or CatalogProvider.from_settings(self.settings)

        self.logline_analyzer = LoglineAnalyzer()
        self.market_analyzer = MarketAnalyzer(self.catalog)
        self.synthesizer = ScoreSynthesizer(SynopsisFormatEvaluator())
        self.similarity_assessor = SimilarityAssessor()
        self.matching_engine = MatchingEngine(self.catalog)
        self.feedback_generator = FeedbackGenerator()
        self.insights_generator = InsightsGenerator(self.catalog)

    def resolve_seed(self, seed: Optional[int] = None) -> Optional[int]:
        """Explicit seed, else the configured default (None = OS entropy)."""
        return seed if seed is not None else self.settings.random_seed

    def analyze(self, concept: Concept, seed: Optional[int] = None) -> AnalysisResult:
        """
        Analyze a concept.

        Never raises for a valid Concept: empty text scores low and unknown
        genres use documented fallbacks.

        Args:
            concept: Concept to analyze
            seed: Seed for score and match jitter

        Returns:
            AnalysisResult snapshot
        """
        seed = self.resolve_seed(seed)
        rng = random.Random(seed)

        logger.debug(f"Analyzing '{concept.project_title}' ({concept.genre}, {concept.format}), seed={seed}")

        breakdown = self.logline_analyzer.analyze(concept)
        market = self.market_analyzer.analyze(concept.genre)

        # Draw order is fixed: score jitter, then one draw per buyer, then per producer
        components = self.synthesizer.synthesize(
            concept, breakdown.total_logline_score, market.genre_bonus, rng
        )
        score = components.final_score

        similarity = self.similarity_assessor.assess(concept, market.saturation_level)
        buyers = self.matching_engine.match_buyers(concept, score, rng)
        producers = self.matching_engine.match_producers(concept, rng)
        titles = self.matching_engine.find_comparable_titles(concept)

        result = AnalysisResult(
            greenlight_score=score,
            verdict=self.synthesizer.verdict(score),
            logline_breakdown=breakdown,
            market_analysis=market,
            similarity=similarity,
            concept=concept,
            top_buyers=buyers,
            top_producers=producers,
            similar_titles=titles,
            differentiation_tips=self.insights_generator.differentiation_tips(concept, titles),
            creative_feedback=self.feedback_generator.creative_feedback(concept, breakdown),
            strengths=self.feedback_generator.strengths(concept, breakdown, market),
            improvement_areas=self.feedback_generator.improvements(concept, breakdown),
            market_insights=self.insights_generator.market_insights(concept, market),
            score_components=components,
            seed=seed,
        )

        logger.debug(f"Analysis complete: {score} ({result.verdict.value})")
        return result

    async def analyze_with_delay(
        self,
        concept: Concept,
        delay: Optional[float] = None,
        seed: Optional[int] = None
    ) -> AnalysisResult:
        """
        Analyze after a short display delay.

        Args:
            concept: Concept to analyze
            delay: Seconds to wait first (defaults to settings.analysis_delay)
            seed: Seed for score and match jitter

        Returns:
            AnalysisResult snapshot
        """
        await asyncio.sleep(self.settings.analysis_delay if delay is None else delay)
        return self.analyze(concept, seed=seed)
