"""Concept development: versioning, A/B comparison, what-if and rewrites."""

import asyncio
import random
from typing import Dict, Any, List, Optional

from ..analysis import AnalysisResult, ConceptAnalyzer
from ..config import Settings, get_settings
from ..models import Concept, ConceptVersion
from ..utils.logging import get_logger
from .base import ABComparisonResult, LoglineRewriteSuggestion, WeaknessFix, WhatIfScenario
from .comparison import ABComparator
from .fixes import WeaknessFixBuilder
from .history import VersionHistory
from .rewrites import LoglineRewriter
from .scenarios import WhatIfSimulator
from .store import VersionStore, JsonVersionStore

logger = get_logger('development.service')


class ConceptDevelopmentService:
    """
    Iterate on a concept across revisions.

    Wraps the analysis pipeline: every capability re-runs ConceptAnalyzer
    rather than duplicating scoring logic. Construct one per application
    and pass it where needed.

    Usage:
        service = ConceptDevelopmentService()
        result = service.analyzer.analyze(concept, seed=7)
        version = await service.save_version('heist', concept, result, 'First draft')
        comparison = service.compare_ab(concept, revised, seed=7)
    """

    def __init__(
        self,
        analyzer: Optional[ConceptAnalyzer] = None,
        store: Optional[VersionStore] = None,
        settings: Optional[Settings] = None
    ):
        """
        Initialize development service.

        Args:
            analyzer: Analysis pipeline (defaults to one built from settings)
            store: Version store (defaults to JSON files in settings.history_dir)
            settings: Settings (defaults to get_settings())
        """
        self.settings = settings or get_settings()
        self.analyzer = analyzer or ConceptAnalyzer(settings=self.settings)
        self.history = VersionHistory(
            store or JsonVersionStore(self.settings.history_dir),
            timeout=self.settings.history_timeout
        )
        self.rewriter = LoglineRewriter()
        self.fix_builder = WeaknessFixBuilder()
        self.comparator = ABComparator()
        self.simulator = WhatIfSimulator(self.analyzer)

    # Versioning

    async def save_version(
        self,
        project_id: str,
        concept: Concept,
        result: Optional[AnalysisResult] = None,
        change_description: str = "",
        seed: Optional[int] = None
    ) -> Optional[ConceptVersion]:
        """
        Save a concept revision to the project's history.

        Args:
            project_id: Project to save under
            concept: Concept snapshot
            result: Its analysis (run here with seed if omitted)
            change_description: Writer's note for this revision
            seed: Seed used when the analysis is run here

        Returns:
            The saved version, or None if history storage failed
        """
        if result is None:
            result = self.analyzer.analyze(concept, seed=seed)
        return await self.history.save(project_id, concept, result, change_description)

    async def get_version_history(self, project_id: str) -> List[ConceptVersion]:
        """Versions 1..N for a project; [] when none exist or storage failed."""
        return await self.history.load(project_id)

    async def get_score_progression(self, project_id: str) -> List[Dict[str, Any]]:
        return await self.history.score_progression(project_id)

    # A/B comparison

    def compare_ab(
        self,
        concept_a: Concept,
        concept_b: Concept,
        seed: Optional[int] = None
    ) -> ABComparisonResult:
        """
        Analyze two versions and compare them.

        Both versions are analyzed with the same seed.

        Args:
            concept_a: Version A
            concept_b: Version B
            seed: Seed for both analyses

        Returns:
            ABComparisonResult
        """
        seed = self.analyzer.resolve_seed(seed)
        result_a = self.analyzer.analyze(concept_a, seed=seed)
        result_b = self.analyzer.analyze(concept_b, seed=seed)
        comparison = self.comparator.compare(result_a, result_b)
        logger.info(
            f"A/B: {result_a.greenlight_score} vs {result_b.greenlight_score}, "
            f"winner {comparison.winner.value}"
        )
        return comparison

    async def compare_ab_with_delay(
        self,
        concept_a: Concept,
        concept_b: Concept,
        seed: Optional[int] = None
    ) -> ABComparisonResult:
        """Async A/B comparison using the analyzer's display delay for each version."""
        seed = self.analyzer.resolve_seed(seed)
        result_a, result_b = await asyncio.gather(
            self.analyzer.analyze_with_delay(concept_a, seed=seed),
            self.analyzer.analyze_with_delay(concept_b, seed=seed),
        )
        return self.comparator.compare(result_a, result_b)

    # What-if

    def what_if(
        self,
        concept: Concept,
        baseline: Optional[AnalysisResult] = None,
        seed: Optional[int] = None
    ) -> List[WhatIfScenario]:
        """Single-field scenarios for a concept, largest score gain first."""
        return self.simulator.simulate(concept, baseline=baseline, seed=seed)

    # Rewrites and fixes

    def suggest_rewrites(
        self,
        concept: Concept,
        result: Optional[AnalysisResult] = None,
        seed: Optional[int] = None
    ) -> List[LoglineRewriteSuggestion]:
        """
        Suggest logline rewrites for a concept's weak dimensions.

        Args:
            concept: Concept whose logline is rewritten
            result: Its analysis (logline breakdown is computed if omitted)
            seed: Seed for phrase selection

        Returns:
            Targeted suggestions followed by one polished rewrite
        """
        if result is None:
            breakdown = self.analyzer.logline_analyzer.analyze(concept)
        else:
            breakdown = result.logline_breakdown
        rng = random.Random(self.analyzer.resolve_seed(seed))
        return self.rewriter.suggest(concept, breakdown, rng)

    def weakness_fixes(self, result: AnalysisResult) -> List[WeaknessFix]:
        """Up to six fixes, most urgent first."""
        return self.fix_builder.build(result)
