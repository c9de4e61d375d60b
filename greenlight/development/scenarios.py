"""What-if simulation: re-score a concept with one field changed."""

import secrets
from typing import List, Optional, Tuple

from ..analysis import AnalysisResult, ConceptAnalyzer
from ..config import constants
from ..models import Concept, Genre
from ..utils.logging import get_logger
from .base import WhatIfScenario, ScenarioType

logger = get_logger('development.scenarios')

GENRE_ALTERNATIVES = {
    Genre.ACTION: [Genre.THRILLER, Genre.SCI_FI, Genre.ADVENTURE],
    Genre.HORROR: [Genre.THRILLER, Genre.MYSTERY, Genre.SCI_FI],
    Genre.DRAMA: [Genre.THRILLER, Genre.ROMANCE, Genre.BIOGRAPHY],
    Genre.COMEDY: [Genre.ROMANCE, Genre.ACTION, Genre.DRAMA],
    Genre.THRILLER: [Genre.HORROR, Genre.MYSTERY, Genre.DRAMA],
    Genre.SCI_FI: [Genre.ACTION, Genre.HORROR, Genre.THRILLER],
    Genre.ROMANCE: [Genre.DRAMA, Genre.COMEDY, Genre.MYSTERY],
    Genre.MYSTERY: [Genre.THRILLER, Genre.HORROR, Genre.DRAMA],
}
DEFAULT_GENRE_ALTERNATIVES = [Genre.DRAMA, Genre.THRILLER]
GENRE_SCENARIOS = 2

SERIES_FORMAT = 'Limited Series (6-8 episodes)'
FEATURE_FORMAT = 'Feature Film'

# Budget tier prefix -> alternative tier prefix
BUDGET_ALTERNATIVES = {
    'Micro': 'Low',
    'Low': 'Mid',
    'Mid': 'Low',
    'High': 'Mid',
    'Tentpole': 'High',
}
BUDGET_TIER_ALIASES = {'Medium': 'Mid', 'Blockbuster': 'Tentpole'}

AUDIENCE_ALTERNATIVES = {
    'General Audience': 'Young Adult (18-34)',
    'Young Adult (18-34)': 'Adult (35-54)',
    'Adult (35-54)': 'Young Adult (18-34)',
    'Family': 'General Audience',
    'Mature': 'Adult (35-54)',
}

STRONG_STREAMING_DEMAND = 70
MANY_BUYERS = 5

SERIES_SYNOPSIS_DEPTH = 500  # characters
FEATURE_SYNOPSIS_FOCUS = 300  # characters


def budget_label(tier: str) -> str:
    """Display label for a tier prefix, e.g. 'Low ($5-20M)'."""
    low, high = constants.BUDGET_TIERS[tier]
    if high is None:
        return f"{tier} (${low}M+)"
    return f"{tier} (${low}-{high}M)"


def alternative_budget(budget_tier: Optional[str]) -> Optional[str]:
    """Neighbouring budget tier label, or None when the tier is unknown."""
    if not budget_tier or not budget_tier.split():
        return None
    prefix = budget_tier.split()[0].capitalize()
    prefix = BUDGET_TIER_ALIASES.get(prefix, prefix)
    alternative = BUDGET_ALTERNATIVES.get(prefix)
    return budget_label(alternative) if alternative else None


def alternative_audience(target_audience: Optional[str]) -> Optional[str]:
    if not target_audience:
        return None
    return AUDIENCE_ALTERNATIVES.get(target_audience.strip())


def alternative_genres(concept: Concept) -> List[str]:
    alternatives = GENRE_ALTERNATIVES.get(concept.genre_kind, DEFAULT_GENRE_ALTERNATIVES)
    return [g.value for g in alternatives[:GENRE_SCENARIOS]]


def _signed(value: float) -> str:
    return f"+{value}" if value > 0 else f"{value}"


class WhatIfSimulator:
    """
    Single-variable sensitivity analysis.

    Each scenario changes exactly one of genre, format, budget tier or
    target audience, re-runs the full pipeline with the baseline's seed,
    and reports the score delta. With a shared seed the score jitter draw
    is identical, so the delta reflects the changed field.
    """

    def __init__(self, analyzer: ConceptAnalyzer):
        """
        Initialize simulator.

        Args:
            analyzer: Pipeline used to score the baseline and each variant
        """
        self.analyzer = analyzer

    def baseline(self, concept: Concept, seed: Optional[int] = None) -> AnalysisResult:
        """
        Score the unchanged concept with a concrete seed.

        When neither the caller nor settings supply a seed, a fresh one is
        drawn so the variants can reuse it.
        """
        seed = self.analyzer.resolve_seed(seed)
        if seed is None:
            seed = secrets.randbits(32)
        return self.analyzer.analyze(concept, seed=seed)

    def simulate(
        self,
        concept: Concept,
        baseline: Optional[AnalysisResult] = None,
        seed: Optional[int] = None
    ) -> List[WhatIfScenario]:
        """
        Run every applicable scenario.

        Two genre alternatives, one format flip, and a budget and audience
        alternative when the concept's current value has one.

        Args:
            concept: Concept to vary
            baseline: Existing analysis of concept (scored here if omitted)
            seed: Seed for the baseline when it is scored here

        Returns:
            Scenarios sorted by score delta, largest gain first
        """
        if baseline is None:
            baseline = self.baseline(concept, seed)

        scenarios = [self.genre_scenario(concept, baseline, g) for g in alternative_genres(concept)]

        new_format = SERIES_FORMAT if 'Feature' in concept.format else FEATURE_FORMAT
        scenarios.append(self.format_scenario(concept, baseline, new_format))

        new_budget = alternative_budget(concept.budget_tier)
        if new_budget:
            scenarios.append(self.budget_scenario(concept, baseline, new_budget))

        new_audience = alternative_audience(concept.target_audience)
        if new_audience:
            scenarios.append(self.audience_scenario(concept, baseline, new_audience))

        scenarios.sort(key=lambda s: s.score_delta, reverse=True)
        logger.debug(f"What-if: {len(scenarios)} scenarios for '{concept.project_title}'")
        return scenarios

    def _rescore(self, concept: Concept, baseline: AnalysisResult, **change) -> Tuple[AnalysisResult, int]:
        projected = self.analyzer.analyze(concept.with_changes(**change), seed=baseline.seed)
        return projected, projected.greenlight_score - baseline.greenlight_score

    def genre_scenario(self, concept: Concept, baseline: AnalysisResult, new_genre: str) -> WhatIfScenario:
        projected, delta = self._rescore(concept, baseline, genre=new_genre)
        market = projected.market_analysis

        pros = []
        if market.growth_rate > 0:
            pros.append(f'{new_genre} is a growing market (+{market.growth_rate}%)')
        if market.streaming_demand > STRONG_STREAMING_DEMAND:
            pros.append(f'High streaming demand for {new_genre} content')
        if len(projected.top_buyers) >= MANY_BUYERS:
            pros.append(f'Multiple buyers actively seeking {new_genre} projects')

        if delta > constants.SIGNIFICANT_DELTA:
            recommendation = ('This genre shift could significantly improve marketability. '
                              'Consider if the story supports this change.')
        elif delta < -constants.SIGNIFICANT_DELTA:
            recommendation = 'This genre shift would likely decrease appeal. The current genre is a better fit.'
        else:
            recommendation = 'Similar potential either way. Choose based on your creative vision.'

        return WhatIfScenario(
            scenario_type=ScenarioType.GENRE,
            current_value=concept.genre,
            hypothetical_value=new_genre,
            current_score=baseline.greenlight_score,
            projected_score=projected.greenlight_score,
            score_delta=delta,
            impact_analysis=[
                f'Genre shift from {concept.genre} to {new_genre}',
                f'Market position: {market.market_outlook}',
                f'Growth rate: {_signed(market.growth_rate)}%',
            ],
            pros=pros or ['Different buyer pool', 'Fresh angle on concept'],
            cons=[
                'May require significant story adjustments',
                'Different genre conventions to master',
                'Existing comparable titles may not apply',
            ],
            recommendation=recommendation,
            projected_result=projected,
        )

    def format_scenario(self, concept: Concept, baseline: AnalysisResult, new_format: str) -> WhatIfScenario:
        projected, delta = self._rescore(concept, baseline, format=new_format)
        to_series = 'Series' in new_format

        if to_series:
            impact = 'Series format allows deeper character development and world-building'
            pros = ['More time for character arcs', 'Streaming platforms hungry for content',
                    'Potential for seasons/franchise']
            cons = ['Requires more story material', 'Longer development cycle', 'Episode-by-episode hooks needed']
            if len(concept.synopsis) > SERIES_SYNOPSIS_DEPTH:
                recommendation = ('Your detailed story suggests strong series potential. '
                                  'The concept has enough depth for episodic exploration.')
            else:
                recommendation = ('Consider expanding the mythology/world to support a series format. '
                                  'Currently reads more as a contained story.')
        else:
            impact = 'Feature format provides focused, contained storytelling'
            pros = ['Single creative vision', 'Theatrical release potential', 'Prestige/awards consideration']
            cons = ['Limited runtime for complex stories', 'Theatrical market is challenging',
                    'Less character depth possible']
            if len(concept.synopsis) < FEATURE_SYNOPSIS_FOCUS:
                recommendation = ('Your focused concept is well-suited for a feature film. '
                                  'The contained nature supports theatrical storytelling.')
            else:
                recommendation = ('You have rich material that could support a feature. '
                                  'Consider which elements are essential vs. which could be cut.')

        return WhatIfScenario(
            scenario_type=ScenarioType.FORMAT,
            current_value=concept.format,
            hypothetical_value=new_format,
            current_score=baseline.greenlight_score,
            projected_score=projected.greenlight_score,
            score_delta=delta,
            impact_analysis=[f'Format change from {concept.format} to {new_format}', impact],
            pros=pros,
            cons=cons,
            recommendation=recommendation,
            projected_result=projected,
        )

    def budget_scenario(self, concept: Concept, baseline: AnalysisResult, new_budget: str) -> WhatIfScenario:
        projected, delta = self._rescore(concept, baseline, budget_tier=new_budget)

        if 'Micro' in new_budget or 'Low' in new_budget:
            pros = ['Easier to greenlight', 'Higher ROI potential', 'More creative freedom', 'Faster production']
            cons = ['Limited production scope', 'Unknown cast likely', 'Platform release more likely']
        elif 'Mid' in new_budget:
            pros = ['Balanced risk/reward', 'Star attachment possible', 'Quality production values']
            cons = ['Competitive market segment', 'Need strong hook', 'Must prove commercial appeal']
        else:
            pros = ['A-list talent attachment', 'Wide theatrical release', 'Major marketing support']
            cons = ['High bar for greenlight', 'IP/franchise preference', 'Risk-averse buyers']

        return WhatIfScenario(
            scenario_type=ScenarioType.BUDGET,
            current_value=concept.budget_tier or 'Not specified',
            hypothetical_value=new_budget,
            current_score=baseline.greenlight_score,
            projected_score=projected.greenlight_score,
            score_delta=delta,
            impact_analysis=[
                'Budget adjustment affects buyer pool and ROI expectations',
                'Different budget tiers attract different buyers',
            ],
            pros=pros,
            cons=cons,
            recommendation='Budget tier affects which buyers will consider the project. '
                           'Lower budgets = easier greenlight, higher ROI potential. '
                           'Higher budgets = bigger stars, wider release.',
            projected_result=projected,
        )

    def audience_scenario(self, concept: Concept, baseline: AnalysisResult, new_audience: str) -> WhatIfScenario:
        projected, delta = self._rescore(concept, baseline, target_audience=new_audience)

        return WhatIfScenario(
            scenario_type=ScenarioType.AUDIENCE,
            current_value=concept.target_audience or 'General',
            hypothetical_value=new_audience,
            current_score=baseline.greenlight_score,
            projected_score=projected.greenlight_score,
            score_delta=delta,
            impact_analysis=[
                'Target audience affects marketing and distribution strategy',
                'Different demographics have different viewing habits',
            ],
            pros=['Focused marketing', 'Clear audience expectations', 'Targeted platform fit'],
            cons=['May limit crossover appeal', 'Demographic trends shift', 'Niche can mean smaller market'],
            recommendation='Consider where your target audience consumes content. '
                           'Young adults = streaming-first. Families = theatrical + streaming. '
                           'Mature audiences = prestige platforms.',
            projected_result=projected,
        )
