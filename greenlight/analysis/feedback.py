"""Creative feedback, strengths and improvement areas."""

from typing import List

from ..models import Concept, Genre, Saturation
from . import rules
from .base import (
    LoglineScoreBreakdown,
    GenreMarketAnalysis,
    CreativeFeedback,
    FeedbackCategory,
    FeedbackStatus,
    StrengthPoint,
    ImprovementArea,
)

# Sub-score thresholds
PROTAGONIST_WEAK = 10
CONFLICT_WEAK = 12
STAKES_WEAK = 10
HOOK_WEAK = 12
CONCISION_WEAK = 7
SYNOPSIS_SHORT_WORDS = 50

PROTAGONIST_STRONG = 12
HOOK_STRONG = 15
STAKES_STRONG = 12
TRENDING_GROWTH = 10

STAKES_UNDEFINED = 8
HOOK_FAMILIAR = 10

SERIES_FRIENDLY_GENRES = frozenset({Genre.MYSTERY, Genre.THRILLER, Genre.DRAMA})


class FeedbackGenerator:
    """
    Turn score breakdowns into notes a writer can act on.

    Pure functions of their inputs: no randomness, no catalog access.
    """

    def creative_feedback(self, concept: Concept, breakdown: LoglineScoreBreakdown) -> List[CreativeFeedback]:
        """
        Generate creative notes, most urgent (priority 1) first.

        Args:
            concept: Analyzed concept (synopsis length is checked)
            breakdown: Logline sub-scores and notes

        Returns:
            Feedback sorted ascending by priority
        """
        notes = breakdown.notes
        feedback = []

        if breakdown.protagonist < PROTAGONIST_WEAK:
            feedback.append(CreativeFeedback(
                category=FeedbackCategory.PROTAGONIST,
                assessment=notes.get('protagonist', 'Needs clearer protagonist definition'),
                recommendation='Define your protagonist with a specific role, defining trait, and clear motivation. '
                               'Example: "A disgraced FBI agent" vs. "An agent"',
                status=FeedbackStatus.WARNING,
                priority=1,
            ))
        else:
            feedback.append(CreativeFeedback(
                category=FeedbackCategory.PROTAGONIST,
                assessment='Strong protagonist setup with clear identity',
                recommendation='Maintain this clarity through the full synopsis and pitch deck',
                status=FeedbackStatus.POSITIVE,
                priority=3,
            ))

        if breakdown.conflict < CONFLICT_WEAK:
            feedback.append(CreativeFeedback(
                category=FeedbackCategory.CENTRAL_CONFLICT,
                assessment=notes.get('conflict', 'Conflict needs strengthening'),
                recommendation='Clearly state what the protagonist must do and what/who opposes them. '
                               'Use action verbs: "must stop", "races to save", "fights to expose"',
                status=FeedbackStatus.CRITICAL,
                priority=1,
            ))

        if breakdown.stakes < STAKES_WEAK:
            feedback.append(CreativeFeedback(
                category=FeedbackCategory.STAKES,
                assessment=notes.get('stakes', 'Stakes need elevation'),
                recommendation='Add clear consequences: What happens if the protagonist fails? '
                               'Make stakes personal AND universal when possible.',
                status=FeedbackStatus.WARNING,
                priority=1,
            ))

        if breakdown.unique_hook < HOOK_WEAK:
            feedback.append(CreativeFeedback(
                category=FeedbackCategory.UNIQUE_HOOK,
                assessment=notes.get('hook', 'Hook could be stronger'),
                recommendation='What\'s the "Why now? Why this story?" element? '
                               'Find the fresh angle that makes this different from similar projects.',
                status=FeedbackStatus.WARNING,
                priority=2,
            ))
        else:
            feedback.append(CreativeFeedback(
                category=FeedbackCategory.UNIQUE_HOOK,
                assessment='Distinctive concept element present',
                recommendation='Lead with this unique angle in all pitch materials',
                status=FeedbackStatus.POSITIVE,
                priority=4,
            ))

        if breakdown.concision < CONCISION_WEAK:
            feedback.append(CreativeFeedback(
                category=FeedbackCategory.LOGLINE_LENGTH,
                assessment=notes.get('length', 'Length adjustment needed'),
                recommendation='Industry standard: 25-50 words. Every word should earn its place. '
                               'Cut adjectives, combine phrases.',
                status=FeedbackStatus.WARNING,
                priority=2,
            ))

        if not concept.synopsis:
            feedback.append(CreativeFeedback(
                category=FeedbackCategory.SYNOPSIS,
                assessment='No synopsis provided',
                recommendation='Add a 1-2 paragraph synopsis to strengthen buyer confidence. '
                               'Include three-act structure and character arc.',
                status=FeedbackStatus.CRITICAL,
                priority=1,
            ))
        elif rules.word_count(concept.synopsis) < SYNOPSIS_SHORT_WORDS:
            feedback.append(CreativeFeedback(
                category=FeedbackCategory.SYNOPSIS,
                assessment='Synopsis could be expanded',
                recommendation='Aim for 150-300 words covering setup, conflict escalation, '
                               'and resolution hint (without spoiling the ending).',
                status=FeedbackStatus.WARNING,
                priority=2,
            ))

        return sorted(feedback, key=lambda f: f.priority)

    def strengths(
        self,
        concept: Concept,
        breakdown: LoglineScoreBreakdown,
        market: GenreMarketAnalysis
    ) -> List[StrengthPoint]:
        """Identify the concept's selling points."""
        genre = concept.genre_label
        strengths = []

        if market.is_growing and market.growth_rate > TRENDING_GROWTH:
            strengths.append(StrengthPoint(
                category='Market Timing',
                description=f'{genre} is trending up {market.growth_rate:.1f}% year-over-year',
                market_advantage='Favorable market conditions for acquisition. Strike while momentum is strong.',
            ))

        if market.saturation_level == Saturation.LOW:
            strengths.append(StrengthPoint(
                category='Market Opportunity',
                description=f'Low saturation in {genre} space',
                market_advantage='Less competition for buyer attention. First-mover advantage possible.',
            ))

        if breakdown.protagonist >= PROTAGONIST_STRONG:
            strengths.append(StrengthPoint(
                category='Character Foundation',
                description='Strong, clearly-defined protagonist',
                market_advantage='Easier to package with talent. Clear character brief for casting.',
            ))

        if breakdown.unique_hook >= HOOK_STRONG:
            strengths.append(StrengthPoint(
                category='High-Concept Appeal',
                description='Distinctive hook sets concept apart',
                market_advantage='Marketing-friendly premise. Easy to pitch in one line.',
            ))

        if breakdown.stakes >= STAKES_STRONG:
            strengths.append(StrengthPoint(
                category='Stakes Clarity',
                description='Clear, compelling stakes drive urgency',
                market_advantage='Audiences understand what\'s at risk. Creates investment.',
            ))

        if concept.is_series and concept.genre_kind in SERIES_FRIENDLY_GENRES:
            strengths.append(StrengthPoint(
                category='Format-Genre Synergy',
                description=f'Series format ideal for {genre}',
                market_advantage='Streamers actively seeking limited series in this genre.',
            ))

        if concept.comparable1:
            strengths.append(StrengthPoint(
                category='Pitch Positioning',
                description='Clear comparables demonstrate market awareness',
                market_advantage='Buyers can quickly understand positioning. Reduces pitch friction.',
            ))

        return strengths

    def improvements(self, concept: Concept, breakdown: LoglineScoreBreakdown) -> List[ImprovementArea]:
        """
        Identify weaknesses with worked examples.

        Returns:
            Improvement areas sorted descending by impact level
        """
        improvements = []

        if breakdown.conflict < CONFLICT_WEAK:
            improvements.append(ImprovementArea(
                category='Central Conflict',
                issue='Antagonist or opposing force not clearly defined',
                suggestion='Name the specific threat, villain, or obstacle the protagonist faces',
                example='Before: "A detective investigates a crime." '
                        'After: "A detective must catch a serial killer targeting her own family."',
                impact_level=9,
            ))

        if breakdown.stakes < STAKES_UNDEFINED:
            improvements.append(ImprovementArea(
                category='Stakes Definition',
                issue='Consequences of failure unclear',
                suggestion='Add what the protagonist loses if they fail - make it personal and universal',
                example='Add "before [consequence]" clause: "...before the evidence disappears forever" '
                        'or "...or lose everything he\'s fought to protect"',
                impact_level=8,
            ))

        if breakdown.unique_hook < HOOK_FAMILIAR:
            improvements.append(ImprovementArea(
                category='Unique Selling Point',
                issue='Concept feels familiar without distinctive angle',
                suggestion='Find the twist that makes YOUR version different from similar projects',
                example='Ask: What if [familiar premise] but [unexpected element]? '
                        'Example: "What if a zombie apocalypse but told from the zombie\'s perspective?"',
                impact_level=9,
            ))

        if not concept.synopsis:
            improvements.append(ImprovementArea(
                category='Synopsis Required',
                issue='Missing synopsis significantly weakens submission',
                suggestion='Write 200-400 words covering protagonist, conflict, key turning points, and climax setup',
                example='Structure: Paragraph 1 (Setup/World), Paragraph 2 (Conflict Escalation), '
                        'Paragraph 3 (Stakes/Resolution Tease)',
                impact_level=10,
            ))

        if not concept.comparable1:
            improvements.append(ImprovementArea(
                category='Market Positioning',
                issue='No comparable titles provided',
                suggestion='Add 2-3 recent successful films/shows that share elements with your concept',
                example='"JOKER meets TAXI DRIVER" or "GET OUT meets THE STEPFORD WIVES" - '
                        'pick titles from last 5 years when possible',
                impact_level=6,
            ))

        if not concept.target_audience:
            improvements.append(ImprovementArea(
                category='Audience Targeting',
                issue='Target audience not specified',
                suggestion='Define your core demographic - helps buyers understand marketing approach',
                example='Be specific: "18-34 female-skewing, rom-com fans seeking theatrical date night content"',
                impact_level=5,
            ))

        return sorted(improvements, key=lambda i: i.impact_level, reverse=True)
