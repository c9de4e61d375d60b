"""Final greenlight score synthesis and verdict mapping."""

import random
from typing import Optional

from ..config import constants
from ..models import Concept
from ..utils.logging import get_logger
from . import rules
from .base import ScoreComponents, Verdict
from .evaluator import SynopsisFormatEvaluator

logger = get_logger('analysis.scoring')

LOGLINE_WEIGHT = 0.5


class ScoreSynthesizer:
    """
    Combine logline, market and concept sub-scores into one clamped score.

    Formula, in order: logline * 0.5 + genre bonus + synopsis quality +
    format fit + advanced options + comparables + jitter, rounded and
    clamped to [25, 98].
    """

    def __init__(self, evaluator: Optional[SynopsisFormatEvaluator] = None):
        """
        Initialize score synthesizer.

        Args:
            evaluator: Synopsis/format evaluator (a default one is created if omitted)
        """
        self.evaluator = evaluator or SynopsisFormatEvaluator()

    def synthesize(
        self,
        concept: Concept,
        logline_score: int,
        genre_bonus: int,
        rng: random.Random
    ) -> ScoreComponents:
        """
        Compute the final score and its components.

        Args:
            concept: Concept being scored
            logline_score: Total logline score (0-100)
            genre_bonus: Market bonus (-10..15)
            rng: Random source for the jitter draw (exactly one draw)

        Returns:
            ScoreComponents whose final_score lies in [25, 98]

        Raises:
            AssertionError: If the clamped score escapes [25, 98]
        """
        components = {
            'logline_points': logline_score * LOGLINE_WEIGHT,
            'genre_bonus': genre_bonus,
            'synopsis_quality': self.evaluator.synopsis_quality(concept.synopsis),
            'format_fit': self.evaluator.format_fit(concept),
            'advanced_options': self.evaluator.advanced_options_bonus(concept),
            'comparables': self.evaluator.comparables_bonus(concept),
            'jitter': rng.randint(*constants.SCORE_JITTER),
        }

        raw = sum(components.values())
        final = int(rules.clamp(rules.round_half_up(raw), constants.MIN_SCORE, constants.MAX_SCORE))

        if not constants.MIN_SCORE <= final <= constants.MAX_SCORE:
            raise AssertionError(f"Final score {final} outside [{constants.MIN_SCORE}, {constants.MAX_SCORE}]")

        logger.debug(f"Score components: {components} -> raw {raw:.1f}, final {final}")

        return ScoreComponents(final_score=final, **components)

    @staticmethod
    def verdict(score: int) -> Verdict:
        """Map a final score to its verdict tier."""
        return Verdict.for_score(score)
