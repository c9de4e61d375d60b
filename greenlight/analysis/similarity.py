"""Similarity and saturation risk assessment."""

from ..models import Concept, Saturation
from . import rules
from .base import RiskTier, SimilarityAssessment


class SimilarityAssessor:
    """Flag overused tropes and crowded genres."""

    def assess(self, concept: Concept, saturation: Saturation) -> SimilarityAssessment:
        """
        Assess how derivative or crowded a concept looks.

        Each overused trope found in the logline adds its weight; genre
        saturation adds 4 (high) or 2 (medium). HIGH when the total reaches 6
        or saturation is high, MODERATE at 3 or medium saturation, else LOW.

        Args:
            concept: Concept whose logline is checked
            saturation: Saturation of the concept's genre

        Returns:
            SimilarityAssessment with tier, color and description
        """
        logline = concept.logline.lower()

        matched = [trope for trope in rules.OVERUSED_TROPES if trope in logline]
        risk_score = sum(rules.OVERUSED_TROPES[trope] for trope in matched)
        risk_score += rules.SATURATION_RISK[saturation]

        if risk_score >= rules.HIGH_RISK_THRESHOLD or saturation == Saturation.HIGH:
            tier = RiskTier.HIGH
        elif risk_score >= rules.MODERATE_RISK_THRESHOLD or saturation == Saturation.MEDIUM:
            tier = RiskTier.MODERATE
        else:
            tier = RiskTier.LOW

        color, description = rules.RISK_TIER_DETAILS[tier]
        return SimilarityAssessment(
            risk=tier,
            color=color,
            description=description,
            risk_score=risk_score,
            matched_tropes=matched,
        )
