"""A/B comparison of two analyzed concept versions."""

from typing import List

from ..analysis import AnalysisResult
from ..config import constants
from .base import ABComparisonResult, ComparisonPoint, Winner

MAX_CITED_ADVANTAGES = 3

TIE_RECOMMENDATION = (
    'Both versions are competitively strong. Consider combining the best elements: '
    'take the stronger protagonist/conflict from one and the unique hook from the other.'
)


def pick_winner(score_a: int, score_b: int) -> Winner:
    """Higher score wins unless the gap is within the tie threshold."""
    if abs(score_a - score_b) <= constants.TIE_THRESHOLD:
        return Winner.TIE
    return Winner.A if score_a > score_b else Winner.B


def identify_advantages(primary: AnalysisResult, secondary: AnalysisResult) -> List[str]:
    """Where primary beats secondary."""
    advantages = []

    if primary.greenlight_score > secondary.greenlight_score:
        advantages.append('Higher overall score')
    if primary.logline_breakdown.total_logline_score > secondary.logline_breakdown.total_logline_score:
        advantages.append('Stronger logline fundamentals')
    if primary.market_analysis.genre_bonus > secondary.market_analysis.genre_bonus:
        advantages.append('Better market timing')
    if len(primary.top_buyers) > len(secondary.top_buyers):
        advantages.append('More potential buyers')
    if len(primary.strengths) > len(secondary.strengths):
        advantages.append('More identified strengths')
    if len(primary.improvement_areas) < len(secondary.improvement_areas):
        advantages.append('Fewer areas needing improvement')

    return advantages


class ABComparator:
    """
    Compare two analysis results.

    Pure: the caller runs the pipeline on both concepts and hands the
    results in.
    """

    def compare(self, result_a: AnalysisResult, result_b: AnalysisResult) -> ABComparisonResult:
        """
        Compare version A against version B.

        Args:
            result_a: Analysis of version A
            result_b: Analysis of version B

        Returns:
            ABComparisonResult with winner, six comparison points,
            per-side advantages and a recommendation
        """
        winner = pick_winner(result_a.greenlight_score, result_b.greenlight_score)
        a_advantages = identify_advantages(result_a, result_b)
        b_advantages = identify_advantages(result_b, result_a)

        return ABComparisonResult(
            version_a=result_a,
            version_b=result_b,
            winner=winner,
            score_difference=abs(result_a.greenlight_score - result_b.greenlight_score),
            comparison_points=self.comparison_points(result_a, result_b),
            recommendation=self.recommendation(result_a, result_b, winner, a_advantages, b_advantages),
            version_a_advantages=a_advantages,
            version_b_advantages=b_advantages,
        )

    def comparison_points(self, a: AnalysisResult, b: AnalysisResult) -> List[ComparisonPoint]:
        """The six fixed dimensions, each resolved independently."""
        logline_a = a.logline_breakdown.total_logline_score
        logline_b = b.logline_breakdown.total_logline_score

        return [
            ComparisonPoint(
                category='Overall Score',
                version_a_value=f'{a.greenlight_score}/100',
                version_b_value=f'{b.greenlight_score}/100',
                winner=Winner.by_higher(a.greenlight_score, b.greenlight_score),
                analysis='Based on comprehensive analysis of all factors.',
            ),
            ComparisonPoint(
                category='Logline Strength',
                version_a_value=f'{logline_a}/100',
                version_b_value=f'{logline_b}/100',
                winner=Winner.by_higher(logline_a, logline_b),
                analysis='Evaluates protagonist, conflict, stakes, hook, and clarity.',
            ),
            ComparisonPoint(
                category='Market Fit',
                version_a_value=a.market_analysis.market_outlook,
                version_b_value=b.market_analysis.market_outlook,
                winner=Winner.by_higher(a.market_analysis.genre_bonus, b.market_analysis.genre_bonus),
                analysis='How well the concept aligns with current market trends.',
            ),
            ComparisonPoint(
                category='Buyer Interest',
                version_a_value=f'{len(a.top_buyers)} strong matches',
                version_b_value=f'{len(b.top_buyers)} strong matches',
                winner=Winner.by_higher(len(a.top_buyers), len(b.top_buyers)),
                analysis='Number of studios/streamers likely to be interested.',
            ),
            ComparisonPoint(
                category='Similarity Risk',
                version_a_value=a.similarity_risk.value,
                version_b_value=b.similarity_risk.value,
                # lower risk wins
                winner=Winner.by_higher(b.similarity_risk.rank, a.similarity_risk.rank),
                analysis='Lower risk = more distinctive in the marketplace.',
            ),
            ComparisonPoint(
                category='Concept Strengths',
                version_a_value=f'{len(a.strengths)} identified',
                version_b_value=f'{len(b.strengths)} identified',
                winner=Winner.by_higher(len(a.strengths), len(b.strengths)),
                analysis='Key selling points that make the concept appealing.',
            ),
        ]

    def recommendation(
        self,
        a: AnalysisResult,
        b: AnalysisResult,
        winner: Winner,
        a_advantages: List[str],
        b_advantages: List[str]
    ) -> str:
        """Templated advice naming why the winner won and what the loser keeps."""
        if winner == Winner.TIE:
            return TIE_RECOMMENDATION

        if winner == Winner.A:
            loser, loser_name, advantages = b, Winner.B.value, a_advantages
        else:
            loser, loser_name, advantages = a, Winner.A.value, b_advantages

        keep = loser.strengths[0].description if loser.strengths else 'its unique angle'
        return (
            f"Version {winner.value} scores higher due to: "
            f"{', '.join(advantages[:MAX_CITED_ADVANTAGES])}. "
            f"However, Version {loser_name} has elements worth preserving, particularly {keep}."
        )
