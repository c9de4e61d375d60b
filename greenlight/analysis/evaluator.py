"""Synopsis depth, format fit and metadata completeness scoring."""

from ..models import Concept
from . import rules


class SynopsisFormatEvaluator:
    """Score the non-logline parts of a concept."""

    def synopsis_quality(self, synopsis: str) -> float:
        """
        Score synopsis depth (0-10).

        Length band (1-5 points) plus structure, character and theme language.
        An empty synopsis scores 0.
        """
        if not synopsis:
            return 0

        words = rules.word_count(synopsis)
        lowered = synopsis.lower()

        points = rules.SYNOPSIS_MIN_LENGTH_POINTS
        for min_words, band_points in rules.SYNOPSIS_LENGTH_BANDS:
            if words >= min_words:
                points = band_points
                break

        points += sum(rule.points for rule in rules.SYNOPSIS_RULES if rule.matches(lowered))

        return rules.clamp(points, 0, rules.SYNOPSIS_MAX)

    def format_fit(self, concept: Concept) -> float:
        """
        Score format/genre synergy (0-8).

        Base 4, +4 when the format suits the genre, +2 for a declared series
        structure and +1 more for serialized Drama, Thriller or Mystery.
        """
        points = rules.FORMAT_BASE_POINTS
        genre = concept.genre_kind

        preferred = rules.FORMAT_GENRE_SYNERGIES.get(concept.format_kind, frozenset())
        if genre in preferred:
            points += rules.FORMAT_SYNERGY_POINTS

        if concept.is_series and concept.series_structure:
            points += rules.SERIES_STRUCTURE_POINTS
            if concept.series_structure == 'Serialized' and genre in rules.SERIALIZED_GENRES:
                points += rules.SERIALIZED_BONUS_POINTS

        return rules.clamp(points, 0, rules.FORMAT_MAX)

    def advanced_options_bonus(self, concept: Concept) -> float:
        """Score declared optional metadata (0-10)."""
        bonus = sum(
            points for field, points in rules.ADVANCED_OPTION_POINTS.items()
            if getattr(concept, field)
        )

        if concept.target_audience and rules.PRESTIGE_MARKER in concept.target_audience:
            bonus += rules.PRESTIGE_BONUS

        return rules.clamp(bonus, 0, rules.ADVANCED_MAX)

    def comparables_bonus(self, concept: Concept) -> int:
        """Score declared comparable titles (2, 2 and 1 points)."""
        declared = (concept.comparable1, concept.comparable2, concept.comparable3)
        return sum(points for title, points in zip(declared, rules.COMPARABLE_POINTS) if title)
