"""Logline scoring against professional screenwriting criteria."""

from typing import Dict

from ..models import Concept
from ..utils.logging import get_logger
from . import rules
from .base import LoglineScoreBreakdown

logger = get_logger('analysis.logline')


class LoglineAnalyzer:
    """
    Score a logline on seven dimensions using the pattern tables in rules.

    Deterministic: identical concepts always produce identical breakdowns.
    Empty or degenerate loglines score low rather than raising.
    """

    def analyze(self, concept: Concept) -> LoglineScoreBreakdown:
        """
        Break a concept's logline down into clamped sub-scores.

        Args:
            concept: Concept whose logline (plus secondary genre and tone) is scored

        Returns:
            LoglineScoreBreakdown with notes keyed by protagonist, conflict,
            stakes, hook, genre, length and emotion
        """
        logline = concept.logline.lower()
        words = rules.word_count(concept.logline)
        notes: Dict[str, str] = {}

        breakdown = LoglineScoreBreakdown(
            protagonist=self._score_protagonist(logline, notes),
            conflict=self._score_conflict(logline, notes),
            stakes=self._score_stakes(logline, notes),
            unique_hook=self._score_hook(logline, concept, notes),
            genre_clarity=self._score_genre_clarity(logline, concept, notes),
            concision=self._score_concision(words, notes),
            emotional_resonance=self._score_emotion(logline, notes),
            notes=notes,
            word_count=words,
        )

        logger.debug(f"Logline scored {breakdown.total_logline_score}/100 ({words} words)")
        return breakdown

    def _score_protagonist(self, logline: str, notes: Dict[str, str]) -> int:
        score = 0

        for rule in rules.PROTAGONIST_DESCRIPTORS:
            if rule.matches(logline):
                score += rule.points
                break

        if rules.ACTIVE_VOICE.matches(logline):
            score += rules.ACTIVE_VOICE.points
            notes['protagonist'] = 'Active protagonist with clear drive'
        else:
            notes['protagonist'] = 'Consider making protagonist more active'

        if rules.DEFINING_CHARACTERISTIC.matches(logline):
            score += rules.DEFINING_CHARACTERISTIC.points

        return int(rules.clamp(score, 0, rules.DIMENSION_MAXIMUMS['protagonist']))

    def _score_conflict(self, logline: str, notes: Dict[str, str]) -> int:
        score = sum(rule.points for rule in rules.CONFLICT_FAMILIES if rule.matches(logline))

        if rules.GOAL_MARKER.matches(logline):
            score += rules.GOAL_MARKER.points
            notes['conflict'] = 'Clear goal-oriented conflict'
        else:
            notes['conflict'] = 'Consider clarifying the central conflict goal'

        return int(rules.clamp(score, 0, rules.DIMENSION_MAXIMUMS['conflict']))

    def _score_stakes(self, logline: str, notes: Dict[str, str]) -> int:
        score = 0

        if rules.LIFE_DEATH_STAKES.matches(logline):
            score += rules.LIFE_DEATH_STAKES.points
            notes['stakes'] = 'High life-or-death stakes'

        for rule in (rules.WORLD_STAKES, rules.PERSONAL_STAKES):
            if rule.matches(logline):
                score += rule.points

        if rules.TIME_PRESSURE.matches(logline):
            score += rules.TIME_PRESSURE.points
            if 'stakes' in notes:
                notes['stakes'] += ' with time pressure'
            else:
                notes['stakes'] = 'Time pressure drives urgency'

        if score and 'stakes' not in notes:
            notes['stakes'] = 'Stakes established'

        if score == 0:
            notes['stakes'] = 'Stakes unclear - what happens if protagonist fails?'

        return int(rules.clamp(score, 0, rules.DIMENSION_MAXIMUMS['stakes']))

    def _score_hook(self, logline: str, concept: Concept, notes: Dict[str, str]) -> int:
        score = 0

        if rules.WHAT_IF_FRAMING.matches(logline):
            score += rules.WHAT_IF_FRAMING.points

        score += sum(rule.points for rule in rules.FRESH_FAMILIES if rule.matches(logline))

        # Genre-bending potential
        if concept.secondary_genre:
            score += rules.SECONDARY_GENRE_HOOK_POINTS

        if score >= rules.HOOK_STRONG:
            notes['hook'] = 'Strong unique hook with fresh angle'
        elif score >= rules.HOOK_PRESENT:
            notes['hook'] = 'Hook present but could be sharper'
        else:
            notes['hook'] = 'Needs a more distinctive "what if" element'

        return int(rules.clamp(score, 0, rules.DIMENSION_MAXIMUMS['unique_hook']))

    def _score_genre_clarity(self, logline: str, concept: Concept, notes: Dict[str, str]) -> int:
        keywords = rules.GENRE_KEYWORDS.get(concept.genre_kind, ())
        score = sum(rules.GENRE_KEYWORD_POINTS for keyword in keywords if keyword in logline)

        if concept.tone:
            score += rules.TONE_DECLARED_POINTS

        score = int(rules.clamp(score, 0, rules.DIMENSION_MAXIMUMS['genre_clarity']))
        notes['genre'] = (
            'Genre expectations clear' if score >= rules.GENRE_CLEAR
            else 'Consider adding genre-specific language'
        )
        return score

    def _score_concision(self, words: int, notes: Dict[str, str]) -> int:
        for low, high, points in rules.CONCISION_BANDS:
            if low <= words <= high:
                if points == 10:
                    notes['length'] = f'Optimal logline length ({words} words)'
                elif points == 7:
                    notes['length'] = f'Good length ({words} words)'
                else:
                    notes['length'] = f'Acceptable length ({words} words) - aim for 25-50'
                return points

        short_limit, short_points = rules.CONCISION_TOO_SHORT
        if words < short_limit:
            notes['length'] = f'Too brief ({words} words) - expand to 25-50'
            return short_points

        notes['length'] = f'Too long ({words} words) - trim to 25-50'
        return rules.CONCISION_TOO_LONG_POINTS

    def _score_emotion(self, logline: str, notes: Dict[str, str]) -> int:
        score = sum(rule.points for rule in rules.EMOTIONAL_FAMILIES if rule.matches(logline))
        score = int(rules.clamp(score, 0, rules.DIMENSION_MAXIMUMS['emotional_resonance']))
        notes['emotion'] = (
            'Strong emotional resonance' if score >= rules.EMOTION_STRONG
            else 'Consider adding emotional/thematic depth'
        )
        return score
