"""Buyer, producer and comparable title ranking."""

import random
from typing import List

from ..catalog import CatalogProvider
from ..config import constants
from ..models import Concept, BuyerType, BuyerProfile, ProducerProfile, ComparableTitleRecord
from ..utils.logging import get_logger
from . import rules
from .base import BuyerMatch, ProducerMatch, ComparableTitle

logger = get_logger('analysis.matching')


class MatchingEngine:
    """
    Rank catalog entries against a concept.

    Buyers and producers: base score plus rule adjustments plus jitter,
    clamped to [50, 98]; entries under 60 are dropped; the rest are sorted
    descending with catalog order breaking ties; top 10 returned. Every
    catalog entry consumes one jitter draw, kept or not.
    """

    def __init__(self, catalog: CatalogProvider):
        """
        Initialize matching engine.

        Args:
            catalog: Catalog supplying buyers, producers and titles
        """
        self.catalog = catalog

    def match_buyers(self, concept: Concept, score: int, rng: random.Random) -> List[BuyerMatch]:
        """
        Rank buyers for a concept.

        Args:
            concept: Concept being pitched
            score: Final greenlight score (adjusts every match)
            rng: Random source, one draw per buyer in catalog order

        Returns:
            Up to 10 BuyerMatch, descending by match_percent
        """
        matches = []
        for buyer in self.catalog.buyers:
            match_score, reason = self._score_buyer(buyer, concept, score)
            match_score += rng.randint(*constants.BUYER_JITTER)
            match_score = int(rules.clamp(match_score, constants.MIN_MATCH, constants.MAX_MATCH))

            if match_score < constants.MATCH_THRESHOLD:
                continue

            matches.append(BuyerMatch(
                name=buyer.name,
                type=buyer.type.value,
                match_percent=match_score,
                content_strategy=buyer.content_strategy,
                recent_acquisitions=list(buyer.recent_acquisitions),
                budget_range=buyer.budget_range,
                submission_tip=buyer.submission_tip,
                match_reason=reason,
                accepts_unsolicited=buyer.accepts_unsolicited,
            ))

        # sorted() is stable, so equal scores keep catalog order
        ranked = sorted(matches, key=lambda m: m.match_percent, reverse=True)[:constants.MAX_MATCHES]
        logger.debug(f"Buyer matching: {len(matches)} above threshold, returning {len(ranked)}")
        return ranked

    def _score_buyer(self, buyer: BuyerProfile, concept: Concept, score: int):
        """Rule-based buyer score and reason, before jitter."""
        genre = concept.genre_label
        secondary = concept.secondary_genre_label
        match_score = buyer.base_match_score

        if genre in buyer.preferred_genres:
            match_score += rules.BUYER_PRIMARY_GENRE_POINTS
            reason = f'{genre} aligns with current acquisition mandate'
        elif secondary and secondary in buyer.preferred_genres:
            match_score += rules.BUYER_SECONDARY_GENRE_POINTS
            reason = 'Secondary genre fits their slate'
        else:
            match_score += rules.BUYER_GENRE_MISMATCH_POINTS
            reason = 'Genre outside typical focus, but exceptions exist'

        if buyer.type == BuyerType.STREAMER and concept.is_series:
            match_score += rules.STREAMER_SERIES_POINTS
        elif buyer.type == BuyerType.MAJOR_STUDIO and not concept.is_series:
            match_score += rules.STUDIO_FEATURE_POINTS

        if (buyer.type == BuyerType.INDIE and concept.target_audience
                and rules.PRESTIGE_MARKER in concept.target_audience):
            match_score += rules.INDIE_PRESTIGE_POINTS
            reason = 'Prestige positioning ideal for their brand'

        if score >= rules.STRONG_SCORE:
            match_score += rules.STRONG_SCORE_POINTS
        elif score < rules.WEAK_SCORE:
            match_score += rules.WEAK_SCORE_POINTS

        return match_score, reason

    def match_producers(self, concept: Concept, rng: random.Random) -> List[ProducerMatch]:
        """
        Rank producers for a concept.

        Args:
            concept: Concept being pitched
            rng: Random source, one draw per producer in catalog order

        Returns:
            Up to 10 ProducerMatch, descending by match_percent
        """
        matches = []
        for producer in self.catalog.producers:
            match_score, reason = self._score_producer(producer, concept)
            match_score += rng.randint(*constants.PRODUCER_JITTER)
            match_score = int(rules.clamp(match_score, constants.MIN_MATCH, constants.MAX_MATCH))

            if match_score < constants.MATCH_THRESHOLD:
                continue

            matches.append(ProducerMatch(
                name=producer.name,
                company=producer.company,
                match_percent=match_score,
                specialties=list(producer.specialties),
                notable_credits=list(producer.notable_credits),
                typical_budget=producer.typical_budget,
                looking_for=producer.looking_for,
                accepts_submissions=producer.accepts_submissions,
                match_reason=reason,
            ))

        ranked = sorted(matches, key=lambda m: m.match_percent, reverse=True)[:constants.MAX_MATCHES]
        logger.debug(f"Producer matching: {len(matches)} above threshold, returning {len(ranked)}")
        return ranked

    def _score_producer(self, producer: ProducerProfile, concept: Concept):
        """Rule-based producer score and reason, before jitter."""
        genre = concept.genre_label
        secondary = concept.secondary_genre_label
        match_score = producer.base_match_score

        if genre in producer.specialties:
            match_score += rules.PRODUCER_PRIMARY_GENRE_POINTS
            reason = f'Track record in {genre} perfectly aligns'
        elif secondary and secondary in producer.specialties:
            match_score += rules.PRODUCER_SECONDARY_GENRE_POINTS
            reason = 'Experience with genre-blending projects'
        else:
            match_score += rules.PRODUCER_GENRE_MISMATCH_POINTS
            reason = 'Outside typical specialty but could be interested'

        if (concept.budget_tier and 'Micro' in concept.budget_tier
                and rules.MICRO_BUDGET_MARKER in producer.typical_budget):
            match_score += rules.MICRO_BUDGET_POINTS

        return match_score, reason

    def find_comparable_titles(self, concept: Concept) -> List[ComparableTitle]:
        """
        Rank released titles by similarity to the concept.

        Candidates are titles in the primary or secondary genre; when there
        are none, the catalog's genre fallback (Thriller) is used. Similarity
        starts at 30, adds 12 per key element found in the logline and 5 per
        logline-style word (over 4 characters) found, clamped to [25, 85].

        Returns:
            Up to 10 ComparableTitle, descending by concept_similarity
        """
        logline = concept.logline.lower()
        genres = {concept.genre_label, concept.secondary_genre_label} - {None}

        candidates = [t for t in self.catalog.titles if t.genre in genres]
        if not candidates:
            candidates = self.catalog.titles_matching_genre(concept.genre)

        comparables = [self._compare_title(title, logline) for title in candidates]
        ranked = sorted(comparables, key=lambda c: c.concept_similarity, reverse=True)
        return ranked[:constants.MAX_MATCHES]

    def _compare_title(self, title: ComparableTitleRecord, logline: str) -> ComparableTitle:
        similarity = constants.BASE_TITLE_SIMILARITY
        shared = []

        for element in title.key_elements:
            if element.lower() in logline:
                similarity += rules.KEY_ELEMENT_POINTS
                shared.append(element)

        for word in title.logline_style.lower().split(' '):
            if len(word) >= rules.STYLE_WORD_MIN_LENGTH and word in logline:
                similarity += rules.STYLE_WORD_POINTS

        similarity = int(rules.clamp(similarity, constants.MIN_TITLE_SIMILARITY, constants.MAX_TITLE_SIMILARITY))

        if similarity > rules.HIGH_SIMILARITY:
            differentiator = 'Focus on what makes your take unique from this successful title'
        elif similarity > rules.SOME_SIMILARITY:
            differentiator = 'Some common elements - ensure distinct perspective'
        else:
            differentiator = 'Different approach within genre - good differentiation'

        return ComparableTitle(
            title=title.title,
            year=title.year,
            platform=title.platform,
            box_office_millions=title.box_office_millions,
            rt_score=title.rt_score,
            concept_similarity=similarity,
            differentiator=differentiator,
            shared_elements=shared,
        )
