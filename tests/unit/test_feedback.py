"""Tests for creative feedback, strengths, improvements and market insights."""

import pytest

from greenlight.analysis import (
    LoglineAnalyzer,
    MarketAnalyzer,
    FeedbackGenerator,
    InsightsGenerator,
    FeedbackCategory,
    FeedbackStatus,
    ComparableTitle,
)
from greenlight.analysis.insights import DEFAULT_TIPS, SERIES_TIPS
from greenlight.models import Concept


@pytest.fixture
def empty_concept():
    return Concept(logline="")


@pytest.fixture
def generator():
    return FeedbackGenerator()


class TestCreativeFeedback:
    """Test creative notes."""

    def test_empty_concept_notes(self, generator, empty_concept):
        """Test every weakness is flagged for an empty concept."""
        breakdown = LoglineAnalyzer().analyze(empty_concept)
        feedback = generator.creative_feedback(empty_concept, breakdown)

        categories = [f.category for f in feedback]
        assert FeedbackCategory.CENTRAL_CONFLICT in categories
        assert FeedbackCategory.LOGLINE_LENGTH in categories
        assert FeedbackCategory.SYNOPSIS in categories

        synopsis = next(f for f in feedback if f.category == FeedbackCategory.SYNOPSIS)
        assert synopsis.status == FeedbackStatus.CRITICAL
        assert synopsis.assessment == 'No synopsis provided'

    def test_sorted_by_priority(self, generator, full_concept):
        """Test most urgent notes come first."""
        breakdown = LoglineAnalyzer().analyze(full_concept)
        priorities = [f.priority for f in generator.creative_feedback(full_concept, breakdown)]

        assert priorities == sorted(priorities)

    def test_positive_protagonist(self, generator):
        """Test a strong protagonist gets a positive note."""
        concept = Concept(logline="A retired detective haunted by grief must find the truth")
        breakdown = LoglineAnalyzer().analyze(concept)

        protagonist = next(
            f for f in generator.creative_feedback(concept, breakdown)
            if f.category == FeedbackCategory.PROTAGONIST
        )
        assert protagonist.status == FeedbackStatus.POSITIVE
        assert protagonist.priority == 3

    def test_short_synopsis(self, generator):
        """Test a thin synopsis is a warning, not critical."""
        concept = Concept(logline="A spy", synopsis="A short synopsis.")
        breakdown = LoglineAnalyzer().analyze(concept)

        synopsis = next(
            f for f in generator.creative_feedback(concept, breakdown)
            if f.category == FeedbackCategory.SYNOPSIS
        )
        assert synopsis.status == FeedbackStatus.WARNING
        assert synopsis.assessment == 'Synopsis could be expanded'


class TestImprovements:
    """Test improvement areas."""

    def test_empty_concept(self, generator, empty_concept):
        """Test all six areas, highest impact first with stable ties."""
        breakdown = LoglineAnalyzer().analyze(empty_concept)
        areas = generator.improvements(empty_concept, breakdown)

        assert [a.category for a in areas] == [
            'Synopsis Required',
            'Central Conflict',
            'Unique Selling Point',
            'Stakes Definition',
            'Market Positioning',
            'Audience Targeting',
        ]
        assert [a.impact_level for a in areas] == [10, 9, 9, 8, 6, 5]

    def test_complete_concept(self, generator, full_concept):
        """Test declared metadata removes the metadata areas."""
        breakdown = LoglineAnalyzer().analyze(full_concept)
        categories = [a.category for a in generator.improvements(full_concept, breakdown)]

        assert 'Market Positioning' not in categories
        assert 'Audience Targeting' not in categories
        assert 'Synopsis Required' not in categories


class TestStrengths:
    """Test selling points."""

    def test_hot_open_genre(self, generator, catalog):
        """Test a growing, unsaturated genre yields market strengths."""
        concept = Concept(logline="A nurse", genre="Horror")
        market = MarketAnalyzer(catalog).analyze("Horror")
        strengths = generator.strengths(concept, LoglineAnalyzer().analyze(concept), market)

        assert [s.category for s in strengths] == ['Market Timing', 'Market Opportunity']
        assert strengths[0].description == 'Horror is trending up 18.5% year-over-year'

    def test_series_and_comparables(self, generator, catalog, full_concept):
        """Test format synergy and comparables strengths."""
        market = MarketAnalyzer(catalog).analyze(full_concept.genre)
        categories = [
            s.category for s in
            generator.strengths(full_concept, LoglineAnalyzer().analyze(full_concept), market)
        ]

        assert 'Format-Genre Synergy' in categories
        assert 'Pitch Positioning' in categories


class TestMarketInsights:
    """Test market positioning insights."""

    def test_series_platforms(self, catalog, full_concept):
        """Test series go to streamers."""
        market = MarketAnalyzer(catalog).analyze(full_concept.genre)
        insights = InsightsGenerator(catalog).market_insights(full_concept, market)

        assert insights.platform_fit == 'Netflix'
        assert 'HBO Max' in insights.recommended_platforms
        assert insights.genre_trend == 'Thriller market expanding'

    def test_theatrical_genre(self, catalog):
        """Test horror features lead with theatrical."""
        concept = Concept(genre="Horror", budget_tier="Micro ($1-5M)")
        insights = InsightsGenerator(catalog).market_insights(concept, MarketAnalyzer(catalog).analyze("Horror"))

        assert insights.platform_fit == 'Theatrical'
        assert insights.budget_recommendation == (
            'Genre average: $12M. Your target: Micro ($1-5M). '
            'Lower budgets in this genre see excellent ROI (5.8x average).'
        )
        assert insights.competitive_position.startswith('Favorable')

    def test_contracting_genre(self, catalog):
        """Test a shrinking genre reports its decline as a positive percent."""
        concept = Concept(genre="Comedy")
        insights = InsightsGenerator(catalog).market_insights(concept, MarketAnalyzer(catalog).analyze("Comedy"))

        assert insights.genre_trend == 'Comedy market contracting'
        assert insights.genre_trend_percent == 4.2
        assert not insights.genre_trend_up

    def test_unknown_genre(self, catalog):
        """Test unknown genres get generic budget and audience advice."""
        concept = Concept(genre="Western")
        insights = InsightsGenerator(catalog).market_insights(concept, MarketAnalyzer(catalog).analyze("Western"))

        assert insights.budget_recommendation == 'Consider budget-to-market fit for your genre/format combination.'
        assert insights.target_demographic == 'General audience 18-49'
        assert insights.script_sale_ranges


class TestDifferentiationTips:
    """Test differentiation advice."""

    def _title(self, similarity):
        return ComparableTitle(
            title="Longlegs",
            year=2024,
            platform="Neon",
            box_office_millions=74,
            rt_score=86,
            concept_similarity=similarity,
            differentiator="",
        )

    def test_default_tips(self, catalog):
        """Test genres without specific tips get the defaults."""
        tips = InsightsGenerator(catalog).differentiation_tips(Concept(genre="Fantasy"), [])

        assert tips == DEFAULT_TIPS

    def test_close_comparable_warning(self, catalog):
        """Test a very similar title adds a warning."""
        tips = InsightsGenerator(catalog).differentiation_tips(Concept(genre="Horror"), [self._title(72)])

        assert len(tips) == 4
        assert tips[3].startswith('Your concept shares elements with "Longlegs"')

    def test_distant_comparable_no_warning(self, catalog):
        """Test a loosely similar title adds nothing."""
        tips = InsightsGenerator(catalog).differentiation_tips(Concept(genre="Horror"), [self._title(60)])

        assert len(tips) == 3

    def test_series_tips_capped(self, catalog, full_concept):
        """Test series tips are added and the list capped at five."""
        tips = InsightsGenerator(catalog).differentiation_tips(full_concept, [self._title(80)])

        assert len(tips) == 5
        assert tips[4] == SERIES_TIPS[0]
