"""Tests for the full analysis pipeline."""

import pytest

from greenlight.analysis import ConceptAnalyzer, Verdict
from greenlight.config import Settings, constants
from greenlight.models import Concept


class TestConceptAnalyzer:
    """Test ConceptAnalyzer."""

    def test_same_seed_same_result(self, analyzer, full_concept):
        """Test a fixed seed reproduces the analysis."""
        first = analyzer.analyze(full_concept, seed=42).to_dict()
        second = analyzer.analyze(full_concept, seed=42).to_dict()

        first.pop('analysis_timestamp')
        second.pop('analysis_timestamp')
        assert first == second

    def test_seed_recorded(self, analyzer, thriller_concept):
        """Test the seed used is kept on the result."""
        assert analyzer.analyze(thriller_concept, seed=7).seed == 7

    def test_settings_seed_default(self, catalog, temp_dir, thriller_concept):
        """Test settings.random_seed applies when no seed is passed."""
        settings = Settings(history_dir=temp_dir, random_seed=5)
        analyzer = ConceptAnalyzer(catalog=catalog, settings=settings)

        result = analyzer.analyze(thriller_concept)

        assert result.seed == 5
        assert result.greenlight_score == analyzer.analyze(thriller_concept, seed=5).greenlight_score

    def test_jitter_is_only_variation(self, analyzer, full_concept):
        """Test scores across seeds differ by at most the jitter range."""
        scores = {analyzer.analyze(full_concept, seed=seed).greenlight_score for seed in range(30)}

        low, high = constants.SCORE_JITTER
        assert max(scores) - min(scores) <= high - low

    def test_result_consistency(self, analyzer, full_concept):
        """Test score, verdict and components agree."""
        result = analyzer.analyze(full_concept, seed=1)

        assert constants.MIN_SCORE <= result.greenlight_score <= constants.MAX_SCORE
        assert result.verdict == Verdict.for_score(result.greenlight_score)
        assert result.score_components.final_score == result.greenlight_score
        assert result.score_components.genre_bonus == result.market_analysis.genre_bonus
        assert result.concept is full_concept

    @pytest.mark.parametrize("concept", [
        Concept(),
        Concept(logline="", genre="Western", format="Radio Play"),
        Concept(logline="x " * 300, genre="sci fi", format="Ongoing Series"),
    ])
    def test_never_raises(self, analyzer, concept):
        """Test degenerate concepts still produce a bounded score."""
        result = analyzer.analyze(concept, seed=3)

        assert constants.MIN_SCORE <= result.greenlight_score <= constants.MAX_SCORE
        assert len(result.top_buyers) <= constants.MAX_MATCHES
        assert len(result.differentiation_tips) <= constants.MAX_DIFFERENTIATION_TIPS

    def test_unknown_genre_fallbacks(self, analyzer):
        """Test unknown genres use Drama market data and Thriller titles."""
        result = analyzer.analyze(Concept(logline="A cowboy rides", genre="Western"), seed=2)

        assert result.market_analysis.genre == "Drama"
        assert len(result.similar_titles) == 3

    def test_to_dict(self, analyzer, thriller_concept):
        """Test the serialized result."""
        data = analyzer.analyze(thriller_concept, seed=9).to_dict()

        assert data['project_title'] == "Disgraced Agent"
        assert data['logline_breakdown']['total_logline_score'] == 22
        assert data['concept']['genre'] == "Thriller"
        assert data['score_components']['final_score'] == data['greenlight_score']
        assert data['seed'] == 9

    @pytest.mark.asyncio
    async def test_analyze_with_delay(self, analyzer, thriller_concept):
        """Test the async wrapper returns the same analysis."""
        result = await analyzer.analyze_with_delay(thriller_concept, delay=0, seed=4)

        assert result.greenlight_score == analyzer.analyze(thriller_concept, seed=4).greenlight_score
