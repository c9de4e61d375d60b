"""Tests for market bonus, concept evaluation and score synthesis."""

import pytest

from greenlight.analysis import MarketAnalyzer, SynopsisFormatEvaluator, ScoreSynthesizer, Verdict
from greenlight.analysis.rules import round_half_up, clamp
from greenlight.models import Concept, GenreMarketData, Saturation


class FixedJitter:
    """Random stand-in returning one fixed jitter value."""

    def __init__(self, value: int = 0):
        self.value = value
        self.calls = 0

    def randint(self, low, high):
        self.calls += 1
        assert low <= self.value <= high
        return self.value


STRONG_SYNOPSIS = (
    "The protagonist reaches a climax. The theme explores loss. " + " ".join(["word"] * 200)
)


class TestRuleHelpers:
    """Test numeric helpers."""

    def test_round_half_up(self):
        """Test halves round away from zero."""
        assert round_half_up(2.5) == 3
        assert round_half_up(7.5) == 8
        assert round_half_up(-2.5) == -3
        assert round_half_up(4.49) == 4

    def test_clamp(self):
        """Test values are bounded."""
        assert clamp(120, 0, 100) == 100
        assert clamp(-5, 0, 100) == 0
        assert clamp(50, 0, 100) == 50


class TestMarketAnalyzer:
    """Test genre market bonuses."""

    @pytest.mark.parametrize("genre,bonus", [
        ("Thriller", 10),
        ("Horror", 15),
        ("Romance", 15),
        ("Sci-Fi", 8),
        ("Comedy", -2),
        ("Drama", 1),
    ])
    def test_genre_bonus(self, catalog, genre, bonus):
        """Test bonuses derived from the bundled statistics."""
        assert MarketAnalyzer(catalog).analyze(genre).genre_bonus == bonus

    def test_unknown_genre_uses_drama(self, catalog):
        """Test unknown genres report the Drama market."""
        analysis = MarketAnalyzer(catalog).analyze("Western")

        assert analysis.genre == "Drama"
        assert analysis.genre_bonus == 1

    def test_shrinking_crowded_genre(self):
        """Test penalties for a shrinking, saturated, low-demand genre."""
        data = GenreMarketData(
            genre="Test",
            box_office_revenue=0.1,
            market_share=1,
            growth_rate=-10,
            is_growing=False,
            saturation_level=Saturation.HIGH,
            streaming_demand=40,
            market_outlook="bearish",
            average_budget=10,
            avg_roi=1.0,
        )

        # -3 shrinking, -3 saturation, demand clamped at -3, no ROI bonus
        assert MarketAnalyzer.genre_bonus(data) == -9

    def test_analysis_fields(self, catalog):
        """Test the analysis carries the genre statistics."""
        analysis = MarketAnalyzer(catalog).analyze("Horror")

        assert analysis.is_growing
        assert analysis.growth_rate == 18.5
        assert analysis.saturation_level == Saturation.LOW
        assert analysis.current_trends
        assert analysis.to_dict()['saturation_level'] == 'low'


class TestSynopsisQuality:
    """Test synopsis depth scoring."""

    def test_empty(self):
        """Test an empty synopsis scores zero."""
        assert SynopsisFormatEvaluator().synopsis_quality("") == 0

    @pytest.mark.parametrize("count,expected", [(10, 1), (60, 2), (120, 4), (250, 5)])
    def test_length_bands(self, count, expected):
        """Test length bands without structural language."""
        synopsis = " ".join(["word"] * count)
        assert SynopsisFormatEvaluator().synopsis_quality(synopsis) == expected

    def test_structure_character_theme(self):
        """Test craft language reaches the maximum."""
        assert SynopsisFormatEvaluator().synopsis_quality(STRONG_SYNOPSIS) == 10


class TestFormatFit:
    """Test format and genre synergy."""

    def test_synergy_clamped(self):
        """Test a serialized thriller limited series clamps at 8."""
        concept = Concept(genre="Thriller", format="Limited Series", series_structure="Serialized")
        assert SynopsisFormatEvaluator().format_fit(concept) == 8

    def test_base_only(self):
        """Test a format without genre synergy scores the base."""
        assert SynopsisFormatEvaluator().format_fit(Concept(genre="Drama", format="Feature Film")) == 4

    def test_feature_synergy(self):
        """Test horror features get the synergy bonus."""
        assert SynopsisFormatEvaluator().format_fit(Concept(genre="Horror", format="Feature Film")) == 8

    def test_series_structure(self):
        """Test a declared structure counts only for series."""
        evaluator = SynopsisFormatEvaluator()

        assert evaluator.format_fit(
            Concept(genre="Comedy", format="Limited Series", series_structure="Episodic")
        ) == 6
        assert evaluator.format_fit(
            Concept(genre="Thriller", format="Feature Film", series_structure="Serialized")
        ) == 4


class TestAdvancedOptions:
    """Test optional metadata scoring."""

    def test_all_declared(self, full_concept):
        """Test every advanced option without prestige."""
        assert SynopsisFormatEvaluator().advanced_options_bonus(full_concept) == 8.5

    def test_prestige(self):
        """Test prestige audiences earn a bonus."""
        concept = Concept(target_audience="Prestige Drama Fans")
        assert SynopsisFormatEvaluator().advanced_options_bonus(concept) == 3.0

    def test_none_declared(self):
        """Test a bare concept scores zero."""
        assert SynopsisFormatEvaluator().advanced_options_bonus(Concept()) == 0

    def test_comparables(self):
        """Test comparables score 2, 2 and 1 by position."""
        evaluator = SynopsisFormatEvaluator()

        assert evaluator.comparables_bonus(Concept(comparable1="Heat", comparable3="Ronin")) == 3
        assert evaluator.comparables_bonus(Concept(comparable1="A", comparable2="B", comparable3="C")) == 5


class TestScoreSynthesizer:
    """Test final score synthesis."""

    def test_formula(self):
        """Test components add up in formula order and round half up."""
        concept = Concept(genre="Horror", format="Feature Film", tone="Dark", comparable1="X", comparable2="Y")
        components = ScoreSynthesizer().synthesize(concept, 60, 15, FixedJitter(1))

        assert components.logline_points == 30
        assert components.synopsis_quality == 0
        assert components.format_fit == 8
        assert components.advanced_options == 1.5
        assert components.comparables == 4
        assert components.jitter == 1
        assert components.raw_score == 59.5
        assert components.final_score == 60

    def test_lower_clamp(self):
        """Test weak concepts clamp at 25."""
        components = ScoreSynthesizer().synthesize(Concept(), 3, 1, FixedJitter(0))

        assert components.raw_score == 6.5
        assert components.final_score == 25

    def test_upper_clamp(self):
        """Test exceptional concepts clamp at 98."""
        concept = Concept(
            synopsis=STRONG_SYNOPSIS,
            genre="Horror",
            format="Limited Series",
            series_structure="Serialized",
            secondary_genre="Comedy",
            tone="Dread",
            target_audience="Prestige Horror",
            budget_tier="Low ($5-20M)",
            setting_period="Period",
            protagonist_type="Ensemble",
            comparable1="A",
            comparable2="B",
            comparable3="C",
        )
        components = ScoreSynthesizer().synthesize(concept, 100, 15, FixedJitter(2))

        assert components.raw_score == 100
        assert components.final_score == 98

    def test_single_jitter_draw(self, thriller_concept):
        """Test exactly one random draw per synthesis."""
        rng = FixedJitter(-2)
        ScoreSynthesizer().synthesize(thriller_concept, 22, 10, rng)

        assert rng.calls == 1


class TestVerdict:
    """Test verdict bands."""

    @pytest.mark.parametrize("score,verdict", [
        (98, Verdict.STUDIO_PRIORITY),
        (90, Verdict.STUDIO_PRIORITY),
        (89, Verdict.STRONG_GREENLIGHT),
        (80, Verdict.STRONG_GREENLIGHT),
        (79, Verdict.ACTIVE_DEVELOPMENT),
        (70, Verdict.ACTIVE_DEVELOPMENT),
        (69, Verdict.DEVELOPMENT_PASS),
        (55, Verdict.DEVELOPMENT_PASS),
        (54, Verdict.MAJOR_REVISION),
        (25, Verdict.MAJOR_REVISION),
    ])
    def test_bands(self, score, verdict):
        """Test each band boundary."""
        assert ScoreSynthesizer.verdict(score) == verdict

    def test_verdict_details(self):
        """Test verdict text and keys."""
        verdict = Verdict.for_score(85)

        assert verdict.value == "Strong Greenlight Potential"
        assert verdict.key == "strong_greenlight"
        assert verdict.score_range == "80-89"
        assert verdict.next_steps
