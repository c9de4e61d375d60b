"""Tests for weakness-to-strength fixes."""

import pytest

from greenlight.analysis import ImprovementArea
from greenlight.development import WeaknessFixBuilder
from greenlight.development.fixes import fix_for_area, DEFAULT_GUIDE, GUIDES
from greenlight.models import Concept


def area(category, impact):
    return ImprovementArea(
        category=category,
        issue="An issue",
        suggestion="A suggestion",
        example="An example",
        impact_level=impact,
    )


class TestFixForArea:
    """Test conversion of improvement areas."""

    @pytest.mark.parametrize("impact,priority", [(10, 1), (9, 1), (8, 2), (6, 4), (5, 5), (2, 5)])
    def test_priority_from_impact(self, impact, priority):
        """Test priority is 10 - impact clamped to 1..5."""
        assert fix_for_area(area('Market Positioning', impact)).priority_level == priority

    def test_fields_carried_over(self):
        """Test issue, suggestion and gain come from the area."""
        fix = fix_for_area(area('Stakes Definition', 8))

        assert fix.weakness_category == 'Stakes Definition'
        assert fix.current_issue == "An issue"
        assert fix.actionable_fix == "A suggestion"
        assert fix.potential_score_increase == 8
        assert fix.step_by_step_guide == GUIDES['Stakes']

    def test_unknown_category_defaults(self):
        """Test categories without examples use the generic text."""
        fix = fix_for_area(area('Synopsis Required', 10))

        assert fix.step_by_step_guide == DEFAULT_GUIDE
        assert fix.example_before == 'Generic description without specifics.'


class TestWeaknessFixBuilder:
    """Test fix collection."""

    def test_empty_concept(self, analyzer):
        """Test an empty concept gets six top-priority fixes, synopsis first."""
        result = analyzer.analyze(Concept(logline=""), seed=1)
        fixes = WeaknessFixBuilder().build(result)

        assert len(fixes) == 6
        assert all(f.priority_level == 1 for f in fixes)
        assert fixes[0].weakness_category == 'Synopsis Required'
        assert fixes[0].potential_score_increase == 10
        assert [f.weakness_category for f in fixes] == [
            'Synopsis Required',
            'Central Conflict',
            'Unique Selling Point',
            'Protagonist',
            'Central Conflict',
            'Unique Hook',
        ]

    def test_sorted_by_priority(self, analyzer, thriller_concept):
        """Test fixes are ordered most urgent first."""
        fixes = WeaknessFixBuilder().build(analyzer.analyze(thriller_concept, seed=1))

        priorities = [f.priority_level for f in fixes]
        assert priorities == sorted(priorities)
        assert len(fixes) <= 6

    def test_to_dict(self, analyzer, thriller_concept):
        """Test serialized fixes."""
        fix = WeaknessFixBuilder().build(analyzer.analyze(thriller_concept, seed=1))[0]

        data = fix.to_dict()
        assert set(data) == {
            'weakness_category', 'current_issue', 'actionable_fix', 'example_before',
            'example_after', 'step_by_step_guide', 'priority_level', 'potential_score_increase',
        }
