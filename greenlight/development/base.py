"""Result types for concept development: rewrites, fixes, comparisons, scenarios."""

from enum import Enum
from dataclasses import dataclass, field
from typing import Dict, Any, List, Optional

from ..analysis import AnalysisResult


class Winner(str, Enum):
    """Outcome of comparing two versions on one dimension."""
    A = "A"
    B = "B"
    TIE = "Tie"

    @classmethod
    def by_higher(cls, a: float, b: float) -> "Winner":
        """Side with the larger value, Tie when equal."""
        if a > b:
            return cls.A
        if b > a:
            return cls.B
        return cls.TIE


class ScenarioType(str, Enum):
    """The single concept field a what-if scenario changes."""
    GENRE = "genre"
    FORMAT = "format"
    BUDGET = "budget"
    AUDIENCE = "audience"


@dataclass(frozen=True)
class LoglineRewriteSuggestion:
    """A rewritten logline aimed at one weak dimension."""
    original_logline: str
    suggested_logline: str
    improvement_reason: str
    changes_highlighted: List[str]
    estimated_score_boost: int
    focus_area: str  # protagonist, conflict, stakes, hook, clarity, comprehensive

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'original_logline': self.original_logline,
            'suggested_logline': self.suggested_logline,
            'improvement_reason': self.improvement_reason,
            'changes_highlighted': list(self.changes_highlighted),
            'estimated_score_boost': self.estimated_score_boost,
            'focus_area': self.focus_area
        }


@dataclass(frozen=True)
class WeaknessFix:
    """Step-by-step plan for turning a weakness into a strength."""
    weakness_category: str
    current_issue: str
    actionable_fix: str
    example_before: str
    example_after: str
    step_by_step_guide: List[str]
    priority_level: int  # 1-5, 1 = fix first
    potential_score_increase: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'weakness_category': self.weakness_category,
            'current_issue': self.current_issue,
            'actionable_fix': self.actionable_fix,
            'example_before': self.example_before,
            'example_after': self.example_after,
            'step_by_step_guide': list(self.step_by_step_guide),
            'priority_level': self.priority_level,
            'potential_score_increase': self.potential_score_increase
        }


@dataclass(frozen=True)
class ComparisonPoint:
    """One dimension of an A/B comparison."""
    category: str
    version_a_value: str
    version_b_value: str
    winner: Winner
    analysis: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'category': self.category,
            'version_a_value': self.version_a_value,
            'version_b_value': self.version_b_value,
            'winner': self.winner.value,
            'analysis': self.analysis
        }


@dataclass(frozen=True)
class ABComparisonResult:
    """Side-by-side comparison of two analyzed concept versions."""
    version_a: AnalysisResult
    version_b: AnalysisResult
    winner: Winner
    score_difference: int  # |score_a - score_b|
    comparison_points: List[ComparisonPoint] = field(default_factory=list)
    recommendation: str = ""
    version_a_advantages: List[str] = field(default_factory=list)
    version_b_advantages: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'version_a': self.version_a.to_dict(),
            'version_b': self.version_b.to_dict(),
            'winner': self.winner.value,
            'score_difference': self.score_difference,
            'comparison_points': [p.to_dict() for p in self.comparison_points],
            'recommendation': self.recommendation,
            'version_a_advantages': list(self.version_a_advantages),
            'version_b_advantages': list(self.version_b_advantages)
        }


@dataclass(frozen=True)
class WhatIfScenario:
    """Score impact of changing one concept field."""
    scenario_type: ScenarioType
    current_value: str
    hypothetical_value: str
    current_score: int
    projected_score: int
    score_delta: int
    impact_analysis: List[str]
    pros: List[str]
    cons: List[str]
    recommendation: str
    projected_result: Optional[AnalysisResult] = None

    @property
    def is_improvement(self) -> bool:
        return self.score_delta > 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary (projected result omitted)."""
        return {
            'scenario_type': self.scenario_type.value,
            'current_value': self.current_value,
            'hypothetical_value': self.hypothetical_value,
            'current_score': self.current_score,
            'projected_score': self.projected_score,
            'score_delta': self.score_delta,
            'impact_analysis': list(self.impact_analysis),
            'pros': list(self.pros),
            'cons': list(self.cons),
            'recommendation': self.recommendation
        }
