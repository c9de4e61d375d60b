"""Result types shared by the analysis components."""

from datetime import datetime, timezone
from typing import Dict, Any, List, Optional
from enum import Enum
from dataclasses import dataclass, field

from ..models import Concept, Saturation


class RiskTier(str, Enum):
    """Similarity risk tiers, ordered LOW < MODERATE < HIGH."""
    LOW = "LOW"
    MODERATE = "MODERATE"
    HIGH = "HIGH"

    @property
    def rank(self) -> int:
        """Ordinal used when comparing tiers."""
        return _RISK_RANKS[self]


_RISK_RANKS = {RiskTier.LOW: 0, RiskTier.MODERATE: 1, RiskTier.HIGH: 2}


class Verdict(str, Enum):
    """Verdict tiers, one per contiguous score band."""
    STUDIO_PRIORITY = "Studio Priority Package"
    STRONG_GREENLIGHT = "Strong Greenlight Potential"
    ACTIVE_DEVELOPMENT = "Active Development Recommended"
    DEVELOPMENT_PASS = "Development Pass - Revision Needed"
    MAJOR_REVISION = "Back to Development"

    @property
    def key(self) -> str:
        """Stable identifier ('studio_priority', ...)."""
        return self.name.lower()

    @property
    def min_score(self) -> int:
        """Lowest score in this verdict's band."""
        return _VERDICT_DETAILS[self]['min_score']

    @property
    def score_range(self) -> str:
        """Band as text, e.g. '80-89'."""
        return _VERDICT_DETAILS[self]['score_range']

    @property
    def description(self) -> str:
        return _VERDICT_DETAILS[self]['description']

    @property
    def next_steps(self) -> str:
        return _VERDICT_DETAILS[self]['next_steps']

    @classmethod
    def for_score(cls, score: int) -> "Verdict":
        """
        Map a final score to its verdict.

        Bands are contiguous and exhaustive: >=90, 80-89, 70-79, 55-69, <55.
        """
        for verdict in cls:
            if score >= verdict.min_score:
                return verdict
        return cls.MAJOR_REVISION


# Ordered from highest band to lowest; for_score relies on this order
_VERDICT_DETAILS = {
    Verdict.STUDIO_PRIORITY: {
        'min_score': 90,
        'score_range': '90-100',
        'description': 'Exceptional market positioning with proven commercial elements. Fast-track for strategic packaging with A-list talent.',
        'next_steps': 'Immediately package with top-tier talent and directors. Multiple buyer interest expected.',
    },
    Verdict.STRONG_GREENLIGHT: {
        'min_score': 80,
        'score_range': '80-89',
        'description': 'Solid fundamentals with favorable market timing. Ready for serious buyer conversations and talent attachments.',
        'next_steps': 'Develop treatment, attach producer or director, begin targeted buyer outreach.',
    },
    Verdict.ACTIVE_DEVELOPMENT: {
        'min_score': 70,
        'score_range': '70-79',
        'description': 'Promising concept with refinement opportunities. Core elements strong but execution needs sharpening.',
        'next_steps': 'Address creative notes, strengthen logline hooks, consider format optimization.',
    },
    Verdict.DEVELOPMENT_PASS: {
        'min_score': 55,
        'score_range': '55-69',
        'description': 'Concept shows potential but competitive positioning weak. Significant strengthening needed before market.',
        'next_steps': 'Revisit core concept, clarify unique angle, improve stakes and character definition.',
    },
    Verdict.MAJOR_REVISION: {
        'min_score': 0,
        'score_range': '0-54',
        'description': 'Fundamental concept issues need addressing. Market viability uncertain without substantial rework.',
        'next_steps': 'Reconsider premise, study successful comparable titles, develop stronger hook.',
    },
}


class FeedbackCategory(str, Enum):
    """Creative feedback categories."""
    PROTAGONIST = "Protagonist"
    CENTRAL_CONFLICT = "Central Conflict"
    STAKES = "Stakes"
    UNIQUE_HOOK = "Unique Hook"
    LOGLINE_LENGTH = "Logline Length"
    SYNOPSIS = "Synopsis"


class FeedbackStatus(str, Enum):
    """How a feedback item reads: on track, needs work, or urgent."""
    POSITIVE = "positive"
    WARNING = "warning"
    CRITICAL = "critical"


@dataclass(frozen=True)
class LoglineScoreBreakdown:
    """Seven clamped logline sub-scores and their diagnostic notes."""
    protagonist: int  # 0-15
    conflict: int  # 0-20
    stakes: int  # 0-15
    unique_hook: int  # 0-20
    genre_clarity: int  # 0-10
    concision: int  # 0-10
    emotional_resonance: int  # 0-10
    notes: Dict[str, str] = field(default_factory=dict)
    word_count: int = 0

    max_possible_score = 100

    @property
    def total_logline_score(self) -> int:
        """Structural sum of the sub-scores (not re-clamped)."""
        return (
            self.protagonist + self.conflict + self.stakes + self.unique_hook +
            self.genre_clarity + self.concision + self.emotional_resonance
        )

    @property
    def percentage_score(self) -> float:
        return self.total_logline_score / self.max_possible_score * 100

    def scores(self) -> Dict[str, int]:
        """Sub-scores keyed by dimension name."""
        return {
            'protagonist': self.protagonist,
            'conflict': self.conflict,
            'stakes': self.stakes,
            'unique_hook': self.unique_hook,
            'genre_clarity': self.genre_clarity,
            'concision': self.concision,
            'emotional_resonance': self.emotional_resonance,
        }

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            **self.scores(),
            'total_logline_score': self.total_logline_score,
            'word_count': self.word_count,
            'notes': dict(self.notes)
        }


@dataclass(frozen=True)
class ScoreComponents:
    """Contributions that add up to the final score, in formula order."""
    logline_points: float  # logline total * 0.5
    genre_bonus: int
    synopsis_quality: float
    format_fit: float
    advanced_options: float
    comparables: int
    jitter: int
    final_score: int  # rounded and clamped

    @property
    def raw_score(self) -> float:
        """Unrounded, unclamped sum."""
        return (
            self.logline_points + self.genre_bonus + self.synopsis_quality +
            self.format_fit + self.advanced_options + self.comparables + self.jitter
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'logline_points': self.logline_points,
            'genre_bonus': self.genre_bonus,
            'synopsis_quality': self.synopsis_quality,
            'format_fit': self.format_fit,
            'advanced_options': self.advanced_options,
            'comparables': self.comparables,
            'jitter': self.jitter,
            'raw_score': self.raw_score,
            'final_score': self.final_score
        }


@dataclass(frozen=True)
class GenreMarketAnalysis:
    """Market position of a genre and the bonus it earns."""
    genre: str
    market_share: float  # percent of box office
    growth_rate: float  # percent year-over-year
    is_growing: bool
    saturation_level: Saturation
    streaming_demand: float  # 0-100 index
    market_outlook: str
    current_trends: List[str] = field(default_factory=list)
    genre_bonus: int = 0  # -10..15
    average_budget: int = 0  # millions USD
    avg_roi: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'genre': self.genre,
            'market_share': self.market_share,
            'growth_rate': self.growth_rate,
            'is_growing': self.is_growing,
            'saturation_level': self.saturation_level.value,
            'streaming_demand': self.streaming_demand,
            'market_outlook': self.market_outlook,
            'current_trends': list(self.current_trends),
            'genre_bonus': self.genre_bonus,
            'average_budget': self.average_budget,
            'avg_roi': self.avg_roi
        }


@dataclass(frozen=True)
class SimilarityAssessment:
    """How derivative or crowded a concept looks."""
    risk: RiskTier
    color: str  # hex display color
    description: str
    risk_score: int = 0
    matched_tropes: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'risk': self.risk.value,
            'color': self.color,
            'description': self.description,
            'risk_score': self.risk_score,
            'matched_tropes': list(self.matched_tropes)
        }


@dataclass(frozen=True)
class BuyerMatch:
    """A buyer ranked against a concept."""
    name: str
    type: str
    match_percent: int  # 50-98
    content_strategy: str
    recent_acquisitions: List[str]
    budget_range: str
    submission_tip: str
    match_reason: str
    accepts_unsolicited: bool

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'name': self.name,
            'type': self.type,
            'match_percent': self.match_percent,
            'content_strategy': self.content_strategy,
            'recent_acquisitions': list(self.recent_acquisitions),
            'budget_range': self.budget_range,
            'submission_tip': self.submission_tip,
            'match_reason': self.match_reason,
            'accepts_unsolicited': self.accepts_unsolicited
        }


@dataclass(frozen=True)
class ProducerMatch:
    """A producer ranked against a concept."""
    name: str
    company: str
    match_percent: int  # 50-98
    specialties: List[str]
    notable_credits: List[str]
    typical_budget: str
    looking_for: str
    accepts_submissions: bool
    match_reason: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'name': self.name,
            'company': self.company,
            'match_percent': self.match_percent,
            'specialties': list(self.specialties),
            'notable_credits': list(self.notable_credits),
            'typical_budget': self.typical_budget,
            'looking_for': self.looking_for,
            'accepts_submissions': self.accepts_submissions,
            'match_reason': self.match_reason
        }


@dataclass(frozen=True)
class ComparableTitle:
    """A released title compared against the concept."""
    title: str
    year: int
    platform: str
    box_office_millions: int  # 0 for streaming-only
    rt_score: float
    concept_similarity: int  # 25-85
    differentiator: str
    shared_elements: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'title': self.title,
            'year': self.year,
            'platform': self.platform,
            'box_office_millions': self.box_office_millions,
            'rt_score': self.rt_score,
            'concept_similarity': self.concept_similarity,
            'differentiator': self.differentiator,
            'shared_elements': list(self.shared_elements)
        }


@dataclass(frozen=True)
class CreativeFeedback:
    """One creative note on the concept."""
    category: FeedbackCategory
    assessment: str
    recommendation: str
    status: FeedbackStatus
    priority: int  # 1-5, 1 = most urgent

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'category': self.category.value,
            'assessment': self.assessment,
            'recommendation': self.recommendation,
            'status': self.status.value,
            'priority': self.priority
        }


@dataclass(frozen=True)
class StrengthPoint:
    """A selling point of the concept."""
    category: str
    description: str
    market_advantage: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'category': self.category,
            'description': self.description,
            'market_advantage': self.market_advantage
        }


@dataclass(frozen=True)
class ImprovementArea:
    """A weakness with a concrete fix."""
    category: str
    issue: str
    suggestion: str
    example: str  # before/after or worked example
    impact_level: int  # 1-10

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'category': self.category,
            'issue': self.issue,
            'suggestion': self.suggestion,
            'example': self.example,
            'impact_level': self.impact_level
        }


@dataclass(frozen=True)
class MarketInsights:
    """Market context for positioning the concept."""
    genre_trend: str
    genre_trend_percent: float
    genre_trend_up: bool
    platform_fit: str
    recommended_platforms: List[str]
    budget_recommendation: str
    target_demographic: str
    timing_advice: str
    market_context: str
    competitive_position: str
    script_sale_ranges: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'genre_trend': self.genre_trend,
            'genre_trend_percent': self.genre_trend_percent,
            'genre_trend_up': self.genre_trend_up,
            'platform_fit': self.platform_fit,
            'recommended_platforms': list(self.recommended_platforms),
            'budget_recommendation': self.budget_recommendation,
            'target_demographic': self.target_demographic,
            'timing_advice': self.timing_advice,
            'market_context': self.market_context,
            'competitive_position': self.competitive_position,
            'script_sale_ranges': dict(self.script_sale_ranges)
        }


@dataclass(frozen=True)
class AnalysisResult:
    """Snapshot of one full concept analysis."""
    greenlight_score: int  # 25-98
    verdict: Verdict
    logline_breakdown: LoglineScoreBreakdown
    market_analysis: GenreMarketAnalysis
    similarity: SimilarityAssessment
    concept: Concept
    top_buyers: List[BuyerMatch] = field(default_factory=list)
    top_producers: List[ProducerMatch] = field(default_factory=list)
    similar_titles: List[ComparableTitle] = field(default_factory=list)
    differentiation_tips: List[str] = field(default_factory=list)
    creative_feedback: List[CreativeFeedback] = field(default_factory=list)
    strengths: List[StrengthPoint] = field(default_factory=list)
    improvement_areas: List[ImprovementArea] = field(default_factory=list)
    market_insights: Optional[MarketInsights] = None
    score_components: Optional[ScoreComponents] = None
    seed: Optional[int] = None  # seed used for jitter, if any
    analysis_timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def verdict_description(self) -> str:
        return self.verdict.description

    @property
    def next_steps(self) -> str:
        return self.verdict.next_steps

    @property
    def verdict_key(self) -> str:
        return self.verdict.key

    @property
    def similarity_risk(self) -> RiskTier:
        return self.similarity.risk

    @property
    def project_title(self) -> str:
        return self.concept.project_title

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'project_title': self.project_title,
            'greenlight_score': self.greenlight_score,
            'verdict': self.verdict.value,
            'verdict_key': self.verdict_key,
            'verdict_description': self.verdict_description,
            'next_steps': self.next_steps,
            'logline_breakdown': self.logline_breakdown.to_dict(),
            'market_analysis': self.market_analysis.to_dict(),
            'similarity': self.similarity.to_dict(),
            'differentiation_tips': list(self.differentiation_tips),
            'top_buyers': [b.to_dict() for b in self.top_buyers],
            'top_producers': [p.to_dict() for p in self.top_producers],
            'similar_titles': [t.to_dict() for t in self.similar_titles],
            'creative_feedback': [f.to_dict() for f in self.creative_feedback],
            'strengths': [s.to_dict() for s in self.strengths],
            'improvement_areas': [i.to_dict() for i in self.improvement_areas],
            'market_insights': self.market_insights.to_dict() if self.market_insights else None,
            'score_components': self.score_components.to_dict() if self.score_components else None,
            'concept': self.concept.to_dict(),
            'seed': self.seed,
            'analysis_timestamp': self.analysis_timestamp.isoformat()
        }
