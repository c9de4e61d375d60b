"""Concept scoring, matching and feedback."""

from .base import (
    AnalysisResult,
    LoglineScoreBreakdown,
    GenreMarketAnalysis,
    ScoreComponents,
    SimilarityAssessment,
    BuyerMatch,
    ProducerMatch,
    ComparableTitle,
    CreativeFeedback,
    StrengthPoint,
    ImprovementArea,
    MarketInsights,
    RiskTier,
    Verdict,
    FeedbackCategory,
    FeedbackStatus,
)
from .logline import LoglineAnalyzer
from .market import MarketAnalyzer
from .evaluator import SynopsisFormatEvaluator
from .scoring import ScoreSynthesizer
from .similarity import SimilarityAssessor
from .matching import MatchingEngine
from .feedback import FeedbackGenerator
from .insights import InsightsGenerator
from .engine import ConceptAnalyzer

__all__ = [
    'AnalysisResult',
    'LoglineScoreBreakdown',
    'GenreMarketAnalysis',
    'ScoreComponents',
    'SimilarityAssessment',
    'BuyerMatch',
    'ProducerMatch',
    'ComparableTitle',
    'CreativeFeedback',
    'StrengthPoint',
    'ImprovementArea',
    'MarketInsights',
    'RiskTier',
    'Verdict',
    'FeedbackCategory',
    'FeedbackStatus',
    'LoglineAnalyzer',
    'MarketAnalyzer',
    'SynopsisFormatEvaluator',
    'ScoreSynthesizer',
    'SimilarityAssessor',
    'MatchingEngine',
    'FeedbackGenerator',
    'InsightsGenerator',
    'ConceptAnalyzer',
]
