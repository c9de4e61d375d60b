"""Concept development on top of the analysis pipeline."""

from .base import (
    Winner,
    ScenarioType,
    LoglineRewriteSuggestion,
    WeaknessFix,
    ComparisonPoint,
    ABComparisonResult,
    WhatIfScenario,
)
from .store import VersionStore, InMemoryVersionStore, JsonVersionStore
from .history import VersionHistory, detect_changes, check_sequence
from .rewrites import LoglineRewriter
from .fixes import WeaknessFixBuilder
from .comparison import ABComparator
from .scenarios import WhatIfSimulator
from .service import ConceptDevelopmentService

__all__ = [
    'Winner',
    'ScenarioType',
    'LoglineRewriteSuggestion',
    'WeaknessFix',
    'ComparisonPoint',
    'ABComparisonResult',
    'WhatIfScenario',
    'VersionStore',
    'InMemoryVersionStore',
    'JsonVersionStore',
    'VersionHistory',
    'detect_changes',
    'check_sequence',
    'LoglineRewriter',
    'WeaknessFixBuilder',
    'ABComparator',
    'WhatIfSimulator',
    'ConceptDevelopmentService',
]
