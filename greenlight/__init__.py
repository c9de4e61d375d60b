"""GreenlightIQ - commercial viability scoring for screenwriting concepts."""

__version__ = "1.0.0"
__author__ = "GreenlightIQ"

from .models import Concept, ConceptVersion
from .analysis import ConceptAnalyzer, AnalysisResult
from .catalog import CatalogProvider
from .development import ConceptDevelopmentService

__all__ = [
    '__version__',
    'Concept',
    'ConceptVersion',
    'ConceptAnalyzer',
    'AnalysisResult',
    'CatalogProvider',
    'ConceptDevelopmentService',
]
