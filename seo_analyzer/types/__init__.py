"""
Type definitions for the SEO content analyzer.
"""

from .analysis import (
    AnalysisReport,
    AnalysisRequest,
    HeadingResult,
    KeywordResult,
    ReadabilityReport,
    ScoreLevel,
    SuggestionCategory,
    SuggestionSet,
)

__all__ = [
    "AnalysisReport",
    "AnalysisRequest",
    "HeadingResult",
    "KeywordResult",
    "ReadabilityReport",
    "ScoreLevel",
    "SuggestionCategory",
    "SuggestionSet",
]
