"""
Type definitions for the text analysis system.

This module defines the result types produced when pasted content is
scored for readability, keyword diversity, and heading structure.
"""

from enum import Enum
from typing import List

from pydantic import BaseModel, Field


class ScoreLevel(str, Enum):
    """Score classification levels."""

    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


class SuggestionCategory(str, Enum):
    """Categories that improvement suggestions are grouped under."""

    READABILITY = "readability"
    KEYWORDS = "keywords"
    STRUCTURE = "structure"
    GENERAL = "general"


class KeywordResult(BaseModel):
    """Keyword diversity analysis results."""

    score: float = Field(..., ge=0, le=100, description="Keyword diversity score")
    keywords: List[str] = Field(
        default_factory=list,
        max_length=5,
        description="Most frequent qualifying tokens, most frequent first"
    )


class HeadingResult(BaseModel):
    """Heading structure analysis results."""

    score: int = Field(..., ge=0, le=100, description="Structure score (0, 50 or 100)")
    has_top_level: bool = Field(
        default=False,
        description="Whether the content has an H1 / '# ' heading"
    )
    has_sub: bool = Field(
        default=False,
        description="Whether the content has H2-H6 / '## ' headings"
    )


class SuggestionSet(BaseModel):
    """Improvement suggestions grouped by category."""

    readability: List[str] = Field(default_factory=list)
    keywords: List[str] = Field(default_factory=list)
    structure: List[str] = Field(default_factory=list)
    general: List[str] = Field(default_factory=list)

    def for_category(self, category: SuggestionCategory) -> List[str]:
        """Return the suggestions for a single category."""
        return getattr(self, SuggestionCategory(category).value)


class ReadabilityReport(BaseModel):
    """Readability score with its classification."""

    score: float = Field(..., ge=0, le=100, description="Readability score")
    level: ScoreLevel = Field(..., description="Score classification")


class AnalysisReport(BaseModel):
    """Complete analysis result for a piece of content."""

    overall_score: int = Field(
        ...,
        ge=0,
        le=100,
        description="Rounded mean of readability, keyword and structure scores"
    )
    overall_level: ScoreLevel = Field(..., description="Overall classification")
    word_count: int = Field(..., ge=0, description="Total word count")
    readability: ReadabilityReport = Field(..., description="Readability analysis")
    keywords: KeywordResult = Field(..., description="Keyword analysis")
    keyword_level: ScoreLevel = Field(..., description="Keyword score classification")
    headings: HeadingResult = Field(..., description="Heading structure analysis")
    structure_level: ScoreLevel = Field(..., description="Structure score classification")
    suggestions: SuggestionSet = Field(
        default_factory=SuggestionSet,
        description="Improvement suggestions by category"
    )


class AnalysisRequest(BaseModel):
    """Request to analyze content."""

    content: str = Field(..., min_length=1, description="Content to analyze")
