"""
Text scoring module.

This module provides the heuristics used to evaluate pasted content
across readability, keyword diversity, and heading structure.
"""

from .text_scorer import (
    ALL_CLEAR_MESSAGES,
    TextScorer,
    analyze_text,
    build_suggestions,
    compute_headings,
    compute_keywords,
    compute_overall_score,
    compute_readability,
    compute_word_count,
    get_score_level,
)

__all__ = [
    "ALL_CLEAR_MESSAGES",
    "TextScorer",
    "analyze_text",
    "build_suggestions",
    "compute_headings",
    "compute_keywords",
    "compute_overall_score",
    "compute_readability",
    "compute_word_count",
    "get_score_level",
]
