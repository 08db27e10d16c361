"""
Text scoring functionality for pasted articles.

This module provides scoring heuristics for:
- Readability (simplified Flesch-Kincaid proxy)
- Keyword diversity (distinct vs. total qualifying tokens)
- Heading structure (markdown or HTML headings)

Every function accepts any string, including the empty string, and returns
zero-valued results for degenerate input instead of raising.
"""

import logging
import math
import re
from collections import Counter
from typing import Dict, List, Optional

from ..types.analysis import (
    AnalysisReport,
    HeadingResult,
    KeywordResult,
    ReadabilityReport,
    ScoreLevel,
    SuggestionCategory,
    SuggestionSet,
)

logger = logging.getLogger(__name__)


# Readability weights
SENTENCE_LENGTH_WEIGHT = 1.8
WORD_LENGTH_WEIGHT = 8

# Keyword analysis
MAX_KEYWORDS = 5
SUGGESTED_KEYWORDS = 3
DIVERSITY_MULTIPLIER = 150

# Suggestion thresholds
LOW_READABILITY_THRESHOLD = 50
MIN_WORD_COUNT = 300
INTENSIFIERS = ("very", "really")

# Whitespace as browsers define it; narrower than str.isspace(), which
# also covers \x1c-\x1f and \x85.
_WHITESPACE_CHARS = (
    "\t\n\v\f\r \u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"
)
# Line terminators: "^" may follow any of them, and heading text runs
# up to the next one.
_LINE_BREAK_CHARS = "\n\r\u2028\u2029"
_LINE_START = f"(?:^|(?<=[{_LINE_BREAK_CHARS}]))"
_LINE_TEXT = f"[^{_LINE_BREAK_CHARS}]+"

_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")
_WHITESPACE_RE = re.compile(f"[{_WHITESPACE_CHARS}]+")
_WORD_RE = re.compile(f"[^{_WHITESPACE_CHARS}]+")
# ASCII word boundaries, so accented letters end a token.
_TOKEN_RE = re.compile(r"\b[a-z]{3,}\b", re.ASCII)
_TOP_LEVEL_HEADING_RE = re.compile(
    f"{_LINE_START}#[{_WHITESPACE_CHARS}]{_LINE_TEXT}"
    f"|<h1[^>]*>{_LINE_TEXT}</h1>",
    re.IGNORECASE,
)
_SUB_HEADING_RE = re.compile(
    f"{_LINE_START}#{{2,}}[{_WHITESPACE_CHARS}]{_LINE_TEXT}"
    f"|<h[2-6][^>]*>{_LINE_TEXT}</h[2-6]>",
    re.IGNORECASE,
)

# Shown in place of an empty suggestion category
ALL_CLEAR_MESSAGES: Dict[SuggestionCategory, str] = {
    SuggestionCategory.READABILITY: "Great job! Your content is easy to read.",
    SuggestionCategory.KEYWORDS: "Your keyword usage is well-optimized!",
    SuggestionCategory.STRUCTURE: "Your content structure is well-organized!",
}


def _count_sentences(text: str) -> int:
    """
    Count sentences by splitting on runs of terminal punctuation.

    Text without terminal punctuation still counts as one sentence, and a
    trailing terminator adds an empty trailing piece.
    """
    return len(_SENTENCE_SPLIT_RE.split(text))


def _extract_tokens(text: str) -> List[str]:
    """Extract lower-cased alphabetic tokens of three or more letters."""
    return _TOKEN_RE.findall(text.lower())


def get_score_level(score: float) -> ScoreLevel:
    """Convert numeric score to level classification."""
    if score >= 70:
        return ScoreLevel.GOOD
    elif score >= 40:
        return ScoreLevel.FAIR
    else:
        return ScoreLevel.POOR


def compute_word_count(text: str) -> int:
    """Count whitespace-separated words; 0 for blank text."""
    return len(_WORD_RE.findall(text))


def compute_readability(text: str) -> float:
    """
    Score content readability from average sentence and word length.

    Args:
        text: Content to analyze.

    Returns:
        Readability score clamped to 0-100. Long sentences and long words
        lower the score.
    """
    words = compute_word_count(text)
    sentences = _count_sentences(text)
    characters = len(_WHITESPACE_RE.sub("", text))

    if words == 0 or sentences == 0:
        return 0.0

    avg_words_per_sentence = words / sentences
    avg_chars_per_word = characters / words

    score = (
        100
        - avg_words_per_sentence * SENTENCE_LENGTH_WEIGHT
        - avg_chars_per_word * WORD_LENGTH_WEIGHT
    )
    return float(max(0, min(100, score)))


def compute_keywords(text: str) -> KeywordResult:
    """
    Score keyword diversity and pick the most frequent keywords.

    Args:
        text: Content to analyze.

    Returns:
        KeywordResult with a diversity score and up to five keywords, most
        frequent first. Ties keep the order of first appearance.
    """
    tokens = _extract_tokens(text)
    if not tokens:
        return KeywordResult(score=0.0, keywords=[])

    counts = Counter(tokens)
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    keywords = [token for token, _ in ranked[:MAX_KEYWORDS]]

    unique_ratio = len(counts) / len(tokens)
    score = min(100.0, unique_ratio * DIVERSITY_MULTIPLIER)

    return KeywordResult(score=score, keywords=keywords)


def compute_headings(text: str) -> HeadingResult:
    """
    Detect top-level and sub-level headings.

    Markdown headings must start a line; HTML heading tags may appear
    anywhere. Matching is case-insensitive.
    """
    has_top_level = _TOP_LEVEL_HEADING_RE.search(text) is not None
    has_sub = _SUB_HEADING_RE.search(text) is not None

    score = 0
    if has_top_level:
        score += 50
    if has_sub:
        score += 50

    return HeadingResult(score=score, has_top_level=has_top_level, has_sub=has_sub)


def build_suggestions(text: str) -> SuggestionSet:
    """
    Build improvement suggestions for every category.

    All applicable rules fire; none of them exclude each other.

    Args:
        text: Content to analyze.

    Returns:
        SuggestionSet with readability, keyword, structure and general advice.
    """
    word_count = compute_word_count(text)
    readability_score = compute_readability(text)
    keywords = compute_keywords(text).keywords
    headings = compute_headings(text)

    suggestions = SuggestionSet()

    if readability_score < LOW_READABILITY_THRESHOLD:
        suggestions.readability.append("Use shorter sentences to improve readability.")
        suggestions.readability.append("Break up long paragraphs into smaller ones.")
    # Plain substring match, so "every" also counts
    if any(word in text for word in INTENSIFIERS):
        suggestions.readability.append(
            'Replace generic intensifiers like "very" and "really" with more specific words.'
        )

    if len(keywords) < SUGGESTED_KEYWORDS:
        suggestions.keywords.append("Include more relevant keywords throughout your content.")
    else:
        suggestions.keywords.append(
            f"Consider focusing on these keywords: {', '.join(keywords[:SUGGESTED_KEYWORDS])}."
        )

    if not headings.has_top_level:
        suggestions.structure.append("Add a clear H1 title to your content.")
    if not headings.has_sub:
        suggestions.structure.append(
            "Add subheadings (H2, H3) to break up your content and improve structure."
        )

    if word_count < MIN_WORD_COUNT:
        suggestions.general.append(
            "Consider adding more content. Articles with 1000+ words tend to "
            "perform better in search results."
        )
    suggestions.general.append(
        "Include external links to authoritative sources to improve credibility."
    )
    suggestions.general.append("Add internal links to other relevant content on your site.")

    return suggestions


def compute_overall_score(
    readability: float,
    keyword_score: float,
    structure_score: float,
) -> int:
    """
    Calculate the overall score from the three component scores.

    The mean is rounded half-up so that 62.5 becomes 63.
    """
    mean = (readability + keyword_score + structure_score) / 3
    return int(math.floor(mean + 0.5))


def analyze_text(text: str) -> AnalysisReport:
    """
    Run every metric over the content and assemble a report.

    Args:
        text: Content to analyze.

    Returns:
        AnalysisReport with component scores, levels, word count, and
        suggestions.
    """
    readability = compute_readability(text)
    keywords = compute_keywords(text)
    headings = compute_headings(text)
    word_count = compute_word_count(text)
    suggestions = build_suggestions(text)

    overall = compute_overall_score(readability, keywords.score, headings.score)

    logger.debug(
        "Analyzed %d words: readability=%.1f keywords=%.1f structure=%d overall=%d",
        word_count,
        readability,
        keywords.score,
        headings.score,
        overall,
    )

    return AnalysisReport(
        overall_score=overall,
        overall_level=get_score_level(overall),
        word_count=word_count,
        readability=ReadabilityReport(
            score=readability,
            level=get_score_level(readability),
        ),
        keywords=keywords,
        keyword_level=get_score_level(keywords.score),
        headings=headings,
        structure_level=get_score_level(headings.score),
        suggestions=suggestions,
    )


class TextScorer:
    """
    Text scorer class for analyzing pasted content.

    Wraps the module-level scoring functions so callers can hold a scorer
    instance (for example as a FastAPI dependency) and swap it in tests.
    """

    def __init__(self, max_content_length: Optional[int] = None):
        """
        Initialize the text scorer.

        Args:
            max_content_length: Longest content, in characters, that callers
                should accept. None means unlimited.
        """
        self.max_content_length = max_content_length

    def accepts(self, text: str) -> bool:
        """Check whether the content is within the configured length."""
        if self.max_content_length is None:
            return True
        return len(text) <= self.max_content_length

    def analyze(self, text: str) -> AnalysisReport:
        """Score content comprehensively."""
        return analyze_text(text)

    def readability(self, text: str) -> ReadabilityReport:
        """Score only readability."""
        score = compute_readability(text)
        return ReadabilityReport(score=score, level=get_score_level(score))

    def keywords(self, text: str) -> KeywordResult:
        """Score only keyword diversity."""
        return compute_keywords(text)

    def headings(self, text: str) -> HeadingResult:
        """Score only heading structure."""
        return compute_headings(text)

    def word_count(self, text: str) -> int:
        """Count words."""
        return compute_word_count(text)

    def suggestions(self, text: str) -> SuggestionSet:
        """Build suggestions only."""
        return build_suggestions(text)
