"""
Content analysis endpoints.

Provides API endpoints for:
- Full analysis (scores, levels, word count, suggestions)
- Individual readability, keyword, heading and suggestion checks
"""

import logging

from fastapi import APIRouter, Depends

from seo_analyzer.scoring import TextScorer
from seo_analyzer.types.analysis import (
    AnalysisReport,
    AnalysisRequest,
    HeadingResult,
    KeywordResult,
    ReadabilityReport,
    SuggestionSet,
)
from seo_analyzer.utils.logging import Timer

from ..dependencies import get_text_scorer
from ..exceptions import ErrorCode, ValidationError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analyze", tags=["analysis"])


def _require_analyzable(request: AnalysisRequest, scorer: TextScorer) -> str:
    """
    Return the request content if it can be analyzed.

    Raises:
        ValidationError: If the content is blank or longer than allowed.
    """
    content = request.content
    if scorer.word_count(content) == 0:
        raise ValidationError(
            message="Content must not be blank",
            field="content",
        )
    if not scorer.accepts(content):
        raise ValidationError(
            message=f"Content exceeds the maximum length of {scorer.max_content_length} characters",
            field="content",
            error_code=ErrorCode.VALUE_OUT_OF_RANGE,
            details={"limit": scorer.max_content_length},
            internal_message=f"content length {len(content)}",
        )
    return content


@router.post(
    "",
    response_model=AnalysisReport,
    summary="Analyze content",
    description="""
Score pasted content and return improvement suggestions.

Returns:
- Overall score (rounded mean of the three component scores)
- Readability score (sentence and word length)
- Keyword diversity score and the five most frequent keywords
- Heading structure score
- Word count
- Suggestions grouped by readability, keywords, structure and general
    """,
)
async def analyze_content(
    request: AnalysisRequest,
    scorer: TextScorer = Depends(get_text_scorer),
) -> AnalysisReport:
    """Run the full analysis."""
    content = _require_analyzable(request, scorer)

    with Timer("analyze_content", logger):
        report = scorer.analyze(content)

    logger.info(
        f"Analyzed {report.word_count} words, overall score {report.overall_score}",
        extra={
            "word_count": report.word_count,
            "overall_score": report.overall_score,
        },
    )
    return report


@router.post("/readability", response_model=ReadabilityReport)
async def analyze_readability(
    request: AnalysisRequest,
    scorer: TextScorer = Depends(get_text_scorer),
) -> ReadabilityReport:
    """Score only readability."""
    return scorer.readability(_require_analyzable(request, scorer))


@router.post("/keywords", response_model=KeywordResult)
async def analyze_keywords(
    request: AnalysisRequest,
    scorer: TextScorer = Depends(get_text_scorer),
) -> KeywordResult:
    """Score keyword diversity and list the top keywords."""
    return scorer.keywords(_require_analyzable(request, scorer))


@router.post("/headings", response_model=HeadingResult)
async def analyze_headings(
    request: AnalysisRequest,
    scorer: TextScorer = Depends(get_text_scorer),
) -> HeadingResult:
    """Check for top-level and sub-level headings."""
    return scorer.headings(_require_analyzable(request, scorer))


@router.post("/suggestions", response_model=SuggestionSet)
async def analyze_suggestions(
    request: AnalysisRequest,
    scorer: TextScorer = Depends(get_text_scorer),
) -> SuggestionSet:
    """Build improvement suggestions only."""
    return scorer.suggestions(_require_analyzable(request, scorer))
