"""
SEO content analyzer.

Scores pasted articles for readability, keyword diversity, and heading
structure, and suggests improvements.

Usage::

    from seo_analyzer import analyze_text

    report = analyze_text("# Title\\n\\nSome content.")
    print(report.overall_score, report.suggestions.structure)
"""

from seo_analyzer.scoring import TextScorer, analyze_text
from seo_analyzer.types import AnalysisReport

__version__ = "1.0.0"

__all__ = ["AnalysisReport", "TextScorer", "analyze_text", "__version__"]
