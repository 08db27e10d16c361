"""
Command-line interface for the SEO content analyzer.

Scores a file (or stdin) and prints a report:

    seo-analyzer article.md
    cat article.md | seo-analyzer --json
"""

import argparse
import logging
import sys
from typing import List, Optional, TextIO

from seo_analyzer.scoring import ALL_CLEAR_MESSAGES, analyze_text, compute_word_count
from seo_analyzer.types.analysis import AnalysisReport, SuggestionCategory
from seo_analyzer.utils.logging import Timer, setup_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_BLANK_INPUT = 1


def _read_input(path: Optional[str], stdin: TextIO) -> str:
    if path is None or path == "-":
        return stdin.read()
    with open(path, encoding="utf-8") as f:
        return f.read()


def format_report(report: AnalysisReport) -> str:
    """Render a report as plain text."""
    lines = [
        f"SEO Score: {report.overall_score} ({report.overall_level.value})",
        f"{report.word_count} words analyzed",
        "",
        f"  Readability: {round(report.readability.score)} ({report.readability.level.value})",
        f"  Keywords:    {round(report.keywords.score)} ({report.keyword_level.value})",
        f"  Structure:   {report.headings.score} ({report.structure_level.value})",
    ]
    if report.keywords.keywords:
        lines.append(f"  Top keywords: {', '.join(report.keywords.keywords)}")

    for category in SuggestionCategory:
        lines.append("")
        lines.append(f"{category.value.capitalize()}:")
        suggestions = report.suggestions.for_category(category)
        if suggestions:
            lines.extend(f"  - {suggestion}" for suggestion in suggestions)
        elif category in ALL_CLEAR_MESSAGES:
            lines.append(f"  + {ALL_CLEAR_MESSAGES[category]}")

    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="seo-analyzer",
        description="Score an article for readability, keywords and structure",
    )
    parser.add_argument(
        "file",
        nargs="?",
        help="File to analyze (reads stdin when omitted or '-')",
    )
    parser.add_argument("--json", help="Print the report as JSON", action="store_true")
    parser.add_argument(
        "--log-level",
        help="Logging level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
    )
    return parser


def main(
    argv: Optional[List[str]] = None,
    stdin: TextIO = sys.stdin,
    stdout: TextIO = sys.stdout,
) -> int:
    """
    Main function for the analyzer CLI.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(log_level=getattr(logging, args.log_level), stream=sys.stderr)

    try:
        content = _read_input(args.file, stdin)
    except (OSError, UnicodeDecodeError) as e:
        parser.error(f"cannot read {args.file}: {e}")

    if compute_word_count(content) == 0:
        print("Nothing to analyze: input is empty.", file=sys.stderr)
        return EXIT_BLANK_INPUT

    with Timer("analyze_text", logger):
        report = analyze_text(content)

    if args.json:
        print(report.model_dump_json(indent=2), file=stdout)
    else:
        print(format_report(report), file=stdout)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
