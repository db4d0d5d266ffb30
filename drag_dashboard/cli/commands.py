"""
CLI command entry points for drag_dashboard.

These functions are registered as console scripts in pyproject.toml.
"""

import argparse
import logging

from tqdm import tqdm

from drag_dashboard.cli.args import add_execute_argument, add_results_dir_argument
from drag_dashboard.cli.logging import print_header, setup_logging
from drag_dashboard.currency.converter import (
    extract_currency_amounts,
    highlight_financial_amounts,
)
from drag_dashboard.domain.models import AnalysisResult, QuestionsMetadata
from drag_dashboard.ingest.loaders import (
    calculate_applicable_questions,
    load_all_results,
    load_company_results,
    load_questions_metadata,
)
from drag_dashboard.mapping.category_mapper import (
    calculate_category_stats,
    get_classification_info,
    group_questions_by_category,
)


def build_summary(
    result: AnalysisResult,
    metadata: QuestionsMetadata | None = None,
    show_usd: bool = False,
) -> list[str]:
    """
    Build the summary lines for one analysis result.

    Args:
        result: Analysis result to summarize
        metadata: Questions metadata for applicability (skipped if None)
        show_usd: Include evidence amounts with USD equivalents

    Returns:
        Lines of text, without trailing newlines
    """
    meta = result.metadata
    lines = [
        f"{meta.company} FY{meta.fiscal_year} "
        f"({meta.model_used}, analyzed {meta.analysis_date or 'n/a'})",
        f"  Questions: {meta.total_questions}",
    ]

    stats = calculate_category_stats(result.questions)
    for classification, count in stats.by_classification.items():
        info = get_classification_info(classification)
        lines.append(f"    {info.label:<12} {count:>4}")

    lines.append("  By category:")
    for group_name, questions in group_questions_by_category(result.questions).items():
        lines.append(f"    {group_name:<30} {len(questions):>4}")

    if metadata is not None:
        applicable = calculate_applicable_questions(meta.company, result.questions, metadata)
        lines.append(
            f"  Applicable ({applicable.company_sector}): {applicable.total_applicable} "
            f"({applicable.total_canonical} canonical + {applicable.total_variants} variants), "
            f"{applicable.total_answered} answered"
        )

    if show_usd:
        for question in result.questions:
            if question.answer is None:
                continue
            for evidence in question.answer.evidence:
                text = evidence.quote or evidence.text or ""
                if extract_currency_amounts(text):
                    highlighted = highlight_financial_amounts(text, meta.fiscal_year, show_usd=True)
                    lines.append(f"  {question.question_id}: {highlighted}")

    return lines


def run_summary(argv: list[str] | None = None):
    """Entry point for drag-summary command."""
    parser = argparse.ArgumentParser(
        description="Summarize D-RAG results per company and fiscal year"
    )
    add_results_dir_argument(parser)
    parser.add_argument("--company", "-c", help="Only summarize this company")
    parser.add_argument(
        "--show-usd",
        action="store_true",
        help="List evidence amounts with USD equivalents",
    )
    add_execute_argument(parser)
    args = parser.parse_args(argv)

    logger = setup_logging("drag_summary", execute=args.execute)

    if args.company:
        results = load_company_results(args.company, args.results_dir)
    else:
        results = load_all_results(args.results_dir)

    if not results:
        logger.warning("⚠ No results found")
        return

    try:
        metadata = load_questions_metadata()
    except (OSError, ValueError) as e:
        logging.getLogger(__name__).warning(f"Questions metadata unavailable: {e}")
        metadata = None

    print_header(f"D-RAG results: {len(results)}", logger)
    results = sorted(results, key=lambda r: r.key)
    for result in tqdm(results, desc="Summarizing", unit="result", disable=len(results) < 2):
        for line in build_summary(result, metadata=metadata, show_usd=args.show_usd):
            logger.info(line)
