"""
Loaders for D-RAG analysis results and question metadata.

Results are re-read from disk on every call (the directory is small and
static per deployment). Question metadata is read once per process and
kept for the rest of the run.

Error policy:
- Bulk result loading is best-effort: any failure while reading, parsing or
  normalizing is logged and an empty list is returned.
- Question metadata loading is fail-fast: sector and applicability
  calculations have no sensible fallback, so errors propagate.
"""

import json
import logging
import threading
from pathlib import Path

from drag_dashboard.config import (
    get_default_model,
    get_questions_metadata_path,
    get_result_file_marker,
    get_results_dir,
)
from drag_dashboard.constants import QUESTION_ID_SEPARATOR, SECTOR_F, SECTOR_P, SECTOR_PF
from drag_dashboard.domain.models import (
    AnalysisResult,
    ApplicableQuestions,
    Question,
    QuestionsMetadata,
    Sector,
)
from drag_dashboard.ingest.normalize import (
    deduplicate_questions,
    deduplicate_results,
    normalize_result,
)
from drag_dashboard.utils.file_discovery import find_result_files

logger = logging.getLogger(__name__)

# Write-once cell for questions metadata
_questions_metadata: QuestionsMetadata | None = None
_questions_metadata_lock = threading.Lock()


# ============================================================================
# Analysis results
# ============================================================================


def load_all_results(results_dir: Path | None = None) -> list[AnalysisResult]:
    """
    Load, normalize and deduplicate every D-RAG result file.

    Only files named *.json that contain the configured marker ("DRAG") are
    read. After normalization, one result survives per (company,
    fiscal_year) and question ids are unique within each result.

    Args:
        results_dir: Directory of result files (default: configured results dir)

    Returns:
        Deduplicated results, or [] if anything fails while loading
    """
    directory = results_dir or get_results_dir()

    try:
        files = find_result_files(directory, marker=get_result_file_marker())
        default_model = get_default_model()

        results = []
        for file_path in files:
            with open(file_path, encoding="utf-8") as f:
                data = json.load(f)
            results.append(normalize_result(data, default_model))

        deduped = [deduplicate_questions(r) for r in deduplicate_results(results)]
    except Exception as e:
        logger.error(f"Error loading results from {directory}: {e}")
        return []

    logger.info(f"Loaded {len(deduped)} results from {len(files)} files in {directory}")
    return deduped


def load_company_results(company: str, results_dir: Path | None = None) -> list[AnalysisResult]:
    """Load results for one company (case-insensitive name match)."""
    wanted = company.lower()
    return [r for r in load_all_results(results_dir) if r.metadata.company.lower() == wanted]


def load_year_result(
    company: str, year: str | int, results_dir: Path | None = None
) -> AnalysisResult | None:
    """Load the result for a company and fiscal year, or None if there isn't one."""
    year_key = str(year)
    for result in load_company_results(company, results_dir):
        if result.metadata.fiscal_year == year_key:
            return result
    return None


def get_available_companies(results_dir: Path | None = None) -> list[str]:
    """Get all company names that have results, sorted."""
    return sorted({r.metadata.company for r in load_all_results(results_dir)})


def get_company_years(company: str, results_dir: Path | None = None) -> list[str]:
    """Get all fiscal years available for a company, sorted."""
    return sorted({r.metadata.fiscal_year for r in load_company_results(company, results_dir)})


# ============================================================================
# Questions metadata
# ============================================================================


def load_questions_metadata() -> QuestionsMetadata:
    """
    Load questions.json (canonical questions + company variants).

    The file is read on first call only; later calls return the same object.
    There is no reload: the file is static for the life of a deployment.

    Raises:
        OSError: If the file can't be read
        ValueError: If the file isn't valid JSON
    """
    global _questions_metadata
    if _questions_metadata is not None:
        return _questions_metadata

    with _questions_metadata_lock:
        if _questions_metadata is None:
            path = get_questions_metadata_path()
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
            _questions_metadata = QuestionsMetadata.from_dict(data)
            logger.debug(
                f"Loaded {len(_questions_metadata.canonical_questions)} canonical questions "
                f"from {path}"
            )

    return _questions_metadata


def get_base_question_id(question_id: str) -> str:
    """Strip variant suffixes from a question id ("Q12-A" -> "Q12")."""
    return question_id.split(QUESTION_ID_SEPARATOR)[0]


def get_company_sector(company: str, metadata: QuestionsMetadata | None = None) -> Sector:
    """
    Determine a company's sector from its question variants.

    Companies without variants, or whose variants cover both P and F,
    are PF.
    """
    metadata = metadata or load_questions_metadata()
    variants = metadata.company_specific_variants.get(company) or []

    if not variants:
        return SECTOR_PF

    sectors = {v.sector for v in variants}
    if SECTOR_P in sectors and SECTOR_F in sectors:
        return SECTOR_PF
    if SECTOR_P in sectors:
        return SECTOR_P
    if SECTOR_F in sectors:
        return SECTOR_F

    return SECTOR_PF


def calculate_applicable_questions(
    company: str,
    all_questions: list[Question] | None,
    metadata: QuestionsMetadata | None = None,
) -> ApplicableQuestions:
    """
    Work out which questions apply to a company.

    Canonical questions apply when their sector is PF or matches the
    company's sector; the company's own variants always apply.

    Args:
        company: Company name as used in questions.json
        all_questions: Questions answered for the company (used for total_answered)
        metadata: Questions metadata (default: load_questions_metadata())

    Returns:
        ApplicableQuestions with the filtered sets and their counts
    """
    metadata = metadata or load_questions_metadata()
    company_sector = get_company_sector(company, metadata)

    applicable_canonical = [
        q for q in metadata.canonical_questions if q.sector in (SECTOR_PF, company_sector)
    ]
    company_variants = list(metadata.company_specific_variants.get(company) or [])

    applicable_ids = {q.id for q in applicable_canonical}
    applicable_ids.update(get_base_question_id(v.id) for v in company_variants)
    answered_ids = {
        get_base_question_id(q.question_id) for q in all_questions or [] if q is not None
    }

    return ApplicableQuestions(
        company_sector=company_sector,
        applicable_canonical=applicable_canonical,
        company_variants=company_variants,
        total_applicable=len(applicable_canonical) + len(company_variants),
        total_canonical=len(applicable_canonical),
        total_variants=len(company_variants),
        total_answered=len(answered_ids & applicable_ids),
    )
