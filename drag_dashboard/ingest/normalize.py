"""
Normalization of D-RAG result payloads into the canonical model.

Result files were written by several generations of the analysis pipeline.
Older files use 'analysis_results' instead of 'questions', 'year' instead of
'fiscal_year', and the classification 'UNSURE' instead of 'UNCLEAR'.
normalize_result() rewrites any of those shapes into an AnalysisResult;
nothing downstream sees the legacy fields.
"""

import copy
import logging
from dataclasses import replace
from typing import Any

from drag_dashboard.constants import CLASSIFICATION_UNCLEAR, LEGACY_CLASSIFICATION_UNSURE
from drag_dashboard.domain.models import AnalysisResult

logger = logging.getLogger(__name__)


class ResultSchemaError(ValueError):
    """Raised when a result payload lacks the metadata needed to identify it."""


def normalize_payload(raw: dict[str, Any], default_model: str) -> dict[str, Any]:
    """
    Rewrite a raw result payload into the canonical JSON shape.

    Steps (in order):
    1. 'analysis_results' -> 'questions' (if 'questions' is absent)
    2. metadata 'year' -> 'fiscal_year' (if 'fiscal_year' is absent)
    3. model_used defaults to default_model
    4. total_questions defaults to the question count, then
       completeness_summary.total_questions, then 0
    5. classification UNSURE -> UNCLEAR

    Args:
        raw: Parsed JSON object (not modified)
        default_model: model_used value for payloads without one

    Returns:
        New payload dict in the canonical shape

    Raises:
        ResultSchemaError: If the payload has no metadata object or no company
    """
    if not isinstance(raw, dict):
        raise ResultSchemaError("Result payload must be a JSON object")

    data = copy.deepcopy(raw)
    metadata = data.get("metadata")
    if not isinstance(metadata, dict):
        raise ResultSchemaError("Result payload has no 'metadata' object")
    if not metadata.get("company"):
        raise ResultSchemaError("Result metadata has no 'company'")

    if "analysis_results" in data and data.get("questions") is None:
        data["questions"] = data.pop("analysis_results")

    if not metadata.get("fiscal_year") and metadata.get("year"):
        metadata["fiscal_year"] = metadata["year"]

    if not metadata.get("model_used"):
        metadata["model_used"] = default_model

    questions = data.get("questions")
    if not metadata.get("total_questions"):
        summary = data.get("completeness_summary") or {}
        metadata["total_questions"] = (
            (len(questions) if isinstance(questions, list) else 0)
            or summary.get("total_questions")
            or 0
        )

    if isinstance(questions, list):
        for question in questions:
            answer = question.get("answer") if isinstance(question, dict) else None
            if (
                isinstance(answer, dict)
                and answer.get("classification") == LEGACY_CLASSIFICATION_UNSURE
            ):
                answer["classification"] = CLASSIFICATION_UNCLEAR

    return data


def normalize_result(raw: dict[str, Any], default_model: str) -> AnalysisResult:
    """Normalize a raw payload and build the canonical AnalysisResult."""
    return AnalysisResult.from_dict(normalize_payload(raw, default_model))


def deduplicate_results(results: list[AnalysisResult]) -> list[AnalysisResult]:
    """
    Keep only the latest result per (company, fiscal_year).

    The result with the greatest analysis_date wins; on a tie the first one
    seen is kept. Survivors keep the position of their key's first appearance.
    """
    latest: dict[tuple[str, str], AnalysisResult] = {}

    for result in results:
        existing = latest.get(result.key)
        if existing is None or result.metadata.analysis_date > existing.metadata.analysis_date:
            latest[result.key] = result

    dropped = len(results) - len(latest)
    if dropped:
        logger.debug(f"Dropped {dropped} superseded results")

    return list(latest.values())


def deduplicate_questions(result: AnalysisResult) -> AnalysisResult:
    """
    Drop repeated question_ids within a result (first occurrence wins).

    total_questions is recomputed to match the surviving questions.
    """
    seen: set[str] = set()
    unique = []

    for question in result.questions:
        if question.question_id not in seen:
            seen.add(question.question_id)
            unique.append(question)

    return replace(
        result,
        questions=unique,
        metadata=replace(result.metadata, total_questions=len(unique)),
    )
