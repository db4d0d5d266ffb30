"""
Loading and normalization of D-RAG result files and question metadata.
"""

from drag_dashboard.ingest.loaders import (
    calculate_applicable_questions,
    get_available_companies,
    get_base_question_id,
    get_company_sector,
    get_company_years,
    load_all_results,
    load_company_results,
    load_questions_metadata,
    load_year_result,
)
from drag_dashboard.ingest.normalize import (
    ResultSchemaError,
    deduplicate_questions,
    deduplicate_results,
    normalize_result,
)

__all__ = [
    # Results
    "load_all_results",
    "load_company_results",
    "load_year_result",
    "get_available_companies",
    "get_company_years",
    # Questions metadata
    "load_questions_metadata",
    "get_base_question_id",
    "get_company_sector",
    "calculate_applicable_questions",
    # Normalization
    "ResultSchemaError",
    "normalize_result",
    "deduplicate_results",
    "deduplicate_questions",
]
