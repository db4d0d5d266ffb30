"""
Pytest configuration and shared fixtures for drag_dashboard tests.
"""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from drag_dashboard.domain.models import QuestionsMetadata
from drag_dashboard.ingest import loaders
from drag_dashboard.mapping.category_mapper import CategoryMapping

SAMPLE_CATEGORY_MAPPING = {
    "category_groups": {
        "Governance": {
            "includes": ["Governance", "Board Oversight"],
            "display_color": "#2563eb",
            "icon": "🏛️",
            "description": "Board oversight and governance",
        },
        "Physical Risks": {
            "includes": ["Physical Risk", "Supply Chain"],
            "display_color": "#dc2626",
            "icon": "🌪️",
            "description": "Physical climate hazards",
        },
        "Catch-all": {
            "includes": ["Unknown", "Governance"],
            "display_color": "#111827",
            "icon": "📦",
            "description": "Questions without a category",
        },
    },
    "classification_colors": {
        "YES": {"score": 3, "label": "Yes", "color": "#065f46", "bg_color": "#d1fae5"},
        "PARTIAL": {"score": 2, "label": "Partial", "color": "#92400e", "bg_color": "#fef3c7"},
        "UNCLEAR": {"score": 1, "label": "Unclear", "color": "#1e40af", "bg_color": "#dbeafe"},
        "NONE": {"score": 0, "label": "None", "color": "#991b1b", "bg_color": "#fee2e2"},
    },
    "drag_mapping": {"UNSURE": "UNCLEAR", "NO": "NONE"},
}

SAMPLE_RATES = {
    "2023": {"CHF": 0.94, "EUR": 0.92, "GBP": 0.8, "JPY": 140.0},
    "2024": {"EUR": 0.9},
}

SAMPLE_QUESTIONS_METADATA = {
    "_meta": {
        "description": "Test questions",
        "version": "1.0",
        "last_updated": "2025-01-01",
        "total_canonical_questions": 4,
        "sector_codes": {"P": "Physical", "F": "Financial", "PF": "Both"},
    },
    "canonical_questions": [
        {"id": "Q1", "sector": "PF", "category": "Governance", "text": "Board oversight?"},
        {"id": "Q2", "sector": "P", "category": "Physical Risk", "text": "Physical hazards?"},
        {"id": "Q3", "sector": "F", "category": "Financed Emissions", "text": "Financed?"},
        {"id": "Q4", "sector": "PF", "category": "Financial Impact", "text": "Quantified?"},
    ],
    "company_specific_variants": {
        "BankCo": [
            {"id": "Q3-A", "canonical_id": "Q3", "sector": "F", "category": "X", "text": "..."},
        ],
        "MixedCo": [
            {"id": "Q2-A", "canonical_id": "Q2", "sector": "P", "category": "X", "text": "..."},
            {"id": "Q3-B", "canonical_id": "Q3", "sector": "F", "category": "X", "text": "..."},
        ],
        "FactoryCo": [
            {"id": "Q2-B", "canonical_id": "Q2", "sector": "P", "category": "X", "text": "..."},
        ],
        "EmptyCo": [],
    },
}


def _make_payload(
    company: str = "Acme",
    fiscal_year: str | int = "2023",
    analysis_date: str = "2025-01-01",
    questions: list[dict] | None = None,
    **metadata,
) -> dict:
    """Build a canonical result payload."""
    if questions is None:
        questions = [_make_question("Q1")]
    return {
        "metadata": {
            "company": company,
            "fiscal_year": fiscal_year,
            "analysis_date": analysis_date,
            **metadata,
        },
        "questions": questions,
    }


def _make_question(
    question_id: str, classification: str = "YES", category: str | None = "Governance"
) -> dict:
    """Build a question dict with a single evidence item."""
    return {
        "question_id": question_id,
        "question_text": f"Question {question_id}?",
        "category": category,
        "answer": {
            "classification": classification,
            "classification_justification": "Because.",
            "evidence": [{"quote": "Some quote", "source": "report.pdf", "page": 3}],
        },
    }


@pytest.fixture
def category_mapping():
    """Validated sample category mapping table."""
    return CategoryMapping.from_dict(SAMPLE_CATEGORY_MAPPING)


@pytest.fixture
def rates():
    """Sample exchange rate table."""
    return SAMPLE_RATES


@pytest.fixture
def questions_metadata():
    """Parsed sample questions metadata."""
    return QuestionsMetadata.from_dict(SAMPLE_QUESTIONS_METADATA)


@pytest.fixture
def results_dir(tmp_path):
    """Empty results directory."""
    directory = tmp_path / "results"
    directory.mkdir()
    return directory


@pytest.fixture
def write_result(results_dir):
    """Write a payload as JSON into the results directory."""

    def _write(filename: str, payload: dict) -> Path:
        path = results_dir / filename
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def reset_questions_metadata(monkeypatch):
    """Start every test with an empty questions metadata cell."""
    monkeypatch.setattr(loaders, "_questions_metadata", None)


@pytest.fixture
def make_payload():
    """Factory for canonical result payloads."""
    return _make_payload


@pytest.fixture
def make_question():
    """Factory for question dicts."""
    return _make_question


@pytest.fixture
def questions_file(tmp_path):
    """Sample questions.json, used as the configured metadata file."""
    path = tmp_path / "questions.json"
    path.write_text(json.dumps(SAMPLE_QUESTIONS_METADATA), encoding="utf-8")
    with patch("drag_dashboard.ingest.loaders.get_questions_metadata_path", return_value=path):
        yield path
