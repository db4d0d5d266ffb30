"""Canonical data models for D-RAG results and question metadata."""

from drag_dashboard.domain.models import (
    AnalysisMetadata,
    AnalysisResult,
    Answer,
    ApplicableQuestions,
    CanonicalQuestion,
    CategoryGroup,
    CategoryStats,
    ClassificationInfo,
    CurrencyAmount,
    Evidence,
    Question,
    QuestionsMeta,
    QuestionsMetadata,
    QuestionVariant,
    Sector,
)

__all__ = [
    "AnalysisMetadata",
    "AnalysisResult",
    "Answer",
    "ApplicableQuestions",
    "CanonicalQuestion",
    "CategoryGroup",
    "CategoryStats",
    "ClassificationInfo",
    "CurrencyAmount",
    "Evidence",
    "Question",
    "QuestionsMeta",
    "QuestionsMetadata",
    "QuestionVariant",
    "Sector",
]
