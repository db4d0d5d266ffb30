"""
Data models for D-RAG analysis results and question metadata.

These dataclasses are the canonical shape every consumer sees. Legacy
result payloads are rewritten into this shape by
drag_dashboard.ingest.normalize before from_dict is called.
"""

from dataclasses import dataclass, field
from typing import Any, Literal

Sector = Literal["P", "F", "PF"]


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


@dataclass(frozen=True)
class CanonicalQuestion:
    """A question from the canonical question set."""

    id: str
    sector: Sector
    category: str
    text: str
    verbatim: bool | None = None
    require_source: bool | None = None
    classification_scale: list[str] | None = None
    require_financial_quantification: bool | None = None
    notes: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CanonicalQuestion":
        return cls(
            id=str(data["id"]),
            sector=data.get("sector", "PF"),
            category=data.get("category", ""),
            text=data.get("text", ""),
            verbatim=data.get("verbatim"),
            require_source=data.get("require_source"),
            classification_scale=data.get("classification_scale"),
            require_financial_quantification=data.get("require_financial_quantification"),
            notes=data.get("notes"),
        )


@dataclass(frozen=True)
class QuestionVariant(CanonicalQuestion):
    """Company-specific adaptation of a canonical question."""

    canonical_id: str = ""  # Lookup reference, not ownership
    adaptation_reason: str | None = None
    applicable_companies: list[str] | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "QuestionVariant":
        base = CanonicalQuestion.from_dict(data)
        return cls(
            **base.__dict__,
            canonical_id=str(data.get("canonical_id", "")),
            adaptation_reason=data.get("adaptation_reason"),
            applicable_companies=data.get("applicable_companies"),
        )


@dataclass(frozen=True)
class QuestionsMeta:
    """The _meta block of questions.json."""

    description: str = ""
    version: str = ""
    last_updated: str = ""
    total_canonical_questions: int = 0
    sector_codes: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "QuestionsMeta":
        return cls(
            description=data.get("description", ""),
            version=str(data.get("version", "")),
            last_updated=str(data.get("last_updated", "")),
            total_canonical_questions=int(data.get("total_canonical_questions", 0)),
            sector_codes=dict(data.get("sector_codes", {})),
        )


@dataclass(frozen=True)
class QuestionsMetadata:
    """Canonical questions plus per-company variants."""

    meta: QuestionsMeta
    canonical_questions: list[CanonicalQuestion]
    company_specific_variants: dict[str, list[QuestionVariant]]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "QuestionsMetadata":
        variants = data.get("company_specific_variants") or {}
        return cls(
            meta=QuestionsMeta.from_dict(data.get("_meta") or {}),
            canonical_questions=[
                CanonicalQuestion.from_dict(q) for q in data.get("canonical_questions") or []
            ],
            company_specific_variants={
                company: [QuestionVariant.from_dict(v) for v in items or []]
                for company, items in variants.items()
            },
        )


@dataclass(frozen=True)
class Evidence:
    """A citation backing an answer."""

    quote: str | None = None
    source: str | None = None
    page: int | None = None
    financial_amounts: list[str] | None = None
    evidence_number: int | None = None
    source_url: str | None = None
    text: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Evidence":
        return cls(
            quote=data.get("quote"),
            source=data.get("source"),
            page=data.get("page"),
            financial_amounts=data.get("financial_amounts"),
            evidence_number=data.get("evidence_number"),
            source_url=data.get("source_url"),
            text=data.get("text"),
        )


@dataclass(frozen=True)
class Answer:
    """Classified answer to a question."""

    classification: str
    classification_justification: str = ""
    evidence: list[Evidence] = field(default_factory=list)
    financial_quantification: str | None = None
    summary: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Answer":
        return cls(
            classification=data.get("classification", ""),
            classification_justification=data.get("classification_justification", ""),
            evidence=[Evidence.from_dict(e) for e in data.get("evidence") or [] if e],
            financial_quantification=data.get("financial_quantification"),
            summary=data.get("summary"),
        )


@dataclass(frozen=True)
class Question:
    """A question and its answer within one analysis result."""

    question_id: str
    question_text: str
    category: str | None = None
    priority: str | None = None
    answer: Answer | None = None  # Absent in malformed input

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Question":
        answer = data.get("answer")
        return cls(
            question_id=str(data.get("question_id", "")),
            question_text=data.get("question_text", ""),
            category=data.get("category"),
            priority=data.get("priority"),
            answer=Answer.from_dict(answer) if isinstance(answer, dict) else None,
        )


@dataclass(frozen=True)
class AnalysisMetadata:
    """Provenance of one analysis run."""

    company: str
    fiscal_year: str
    analysis_date: str = ""
    model_used: str = ""
    documents_analyzed: list[str] = field(default_factory=list)
    total_questions: int = 0
    processing_time_seconds: float | None = None
    estimated_cost: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AnalysisMetadata":
        return cls(
            company=str(data["company"]),
            fiscal_year=_optional_str(data.get("fiscal_year")) or "",
            analysis_date=_optional_str(data.get("analysis_date")) or "",
            model_used=data.get("model_used", ""),
            documents_analyzed=list(data.get("documents_analyzed") or []),
            total_questions=int(data.get("total_questions") or 0),
            processing_time_seconds=data.get("processing_time_seconds"),
            estimated_cost=_optional_str(data.get("estimated_cost")),
        )


@dataclass(frozen=True)
class AnalysisResult:
    """All answered questions for one company and fiscal year."""

    metadata: AnalysisMetadata
    questions: list[Question]

    @property
    def key(self) -> tuple[str, str]:
        """Identity used for deduplication: (company, fiscal_year)."""
        return (self.metadata.company, self.metadata.fiscal_year)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AnalysisResult":
        return cls(
            metadata=AnalysisMetadata.from_dict(data["metadata"]),
            questions=[Question.from_dict(q) for q in data.get("questions") or [] if q],
        )


@dataclass(frozen=True)
class CategoryGroup:
    """Display group a question category belongs to."""

    name: str
    color: str
    icon: str
    description: str


@dataclass(frozen=True)
class ClassificationInfo:
    """Display metadata for a classification value."""

    score: int
    label: str
    color: str
    bg_color: str


@dataclass(frozen=True)
class CategoryStats:
    """Classification counts over a set of questions."""

    total: int
    by_classification: dict[str, int]


@dataclass(frozen=True)
class CurrencyAmount:
    """A monetary amount found in free text."""

    amount: float
    currency: str
    original: str  # Matched substring, verbatim


@dataclass(frozen=True)
class ApplicableQuestions:
    """Questions that apply to a company given its sector."""

    company_sector: Sector
    applicable_canonical: list[CanonicalQuestion]
    company_variants: list[QuestionVariant]
    total_applicable: int
    total_canonical: int
    total_variants: int
    total_answered: int = 0
