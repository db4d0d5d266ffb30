"""
Unit tests for drag_dashboard.ingest.loaders module.
"""

import json
import logging
from unittest.mock import patch

import pytest

from drag_dashboard.domain.models import Question
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


class TestLoadAllResults:
    """Tests for load_all_results."""

    def test_only_marked_json_files_loaded(self, results_dir, write_result, make_payload):
        """Files must end in .json and contain the DRAG marker."""
        write_result("Acme_2023_DRAG.json", make_payload(company="Acme"))
        write_result("Beta_2023_other.json", make_payload(company="Beta"))
        write_result("Gamma_2023_DRAG.json.bak", make_payload(company="Gamma"))
        (results_dir / "notes_DRAG.txt").write_text("not json")

        results = load_all_results(results_dir)

        assert [r.metadata.company for r in results] == ["Acme"]

    def test_latest_result_per_company_year(self, results_dir, write_result, make_payload):
        """Two analyses of the same company/year keep the later one."""
        write_result(
            "Acme_2023_DRAG_v1.json",
            make_payload(analysis_date="2024-05-01", model_used="old"),
        )
        write_result(
            "Acme_2023_DRAG_v2.json",
            make_payload(analysis_date="2025-02-01", model_used="new"),
        )

        results = load_all_results(results_dir)

        assert len(results) == 1
        assert results[0].metadata.model_used == "new"
        assert results[0].metadata.analysis_date == "2025-02-01"

    def test_duplicate_questions_removed(
        self, results_dir, write_result, make_payload, make_question
    ):
        """Repeated question ids keep the first and total_questions follows."""
        write_result(
            "Acme_2023_DRAG.json",
            make_payload(
                questions=[make_question("Q1", "YES"), make_question("Q1", "NONE")],
                total_questions=2,
            ),
        )

        [result] = load_all_results(results_dir)

        assert [q.question_id for q in result.questions] == ["Q1"]
        assert result.questions[0].answer.classification == "YES"
        assert result.metadata.total_questions == 1

    def test_legacy_file_normalized(self, results_dir, write_result, make_question):
        """analysis_results/year/UNSURE files load in the canonical shape."""
        write_result(
            "Acme_DRAG_legacy.json",
            {
                "metadata": {"company": "Acme", "year": "2021", "analysis_date": "2023-01-01"},
                "analysis_results": [make_question("Q1", classification="UNSURE")],
            },
        )

        [result] = load_all_results(results_dir)

        assert result.metadata.fiscal_year == "2021"
        assert result.metadata.model_used == "D-RAG"
        assert result.metadata.total_questions == 1
        assert result.questions[0].answer.classification == "UNCLEAR"

    def test_invalid_json_returns_empty(self, results_dir, write_result, make_payload, caplog):
        """One unparseable file makes the whole load return [] and log an error."""
        write_result("Acme_2023_DRAG.json", make_payload())
        (results_dir / "Broken_DRAG.json").write_text("{not json", encoding="utf-8")

        with caplog.at_level(logging.ERROR):
            assert load_all_results(results_dir) == []
        assert "Error loading results" in caplog.text

    def test_missing_metadata_returns_empty(self, results_dir, write_result):
        """A file without metadata makes the load return []."""
        write_result("Acme_DRAG.json", {"questions": []})
        assert load_all_results(results_dir) == []

    def test_missing_directory_returns_empty(self, tmp_path):
        """A missing results directory returns []."""
        assert load_all_results(tmp_path / "nope") == []

    def test_empty_directory(self, results_dir):
        """An empty directory gives no results."""
        assert load_all_results(results_dir) == []

    def test_default_directory_from_config(self, results_dir, write_result, make_payload):
        """Without an argument, the configured results directory is used."""
        write_result("Acme_2023_DRAG.json", make_payload())

        with patch("drag_dashboard.ingest.loaders.get_results_dir", return_value=results_dir):
            results = load_all_results()

        assert len(results) == 1


@pytest.fixture
def populated_results(results_dir, write_result, make_payload):
    """Results for two companies over several years."""
    write_result("Acme_2023_DRAG.json", make_payload(company="Acme", fiscal_year="2023"))
    write_result("Acme_2021_DRAG.json", make_payload(company="Acme", fiscal_year=2021))
    write_result("Acme_2022_DRAG.json", make_payload(company="Acme", fiscal_year="2022"))
    write_result("Beta_2022_DRAG.json", make_payload(company="Beta", fiscal_year="2022"))
    write_result("Alpha_2020_DRAG.json", make_payload(company="Alpha", fiscal_year="2020"))
    return results_dir


class TestQueryHelpers:
    """Tests for the company/year query helpers."""

    def test_load_company_results_case_insensitive(self, populated_results):
        """Company names match regardless of case."""
        results = load_company_results("aCmE", populated_results)
        assert {r.metadata.fiscal_year for r in results} == {"2021", "2022", "2023"}
        assert all(r.metadata.company == "Acme" for r in results)

    def test_load_company_results_unknown(self, populated_results):
        """Unknown companies give an empty list."""
        assert load_company_results("Nobody", populated_results) == []

    def test_load_year_result(self, populated_results):
        """A company/year pair returns its result."""
        result = load_year_result("beta", "2022", populated_results)
        assert result is not None
        assert result.key == ("Beta", "2022")

    def test_load_year_result_int_year(self, populated_results):
        """Integer years match string fiscal years."""
        result = load_year_result("Acme", 2021, populated_results)
        assert result is not None
        assert result.metadata.fiscal_year == "2021"

    def test_load_year_result_missing(self, populated_results):
        """A year without a result returns None."""
        assert load_year_result("Beta", "2023", populated_results) is None

    def test_get_available_companies_sorted(self, populated_results):
        """Companies are unique and sorted."""
        assert get_available_companies(populated_results) == ["Acme", "Alpha", "Beta"]

    def test_get_company_years_sorted(self, populated_results):
        """Years are unique and sorted."""
        assert get_company_years("ACME", populated_results) == ["2021", "2022", "2023"]

    def test_helpers_on_failed_load(self, tmp_path):
        """Helpers see an empty result set when loading fails."""
        missing = tmp_path / "missing"
        assert get_available_companies(missing) == []
        assert get_company_years("Acme", missing) == []
        assert load_year_result("Acme", "2023", missing) is None


class TestLoadQuestionsMetadata:
    """Tests for load_questions_metadata."""

    def test_loads_file(self, questions_file):
        """Canonical questions and variants are parsed."""
        metadata = load_questions_metadata()

        assert metadata.meta.version == "1.0"
        assert metadata.meta.sector_codes["PF"] == "Both"
        assert [q.id for q in metadata.canonical_questions] == ["Q1", "Q2", "Q3", "Q4"]
        variant = metadata.company_specific_variants["BankCo"][0]
        assert variant.canonical_id == "Q3"
        assert variant.sector == "F"

    def test_memoized(self, questions_file):
        """The file is read once; later calls return the same object."""
        first = load_questions_metadata()
        questions_file.write_text(json.dumps({"canonical_questions": []}), encoding="utf-8")

        second = load_questions_metadata()

        assert second is first
        assert len(second.canonical_questions) == 4

    def test_missing_file_propagates(self, tmp_path):
        """A missing metadata file raises instead of degrading."""
        missing = tmp_path / "questions.json"
        with patch(
            "drag_dashboard.ingest.loaders.get_questions_metadata_path", return_value=missing
        ):
            with pytest.raises(FileNotFoundError):
                load_questions_metadata()

    def test_invalid_json_propagates(self, tmp_path):
        """An unparseable metadata file raises ValueError."""
        path = tmp_path / "questions.json"
        path.write_text("{oops", encoding="utf-8")
        with patch("drag_dashboard.ingest.loaders.get_questions_metadata_path", return_value=path):
            with pytest.raises(ValueError):
                load_questions_metadata()


class TestGetBaseQuestionId:
    """Tests for get_base_question_id."""

    @pytest.mark.parametrize(
        "question_id,expected",
        [("Q12-A", "Q12"), ("Q12", "Q12"), ("Q3-B-2", "Q3"), ("", "")],
    )
    def test_strips_suffix(self, question_id, expected):
        """Everything from the first hyphen on is dropped."""
        assert get_base_question_id(question_id) == expected


class TestGetCompanySector:
    """Tests for get_company_sector."""

    @pytest.mark.parametrize(
        "company,expected",
        [
            ("BankCo", "F"),
            ("FactoryCo", "P"),
            ("MixedCo", "PF"),
            ("EmptyCo", "PF"),
            ("Unlisted", "PF"),
        ],
    )
    def test_sector_from_variants(self, questions_metadata, company, expected):
        """Sector follows the company's variants, defaulting to PF."""
        assert get_company_sector(company, questions_metadata) == expected

    def test_uses_loaded_metadata_by_default(self, questions_file):
        """Without metadata, the configured questions file is used."""
        assert get_company_sector("BankCo") == "F"


class TestCalculateApplicableQuestions:
    """Tests for calculate_applicable_questions."""

    def _answered(self, *question_ids):
        return [Question(question_id=qid, question_text="?") for qid in question_ids]

    def test_financial_company(self, questions_metadata):
        """A financial company gets PF and F canonical questions plus its variants."""
        result = calculate_applicable_questions("BankCo", [], questions_metadata)

        assert result.company_sector == "F"
        assert [q.id for q in result.applicable_canonical] == ["Q1", "Q3", "Q4"]
        assert [v.id for v in result.company_variants] == ["Q3-A"]
        assert result.total_canonical == 3
        assert result.total_variants == 1
        assert result.total_applicable == 4

    def test_company_without_variants(self, questions_metadata):
        """Without variants the company is PF: only PF canonical questions apply."""
        result = calculate_applicable_questions("Unlisted", None, questions_metadata)

        assert result.company_sector == "PF"
        assert [q.id for q in result.applicable_canonical] == ["Q1", "Q4"]
        assert result.company_variants == []
        assert result.total_applicable == 2

    def test_total_answered(self, questions_metadata):
        """Answered questions are matched on their base id."""
        answered = self._answered("Q1", "Q3-A", "Q2", "Q99")

        result = calculate_applicable_questions("BankCo", answered, questions_metadata)

        # Q2 is a P question and Q99 is unknown: neither applies to BankCo
        assert result.total_answered == 2

    def test_uses_loaded_metadata_by_default(self, questions_file):
        """Without metadata, the configured questions file is used."""
        result = calculate_applicable_questions("FactoryCo", [])
        assert result.company_sector == "P"
        assert [q.id for q in result.applicable_canonical] == ["Q1", "Q2", "Q4"]
