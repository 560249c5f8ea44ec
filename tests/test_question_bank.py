"""Tests for question bank loading and validation."""

import pytest

from calm_assessment.questionnaire.loader import (
    QuestionBankLoader,
    compute_bank_hash,
    load_question_bank,
    parse_question_bank,
)
from calm_assessment.questionnaire.models import (
    LatentDimension,
    QuestionBank,
    QuestionBankError,
)
from calm_assessment.scoring.policy import ScoringPolicy
from tests.helpers import make_bank, option

REFERENCE_BANK = "calm-v1.0.0.yaml"


class TestReferenceBank:
    """Tests for the packaged CALM 1.0 bank."""

    def test_has_twenty_questions(self, reference_bank: QuestionBank) -> None:
        """Test the reference bank defines q1..q20 in order."""
        assert reference_bank.question_ids == tuple(f"q{i}" for i in range(1, 21))

    def test_every_question_has_four_options(self, reference_bank: QuestionBank) -> None:
        """Test each question offers options A-D."""
        for question in reference_bank.questions:
            assert [o.id for o in question.options] == ["A", "B", "C", "D"]

    def test_recovery_capacity_max_derived_from_bank(
        self, reference_bank: QuestionBank
    ) -> None:
        """Test RC maximum is the sum of per-question RC maxima."""
        assert reference_bank.recovery_capacity_max == 15

    def test_all_weights_positive(self, reference_bank: QuestionBank) -> None:
        """Test no option carries a zero or negative weight."""
        for question in reference_bank.questions:
            for opt in question.options:
                assert all(s.points > 0 for s in opt.scores)

    def test_zero_weight_options(self, reference_bank: QuestionBank) -> None:
        """Test restorative and unchanged answers score nothing."""
        assert reference_bank.get_question("q16").get_option("A").scores == ()
        assert reference_bank.get_question("q16").get_option("B").scores == ()
        assert reference_bank.get_question("q20").get_option("B").scores == ()

    def test_multi_dimension_option(self, reference_bank: QuestionBank) -> None:
        """Test an option can contribute to more than one dimension."""
        opt = reference_bank.get_question("q1").get_option("A")

        assert opt.points_for(LatentDimension.AC) == 2
        assert opt.points_for(LatentDimension.CL) == 1
        assert opt.points_for(LatentDimension.PS) == 0

    def test_policy_block_loaded(self, reference_bank: QuestionBank) -> None:
        """Test the bank carries its policy constants."""
        assert reference_bank.policy == ScoringPolicy()
        assert reference_bank.policy.version == "calm-policy-1.0"
        assert reference_bank.policy.secondary_loop_ratio == 0.70

    def test_public_rendering_hides_weights(self, reference_bank: QuestionBank) -> None:
        """Test to_dict without scores leaves option weights out."""
        data = reference_bank.to_dict(include_scores=False)

        assert len(data["questions"]) == 20
        assert "scores" not in data["questions"][0]["options"][0]
        assert data["hash"] == reference_bank.content_hash


class TestQuestionBankLoader:
    """Tests for the QuestionBankLoader class."""

    def test_load_returns_bank_with_hash(self) -> None:
        """Test that loading computes a SHA256 hash."""
        bank = load_question_bank(REFERENCE_BANK)

        assert len(bank.content_hash) == 64

    def test_hash_is_stable_across_loads(self) -> None:
        """Test that the same file produces the same hash."""
        assert (
            load_question_bank(REFERENCE_BANK).content_hash
            == load_question_bank(REFERENCE_BANK).content_hash
        )

    def test_different_content_produces_different_hash(self) -> None:
        """Test that different content produces different hashes."""
        assert compute_bank_hash("version 1") != compute_bank_hash("version 2")

    def test_loader_caches_bank(self) -> None:
        """Test that the loader returns the cached object."""
        loader = QuestionBankLoader()

        assert loader.load(REFERENCE_BANK) is loader.load(REFERENCE_BANK)

    def test_loader_clear_cache(self) -> None:
        """Test that cache clearing forces a reload."""
        loader = QuestionBankLoader()

        first = loader.load(REFERENCE_BANK)
        loader.clear_cache()
        second = loader.load(REFERENCE_BANK)

        assert first is not second
        assert first == second

    def test_list_banks(self) -> None:
        """Test listing available banks."""
        assert REFERENCE_BANK in QuestionBankLoader().list_banks()

    def test_get_bank_info(self) -> None:
        """Test bank metadata."""
        info = QuestionBankLoader().get_bank_info(REFERENCE_BANK)

        assert info["id"] == "calm"
        assert info["version"] == "1.0.0"
        assert info["question_count"] == 20
        assert len(info["hash"]) == 64

    def test_missing_file_raises(self, tmp_path) -> None:
        """Test loading a nonexistent bank."""
        with pytest.raises(FileNotFoundError):
            load_question_bank("nope.yaml", banks_dir=tmp_path)

    def test_load_from_custom_directory(self, tmp_path) -> None:
        """Test loading a bank from an explicit directory."""
        (tmp_path / "tiny.yaml").write_text(
            "id: tiny\n"
            "version: '0.1'\n"
            "questions:\n"
            "  - id: t1\n"
            "    options:\n"
            "      - {id: A, scores: [{dimension: AC, points: 1}]}\n",
            encoding="utf-8",
        )

        bank = QuestionBankLoader(tmp_path).load("tiny.yaml")

        assert bank.id == "tiny"
        assert bank.recovery_capacity_max == 0


class TestQuestionBankValidation:
    """Malformed banks fail at load time."""

    def test_duplicate_question_ids(self) -> None:
        with pytest.raises(QuestionBankError, match="Duplicate question id 'x'"):
            make_bank([
                {"id": "x", "options": [option("A", AC=1)]},
                {"id": "x", "options": [option("A", CO=1)]},
            ])

    def test_duplicate_option_ids(self) -> None:
        with pytest.raises(QuestionBankError, match="Duplicate option id 'A'"):
            make_bank([{"id": "x", "options": [option("A", AC=1), option("A", CO=1)]}])

    def test_question_without_options(self) -> None:
        with pytest.raises(QuestionBankError, match="has no options"):
            make_bank([{"id": "x", "options": []}])

    def test_question_without_any_scored_option(self) -> None:
        with pytest.raises(QuestionBankError, match="no option with score contributions"):
            make_bank([{"id": "x", "options": [option("A"), option("B")]}])

    def test_zero_weight(self) -> None:
        with pytest.raises(QuestionBankError, match="must be positive"):
            make_bank([{"id": "x", "options": [option("A", AC=0)]}])

    def test_negative_weight(self) -> None:
        with pytest.raises(QuestionBankError, match="must be positive"):
            make_bank([{"id": "x", "options": [option("A", RC=-2)]}])

    def test_non_integer_weight(self) -> None:
        with pytest.raises(QuestionBankError, match="must be an integer"):
            make_bank([
                {
                    "id": "x",
                    "options": [
                        {"id": "A", "scores": [{"dimension": "AC", "points": 1.5}]}
                    ],
                }
            ])

    def test_unknown_dimension(self) -> None:
        with pytest.raises(QuestionBankError, match="Unknown latent dimension"):
            make_bank([{"id": "x", "options": [option("A", ZZ=1)]}])

    def test_dimension_listed_twice(self) -> None:
        with pytest.raises(QuestionBankError, match="listed twice"):
            make_bank([
                {
                    "id": "x",
                    "options": [
                        {
                            "id": "A",
                            "scores": [
                                {"dimension": "AC", "points": 1},
                                {"dimension": "AC", "points": 2},
                            ],
                        }
                    ],
                }
            ])

    def test_missing_required_key(self) -> None:
        with pytest.raises(QuestionBankError, match="'version'"):
            QuestionBank.from_dict({"id": "x", "questions": []})

    def test_empty_question_list(self) -> None:
        with pytest.raises(QuestionBankError, match="at least one question"):
            make_bank([])

    def test_policy_must_be_mapping(self) -> None:
        with pytest.raises(QuestionBankError, match="policy"):
            make_bank([{"id": "x", "options": [option("A", AC=1)]}], policy=[1, 2])

    def test_policy_ratio_out_of_range(self) -> None:
        """Test an out-of-range policy threshold fails at load time."""
        content = (
            "id: x\n"
            "version: '1'\n"
            "policy:\n"
            "  secondary_loop_ratio: 5\n"
            "questions:\n"
            "  - id: q1\n"
            "    options:\n"
            "      - id: A\n"
            "        scores: [{dimension: AC, points: 1}]\n"
        )

        with pytest.raises(QuestionBankError, match="secondary_loop_ratio"):
            parse_question_bank(content)

    def test_policy_ratio_must_be_numeric(self) -> None:
        """Test a quoted threshold is rejected rather than compared as text."""
        with pytest.raises(QuestionBankError, match="secondary_loop_ratio must be a number"):
            make_bank(
                [{"id": "x", "options": [option("A", AC=1)]}],
                policy={"secondary_loop_ratio": "0.7"},
            )

    def test_policy_block_parsed(self) -> None:
        """Test a valid policy block is stored as a ScoringPolicy."""
        bank = make_bank(
            [{"id": "x", "options": [option("A", AC=1)]}],
            policy={"version": "custom", "secondary_loop_ratio": 0.8},
        )

        assert bank.policy == ScoringPolicy(version="custom", secondary_loop_ratio=0.8)

    def test_missing_policy_uses_defaults(self) -> None:
        bank = make_bank([{"id": "x", "options": [option("A", AC=1)]}])

        assert bank.policy == ScoringPolicy()

    def test_invalid_yaml(self) -> None:
        with pytest.raises(QuestionBankError, match="Invalid question bank YAML"):
            parse_question_bank("id: [unclosed")

    def test_bank_error_is_value_error(self) -> None:
        """Test callers can catch configuration errors as ValueError."""
        assert issubclass(QuestionBankError, ValueError)
