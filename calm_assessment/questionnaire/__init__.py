"""Versioned CALM question bank configuration."""

from calm_assessment.questionnaire.loader import (
    QuestionBankLoader,
    compute_bank_hash,
    load_question_bank,
    parse_question_bank,
)
from calm_assessment.questionnaire.models import (
    LatentDimension,
    Option,
    Question,
    QuestionBank,
    QuestionBankError,
    ScoreContribution,
)

__all__ = [
    "LatentDimension",
    "Option",
    "Question",
    "QuestionBank",
    "QuestionBankError",
    "QuestionBankLoader",
    "ScoreContribution",
    "compute_bank_hash",
    "load_question_bank",
    "parse_question_bank",
]
