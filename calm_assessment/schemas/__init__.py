"""Pydantic request/response schemas."""

from calm_assessment.schemas.calm import (
    CalmResultRead,
    CalmScoreRequest,
    IncompleteAnswersResponse,
    QuestionBankRead,
)

__all__ = [
    "CalmResultRead",
    "CalmScoreRequest",
    "IncompleteAnswersResponse",
    "QuestionBankRead",
]
