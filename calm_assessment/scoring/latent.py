"""Latent score accumulation.

Each chosen option adds its points to one or more latent dimensions.
Answers that reference a question or option absent from the bank add
nothing; they are reported back as warnings so integration bugs stay
visible without failing the assessment.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from calm_assessment.questionnaire.models import LatentDimension, QuestionBank

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LatentScores:
    """Accumulated points per latent dimension."""

    AC: int = 0  # Anticipatory cognition
    CO: int = 0  # Control orientation
    RD: int = 0  # Reassurance dependence
    AL: int = 0  # Avoidance load
    PS: int = 0  # Physiological sensitivity
    CL: int = 0  # Cognitive load
    RC: int = 0  # Recovery capacity

    def get(self, dimension: LatentDimension) -> int:
        """Return the score for a dimension."""
        return getattr(self, dimension.value)

    def to_dict(self) -> dict[str, int]:
        return {d.value: self.get(d) for d in LatentDimension}


def accumulate_latent_scores(
    answers: Mapping[str, str],
    bank: QuestionBank,
) -> tuple[LatentScores, list[str]]:
    """Sum option points per latent dimension.

    Args:
        answers: Question id -> chosen option id
        bank: Validated question bank

    Returns:
        Tuple of (LatentScores, warnings for unknown question/option ids)
    """
    totals = {d: 0 for d in LatentDimension}
    warnings: list[str] = []

    # Sorted so warning order does not depend on mapping insertion order
    for question_id in sorted(answers, key=str):
        option_id = answers[question_id]

        question = bank.get_question(question_id)
        if question is None:
            warnings.append(f"Unknown question id '{question_id}' ignored")
            continue

        option = question.get_option(option_id)
        if option is None:
            warnings.append(
                f"Unknown option id '{option_id}' for question '{question_id}' ignored"
            )
            continue

        for contribution in option.scores:
            totals[contribution.dimension] += contribution.points

    for warning in warnings:
        logger.warning(warning, extra={"bank_id": bank.id, "bank_version": bank.version})

    return LatentScores(**{d.value: v for d, v in totals.items()}), warnings
