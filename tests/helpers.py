"""Builders for small synthetic question banks."""

from calm_assessment.questionnaire.models import QuestionBank


def make_bank(questions: list[dict], **extra) -> QuestionBank:
    """Build a validated bank from compact question dicts."""
    data = {"id": "test", "version": "0.0.1", "questions": questions}
    data.update(extra)
    return QuestionBank.from_dict(data, content_hash="0" * 64)


def option(option_id: str, **points: int) -> dict:
    """Option dict with the given dimension points."""
    return {
        "id": option_id,
        "text": f"Option {option_id}",
        "scores": [{"dimension": d, "points": p} for d, p in points.items()],
    }
