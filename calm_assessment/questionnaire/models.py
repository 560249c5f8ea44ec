"""Question bank data models.

A question bank is static configuration: it is parsed and validated once
at load time and treated as read-only afterwards. Every structural problem
is reported here as a QuestionBankError so that no scoring call ever sees
a malformed bank.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from calm_assessment.scoring.policy import ScoringPolicy


class LatentDimension(str, Enum):
    """Latent dimensions accumulated from answers."""

    AC = "AC"  # Anticipatory cognition
    CO = "CO"  # Control orientation
    RD = "RD"  # Reassurance dependence
    AL = "AL"  # Avoidance load
    PS = "PS"  # Physiological sensitivity
    CL = "CL"  # Cognitive load
    RC = "RC"  # Recovery capacity


class QuestionBankError(ValueError):
    """Raised when a question bank definition is malformed."""


@dataclass(frozen=True)
class ScoreContribution:
    """Points an option adds to a single latent dimension."""

    dimension: LatentDimension
    points: int


@dataclass(frozen=True)
class Option:
    """A selectable answer to a question."""

    id: str
    text: str
    scores: tuple[ScoreContribution, ...] = ()

    def points_for(self, dimension: LatentDimension) -> int:
        """Return the points this option contributes to a dimension."""
        return sum(s.points for s in self.scores if s.dimension == dimension)


@dataclass(frozen=True)
class Question:
    """A single questionnaire item."""

    id: str
    dimension: str
    text: str
    options: tuple[Option, ...]

    def get_option(self, option_id: str) -> Optional[Option]:
        """Look up an option by id."""
        for option in self.options:
            if option.id == option_id:
                return option
        return None

    def max_points(self, dimension: LatentDimension) -> int:
        """Largest number of points any option awards to a dimension."""
        return max((o.points_for(dimension) for o in self.options), default=0)


@dataclass(frozen=True)
class QuestionBank:
    """A versioned, validated set of questions."""

    id: str
    name: str
    version: str
    questions: tuple[Question, ...]
    description: str = ""
    policy: Optional["ScoringPolicy"] = field(default=None, compare=False)
    content_hash: str = ""

    @property
    def question_ids(self) -> tuple[str, ...]:
        """Question ids in bank order."""
        return tuple(q.id for q in self.questions)

    @property
    def recovery_capacity_max(self) -> int:
        """Maximum attainable recovery capacity (RC) score for this bank."""
        return sum(q.max_points(LatentDimension.RC) for q in self.questions)

    def get_question(self, question_id: str) -> Optional[Question]:
        """Look up a question by id."""
        for question in self.questions:
            if question.id == question_id:
                return question
        return None

    @classmethod
    def from_dict(cls, data: dict[str, Any], content_hash: str = "") -> "QuestionBank":
        """Create and validate a QuestionBank from its dictionary form.

        Raises:
            QuestionBankError: If the definition is malformed
        """
        if not isinstance(data, dict):
            raise QuestionBankError("Question bank must be a mapping")

        for key in ("id", "version", "questions"):
            if key not in data:
                raise QuestionBankError(f"Question bank missing required key '{key}'")

        raw_questions = data["questions"]
        if not isinstance(raw_questions, list) or not raw_questions:
            raise QuestionBankError("Question bank must define at least one question")

        questions = []
        seen_questions: set[str] = set()
        for question_data in raw_questions:
            question = _parse_question(question_data)
            if question.id in seen_questions:
                raise QuestionBankError(f"Duplicate question id '{question.id}'")
            seen_questions.add(question.id)
            questions.append(question)

        policy = _parse_policy(data.get("policy"))

        return cls(
            id=str(data["id"]),
            name=str(data.get("name", data["id"])),
            version=str(data["version"]),
            description=data.get("description", ""),
            questions=tuple(questions),
            policy=policy,
            content_hash=content_hash,
        )

    def to_dict(self, include_scores: bool = True) -> dict[str, Any]:
        """Convert the bank to dictionary form.

        Args:
            include_scores: Whether to include option weights. Public
                renderings of the questionnaire leave them out.
        """
        questions = []
        for q in self.questions:
            options = []
            for o in q.options:
                option: dict[str, Any] = {"id": o.id, "text": o.text}
                if include_scores:
                    option["scores"] = [
                        {"dimension": s.dimension.value, "points": s.points}
                        for s in o.scores
                    ]
                options.append(option)
            questions.append(
                {"id": q.id, "dimension": q.dimension, "text": q.text, "options": options}
            )

        return {
            "id": self.id,
            "name": self.name,
            "version": self.version,
            "description": self.description,
            "hash": self.content_hash,
            "questions": questions,
        }


def _parse_question(data: Any) -> Question:
    """Parse and validate one question entry."""
    if not isinstance(data, dict) or "id" not in data:
        raise QuestionBankError(f"Question entry must be a mapping with an 'id': {data!r}")

    question_id = str(data["id"])
    raw_options = data.get("options") or []
    if not raw_options:
        raise QuestionBankError(f"Question '{question_id}' has no options")

    options = []
    seen_options: set[str] = set()
    for option_data in raw_options:
        option = _parse_option(question_id, option_data)
        if option.id in seen_options:
            raise QuestionBankError(
                f"Duplicate option id '{option.id}' in question '{question_id}'"
            )
        seen_options.add(option.id)
        options.append(option)

    # A question that can never contribute to any dimension is a data error
    if not any(o.scores for o in options):
        raise QuestionBankError(
            f"Question '{question_id}' has no option with score contributions"
        )

    return Question(
        id=question_id,
        dimension=str(data.get("dimension", "")),
        text=str(data.get("text", "")),
        options=tuple(options),
    )


def _parse_option(question_id: str, data: Any) -> Option:
    """Parse and validate one option entry."""
    if not isinstance(data, dict) or "id" not in data:
        raise QuestionBankError(
            f"Option in question '{question_id}' must be a mapping with an 'id'"
        )

    option_id = str(data["id"])
    where = f"option '{option_id}' of question '{question_id}'"

    scores = []
    seen_dimensions: set[LatentDimension] = set()
    for score_data in data.get("scores") or []:
        try:
            dimension = LatentDimension(score_data["dimension"])
        except (KeyError, TypeError, ValueError):
            raise QuestionBankError(f"Unknown latent dimension in {where}: {score_data!r}")

        points = score_data.get("points")
        if isinstance(points, bool) or not isinstance(points, int):
            raise QuestionBankError(f"Weight must be an integer in {where}, got {points!r}")
        if points <= 0:
            raise QuestionBankError(f"Weight must be positive in {where}, got {points}")

        if dimension in seen_dimensions:
            raise QuestionBankError(f"Dimension {dimension.value} listed twice in {where}")
        seen_dimensions.add(dimension)

        scores.append(ScoreContribution(dimension=dimension, points=points))

    return Option(id=option_id, text=str(data.get("text", "")), scores=tuple(scores))


def _parse_policy(data: Any) -> "ScoringPolicy":
    """Build and validate the bank's classification policy block."""
    # Imported here: the scoring package depends on these models
    from calm_assessment.scoring.policy import ScoringPolicy

    if data is None:
        return ScoringPolicy()
    if not isinstance(data, dict):
        raise QuestionBankError("Question bank 'policy' must be a mapping")

    try:
        return ScoringPolicy.from_dict(data)
    except (TypeError, ValueError) as e:
        raise QuestionBankError(f"Invalid policy in question bank: {e}") from e
