"""CALM scoring engine.

Converts a completed CALM answer set into a loop profile. The pipeline is:
1. Latent accumulation (answers -> seven latent dimensions)
2. Loop composition (latent -> six loop scores)
3. Classification (loops, trigger, reinforcement, load, stability)
4. Assembly into an immutable CalmResult

All scoring is deterministic: the same answers, bank and policy always
produce the same result. The result is a labelling of questionnaire
answers, not a diagnosis.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from calm_assessment.questionnaire.loader import QuestionBankLoader
from calm_assessment.questionnaire.models import QuestionBank
from calm_assessment.scoring.classifiers import (
    LoadCapacityAssessment,
    ReinforcementAssessment,
    StabilityAssessment,
    TriggerAssessment,
    assess_load_capacity,
    assess_stability,
    determine_reinforcement,
    determine_trigger_type,
)
from calm_assessment.scoring.latent import LatentScores, accumulate_latent_scores
from calm_assessment.scoring.loops import (
    LoopAssignment,
    LoopScores,
    compose_loop_scores,
    determine_loops,
)
from calm_assessment.scoring.pathways import (
    ClinicalPathway,
    get_clinical_pathway,
    get_loop_description,
)
from calm_assessment.scoring.policy import ScoringPolicy

logger = logging.getLogger(__name__)

DEFAULT_QUESTION_BANK = "calm-v1.0.0.yaml"


class IncompleteAnswersError(ValueError):
    """Raised when an answer set does not cover every bank question."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = tuple(missing)
        super().__init__(f"Missing answers for questions: {', '.join(self.missing)}")


@dataclass(frozen=True)
class CalmResult:
    """Complete CALM classification for one answer set."""

    # Loop map
    loops: LoopAssignment
    loop_scores: LoopScores

    # Trigger architecture
    trigger: TriggerAssessment

    # Reinforcement mechanism
    reinforcement: ReinforcementAssessment

    # Load vs capacity
    load_capacity: LoadCapacityAssessment

    # Stability
    stability: StabilityAssessment

    clinical_pathway: ClinicalPathway
    latent_scores: LatentScores

    # Provenance
    bank_id: str
    bank_version: str
    bank_hash: str
    policy_version: str
    warnings: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Serialise to plain JSON-compatible types."""
        return {
            "primary_loop": self.loops.primary.value,
            "secondary_loop": self.loops.secondary.value if self.loops.secondary else None,
            "loop_pattern": self.loops.pattern,
            "loop_description": {
                "primary": get_loop_description(self.loops.primary),
                "secondary": (
                    get_loop_description(self.loops.secondary)
                    if self.loops.secondary
                    else None
                ),
            },
            "loop_scores": self.loop_scores.to_dict(),
            "trigger_type": self.trigger.trigger_type.value,
            "trigger_weights": {
                "internal": self.trigger.internal_weight,
                "external": self.trigger.external_weight,
                "relative_difference": self.trigger.relative_difference,
            },
            "reinforcement": self.reinforcement.mechanism.value,
            "top_reinforcers": [m.value for m in self.reinforcement.top_reinforcers],
            "load_capacity_band": self.load_capacity.band.value,
            "load_score": self.load_capacity.load_score,
            "capacity_deficit": self.load_capacity.capacity_deficit,
            "imbalance_ratio": self.load_capacity.imbalance_ratio,
            "stability": self.stability.band.value,
            "answer_diversity": self.stability.answer_diversity,
            "clinical_pathway": self.clinical_pathway.to_dict(),
            "latent_scores": self.latent_scores.to_dict(),
            "bank": {
                "id": self.bank_id,
                "version": self.bank_version,
                "hash": self.bank_hash,
            },
            "policy_version": self.policy_version,
            "warnings": list(self.warnings),
        }


def find_missing_answers(answers: Mapping[str, Any], bank: QuestionBank) -> list[str]:
    """Return bank question ids with no answer, in bank order."""
    return [qid for qid in bank.question_ids if answers.get(qid) in (None, "")]


def validate_answers(answers: Mapping[str, Any], bank: QuestionBank) -> None:
    """Ensure every bank question has an answer.

    Raises:
        IncompleteAnswersError: Naming every unanswered question
    """
    missing = find_missing_answers(answers, bank)
    if missing:
        raise IncompleteAnswersError(missing)


def score(
    answers: Mapping[str, str],
    bank: QuestionBank,
    policy: Optional[ScoringPolicy] = None,
) -> CalmResult:
    """Score a completed CALM answer set.

    Args:
        answers: Question id -> chosen option id, covering every question
        bank: Validated question bank
        policy: Classification thresholds (defaults to the bank's policy)

    Returns:
        CalmResult with all classifications and the raw scores

    Raises:
        IncompleteAnswersError: If any bank question is unanswered
    """
    if policy is None:
        policy = bank.policy or ScoringPolicy()

    validate_answers(answers, bank)

    latent, warnings = accumulate_latent_scores(answers, bank)
    rc_max = bank.recovery_capacity_max
    loop_scores = compose_loop_scores(latent, rc_max)

    loops = determine_loops(loop_scores, policy.secondary_loop_ratio)
    trigger = determine_trigger_type(latent, policy.trigger_mixed_band)
    reinforcement = determine_reinforcement(latent, policy.reinforcement_margin)
    load_capacity = assess_load_capacity(latent, rc_max, policy)
    stability = assess_stability(latent, answers, bank, policy)

    result = CalmResult(
        loops=loops,
        loop_scores=loop_scores,
        trigger=trigger,
        reinforcement=reinforcement,
        load_capacity=load_capacity,
        stability=stability,
        clinical_pathway=get_clinical_pathway(loops.primary),
        latent_scores=latent,
        bank_id=bank.id,
        bank_version=bank.version,
        bank_hash=bank.content_hash,
        policy_version=policy.version,
        warnings=tuple(warnings),
    )

    logger.debug(
        f"Scored CALM answers: primary={loops.primary.value} "
        f"secondary={loops.secondary.value if loops.secondary else None} "
        f"trigger={trigger.trigger_type.value} load={load_capacity.band.value}",
        extra={"bank_id": bank.id, "primary_loop": loops.primary.value},
    )

    return result


class CalmEngine:
    """CALM scoring engine bound to one question bank and policy.

    The bank is loaded lazily on first use and then treated as read-only,
    so a single engine can serve any number of concurrent assessments.
    """

    def __init__(
        self,
        bank_filename: str = DEFAULT_QUESTION_BANK,
        banks_dir: Path | None = None,
        policy: Optional[ScoringPolicy] = None,
        policy_overrides: Optional[dict[str, Any]] = None,
    ) -> None:
        """Initialize engine.

        Args:
            bank_filename: Question bank file to use
            banks_dir: Directory containing question banks
            policy: Explicit policy; defaults to the bank's `policy` block
            policy_overrides: Individual thresholds to override
        """
        self.bank_filename = bank_filename
        self.loader = QuestionBankLoader(banks_dir)
        self._policy = policy
        self._policy_overrides = policy_overrides or {}
        self._bank: QuestionBank | None = None

    def load_bank(self) -> None:
        """Load the configured question bank and resolve the policy."""
        self._bank = self.loader.load(self.bank_filename)
        base = self._policy or self._bank.policy or ScoringPolicy()
        self._policy = base.with_overrides(**self._policy_overrides)

    @property
    def bank(self) -> QuestionBank:
        """Get loaded bank, loading if necessary."""
        if self._bank is None:
            self.load_bank()
        return self._bank  # type: ignore

    @property
    def policy(self) -> ScoringPolicy:
        """Get the effective scoring policy."""
        if self._bank is None:
            self.load_bank()
        return self._policy  # type: ignore

    def score(self, answers: Mapping[str, str]) -> CalmResult:
        """Score answers against this engine's bank and policy."""
        return score(answers, self.bank, self.policy)


def score_calm(
    answers: Mapping[str, str],
    bank_filename: str = DEFAULT_QUESTION_BANK,
) -> CalmResult:
    """Convenience function to score with a packaged question bank.

    Args:
        answers: Question id -> option id
        bank_filename: Question bank to use

    Returns:
        CalmResult
    """
    engine = CalmEngine(bank_filename)
    return engine.score(answers)
