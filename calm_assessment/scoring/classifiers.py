"""CALM pattern classifiers.

Four independent classifiers run over the latent scores:
- Trigger origin: internal vs external vs mixed
- Reinforcement mechanism: control, reassurance, avoidance or neutral
- Load vs capacity: overloaded, strained or balanced
- Stability: stable, fluctuating or escalation-prone

Every classifier is total over non-negative scores and returns finite
numbers; zero denominators resolve to documented values.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from calm_assessment.questionnaire.models import QuestionBank
from calm_assessment.scoring.latent import LatentScores
from calm_assessment.scoring.policy import ScoringPolicy


class TriggerType(str, Enum):
    """Where anxiety predominantly originates."""

    INTERNAL = "Internal"
    EXTERNAL = "External"
    MIXED = "Mixed"


class ReinforcementMechanism(str, Enum):
    """Coping behaviour that sustains the loop."""

    CONTROL = "Control"
    REASSURANCE = "Reassurance"
    AVOIDANCE = "Avoidance"
    NEUTRAL = "Neutral"


class LoadCapacityBand(str, Enum):
    """Current demand relative to recovery."""

    OVERLOADED = "Overloaded"
    STRAINED = "Strained"
    BALANCED = "Balanced"


class StabilityBand(str, Enum):
    """Susceptibility to worsening over time."""

    STABLE = "Stable"
    FLUCTUATING = "Fluctuating"
    ESCALATION_PRONE = "Escalation-Prone"


@dataclass(frozen=True)
class TriggerAssessment:
    """Trigger origin with the weights used to decide it."""

    trigger_type: TriggerType
    internal_weight: int
    external_weight: int
    relative_difference: float


@dataclass(frozen=True)
class ReinforcementAssessment:
    """Reinforcement mechanism and the two highest-ranked candidates."""

    mechanism: ReinforcementMechanism
    top_reinforcers: tuple[ReinforcementMechanism, ReinforcementMechanism]


@dataclass(frozen=True)
class LoadCapacityAssessment:
    """Load vs capacity band and its inputs."""

    band: LoadCapacityBand
    load_score: int
    capacity_deficit: int
    imbalance_ratio: float


@dataclass(frozen=True)
class StabilityAssessment:
    """Stability band and its inputs."""

    band: StabilityBand
    capacity_deficit: int
    answer_diversity: float


def determine_trigger_type(latent: LatentScores, mixed_band: float) -> TriggerAssessment:
    """Classify trigger origin.

    internal = PS + CL, external = AC + CO. When the relative difference
    |internal - external| / max(internal, external) is within mixed_band
    the trigger is Mixed. Both weights zero is Mixed.
    """
    internal = latent.PS + latent.CL
    external = latent.AC + latent.CO

    larger = max(internal, external)
    relative_difference = abs(internal - external) / larger if larger > 0 else 0.0

    if relative_difference <= mixed_band:
        trigger_type = TriggerType.MIXED
    elif internal > external:
        trigger_type = TriggerType.INTERNAL
    else:
        trigger_type = TriggerType.EXTERNAL

    return TriggerAssessment(
        trigger_type=trigger_type,
        internal_weight=internal,
        external_weight=external,
        relative_difference=relative_difference,
    )


def determine_reinforcement(latent: LatentScores, margin: float) -> ReinforcementAssessment:
    """Classify the dominant reinforcement mechanism.

    Candidates are ranked by score with ties kept in declaration order
    (control, reassurance, avoidance). The top candidate dominates when it
    is above zero and at least margin times the lowest-ranked candidate.
    """
    candidates = [
        (ReinforcementMechanism.CONTROL, latent.CO),
        (ReinforcementMechanism.REASSURANCE, latent.RD),
        (ReinforcementMechanism.AVOIDANCE, latent.AL),
    ]
    ranked = sorted(candidates, key=lambda item: -item[1])

    (top, top_score), (second, _), (_, lowest_score) = ranked
    dominant = top_score > 0 and top_score >= lowest_score * margin

    return ReinforcementAssessment(
        mechanism=top if dominant else ReinforcementMechanism.NEUTRAL,
        top_reinforcers=(top, second),
    )


def assess_load_capacity(
    latent: LatentScores,
    recovery_capacity_max: int,
    policy: ScoringPolicy,
) -> LoadCapacityAssessment:
    """Band current load against recovery capacity.

    imbalance = (load - RC) / RC, where load = CL + PS + AL. With RC == 0
    the imbalance is policy.imbalance_sentinel (maximal imbalance).
    """
    load_score = latent.CL + latent.PS + latent.AL
    capacity_deficit = max(recovery_capacity_max - latent.RC, 0)

    if latent.RC > 0:
        imbalance_ratio = (load_score - latent.RC) / latent.RC
    else:
        imbalance_ratio = policy.imbalance_sentinel

    if imbalance_ratio >= policy.load_overloaded_ratio:
        band = LoadCapacityBand.OVERLOADED
    elif imbalance_ratio >= policy.load_strained_ratio:
        band = LoadCapacityBand.STRAINED
    else:
        band = LoadCapacityBand.BALANCED

    return LoadCapacityAssessment(
        band=band,
        load_score=load_score,
        capacity_deficit=capacity_deficit,
        imbalance_ratio=imbalance_ratio,
    )


def answer_diversity(answers: Mapping[str, str], bank: QuestionBank) -> float:
    """Fraction of distinct option ids among the answers to bank questions.

    A crude proxy for response variability; 0.0 when nothing was answered.
    """
    chosen = [answers[qid] for qid in bank.question_ids if qid in answers]
    if not chosen:
        return 0.0
    return len(set(chosen)) / len(chosen)


def assess_stability(
    latent: LatentScores,
    answers: Mapping[str, str],
    bank: QuestionBank,
    policy: ScoringPolicy,
) -> StabilityAssessment:
    """Classify stability/escalation risk.

    Heuristic only: a high recovery deficit combined with low answer
    diversity is Escalation-Prone, a moderate deficit alone Fluctuating.
    """
    capacity_deficit = max(bank.recovery_capacity_max - latent.RC, 0)
    diversity = answer_diversity(answers, bank)

    if (
        capacity_deficit > policy.stability_high_deficit
        and diversity < policy.stability_low_diversity
    ):
        band = StabilityBand.ESCALATION_PRONE
    elif capacity_deficit > policy.stability_low_deficit:
        band = StabilityBand.FLUCTUATING
    else:
        band = StabilityBand.STABLE

    return StabilityAssessment(
        band=band,
        capacity_deficit=capacity_deficit,
        answer_diversity=diversity,
    )
