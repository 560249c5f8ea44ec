"""Deterministic CALM scoring engine.

Maps questionnaire answers to an anxiety loop profile. All decisions are
rule-based and reproducible - no AI/ML is involved.
"""

from calm_assessment.scoring.classifiers import (
    LoadCapacityBand,
    ReinforcementMechanism,
    StabilityBand,
    TriggerType,
)
from calm_assessment.scoring.engine import (
    CalmEngine,
    CalmResult,
    IncompleteAnswersError,
    score,
    score_calm,
)
from calm_assessment.scoring.latent import LatentScores
from calm_assessment.scoring.loops import LoopScores, LoopType
from calm_assessment.scoring.policy import ScoringPolicy

__all__ = [
    "CalmEngine",
    "CalmResult",
    "IncompleteAnswersError",
    "LatentScores",
    "LoadCapacityBand",
    "LoopScores",
    "LoopType",
    "ReinforcementMechanism",
    "ScoringPolicy",
    "StabilityBand",
    "TriggerType",
    "score",
    "score_calm",
]
