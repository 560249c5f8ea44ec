"""Loop score composition and primary/secondary loop selection."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from calm_assessment.scoring.latent import LatentScores


class LoopType(str, Enum):
    """Anxiety-maintenance loop types, in tie-break order."""

    ANTICIPATORY = "Anticipatory Loop"
    CONTROL_SEEKING = "Control-Seeking Loop"
    REASSURANCE = "Reassurance Loop"
    AVOIDANCE = "Avoidance Loop"
    SOMATIC_SENSITIVITY = "Somatic Sensitivity Loop"
    COGNITIVE_OVERLOAD = "Cognitive Overload Loop"


@dataclass(frozen=True)
class LoopScores:
    """Composite loop scores derived from latent scores."""

    anticipatory: int
    control: int
    reassurance: int
    avoidance: int
    somatic: int
    cognitive_overload: int

    def ranked_candidates(self) -> list[tuple[LoopType, int]]:
        """Loop types paired with their scores, in declaration order."""
        return [
            (LoopType.ANTICIPATORY, self.anticipatory),
            (LoopType.CONTROL_SEEKING, self.control),
            (LoopType.REASSURANCE, self.reassurance),
            (LoopType.AVOIDANCE, self.avoidance),
            (LoopType.SOMATIC_SENSITIVITY, self.somatic),
            (LoopType.COGNITIVE_OVERLOAD, self.cognitive_overload),
        ]

    def to_dict(self) -> dict[str, int]:
        return {
            "anticipatory": self.anticipatory,
            "control": self.control,
            "reassurance": self.reassurance,
            "avoidance": self.avoidance,
            "somatic": self.somatic,
            "cognitive_overload": self.cognitive_overload,
        }


@dataclass(frozen=True)
class LoopAssignment:
    """Primary loop and optional secondary loop."""

    primary: LoopType
    primary_score: int
    secondary: Optional[LoopType]
    secondary_score: int

    @property
    def pattern(self) -> str:
        """'dual' when a secondary loop was promoted, otherwise 'single'."""
        return "dual" if self.secondary is not None else "single"


def compose_loop_scores(latent: LatentScores, recovery_capacity_max: int) -> LoopScores:
    """Combine latent dimensions into the six loop scores.

    Poor recovery capacity is expressed as a deficit
    (recovery_capacity_max - RC) that feeds the avoidance and cognitive
    overload loops.

    Args:
        latent: Accumulated latent scores
        recovery_capacity_max: Maximum attainable RC for the question bank
    """
    recovery_deficit = max(recovery_capacity_max - latent.RC, 0)

    return LoopScores(
        anticipatory=latent.AC + latent.CL,
        control=latent.CO + latent.PS,
        reassurance=latent.RD,
        avoidance=latent.AL + recovery_deficit,
        somatic=latent.PS,
        cognitive_overload=latent.CL + recovery_deficit,
    )


def determine_loops(loop_scores: LoopScores, secondary_ratio: float) -> LoopAssignment:
    """Select the primary loop and, if close enough, a secondary loop.

    Ties are resolved by LoopType declaration order. The runner-up is
    promoted only when it scores above zero and reaches
    secondary_ratio * primary score.
    """
    # sorted() is stable, so equal scores keep declaration order
    ranked = sorted(loop_scores.ranked_candidates(), key=lambda item: -item[1])

    primary, primary_score = ranked[0]
    runner_up, runner_up_score = ranked[1]

    promoted = runner_up_score > 0 and runner_up_score >= primary_score * secondary_ratio

    return LoopAssignment(
        primary=primary,
        primary_score=primary_score,
        secondary=runner_up if promoted else None,
        secondary_score=runner_up_score if promoted else 0,
    )
