"""Loop descriptions and clinical pathway hints for result reports."""

from dataclasses import dataclass

from calm_assessment.scoring.loops import LoopType


@dataclass(frozen=True)
class ClinicalPathway:
    """Approaches that tend to help, and those that tend not to."""

    helps: tuple[str, ...]
    less_helpful: tuple[str, ...]

    def to_dict(self) -> dict[str, list[str]]:
        return {"helps": list(self.helps), "less_helpful": list(self.less_helpful)}


CLINICAL_PATHWAYS: dict[LoopType, ClinicalPathway] = {
    LoopType.ANTICIPATORY: ClinicalPathway(
        helps=("Structured thinking work", "Response flexibility"),
        less_helpful=("Reassurance-only", "Excess calming"),
    ),
    LoopType.CONTROL_SEEKING: ClinicalPathway(
        helps=("Response flexibility", "Uncertainty tolerance"),
        less_helpful=("Excess calming", "Avoidance strategies"),
    ),
    LoopType.REASSURANCE: ClinicalPathway(
        helps=("Dependency reduction", "Self-validation work"),
        less_helpful=("Validation-only", "Reassurance provision"),
    ),
    LoopType.AVOIDANCE: ClinicalPathway(
        helps=("Gradual engagement", "Exposure work"),
        less_helpful=("Avoidance strategies", "Withdrawal permission"),
    ),
    LoopType.SOMATIC_SENSITIVITY: ClinicalPathway(
        helps=("Body regulation", "Interoceptive exposure"),
        less_helpful=("Cognitive-only", "Distraction techniques"),
    ),
    LoopType.COGNITIVE_OVERLOAD: ClinicalPathway(
        helps=("Load reduction", "Recovery protocols"),
        less_helpful=("Additional cognitive work", "Over-analysis"),
    ),
}

LOOP_DESCRIPTIONS: dict[LoopType, str] = {
    LoopType.ANTICIPATORY: (
        "Your anxiety is driven by future-oriented thinking. You tend to mentally "
        "rehearse possible outcomes in advance, which creates a sense of "
        "preparedness but also keeps anxiety active."
    ),
    LoopType.CONTROL_SEEKING: (
        "Your anxiety is shaped by a need to stabilise or control uncertainty. "
        "Attempts to manage or neutralise discomfort provide short-term relief "
        "but keep attention fixed on the problem."
    ),
    LoopType.REASSURANCE: (
        "Your anxiety is reinforced through reassurance-seeking. External "
        "validation eases anxiety briefly, but over time increases dependence "
        "and sensitivity to doubt."
    ),
    LoopType.AVOIDANCE: (
        "Your anxiety persists through avoidance patterns. Avoiding discomfort "
        "reduces anxiety momentarily, but teaches the system that anxiety "
        "requires withdrawal."
    ),
    LoopType.SOMATIC_SENSITIVITY: (
        "Your anxiety is strongly influenced by bodily sensations. Physical "
        "signals become interpreted as threats, which amplifies awareness and fear."
    ),
    LoopType.COGNITIVE_OVERLOAD: (
        "Your anxiety emerges from sustained mental load. Prolonged thinking "
        "without recovery reduces cognitive buffer, allowing anxiety to surface "
        "during routine stress."
    ),
}


def get_clinical_pathway(loop: LoopType) -> ClinicalPathway:
    """Return pathway hints for a primary loop."""
    return CLINICAL_PATHWAYS[loop]


def get_loop_description(loop: LoopType) -> str:
    """Return the plain-language description of a loop."""
    return LOOP_DESCRIPTIONS[loop]
