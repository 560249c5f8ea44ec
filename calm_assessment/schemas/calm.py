"""Pydantic schemas for CALM assessment operations."""

from typing import Optional

from pydantic import BaseModel, Field


class CalmScoreRequest(BaseModel):
    """Schema for submitting a completed CALM answer set."""

    answers: dict[str, str] = Field(
        ..., description="Question id to chosen option id, e.g. {\"q1\": \"B\"}"
    )


class OptionRead(BaseModel):
    """Public view of an answer option (weights withheld)."""

    id: str
    text: str


class QuestionRead(BaseModel):
    """Public view of a question."""

    id: str
    dimension: str
    text: str
    options: list[OptionRead]


class QuestionBankRead(BaseModel):
    """Schema for reading the active question bank."""

    id: str
    name: str
    version: str
    description: str = ""
    hash: str
    questions: list[QuestionRead]


class TriggerWeights(BaseModel):
    internal: int
    external: int
    relative_difference: float


class LoopDescriptionRead(BaseModel):
    primary: str
    secondary: Optional[str] = None


class ClinicalPathwayRead(BaseModel):
    helps: list[str]
    less_helpful: list[str]


class BankProvenance(BaseModel):
    id: str
    version: str
    hash: str


class CalmResultRead(BaseModel):
    """Schema for a scored CALM assessment."""

    primary_loop: str
    secondary_loop: Optional[str] = None
    loop_pattern: str
    loop_description: LoopDescriptionRead
    loop_scores: dict[str, int]
    trigger_type: str
    trigger_weights: TriggerWeights
    reinforcement: str
    top_reinforcers: list[str]
    load_capacity_band: str
    load_score: int
    capacity_deficit: int
    imbalance_ratio: float
    stability: str
    answer_diversity: float
    clinical_pathway: ClinicalPathwayRead
    latent_scores: dict[str, int]
    bank: BankProvenance
    policy_version: str
    warnings: list[str] = []


class IncompleteAnswersResponse(BaseModel):
    """Error body returned when questions are left unanswered."""

    detail: str
    missing: list[str]
