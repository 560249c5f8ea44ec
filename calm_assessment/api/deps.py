"""FastAPI dependency injection utilities."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from calm_assessment.core.config import settings
from calm_assessment.scoring.engine import CalmEngine


@lru_cache
def get_engine() -> CalmEngine:
    """Get the process-wide CALM engine.

    The question bank is loaded eagerly so that a malformed bank fails
    at startup rather than inside a request.
    """
    engine = CalmEngine(
        bank_filename=settings.question_bank,
        banks_dir=settings.question_banks_dir,
        policy_overrides={"secondary_loop_ratio": settings.secondary_loop_ratio},
    )
    engine.load_bank()
    return engine


Engine = Annotated[CalmEngine, Depends(get_engine)]
