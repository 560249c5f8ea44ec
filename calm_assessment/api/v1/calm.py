"""CALM assessment endpoints."""

import logging
from typing import Any

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from calm_assessment.api.deps import Engine
from calm_assessment.schemas.calm import (
    CalmResultRead,
    CalmScoreRequest,
    IncompleteAnswersResponse,
    QuestionBankRead,
)
from calm_assessment.scoring.engine import IncompleteAnswersError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/calm", tags=["calm"])


@router.get("/questions", response_model=QuestionBankRead)
async def get_questions(engine: Engine) -> dict[str, Any]:
    """Get the active CALM question bank.

    Option weights are withheld; only ids and text are returned.
    """
    return engine.bank.to_dict(include_scores=False)


@router.post(
    "/score",
    response_model=CalmResultRead,
    responses={
        status.HTTP_422_UNPROCESSABLE_ENTITY: {"model": IncompleteAnswersResponse},
    },
)
async def score_assessment(request: CalmScoreRequest, engine: Engine) -> Any:
    """Score a completed CALM answer set.

    Every question must be answered. Unknown question or option ids are
    ignored and reported in `warnings`.
    """
    try:
        result = engine.score(request.answers)
    except IncompleteAnswersError as exc:
        logger.info(
            f"Rejected incomplete CALM submission ({len(exc.missing)} missing)",
            extra={"missing": ",".join(exc.missing)},
        )
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": str(exc), "missing": list(exc.missing)},
        )

    return result.to_dict()
