"""
AI career advice.
"""

from typing import Optional, Union

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from loguru import logger
from pydantic import BaseModel

from advisor import CareerAdvisor
from shared.errors import UpstreamError
from shared.models import CareerAdvice

from ..dependencies import get_career_advisor

router = APIRouter(prefix="/ai", tags=["ai"])


class AdviceRequest(BaseModel):
    skills: Optional[Union[str, list[str]]] = None
    experience: Optional[str] = None
    goals: Optional[Union[str, list[str]]] = None


def _as_text(value: Optional[Union[str, list[str]]]) -> Optional[str]:
    if isinstance(value, list):
        return ", ".join(v for v in value if v) or None
    return value.strip() if value else value


@router.post("/recommend")
async def recommend(
    body: AdviceRequest,
    advisor: CareerAdvisor = Depends(get_career_advisor),
):
    try:
        advice = await advisor.generate_advice(
            _as_text(body.skills), _as_text(body.experience), _as_text(body.goals)
        )
    except UpstreamError as e:
        logger.error(f"Career advice failed: {e.message}")
        # Clients render the arrays even when generation fails
        return JSONResponse(
            status_code=e.status_code,
            content={"success": False, "message": e.message, **CareerAdvice().to_api()},
        )

    return {
        "success": True,
        "message": "Career advice generated successfully.",
        **advice.to_api(),
    }
