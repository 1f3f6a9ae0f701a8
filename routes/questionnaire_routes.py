"""
FastAPI routes for the learner questionnaire. Both endpoints require a
Supabase bearer token; answers are stored one row per user.
"""

import asyncio
import logging
from typing import Annotated

from fastapi import APIRouter, Body, Depends

from models.plan_models import QuestionnaireRequest
from services.plan_storage import PlanStorage
from routes.dependencies import get_plan_storage, get_current_user_id
from utils.exceptions import ValidationError

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["questionnaire"])


@router.post("/questionnaire")
async def save_questionnaire(
    user_id: Annotated[str, Depends(get_current_user_id)],
    storage: Annotated[PlanStorage, Depends(get_plan_storage)],
    body: QuestionnaireRequest = Body(...),
):
    missing = body.missing_fields()
    if missing:
        raise ValidationError(
            "Missing required fields",
            error_code="MISSING_FIELDS",
            context={"missing": missing},
        )

    answers = body.model_dump(include=set(body.REQUIRED_FIELDS))
    data = await asyncio.to_thread(storage.save_questionnaire, user_id, answers)
    return {
        "success": True,
        "message": "Questionnaire saved successfully",
        "data": data,
    }


@router.get("/questionnaire")
async def get_questionnaire(
    user_id: Annotated[str, Depends(get_current_user_id)],
    storage: Annotated[PlanStorage, Depends(get_plan_storage)],
):
    questionnaire = await asyncio.to_thread(storage.get_questionnaire, user_id)
    return {
        "success": True,
        "questionnaire": questionnaire,
    }
