"""
FastAPI routes for saved study plans.

  POST /api/study-plans          persist a generated plan
  GET  /api/study-plans?userId=  list a user's plans, newest first
"""

import asyncio
import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Body, Depends, Query

from models.plan_models import IncomingPlan, StudyPlanRecord
from services.plan_storage import PlanStorage
from routes.dependencies import get_plan_storage
from utils.exceptions import ValidationError

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["study-plans"])


@router.post("/study-plans")
async def save_study_plan(
    storage: Annotated[PlanStorage, Depends(get_plan_storage)],
    body: IncomingPlan = Body(...),
):
    storage.require_client()

    if body.exam_date is None or body.plan is None:
        raise ValidationError("Missing examDate or plan", error_code="MISSING_FIELDS")

    saved = await asyncio.to_thread(storage.save_plan, {
        "user_id": body.user_id,
        "title": body.title,
        "exam_date": body.exam_date.isoformat(),
        "files": body.files,
        "plan": [day.model_dump(by_alias=True) for day in body.plan],
    })
    record = StudyPlanRecord.model_validate(saved)
    logger.info(f"Saved study plan {record.id} for user {body.user_id or 'anonymous'}")
    return {"plan": record.model_dump(mode="json")}


@router.get("/study-plans")
async def list_study_plans(
    storage: Annotated[PlanStorage, Depends(get_plan_storage)],
    userId: Optional[str] = Query(None),
):
    storage.require_client()

    if not userId:
        raise ValidationError("userId is required", error_code="MISSING_USER_ID")

    plans = await asyncio.to_thread(storage.list_plans, userId)
    return {"plans": plans}
