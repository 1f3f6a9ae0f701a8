"""
FastAPI routes for study plan and lesson content generation.

  POST /api/generate-plan    PDF + exam date → day-by-day plan
  POST /api/lesson-content   topic → HTML lesson
"""

import asyncio
import logging
from datetime import date, datetime
from typing import Annotated, Any, Dict, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from models.plan_models import GeneratePlanResponse, LessonContentRequest, LessonContentResponse
from services.pdf_extractor import extract_text_from_pdf, is_pdf_upload
from services.plan_generator import PlanGenerator
from services.lesson_generator import LessonContentGenerator
from services.plan_storage import PlanStorage
from routes.dependencies import (
    get_plan_generator,
    get_lesson_generator,
    get_plan_storage,
    get_bearer_token,
)
from utils.exceptions import StudyPlannerError, ValidationError

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["plans"])


def parse_exam_date(value: str) -> date:
    """Accept YYYY-MM-DD or a full ISO timestamp."""
    value = value.strip()
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    except ValueError:
        raise ValidationError(
            f"Invalid exam date: {value!r}. Use YYYY-MM-DD.",
            error_code="INVALID_EXAM_DATE",
        )


def days_until_exam(exam_date: date, today: Optional[date] = None) -> int:
    return (exam_date - (today or date.today())).days


def parse_age(value: Optional[str]) -> Optional[int]:
    if value is None or not value.strip():
        return None
    try:
        age = int(value)
    except ValueError:
        raise ValidationError(f"Invalid age: {value!r}", error_code="INVALID_AGE")
    if age < 1 or age > 120:
        raise ValidationError(f"Invalid age: {age}", error_code="INVALID_AGE")
    return age


def load_questionnaire(storage: PlanStorage, token: Optional[str]) -> Optional[Dict[str, Any]]:
    """Best-effort personalization lookup; never fails the request."""
    if not token or not storage.enabled:
        return None
    try:
        user_id = storage.get_user_id(token)
        if user_id:
            return storage.get_questionnaire(user_id)
    except StudyPlannerError as e:
        logger.info(f"Could not fetch questionnaire, proceeding without it: {e.message}")
    return None


@router.post("/generate-plan", response_model=GeneratePlanResponse)
async def generate_plan(
    generator: Annotated[PlanGenerator, Depends(get_plan_generator)],
    storage: Annotated[PlanStorage, Depends(get_plan_storage)],
    token: Annotated[Optional[str], Depends(get_bearer_token)],
    file: Optional[UploadFile] = File(None),
    examDate: Optional[str] = Form(None),
    age: Optional[str] = Form(None),
):
    """
    Generate a study plan from an uploaded PDF.

    Form fields:
    - file: the study material (PDF only)
    - examDate: ISO date, must be after today
    - age: optional, used to personalise the plan

    Returns `{"plan": [{"day", "title", "topics", "estimatedTime"}, ...]}`.
    """
    if file is None or not file.filename or not examDate:
        raise ValidationError("File and exam date are required", error_code="MISSING_FIELDS")

    exam_date = parse_exam_date(examDate)
    remaining_days = days_until_exam(exam_date)
    if remaining_days <= 0:
        raise ValidationError("Exam date must be in the future", error_code="EXAM_DATE_IN_PAST")

    learner_age = parse_age(age)

    if not is_pdf_upload(file.content_type, file.filename):
        raise ValidationError(
            "Only PDF files are currently supported for AI analysis",
            error_code="UNSUPPORTED_FILE_TYPE",
            context={"content_type": file.content_type},
        )

    data = await file.read()
    content = await asyncio.to_thread(extract_text_from_pdf, data)
    logger.info(f"Extracted Text Preview: {content[:200]}...")

    questionnaire = await asyncio.to_thread(load_questionnaire, storage, token)

    plan = await asyncio.to_thread(
        generator.generate,
        content,
        exam_date.isoformat(),
        remaining_days,
        learner_age,
        questionnaire,
    )

    return GeneratePlanResponse(plan=plan)


@router.post("/lesson-content", response_model=LessonContentResponse)
async def lesson_content(
    body: LessonContentRequest,
    generator: Annotated[LessonContentGenerator, Depends(get_lesson_generator)],
):
    """Generate HTML lesson content for one plan topic. Never fails on provider errors."""
    topic = body.topic.strip()
    if not topic:
        raise ValidationError("Topic is required", error_code="MISSING_TOPIC")

    content = await asyncio.to_thread(generator.generate, topic)
    return LessonContentResponse(content=content)
