"""
Pydantic models for study plan generation and storage.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import ClassVar, List, Optional, Tuple, Union
from datetime import date, datetime


class StudyPlanDay(BaseModel):
    """One day of a generated plan, as returned to the client."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    day: int = Field(..., ge=1)
    title: str = Field(..., min_length=1)
    topics: List[str] = Field(..., min_length=1)
    estimated_time: str = Field("", alias="estimatedTime")

    @field_validator("topics")
    @classmethod
    def _topics_not_blank(cls, topics: List[str]) -> List[str]:
        cleaned = [t.strip() for t in topics if isinstance(t, str) and t.strip()]
        if not cleaned:
            raise ValueError("topics must contain at least one non-empty entry")
        return cleaned

    @field_validator("estimated_time", mode="before")
    @classmethod
    def _coerce_estimated_time(cls, value):
        # Some models answer with a bare number of hours
        if isinstance(value, (int, float)):
            return f"{value:g} hours"
        return value or ""


class PlanRequest(BaseModel):
    """Inputs handed to every generation backend."""
    content: str
    exam_date: str
    days_until_exam: int = Field(..., ge=1)
    age: Optional[int] = Field(None, ge=1, le=120)
    questionnaire: Optional[dict] = None


class GenerationResult(BaseModel):
    backend: str
    plan: List[StudyPlanDay]


class GeneratePlanResponse(BaseModel):
    plan: List[StudyPlanDay]


class LessonContentRequest(BaseModel):
    topic: str


class LessonContentResponse(BaseModel):
    content: str


# Persistence models
class IncomingPlan(BaseModel):
    """Body of POST /api/study-plans"""
    model_config = ConfigDict(populate_by_name=True)

    user_id: Optional[str] = Field(None, alias="userId")
    title: Optional[str] = None
    exam_date: Optional[date] = Field(None, alias="examDate")
    files: List[str] = []
    plan: Optional[List[StudyPlanDay]] = None


class StudyPlanRecord(BaseModel):
    # uuid or bigint identity, depending on the table
    id: Union[int, str]
    created_at: Optional[datetime] = None
    title: Optional[str] = None
    exam_date: Optional[date] = None
    files: List[str] = []
    plan: List[dict] = []


class QuestionnaireRequest(BaseModel):
    """Learner questionnaire answers used to personalise plans."""
    age_group: Optional[str] = None
    current_status: Optional[str] = None
    primary_goal: Optional[str] = None
    pursuing: Optional[str] = None
    primary_domain: Optional[str] = None
    explanation_preference: Optional[str] = None

    REQUIRED_FIELDS: ClassVar[Tuple[str, ...]] = (
        "age_group",
        "current_status",
        "primary_goal",
        "pursuing",
        "primary_domain",
        "explanation_preference",
    )

    def missing_fields(self) -> List[str]:
        return [name for name in self.REQUIRED_FIELDS if not getattr(self, name)]
