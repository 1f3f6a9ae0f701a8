"""
Study plan generation.
Tries each configured LLM backend once, in order, and returns the first
response that parses into a valid list of StudyPlanDay.
"""

import json
import re
import time
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from models.plan_models import StudyPlanDay, PlanRequest, GenerationResult
from prompts.plan_prompts import (
    PRIMARY_PLAN_SYSTEM_PROMPT,
    MAX_PLAN_DAYS,
    build_learner_profile_section,
    build_primary_plan_prompt,
    build_fallback_plan_prompt,
)
from clients.groq_client import generate_completion
from clients.gemini_client import generate_json
from utils.model_config import ModelConfig, PRIMARY_PLAN_MODEL, FALLBACK_PLAN_MODEL
from utils.file_storage import GenerationLogger
from utils.exceptions import GenerationFailure

logger = logging.getLogger(__name__)

# Keys some models wrap the day list in when forced into JSON-object mode
PLAN_WRAPPER_KEYS = ("plan", "days", "studyPlan", "study_plan", "schedule")

_FENCE_RE = re.compile(r"```[a-zA-Z]*")


class PlanParseError(ValueError):
    """Backend returned text that is not a usable study plan."""


def strip_code_fences(text: str) -> str:
    """Remove markdown code fences (```json ... ```) around a model response."""
    return _FENCE_RE.sub("", text or "").strip()


def _unwrap_plan(payload: Any) -> Any:
    if isinstance(payload, dict):
        for key in PLAN_WRAPPER_KEYS:
            if isinstance(payload.get(key), list):
                return payload[key]
        list_values = [v for v in payload.values() if isinstance(v, list)]
        if len(list_values) == 1:
            return list_values[0]
    return payload


def parse_plan_response(text: str) -> List[StudyPlanDay]:
    """
    Turn raw backend text into validated plan days.

    Raises:
        PlanParseError: if the text is not JSON, is not a list of days, or a
            day fails validation (day < 1, empty title or topics).
    """
    cleaned = strip_code_fences(text)
    if not cleaned:
        raise PlanParseError("Empty response")

    try:
        payload = json.loads(cleaned)
    except json.JSONDecodeError:
        # Prose around the array: fall back to the outermost [...] span
        start, end = cleaned.find("["), cleaned.rfind("]")
        if start == -1 or end <= start:
            raise PlanParseError(f"Response is not JSON: {cleaned[:200]}")
        try:
            payload = json.loads(cleaned[start:end + 1])
        except json.JSONDecodeError as e:
            raise PlanParseError(f"Response is not JSON: {e}") from e

    payload = _unwrap_plan(payload)
    if not isinstance(payload, list) or not payload:
        raise PlanParseError("Response is not a non-empty JSON array of days")

    try:
        return [StudyPlanDay.model_validate(item) for item in payload]
    except PydanticValidationError as e:
        raise PlanParseError(f"Invalid study plan day: {e}") from e


def check_plan_shape(plan: List[StudyPlanDay], days_until_exam: int) -> List[str]:
    """Return (and log) soft problems with a plan that are not worth rejecting it for."""
    warnings = []
    numbers = [d.day for d in plan]
    if numbers != list(range(1, len(plan) + 1)):
        warnings.append(f"day numbers are not contiguous from 1: {numbers}")
    if len(plan) > MAX_PLAN_DAYS:
        warnings.append(f"plan has {len(plan)} days, more than {MAX_PLAN_DAYS}")
    if len(plan) > days_until_exam:
        warnings.append(f"plan has {len(plan)} days but exam is in {days_until_exam}")
    for warning in warnings:
        logger.warning(f"Study plan shape: {warning}")
    return warnings


class GenerationBackend(ABC):
    """One LLM provider able to draft a study plan."""

    name: str = "backend"

    def __init__(self, model_key: str):
        self.model_config = ModelConfig.get_config(model_key)

    @property
    def max_content_chars(self) -> int:
        return self.model_config["max_content_chars"]

    def truncate(self, content: str) -> str:
        return content[:self.max_content_chars]

    @abstractmethod
    def generate_plan(self, request: PlanRequest) -> str:
        """Return the raw response text. May raise anything the SDK raises."""


class GroqPlanBackend(GenerationBackend):
    """Primary backend: fast and cheap, small content window."""

    name = "Groq"

    def __init__(self, client, model_key: str = PRIMARY_PLAN_MODEL):
        super().__init__(model_key)
        self.client = client

    def generate_plan(self, request: PlanRequest) -> str:
        profile = build_learner_profile_section(request.age, request.questionnaire)
        messages = [
            {"role": "system", "content": PRIMARY_PLAN_SYSTEM_PROMPT},
            {"role": "user", "content": build_primary_plan_prompt(
                content=self.truncate(request.content),
                exam_date=request.exam_date,
                days_until_exam=request.days_until_exam,
                profile_section=profile,
            )},
        ]
        return generate_completion(
            self.client,
            messages,
            model=self.model_config["model"],
            temperature=self.model_config["temperature"],
            max_tokens=self.model_config["max_tokens"],
        ) or "[]"


class GeminiPlanBackend(GenerationBackend):
    """Fallback backend: large context window, JSON output mode."""

    name = "Gemini"

    def __init__(self, client, model_key: str = FALLBACK_PLAN_MODEL):
        super().__init__(model_key)
        self.client = client

    def generate_plan(self, request: PlanRequest) -> str:
        prompt = build_fallback_plan_prompt(
            content=self.truncate(request.content),
            exam_date=request.exam_date,
            days_until_exam=request.days_until_exam,
            profile_section=build_learner_profile_section(request.age, request.questionnaire),
        )
        return generate_json(
            self.client,
            prompt,
            model=self.model_config["model"],
            temperature=self.model_config["temperature"],
            max_tokens=self.model_config["max_tokens"],
        )


class PlanGenerator:
    """Runs the fixed-order fallback chain over the configured backends."""

    def __init__(
        self,
        backends: List[GenerationBackend],
        generation_logger: Optional[GenerationLogger] = None
    ):
        self.backends = backends
        self.generation_logger = generation_logger or GenerationLogger()

    @classmethod
    def from_clients(
        cls,
        groq_client=None,
        gemini_client=None,
        generation_logger: Optional[GenerationLogger] = None
    ) -> "PlanGenerator":
        """Build the Groq → Gemini chain, skipping providers without a client."""
        backends: List[GenerationBackend] = []
        if groq_client is not None:
            backends.append(GroqPlanBackend(groq_client))
        if gemini_client is not None:
            backends.append(GeminiPlanBackend(gemini_client))
        return cls(backends, generation_logger)

    @property
    def backend_names(self) -> List[str]:
        return [b.name for b in self.backends]

    def generate(
        self,
        content: str,
        exam_date: str,
        days_until_exam: int,
        age: Optional[int] = None,
        questionnaire: Optional[Dict[str, Any]] = None
    ) -> List[StudyPlanDay]:
        """Generate a plan; raises GenerationFailure once every backend has failed."""
        request = PlanRequest(
            content=content,
            exam_date=exam_date,
            days_until_exam=days_until_exam,
            age=age,
            questionnaire=questionnaire,
        )
        return self.generate_with_details(request).plan

    def generate_with_details(self, request: PlanRequest) -> GenerationResult:
        errors: Dict[str, str] = {}

        for index, backend in enumerate(self.backends):
            if index > 0:
                logger.info(f"Falling back to {backend.name}...")
            logger.info(
                f"Generating study plan with {backend.name} ({backend.model_config['model']}), "
                f"content length: {len(request.content)} characters"
            )
            start_time = time.time()
            try:
                raw = backend.generate_plan(request)
                plan = parse_plan_response(raw)
            except Exception as e:
                logger.error(f"Error generating study plan with {backend.name}: {e}")
                errors[backend.name] = f"{type(e).__name__}: {e}"
                self.generation_logger.log_generation({
                    "type": "study_plan",
                    "backend": backend.name,
                    "model": backend.model_config["model"],
                    "status": "error",
                    "error": errors[backend.name],
                    "duration_seconds": round(time.time() - start_time, 2),
                })
                continue

            check_plan_shape(plan, request.days_until_exam)
            logger.info(f"Plan generated successfully with {backend.name}: {len(plan)} days")
            self.generation_logger.log_generation({
                "type": "study_plan",
                "backend": backend.name,
                "model": backend.model_config["model"],
                "status": "success",
                "days": len(plan),
                "duration_seconds": round(time.time() - start_time, 2),
            })
            return GenerationResult(backend=backend.name, plan=plan)

        failure = GenerationFailure(self.backend_names, errors)
        logger.error(f"{failure.message} Errors: {errors}")
        raise failure
