from services.pdf_extractor import extract_text_from_pdf, is_pdf_upload
from services.plan_generator import (
    PlanGenerator,
    GenerationBackend,
    GroqPlanBackend,
    GeminiPlanBackend,
)
from services.lesson_generator import LessonContentGenerator
from services.plan_storage import PlanStorage

__all__ = [
    'extract_text_from_pdf',
    'is_pdf_upload',
    'PlanGenerator',
    'GenerationBackend',
    'GroqPlanBackend',
    'GeminiPlanBackend',
    'LessonContentGenerator',
    'PlanStorage'
]
