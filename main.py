import sys
import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from clients.groq_client import create_groq_client
from clients.gemini_client import create_gemini_client
from clients.supabase_client import create_supabase
from services.plan_generator import PlanGenerator
from services.lesson_generator import LessonContentGenerator
from services.plan_storage import PlanStorage
from routes.plan_routes import router as plan_router
from routes.study_plan_routes import router as study_plan_router
from routes.questionnaire_routes import router as questionnaire_router
from utils.config import AppConfig
from utils.file_storage import GenerationLogger
from utils.exceptions import StudyPlannerError

logger = logging.getLogger(__name__)


def configure_logging(config: AppConfig) -> None:
    handlers = [logging.StreamHandler(sys.stdout)]
    if config.log_file:
        handlers.append(logging.FileHandler(config.log_file))
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers
    )


async def study_planner_exception_handler(request: Request, exc: StudyPlannerError):
    if exc.status_code >= 500:
        logger.error(
            f"{exc.error_code} on {request.method} {request.url.path}: {exc.message} | Context: {exc.context}"
        )
    else:
        logger.info(f"{exc.error_code} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.public_message, "error_code": exc.error_code},
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    try:
        detail = jsonable_encoder(exc.errors())
    except UnicodeDecodeError:
        # Binary upload bodies cannot be echoed back
        detail = [
            {
                "loc": ["binary_content"],
                "msg": "Binary data cannot be properly decoded as UTF-8",
                "type": "binary_data_error",
            }
        ]
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request", "error_code": "INVALID_REQUEST", "detail": detail},
    )


def create_app(
    config: Optional[AppConfig] = None,
    plan_generator: Optional[PlanGenerator] = None,
    lesson_generator: Optional[LessonContentGenerator] = None,
    plan_storage: Optional[PlanStorage] = None,
) -> FastAPI:
    """
    Build the API. Services not passed in are built from config, which is
    read from the environment when omitted.
    """
    config = config or AppConfig.from_env()

    if plan_generator is None:
        plan_generator = PlanGenerator.from_clients(
            groq_client=create_groq_client(config.groq_api_key),
            gemini_client=create_gemini_client(config.gemini_api_key),
            generation_logger=GenerationLogger(config.generation_log_file),
        )
    if lesson_generator is None:
        lesson_generator = LessonContentGenerator(create_groq_client(config.groq_content_api_key))
    if plan_storage is None:
        plan_storage = PlanStorage(create_supabase(config.supabase_url, config.supabase_key))

    app = FastAPI(
        title="Study Planner API",
        description="Turns uploaded study material into an AI-generated day-by-day study plan",
        version="1.0.0",
    )
    app.state.config = config
    app.state.plan_generator = plan_generator
    app.state.lesson_generator = lesson_generator
    app.state.plan_storage = plan_storage

    app.add_exception_handler(StudyPlannerError, study_planner_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(plan_router)
    app.include_router(study_plan_router)
    app.include_router(questionnaire_router)

    @app.get("/")
    async def root():
        return {"greeting": "Hello!", "message": "Welcome to the Study Planner API!"}

    @app.get("/health")
    async def health_check():
        return {
            "status": "ok",
            "plan_backends": plan_generator.backend_names,
            "storage_enabled": plan_storage.enabled,
        }

    logger.info(
        f"Study Planner API ready | plan backends: {plan_generator.backend_names or 'none'} | "
        f"storage: {'enabled' if plan_storage.enabled else 'disabled'}"
    )
    return app


app_config = AppConfig.from_env()
configure_logging(app_config)
app = create_app(app_config)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=False)
