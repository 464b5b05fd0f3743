import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from exam_builder.config import settings
from exam_builder.core.errors import CompositionError, CycleDetected
from exam_builder.core.logging import configure_logging
from exam_builder.db.session import Base, engine
import exam_builder.db.models  # noqa: F401  registers tables

from exam_builder.api.auth.routes import router as auth_router
from exam_builder.api.ielts_tests.routes import router as tests_router
from exam_builder.api.sections.routes import build_router as build_section_router
from exam_builder.api.parts.routes import build_router as build_part_router
from exam_builder.api.writing_tasks.routes import router as writing_tasks_router
from exam_builder.api.questions.routes import part_router as part_questions_router
from exam_builder.api.questions.routes import router as questions_router
from exam_builder.api.links.routes import router as links_router
from exam_builder.api.navigation.routes import router as navigation_router
from exam_builder.db.models.enums import PartKind, SectionKind

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    if settings.ENV == "local":
        # Production schemas come from alembic
        Base.metadata.create_all(bind=engine)
    logger.info("Exam builder started (env=%s)", settings.ENV)
    yield

app = FastAPI(title="IELTS Test Builder API", lifespan=lifespan)


@app.exception_handler(CompositionError)
async def composition_error_handler(request: Request, exc: CompositionError):
    if isinstance(exc, CycleDetected):
        logger.error("Cycle rejected on %s %s: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


# Routers
app.include_router(auth_router, prefix="/auth", tags=["Auth"])
app.include_router(tests_router, prefix="/tests", tags=["Tests"])

app.include_router(build_section_router(SectionKind.LISTENING), prefix="/listenings", tags=["Listenings"])
app.include_router(build_section_router(SectionKind.READING), prefix="/readings", tags=["Readings"])
app.include_router(build_section_router(SectionKind.WRITING), prefix="/writings", tags=["Writings"])

app.include_router(build_part_router(PartKind.LISTENING), prefix="/listening-parts", tags=["Listening Parts"])
app.include_router(build_part_router(PartKind.READING), prefix="/reading-parts", tags=["Reading Parts"])
app.include_router(writing_tasks_router, prefix="/writing-tasks", tags=["Writing Tasks"])

app.include_router(part_questions_router, prefix="/parts/{part_id}/questions", tags=["Questions"])
app.include_router(questions_router, prefix="/questions", tags=["Questions"])

app.include_router(links_router, prefix="/links", tags=["Links"])
app.include_router(navigation_router, prefix="/navigation", tags=["Navigation"])

@app.get("/ping")
def ping():
    return {"message": "pong"}
