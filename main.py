from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from hr_training.core.config import settings
from hr_training.core.database import Base, engine
from hr_training.core.logging import configure_logging
from hr_training.endpoints import course, curriculum, quiz, progress, enrollment, report
from hr_training.middleware.exceptions import global_exception_handler, http_exception_handler, validation_exception_handler
from hr_training.middleware.logging import RequestLoggingMiddleware
import hr_training.models  # noqa: F401  registers every table on Base.metadata
import logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    Base.metadata.create_all(bind=engine)
    logger.info(f"{settings.PROJECT_NAME} {settings.VERSION} started")
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

app.add_middleware(GZipMiddleware, minimum_size=1000)
app.add_middleware(RequestLoggingMiddleware)

app.add_exception_handler(Exception, global_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)

api_prefix = settings.API_V1_STR

app.include_router(course.router, prefix=f"{api_prefix}/courses", tags=["Courses"])
app.include_router(curriculum.router, prefix=api_prefix, tags=["Curriculum"])
app.include_router(quiz.router, prefix=f"{api_prefix}/quizzes", tags=["Quizzes"])
app.include_router(progress.router, prefix=api_prefix, tags=["Progress"])
app.include_router(enrollment.router, prefix=f"{api_prefix}/enrollments", tags=["Enrollments"])
app.include_router(report.router, prefix=f"{api_prefix}/reports", tags=["Reports"])

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
