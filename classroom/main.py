import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from classroom.core.config import settings
from classroom.core.errors import ClassroomError
from classroom.core.logging_middleware import LoggingMiddleware
from classroom.core.responses import error_response
from classroom.db.init_db import init_db
from classroom.routers.assignments import router as assignments_router
from classroom.routers.auth import router as auth_router
from classroom.routers.co_teachers import router as co_teachers_router
from classroom.routers.courses import router as courses_router
from classroom.routers.enrollments import router as enrollments_router
from classroom.routers.people import router as people_router
from classroom.routers.resources import router as resources_router
from classroom.routers.schedule import router as schedule_router
from classroom.routers.submissions import router as submissions_router

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.APP_NAME)

# Middleware
app.add_middleware(LoggingMiddleware)


# Error envelope: {"success": false, "error": ..., "details"?: ...}
@app.exception_handler(ClassroomError)
async def classroom_error_handler(request: Request, exc: ClassroomError):
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response(exc.message, jsonable_encoder(exc.details)),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content=error_response("Validation error", jsonable_encoder(exc.errors())),
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content=error_response("Internal server error"))


# Health check
@app.get("/health")
def health():
    return {"status": "ok"}


# Startup event
@app.on_event("startup")
def on_startup():
    init_db()


# Include routers
app.include_router(auth_router, prefix="/auth", tags=["auth"])
app.include_router(courses_router, tags=["courses"])
app.include_router(enrollments_router, tags=["enrollments"])
app.include_router(co_teachers_router, tags=["co-teachers"])
app.include_router(people_router, tags=["people"])
app.include_router(assignments_router, tags=["assignments"])
app.include_router(submissions_router, tags=["submissions"])
app.include_router(schedule_router, tags=["schedule"])
app.include_router(resources_router, tags=["resources"])

# Local file store downloads
app.mount("/files", StaticFiles(directory=settings.UPLOAD_DIR, check_dir=False), name="files")
