import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

from app.core import config
from app.core.errors import RegistrationError
from app.core.logging_middleware import LoggingMiddleware
from app.db.init_db import init_db

from app.routers.admin import router as admin_router
from app.routers.auth import router as auth_router
from app.routers.courses import router as courses_router
from app.routers.registrations import router as registrations_router

logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title="Course Registration")

# Middleware (the last one added runs first, so the session is loaded before logging reads it)
app.add_middleware(LoggingMiddleware)
app.add_middleware(
    SessionMiddleware,
    secret_key=config.SESSION_SECRET_KEY,
    session_cookie=config.SESSION_COOKIE_NAME,
    max_age=int(config.SESSION_MAX_AGE.total_seconds()),
    same_site="lax",
)


@app.exception_handler(RegistrationError)
def registration_error_handler(request: Request, exc: RegistrationError):
    logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
def validation_error_handler(request: Request, exc: RequestValidationError):
    problems = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err["loc"] if part != "body")
        problems.append(f"{field}: {err['msg']}" if field else err["msg"])
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request: " + "; ".join(problems)},
    )


# Health check
@app.get("/health")
def health():
    return {"status": "ok"}


# Startup event
@app.on_event("startup")
def on_startup():
    config.validate_runtime_config()
    init_db()


# Include routers
app.include_router(auth_router, prefix="/api", tags=["auth"])
app.include_router(courses_router, prefix="/api/courses", tags=["courses"])
app.include_router(registrations_router, prefix="/api/registrations", tags=["registrations"])
app.include_router(admin_router, prefix="/api", tags=["admin"])
