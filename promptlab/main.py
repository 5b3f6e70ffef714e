import logging

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from redis.exceptions import RedisError

from promptlab.config import get_settings
from promptlab.api import admin, evaluate, use_cases, workspace
from promptlab.custom_logging import configure_logging
from promptlab.exceptions import PromptLabError
from promptlab.utils.response import create_response, error_body
import promptlab.databases.postgres.model as models
from promptlab.databases.postgres.database import engine

settings = get_settings()
configure_logging(settings.log_level, debug=settings.debug)

app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    Prompt-writing trainer: generates department use cases and scores prompts against a rubric.
    """,
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"]
)

@app.on_event("startup")
def on_startup() -> None:
    """Create tables when app starts."""
    logging.info("App startup: ensuring database tables exist")
    models.Base.metadata.create_all(bind=engine)

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request, exc):
    return JSONResponse(
        status_code=400,
        content=create_response(False, "Request invalid", None, {"detail": jsonable_errors(exc)})
    )

@app.exception_handler(HTTPException)
async def http_exception_handler(request, exc):
    return JSONResponse(
        status_code=exc.status_code,
        content=create_response(False, exc.detail, None, None)
    )

@app.exception_handler(RedisError)
async def redis_exception_handler(request, exc):
    logging.error(f"Workspace store unavailable: {exc}")
    return JSONResponse(
        status_code=503,
        content=create_response(False, "Workspace temporarily unavailable", None, None)
    )

@app.exception_handler(PromptLabError)
async def promptlab_exception_handler(request, exc):
    logging.error(f"Unhandled service error: {exc}")
    return JSONResponse(
        status_code=500,
        content=error_body(exc, "Something went wrong. Please try again.")
    )

def jsonable_errors(exc: RequestValidationError) -> list:
    # ctx may carry the raw ValueError
    return [
        {key: (str(value) if key == "ctx" else value) for key, value in error.items()}
        for error in exc.errors()
    ]

app.include_router(use_cases.router, tags=["Use Cases"], prefix="/api/v1")
app.include_router(evaluate.router, tags=["Evaluate"], prefix="/api/v1")
app.include_router(workspace.router, tags=["Workspace"], prefix="/api/v1")
app.include_router(admin.router, tags=["Admin"], prefix="/api/v1/admin")

@app.get("/")
async def root():
    return {"message": "PromptLab Server running..."}

@app.get("/health", tags=["Health"])
async def health_check():
    """Health Check Endpoint"""
    return {
        "status": "healthy",
        "services": {
            "api": "up",
            "gemini": "configured" if settings.gemini_api_key else "missing api key",
        },
    }
