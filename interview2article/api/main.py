"""FastAPI application setup."""

import logging

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from interview2article import __version__
from interview2article.api.exceptions import DraftTooLongError, ValidationError
from interview2article.api.response import error_response
from interview2article.api.routes import ai, export, health, quotes, workflow
from interview2article.llm import LLMError

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Interview2Article API",
    description="Quote verification, AI drafting and provenance export for interview-based articles",
    version=__version__,
)

# CORS middleware for frontend dev server
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:5173",
        "http://localhost:8080",
        "http://127.0.0.1:5173",
        "http://127.0.0.1:8080",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Exception handlers
@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    """Handle validation errors."""
    return JSONResponse(
        status_code=400,
        content=error_response("VALIDATION_ERROR", exc.message),
    )


@app.exception_handler(DraftTooLongError)
async def draft_too_long_handler(request: Request, exc: DraftTooLongError) -> JSONResponse:
    """Handle drafts cut off by the token limit."""
    return JSONResponse(
        status_code=422,
        content=error_response("DRAFT_TOO_LONG", str(exc)),
    )


@app.exception_handler(LLMError)
async def llm_error_handler(request: Request, exc: LLMError) -> JSONResponse:
    """Handle LLM/AI service errors."""
    logger.error(
        "AI request failed: %s",
        exc,
        extra={"provider": exc.provider, "correlation_id": exc.correlation_id},
    )
    return JSONResponse(
        status_code=503,
        content=error_response(
            "AI_SERVICE_ERROR",
            "AI service is temporarily unavailable. Please try again.",
            retryable=True,
        ),
    )


# Register routes
app.include_router(health.router)
app.include_router(quotes.router, prefix="/api")
app.include_router(ai.router, prefix="/api")
app.include_router(workflow.router, prefix="/api")
app.include_router(export.router, prefix="/api")
