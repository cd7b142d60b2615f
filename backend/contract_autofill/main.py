"""
FastAPI Application - Contract Autofill Service
Main application entry point with CORS, error handlers and router configuration.
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from contract_autofill import __version__
from contract_autofill.config import get_settings
from contract_autofill.core.exceptions import AutofillError, ValidationError
from contract_autofill.core.logger import get_logger
from contract_autofill.database import create_tables
from contract_autofill.routers import contracts, documents
from contract_autofill.schemas.contract import ErrorResponse


LOGGER = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    create_tables()
    LOGGER.info("Contract Autofill Service started")
    yield


settings = get_settings()

app = FastAPI(
    title="Contract Autofill API",
    description="LLM-assisted extraction and review of real estate contract fields",
    version=__version__,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AutofillError)
async def autofill_error_handler(request: Request, exc: AutofillError):
    """Render domain errors as {error, message[, fields]}."""
    if exc.status_code >= 500:
        LOGGER.error(f"{request.method} {request.url.path} failed: {exc.message}")
    body = ErrorResponse(
        error=exc.error,
        message=exc.message,
        fields=exc.fields if isinstance(exc, ValidationError) else None
    )
    return JSONResponse(status_code=exc.status_code, content=body.model_dump(exclude_none=True))


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Report malformed request bodies as 400 like other validation errors."""
    errors = exc.errors()
    fields = [str(err["loc"][-1]) for err in errors if err.get("loc")]
    message = errors[0]["msg"] if errors else "Invalid request"
    return JSONResponse(
        status_code=400,
        content={"error": ValidationError.error, "message": message, "fields": fields}
    )


# Include routers
app.include_router(contracts.router, prefix="/api/contracts", tags=["Contracts"])
app.include_router(documents.router, prefix="/api/documents", tags=["Documents"])


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": "Contract Autofill API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
        "endpoints": {
            "contracts": "/api/contracts",
            "documents": "/api/documents"
        }
    }
