"""FastAPI application setup."""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.middleware import RequestLoggerMiddleware
from routers import chat, health, qa
from schemas.common import ErrorResponse
from src.config.logger import configure_logging
from src.config.settings import get_settings


# Raises at import when OPENROUTER_API_KEY is missing
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.log_level)
    logger.info("Relay ready (model={}, upstream={})", settings.openrouter_model, settings.openrouter_api_url)
    yield


app = FastAPI(
    title="AI Multi-Question Relay",
    description="Streams answers for batches of questions from an upstream chat-completion API",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(RequestLoggerMiddleware)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404 and exc.detail == "Not Found":
        return _error(404, "Route not found")
    return _error(exc.status_code, str(exc.detail))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
    else:
        message = "Invalid request body"
    return _error(400, message)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.opt(exception=exc).error("Unhandled error on {} {}", request.method, request.url.path)
    return _error(500, "Internal server error")


# Include routers
app.include_router(qa.router, prefix="/api", tags=["QA"])
app.include_router(chat.router, prefix="/api", tags=["Chat"])
app.include_router(health.router, tags=["Health"])
