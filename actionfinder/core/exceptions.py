import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


# --- Custom Exceptions ---


class ActionFinderError(Exception):
    pass


class GenerationError(ActionFinderError):
    """The generative provider call failed or returned no content."""


class ParseError(ActionFinderError):
    """The generated catalog is not a well-formed list of apps."""


class EmbeddingError(ActionFinderError):
    """The embedding provider call failed or returned no usable vector."""


class StoreError(ActionFinderError):
    """An insert or query against the catalog store failed."""


class NoMatch(ActionFinderError):
    def __init__(self, message: str = "No stored action is available to match against."):
        super().__init__(message)


def classify_api_error(e: Exception) -> str:
    name = type(e).__name__
    msg = str(e) if str(e) else ""

    if "Authentication" in name or "401" in msg or "Incorrect API key" in msg:
        return "OpenAI authentication failed: the API key is invalid."
    if "RateLimit" in name or "429" in msg or "rate limit" in msg:
        return "OpenAI rate limit exceeded."
    if "Timeout" in name or "timeout" in msg or "timed out" in msg:
        return "OpenAI request timed out."
    if "Connection" in name or "connect" in msg or "network" in msg:
        return "Could not connect to OpenAI."
    return f"OpenAI request failed: {name}"


# --- Exception Handlers ---


def _error_response(status_code: int, error: str, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error, "message": message})


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(NoMatch)
    async def handle_no_match(request: Request, exc: NoMatch):
        return _error_response(404, "NO_MATCH", str(exc))

    @app.exception_handler(ParseError)
    async def handle_parse_error(request: Request, exc: ParseError):
        return _error_response(502, "CATALOG_PARSE_ERROR", str(exc))

    @app.exception_handler(GenerationError)
    async def handle_generation_error(request: Request, exc: GenerationError):
        return _error_response(503, "GENERATION_ERROR", str(exc))

    @app.exception_handler(EmbeddingError)
    async def handle_embedding_error(request: Request, exc: EmbeddingError):
        return _error_response(503, "EMBEDDING_ERROR", str(exc))

    @app.exception_handler(StoreError)
    async def handle_store_error(request: Request, exc: StoreError):
        logger.error("[StoreError] %s", exc, exc_info=exc)
        return _error_response(500, "STORE_ERROR", str(exc))

    @app.exception_handler(ValueError)
    async def handle_value_error(request: Request, exc: ValueError):
        return _error_response(400, "VALIDATION_ERROR", str(exc))

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.error("[GlobalExceptionHandler] Unhandled exception", exc_info=exc)
        return _error_response(500, "INTERNAL_ERROR", "Internal server error.")
