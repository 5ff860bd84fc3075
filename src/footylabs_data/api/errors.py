"""
Error handling for API responses.

Error bodies are flat objects keyed by "error":
- 400 selection errors: {"error", "league", "position"}
- 500 failures: {"error", "details"}
"""

from typing import Any, Optional

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse

from ..services.percentiles import CohortSelectionError, DataStoreError


class APIError(HTTPException):
    """
    Base API error class.

    Subclasses supply the response body through `content()`.
    """

    def __init__(
        self,
        status_code: int,
        message: str,
        headers: Optional[dict[str, str]] = None,
    ):
        self.message = message
        super().__init__(status_code=status_code, detail=message, headers=headers)

    def content(self) -> dict[str, Any]:
        return {"error": self.message}


class SelectionError(APIError):
    """League or position missing or unrecognized (400)."""

    def __init__(self, message: str, league: Optional[str], position: Optional[str]):
        super().__init__(status_code=400, message=message)
        self.league = league
        self.position = position

    def content(self) -> dict[str, Any]:
        return {"error": self.message, "league": self.league, "position": self.position}


class InternalError(APIError):
    """Unexpected or upstream failure (500)."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(status_code=500, message=message)
        self.details = details

    def content(self) -> dict[str, Any]:
        return {"error": self.message, "details": self.details}


def to_api_error(exc: Exception) -> APIError:
    """Translate a service exception into its API error."""
    if isinstance(exc, CohortSelectionError):
        return SelectionError(exc.message, exc.league, exc.position)
    if isinstance(exc, DataStoreError):
        return InternalError(exc.message, exc.details)
    raise TypeError(f"No API error for {type(exc).__name__}")


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """
    FastAPI exception handler for APIError.

    Converts APIError exceptions to JSON responses.
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.content(),
        headers=exc.headers,
    )


async def service_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """FastAPI exception handler for CohortSelectionError and DataStoreError."""
    return await api_error_handler(request, to_api_error(exc))
