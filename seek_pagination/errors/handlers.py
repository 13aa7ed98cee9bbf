"""FastAPI exception handlers for seek pagination errors."""

import logging
from fastapi import Request
from fastapi.responses import JSONResponse

from .problem_details import ProblemDetailException
from .exceptions import SeekPaginationError

logger = logging.getLogger(__name__)


async def problem_detail_exception_handler(
    request: Request,
    exc: ProblemDetailException
) -> JSONResponse:
    """Handle ProblemDetailException instances."""
    log = logger.info if isinstance(exc, SeekPaginationError) else logger.error
    log(
        f"Problem detail exception: {exc.status} - {exc.title}",
        extra={
            "status_code": exc.status,
            "path": str(request.url.path),
            "method": request.method,
            "detail": exc.detail
        }
    )
    return exc.to_response(request)


def register_exception_handlers(app):
    """Register the seek pagination exception handlers with a FastAPI app."""
    app.add_exception_handler(ProblemDetailException, problem_detail_exception_handler)
