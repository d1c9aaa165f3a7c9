import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .custom import OverviewUnavailableError, UploadRejectedError

logger = logging.getLogger(__name__)


async def overview_unavailable_handler(_request: Request, exc: OverviewUnavailableError) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={"message": exc.message},
    )


async def upload_rejected_handler(_request: Request, exc: UploadRejectedError) -> JSONResponse:
    logger.warning("Upload rejected: %s", exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(OverviewUnavailableError, overview_unavailable_handler)
    app.add_exception_handler(UploadRejectedError, upload_rejected_handler)
