"""Translate producer exceptions into the JSON error bodies clients expect."""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from hellomq.exceptions import (
    BrokerNotConnectedException,
    MessagePublishException,
    MissingMessageException,
)


async def broker_not_connected_handler(
    request: Request, exc: BrokerNotConnectedException
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"error": exc.error, "message": str(exc)},
    )


async def missing_message_handler(
    request: Request, exc: MissingMessageException
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": exc.error, "message": str(exc)},
    )


async def message_publish_handler(
    request: Request, exc: MessagePublishException
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": exc.error, "details": exc.details},
    )


def add_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BrokerNotConnectedException, broker_not_connected_handler)
    app.add_exception_handler(MissingMessageException, missing_message_handler)
    app.add_exception_handler(MessagePublishException, message_publish_handler)
