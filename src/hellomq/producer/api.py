# The producer API - accepts messages over HTTP and enqueues them

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request

from hellomq.config import HelloMQConfig
from hellomq.exceptions import (
    BrokerNotConnectedException,
    MessagePublishException,
    MissingMessageException,
)
from hellomq.models import (
    HealthResponse,
    MessageEnvelope,
    SendMessageResponse,
    StatusResponse,
)
from hellomq.producer.injectors import envelope_pub_service, rmq_connection
from hellomq.repository.message.pub import EnvelopePubService
from hellomq.repository.rabbitmq.connection import RobustConnection
from hellomq.util import get_process_uptime, utc_timestamp

router = APIRouter()

logger = logging.getLogger(__name__)


@router.get("/")
async def status() -> StatusResponse:
    return StatusResponse(
        message=HelloMQConfig.GREETING,
        service=HelloMQConfig.PRODUCER,
        timestamp=utc_timestamp(),
    )


@router.get("/health")
async def health(
    connection: Annotated[RobustConnection, Depends(rmq_connection)],
) -> HealthResponse:
    return HealthResponse(
        uptime=get_process_uptime(),
        rabbitmq="connected" if connection.is_connected() else "disconnected",
    )


@router.post("/send-message")
async def send_message(
    request: Request,
    connection: Annotated[RobustConnection, Depends(rmq_connection)],
    pub_service: Annotated[EnvelopePubService, Depends(envelope_pub_service)],
) -> SendMessageResponse:
    """
    Wrap the request's `message` in an envelope and publish it to the queue.

    The connection check comes first, so a disconnected producer answers 503
    whatever the body holds. The body is read by hand for the same reason.

    :return: the published envelope and the queue it went to
    """
    if not connection.is_connected():
        raise BrokerNotConnectedException()

    body = await _read_json_body(request)
    message = body.get("message") if isinstance(body, dict) else None
    if _is_missing(message):
        raise MissingMessageException()

    envelope = MessageEnvelope.create(message)
    try:
        pub_service.publish_envelope(envelope)
    except BrokerNotConnectedException:
        # lost the channel between the check above and the publish
        raise
    except Exception as e:
        logger.exception("Error sending message: %s", e)
        raise MessagePublishException(str(e)) from e

    logger.info("Message sent to queue %s", connection.queue_config.name)
    return SendMessageResponse(data=envelope, queue=connection.queue_config.name)


def _is_missing(message: Any) -> bool:
    # objects and arrays count as present even when empty
    if isinstance(message, (dict, list)):
        return False
    return not message


async def _read_json_body(request: Request) -> Any:
    content_type = request.headers.get("content-type", "")
    if content_type.split(";")[0].strip().lower() != "application/json":
        return None
    try:
        return await request.json()
    except (ValueError, RecursionError):
        # empty, malformed or too deeply nested; treated as a missing message
        return None
