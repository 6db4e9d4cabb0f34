import logging
from typing import Annotated

from fastapi import Depends, Request

from hellomq.repository.message.pub import EnvelopePubService
from hellomq.repository.rabbitmq.connection import RobustConnection
from hellomq.repository.rabbitmq.publisher import RabbitQueuePublisher

logger = logging.getLogger(__name__)


async def rmq_connection(request: Request) -> RobustConnection:
    """
    Dependency to inject the connection manager.

    The manager is created once per process and attached to the app in
    `create_app`.
    """
    return request.app.state.rmq_connection


async def rmq_queue_publisher(
    connection: Annotated[RobustConnection, Depends(rmq_connection)],
) -> RabbitQueuePublisher:
    return RabbitQueuePublisher(
        channel_provider=connection.current_channel,
        queue_config=connection.queue_config,
    )


async def envelope_pub_service(
    publisher: Annotated[RabbitQueuePublisher, Depends(rmq_queue_publisher)],
) -> EnvelopePubService:
    """
    Dependency to inject the envelope publishing service.
    """
    return EnvelopePubService(publisher)
