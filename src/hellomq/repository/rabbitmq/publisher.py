"""
RabbitMQ publisher implementation.

Publishes to a single durable queue through the default exchange.
"""

import logging
from typing import Callable, Optional

from amqpstorm import Channel

from hellomq.exceptions import BrokerNotConnectedException
from hellomq.repository.message.abstract_interface import MessagePublisherInterface
from hellomq.repository.rabbitmq.config import QueueConfig

logger = logging.getLogger(__name__)

PERSISTENT_DELIVERY_MODE = 2


class RabbitQueuePublisher(MessagePublisherInterface):
    """
    Publishes messages straight to a named queue.

    The channel is looked up on every publish so a reconnect is picked up
    without rebuilding the publisher.
    """

    def __init__(
        self,
        channel_provider: Callable[[], Optional[Channel]],
        queue_config: QueueConfig,
        content_type: str = "application/json",
    ) -> None:
        self._channel_provider = channel_provider
        self._queue_config = queue_config
        self._properties = {
            "delivery_mode": PERSISTENT_DELIVERY_MODE,
            "content_type": content_type,
        }

    def publish(self, message: str) -> None:
        """
        Publish a message to the configured queue, marked persistent.

        Publish failures are not retried.

        :param message: The message body to be published.
        :raises BrokerNotConnectedException: If no channel is currently held.
        """
        channel = self._channel_provider()
        if channel is None:
            raise BrokerNotConnectedException()

        channel.basic.publish(
            body=message,
            routing_key=self._queue_config.name,
            exchange="",
            properties=self._properties,
        )
        logger.debug("Message published to queue %s", self._queue_config.name)
