"""
Message consumer service.

Drains the shared queue, logs every message and acknowledges it. Bodies that
are JSON are pretty-printed; anything else is logged as raw text.
"""

import logging
import threading
from typing import Optional

from amqpstorm import AMQPError

from hellomq.repository.message.abstract_interface import MessageSubscriberInterface
from hellomq.repository.message.sub import QueueMessageSubService, ReceivedMessage
from hellomq.repository.rabbitmq.connection import RobustConnection
from hellomq.repository.rabbitmq.subscriber import RabbitQueueSubscriber
from hellomq.util import utc_timestamp

logger = logging.getLogger(__name__)


class MessageConsumerService:
    """
    Logs and acknowledges every message delivered on the queue.

    Acknowledgment does not depend on the body decoding: a malformed payload is
    logged as-is and still removed from the queue.
    """

    def __init__(
        self,
        rmq_connection: RobustConnection,
        poll_interval: float = 0.1,
        subscriber: Optional[MessageSubscriberInterface] = None,
    ):
        """
        :param rmq_connection: Connection manager for the consumed queue
        :param poll_interval: Seconds to sleep between polls of the subscriber
        :param subscriber: Overrides the RabbitMQ subscriber built by default
        """
        self._rmq_connection = rmq_connection
        self._poll_interval = poll_interval
        self._running = False
        self._stop_event = threading.Event()

        self._subscriber = subscriber or RabbitQueueSubscriber(rmq_connection)
        self._sub_service = QueueMessageSubService(self._subscriber)

        logger.info("MessageConsumerService initialized")

    def process_messages(self) -> int:
        """
        Log and acknowledge every pending message.

        :return: number of messages handled
        """
        messages = self._sub_service.get_messages()
        for message in messages:
            self._log_message(message)
            self._acknowledge(message)
        return len(messages)

    def _log_message(self, message: ReceivedMessage) -> None:
        logger.info(
            "[%s] Received message:\n%s\n---", utc_timestamp(), message.pretty()
        )

    def _acknowledge(self, message: ReceivedMessage) -> None:
        try:
            message.ack()
        except AMQPError as e:
            # the channel it arrived on is gone; the broker will redeliver it
            logger.warning(
                "Failed to acknowledge message %s: %s",
                message.incoming.delivery_tag,
                e,
            )

    def run(self) -> None:
        """
        Run the consumer service.

        Starts the connection manager and polls for messages until `stop` is
        called or the process is interrupted.
        """
        logger.info("Starting MessageConsumerService")
        self._running = True
        self._rmq_connection.start()

        try:
            while self._running:
                self.process_messages()
                if self._stop_event.wait(self._poll_interval):
                    break
        except KeyboardInterrupt:
            logger.info("MessageConsumerService interrupted by user")
        finally:
            self._running = False
            self._subscriber.shutdown()
            self._rmq_connection.close()
            logger.info("MessageConsumerService stopped")

    def stop(self) -> None:
        """Stop the consumer service."""
        logger.info("Stopping MessageConsumerService")
        self._running = False
        self._stop_event.set()
