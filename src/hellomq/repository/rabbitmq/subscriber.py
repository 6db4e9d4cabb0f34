"""
RabbitMQ subscriber implementation.

Consumes a single queue with manual acknowledgment and re-establishes
consumption every time the connection manager reconnects.
"""

import logging
import queue
import threading
from typing import List, Optional

from amqpstorm import AMQPError, Channel, Message

from hellomq.repository.message.abstract_interface import (
    IncomingMessage,
    MessageSubscriberInterface,
)
from hellomq.repository.rabbitmq.config import ConsumerConfig
from hellomq.repository.rabbitmq.connection import RobustConnection

logger = logging.getLogger(__name__)


class RabbitQueueSubscriber(MessageSubscriberInterface):
    """
    Pull-based subscriber for the connection manager's queue.

    Deliveries are buffered on an internal queue and handed out by `consume`.
    They are not acknowledged here; whoever processes an `IncomingMessage`
    calls its `ack`.
    """

    def __init__(
        self,
        rmq_connection: RobustConnection,
        consumer_config: Optional[ConsumerConfig] = None,
    ) -> None:
        self._rmq_connection = rmq_connection
        self._queue_config = rmq_connection.queue_config
        self._consumer_config = consumer_config or ConsumerConfig()

        self._channel: Optional[Channel] = None
        self._consumer_tag: Optional[str] = None
        self._consumer_thread: Optional[threading.Thread] = None
        self._internal_message_queue: "queue.Queue[IncomingMessage]" = queue.Queue()

        self._lock = threading.RLock()
        self._is_shutting_down = False

        # invoked right away if the manager is already connected
        self._rmq_connection.register_on_connected(self._initialize_channel)

        logger.info(
            "RabbitQueueSubscriber initialized for queue %s", self._queue_config.name
        )

    def _initialize_channel(self, channel: Channel) -> None:
        """Set QoS and start consuming on a freshly connected channel."""
        with self._lock:
            if self._is_shutting_down:
                return

            # anything still buffered came from a dead channel and will be redelivered
            discarded = self._drain()
            if discarded:
                logger.info(
                    "Discarded %d unacknowledged messages from previous connection",
                    len(discarded),
                )

            try:
                channel.basic.qos(prefetch_count=self._consumer_config.prefetch_count)
                consumer_tag = channel.basic.consume(
                    callback=self._message_handler,
                    queue=self._queue_config.name,
                    no_ack=self._consumer_config.no_ack,
                )
            except Exception as e:
                logger.exception("Failed to start consuming: %s", e)
                self._rmq_connection.mark_disconnected(
                    f"consumer setup failed: {e}", channel=channel
                )
                return

            self._channel = channel
            self._consumer_tag = consumer_tag
            self._consumer_thread = threading.Thread(
                target=self._consuming_loop,
                args=(channel,),
                name=f"rmq-subscriber-{self._queue_config.name}",
                daemon=True,
            )
            self._consumer_thread.start()

        logger.info("Waiting for messages in queue: %s", self._queue_config.name)

    def _consuming_loop(self, channel: Channel) -> None:
        """Block on the channel until it closes, then hand recovery to the manager."""
        reason = "consumer stopped"
        try:
            # raw bytes; decoding is the consumer's job
            channel.start_consuming(auto_decode=False)
        except AMQPError as e:
            reason = str(e)
            if not self._is_shutting_down:
                logger.error("RabbitMQ connection error: %s", e)
        except Exception as e:
            reason = str(e)
            if not self._is_shutting_down:
                logger.exception("Unexpected error in consuming loop: %s", e)

        if self._is_shutting_down:
            return

        with self._lock:
            if self._channel is not channel:
                # a newer channel has already taken over
                return
            self._channel = None
            self._consumer_tag = None

        self._rmq_connection.mark_disconnected(reason, channel=channel)

    def _message_handler(self, message: Message) -> None:
        """Buffer a delivery for retrieval in `consume`."""
        self._internal_message_queue.put(
            IncomingMessage(
                body=message.body,
                ack=message.ack,
                delivery_tag=message.delivery_tag,
            )
        )
        logger.debug("Message received: %s", message.delivery_tag)

    def _drain(self) -> List[IncomingMessage]:
        messages = []
        while True:
            try:
                # don't block - will return immediately if no messages are available
                messages.append(self._internal_message_queue.get(block=False))
            except queue.Empty:
                break
        return messages

    def consume(self) -> List[IncomingMessage]:
        """
        Consume messages from the internal queue.
        This method retrieves all available messages and is non-blocking.

        :return: List of delivered, not yet acknowledged messages.
        """
        return self._drain()

    def shutdown(self) -> None:
        """
        Shutdown the subscriber by cancelling the consumer and stopping its thread.
        """
        logger.info("Shutting down RabbitQueueSubscriber...")

        with self._lock:
            self._is_shutting_down = True
            channel = self._channel
            consumer_tag = self._consumer_tag
            self._channel = None
            self._consumer_tag = None

        self._rmq_connection.unregister_on_connected(self._initialize_channel)

        if channel is not None and channel.is_open:
            try:
                if consumer_tag:
                    channel.basic.cancel(consumer_tag)
                channel.stop_consuming()
            except Exception as e:
                logger.debug("Error stopping consumer: %s", e)

        if self._consumer_thread and self._consumer_thread.is_alive():
            self._consumer_thread.join(timeout=5.0)

        logger.info("RabbitQueueSubscriber shutdown complete")
