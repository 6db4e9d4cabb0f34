"""
Shared pytest fixtures and utilities for testing.

## Mock Message Infrastructure

The mocks follow the same interfaces as the RabbitMQ classes, so services can
be exercised without a broker.

- `MockMessagePublisher`: records every published message string
- `MockMessageSubscriber`: hands out queued `IncomingMessage`s and records
  which delivery tags were acknowledged
- `FakeClock`: an injectable `wait` for `RobustConnection` that records the
  requested delays and asks the loop to stop after a number of waits

### Usage Examples

```python
def test_consumer_acks(mock_message_subscriber, mock_rmq_connection):
    mock_message_subscriber.queue_message(b'{"message": "hi"}')
    service = MessageConsumerService(mock_rmq_connection, subscriber=mock_message_subscriber)
    service.process_messages()
    assert mock_message_subscriber.acked_tags == [1]
```
"""

from typing import List, Optional, Union
from unittest.mock import Mock

import pytest

from hellomq.repository.message.abstract_interface import (
    IncomingMessage,
    MessagePublisherInterface,
    MessageSubscriberInterface,
)
from hellomq.repository.rabbitmq.config import hello_world_queue_config
from hellomq.repository.rabbitmq.connection import RobustConnection


class MockMessagePublisher(MessagePublisherInterface):
    """
    Mock implementation of MessagePublisherInterface for testing.

    This mock tracks all published messages and allows inspection of what was sent.
    """

    def __init__(self):
        self.published_messages: List[str] = []
        self.publish_call_count = 0

    def publish(self, message: str) -> None:
        self.published_messages.append(message)
        self.publish_call_count += 1

    def get_last_message(self) -> str:
        if not self.published_messages:
            raise ValueError("No messages have been published")
        return self.published_messages[-1]


class MockMessageSubscriber(MessageSubscriberInterface):
    """
    Mock implementation of MessageSubscriberInterface for testing.

    Queued bodies are wrapped in IncomingMessage objects whose ack records the
    delivery tag, so tests can check exactly what was acknowledged.
    """

    def __init__(self):
        self._queued_messages: List[IncomingMessage] = []
        self._next_tag = 1
        self.acked_tags: List[int] = []
        self.consume_call_count = 0
        self.shutdown_called = False

    def consume(self) -> List[IncomingMessage]:
        """Return all queued messages and clear the queue."""
        self.consume_call_count += 1
        messages = self._queued_messages.copy()
        self._queued_messages.clear()
        return messages

    def queue_message(
        self, body: Union[bytes, str], ack: Optional[Mock] = None
    ) -> IncomingMessage:
        """Add a message to be returned by the next consume() call."""
        if isinstance(body, str):
            body = body.encode("utf-8")
        tag = self._next_tag
        self._next_tag += 1
        if ack is None:

            def ack():
                self.acked_tags.append(tag)

        message = IncomingMessage(body=body, ack=ack, delivery_tag=tag)
        self._queued_messages.append(message)
        return message

    def has_queued_messages(self) -> bool:
        return bool(self._queued_messages)

    def shutdown(self) -> None:
        self.shutdown_called = True


class FakeClock:
    """
    Stand-in for `RobustConnection`'s `wait`.

    Records each requested delay without sleeping and returns True (stop) once
    `stop_after` waits have happened.
    """

    def __init__(self, stop_after: int):
        self.stop_after = stop_after
        self.waits: List[float] = []

    def __call__(self, seconds: float) -> bool:
        self.waits.append(seconds)
        return len(self.waits) >= self.stop_after


def make_mock_amqp_connection(is_open: bool = True) -> Mock:
    """An amqpstorm-like connection whose channel() returns a fresh mock channel."""
    connection = Mock()
    connection.is_open = is_open
    connection.channel.return_value = Mock()
    return connection


@pytest.fixture
def mock_message_publisher():
    return MockMessagePublisher()


@pytest.fixture
def mock_message_subscriber():
    return MockMessageSubscriber()


@pytest.fixture
def mock_channel():
    return Mock()


@pytest.fixture
def mock_rmq_connection(mock_channel):
    """A connected RobustConnection stand-in holding `mock_channel`."""
    connection = Mock(spec=RobustConnection)
    connection.queue_config = hello_world_queue_config()
    connection.reconnect_delay = 5.0
    connection.is_connected.return_value = True
    connection.current_channel.return_value = mock_channel
    return connection


@pytest.fixture
def disconnected_rmq_connection():
    """A RobustConnection stand-in that holds no channel."""
    connection = Mock(spec=RobustConnection)
    connection.queue_config = hello_world_queue_config()
    connection.reconnect_delay = 5.0
    connection.is_connected.return_value = False
    connection.current_channel.return_value = None
    return connection
