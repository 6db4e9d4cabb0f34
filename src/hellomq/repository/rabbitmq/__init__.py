"""
RabbitMQ messaging implementation.

Public API:
    - RobustConnection: Owns the connection/channel and reconnects forever
    - RabbitQueuePublisher: Publishes persistent messages to a queue
    - RabbitQueueSubscriber: Pull-based consumer with manual acknowledgment
    - QueueConfig, ConsumerConfig: Queue declaration and consumption settings
"""

from .config import ConsumerConfig, QueueConfig, hello_world_queue_config
from .connection import RobustConnection
from .publisher import RabbitQueuePublisher
from .subscriber import RabbitQueueSubscriber

__all__ = [
    "RobustConnection",
    "RabbitQueuePublisher",
    "RabbitQueueSubscriber",
    "QueueConfig",
    "ConsumerConfig",
    "hello_world_queue_config",
]
