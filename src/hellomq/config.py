"""
Configuration constants for the hellomq services.

This module contains centralized configuration for service names, the shared
queue, and the defaults used by the producer and consumer entrypoints.
"""

# Global service name for logging/observability systems
SERVICE_NAME = "hellomq"


class HelloMQConfig:
    """Centralized configuration for hellomq services."""

    # Service names (used for log identification and the message envelope)
    PRODUCER = "hello-world"
    CONSUMER = "message-consumer"

    # The single durable queue shared by both services
    QUEUE_NAME = "hello-world-queue"

    # Fixed delay between connection attempts, in seconds. No backoff.
    RECONNECT_DELAY = 5.0

    DEFAULT_PORT = 3000
    DEFAULT_HOST = "0.0.0.0"
    DEFAULT_RABBITMQ_URL = "amqp://localhost:5672"

    GREETING = "Hello World!"
