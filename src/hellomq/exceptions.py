"""
Custom exceptions for the hellomq services.

Each exception maps to one failure the producer HTTP API reports. Connection
failures are not represented here; they surface as amqpstorm errors that the
connection manager logs and retries.
"""


class BrokerNotConnectedException(Exception):
    """Raised when a publish is attempted while no channel is held."""

    error = "RabbitMQ not connected"

    def __init__(self, message: str = None):
        if message is None:
            message = "Unable to send message, RabbitMQ connection not established"
        super().__init__(message)


class MissingMessageException(Exception):
    """Raised when a publish request has no `message` or an empty one."""

    error = "Missing message"

    def __init__(self, message: str = None):
        if message is None:
            message = "Please provide a message in the request body"
        super().__init__(message)


class MessagePublishException(Exception):
    """Raised when the broker rejects or fails a publish for any other reason."""

    error = "Failed to send message"

    def __init__(self, details: str):
        self.details = details
        super().__init__(details)
