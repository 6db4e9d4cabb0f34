from typing import Any, Literal

from pydantic import BaseModel, ConfigDict

from hellomq.config import HelloMQConfig
from hellomq.util import utc_timestamp


class MessageEnvelope(BaseModel):
    """
    The payload published to the queue for every accepted message.

    Immutable once created.
    """

    model_config = ConfigDict(frozen=True)

    # presence is the only check, so any non-empty JSON value is carried as-is
    message: Any
    timestamp: str
    service: str

    @classmethod
    def create(
        cls, message: Any, service: str = HelloMQConfig.PRODUCER
    ) -> "MessageEnvelope":
        return cls(message=message, timestamp=utc_timestamp(), service=service)


class StatusResponse(BaseModel):
    message: str
    service: str
    timestamp: str


class HealthResponse(BaseModel):
    status: Literal["healthy"] = "healthy"
    uptime: float
    rabbitmq: Literal["connected", "disconnected"]


class SendMessageResponse(BaseModel):
    success: bool = True
    message: str = "Message sent to queue"
    data: MessageEnvelope
    queue: str
