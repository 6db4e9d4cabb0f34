import abc
from dataclasses import dataclass
from typing import Callable, Optional


@dataclass(frozen=True)
class IncomingMessage:
    """A delivered message that stays on the queue until `ack` is called."""

    body: bytes
    ack: Callable[[], None]
    delivery_tag: Optional[int] = None


class MessagePublisherInterface(abc.ABC):
    @abc.abstractmethod
    def publish(self, message: str) -> None:
        pass


class MessageSubscriberInterface(abc.ABC):
    @abc.abstractmethod
    def consume(self) -> list[IncomingMessage]:
        """
        Retrieve the messages delivered since the last call.

        Non-blocking
        """
        pass

    @abc.abstractmethod
    def shutdown(self) -> None:
        """Stop receiving messages and release any resources."""
        pass
