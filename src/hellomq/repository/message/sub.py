import json
import logging
from dataclasses import dataclass, field
from typing import Any

from hellomq.repository.message.abstract_interface import (
    IncomingMessage,
    MessageSubscriberInterface,
)

logger = logging.getLogger(__name__)

_NOT_JSON = object()


@dataclass(frozen=True)
class ReceivedMessage:
    """A delivered message decoded to text, and to JSON when it parses."""

    text: str
    incoming: IncomingMessage
    _payload: Any = field(default=_NOT_JSON, repr=False)

    @property
    def is_json(self) -> bool:
        return self._payload is not _NOT_JSON

    @property
    def payload(self) -> Any:
        if not self.is_json:
            raise ValueError("message body is not valid JSON")
        return self._payload

    def pretty(self) -> str:
        """Indented JSON if the body parsed, otherwise the raw text."""
        if not self.is_json:
            return self.text
        try:
            return json.dumps(self._payload, indent=2, ensure_ascii=False)
        except (ValueError, RecursionError) as e:
            logger.debug(
                "Message %s could not be re-encoded: %s", self.incoming.delivery_tag, e
            )
            return self.text

    def ack(self) -> None:
        self.incoming.ack()

    @classmethod
    def decode(cls, incoming: IncomingMessage) -> "ReceivedMessage":
        body = incoming.body
        if isinstance(body, (bytes, bytearray)):
            text = body.decode("utf-8", errors="replace")
        else:
            text = str(body)

        try:
            payload = json.loads(text)
        except (ValueError, RecursionError) as e:
            # nesting beyond the interpreter's recursion limit lands here too
            logger.debug("Message %s is not JSON: %s", incoming.delivery_tag, e)
            return cls(text=text, incoming=incoming)
        return cls(text=text, incoming=incoming, _payload=payload)


class SubServiceInterface:
    def __init__(self, subscriber: MessageSubscriberInterface) -> None:
        self._subscriber = subscriber
        logger.debug(
            "%s initialized with subscriber %s",
            self.__class__.__name__,
            self._subscriber,
        )


class QueueMessageSubService(SubServiceInterface):
    """
    Service for subscribing to queue messages of any shape
    """

    def get_messages(self) -> list[ReceivedMessage]:
        """
        Consume pending messages and decode them.

        Decoding never fails; bodies that are not JSON are kept as text.

        :return: The decoded messages, still unacknowledged.
        """
        return [
            ReceivedMessage.decode(message) for message in self._subscriber.consume()
        ]
