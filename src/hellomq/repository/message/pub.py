import logging

from hellomq.models import MessageEnvelope
from hellomq.repository.message.abstract_interface import MessagePublisherInterface

logger = logging.getLogger(__name__)


class PubServiceInterface:
    def __init__(self, publisher: MessagePublisherInterface) -> None:
        self._publisher = publisher
        logger.debug(
            "%s initialized with publisher %s",
            self.__class__.__name__,
            self._publisher,
        )


class EnvelopePubService(PubServiceInterface):
    def publish_envelope(self, envelope: MessageEnvelope) -> None:
        """
        Publish a message envelope to RabbitMQ.

        :param envelope: The envelope to publish, serialized as JSON.
        """
        message = envelope.model_dump_json()
        self._publisher.publish(message)
