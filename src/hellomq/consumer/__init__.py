from .service import MessageConsumerService

__all__ = ["MessageConsumerService"]
