from dataclasses import dataclass

from hellomq.config import HelloMQConfig


@dataclass(frozen=True)
class QueueConfig:
    name: str

    durable: bool
    exclusive: bool
    auto_delete: bool

    def declare_kwargs(self) -> dict:
        return {
            "queue": self.name,
            "durable": self.durable,
            "exclusive": self.exclusive,
            "auto_delete": self.auto_delete,
        }


@dataclass(frozen=True)
class ConsumerConfig:
    # at most one unacknowledged delivery per consumer
    prefetch_count: int = 1
    no_ack: bool = False


def hello_world_queue_config() -> QueueConfig:
    """The durable queue shared by the producer and consumer."""
    return QueueConfig(
        name=HelloMQConfig.QUEUE_NAME,
        durable=True,
        exclusive=False,
        auto_delete=False,
    )
