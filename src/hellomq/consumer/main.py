import logging
from typing import Optional

import typer
from typing_extensions import Annotated

from hellomq.config import HelloMQConfig
from hellomq.consumer.service import MessageConsumerService
from hellomq.logging_config import setup_logging
from hellomq.repository.rabbitmq.config import hello_world_queue_config
from hellomq.repository.rabbitmq.connection import RobustConnection
from hellomq.util import mask_url_credentials

app = typer.Typer()
logger = logging.getLogger(__name__)


@app.command()
def start(
    rabbitmq_url: Annotated[
        str, typer.Option(envvar="RABBITMQ_URL")
    ] = HelloMQConfig.DEFAULT_RABBITMQ_URL,
    reconnect_delay: Annotated[
        float,
        typer.Option(
            envvar="HELLOMQ_RECONNECT_DELAY",
            help="Seconds between RabbitMQ connection attempts",
        ),
    ] = HelloMQConfig.RECONNECT_DELAY,
    app_env: Annotated[Optional[str], typer.Option(envvar="APP_ENV")] = None,
    log_otlp: Annotated[
        bool,
        typer.Option(
            envvar="HELLOMQ_LOG_OTLP", help="Enable OpenTelemetry OTLP logging"
        ),
    ] = False,
):
    """Start the consumer that logs and acknowledges every queued message."""
    # Setup logging first - this is a standalone service (no uvicorn)
    setup_logging(
        microservice_name=HelloMQConfig.CONSUMER,
        app_env=app_env,
        enable_otel=log_otlp,
    )

    queue_config = hello_world_queue_config()
    logger.info("Message Consumer Service Starting...")
    logger.info("Queue: %s", queue_config.name)
    logger.info("RabbitMQ URL: %s", mask_url_credentials(rabbitmq_url))

    rmq_connection = RobustConnection(
        url=rabbitmq_url,
        queue_config=queue_config,
        reconnect_delay=reconnect_delay,
    )
    MessageConsumerService(rmq_connection).run()
