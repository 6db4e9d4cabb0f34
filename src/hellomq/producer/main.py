import logging
from typing import Optional

import typer
import uvicorn
from typing_extensions import Annotated

from hellomq.config import HelloMQConfig
from hellomq.logging_config import setup_logging, setup_server_logging
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
    port: Annotated[int, typer.Option(envvar="PORT")] = HelloMQConfig.DEFAULT_PORT,
    host: Annotated[str, typer.Option(envvar="HOST")] = HelloMQConfig.DEFAULT_HOST,
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
    """Start the producer HTTP API that publishes messages to the queue."""
    setup_logging(
        microservice_name=HelloMQConfig.PRODUCER,
        app_env=app_env,
        enable_otel=log_otlp,
    )
    setup_server_logging(HelloMQConfig.PRODUCER)

    logger.info("RabbitMQ URL: %s", mask_url_credentials(rabbitmq_url))

    from hellomq.producer import create_app

    rmq_connection = RobustConnection(
        url=rabbitmq_url,
        queue_config=hello_world_queue_config(),
        reconnect_delay=reconnect_delay,
    )
    fastapp = create_app(rmq_connection)

    logger.info("Hello World microservice listening on port %s", port)
    uvicorn.run(
        fastapp,
        host=host,
        port=port,
        # Disable uvicorn's log configuration since we handle it ourselves
        log_config=None,
    )
