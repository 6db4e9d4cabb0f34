"""
Logging setup for the producer and consumer processes.

Both services log to stdout with a `[<service>]` prefix. The producer also
routes uvicorn's loggers through the same format. Log records can additionally
be shipped over OTLP when the `otel` extra is installed.
"""

import logging
import os
import sys
from typing import Optional

try:
    from opentelemetry._logs import set_logger_provider
    from opentelemetry.exporter.otlp.proto.grpc._log_exporter import OTLPLogExporter
    from opentelemetry.sdk._logs import LoggerProvider, LoggingHandler
    from opentelemetry.sdk._logs.export import BatchLogRecordProcessor
    from opentelemetry.sdk.resources import Resource

    OTEL_AVAILABLE = True
except ImportError:
    OTEL_AVAILABLE = False

from hellomq.config import SERVICE_NAME

logger = logging.getLogger(__name__)

SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")

# held at WARNING
QUIET_LOGGERS = ("uvicorn.access", "amqpstorm")


class ServiceConsoleHandler(logging.StreamHandler):
    """stdout handler installed by `setup_logging`; replaced on every call."""

    def __init__(self, microservice_name: Optional[str] = None):
        super().__init__(sys.stdout)
        self.setFormatter(create_formatter(microservice_name))


def create_formatter(microservice_name: Optional[str] = None) -> logging.Formatter:
    """
    Formatter shared by the console and server handlers.

    e.g. `2024-05-01 12:30:00,123 - [hello-world] hellomq.producer.api - INFO - ...`
    """
    service_prefix = f"[{microservice_name}] " if microservice_name else ""
    return logging.Formatter(
        f"%(asctime)s - {service_prefix}%(name)s - %(levelname)s - %(message)s"
    )


def setup_logging(
    level: int = logging.INFO,
    microservice_name: Optional[str] = None,
    app_env: Optional[str] = None,
    enable_otel: bool = False,
) -> None:
    """
    Configure the root logger for one hellomq process.

    Calling it again replaces the handlers a previous call installed, so the
    console never prints a record twice.

    Args:
        level: Level for the root and `hellomq` loggers
        microservice_name: Service shown in every line, e.g. 'hello-world'
        app_env: Deployment environment attached to exported records
        enable_otel: Also export records over OTLP; ignored with a warning
            when the opentelemetry packages are missing
    """
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if isinstance(handler, ServiceConsoleHandler) or (
            OTEL_AVAILABLE and isinstance(handler, LoggingHandler)
        ):
            root_logger.removeHandler(handler)

    root_logger.addHandler(ServiceConsoleHandler(microservice_name))
    root_logger.setLevel(level)
    logging.getLogger("hellomq").setLevel(level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    if enable_otel:
        if OTEL_AVAILABLE:
            root_logger.addHandler(_build_otel_handler(microservice_name, app_env))
        else:
            logger.warning(
                "OTLP logging requested but opentelemetry is not installed; "
                "install hellomq[otel] to enable it"
            )


def setup_server_logging(microservice_name: Optional[str] = None) -> None:
    """
    Route uvicorn loggers through the hellomq formatter.

    Server loggers get their own handler and stop propagating, so the root
    logger (and any OTLP handler on it) is left untouched.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(create_formatter(microservice_name))

    for name in SERVER_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers.clear()
        server_logger.addHandler(handler)
        server_logger.propagate = False
        server_logger.setLevel(
            logging.WARNING if name in QUIET_LOGGERS else logging.INFO
        )


def _build_otel_handler(
    microservice_name: Optional[str], app_env: Optional[str]
) -> logging.Handler:
    resource_attrs = {
        "service.name": SERVICE_NAME,
        "service.instance.id": os.uname().nodename,
    }
    if microservice_name:
        resource_attrs["service.component"] = microservice_name
    if app_env:
        resource_attrs["deployment.environment"] = app_env

    logger_provider = LoggerProvider(resource=Resource.create(resource_attrs))
    set_logger_provider(logger_provider)

    # the exporter falls back to OTEL_EXPORTER_OTLP_ENDPOINT when this is unset
    endpoint = os.getenv("OTEL_EXPORTER_OTLP_LOGS_ENDPOINT")
    logger_provider.add_log_record_processor(
        BatchLogRecordProcessor(OTLPLogExporter(endpoint=endpoint, insecure=True))
    )
    return LoggingHandler(level=logging.NOTSET, logger_provider=logger_provider)
