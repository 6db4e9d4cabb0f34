from contextlib import asynccontextmanager

from .api import router

__all__ = ["router", "create_app"]


@asynccontextmanager
async def lifespan(app):
    """Lifespan context manager for FastAPI application."""
    # Startup - connect in the background so the HTTP server is up immediately
    app.state.rmq_connection.start()
    yield
    # Shutdown - stop reconnecting and close the broker connection
    app.state.rmq_connection.close()


def create_app(rmq_connection):
    """
    Factory function to create the producer FastAPI application.

    :param rmq_connection: The process's RobustConnection; handlers reach it
        only through dependency injection.
    """
    from fastapi import FastAPI

    from hellomq.producer.exception_handlers import add_exception_handlers

    app = FastAPI(title="Hello World Producer", lifespan=lifespan)
    app.state.rmq_connection = rmq_connection
    app.include_router(router)
    add_exception_handlers(app)
    return app
