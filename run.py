"""Entry point for the Help Hive Events API.

Connects to MongoDB before serving so that an unreachable database is
reported immediately and the process exits with a non-zero status.
Once connected, the FastAPI application is served by Uvicorn on
``HOST``/``PORT`` (default ``0.0.0.0:5000``).

Configuration is read from environment variables; see
``help_hive_api/app/core/config.py`` for the supported names.

Usage:
    python run.py
"""
import asyncio
import logging
import sys

from pymongo.errors import PyMongoError
from uvicorn import Config, Server

from help_hive_api.app.core.config import settings
from help_hive_api.app.core.db import connect
from help_hive_api.app.core.logging_config import setup_logging
from help_hive_api.app.main import create_app

logger = logging.getLogger("help_hive_api.run")


async def serve() -> None:
    """Connect to the database and run the API until interrupted."""
    try:
        database = connect(settings)
    except PyMongoError:
        logger.exception("Startup error: could not connect to MongoDB")
        sys.exit(1)

    app = create_app(settings=settings, database=database)
    config = Config(app=app, host=settings.host, port=settings.port, reload=False, log_level="info")
    server = Server(config)
    logger.info("Server is running on port %s", settings.port)
    await server.serve()


def main() -> None:
    setup_logging(settings.log_level)
    try:
        asyncio.run(serve())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
