import logging.config

import click
import uvicorn
from dotenv import load_dotenv

from browserd.config.provider import EnvConfigProvider
from browserd.logging_config import get_logging_config

load_dotenv()


@click.command()
@click.option("--host", "host", default=None, help="Bind address (default: API_HOST or 0.0.0.0)")
@click.option("--port", "port", type=int, default=None, help="Listen port (default: MCP_PORT or 8080)")
@click.option("--log-level", "log_level", default=None, help="Log level (default: LOG_LEVEL or INFO)")
@click.option("--reload/--no-reload", "reload", default=None, help="Auto-reload on code changes")
def main(host, port, log_level, reload):
    """Run the browserd HTTP server."""
    api_config = EnvConfigProvider().get_api_config()
    log_level = (log_level or api_config.log_level).upper()
    logging_config = get_logging_config(log_level)
    logging.config.dictConfig(logging_config)

    uvicorn.run(
        "browserd.main:app",
        host=host or api_config.host,
        port=port or api_config.port,
        log_level=log_level.lower(),
        reload=api_config.debug if reload is None else reload,
        log_config=logging_config,
    )


if __name__ == "__main__":
    main()
