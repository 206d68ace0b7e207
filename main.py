"""Main entry point for the payments API server."""

import argparse
import logging

import uvicorn
from sqlalchemy.engine import make_url

from components.core.config import get_settings
from restapi.router import create_app, create_store

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Serve the payments API.")
    parser.add_argument(
        "--bind-addr",
        default=settings.BIND_ADDR,
        help='the "host:port" combination at which to serve the api server',
    )
    parser.add_argument(
        "--db-url",
        default=None,
        help="the SQLAlchemy URL at which the database can be reached",
    )
    parser.add_argument(
        "--db-name",
        default=None,
        help="the name of the database to use for storage, replacing the one in the database URL",
    )
    return parser.parse_args(argv)


def database_url(args: argparse.Namespace) -> str:
    """Resolve the database URL from the flags, falling back to settings."""
    url = args.db_url or get_settings().async_db_url
    if args.db_name:
        url = make_url(url).set(database=args.db_name).render_as_string(hide_password=False)
    return url


def main(argv=None) -> None:
    args = parse_args(argv)
    settings = get_settings().model_copy(update={"BIND_ADDR": args.bind_addr})

    app = create_app(create_store(database_url(args)))
    logger.info("starting the api server at %s", settings.BIND_ADDR)
    uvicorn.run(app, host=settings.bind_host, port=settings.bind_port, log_config=None)


if __name__ == "__main__":
    main()
