"""
Uvicorn launcher for the inventory service.

Host, port and cache directory come from the command line, falling back to
Settings (env/.env) for anything not given:

    python run.py -h 127.0.0.1 -p 3001 -c cache
"""

import argparse
from typing import List, Optional

import uvicorn  # type: ignore

from inventory_service.api.main import create_app
from inventory_service.core.config import Settings, get_settings
from inventory_service.core.logger import get_logger

logger = get_logger(__name__)


def build_parser(defaults: Settings) -> argparse.ArgumentParser:
    # -h is taken by --host, so help is only available as --help.
    parser = argparse.ArgumentParser(description="Inventory registration service", add_help=False)
    parser.add_argument("--help", action="help", help="show this help message and exit")
    parser.add_argument("-h", "--host", default=defaults.HOST, metavar="ADDRESS", help="host address")
    parser.add_argument("-p", "--port", type=int, default=defaults.PORT, metavar="NUMBER", help="server port")
    parser.add_argument(
        "-c", "--cache", default=defaults.CACHE_DIR, metavar="PATH", help="path to cache directory"
    )
    return parser


# PUBLIC_INTERFACE
def resolve_settings(argv: Optional[List[str]] = None) -> Settings:
    """Return Settings with command-line values taking precedence over env/.env."""
    base = get_settings()
    args = build_parser(base).parse_args(argv)
    return base.model_copy(update={"HOST": args.host, "PORT": args.port, "CACHE_DIR": args.cache})


# PUBLIC_INTERFACE
def main(argv: Optional[List[str]] = None) -> None:
    """Start the inventory service with uvicorn."""
    settings = resolve_settings(argv)
    app = create_app(settings)
    logger.info(f"Server running at {settings.origin()}/", extra={"cache_dir": str(settings.cache_path())})
    uvicorn.run(
        app,
        host=settings.HOST,
        port=settings.PORT,
        reload=False,
        log_level=(settings.LOG_LEVEL or "INFO").lower(),
    )


if __name__ == "__main__":
    main()
