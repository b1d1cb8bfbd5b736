"""filestore entry point.

Loads ``config.json`` (or ``--config``), then serves /list, /upload, /get/ and
/delete until interrupted. A missing or invalid config file is fatal.
"""

from __future__ import annotations

import argparse
import logging
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version

from filestore.config import DEFAULT_CONFIG_PATH, Settings
from filestore.errors import ConfigError
from filestore.logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _version() -> str:
    try:
        return get_version("filestore")
    except PackageNotFoundError:
        return "unknown"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="filestore",
        description="Token-gated HTTP file storage service",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  filestore                           Serve using ./config.json
  filestore --config /etc/fs.json     Use another config file
  filestore --port 9000               Override the listen port
""",
    )
    parser.add_argument(
        "--config",
        "-c",
        default=str(DEFAULT_CONFIG_PATH),
        help=f"Path to the JSON config file (default: {DEFAULT_CONFIG_PATH})",
    )
    parser.add_argument(
        "--host", type=str, default=None, help="Host to bind (default: from config, 0.0.0.0)"
    )
    parser.add_argument(
        "--port", "-p", type=int, default=None, help="Port to bind (default: from config, 8082)"
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    parser.add_argument("--version", "-v", action="version", version=f"%(prog)s {_version()}")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(level=args.log_level)

    try:
        settings = Settings.load(args.config)
    except ConfigError as e:
        logger.error("Error loading config: %s", e)
        raise SystemExit(1)

    settings = settings.with_overrides(host=args.host, port=args.port)

    from filestore.api.serve import run_api_server

    try:
        run_api_server(settings)
    except KeyboardInterrupt:
        logger.info("filestore stopped.")
    except OSError as e:
        logger.error("Error starting server: %s", e)
        raise SystemExit(1)


if __name__ == "__main__":
    main()
