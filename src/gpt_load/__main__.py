"""Entry point: load, validate and summarise the gpt-load configuration."""

import argparse
import json
import sys

from .config.constants import DEFAULT_ENV_FILE
from .config.manager import ConfigManager
from .config.models import LogConfig
from .exceptions import ConfigurationError
from .logging_base import SilentMode
from .logging_config import setup_logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gpt_load", description="Validate gpt-load configuration"
    )
    parser.add_argument(
        "--env-file",
        default=DEFAULT_ENV_FILE,
        help=f"Settings file to load (default: {DEFAULT_ENV_FILE})",
    )
    parser.add_argument(
        "--no-interactive",
        action="store_true",
        help="Never prompt to create a missing settings file",
    )
    parser.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Output format",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Load the configuration and report it

    Returns:
        0 when the configuration is valid, 1 otherwise
    """
    args = build_parser().parse_args(argv)
    silent_mode = SilentMode()
    # stdout carries the report
    setup_logger(LogConfig(), silent_mode, console_stream=sys.stderr)

    try:
        manager = ConfigManager(
            args.env_file,
            silent_mode=silent_mode,
            interactive=not args.no_interactive,
        )
    except ConfigurationError as e:
        print(f"Configuration invalid: {e}", file=sys.stderr)
        return 1

    if args.format == "json":
        print(json.dumps(manager.snapshot.get_masked_dict(), indent=2))
    else:
        setup_logger(manager.get_log_config(), silent_mode)
        manager.display_server_config()
    return 0


if __name__ == "__main__":
    sys.exit(main())
