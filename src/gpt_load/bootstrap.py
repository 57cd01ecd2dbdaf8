"""Service bootstrap

Loads the configuration once, configures logging from it, starts the HTTP
application and keeps it running until SIGINT or SIGTERM, then stops it
within the configured graceful-shutdown timeout.

Any configuration failure at this point is fatal: the error is reported on
stderr and a non-zero exit code is returned.
"""

import signal
import sys
import threading
from collections.abc import Callable, Iterable, MutableMapping
from pathlib import Path

from .config.constants import DEFAULT_ENV_FILE
from .config.manager import ConfigManager
from .config.models import LogConfig, ServerConfig
from .exceptions import ConfigurationError
from .logging_base import SilentMode, get_logger
from .logging_config import setup_logger
from .protocols import ConfigurationProvider, LineConsole, ServiceApp

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1

ShutdownSignals = Iterable[signal.Signals]
DEFAULT_SHUTDOWN_SIGNALS = (signal.SIGINT, signal.SIGTERM)


def display_address(server: ServerConfig) -> str:
    """URL operators can open, showing 0.0.0.0 as localhost"""
    host = "localhost" if server.host == "0.0.0.0" else server.host
    return f"http://{host}:{server.port}"


def wait_for_shutdown(
    stop_event: threading.Event | None = None,
    signals: ShutdownSignals = DEFAULT_SHUTDOWN_SIGNALS,
) -> None:
    """Block until one of ``signals`` arrives or ``stop_event`` is set"""
    if stop_event is None:
        stop_event = threading.Event()

    previous = {}

    def _handler(signum, frame):
        logger.info(f"Received signal {signal.Signals(signum).name}, shutting down")
        stop_event.set()

    for sig in signals:
        previous[sig] = signal.signal(sig, _handler)
    try:
        stop_event.wait()
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)


def run_service(
    app_factory: Callable[[ConfigurationProvider], ServiceApp],
    *,
    env_file: str | Path = DEFAULT_ENV_FILE,
    console: LineConsole | None = None,
    environ: MutableMapping[str, str] | None = None,
    interactive: bool = True,
    silent: bool = True,
    stop_event: threading.Event | None = None,
    signals: ShutdownSignals = DEFAULT_SHUTDOWN_SIGNALS,
) -> int:
    """Run the service until it is asked to stop

    Args:
        app_factory: Builds the HTTP application from the configuration
        env_file: Settings file path
        console: Console used for the first-run prompts
        environ: Environment mapping (defaults to os.environ)
        interactive: Allow creating a missing settings file interactively
        silent: Keep project log output off the console
        stop_event: Event that ends the run when set; signals set it too
        signals: Signals that trigger a graceful shutdown

    Returns:
        Process exit code
    """
    silent_mode = SilentMode(silent)
    setup_logger(LogConfig(), silent_mode)

    try:
        manager = ConfigManager(
            env_file,
            console=console,
            silent_mode=silent_mode,
            environ=environ,
            interactive=interactive,
        )
    except ConfigurationError as e:
        print(f"Failed to load configuration: {e}", file=sys.stderr)
        return EXIT_FAILURE

    setup_logger(manager.get_log_config(), silent_mode)
    manager.display_server_config()

    try:
        app = app_factory(manager)
        app.start()
    except Exception as e:
        logger.exception("Failed to start application")
        print(f"Failed to start application: {e}", file=sys.stderr)
        return EXIT_FAILURE

    server = manager.get_effective_server_config()
    print(f"Server started at {display_address(server)}")
    print("Press Ctrl+C to stop the server")

    wait_for_shutdown(stop_event, signals)

    logger.info(
        f"Stopping server (timeout {server.graceful_shutdown_timeout} seconds)"
    )
    app.stop(timeout=float(server.graceful_shutdown_timeout))
    logger.info("Server stopped")
    return EXIT_OK


def main(app_factory: Callable[[ConfigurationProvider], ServiceApp]) -> None:
    """Run the service and exit the process with its exit code"""
    sys.exit(run_service(app_factory))
