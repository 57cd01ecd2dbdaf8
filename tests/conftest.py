"""Shared pytest fixtures for the configuration core tests"""

import logging
import os
import sys  # noqa: E402
from pathlib import Path

import pytest

SETTINGS_KEYS = frozenset(
    {
        "SERVER_READ_TIMEOUT",
        "SERVER_WRITE_TIMEOUT",
        "SERVER_IDLE_TIMEOUT",
        "SERVER_GRACEFUL_SHUTDOWN_TIMEOUT",
        "IS_SLAVE",
        "MAX_CONCURRENT_REQUESTS",
        "ENABLE_CORS",
        "ALLOWED_ORIGINS",
        "ALLOWED_METHODS",
        "ALLOWED_HEADERS",
        "ALLOW_CREDENTIALS",
        "LOG_LEVEL",
        "LOG_FORMAT",
        "LOG_ENABLE_FILE",
        "LOG_FILE_PATH",
        "DATABASE_DSN",
        "REDIS_DSN",
    }
)

# Add src directory to Python path for imports
project_root = Path(__file__).parent.parent
src_path = project_root / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))  # noqa: E402

from gpt_load.config.constants import REQUIRED_DEFAULTS  # noqa: E402
from gpt_load.protocols import LineConsole  # noqa: E402


class ScriptedConsole(LineConsole):
    """LineConsole that replays canned answers and records prompts"""

    def __init__(self, answers=None, on_read=None):
        self.answers = list(answers or [])
        self.output: list[str] = []
        self.reads = 0
        self.on_read = on_read

    def read_line(self) -> str:
        self.reads += 1
        if self.on_read is not None:
            self.on_read()
        if not self.answers:
            return ""
        return self.answers.pop(0)

    def write(self, text: str) -> None:
        self.output.append(text)

    @property
    def transcript(self) -> str:
        return "".join(self.output)


@pytest.fixture
def scripted_console():
    """Factory for scripted consoles"""

    def _make(*answers, on_read=None):
        return ScriptedConsole(answers, on_read=on_read)

    return _make


@pytest.fixture
def environ():
    """Isolated environment mapping used instead of os.environ"""
    return {}


@pytest.fixture
def process_environ(monkeypatch):
    """Private copy of os.environ without the recognized settings keys

    Code that defaults to the real process environment writes into this copy,
    so nothing leaks between tests.
    """
    scratch = {
        key: value
        for key, value in os.environ.items()
        if key not in REQUIRED_DEFAULTS and key not in SETTINGS_KEYS
    }
    monkeypatch.setattr(os, "environ", scratch)
    return scratch


@pytest.fixture
def env_file(tmp_path):
    """Path of a settings file that does not exist yet"""
    return tmp_path / ".env"


@pytest.fixture
def write_env_file(env_file):
    """Write settings file content and return its path"""

    def _write(content: str) -> Path:
        env_file.write_text(content, encoding="utf-8")
        return env_file

    return _write


@pytest.fixture(autouse=True)
def reset_root_logger():
    """Restore root logger handlers and level after each test"""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level

    yield

    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
