"""Tests for the first-run settings file bootstrapper"""

import os
import stat
from unittest.mock import patch

import pytest

from gpt_load.config.bootstrapper import (
    BootstrapState,
    SettingsBootstrapper,
    StdioConsole,
    render_settings_template,
    write_settings_file,
)
from gpt_load.exceptions import SettingsFileError
from gpt_load.logging_base import SilentMode


class TestSettingsBootstrapper:
    """Test the interactive settings-file conversation"""

    def test_existing_file_skips_prompts(self, write_env_file, scripted_console):
        path = write_env_file("PORT=9000\n")
        console = scripted_console("y")

        outcome = SettingsBootstrapper(path, console=console).run()

        assert outcome.file_present is True
        assert outcome.created is False
        assert console.reads == 0
        assert console.output == []

    def test_decline_writes_nothing(self, env_file, scripted_console):
        console = scripted_console("n")

        outcome = SettingsBootstrapper(env_file, console=console).run()

        assert outcome.file_present is False
        assert outcome.final_state is BootstrapState.SKIP_CREATE
        assert not env_file.exists()
        assert "using default configuration" in console.transcript

    def test_accept_with_defaults(self, env_file, scripted_console):
        console = scripted_console("y", "", "", "")

        outcome = SettingsBootstrapper(env_file, console=console).run()

        assert outcome.created is True
        assert outcome.file_present is True
        assert outcome.final_state is BootstrapState.WRITE_FILE
        content = env_file.read_text(encoding="utf-8")
        assert "PORT=3001\n" in content
        assert "HOST=0.0.0.0\n" in content
        assert "AUTH_KEY=sk-123456\n" in content

    def test_accept_with_custom_values(self, env_file, scripted_console):
        console = scripted_console("YES", "8080", "127.0.0.1", "secret")

        SettingsBootstrapper(env_file, console=console).run()

        content = env_file.read_text(encoding="utf-8")
        assert "PORT=8080\n" in content
        assert "HOST=127.0.0.1\n" in content
        assert "AUTH_KEY=secret\n" in content
        assert "Port (default 3001): " in console.output
        assert "Host address (default 0.0.0.0): " in console.output
        assert "Auth key (default sk-123456): " in console.output

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
    def test_generated_file_is_owner_only(self, env_file, scripted_console):
        SettingsBootstrapper(env_file, console=scripted_console("y")).run()

        mode = stat.S_IMODE(env_file.stat().st_mode)
        assert mode == 0o600

    def test_write_failure_falls_back_to_defaults(self, tmp_path, scripted_console):
        missing_dir_file = tmp_path / "missing" / ".env"
        console = scripted_console("y", "", "", "")

        outcome = SettingsBootstrapper(missing_dir_file, console=console).run()

        assert outcome.file_present is False
        assert outcome.created is False
        assert "Failed to create settings file" in console.transcript

    def test_failed_write_leaves_no_partial_file(self, env_file, scripted_console):
        console = scripted_console("y", "", "", "")

        with patch("gpt_load.config.bootstrapper.os.chmod", side_effect=OSError("disk full")):
            outcome = SettingsBootstrapper(env_file, console=console).run()

        assert outcome.file_present is False
        assert not env_file.exists()

    def test_end_of_input_declines(self, env_file, scripted_console):
        outcome = SettingsBootstrapper(env_file, console=scripted_console()).run()

        assert outcome.file_present is False
        assert not env_file.exists()

    def test_runs_conversation_only_once(self, env_file, scripted_console):
        console = scripted_console("n", "y")
        bootstrapper = SettingsBootstrapper(env_file, console=console)

        first = bootstrapper.run()
        second = bootstrapper.run()

        assert first == second
        assert console.reads == 1

    def test_removed_file_is_reported_missing(self, env_file, scripted_console):
        bootstrapper = SettingsBootstrapper(env_file, console=scripted_console("y"))
        assert bootstrapper.run().file_present is True

        env_file.unlink()

        assert bootstrapper.run().file_present is False

    def test_non_interactive_never_prompts(self, env_file, scripted_console):
        console = scripted_console("y")

        outcome = SettingsBootstrapper(
            env_file, console=console, interactive=False
        ).run()

        assert outcome.file_present is False
        assert console.reads == 0
        assert not env_file.exists()


class TestSilentModeHandling:
    """Test that console logging is suspended during prompts"""

    def test_silent_while_prompting_and_restored(self, env_file, scripted_console):
        silent_mode = SilentMode(False)
        observed = []
        console = scripted_console(
            "n", on_read=lambda: observed.append(silent_mode.enabled)
        )

        SettingsBootstrapper(env_file, console=console, silent_mode=silent_mode).run()

        assert observed == [True]
        assert silent_mode.enabled is False

    def test_prior_silent_value_is_kept(self, env_file, scripted_console):
        silent_mode = SilentMode(True)

        SettingsBootstrapper(
            env_file, console=scripted_console("n"), silent_mode=silent_mode
        ).run()

        assert silent_mode.enabled is True

    def test_restored_when_console_fails(self, env_file, scripted_console):
        silent_mode = SilentMode(False)

        def _explode():
            raise KeyboardInterrupt

        console = scripted_console("y", on_read=_explode)
        bootstrapper = SettingsBootstrapper(
            env_file, console=console, silent_mode=silent_mode
        )

        with pytest.raises(KeyboardInterrupt):
            bootstrapper.run()

        assert silent_mode.enabled is False


class TestSettingsFileHelpers:
    """Test template rendering and file writing"""

    def test_template_contains_every_recognized_key(self):
        content = render_settings_template("3001", "0.0.0.0", "sk-123456")

        for key in [
            "PORT",
            "HOST",
            "SERVER_READ_TIMEOUT",
            "SERVER_WRITE_TIMEOUT",
            "SERVER_IDLE_TIMEOUT",
            "SERVER_GRACEFUL_SHUTDOWN_TIMEOUT",
            "IS_SLAVE",
            "AUTH_KEY",
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
        ]:
            assert f"\n{key}=" in f"\n{content}"
        assert "# REDIS_DSN=" in content
        assert "# DATABASE_DSN=" in content

    def test_write_failure_raises_settings_file_error(self, env_file):
        with patch("gpt_load.config.bootstrapper.os.open", side_effect=PermissionError("denied")):
            with pytest.raises(SettingsFileError) as exc_info:
                write_settings_file(env_file, "PORT=1\n")

        assert exc_info.value.path == str(env_file)
        assert isinstance(exc_info.value.__cause__, PermissionError)

    def test_failure_after_open_removes_file(self, env_file):
        with patch("gpt_load.config.bootstrapper.os.chmod", side_effect=OSError("disk full")):
            with pytest.raises(SettingsFileError):
                write_settings_file(env_file, "PORT=1\n")

        assert not env_file.exists()

    def test_open_failure_keeps_existing_file(self, env_file):
        env_file.write_text("PORT=2\n", encoding="utf-8")

        with patch("gpt_load.config.bootstrapper.os.open", side_effect=PermissionError("denied")):
            with pytest.raises(SettingsFileError):
                write_settings_file(env_file, "PORT=1\n")

        assert env_file.read_text(encoding="utf-8") == "PORT=2\n"


class TestStdioConsole:
    """Test the terminal-backed console"""

    def test_reads_lines_without_newline(self):
        import io

        stdin = io.StringIO("first\r\nsecond\n")
        stdout = io.StringIO()
        console = StdioConsole(stdin=stdin, stdout=stdout)

        assert console.read_line() == "first"
        assert console.read_line() == "second"
        assert console.read_line() == ""

        console.write("prompt: ")
        assert stdout.getvalue() == "prompt: "
