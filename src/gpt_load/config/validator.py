"""Configuration validation

Validation first applies corrections (currently only the graceful-shutdown
floor), then runs every rule and collects all violations into a single error.
"""

from collections.abc import Callable

from ..exceptions import ConfigValidationError
from ..logging_base import get_logger
from .constants import DEFAULT_CONSTANTS, ConfigConstants
from .models import AppConfig

logger = get_logger(__name__)

Rule = Callable[[AppConfig, ConfigConstants], str | None]


def check_port(config: AppConfig, constants: ConfigConstants) -> str | None:
    port = config.server.port
    if port < constants.min_port or port > constants.max_port:
        return f"port must be between {constants.min_port}-{constants.max_port}"
    return None


def check_max_concurrent_requests(
    config: AppConfig, constants: ConfigConstants
) -> str | None:
    if config.performance.max_concurrent_requests < constants.min_concurrent_requests:
        return (
            "max concurrent requests cannot be less than "
            f"{constants.min_concurrent_requests}"
        )
    return None


def check_auth_key(config: AppConfig, constants: ConfigConstants) -> str | None:
    if not config.auth.key:
        return "AUTH_KEY is required and cannot be empty"
    return None


DEFAULT_RULES: tuple[Rule, ...] = (
    check_port,
    check_max_concurrent_requests,
    check_auth_key,
)


class ConfigValidator:
    """Applies corrections and aggregated rule checks to an ``AppConfig``"""

    def __init__(
        self,
        constants: ConfigConstants = DEFAULT_CONSTANTS,
        rules: tuple[Rule, ...] = DEFAULT_RULES,
    ):
        self.constants = constants
        self.rules = rules

    def apply_corrections(self, config: AppConfig) -> AppConfig:
        """Return a copy with out-of-range values clamped

        Raising the graceful-shutdown timeout to its floor is a correction,
        never a violation.
        """
        floor = self.constants.min_graceful_shutdown_timeout
        timeout = config.server.graceful_shutdown_timeout
        if timeout >= floor:
            return config

        logger.warning(
            f"SERVER_GRACEFUL_SHUTDOWN_TIMEOUT value {timeout}s is too short, "
            f"resetting to minimum {floor}s."
        )
        server = config.server.model_copy(update={"graceful_shutdown_timeout": floor})
        return config.model_copy(update={"server": server})

    def collect_violations(self, config: AppConfig) -> list[str]:
        """Run every rule and return all violation messages in rule order"""
        violations = []
        for rule in self.rules:
            message = rule(config, self.constants)
            if message:
                violations.append(message)
        return violations

    def validate(self, config: AppConfig) -> AppConfig:
        """Correct and check a configuration

        Args:
            config: Freshly loaded configuration

        Returns:
            The corrected configuration

        Raises:
            ConfigValidationError: If any rule is violated; the message joins
                every violation with "; "
        """
        corrected = self.apply_corrections(config)
        violations = self.collect_violations(corrected)

        if violations:
            logger.error("Configuration validation failed:")
            for violation in violations:
                logger.error(f"   - {violation}")
            raise ConfigValidationError(
                violations,
                validation_context={
                    "port": corrected.server.port,
                    "max_concurrent_requests": (
                        corrected.performance.max_concurrent_requests
                    ),
                },
            )

        return corrected
