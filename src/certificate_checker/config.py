import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

ALLOWED_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
TEST_ENVIRONMENTS = {"dev", "test"}


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration loaded from environment variables."""

    service_name: str
    environment: str
    log_level: str
    metrics_namespace: str

    # --- Derived Properties ---
    @property
    def is_test_env(self) -> bool:
        return self.environment.lower() in TEST_ENVIRONMENTS

    @classmethod
    def load_from_env(cls) -> "AppConfig":
        """
        Loads configuration from environment variables, performing validation.
        Every variable has a default; only explicitly invalid values fail,
        raising a ConfigurationError.
        """
        try:
            service_name = os.getenv("SERVICE_NAME", "certificate-checker").strip()
            if not service_name:
                raise ValueError("SERVICE_NAME must not be empty.")

            environment = os.getenv("ENVIRONMENT", "dev").strip()
            if not environment:
                raise ValueError("ENVIRONMENT must not be empty.")

            metrics_namespace = os.getenv(
                "METRICS_NAMESPACE", "CertificateChecker"
            ).strip()
            if not metrics_namespace:
                raise ValueError("METRICS_NAMESPACE must not be empty.")

            log_level = os.getenv("LOG_LEVEL", "INFO").upper()
            if log_level not in ALLOWED_LOG_LEVELS:
                raise ValueError(
                    f"LOG_LEVEL must be one of {ALLOWED_LOG_LEVELS}, not '{log_level}'"
                )

        except ValueError as e:
            raise ConfigurationError(
                f"Invalid value for an environment variable: {e}"
            ) from e

        return cls(
            service_name=service_name,
            environment=environment,
            log_level=log_level,
            metrics_namespace=metrics_namespace,
        )


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """
    Loads the application configuration from environment variables.
    The result is cached, so the environment is only read once per
    execution environment.
    """
    logger.info("Loading application configuration from environment...")
    return AppConfig.load_from_env()
