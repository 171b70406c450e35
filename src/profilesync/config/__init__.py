"""Application configuration helpers."""

from __future__ import annotations

from .backend import (
    DEFAULT_API_BASE_URL,
    BackendConfig,
    get_backend_config,
    normalize_base_url,
)
from .env import env_flag, env_positive_float, optional_env_var
from .errors import ConfigurationError, InvalidConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .reconciliation import (
    ProvisioningMode,
    ReconciliationConfig,
    get_reconciliation_config,
)

__all__ = [
    "DEFAULT_API_BASE_URL",
    "BackendConfig",
    "ConfigurationError",
    "InvalidConfigurationError",
    "ProvisioningMode",
    "RateLimit",
    "ReconciliationConfig",
    "ResilienceConfig",
    "RetryPolicy",
    "configure_logging",
    "env_flag",
    "env_positive_float",
    "get_backend_config",
    "get_reconciliation_config",
    "normalize_base_url",
    "optional_env_var",
]
