"""設定管理モジュール"""

from beatrice.config.loader import (
    ConfigError,
    ConfigValidationError,
    EnvironmentVariableError,
    expand_env_vars,
    load_config,
)
from beatrice.config.models import (
    CacheConfig,
    Config,
    ContextConfig,
    LLMConfig,
    LoggingConfig,
    PersonaConfig,
    default_summary_llm_config,
)

__all__ = [
    "CacheConfig",
    "Config",
    "ConfigError",
    "ConfigValidationError",
    "ContextConfig",
    "EnvironmentVariableError",
    "LLMConfig",
    "LoggingConfig",
    "PersonaConfig",
    "default_summary_llm_config",
    "expand_env_vars",
    "load_config",
]
