"""YAML設定ファイルの読み込みと環境変数展開"""

import os
import re
from pathlib import Path
from typing import Any

import yaml

from beatrice.config.models import (
    CacheConfig,
    Config,
    ContextConfig,
    LLMConfig,
    LoggingConfig,
    PersonaConfig,
)


class ConfigError(Exception):
    """設定関連の基底例外"""


class ConfigValidationError(ConfigError):
    """設定値のバリデーションエラー"""


class EnvironmentVariableError(ConfigError):
    """環境変数が見つからないエラー"""


# 環境変数パターン: ${VAR_NAME}
ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")

CACHE_BACKENDS = ("none", "memory", "redis")


def expand_env_vars(value: str) -> str:
    """文字列中の ${VAR_NAME} を環境変数の値に置換する

    Args:
        value: 置換対象の文字列

    Returns:
        環境変数が展開された文字列

    Raises:
        EnvironmentVariableError: 環境変数が未設定
    """
    if not value:
        return value

    def replace_var(match: re.Match[str]) -> str:
        var_name = match.group(1)
        env_value = os.environ.get(var_name)
        if env_value is None:
            raise EnvironmentVariableError(
                f"Environment variable '{var_name}' is not set"
            )
        return env_value

    return ENV_VAR_PATTERN.sub(replace_var, value)


def _expand_recursive(data: Any) -> Any:
    """データ構造を再帰的に走査し、文字列中の環境変数を展開する"""
    if isinstance(data, dict):
        return {key: _expand_recursive(value) for key, value in data.items()}
    elif isinstance(data, list):
        return [_expand_recursive(item) for item in data]
    elif isinstance(data, str):
        return expand_env_vars(data)
    else:
        return data


def _validate_required_field(data: dict[str, Any], field: str, parent: str = "") -> Any:
    """必須フィールドの存在を検証する

    Args:
        data: 検証対象のdict
        field: フィールド名
        parent: 親フィールド名（エラーメッセージ用）

    Returns:
        フィールドの値

    Raises:
        ConfigValidationError: フィールドが存在しない
    """
    if field not in data or data[field] is None:
        full_path = f"{parent}.{field}" if parent else field
        raise ConfigValidationError(f"Required field '{full_path}' is missing")
    return data[field]


def _load_llm_configs(llm_data: dict[str, Any] | None) -> dict[str, LLMConfig]:
    """llm セクションを読み込む（省略時は要約モデルのデフォルトを使う）"""
    if not llm_data:
        return {}

    llm: dict[str, LLMConfig] = {}
    for key, llm_item in llm_data.items():
        model = _validate_required_field(llm_item, "model", f"llm.{key}")
        # summary は小型モデル・低温度がデフォルト
        if key == "summary":
            defaults = {"temperature": 0.3, "max_tokens": 200}
        else:
            defaults = {"temperature": 0.7, "max_tokens": 1000}
        llm[key] = LLMConfig(
            model=model,
            temperature=llm_item.get("temperature", defaults["temperature"]),
            max_tokens=llm_item.get("max_tokens", defaults["max_tokens"]),
            timeout=llm_item.get("timeout", 30.0),
        )
    return llm


def _load_cache_config(cache_data: dict[str, Any] | None) -> CacheConfig:
    """cache セクションを読み込む（省略時はキャッシュなし）"""
    if not cache_data:
        return CacheConfig()

    backend = str(cache_data.get("backend", "none")).lower()
    if backend not in CACHE_BACKENDS:
        raise ConfigValidationError(
            f"Unknown cache backend '{backend}' "
            f"(expected one of: {', '.join(CACHE_BACKENDS)})"
        )
    return CacheConfig(
        backend=backend,
        url=cache_data.get("url") or None,
        socket_timeout=cache_data.get("socket_timeout", 2.0),
    )


def _load_context_config(context_data: dict[str, Any] | None) -> ContextConfig:
    """context セクションを読み込む"""
    if not context_data:
        return ContextConfig()

    try:
        return ContextConfig(
            window_size=context_data.get("window_size", 20),
            summary_threshold=context_data.get("summary_threshold", 20),
            cache_ttl_seconds=context_data.get("cache_ttl_seconds", 3600 * 24),
            key_prefix=context_data.get("key_prefix", "context:"),
        )
    except ValueError as e:
        raise ConfigValidationError(f"Invalid context config: {e}") from e


def load_config(path: str | Path) -> Config:
    """設定ファイルを読み込む

    Args:
        path: config.yaml のパス

    Returns:
        Config オブジェクト

    Raises:
        FileNotFoundError: ファイルが存在しない
        ConfigValidationError: 必須項目が欠落
        EnvironmentVariableError: 環境変数が未設定
        yaml.YAMLError: YAML構文エラー
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, encoding="utf-8") as f:
        raw_data = yaml.safe_load(f) or {}

    # 環境変数を展開
    data = _expand_recursive(raw_data)

    llm = _load_llm_configs(data.get("llm"))
    cache = _load_cache_config(data.get("cache"))
    context = _load_context_config(data.get("context"))

    persona_data = data.get("persona") or {}
    persona = PersonaConfig(name=persona_data.get("name", "Beatrice"))

    # LoggingConfig (optional)
    logging_config: LoggingConfig | None = None
    logging_data = data.get("logging")
    if logging_data:
        logging_config = LoggingConfig(
            level=logging_data.get("level", "INFO"),
            format=logging_data.get(
                "format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            ),
            loggers=logging_data.get("loggers"),
        )

    return Config(
        llm=llm,
        cache=cache,
        context=context,
        persona=persona,
        logging=logging_config,
    )
