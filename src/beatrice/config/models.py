"""設定データクラス"""

from dataclasses import dataclass, field

DEFAULT_SUMMARY_MODEL = "claude-3-haiku-20240307"


@dataclass
class LLMConfig:
    """LLM設定（LiteLLMのacompletionに渡すdict）"""

    model: str
    temperature: float = 0.7
    max_tokens: int = 1000
    timeout: float = 30.0


def default_summary_llm_config() -> LLMConfig:
    """要約用LLM設定のデフォルト（高速・小型モデル、低温度）"""
    return LLMConfig(
        model=DEFAULT_SUMMARY_MODEL,
        temperature=0.3,
        max_tokens=200,
    )


@dataclass
class CacheConfig:
    """キャッシュバックエンド設定

    Attributes:
        backend: "none" / "memory" / "redis"
        url: Redis 接続 URL（backend が redis の場合に必要）
        socket_timeout: Redis ソケットタイムアウト秒数
    """

    backend: str = "none"
    url: str | None = None
    socket_timeout: float = 2.0


@dataclass
class ContextConfig:
    """会話コンテキスト設定

    Attributes:
        window_size: そのまま送信する直近メッセージ数
        summary_threshold: この件数を超えたら古いメッセージを要約する
        cache_ttl_seconds: 要約キャッシュの有効期間（秒）
        key_prefix: キャッシュキーのプレフィックス
    """

    window_size: int = 20
    summary_threshold: int = 20
    cache_ttl_seconds: int = 3600 * 24
    key_prefix: str = "context:"

    def __post_init__(self) -> None:
        """バリデーション"""
        for name in ("window_size", "summary_threshold", "cache_ttl_seconds"):
            value = getattr(self, name)
            if not isinstance(value, int) or value <= 0:
                raise ValueError(f"{name} must be a positive integer: {value!r}")


@dataclass
class PersonaConfig:
    """ペルソナ設定"""

    name: str = "Beatrice"


@dataclass
class LoggingConfig:
    """ログ設定"""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    loggers: dict[str, str] | None = None


@dataclass
class Config:
    """アプリケーション設定"""

    llm: dict[str, LLMConfig] = field(default_factory=dict)
    cache: CacheConfig = field(default_factory=CacheConfig)
    context: ContextConfig = field(default_factory=ContextConfig)
    persona: PersonaConfig = field(default_factory=PersonaConfig)
    logging: LoggingConfig | None = None

    @property
    def summary_llm(self) -> LLMConfig:
        """要約用LLM設定（未指定ならデフォルト）"""
        return self.llm.get("summary") or default_summary_llm_config()
