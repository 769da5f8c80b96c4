"""アプリケーションのエントリポイント"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

import yaml

from beatrice.application.services import ContextManager, ResponseCache
from beatrice.config import Config, ConfigError, LoggingConfig, load_config
from beatrice.domain.entities import Message
from beatrice.domain.services import CacheStore
from beatrice.infrastructure.cache import create_cache_store
from beatrice.infrastructure.llm import LLMClient, LLMConversationSummarizer

# Default logging for early startup
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def configure_logging(config: LoggingConfig | None) -> None:
    """Configure logging based on config.

    Args:
        config: Logging configuration. If None, uses defaults.
    """
    if config is None:
        return

    root_logger = logging.getLogger()

    level = getattr(logging, config.level.upper(), logging.INFO)
    root_logger.setLevel(level)

    if root_logger.handlers:
        formatter = logging.Formatter(config.format)
        for handler in root_logger.handlers:
            handler.setFormatter(formatter)

    if config.loggers:
        for logger_name, logger_level in config.loggers.items():
            individual_logger = logging.getLogger(logger_name)
            individual_level = getattr(logging, logger_level.upper(), logging.INFO)
            individual_logger.setLevel(individual_level)
            logger.debug(
                "Set logger '%s' to level %s", logger_name, logger_level.upper()
            )


def build_context_manager(config: Config, cache_store: CacheStore) -> ContextManager:
    """Wire a ContextManager from configuration.

    Args:
        config: Application configuration.
        cache_store: Cache store shared by the services.

    Returns:
        ContextManager instance.
    """
    summarizer = LLMConversationSummarizer(
        LLMClient(config.summary_llm),
        persona_name=config.persona.name,
    )
    return ContextManager(
        cache_store=cache_store,
        summarizer=summarizer,
        config=config.context,
    )


def load_history(path: Path) -> list[Message]:
    """Load a JSON list of messages (oldest first)."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a JSON list of messages")
    return [Message.from_dict(item) for item in data]


async def run_command(args: argparse.Namespace, config: Config) -> int:
    """Run one CLI command.

    Returns:
        Process exit status.
    """
    try:
        cache_store = create_cache_store(config.cache)
    except ValueError as e:
        logger.error("Failed to create cache store: %s", e)
        return 1

    try:
        if args.command == "context":
            context_manager = build_context_manager(config, cache_store)
            result = await context_manager.get_optimized_context(
                args.session_id, args.messages
            )
            output = {
                "source": result.source.value,
                "messages": [message.to_dict() for message in result.messages],
            }
            print(json.dumps(output, ensure_ascii=False, indent=2))
        elif args.command == "clear":
            context_manager = build_context_manager(config, cache_store)
            await context_manager.clear_context(args.session_id)
            logger.info("Cleared context for session %s", args.session_id)
        elif args.command == "warm-cache":
            written = await ResponseCache(cache_store).warm_cache()
            print(json.dumps({"written": written}))
        return 0
    finally:
        await cache_store.close()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="beatrice", description="Conversation context tools"
    )
    parser.add_argument(
        "--config", type=Path, default=Path("config.yaml"), help="Config file path"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    context_parser = subparsers.add_parser(
        "context", help="Print the optimized context for a conversation"
    )
    context_parser.add_argument("session_id")
    context_parser.add_argument("history", type=Path, help="JSON list of messages")

    clear_parser = subparsers.add_parser(
        "clear", help="Clear the cached context of a session"
    )
    clear_parser.add_argument("session_id")

    subparsers.add_parser("warm-cache", help="Cache answers to common questions")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, load config and run the command."""
    args = build_parser().parse_args(argv)

    if not args.config.exists():
        logger.error("%s not found", args.config)
        return 1

    try:
        config = load_config(args.config)
    except (ConfigError, yaml.YAMLError) as e:
        logger.error("Failed to load config: %s", e)
        return 1

    configure_logging(config.logging)

    if args.command == "context":
        try:
            args.messages = load_history(args.history)
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.error("Failed to read history: %s", e)
            return 1

    return asyncio.run(run_command(args, config))


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
