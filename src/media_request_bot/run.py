"""
CLI runner for media-request-bot.

Usage:
    python -m media_request_bot.run [OPTIONS]

    # Chat with the bot on the terminal
    python -m media_request_bot.run --config config.yaml --chat family

    # Verify catalog URL and API key
    python -m media_request_bot.run --check
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from .catalog import CatalogClient, CatalogError
from .config import BotConfig, load_config
from .formatter import ResponseFormatter
from .messages import load_message_provider
from .orchestrator import Orchestrator
from .sessions import SessionStore
from .transport import ConsoleTransport, broadcast_ready

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("media-request-bot")


def build_orchestrator(config: BotConfig) -> Orchestrator:
    """Wire the bot from config."""
    provider = load_message_provider(config.messages_path, config.messages)
    return Orchestrator(
        catalog=CatalogClient.from_config(config.catalog),
        sessions=SessionStore(ttl_seconds=config.session_ttl_seconds),
        formatter=ResponseFormatter(provider),
    )


async def check_catalog(config: BotConfig) -> bool:
    """Make one authenticated call against the catalog."""
    client = CatalogClient.from_config(config.catalog)
    try:
        await client.check_connection()
    except CatalogError as e:
        logger.error(f"Catalog check failed: {e}")
        return False
    logger.info(f"Catalog reachable at {client.api_base}")
    return True


async def run_console(config: BotConfig, sender_id: str, chat_name: str) -> int:
    """Serve the console transport until EOF. Returns messages handled."""
    orchestrator = build_orchestrator(config)
    transport = ConsoleTransport(sender_id=sender_id, chat_name=chat_name)

    logger.info("✅ Bot is ready!")
    if config.chat.enable_event_messages:
        await broadcast_ready(transport, orchestrator, config.chat.whitelist)

    handled = await transport.serve(orchestrator, config.chat.whitelist)
    logger.info(f"Input closed after {handled} message(s)")
    return handled


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="media-request-bot: request movies and series from chat",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment overrides:
    JELLYSEERR_URL, API_KEY, CHAT_WHITELIST, ENABLE_EVENT_MESSAGES,
    SESSION_TTL_SECONDS
        """,
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=Path("config.yaml"),
        help="Path to config file (default: config.yaml)",
    )
    parser.add_argument(
        "--sender",
        type=str,
        default="console",
        help="Sender id used for console messages",
    )
    parser.add_argument(
        "--chat",
        type=str,
        help="Chat name used for console messages (default: first whitelisted chat)",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Check the catalog connection and exit",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    config = load_config(args.config)
    logger.info(f"Config loaded from {args.config}")
    logger.info(f"Catalog: {config.catalog.base_url}")
    logger.info(f"Whitelisted chats: {', '.join(config.chat.whitelist) or '(none)'}")

    if not config.catalog.get_api_key():
        logger.warning("No catalog API key configured")

    if args.check:
        return 0 if asyncio.run(check_catalog(config)) else 1

    chat_name = args.chat or (config.chat.whitelist[0] if config.chat.whitelist else "console")

    try:
        asyncio.run(run_console(config, args.sender, chat_name))
    except KeyboardInterrupt:
        logger.info("Bot stopped by user")
    return 0


if __name__ == "__main__":
    sys.exit(main())
