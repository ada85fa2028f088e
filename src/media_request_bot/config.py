"""
Configuration for media-request-bot.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class CatalogConfig:
    """Catalog (request service) connection configuration."""

    base_url: str = "http://localhost:5055"
    api_key: str = ""
    api_key_env: str | None = "CATALOG_API_KEY"
    timeout_seconds: float = 10.0
    concurrent_enrichment: bool = True

    def get_api_key(self) -> str:
        """Get API key from config or environment."""
        if self.api_key:
            return self.api_key
        if self.api_key_env:
            return os.environ.get(self.api_key_env, "")
        return ""


@dataclass
class ChatConfig:
    """Which chats the bot answers in."""

    whitelist: list[str] = field(default_factory=list)
    enable_event_messages: bool = False  # Ready broadcast on startup

    def __post_init__(self):
        self.whitelist = [name.strip().lower() for name in self.whitelist if name.strip()]


@dataclass
class BotConfig:
    """Complete media-request-bot configuration."""

    catalog: CatalogConfig = field(default_factory=CatalogConfig)
    chat: ChatConfig = field(default_factory=ChatConfig)
    messages_path: Path | None = None
    messages: dict[str, str] = field(default_factory=dict)
    session_ttl_seconds: float | None = None  # None: sessions never expire

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BotConfig":
        """Create config from a dictionary (e.g., from YAML)."""
        config = cls()

        if "catalog" in data:
            catalog = data["catalog"] or {}
            config.catalog = CatalogConfig(
                base_url=catalog.get("base_url", config.catalog.base_url),
                api_key=catalog.get("api_key", ""),
                api_key_env=catalog.get("api_key_env", config.catalog.api_key_env),
                timeout_seconds=float(catalog.get("timeout_seconds", 10.0)),
                concurrent_enrichment=catalog.get("concurrent_enrichment", True),
            )

        if "chat" in data:
            chat = data["chat"] or {}
            config.chat = ChatConfig(
                whitelist=list(chat.get("whitelist", [])),
                enable_event_messages=chat.get("enable_event_messages", False),
            )

        if data.get("messages_path"):
            config.messages_path = Path(data["messages_path"])
        if "messages" in data:
            config.messages = {str(k): str(v) for k, v in (data["messages"] or {}).items()}
        if data.get("session_ttl_seconds") is not None:
            config.session_ttl_seconds = float(data["session_ttl_seconds"])

        return config

    @classmethod
    def from_yaml(cls, path: Path) -> "BotConfig":
        """Load config from a YAML file."""
        if not path.exists():
            return cls()

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        config = cls.from_dict(data)

        # Relative messages path is resolved against the config file
        if config.messages_path and not config.messages_path.is_absolute():
            config.messages_path = path.parent / config.messages_path

        return config

    def apply_env(self, environ: Mapping[str, str] | None = None) -> "BotConfig":
        """Overlay the environment variables the docker image documents."""
        env = os.environ if environ is None else environ

        if env.get("JELLYSEERR_URL"):
            self.catalog.base_url = env["JELLYSEERR_URL"]
        if env.get("API_KEY"):
            self.catalog.api_key = env["API_KEY"]
        if env.get("CHAT_WHITELIST"):
            self.chat = ChatConfig(
                whitelist=env["CHAT_WHITELIST"].split(","),
                enable_event_messages=self.chat.enable_event_messages,
            )
        if "ENABLE_EVENT_MESSAGES" in env:
            self.chat.enable_event_messages = env["ENABLE_EVENT_MESSAGES"].lower() in TRUTHY
        if env.get("SESSION_TTL_SECONDS"):
            self.session_ttl_seconds = float(env["SESSION_TTL_SECONDS"])

        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary for logging. Secrets are left out."""
        return {
            "catalog": {
                "base_url": self.catalog.base_url,
                "timeout_seconds": self.catalog.timeout_seconds,
                "concurrent_enrichment": self.catalog.concurrent_enrichment,
            },
            "chat": {
                "whitelist": list(self.chat.whitelist),
                "enable_event_messages": self.chat.enable_event_messages,
            },
            "messages_path": str(self.messages_path) if self.messages_path else None,
            "messages": sorted(self.messages),
            "session_ttl_seconds": self.session_ttl_seconds,
        }


def load_config(path: Path, environ: Mapping[str, str] | None = None) -> BotConfig:
    """Load YAML config and apply environment overrides."""
    return BotConfig.from_yaml(path).apply_env(environ)
