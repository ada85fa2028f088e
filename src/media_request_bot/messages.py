"""
Message overrides for media-request-bot.

A provider answers `lookup(key, *args)` with replacement copy, or None to
let the formatter use its built-in text. Overrides are either plain
strings or callables receiving the arguments listed on MessageKey.

A messages file is a Python module defining either

    def messages():
        prefix = "🤖 Beep Boop Beep... "
        return {
            "NO_TERM": f"{prefix} No search term found!!",
            "REQ_CHOICE": lambda results: f"{prefix} Choose from 1 - {len(results)}",
        }

or a module-level MESSAGES mapping. The file is re-read when it changes.
"""

import importlib.util
import logging
from collections.abc import Callable, Mapping
from enum import Enum
from pathlib import Path
from typing import Any, Protocol

logger = logging.getLogger(__name__)

Override = str | Callable[..., Any]


class MessageKey(str, Enum):
    """Overridable messages and the positional arguments they receive."""

    NO_TERM = "NO_TERM"  # ()
    INVALID_SEL = "INVALID_SEL"  # ()
    BOT_READY = "BOT_READY"  # (usage,)
    BOT_USAGE = "BOT_USAGE"  # ()
    REQ_SUCCESS = "REQ_SUCCESS"  # (item, listing_text or None)
    REQ_FAIL = "REQ_FAIL"  # (item,)
    REQ_EXISTS = "REQ_EXISTS"  # (item,)
    JELLYSEERR_FAIL = "JELLYSEERR_FAIL"  # (error,)
    REQ_CHOICE = "REQ_CHOICE"  # (results,)
    REQ_NO_ITEM = "REQ_NO_ITEM"  # (kind, term, kind_was_defaulted)


class MessageProvider(Protocol):
    def lookup(self, key: MessageKey | str, *args: Any) -> str | None: ...


def resolve_override(key: str, override: Override | None, args: tuple) -> str | None:
    """Turn a raw override into text. Empty or failing overrides give None."""
    if override is None:
        return None

    if callable(override):
        try:
            value = override(*args)
        except Exception:
            logger.exception(f"Message override {key} raised, using default")
            return None
    else:
        value = override

    if value is None:
        return None
    text = str(value)
    return text or None


class NullMessageProvider:
    """No overrides configured."""

    def lookup(self, key: MessageKey | str, *args: Any) -> str | None:
        return None


class StaticMessageProvider:
    """Overrides from an in-memory mapping (e.g. the `messages:` config block)."""

    def __init__(self, messages: Mapping[str, Override]):
        self.messages = dict(messages)

    def lookup(self, key: MessageKey | str, *args: Any) -> str | None:
        name = key.value if isinstance(key, MessageKey) else key
        return resolve_override(name, self.messages.get(name), args)


class ModuleMessageProvider:
    """
    Overrides from a Python file, reloaded when its mtime changes.

    A missing or broken file behaves like an empty one.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._mtime: float | None = None
        self._messages: dict[str, Override] = {}

    def _load(self) -> dict[str, Override]:
        spec = importlib.util.spec_from_file_location("media_request_bot_messages", self.path)
        if spec is None or spec.loader is None:
            raise ImportError(f"Cannot load messages from {self.path}")
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)

        factory = getattr(module, "messages", None)
        data = factory() if callable(factory) else getattr(module, "MESSAGES", {})
        if not isinstance(data, Mapping):
            raise TypeError(f"{self.path} must provide a mapping of messages")
        return dict(data)

    def _refresh(self) -> None:
        try:
            mtime = self.path.stat().st_mtime
        except OSError:
            if self._mtime is not None:
                logger.warning(f"Messages file {self.path} disappeared, using defaults")
            self._mtime = None
            self._messages = {}
            return

        if mtime == self._mtime:
            return

        self._mtime = mtime
        try:
            self._messages = self._load()
            logger.info(f"Loaded {len(self._messages)} message override(s) from {self.path}")
        except Exception:
            logger.exception(f"Could not load messages from {self.path}, using defaults")
            self._messages = {}

    def lookup(self, key: MessageKey | str, *args: Any) -> str | None:
        self._refresh()
        name = key.value if isinstance(key, MessageKey) else key
        return resolve_override(name, self._messages.get(name), args)


def load_message_provider(
    path: Path | None = None,
    messages: Mapping[str, Override] | None = None,
) -> MessageProvider:
    """Pick the provider for the configured overrides. A file wins over inline messages."""
    if path is not None:
        return ModuleMessageProvider(path)
    if messages:
        return StaticMessageProvider(messages)
    return NullMessageProvider()
