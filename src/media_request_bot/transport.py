"""
Chat transport glue for media-request-bot.

The bot core only needs `Orchestrator.handle(sender, text)`. A transport
delivers messages from whitelisted chats to it and sends back the reply.
"""

import asyncio
import logging
import sys
from collections.abc import Iterable
from typing import Protocol, TextIO

from .orchestrator import Orchestrator

logger = logging.getLogger(__name__)


class ChatTransport(Protocol):
    async def list_chats(self) -> list[str]: ...

    async def send(self, chat_name: str, text: str) -> None: ...


def is_chat_allowed(chat_name: str, whitelist: Iterable[str]) -> bool:
    """Case-insensitive whitelist membership."""
    return chat_name.strip().lower() in {name.strip().lower() for name in whitelist}


async def broadcast_ready(
    transport: ChatTransport,
    orchestrator: Orchestrator,
    whitelist: Iterable[str],
) -> int:
    """
    Send the ready message to every whitelisted chat.

    Returns:
        Number of chats notified
    """
    whitelist = list(whitelist)
    message = orchestrator.ready_message()
    notified = 0

    for chat_name in await transport.list_chats():
        if not is_chat_allowed(chat_name, whitelist):
            continue
        try:
            await transport.send(chat_name, message)
            notified += 1
        except Exception:
            logger.exception(f"Could not send ready message to {chat_name!r}")

    logger.info(f"Ready message sent to {notified} chat(s)")
    return notified


class ConsoleTransport:
    """
    Line-based transport on stdin/stdout.

    Every line is a message from `sender_id` in `chat_name`.
    """

    def __init__(
        self,
        sender_id: str = "console",
        chat_name: str = "console",
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
    ):
        self.sender_id = sender_id
        self.chat_name = chat_name
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout

    async def list_chats(self) -> list[str]:
        return [self.chat_name]

    async def send(self, chat_name: str, text: str) -> None:
        self.stdout.write(f"[{chat_name}] {text}\n")
        self.stdout.flush()

    async def serve(self, orchestrator: Orchestrator, whitelist: Iterable[str]) -> int:
        """
        Feed stdin lines to the orchestrator until EOF.

        Returns:
            Number of messages handled
        """
        whitelist = list(whitelist)
        if not is_chat_allowed(self.chat_name, whitelist):
            logger.warning(f"Chat {self.chat_name!r} is not whitelisted, messages will be ignored")

        loop = asyncio.get_running_loop()
        handled = 0

        while True:
            line = await loop.run_in_executor(None, self.stdin.readline)
            if not line:
                break
            if not is_chat_allowed(self.chat_name, whitelist):
                continue

            reply = await orchestrator.handle(self.sender_id, line)
            handled += 1
            if reply:
                await self.send(self.chat_name, reply)

        return handled
