"""
Routing of inbound chat messages to the welcome reply or the matcher.
"""
from dataclasses import dataclass
from enum import Enum

from glossary_bot.commands import get_welcome_message
from glossary_bot.constants import (
    DEFAULT_GLOSSARY_TOPIC,
    DEFAULT_MAX_RESULTS,
    WELCOME_COMMANDS,
)
from glossary_bot.dispatcher import RenderMode, ReplyDispatcher
from glossary_bot.knowledge import KnowledgeStore
from glossary_bot.logger import logger
from glossary_bot.matcher import match_message
from glossary_bot.utils import parse_command


@dataclass(frozen=True)
class InboundMessage:
    chat_id: str
    sender_display_name: str
    text: str
    team_id: str | None = None


class RouteOutcome(str, Enum):
    IGNORED = "ignored"
    WELCOMED = "welcomed"
    ROUTED = "routed"


class MessageRouter:
    def __init__(
        self,
        store: KnowledgeStore,
        dispatcher: ReplyDispatcher,
        max_results: int = DEFAULT_MAX_RESULTS,
        topic: str = DEFAULT_GLOSSARY_TOPIC,
    ):
        self.store = store
        self.dispatcher = dispatcher
        self.max_results = max_results
        self.topic = topic

    async def handle(self, message: InboundMessage) -> RouteOutcome:
        text = (message.text or "").strip()

        command = parse_command(text)
        if command is not None:
            if command in WELCOME_COMMANDS:
                await self._send_welcome(message)
                return RouteOutcome.WELCOMED
            logger.debug("Ignoring command %s in chat %s", command, message.chat_id)
            return RouteOutcome.IGNORED

        if not text:
            return RouteOutcome.IGNORED

        result = match_message(text, self.store, self.max_results)
        if not result.replies:
            return RouteOutcome.IGNORED

        render_mode = RenderMode.PLAIN if result.is_sentinel else RenderMode.LIGHT_MARKUP
        logger.info(
            "Chat %s: %s result with %s replies", message.chat_id, result.kind.value, len(result.replies)
        )
        await self.dispatcher.deliver(message.chat_id, result.replies, render_mode)
        return RouteOutcome.ROUTED

    async def _send_welcome(self, message: InboundMessage) -> None:
        welcome = get_welcome_message(message.sender_display_name, self.store.list_terms(), self.topic)
        await self.dispatcher.deliver(message.chat_id, [welcome], RenderMode.PLAIN)
