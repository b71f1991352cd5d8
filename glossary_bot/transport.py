"""
Slack side of the bot: converts Slack payloads to InboundMessage and sends replies.
"""
from slack_sdk.web.async_client import AsyncWebClient

from glossary_bot.dispatcher import RenderMode
from glossary_bot.logger import logger
from glossary_bot.router import InboundMessage
from glossary_bot.utils import strip_leading_mention


def inbound_from_event(event: dict) -> InboundMessage | None:
    """
    Build an InboundMessage from a Slack `message` event.
    Returns None for events the bot must not answer (bot posts, edits, joins, ...).
    """
    if event.get("bot_id") or event.get("subtype"):
        return None

    channel_id = event.get("channel")
    text = strip_leading_mention(event.get("text", "") or "")
    if not channel_id or not text:
        return None

    user_id = event.get("user")
    display_name = f"<@{user_id}>" if user_id else "there"
    return InboundMessage(
        chat_id=channel_id,
        sender_display_name=display_name,
        text=text,
        team_id=event.get("team"),
    )


def inbound_from_command(command: dict) -> InboundMessage | None:
    """Build an InboundMessage from a slash command payload; the text is the command itself."""
    channel_id = command.get("channel_id")
    name = command.get("command")
    if not channel_id or not name:
        return None
    return InboundMessage(
        chat_id=channel_id,
        sender_display_name=command.get("user_name") or "there",
        text=name,
        team_id=command.get("team_id"),
    )


class SlackSender:
    """Outbound send: one chat.postMessage per call."""

    def __init__(self, client: AsyncWebClient):
        self.client = client

    async def __call__(self, chat_id: str, text: str, render_mode: RenderMode) -> None:
        logger.debug("Sending %s chars to %s (%s)", len(text), chat_id, render_mode.value)
        await self.client.chat_postMessage(
            channel=chat_id,
            text=text,
            mrkdwn=render_mode is RenderMode.LIGHT_MARKUP,
        )
