from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock

from glossary_bot.dispatcher import RenderMode
from glossary_bot.router import InboundMessage
from glossary_bot.transport import SlackSender, inbound_from_command, inbound_from_event


def test_inbound_from_event_strips_mention():
    event = {"type": "message", "channel": "C1", "user": "U1", "team": "T1", "text": "<@UBOT> incidence"}

    assert inbound_from_event(event) == InboundMessage(
        chat_id="C1", sender_display_name="<@U1>", text="incidence", team_id="T1"
    )


def test_inbound_from_event_skips_bot_and_subtype_events():
    assert inbound_from_event({"channel": "C1", "text": "hi", "bot_id": "B1"}) is None
    assert inbound_from_event({"channel": "C1", "text": "hi", "subtype": "message_changed"}) is None
    assert inbound_from_event({"channel": "C1", "text": "<@UBOT>"}) is None
    assert inbound_from_event({"text": "hi"}) is None


def test_inbound_from_command():
    command = {"command": "/help", "channel_id": "C1", "user_name": "ana", "team_id": "T1", "text": ""}

    assert inbound_from_command(command) == InboundMessage("C1", "ana", "/help", "T1")
    assert inbound_from_command({"command": "/help"}) is None


def test_slack_sender_sets_mrkdwn_from_render_mode():
    client = AsyncMock()
    sender = SlackSender(client)

    asyncio.run(sender("C1", "*bold*", RenderMode.LIGHT_MARKUP))
    asyncio.run(sender("C1", "plain", RenderMode.PLAIN))

    client.chat_postMessage.assert_any_await(channel="C1", text="*bold*", mrkdwn=True)
    client.chat_postMessage.assert_any_await(channel="C1", text="plain", mrkdwn=False)
