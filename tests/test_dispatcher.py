from __future__ import annotations

import asyncio
import math

import pytest

from glossary_bot.dispatcher import RenderMode, ReplyDispatcher, split_message

from conftest import RecordingSender


def test_split_message_short_text_is_single_chunk():
    assert split_message("hello", 10) == ["hello"]
    assert split_message("x" * 10, 10) == ["x" * 10]


def test_split_message_reconstructs_long_text():
    text = "".join(chr(ord("a") + i % 26) for i in range(10_000))

    chunks = split_message(text, 4096)

    assert "".join(chunks) == text
    assert len(chunks) == math.ceil(len(text) / 4096)
    assert all(len(chunk) <= 4096 for chunk in chunks)
    assert [len(chunk) for chunk in chunks] == [4096, 4096, 1808]


def test_split_message_empty_text_has_no_chunks():
    assert split_message("", 10) == []


def test_split_message_rejects_bad_limit():
    with pytest.raises(ValueError):
        split_message("abc", 0)


def test_deliver_sends_payloads_and_chunks_in_order(sender):
    dispatcher = ReplyDispatcher(sender, max_length=4)

    sent = asyncio.run(dispatcher.deliver("C1", ["abcdefghij", "xy"], RenderMode.LIGHT_MARKUP))

    assert sent == 4
    assert sender.texts == ["abcd", "efgh", "ij", "xy"]
    assert {chat for chat, _, _ in sender.calls} == {"C1"}
    assert {mode for _, _, mode in sender.calls} == {RenderMode.LIGHT_MARKUP}


def test_deliver_continues_after_failed_payload():
    sender = RecordingSender(fail_on={0})
    dispatcher = ReplyDispatcher(sender, max_length=4)

    sent = asyncio.run(dispatcher.deliver("C1", ["abcdefgh", "second", "third"]))

    # first payload abandoned after its first chunk failed
    assert sender.texts == ["seco", "nd", "thir", "d"]
    assert sent == 4


def test_deliver_awaits_each_send_before_the_next():
    order = []

    async def slow_send(chat_id, text, render_mode):
        order.append(f"start {text}")
        await asyncio.sleep(0)
        order.append(f"end {text}")

    dispatcher = ReplyDispatcher(slow_send, max_length=2)
    asyncio.run(dispatcher.deliver("C1", ["abcd"]))

    assert order == ["start ab", "end ab", "start cd", "end cd"]


def test_dispatcher_rejects_bad_limit(sender):
    with pytest.raises(ValueError):
        ReplyDispatcher(sender, max_length=0)
