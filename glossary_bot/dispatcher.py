"""
Outbound reply delivery with chunking of oversized messages.
"""
from enum import Enum
from typing import Awaitable, Callable, Iterable

from glossary_bot.constants import DEFAULT_MAX_MESSAGE_LENGTH
from glossary_bot.logger import logger


class RenderMode(str, Enum):
    PLAIN = "plain"
    LIGHT_MARKUP = "light_markup"


# (chat_id, text, render_mode) -> one network send
SendFunc = Callable[[str, str, RenderMode], Awaitable[object]]


def split_message(text: str, limit: int = DEFAULT_MAX_MESSAGE_LENGTH) -> list[str]:
    """
    Split text into consecutive slices of at most `limit` characters.

    Slicing is fixed-width and ignores word boundaries. Joining the chunks
    gives back the original text exactly.
    """
    if limit <= 0:
        raise ValueError(f"limit must be positive, got {limit}")
    if not text:
        return []
    return [text[i:i + limit] for i in range(0, len(text), limit)]


class ReplyDispatcher:
    def __init__(self, send: SendFunc, max_length: int = DEFAULT_MAX_MESSAGE_LENGTH):
        if max_length <= 0:
            raise ValueError(f"max_length must be positive, got {max_length}")
        self._send = send
        self.max_length = max_length

    async def deliver(
        self,
        chat_id: str,
        payloads: Iterable[str],
        render_mode: RenderMode = RenderMode.PLAIN,
    ) -> int:
        """
        Send payloads in order, one chunk at a time.

        A failed send is logged and the rest of that payload is dropped;
        the following payloads are still delivered.

        Returns:
            Number of chunks sent successfully
        """
        sent = 0
        for index, payload in enumerate(payloads):
            chunks = split_message(payload, self.max_length)
            if len(chunks) > 1:
                logger.debug(
                    "Payload %s for chat %s split into %s chunks", index, chat_id, len(chunks)
                )
            for chunk in chunks:
                try:
                    await self._send(chat_id, chunk, render_mode)
                except Exception as e:
                    # Don't raise - the next payloads still go out
                    logger.exception(
                        "Failed to send payload %s to chat %s: %s", index, chat_id, e
                    )
                    break
                sent += 1
        return sent
