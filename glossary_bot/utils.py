import re

from glossary_bot.constants import COMMAND_PREFIX


def strip_leading_mention(text: str) -> str:
    """
    Remove a leading Slack user mention like '<@U123ABC>' plus any following whitespace.
    """
    return re.sub(r"^<@[^>]+>\s*", "", text or "").strip()


def is_command(text: str) -> bool:
    return (text or "").lstrip().startswith(COMMAND_PREFIX)


def parse_command(text: str) -> str | None:
    """
    Return the lower-cased command name of a command message, or None.

    A trailing '@botname' is dropped, so '/help@glossary_bot extra' -> '/help'.
    """
    if not is_command(text):
        return None
    first_word = text.split()[0]
    return first_word.split("@", 1)[0].lower()


def sanitize_slack_id(identifier: str | None, name: str = "identifier", allow_none: bool = False) -> str | None:
    """
    Sanitize and validate Slack IDs (team_id, channel_id, user_id) before they are
    used in MongoDB queries.

    Raises:
        ValueError: If identifier is invalid or contains dangerous characters
    """
    if identifier is None:
        if allow_none:
            return None
        raise ValueError(f"{name} cannot be None")

    if not isinstance(identifier, str):
        raise ValueError(f"{name} must be a string, got {type(identifier).__name__}")

    identifier = identifier.strip()

    if not identifier:
        raise ValueError(f"{name} cannot be empty")

    # Rejects MongoDB operators ($gt, $ne, ...) and object notation
    if not re.match(r"^[A-Za-z0-9_-]+$", identifier):
        raise ValueError(
            f"{name} contains invalid characters. "
            f"Only alphanumeric characters, hyphens, and underscores are allowed: {identifier}"
        )

    MAX_ID_LENGTH = 256
    if len(identifier) > MAX_ID_LENGTH:
        raise ValueError(f"{name} is too long (max {MAX_ID_LENGTH} characters): {len(identifier)}")

    return identifier
