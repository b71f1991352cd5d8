"""
Replies to bot commands.
"""
from glossary_bot.constants import DEFAULT_GLOSSARY_TOPIC
from glossary_bot.logger import logger


def get_welcome_message(user_name: str, terms: list[str], topic: str = DEFAULT_GLOSSARY_TOPIC) -> str:
    logger.debug("Welcome")
    available_topics = ", ".join(terms)
    return (
        f"Hello, {user_name}! 👋\n\n"
        f"I am a bot with knowledge from a glossary of {topic} terms.\n\n"
        "You can ask me to define any of the following topics:\n"
        f"• {available_topics}"
    )
