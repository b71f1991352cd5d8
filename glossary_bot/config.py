"""
Configuration and environment variable validation.
"""
import os
import sys

from glossary_bot.logger import logger


def is_socket_mode() -> bool:
    """Socket Mode is used when an app-level token is configured (local development)."""
    value = os.getenv("SLACK_APP_TOKEN")
    return bool(value and value.strip())


def get_int_env(name: str, default: int) -> int:
    """
    Read a positive integer setting from the environment.
    Falls back to the default (with a warning) when the value is missing or invalid.
    """
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid integer for %s=%r, using default %s", name, raw, default)
        return default
    if value <= 0:
        logger.warning("%s must be positive (got %s), using default %s", name, value, default)
        return default
    return value


def validate_environment_variables() -> None:
    """
    Validate all required environment variables at startup.
    Exits the application with a clear error message if any are missing.
    """
    required_vars = {
        "SLACK_BOT_TOKEN": "Slack bot token for authentication",
        "MONGO_URL": "MongoDB connection URL",
    }
    if not is_socket_mode():
        required_vars["SLACK_SIGNING_SECRET"] = "Slack signing secret for request verification"

    optional_vars = {
        "SLACK_APP_TOKEN": "Slack app-level token, enables Socket Mode for local development",
        "PORT": "Server port (defaults to 3000 if not set)",
        "ENV": "Environment (prod/dev, defaults to dev if not set)",
        "MONGO_DB_NAME": "MongoDB database name (defaults to glossarybot)",
        "MAX_MESSAGE_LENGTH": "Maximum length of a single outbound message (defaults to 4096)",
        "MAX_RESULTS": "Maximum number of definitions per reply (defaults to 5)",
        "GLOSSARY_TOPIC": "Topic shown in the welcome message (defaults to epidemiology)",
        "LOG_LEVEL": "Logging level name, e.g. INFO (defaults to DEBUG)",
    }

    missing_vars = []

    for var_name, description in required_vars.items():
        value = os.getenv(var_name)
        if not value or not value.strip():
            missing_vars.append(f"  - {var_name}: {description}")
            logger.error(f"Missing required environment variable: {var_name}")

    if missing_vars:
        error_message = (
            "Missing required environment variables:\n"
            + "\n".join(missing_vars)
            + "\n\nPlease set these variables before starting the application."
        )
        logger.critical(error_message)
        print(error_message, file=sys.stderr)
        sys.exit(1)

    for var_name, description in optional_vars.items():
        value = os.getenv(var_name)
        if not value or not value.strip():
            logger.info(f"Optional environment variable not set: {var_name} - {description}")
        else:
            logger.debug(f"Environment variable set: {var_name}")

    logger.info("Environment variable validation completed successfully")
