"""
Shared constants for the glossary bot.
"""

# MongoDB
MONGODB_SERVER_SELECTION_TIMEOUT_MS = 5000
DEFAULT_MONGO_DB_NAME = "glossarybot"
TERMS_COLLECTION = "terms"
WORKSPACES_COLLECTION = "workspaces"

# Matching
DEFAULT_MAX_RESULTS = 5

# Slack accepts longer messages, but long replies are easier to read in chunks
DEFAULT_MAX_MESSAGE_LENGTH = 4096

# Commands
COMMAND_PREFIX = "/"
WELCOME_COMMANDS = ("/start", "/help")

DEFAULT_GLOSSARY_TOPIC = "epidemiology"

# Sentinel replies
NO_KEYWORDS_REPLY = "Please provide some keywords to search for."
NO_INFORMATION_REPLY = (
    "I'm sorry, I don't have information on that topic. "
    "Please try asking about one of the keywords mentioned in /help."
)
