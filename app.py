import asyncio
import os
from dataclasses import replace

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slack_bolt.async_app import AsyncApp
from slack_bolt.adapter.fastapi.async_handler import AsyncSlackRequestHandler
from starlette.concurrency import run_in_threadpool

from glossary_bot.logger import logger
from glossary_bot.config import get_int_env, is_socket_mode, validate_environment_variables
from glossary_bot.constants import (
    DEFAULT_GLOSSARY_TOPIC,
    DEFAULT_MAX_MESSAGE_LENGTH,
    DEFAULT_MAX_RESULTS,
    TERMS_COLLECTION,
    WELCOME_COMMANDS,
    WORKSPACES_COLLECTION,
)
from glossary_bot.db import connect
from glossary_bot.dispatcher import ReplyDispatcher
from glossary_bot.knowledge import load_knowledge_base
from glossary_bot.metrics import increment_lookups
from glossary_bot.router import InboundMessage, MessageRouter, RouteOutcome
from glossary_bot.transport import SlackSender, inbound_from_command, inbound_from_event

# Validate environment variables at startup
validate_environment_variables()

# The bot must not serve without its glossary: both calls raise on failure
db = connect(os.environ["MONGO_URL"], os.getenv("MONGO_DB_NAME"))
knowledge_store = load_knowledge_base(db[TERMS_COLLECTION])
workspaces = db[WORKSPACES_COLLECTION]

# Slack app setup
slack_app = AsyncApp(
    token=os.environ["SLACK_BOT_TOKEN"],
    signing_secret=os.getenv("SLACK_SIGNING_SECRET"),
    request_verification_enabled=not is_socket_mode(),
)

dispatcher = ReplyDispatcher(
    SlackSender(slack_app.client),
    max_length=get_int_env("MAX_MESSAGE_LENGTH", DEFAULT_MAX_MESSAGE_LENGTH),
)
router = MessageRouter(
    knowledge_store,
    dispatcher,
    max_results=get_int_env("MAX_RESULTS", DEFAULT_MAX_RESULTS),
    topic=os.getenv("GLOSSARY_TOPIC") or DEFAULT_GLOSSARY_TOPIC,
)

fastapi_app = FastAPI()
handler = AsyncSlackRequestHandler(slack_app)


async def route(message: InboundMessage) -> None:
    outcome = await router.handle(message)
    if outcome is RouteOutcome.ROUTED and message.team_id:
        # Offload MongoDB write to thread pool so we don't block the event loop.
        await run_in_threadpool(increment_lookups, workspaces, message.team_id)


# Every message the bot can see: DMs and channels it was invited to
@slack_app.event("message")
async def handle_message(event, body):
    message = inbound_from_event(event)
    if message is None:
        return
    if message.team_id is None and body.get("team_id"):
        message = replace(message, team_id=body["team_id"])
    await route(message)


# Mentions also arrive as message events and are answered there.
# Registered only so Bolt does not warn about an unhandled app_mention.
@slack_app.event("app_mention")
async def handle_mention(event):
    logger.debug("app_mention in %s answered by the message listener", event.get("channel"))


async def handle_welcome_command(ack, command):
    await ack()
    message = inbound_from_command(command)
    if message is None:
        logger.error(f"Malformed slash command payload: {command}")
        return
    await route(message)


for command_name in WELCOME_COMMANDS:
    slack_app.command(command_name)(handle_welcome_command)


@fastapi_app.post("/slack/events")
async def slack_events(request: Request):
    # Delegate to Slack Bolt FastAPI handler
    return await handler.handle(request)


@fastapi_app.get("/")
async def ping():
    return JSONResponse({"status": "ok", "terms": len(knowledge_store)})


async def run_socket_mode():
    from slack_bolt.adapter.socket_mode.async_handler import AsyncSocketModeHandler

    socket_handler = AsyncSocketModeHandler(slack_app, os.environ["SLACK_APP_TOKEN"])
    logger.info("Starting in Socket Mode")
    await socket_handler.start_async()


if __name__ == "__main__":
    if is_socket_mode():
        asyncio.run(run_socket_mode())
    else:
        import uvicorn

        uvicorn.run(
            "app:fastapi_app",
            host="0.0.0.0",
            port=get_int_env("PORT", 3000),
            reload=os.getenv("ENV") != "prod",
        )
