import logging
import os
import re
from typing import Iterable, Optional

import discord
from dotenv import load_dotenv

from energy_news import Aggregator, AggregationRequest, AggregatorConfig, CanonicalItem, Scope
from energy_news.models import CANONICAL_LOCALES

logger = logging.getLogger("discord_bot")

COMMAND = "!energy"
DEFAULT_LIMIT = 5
MESSAGE_LIMIT = 2000  # Discord hard cap per message


def parse_command(text: str) -> Optional[AggregationRequest]:
    """
    Parse `!energy [scope] [limit] [keywords...]` into an AggregationRequest.

    Returns None when the message is not an energy command.
    """
    parts = text.split()
    if not parts or parts[0] != COMMAND:
        return None
    args = parts[1:]

    scope = Scope.BOTH
    if args and args[0].lower() in {s.value for s in Scope}:
        scope = Scope(args.pop(0).lower())

    limit = DEFAULT_LIMIT
    if args and re.fullmatch(r"-?[0-9]+", args[0]):
        limit = int(args.pop(0))

    language, region = CANONICAL_LOCALES.get(scope, CANONICAL_LOCALES[Scope.ID])
    return AggregationRequest(
        scope=scope,
        limit=limit,
        language=language,
        region=region,
        extra_keywords=",".join(args) or None,
    )


def format_news_message(items: Iterable[CanonicalItem]) -> str:
    items = list(items)
    if not items:
        return "No energy news found."

    response = f"⚡ Latest energy news ({len(items)})\n\n"
    for item in items:
        response += f"**{item.title}**\n"
        response += f"*{item.source or 'unknown'} - {item.pub_date or 'no date'}*\n"
        response += f"<{item.link}>\n\n"

    if len(response) > MESSAGE_LIMIT:
        response = response[: MESSAGE_LIMIT - 3] + "..."
    return response


def build_client(aggregator: Aggregator) -> discord.Client:
    intents = discord.Intents.default()
    intents.message_content = True  # needed to read command text

    client = discord.Client(intents=intents)

    @client.event
    async def on_ready():
        logger.info("Logged in as %s", client.user)

    @client.event
    async def on_message(message):
        # Ignore the bot's own messages
        if message.author == client.user:
            return

        request = parse_command(message.content)
        if request is None:
            return

        await message.channel.send("Fetching the latest energy news...")
        try:
            result = await aggregator.aggregate(request)
        except Exception:
            logger.exception("Energy news command failed")
            await message.channel.send("Something went wrong while fetching the news.")
            return
        await message.channel.send(format_news_message(result.items))

    return client


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    load_dotenv()

    # Put DISCORD_BOT_TOKEN="YOUR_BOT_TOKEN" in .env
    token = os.getenv("DISCORD_BOT_TOKEN")
    if not token:
        raise ValueError("DISCORD_BOT_TOKEN is not set. Check your .env file.")

    client = build_client(Aggregator(AggregatorConfig.from_env(dotenv=False)))
    client.run(token)


if __name__ == "__main__":
    main()
