import logging
import os
from typing import Dict, Iterable, List, Optional, Set, Tuple

import discord
from discord.ext import tasks
from dotenv import load_dotenv

from newswatch import Category, NewsAggregator, NewsItem, UnknownCategoryError

# Load settings (token, refresh interval, timeouts) from .env
load_dotenv()

logger = logging.getLogger("newswatch.bot")

REFRESH_MINUTES = float(os.getenv("NEWSWATCH_REFRESH_MINUTES", "15"))
NO_CONNECTION_MESSAGE = "Failed to load news. Check internet connection."
MAX_MESSAGE_CHARS = 2000
COMMAND = "!news"


class LatestNews:
    """
    Remembers the last non-empty headline list per category.

    An empty fetch keeps showing the previous list; only a category that never
    loaded gets the connection error.
    """

    def __init__(self) -> None:
        self._last: Dict[Category, List[NewsItem]] = {}

    def get(self, category: Category) -> List[NewsItem]:
        return list(self._last.get(category, []))

    def update(self, category: Category, items: Iterable[NewsItem]) -> Tuple[List[NewsItem], Optional[str]]:
        items = list(items)
        if items:
            self._last[category] = items
            return items, None
        previous = self._last.get(category)
        if previous:
            return list(previous), None
        return [], NO_CONNECTION_MESSAGE


def parse_command(content: str) -> Optional[Category]:
    """
    `!news` → world, `!news sport` → sport, anything else → None.
    Raises UnknownCategoryError for `!news <unknown>`.
    """
    parts = content.strip().split()
    if not parts or parts[0].lower() != COMMAND:
        return None
    if len(parts) == 1:
        return Category.WORLD
    try:
        return Category(parts[1].lower())
    except ValueError:
        raise UnknownCategoryError(parts[1]) from None


def format_news(category: Category, items: List[NewsItem], limit: int = 5) -> str:
    response = f"📰 Latest {category.value} news\n\n"
    for item in items[:limit]:
        response += f"**{item.title}**\n"
        response += f"*{item.source_name} - {item.published_at.strftime('%Y-%m-%d %H:%M')}*\n"
        if item.link:
            response += f"<{item.link}>\n"
        response += "\n"

    # Discord rejects messages over 2000 characters
    if len(response) > MAX_MESSAGE_CHARS:
        response = response[: MAX_MESSAGE_CHARS - 3] + "..."
    return response


class NewsBot(discord.Client):
    def __init__(self, aggregator: Optional[NewsAggregator] = None) -> None:
        intents = discord.Intents.default()
        intents.message_content = True  # needed to read commands
        super().__init__(intents=intents)
        self.aggregator = aggregator
        self.latest = LatestNews()
        self.requested: Set[Category] = set()

    async def setup_hook(self) -> None:
        if self.aggregator is None:
            self.aggregator = NewsAggregator()
        self.refresh.start()

    async def close(self) -> None:
        self.refresh.cancel()
        if self.aggregator is not None:
            await self.aggregator.aclose()
        await super().close()

    async def load(self, category: Category) -> Tuple[List[NewsItem], Optional[str]]:
        self.requested.add(category)
        items = await self.aggregator.get_news(category)
        return self.latest.update(category, items)

    @tasks.loop(minutes=REFRESH_MINUTES)
    async def refresh(self) -> None:
        for category in sorted(self.requested, key=lambda c: c.value):
            try:
                await self.load(category)
            except Exception:
                logger.exception("Refreshing %s news failed", category.value)

    async def on_ready(self) -> None:
        logger.info("Logged in as %s", self.user)

    async def on_message(self, message: discord.Message) -> None:
        if message.author == self.user:
            return

        try:
            category = parse_command(message.content)
        except UnknownCategoryError as e:
            choices = ", ".join(c.value for c in Category)
            await message.channel.send(f"Unknown category `{e}`. Try one of: {choices}")
            return
        if category is None:
            return

        await message.channel.send("Fetching the latest news... please wait.")
        items, error = await self.load(category)
        if error:
            await message.channel.send(error)
            return
        await message.channel.send(format_news(category, items))


def main() -> None:
    logging.basicConfig(
        level=os.getenv("NEWSWATCH_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )
    token = os.getenv("NEWSWATCH_DISCORD_TOKEN")
    if not token:
        raise SystemExit("NEWSWATCH_DISCORD_TOKEN is not set. Check your .env file.")
    NewsBot().run(token, log_handler=None)


if __name__ == "__main__":
    main()
