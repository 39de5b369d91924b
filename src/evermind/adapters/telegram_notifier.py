"""Telegram notification adapter."""

import asyncio
import logging

import telegramify_markdown
from telegram import Bot

logger = logging.getLogger(__name__)


async def send_markdown(bot: Bot, chat_id: int | str, text: str) -> None:
    """Send markdown text to a chat, converting to MarkdownV2."""
    converted = telegramify_markdown.markdownify(text)
    chunks = [converted[i : i + 4000] for i in range(0, len(converted), 4000)]
    for chunk in chunks:
        await bot.send_message(chat_id=chat_id, text=chunk, parse_mode="MarkdownV2")


class TelegramNotifier:
    """
    Sends reminders as Telegram messages.

    Implements Notifier protocol. Delivery is only permitted once both a
    bot token and a chat id are configured.
    """

    def __init__(self, bot_token: str, chat_id: str, enabled: bool = False):
        self.bot_token = bot_token
        self.chat_id = chat_id
        self.enabled = enabled

    def is_enabled(self) -> bool:
        return self.enabled

    def is_permitted(self) -> bool:
        return bool(self.bot_token and self.chat_id)

    def fire(self, title: str, body: str) -> None:
        """Send synchronously; called from scheduler worker threads."""
        text = f"*{title}*\n\n{body}"

        async def _send():
            async with Bot(self.bot_token) as bot:
                await send_markdown(bot, self.chat_id, text)

        asyncio.run(_send())
        logger.info(f"Sent Telegram reminder to chat {self.chat_id}")
