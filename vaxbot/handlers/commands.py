from __future__ import annotations

import logging

from telegram import Bot, Message, Update
from telegram.error import TelegramError
from telegram.ext import ContextTypes

from config import FETCH_FAILED_MESSAGE, LOADING_MESSAGE, REPORT_FETCH_FAILURES
from vaxbot import __version__
from vaxbot.engine.orchestrator import gather_snapshots
from vaxbot.errors import ExtractionError, NetworkError, SendError
from vaxbot.services.formatter import format_report

logger = logging.getLogger(__name__)


def version_text() -> str:
    return f"Vaxbot {__version__}"


async def _say(bot: Bot, chat_id: int, text: str) -> Message:
    try:
        return await bot.send_message(chat_id=chat_id, text=text)
    except TelegramError as e:
        raise SendError(f"Could not send to chat {chat_id}: {e}") from e


async def _edit(message: Message, text: str) -> None:
    try:
        await message.edit_text(text)
    except TelegramError as e:
        raise SendError(f"Could not edit message {message.message_id}: {e}") from e


async def vacced_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """
    Posts a loading message, fetches UK and Canada stats concurrently,
    then edits the loading message with the combined report.
    Triggered by "!vacced" or /vacced.
    """
    chat_id = update.effective_message.chat_id

    try:
        placeholder = await _say(context.bot, chat_id, LOADING_MESSAGE)
    except SendError as e:
        logger.error(f"Error sending loading message: {e}")
        return

    try:
        uk, canada = await gather_snapshots()
    except (NetworkError, ExtractionError) as e:
        logger.error(f"Fetching vaccination stats failed: {e}", exc_info=True)
        if not REPORT_FETCH_FAILURES:
            return
        text = FETCH_FAILED_MESSAGE
    else:
        text = format_report(uk, canada)

    try:
        await _edit(placeholder, text)
    except SendError as e:
        logger.error(f"Error editing message: {e}")


async def version_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """
    Replies with the bot version.
    Triggered by "!version" or /version.
    """
    chat_id = update.effective_message.chat_id
    try:
        await _say(context.bot, chat_id, version_text())
    except SendError as e:
        logger.error(f"Error sending message: {e}")
