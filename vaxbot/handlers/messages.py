from __future__ import annotations

import logging
from typing import Optional

from telegram import Update
from telegram.ext import ContextTypes

from config import VACCED_PREFIX, VERSION_PREFIX
from vaxbot.handlers.commands import vacced_command, version_command

logger = logging.getLogger(__name__)

_COMMANDS = {
    VACCED_PREFIX: vacced_command,
    VERSION_PREFIX: version_command,
}


def match_command(text: Optional[str]) -> Optional[str]:
    """Return the command prefix the text starts with, ignoring case."""
    if not text:
        return None
    lowered = text.lower()
    for prefix in _COMMANDS:
        if lowered.startswith(prefix):
            return prefix
    return None


async def handle_text_message(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Dispatch "!" commands in plain text messages. Anything else is ignored."""
    message = update.effective_message
    if not message or not message.text:
        return

    prefix = match_command(message.text)
    if prefix is None:
        return

    logger.info(f"{prefix} from chat {message.chat_id}")
    try:
        await _COMMANDS[prefix](update, context)
    except Exception as e:
        logger.error(f"Error processing {prefix}: {e}", exc_info=True)
        raise
