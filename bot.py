"""
Vaxbot - Telegram entrypoint.
Runs in long-polling mode, or webhook mode when WEBHOOK_URL is set.
"""
import logging
import traceback
from urllib.parse import urlsplit

from telegram import Update
from telegram.ext import (
    Application,
    CommandHandler,
    MessageHandler,
    ContextTypes,
    filters,
)

import config
from vaxbot.errors import ConfigError
from vaxbot.logging import configure_logging
from vaxbot.handlers.commands import vacced_command, version_command
from vaxbot.handlers.messages import handle_text_message


logger = configure_logging(getattr(logging, config.LOG_LEVEL, logging.INFO))

# Edits of old messages must not trigger a command again
NEW_MESSAGES = filters.UpdateType.MESSAGE


async def error_handler(update: object, context: ContextTypes.DEFAULT_TYPE):
    """Log errors that escaped a handler without crashing the bot."""
    logger.error(f"Error while handling update {update}: {context.error}")
    if context.error:
        logger.error(
            "Error traceback: %s",
            "".join(traceback.format_exception(type(context.error), context.error, context.error.__traceback__)),
        )


async def on_ready(application: Application):
    me = await application.bot.get_me()
    logger.info(f"{me.username} is connected!")


def build_application(token: str) -> Application:
    application = (
        Application.builder()
        .token(token)
        .concurrent_updates(True)
        .post_init(on_ready)
        .build()
    )

    # Commands
    application.add_handler(CommandHandler("vacced", vacced_command, filters=NEW_MESSAGES))
    application.add_handler(CommandHandler("version", version_command, filters=NEW_MESSAGES))

    # "!vacced" / "!version" in plain messages
    application.add_handler(
        MessageHandler(NEW_MESSAGES & filters.TEXT & ~filters.COMMAND, handle_text_message)
    )

    # Errors
    application.add_error_handler(error_handler)
    return application


def main():
    try:
        token = config.require_bot_token()
    except ConfigError as e:
        logger.error(str(e))
        exit(1)

    application = build_application(token)

    if not config.WEBHOOK_URL:
        logger.info("Starting Vaxbot (polling mode)...")
        application.run_polling(allowed_updates=Update.ALL_TYPES)
        return

    try:
        webhook_url = config.get_final_webhook_url(token)
    except ConfigError as e:
        logger.error(f"Invalid webhook URL: {e}")
        exit(1)

    logger.info(f"Starting Vaxbot (webhook mode) on port {config.PORT}...")
    try:
        application.run_webhook(
            listen="0.0.0.0",
            port=config.PORT,
            url_path=urlsplit(webhook_url).path,
            webhook_url=webhook_url,
        )
    except Exception as e:
        logger.error(f"Bot failed to start: {e}", exc_info=True)
        raise


if __name__ == "__main__":
    main()
