"""Telegram bot interface for Dusty.

Passes text messages to the command router and sends back the reply.

Requires a bot token from @BotFather, either in telegram_credentials.py
(TELEGRAM_TOKEN = "...") or in the TELEGRAM_TOKEN environment variable.
If neither is set, run_bot() logs a message and returns without error.
"""

import os

from telegram import Update
from telegram.ext import ApplicationBuilder, MessageHandler, filters, ContextTypes

from dusty.commands import router


def _log(msg):
    print(msg, flush=True)


async def _handle_message(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle an incoming Telegram message."""
    message = update.message
    if message is None or not message.text:
        return

    user = message.from_user
    if user is not None and user.is_bot:
        # Never answer bots, ourselves included
        return

    username = (user.first_name or user.username or "unknown") if user else "unknown"
    source = f"[Telegram:{username}]"
    text = message.text

    _log(f"  {source} \"{text}\"")

    response = router.dispatch(text, source=source)
    _log(f"  Response: \"{response}\"")

    if response:
        await message.reply_text(response)


def build_application(token):
    """Build the Telegram application with the message handler installed."""
    app = ApplicationBuilder().token(token).build()
    app.add_handler(MessageHandler(filters.TEXT & ~filters.COMMAND, _handle_message))
    return app


def get_token():
    """Return the configured bot token, or None."""
    try:
        from dusty.telegram_credentials import TELEGRAM_TOKEN as token
    except ImportError:
        token = os.environ.get("TELEGRAM_TOKEN")
    return token or None


def run_bot():
    """Run the Telegram bot until interrupted (blocking).

    Returns True if the bot ran, False if skipped (no token).
    """
    token = get_token()
    if token is None:
        _log("No telegram_credentials.py or TELEGRAM_TOKEN; Telegram disabled.")
        return False

    app = build_application(token)
    _log("Telegram bot started.")
    app.run_polling(drop_pending_updates=True)
    return True
