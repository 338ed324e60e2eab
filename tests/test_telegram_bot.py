"""Tests for the Telegram glue: which messages reach the router, and the reply."""

import asyncio
import sys
import types
from types import SimpleNamespace

import pytest
from telegram.ext import MessageHandler

from dusty import telegram_bot
from dusty.commands import router


class FakeMessage:
    def __init__(self, text, is_bot=False, first_name="Ana", username="ana"):
        self.text = text
        self.from_user = SimpleNamespace(is_bot=is_bot, first_name=first_name, username=username)
        self.replies = []

    async def reply_text(self, text):
        self.replies.append(text)


def _deliver(message):
    update = SimpleNamespace(message=message)
    asyncio.run(telegram_bot._handle_message(update, None))


@pytest.fixture
def dispatched(monkeypatch):
    """Record router.dispatch calls and answer "ok"."""
    calls = []

    def fake_dispatch(text, store=None, source="[cli]"):
        calls.append((text, source))
        return "ok"

    monkeypatch.setattr(router, "dispatch", fake_dispatch)
    return calls


def test_text_message_is_answered(dispatched):
    msg = FakeMessage("Where is Dusty?")
    _deliver(msg)
    assert dispatched == [("Where is Dusty?", "[Telegram:Ana]")]
    assert msg.replies == ["ok"]


def test_bot_messages_are_ignored(dispatched):
    msg = FakeMessage("Got it!", is_bot=True)
    _deliver(msg)
    assert dispatched == []
    assert msg.replies == []


@pytest.mark.parametrize("text", [None, ""])
def test_messages_without_text_are_ignored(dispatched, text):
    msg = FakeMessage(text)
    _deliver(msg)
    assert dispatched == []
    assert msg.replies == []


def test_update_without_message_is_ignored(dispatched):
    _deliver(None)
    assert dispatched == []


def test_source_falls_back_to_username(dispatched):
    _deliver(FakeMessage("hello", first_name=None, username="ana42"))
    assert dispatched[0][1] == "[Telegram:ana42]"


def test_end_to_end_reply():
    msg = FakeMessage("Dusty is at P1.303")
    _deliver(msg)
    msg2 = FakeMessage("where is dusty?")
    _deliver(msg2)
    assert msg.replies == ["Got it!"]
    assert msg2.replies == ["Dusty is at P1.303."]


def test_build_application_installs_handler():
    app = telegram_bot.build_application("123456:TEST-TOKEN")
    handlers = [h for group in app.handlers.values() for h in group]
    assert len(handlers) == 1
    assert isinstance(handlers[0], MessageHandler)
    assert handlers[0].callback is telegram_bot._handle_message


def test_token_from_environment(monkeypatch):
    monkeypatch.setitem(sys.modules, "dusty.telegram_credentials", None)
    monkeypatch.setenv("TELEGRAM_TOKEN", "123:ENV")
    assert telegram_bot.get_token() == "123:ENV"


def test_token_from_credentials_module(monkeypatch):
    creds = types.ModuleType("dusty.telegram_credentials")
    creds.TELEGRAM_TOKEN = "123:FILE"
    monkeypatch.setitem(sys.modules, "dusty.telegram_credentials", creds)
    monkeypatch.setenv("TELEGRAM_TOKEN", "123:ENV")
    assert telegram_bot.get_token() == "123:FILE"


def test_no_token_means_no_bot(monkeypatch, capsys):
    monkeypatch.setitem(sys.modules, "dusty.telegram_credentials", None)
    monkeypatch.delenv("TELEGRAM_TOKEN", raising=False)
    assert telegram_bot.run_bot() is False
    assert "Telegram disabled" in capsys.readouterr().out
