import unittest
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

from quickedit import main as entry
from quickedit.bot_context import attach_events, invite_url


class FakeBot:
    def __init__(self):
        self.user = SimpleNamespace(name="QuickEdit", id=1)
        self.close = AsyncMock()

    def event(self, coro):
        setattr(self, coro.__name__, coro)
        return coro


def make_dispatcher(initialize_error=None):
    dispatcher = MagicMock()
    dispatcher.is_initialized = False

    async def initialize():
        if initialize_error is not None:
            raise initialize_error
        dispatcher.is_initialized = True

    dispatcher.initialize = AsyncMock(side_effect=initialize)
    return dispatcher


class OnReadyTests(unittest.IsolatedAsyncioTestCase):
    async def test_initializes_once_across_ready_events(self) -> None:
        bot = FakeBot()
        dispatcher = make_dispatcher()
        attach_events(bot, dispatcher)

        await bot.on_ready()
        await bot.on_ready()

        dispatcher.initialize.assert_awaited_once()
        bot.close.assert_not_awaited()

    async def test_failed_initialize_closes_bot_and_reraises(self) -> None:
        bot = FakeBot()
        dispatcher = make_dispatcher(RuntimeError("sync failed"))
        attach_events(bot, dispatcher)

        with self.assertRaises(RuntimeError):
            await bot.on_ready()

        bot.close.assert_awaited_once()
        self.assertFalse(dispatcher.is_initialized)


class InviteUrlTests(unittest.TestCase):
    def test_requires_application_id(self) -> None:
        self.assertIsNone(invite_url(None))
        self.assertIn("client_id=1234", invite_url("1234"))


class MainTests(unittest.TestCase):
    def run_main(self, initialized, token="token"):
        bot = MagicMock()
        dispatcher = MagicMock(is_initialized=initialized)
        with patch.object(entry, "DISCORD_BOT_TOKEN", token), \
                patch.object(entry, "create_bot", return_value=bot), \
                patch.object(entry, "attach_events"), \
                patch.object(entry, "InteractionDispatcher", return_value=dispatcher), \
                patch.object(entry, "install_library_logging"), \
                patch.object(entry, "set_log_level"), \
                patch.object(entry, "log_message"):
            entry.main()
        return bot

    def test_exits_with_status_one_when_startup_failed(self) -> None:
        with self.assertRaises(SystemExit) as cm:
            self.run_main(initialized=False)
        self.assertEqual(cm.exception.code, 1)

    def test_returns_normally_after_clean_shutdown(self) -> None:
        bot = self.run_main(initialized=True)
        bot.run.assert_called_once_with("token")

    def test_missing_token(self) -> None:
        with self.assertRaises(EnvironmentError):
            self.run_main(initialized=True, token=None)


if __name__ == "__main__":
    unittest.main()
