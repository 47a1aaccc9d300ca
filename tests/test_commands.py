import unittest
from types import SimpleNamespace

from quickedit.commands.about import build_about_embed
from quickedit.commands.help import build_help_embed
from quickedit.commands.ping import format_latency
from quickedit.registry import RunMode


class PingTests(unittest.TestCase):
    def test_format_latency(self) -> None:
        self.assertEqual(format_latency(0.0421), "🏓 Pong! 42 ms")
        self.assertEqual(format_latency(float("nan")), "🏓 Pong! Latency unknown.")


class HelpTests(unittest.TestCase):
    def setUp(self) -> None:
        self.commands = [
            SimpleNamespace(name="ping", description="Check that the bot is responding"),
            SimpleNamespace(name="about", description=None),
        ]

    def test_lists_commands_sorted(self) -> None:
        embed = build_help_embed(self.commands)
        self.assertEqual([field.name for field in embed.fields], ["/about", "/ping"])
        self.assertEqual(embed.fields[0].value, "No description")

    def test_single_command(self) -> None:
        embed = build_help_embed(self.commands, "ping")
        self.assertEqual(len(embed.fields), 1)
        self.assertEqual(embed.fields[0].value, "Check that the bot is responding")

    def test_unknown_command(self) -> None:
        self.assertIsNone(build_help_embed(self.commands, "nope"))


class AboutTests(unittest.TestCase):
    def test_status_field(self) -> None:
        embed = build_about_embed(guild_mode=True, run_mode=RunMode.SYNC, support_invite_url=None)
        status = embed.fields[0].value
        self.assertIn("Guild mode: **ON**", status)
        self.assertIn("Run mode: **sync**", status)


if __name__ == "__main__":
    unittest.main()
