"""
Module: quickedit/registry.py

Defines CommandRegistry: a thin facade over nextcord's application command
handling. It discovers command cogs, publishes them to Discord, executes the
command behind an interaction and reports an ExecutionResult to completion handlers.
"""
import asyncio
import importlib
import inspect
import pkgutil
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import nextcord
from nextcord.ext import commands

from quickedit.utils import log_message

SOURCE = "CommandRegistry"


class RegistryNotInitializedError(RuntimeError):
    """Raised when commands are registered before the registry exists."""


class RunMode(Enum):
    """
    How a command is executed relative to the interaction handler.

    ASYNC submits the command as a task and returns immediately.
    SYNC awaits the command before returning.
    """
    SYNC = "sync"
    ASYNC = "async"

    @classmethod
    def from_value(cls, value, default=None):
        """
        Parse a run mode name case-insensitively, falling back to `default` (ASYNC).
        """
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return default or cls.ASYNC


class CommandError(Enum):
    COMMAND_NOT_FOUND = "CommandNotFound"
    UNMET_PRECONDITION = "UnmetPrecondition"
    EXCEPTION = "Exception"
    UNSUCCESSFUL = "Unsuccessful"


@dataclass(frozen=True)
class ExecutionResult:
    """
    Outcome of a single command execution.

    Attributes:
        error (CommandError or None): Failure category, None on success.
        reason (str or None): Human readable failure description.
        exception (Exception or None): The exception behind the failure, if any.
    """
    error: Optional[CommandError] = None
    reason: Optional[str] = None
    exception: Optional[BaseException] = None

    @property
    def is_success(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls):
        return cls()

    @classmethod
    def from_error(cls, error, reason=None):
        return cls(error=error, reason=reason)

    @classmethod
    def from_exception(cls, exception, error=CommandError.EXCEPTION):
        return cls(error=error, reason=str(exception) or type(exception).__name__, exception=exception)


@dataclass(frozen=True)
class RegistryConfig:
    run_mode: RunMode = RunMode.ASYNC
    guild_ids: tuple = ()


class InteractionContext:
    """
    Pairs the client with one inbound interaction.

    Attributes:
        client: The nextcord client that received the interaction.
        interaction: The nextcord.Interaction being handled.
    """
    def __init__(self, client, interaction):
        self.client = client
        self.interaction = interaction

    @property
    def user(self):
        return self.interaction.user

    @property
    def guild(self):
        return self.interaction.guild

    @property
    def channel(self):
        return self.interaction.channel

    @property
    def command_name(self):
        data = self.interaction.data or {}
        return data.get("name")


def classify_error(error):
    """
    Map an error reported by nextcord to an ExecutionResult.
    """
    if isinstance(error, nextcord.ApplicationCheckFailure):
        return ExecutionResult.from_exception(error, CommandError.UNMET_PRECONDITION)
    if isinstance(error, nextcord.ApplicationInvokeError):
        original = getattr(error, "original", None) or error
        return ExecutionResult(CommandError.EXCEPTION, str(original) or type(original).__name__, original)
    return ExecutionResult.from_exception(error, CommandError.UNSUCCESSFUL)


class CommandRegistry:
    """
    Registers command cogs on a nextcord bot and runs them for interactions.

    Responsibilities:
      - Discover cogs in command packages and add them to the client.
      - Publish the commands globally or to configured guilds.
      - Execute commands inline or as tracked background tasks.
      - Report each application command outcome to completion handlers.

    Attributes:
      client: The nextcord commands.Bot instance.
      config: RegistryConfig with run mode and guild ids.
      commands (dict): Application commands keyed by name.
      tasks (set): Background executions that have not finished yet.
    """
    def __init__(self, client, config=None, log=log_message):
        self.client = client
        self.config = config or RegistryConfig()
        self.log = log
        self.commands = {}
        self.tasks = set()
        self._completion_handlers = []
        self._reported_errors = {}
        self._in_flight = set()
        # nextcord reports command failures through this event instead of raising
        client.add_listener(self._record_error, "on_application_command_error")

    def add_completion_handler(self, handler):
        """
        Subscribe an async callable(command, context, result) to execution outcomes.
        """
        self._completion_handlers.append(handler)

    def add_modules(self, package):
        """
        Import every submodule of `package` and add the cogs it defines.

        Args:
            package: An imported package or its dotted name.

        Returns:
            list: The cog instances added to the client.
        """
        if isinstance(package, str):
            package = importlib.import_module(package)

        added = []
        for module_info in pkgutil.iter_modules(package.__path__, package.__name__ + "."):
            module = importlib.import_module(module_info.name)
            for _, cog_cls in inspect.getmembers(module, inspect.isclass):
                if not issubclass(cog_cls, commands.Cog) or cog_cls.__module__ != module.__name__:
                    continue
                cog = cog_cls(self.client)
                self.client.add_cog(cog)
                for app_cmd in cog.application_commands:
                    self.commands[app_cmd.name] = app_cmd
                added.append(cog)
                self.log(f"Added {cog_cls.__name__} from {module.__name__}", "debug", source=SOURCE)
        return added

    async def publish(self):
        """
        Publish registered commands to Discord.

        Syncs globally, or to each configured guild in guild mode. A guild
        that denies access is skipped with a warning.
        """
        if not self.config.guild_ids:
            await self.client.sync_application_commands()
            self.log(f"Registered {len(self.commands)} commands globally", "info", source=SOURCE)
            return

        for guild_id in self.config.guild_ids:
            try:
                await self.client.sync_application_commands(guild_id=guild_id)
                self.log(f"Registered {len(self.commands)} commands to guild {guild_id}", "info", source=SOURCE)
            except nextcord.Forbidden:
                self.log(f"Failed to register commands for guild {guild_id}: Missing Access", "warning", source=SOURCE)

    async def execute(self, context):
        """
        Run the command behind `context.interaction`.

        Returns the asyncio.Task running the command and its completion
        handlers. In ASYNC mode the task is returned as soon as it is
        scheduled; in SYNC mode only once it has finished. Handler failures
        stay inside the task and are logged when it finishes.
        """
        task = asyncio.create_task(self._run(context))
        self.tasks.add(task)
        task.add_done_callback(self._task_done)
        if self.config.run_mode is RunMode.SYNC:
            await asyncio.wait({task})
        return task

    async def _run(self, context):
        interaction = context.interaction
        is_command = interaction.type == nextcord.InteractionType.application_command
        command = self.commands.get(context.command_name) if is_command else None

        if is_command and command is None:
            result = ExecutionResult.from_error(
                CommandError.COMMAND_NOT_FOUND, f"Unknown command: {context.command_name}"
            )
        else:
            self._in_flight.add(interaction.id)
            try:
                await self.client.process_application_commands(interaction)
            except Exception as e:
                result = ExecutionResult.from_exception(e)
            else:
                # nextcord's _schedule_event task runs _record_error without suspending,
                # so a single pass of the loop is enough for it to finish
                await asyncio.sleep(0)
                error = self._reported_errors.pop(interaction.id, None)
                result = classify_error(error) if error is not None else ExecutionResult.success()
            finally:
                self._in_flight.discard(interaction.id)
                self._reported_errors.pop(interaction.id, None)

        # autocomplete requests have no outcome to report
        if is_command:
            for handler in self._completion_handlers:
                await handler(command, context, result)
        return result

    async def _record_error(self, interaction, error):
        # errors arriving after the command finished have nobody left to read them
        if interaction.id not in self._in_flight:
            self.log(f"Ignoring late error for interaction {interaction.id}: {error!r}", "debug", source=SOURCE)
            return
        self._reported_errors[interaction.id] = error

    def _task_done(self, task):
        self.tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            self.log(f"Command execution task failed: {error!r}", "error", source=SOURCE)
