"""
Module: quickedit/dispatcher.py

Defines InteractionDispatcher: owns the command registry for a bot, registers
all command modules once, forwards inbound interactions to the registry and
turns failed executions into an ephemeral error message for the invoking user.
"""
import importlib

import nextcord

from quickedit.registry import (
    CommandRegistry,
    InteractionContext,
    RegistryConfig,
    RegistryNotInitializedError,
)
from quickedit.utils import log_message

SOURCE = "InteractionDispatcher"
ERROR_MESSAGE = "An error occurred while executing the command."
DEFAULT_COMMAND_PACKAGES = ("quickedit.commands",)

COMMAND_INTERACTION_TYPES = (
    nextcord.InteractionType.application_command,
    nextcord.InteractionType.application_command_autocomplete,
)


class InteractionDispatcher:
    """
    Connects a nextcord bot to a CommandRegistry.

    Lifecycle (per interaction):
      Received -> Submitted -> Succeeded, or Failed -> follow-up sent.

    Attributes:
      client: The nextcord commands.Bot receiving interactions.
      config: RegistryConfig used when the registry is built.
      command_packages (tuple): Dotted names of packages scanned for cogs.
      registry: The CommandRegistry, None until initialize() runs.
    """
    def __init__(self, client, config=None, command_packages=DEFAULT_COMMAND_PACKAGES, log=log_message):
        self.client = client
        self.config = config or RegistryConfig()
        self.command_packages = tuple(command_packages)
        self.log = log
        self.registry = None

    @property
    def is_initialized(self):
        return self.registry is not None

    async def initialize(self):
        """
        Build the registry, subscribe the completion handler and register all modules.

        Any failure is logged as critical and re-raised; startup cannot continue without commands.
        """
        try:
            self.registry = CommandRegistry(self.client, self.config, log=self.log)
            self.registry.add_completion_handler(self.on_execution_completed)
            await self.register_modules()
        except Exception:
            self.log("Error initializing command registry", "critical", source=SOURCE)
            self.registry = None
            raise

    async def register_modules(self):
        """
        Add every cog from the command packages, publish the commands and start
        receiving interactions.

        Raises:
            RegistryNotInitializedError: If called before the registry exists.
        """
        if self.registry is None:
            self.log("Command registry not initialized yet", "error", source=f"{SOURCE}.register_modules")
            raise RegistryNotInitializedError("Command registry not initialized while trying to register commands")

        try:
            for package_name in self.command_packages:
                package = importlib.import_module(package_name)
                self.registry.add_modules(package)

            await self.registry.publish()
            # replaces nextcord's default handler, which would run each command a second time
            self.client.on_interaction = self.on_interaction_created
            self.log("Modules registered successfully", "info", source=SOURCE)
        except Exception as e:
            self.log(f"Error registering modules. ({e!r})", "critical", source=SOURCE)
            raise

    async def on_interaction_created(self, interaction):
        """
        Submit an inbound interaction to the registry.

        Interactions received before initialization are dropped with an error log.
        In ASYNC run mode this returns as soon as the command is scheduled; the
        outcome arrives later through on_execution_completed.
        """
        if self.registry is None:
            self.log("Command registry not initialized yet", "error", source=f"{SOURCE}.on_interaction_created")
            return

        # components and modals are routed by nextcord's view store
        if interaction.type not in COMMAND_INTERACTION_TYPES:
            return

        try:
            context = InteractionContext(self.client, interaction)
            await self.registry.execute(context)
        except Exception as e:
            self.log(f"Error handling interaction. {e}", "error", source=SOURCE)
            if interaction.type == nextcord.InteractionType.application_command:
                await self._delete_original_response(interaction)
            raise

    async def on_execution_completed(self, command, context, result):
        """
        Tell the invoking user about a failed command with an ephemeral message.

        Successful executions are ignored.
        """
        if result.is_success:
            return

        try:
            self.log(f"Error handling interaction: {result.error.value} ({result.reason})", "error", source=SOURCE)
            await context.interaction.send(ERROR_MESSAGE, ephemeral=True)
        except Exception as e:
            self.log(f"Error sending error message for interaction: {e!r}", "error", source=SOURCE)
            raise

    async def _delete_original_response(self, interaction):
        """
        Best-effort removal of the deferred response; failures are only logged.
        """
        try:
            await interaction.delete_original_message()
        except Exception as e:
            self.log(f"Could not delete original response: {e}", "warning", source=SOURCE)
